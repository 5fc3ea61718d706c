"""
The main kapply module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the library's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from kapply._cogs.configs.configuration import (
    Settings,
    ExtractionSettings,
    SerializationSettings,
)
from kapply._cogs.helpers.typedefs import (
    Logger,
)
from kapply._cogs.helpers.versions import (
    version as __version__,
)
from kapply._cogs.structs.bodies import (
    RawBody,
    RawMeta,
    RawManagedFieldsEntry,
    Body,
    Meta,
)
from kapply._cogs.structs.errors import (
    ExtractionError,
    FieldsParsingError,
    SchemaMismatchError,
)
from kapply._cogs.structs.fieldsets import (
    FieldSet,
    PathElement,
    parse_fields_v1,
)
from kapply._cogs.structs.schemas import (
    Registry,
    TypeDescriptor,
    FieldDescriptor,
    get_default_registry,
    set_default_registry,
)
from kapply._core.actions.loggers import (
    configure,
    LogFormat,
)
from kapply._core.engines.managedfields import (
    extract_into,
    find_managed_fields,
)
from kapply.applyconfigurations.base import (
    ApplyConfiguration,
)
from kapply.applyconfigurations.meta import (
    ObjectMetaApplyConfiguration,
    OwnerReferenceApplyConfiguration,
    ResourceApplyConfiguration,
    TypeMetaApplyConfiguration,
    owner_reference,
)
from kapply.applyconfigurations.core import (
    EventSourceApplyConfiguration,
    ObjectReferenceApplyConfiguration,
    event_source,
    object_reference,
)
from kapply.applyconfigurations.events import (
    EventApplyConfiguration,
    EventSeriesApplyConfiguration,
    event,
    event_series,
    extract_event,
    extract_event_status,
)

__all__ = [
    'configure', 'LogFormat', 'Logger',
    'Settings', 'ExtractionSettings', 'SerializationSettings',
    'RawBody', 'RawMeta', 'RawManagedFieldsEntry', 'Body', 'Meta',
    'ExtractionError', 'FieldsParsingError', 'SchemaMismatchError',
    'FieldSet', 'PathElement', 'parse_fields_v1',
    'Registry', 'TypeDescriptor', 'FieldDescriptor',
    'get_default_registry', 'set_default_registry',
    'extract_into', 'find_managed_fields',
    'ApplyConfiguration',
    'TypeMetaApplyConfiguration',
    'ResourceApplyConfiguration',
    'ObjectMetaApplyConfiguration',
    'OwnerReferenceApplyConfiguration',
    'ObjectReferenceApplyConfiguration',
    'EventSourceApplyConfiguration',
    'EventSeriesApplyConfiguration',
    'EventApplyConfiguration',
    'owner_reference', 'object_reference', 'event_source', 'event_series',
    'event', 'extract_event', 'extract_event_status',
]
