"""
Extraction of the fields owned by a field manager from a live object.

The server-side apply tracks which field manager owns which fields
in the object's ``metadata.managedFields``: one entry per manager, operation
and subresource, each with the set of owned fields (see `fieldsets`).

To get "what this manager has declared", the entry of the manager is found,
its field set is reduced to the leaves, and the values at these leaves are
copied from the live object into a new sparse document, which is then put
into an apply configuration via its regular mutators::

    config = EventApplyConfiguration()
    extract_into(body, registry.type('io.k8s.api.events.v1beta1.Event'),
                 'my-controller', config, '')

The extraction is all-or-nothing: on any error, nothing is put into the target.
It is purely computational, and the live object is never modified.
"""
import collections.abc
import copy
from collections.abc import Mapping
from typing import Any, Protocol

from kapply._cogs.configs import configuration
from kapply._cogs.helpers import thirdparty, typedefs
from kapply._cogs.structs import bodies, errors, fieldsets, schemas
from kapply._core.actions import loggers

FIELDS_TYPE_V1 = 'FieldsV1'


class Populatable(Protocol):
    def populate(self, data: Mapping[str, Any]) -> Any: ...


def find_managed_fields(
        body: bodies.Body,
        field_manager: str,
        subresource: str = '',
        *,
        operations: collections.abc.Collection[str] = frozenset({'Apply'}),
) -> bodies.RawManagedFieldsEntry | None:
    """
    Find the entry of the field manager for the subresource (``''`` for the main one).

    Only the entries of the specified operations are considered. If there are
    several matching entries (which is not expected), the first one is used.
    """
    _check_metadata(body)
    for entry in body.meta.managed_fields:
        if not isinstance(entry, collections.abc.Mapping):
            raise errors.FieldsParsingError(f"A managed fields entry must be an object, got {entry!r}")
        if (entry.get('manager') == field_manager and
                entry.get('operation') in operations and
                (entry.get('subresource') or '') == subresource):
            return entry
    return None


def extract_items(
        body: bodies.Body,
        fieldset: fieldsets.FieldSet,
        descriptor: schemas.TypeDescriptor,
        *,
        settings: configuration.Settings,
        logger: typedefs.Logger,
) -> dict[str, Any]:
    """
    Copy the values at the leaves of the field set into a new sparse document.

    Only the leaves are copied as a whole. The owned containers with owned
    sub-fields are reconstructed with the owned sub-fields only.
    The owned paths that are absent in the object are skipped.
    """
    return _extract_struct(body.raw, fieldset.leaves(), descriptor, (),
                           settings=settings, logger=logger)


def extract_into(
        body: bodies.Body | Mapping[str, Any] | thirdparty.KubernetesModel,
        descriptor: schemas.TypeDescriptor,
        field_manager: str,
        target: Populatable,
        subresource: str = '',
        *,
        settings: configuration.Settings | None = None,
        logger: typedefs.Logger | None = None,
) -> None:
    """
    Put the fields owned by the field manager into the target configuration.

    If the manager owns nothing (never applied, or all of its fields were taken
    over by other managers), the target remains intact. This is not an error.
    On any error, the target remains intact too: the values are first put
    into a fresh instance of the type, so the bad ones fail there.
    """
    if not field_manager:
        raise ValueError("The field manager must be a non-empty string.")
    settings = settings if settings is not None else configuration.Settings()
    body = bodies.as_body(body)
    _check_metadata(body)
    logger = logger if logger is not None else loggers.ObjectLogger(body=body)
    scope = f" for the {subresource!r} subresource" if subresource else ""

    entry = find_managed_fields(body, field_manager, subresource,
                                operations=settings.extraction.operations)
    if entry is None:
        logger.debug(f"No fields are owned by {field_manager!r}{scope}.")
        return

    fields_type = entry.get('fieldsType')
    if fields_type is not None and fields_type != FIELDS_TYPE_V1:
        raise errors.FieldsParsingError(f"Unsupported fields type: {fields_type!r}")

    fieldset = fieldsets.parse_fields_v1(entry.get('fieldsV1'))
    logger.debug(f"Extracting the fields owned by {field_manager!r}{scope}: "
                 f"{sum(1 for _ in fieldset.iter_paths())} paths, "
                 f"operation={entry.get('operation')!r}, time={entry.get('time')!r}.")

    extracted = extract_items(body, fieldset, descriptor, settings=settings, logger=logger)

    # Keep the result self-describing even if the type is not in the owned fields.
    if descriptor.is_resource:
        if 'kind' not in extracted and body.get('kind'):
            extracted['kind'] = body['kind']
        if 'apiVersion' not in extracted and body.get('apiVersion'):
            extracted['apiVersion'] = body['apiVersion']

    # A scratch instance fails on the bad values before the target gets any of them.
    descriptor.cls().populate(extracted)
    target.populate(extracted)


def _check_metadata(body: bodies.Body) -> None:
    metadata = body.get('metadata')
    if metadata is not None and not isinstance(metadata, collections.abc.Mapping):
        raise errors.SchemaMismatchError(f"The metadata must be an object, got {metadata!r}")


def _extract_struct(
        obj: Any,
        node: fieldsets.FieldSet,
        descriptor: schemas.TypeDescriptor,
        path: fieldsets.FieldPath,
        *,
        settings: configuration.Settings,
        logger: typedefs.Logger,
) -> dict[str, Any]:
    if not isinstance(obj, collections.abc.Mapping):
        raise errors.SchemaMismatchError(
            f"An object is expected at {fieldsets.format_path(path)}, got {obj!r}")

    result: dict[str, Any] = {}
    for element, child in node.children.items():
        subpath = path + (element,)
        if element.kind is not fieldsets.ElementKind.FIELD:
            raise errors.SchemaMismatchError(
                f"List items cannot be addressed in an object: {fieldsets.format_path(subpath)}")

        field = descriptor.fields.get(element.token)
        if field is None:
            if settings.extraction.validate_schema:
                raise errors.SchemaMismatchError(
                    f"Unknown field {fieldsets.format_path(subpath)} of {descriptor.name}.")
            logger.warning(f"Skipping an unknown field {fieldsets.format_path(subpath)}.")
            continue

        value = obj.get(element.token)
        if value is None:
            continue  # owned, but absent in the object (e.g. removed since then)
        elif child.is_leaf:
            result[field.json_name] = copy.deepcopy(value)
        else:
            extracted = _extract_field(value, child, field, subpath, settings=settings, logger=logger)
            if extracted:
                result[field.json_name] = extracted
    return result


def _extract_field(
        value: Any,
        node: fieldsets.FieldSet,
        field: schemas.FieldDescriptor,
        path: fieldsets.FieldPath,
        *,
        settings: configuration.Settings,
        logger: typedefs.Logger,
) -> Any:
    match field.kind:
        case schemas.FieldKind.STRUCT if field.nested is not None:
            return _extract_struct(value, node, field.nested, path, settings=settings, logger=logger)
        case schemas.FieldKind.MAP:
            return _extract_map(value, node, path)
        case schemas.FieldKind.LIST:
            return _extract_list(value, node, field, path, settings=settings, logger=logger)
        case _:
            raise errors.SchemaMismatchError(
                f"A scalar field cannot have owned sub-fields: {fieldsets.format_path(path)}")


def _extract_map(
        value: Any,
        node: fieldsets.FieldSet,
        path: fieldsets.FieldPath,
) -> dict[str, Any]:
    if not isinstance(value, collections.abc.Mapping):
        raise errors.SchemaMismatchError(
            f"An object is expected at {fieldsets.format_path(path)}, got {value!r}")

    result: dict[str, Any] = {}
    for element, child in node.children.items():
        subpath = path + (element,)
        if element.kind is not fieldsets.ElementKind.FIELD:
            raise errors.SchemaMismatchError(
                f"List items cannot be addressed in a map: {fieldsets.format_path(subpath)}")
        if not child.is_leaf:
            raise errors.SchemaMismatchError(
                f"Map values cannot have owned sub-fields: {fieldsets.format_path(subpath)}")
        if element.token in value:
            result[element.token] = copy.deepcopy(value[element.token])
    return result


def _extract_list(
        value: Any,
        node: fieldsets.FieldSet,
        field: schemas.FieldDescriptor,
        path: fieldsets.FieldPath,
        *,
        settings: configuration.Settings,
        logger: typedefs.Logger,
) -> list[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, collections.abc.Sequence):
        raise errors.SchemaMismatchError(
            f"A list is expected at {fieldsets.format_path(path)}, got {value!r}")

    for element in node.children:
        subpath = fieldsets.format_path(path + (element,))
        if element.kind is fieldsets.ElementKind.FIELD:
            raise errors.SchemaMismatchError(f"Fields cannot be addressed in a list: {subpath}")
        if element.kind is fieldsets.ElementKind.KEY and field.list_type is not schemas.ListType.MAP:
            raise errors.SchemaMismatchError(f"Keys cannot be addressed in a non-map list: {subpath}")
        if element.kind is fieldsets.ElementKind.VALUE and field.list_type is schemas.ListType.MAP:
            raise errors.SchemaMismatchError(f"Values cannot be addressed in a map list: {subpath}")

    # The items go in the order of the live object, not of the owned set.
    result: list[Any] = []
    for index, item in enumerate(value):
        for element, child in node.children.items():
            if not element.matches(item, index):
                continue
            if child.is_leaf:
                result.append(copy.deepcopy(item))
            elif field.nested is None:
                raise errors.SchemaMismatchError(
                    f"Scalar list items cannot have owned sub-fields: "
                    f"{fieldsets.format_path(path + (element,))}")
            else:
                extracted = _extract_struct(item, child, field.nested, path + (element,),
                                            settings=settings, logger=logger)
                if extracted:
                    result.append(extracted)
            break
    return result
