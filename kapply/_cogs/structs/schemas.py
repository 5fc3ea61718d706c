"""
Type descriptors of the apply configurations, and the registry of them.

The descriptors are not written by hand: they are derived from the dataclass
fields of the apply configurations, where every field declares its API name
and its kind (scalar, map, list, struct) via `declare`. The same declarations
drive the serialization of the apply configurations and the extraction of
the owned fields from the live objects -- so they cannot drift apart.

The registry maps the fully-qualified type names, as used in the OpenAPI
schemas of Kubernetes (e.g. ``io.k8s.api.events.v1beta1.Event``),
to the descriptors of the registered types.
"""
import dataclasses
import enum
import functools
from collections.abc import Iterator, Mapping
from typing import Any, TypeVar

SCHEMA_KEY = 'kapply'

_C = TypeVar('_C', bound=type)


class FieldKind(enum.Enum):
    SCALAR = 'scalar'
    MAP = 'map'
    LIST = 'list'
    STRUCT = 'struct'


class ListType(enum.Enum):
    ATOMIC = 'atomic'
    SET = 'set'
    MAP = 'map'


class Format(enum.Enum):
    TIME = 'date-time'
    MICRO_TIME = 'date-time-micro'
    INT32 = 'int32'
    INT64 = 'int64'


@dataclasses.dataclass(frozen=True)
class FieldInfo:
    """ The schema of a field as declared in the dataclass field's metadata. """
    json_name: str
    kind: FieldKind = FieldKind.SCALAR
    nested: type | None = None
    list_type: ListType | None = None
    list_keys: tuple[str, ...] = ()
    format: Format | None = None


def declare(
        json_name: str,
        kind: FieldKind = FieldKind.SCALAR,
        *,
        nested: type | None = None,
        list_type: ListType | None = None,
        list_keys: tuple[str, ...] = (),
        format: Format | None = None,
) -> dict[str, FieldInfo]:
    """
    Build the dataclass field metadata with the field's schema.

    Struct fields and lists of structs must name the nested dataclass.
    Lists must declare their type: ``set`` for lists of unique scalars,
    ``map`` for lists of structs identified by key fields, ``atomic`` otherwise.
    """
    if kind is FieldKind.STRUCT and nested is None:
        raise ValueError(f"Struct field {json_name!r} must declare the nested type.")
    if kind is FieldKind.LIST and list_type is None:
        raise ValueError(f"List field {json_name!r} must declare the list type.")
    if list_type is ListType.MAP and (nested is None or not list_keys):
        raise ValueError(f"Map-list field {json_name!r} must declare the item type and keys.")
    info = FieldInfo(json_name=json_name, kind=kind, nested=nested,
                     list_type=list_type, list_keys=list_keys, format=format)
    return {SCHEMA_KEY: info}


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    json_name: str
    attr_name: str
    kind: FieldKind
    nested: "TypeDescriptor | None" = None
    list_type: ListType | None = None
    list_keys: tuple[str, ...] = ()
    format: Format | None = None


@dataclasses.dataclass(frozen=True, eq=False)
class TypeDescriptor:
    name: str
    cls: type
    fields: Mapping[str, FieldDescriptor]
    api_version: str | None = None
    kind: str | None = None
    namespaced: bool | None = None

    def __repr__(self) -> str:
        return f'<TypeDescriptor {self.name}>'

    @property
    def is_resource(self) -> bool:
        return self.kind is not None


def get_field_info(field: "dataclasses.Field[Any]") -> FieldInfo | None:
    info: FieldInfo | None = field.metadata.get(SCHEMA_KEY)
    return info


@functools.cache
def describe(cls: type) -> TypeDescriptor:
    """
    Derive the type descriptor from the dataclass and its fields' declarations.

    The fully-qualified name comes from the class's ``SCHEMA`` attribute;
    the top-level resources also declare ``API_VERSION``, ``KIND``,
    and ``NAMESPACED``. The fields with no declared schema are ignored.
    """
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"Only dataclasses can be described, got {cls!r}")
    fields: dict[str, FieldDescriptor] = {}
    for field in dataclasses.fields(cls):
        info = get_field_info(field)
        if info is None:
            continue
        fields[info.json_name] = FieldDescriptor(
            json_name=info.json_name,
            attr_name=field.name,
            kind=info.kind,
            nested=describe(info.nested) if info.nested is not None else None,
            list_type=info.list_type,
            list_keys=info.list_keys,
            format=info.format,
        )
    return TypeDescriptor(
        name=getattr(cls, 'SCHEMA', None) or cls.__qualname__,
        cls=cls,
        fields=fields,
        api_version=getattr(cls, 'API_VERSION', None),
        kind=getattr(cls, 'KIND', None),
        namespaced=getattr(cls, 'NAMESPACED', None),
    )


class Registry:
    """
    A registry of the type descriptors by their fully-qualified names.

    Used as a class decorator for the apply configurations::

        @registry.register
        @dataclasses.dataclass
        class EventApplyConfiguration(ResourceApplyConfiguration):
            SCHEMA: ClassVar[str] = 'io.k8s.api.events.v1beta1.Event'
    """

    def __init__(self) -> None:
        super().__init__()
        self._types: dict[str, TypeDescriptor] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def register(self, cls: _C) -> _C:
        descriptor = describe(cls)
        existing = self._types.get(descriptor.name)
        if existing is not None and existing.cls is not cls:
            raise ValueError(f"The type {descriptor.name!r} is already registered by {existing.cls!r}.")
        self._types[descriptor.name] = descriptor
        return cls

    def type(self, name: str) -> TypeDescriptor:
        try:
            return self._types[name]
        except KeyError:
            raise LookupError(f"The type {name!r} is not registered.") from None


_default_registry: Registry = Registry()

# The types registered via `register`, carried over to the replacing default registries.
_default_types: list[type] = []


def get_default_registry() -> Registry:
    """
    Get the default registry where the built-in apply configurations are registered.
    """
    return _default_registry


def set_default_registry(registry: Registry) -> None:
    """
    Set the default registry to be used in the extractions by default.

    The types registered with `register` (incl. the built-in ones) are added
    to the new registry, unless it already has other types with the same names.
    """
    global _default_registry
    for cls in _default_types:
        if describe(cls).name not in registry:
            registry.register(cls)
    _default_registry = registry


def register(cls: _C) -> _C:
    """ Register the apply configuration in the default registry. """
    _default_registry.register(cls)
    _default_types.append(cls)
    return cls
