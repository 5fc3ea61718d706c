"""
The base of all apply configurations.

An apply configuration is a sparse, declarative representation of an object:
every field is optional, and ``None`` means "not declared" (i.e. not owned).
This is different from the empty values: ``""``, ``0``, ``False`` are declared,
and are serialized, so that the server-side apply takes the ownership of them.

The apply configurations are built by chaining the ``with_*`` mutators::

    config = event('my-event', 'default').with_reason('Scaled').with_type('Normal')

Every field is declared with its API name and schema (see `optional`),
which is then used for serializing the configuration into an API document,
for populating it from an API document (e.g. the extracted owned fields),
and for describing the type in the schema registry.
"""
import collections.abc
import dataclasses
import datetime
import json
from collections.abc import Mapping
from typing import Any, ClassVar

import yaml
from typing_extensions import Self

from kapply._cogs.configs import configuration
from kapply._cogs.helpers import timestamps
from kapply._cogs.structs import errors, schemas

INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
INT64_MIN, INT64_MAX = -2**63, 2**63 - 1


def optional(
        json_name: str,
        kind: schemas.FieldKind = schemas.FieldKind.SCALAR,
        **kwargs: Any,
) -> Any:
    """ A dataclass field with the declared schema, unset by default. """
    return dataclasses.field(default=None, metadata=schemas.declare(json_name, kind, **kwargs))


def int32(value: int) -> int:
    return _integer(value, INT32_MIN, INT32_MAX)


def int64(value: int) -> int:
    return _integer(value, INT64_MIN, INT64_MAX)


def _integer(value: int, min_value: int, max_value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"An integer is expected, got {value!r}")
    if not min_value <= value <= max_value:
        raise ValueError(f"The value {value!r} is out of range [{min_value}..{max_value}].")
    return value


@dataclasses.dataclass
class ApplyConfiguration:
    SCHEMA: ClassVar[str | None] = None

    def to_dict(self) -> dict[str, Any]:
        """
        Render the declared fields into an API document (JSON-compatible dict).

        The unset fields are omitted. The keys are in the declaration order.
        """
        result: dict[str, Any] = {}
        for field in schemas.describe(type(self)).fields.values():
            value = getattr(self, field.attr_name)
            if value is not None:
                result[field.json_name] = _serialize(value, field)
        return result

    def to_json(self, *, settings: configuration.Settings | None = None) -> str:
        settings = settings if settings is not None else configuration.Settings()
        return json.dumps(self.to_dict(),
                          indent=settings.serialization.indent,
                          sort_keys=settings.serialization.sort_keys)

    def to_yaml(self, *, settings: configuration.Settings | None = None) -> str:
        settings = settings if settings is not None else configuration.Settings()
        return yaml.safe_dump(self.to_dict(),
                              default_flow_style=False,
                              sort_keys=settings.serialization.sort_keys)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        return cls().populate(data)

    def populate(self, data: Mapping[str, Any]) -> Self:
        """
        Set the fields from an API document via the same ``with_*`` mutators.

        The maps are merged into the already set ones, the lists are appended,
        the scalars and structs are replaced -- as if the mutators were called
        manually for every field of the document, in the document's order.

        The document must fit the type: unknown fields and values of wrong kinds
        raise `SchemaMismatchError`. The ``None`` values are treated as unset.
        """
        descriptor = schemas.describe(type(self))
        if not isinstance(data, collections.abc.Mapping):
            raise errors.SchemaMismatchError(f"{descriptor.name} must be an object, got {data!r}")
        for key, value in data.items():
            field = descriptor.fields.get(key)
            if field is None:
                raise errors.SchemaMismatchError(f"Unknown field {key!r} of {descriptor.name}.")
            if value is not None:
                try:
                    self._populate_field(field, value)
                except (TypeError, ValueError) as e:
                    raise errors.SchemaMismatchError(
                        f"Cannot set the field {key!r} of {descriptor.name}: {e}") from e
        return self

    def _populate_field(self, field: schemas.FieldDescriptor, value: Any) -> None:
        mutator = getattr(self, f'with_{field.attr_name}')
        match field.kind:
            case schemas.FieldKind.STRUCT:
                mutator(_nested(field.nested, value))
            case schemas.FieldKind.LIST:
                if isinstance(value, (str, bytes)) or not isinstance(value, collections.abc.Sequence):
                    raise TypeError(f"A list is expected, got {value!r}")
                if field.nested is not None:
                    mutator(*[_nested(field.nested, item) for item in value])
                else:
                    mutator(*value)
            case schemas.FieldKind.MAP:
                if not isinstance(value, collections.abc.Mapping):
                    raise TypeError(f"An object is expected, got {value!r}")
                mutator(value)
            case _:
                mutator(value)


def _nested(descriptor: schemas.TypeDescriptor | None, value: Any) -> ApplyConfiguration:
    if descriptor is None or not issubclass(descriptor.cls, ApplyConfiguration):
        raise TypeError(f"No apply configuration is known for the value {value!r}")
    if not isinstance(value, collections.abc.Mapping):
        raise TypeError(f"An object is expected for {descriptor.name}, got {value!r}")
    return descriptor.cls().populate(value)


def _serialize(value: Any, field: schemas.FieldDescriptor) -> Any:
    if isinstance(value, ApplyConfiguration):
        return value.to_dict()
    elif isinstance(value, datetime.datetime):
        if field.format is schemas.Format.MICRO_TIME:
            return timestamps.format_micro_time(value)
        else:
            return timestamps.format_time(value)
    elif isinstance(value, list):
        return [_serialize(item, field) for item in value]
    elif isinstance(value, dict):
        return dict(value)
    else:
        return value
