"""
Some basic dicts and field-in-a-dict manipulation helpers.
"""
import collections.abc
import enum
from collections.abc import Iterator, Mapping
from typing import Any, Generic, TypeVar, Union

FieldPath = tuple[str, ...]
FieldSpec = Union[None, str, FieldPath, list[str]]

_T = TypeVar('_T')
_K = TypeVar('_K')
_V = TypeVar('_V')


class _UNSET(enum.Enum):
    token = enum.auto()


def parse_field(
        field: FieldSpec,
) -> FieldPath:
    """
    Convert any field into a tuple of nested sub-fields.

    Supported notations:

    * ``None`` (for root of a dict).
    * ``"metadata"`` (a single key, even if it has dots in it).
    * ``("metadata", "labels")``
    * ``["metadata", "labels"]``
    """
    if field is None:
        return tuple()
    elif isinstance(field, str):
        return (field,)
    elif isinstance(field, (list, tuple)):
        return tuple(field)
    else:
        raise ValueError(f"Field must be either a str, or a list/tuple. Got {field!r}")


def resolve(
        d: Mapping[Any, Any] | None,
        field: FieldSpec,
        default: Union[_T, _UNSET] = _UNSET.token,
) -> Union[Any, _T]:
    """
    Retrieve a nested sub-field from a dict.

    If ``default`` is provided, then all non-existent and non-mapping values
    are assumed to be empty dictionaries, and ``default`` is returned.

    Otherwise (with no default), attempts to get the inexistent keys will
    raise either a ``TypeError`` or ``KeyError``:

    * ``KeyError`` for actual absence of keys while the structures are correct.
    * ``TypeError`` for attempting to get a key for a non-dictionary:
      e.g. ``None['key']``, ``"string"['key']``, ``123['key']``, etc.
    """
    path = parse_field(field)
    try:
        result = d
        for key in path:
            if isinstance(result, collections.abc.Mapping):
                result = result[key]
            elif not isinstance(default, _UNSET):
                return default
            else:
                raise TypeError(f"The structure is not a dict with field {key!r}: {result!r}")
        return result
    except KeyError:
        if not isinstance(default, _UNSET):
            return default
        raise


class MappingView(Mapping[_K, _V], Generic[_K, _V]):
    """
    A lazy resolver for the "on-demand" dict keys.

    This is needed to have ``metadata`` and other fields to be *assumed*
    as dicts, even if they are actually not present in a live object.
    And to prevent their implicit creation with ``.setdefault('metadata', {})``,
    which produces unwanted side-effects on the objects we only read.

    >>> body = {}
    >>> meta = MappingView(body, 'metadata')
    >>> meta.get('name', 'default')
    ... 'default'
    >>> body['metadata'] = {'name': 'my-event'}
    >>> meta.get('name', 'default')
    ... 'my-event'
    """
    _src: Mapping[_K, _V]

    def __init__(self, __src: Mapping[Any, Any], __path: FieldSpec = None) -> None:
        super().__init__()
        self._src = __src
        self._path = parse_field(__path)

    def __repr__(self) -> str:
        return repr(dict(self))

    def __len__(self) -> int:
        return len(resolve(self._src, self._path, {}))

    def __iter__(self) -> Iterator[Any]:
        return iter(resolve(self._src, self._path, {}))

    def __getitem__(self, item: _K) -> _V:
        return resolve(self._src, self._path + (item,))
