"""
The sets of fields owned by the field managers, as stored in the objects.

Every entry of ``metadata.managedFields`` carries a ``fieldsV1`` trie: a JSON
object, where every key is a path element, and every value is a sub-trie
of the owned sub-fields of that element. The path elements are:

* ``f:<name>`` -- a field of a struct, or a key of a map.
* ``k:<json>`` -- an item of an associative list, identified by its key fields,
  e.g. ``k:{"uid":"1234"}`` for the owner references.
* ``v:<json>`` -- an item of a set-like list, identified by its value,
  e.g. ``v:"example.com/finalizer"`` for the finalizers.
* ``i:<int>`` -- an item of a list, identified by its position.
* ``.`` -- the containing element itself (not a path element, but a marker).

An example for an event with a label and a finalizer::

    {"f:metadata": {"f:labels": {"f:app": {}},
                    "f:finalizers": {".": {}, "v:\\"example.com/x\\"": {}}},
     "f:reason": {}}

Only the leaves are considered when the owned values are extracted: the owned
containers with owned sub-fields are reduced to those sub-fields.
"""
import collections.abc
import dataclasses
import enum
import json
from collections.abc import Iterator, Mapping
from typing import Any, NamedTuple

from kapply._cogs.structs import errors

SELF_MARKER = '.'


class ElementKind(enum.Enum):
    FIELD = 'f'
    KEY = 'k'
    VALUE = 'v'
    INDEX = 'i'


class PathElement(NamedTuple):
    """
    A single step in a field path: a field, a list item by keys/value/index.

    The token is the field name for fields, the decimal position for indexes,
    and the canonical (key-sorted, compact) JSON for the keys & values --
    so that the same items are equal regardless of their original formatting.
    """
    kind: ElementKind
    token: str

    def __str__(self) -> str:
        if self.kind is ElementKind.FIELD:
            return f'.{self.token}'
        else:
            return f'[{self.kind.value}:{self.token}]'

    @property
    def decoded(self) -> Any:
        if self.kind is ElementKind.FIELD:
            return self.token
        elif self.kind is ElementKind.INDEX:
            return int(self.token)
        else:
            return json.loads(self.token)

    def matches(self, item: Any, index: int) -> bool:
        """ Check if a list item at some position is addressed by this element. """
        if self.kind is ElementKind.INDEX:
            return index == self.decoded
        elif self.kind is ElementKind.VALUE:
            return bool(item == self.decoded)
        elif self.kind is ElementKind.KEY:
            keys: Mapping[str, Any] = self.decoded
            return (isinstance(item, collections.abc.Mapping) and
                    all(key in item and item[key] == val for key, val in keys.items()))
        else:
            return False


FieldPath = tuple[PathElement, ...]


def format_path(path: FieldPath) -> str:
    return ''.join(str(element) for element in path) or '.'


def parse_element(key: str) -> PathElement:
    """
    Parse a single key of the ``fieldsV1`` trie into a path element.

    >>> parse_element('f:reason')
    PathElement(kind=<ElementKind.FIELD: 'f'>, token='reason')
    >>> parse_element('k:{"uid": "1234"}')
    PathElement(kind=<ElementKind.KEY: 'k'>, token='{"uid":"1234"}')
    """
    prefix, colon, token = key.partition(':')
    if not colon:
        raise errors.FieldsParsingError(f"Unrecognised path element: {key!r}")
    try:
        kind = ElementKind(prefix)
    except ValueError:
        raise errors.FieldsParsingError(f"Unrecognised path element prefix: {key!r}") from None

    if kind is ElementKind.FIELD:
        return PathElement(kind, token)
    elif kind is ElementKind.INDEX:
        try:
            index = int(token)
        except ValueError:
            raise errors.FieldsParsingError(f"Invalid list index: {key!r}") from None
        if index < 0:
            raise errors.FieldsParsingError(f"Invalid list index: {key!r}")
        return PathElement(kind, str(index))

    try:
        decoded = json.loads(token)
    except json.JSONDecodeError as e:
        raise errors.FieldsParsingError(f"Invalid JSON in the path element {key!r}: {e}") from e
    if kind is ElementKind.KEY and not isinstance(decoded, dict):
        raise errors.FieldsParsingError(f"List item keys must be an object: {key!r}")
    canonical = json.dumps(decoded, sort_keys=True, separators=(',', ':'), ensure_ascii=False)
    return PathElement(kind, canonical)


@dataclasses.dataclass
class FieldSet:
    """
    A trie of the owned field paths.

    ``itself`` is set when the node is marked as owned on its own (the ``.``
    marker), which only matters for the nodes without any owned sub-fields.
    """
    children: dict[PathElement, "FieldSet"] = dataclasses.field(default_factory=dict)
    itself: bool = False

    def __bool__(self) -> bool:
        return bool(self.children) or self.itself

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def leaves(self) -> "FieldSet":
        """
        Reduce the set to its leaves only: the paths with no owned sub-paths.

        The containers owned together with their sub-fields (marked with ``.``)
        lose their own marks, so that only the sub-fields are extracted
        instead of the whole container with all the values of other owners.
        """
        result = FieldSet()
        for element, child in self.children.items():
            result.children[element] = child.leaves() if child.children else FieldSet()
        return result

    def iter_paths(self, prefix: FieldPath = ()) -> Iterator[FieldPath]:
        """ Iterate over the full paths of all the leaves in the set. """
        for element, child in self.children.items():
            path = prefix + (element,)
            if child.children:
                yield from child.iter_paths(path)
            else:
                yield path


def parse_fields_v1(raw: Mapping[str, Any] | None) -> FieldSet:
    """
    Parse the ``fieldsV1`` trie as stored in the managed fields entries.

    Raises `FieldsParsingError` on any structural problem: non-object nodes,
    unknown prefixes, invalid JSON in the keys & values of the list items.
    """
    if raw is None:
        return FieldSet()
    if not isinstance(raw, collections.abc.Mapping):
        raise errors.FieldsParsingError(f"The fields set must be an object, got {raw!r}")

    node = FieldSet()
    for key, sub in raw.items():
        if not isinstance(key, str):
            raise errors.FieldsParsingError(f"The fields set keys must be strings, got {key!r}")
        if key == SELF_MARKER:
            if sub is not None and sub != {}:
                raise errors.FieldsParsingError(f"The self-marker must be empty, got {sub!r}")
            node.itself = True
        else:
            node.children[parse_element(key)] = parse_fields_v1(sub)
    return node
