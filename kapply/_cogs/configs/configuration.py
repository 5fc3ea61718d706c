"""
All configuration flags, options, settings to fine-tune the library.

All settings are grouped semantically just for convenience
(instead of a flat mega-object with all the values in it).

They are called *"settings"* (plural). Combined, they form
a *"configuration"* (singular). All of them have reasonable defaults,
so the settings object is optional everywhere it is accepted::

    settings = kapply.Settings()
    settings.extraction.operations = frozenset({'Apply', 'Update'})
    config = kapply.extract_event(event, 'my-controller', settings=settings)
"""
import dataclasses


@dataclasses.dataclass
class ExtractionSettings:

    operations: frozenset[str] = frozenset({'Apply'})
    """
    Which operations of the managed fields entries are considered
    as the fields applied by a field manager.

    Only the ``Apply`` entries represent the declared intent of the manager.
    The ``Update`` entries are the side-effects of regular writes
    (create, update, patch) and can contain the fields set by the server
    on behalf of the manager -- re-applying them can take the ownership over
    the fields that the manager never intended to own.
    """

    validate_schema: bool = True
    """
    Should the owned field paths be verified against the type's schema?

    If enabled (the default), a path with a field unknown to the type fails
    the extraction with `SchemaMismatchError` -- as it usually means that
    the object is of a different version than expected.
    If disabled, such fields are skipped (and logged), and the rest is extracted.
    """


@dataclasses.dataclass
class SerializationSettings:

    indent: int | None = 2
    """
    The indentation of the rendered JSON documents; ``None`` for one-liners.
    """

    sort_keys: bool = False
    """
    Should the keys be sorted in the rendered JSON & YAML documents?

    By default, the keys are in the declaration order: the type identifiers
    and metadata go first, followed by the type's own fields.
    """


@dataclasses.dataclass
class Settings:
    extraction: ExtractionSettings = dataclasses.field(default_factory=ExtractionSettings)
    serialization: SerializationSettings = dataclasses.field(default_factory=SerializationSettings)
