"""
Errors of the field extraction.

Invalid arguments (e.g. ``None`` in the list mutators) are the programming
errors of the callers and are raised as the built-in ``ValueError``
or ``TypeError``. The errors here are the runtime conditions of the data:
the ownership metadata or the live objects which cannot be interpreted.
"""


class ExtractionError(Exception):
    """ A generic failure to extract the owned fields from an object. """


class FieldsParsingError(ExtractionError):
    """ The owned fields set (``fieldsV1``) is malformed or of unknown type. """


class SchemaMismatchError(ExtractionError):
    """ An owned field path cannot be resolved against the type or the object. """
