"""
utils/errors.py
---------------
Exception hierarchy shared by the model, storage and repository layers.
"""


class VetRecordsError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(VetRecordsError, ValueError):
    """A field is missing, malformed or out of range."""


class FormatError(VetRecordsError, ValueError):
    """A CSV row or snapshot blob cannot be decoded."""


class NotFoundError(VetRecordsError, LookupError):
    """A lookup by id, name or username found nothing."""


class UsernameTakenError(VetRecordsError):
    """An owner with the same username is already registered."""


class IOFailure(VetRecordsError):
    """A file could not be opened, read or written."""
