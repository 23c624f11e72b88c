class SyncException(Exception):
    """
    Base class for all failures of a synchronization run. Action handlers catch these, log them
    and hand back the payload they received.
    """


class ConfigurationError(SyncException):
    """A source, schema, mapping or action kind from the configuration cannot be resolved."""


class PrerequisiteMissingError(SyncException):
    """A related identifier that must already exist (like the case of a taak) is absent or malformed."""


class FetchError(SyncException):
    """The call to the external source failed or its response could not be decoded."""


class NotFoundError(SyncException):
    """The expected record or object does not exist."""


class WriteBackFailure(SyncException):
    """The external source did not confirm a write with an explicit success indicator."""


class PersistenceError(SyncException):
    """The local store failed to read or write a synchronization or an object."""
