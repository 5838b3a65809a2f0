"""Persistence layer exceptions.

Everything raised by repositories derives from PersistenceError, so callers
can catch database problems with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Database could not be initialised or reached (bad URL, unreadable file, ...)."""

    pass


class RecordNotFoundError(PersistenceError):
    """A record that an operation requires does not exist.

    Optional lookups return None instead.
    """

    pass


class DataIntegrityError(PersistenceError):
    """A constraint was violated (duplicate key, missing foreign key, ...)."""

    pass
