"""Storage errors."""


class PersistenceError(Exception):
    """A stored value could not be read or written."""


class DatabaseError(PersistenceError):
    """The SQLite database rejected an operation."""
