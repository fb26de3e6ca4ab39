class DatabaseError(Exception):
    """Base for all storage errors."""


class NotFoundError(DatabaseError):
    """Entity not found."""


class DuplicateError(DatabaseError):
    """Entity with the same key already stored."""


class IntegrityError(DatabaseError):
    """Reference to a missing parent record."""
