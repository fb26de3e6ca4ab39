from database.memory import InMemoryLeagueRepository
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError

__all__ = [
    "InMemoryLeagueRepository",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
]
