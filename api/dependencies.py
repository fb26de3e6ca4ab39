from fastapi import Request
from database.memory import InMemoryLeagueRepository


def get_repository(request: Request) -> InMemoryLeagueRepository:
    """FastAPI dependency that provides the league repository."""
    return request.app.state.repository
