"""FastAPI application for the league scoring API."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import config
from api.logging_config import setup_logging
from database.memory import InMemoryLeagueRepository


def create_app(repository: Optional[InMemoryLeagueRepository] = None) -> FastAPI:
    setup_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="League Scoring API",
        version="1.0.0",
    )
    app.state.repository = repository if repository is not None else InMemoryLeagueRepository()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import leagues, match_days
    app.include_router(match_days.router, prefix="/api/match-days", tags=["match-days"])
    app.include_router(leagues.router, prefix="/api/leagues", tags=["leagues"])

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
