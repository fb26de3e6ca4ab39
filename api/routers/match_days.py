"""Match day API endpoints."""

from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from database.exceptions import NotFoundError
from database.memory import InMemoryLeagueRepository
from api.dependencies import get_repository
from api.schemas import MatchDayScoresResponse, ScoreResponse
from league.workflow import reschedule_match_day
from models import MatchDay
from scoring.exceptions import StateViolationError

router = APIRouter()


class UpdateMatchDayRequest(BaseModel):
    date: Optional[str] = None  # YYYY-MM-DD
    course_id: Optional[str] = None


@router.get("/{match_day_id}", response_model=MatchDay)
def get_match_day(match_day_id: str, repo: InMemoryLeagueRepository = Depends(get_repository)):
    match_day = repo.get_match_day(match_day_id)
    if not match_day:
        raise HTTPException(404, "Match day not found")
    return match_day


@router.get("/{match_day_id}/scores", response_model=MatchDayScoresResponse)
def get_match_day_scores(match_day_id: str, repo: InMemoryLeagueRepository = Depends(get_repository)):
    match_day = repo.get_match_day(match_day_id)
    if not match_day:
        raise HTTPException(404, "Match day not found")

    scores = repo.get_match_day_scores(match_day_id)
    return MatchDayScoresResponse(
        match_day_id=match_day.id,
        status=match_day.status.value,
        date=match_day.date,
        scores=[
            ScoreResponse(
                match_id=s.match_id,
                player_id=s.player_id,
                hole_scores=s.hole_scores,
                gross_score=s.gross_score,
                player_absent=s.player_absent,
            )
            for s in scores
        ],
    )


@router.put("/{match_day_id}", response_model=MatchDay)
def update_match_day(
    match_day_id: str,
    req: UpdateMatchDayRequest,
    repo: InMemoryLeagueRepository = Depends(get_repository),
):
    """Move a scheduled match day to another date and/or course."""
    new_date = None
    if req.date:
        try:
            new_date = datetime.strptime(req.date, "%Y-%m-%d")
        except ValueError:
            raise HTTPException(400, f"Invalid date format. Expected YYYY-MM-DD, got: {req.date}")

    try:
        return reschedule_match_day(repo, match_day_id, date=new_date, course_id=req.course_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except StateViolationError as e:
        raise HTTPException(403, str(e))
