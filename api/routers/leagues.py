"""League-scoped API endpoints: score entry, schedule, standings, handicaps."""

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ValidationError
from typing import Dict, List

from database.exceptions import NotFoundError
from database.memory import InMemoryLeagueRepository
from api import config
from api.dependencies import get_repository
from api.schemas import EnterScoresResponse, MatchDaySummaryResponse, MatchPointsResponse
from league.workflow import (
    league_standings,
    match_day_summaries,
    recalculate_league_handicaps,
    submit_match_day_scores,
)
from models import ScoreSubmission
from scoring.exceptions import InvalidInputError, StateViolationError
from scoring.standings import StandingsEntry

router = APIRouter()


class ScoreSubmissionInput(BaseModel):
    match_id: str
    player_id: str
    hole_scores: List[int] = []
    player_absent: bool = False


class EnterScoresRequest(BaseModel):
    scores: List[ScoreSubmissionInput]


@router.post("/{league_id}/match-days/{match_day_id}/scores", response_model=EnterScoresResponse)
def enter_match_day_scores(
    league_id: str,
    match_day_id: str,
    req: EnterScoresRequest,
    response: Response,
    repo: InMemoryLeagueRepository = Depends(get_repository),
):
    """Enter or correct a batch of scorecards for a match day."""
    submissions = []
    warnings = []
    for entry in req.scores:
        try:
            submissions.append(ScoreSubmission(**entry.model_dump()))
        except ValidationError as e:
            warnings.append(f"Invalid score for player {entry.player_id}: {e.errors()[0]['msg']}")

    try:
        result = submit_match_day_scores(
            repo, league_id, match_day_id, submissions, allowance=config.ALLOWANCE
        )
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except StateViolationError as e:
        raise HTTPException(403, str(e))
    except InvalidInputError as e:
        raise HTTPException(400, str(e))

    body = EnterScoresResponse(
        status="success" if result.processed else "error",
        count=result.processed,
        updated=result.updated,
        match_day_status=result.status.value,
        warnings=warnings + result.warnings,
        matches=[MatchPointsResponse(**m.model_dump()) for m in result.scored_matches],
        deferred_matches=result.deferred_matches,
        locked_match_days=result.locked_match_days,
        message=None if result.processed else "No scores were processed",
    )
    response.status_code = 201 if result.processed else 400
    return body


@router.get("/{league_id}/match-days", response_model=List[MatchDaySummaryResponse])
def list_match_days(league_id: str, repo: InMemoryLeagueRepository = Depends(get_repository)):
    return [
        MatchDaySummaryResponse(
            id=s.match_day.id,
            season_id=s.match_day.season_id,
            date=s.match_day.date,
            course_id=s.match_day.course_id,
            status=s.match_day.status.value,
            has_scores=s.has_scores,
            week_number=s.week_number,
        )
        for s in match_day_summaries(repo, league_id)
    ]


@router.get("/{league_id}/standings", response_model=List[StandingsEntry])
def get_standings(league_id: str, repo: InMemoryLeagueRepository = Depends(get_repository)):
    return league_standings(repo, league_id)


@router.post("/{league_id}/handicaps/recalculate")
def recalculate_handicaps(
    league_id: str, repo: InMemoryLeagueRepository = Depends(get_repository)
) -> Dict[str, int]:
    return recalculate_league_handicaps(repo, league_id)
