"""API-specific response models for list views and score entry."""

from datetime import datetime
from pydantic import BaseModel
from typing import Dict, List, Optional


class ScoreResponse(BaseModel):
    """A submitted scorecard as shown on the score entry page."""
    match_id: str
    player_id: str
    hole_scores: List[int]
    gross_score: int
    player_absent: bool


class MatchDayScoresResponse(BaseModel):
    match_day_id: str
    status: str
    date: datetime
    scores: List[ScoreResponse]


class MatchPointsResponse(BaseModel):
    match_id: str
    player_a_points: int
    player_b_points: int
    strokes: Dict[str, List[int]]


class EnterScoresResponse(BaseModel):
    """Result of a batch score submission."""
    status: str
    count: int
    updated: bool
    match_day_status: str
    warnings: List[str] = []
    matches: List[MatchPointsResponse] = []
    deferred_matches: List[str] = []
    locked_match_days: List[str] = []
    message: Optional[str] = None


class MatchDaySummaryResponse(BaseModel):
    """Match day for list views."""
    id: str
    season_id: str
    date: datetime
    course_id: str
    status: str
    has_scores: bool
    week_number: int
