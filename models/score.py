from datetime import datetime
from pydantic import Field, field_validator
from typing import List, Optional

from .base import BaseLeagueModel


class ScoreSubmission(BaseLeagueModel):
    """One player's scorecard for a match as entered by an admin."""
    match_id: str
    player_id: str
    hole_scores: List[int] = Field(default_factory=list)
    player_absent: bool = False

    @field_validator('hole_scores')
    @classmethod
    def validate_hole_scores(cls, v):
        for number, strokes in enumerate(v, start=1):
            if strokes < 0:
                raise ValueError(f"Score {strokes} for hole {number} cannot be negative")
        return v


class Score(BaseLeagueModel):
    """A player's processed scorecard for a match; also serves as the handicap history."""
    id: Optional[str] = None
    match_id: str
    player_id: str
    league_id: str
    match_day_id: Optional[str] = None
    course_id: Optional[str] = None
    date: Optional[datetime] = None

    hole_scores: List[int] = Field(default_factory=list)               # gross
    hole_adjusted_gross_scores: List[int] = Field(default_factory=list)  # net double bogey
    match_net_hole_scores: List[int] = Field(default_factory=list)     # gross - match strokes
    match_strokes: List[int] = Field(default_factory=list)

    gross_score: int = 0
    net_score: int = 0          # gross - playing handicap
    match_net_score: int = 0
    adjusted_gross: int = 0
    handicap_differential: Optional[float] = None  # None for absent rounds

    handicap_index: float = 0.0
    course_handicap: int = 0
    playing_handicap: int = 0
    player_absent: bool = False

    @property
    def counts_for_handicap(self) -> bool:
        return not self.player_absent and self.handicap_differential is not None
