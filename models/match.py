from datetime import datetime
from enum import Enum
from pydantic import Field, model_validator
from typing import Dict, List, Optional

from .base import BaseLeagueModel


class MatchDayStatus(str, Enum):
    """Lifecycle of a match day. Transitions only move forward; LOCKED is terminal."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    LOCKED = "locked"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    def can_transition_to(self, target: "MatchDayStatus") -> bool:
        return self is not MatchDayStatus.LOCKED and target.rank > self.rank


_STATUS_ORDER = [MatchDayStatus.SCHEDULED, MatchDayStatus.COMPLETED, MatchDayStatus.LOCKED]


class MatchDay(BaseLeagueModel):
    """A set of matches played at one course on one date within a season."""
    id: str
    league_id: str
    season_id: str
    date: datetime
    course_id: str
    status: MatchDayStatus = MatchDayStatus.SCHEDULED
    created_at: Optional[datetime] = None

    @property
    def is_locked(self) -> bool:
        return self.status is MatchDayStatus.LOCKED


class Match(BaseLeagueModel):
    """A head-to-head 9-hole match between two players."""
    id: str
    league_id: str
    season_id: str
    match_day_id: str
    player_a_id: str
    player_b_id: str
    course_id: str
    match_date: Optional[datetime] = None
    status: MatchDayStatus = MatchDayStatus.SCHEDULED
    player_a_points: Optional[int] = Field(None, ge=0)
    player_b_points: Optional[int] = Field(None, ge=0)
    player_a_absent: bool = False
    player_b_absent: bool = False

    @model_validator(mode='after')
    def validate_players(self):
        if self.player_a_id == self.player_b_id:
            raise ValueError(f"Player {self.player_a_id} cannot play a match against themselves")
        return self

    @property
    def is_scored(self) -> bool:
        return self.player_a_points is not None and self.player_b_points is not None

    def has_player(self, player_id: str) -> bool:
        return player_id in (self.player_a_id, self.player_b_id)


class MatchResult(BaseLeagueModel):
    """Points and per-hole strokes for one scored match."""
    match_id: str
    player_a_points: int = Field(..., ge=0)
    player_b_points: int = Field(..., ge=0)
    strokes: Dict[str, List[int]] = Field(default_factory=dict)  # keyed by player id

    @property
    def total_points(self) -> int:
        return self.player_a_points + self.player_b_points
