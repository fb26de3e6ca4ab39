from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseLeagueModel


class Differential(BaseLeagueModel):
    """One round's course-independent score differential and the date it was earned."""
    value: float
    date: Optional[datetime] = None


class HandicapRecord(BaseLeagueModel):
    """A player's current league handicap index."""
    id: Optional[str] = None
    player_id: str
    league_id: str
    league_handicap_index: float
    updated_at: Optional[datetime] = None


class LeagueMember(BaseLeagueModel):
    """A player's enrollment in a league, with the provisional seed used until rounds accumulate."""
    player_id: str
    league_id: str
    name: Optional[str] = None
    provisional_handicap: float = Field(0.0, ge=-10, le=54)
    established: bool = False  # 5+ qualifying rounds
