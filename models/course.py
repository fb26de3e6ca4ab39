from pydantic import Field, field_validator, model_validator
from typing import List, Optional

from .base import BaseLeagueModel


class Course(BaseLeagueModel):
    """League course: per-hole pars and stroke indices plus its rating and slope."""

    id: Optional[str] = None
    league_id: Optional[str] = None
    name: Optional[str] = None
    par: int = Field(..., ge=1)
    course_rating: float = Field(..., gt=0)
    slope_rating: int = Field(..., gt=0)
    hole_pars: List[int] = Field(..., min_length=1)
    hole_handicaps: List[int] = Field(..., min_length=1)  # stroke index, 1 is hardest

    @field_validator('hole_pars')
    @classmethod
    def validate_hole_pars(cls, v):
        for number, par in enumerate(v, start=1):
            if par < 1:
                raise ValueError(f"Par {par} for hole {number} must be positive")
        return v

    @model_validator(mode='after')
    def validate_hole_lists(self):
        """Stroke indices must be a permutation of 1..N over the same N holes as the pars."""
        if len(self.hole_pars) != len(self.hole_handicaps):
            raise ValueError(
                f"Course has {len(self.hole_pars)} hole pars but "
                f"{len(self.hole_handicaps)} hole handicaps"
            )
        expected = list(range(1, len(self.hole_pars) + 1))
        if sorted(self.hole_handicaps) != expected:
            raise ValueError(
                f"Hole handicaps {self.hole_handicaps} must use each of 1-{len(expected)} exactly once"
            )
        return self

    @property
    def hole_count(self) -> int:
        return len(self.hole_pars)
