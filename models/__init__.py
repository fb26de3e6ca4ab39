from .base import BaseLeagueModel
from .course import Course
from .handicap import Differential, HandicapRecord, LeagueMember
from .match import Match, MatchDay, MatchDayStatus, MatchResult
from .score import Score, ScoreSubmission

__all__ = [
    "BaseLeagueModel",
    "Course",
    "Differential",
    "HandicapRecord",
    "LeagueMember",
    "Match",
    "MatchDay",
    "MatchDayStatus",
    "MatchResult",
    "Score",
    "ScoreSubmission",
]
