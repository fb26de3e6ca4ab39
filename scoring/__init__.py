from .absence import absence_handicap_index, absent_player_scores
from .differential import course_differential, differentials_from_scores, score_differential
from .exceptions import (
    InvalidInputError,
    MissingCounterpartError,
    ScoringError,
    StateViolationError,
)
from .handicap import (
    calculate_league_handicap,
    course_and_playing_handicap,
    course_handicap,
    is_established,
    playing_handicap,
    round_half_up,
)
from .match_points import MATCH_POINTS_TOTAL, calculate_match_points
from .standings import StandingsEntry, compute_standings
from .strokes import adjust_net_double_bogey, allocate_strokes, assign_match_strokes

__all__ = [
    "score_differential",
    "course_differential",
    "differentials_from_scores",
    "allocate_strokes",
    "assign_match_strokes",
    "adjust_net_double_bogey",
    "calculate_league_handicap",
    "is_established",
    "course_handicap",
    "playing_handicap",
    "course_and_playing_handicap",
    "round_half_up",
    "absent_player_scores",
    "absence_handicap_index",
    "calculate_match_points",
    "MATCH_POINTS_TOTAL",
    "compute_standings",
    "StandingsEntry",
    "ScoringError",
    "InvalidInputError",
    "MissingCounterpartError",
    "StateViolationError",
]
