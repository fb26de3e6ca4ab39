"""League handicap index and its conversion to course and playing handicaps."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Sequence, Tuple

from models import Course, Differential
from scoring.differential import STANDARD_SLOPE
from scoring.exceptions import InvalidInputError

SCORES_CONSIDERED = 5
SCORES_USED = 3
ESTABLISHED_ROUNDS = 5
PLAYING_HANDICAP_ALLOWANCE = 0.95


def round_half_up(value: float, places: int = 0) -> float:
    """Round half away from zero on the decimal representation (11.85 -> 11.9, -2.5 -> -3)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def most_recent(differentials: Iterable[Differential], limit: int = SCORES_CONSIDERED) -> List[Differential]:
    """Newest first; undated differentials sort as oldest and keep their input order."""
    ordered = sorted(
        differentials,
        key=lambda d: d.date or datetime.min,
        reverse=True,
    )
    return ordered[:limit]


def calculate_league_handicap(
    differentials: Sequence[Differential], provisional_handicap: float
) -> float:
    """
    League handicap index from up to the five most recent differentials.

    - 0 rounds: the provisional handicap
    - 1 round: (2 x provisional + d1) / 3
    - 2 rounds: (provisional + d1 + d2) / 3
    - 3-4 rounds: mean of all differentials, provisional dropped
    - 5 rounds: mean of the best (lowest) 3, the 2 worst discarded

    Rounded to one decimal, half up.
    """
    values = [d.value for d in most_recent(differentials)]
    count = len(values)

    if count == 0:
        index = provisional_handicap
    elif count == 1:
        index = (2 * provisional_handicap + values[0]) / 3
    elif count == 2:
        index = (provisional_handicap + values[0] + values[1]) / 3
    elif count < SCORES_CONSIDERED:
        index = sum(values) / count
    else:
        best = sorted(values)[:SCORES_USED]
        index = sum(best) / SCORES_USED

    return round_half_up(index, 1)


def is_established(qualifying_rounds: int) -> bool:
    """A player is established once they have five qualifying rounds."""
    return qualifying_rounds >= ESTABLISHED_ROUNDS


def course_handicap(handicap_index: float, course: Course) -> float:
    """(index x slope / 113) + (course rating - par). Left unrounded."""
    if course.slope_rating <= 0:
        raise InvalidInputError(f"Slope rating must be positive, got {course.slope_rating}")
    return (handicap_index * course.slope_rating / STANDARD_SLOPE) + (course.course_rating - course.par)


def playing_handicap(course_hc: float, allowance: float = PLAYING_HANDICAP_ALLOWANCE) -> int:
    return int(round_half_up(course_hc * allowance))


def course_and_playing_handicap(
    handicap_index: float,
    course: Course,
    allowance: float = PLAYING_HANDICAP_ALLOWANCE,
) -> Tuple[float, int]:
    course_hc = course_handicap(handicap_index, course)
    return course_hc, playing_handicap(course_hc, allowance)
