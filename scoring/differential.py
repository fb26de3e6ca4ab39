"""Score differentials: one round's quality, independent of the course it was played on."""

from typing import Iterable, List

from models import Course, Differential, Score
from scoring.exceptions import InvalidInputError

STANDARD_SLOPE = 113


def score_differential(adjusted_gross: int, course_rating: float, slope_rating: int) -> float:
    """(adjusted_gross - course_rating) * 113 / slope_rating."""
    if slope_rating <= 0:
        raise InvalidInputError(f"Slope rating must be positive, got {slope_rating}")
    return (adjusted_gross - course_rating) * STANDARD_SLOPE / slope_rating


def course_differential(adjusted_gross: int, course: Course) -> float:
    return score_differential(adjusted_gross, course.course_rating, course.slope_rating)


def differentials_from_scores(scores: Iterable[Score]) -> List[Differential]:
    """Collect the differentials of qualifying (non-absent) scores."""
    return [
        Differential(value=s.handicap_differential, date=s.date)
        for s in scores
        if s.counts_for_handicap
    ]
