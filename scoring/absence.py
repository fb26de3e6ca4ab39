"""Synthetic scores and handicap adjustment for a player who misses a match."""

from typing import List, Sequence

from models import Course, Differential
from scoring.handicap import SCORES_USED, most_recent, round_half_up
from scoring.strokes import allocate_strokes

ABSENCE_STROKES_OVER_HANDICAP = 3
ABSENCE_MIN_INCREASE = 2
ABSENCE_MAX_INCREASE = 4


def absent_player_scores(playing_handicap: int, course: Course) -> List[int]:
    """
    Hole scores credited to an absent player: par plus their share of
    playing handicap + 3 strokes, extras on the hardest holes.

    The total always equals course par (sum of hole pars) + playing handicap + 3.
    These scores only ever feed match points, never the handicap index.
    """
    total_over_par = playing_handicap + ABSENCE_STROKES_OVER_HANDICAP
    applied = allocate_strokes(total_over_par, course.hole_handicaps)
    return [par + strokes for par, strokes in zip(course.hole_pars, applied)]


def absence_handicap_index(
    posted_index: float, recent_differentials: Sequence[Differential]
) -> float:
    """
    Handicap index applied for a missed round.

    max(posted + 2, average of the worst 3 of the last 5), capped at
    posted + 4. With fewer than three differentials only the +2 applies.
    """
    adjusted = posted_index + ABSENCE_MIN_INCREASE

    values = [d.value for d in most_recent(recent_differentials)]
    if len(values) >= SCORES_USED:
        worst = sorted(values, reverse=True)[:SCORES_USED]
        adjusted = max(adjusted, sum(worst) / SCORES_USED)

    adjusted = min(adjusted, posted_index + ABSENCE_MAX_INCREASE)
    return round_half_up(adjusted, 1)
