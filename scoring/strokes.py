"""Stroke allocation by hole difficulty and the Net Double Bogey cap built on it."""

from typing import Dict, List, Sequence

from models import Course
from scoring.exceptions import InvalidInputError


def _holes_by_stroke_index(stroke_indices: Sequence[int]) -> List[int]:
    if not stroke_indices:
        raise InvalidInputError("Hole count must be positive")
    if sorted(stroke_indices) != list(range(1, len(stroke_indices) + 1)):
        raise InvalidInputError(
            f"Stroke indices {list(stroke_indices)} must use each of 1-{len(stroke_indices)} exactly once"
        )
    return sorted(range(len(stroke_indices)), key=lambda i: stroke_indices[i])


def allocate_strokes(total: int, stroke_indices: Sequence[int]) -> List[int]:
    """
    Spread `total` whole strokes across holes, hardest first.

    Every hole gets total // N; the remaining total % N strokes go to the
    holes with the lowest stroke indices. A total above N therefore wraps
    around to a second stroke per hole, starting again at stroke index 1.
    """
    ordered = _holes_by_stroke_index(stroke_indices)
    hole_count = len(stroke_indices)
    base, remainder = divmod(total, hole_count)

    allocated = [base] * hole_count
    for position in ordered[:remainder]:
        allocated[position] += 1
    return allocated


def strokes_for_hole(course_handicap: int, stroke_index: int, hole_count: int) -> int:
    """Strokes received on one hole: C div N, plus one where the stroke index is within C mod N."""
    if hole_count <= 0:
        raise InvalidInputError(f"Hole count must be positive, got {hole_count}")
    base, remainder = divmod(course_handicap, hole_count)
    return base + (1 if stroke_index <= remainder else 0)


def assign_match_strokes(
    player_a_id: str,
    player_a_playing_handicap: int,
    player_b_id: str,
    player_b_playing_handicap: int,
    course: Course,
) -> Dict[str, List[int]]:
    """
    Per-hole strokes for a head-to-head match, keyed by player id.

    Only the higher-handicap player receives strokes: the handicap
    difference, allocated hardest hole first. Equal handicaps give both
    players all zeros.
    """
    diff = player_a_playing_handicap - player_b_playing_handicap
    zeros = [0] * course.hole_count

    if diff > 0:
        return {
            player_a_id: allocate_strokes(diff, course.hole_handicaps),
            player_b_id: zeros,
        }
    if diff < 0:
        return {
            player_a_id: zeros,
            player_b_id: allocate_strokes(-diff, course.hole_handicaps),
        }
    return {player_a_id: zeros, player_b_id: list(zeros)}


def adjust_net_double_bogey(
    gross_scores: Sequence[int], course: Course, course_handicap: int
) -> List[int]:
    """
    Cap each hole at net double bogey: par + 2 + strokes received there.

    Bounds the damage one blow-up hole can do to a handicap-counting total.
    The caller sums the result for the adjusted gross score.
    """
    if len(gross_scores) != course.hole_count:
        raise InvalidInputError(
            f"Expected {course.hole_count} hole scores, got {len(gross_scores)}"
        )

    adjusted = []
    for number, (gross, par, stroke_index) in enumerate(
        zip(gross_scores, course.hole_pars, course.hole_handicaps), start=1
    ):
        if gross < 0:
            raise InvalidInputError(f"Score {gross} for hole {number} cannot be negative")
        strokes = strokes_for_hole(course_handicap, stroke_index, course.hole_count)
        adjusted.append(min(gross, par + 2 + strokes))
    return adjusted
