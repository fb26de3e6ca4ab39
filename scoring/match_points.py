"""22-point match scoring for 9-hole head-to-head matches."""

from typing import List, Sequence, Tuple

from scoring.exceptions import InvalidInputError

HOLES_PER_MATCH = 9
HOLE_POINTS = 2
TOTAL_NET_POINTS = 4
MATCH_POINTS_TOTAL = HOLES_PER_MATCH * HOLE_POINTS + TOTAL_NET_POINTS  # 22


def _check_card(label: str, scores: Sequence[int], strokes: Sequence[int]) -> None:
    if len(scores) != HOLES_PER_MATCH:
        raise InvalidInputError(
            f"{label} has {len(scores)} hole scores; matches are {HOLES_PER_MATCH} holes"
        )
    if len(strokes) != len(scores):
        raise InvalidInputError(
            f"{label} has {len(strokes)} stroke allocations for {len(scores)} hole scores"
        )
    if any(s < 0 for s in scores):
        raise InvalidInputError(f"{label} has a negative hole score")


def net_hole_scores(scores: Sequence[int], strokes: Sequence[int]) -> List[int]:
    return [gross - received for gross, received in zip(scores, strokes)]


def calculate_match_points(
    scores_a: Sequence[int],
    scores_b: Sequence[int],
    strokes_a: Sequence[int],
    strokes_b: Sequence[int],
) -> Tuple[int, int]:
    """
    Points for both players; they always sum to 22.

    - 2 points per hole to the lower net score (1-1 on a tie)
    - 4 points to the lower total net (2-2 on a tie)
    """
    _check_card("Player A", scores_a, strokes_a)
    _check_card("Player B", scores_b, strokes_b)

    net_a = net_hole_scores(scores_a, strokes_a)
    net_b = net_hole_scores(scores_b, strokes_b)

    points_a = points_b = 0
    for hole_a, hole_b in zip(net_a, net_b):
        if hole_a < hole_b:
            points_a += HOLE_POINTS
        elif hole_b < hole_a:
            points_b += HOLE_POINTS
        else:
            points_a += HOLE_POINTS // 2
            points_b += HOLE_POINTS // 2

    total_a, total_b = sum(net_a), sum(net_b)
    if total_a < total_b:
        points_a += TOTAL_NET_POINTS
    elif total_b < total_a:
        points_b += TOTAL_NET_POINTS
    else:
        points_a += TOTAL_NET_POINTS // 2
        points_b += TOTAL_NET_POINTS // 2

    return points_a, points_b
