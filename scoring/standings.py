from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from models import LeagueMember, Match


class StandingsEntry(BaseModel):
    player_id: str
    player_name: Optional[str] = None
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    matches_tied: int = 0
    total_points: int = 0


def _record(entry: StandingsEntry, own: int, other: int) -> None:
    entry.matches_played += 1
    entry.total_points += own
    if own > other:
        entry.matches_won += 1
    elif own < other:
        entry.matches_lost += 1
    else:
        entry.matches_tied += 1


def compute_standings(
    members: Iterable[LeagueMember], matches: Iterable[Match]
) -> List[StandingsEntry]:
    """
    Season table from scored matches, highest total points first.

    Unscored matches and players who aren't league members are skipped.
    Ties on points keep the member order they were passed in.
    """
    table: Dict[str, StandingsEntry] = {
        m.player_id: StandingsEntry(player_id=m.player_id, player_name=m.name)
        for m in members
    }

    for match in matches:
        if not match.is_scored:
            continue
        a, b = match.player_a_points, match.player_b_points
        if match.player_a_id in table:
            _record(table[match.player_a_id], a, b)
        if match.player_b_id in table:
            _record(table[match.player_b_id], b, a)

    return sorted(table.values(), key=lambda e: e.total_points, reverse=True)
