from .repository import LeagueRepository
from .workflow import (
    BatchResult,
    MatchDaySummary,
    handicap_index_for_play,
    league_standings,
    match_day_summaries,
    recalculate_league_handicaps,
    refresh_player_handicap,
    reschedule_match_day,
    submit_match_day_scores,
)

__all__ = [
    "LeagueRepository",
    "BatchResult",
    "MatchDaySummary",
    "submit_match_day_scores",
    "reschedule_match_day",
    "refresh_player_handicap",
    "recalculate_league_handicaps",
    "handicap_index_for_play",
    "match_day_summaries",
    "league_standings",
]
