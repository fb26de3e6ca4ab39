from typing import ContextManager, List, Optional, Protocol

from models import Course, HandicapRecord, LeagueMember, Match, MatchDay, Score


class LeagueRepository(Protocol):
    """Interface for the league data the match-day workflow reads and writes.

    Implementors provide the actual storage. Any class with matching method
    signatures satisfies this protocol.
    """

    def transaction(self, key: str) -> ContextManager[None]:
        """Mutual-exclusion boundary for one season.

        Everything written inside commits together; an exception rolls all of
        it back. Must be re-entrant for the same key.
        """
        ...

    # --- Match days and matches ---

    def get_match_day(self, match_day_id: str) -> Optional[MatchDay]:
        ...

    def list_match_days(self, league_id: str, season_id: Optional[str] = None) -> List[MatchDay]:
        """Match days for a league, optionally restricted to one season."""
        ...

    def save_match_day(self, match_day: MatchDay) -> None:
        ...

    def get_match(self, match_id: str) -> Optional[Match]:
        ...

    def list_matches(self, league_id: str, match_day_id: Optional[str] = None) -> List[Match]:
        ...

    def save_match(self, match: Match) -> None:
        ...

    # --- Courses, members, handicaps ---

    def get_course(self, course_id: str) -> Optional[Course]:
        ...

    def get_member(self, league_id: str, player_id: str) -> Optional[LeagueMember]:
        ...

    def list_members(self, league_id: str) -> List[LeagueMember]:
        ...

    def save_member(self, member: LeagueMember) -> None:
        ...

    def get_handicap(self, league_id: str, player_id: str) -> Optional[HandicapRecord]:
        ...

    def save_handicap(self, record: HandicapRecord) -> None:
        ...

    # --- Scores ---

    def get_match_day_scores(self, match_day_id: str) -> List[Score]:
        ...

    def get_match_scores(self, match_id: str) -> List[Score]:
        ...

    def get_player_scores(self, league_id: str, player_id: str) -> List[Score]:
        """All of a player's scores in a league, any order."""
        ...

    def save_score(self, score: Score) -> Score:
        """Insert, or replace the existing score for the same match and player."""
        ...
