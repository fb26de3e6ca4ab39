"""In-process implementation of the LeagueRepository protocol.

Backs the API and the test suite. Records are stored as model copies, so
callers never hold references into the store: a change only lands when it
is saved.
"""

import copy
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple
from uuid import uuid4

from models import Course, HandicapRecord, LeagueMember, Match, MatchDay, Score
from database.exceptions import DuplicateError, IntegrityError, NotFoundError


class InMemoryLeagueRepository:
    """
    Dict-backed league store.

    Notes:
    - One re-entrant lock guards the whole store, so transactions for
      different seasons serialize too. The key is accepted for protocol
      compatibility.
    - The outermost transaction snapshots the store and restores it if the
      block raises, then re-raises.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tx_depth: int = 0
        self._courses: Dict[str, Course] = {}
        self._members: Dict[Tuple[str, str], LeagueMember] = {}
        self._handicaps: Dict[Tuple[str, str], HandicapRecord] = {}
        self._match_days: Dict[str, MatchDay] = {}
        self._matches: Dict[str, Match] = {}
        self._scores: Dict[Tuple[str, str], Score] = {}  # (match_id, player_id)

    # ================================================================
    # Transactions
    # ================================================================

    def _state(self) -> tuple:
        return (
            self._courses, self._members, self._handicaps,
            self._match_days, self._matches, self._scores,
        )

    @contextmanager
    def transaction(self, key: str = "") -> Iterator[None]:
        """Serialize writers and roll back everything on error."""
        with self._lock:
            snapshot = copy.deepcopy(self._state()) if self._tx_depth == 0 else None
            self._tx_depth += 1
            try:
                yield
            except Exception:
                if snapshot is not None:
                    (
                        self._courses, self._members, self._handicaps,
                        self._match_days, self._matches, self._scores,
                    ) = snapshot
                raise
            finally:
                self._tx_depth -= 1

    # ================================================================
    # Seeding
    # ================================================================

    def add_course(self, course: Course) -> Course:
        with self._lock:
            if course.id is None:
                course = course.model_copy(update={"id": str(uuid4())})
            if course.id in self._courses:
                raise DuplicateError(f"Course {course.id} already exists")
            self._courses[course.id] = course.model_copy(deep=True)
            return course

    def add_member(self, member: LeagueMember) -> LeagueMember:
        with self._lock:
            key = (member.league_id, member.player_id)
            if key in self._members:
                raise DuplicateError(
                    f"Player {member.player_id} is already a member of league {member.league_id}"
                )
            self._members[key] = member.model_copy(deep=True)
            return member

    def add_match_day(self, match_day: MatchDay) -> MatchDay:
        with self._lock:
            if match_day.id in self._match_days:
                raise DuplicateError(f"Match day {match_day.id} already exists")
            if match_day.course_id not in self._courses:
                raise IntegrityError(f"Match day {match_day.id} references unknown course {match_day.course_id}")
            self._match_days[match_day.id] = match_day.model_copy(deep=True)
            return match_day

    def add_match(self, match: Match) -> Match:
        with self._lock:
            if match.id in self._matches:
                raise DuplicateError(f"Match {match.id} already exists")
            if match.match_day_id not in self._match_days:
                raise IntegrityError(f"Match {match.id} references unknown match day {match.match_day_id}")
            self._matches[match.id] = match.model_copy(deep=True)
            return match

    # ================================================================
    # Match days and matches
    # ================================================================

    def get_match_day(self, match_day_id: str) -> Optional[MatchDay]:
        with self._lock:
            match_day = self._match_days.get(match_day_id)
            return match_day.model_copy(deep=True) if match_day else None

    def list_match_days(self, league_id: str, season_id: Optional[str] = None) -> List[MatchDay]:
        with self._lock:
            return [
                md.model_copy(deep=True)
                for md in self._match_days.values()
                if md.league_id == league_id and (season_id is None or md.season_id == season_id)
            ]

    def save_match_day(self, match_day: MatchDay) -> None:
        with self._lock:
            if match_day.id not in self._match_days:
                raise NotFoundError(f"Match day {match_day.id} not found")
            self._match_days[match_day.id] = match_day.model_copy(deep=True)

    def get_match(self, match_id: str) -> Optional[Match]:
        with self._lock:
            match = self._matches.get(match_id)
            return match.model_copy(deep=True) if match else None

    def list_matches(self, league_id: str, match_day_id: Optional[str] = None) -> List[Match]:
        with self._lock:
            return [
                m.model_copy(deep=True)
                for m in self._matches.values()
                if m.league_id == league_id and (match_day_id is None or m.match_day_id == match_day_id)
            ]

    def save_match(self, match: Match) -> None:
        with self._lock:
            if match.id not in self._matches:
                raise NotFoundError(f"Match {match.id} not found")
            self._matches[match.id] = match.model_copy(deep=True)

    # ================================================================
    # Courses, members, handicaps
    # ================================================================

    def get_course(self, course_id: str) -> Optional[Course]:
        with self._lock:
            course = self._courses.get(course_id)
            return course.model_copy(deep=True) if course else None

    def get_member(self, league_id: str, player_id: str) -> Optional[LeagueMember]:
        with self._lock:
            member = self._members.get((league_id, player_id))
            return member.model_copy(deep=True) if member else None

    def list_members(self, league_id: str) -> List[LeagueMember]:
        with self._lock:
            return [
                m.model_copy(deep=True)
                for (member_league, _), m in self._members.items()
                if member_league == league_id
            ]

    def save_member(self, member: LeagueMember) -> None:
        with self._lock:
            self._members[(member.league_id, member.player_id)] = member.model_copy(deep=True)

    def get_handicap(self, league_id: str, player_id: str) -> Optional[HandicapRecord]:
        with self._lock:
            record = self._handicaps.get((league_id, player_id))
            return record.model_copy(deep=True) if record else None

    def save_handicap(self, record: HandicapRecord) -> None:
        with self._lock:
            self._handicaps[(record.league_id, record.player_id)] = record.model_copy(deep=True)

    # ================================================================
    # Scores
    # ================================================================

    def get_match_day_scores(self, match_day_id: str) -> List[Score]:
        with self._lock:
            return [
                s.model_copy(deep=True)
                for s in self._scores.values()
                if s.match_day_id == match_day_id
            ]

    def get_match_scores(self, match_id: str) -> List[Score]:
        with self._lock:
            return [
                s.model_copy(deep=True)
                for (score_match, _), s in self._scores.items()
                if score_match == match_id
            ]

    def get_player_scores(self, league_id: str, player_id: str) -> List[Score]:
        with self._lock:
            return [
                s.model_copy(deep=True)
                for s in self._scores.values()
                if s.league_id == league_id and s.player_id == player_id
            ]

    def save_score(self, score: Score) -> Score:
        """Upsert by (match, player); an existing score keeps its id."""
        with self._lock:
            key = (score.match_id, score.player_id)
            existing = self._scores.get(key)
            if existing is not None and existing.id and score.id != existing.id:
                score = score.model_copy(update={"id": existing.id})
            elif score.id is None:
                score = score.model_copy(update={"id": str(uuid4())})
            self._scores[key] = score.model_copy(deep=True)
            return score
