"""Match-day workflow: turns a batch of submitted scorecards into scores,
handicaps and match points, and moves match days through
scheduled -> completed -> locked.

Every function here is stateless; the repository is passed in explicitly
and all writes for a call happen inside one ``repository.transaction``
keyed by season (or league, for league-wide jobs).
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from pydantic import Field, ValidationError

from database.exceptions import NotFoundError
from league.repository import LeagueRepository
from models import (
    Course,
    Differential,
    HandicapRecord,
    LeagueMember,
    Match,
    MatchDay,
    MatchDayStatus,
    MatchResult,
    Score,
    ScoreSubmission,
)
from models.base import BaseLeagueModel
from scoring.absence import absence_handicap_index, absent_player_scores
from scoring.differential import course_differential, differentials_from_scores
from scoring.exceptions import InvalidInputError, MissingCounterpartError, StateViolationError
from scoring.handicap import (
    PLAYING_HANDICAP_ALLOWANCE,
    calculate_league_handicap,
    course_and_playing_handicap,
    is_established,
    most_recent,
    round_half_up,
)
from scoring.match_points import HOLES_PER_MATCH, calculate_match_points, net_hole_scores
from scoring.standings import StandingsEntry, compute_standings
from scoring.strokes import adjust_net_double_bogey, assign_match_strokes

logger = logging.getLogger(__name__)


class BatchResult(BaseLeagueModel):
    """Outcome of one score batch for a match day."""
    match_day_id: str
    status: MatchDayStatus
    processed: int = 0
    updated: bool = False  # the day already had scores before this batch
    warnings: List[str] = Field(default_factory=list)
    scored_matches: List[MatchResult] = Field(default_factory=list)
    deferred_matches: List[str] = Field(default_factory=list)
    locked_match_days: List[str] = Field(default_factory=list)


class MatchDaySummary(BaseLeagueModel):
    match_day: MatchDay
    has_scores: bool
    week_number: int


# ================================================================
# Lookups
# ================================================================

def _require_match_day(repository: LeagueRepository, match_day_id: str) -> MatchDay:
    match_day = repository.get_match_day(match_day_id)
    if match_day is None:
        raise NotFoundError(f"Match day {match_day_id} not found")
    return match_day


def _require_course(repository: LeagueRepository, course_id: str) -> Course:
    course = repository.get_course(course_id)
    if course is None:
        raise NotFoundError(f"Course {course_id} not found")
    return course


def _require_member(repository: LeagueRepository, league_id: str, player_id: str) -> LeagueMember:
    member = repository.get_member(league_id, player_id)
    if member is None:
        raise NotFoundError(f"Player {player_id} is not a member of league {league_id}")
    return member


def _qualifying_differentials(
    repository: LeagueRepository,
    league_id: str,
    player_id: str,
    before: Optional[datetime] = None,
) -> List[Differential]:
    """Differentials of a player's non-absent rounds, optionally only those dated before `before`."""
    scores = repository.get_player_scores(league_id, player_id)
    if before is not None:
        scores = [s for s in scores if s.date is not None and s.date < before]
    return differentials_from_scores(scores)


def handicap_index_for_play(
    repository: LeagueRepository, league_id: str, player_id: str, played_on: datetime
) -> float:
    """
    Index a player carries into a match on `played_on`.

    Built from the provisional seed and qualifying rounds dated before the
    match, so re-entering or correcting a day's scores always sees the same
    index.
    """
    member = _require_member(repository, league_id, player_id)
    differentials = _qualifying_differentials(repository, league_id, player_id, before=played_on)
    return calculate_league_handicap(differentials, member.provisional_handicap)


# ================================================================
# Handicap recalculation
# ================================================================

def refresh_player_handicap(
    repository: LeagueRepository, league_id: str, player_id: str
) -> HandicapRecord:
    """Recompute and store a player's league handicap from their five most recent qualifying rounds."""
    member = _require_member(repository, league_id, player_id)
    differentials = _qualifying_differentials(repository, league_id, player_id)
    index = calculate_league_handicap(differentials, member.provisional_handicap)

    existing = repository.get_handicap(league_id, player_id)
    record = HandicapRecord(
        id=existing.id if existing else str(uuid4()),
        player_id=player_id,
        league_id=league_id,
        league_handicap_index=index,
        updated_at=datetime.now(timezone.utc),
    )
    repository.save_handicap(record)

    established = is_established(len(differentials))
    if established != member.established:
        member.established = established
        repository.save_member(member)
        logger.info("Player %s established status is now %s", player_id, established)

    logger.info(
        "Player %s: %d qualifying rounds, league handicap index %.1f",
        player_id, len(differentials), index,
    )
    return record


def recalculate_league_handicaps(repository: LeagueRepository, league_id: str) -> Dict[str, int]:
    """Recompute every member's handicap. Returns success/error counts."""
    successful = 0
    errors = 0
    with repository.transaction(league_id):
        members = repository.list_members(league_id)
        logger.info("Recalculating handicaps for %d members of league %s", len(members), league_id)
        for member in members:
            try:
                refresh_player_handicap(repository, league_id, member.player_id)
                successful += 1
            except ValidationError as e:
                logger.error("Handicap recalculation failed for player %s: %s", member.player_id, e)
                errors += 1

    logger.info("Handicap recalculation completed: %d successful, %d errors", successful, errors)
    return {"successful": successful, "errors": errors}


# ================================================================
# Score entry
# ================================================================

def _build_score(
    repository: LeagueRepository,
    league_id: str,
    match_day: MatchDay,
    submission: ScoreSubmission,
    existing: Optional[Score],
    allowance: float,
) -> Tuple[Match, Score]:
    """Validate one submission and compute its score. Writes nothing."""
    match = repository.get_match(submission.match_id)
    if match is None:
        raise NotFoundError(f"Match {submission.match_id} not found")
    if match.match_day_id != match_day.id:
        raise InvalidInputError(
            f"Match {match.id} is not part of match day {match_day.id}"
        )
    if not match.has_player(submission.player_id):
        raise InvalidInputError(
            f"Player {submission.player_id} is not playing in match {match.id}"
        )

    course = _require_course(repository, match.course_id)
    if course.hole_count != HOLES_PER_MATCH:
        raise InvalidInputError(
            f"Match {match.id} is on a {course.hole_count}-hole course; "
            f"matches are {HOLES_PER_MATCH} holes"
        )
    if not submission.player_absent and len(submission.hole_scores) != course.hole_count:
        raise InvalidInputError(
            f"Player {submission.player_id} submitted {len(submission.hole_scores)} "
            f"hole scores for a {course.hole_count}-hole course"
        )

    posted_index = handicap_index_for_play(
        repository, league_id, submission.player_id, match_day.date
    )

    if submission.player_absent:
        recent = most_recent(
            _qualifying_differentials(
                repository, league_id, submission.player_id, before=match_day.date
            )
        )
        index = absence_handicap_index(posted_index, recent)
        course_hc, playing_hc = course_and_playing_handicap(index, course, allowance)
        hole_scores = absent_player_scores(playing_hc, course)
        adjusted = list(hole_scores)
        differential = None
    else:
        index = posted_index
        course_hc, playing_hc = course_and_playing_handicap(index, course, allowance)
        hole_scores = list(submission.hole_scores)
        adjusted = adjust_net_double_bogey(hole_scores, course, int(round_half_up(course_hc)))
        differential = course_differential(sum(adjusted), course)

    gross = sum(hole_scores)
    score = Score(
        id=existing.id if existing else str(uuid4()),
        match_id=match.id,
        player_id=submission.player_id,
        league_id=league_id,
        match_day_id=match_day.id,
        course_id=course.id,
        date=match_day.date,
        hole_scores=hole_scores,
        hole_adjusted_gross_scores=adjusted,
        match_net_hole_scores=list(hole_scores),
        match_strokes=[0] * course.hole_count,
        gross_score=gross,
        net_score=gross - playing_hc,
        match_net_score=gross,
        adjusted_gross=sum(adjusted),
        handicap_differential=differential,
        handicap_index=index,
        course_handicap=int(round_half_up(course_hc)),
        playing_handicap=playing_hc,
        player_absent=submission.player_absent,
    )
    return match, score


def _score_match(repository: LeagueRepository, match: Match) -> MatchResult:
    """Compute strokes and points for a match from both stored scores."""
    scores = {s.player_id: s for s in repository.get_match_scores(match.id)}
    score_a = scores.get(match.player_a_id)
    score_b = scores.get(match.player_b_id)
    if score_a is None or score_b is None:
        raise MissingCounterpartError(f"Match {match.id} is waiting on an opponent's score")

    course = _require_course(repository, match.course_id)
    strokes = assign_match_strokes(
        match.player_a_id, score_a.playing_handicap,
        match.player_b_id, score_b.playing_handicap,
        course,
    )
    points_a, points_b = calculate_match_points(
        score_a.hole_scores, score_b.hole_scores,
        strokes[match.player_a_id], strokes[match.player_b_id],
    )

    for score in (score_a, score_b):
        received = strokes[score.player_id]
        score.match_strokes = received
        score.match_net_hole_scores = net_hole_scores(score.hole_scores, received)
        score.match_net_score = sum(score.match_net_hole_scores)
        repository.save_score(score)

    match.player_a_points = points_a
    match.player_b_points = points_b
    match.player_a_absent = score_a.player_absent
    match.player_b_absent = score_b.player_absent
    if match.status.can_transition_to(MatchDayStatus.COMPLETED):
        match.status = MatchDayStatus.COMPLETED
    repository.save_match(match)

    return MatchResult(
        match_id=match.id,
        player_a_points=points_a,
        player_b_points=points_b,
        strokes=strokes,
    )


def _lock_earlier_match_days(repository: LeagueRepository, match_day: MatchDay) -> List[str]:
    """Lock every not-yet-locked day in the same season dated before `match_day`."""
    locked = []
    for other in repository.list_match_days(match_day.league_id, match_day.season_id):
        if (
            other.id == match_day.id
            or other.date >= match_day.date
            or not other.status.can_transition_to(MatchDayStatus.LOCKED)
        ):
            continue
        other.status = MatchDayStatus.LOCKED
        repository.save_match_day(other)
        for match in repository.list_matches(other.league_id, match_day_id=other.id):
            if match.status.can_transition_to(MatchDayStatus.LOCKED):
                match.status = MatchDayStatus.LOCKED
                repository.save_match(match)
        locked.append(other.id)
        logger.info("Locked match day %s (%s)", other.id, other.date.date())
    return locked


def submit_match_day_scores(
    repository: LeagueRepository,
    league_id: str,
    match_day_id: str,
    submissions: Sequence[ScoreSubmission],
    allowance: float = PLAYING_HANDICAP_ALLOWANCE,
) -> BatchResult:
    """
    Record a batch of scorecards for one match day.

    Invalid entries are skipped and reported as warnings; the valid ones are
    committed together with any status change. A locked day rejects the
    whole batch with StateViolationError. Submitting the same batch again
    leaves the same scores, handicaps and points.
    """
    season_id = _require_match_day(repository, match_day_id).season_id

    with repository.transaction(season_id):
        match_day = _require_match_day(repository, match_day_id)
        if match_day.league_id != league_id:
            raise NotFoundError(f"Match day {match_day_id} not found in league {league_id}")
        if match_day.is_locked:
            raise StateViolationError(
                f"Match day {match_day_id} is locked and scores cannot be modified"
            )

        existing_scores = {
            (s.match_id, s.player_id): s for s in repository.get_match_day_scores(match_day_id)
        }
        result = BatchResult(
            match_day_id=match_day_id,
            status=match_day.status,
            updated=bool(existing_scores),
        )

        touched: List[Match] = []
        for submission in submissions:
            key = (submission.match_id, submission.player_id)
            existing = existing_scores.get(key)
            try:
                match, score = _build_score(
                    repository, league_id, match_day, submission, existing, allowance,
                )
            except (InvalidInputError, NotFoundError) as e:
                logger.warning("Skipping score for player %s: %s", submission.player_id, e)
                result.warnings.append(str(e))
                continue

            existing_scores[key] = repository.save_score(score)
            # a replaced qualifying round has to leave the history too
            if score.counts_for_handicap or (existing is not None and existing.counts_for_handicap):
                refresh_player_handicap(repository, league_id, submission.player_id)
            if match.id not in {m.id for m in touched}:
                touched.append(match)
            result.processed += 1

        for match in touched:
            try:
                match_result = _score_match(repository, match)
            except MissingCounterpartError as e:
                logger.info("Deferring match points: %s", e)
                result.deferred_matches.append(match.id)
                continue
            logger.info(
                "Match %s scored: %s %d - %d %s",
                match.id, match.player_a_id, match_result.player_a_points,
                match_result.player_b_points, match.player_b_id,
            )
            result.scored_matches.append(match_result)

        if result.processed:
            if not result.updated:
                result.locked_match_days = _lock_earlier_match_days(repository, match_day)

            day_matches = repository.list_matches(league_id, match_day_id=match_day_id)
            if (
                match_day.status.can_transition_to(MatchDayStatus.COMPLETED)
                and day_matches
                and all(m.is_scored for m in day_matches)
            ):
                match_day.status = MatchDayStatus.COMPLETED
                repository.save_match_day(match_day)
                logger.info("Match day %s completed", match_day_id)

        result.status = match_day.status

    return result


# ================================================================
# Match day maintenance and reporting
# ================================================================

def reschedule_match_day(
    repository: LeagueRepository,
    match_day_id: str,
    *,
    date: Optional[datetime] = None,
    course_id: Optional[str] = None,
) -> MatchDay:
    """Change a scheduled day's date and/or course. Completed and locked days are rejected."""
    season_id = _require_match_day(repository, match_day_id).season_id

    with repository.transaction(season_id):
        match_day = _require_match_day(repository, match_day_id)
        if match_day.status is not MatchDayStatus.SCHEDULED:
            raise StateViolationError(
                f"Cannot update match day {match_day_id}: it is {match_day.status.value}"
            )
        if course_id is not None:
            _require_course(repository, course_id)
            match_day.course_id = course_id
        if date is not None:
            match_day.date = date
        repository.save_match_day(match_day)

        for match in repository.list_matches(match_day.league_id, match_day_id=match_day_id):
            match.course_id = match_day.course_id
            match.match_date = match_day.date
            repository.save_match(match)

    return match_day


def match_day_summaries(repository: LeagueRepository, league_id: str) -> List[MatchDaySummary]:
    """Match days newest first, each with its week number (1 = earliest) and whether it has scores."""
    days = sorted(repository.list_match_days(league_id), key=lambda d: d.date)
    summaries = [
        MatchDaySummary(
            match_day=day,
            has_scores=bool(repository.get_match_day_scores(day.id)),
            week_number=week,
        )
        for week, day in enumerate(days, start=1)
    ]
    return list(reversed(summaries))


def league_standings(repository: LeagueRepository, league_id: str) -> List[StandingsEntry]:
    return compute_standings(repository.list_members(league_id), repository.list_matches(league_id))
