import pytest
from datetime import datetime
from fastapi.testclient import TestClient

from api.main import create_app
from database.memory import InMemoryLeagueRepository
from models import Course, LeagueMember, Match, MatchDay

LEAGUE = "league-1"
ALICE_CARD = [5, 4, 6, 5, 5, 4, 6, 5, 5]
BOB_CARD = [6, 5, 7, 6, 6, 5, 7, 6, 6]


@pytest.fixture
def client():
    repo = InMemoryLeagueRepository()
    repo.add_course(Course(
        id="course-1", league_id=LEAGUE, name="Lakeside Front Nine", par=36,
        course_rating=36.0, slope_rating=113,
        hole_pars=[4, 3, 5, 4, 4, 3, 5, 4, 4],
        hole_handicaps=[1, 7, 3, 5, 2, 9, 4, 6, 8],
    ))
    for player_id, provisional in [("alice", 10.0), ("bob", 14.0)]:
        repo.add_member(LeagueMember(
            player_id=player_id, league_id=LEAGUE,
            name=player_id.title(), provisional_handicap=provisional,
        ))
    for day_id, day_date in [("week-1", datetime(2026, 5, 5)), ("week-2", datetime(2026, 5, 12))]:
        repo.add_match_day(MatchDay(
            id=day_id, league_id=LEAGUE, season_id="season-1",
            date=day_date, course_id="course-1",
        ))
        repo.add_match(Match(
            id=f"{day_id}-m1", league_id=LEAGUE, season_id="season-1",
            match_day_id=day_id, player_a_id="alice", player_b_id="bob",
            course_id="course-1", match_date=day_date,
        ))
    return TestClient(create_app(repo))


def _scores_url(day_id):
    return f"/api/leagues/{LEAGUE}/match-days/{day_id}/scores"


def _week(day_id):
    return {"scores": [
        {"match_id": f"{day_id}-m1", "player_id": "alice", "hole_scores": ALICE_CARD},
        {"match_id": f"{day_id}-m1", "player_id": "bob", "hole_scores": BOB_CARD},
    ]}


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_enter_scores(client):
    resp = client.post(_scores_url("week-1"), json=_week("week-1"))
    assert resp.status_code == 201

    body = resp.json()
    assert body["status"] == "success"
    assert body["count"] == 2
    assert body["updated"] is False
    assert body["match_day_status"] == "completed"
    assert body["matches"][0]["player_a_points"] == 19
    assert body["matches"][0]["player_b_points"] == 3
    assert body["matches"][0]["strokes"]["bob"] == [1, 0, 1, 0, 1, 0, 0, 0, 0]

    resp = client.get("/api/match-days/week-1/scores")
    assert resp.status_code == 200
    assert {s["player_id"]: s["gross_score"] for s in resp.json()["scores"]} == {"alice": 45, "bob": 54}


def test_enter_scores_with_invalid_entry(client):
    payload = {"scores": [
        {"match_id": "week-1-m1", "player_id": "alice", "hole_scores": ALICE_CARD},
        {"match_id": "week-1-m1", "player_id": "bob", "hole_scores": [6, -1, 7, 6, 6, 5, 7, 6, 6]},
    ]}
    resp = client.post(_scores_url("week-1"), json=payload)

    assert resp.status_code == 201
    body = resp.json()
    assert body["count"] == 1
    assert len(body["warnings"]) == 1
    assert "bob" in body["warnings"][0]
    assert body["deferred_matches"] == ["week-1-m1"]
    assert body["match_day_status"] == "scheduled"


def test_enter_scores_nothing_valid(client):
    payload = {"scores": [{"match_id": "no-such-match", "player_id": "alice", "hole_scores": ALICE_CARD}]}
    resp = client.post(_scores_url("week-1"), json=payload)

    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == "error"
    assert body["count"] == 0
    assert body["message"] == "No scores were processed"


def test_enter_scores_unknown_day(client):
    assert client.post(_scores_url("week-9"), json=_week("week-9")).status_code == 404


def test_enter_scores_wrong_league(client):
    resp = client.post("/api/leagues/league-2/match-days/week-1/scores", json=_week("week-1"))
    assert resp.status_code == 404
    assert client.get("/api/match-days/week-1/scores").json()["scores"] == []


def test_locked_day_rejects_scores(client):
    client.post(_scores_url("week-1"), json=_week("week-1"))
    resp = client.post(_scores_url("week-2"), json=_week("week-2"))
    assert resp.json()["locked_match_days"] == ["week-1"]

    resp = client.post(_scores_url("week-1"), json=_week("week-1"))
    assert resp.status_code == 403
    assert client.get("/api/match-days/week-1").json()["status"] == "locked"


def test_reschedule_match_day(client):
    resp = client.put("/api/match-days/week-2", json={"date": "2026-05-14"})
    assert resp.status_code == 200
    assert resp.json()["date"].startswith("2026-05-14")

    resp = client.put("/api/match-days/week-2", json={"date": "05/14/2026"})
    assert resp.status_code == 400

    client.post(_scores_url("week-1"), json=_week("week-1"))
    assert client.put("/api/match-days/week-1", json={"date": "2026-05-06"}).status_code == 403
    assert client.put("/api/match-days/week-9", json={"date": "2026-05-06"}).status_code == 404


def test_get_unknown_match_day(client):
    assert client.get("/api/match-days/week-9").status_code == 404
    assert client.get("/api/match-days/week-9/scores").status_code == 404


def test_list_match_days(client):
    client.post(_scores_url("week-1"), json=_week("week-1"))
    days = client.get(f"/api/leagues/{LEAGUE}/match-days").json()

    assert [(d["id"], d["week_number"], d["has_scores"]) for d in days] == [
        ("week-2", 2, False),
        ("week-1", 1, True),
    ]


def test_standings_and_recalculate(client):
    client.post(_scores_url("week-1"), json=_week("week-1"))

    table = client.get(f"/api/leagues/{LEAGUE}/standings").json()
    assert [(row["player_id"], row["total_points"]) for row in table] == [("alice", 19), ("bob", 3)]
    assert table[0]["player_name"] == "Alice"

    resp = client.post(f"/api/leagues/{LEAGUE}/handicaps/recalculate")
    assert resp.json() == {"successful": 2, "errors": 0}
