from fastapi.testclient import TestClient

from db import SessionLocal
from main import app
from models import HighScore

client = TestClient(app)


def _score(**kw):
    body = {"player_name": "Ada", "score": 120, "grade": 4, "level": 3}
    body.update(kw)
    return body


def test_create_and_read_back():
    r = client.post("/scores", json=_score(correct_answers=12, wrong_answers=3, accuracy=80.0))
    assert r.status_code == 200
    body = r.json()
    assert isinstance(body["id"], int)
    assert body["created_at"]

    r2 = client.get(f"/scores/{body['id']}")
    assert r2.status_code == 200
    assert r2.json()["player_name"] == "Ada"
    assert r2.json()["accuracy"] == 80.0


def test_score_is_persisted():
    score_id = client.post("/scores", json=_score(score=7)).json()["id"]
    with SessionLocal() as db:
        row = db.get(HighScore, score_id)
        assert row is not None
        assert row.score == 7
        assert row.session_duration == 0


def test_leaderboard_orders_by_score_and_filters_grade():
    for pts in (300, 1000, 50):
        client.post("/scores", json=_score(grade=2, score=pts, player_name=f"p{pts}"))
    client.post("/scores", json=_score(grade=3, score=5000))

    r = client.get("/scores/leaderboard", params={"grade": 2, "limit": 100})
    assert r.status_code == 200
    rows = r.json()
    assert all(row["grade"] == 2 for row in rows)
    scores = [row["score"] for row in rows]
    assert scores == sorted(scores, reverse=True)
    assert {300, 1000, 50} <= set(scores)


def test_leaderboard_limit():
    r = client.get("/scores/leaderboard", params={"limit": 1})
    assert len(r.json()) == 1
    assert client.get("/scores/leaderboard", params={"limit": 0}).status_code == 422


def test_get_score_404():
    assert client.get("/scores/999999").status_code == 404


def test_reject_bad_scores():
    assert client.post("/scores", json=_score(grade=7)).status_code == 422
    assert client.post("/scores", json=_score(player_name="")).status_code == 422
    assert client.post("/scores", json=_score(score=-1)).status_code == 422
