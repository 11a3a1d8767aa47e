from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

GRADE_FIVE_EARLY = {"mul", "div", "frac-add", "frac-sub"}


def test_list_equations_default_count():
    r = client.get("/equations", params={"grade": 2})
    assert r.status_code == 200
    data = r.json()
    assert isinstance(data, list) and len(data) == 1
    eq = data[0]
    assert {"text", "answer", "numeric_answer", "operation", "difficulty"} == set(eq.keys())
    assert eq["operation"] in ("add", "sub")


def test_list_equations_batch_respects_grade():
    r = client.get("/equations", params={"grade": 5, "level": 1, "count": 50})
    data = r.json()
    assert len(data) == 50
    assert {e["operation"] for e in data} <= GRADE_FIVE_EARLY


def test_list_equations_snaps_grade():
    r = client.get("/equations", params={"grade": 11, "count": 30})
    assert r.status_code == 200
    assert {e["operation"] for e in r.json()} <= GRADE_FIVE_EARLY


def test_list_equations_bad_params():
    assert client.get("/equations").status_code == 422
    assert client.get("/equations", params={"grade": 3, "count": 0}).status_code == 422
    assert client.get("/equations", params={"grade": 3, "count": 51}).status_code == 422
    assert client.get("/equations", params={"grade": 3, "level": 0}).status_code == 422
