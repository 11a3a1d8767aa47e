from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_health_db():
    r = client.get("/health/db")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_health_migrations_basic():
    r = client.get("/health/migrations")
    assert r.status_code == 200
    b = r.json()
    assert "code_heads" in b and isinstance(b["code_heads"], list)
    assert "db_version" in b


def test_health_migrations_reports_schema():
    b = client.get("/health/migrations").json()
    # the test schema comes from init_db, not alembic
    assert b["tables"] == {"high_scores": True}
    assert b["db_version"] is None
    assert b["managed_by"] == "init_db"
    assert b["ok"] is True
