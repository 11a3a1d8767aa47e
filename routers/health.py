# routers/health.py
from fastapi import APIRouter, HTTPException
from sqlalchemy import inspect, text

from alembic.config import Config
from alembic.script import ScriptDirectory
from db import engine
from models import HighScore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")


def _alembic_heads() -> list[str]:
    script = ScriptDirectory.from_config(Config("alembic.ini"))
    return list(script.get_heads())


def _db_version() -> str | None:
    with engine.connect() as conn:
        try:
            return conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()
        except Exception:
            # never migrated (e.g. schema created by init_db)
            return None


def _schema_tables() -> dict[str, bool]:
    insp = inspect(engine)
    return {HighScore.__tablename__: insp.has_table(HighScore.__tablename__)}


@router.get("/migrations")
def health_migrations():
    try:
        heads = _alembic_heads()
    except Exception:
        heads = []

    try:
        db_ver = _db_version()
        tables = _schema_tables()
    except Exception as e:
        return {"ok": False, "error": f"db_connect_failed: {e}", "code_heads": heads, "db_version": None}

    schema_ready = all(tables.values())
    synced = (db_ver in heads) if heads else False
    # a schema built by init_db has no alembic_version row; the tables are what matter then
    managed_by = "alembic" if db_ver else "init_db"
    ok = schema_ready and (synced or db_ver is None)
    return {
        "ok": ok,
        "synced": synced,
        "db_version": db_ver,
        "code_heads": heads,
        "managed_by": managed_by,
        "tables": tables,
    }
