import os
import tempfile

# Point the app at a throwaway SQLite file before db.py is imported anywhere
_DB_DIR = tempfile.mkdtemp(prefix="mathdrop-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"

import pytest  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _schema():
    from db import init_db

    init_db()
    yield


class ScriptedRandom:
    """Random source that always picks ``op`` and hands out ``ints`` in order."""

    def __init__(self, op, ints):
        self.op = op
        self.ints = list(ints)
        self.ranges = []

    def choice(self, seq):
        assert self.op in seq, f"{self.op} not eligible in {seq}"
        return self.op

    def randint(self, a, b):
        self.ranges.append((a, b))
        v = self.ints.pop(0)
        assert a <= v <= b, f"{v} outside [{a}, {b}]"
        return v


@pytest.fixture
def scripted():
    return ScriptedRandom
