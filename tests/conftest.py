from datetime import datetime

import pytest

import config
import db
from models import JournalEntry


def to_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def make_entry():
    counter = iter(range(1, 10_000))

    def _make(content="", when: datetime | None = None, **kwargs):
        if when is not None:
            kwargs.setdefault("id", to_ms(when))
        kwargs.setdefault("id", next(counter))
        return JournalEntry(content=content, **kwargs)
    return _make


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_PATH", tmp_path / "journal.db")
    db.init_db()
    return db


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr(config, "SETTINGS_PATH", path)
    return path
