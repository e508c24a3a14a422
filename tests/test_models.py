from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from models import EMOJI_TABLE, JournalEntry, assign_emoji, to_epoch_ms


def _ms(dt):
    return int(dt.timestamp() * 1000)


def test_assign_emoji_wraps_table():
    assert assign_emoji(0) == EMOJI_TABLE[0]
    assert assign_emoji(len(EMOJI_TABLE) + 2) == EMOJI_TABLE[2]


def test_emoji_defaults_from_id_and_keeps_explicit():
    assert JournalEntry(id=13).emoji == EMOJI_TABLE[3]
    assert JournalEntry(id=13, emoji="🔥").emoji == "🔥"


def test_effective_prefers_timestamp_then_date_then_id():
    stamped = datetime(2026, 10, 1, 9, 0)
    dated = datetime(2026, 9, 1, 9, 0)
    assert JournalEntry(id=5, timestamp=_ms(stamped), date=dated.isoformat()).effective_ms == _ms(stamped)
    assert JournalEntry(id=5, date=dated.isoformat()).effective_ms == _ms(dated)
    assert JournalEntry(id=5).effective_ms == 5


def test_malformed_date_falls_back_to_id():
    assert JournalEntry(id=42, date="someday soon").effective_ms == 42
    assert JournalEntry(id=42, date="").effective_ms == 42


def test_to_epoch_ms_inputs():
    assert to_epoch_ms(None) is None
    assert to_epoch_ms(True) is None
    assert to_epoch_ms(1700000000000) == 1700000000000
    assert to_epoch_ms("1700000000000") == 1700000000000
    assert to_epoch_ms(datetime(2026, 1, 2, 3, 4)) == _ms(datetime(2026, 1, 2, 3, 4))
    assert to_epoch_ms("not a date") is None


def test_none_content_and_title_become_empty():
    e = JournalEntry(id=1, title=None, content=None, tags=None)
    assert (e.title, e.content, e.tags) == ("", "", ())


def test_entries_are_frozen():
    e = JournalEntry(id=1, content="hello")
    with pytest.raises(FrozenInstanceError):
        e.content = "changed"


def test_from_dict_and_to_dict():
    raw = {"id": "7", "title": "Day", "content": None, "tags": "work, , gym", "emoji": "", "date": None}
    e = JournalEntry.from_dict(raw)
    assert e.id == 7
    assert e.tags == ("work", "gym")
    assert e.content == ""
    assert e.to_dict() == {
        "id": 7, "title": "Day", "content": "", "tags": ["work", "gym"],
        "emoji": EMOJI_TABLE[7], "date": None, "timestamp": None,
    }


def test_from_dict_accepts_datetime_date():
    when = datetime(2026, 10, 18, 21, 15)
    e = JournalEntry.from_dict({"id": 1, "date": when})
    assert e.date == "2026-10-18T21:15:00"
    assert e.effective_datetime == when


def test_compact_digit_dates_are_not_epochs():
    assert to_epoch_ms("20240101") == _ms(datetime(2024, 1, 1))
    assert JournalEntry(id=1, date="20240101").effective_datetime == datetime(2024, 1, 1)
    assert to_epoch_ms("17000000000") == 17000000000


def test_out_of_range_time_is_rejected():
    with pytest.raises(ValueError):
        JournalEntry(id=1, timestamp=10 ** 17)
    with pytest.raises(ValueError):
        JournalEntry.from_dict({"id": 10 ** 20, "content": "x"})
    assert to_epoch_ms(float("inf")) is None
