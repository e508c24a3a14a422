import json
import sqlite3

import pytest

import calendar_grid


def test_create_and_get(store):
    e = store.create_entry("  First  ", "  happy day at the gym ", tags=["health"], emoji="🌟")
    got = store.get_entry(e.id)
    assert got == e
    assert got.title == "First"
    assert got.content == "happy day at the gym"
    assert got.tags == ("health",)
    assert got.emoji == "🌟"
    assert got.effective_ms == e.id


def test_get_missing_entry(store):
    assert store.get_entry(123) is None


def test_all_entries_oldest_first_with_unique_ids(store):
    ids = [store.create_entry("", f"entry {i}").id for i in range(3)]
    assert len(set(ids)) == 3
    assert [e.id for e in store.get_all_entries()] == sorted(ids)


def test_create_with_date_sets_effective_time(store):
    e = store.create_entry("Back-dated", "okay", date="2026-01-05T10:00:00")
    assert store.get_entry(e.id).effective_datetime.date().isoformat() == "2026-01-05"


def test_update_entry(store):
    e = store.create_entry("Title", "okay")
    updated = store.update_entry(e.id, {"content": "  sad  ", "tags": ["mood"], "title": None})
    assert updated.content == "sad"
    assert updated.title == "Title"
    assert store.get_entry(e.id).tags == ("mood",)


def test_update_missing_entry_raises(store):
    with pytest.raises(ValueError):
        store.update_entry(999, {"content": "x"})


def test_delete_and_clear(store):
    a = store.create_entry("a", "one")
    store.create_entry("b", "two")
    store.delete_entry(a.id)
    assert [e.title for e in store.get_all_entries()] == ["b"]
    store.clear_all_entries()
    assert store.get_all_entries() == []


def test_export_then_import_into_empty_store(store):
    store.create_entry("a", "work meeting", tags=["work"])
    store.create_entry("b", "family dinner")
    exported = store.export_entries()
    originals = store.get_all_entries()

    store.clear_all_entries()
    assert store.import_entries(json.loads(exported)) == 2
    assert store.get_all_entries() == originals


def test_import_skips_existing_and_empty(store):
    existing = store.create_entry("a", "kept")
    data = [
        {"id": existing.id, "content": "duplicate"},
        {"id": 1, "content": "   "},
        {"content": "no id given"},
        {"content": "another without id"},
        "not a dict",
        {"id": "bad", "content": "bad id"},
    ]
    assert store.import_entries(data) == 2
    contents = [e.content for e in store.get_all_entries()]
    assert "kept" in contents and "duplicate" not in contents
    assert {"no id given", "another without id"} <= set(contents)


def test_import_rejects_non_list(store):
    with pytest.raises(ValueError):
        store.import_entries({"content": "x"})


def test_import_skips_out_of_range_times_and_keeps_streak_working(store):
    data = [
        {"id": 5, "content": "happy", "timestamp": 10 ** 17},
        {"id": 6, "content": "far future date", "date": "99999999999999999"},
        {"id": 7, "content": "fine"},
    ]
    assert store.import_entries(data) == 1
    assert [e.id for e in store.get_all_entries()] == [7]
    assert calendar_grid.writing_streak(store.get_all_entries()) == 0


def test_import_skips_ids_too_large_for_sqlite(store):
    data = [
        {"id": 5, "content": "first"},
        {"id": 10 ** 20, "content": "second", "timestamp": 1700000000000},
    ]
    assert store.import_entries(data) == 1
    assert [e.content for e in store.get_all_entries()] == ["first"]


def test_import_failure_rolls_back_every_row(store, monkeypatch):
    row_values = store._row_values

    def failing_row_values(entry):
        if entry.content == "second":
            return (entry.id, object(), "", "[]", "", None, None)
        return row_values(entry)

    monkeypatch.setattr(store, "_row_values", failing_row_values)
    data = [{"id": 5, "content": "first"}, {"id": 6, "content": "second"}]
    with pytest.raises(sqlite3.Error):
        store.import_entries(data)
    assert store.get_all_entries() == []
