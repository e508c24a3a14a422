# SQLite: schema, entries, export/import. Use _with_conn for DB access.
import json
import logging
import sqlite3

import config
from models import JournalEntry, now_ms

logger = logging.getLogger(__name__)

DB_PATH = config.DB_PATH
ENTRIES_COLS = "id, title, content, tags, emoji, date, timestamp"
INSERT_SQL = f"INSERT OR REPLACE INTO entries ({ENTRIES_COLS}) VALUES (?, ?, ?, ?, ?, ?, ?)"
# SQLite INTEGER is a signed 64-bit value.
SQLITE_INT_MIN, SQLITE_INT_MAX = -(2 ** 63), 2 ** 63 - 1


def get_conn():
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def _with_conn(f):
    conn = get_conn()
    try:
        return f(conn)
    finally:
        conn.close()


def init_db():
    def run(c):
        c.executescript("""
            CREATE TABLE IF NOT EXISTS entries (
                id INTEGER PRIMARY KEY,
                title TEXT NOT NULL DEFAULT '',
                content TEXT NOT NULL DEFAULT '',
                tags TEXT,
                emoji TEXT,
                date TEXT,
                timestamp INTEGER
            );
            CREATE INDEX IF NOT EXISTS idx_entries_timestamp ON entries(timestamp);
        """)
        c.commit()
    _with_conn(run)
    logger.debug("Entry store ready at %s", DB_PATH)


def _row_to_entry(row) -> JournalEntry:
    r = {k: row[k] for k in row.keys()}
    r["tags"] = json.loads(r["tags"]) if r.get("tags") else []
    return JournalEntry.from_dict(r)


def _row_values(entry: JournalEntry) -> tuple:
    return (entry.id, entry.title, entry.content, json.dumps(list(entry.tags)),
            entry.emoji, entry.date, entry.timestamp)


# Unique ms id; bumps past the newest stored id when two saves share a millisecond.
def _next_id(conn) -> int:
    latest = conn.execute("SELECT MAX(id) FROM entries").fetchone()[0]
    eid = now_ms()
    return eid if latest is None or eid > latest else latest + 1


def _save(conn, entry: JournalEntry) -> None:
    conn.execute(INSERT_SQL, _row_values(entry))
    conn.commit()


def create_entry(title: str, content: str, tags=None, emoji: str = "", date: str | None = None,
                 timestamp: int | None = None) -> JournalEntry:
    def run(c):
        eid = _next_id(c)
        entry = JournalEntry(
            id=eid,
            title=(title or "").strip(),
            content=(content or "").strip(),
            tags=tuple(tags or ()),
            emoji=emoji,
            date=date,
            timestamp=timestamp,
        )
        _save(c, entry)
        return entry
    entry = _with_conn(run)
    logger.info("Created entry %s", entry.id)
    return entry


def update_entry(eid: int, updates: dict) -> JournalEntry:
    current = get_entry(eid)
    if current is None:
        raise ValueError(f"Entry {eid} does not exist.")
    merged = {**current.to_dict(), **{k: v for k, v in updates.items() if v is not None}, "id": eid}
    for key in ("title", "content"):
        merged[key] = (merged.get(key) or "").strip()
    entry = JournalEntry.from_dict(merged)
    _with_conn(lambda c: _save(c, entry))
    logger.info("Updated entry %s", eid)
    return entry


def delete_entry(eid: int) -> None:
    def run(c):
        c.execute("DELETE FROM entries WHERE id = ?", (eid,))
        c.commit()
    _with_conn(run)
    logger.info("Deleted entry %s", eid)


def get_entry(eid: int) -> JournalEntry | None:
    def run(c):
        row = c.execute(f"SELECT {ENTRIES_COLS} FROM entries WHERE id = ?", (eid,)).fetchone()
        return None if not row else _row_to_entry(row)
    return _with_conn(run)


# Oldest first, the order entries were written in.
def get_all_entries() -> list:
    def run(c):
        rows = c.execute(f"SELECT {ENTRIES_COLS} FROM entries ORDER BY id ASC").fetchall()
        return [_row_to_entry(r) for r in rows]
    return _with_conn(run)


def clear_all_entries() -> None:
    def run(c):
        c.execute("DELETE FROM entries")
        c.commit()
    _with_conn(run)
    logger.info("Cleared all entries")


def export_entries(entries=None) -> str:
    entries = get_all_entries() if entries is None else entries
    return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)


def import_entries(data) -> int:
    """Insert entries from a previously exported list; returns how many were added.

    Items without content, with unusable ids or times, and ids already
    stored are skipped. The rest are written in one transaction, so a
    failed write leaves the store as it was.
    """
    if not isinstance(data, list):
        raise ValueError("Import file must contain a list of entries.")
    existing = {e.id for e in get_all_entries()}
    fresh_id = max(existing | {now_ms()}) + 1
    imported = []
    for item in data:
        if not isinstance(item, dict) or not (item.get("content") or "").strip():
            logger.warning("Skipping import item without content")
            continue
        eid = item.get("id")
        if eid is None:
            eid, fresh_id = fresh_id, fresh_id + 1
        try:
            entry = JournalEntry.from_dict({**item, "id": eid})
        except (TypeError, ValueError) as e:
            logger.warning("Skipping malformed import item: %s", e)
            continue
        if not SQLITE_INT_MIN <= entry.id <= SQLITE_INT_MAX:
            logger.warning("Skipping import item with out-of-range id %s", entry.id)
            continue
        if entry.id in existing:
            continue
        existing.add(entry.id)
        imported.append(entry)

    def run(c):
        # The connection context commits on success and rolls back on any error.
        with c:
            c.executemany(INSERT_SQL, (_row_values(e) for e in imported))
    _with_conn(run)
    logger.info("Imported %d entries", len(imported))
    return len(imported)
