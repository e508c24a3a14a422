# Journal entry value type and effective-timestamp resolution.
import math
import time
from dataclasses import dataclass, field
from datetime import datetime

import pandas as pd

EMOJI_TABLE = ["📝", "😊", "🌟", "💭", "🌈", "☀️", "🌙", "🌿", "🎈", "💡"]
DEFAULT_EMOJI = "📝"
EPOCH_DIGITS = 11


def assign_emoji(entry_id: int) -> str:
    return EMOJI_TABLE[entry_id % len(EMOJI_TABLE)]


def now_ms() -> int:
    return int(time.time() * 1000)


def to_epoch_ms(value) -> int | None:
    """Convert a stored time value to a millisecond epoch.

    Accepts ints/floats (already ms), digit strings of epoch length,
    datetimes and date strings pandas can parse. Naive values are read as
    local time. Returns None when the value is missing or unparseable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        # Short digit runs are compact dates ("20240101"), not epochs.
        if s.isdigit() and len(s) >= EPOCH_DIGITS:
            return int(s)
        ts = pd.to_datetime(s, errors="coerce")
        if ts is None or pd.isna(ts):
            return None
        return int(ts.to_pydatetime().timestamp() * 1000)
    return None


@dataclass(frozen=True)
class JournalEntry:
    id: int
    title: str = ""
    content: str = ""
    tags: tuple = ()
    emoji: str = ""
    date: str | None = None
    timestamp: int | None = None
    effective_ms: int = field(init=False, compare=False)

    def __post_init__(self):
        # Frozen: normalize through object.__setattr__ once, here.
        object.__setattr__(self, "title", self.title or "")
        object.__setattr__(self, "content", self.content or "")
        object.__setattr__(self, "tags", tuple(t for t in (self.tags or ()) if t))
        object.__setattr__(self, "timestamp", to_epoch_ms(self.timestamp))
        if not self.emoji:
            object.__setattr__(self, "emoji", assign_emoji(self.id))
        effective = self.timestamp
        if effective is None:
            effective = to_epoch_ms(self.date)
        if effective is None:
            effective = self.id
        object.__setattr__(self, "effective_ms", effective)
        try:
            datetime.fromtimestamp(effective / 1000.0)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"Entry {self.id} has an out-of-range time: {effective}") from None

    @property
    def effective_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.effective_ms / 1000.0)

    @classmethod
    def from_dict(cls, raw: dict) -> "JournalEntry":
        date = raw.get("date")
        if isinstance(date, datetime):
            date = date.isoformat(timespec="seconds")
        tags = raw.get("tags") or ()
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",")]
        return cls(
            id=int(raw["id"]),
            title=raw.get("title") or "",
            content=raw.get("content") or "",
            tags=tuple(tags),
            emoji=raw.get("emoji") or "",
            date=date,
            timestamp=raw.get("timestamp"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "emoji": self.emoji,
            "date": self.date,
            "timestamp": self.timestamp,
        }
