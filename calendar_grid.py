# Calendar cells, per-day emoji and writing streak. Pure helpers for the calendar page.
from datetime import date, timedelta

import pandas as pd

from models import DEFAULT_EMOJI

GRID_CELLS = 42
WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def entry_day(entry) -> date:
    return entry.effective_datetime.date()


def entries_for_day(entries, day: date) -> list:
    return [e for e in entries if entry_day(e) == day]


def most_popular_emoji(entries) -> str | None:
    if not entries:
        return None
    counts = {}
    for e in entries:
        emoji = e.emoji or DEFAULT_EMOJI
        counts[emoji] = counts.get(emoji, 0) + 1
    best = None
    for emoji, n in counts.items():
        # Ties go to the emoji seen later.
        if best is None or n >= counts[best]:
            best = emoji
    return best


def start_of_week(day: date) -> date:
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _cell(day: date, entries, today: date, in_month: bool = True) -> dict:
    day_entries = entries_for_day(entries, day)
    return {
        "date": day,
        "isCurrentMonth": in_month,
        "isToday": day == today,
        "entries": day_entries,
        "mostPopularEmoji": most_popular_emoji(day_entries),
    }


def week_days(reference: date, entries, today: date | None = None) -> list:
    today = today or date.today()
    first = start_of_week(reference)
    return [_cell(first + timedelta(days=i), entries, today) for i in range(7)]


def month_grid(year: int, month: int, entries, today: date | None = None) -> list:
    today = today or date.today()
    first = start_of_week(date(year, month, 1))
    cells = []
    for i in range(GRID_CELLS):
        d = first + timedelta(days=i)
        cells.append(_cell(d, entries, today, in_month=d.month == month))
    return cells


def shift_week(reference: date, direction: int, today: date | None = None) -> date:
    today = today or date.today()
    moved = reference + timedelta(days=7 * direction)
    if start_of_week(moved) > start_of_week(today):
        return reference
    return moved


def shift_month(reference: date, direction: int, today: date | None = None) -> date:
    today = today or date.today()
    moved = (pd.Timestamp(reference) + pd.DateOffset(months=direction)).date()
    if (moved.year, moved.month) > (today.year, today.month):
        return reference
    return moved


def writing_streak(entries, today: date | None = None) -> int:
    """Count consecutive writing days ending today, or yesterday if today is blank."""
    days = {entry_day(e) for e in entries}
    if not days:
        return 0
    today = today or date.today()
    if today in days:
        end_day = today
    elif today - timedelta(days=1) in days:
        end_day = today - timedelta(days=1)
    else:
        return 0
    count = 0
    d = end_day
    while d in days:
        count += 1
        d -= timedelta(days=1)
    return count
