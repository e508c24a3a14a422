# Calendar tab: week strip or month grid with each day's most used emoji.
import streamlit as st
from datetime import date

import calendar_grid
import db


def _render_nav(period, reference):
    col_prev, col_label, col_next = st.columns([1, 2, 1])
    shift = calendar_grid.shift_week if period == "week" else calendar_grid.shift_month
    with col_prev:
        if st.button("← Previous", key="cal_prev"):
            st.session_state.calendar_reference = shift(reference, -1)
            st.rerun()
    with col_label:
        if period == "week":
            first = calendar_grid.start_of_week(reference)
            st.markdown(f"**Week of {first.strftime('%B %d, %Y')}**")
        else:
            st.markdown(f"**{reference.strftime('%B %Y')}**")
    with col_next:
        if st.button("Next →", key="cal_next"):
            st.session_state.calendar_reference = shift(reference, 1)
            st.rerun()


def _render_cells(cells):
    header_cols = st.columns(7)
    for i, wd in enumerate(calendar_grid.WEEKDAYS):
        with header_cols[i]:
            st.markdown(f'<p class="insights-cal-weekday">{wd}</p>', unsafe_allow_html=True)
    for i in range(0, len(cells), 7):
        cols = st.columns(7)
        for j, cell in enumerate(cells[i:i + 7]):
            with cols[j]:
                day = cell["date"]
                label = f"{day.day} {cell['mostPopularEmoji'] or ''}".strip()
                if cell["isToday"]:
                    label = f"[{label}]"
                if st.button(label, key=f"cal_{day.isoformat()}", disabled=not cell["isCurrentMonth"]):
                    st.session_state.calendar_selected_day = day
                    st.rerun()


def _render_day(day, entries):
    st.markdown(f"### {day.strftime('%A, %B %d, %Y')}")
    day_entries = calendar_grid.entries_for_day(entries, day)
    if not day_entries:
        st.markdown("No entries for this day.")
    for e in day_entries:
        with st.container(border=True):
            st.markdown(f"{e.emoji} **{e.title or 'Untitled'}**")
            st.write(e.content)
            if st.button("Edit in journal", key=f"cal_edit_{e.id}"):
                st.session_state.journal_selected = e.id
                st.session_state.page = "Journal"
                st.rerun()
    if st.button("× Close", key="cal_close"):
        st.session_state.calendar_selected_day = None
        st.rerun()


def render():
    entries = db.get_all_entries()
    if "calendar_reference" not in st.session_state:
        st.session_state.calendar_reference = date.today()
    if "calendar_selected_day" not in st.session_state:
        st.session_state.calendar_selected_day = None

    period = st.radio("View", ["week", "month"], horizontal=True, format_func=str.title, key="calendar_period")
    reference = st.session_state.calendar_reference
    st.markdown("### Entries by day")
    st.caption("Each day shows the emoji you used most. Click a day to read its entries.")
    _render_nav(period, reference)

    if period == "week":
        cells = calendar_grid.week_days(reference, entries)
    else:
        cells = calendar_grid.month_grid(reference.year, reference.month, entries)
    _render_cells(cells)

    selected = st.session_state.calendar_selected_day
    if selected is not None:
        st.markdown("---")
        _render_day(selected, entries)
