# Journal tab: prompt of the moment, paginated entry list and entry editor.
import math
import streamlit as st
from datetime import datetime

import analysis
import config
import db
from models import EMOJI_TABLE

SENTIMENT_BADGE = {"positive": "☺️ positive", "neutral": "😐 neutral", "negative": "☹️ negative"}
NEW_FORM_KEYS = ("title_new", "content_new", "tags_new", "emoji_new")


def _mark_changed():
    st.session_state.entries_changed = st.session_state.get("entries_changed", 0) + 1


# Widget values can't be reset once drawn, so a saved draft is cleared on the next run.
def _queue_new_form_reset(state):
    state["reset_new_entry"] = 1


def _apply_new_form_reset(state):
    if state.pop("reset_new_entry", 0) > 0:
        for k in NEW_FORM_KEYS:
            state.pop(k, None)


def _render_prompt(entries):
    prompts = analysis.generate_prompts(entries)
    idx = st.session_state.get("prompt_index", 0) % len(prompts)
    st.markdown("**Today's prompt**")
    st.info(prompts[idx])
    col1, _ = st.columns([1, 3])
    with col1:
        if st.button("Get another prompt"):
            st.session_state.prompt_index = idx + 1
            st.rerun()


def _parse_tags(raw: str) -> list:
    return [t.strip().lstrip("#") for t in (raw or "").split(",") if t.strip().lstrip("#")]


def _render_editor(entry):
    key = str(entry.id) if entry else "new"
    _apply_new_form_reset(st.session_state)
    st.markdown("**Edit entry**" if entry else "**New entry**")
    if entry:
        st.caption(entry.effective_datetime.strftime("%A, %B %d, %Y %H:%M"))
    title = st.text_input("Title", value=entry.title if entry else "", placeholder="Title...", key=f"title_{key}")
    content = st.text_area(
        "Journal content",
        value=entry.content if entry else "",
        placeholder="Write your story...",
        height=160,
        key=f"content_{key}",
        label_visibility="collapsed",
    )
    tags = st.text_input(
        "Tags (comma separated)",
        value=", ".join(entry.tags) if entry else "",
        key=f"tags_{key}",
    )
    emoji_options = [""] + EMOJI_TABLE
    current = entry.emoji if entry and entry.emoji in EMOJI_TABLE else ""
    emoji = st.selectbox(
        "Emoji",
        emoji_options,
        index=emoji_options.index(current),
        format_func=lambda e: e or "Automatic",
        key=f"emoji_{key}",
    )

    btn_col1, btn_col2 = st.columns(2)
    with btn_col1:
        if st.button("Update entry" if entry else "Save entry", type="primary", key=f"save_{key}"):
            if not (content or "").strip() and not (title or "").strip():
                st.warning("Write something before saving.")
                return
            try:
                if entry:
                    db.update_entry(entry.id, {"title": title, "content": content, "tags": _parse_tags(tags),
                                               "emoji": emoji or None})
                else:
                    db.create_entry(title, content, tags=_parse_tags(tags), emoji=emoji,
                                    date=datetime.now().isoformat(timespec="seconds"))
                    _queue_new_form_reset(st.session_state)
            except Exception as e:
                st.error(str(e))
                return
            _mark_changed()
            st.session_state.journal_selected = None
            st.rerun()
    with btn_col2:
        if entry and st.button("Delete entry", key=f"delete_{key}"):
            db.delete_entry(entry.id)
            _mark_changed()
            st.session_state.journal_selected = None
            st.rerun()


def _render_list(entries):
    newest_first = list(reversed(entries))
    per_page = config.ENTRIES_PER_PAGE
    total_pages = max(1, math.ceil(len(newest_first) / per_page))
    page = min(max(st.session_state.get("journal_page", 1), 1), total_pages)
    start = (page - 1) * per_page

    st.markdown("### Entries")
    if not newest_first:
        st.caption("No entries yet. Create your first journal!")
        return
    for e in newest_first[start:start + per_page]:
        with st.container(border=True):
            st.caption(f"{e.emoji} {e.effective_datetime.strftime('%b %d')} · "
                       f"{SENTIMENT_BADGE[analysis.classify_sentiment(e.content)]}")
            st.markdown(f"**{e.title or 'Untitled'}**")
            st.write(e.content)
            if e.tags:
                st.caption(" ".join(f"#{t}" for t in e.tags))
            if st.button("Open", key=f"open_{e.id}"):
                st.session_state.journal_selected = e.id
                st.rerun()

    prev_col, label_col, next_col = st.columns([1, 2, 1])
    with prev_col:
        if st.button("Previous", disabled=page == 1, key="journal_prev"):
            st.session_state.journal_page = page - 1
            st.rerun()
    with label_col:
        st.markdown(f"Page {page} of {total_pages}")
    with next_col:
        if st.button("Next", disabled=page == total_pages, key="journal_next"):
            st.session_state.journal_page = page + 1
            st.rerun()


def render():
    entries = db.get_all_entries()
    _render_prompt(entries)

    selected_id = st.session_state.get("journal_selected")
    selected = db.get_entry(selected_id) if selected_id is not None else None
    if selected and st.button("+ New entry", key="journal_new"):
        st.session_state.journal_selected = None
        st.rerun()
    _render_editor(selected)
    st.markdown("---")
    _render_list(entries)
