# Reflect Journal entry point: config, logging, CSS, tab routing.
import logging
import streamlit as st
from pathlib import Path

import calendar_grid
import config
import db

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

APP_NAME = "Reflect Journal"
TAGLINE = "A private journal with on-device insights"
FOOTER_TEXT = "Your entries stay on this device. Insights are computed locally."
NAV_TABS = ["Journal", "Calendar", "Insights", "Settings"]

st.set_page_config(
    page_title=APP_NAME,
    page_icon="📔",
    layout="centered",
    initial_sidebar_state="collapsed",
)
_css_path = Path(__file__).resolve().parent / "styles.css"
if _css_path.exists():
    st.markdown(f"<style>\n{_css_path.read_text()}\n</style>", unsafe_allow_html=True)

if "db_inited" not in st.session_state:
    db.init_db()
    st.session_state.db_inited = True
    logger.info("Started %s with entry store %s", APP_NAME, db.DB_PATH)

if "page" not in st.session_state:
    st.session_state.page = "Journal"
if "entries_changed" not in st.session_state:
    st.session_state.entries_changed = 0


def _load_streak():
    st.session_state.streak = calendar_grid.writing_streak(db.get_all_entries())


def _refresh_streak_if_needed():
    if st.session_state.get("entries_changed", 0) > 0:
        _load_streak()
        st.session_state.entries_changed = 0


if "streak" not in st.session_state:
    _load_streak()
_refresh_streak_if_needed()

streak = st.session_state.get("streak", 0)


def _render_header():
    top_col1, top_col2 = st.columns([3, 1])
    with top_col1:
        st.markdown(f"# {APP_NAME}")
        st.markdown(f'<p class="tagline">{TAGLINE}</p>', unsafe_allow_html=True)
    with top_col2:
        st.markdown(f"**🔥 {streak}**")
        st.caption("day streak")
    with st.container(key="nav_tabs"):
        tab_cols = st.columns(len(NAV_TABS))
        for i, tab in enumerate(NAV_TABS):
            with tab_cols[i]:
                is_active = st.session_state.page == tab
                if st.button(tab, key=f"nav_{tab}", type="primary" if is_active else "secondary"):
                    st.session_state.page = tab
                    st.rerun()
    st.markdown('<hr class="nav-tabs-separator" />', unsafe_allow_html=True)


def main():
    _render_header()
    page = st.session_state.page
    if page == "Journal":
        from pages import journal
        journal.render()
    elif page == "Calendar":
        from pages import calendar_view
        calendar_view.render()
    elif page == "Insights":
        from pages import insights
        insights.render()
    else:
        from pages import settings
        settings.render()
    st.caption(FOOTER_TEXT)


if __name__ == "__main__":
    main()
