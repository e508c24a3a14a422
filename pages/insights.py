# Insights tab: prompts, sentiment and theme charts, weekly/monthly reflection.
import streamlit as st
import pandas as pd

import analysis
import config
import db

EMOJI = {"positive": "☺️", "neutral": "😐", "negative": "☹️"}


def _render_prompts(entries):
    st.markdown("### Prompts for you")
    st.caption("Based on your five most recent entries.")
    for p in analysis.generate_prompts(entries):
        st.markdown(f"- {p}")


def _render_sentiment(in_period):
    st.markdown("### Mood")
    dist = analysis.sentiment_distribution(in_period)
    if not sum(dist.values()):
        st.caption("No entries in this period yet.")
        return
    df = pd.DataFrame([{"sentiment": k, "count": v} for k, v in dist.items()]).set_index("sentiment")
    st.bar_chart(df, y="count", x_label="Sentiment", y_label="Entries")


def _render_themes(in_period):
    st.markdown("### Recurring themes")
    theme_data = analysis.theme_distribution(in_period)
    if theme_data:
        st.bar_chart(pd.DataFrame(theme_data).set_index("theme"), y="count", x_label="Theme", y_label="Keyword hits")
    else:
        st.caption("Write more entries to see themes here.")


def _render_reflection(entries, period):
    title = "Your week in reflection" if period == "week" else "Your month in reflection"
    st.markdown(f"### {title}")
    reflection = analysis.summarize_period(
        entries,
        period,
        use_all_entries_if_demo_data_present=config.get_use_all_entries_if_demo_data_present(),
    )
    st.write(reflection["summary"])
    sentiment = reflection["sentiment"]
    st.markdown(f"**Overall mood:** {EMOJI.get(sentiment, '')} {sentiment}")
    if reflection["themes"]:
        st.markdown("**Top themes:** " + ", ".join(reflection["themes"]))
    for insight in reflection["insights"]:
        st.info(insight)
    st.caption(f"{reflection.get('entryCount', 0)} entries considered.")


def render():
    entries = db.get_all_entries()
    period = st.radio("Period", ["week", "month"], horizontal=True, format_func=str.title, key="insights_period")
    in_period = analysis.filter_by_period(entries, period)

    _render_reflection(entries, period)
    st.markdown("---")
    _render_prompts(entries)
    _render_sentiment(in_period)
    _render_themes(in_period)
