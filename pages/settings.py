# Settings tab: demo-data toggle, export/import, data reset.
import json
import logging
import streamlit as st
from datetime import datetime

import config
import db

logger = logging.getLogger(__name__)


def render():
    st.markdown("### Settings")
    st.caption("App and data options.")

    st.markdown("### Reflections")
    st.caption("Sample entries seeded for demonstrations carry fixed timestamps. When enabled, "
               "reflections use every entry whenever such sample data is present.")
    current = config.get_use_all_entries_if_demo_data_present()
    use_all = st.toggle("Reflect over all entries when demo data is present", value=current, key="demo_toggle")
    if use_all != current:
        config.set_use_all_entries_if_demo_data_present(use_all)
        st.rerun()

    st.markdown("### Export your data")
    st.caption("Download all entries as JSON.")
    entries = db.get_all_entries()
    if st.button("Export as JSON", key="export_btn", disabled=not entries):
        st.download_button(
            "Download JSON",
            data=db.export_entries(entries),
            file_name=f"journal-export-{datetime.now().strftime('%Y-%m-%d')}.json",
            mime="application/json",
            key="download_export",
        )

    st.markdown("### Import data")
    st.caption("Import from a previously exported JSON. Entries already in your journal are skipped.")
    uploaded = st.file_uploader("Choose a JSON file", type=["json"], key="import_file")
    if uploaded and st.button("Import from JSON", key="import_btn"):
        try:
            data = json.loads(uploaded.read().decode("utf-8"))
            imported = db.import_entries(data)
            st.session_state.entries_changed = st.session_state.get("entries_changed", 0) + 1
            st.success(f"Imported {imported} entries.")
        except Exception as e:
            logger.warning("Import failed: %s", e)
            st.error(str(e))

    st.markdown("### Delete all data")
    st.caption("Permanently delete all entries. Export before deletion. This cannot be undone.")
    if "delete_confirm" not in st.session_state:
        st.session_state.delete_confirm = False
    if st.button("Delete all data", key="delete_btn", disabled=not entries):
        st.session_state.delete_confirm = True
    if st.session_state.delete_confirm:
        st.warning("Export your data and then permanently delete all entries?")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Yes, export and delete", key="delete_confirm_btn"):
                data = db.export_entries()
                db.clear_all_entries()
                config.clear_settings()
                st.session_state.delete_confirm = False
                st.session_state.entries_changed = st.session_state.get("entries_changed", 0) + 1
                st.success("All data deleted. Download your export below if you haven't.")
                st.download_button("Download backup", data=data,
                                   file_name=f"journal-backup-{datetime.now().strftime('%Y-%m-%d')}.json",
                                   mime="application/json", key="backup_dl")
        with col2:
            if st.button("Cancel", key="delete_cancel"):
                st.session_state.delete_confirm = False
                st.rerun()
