"""Page 2: Police Dashboard — review submitted FIRs and run AI investigation."""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from firdesk.agents.investigation import investigate
from firdesk.ui.components.case_viewer import render_investigation_tabs, status_label
from firdesk.ui.components.status_charts import render_status_chart
from firdesk.ui.session import get_store, init_session_state

init_session_state()
store = get_store()

st.title("🛡️ Police Dashboard")

# ── Summary metrics ──
stats = store.stats()
col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Total Cases", stats["total"])
with col2:
    st.metric("Pending Review", stats["submitted"])
with col3:
    st.metric("Active Investigations", stats["under_investigation"])
with col4:
    st.metric("Closed", stats["closed"])

render_status_chart(stats)

st.divider()

col_list, col_detail = st.columns([1, 2])

# ── Case list ──
with col_list:
    st.subheader("Recent FIRs")
    reports = store.all()
    if not reports:
        st.info("No cases filed yet.")
    for report in reports:
        selected = st.session_state.selected_report_id == report.id
        label = f"{'▶ ' if selected else ''}{report.title}"
        if st.button(label, key=f"case_{report.id}", width="stretch"):
            st.session_state.selected_report_id = report.id
            st.rerun()
        st.caption(f"{report.id} · {status_label(report)} · {report.date_of_incident}")

# ── Case detail ──
with col_detail:
    report_id = st.session_state.selected_report_id
    report = store.get(report_id) if report_id else None
    if report is None:
        st.info("Select a case from the list to review it.")
        st.stop()

    button_label = "🔁 Re-run AI Investigation" if report.investigation_report else "🧠 Run AI Investigation"
    if st.button(button_label, type="primary"):
        with st.spinner("Running analysis and deep investigation..."):
            enriched = investigate(report, store.all())
        store.replace(enriched)
        st.rerun()

    render_investigation_tabs(report)
