"""FIR Desk — Streamlit Home page (role selection)."""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from firdesk.core.registry import get_registry
from firdesk.ui.components.chat_view import agent_table_markdown
from firdesk.ui.session import init_session_state


def run() -> None:
    init_session_state()
    registry = get_registry()
    languages = ", ".join(lang.display_name for lang in registry.languages)

    st.title("🚔 FIR Desk")
    st.subheader("AI-assisted First Information Reports for citizens and police")

    col_citizen, col_police = st.columns(2)

    with col_citizen:
        st.markdown(f"""
### 🙋 Citizen
Describe what happened in **{languages}**.
A specialist officer agent asks the right questions, your evidence is
analyzed, and a structured FIR draft is prepared for you to review and submit.
""")
        if st.button("File a Report", type="primary", width="stretch"):
            st.switch_page("ui/pages/1_Citizen_Intake.py")

    with col_police:
        st.markdown("""
### 👮 Police
Review submitted FIRs and run AI investigation: severity and legal
sections, suspect matching, CCTV timeline reconstruction, similar cases
and contradiction detection.
""")
        if st.button("Open Dashboard", width="stretch"):
            st.switch_page("ui/pages/2_Police_Dashboard.py")

    st.divider()
    st.subheader("🧠 Specialist Agents")
    st.markdown(agent_table_markdown(registry.agents))
    st.caption("Use the sidebar to navigate between pages.")


if __name__ == "__main__":
    run()
