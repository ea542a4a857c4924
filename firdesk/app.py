"""FIR Desk — Streamlit multi-page app entry point.

Run with: streamlit run firdesk/app.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from firdesk.config import get_settings
from firdesk.ui.session import get_store, init_session_state

# ── Configure logging ──
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)

# ── Page config ──
st.set_page_config(
    page_title="FIR Desk",
    page_icon="🚔",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Initialize session state ──
init_session_state()

# ── Multi-page navigation (st.navigation API) ──
pages = [
    st.Page("ui/pages/0_Home.py", title="Home", icon="🏠", default=True),
    st.Page("ui/pages/1_Citizen_Intake.py", title="Citizen Intake", icon="💬"),
    st.Page("ui/pages/2_Police_Dashboard.py", title="Police Dashboard", icon="🛡️"),
]

pg = st.navigation(pages)

# ── Sidebar ──
with st.sidebar:
    st.header("📊 Status")
    if get_settings().offline_mode:
        st.warning("Demo mode: no API key configured, AI results are placeholders.")

    conversation = st.session_state.conversation
    if conversation.language:
        st.write(f"**Language:** {conversation.language.display_name}")
    if conversation.agent:
        st.write(f"**Agent:** {conversation.agent.name}")
        st.write(f"**Messages:** {len(conversation.messages)}")

    stats = get_store().stats()
    st.write(f"**Cases on file:** {stats['total']}")
    if st.session_state.get("last_submitted_id"):
        st.write(f"**Last submitted:** {st.session_state.last_submitted_id}")

# ── Run selected page ──
pg.run()
