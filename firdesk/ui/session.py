"""Streamlit session state management for the FIR Desk app."""

from __future__ import annotations

from typing import Any

import streamlit as st

from firdesk.agents.conversation import ConversationSession
from firdesk.core.llm_gateway import get_gateway
from firdesk.infrastructure.report_store import ReportStore


def init_session_state() -> None:
    """Initialize all session state variables with defaults."""
    defaults: dict[str, Any] = {
        # Intake
        "routing_text": "",
        "report_draft": None,
        "evidence_blobs": {},  # evidence id → (bytes, mime type)
        "last_submitted_id": None,
        # Widget key counters; bumping one resets the widget
        "routing_voice_key": 0,
        "chat_voice_key": 0,
        "compose_key": 0,
        "upload_key": 0,
        # Police dashboard
        "selected_report_id": None,
    }

    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default

    # Objects are created lazily so each browser session gets its own
    if "conversation" not in st.session_state:
        st.session_state.conversation = ConversationSession(gateway=get_gateway())
    if "report_store" not in st.session_state:
        st.session_state.report_store = ReportStore()


def reset_intake_state() -> None:
    """Discard the current conversation and draft and start a fresh session."""
    st.session_state.conversation = ConversationSession(gateway=get_gateway())
    st.session_state.routing_text = ""
    st.session_state.report_draft = None
    st.session_state.evidence_blobs = {}
    st.session_state.compose_key += 1
    st.session_state.upload_key += 1


def get_conversation() -> ConversationSession:
    return st.session_state.conversation


def get_store() -> ReportStore:
    return st.session_state.report_store


def bump_key(name: str) -> None:
    """Increment a widget key counter so the widget renders empty on the next run."""
    st.session_state[name] = st.session_state.get(name, 0) + 1
