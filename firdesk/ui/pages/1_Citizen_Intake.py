"""Page 1: Citizen Intake — language, agent choice, chat, evidence, draft and submit."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from firdesk.agents.conversation import SessionState, append_transcript
from firdesk.agents.drafting import commit_report, draft_report
from firdesk.agents.intake_router import IntakeRouter
from firdesk.core.llm_gateway import get_gateway
from firdesk.core.models import ReportDraft
from firdesk.core.registry import get_registry
from firdesk.ui.components.chat_view import render_agent_card, render_evidence_strip, render_messages
from firdesk.ui.session import (
    bump_key,
    get_conversation,
    get_store,
    init_session_state,
    reset_intake_state,
)

logger = logging.getLogger(__name__)

init_session_state()
registry = get_registry()
conversation = get_conversation()

st.title("💬 Citizen FIR Intake")

if st.session_state.get("last_submitted_id"):
    st.success(f"✅ FIR Submitted Successfully! Ref ID: {st.session_state.last_submitted_id}")


def _read_capture(captured) -> bytes | None:
    """Read bytes from an uploaded/recorded file, reporting failures as a blocking notice."""
    try:
        return captured.getvalue()
    except OSError as e:
        logger.warning("Could not read captured input: %s", e)
        st.error("Could not access the recording or file. Please check permissions and try again.")
        return None


# ── 1. Language selection ──
if conversation.state is SessionState.NO_LANGUAGE:
    st.subheader("🌐 Select Language")
    st.caption("Choose your preferred language for the AI Assistant.")
    cols = st.columns(len(registry.languages))
    for col, lang in zip(cols, registry.languages):
        with col:
            if st.button(f"{lang.native_label}  ·  {lang.display_name}", key=f"lang_{lang.code}", width="stretch"):
                conversation.select_language(lang)
                st.session_state.last_submitted_id = None
                st.rerun()
    st.stop()

# ── 2. Agent selection / smart routing ──
if conversation.state is SessionState.LANGUAGE_SELECTED:
    st.subheader("🧑‍✈️ Choose Your Assistant")
    st.caption("Select the specialized agent best suited for your incident.")

    cols = st.columns(3)
    for i, agent in enumerate(registry.agents):
        with cols[i % 3]:
            with st.container(border=True):
                render_agent_card(agent)
                if st.button(f"Talk to {agent.name}", key=f"agent_{agent.id}", width="stretch"):
                    with st.spinner(f"Connecting to {agent.name}..."):
                        conversation.select_agent(agent)
                    st.rerun()

    st.divider()
    st.subheader("🧭 Not sure? Describe your incident")

    routing_audio = st.audio_input("Speak instead of typing", key=f"routing_voice_{st.session_state.routing_voice_key}")
    if routing_audio is not None:
        audio_bytes = _read_capture(routing_audio)
        if audio_bytes:
            with st.spinner("Transcribing..."):
                transcript = get_gateway().transcribe(audio_bytes, routing_audio.type or "audio/wav")
            st.session_state.routing_text = append_transcript(st.session_state.routing_text, transcript)
        bump_key("routing_voice_key")
        st.rerun()

    routing_text = st.text_area("What happened?", key="routing_text", height=120)
    if st.button("Find the right officer", type="primary"):
        agent = IntakeRouter(registry).route_request(routing_text)
        if agent is None:
            st.warning("Please describe the incident first.")
        else:
            with st.spinner(f"Routing you to {agent.name}..."):
                conversation.select_agent(agent, initial_text=routing_text)
            st.rerun()
    st.stop()

# ── 3. Active conversation ──
agent = conversation.agent
st.caption(f"Talking to **{agent.name}** ({agent.department_role}) in {conversation.language.display_name}")

col_chat, col_draft = st.columns([3, 2])

with col_chat:
    render_messages(conversation.messages, agent)
    render_evidence_strip(conversation.evidence, st.session_state.evidence_blobs)

    compose_key = f"compose_{st.session_state.compose_key}"

    # Voice input is appended to the compose box, never auto-sent
    chat_audio = st.audio_input("🎤 Voice input", key=f"chat_voice_{st.session_state.chat_voice_key}")
    if chat_audio is not None:
        audio_bytes = _read_capture(chat_audio)
        if audio_bytes:
            with st.spinner("Transcribing..."):
                conversation.transcribe_voice(
                    audio_bytes,
                    chat_audio.type or "audio/wav",
                    current_input=st.session_state.get(compose_key, conversation.pending_input),
                )
        bump_key("chat_voice_key")
        bump_key("compose_key")
        st.rerun()

    # Unsent text lives in st.session_state[compose_key]
    message = st.text_area(
        "Your message",
        value=conversation.pending_input,
        key=compose_key,
        height=100,
    )
    if st.button("Send", type="primary", disabled=conversation.is_busy):
        with st.spinner(f"{agent.name} is typing..."):
            reply = conversation.send_message(message)
        if reply is None:
            st.warning("Please type a message before sending.")
        else:
            conversation.pending_input = ""
            bump_key("compose_key")
            st.rerun()

    with st.expander("📎 Attach evidence"):
        uploaded = st.file_uploader(
            "Photo, audio or document",
            type=["png", "jpg", "jpeg", "webp", "mp3", "wav", "webm", "m4a", "pdf", "txt"],
            key=f"evidence_{st.session_state.upload_key}",
        )
        if uploaded is not None and st.button("Analyze & attach"):
            data = _read_capture(uploaded)
            if data:
                mime_type = uploaded.type or "application/octet-stream"
                with st.spinner("Analyzing evidence..."):
                    evidence = conversation.attach_evidence(data, mime_type, uploaded.name)
                if evidence is not None:
                    st.session_state.evidence_blobs[evidence.id] = (data, mime_type)
            bump_key("upload_key")
            st.rerun()

with col_draft:
    st.subheader("📝 FIR Draft")
    if st.button("✨ Generate Draft from Conversation", width="stretch"):
        with st.spinner("Drafting your FIR..."):
            st.session_state.report_draft = draft_report(conversation)
        st.rerun()

    draft: ReportDraft | None = st.session_state.report_draft
    if draft is None:
        st.info("Chat with the officer, then generate a draft to review it here.")
    else:
        with st.form("draft_edit"):
            title = st.text_input("Title", value=draft.title or "", placeholder="Short title of the incident")
            category = st.text_input("Category", value=draft.category or "", placeholder="e.g. Theft")
            location = st.text_input("Location", value=draft.location or "", placeholder="Where did it happen?")
            date_of_incident = st.text_input(
                "Date of Incident", value=draft.date_of_incident or "", placeholder="YYYY-MM-DD HH:MM"
            )
            description = st.text_area(
                "Description", value=draft.description or "", height=200, placeholder="What happened?"
            )
            sections = st.text_input(
                "Suggested Sections (comma separated)",
                value=", ".join(draft.suggested_sections or []),
            )
            submitted = st.form_submit_button("Submit Official FIR", type="primary", width="stretch")

        if submitted:
            edited = ReportDraft(
                title=title.strip() or None,
                description=description.strip() or None,
                location=location.strip() or None,
                date_of_incident=date_of_incident.strip() or None,
                category=category.strip() or None,
                suggested_sections=[s.strip() for s in sections.split(",") if s.strip()] or None,
            )
            store = get_store()
            report = commit_report(edited, conversation.evidence, existing_ids=store.ids())
            if report is None:
                st.session_state.report_draft = edited
                st.error("A title is required before the FIR can be submitted.")
            else:
                store.add(report)
                reset_intake_state()
                st.session_state.last_submitted_id = report.id
                st.rerun()

st.divider()
if st.button("↩️ Start over"):
    reset_intake_state()
    st.rerun()
