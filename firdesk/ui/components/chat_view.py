"""Chat view component — renders the intake conversation and attached evidence."""

from __future__ import annotations

from typing import Sequence

import streamlit as st

from firdesk.core.models import AgentPersona, ChatMessage, Evidence, EvidenceKind, Speaker


def render_agent_card(agent: AgentPersona) -> None:
    """Render a persona summary card."""
    st.markdown(f"### {agent.icon_ref} {agent.name}")
    st.caption(agent.department_role)
    st.write(agent.description)
    st.caption(f"**Focus:** {agent.focus}")


def render_messages(messages: Sequence[ChatMessage], agent: AgentPersona | None) -> None:
    """Render the message log in conversation order."""
    agent_avatar = agent.icon_ref if agent and agent.icon_ref else "assistant"
    for m in messages:
        if m.speaker is Speaker.CITIZEN:
            with st.chat_message("user"):
                st.write(m.text)
        else:
            with st.chat_message("assistant", avatar=agent_avatar):
                st.write(m.text)
                if m.language_code:
                    st.caption(m.language_code)


def render_evidence_strip(evidence: Sequence[Evidence], blobs: dict[str, tuple[bytes, str]]) -> None:
    """Render attached evidence with its AI label and description."""
    if not evidence:
        return

    st.subheader(f"📎 Evidence ({len(evidence)})")
    cols = st.columns(min(len(evidence), 3))
    for i, item in enumerate(evidence):
        with cols[i % len(cols)]:
            blob = blobs.get(item.id)
            if blob and item.kind is EvidenceKind.IMAGE:
                st.image(blob[0], caption=item.file_name)
            elif blob and item.kind is EvidenceKind.AUDIO:
                st.audio(blob[0], format=blob[1])
            else:
                st.write(f"📄 {item.file_name or item.content_ref}")
            st.markdown(f"**{item.ai_label}**")
            st.caption(item.ai_description)


def agent_table_markdown(agents: Sequence[AgentPersona]) -> str:
    """Markdown table of the agent catalog for the home page."""
    rows = ["| Agent | Department | Handles |", "|-------|------------|---------|"]
    rows.extend(f"| {a.icon_ref} {a.name} | {a.department_role} | {a.description} |" for a in agents)
    return "\n".join(rows)
