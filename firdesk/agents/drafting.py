"""Report Drafting — turns a conversation into an editable FIR draft, then commits it.

``draft_report`` re-derives the draft from the current session on every call
and never mutates the session. ``commit_report`` is a pure construction step
whose only precondition is a non-empty title.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, Sequence

from firdesk.agents.conversation import ConversationSession
from firdesk.config import Settings, get_settings
from firdesk.core.llm_gateway import AIGateway, get_gateway
from firdesk.core.models import ChatMessage, Evidence, Report, ReportDraft, ReportStatus

logger = logging.getLogger(__name__)


def serialize_conversation(messages: Sequence[ChatMessage], evidence: Sequence[Evidence] = ()) -> str:
    """Render messages as ``SPEAKER: text`` lines plus a system note listing evidence."""
    text = "\n".join(f"{m.speaker.value.upper()}: {m.text}" for m in messages)
    if evidence:
        details = "; ".join(f"{e.ai_label}: {e.ai_description}" for e in evidence)
        text += (
            f"\n\n[SYSTEM: The user has uploaded {len(evidence)} pieces of evidence. "
            f"Details: {details}]"
        )
    return text


def draft_report(session: ConversationSession, gateway: AIGateway | None = None) -> ReportDraft:
    """Ask the gateway for a draft built from the session's current messages and evidence."""
    gateway = gateway or get_gateway()
    conversation_text = serialize_conversation(session.messages, session.evidence)
    logger.info(
        "Drafting report from %d messages and %d evidence items",
        len(session.messages),
        len(session.evidence),
    )
    draft = gateway.draft_report(conversation_text)
    logger.info("Draft ready: title=%r category=%r", draft.title, draft.category)
    return draft


def new_report_id(existing_ids: Iterable[str] = (), now: datetime | None = None) -> str:
    """Generate a ``FIR-<year>-<hex>`` reference not present in ``existing_ids``."""
    taken = set(existing_ids)
    year = (now or datetime.now(timezone.utc)).year
    while True:
        candidate = f"FIR-{year}-{uuid.uuid4().hex[:6].upper()}"
        if candidate not in taken:
            return candidate


def commit_report(
    draft: ReportDraft,
    evidence: Sequence[Evidence] = (),
    existing_ids: Iterable[str] = (),
    complainant_name: str | None = None,
    settings: Settings | None = None,
) -> Report | None:
    """Build a submitted Report from an approved draft.

    Returns None, producing no report, when the draft has no title.
    """
    if not draft.title or not draft.title.strip():
        logger.warning("Commit refused: draft has no title")
        return None

    settings = settings or get_settings()
    now = datetime.now(timezone.utc)
    report = Report(
        id=new_report_id(existing_ids, now),
        title=draft.title,
        description=draft.description or "",
        location=draft.location or settings.unknown_location,
        date_of_incident=draft.date_of_incident or now.isoformat(),
        category=draft.category,
        suggested_sections=list(draft.suggested_sections) if draft.suggested_sections is not None else None,
        status=ReportStatus.SUBMITTED,
        evidence=tuple(evidence),
        complainant_name=complainant_name or settings.complainant_placeholder,
        created_at=now.isoformat(),
    )
    logger.info("Report %s committed with %d evidence items", report.id, len(report.evidence))
    return report
