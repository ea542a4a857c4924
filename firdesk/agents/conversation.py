"""Conversation Session — the citizen's intake chat with a specialist agent.

State machine: NO_LANGUAGE → LANGUAGE_SELECTED → ACTIVE.
Each citizen turn drives exactly one gateway chat call. The session holds an
explicit in-flight flag so at most one gateway call is pending at a time; a
second call made while one is pending is refused.
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from enum import Enum
from typing import Callable

from firdesk.core.errors import SessionStateError
from firdesk.core.llm_gateway import AIGateway, get_gateway
from firdesk.core.models import (
    AgentPersona,
    ChatMessage,
    Evidence,
    EvidenceKind,
    LanguageOption,
    Speaker,
)
from firdesk.core.registry import Registry, get_registry

logger = logging.getLogger(__name__)

ACK_LANGUAGE_CODE = "en-IN"


class SessionState(str, Enum):
    NO_LANGUAGE = "no_language"
    LANGUAGE_SELECTED = "language_selected"
    ACTIVE = "active"


def _now_millis() -> int:
    return int(time.time() * 1000)


def append_transcript(buffer: str, transcript: str) -> str:
    """Append transcribed speech to a pending input buffer, space-separated."""
    if not transcript:
        return buffer
    return f"{buffer} {transcript}" if buffer else transcript


class ConversationSession:
    """Ordered message log plus the selected language and agent for one citizen visit."""

    def __init__(
        self,
        gateway: AIGateway | None = None,
        registry: Registry | None = None,
        clock: Callable[[], int] = _now_millis,
    ) -> None:
        self._gateway = gateway or get_gateway()
        self._registry = registry or get_registry()
        self._clock = clock
        self._language: LanguageOption | None = None
        self._agent: AgentPersona | None = None
        self._messages: list[ChatMessage] = []
        self._evidence: list[Evidence] = []
        self._lock = threading.Lock()
        self._in_flight = False
        self.pending_input = ""

    # ── Read-only views ──

    @property
    def state(self) -> SessionState:
        if self._language is None:
            return SessionState.NO_LANGUAGE
        if self._agent is None:
            return SessionState.LANGUAGE_SELECTED
        return SessionState.ACTIVE

    @property
    def language(self) -> LanguageOption | None:
        return self._language

    @property
    def agent(self) -> AgentPersona | None:
        return self._agent

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def evidence(self) -> tuple[Evidence, ...]:
        return tuple(self._evidence)

    @property
    def is_busy(self) -> bool:
        return self._in_flight

    def history(self) -> list[dict[str, str]]:
        """Messages as ``{speaker, text}`` pairs, in conversation order."""
        return [{"speaker": m.speaker.value, "text": m.text} for m in self._messages]

    # ── Transitions ──

    def select_language(self, language: LanguageOption | str) -> LanguageOption:
        """Fix the conversation language. Only allowed once, before an agent is chosen."""
        if self.state is not SessionState.NO_LANGUAGE:
            raise SessionStateError("select_language", self.state.value)
        if isinstance(language, str):
            resolved = self._registry.language(language)
            if resolved is None:
                raise ValueError(f"Unknown language code: {language}")
            language = resolved
        self._language = language
        logger.info("Session language set to %s", language.code)
        return language

    def select_agent(self, agent: AgentPersona | str, initial_text: str | None = None) -> ChatMessage:
        """Open the conversation with ``agent`` and return the last agent message.

        Appends the localized greeting. When ``initial_text`` is supplied (the
        smart-routing path) it is sent as the first citizen turn before returning.
        """
        if self.state is not SessionState.LANGUAGE_SELECTED:
            raise SessionStateError("select_agent", self.state.value)
        if isinstance(agent, str):
            resolved = self._registry.agent(agent)
            if resolved is None:
                raise ValueError(f"Unknown agent id: {agent}")
            agent = resolved

        self._agent = agent
        greeting = self._append(
            Speaker.AGENT,
            self._registry.greeting_for(agent, self._language.code),
            language_code=self._language.code,
        )
        logger.info("Session opened with agent '%s' in %s", agent.id, self._language.code)

        if initial_text and initial_text.strip():
            reply = self.send_message(initial_text)
            if reply is not None:
                return reply
        return greeting

    # ── Operations (ACTIVE only) ──

    def send_message(self, text: str) -> ChatMessage | None:
        """Send a citizen turn and append the agent's reply.

        Returns the agent message, or None when the text is blank or another
        gateway call is still pending.
        """
        self._require_active("send_message")
        if not text or not text.strip():
            logger.info("Send refused: empty message")
            return None
        if not self._begin_call():
            logger.warning("Send refused: a gateway call is already in flight")
            return None

        try:
            prior = self.history()
            self._append(Speaker.CITIZEN, text)
            reply = self._gateway.chat(
                prior,
                text,
                self._language.display_name,
                self._agent.descriptor(),
            )
            return self._append(Speaker.AGENT, reply.text, language_code=reply.language_code)
        finally:
            self._end_call()

    def attach_evidence(
        self,
        data: bytes,
        mime_type: str,
        display_name: str,
        content_ref: str | None = None,
    ) -> Evidence | None:
        """Analyze an uploaded file, record it as evidence and note it in the chat.

        Returns None when another gateway call is still pending.
        """
        self._require_active("attach_evidence")
        if not self._begin_call():
            logger.warning("Evidence upload refused: a gateway call is already in flight")
            return None

        try:
            analysis = self._gateway.analyze_evidence(data, mime_type, display_name)
            evidence_id = uuid.uuid4().hex[:12]
            evidence = Evidence(
                id=evidence_id,
                kind=EvidenceKind.from_mime_type(mime_type),
                content_ref=content_ref or f"evidence://{evidence_id}/{display_name}",
                ai_description=analysis.description,
                ai_label=analysis.label,
                file_name=display_name,
            )
            self._evidence.append(evidence)
            self._append(Speaker.CITIZEN, f"[Uploaded Evidence: {display_name}]")
            self._append(
                Speaker.AGENT,
                (
                    f"I've analyzed the uploaded file. It appears to be {analysis.label.lower()}: "
                    f'"{analysis.description}". I\'ve added it to the report evidence.'
                ),
                language_code=ACK_LANGUAGE_CODE,
            )
            logger.info("Evidence %s attached (%s, %s)", evidence.id, evidence.kind.value, mime_type)
            return evidence
        finally:
            self._end_call()

    def transcribe_voice(self, data: bytes, mime_type: str, current_input: str | None = None) -> str:
        """Transcribe recorded speech into the pending input buffer. Does not send.

        ``current_input`` is the unsent text in the compose box; it replaces the
        buffer before the transcript is appended so typed text is kept.
        """
        if current_input is not None:
            self.pending_input = current_input
        transcript = self._gateway.transcribe(data, mime_type)
        self.pending_input = append_transcript(self.pending_input, transcript)
        return transcript

    # ── Internals ──

    def _require_active(self, operation: str) -> None:
        if self.state is not SessionState.ACTIVE:
            raise SessionStateError(operation, self.state.value)

    def _begin_call(self) -> bool:
        with self._lock:
            if self._in_flight:
                return False
            self._in_flight = True
            return True

    def _end_call(self) -> None:
        with self._lock:
            self._in_flight = False

    def _append(self, speaker: Speaker, text: str, language_code: str | None = None) -> ChatMessage:
        message = ChatMessage(
            id=uuid.uuid4().hex,
            speaker=speaker,
            text=text,
            language_code=language_code,
            timestamp_millis=self._clock(),
        )
        self._messages.append(message)
        return message
