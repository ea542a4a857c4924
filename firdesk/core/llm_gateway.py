"""LLM Gateway — the single boundary between the intake core and the generative-AI endpoint.

Uses LangChain's ChatOpenAI against an OpenAI-compatible API. Every operation
returns a schema-valid result: with no credential configured, or when the
upstream call or its payload fails, the matching placeholder from
``firdesk.core.fallbacks`` is returned instead.
"""

from __future__ import annotations

import base64
import json
import logging
import re
from typing import Any, Callable, Mapping, Sequence, TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from firdesk.config import Settings, get_settings
from firdesk.core import fallbacks
from firdesk.core.models import (
    AIAnalysis,
    ChatReply,
    EvidenceAnalysis,
    EvidenceKind,
    InvestigationReport,
    ReportDraft,
    Speaker,
)
from firdesk.core.prompts import (
    ANALYSIS_PROMPT,
    ANALYSIS_SYSTEM_PROMPT,
    AUDIO_EVIDENCE_PROMPT,
    CHAT_SYSTEM_PROMPT,
    DRAFT_PROMPT,
    EVIDENCE_FORMAT,
    INVESTIGATION_PROMPT,
    KNOWN_OFFENDERS,
    SUPPORTED_LANGUAGES_TEXT,
    TRANSCRIBE_PROMPT,
    VISUAL_EVIDENCE_PROMPT,
)
from firdesk.core.registry import Registry, get_registry

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
LLMFactory = Callable[[str], BaseChatModel]

# Gateway role → model config mapping
MODEL_ROUTING: dict[str, dict[str, Any]] = {
    "chat":          {"multimodal": False, "temperature": None},
    "drafting":      {"multimodal": False, "temperature": 0.1},
    "analysis":      {"multimodal": False, "temperature": 0.1},
    "investigation": {"multimodal": False, "temperature": 0.3},
    "evidence":      {"multimodal": True,  "temperature": 0.1},
    "transcription": {"multimodal": True,  "temperature": 0.0},
    "default":       {"multimodal": False, "temperature": None},
}


def get_llm(role: str = "default", settings: Settings | None = None, **overrides: Any) -> ChatOpenAI:
    """Create a ChatOpenAI instance routed to the appropriate model for the given gateway role.

    Args:
        role: Gateway role key (e.g., "chat", "evidence").
        settings: Settings to read endpoint details from; defaults to the cached settings.
        **overrides: Additional kwargs passed to ChatOpenAI.

    Returns:
        A configured ChatOpenAI instance.
    """
    settings = settings or get_settings()
    route = MODEL_ROUTING.get(role, MODEL_ROUTING["default"])
    temperature = route["temperature"]

    kwargs: dict[str, Any] = dict(
        model=settings.llm_multimodal_model if route["multimodal"] else settings.llm_model,
        base_url=settings.llm_base_url,
        api_key=settings.llm_api_key,
        temperature=settings.llm_temperature if temperature is None else temperature,
        max_tokens=settings.llm_max_tokens,
        # Each call fails over to its fallback at most once
        max_retries=0,
    )
    kwargs.update(overrides)
    return ChatOpenAI(**kwargs)


# ── Response parsing ──


def _content_text(raw_content: Any) -> str:
    """Flatten a LangChain message content (str or list of parts) into text."""
    if isinstance(raw_content, str):
        return raw_content.strip()
    if isinstance(raw_content, list):
        parts: list[str] = []
        for item in raw_content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict):
                text = item.get("text")
                if isinstance(text, str):
                    parts.append(text)
        return "\n".join(parts).strip()
    return str(raw_content).strip()


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _snake_keys(value: Any) -> Any:
    """Recursively convert camelCase dict keys to snake_case."""
    if isinstance(value, dict):
        return {
            _CAMEL_BOUNDARY.sub("_", k).lower() if isinstance(k, str) else k: _snake_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [_snake_keys(v) for v in value]
    return value


_CODE_FENCE = re.compile(r"```[\w-]*\s*\n?(.*?)```", re.DOTALL)


def _parse_json(content: str) -> Any:
    """Parse a JSON payload, taking the first markdown code fence if the reply has one."""
    if not content:
        raise ValueError("Empty response from model")
    fenced = _CODE_FENCE.search(content)
    if fenced:
        content = fenced.group(1).strip()
    return _snake_keys(json.loads(content))


def _audio_format(mime_type: str) -> str:
    subtype = mime_type.split("/", 1)[-1].split(";", 1)[0].strip().lower()
    if subtype.startswith("x-"):
        subtype = subtype[2:]
    return {"mpeg": "mp3", "mpeg3": "mp3", "wave": "wav"}.get(subtype, subtype)


def media_block(data: bytes, mime_type: str, file_name: str = "attachment") -> dict[str, Any]:
    """Build an OpenAI-style content block carrying the raw bytes inline."""
    encoded = base64.b64encode(data).decode("ascii")
    kind = EvidenceKind.from_mime_type(mime_type)
    if kind is EvidenceKind.IMAGE:
        return {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}}
    if kind is EvidenceKind.AUDIO:
        return {"type": "input_audio", "input_audio": {"data": encoded, "format": _audio_format(mime_type)}}
    return {
        "type": "file",
        "file": {"filename": file_name, "file_data": f"data:{mime_type};base64,{encoded}"},
    }


def history_to_messages(history: Sequence[Mapping[str, str]]) -> list[BaseMessage]:
    """Map ``{speaker, text}`` turns onto LangChain human/AI messages."""
    messages: list[BaseMessage] = []
    for turn in history:
        if turn.get("speaker") == Speaker.CITIZEN.value:
            messages.append(HumanMessage(content=turn.get("text", "")))
        else:
            messages.append(AIMessage(content=turn.get("text", "")))
    return messages


# ── Gateway ──


class AIGateway:
    """Generative-AI operations used by the intake and investigation flows.

    Args:
        settings: Endpoint configuration. Without a usable API key the gateway
            runs in offline mode.
        llm_factory: Callable mapping a role to a chat model. Overrides the
            default ``get_llm`` factory (and offline mode) when given.
        registry: Catalog used to check the language code a chat reply reports.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        llm_factory: LLMFactory | None = None,
        registry: Registry | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._registry = registry or get_registry(self._settings)
        if llm_factory is None and not self._settings.offline_mode:
            llm_factory = lambda role: get_llm(role, settings=self._settings)  # noqa: E731
        self._llm_factory = llm_factory

    @property
    def offline(self) -> bool:
        return self._llm_factory is None

    def _invoke(self, role: str, messages: list[BaseMessage]) -> str:
        llm = self._llm_factory(role)
        response = llm.invoke(messages)
        return _content_text(response.content)

    def _invoke_json(self, role: str, messages: list[BaseMessage], model_cls: type[ModelT]) -> ModelT:
        return model_cls.model_validate(_parse_json(self._invoke(role, messages)))

    # ── 1. chat ──

    def chat(
        self,
        history: Sequence[Mapping[str, str]],
        new_message: str,
        language_name: str,
        persona: Mapping[str, str],
    ) -> ChatReply:
        """One conversational turn; the reply reports the language it was written in."""
        if self.offline:
            logger.info("Chat running in offline mode")
            return fallbacks.chat_reply(persona.get("name", "Assistant"), new_message)

        system = CHAT_SYSTEM_PROMPT.format(
            name=persona.get("name", "Assistant"),
            role=persona.get("role", "Police Intake Officer"),
            focus=persona.get("focus", "General Incident Reporting"),
            tone=persona.get("tone", "Professional, calm, and efficient"),
            languages=SUPPORTED_LANGUAGES_TEXT,
            language_name=language_name,
        )
        messages: list[BaseMessage] = [SystemMessage(content=system)]
        messages.extend(history_to_messages(history))
        messages.append(HumanMessage(content=new_message))

        try:
            reply = self._invoke_json("chat", messages, ChatReply)
            if not self._registry.is_known_language_code(reply.language_code):
                raise ValueError(f"Unrecognised reply language code: {reply.language_code!r}")
            return reply
        except Exception as e:
            logger.warning("Chat call failed (%s), using offline placeholder", e)
            return fallbacks.chat_reply(persona.get("name", "Assistant"), new_message)

    # ── 2. draft ──

    def draft_report(self, conversation_text: str) -> ReportDraft:
        """Draft report fields from a serialized conversation. Fields the model omits stay None."""
        if self.offline:
            logger.info("Drafting running in offline mode")
            return fallbacks.report_draft()

        prompt = DRAFT_PROMPT.format(languages=SUPPORTED_LANGUAGES_TEXT, conversation=conversation_text)
        try:
            return self._invoke_json("drafting", [HumanMessage(content=prompt)], ReportDraft)
        except Exception as e:
            logger.warning("Drafting call failed (%s), using offline placeholder", e)
            return fallbacks.report_draft()

    # ── 3. analyze ──

    def analyze_report(self, fields: Mapping[str, Any]) -> AIAnalysis:
        """Classification pass: summary, severity, legal sections, next steps, entities."""
        title = str(fields.get("title", ""))
        if self.offline:
            logger.info("Report analysis running in offline mode")
            return fallbacks.analysis(title)

        prompt = ANALYSIS_PROMPT.format(
            title=title,
            description=fields.get("description", ""),
            location=fields.get("location", ""),
            date_of_incident=fields.get("date_of_incident", ""),
            category=fields.get("category") or "Unclassified",
            evidence_count=fields.get("evidence_count", 0),
        )
        try:
            return self._invoke_json(
                "analysis",
                [SystemMessage(content=ANALYSIS_SYSTEM_PROMPT), HumanMessage(content=prompt)],
                AIAnalysis,
            )
        except Exception as e:
            logger.warning("Report analysis failed (%s), using offline placeholder", e)
            return fallbacks.analysis(title)

    # ── 4. deep investigation ──

    def investigate_deep(self, fields: Mapping[str, Any], other_reports_summary: str) -> InvestigationReport:
        """Suspects, timeline reconstruction, similar cases, contradictions and insights."""
        if self.offline:
            logger.info("Deep investigation running in offline mode")
            return fallbacks.investigation()

        known = "\n".join(f'   - "{name}" ({notes})' for name, notes in KNOWN_OFFENDERS)
        prompt = INVESTIGATION_PROMPT.format(
            id=fields.get("id", ""),
            title=fields.get("title", ""),
            description=fields.get("description", ""),
            location=fields.get("location", ""),
            date_of_incident=fields.get("date_of_incident", ""),
            category=fields.get("category") or "Unclassified",
            other_reports=other_reports_summary or "(no other reports on file)",
            known_offenders=known,
        )
        try:
            return self._invoke_json("investigation", [HumanMessage(content=prompt)], InvestigationReport)
        except Exception as e:
            logger.warning("Deep investigation failed (%s), using offline placeholder", e)
            return fallbacks.investigation()

    # ── 5. media ──

    def analyze_evidence(self, data: bytes, mime_type: str, file_name: str = "attachment") -> EvidenceAnalysis:
        """Label and describe an uploaded file."""
        if self.offline:
            logger.info("Evidence analysis running in offline mode")
            return fallbacks.evidence_analysis(mime_type)

        instruction = (
            AUDIO_EVIDENCE_PROMPT
            if EvidenceKind.from_mime_type(mime_type) is EvidenceKind.AUDIO
            else VISUAL_EVIDENCE_PROMPT
        )
        message = HumanMessage(content=[
            media_block(data, mime_type, file_name),
            {"type": "text", "text": instruction + EVIDENCE_FORMAT},
        ])
        try:
            return self._invoke_json("evidence", [message], EvidenceAnalysis)
        except Exception as e:
            logger.warning("Evidence analysis failed (%s), using offline placeholder", e)
            return fallbacks.evidence_analysis(mime_type)

    def transcribe(self, data: bytes, mime_type: str) -> str:
        """Transcribe recorded speech to (English) text."""
        if self.offline:
            logger.info("Transcription running in offline mode")
            return fallbacks.transcript()

        message = HumanMessage(content=[
            media_block(data, mime_type, "recording"),
            {"type": "text", "text": TRANSCRIBE_PROMPT.format(languages=SUPPORTED_LANGUAGES_TEXT)},
        ])
        try:
            text = self._invoke("transcription", [message])
            if not text:
                raise ValueError("Empty transcript")
            return text
        except Exception as e:
            logger.warning("Transcription failed (%s), using offline placeholder", e)
            return fallbacks.transcript()


_gateway: AIGateway | None = None


def get_gateway() -> AIGateway:
    """Return the singleton AIGateway built from the cached settings."""
    global _gateway
    if _gateway is None:
        _gateway = AIGateway()
    return _gateway
