"""Pydantic data models for the intake conversation, reports and AI results."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _normalize_enum(value: Any, enum_cls: type[Enum]) -> Any:
    """Match a loosely-cased enum value ("PatternMatch", "pattern match") to its member."""
    if not isinstance(value, str):
        return value
    key = re.sub(r"[\s_-]+", "", value).lower()
    for member in enum_cls:
        if re.sub(r"[\s_-]+", "", member.value).lower() == key:
            return member
    return value


class Speaker(str, Enum):
    CITIZEN = "citizen"
    AGENT = "agent"


class EvidenceKind(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
    DOCUMENT = "document"

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "EvidenceKind":
        """Classify by MIME prefix: image/* and audio/*, everything else is a document."""
        mime = (mime_type or "").lower()
        if mime.startswith("image/"):
            return cls.IMAGE
        if mime.startswith("audio/"):
            return cls.AUDIO
        return cls.DOCUMENT


class ReportStatus(str, Enum):
    SUBMITTED = "Submitted"
    UNDER_INVESTIGATION = "Under Investigation"
    CLOSED = "Closed"


class SuspectStatus(str, Enum):
    IDENTIFIED = "Identified"
    UNKNOWN = "Unknown"
    PATTERN_MATCH = "Pattern Match"


class TimelineSource(str, Enum):
    CCTV = "CCTV"
    WITNESS = "Witness"
    DIGITAL_FOOTPRINT = "Digital Footprint"


# ── Catalog entries ──


class LanguageOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    display_name: str
    native_label: str

    @property
    def prefix(self) -> str:
        return self.code.split("-")[0].lower()


class AgentPersona(BaseModel):
    """A specialist intake persona. ``id`` is the routing target key."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    department_role: str
    description: str
    focus: str
    tone: str
    icon_ref: str = ""

    def descriptor(self) -> dict[str, str]:
        """Persona fields passed to the chat call."""
        return {
            "name": self.name,
            "role": self.department_role,
            "focus": self.focus,
            "tone": self.tone,
        }


# ── Conversation ──


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    speaker: Speaker
    text: str
    language_code: str | None = None
    timestamp_millis: int


class Evidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    kind: EvidenceKind
    content_ref: str
    ai_description: str
    ai_label: str
    file_name: str = ""


# ── Gateway results ──


class ChatReply(BaseModel):
    text: str = Field(min_length=1)
    language_code: str = Field(min_length=2)


class EvidenceAnalysis(BaseModel):
    label: str
    description: str


class ReportDraft(BaseModel):
    """Editable report skeleton. Missing fields stay ``None`` so the editor can show placeholders."""

    title: str | None = None
    description: str | None = None
    location: str | None = None
    date_of_incident: str | None = None
    category: str | None = None
    suggested_sections: list[str] | None = None


class AIAnalysis(BaseModel):
    summary: str
    severity_score: float = Field(ge=1, le=10)
    suggested_sections: list[str]
    investigation_steps: list[str]
    extracted_entities: list[str]


class SimilarCase(BaseModel):
    report_id: str
    title: str
    similarity_score: float = Field(ge=0, le=100)
    reason: str


class Suspect(BaseModel):
    name: str
    confidence: float = Field(ge=0, le=100)
    description: str
    status: SuspectStatus

    @field_validator("status", mode="before")
    @classmethod
    def _loose_status(cls, value: Any) -> Any:
        return _normalize_enum(value, SuspectStatus)


class TimelineEvent(BaseModel):
    time: str
    location: str
    description: str
    source: TimelineSource

    @field_validator("source", mode="before")
    @classmethod
    def _loose_source(cls, value: Any) -> Any:
        return _normalize_enum(value, TimelineSource)


class InvestigationReport(BaseModel):
    similar_cases: list[SimilarCase] = Field(default_factory=list)
    suspects: list[Suspect] = Field(default_factory=list)
    timeline: list[TimelineEvent] = Field(default_factory=list)
    contradictions: list[str] = Field(default_factory=list)
    advanced_insights: list[str] = Field(default_factory=list)


# ── Submitted report ──


class Report(BaseModel):
    """A submitted FIR. Enrichment produces a replacement via ``model_copy``."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    location: str
    date_of_incident: str
    category: str | None = None
    suggested_sections: list[str] | None = None
    status: ReportStatus = ReportStatus.SUBMITTED
    evidence: tuple[Evidence, ...] = ()
    complainant_name: str
    created_at: str
    ai_analysis: AIAnalysis | None = None
    investigation_report: InvestigationReport | None = None

    def prompt_fields(self) -> dict[str, Any]:
        """Report fields shared by both investigation calls."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "date_of_incident": self.date_of_incident,
            "category": self.category or "Unclassified",
            "evidence_count": len(self.evidence),
        }
