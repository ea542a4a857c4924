"""Offline placeholder results returned by the AI gateway.

Every value has the same schema as a live result and is marked as demo
output, so callers never branch on whether the endpoint was reachable.
"""

from __future__ import annotations

from datetime import date

from firdesk.core.models import (
    AIAnalysis,
    ChatReply,
    EvidenceAnalysis,
    InvestigationReport,
    ReportDraft,
    SimilarCase,
    Suspect,
    SuspectStatus,
    TimelineEvent,
    TimelineSource,
)

DEMO_LANGUAGE_CODE = "en-IN"
DEMO_TRANSCRIPT = "[DEMO] This is a simulated transcription of your voice input."


def chat_reply(agent_name: str, message: str) -> ChatReply:
    return ChatReply(
        text=(
            f'[DEMO MODE] I am {agent_name}. I received your message: "{message}". '
            "Since I am running without an API key, I cannot generate a real intelligent "
            "response, but I am ready to log your details."
        ),
        language_code=DEMO_LANGUAGE_CODE,
    )


def report_draft() -> ReportDraft:
    return ReportDraft(
        title="Draft Incident Report (Demo)",
        description=(
            "Based on the conversation, the complainant reported an incident. [DEMO NOTE: This "
            "description is a placeholder as no API key is present to generate a real summary "
            "from the chat history.]"
        ),
        location="Reported Location",
        date_of_incident=date.today().isoformat(),
        category="General Complaint",
        suggested_sections=["IPC Section Gen-1"],
    )


def analysis(report_title: str) -> AIAnalysis:
    return AIAnalysis(
        summary=(
            f'[DEMO MODE] This is a simulated analysis for "{report_title}". The incident '
            "involves reported disturbances and requires verification of witness statements."
        ),
        severity_score=7.5,
        suggested_sections=[
            "IPC Section 379 (Theft)",
            "IPC Section 411 (Dishonestly receiving stolen property)",
        ],
        investigation_steps=[
            "Collect CCTV footage from the reported location.",
            "Interview the complainant and immediate witnesses.",
            "Track any digital footprints if applicable.",
        ],
        extracted_entities=["Central Station", "Blue Hoodie", "iPhone 13", "5:30 PM"],
    )


def investigation() -> InvestigationReport:
    return InvestigationReport(
        similar_cases=[
            SimilarCase(
                report_id="FIR-2023-089",
                title="Phone Snatching at Metro",
                similarity_score=85,
                reason="Similar modus operandi involving suspect in hoodie.",
            ),
            SimilarCase(
                report_id="FIR-2022-112",
                title="Pickpocketing near Market",
                similarity_score=60,
                reason="Location proximity and time of day match.",
            ),
        ],
        suspects=[
            Suspect(
                name="Ravi 'The Shadow' Kumar",
                confidence=78,
                description=(
                    "Known for operating in transport hubs. Matches physical description "
                    "(Height: 5'10, Hoodie)."
                ),
                status=SuspectStatus.PATTERN_MATCH,
            ),
            Suspect(
                name="Unknown Male",
                confidence=40,
                description="Generic match based on clothing description only.",
                status=SuspectStatus.UNKNOWN,
            ),
        ],
        timeline=[
            TimelineEvent(time="17:15", location="Station Entrance",
                          description="Subject entered via Gate 3.", source=TimelineSource.CCTV),
            TimelineEvent(time="17:30", location="Platform 4",
                          description="Incident occurred near coach C5.", source=TimelineSource.WITNESS),
            TimelineEvent(time="17:32", location="Exit Gate 2",
                          description="Subject seen running towards parking lot.", source=TimelineSource.CCTV),
        ],
        contradictions=[
            "Witness A stated suspect wore Red, Complainant stated Blue.",
            "Time mismatch of 5 minutes between CCTV timestamp and report.",
        ],
        advanced_insights=[
            "Suspect likely uses the evening rush hour for cover.",
            "Recommend deploying plain clothes officers at Platform 4 between 17:00-19:00.",
        ],
    )


def evidence_analysis(mime_type: str) -> EvidenceAnalysis:
    if (mime_type or "").lower().startswith("audio/"):
        return EvidenceAnalysis(
            label="Audio Note (Demo)",
            description='Simulated audio analysis: "I saw a man running..."',
        )
    return EvidenceAnalysis(
        label="Evidence Image (Demo)",
        description="Simulated image analysis: A clear view of the street.",
    )


def transcript() -> str:
    return DEMO_TRANSCRIPT
