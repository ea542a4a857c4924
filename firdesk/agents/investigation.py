"""Case Investigation — enriches a submitted report with AI analysis for police review.

Two independent gateway calls (classification analysis and deep
investigation) run as parallel branches of the investigation graph; the merge
node attaches both results at once and moves the report to Under Investigation.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from firdesk.config import Settings, get_settings
from firdesk.core.llm_gateway import AIGateway, get_gateway
from firdesk.core.models import Report, ReportStatus
from firdesk.core.state import InvestigationState

logger = logging.getLogger(__name__)


def summarize_other_reports(report: Report, all_reports: Sequence[Report], desc_chars: int = 100) -> str:
    """Condensed corpus for similar-case discovery, one line per other report."""
    return "\n".join(
        f"ID: {r.id}, Title: {r.title}, Desc: {r.description[:desc_chars]}..."
        for r in all_reports
        if r.id != report.id
    )


def analysis_agent(state: InvestigationState, gateway: AIGateway) -> dict[str, Any]:
    """Classification pass: summary, severity, legal sections, next steps, entities."""
    fields = state["report_fields"]
    logger.info("Investigation[analyze]: report %s", fields.get("id"))
    analysis = gateway.analyze_report(fields)
    logger.info("Investigation[analyze]: severity %.1f", analysis.severity_score)
    return {"ai_analysis": analysis}


def deep_investigation_agent(state: InvestigationState, gateway: AIGateway) -> dict[str, Any]:
    """Suspects, timeline, similar cases, contradictions and strategic insights."""
    fields = state["report_fields"]
    logger.info("Investigation[deep]: report %s", fields.get("id"))
    result = gateway.investigate_deep(fields, state.get("other_reports_summary", ""))
    logger.info(
        "Investigation[deep]: %d suspects, %d timeline events, %d similar cases",
        len(result.suspects),
        len(result.timeline),
        len(result.similar_cases),
    )
    return {"investigation_report": result}


def merge_agent(state: InvestigationState) -> dict[str, Any]:
    """Fan-in: replace both enrichment fields and force the status in one step."""
    report = state["report"]
    enriched = report.model_copy(update={
        "status": ReportStatus.UNDER_INVESTIGATION,
        "ai_analysis": state["ai_analysis"],
        "investigation_report": state["investigation_report"],
    })
    return {"enriched_report": enriched}


def investigate(
    report: Report,
    all_reports: Sequence[Report],
    gateway: AIGateway | None = None,
    settings: Settings | None = None,
) -> Report:
    """Run both investigation calls concurrently and return an enriched copy of ``report``.

    Re-running fully replaces the previous ``ai_analysis`` and
    ``investigation_report``; nothing is merged across runs.
    """
    from firdesk.graph.investigation_graph import build_investigation_graph

    settings = settings or get_settings()
    app = build_investigation_graph(gateway or get_gateway())

    initial_state: InvestigationState = {
        "report": report,
        "report_fields": report.prompt_fields(),
        "other_reports_summary": summarize_other_reports(
            report, all_reports, settings.similar_case_desc_chars
        ),
    }

    logger.info("Investigating report %s against %d reports", report.id, len(all_reports))
    result = app.invoke(initial_state)
    return result["enriched_report"]
