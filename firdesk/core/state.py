"""InvestigationState — LangGraph state schema for the case investigation graph.

Both gateway branches read the report fields and write only their own key;
the merge node builds the enriched report once both are present.
"""

from __future__ import annotations

from typing import Any, TypedDict

from firdesk.core.models import AIAnalysis, InvestigationReport, Report


class InvestigationState(TypedDict, total=False):
    """State flowing through the investigation graph.

    Uses `total=False` so nodes only need to return the fields they update.
    """

    # ── Input ──
    report: Report
    report_fields: dict[str, Any]
    other_reports_summary: str

    # ── Branch outputs ──
    ai_analysis: AIAnalysis
    investigation_report: InvestigationReport

    # ── Final output ──
    enriched_report: Report
