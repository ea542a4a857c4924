"""Unit tests for case investigation and the investigation graph."""

from __future__ import annotations

import threading

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from pydantic import PrivateAttr

from firdesk.agents.investigation import investigate, merge_agent, summarize_other_reports
from firdesk.config import Settings
from firdesk.core import fallbacks
from firdesk.core.llm_gateway import AIGateway
from firdesk.core.models import AIAnalysis, InvestigationReport, Report, ReportStatus
from firdesk.graph.investigation_graph import build_investigation_graph
from firdesk.infrastructure.report_store import SEED_REPORTS

ANALYSIS_JSON = (
    '{"summary": "Bicycle theft from residence.", "severityScore": 4, '
    '"suggestedSections": ["IPC 379"], "investigationSteps": ["Check CCTV"], '
    '"extractedEntities": ["Lake Road"]}'
)
INVESTIGATION_JSON = (
    '{"similarCases": [], "suspects": [{"name": "Unknown Male", "confidence": 20, '
    '"description": "Seen near the gate", "status": "Unknown"}], "timeline": [], '
    '"contradictions": [], "advancedInsights": ["Check resale markets"]}'
)


class BarrierChatModel(FakeListChatModel):
    """Fake model that only answers once both investigation calls are in flight together."""

    _barrier: threading.Barrier | None = PrivateAttr(default=None)

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        self._barrier.wait()
        return super()._call(messages, stop=stop, run_manager=run_manager, **kwargs)


def _role_gateway(settings: Settings, models: dict) -> AIGateway:
    return AIGateway(settings=settings, llm_factory=lambda role: models[role])


class TestSummarizeOtherReports:

    def test_excludes_current_report(self, sample_report: Report) -> None:
        corpus = [sample_report, *SEED_REPORTS]
        summary = summarize_other_reports(sample_report, corpus)
        lines = summary.split("\n")
        assert len(lines) == 2
        assert all(sample_report.id not in line for line in lines)
        assert lines[0].startswith("ID: FIR-2023-001, Title: Mobile Phone Theft at Central Station, Desc: ")

    def test_description_truncated(self, sample_report: Report) -> None:
        summary = summarize_other_reports(sample_report, SEED_REPORTS, desc_chars=10)
        first = summary.split("\n")[0]
        assert first.endswith("Desc: I was wait...")

    def test_only_report(self, sample_report: Report) -> None:
        assert summarize_other_reports(sample_report, [sample_report]) == ""


class TestMergeAgent:

    def test_merge_forces_status(self, sample_report: Report) -> None:
        analysis = fallbacks.analysis(sample_report.title)
        inv = fallbacks.investigation()
        result = merge_agent({"report": sample_report, "ai_analysis": analysis, "investigation_report": inv})
        enriched = result["enriched_report"]
        assert enriched.status is ReportStatus.UNDER_INVESTIGATION
        assert enriched.ai_analysis == analysis
        assert enriched.investigation_report == inv
        assert sample_report.status is ReportStatus.SUBMITTED


class TestInvestigate:

    def test_offline_enrichment(self, sample_report: Report, offline_gateway: AIGateway,
                                offline_settings: Settings) -> None:
        enriched = investigate(sample_report, [sample_report, *SEED_REPORTS], offline_gateway, offline_settings)

        assert enriched.id == sample_report.id
        assert enriched.title == sample_report.title
        assert enriched.status is ReportStatus.UNDER_INVESTIGATION
        assert enriched.ai_analysis == fallbacks.analysis("Stolen Bicycle")
        assert enriched.investigation_report == fallbacks.investigation()

    def test_input_report_unchanged(self, sample_report: Report, offline_gateway: AIGateway,
                                    offline_settings: Settings) -> None:
        investigate(sample_report, [sample_report], offline_gateway, offline_settings)
        assert sample_report.ai_analysis is None
        assert sample_report.investigation_report is None
        assert sample_report.status is ReportStatus.SUBMITTED

    def test_upstream_failure_still_enriches(self, sample_report: Report, failing_gateway: AIGateway,
                                             offline_settings: Settings) -> None:
        enriched = investigate(sample_report, [sample_report], failing_gateway, offline_settings)
        assert enriched.status is ReportStatus.UNDER_INVESTIGATION
        assert isinstance(enriched.ai_analysis, AIAnalysis)
        assert isinstance(enriched.investigation_report, InvestigationReport)

    def test_closed_report_reopened(self, sample_report: Report, offline_gateway: AIGateway,
                                    offline_settings: Settings) -> None:
        closed = sample_report.model_copy(update={"status": ReportStatus.CLOSED})
        enriched = investigate(closed, [closed], offline_gateway, offline_settings)
        assert enriched.status is ReportStatus.UNDER_INVESTIGATION

    def test_live_results_attached(self, sample_report: Report, offline_settings: Settings) -> None:
        gateway = _role_gateway(offline_settings, {
            "analysis": FakeListChatModel(responses=[ANALYSIS_JSON]),
            "investigation": FakeListChatModel(responses=[INVESTIGATION_JSON]),
        })
        enriched = investigate(sample_report, [sample_report], gateway, offline_settings)

        assert enriched.ai_analysis.severity_score == 4
        assert enriched.ai_analysis.suggested_sections == ["IPC 379"]
        assert enriched.investigation_report.advanced_insights == ["Check resale markets"]

    def test_rerun_replaces_results(self, sample_report: Report, offline_gateway: AIGateway,
                                    offline_settings: Settings) -> None:
        first = investigate(sample_report, [sample_report], offline_gateway, offline_settings)
        gateway = _role_gateway(offline_settings, {
            "analysis": FakeListChatModel(responses=[ANALYSIS_JSON]),
            "investigation": FakeListChatModel(responses=[INVESTIGATION_JSON]),
        })
        second = investigate(first, [first], gateway, offline_settings)

        assert second.ai_analysis.summary == "Bicycle theft from residence."
        assert [s.name for s in second.investigation_report.suspects] == ["Unknown Male"]
        assert second.investigation_report.similar_cases == []

    def test_calls_run_concurrently(self, sample_report: Report, offline_settings: Settings) -> None:
        barrier = threading.Barrier(2, timeout=10)
        models = {
            "analysis": BarrierChatModel(responses=[ANALYSIS_JSON]),
            "investigation": BarrierChatModel(responses=[INVESTIGATION_JSON]),
        }
        for model in models.values():
            model._barrier = barrier
        calls: list[str] = []

        def factory(role: str):
            calls.append(role)
            return models[role]

        gateway = AIGateway(settings=offline_settings, llm_factory=factory)
        app = build_investigation_graph(gateway)
        result = app.invoke({
            "report": sample_report,
            "report_fields": sample_report.prompt_fields(),
            "other_reports_summary": "",
        })

        assert sorted(calls) == ["analysis", "investigation"]
        # Both calls got past the barrier, so neither fell back to the placeholder
        assert result["ai_analysis"] != fallbacks.analysis(sample_report.title)
        assert result["investigation_report"] != fallbacks.investigation()
        assert result["enriched_report"].status is ReportStatus.UNDER_INVESTIGATION


@pytest.mark.parametrize("status", list(ReportStatus))
def test_status_always_under_investigation(status: ReportStatus, sample_report: Report,
                                           offline_gateway: AIGateway, offline_settings: Settings) -> None:
    report = sample_report.model_copy(update={"status": status})
    assert investigate(report, [report], offline_gateway, offline_settings).status is ReportStatus.UNDER_INVESTIGATION
