"""Case viewer component — displays a submitted FIR and its investigation results."""

from __future__ import annotations

import streamlit as st

from firdesk.core.models import Report, ReportStatus, SuspectStatus, TimelineSource
from firdesk.ui.components.status_charts import render_suspect_chart

STATUS_ICONS = {
    ReportStatus.SUBMITTED: "🟡",
    ReportStatus.UNDER_INVESTIGATION: "🔵",
    ReportStatus.CLOSED: "🟢",
}

SUSPECT_ICONS = {
    SuspectStatus.IDENTIFIED: "🔴",
    SuspectStatus.PATTERN_MATCH: "🟠",
    SuspectStatus.UNKNOWN: "⚪",
}

SOURCE_ICONS = {
    TimelineSource.CCTV: "🎥",
    TimelineSource.WITNESS: "🧍",
    TimelineSource.DIGITAL_FOOTPRINT: "📱",
}


def status_label(report: Report) -> str:
    return f"{STATUS_ICONS.get(report.status, '⚪')} {report.status.value}"


def render_report_overview(report: Report) -> None:
    """Render the report header, narrative and analysis summary."""
    st.header(f"📋 {report.title}")
    st.caption(f"{report.id} | {status_label(report)} | Filed {report.created_at[:19]}")

    col1, col2 = st.columns(2)
    with col1:
        st.write(f"**Complainant:** {report.complainant_name}")
        st.write(f"**Location:** {report.location}")
    with col2:
        st.write(f"**Date of Incident:** {report.date_of_incident}")
        st.write(f"**Category:** {report.category or 'Unclassified'}")

    st.subheader("📝 Description")
    st.write(report.description or "—")

    if report.suggested_sections:
        st.caption("Suggested sections: " + ", ".join(report.suggested_sections))

    if report.evidence:
        with st.expander(f"📎 Evidence ({len(report.evidence)})"):
            for e in report.evidence:
                st.write(f"• **{e.ai_label}** ({e.kind.value}) — {e.ai_description}")

    analysis = report.ai_analysis
    if analysis:
        st.divider()
        st.subheader("🧠 AI Analysis")
        cols = st.columns(2)
        cols[0].metric("Severity", f"{analysis.severity_score:.1f} / 10")
        cols[1].metric("Entities", len(analysis.extracted_entities))
        st.write(analysis.summary)
        if analysis.suggested_sections:
            st.markdown("**Legal sections:** " + ", ".join(analysis.suggested_sections))
        if analysis.investigation_steps:
            st.markdown("**Next steps:**")
            for step in analysis.investigation_steps:
                st.write(f"→ {step}")
        if analysis.extracted_entities:
            st.caption("Entities: " + ", ".join(analysis.extracted_entities))


def render_investigation_tabs(report: Report) -> None:
    """Render overview and investigation results as tabs."""
    tab_overview, tab_suspects, tab_timeline, tab_similar, tab_intel = st.tabs(
        ["📋 Overview", "🕵️ Suspects", "🎥 Timeline", "🔗 Similar Cases", "💡 Intelligence"]
    )

    with tab_overview:
        render_report_overview(report)

    inv = report.investigation_report
    if inv is None:
        for tab in (tab_suspects, tab_timeline, tab_similar, tab_intel):
            with tab:
                st.info("Run the AI investigation to populate this view.")
        return

    with tab_suspects:
        render_suspect_chart(inv.suspects)
        for s in inv.suspects:
            st.markdown(f"{SUSPECT_ICONS.get(s.status, '⚪')} **{s.name}** — *{s.status.value}* ({s.confidence:.0f}%)")
            st.caption(s.description)

    with tab_timeline:
        if not inv.timeline:
            st.info("No timeline reconstructed.")
        for t in inv.timeline:
            st.markdown(f"{SOURCE_ICONS.get(t.source, '•')} **{t.time}** — {t.location} *({t.source.value})*")
            st.write(t.description)

    with tab_similar:
        if not inv.similar_cases:
            st.info("No similar cases found.")
        for c in inv.similar_cases:
            st.markdown(f"**{c.report_id}** — {c.title}")
            st.progress(min(max(c.similarity_score / 100, 0.0), 1.0), text=f"{c.similarity_score:.0f}% similar")
            st.caption(c.reason)

    with tab_intel:
        st.subheader("⚠️ Contradictions")
        if not inv.contradictions:
            st.write("None detected.")
        for c in inv.contradictions:
            st.warning(c)
        st.subheader("💡 Strategic Insights")
        for i in inv.advanced_insights:
            st.info(i)
