"""Status charts component — Plotly visualizations for the police dashboard."""

from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go
import streamlit as st

from firdesk.core.models import Suspect

STATUS_COLORS = {
    "Submitted": "#f59e0b",
    "Active": "#3b82f6",
    "Closed": "#10b981",
}


def render_status_chart(stats: dict[str, int]) -> None:
    """Render case status distribution as a horizontal bar chart."""
    labels = ["Submitted", "Active", "Closed"]
    values = [stats.get("submitted", 0), stats.get("under_investigation", 0), stats.get("closed", 0)]

    fig = go.Figure(go.Bar(
        x=values,
        y=labels,
        orientation="h",
        marker_color=[STATUS_COLORS[label] for label in labels],
        text=values,
        textposition="auto",
    ))
    fig.update_layout(
        title="Case Status Distribution",
        height=200,
        margin=dict(l=10, r=10, t=40, b=10),
    )
    st.plotly_chart(fig, width="stretch")


def render_suspect_chart(suspects: Sequence[Suspect]) -> None:
    """Render suspect match confidence scores."""
    if not suspects:
        st.info("No suspects identified.")
        return

    names = [s.name for s in suspects]
    scores = [s.confidence for s in suspects]

    fig = go.Figure(go.Bar(
        x=scores,
        y=names,
        orientation="h",
        marker_color=["#e74c3c" if s > 70 else "#f39c12" if s > 40 else "#3498db" for s in scores],
        text=[f"{s:.0f}%" for s in scores],
        textposition="auto",
    ))
    fig.update_layout(
        title="Suspect Match Confidence",
        xaxis_title="Confidence",
        xaxis=dict(range=[0, 100]),
        height=max(200, len(names) * 60),
        margin=dict(l=10, r=10, t=40, b=10),
    )
    st.plotly_chart(fig, width="stretch")
