"""Investigation Graph — parallel analysis branches joined into one enriched report.

Graph flow:
  START → [analyze, deep_investigate] (parallel) → merge → END
"""

from __future__ import annotations

import logging
from typing import Any

from langgraph.graph import END, START, StateGraph

from firdesk.agents.investigation import analysis_agent, deep_investigation_agent, merge_agent
from firdesk.core.llm_gateway import AIGateway
from firdesk.core.state import InvestigationState

logger = logging.getLogger(__name__)


def build_investigation_graph(gateway: AIGateway) -> Any:
    """Build and compile the investigation StateGraph.

    Both branches run in the same step, so their gateway calls are in flight
    together; ``merge`` waits for both before producing the enriched report.

    Returns:
        Compiled LangGraph application.
    """
    graph = StateGraph(InvestigationState)

    # ── Register nodes ──
    graph.add_node("analyze", lambda state: analysis_agent(state, gateway))
    graph.add_node("deep_investigate", lambda state: deep_investigation_agent(state, gateway))
    graph.add_node("merge", merge_agent)

    # ── Fan-out / fan-in ──
    graph.add_edge(START, "analyze")
    graph.add_edge(START, "deep_investigate")
    graph.add_edge(["analyze", "deep_investigate"], "merge")
    graph.add_edge("merge", END)

    compiled = graph.compile()
    logger.debug("Investigation graph compiled: analyze ∥ deep_investigate → merge")
    return compiled
