"""Unit tests for the chat view helpers that do not need a running Streamlit app."""

from __future__ import annotations

from firdesk.core.registry import AGENTS, get_registry
from firdesk.ui.components.chat_view import agent_table_markdown


class TestAgentTable:

    def test_one_row_per_agent(self) -> None:
        agents = get_registry().agents
        lines = agent_table_markdown(agents).splitlines()
        assert lines[0] == "| Agent | Department | Handles |"
        assert len(lines) == len(agents) + 2
        for agent, row in zip(agents, lines[2:]):
            assert agent.name in row
            assert agent.department_role in row

    def test_follows_catalog(self) -> None:
        table = agent_table_markdown(AGENTS[:2])
        assert AGENTS[1].name in table
        assert AGENTS[2].name not in table
