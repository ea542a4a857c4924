"""Intake Router — assigns a free-text incident description to a specialist agent.

Rule-based keyword matching over an ordered rule list. The first rule with any
match wins, so the list order is the tie-break policy (a message mentioning
both "bank" and "accident" goes to cyber).
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from firdesk.core.models import AgentPersona
from firdesk.core.registry import Registry, get_registry

logger = logging.getLogger(__name__)

# ── Keyword groups, highest priority first ──

CYBER_KEYWORDS = ("hack", "fraud", "scam", "bank", "online", "money", "url", "otp",
                  "password", "phishing", "wallet", "upi")
TRAFFIC_KEYWORDS = ("accident", "crash", "traffic", "road", "vehicle", "car", "bike",
                    "driving", "hit", "run", "license")
WOMEN_SAFETY_KEYWORDS = ("woman", "lady", "girl", "wife", "husband", "domestic", "abuse",
                         "stalk", "harass", "dowry", "rape", "molest")
NARCOTICS_KEYWORDS = ("drug", "weed", "cocaine", "heroin", "dealer", "substance", "powder",
                      "pill", "addict")


def _pattern(keywords: Sequence[str]) -> re.Pattern[str]:
    # Substring match, e.g. "stalk" also covers "stalking"
    return re.compile("|".join(re.escape(k) for k in keywords))


ROUTING_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("cyber", _pattern(CYBER_KEYWORDS)),
    ("traffic", _pattern(TRAFFIC_KEYWORDS)),
    ("women", _pattern(WOMEN_SAFETY_KEYWORDS)),
    ("narcotics", _pattern(NARCOTICS_KEYWORDS)),
)


class IntakeRouter:
    """Pure text → agent routing over an injected catalog and rule list."""

    def __init__(
        self,
        registry: Registry | None = None,
        rules: Sequence[tuple[str, re.Pattern[str]]] = ROUTING_RULES,
    ) -> None:
        self._registry = registry or get_registry()
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[tuple[str, re.Pattern[str]], ...]:
        return self._rules

    def route(self, free_text: str) -> str:
        """Return the agent id for ``free_text``; ``general`` when no rule matches."""
        text = free_text.lower()
        for agent_id, pattern in self._rules:
            if pattern.search(text):
                return agent_id
        return self._registry.default_agent_id

    def route_request(self, free_text: str | None) -> AgentPersona | None:
        """Caller-side entry point: refuse blank text, otherwise resolve the routed agent."""
        if not free_text or not free_text.strip():
            logger.info("Routing refused: empty description")
            return None
        agent_id = self.route(free_text)
        agent = self._registry.agent(agent_id) or self._registry.default_agent
        logger.info("Routed intake text to agent '%s'", agent.id)
        return agent
