"""Unit tests for the Intake Router."""

from __future__ import annotations

import re

import pytest

from firdesk.agents.intake_router import ROUTING_RULES, IntakeRouter


@pytest.fixture
def router() -> IntakeRouter:
    return IntakeRouter()


class TestRoute:
    """Tests for IntakeRouter.route."""

    @pytest.mark.parametrize("text, expected", [
        ("I got a call asking for my OTP and lost money from UPI", "cyber"),
        ("Someone HACKED my email account", "cyber"),
        ("There was a crash at the junction", "traffic"),
        ("My neighbour keeps stalking me", "women"),
        ("I saw a dealer selling cocaine near the school", "narcotics"),
        ("My shop window was smashed with a brick", "general"),
    ])
    def test_routes_by_keyword_group(self, router: IntakeRouter, text: str, expected: str) -> None:
        assert router.route(text) == expected

    def test_cyber_beats_traffic(self, router: IntakeRouter) -> None:
        assert router.route("After the accident someone used my bank card") == "cyber"

    def test_traffic_beats_women_safety(self, router: IntakeRouter) -> None:
        assert router.route("A lady was injured in a road accident") == "traffic"

    def test_women_safety_beats_narcotics(self, router: IntakeRouter) -> None:
        assert router.route("My husband forces me to hide drugs at home") == "women"

    def test_case_insensitive(self, router: IntakeRouter) -> None:
        assert router.route("PHISHING EMAIL") == "cyber"

    def test_no_match_is_general(self, router: IntakeRouter) -> None:
        assert router.route("My neighbour's dog barks all night") == "general"

    def test_priority_order_is_data(self) -> None:
        assert [agent_id for agent_id, _ in ROUTING_RULES] == ["cyber", "traffic", "women", "narcotics"]

    def test_custom_rules(self) -> None:
        router = IntakeRouter(rules=[("narcotics", re.compile("weed")), ("cyber", re.compile("online"))])
        assert router.route("bought weed online") == "narcotics"


class TestRouteRequest:
    """Tests for the caller-side route_request entry point."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_blank_text_refused(self, router: IntakeRouter, text) -> None:
        assert router.route_request(text) is None

    def test_blank_text_never_reaches_matcher(self, monkeypatch: pytest.MonkeyPatch) -> None:
        router = IntakeRouter()

        def _fail(text: str) -> str:
            raise AssertionError("matcher should not run")

        monkeypatch.setattr(router, "route", _fail)
        assert router.route_request("   ") is None

    def test_returns_agent_persona(self, router: IntakeRouter) -> None:
        agent = router.route_request("I got a call asking for my OTP and lost money from UPI")
        assert agent is not None
        assert agent.id == "cyber"
        assert agent.name == "Expert Riya"
