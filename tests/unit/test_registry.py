"""Unit tests for the language/agent catalogs."""

from __future__ import annotations

import pytest

from firdesk.config import Settings
from firdesk.core.registry import AGENTS, LANGUAGES, Registry, get_registry


@pytest.fixture
def registry() -> Registry:
    return get_registry()


class TestCatalogs:

    def test_five_languages_five_agents(self, registry: Registry) -> None:
        assert [lang.code for lang in registry.languages] == ["en-IN", "hi-IN", "te-IN", "ta-IN", "ml-IN"]
        assert [a.id for a in registry.agents] == ["general", "cyber", "traffic", "women", "narcotics"]

    def test_unique_ids(self) -> None:
        assert len({a.id for a in AGENTS}) == len(AGENTS)
        assert len({lang.code for lang in LANGUAGES}) == len(LANGUAGES)

    def test_lookup(self, registry: Registry) -> None:
        assert registry.language("ta-IN").display_name == "Tamil"
        assert registry.agent("traffic").name == "Sgt. Vikram"
        assert registry.language("fr-FR") is None
        assert registry.agent("fire") is None

    def test_default_agent_is_general(self, registry: Registry) -> None:
        assert registry.default_agent.id == "general"

    def test_missing_default_agent(self) -> None:
        broken = Registry(agents=AGENTS[1:])
        with pytest.raises(LookupError):
            _ = broken.default_agent

    @pytest.mark.parametrize("code, known", [
        ("hi-IN", True),
        ("hi", True),
        ("en-US", True),
        ("ml_IN", True),
        ("fr-FR", False),
        ("", False),
        (None, False),
    ])
    def test_is_known_language_code(self, registry: Registry, code, known: bool) -> None:
        assert registry.is_known_language_code(code) is known

    def test_descriptor_fields(self, registry: Registry) -> None:
        descriptor = registry.agent("women").descriptor()
        assert descriptor == {
            "name": "Officer Lakshmi",
            "role": "Women Safety Cell",
            "focus": "Safety, pattern of behavior, protection, emotional state",
            "tone": "Highly empathetic, supportive, protective, and patient",
        }


class TestGreeting:

    def test_english_greeting(self, registry: Registry) -> None:
        text = registry.greeting_for(registry.agent("general"), "en-IN")
        assert text == (
            "I am Inspector Arjun, your General Duty Officer. "
            "Hello. I am ready to assist you. Please tell me what happened."
        )

    def test_localized_greeting(self, registry: Registry) -> None:
        text = registry.greeting_for(registry.agent("cyber"), "hi-IN")
        assert text.startswith("मैं Expert Riya हूँ")
        assert "नमस्ते" in text

    def test_every_language_has_a_greeting(self, registry: Registry) -> None:
        agent = registry.default_agent
        for lang in registry.languages:
            text = registry.greeting_for(agent, lang.code)
            assert agent.name in text

    def test_unknown_language_falls_back_to_english(self, registry: Registry) -> None:
        text = registry.greeting_for(registry.agent("traffic"), "fr-FR")
        assert text.startswith("I am Sgt. Vikram, your Traffic Division.")
        assert text.endswith("Please tell me what happened.")

    def test_fallback_language_from_settings(self) -> None:
        registry = get_registry(Settings(llm_api_key="", default_language_code="hi-IN"))
        assert registry.fallback_language_code == "hi-IN"
        text = registry.greeting_for(registry.agent("general"), "fr-FR")
        assert text == registry.greeting_for(registry.agent("general"), "hi-IN")

    def test_default_fallback_is_english(self, offline_settings: Settings) -> None:
        assert get_registry(offline_settings).fallback_language_code == "en-IN"

    def test_fallback_without_template_rejected(self) -> None:
        with pytest.raises(ValueError, match="fr-FR"):
            Registry(fallback_language_code="fr-FR")
