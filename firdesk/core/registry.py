"""Language and agent catalogs plus the greeting templates used to open a session.

The tables are plain constants; ``Registry`` wraps them as an immutable
configuration object that the router and the conversation session receive at
construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from firdesk.config import Settings, get_settings
from firdesk.core.models import AgentPersona, LanguageOption

DEFAULT_LANGUAGE_CODE = "en-IN"
DEFAULT_AGENT_ID = "general"

LANGUAGES: tuple[LanguageOption, ...] = (
    LanguageOption(code="en-IN", display_name="English", native_label="English"),
    LanguageOption(code="hi-IN", display_name="Hindi", native_label="हिंदी"),
    LanguageOption(code="te-IN", display_name="Telugu", native_label="తెలుగు"),
    LanguageOption(code="ta-IN", display_name="Tamil", native_label="தமிழ்"),
    LanguageOption(code="ml-IN", display_name="Malayalam", native_label="മലയാളം"),
)

AGENTS: tuple[AgentPersona, ...] = (
    AgentPersona(
        id="general",
        name="Inspector Arjun",
        department_role="General Duty Officer",
        description="For theft, vandalism, fights, and general complaints.",
        focus="General incident details, timeline, witnesses",
        tone="Professional, direct, and efficient",
        icon_ref="🛡️",
    ),
    AgentPersona(
        id="cyber",
        name="Expert Riya",
        department_role="Cyber Crime Specialist",
        description="For online fraud, hacking, harassment, or financial scams.",
        focus="Digital evidence, URLs, transaction IDs, phone numbers",
        tone="Technical, analytical, and precise",
        icon_ref="💻",
    ),
    AgentPersona(
        id="traffic",
        name="Sgt. Vikram",
        department_role="Traffic Division",
        description="For road accidents, vehicle theft, or rash driving.",
        focus="Vehicle numbers, location specifics, injuries, insurance",
        tone="Strict, factual, and urgent",
        icon_ref="🚗",
    ),
    AgentPersona(
        id="women",
        name="Officer Lakshmi",
        department_role="Women Safety Cell",
        description="Specialized support for harassment, stalking, or domestic issues.",
        focus="Safety, pattern of behavior, protection, emotional state",
        tone="Highly empathetic, supportive, protective, and patient",
        icon_ref="🤝",
    ),
    AgentPersona(
        id="narcotics",
        name="Agent Kabir",
        department_role="Narcotics Control",
        description="For reporting drug trafficking, suspicious substances, or usage.",
        focus="Substance description, location details, dealer description",
        tone="Discreet, vigilant, and authoritative",
        icon_ref="💊",
    ),
)

GREETINGS: dict[str, str] = {
    "en-IN": "Hello. I am ready to assist you. Please tell me what happened.",
    "hi-IN": "नमस्ते। मैं आपकी मदद करने के लिए तैयार हूं। कृपया मुझे बताएं कि क्या हुआ।",
    "te-IN": "నమస్కారం. నేను మీకు సహాయం చేయడానికి సిద్ధంగా ఉన్నాను. ఏం జరిగిందో దయచేసి చెప్పండి.",
    "ta-IN": "வணக்கம். நான் உங்களுக்கு உதவ தயாராக இருக்கிறேன். என்ன நடந்தது என்று சொல்லுங்கள்.",
    "ml-IN": "നമസ്കാരം. നിങ്ങളെ സഹായിക്കാൻ ഞാൻ തയ്യാറാണ്. എന്താണ് സംഭവിച്ചതെന്ന് ദയവായി എന്നോട് പറയൂ.",
}

# Placeholders: {name}, {role}
INTRO_TEMPLATES: dict[str, str] = {
    "en-IN": "I am {name}, your {role}.",
    "hi-IN": "मैं {name} हूँ, आपका {role}।",
    "te-IN": "నేను {name}, మీ {role}.",
    "ta-IN": "நான் {name}, உங்கள் {role}.",
    "ml-IN": "ഞാൻ {name}, നിങ്ങളുടെ {role}.",
}


@dataclass(frozen=True)
class Registry:
    """Immutable lookup tables for languages, agents and greeting text."""

    languages: tuple[LanguageOption, ...] = LANGUAGES
    agents: tuple[AgentPersona, ...] = AGENTS
    greetings: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(GREETINGS)))
    intro_templates: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(INTRO_TEMPLATES))
    )
    fallback_language_code: str = DEFAULT_LANGUAGE_CODE
    default_agent_id: str = DEFAULT_AGENT_ID

    def __post_init__(self) -> None:
        code = self.fallback_language_code
        if code not in self.greetings or code not in self.intro_templates:
            raise ValueError(f"No greeting template for fallback language '{code}'")

    def language(self, code: str) -> LanguageOption | None:
        return next((lang for lang in self.languages if lang.code == code), None)

    def agent(self, agent_id: str) -> AgentPersona | None:
        return next((a for a in self.agents if a.id == agent_id), None)

    @property
    def default_agent(self) -> AgentPersona:
        agent = self.agent(self.default_agent_id)
        if agent is None:
            raise LookupError(f"Default agent '{self.default_agent_id}' missing from registry")
        return agent

    def is_known_language_code(self, code: str | None) -> bool:
        """True when ``code`` shares its primary subtag with a catalog language."""
        if not code:
            return False
        prefix = code.replace("_", "-").split("-")[0].lower()
        return any(lang.prefix == prefix for lang in self.languages)

    def greeting_for(self, agent: AgentPersona, language_code: str) -> str:
        """Agent self-introduction followed by the greeting line.

        Languages without a template use the fallback language.
        """
        intro = self.intro_templates.get(language_code) or self.intro_templates[self.fallback_language_code]
        greeting = self.greetings.get(language_code) or self.greetings[self.fallback_language_code]
        return f"{intro.format(name=agent.name, role=agent.department_role)} {greeting}"


def get_registry(settings: Settings | None = None) -> Registry:
    """Return the default catalog, with the greeting fallback language taken from settings."""
    settings = settings or get_settings()
    return Registry(fallback_language_code=settings.default_language_code)
