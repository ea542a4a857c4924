"""Application configuration using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field


# Project root directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Placeholder keys shipped in sample .env files count as "no credential"
_PLACEHOLDER_KEYS = {"", "YOUR_API_KEY"}


class Settings(BaseSettings):
    """Central application settings, loaded from environment / .env file."""

    # ── LLM endpoint (OpenAI-compatible) ──
    llm_api_key: str = Field(default="", description="API key for the generative-AI endpoint")
    llm_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        description="OpenAI-compatible base URL",
    )
    llm_model: str = Field(default="gemini-2.5-flash", description="Model for text-only calls")
    llm_multimodal_model: str = Field(
        default="gemini-2.5-flash", description="Model for evidence analysis and transcription"
    )
    llm_temperature: float = Field(default=0.4, description="LLM temperature for chat turns")
    llm_max_tokens: int = Field(default=4096, description="LLM max output tokens")

    # ── Intake ──
    default_language_code: str = Field(default="en-IN", description="Fallback language for templates")
    complainant_placeholder: str = Field(
        default="Citizen User", description="Complainant name used while there is no authentication"
    )
    unknown_location: str = Field(default="Unknown", description="Location used when the draft has none")

    # ── Investigation ──
    similar_case_desc_chars: int = Field(
        default=100, description="Description prefix length sent per report for similar-case discovery"
    )

    model_config = {
        "env_file": str(PROJECT_ROOT / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def offline_mode(self) -> bool:
        """True when no usable credential is configured."""
        return self.llm_api_key.strip() in _PLACEHOLDER_KEYS


@lru_cache()
def get_settings() -> Settings:
    """Return cached singleton settings instance."""
    return Settings()
