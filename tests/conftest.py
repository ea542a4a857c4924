"""Shared fixtures: fake chat models and gateways that never touch the network."""

from __future__ import annotations

import json
from typing import Any

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from pydantic import Field

from firdesk.config import Settings
from firdesk.core.llm_gateway import AIGateway
from firdesk.core.models import Report, ReportStatus


class RecordingChatModel(FakeListChatModel):
    """FakeListChatModel that also records the messages of every call."""

    calls: list[Any] = Field(default_factory=list)

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        self.calls.append(list(messages))
        return super()._call(messages, stop=stop, run_manager=run_manager, **kwargs)


class FailingChatModel(FakeListChatModel):
    """Chat model whose every call fails like an unreachable upstream."""

    responses: list[str] = Field(default_factory=lambda: [""])

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        raise ConnectionError("upstream unreachable")


def as_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload)


@pytest.fixture
def offline_settings() -> Settings:
    return Settings(llm_api_key="")


@pytest.fixture
def offline_gateway(offline_settings: Settings) -> AIGateway:
    return AIGateway(settings=offline_settings)


@pytest.fixture
def failing_gateway(offline_settings: Settings) -> AIGateway:
    model = FailingChatModel()
    return AIGateway(settings=offline_settings, llm_factory=lambda role: model)


@pytest.fixture
def chat_model() -> RecordingChatModel:
    return RecordingChatModel(responses=[
        as_json({"text": "When did this happen?", "language_code": "en-IN"}),
        as_json({"text": "Where exactly was the bike parked?", "language_code": "en-IN"}),
        as_json({"text": "Did anyone witness it?", "language_code": "en-IN"}),
    ])


@pytest.fixture
def chat_gateway(offline_settings: Settings, chat_model: RecordingChatModel) -> AIGateway:
    return AIGateway(settings=offline_settings, llm_factory=lambda role: chat_model)


@pytest.fixture
def sample_report() -> Report:
    return Report(
        id="FIR-2024-ABC123",
        title="Stolen Bicycle",
        description="My red bicycle was stolen from outside my house at 8pm yesterday.",
        location="12 Lake Road",
        date_of_incident="2024-05-01 20:00",
        category="Theft",
        status=ReportStatus.SUBMITTED,
        complainant_name="Citizen User",
        created_at="2024-05-02T09:00:00+00:00",
    )


@pytest.fixture
def make_recording_model():
    """Factory for RecordingChatModel instances with canned responses."""
    return lambda *responses: RecordingChatModel(responses=list(responses))
