from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from business_tools.core.settings import Settings
from business_tools.main import create_app

SWOT_RESULT: Dict[str, Any] = {
    "company": "Acme Robotics",
    "industry": "Industrial automation",
    "analysis": {
        "strengths": [{"point": "Patented grippers", "description": "Hard to copy hardware."}],
        "weaknesses": [{"point": "Small sales team", "description": "Slow enterprise cycles."}],
        "opportunities": [{"point": "Reshoring", "description": "New factories need automation."}],
        "threats": [{"point": "Low-cost imports", "description": "Price pressure in the mid market."}],
    },
    "keyInsights": ["Hardware moat", "Sales capacity is the bottleneck", "Timing favours growth"],
    "recommendations": ["Hire channel partners", "Bundle service contracts", "Hedge component supply"],
}


def _pillar(n: int) -> Dict[str, Any]:
    return {
        "pillarName": f"Pillar {n}",
        "painPoints": ["Manual scheduling", "Missed shifts"],
        "benefits": ["Less admin", "Happier staff", "Lower overtime"],
        "featureDetails": ["Auto-fill rota", "Shift swaps", "Payroll export"],
        "proofPoint": "Cut scheduling time by 70% at a 40-site chain.",
    }


MESSAGING_RESULT: Dict[str, Any] = {
    "company": "ShiftWise",
    "product": "Rota Planner",
    "industry": "Hospitality",
    "valueProposition": "Staff schedules that build themselves so managers can run the floor",
    "targetAudience": {"profile": "Operations managers at multi-site restaurant groups."},
    "elevatorPitch": "Rota Planner builds fair schedules in minutes.",
    "longDescription": "Rota Planner replaces spreadsheets with automatic scheduling.",
    "toneOfVoice": {
        "adjectives": ["warm", "practical", "confident", "clear"],
        "beforeExample": "Leverage synergistic workforce paradigms.",
        "afterExample": "Build next week's rota before your coffee cools.",
    },
    "outcomes": ["Less admin", "Fewer no-shows", "Lower overtime", "Fairer rotas", "Happier teams"],
    "customerRequirements": ["Payroll integration", "Mobile app for staff"],
    "outcomePillars": [_pillar(1), _pillar(2), _pillar(3)],
}


class StubLLM:
    """In-memory completion client that records every call."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None, model: str = "gpt-4o-mini"):
        self.reply = reply
        self.error = error
        self.model = model
        self.calls: List[Dict[str, Any]] = []

    def complete(self, system: str, user: str, *, max_tokens: int, temperature: float) -> str:
        self.calls.append(
            {"system": system, "user": user, "max_tokens": max_tokens, "temperature": temperature}
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(rate_limit_max_requests=0)


@pytest.fixture
def swot_llm() -> StubLLM:
    return StubLLM(json.dumps(SWOT_RESULT))


@pytest.fixture
def messaging_llm() -> StubLLM:
    return StubLLM(json.dumps(MESSAGING_RESULT))


@pytest.fixture
def make_client(settings):
    def _make(llm: StubLLM, **overrides) -> TestClient:
        s = settings.model_copy(update=overrides) if overrides else settings
        return TestClient(create_app(s, llm), raise_server_exceptions=False)

    return _make
