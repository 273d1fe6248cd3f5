"""Shared test fixtures for all test groups."""

import json

import httpx
import pytest

from idea_validator.analysis.schemas import IdeaFormData


def gemini_envelope(payload_text: str) -> dict:
    """Wrap model output text in a generateContent success body."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": payload_text}]},
                "finishReason": "STOP",
                "safetyRatings": [],
            }
        ],
        "usageMetadata": {"promptTokenCount": 120, "candidatesTokenCount": 400, "totalTokenCount": 520},
        "modelVersion": "gemini-1.5-flash-002",
    }


class FakeGemini:
    """httpx transport that answers every request with one canned response and counts calls."""

    def __init__(self, status_code: int = 200, json_body=None, text_body: str | None = None):
        self.status_code = status_code
        self.json_body = json_body
        self.text_body = text_body
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def form_data():
    return IdeaFormData(
        idea="A subscription app that plans weekly meals around what is already in your fridge",
        target_market="Busy urban professionals aged 25-40",
        unique_value_proposition="Cuts food waste by planning from existing groceries",
        business_model="Freemium with a $6/month premium tier",
    )


@pytest.fixture
def analysis_payload():
    return {
        "ideaSummary": "Meal planning driven by fridge inventory to reduce food waste.",
        "viabilityScore": 72,
        "swotAnalysis": {
            "strengths": ["Clear sustainability angle", "Recurring revenue"],
            "weaknesses": ["Manual inventory entry"],
            "opportunities": ["Grocery delivery partnerships"],
            "threats": [],
        },
        "competitors": [
            {"name": "Mealime", "description": "Free meal planner with grocery lists."},
            {"name": "SuperCook", "description": "Recipe search by available ingredients."},
        ],
        "marketInsights": ["Household food waste is a growing consumer concern"],
        "recommendations": ["Integrate receipt scanning", "Pilot with one grocery chain"],
    }


@pytest.fixture
def fake_gemini(analysis_payload):
    return FakeGemini(json_body=gemini_envelope(json.dumps(analysis_payload)))
