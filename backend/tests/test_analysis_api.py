"""Tests for the /api/validate, /api/analyze and /api/export/pdf endpoints."""

import json

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from conftest import FakeGemini, gemini_envelope
from idea_validator.analysis.errors import ConfigurationError, RequestError
from idea_validator.analysis.mock import MockAnalysisProvider
from idea_validator.analysis.router import get_analyzer, get_exporter, router
from idea_validator.analysis.service import GeminiAnalysisClient

pytestmark = pytest.mark.integration


class RecordingAnalyzer:
    """Analyzer double that counts calls and returns or raises a fixed outcome."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    async def analyze(self, form):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


class FakeExporter:
    def __init__(self, fail: bool = False):
        self.fail = fail

    async def export_pdf(self, analysis, generated_date=None):
        if self.fail:
            raise RuntimeError("renderer crashed")
        return b"%PDF-1.7 fake"


# ==================== FIXTURES ====================


@pytest.fixture
def app():
    app = FastAPI()
    app.include_router(router, prefix="/api")
    return app


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def form_json(form_data):
    return form_data.model_dump(by_alias=True)


def _use(app, analyzer):
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    return analyzer


# ==================== VALIDATE ====================


async def test_validate_reports_field_errors(client):
    resp = await client.post("/api/validate", json={"idea": "short", "targetMarket": " "})
    assert resp.status_code == 200
    data = resp.json()
    assert data["isValid"] is False
    assert data["codes"] == {
        "idea": "TooShort",
        "targetMarket": "EmptyField",
        "uniqueValueProposition": "EmptyField",
        "businessModel": "EmptyField",
    }


async def test_validate_accepts_complete_form(client, form_json):
    resp = await client.post("/api/validate", json=form_json)
    assert resp.json() == {"isValid": True, "errors": {}, "codes": {}}


# ==================== ANALYZE ====================


async def test_analyze_returns_camel_case_analysis(app, client, form_json):
    _use(app, MockAnalysisProvider(delay=0))
    resp = await client.post("/api/analyze", json=form_json)
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {
        "ideaSummary", "viabilityScore", "swotAnalysis",
        "competitors", "marketInsights", "recommendations",
    }
    assert data["viabilityScore"] == 85


@pytest.mark.parametrize("field", ["idea", "targetMarket", "uniqueValueProposition", "businessModel"])
async def test_invalid_form_blocks_analysis(app, client, form_json, field):
    analyzer = _use(app, RecordingAnalyzer())
    resp = await client.post("/api/analyze", json={**form_json, field: "  "})

    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["message"] == "Validation Error"
    assert list(detail["errors"]) == [field]
    assert analyzer.calls == 0


async def test_configuration_error_is_503(app, client, form_json):
    _use(app, RecordingAnalyzer(error=ConfigurationError("Gemini API key is not configured.")))
    resp = await client.post("/api/analyze", json=form_json)
    assert resp.status_code == 503
    assert resp.json()["detail"]["error"] == "ConfigurationError"


async def test_request_error_message_passed_through(app, client, form_json):
    _use(app, RecordingAnalyzer(error=RequestError("quota exceeded", status_code=500)))
    resp = await client.post("/api/analyze", json=form_json)
    assert resp.status_code == 502
    assert resp.json()["detail"] == {"message": "quota exceeded", "error": "RequestError"}


async def test_schema_violations_included(app, client, form_json, analysis_payload):
    payload = {**analysis_payload, "viabilityScore": 150}
    fake = FakeGemini(json_body=gemini_envelope(json.dumps(payload)))
    _use(app, GeminiAnalysisClient(api_key="k", transport=fake.transport))

    resp = await client.post("/api/analyze", json=form_json)
    assert resp.status_code == 502
    detail = resp.json()["detail"]
    assert detail["error"] == "SchemaValidationError"
    assert [v["path"] for v in detail["violations"]] == ["viabilityScore"]


async def test_unexpected_error_is_500(app, client, form_json):
    _use(app, RecordingAnalyzer(error=RuntimeError("bug")))
    resp = await client.post("/api/analyze", json=form_json)
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Analysis failed. Please try again."


# ==================== EXPORT ====================


async def test_export_pdf_attachment(app, client, analysis_payload):
    app.dependency_overrides[get_exporter] = lambda: FakeExporter()
    resp = await client.post("/api/export/pdf", json=analysis_payload)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="startup-analysis.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


async def test_export_rejects_invalid_analysis(app, client, analysis_payload):
    app.dependency_overrides[get_exporter] = lambda: FakeExporter()
    resp = await client.post("/api/export/pdf", json={**analysis_payload, "viabilityScore": 150})
    assert resp.status_code == 422


async def test_export_failure_is_500(app, client, analysis_payload):
    app.dependency_overrides[get_exporter] = lambda: FakeExporter(fail=True)
    resp = await client.post("/api/export/pdf", json=analysis_payload)
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Error generating PDF"


async def test_analyze_keeps_integer_score(app, client, form_json, fake_gemini):
    _use(app, GeminiAnalysisClient(api_key="k", transport=fake_gemini.transport))
    resp = await client.post("/api/analyze", json=form_json)
    assert resp.status_code == 200
    score = resp.json()["viabilityScore"]
    assert score == 72
    assert type(score) is int
