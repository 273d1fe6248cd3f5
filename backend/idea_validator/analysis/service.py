"""
Idea Validator Analysis Service

One idea in, one Gemini generateContent call out:
1. Credential check (fail before any request)
2. Prompt with the form serialized as JSON
3. JSON-mode generation constrained by IDEA_ANALYSIS_RESPONSE_SCHEMA
4. Envelope unwrapping → JSON parse → shape validation
No retries and no caching: identical input always means a fresh call.
"""

import json
import time
from typing import Protocol

import httpx

from idea_validator.config import Settings
from idea_validator.analysis.errors import (
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    RequestError,
    SchemaValidationError,
)
from idea_validator.analysis.mock import MockAnalysisProvider
from idea_validator.analysis.schemas import IDEA_ANALYSIS_RESPONSE_SCHEMA, IdeaAnalysis, IdeaFormData
from idea_validator.analysis.validation import parse_analysis

SYSTEM_INSTRUCTION = (
    "You are a startup advisor that helps validate startup ideas. "
    "Your output should always be in the specified JSON format."
)

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"


def _log(msg: str):
    print(f"[IdeaValidator] {msg}", flush=True)


class IdeaAnalyzer(Protocol):
    async def analyze(self, form: IdeaFormData) -> IdeaAnalysis: ...


# ═══════════════════════════════════════
# Request construction
# ═══════════════════════════════════════

def build_prompt(form: IdeaFormData) -> str:
    idea_json = json.dumps(form.model_dump(by_alias=True))
    return (
        "Analyze this startup idea provided as a JSON string and provide detailed feedback. "
        f"The startup idea is: {idea_json}"
    )


def build_request_body(form: IdeaFormData, temperature: float = 0.7) -> dict:
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"role": "user", "parts": [{"text": build_prompt(form)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": IDEA_ANALYSIS_RESPONSE_SCHEMA,
            "temperature": temperature,
        },
        "safetySettings": [
            {"category": category, "threshold": SAFETY_THRESHOLD} for category in HARM_CATEGORIES
        ],
    }


# ═══════════════════════════════════════
# Response unwrapping
# ═══════════════════════════════════════

def _error_message(resp: httpx.Response) -> str:
    try:
        message = resp.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = None
    if isinstance(message, str) and message:
        return message
    return f"Failed to analyze idea. Status: {resp.status_code}"


def _first_text(data: dict) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text.strip() else None


def _empty_reason(data) -> str:
    if not isinstance(data, dict):
        return "No response content received from Gemini."
    feedback = data.get("promptFeedback")
    block = feedback.get("blockReason") if isinstance(feedback, dict) else None
    if block:
        return f"Gemini blocked the request ({block})."
    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        finish = candidates[0].get("finishReason")
        if finish and finish != "STOP":
            return f"No response content received from Gemini (finish reason: {finish})."
    return "No response content received from Gemini."


# ═══════════════════════════════════════
# Gemini client
# ═══════════════════════════════════════

class GeminiAnalysisClient:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        temperature: float = 0.7,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.temperature = temperature
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_base=settings.gemini_api_base,
            temperature=settings.gemini_temperature,
            timeout=settings.gemini_timeout_seconds,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    async def analyze(self, form: IdeaFormData) -> IdeaAnalysis:
        if not self.api_key:
            raise ConfigurationError(
                "Gemini API key is not configured. Set GEMINI_API_KEY and restart the server."
            )

        start = time.time()
        _log("═══ ANALYSIS START ═══")
        _log(f"  Idea: {form.idea[:100]}")
        _log(f"  Model: {self.model}")

        body = build_request_body(form, self.temperature)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http:
            try:
                resp = await http.post(self.endpoint, params={"key": self.api_key}, json=body)
            except httpx.HTTPError as e:
                _log(f"  [Gemini] Transport error: {type(e).__name__}: {e}")
                raise RequestError(f"Could not reach Gemini: {type(e).__name__}") from e

        if not resp.is_success:
            message = _error_message(resp)
            _log(f"  [Gemini] HTTP {resp.status_code}: {resp.text[:300]}")
            raise RequestError(message, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            _log(f"  [Gemini] Envelope is not JSON: {resp.text[:300]}")
            raise MalformedResponseError("Gemini returned a response that is not JSON.") from e

        if isinstance(data, dict):
            usage = data.get("usageMetadata") or {}
            if usage:
                _log(
                    f"  [Gemini] Tokens: {usage.get('promptTokenCount')}+"
                    f"{usage.get('candidatesTokenCount')}={usage.get('totalTokenCount')} "
                    f"({data.get('modelVersion', '?')})"
                )

        text = _first_text(data) if isinstance(data, dict) else None
        if text is None:
            reason = _empty_reason(data)
            _log(f"  [Gemini] EMPTY: {reason}")
            raise EmptyResponseError(reason)

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            _log(f"  [Gemini] Failed to parse payload: {e}. First 300 chars: {text[:300]!r}")
            raise MalformedResponseError(
                "Failed to parse the analysis response. Please try again."
            ) from e

        try:
            analysis = parse_analysis(payload)
        except SchemaValidationError as e:
            _log(f"  [Gemini] Schema rejected: {e}")
            raise

        _log(
            f"  Score {analysis.viability_score:g}, {len(analysis.competitors)} competitors, "
            f"{len(analysis.recommendations)} recommendations"
        )
        _log(f"═══ DONE in {time.time()-start:.1f}s ═══")
        return analysis


# ═══════════════════════════════════════
# Provider selection
# ═══════════════════════════════════════

def build_analyzer(settings: Settings) -> IdeaAnalyzer:
    if settings.use_mock_analysis:
        return MockAnalysisProvider(delay=settings.mock_delay_seconds)
    return GeminiAnalysisClient.from_settings(settings)
