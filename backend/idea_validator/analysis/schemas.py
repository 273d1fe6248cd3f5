from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IdeaFormData(CamelModel):
    # Missing fields default to "" so the form validator reports them, not the body parser.
    idea: str = ""
    target_market: str = ""
    unique_value_proposition: str = ""
    business_model: str = ""


class FormValidationResult(CamelModel):
    is_valid: bool
    errors: dict[str, str] = {}
    codes: dict[str, str] = {}


# ═══════════════════════════════════════
# Analysis result
# ═══════════════════════════════════════

class FrozenCamelModel(BaseModel):
    # Wire names only: model output keyed in snake_case is missing its fields.
    model_config = ConfigDict(alias_generator=to_camel, frozen=True, extra="ignore")


class Competitor(FrozenCamelModel):
    name: str
    description: str


class SwotAnalysis(FrozenCamelModel):
    strengths: list[str]
    weaknesses: list[str]
    opportunities: list[str]
    threats: list[str]


class IdeaAnalysis(FrozenCamelModel):
    idea_summary: str
    # strict: numeric strings and booleans are not scores
    viability_score: Annotated[float, Field(strict=True, ge=0, le=100)]
    swot_analysis: SwotAnalysis
    competitors: list[Competitor]
    market_insights: list[str]
    recommendations: list[str]

    @field_serializer("viability_score")
    def _serialize_score(self, score: float) -> int | float:
        return int(score) if score.is_integer() else score

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


# ═══════════════════════════════════════
# Gemini responseSchema (mirrors IdeaAnalysis)
# ═══════════════════════════════════════

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

IDEA_ANALYSIS_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "ideaSummary": {"type": "string"},
        "viabilityScore": {"type": "number", "minimum": 0, "maximum": 100},
        "swotAnalysis": {
            "type": "object",
            "properties": {
                "strengths": _STRING_LIST,
                "weaknesses": _STRING_LIST,
                "opportunities": _STRING_LIST,
                "threats": _STRING_LIST,
            },
            "required": ["strengths", "weaknesses", "opportunities", "threats"],
        },
        "competitors": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                },
                "required": ["name", "description"],
            },
        },
        "marketInsights": _STRING_LIST,
        "recommendations": _STRING_LIST,
    },
    "required": [
        "ideaSummary",
        "viabilityScore",
        "swotAnalysis",
        "competitors",
        "marketInsights",
        "recommendations",
    ],
}
