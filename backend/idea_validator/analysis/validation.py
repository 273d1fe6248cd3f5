"""
Validation for both ends of an analysis.

Form side: required-field and minimum-length checks, all evaluated so every
field error surfaces at once.

Result side: a declarative shape check. The IdeaAnalysis model is the schema;
its validation errors are flattened into SchemaViolation records so a caller
can see every defect in a rejected payload, not just the first.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from idea_validator.analysis.errors import SchemaValidationError
from idea_validator.analysis.schemas import FormValidationResult, IdeaAnalysis, IdeaFormData

MIN_IDEA_LENGTH = 20

EMPTY_FIELD = "EmptyField"
TOO_SHORT = "TooShort"

# wire name → (attribute, message when blank)
REQUIRED_FIELDS = {
    "idea": ("idea", "Please describe your startup idea"),
    "targetMarket": ("target_market", "Please specify your target market"),
    "uniqueValueProposition": ("unique_value_proposition", "Please explain your unique value proposition"),
    "businessModel": ("business_model", "Please describe your business model"),
}

TOO_SHORT_MESSAGE = (
    f"Please provide a more detailed description of your idea "
    f"(at least {MIN_IDEA_LENGTH} characters)"
)


# ═══════════════════════════════════════
# Form
# ═══════════════════════════════════════

def validate_form(form: IdeaFormData) -> FormValidationResult:
    errors: dict[str, str] = {}
    codes: dict[str, str] = {}

    for field, (attr, empty_message) in REQUIRED_FIELDS.items():
        value = (getattr(form, attr) or "").strip()
        if not value:
            errors[field] = empty_message
            codes[field] = EMPTY_FIELD
        elif field == "idea" and len(value) < MIN_IDEA_LENGTH:
            errors[field] = TOO_SHORT_MESSAGE
            codes[field] = TOO_SHORT

    return FormValidationResult(is_valid=not errors, errors=errors, codes=codes)


# ═══════════════════════════════════════
# Analysis shape
# ═══════════════════════════════════════

@dataclass(frozen=True)
class SchemaViolation:
    path: str
    message: str
    type: str

    def to_dict(self) -> dict:
        return {"path": self.path, "message": self.message, "type": self.type}


def _violations_from(exc: ValidationError) -> list[SchemaViolation]:
    violations = []
    for err in exc.errors(include_url=False):
        path = ".".join(str(part) for part in err["loc"]) or "$"
        violations.append(SchemaViolation(path=path, message=err["msg"], type=err["type"]))
    return violations


def validate_analysis(payload: Any) -> list[SchemaViolation]:
    """Return every structural violation in payload. Empty list means valid."""
    try:
        IdeaAnalysis.model_validate(payload)
    except ValidationError as e:
        return _violations_from(e)
    return []


def parse_analysis(payload: Any) -> IdeaAnalysis:
    """Build an IdeaAnalysis from payload or raise SchemaValidationError. No partial results."""
    try:
        return IdeaAnalysis.model_validate(payload)
    except ValidationError as e:
        violations = _violations_from(e)
        summary = "; ".join(f"{v.path}: {v.message}" for v in violations[:5])
        raise SchemaValidationError(
            f"Invalid analysis structure received from Gemini ({summary})",
            violations=violations,
        ) from e
