"""
Idea Validator Analysis Router

  POST /api/validate     field-level checks only, always 200
  POST /api/analyze      validate → analyze (Gemini or mock) → IdeaAnalysis
  POST /api/export/pdf   IdeaAnalysis → startup-analysis.pdf

Analyzer failures are terminal per request and never retried here.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from idea_validator.analysis.errors import (
    AnalysisError,
    ConfigurationError,
    FormValidationError,
    SchemaValidationError,
)
from idea_validator.analysis.exporter import REPORT_FILENAME, ReportExporter
from idea_validator.analysis.schemas import FormValidationResult, IdeaAnalysis, IdeaFormData
from idea_validator.analysis.service import IdeaAnalyzer, build_analyzer
from idea_validator.analysis.validation import validate_form
from idea_validator.config import get_settings, Settings

logger = logging.getLogger(__name__)
router = APIRouter()


def get_analyzer(settings: Settings = Depends(get_settings)) -> IdeaAnalyzer:
    return build_analyzer(settings)


def get_exporter() -> ReportExporter:
    return ReportExporter()


def _analysis_error_detail(err: AnalysisError) -> dict:
    detail = {"message": err.message, "error": type(err).__name__}
    if isinstance(err, SchemaValidationError):
        detail["violations"] = [v.to_dict() for v in err.violations]
    return detail


def _validation_error_detail(err: FormValidationError) -> dict:
    result: FormValidationResult = err.result
    return {"message": "Validation Error", "errors": result.errors, "codes": result.codes}


# ═══════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════

@router.post("/validate")
async def validate(form: IdeaFormData):
    return validate_form(form).model_dump(by_alias=True)


@router.post("/analyze")
async def analyze(
    form: IdeaFormData,
    analyzer: IdeaAnalyzer = Depends(get_analyzer),
):
    try:
        result = validate_form(form)
        if not result.is_valid:
            raise FormValidationError(result)
        analysis = await analyzer.analyze(form)
        return analysis.to_wire()
    except FormValidationError as e:
        raise HTTPException(status_code=422, detail=_validation_error_detail(e))
    except ConfigurationError as e:
        logger.error(f"Analysis unavailable: {e.message}")
        raise HTTPException(status_code=503, detail=_analysis_error_detail(e))
    except AnalysisError as e:
        logger.warning(f"Analysis failed ({type(e).__name__}): {e.message}")
        raise HTTPException(status_code=502, detail=_analysis_error_detail(e))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Analysis failed")
        raise HTTPException(status_code=500, detail="Analysis failed. Please try again.")


@router.post("/export/pdf")
async def export_pdf(
    analysis: IdeaAnalysis,
    exporter: ReportExporter = Depends(get_exporter),
):
    try:
        pdf = await exporter.export_pdf(analysis)
    except Exception:
        logger.exception("PDF export failed")
        raise HTTPException(status_code=500, detail="Error generating PDF")
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )
