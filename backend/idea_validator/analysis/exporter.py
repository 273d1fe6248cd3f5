"""PDF export for idea analyses using Jinja2 and WeasyPrint."""

import asyncio
import logging
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from idea_validator.analysis.schemas import IdeaAnalysis

TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_FILENAME = "startup-analysis.pdf"

logger = logging.getLogger(__name__)


def score_band(score: float) -> str:
    """Bucket a viability score for styling the score bar."""
    if score >= 70:
        return "strong"
    if score >= 40:
        return "moderate"
    return "weak"


class ReportExporter:
    """Render an IdeaAnalysis as an HTML report and print it to PDF.

    PDF rendering runs in a worker thread via asyncio.to_thread() so a large
    report does not block the event loop.
    """

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=True,
        )
        self.env.filters["score_band"] = score_band

    def render_html(self, analysis: IdeaAnalysis, generated_date: str | None = None) -> str:
        if generated_date is None:
            generated_date = datetime.now().strftime("%B %d, %Y")
        template = self.env.get_template("report.html")
        return template.render(
            analysis=analysis,
            generated_date=generated_date,
            document_title="Startup Idea Analysis",
        )

    async def export_pdf(self, analysis: IdeaAnalysis, generated_date: str | None = None) -> bytes:
        html_content = self.render_html(analysis, generated_date)

        try:
            from weasyprint import HTML
        except ImportError as e:
            raise ImportError(
                "WeasyPrint not installed. Install with: pip install weasyprint"
            ) from e

        pdf_bytes = await asyncio.to_thread(
            lambda: HTML(string=html_content, base_url=str(TEMPLATE_DIR)).write_pdf()
        )
        logger.info(f"Rendered analysis PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes
