"""
Report API endpoints.

POST /api/generate-pdf — render an assessment as a downloadable PDF.

Request flow:
1. Parse + validate the JSON body (400 if the student name is missing)
2. Build the report HTML
3. Rasterize it with headless Chromium
4. Return the PDF as an attachment

If step 3 fails at the PDF-printing stage specifically, we still answer
200 with a simplified HTML report as the download. A degraded report
beats an error page for a student who just finished the assessment.
Every other failure is a JSON error: {"error": "..."}.
"""

import logging
import re
import unicodedata
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from readiness_report.config import settings
from readiness_report.constants import FALLBACK_FILENAME_PREFIX, PDF_FILENAME_PREFIX
from readiness_report.errors import PdfGenerationError, ReportError, UnexpectedError
from readiness_report.schemas.assessment import (
    AssessmentResult,
    ErrorResponse,
    parse_assessment,
)
from readiness_report.services.pdf_export import PDFExporter
from readiness_report.services.report_builder import (
    build_fallback_html,
    build_report_html,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])


def get_pdf_exporter(request: Request) -> PDFExporter:
    """FastAPI dependency that provides the shared PDF exporter.

    The lifespan normally creates it at startup; if it hasn't run
    (e.g. a bare ASGI test client) we create it on first use.
    Tests swap it out via app.dependency_overrides.
    """
    exporter = getattr(request.app.state, "pdf_exporter", None)
    if exporter is None:
        exporter = PDFExporter.from_settings(settings)
        request.app.state.pdf_exporter = exporter
    return exporter


@router.post(
    "/generate-pdf",
    response_class=Response,
    responses={
        200: {
            "content": {"application/pdf": {}, "text/html": {}},
            "description": "The PDF report, or a simplified HTML report if PDF rendering failed.",
        },
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def generate_pdf(
    request: Request,
    exporter: PDFExporter = Depends(get_pdf_exporter),
):
    """Generate the study-abroad readiness report for one student.

    The body is the scored assessment as produced by the frontend.
    Only "Student Name" (or "studentName") is required; every other
    field falls back to placeholder text.
    """
    try:
        body = await request.json()
        return await _render_report(body, exporter)
    except ReportError:
        raise  # handled by the app-level ReportError handler
    except Exception as e:
        logger.exception("❌ Error generating PDF")
        raise UnexpectedError() from e


async def _render_report(body: Any, exporter: PDFExporter) -> Response:
    if isinstance(body, dict):
        logger.info("📄 PDF generation requested, fields: %s", sorted(body.keys()))
    logger.debug("📄 PDF generation payload: %r", body)

    result = parse_assessment(body)

    html = build_report_html(result)
    logger.info("📄 Generated HTML content length: %d", len(html))

    try:
        pdf_bytes = await exporter.export(html)
    except PdfGenerationError:
        logger.warning(
            "❌ PDF generation failed for %s, sending simplified HTML report",
            result.student_name,
            exc_info=True,
        )
        return _fallback_response(result)

    logger.info("📄 Returning PDF response with size: %d", len(pdf_bytes))
    filename = f"{PDF_FILENAME_PREFIX}-{slugify_name(result.student_name)}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": attachment_header(filename)},
    )


def _fallback_response(result: AssessmentResult) -> HTMLResponse:
    filename = f"{FALLBACK_FILENAME_PREFIX}-{slugify_name(result.student_name)}.html"
    return HTMLResponse(
        content=build_fallback_html(result),
        status_code=200,
        headers={"Content-Disposition": attachment_header(filename)},
    )


# --- Filename helpers ---

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_FILENAME_CHARS = re.compile(r'["\\\x00-\x1f\x7f]')


def slugify_name(name: str) -> str:
    """'Jane  Doe' -> 'jane-doe'.

    Whitespace runs become a single dash, then everything is lowercased.
    Characters that would break a quoted header value are dropped.
    """
    slug = _WHITESPACE.sub("-", name).lower()
    return _UNSAFE_FILENAME_CHARS.sub("", slug)


def attachment_header(filename: str) -> str:
    """Build a Content-Disposition value that survives any student name.

    HTTP headers are latin-1 on the wire, so a name like 'Zoë Li' or
    '李明' needs an ASCII filename= for old clients plus the RFC 5987
    filename*= form that modern browsers prefer.
    """
    if filename.isascii():
        return f'attachment; filename="{filename}"'

    ascii_name = (
        unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    )
    return (
        f'attachment; filename="{ascii_name}"; '
        f"filename*=UTF-8''{quote(filename)}"
    )
