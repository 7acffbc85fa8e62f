"""
Test fixtures shared across the test suite.

Architecture:
- Endpoint tests use the REAL FastAPI app through httpx's ASGITransport,
  so routing, the ReportError handler and response headers are all
  exercised for real.
- The headless browser is NOT started in tests. The PDF exporter
  dependency is overridden with FakeExporter, which returns canned bytes
  or raises whatever error a test needs. The exporter's own Playwright
  protocol is tested separately against fake browser objects
  (test_pdf_export.py).
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from readiness_report.main import app
from readiness_report.routers.reports import get_pdf_exporter
from readiness_report.services.render_gate import RenderGate

FAKE_PDF = b"%PDF-1.4\n% fake report\n%%EOF\n"


class FakeExporter:
    """Stands in for PDFExporter in endpoint tests.

    Args:
        result: bytes to return from export(), or an exception to raise.
    """

    def __init__(self, result=FAKE_PDF):
        self.result = result
        self.gate = RenderGate(max_concurrent=2, max_queued=2, queue_timeout=1)
        self.calls: list[str] = []

    async def export(self, html: str) -> bytes:
        self.calls.append(html)
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


@pytest.fixture
def fake_exporter():
    """A FakeExporter wired into the app for the duration of one test."""
    exporter = FakeExporter()
    app.dependency_overrides[get_pdf_exporter] = lambda: exporter
    yield exporter
    app.dependency_overrides.pop(get_pdf_exporter, None)


@pytest_asyncio.fixture
async def client(fake_exporter):
    """Async HTTP test client against the real app (fake exporter)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# --- Payload fixtures ---

@pytest.fixture
def full_payload() -> dict:
    """A complete assessment as the scoring frontend sends it."""
    return {
        "Student Name": "Jane Doe",
        "Scores": {
            "Financial Planning": 82,
            "Academic Readiness": 74.6,
            "Career Alignment": 60,
            "Personal & Cultural": 45,
            "Practical Readiness": 39,
            "Support System": 90,
        },
        "Overall Readiness Index": 72,
        "Readiness Level": "Moderately Ready",
        "Strengths": "Strong academic record and clear career goals.",
        "Gaps": "Limited savings for the first semester.",
        "Recommendations": "Apply for scholarships before December.",
        "Country Fit (Top 3)": ["Canada", "Germany", "Atlantis"],
    }


@pytest.fixture
def minimal_payload() -> dict:
    """Only the required field."""
    return {"studentName": "Jane Doe"}
