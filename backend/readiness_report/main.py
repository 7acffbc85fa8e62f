"""
Study Abroad Readiness Report — FastAPI Application

This is the entry point for the backend. It:
1. Creates the FastAPI app instance
2. Configures CORS (so the assessment frontend can call us)
3. Registers route handlers and the error handler
4. Sets up startup/shutdown lifecycle events

Run with:
    uvicorn readiness_report.main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from readiness_report.config import settings
from readiness_report.errors import ReportError
from readiness_report.logging_config import setup_logging
from readiness_report.routers import reports
from readiness_report.services.pdf_export import PDFExporter

logger = logging.getLogger(__name__)

SERVICE_NAME = "Study Abroad Readiness Report"
VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic.

    Code before 'yield' runs on startup.
    Code after 'yield' runs on shutdown.
    """
    # --- Startup ---
    setup_logging()
    app.state.pdf_exporter = PDFExporter.from_settings(settings)
    logger.info(
        "🚀 Starting %s API (max %d concurrent renders)...",
        SERVICE_NAME, settings.MAX_CONCURRENT_RENDERS,
    )

    yield  # App is running, handling requests

    # --- Shutdown ---
    logger.info("👋 Shutting down...")


app = FastAPI(
    title=f"{SERVICE_NAME} API",
    description="Renders psychometric study-abroad readiness assessments as PDF reports",
    version=VERSION,
    lifespan=lifespan,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(ReportError)
async def report_error_handler(request: Request, exc: ReportError):
    """Turn any ReportError into {"error": <client-safe message>}.

    The exception's own text (which may carry Playwright internals) is
    logged, never returned.
    """
    if exc.status_code >= 500:
        logger.error(
            "❌ %s on %s: %s", type(exc).__name__, request.url.path, exc,
            exc_info=exc,
        )
    else:
        logger.warning("⚠️ %s on %s: %s", type(exc).__name__, request.url.path, exc)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.public_message},
    )


app.include_router(reports.router)


# --- Health Check Endpoints ---

@app.get("/", tags=["health"])
async def root():
    """Root endpoint — confirms the API is alive."""
    return {
        "service": SERVICE_NAME,
        "status": "running",
        "version": VERSION,
    }


@app.get("/health", tags=["health"])
async def health_check(exporter: PDFExporter = Depends(reports.get_pdf_exporter)):
    """Health check with render queue stats.

    Reports 'degraded' while every render slot is busy, so a load
    balancer can prefer another instance.
    """
    gate = exporter.gate
    saturated = gate.active >= gate.max_concurrent

    return {
        "status": "degraded" if saturated else "healthy",
        "renderer": gate.stats(),
        "environment": settings.APP_ENV,
    }
