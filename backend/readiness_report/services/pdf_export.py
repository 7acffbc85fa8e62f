"""
PDF exporter — rasterizes report HTML with headless Chromium.

Why a real browser instead of a PDF library? The report is designed as a
web page (CSS grid, gradients, web fonts, emoji flags). Chromium's print
pipeline renders it exactly like the on-screen version; pure-Python PDF
engines would need a separate layout.

Protocol per request (sequential, no retries):
1. Wait for a render slot (RenderGate) — 503 if the queue is full
2. Launch Chromium (sandbox + GPU disabled for containers)
3. Open a page, set default/navigation timeouts
4. Load the HTML, waiting only for DOMContentLoaded
5. Give fonts/images a bounded chance to finish (network idle)
6. Print to A4 PDF with backgrounds and fixed margins
7. Reject an empty buffer
The browser is closed on every path out, success or failure.

Usage:
    exporter = PDFExporter(gate=RenderGate(4, 16, 30))
    pdf_bytes = await exporter.export("<html>...</html>")
"""

import asyncio
import logging

from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from readiness_report.config import Settings
from readiness_report.constants import BROWSER_ARGS, PDF_FORMAT, PDF_MARGINS
from readiness_report.errors import (
    BrowserLaunchError,
    EmptyOutputError,
    PdfGenerationError,
    PdfTimeoutError,
    RenderTimeoutError,
)
from readiness_report.services.render_gate import RenderGate

logger = logging.getLogger(__name__)


class PDFExporter:
    """Drives one short-lived Chromium session per export() call.

    All timeouts are in milliseconds, matching Playwright's own API.
    """

    def __init__(
        self,
        gate: RenderGate,
        launch_timeout_ms: int = 30000,
        page_timeout_ms: int = 30000,
        content_timeout_ms: int = 30000,
        pdf_timeout_ms: int = 30000,
        settle_timeout_ms: int = 3000,
    ):
        self.gate = gate
        self.launch_timeout_ms = launch_timeout_ms
        self.page_timeout_ms = page_timeout_ms
        self.content_timeout_ms = content_timeout_ms
        self.pdf_timeout_ms = pdf_timeout_ms
        self.settle_timeout_ms = settle_timeout_ms

    @classmethod
    def from_settings(cls, settings: Settings) -> "PDFExporter":
        gate = RenderGate(
            max_concurrent=settings.MAX_CONCURRENT_RENDERS,
            max_queued=settings.MAX_QUEUED_RENDERS,
            queue_timeout=settings.QUEUE_TIMEOUT_SECONDS,
        )
        return cls(
            gate=gate,
            launch_timeout_ms=settings.BROWSER_LAUNCH_TIMEOUT_MS,
            page_timeout_ms=settings.PAGE_TIMEOUT_MS,
            content_timeout_ms=settings.CONTENT_TIMEOUT_MS,
            pdf_timeout_ms=settings.PDF_TIMEOUT_MS,
            settle_timeout_ms=settings.SETTLE_TIMEOUT_MS,
        )

    # ------------------------------------------------------------------
    # PUBLIC API
    # ------------------------------------------------------------------

    async def export(self, html: str) -> bytes:
        """Rasterize an HTML document into PDF bytes.

        Raises:
            ServiceBusyError: no render slot available.
            BrowserLaunchError: Chromium failed to start.
            RenderTimeoutError: the HTML didn't load in time.
            PdfGenerationError: page.pdf() failed or timed out
                (PdfTimeoutError). Callers fall back to HTML on this one.
            EmptyOutputError: Chromium returned zero bytes.
        """
        async with self.gate.slot():
            async with async_playwright() as playwright:
                browser = await self._launch(playwright)
                try:
                    return await self._render(browser, html)
                finally:
                    await self._close(browser)

    # ------------------------------------------------------------------
    # STEPS
    # ------------------------------------------------------------------

    async def _launch(self, playwright) -> Browser:
        try:
            browser = await playwright.chromium.launch(
                headless=True,
                args=list(BROWSER_ARGS),
                timeout=self.launch_timeout_ms,
            )
        except PlaywrightError as e:
            raise BrowserLaunchError(f"Chromium launch failed: {e}") from e
        logger.debug("🌐 Browser launched")
        return browser

    async def _render(self, browser: Browser, html: str) -> bytes:
        page = await browser.new_page()
        page.set_default_timeout(self.page_timeout_ms)
        page.set_default_navigation_timeout(self.page_timeout_ms)

        try:
            await page.set_content(
                html,
                wait_until="domcontentloaded",
                timeout=self.content_timeout_ms,
            )
        except PlaywrightTimeoutError as e:
            raise RenderTimeoutError("content") from e
        logger.info("📄 Page content loaded successfully")

        await self._wait_for_settle(page)

        pdf_bytes = await self._print_pdf(page)
        logger.info("📄 PDF generated, buffer size: %d", len(pdf_bytes))

        if not pdf_bytes:
            raise EmptyOutputError()
        return pdf_bytes

    async def _wait_for_settle(self, page: Page) -> None:
        """Let web fonts and the remote logo finish loading, up to a bound.

        DOMContentLoaded fires before @import'ed fonts and <img> are in.
        Waiting for network idle catches them; if the network never goes
        quiet we print anyway rather than fail the report.
        """
        if self.settle_timeout_ms <= 0:
            return
        try:
            await page.wait_for_load_state("networkidle", timeout=self.settle_timeout_ms)
        except PlaywrightTimeoutError:
            logger.warning(
                "⏳ Network not idle after %dms, printing with what has loaded",
                self.settle_timeout_ms,
            )

    async def _print_pdf(self, page: Page) -> bytes:
        # page.pdf() takes no timeout of its own, so bound it from outside
        try:
            return await asyncio.wait_for(
                page.pdf(
                    format=PDF_FORMAT,
                    print_background=True,
                    margin=dict(PDF_MARGINS),
                ),
                timeout=self.pdf_timeout_ms / 1000,
            )
        except asyncio.TimeoutError as e:
            raise PdfTimeoutError(
                f"PDF generation exceeded {self.pdf_timeout_ms}ms"
            ) from e
        except Exception as e:
            raise PdfGenerationError(f"PDF generation failed: {e}") from e

    async def _close(self, browser: Browser) -> None:
        """Close the browser without masking whatever happened before."""
        try:
            await browser.close()
        except PlaywrightError:
            logger.warning("⚠️ Browser close failed", exc_info=True)
