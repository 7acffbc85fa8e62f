"""
Exception taxonomy for report generation.

Every ReportError knows the HTTP status it maps to and a message that is
safe to show the client. Internal detail (tracebacks, Playwright error
text) goes to the server log only.

    ReportError
    ├── ValidationError          400  missing name / unparseable payload
    ├── ServiceBusyError         503  render queue full or wait timed out
    ├── RenderError              500  generic "Failed to generate PDF"
    │   ├── BrowserLaunchError
    │   ├── RenderTimeoutError        (stage="content" or "pdf")
    │   ├── EmptyOutputError          rasterizer returned zero bytes
    │   └── PdfGenerationError        PDF step failed -> HTML fallback
    │       └── PdfTimeoutError       (also a RenderTimeoutError)
    └── UnexpectedError          500  anything we didn't anticipate
"""

GENERIC_FAILURE_MESSAGE = "Failed to generate PDF"


class ReportError(Exception):
    """Base class for errors that map cleanly onto an HTTP response."""

    status_code = 500
    public_message = GENERIC_FAILURE_MESSAGE

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class ValidationError(ReportError):
    """The request body is missing the student name or can't be parsed.

    Unlike the other errors, the message IS the client-facing message.
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class ServiceBusyError(ReportError):
    """Too many renders in flight; the request was not admitted."""

    status_code = 503
    public_message = "PDF renderer is busy, please retry shortly"


class RenderError(ReportError):
    """Something went wrong while driving the headless browser."""


class BrowserLaunchError(RenderError):
    pass


class RenderTimeoutError(RenderError):
    """A browser step exceeded its time budget."""

    def __init__(self, stage: str, message: str | None = None):
        super().__init__(message or f"Timed out during {stage} stage")
        self.stage = stage


class EmptyOutputError(RenderError):
    public_message = "PDF generation failed - empty buffer"


class PdfGenerationError(RenderError):
    """page.pdf() failed. The router answers with the fallback HTML report."""


class PdfTimeoutError(PdfGenerationError, RenderTimeoutError):
    def __init__(self, message: str | None = None):
        RenderTimeoutError.__init__(self, "pdf", message)


class UnexpectedError(ReportError):
    pass
