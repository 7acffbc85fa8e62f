"""
Pydantic schemas for the assessment payload.

The scoring frontend sends keys in display form ("Student Name",
"Country Fit (Top 3)", ...), and older clients send "studentName".
AssessmentResult normalizes all of that into one snake_case struct so
nothing downstream ever has to guess which spelling it got.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from readiness_report.errors import ValidationError

# Accepted spellings for the student name, checked in this order
STUDENT_NAME_KEYS = ("Student Name", "studentName")

MISSING_NAME_MESSAGE = "Missing student name"
INVALID_PAYLOAD_MESSAGE = "Invalid assessment payload"

Number = Union[int, float]


class AssessmentResult(BaseModel):
    """One scored readiness assessment. Lives for a single request."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    student_name: str
    scores: dict[str, Optional[Number]] = Field(default_factory=dict, alias="Scores")
    overall_index: Optional[Number] = Field(default=None, alias="Overall Readiness Index")
    readiness_level: Optional[str] = Field(default=None, alias="Readiness Level")
    strengths: Optional[str] = Field(default=None, alias="Strengths")
    gaps: Optional[str] = Field(default=None, alias="Gaps")
    recommendations: Optional[str] = Field(default=None, alias="Recommendations")
    country_fit: list[str] = Field(default_factory=list, alias="Country Fit (Top 3)")

    @field_validator("readiness_level", "strengths", "gaps", "recommendations", mode="before")
    @classmethod
    def join_text_lists(cls, v: Any) -> Any:
        """LLM output sometimes arrives as a list of bullet strings."""
        if isinstance(v, (list, tuple)):
            v = ", ".join(str(item) for item in v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("scores", mode="before")
    @classmethod
    def null_scores_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("country_fit", mode="before")
    @classmethod
    def null_countries_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("overall_index", mode="before")
    @classmethod
    def blank_index_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def extract_student_name(body: Any) -> Optional[str]:
    """Return the first non-blank student name in the body, or None."""
    if not isinstance(body, dict):
        return None
    for key in STUDENT_NAME_KEYS:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_assessment(body: Any) -> AssessmentResult:
    """Validate a raw JSON body and normalize it into an AssessmentResult.

    The name check runs first and on its own, so a body with no name
    always gets the "Missing student name" error, whatever else is wrong
    with it.

    Raises:
        ValidationError: name missing, or the rest of the body is malformed.
    """
    name = extract_student_name(body)
    if name is None:
        raise ValidationError(MISSING_NAME_MESSAGE)

    fields = {k: v for k, v in body.items() if k not in STUDENT_NAME_KEYS}
    try:
        return AssessmentResult.model_validate({**fields, "student_name": name})
    except PydanticValidationError as e:
        raise ValidationError(INVALID_PAYLOAD_MESSAGE) from e


class ErrorResponse(BaseModel):
    """Body of every non-2xx response from the report endpoints."""
    error: str
