"""
HTML report builder — turns an AssessmentResult into printable HTML.

Two documents come out of here:
1. The full readiness report: branded header/footer, overall index
   banner, one bar-chart card per score category, the strengths / gaps /
   recommendations sections, and ranked destination-country cards.
   This is what Chromium rasterizes into the PDF.
2. The fallback report: a bare inline-styled page with just the headline
   numbers and text. Sent as an .html download when PDF rendering fails,
   so the student always gets *something*.

Both are Jinja2 templates under readiness_report/templates/. Autoescape
is on, so free text coming from the scoring model can't inject markup.

The builders are pure: same input, same output, except for the report
date, which is "today" unless the caller pins it.
"""

import math
from datetime import date
from pathlib import Path
from typing import Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from readiness_report.constants import (
    BRAND_LOGO_URL,
    BRAND_NAME,
    BRAND_TAGLINE,
    COUNTRY_FLAGS,
    DEFAULT_FLAG,
    DEFAULT_GAPS,
    DEFAULT_OVERALL_INDEX,
    DEFAULT_READINESS_LEVEL,
    DEFAULT_RECOMMENDATIONS,
    DEFAULT_STRENGTHS,
    FALLBACK_NOTE,
    FALLBACK_OVERALL_INDEX,
    MATCH_STEP,
    SCORE_BANDS,
    SCORE_CATEGORIES,
    TOP_MATCH,
    WEAK_BAND,
)
from readiness_report.schemas.assessment import AssessmentResult

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


# --- Small formatting helpers ---

def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side, like the web UI does.

    Python's round() is banker's rounding (round(84.5) == 84), which would
    make the PDF disagree with the score shown on screen.
    """
    return math.floor(value + 0.5)


def score_band(percentage: float) -> str:
    """Map a percentage to its bar color band.

    >>> score_band(80), score_band(79), score_band(40), score_band(39)
    ('excellent', 'good', 'average', 'weak')
    """
    for minimum, band in SCORE_BANDS:
        if percentage >= minimum:
            return band
    return WEAK_BAND


def country_match(index: int) -> int:
    """Synthetic match % for the country at rank position `index` (0-based).

    Not a real fit computation: the list is already ranked, this just
    gives each step down a visibly lower number. Not clamped.
    """
    return TOP_MATCH - MATCH_STEP * index


def country_flag(country: str) -> str:
    return COUNTRY_FLAGS.get(country, DEFAULT_FLAG)


def format_report_date(day: date) -> str:
    """'March 5, 2025' — month name, unpadded day, four-digit year."""
    return f"{day:%B} {day.day}, {day.year}"


def format_number(value: Union[int, float]) -> str:
    """Render 72.0 as '72' but keep real decimals (72.5)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# --- Card builders ---

def build_score_cards(scores: dict) -> list[dict]:
    """One card per known category that has a score, in display order.

    Categories the payload doesn't mention (or sends as null) are skipped.
    Unknown category names in the payload are ignored.
    """
    cards = []
    for category in SCORE_CATEGORIES:
        value = scores.get(category.label)
        if value is None:
            continue
        percentage = round_half_up(value)
        cards.append({
            "label": category.label,
            "weight": category.weight,
            "percentage": percentage,
            "band": score_band(percentage),
        })
    return cards


def build_country_cards(countries: list[str]) -> list[dict]:
    return [
        {
            "rank": index + 1,
            "name": country,
            "flag": country_flag(country),
            "match": country_match(index),
        }
        for index, country in enumerate(countries)
    ]


# --- Documents ---

def build_report_html(result: AssessmentResult, today: Optional[date] = None) -> str:
    """Render the full readiness report.

    Args:
        result: The normalized assessment.
        today: Report date. Defaults to date.today(); tests pin it.

    Returns:
        A complete HTML document as a string. Never raises for missing
        optional fields; they render as their placeholder text.
    """
    report_date = format_report_date(today or date.today())
    overall_index = (
        result.overall_index if result.overall_index is not None else DEFAULT_OVERALL_INDEX
    )

    template = env.get_template("report.html")
    return template.render(
        brand_name=BRAND_NAME,
        brand_tagline=BRAND_TAGLINE,
        logo_url=BRAND_LOGO_URL,
        student_name=result.student_name,
        report_date=report_date,
        overall_index=format_number(overall_index),
        readiness_level=result.readiness_level or DEFAULT_READINESS_LEVEL,
        score_cards=build_score_cards(result.scores),
        strengths=result.strengths or DEFAULT_STRENGTHS,
        gaps=result.gaps or DEFAULT_GAPS,
        recommendations=result.recommendations or DEFAULT_RECOMMENDATIONS,
        country_cards=build_country_cards(result.country_fit),
    )


def build_fallback_html(result: AssessmentResult) -> str:
    """Render the simplified report sent when PDF rasterization fails."""
    overall_index = (
        format_number(result.overall_index)
        if result.overall_index is not None
        else FALLBACK_OVERALL_INDEX
    )

    template = env.get_template("fallback.html")
    return template.render(
        student_name=result.student_name,
        overall_index=overall_index,
        readiness_level=result.readiness_level or DEFAULT_READINESS_LEVEL,
        strengths=result.strengths or DEFAULT_STRENGTHS,
        recommendations=result.recommendations or DEFAULT_RECOMMENDATIONS,
        note=FALLBACK_NOTE,
    )
