"""
Unit tests for the HTML report builder.

Pure functions, no app or browser needed. The report date is pinned
through the `today` argument wherever output is compared.
"""

from datetime import date

import pytest

from readiness_report.schemas.assessment import AssessmentResult, parse_assessment
from readiness_report.services.report_builder import (
    build_country_cards,
    build_fallback_html,
    build_report_html,
    build_score_cards,
    country_flag,
    country_match,
    format_number,
    format_report_date,
    round_half_up,
    score_band,
)

REPORT_DAY = date(2025, 3, 5)


# --- Score bands ---

@pytest.mark.parametrize("percentage, band", [
    (100, "excellent"),
    (80, "excellent"),
    (79, "good"),
    (60, "good"),
    (59, "average"),
    (40, "average"),
    (39, "weak"),
    (0, "weak"),
    (-5, "weak"),
    (150, "excellent"),
])
def test_score_band_boundaries(percentage, band):
    assert score_band(percentage) == band


@pytest.mark.parametrize("value, expected", [
    (79.5, 80),
    (79.4, 79),
    (84.5, 85),  # round() would give 84
    (0.5, 1),
    (60, 60),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_score_cards_follow_category_order_and_skip_missing():
    cards = build_score_cards({
        "Support System": 55,
        "Financial Planning": 79.6,
        "Made Up Category": 99,
    })

    assert [c["label"] for c in cards] == ["Financial Planning", "Support System"]
    assert cards[0] == {
        "label": "Financial Planning",
        "weight": "25%",
        "percentage": 80,
        "band": "excellent",
    }
    assert cards[1]["band"] == "average"
    assert cards[1]["weight"] == "10%"


def test_score_card_zero_is_rendered():
    cards = build_score_cards({"Career Alignment": 0})

    assert cards == [
        {"label": "Career Alignment", "weight": "20%", "percentage": 0, "band": "weak"},
    ]


def test_score_cards_out_of_range_not_clamped():
    cards = build_score_cards({"Academic Readiness": 150, "Career Alignment": -10})

    assert cards[0]["percentage"] == 150
    assert cards[1]["percentage"] == -10


# --- Country cards ---

def test_country_match_steps_down_by_15():
    assert [country_match(i) for i in range(3)] == [100, 85, 70]


def test_country_flags():
    assert country_flag("Canada") == "🇨🇦"
    assert country_flag("United Arab Emirates") == "🇦🇪"
    assert country_flag("Atlantis") == "🌍"
    assert country_flag("") == "🌍"


def test_country_cards_are_ranked():
    cards = build_country_cards(["Ireland", "Narnia"])

    assert cards == [
        {"rank": 1, "name": "Ireland", "flag": "🇮🇪", "match": 100},
        {"rank": 2, "name": "Narnia", "flag": "🌍", "match": 85},
    ]


# --- Formatting ---

@pytest.mark.parametrize("day, text", [
    (date(2025, 3, 5), "March 5, 2025"),
    (date(2024, 12, 31), "December 31, 2024"),
    (date(2026, 1, 1), "January 1, 2026"),
])
def test_format_report_date(day, text):
    assert format_report_date(day) == text


def test_format_number():
    assert format_number(72) == "72"
    assert format_number(72.0) == "72"
    assert format_number(72.5) == "72.5"


# --- Full report ---

def test_report_contains_all_sections(full_payload):
    html = build_report_html(parse_assessment(full_payload), today=REPORT_DAY)

    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert "D-Vivid Consultant" in html
    assert "Jane Doe" in html
    assert "Assessment Date" in html
    assert html.count("March 5, 2025") == 2  # info grid + footer
    assert "<h3>72%</h3>" in html
    assert "Overall Readiness Index: Moderately Ready" in html

    # Six score cards with the right bands
    assert html.count('class="score-card"') == 6
    assert 'class="score-fill excellent" style="width: 82%"' in html
    assert 'class="score-fill good" style="width: 75%"' in html
    assert 'class="score-fill good" style="width: 60%"' in html
    assert 'class="score-fill average" style="width: 45%"' in html
    assert 'class="score-fill weak" style="width: 39%"' in html
    assert "Personal &amp; Cultural" in html

    assert "Strong academic record and clear career goals." in html
    assert "Limited savings for the first semester." in html
    assert "Apply for scholarships before December." in html

    # Countries: ranked, synthetic match, globe for unknown
    assert "Recommended Study Destinations" in html
    assert html.count('class="country-card"') == 3
    assert "100% Match" in html
    assert "85% Match" in html
    assert "70% Match" in html
    assert "🇨🇦" in html
    assert "🇩🇪" in html
    assert "🌍</div>" in html


def test_report_defaults_for_missing_fields():
    html = build_report_html(AssessmentResult(student_name="Sam"), today=REPORT_DAY)

    assert "No strengths identified" in html
    assert "No gaps identified" in html
    assert "No recommendations provided" in html
    assert "Overall Readiness Index: Needs Assessment" in html
    assert "<h3>0%</h3>" in html
    assert 'class="score-card"' not in html
    assert "Recommended Study Destinations" not in html


def test_report_escapes_markup():
    result = AssessmentResult(
        student_name="<script>alert(1)</script>",
        strengths="Good at <b>maths</b>",
    )

    html = build_report_html(result, today=REPORT_DAY)

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "Good at &lt;b&gt;maths&lt;/b&gt;" in html


def test_report_is_deterministic_apart_from_date(full_payload):
    result = parse_assessment(full_payload)

    first = build_report_html(result, today=REPORT_DAY)
    second = build_report_html(result, today=REPORT_DAY)
    other_day = build_report_html(result, today=date(2025, 3, 6))

    assert first == second
    assert other_day != first
    assert other_day.replace("March 6, 2025", "March 5, 2025") == first


def test_report_defaults_to_today():
    html = build_report_html(AssessmentResult(student_name="Sam"))

    assert format_report_date(date.today()) in html


# --- Fallback report ---

def test_fallback_report(full_payload):
    html = build_fallback_html(parse_assessment(full_payload))

    assert "<title>Study Abroad Report - Jane Doe</title>" in html
    assert "<h1>Study Abroad Readiness Report</h1>" in html
    assert "<h2>Student: Jane Doe</h2>" in html
    assert "Moderately Ready" in html
    assert "Strong academic record and clear career goals." in html
    assert "Apply for scholarships before December." in html
    assert (
        "Note: This is a simplified report. "
        "For detailed analysis, please retry PDF generation."
    ) in html
    # The fallback is deliberately minimal
    assert "Limited savings" not in html
    assert "score-card" not in html


def test_fallback_report_defaults():
    html = build_fallback_html(AssessmentResult(student_name="Sam"))

    assert "<strong>Overall Readiness Index:</strong> N/A" in html
    assert "<strong>Readiness Level:</strong> Needs Assessment" in html
    assert "No strengths identified" in html
    assert "No recommendations provided" in html
