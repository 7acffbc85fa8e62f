"""
Fixed report values.

These never change at runtime, so they are plain named constants
(tuples and read-only mappings) rather than settings.
"""

from types import MappingProxyType
from typing import NamedTuple


class ScoreCategory(NamedTuple):
    label: str
    weight: str


# Display order of the score cards
SCORE_CATEGORIES: tuple[ScoreCategory, ...] = (
    ScoreCategory("Financial Planning", "25%"),
    ScoreCategory("Academic Readiness", "20%"),
    ScoreCategory("Career Alignment", "20%"),
    ScoreCategory("Personal & Cultural", "15%"),
    ScoreCategory("Practical Readiness", "10%"),
    ScoreCategory("Support System", "10%"),
)

# (minimum percentage, band) checked top-down; anything lower is WEAK_BAND
SCORE_BANDS: tuple[tuple[int, str], ...] = (
    (80, "excellent"),
    (60, "good"),
    (40, "average"),
)
WEAK_BAND = "weak"

# --- Country fit ---
COUNTRY_FLAGS = MappingProxyType({
    "Singapore": "🇸🇬",
    "Ireland": "🇮🇪",
    "Netherlands": "🇳🇱",
    "Canada": "🇨🇦",
    "Australia": "🇦🇺",
    "United Kingdom": "🇬🇧",
    "Germany": "🇩🇪",
    "United States": "🇺🇸",
    "India": "🇮🇳",
    "United Arab Emirates": "🇦🇪",
})
DEFAULT_FLAG = "🌍"

# Match % shown on a country card: TOP_MATCH - MATCH_STEP * rank_index
TOP_MATCH = 100
MATCH_STEP = 15

# --- Defaults for missing assessment fields ---
DEFAULT_STUDENT_NAME = "Student"
DEFAULT_READINESS_LEVEL = "Needs Assessment"
DEFAULT_STRENGTHS = "No strengths identified"
DEFAULT_GAPS = "No gaps identified"
DEFAULT_RECOMMENDATIONS = "No recommendations provided"
DEFAULT_OVERALL_INDEX = 0
FALLBACK_OVERALL_INDEX = "N/A"

FALLBACK_NOTE = (
    "Note: This is a simplified report. "
    "For detailed analysis, please retry PDF generation."
)

# --- Branding ---
BRAND_NAME = "D-Vivid Consultant"
BRAND_TAGLINE = "Strategic Counselling Circle"
BRAND_LOGO_URL = "https://iili.io/Jp021xX.png"

# --- Headless browser / PDF geometry ---
BROWSER_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)
PDF_FORMAT = "A4"
PDF_MARGINS = MappingProxyType({
    "top": "20mm",
    "right": "15mm",
    "bottom": "20mm",
    "left": "15mm",
})

# --- Download filenames ---
PDF_FILENAME_PREFIX = "psychometric-report"
FALLBACK_FILENAME_PREFIX = "study-abroad-report"
