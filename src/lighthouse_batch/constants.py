# src/lighthouse_batch/constants.py
"""Centralized constants for the Lighthouse batch auditor.

File names, fixed timeouts and the CSV layout live here. Values a user can
change at runtime belong in config.py instead.
"""

# =============================================================================
# Default file locations
# =============================================================================

CONFIG_FILE = "config.json"
INPUT_CSV = "Crawler.csv"
OUTPUT_CSV = "LighthouseResults.csv"
REPORT_DIR = "lighthouse-reports"

# Column read from the input CSV
URL_COLUMN = "URL"


# =============================================================================
# Page login timeouts (milliseconds, Playwright units)
# =============================================================================

LOGIN_NAVIGATION_TIMEOUT_MS = 90_000
LOGIN_FIELD_TIMEOUT_MS = 30_000


# =============================================================================
# Lighthouse
# =============================================================================

LIGHTHOUSE_CATEGORIES = [
    "performance",
    "accessibility",
    "best-practices",
    "seo",
]


# =============================================================================
# Output table
# =============================================================================

# Marker written in place of scores and report link when an audit fails
ERROR_MARKER = "Error"

# Field id -> column title, in output order
RESULT_COLUMNS = {
    "Timestamp": "Timestamp",
    "URL": "URL",
    "Performance": "Performance",
    "Accessibility": "Accessibility",
    "BestPractices": "Best Practices",
    "SEO": "SEO",
    "Report": "Report",
}
