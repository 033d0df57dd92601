"""
Configuration constants for the enrollment package.

This module contains all configuration values and constants used throughout
the enrollment advising logic. Centralizing these makes it easy to adjust
behavior as registrar policies change. Deployment values (API location,
token, log level) can be overridden through environment variables.
"""

import os


# =============================================================================
# API CONNECTION
# =============================================================================

# Base URL of the STASIS backend (all endpoint paths are relative to this)
API_BASE_URL = os.environ.get("STASIS_API_URL", "http://localhost:8080/api")

# Bearer token issued by the login service. This package never obtains one.
API_TOKEN = os.environ.get("STASIS_API_TOKEN") or None

# Seconds before a single request is abandoned
REQUEST_TIMEOUT = 15

# Retry policy for idempotent reads.
# Writes (enroll/drop) are never retried: a retried POST could enroll twice.
RETRY_TOTAL = 3
RETRY_BACKOFF = 0.5
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("STASIS_LOG_LEVEL", "WARNING").upper()


# =============================================================================
# ACADEMIC LOAD & GRADING
# =============================================================================

# A student carrying at least this many units is on a regular (full) load
FULL_LOAD_UNITS = 18

# Numeric grades are recorded on a 0-100 scale and reported on a 4.0 scale
GRADE_SCALE = 100.0
GPA_SCALE = 4.0


# =============================================================================
# SECTIONS
# =============================================================================

# Seat limit assumed when the section catalog omits one
DEFAULT_SECTION_CAPACITY = 40


# =============================================================================
# CALENDAR
# =============================================================================

# Semester numbers used by the curriculum. 3 is the summer term.
SEMESTER_LABELS = {
    1: "1st Semester",
    2: "2nd Semester",
    3: "Summer",
}

WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

ALL_DAYS = "All Days"
