"""Shared failure code constants for record normalization and report runs."""

INVALID_NUMBER = "invalid_number"
INVALID_DATE = "invalid_date"
MISSING_COLUMN = "missing_column"

RECORD_FAILURES = [
    INVALID_NUMBER,
    INVALID_DATE,
    MISSING_COLUMN,
]

EMPTY_WORKING_SET = "empty_working_set"
