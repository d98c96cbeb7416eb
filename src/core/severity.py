"""Severity classification - Pure functions.

Buckets event magnitudes into minor/moderate/strong and maps each bucket
to its marker color.
"""

from enum import Enum


class Severity(str, Enum):
    """Severity bucket derived from magnitude."""
    MINOR = "minor"
    MODERATE = "moderate"
    STRONG = "strong"


# Lower bounds (inclusive) of the upper buckets
MODERATE_THRESHOLD = 3.0
STRONG_THRESHOLD = 5.0

SEVERITY_COLORS = {
    Severity.MINOR: "#22c55e",  # green-500
    Severity.MODERATE: "#eab308",  # yellow-500
    Severity.STRONG: "#dc2626",  # red-600
}


def classify(magnitude: float | None) -> Severity:
    """Classify a magnitude into a severity bucket.

    Pure function. Buckets are half-open: minor below 3, moderate from 3 up
    to (not including) 5, strong from 5. A missing magnitude counts as 0.

    Args:
        magnitude: Event magnitude, or None when unknown

    Returns:
        Severity bucket
    """
    value = magnitude if magnitude is not None else 0.0

    if value >= STRONG_THRESHOLD:
        return Severity.STRONG
    elif value >= MODERATE_THRESHOLD:
        return Severity.MODERATE
    return Severity.MINOR


def severity_color(severity: Severity) -> str:
    """Get hex marker color for a severity bucket."""
    return SEVERITY_COLORS[severity]


def magnitude_color(magnitude: float | None) -> str:
    """Get hex marker color for a magnitude (None renders as minor)."""
    return severity_color(classify(magnitude))
