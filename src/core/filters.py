"""Severity filtering - Pure functions.

This module derives the filtered view shown on the map from the full set
of fetched events and the active filter selection.
"""

from enum import Enum

from src.core.earthquake import EventRecord
from src.core.severity import Severity, classify


class FilterSelection(str, Enum):
    """Which severity bucket to display, or all of them."""
    ALL = "all"
    MINOR = "minor"
    MODERATE = "moderate"
    STRONG = "strong"

    @property
    def severity(self) -> Severity | None:
        """The bucket this selection keeps (None for ALL)."""
        if self is FilterSelection.ALL:
            return None
        return Severity(self.value)


def parse_filter_selection(value: str | None) -> FilterSelection:
    """Parse a user-supplied filter name.

    Pure function. Case-insensitive; None or an empty string means "all".

    Args:
        value: Filter name from a query string or command line

    Returns:
        Matching FilterSelection

    Raises:
        ValueError: If the name is not a known selection
    """
    if value is None or not value.strip():
        return FilterSelection.ALL

    try:
        return FilterSelection(value.strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in FilterSelection)
        raise ValueError(
            f"Unknown filter '{value}'. Expected one of: {choices}"
        ) from None


def matches(record: EventRecord, selection: FilterSelection) -> bool:
    """Check whether a record belongs to the selected bucket."""
    if selection is FilterSelection.ALL:
        return True
    return classify(record.magnitude) is selection.severity


def filter_events(
    records: list[EventRecord],
    selection: FilterSelection,
) -> list[EventRecord]:
    """Filter records down to the selected severity bucket.

    Pure function. "all" returns the full set unchanged; any other selection
    is a single predicate pass that preserves feed order.

    Args:
        records: Full set of fetched records
        selection: Active filter selection

    Returns:
        Records matching the selection
    """
    if selection is FilterSelection.ALL:
        return list(records)

    return [r for r in records if matches(r, selection)]


def count_by_severity(records: list[EventRecord]) -> dict[Severity, int]:
    """Count records in each severity bucket.

    Pure function. Every bucket is present in the result, even when empty.
    """
    counts = {severity: 0 for severity in Severity}
    for record in records:
        counts[classify(record.magnitude)] += 1
    return counts
