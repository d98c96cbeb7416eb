"""Popup and readout formatting - Pure functions.

This module formats event records into the text shown on the map.
All functions are pure with no side effects.
"""

from datetime import datetime, timezone, tzinfo

from src.core.earthquake import EventRecord


DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

MISSING_MAGNITUDE = "N/A"
MISSING_PLACE = "Unknown"


def format_magnitude(magnitude: float | None) -> str:
    """Format a magnitude for display.

    Pure function. Missing magnitudes are shown literally as "N/A"; this is
    independent of how they are classified for coloring.

    Examples:
        4.2 -> "4.2", 3.0 -> "3", None -> "N/A"
    """
    if magnitude is None:
        return MISSING_MAGNITUDE
    return format(magnitude, "g")


def format_place(place: str | None) -> str:
    """Format a place description, falling back to "Unknown"."""
    if not place:
        return MISSING_PLACE
    return place


def format_time(
    time_ms: int,
    tz: tzinfo = timezone.utc,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> str:
    """Format a millisecond epoch timestamp in the display timezone.

    Pure function.

    Args:
        time_ms: Milliseconds since epoch
        tz: Timezone to display in (default: UTC)
        time_format: strftime format string

    Returns:
        Formatted timestamp, e.g. "1970-01-01 00:00:00 UTC"
    """
    moment = datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)
    return moment.astimezone(tz).strftime(time_format)


def format_popup_lines(
    record: EventRecord,
    tz: tzinfo = timezone.utc,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> list[tuple[str, str]]:
    """Build the labelled popup lines for a record.

    Pure function.

    Args:
        record: Event to describe
        tz: Timezone for the timestamp
        time_format: strftime format for the timestamp

    Returns:
        List of (label, value) pairs: Magnitude, Location, Time
    """
    return [
        ("Magnitude", format_magnitude(record.magnitude)),
        ("Location", format_place(record.place)),
        ("Time", format_time(record.time, tz, time_format)),
    ]


def format_count(count: int) -> str:
    """Format the count readout shown above the map."""
    return f"Showing {count} earthquakes (past 24 hrs)"


def format_event_summary(record: EventRecord) -> str:
    """Format a one-line summary of an event for logs and the CLI."""
    return (
        f"M{format_magnitude(record.magnitude)} - {format_place(record.place)} "
        f"at {format_time(record.time)}"
    )
