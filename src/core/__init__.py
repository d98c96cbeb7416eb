"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Feed parsing into event records
- Severity classification
- Filtering by severity
- Popup and readout formatting
- Marker projection and page rendering
- Widget state transitions

All functions here are deterministic and have no I/O.
"""

from src.core.earthquake import EventRecord, parse_events
from src.core.severity import Severity, classify, severity_color
from src.core.filters import FilterSelection, filter_events, parse_filter_selection
from src.core.formatter import format_magnitude, format_place, format_time
from src.core.map_view import MapMarker, MapSettings, build_markers
from src.core.view_state import FeedView, WidgetStatus

__all__ = [
    # Records
    "EventRecord",
    "parse_events",
    # Severity
    "Severity",
    "classify",
    "severity_color",
    # Filters
    "FilterSelection",
    "filter_events",
    "parse_filter_selection",
    # Formatter
    "format_magnitude",
    "format_place",
    "format_time",
    # Map
    "MapMarker",
    "MapSettings",
    "build_markers",
    # State
    "FeedView",
    "WidgetStatus",
]
