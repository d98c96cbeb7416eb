"""Map view configuration and marker projection - Pure functions.

This module turns event records into map-ready markers. The actual
rendering (HTML page, PNG tiles) happens elsewhere: the page module builds
the interactive document and the shell layer draws static images.
"""

from dataclasses import dataclass
from datetime import timezone, tzinfo

from src.core.earthquake import EventRecord
from src.core.formatter import DEFAULT_TIME_FORMAT, format_popup_lines
from src.core.severity import Severity, classify, severity_color


DEFAULT_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
DEFAULT_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/">OpenStreetMap</a> contributors'
)


@dataclass(frozen=True)
class MapSettings:
    """Immutable configuration for the world map.

    Attributes:
        center_latitude: Initial map center latitude
        center_longitude: Initial map center longitude
        zoom: Initial zoom level
        tile_url: Slippy-map tile URL template
        attribution: Attribution HTML required by the tile provider
        snapshot_width: Static snapshot width in pixels
        snapshot_height: Static snapshot height in pixels
    """
    center_latitude: float = 20.0
    center_longitude: float = 0.0
    zoom: int = 2
    tile_url: str = DEFAULT_TILE_URL
    attribution: str = DEFAULT_ATTRIBUTION
    snapshot_width: int = 1024
    snapshot_height: int = 512


@dataclass(frozen=True)
class MapMarker:
    """A single positioned, colored marker with its popup text.

    Attributes:
        id: Event ID the marker represents
        latitude: Marker latitude
        longitude: Marker longitude
        severity: Severity bucket of the event
        color: Hex fill color for the marker
        popup: (label, value) lines shown in the popup
    """
    id: str
    latitude: float
    longitude: float
    severity: Severity
    color: str
    popup: tuple[tuple[str, str], ...]

    def to_dict(self) -> dict:
        """Serialize for JSON responses and the page script."""
        return {
            "id": self.id,
            "lat": self.latitude,
            "lon": self.longitude,
            "severity": self.severity.value,
            "color": self.color,
            "popup": [list(line) for line in self.popup],
        }


def build_marker(
    record: EventRecord,
    tz: tzinfo = timezone.utc,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> MapMarker:
    """Project one record onto a map marker.

    Pure function.
    """
    severity = classify(record.magnitude)
    return MapMarker(
        id=record.id,
        latitude=record.latitude,
        longitude=record.longitude,
        severity=severity,
        color=severity_color(severity),
        popup=tuple(format_popup_lines(record, tz, time_format)),
    )


def build_markers(
    records: list[EventRecord],
    tz: tzinfo = timezone.utc,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> list[MapMarker]:
    """Project records onto markers, one per record, in the same order.

    Pure function.

    Args:
        records: Records to display (usually the filtered view)
        tz: Timezone for popup timestamps
        time_format: strftime format for popup timestamps

    Returns:
        List of MapMarker objects
    """
    return [build_marker(r, tz, time_format) for r in records]


SNAPSHOT_RADIUS = {
    Severity.MINOR: 4,
    Severity.MODERATE: 6,
    Severity.STRONG: 9,
}


def get_marker_radius(severity: Severity) -> int:
    """Static snapshot marker radius in pixels; stronger events draw bigger."""
    return SNAPSHOT_RADIUS[severity]
