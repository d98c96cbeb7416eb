"""Earthquake event records and feed parsing - Pure functions.

This module handles parsing USGS GeoJSON feed data into typed EventRecord
objects. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class EventRecord:
    """Immutable seismic event as shown on the map.

    Attributes:
        id: Unique USGS event ID
        longitude: Epicenter longitude
        latitude: Epicenter latitude
        magnitude: Event magnitude, None when the feed omits it
        place: Human-readable location description (optional)
        time: Event timestamp in milliseconds since epoch
    """
    id: str
    longitude: float
    latitude: float
    magnitude: float | None
    place: str | None
    time: int


def parse_event(feature: dict[str, Any]) -> EventRecord | None:
    """Parse a single GeoJSON feature into an EventRecord.

    Pure function: takes raw dict, returns typed EventRecord or None if the
    feature cannot be placed on a map. A missing magnitude or place is kept
    as None; classification and display decide what to do with it.

    Args:
        feature: GeoJSON feature dict from the USGS feed

    Returns:
        EventRecord or None if parsing fails
    """
    try:
        props = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}
        coords = geometry.get("coordinates") or []

        if len(coords) < 2:
            return None

        event_id = feature.get("id")
        if not event_id:
            return None

        time_ms = props.get("time")
        if time_ms is None:
            return None

        # Out-of-range times cannot be displayed
        datetime.fromtimestamp(int(time_ms) / 1000, tz=timezone.utc)

        magnitude = props.get("mag")

        return EventRecord(
            id=str(event_id),
            longitude=float(coords[0]),
            latitude=float(coords[1]),
            magnitude=float(magnitude) if magnitude is not None else None,
            place=props.get("place"),
            time=int(time_ms),
        )
    except (AttributeError, TypeError, ValueError, OverflowError, OSError):
        return None


def parse_events(geojson: dict[str, Any]) -> list[EventRecord]:
    """Parse a USGS GeoJSON FeatureCollection into EventRecords.

    Pure function: drops features that cannot be parsed and keeps the
    remaining ones in feed order.

    Args:
        geojson: Full GeoJSON FeatureCollection from the feed

    Returns:
        List of valid EventRecord objects, in feed order
    """
    features = geojson.get("features") or []
    if not isinstance(features, list):
        return []

    records = []

    for feature in features:
        record = parse_event(feature)
        if record is not None:
            records.append(record)

    return records
