"""Unit tests for marker projection and map settings.

Pure function tests - no mocks needed.
"""

import pytest

from src.core.earthquake import EventRecord
from src.core.map_view import (
    MapMarker,
    MapSettings,
    build_marker,
    build_markers,
    get_marker_radius,
)
from src.core.severity import Severity


def make_record(event_id="test", magnitude=4.2, place="Test", lat=37.78, lon=-122.42):
    return EventRecord(
        id=event_id,
        longitude=lon,
        latitude=lat,
        magnitude=magnitude,
        place=place,
        time=0,
    )


class TestBuildMarker:
    """Tests for build_marker() function."""

    def test_reference_record(self):
        """mag 4.2 renders yellow with magnitude, place and epoch-zero time."""
        marker = build_marker(make_record())

        assert marker.color == "#eab308"
        assert marker.severity is Severity.MODERATE
        assert marker.popup == (
            ("Magnitude", "4.2"),
            ("Location", "Test"),
            ("Time", "1970-01-01 00:00:00 UTC"),
        )

    def test_missing_magnitude_is_green_na(self):
        marker = build_marker(make_record(magnitude=None))

        assert marker.color == "#22c55e"
        assert dict(marker.popup)["Magnitude"] == "N/A"

    def test_position_is_lat_lon(self):
        marker = build_marker(make_record(lat=10.5, lon=-20.25))
        assert marker.latitude == 10.5
        assert marker.longitude == -20.25

    def test_strong_is_red(self):
        assert build_marker(make_record(magnitude=6.0)).color == "#dc2626"

    def test_to_dict(self):
        data = build_marker(make_record()).to_dict()
        assert data["id"] == "test"
        assert data["lat"] == 37.78
        assert data["lon"] == -122.42
        assert data["severity"] == "moderate"
        assert data["popup"][0] == ["Magnitude", "4.2"]


class TestBuildMarkers:
    """Tests for build_markers() function."""

    def test_one_marker_per_record_in_order(self):
        records = [make_record("a", 1.0), make_record("b", 5.5), make_record("c", None)]
        markers = build_markers(records)
        assert [m.id for m in markers] == ["a", "b", "c"]

    def test_empty(self):
        assert build_markers([]) == []


class TestMapSettings:
    """Tests for MapSettings dataclass."""

    def test_defaults_show_whole_world(self):
        settings = MapSettings()
        assert (settings.center_latitude, settings.center_longitude) == (20.0, 0.0)
        assert settings.zoom == 2
        assert "openstreetmap" in settings.tile_url
        assert "OpenStreetMap" in settings.attribution

    def test_is_immutable(self):
        settings = MapSettings()
        with pytest.raises(AttributeError):
            settings.zoom = 5

    def test_marker_is_immutable(self):
        marker = build_marker(make_record())
        assert isinstance(marker, MapMarker)
        with pytest.raises(AttributeError):
            marker.color = "#000000"


class TestGetMarkerRadius:
    """Tests for get_marker_radius() function."""

    def test_grows_with_severity(self):
        assert (
            get_marker_radius(Severity.MINOR)
            < get_marker_radius(Severity.MODERATE)
            < get_marker_radius(Severity.STRONG)
        )
