"""Static Map Client - Imperative Shell.

This module renders static PNG snapshots of the filtered map using
OpenStreetMap tiles. All I/O is contained here; marker projection is in
the core module.
"""

import io
import logging
from dataclasses import dataclass

from staticmap import StaticMap, CircleMarker

from src.core.map_view import MapMarker, MapSettings, get_marker_radius


logger = logging.getLogger(__name__)


# staticmap does not rotate subdomains, so the "{s}" placeholder is dropped
DEFAULT_SNAPSHOT_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"


@dataclass
class MapImageResult:
    """Result of map image generation.

    Attributes:
        success: Whether the image was generated successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


def to_static_tile_url(tile_url: str) -> str:
    """Convert a Leaflet-style template to one staticmap can fetch."""
    if "{s}." in tile_url:
        return tile_url.replace("{s}.", "")
    return tile_url


class StaticMapClient:
    """Client for generating static map snapshots.

    This is part of the imperative shell - it handles I/O (fetching map tiles
    and rendering images).
    """

    def __init__(self, tile_url: str | None = None) -> None:
        """Initialize static map client.

        Args:
            tile_url: Custom tile URL template. Defaults to OpenStreetMap.
        """
        self.tile_url = to_static_tile_url(tile_url or DEFAULT_SNAPSHOT_TILE_URL)

    def render_snapshot(
        self,
        markers: list[MapMarker],
        settings: MapSettings,
    ) -> MapImageResult:
        """Render markers onto a static map image.

        This method performs I/O (fetches map tiles from tile server).

        Args:
            markers: Markers of the filtered view
            settings: Map center, zoom and snapshot size

        Returns:
            MapImageResult with image bytes or error
        """
        logger.info(
            "Generating snapshot with %d markers at zoom %d",
            len(markers),
            settings.zoom,
        )

        try:
            static_map = StaticMap(
                settings.snapshot_width,
                settings.snapshot_height,
                url_template=self.tile_url,
            )

            for marker in markers:
                radius = get_marker_radius(marker.severity)
                # (lon, lat) order for staticmap
                position = (marker.longitude, marker.latitude)
                # White outline first so it renders behind the fill
                static_map.add_marker(CircleMarker(position, "white", radius + 2))
                static_map.add_marker(CircleMarker(position, marker.color, radius))

            # staticmap takes its center as (lon, lat)
            image = static_map.render(
                zoom=settings.zoom,
                center=[settings.center_longitude, settings.center_latitude],
            )

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            image_bytes = buffer.getvalue()

            logger.info(
                "Generated map image: %d bytes",
                len(image_bytes),
            )

            return MapImageResult(
                success=True,
                image_bytes=image_bytes,
            )

        except Exception as e:
            logger.error("Failed to generate map: %s", str(e))
            return MapImageResult(
                success=False,
                error=str(e),
            )
