"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from src.core.formatter import DEFAULT_TIME_FORMAT
from src.core.map_view import DEFAULT_ATTRIBUTION, DEFAULT_TILE_URL, MapSettings


# USGS summary feed: all events from the past day
DEFAULT_FEED_URL = (
    "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson"
)

# Default timeout for the feed request (seconds)
DEFAULT_TIMEOUT = 30


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_url: GeoJSON feed endpoint
        request_timeout_seconds: Timeout for the feed request
        tile_url: Slippy-map tile URL template
        attribution: Tile provider attribution HTML
        center_latitude: Initial map center latitude
        center_longitude: Initial map center longitude
        zoom: Initial map zoom level
        display_timezone: IANA timezone name for popup timestamps
        time_format: strftime format for popup timestamps
        snapshot_width: Static snapshot width in pixels
        snapshot_height: Static snapshot height in pixels
    """
    feed_url: str = DEFAULT_FEED_URL
    request_timeout_seconds: float = DEFAULT_TIMEOUT
    tile_url: str = DEFAULT_TILE_URL
    attribution: str = DEFAULT_ATTRIBUTION
    center_latitude: float = 20.0
    center_longitude: float = 0.0
    zoom: int = 2
    display_timezone: str = "UTC"
    time_format: str = DEFAULT_TIME_FORMAT
    snapshot_width: int = 1024
    snapshot_height: int = 512

    @property
    def map_settings(self) -> MapSettings:
        """Map-related subset of the configuration."""
        return MapSettings(
            center_latitude=self.center_latitude,
            center_longitude=self.center_longitude,
            zoom=self.zoom,
            tile_url=self.tile_url,
            attribution=self.attribution,
            snapshot_width=self.snapshot_width,
            snapshot_height=self.snapshot_height,
        )


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_url",
            message=f"Feed URL must be http(s), got '{config.feed_url}'",
        ))
    elif config.feed_url.startswith("http://"):
        errors.append(ValidationError(
            field="feed_url",
            message="Feed URL is not using HTTPS",
            severity="warning",
        ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    errors.extend(validate_coordinates(
        config.center_latitude, config.center_longitude, "center",
    ))

    if not 0 <= config.zoom <= 19:
        errors.append(ValidationError(
            field="zoom",
            message=f"Zoom {config.zoom} out of range [0, 19]",
        ))

    for placeholder in ("{z}", "{x}", "{y}"):
        if placeholder not in config.tile_url:
            errors.append(ValidationError(
                field="tile_url",
                message=f"Tile URL template is missing {placeholder}",
            ))

    if not config.attribution:
        errors.append(ValidationError(
            field="attribution",
            message="Tile attribution is empty; most providers require one",
            severity="warning",
        ))

    if config.snapshot_width <= 0 or config.snapshot_height <= 0:
        errors.append(ValidationError(
            field="snapshot",
            message=(
                f"Snapshot size must be positive, got "
                f"{config.snapshot_width}x{config.snapshot_height}"
            ),
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
