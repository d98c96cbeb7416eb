"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS GeoJSON summary feed.
All I/O is contained here; parsing is in the core module.
"""

import logging

import requests

from src.core.config import DEFAULT_FEED_URL, DEFAULT_TIMEOUT
from src.core.earthquake import EventRecord, parse_events


logger = logging.getLogger(__name__)


FETCH_FAILED_MESSAGE = "Failed to fetch earthquake data"
NO_DATA_MESSAGE = "No earthquake data available"


class FetchError(Exception):
    """Raised when the feed cannot be turned into a non-empty record set.

    Attributes:
        message: Human-readable message shown to the user
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FeedClient:
    """Client for fetching earthquake events from the USGS feed.

    This is part of the imperative shell - it handles HTTP I/O. A single
    fetch is made per call; there are no retries.
    """

    def __init__(
        self,
        feed_url: str = DEFAULT_FEED_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize feed client.

        Args:
            feed_url: GeoJSON feed URL
            timeout: Request timeout in seconds
        """
        self.feed_url = feed_url
        self.timeout = timeout

    def fetch_geojson(self) -> dict:
        """Fetch the raw GeoJSON document.

        This method performs HTTP I/O.

        Returns:
            Decoded GeoJSON FeatureCollection

        Raises:
            FetchError: On connection failure, non-success status or a body
                that is not a JSON object
        """
        logger.info("Fetching earthquake feed from %s", self.feed_url)

        try:
            response = requests.get(self.feed_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error("Feed request failed: %s", e)
            raise FetchError(FETCH_FAILED_MESSAGE) from e
        except ValueError as e:
            logger.error("Feed returned invalid JSON: %s", e)
            raise FetchError(FETCH_FAILED_MESSAGE) from e

        if not isinstance(data, dict):
            logger.error("Feed returned %s instead of an object", type(data).__name__)
            raise FetchError(FETCH_FAILED_MESSAGE)

        return data

    def fetch_events(self) -> list[EventRecord]:
        """Fetch and parse events, in feed order.

        Returns:
            Non-empty list of EventRecord objects

        Raises:
            FetchError: If the fetch fails or yields no events
        """
        data = self.fetch_geojson()

        features = data.get("features") or []
        if not isinstance(features, list):
            logger.error("Feed features is %s, not a list", type(features).__name__)
            raise FetchError(FETCH_FAILED_MESSAGE)

        if not features:
            logger.warning("Feed returned no features")
            raise FetchError(NO_DATA_MESSAGE)

        records = parse_events(data)
        skipped = len(features) - len(records)
        if skipped:
            logger.warning("Skipped %d unparseable features", skipped)

        if not records:
            raise FetchError(NO_DATA_MESSAGE)

        logger.info("Fetched %d earthquakes from feed", len(records))

        return records
