"""Feed View Controller - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components for one page load:
fetch once, then classify, filter and render synchronously.
"""

import logging

from src.core.config import Config
from src.core.filters import FilterSelection, count_by_severity
from src.core.map_view import MapMarker, build_markers
from src.core.page import render_page
from src.core.severity import Severity
from src.core.view_state import (
    FeedView,
    WidgetStatus,
    failed,
    initial_view,
    loaded,
    with_selection,
)
from src.shell.config_loader import resolve_timezone
from src.shell.feed_client import FeedClient, FetchError
from src.shell.static_map_client import MapImageResult, StaticMapClient


logger = logging.getLogger(__name__)


class FeedViewController:
    """Owns the widget state for a single page load.

    This class wires together:
    - Feed client (fetches earthquake data, once)
    - Core functions (parsing, classification, filtering, formatting)
    - Page renderer (interactive HTML map)
    - Static map client (PNG snapshots)
    """

    def __init__(
        self,
        config: Config,
        feed_client: FeedClient | None = None,
        static_map_client: StaticMapClient | None = None,
    ) -> None:
        """Initialize controller with configuration.

        Args:
            config: Application configuration
            feed_client: Feed client (created if not provided)
            static_map_client: Static map client (created if not provided)
        """
        self.config = config
        self.feed_client = feed_client or FeedClient(
            feed_url=config.feed_url,
            timeout=config.request_timeout_seconds,
        )
        self.static_map_client = static_map_client or StaticMapClient(
            tile_url=config.tile_url,
        )
        self.settings = config.map_settings
        self.tz = resolve_timezone(config.display_timezone)
        self.view: FeedView = initial_view()

    @property
    def status(self) -> WidgetStatus:
        return self.view.status

    @property
    def selection(self) -> FilterSelection:
        return self.view.selection

    def load(self) -> FeedView:
        """Perform the single fetch and settle into ready or error.

        Only the first call fetches; later calls return the settled view.
        A failed load stays failed until a new controller is created.

        Returns:
            The resulting FeedView
        """
        if self.view.status is not WidgetStatus.LOADING:
            return self.view

        try:
            records = self.feed_client.fetch_events()
        except FetchError as e:
            logger.error("Feed load failed: %s", e.message)
            self.view = failed(self.view, e.message)
            return self.view

        self.view = loaded(self.view, records)
        logger.info("Loaded %d earthquakes", self.view.total)
        return self.view

    def select_filter(self, selection: FilterSelection) -> FeedView:
        """Change the filter and recompute the filtered view.

        Raises:
            InvalidTransition: If data is not ready yet
        """
        self.view = with_selection(self.view, selection)
        logger.debug(
            "Filter %s: %d of %d earthquakes",
            selection.value,
            self.view.count,
            self.view.total,
        )
        return self.view

    def markers(self) -> list[MapMarker]:
        """Markers for the current filtered view."""
        return build_markers(self.view.visible, self.tz, self.config.time_format)

    def counts(self) -> dict[Severity, int]:
        """Per-severity counts over the full fetched set."""
        return count_by_severity(list(self.view.records))

    def render_page(self) -> str:
        """Render the HTML page for the current state.

        The page carries markers for every fetched record; the current
        selection only decides which of them are shown first.
        """
        all_markers = build_markers(
            list(self.view.records), self.tz, self.config.time_format
        )
        return render_page(self.view, all_markers, self.settings)

    def render_snapshot(self) -> MapImageResult:
        """Render a PNG snapshot of the current filtered view."""
        if self.view.status is not WidgetStatus.READY:
            return MapImageResult(
                success=False,
                error=self.view.error or "Earthquake data is not loaded",
            )
        return self.static_map_client.render_snapshot(self.markers(), self.settings)
