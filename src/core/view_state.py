"""Widget state model - Pure data structures and transitions.

The widget moves through three states:

    loading --(records)--> ready --(filter change)--> ready
       |
       +--(fetch failure)--> error   (terminal for this page load)

Transitions are pure functions returning a new FeedView; nothing ever goes
back to loading. A fresh page load starts again from initial_view().
"""

from dataclasses import dataclass, replace
from enum import Enum

from src.core.earthquake import EventRecord
from src.core.filters import FilterSelection, filter_events


class WidgetStatus(str, Enum):
    """Lifecycle state of the widget."""
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


class InvalidTransition(Exception):
    """Raised when a transition is not allowed from the current state."""


@dataclass(frozen=True)
class FeedView:
    """Immutable snapshot of the widget.

    Attributes:
        status: Current lifecycle state
        records: Full fetched record set, in feed order
        selection: Active filter selection
        error: Human-readable error message (error state only)
    """
    status: WidgetStatus = WidgetStatus.LOADING
    records: tuple[EventRecord, ...] = ()
    selection: FilterSelection = FilterSelection.ALL
    error: str | None = None

    @property
    def visible(self) -> list[EventRecord]:
        """Records in the filtered view (empty unless ready)."""
        if self.status is not WidgetStatus.READY:
            return []
        return filter_events(list(self.records), self.selection)

    @property
    def count(self) -> int:
        """Number of records in the filtered view."""
        return len(self.visible)

    @property
    def total(self) -> int:
        """Number of fetched records regardless of filter."""
        return len(self.records)


def initial_view() -> FeedView:
    """The state every page load starts in."""
    return FeedView()


def loaded(view: FeedView, records: list[EventRecord]) -> FeedView:
    """Transition loading -> ready with the fetched records.

    Raises:
        InvalidTransition: If the view is not loading
    """
    if view.status is not WidgetStatus.LOADING:
        raise InvalidTransition(f"Cannot load data while {view.status.value}")
    return replace(
        view,
        status=WidgetStatus.READY,
        records=tuple(records),
        error=None,
    )


def failed(view: FeedView, message: str) -> FeedView:
    """Transition loading -> error with a message.

    Raises:
        InvalidTransition: If the view is not loading
    """
    if view.status is not WidgetStatus.LOADING:
        raise InvalidTransition(f"Cannot fail while {view.status.value}")
    return replace(view, status=WidgetStatus.ERROR, records=(), error=message)


def with_selection(view: FeedView, selection: FilterSelection) -> FeedView:
    """Change the filter selection of a ready view.

    Filtering is only enabled once data is ready.

    Raises:
        InvalidTransition: If the view is not ready
    """
    if view.status is not WidgetStatus.READY:
        raise InvalidTransition(
            f"Cannot change filter while {view.status.value}"
        )
    return replace(view, selection=selection)
