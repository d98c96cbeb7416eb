"""HTML page rendering - Pure functions.

Renders the widget as a standalone HTML document. The map itself is drawn
by Leaflet in the browser from marker data computed here, and filter changes
are applied in the browser to the markers already on the page.
"""

import html
import json

from src.core.filters import FilterSelection, count_by_severity, filter_events
from src.core.formatter import format_count
from src.core.map_view import MapMarker, MapSettings
from src.core.view_state import FeedView, WidgetStatus


LEAFLET_VERSION = "1.9.4"
LEAFLET_CSS = f"https://unpkg.com/leaflet@{LEAFLET_VERSION}/dist/leaflet.css"
LEAFLET_JS = f"https://unpkg.com/leaflet@{LEAFLET_VERSION}/dist/leaflet.js"

LOADING_TEXT = "Loading data..."

FILTER_LABELS = {
    FilterSelection.ALL: "All",
    FilterSelection.MINOR: "Minor (<3)",
    FilterSelection.MODERATE: "Moderate (3-5)",
    FilterSelection.STRONG: "Strong (5+)",
}

_STYLE = """
html, body { margin: 0; height: 100%; font-family: sans-serif; }
#map { height: 100vh; width: 100vw; }
.overlay { position: absolute; top: 10px; left: 50px; z-index: 1000;
  background: white; color: black; padding: 6px 12px; border-radius: 6px;
  font-size: 14px; }
.filters button { margin-right: 6px; padding: 2px 8px; border: 1px solid #999;
  border-radius: 4px; background: white; color: black; cursor: pointer; }
.filters button.active { background: #1f2937; color: white; }
.status { text-align: center; margin-top: 20vh; }
.status.error { color: red; }
"""


def popup_html(marker: MapMarker) -> str:
    """Render a marker's popup lines as escaped HTML.

    Pure function.
    """
    return "<br>".join(
        f"<strong>{html.escape(label)}:</strong> {html.escape(value)}"
        for label, value in marker.popup
    )


def _script_json(data: object) -> str:
    """Dump JSON that is safe to inline in a <script> element."""
    return json.dumps(data).replace("</", "<\\/")


def _document(title: str, body: str, head: str = "") -> str:
    return (
        "<!DOCTYPE html>\n"
        "<html lang=\"en\">\n"
        "<head>\n"
        "<meta charset=\"utf-8\">\n"
        "<meta name=\"viewport\" content=\"width=device-width, initial-scale=1\">\n"
        f"<title>{html.escape(title)}</title>\n"
        f"<style>{_STYLE}</style>\n"
        f"{head}"
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def render_loading() -> str:
    """Render the loading state."""
    return _document(
        "Earthquake Map",
        f'<p class="status">{html.escape(LOADING_TEXT)}</p>',
    )


def render_error(message: str) -> str:
    """Render the terminal error state with a manual retry (full reload)."""
    body = (
        '<div class="status error">\n'
        f"<p>{html.escape(message)}</p>\n"
        '<button type="button" onclick="window.location.reload()">Retry</button>\n'
        "</div>"
    )
    return _document("Earthquake Map", body)


def render_filter_buttons(view: FeedView) -> str:
    """Render the filter selector with per-bucket counts.

    Buttons are handled by the page script; clicking one never reloads the
    page. The button for view.selection starts out active.
    """
    counts = count_by_severity(list(view.records))
    buttons = []
    for selection in FilterSelection:
        if selection.severity is None:
            count = view.total
        else:
            count = counts[selection.severity]
        css = "active" if selection is view.selection else ""
        label = f"{FILTER_LABELS[selection]} ({count})"
        buttons.append(
            f'<button type="button" class="{css}" '
            f'data-filter="{selection.value}">{html.escape(label)}</button>'
        )
    return '<div class="filters">' + "".join(buttons) + "</div>"


def count_readouts(view: FeedView) -> dict[str, str]:
    """Count readout text for every selection, keyed by selection value.

    Pure function.
    """
    records = list(view.records)
    return {
        selection.value: format_count(len(filter_events(records, selection)))
        for selection in FilterSelection
    }


_FILTER_SCRIPT = """\
const map = L.map('map').setView(options.center, options.zoom);
L.tileLayer(options.tileUrl, {attribution: options.attribution}).addTo(map);
const layers = markers.map(function (m) {
  const layer = L.circleMarker([m.lat, m.lon], {radius: 6, color: m.color,
    fillColor: m.color, fillOpacity: 0.8, weight: 1}).bindPopup(m.popup);
  if (m.visible) { layer.addTo(map); }
  return {severity: m.severity, layer: layer};
});
const buttons = document.querySelectorAll('.filters button');
function applyFilter(selection) {
  layers.forEach(function (entry) {
    if (selection === 'all' || entry.severity === selection) {
      entry.layer.addTo(map);
    } else {
      entry.layer.remove();
    }
  });
  document.querySelector('.count').textContent = readouts[selection];
  buttons.forEach(function (b) {
    b.classList.toggle('active', b.dataset.filter === selection);
  });
}
buttons.forEach(function (b) {
  b.addEventListener('click', function () { applyFilter(b.dataset.filter); });
});
"""


def render_map(
    view: FeedView,
    markers: list[MapMarker],
    settings: MapSettings,
) -> str:
    """Render the ready state: map, markers, filter buttons, count readout.

    Every fetched record is embedded with its severity, so changing the
    filter in the browser only shows and hides markers that are already on
    the page. The markers in view.visible are shown initially.

    Pure function.

    Args:
        view: Ready FeedView
        markers: Markers for every record in view.records
        settings: Map center, zoom and tile configuration

    Returns:
        Complete HTML document
    """
    visible_ids = {r.id for r in view.visible}
    marker_data = [
        {
            "id": m.id,
            "lat": m.latitude,
            "lon": m.longitude,
            "severity": m.severity.value,
            "color": m.color,
            "popup": popup_html(m),
            "visible": m.id in visible_ids,
        }
        for m in markers
    ]
    map_options = {
        "center": [settings.center_latitude, settings.center_longitude],
        "zoom": settings.zoom,
        "tileUrl": settings.tile_url,
        "attribution": settings.attribution,
    }

    head = (
        f'<link rel="stylesheet" href="{LEAFLET_CSS}">\n'
        f'<script src="{LEAFLET_JS}"></script>\n'
    )
    body = (
        '<div id="map"></div>\n'
        '<div class="overlay">\n'
        f'<div class="count">{html.escape(format_count(view.count))}</div>\n'
        f"{render_filter_buttons(view)}\n"
        "</div>\n"
        "<script>\n"
        f"const options = {_script_json(map_options)};\n"
        f"const markers = {_script_json(marker_data)};\n"
        f"const readouts = {_script_json(count_readouts(view))};\n"
        f"{_FILTER_SCRIPT}"
        "</script>"
    )
    return _document("Earthquake Map", body, head)


def render_page(
    view: FeedView,
    markers: list[MapMarker],
    settings: MapSettings,
) -> str:
    """Render whichever state the widget is in.

    Pure function. In the ready state, markers covers every fetched record.
    """
    if view.status is WidgetStatus.LOADING:
        return render_loading()
    if view.status is WidgetStatus.ERROR:
        return render_error(view.error or "")
    return render_map(view, markers, settings)
