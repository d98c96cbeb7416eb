"""Earthquake Map API - FastAPI service.

Serves the interactive earthquake map page plus JSON and PNG views of the
same data. Every request is one page load: it fetches the USGS feed once,
applies the requested filter and renders. Nothing is cached between requests.
"""

import logging
import os

from fastapi import FastAPI, Query, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from src.controller import FeedViewController
from src.core.config import Config
from src.core.filters import FilterSelection, parse_filter_selection
from src.core.page import render_error
from src.core.view_state import WidgetStatus
from src.shell.config_loader import get_config

log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Earthquake Map",
    description="Recent earthquakes from the USGS feed on a world map",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ===== Response Models =====

class MarkerResponse(BaseModel):
    id: str
    lat: float
    lon: float
    severity: str
    color: str
    popup: list[list[str]]


class EarthquakesResponse(BaseModel):
    status: str
    filter: str
    count: int
    total: int
    counts: dict[str, int]
    markers: list[MarkerResponse]


# ===== Dependencies =====

_config: Config | None = None


def get_app_config() -> Config:
    """Load configuration once per process."""
    global _config
    if _config is None:
        _config = get_config()
    return _config


def get_controller(config: Config = Depends(get_app_config)) -> FeedViewController:
    """A fresh controller per request: one request, one fetch."""
    return FeedViewController(config)


def _parse_filter(value: str | None) -> FilterSelection:
    try:
        return parse_filter_selection(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _load(controller: FeedViewController, selection: FilterSelection) -> None:
    """Load the feed and apply the filter; failures leave the error state."""
    view = controller.load()
    if view.status is WidgetStatus.READY:
        controller.select_filter(selection)


# ===== Endpoints =====

@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def map_page(
    filter_name: str | None = Query(None, alias="filter", description="all, minor, moderate or strong"),
    controller: FeedViewController = Depends(get_controller),
) -> HTMLResponse:
    """Interactive map page."""
    try:
        selection = parse_filter_selection(filter_name)
    except ValueError as e:
        return HTMLResponse(render_error(str(e)), status_code=400)

    _load(controller, selection)

    status_code = 200
    if controller.status is WidgetStatus.ERROR:
        status_code = 502

    return HTMLResponse(controller.render_page(), status_code=status_code)


@app.get("/api/earthquakes", response_model=EarthquakesResponse)
def earthquakes(
    filter_name: str | None = Query(None, alias="filter", description="all, minor, moderate or strong"),
    controller: FeedViewController = Depends(get_controller),
) -> EarthquakesResponse:
    """Filtered markers as JSON."""
    selection = _parse_filter(filter_name)
    _load(controller, selection)

    if controller.status is WidgetStatus.ERROR:
        raise HTTPException(status_code=502, detail=controller.view.error)

    return EarthquakesResponse(
        status=controller.status.value,
        filter=selection.value,
        count=controller.view.count,
        total=controller.view.total,
        counts={s.value: n for s, n in controller.counts().items()},
        markers=[MarkerResponse(**m.to_dict()) for m in controller.markers()],
    )


@app.get("/snapshot.png")
def snapshot(
    filter_name: str | None = Query(None, alias="filter", description="all, minor, moderate or strong"),
    controller: FeedViewController = Depends(get_controller),
) -> Response:
    """Static PNG snapshot of the filtered map."""
    selection = _parse_filter(filter_name)
    _load(controller, selection)

    if controller.status is WidgetStatus.ERROR:
        raise HTTPException(status_code=502, detail=controller.view.error)

    result = controller.render_snapshot()
    if not result.success:
        logger.error("Snapshot failed: %s", result.error)
        raise HTTPException(status_code=500, detail="Failed to render map snapshot")

    return Response(content=result.image_bytes, media_type="image/png")
