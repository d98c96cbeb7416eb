"""Tests for the command-line entry point.

The feed is mocked with the responses library; files go to tmp_path.
"""

import os
from unittest.mock import patch

import pytest
import responses

from src.main import run


FEED_URL = "https://feed.example.com/all_day.geojson"

FEED = {
    "features": [
        {
            "id": "a",
            "properties": {"mag": 4.2, "place": "Test", "time": 0},
            "geometry": {"coordinates": [-120.0, 35.0]},
        },
        {
            "id": "b",
            "properties": {"mag": 6.0, "place": "Big", "time": 0},
            "geometry": {"coordinates": [140.0, 36.0]},
        },
    ],
}


@pytest.fixture(autouse=True)
def feed_env():
    """Point the CLI at the mocked feed via environment config."""
    with patch.dict(os.environ, {"FEED_URL": FEED_URL}, clear=True):
        yield


class TestRun:
    """Tests for run()."""

    @responses.activate
    def test_writes_page(self, tmp_path, capsys):
        responses.add(responses.GET, FEED_URL, json=FEED)
        output = tmp_path / "map.html"

        code = run(["--output", str(output)])

        assert code == 0
        assert "Showing 2 earthquakes (past 24 hrs)" in output.read_text()
        assert "Showing 2 earthquakes" in capsys.readouterr().out

    @responses.activate
    def test_filter_and_list(self, tmp_path, capsys):
        responses.add(responses.GET, FEED_URL, json=FEED)
        output = tmp_path / "map.html"

        code = run(["--filter", "strong", "--output", str(output), "--list"])

        assert code == 0
        out = capsys.readouterr().out
        assert "M6 - Big" in out
        assert "M4.2" not in out

    @responses.activate
    def test_all_views_fetch_once(self, tmp_path):
        responses.add(responses.GET, FEED_URL, json=FEED)

        code = run(["--all-views", "--output-dir", str(tmp_path)])

        assert code == 0
        assert len(responses.calls) == 1
        for name in ("all", "minor", "moderate", "strong"):
            assert (tmp_path / f"earthquakes-{name}.html").exists()
        moderate = (tmp_path / "earthquakes-moderate.html").read_text()
        assert "Showing 1 earthquakes (past 24 hrs)" in moderate
        # each view still carries both markers for in-page filtering
        assert '"id": "b"' in moderate

    @pytest.mark.parametrize(
        "extra", [["--list"], ["--snapshot", "map.png"], ["--list", "--snapshot", "map.png"]]
    )
    @responses.activate
    def test_all_views_rejects_single_view_flags(self, tmp_path, capsys, extra):
        responses.add(responses.GET, FEED_URL, json=FEED)

        with pytest.raises(SystemExit) as exc_info:
            run(["--all-views", "--output-dir", str(tmp_path), *extra])

        assert exc_info.value.code == 2
        assert "cannot be combined" in capsys.readouterr().err
        assert len(responses.calls) == 0
        assert list(tmp_path.iterdir()) == []

    @responses.activate
    def test_fetch_failure_exits_1(self, tmp_path, capsys):
        responses.add(responses.GET, FEED_URL, status=500)

        code = run(["--output", str(tmp_path / "map.html")])

        assert code == 1
        assert "Failed to fetch earthquake data" in capsys.readouterr().err
        assert not (tmp_path / "map.html").exists()

    def test_unknown_filter_exits_2(self, capsys):
        code = run(["--filter", "mega"])

        assert code == 2
        assert "Unknown filter" in capsys.readouterr().err

    @responses.activate
    @patch("src.controller.StaticMapClient.render_snapshot")
    def test_snapshot(self, mock_render, tmp_path):
        from src.shell.static_map_client import MapImageResult

        responses.add(responses.GET, FEED_URL, json=FEED)
        mock_render.return_value = MapImageResult(success=True, image_bytes=b"PNG")
        snapshot = tmp_path / "map.png"

        code = run(["--output", str(tmp_path / "map.html"), "--snapshot", str(snapshot)])

        assert code == 0
        assert snapshot.read_bytes() == b"PNG"
