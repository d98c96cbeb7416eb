"""Tests for the USGS feed client.

Uses the responses library to mock HTTP without network calls.
"""

import pytest
import requests
import responses

from src.core.config import DEFAULT_FEED_URL
from src.shell.feed_client import (
    FETCH_FAILED_MESSAGE,
    NO_DATA_MESSAGE,
    FeedClient,
    FetchError,
)


FEED_URL = "https://feed.example.com/all_day.geojson"


def make_feature(event_id: str, mag=4.2, place="Test", time=0):
    props = {"place": place, "time": time}
    if mag is not None:
        props["mag"] = mag
    return {
        "type": "Feature",
        "id": event_id,
        "properties": props,
        "geometry": {"type": "Point", "coordinates": [-120.5, 35.25, 8.0]},
    }


class TestFeedClientInit:
    """Tests for FeedClient initialization."""

    def test_default_url_is_usgs_day_feed(self):
        client = FeedClient()
        assert client.feed_url == DEFAULT_FEED_URL
        assert client.feed_url.endswith("all_day.geojson")

    def test_custom_url_and_timeout(self):
        client = FeedClient(feed_url=FEED_URL, timeout=5)
        assert client.feed_url == FEED_URL
        assert client.timeout == 5


class TestFetchEvents:
    """Tests for FeedClient.fetch_events()."""

    @responses.activate
    def test_returns_records_in_feed_order(self):
        responses.add(
            responses.GET,
            FEED_URL,
            json={"features": [make_feature("b"), make_feature("a"), make_feature("c")]},
            status=200,
        )

        records = FeedClient(feed_url=FEED_URL).fetch_events()

        assert [r.id for r in records] == ["b", "a", "c"]
        assert records[0].latitude == 35.25
        assert records[0].longitude == -120.5

    @responses.activate
    def test_makes_exactly_one_request(self):
        responses.add(responses.GET, FEED_URL, json={"features": [make_feature("a")]})

        FeedClient(feed_url=FEED_URL).fetch_events()

        assert len(responses.calls) == 1

    @responses.activate
    def test_keeps_records_without_magnitude(self):
        responses.add(
            responses.GET,
            FEED_URL,
            json={"features": [make_feature("a", mag=None)]},
        )

        records = FeedClient(feed_url=FEED_URL).fetch_events()

        assert records[0].magnitude is None

    @responses.activate
    def test_http_500_raises_fetch_error(self):
        responses.add(responses.GET, FEED_URL, json={"error": "boom"}, status=500)

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == "Failed to fetch earthquake data"
        assert str(exc_info.value) == FETCH_FAILED_MESSAGE

    @responses.activate
    def test_does_not_retry(self):
        responses.add(responses.GET, FEED_URL, status=503)

        with pytest.raises(FetchError):
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert len(responses.calls) == 1

    @responses.activate
    def test_connection_error_raises_fetch_error(self):
        responses.add(
            responses.GET,
            FEED_URL,
            body=requests.ConnectionError("unreachable"),
        )

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == FETCH_FAILED_MESSAGE

    @responses.activate
    def test_invalid_json_raises_fetch_error(self):
        responses.add(responses.GET, FEED_URL, body="<html>not json</html>", status=200)

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == FETCH_FAILED_MESSAGE

    @responses.activate
    def test_non_object_json_raises_fetch_error(self):
        responses.add(responses.GET, FEED_URL, json=[1, 2, 3], status=200)

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == FETCH_FAILED_MESSAGE

    @pytest.mark.parametrize("features", [True, 7, "quakes", {"id": "a"}])
    @responses.activate
    def test_non_list_features_raises_fetch_error(self, features):
        responses.add(responses.GET, FEED_URL, json={"features": features}, status=200)

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == FETCH_FAILED_MESSAGE

    @responses.activate
    def test_out_of_range_time_is_skipped(self):
        responses.add(
            responses.GET,
            FEED_URL,
            json={"features": [make_feature("a"), make_feature("b", time=10**20)]},
        )

        records = FeedClient(feed_url=FEED_URL).fetch_events()

        assert [r.id for r in records] == ["a"]

    @responses.activate
    def test_empty_features_raises_no_data(self):
        responses.add(responses.GET, FEED_URL, json={"features": []}, status=200)

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == "No earthquake data available"

    @responses.activate
    def test_missing_features_raises_no_data(self):
        responses.add(responses.GET, FEED_URL, json={"type": "FeatureCollection"})

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == NO_DATA_MESSAGE

    @responses.activate
    def test_all_features_invalid_raises_no_data(self):
        responses.add(
            responses.GET,
            FEED_URL,
            json={"features": [{"properties": {}, "geometry": {}}]},
        )

        with pytest.raises(FetchError) as exc_info:
            FeedClient(feed_url=FEED_URL).fetch_events()

        assert exc_info.value.message == NO_DATA_MESSAGE

    @responses.activate
    def test_skips_invalid_features(self):
        responses.add(
            responses.GET,
            FEED_URL,
            json={"features": [make_feature("a"), {"geometry": None}]},
        )

        records = FeedClient(feed_url=FEED_URL).fetch_events()

        assert [r.id for r in records] == ["a"]
