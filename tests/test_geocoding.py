"""Tests for the Google Geocoding client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from urbanliving.services.geocoding import (
    GeocodingClient,
    format_coordinate,
    full_address,
    geocode_address,
)

pytestmark = pytest.mark.unit


def api_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.mark.parametrize(
    "value, expected",
    [
        (33.7489954, "33.74900"),
        ("-84.3879824", "-84.38798"),
        (0, "0.00000"),
        (None, None),
        ("", None),
        ("north", None),
        (float("nan"), None),
    ],
)
def test_format_coordinate(value, expected):
    assert format_coordinate(value) == expected


def test_full_address():
    assert full_address("123 Peachtree St", "Atlanta", "GA") == "123 Peachtree St, Atlanta, GA"


@patch("urbanliving.services.geocoding.requests.get")
def test_geocode_ok(mock_get):
    mock_get.return_value = api_response(
        {"status": "OK", "results": [{"geometry": {"location": {"lat": 33.7489954, "lng": -84.3879824}}}]}
    )

    result = GeocodingClient("key", timeout=5).geocode("123 Peachtree St, Atlanta, GA")

    assert result == ("33.74900", "-84.38798")
    mock_get.assert_called_once_with(
        GeocodingClient.BASE_URL,
        params={"address": "123 Peachtree St, Atlanta, GA", "key": "key"},
        timeout=5,
    )


@patch("urbanliving.services.geocoding.requests.get")
def test_no_api_key_skips_request(mock_get):
    assert GeocodingClient(None).geocode("123 Peachtree St") is None
    assert geocode_address("123 Peachtree St", None) is None
    mock_get.assert_not_called()


@patch("urbanliving.services.geocoding.requests.get")
@pytest.mark.parametrize("status", ["ZERO_RESULTS", "REQUEST_DENIED", "OVER_QUERY_LIMIT"])
def test_non_ok_status(mock_get, status):
    mock_get.return_value = api_response({"status": status, "results": []})
    assert GeocodingClient("key").geocode("nowhere") is None


@patch("urbanliving.services.geocoding.requests.get")
def test_network_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("boom")
    assert GeocodingClient("key").geocode("123 Peachtree St") is None


@patch("urbanliving.services.geocoding.requests.get")
def test_http_error(mock_get):
    response = api_response({})
    response.raise_for_status.side_effect = requests.HTTPError("500")
    mock_get.return_value = response
    assert GeocodingClient("key").geocode("123 Peachtree St") is None


@patch("urbanliving.services.geocoding.requests.get")
def test_invalid_json(mock_get):
    response = api_response(None)
    response.json.side_effect = ValueError("not json")
    mock_get.return_value = response
    assert GeocodingClient("key").geocode("123 Peachtree St") is None
