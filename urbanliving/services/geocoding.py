"""
Geocoding Service - Google Geocoding API client.

Turns a street address into coordinates for the property map. The lookup
is best effort: any failure (no API key, network error, zero results)
yields ``None`` and the property is simply saved without coordinates.

Coordinates are returned as strings formatted to 5 decimal places
(~1 m precision), the same representation stored on the property row.
"""

import logging
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)

Coordinates = Tuple[str, str]

COORDINATE_PRECISION = 5


def format_coordinate(value) -> Optional[str]:
    """
    Normalize a latitude/longitude value to a fixed 5-decimal string.

    Accepts numbers or numeric strings; anything unparseable becomes None.

    Example:
        >>> format_coordinate("33.7489954")
        '33.74900'
        >>> format_coordinate(None) is None
        True
    """
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return f"{number:.{COORDINATE_PRECISION}f}"


class GeocodingClient:
    """
    Client for the Google Geocoding API.

    Documentation: https://developers.google.com/maps/documentation/geocoding
    """

    BASE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, api_key: Optional[str], timeout: float = 10):
        self.api_key = api_key
        self.timeout = timeout
        if not self.api_key:
            logger.warning("Geocoding API key not provided. Properties will be saved without coordinates.")

    def geocode(self, address: str) -> Optional[Coordinates]:
        """
        Look up coordinates for an address.

        Args:
            address: Full address, e.g. "123 Main St, Atlanta, GA"

        Returns:
            (latitude, longitude) as 5-decimal strings, or None
        """
        if not self.api_key or not address.strip():
            return None

        try:
            response = requests.get(
                self.BASE_URL,
                params={"address": address, "key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Geocoding API error for {address!r}: {e}")
            return None

        status = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            logger.info(f"Geocoding returned {status} for {address!r}: {data.get('error_message', '')}")
            return None

        location = results[0].get("geometry", {}).get("location", {})
        lat = format_coordinate(location.get("lat"))
        lng = format_coordinate(location.get("lng"))
        if lat is None or lng is None:
            return None
        return lat, lng


def full_address(address: str, city: str, state: str) -> str:
    """Address string sent to the geocoder."""
    return f"{address}, {city}, {state}"


def geocode_address(address: str, api_key: Optional[str]) -> Optional[Coordinates]:
    """One-off lookup, for scripts that do not keep a client around."""
    return GeocodingClient(api_key).geocode(address)
