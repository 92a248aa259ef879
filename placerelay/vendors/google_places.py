"""Client utilities for the Google Geocoding and Places APIs."""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_PLACES_V1_URL = "https://places.googleapis.com/v1/places"
_DEFAULT_TIMEOUT = 10


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""


def _check_status(operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        logger.error("%s failed: status=%s, error_message=%s", operation, status, payload.get("error_message"))
        raise GooglePlacesError(payload.get("error_message") or status)
    return payload


def geocode(address: str, api_key: str, region: Optional[str] = None, timeout: float = _DEFAULT_TIMEOUT) -> Dict[str, Any]:
    """Return the raw geocoding payload; an empty ``results`` list is left to the caller."""
    params = {"address": address, "key": api_key}
    if region:
        params["region"] = region
    response = _SESSION.get(_GEOCODE_URL, params=params, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    if payload.get("status") != "OK":
        logger.warning("geocode returned status=%s for address=%s", payload.get("status"), address)
    return payload


def nearby_search(
    latitude: float,
    longitude: float,
    radius: int,
    place_type: str,
    api_key: str,
    timeout: float = _DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    params = {
        "location": f"{latitude},{longitude}",
        "radius": radius,
        "type": place_type,
        "key": api_key,
    }
    response = _SESSION.get(f"{_BASE_URL}/nearbysearch/json", params=params, timeout=timeout)
    response.raise_for_status()
    return _check_status("nearby_search", response.json())


def text_search(query: str, api_key: str, timeout: float = _DEFAULT_TIMEOUT) -> Dict[str, Any]:
    params = {"query": query, "key": api_key}
    response = _SESSION.get(f"{_BASE_URL}/textsearch/json", params=params, timeout=timeout)
    response.raise_for_status()
    return _check_status("text_search", response.json())


def place_details(place_id: str, api_key: str, timeout: float = _DEFAULT_TIMEOUT) -> Dict[str, Any]:
    """Fetch every field of a place from the Places API v1 details endpoint."""
    headers = {
        "X-Goog-Api-Key": api_key,
        "X-Goog-FieldMask": "*",
    }
    response = _SESSION.get(f"{_PLACES_V1_URL}/{place_id}", headers=headers, timeout=timeout)
    response.raise_for_status()
    return response.json()
