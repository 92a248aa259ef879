"""Nearby place lookup: geocode a free-text location, then search around it."""

import logging
from typing import Any, Dict, List, Optional

from placerelay.core.config import Settings, get_settings
from placerelay.etl.transform import geocode_coordinates, to_place_candidate
from placerelay.models import PlaceCandidate
from placerelay.vendors import google_places

logger = logging.getLogger(__name__)


class LocationNotFound(LookupError):
    """Raised when geocoding yields no result; ``details`` holds the raw payload."""

    def __init__(self, location_text: str, details: Dict[str, Any]) -> None:
        super().__init__(f"Location not found: {location_text}")
        self.location_text = location_text
        self.details = details


def find_nearby(
    category: str,
    location_text: str,
    limit: int,
    settings: Optional[Settings] = None,
) -> List[PlaceCandidate]:
    settings = settings or get_settings()

    geo_payload = google_places.geocode(
        location_text,
        api_key=settings.google_maps_api_key,
        region=settings.geocode_region,
        timeout=settings.request_timeout,
    )
    coordinates = geocode_coordinates(geo_payload)
    if coordinates is None:
        raise LocationNotFound(location_text, geo_payload)

    logger.info(
        "Nearby search for type=%s around %s,%s (radius=%s)",
        category,
        coordinates.latitude,
        coordinates.longitude,
        settings.search_radius_meters,
    )
    response = google_places.nearby_search(
        coordinates.latitude,
        coordinates.longitude,
        radius=settings.search_radius_meters,
        place_type=category,
        api_key=settings.google_maps_api_key,
        timeout=settings.request_timeout,
    )
    results = response.get("results", [])[:limit]
    return [to_place_candidate(result) for result in results]
