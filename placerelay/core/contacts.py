"""Best-effort contact enrichment from the Places API v1 details endpoint.

Contact data is supplementary: every failure here is logged and degraded to an
empty record so a listing never fails because one lookup did.
"""

import logging
from typing import Optional

from placerelay.core.config import Settings, get_settings
from placerelay.etl.transform import NOT_AVAILABLE, to_place_details
from placerelay.models import ContactInfo, PlaceDetails
from placerelay.vendors import google_places

logger = logging.getLogger(__name__)


def lookup_details(place_id: Optional[str], settings: Optional[Settings] = None) -> Optional[PlaceDetails]:
    """Return the details for ``place_id`` or ``None`` when unavailable."""
    if not place_id or place_id == NOT_AVAILABLE:
        return None

    settings = settings or get_settings()
    try:
        payload = google_places.place_details(
            place_id,
            api_key=settings.google_places_api_key,
            timeout=settings.request_timeout,
        )
        return to_place_details(payload)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to fetch details for %s: %s", place_id, exc)
        return None


def enrich(place_id: Optional[str], settings: Optional[Settings] = None) -> ContactInfo:
    details = lookup_details(place_id, settings=settings)
    if details is None:
        return ContactInfo()
    return details.contact
