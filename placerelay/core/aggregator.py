"""Place listing strategies: plain nearby search, or text search with contact enrichment."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from placerelay.core import contacts, places
from placerelay.core.config import Settings, get_settings
from placerelay.etl.transform import merge_place, to_place_candidate
from placerelay.models import EnrichedPlace, PlaceCandidate
from placerelay.vendors import google_places

logger = logging.getLogger(__name__)


def build_text_query(category: str, location_text: str) -> str:
    return f"{category.strip()} in {location_text.strip()}"


def search_nearby(
    category: str,
    location_text: str,
    limit: int,
    settings: Optional[Settings] = None,
) -> List[PlaceCandidate]:
    """Coordinate-based listing without contact enrichment."""
    return places.find_nearby(category, location_text, limit, settings=settings)


def _enrich_candidate(candidate: PlaceCandidate, settings: Settings) -> EnrichedPlace:
    try:
        details = contacts.lookup_details(candidate.place_id, settings=settings)
        return merge_place(candidate, details)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Enrichment failed for %s: %s", candidate.place_id, exc)
        return merge_place(candidate, None)


def search_with_contacts(
    category: str,
    location_text: str,
    limit: int,
    settings: Optional[Settings] = None,
) -> List[EnrichedPlace]:
    """Text search, then enrich every candidate through a bounded thread pool.

    Results keep the upstream candidate order and are truncated to ``limit``
    once every lookup has settled.
    """
    settings = settings or get_settings()
    query = build_text_query(category, location_text)
    logger.info("Running Places text search for query=%s", query)

    response = google_places.text_search(
        query,
        api_key=settings.google_places_api_key,
        timeout=settings.request_timeout,
    )
    candidates = [to_place_candidate(result) for result in response.get("results", [])]
    logger.info("Fetched %d candidates; enriching with max_workers=%d", len(candidates), settings.enrich_max_workers)
    if not candidates:
        return []

    max_workers = min(settings.enrich_max_workers, len(candidates))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        enriched = list(executor.map(lambda candidate: _enrich_candidate(candidate, settings), candidates))

    return enriched[:limit]
