"""Utilities for transforming Google responses into places and JSON rows."""

from typing import Any, Dict, Optional

from placerelay.models import ContactInfo, Coordinates, EnrichedPlace, PlaceCandidate, PlaceDetails

NOT_AVAILABLE = "Not available"
DEFAULT_NAME = "N/A"
DEFAULT_ADDRESS = "Address not available"
DEFAULT_RATING = "No rating"


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> Optional[int]:
    try:
        if value is None:
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _coordinates(lat: Any, lng: Any) -> Optional[Coordinates]:
    latitude = _safe_float(lat)
    longitude = _safe_float(lng)
    if latitude is None or longitude is None:
        return None
    return Coordinates(latitude=latitude, longitude=longitude)


def geocode_coordinates(payload: Dict[str, Any]) -> Optional[Coordinates]:
    """Return the location of the first geocoding result, if any."""
    results = payload.get("results") or []
    if not results:
        return None
    location = (results[0].get("geometry") or {}).get("location") or {}
    return _coordinates(location.get("lat"), location.get("lng"))


def to_place_candidate(result: Dict[str, Any]) -> PlaceCandidate:
    """Map a nearby/text search result into a PlaceCandidate."""
    location = (result.get("geometry") or {}).get("location") or {}
    opening_hours = result.get("opening_hours") or {}
    return PlaceCandidate(
        name=result.get("name"),
        address=result.get("vicinity") or result.get("formatted_address"),
        rating=_safe_float(result.get("rating")),
        total_ratings=_safe_int(result.get("user_ratings_total")),
        location=_coordinates(location.get("lat"), location.get("lng")),
        place_id=result.get("place_id"),
        open_now=opening_hours.get("open_now"),
        detail_url=result.get("url"),
    )


def to_contact_info(details: Dict[str, Any]) -> ContactInfo:
    # priceRange and startPrice are both optional in the v1 response.
    start_price = ((details.get("priceRange") or {}).get("startPrice") or {}).get("units")
    return ContactInfo(
        phone=details.get("internationalPhoneNumber") or None,
        website=details.get("websiteUri") or None,
        starting_price=str(start_price) if start_price else None,
    )


def to_place_details(details: Dict[str, Any]) -> PlaceDetails:
    """Map a Places API v1 details payload into PlaceDetails."""
    location = details.get("location") or {}
    opening_hours = details.get("currentOpeningHours") or details.get("regularOpeningHours") or {}
    return PlaceDetails(
        contact=to_contact_info(details),
        name=(details.get("displayName") or {}).get("text"),
        address=details.get("formattedAddress"),
        rating=_safe_float(details.get("rating")),
        total_ratings=_safe_int(details.get("userRatingCount")),
        location=_coordinates(location.get("latitude"), location.get("longitude")),
        open_now=opening_hours.get("openNow"),
        maps_url=details.get("googleMapsUri"),
    )


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def merge_place(candidate: PlaceCandidate, details: Optional[PlaceDetails]) -> EnrichedPlace:
    """Merge a candidate with its details: details value, then candidate value, then default."""
    details = details or PlaceDetails()
    return EnrichedPlace(
        name=_first_present(details.name, candidate.name, DEFAULT_NAME),
        address=_first_present(details.address, candidate.address, DEFAULT_ADDRESS),
        rating=_first_present(details.rating, candidate.rating),
        total_ratings=_first_present(details.total_ratings, candidate.total_ratings, 0),
        location=_first_present(details.location, candidate.location),
        place_id=candidate.place_id,
        open_now=_first_present(details.open_now, candidate.open_now),
        url=_first_present(details.maps_url, candidate.detail_url),
        contact=details.contact,
    )


def _coordinates_to_dict(location: Optional[Coordinates]) -> Optional[Dict[str, float]]:
    if location is None:
        return None
    return {"lat": location.latitude, "lng": location.longitude}


def candidate_to_dict(candidate: PlaceCandidate) -> Dict[str, Any]:
    return {
        "name": candidate.name,
        "address": candidate.address,
        "rating": candidate.rating,
        "user_ratings_total": candidate.total_ratings,
        "location": _coordinates_to_dict(candidate.location),
        "place_id": candidate.place_id,
    }


def contact_to_dict(contact: ContactInfo) -> Dict[str, str]:
    return {
        "phone": contact.phone or NOT_AVAILABLE,
        "website": contact.website or NOT_AVAILABLE,
        "starting_price": contact.starting_price or NOT_AVAILABLE,
    }


def enriched_to_dict(place: EnrichedPlace) -> Dict[str, Any]:
    return {
        "name": place.name,
        "address": place.address,
        "rating": place.rating if place.rating is not None else DEFAULT_RATING,
        "user_ratings_total": place.total_ratings,
        "location": _coordinates_to_dict(place.location),
        "place_id": place.place_id,
        "open_now": place.open_now,
        "url": place.url,
        **contact_to_dict(place.contact),
    }
