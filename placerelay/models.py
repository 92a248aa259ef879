"""Data models shared by the place search and narration flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class PlaceCandidate:
    """Normalized snapshot of a single Google place search result."""

    name: Optional[str] = None
    address: Optional[str] = None
    rating: Optional[float] = None
    total_ratings: Optional[int] = None
    location: Optional[Coordinates] = None
    place_id: Optional[str] = None
    open_now: Optional[bool] = None
    detail_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ContactInfo:
    """Contact fields from a place details lookup; ``None`` means not available."""

    phone: Optional[str] = None
    website: Optional[str] = None
    starting_price: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PlaceDetails:
    """Fields read from a Places API v1 details response."""

    contact: ContactInfo = field(default_factory=ContactInfo)
    name: Optional[str] = None
    address: Optional[str] = None
    rating: Optional[float] = None
    total_ratings: Optional[int] = None
    location: Optional[Coordinates] = None
    open_now: Optional[bool] = None
    maps_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class EnrichedPlace:
    name: str
    address: str
    rating: Optional[float]
    total_ratings: int
    location: Optional[Coordinates]
    place_id: Optional[str]
    open_now: Optional[bool]
    url: Optional[str]
    contact: ContactInfo = field(default_factory=ContactInfo)


@dataclass(frozen=True, slots=True)
class NarrativeItem:
    """Shape the research prompt asks the model to return for each place."""

    name: str
    summary: str
    highlights: List[str] = field(default_factory=list)
    popularity: str = ""


@dataclass(frozen=True, slots=True)
class ParsedJson:
    value: Any


@dataclass(frozen=True, slots=True)
class MalformedJson:
    raw_text: str


ExtractedJson = Union[ParsedJson, MalformedJson]
