"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when a credential needed by an outbound call is missing."""


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str
    google_places_api_key: str
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    port: int = 8000
    search_radius_meters: int = 5000
    geocode_region: Optional[str] = "in"
    enrich_max_workers: int = 8
    request_timeout: float = 10.0
    llm_timeout: float = 60.0
    frontend_origins: Tuple[str, ...] = ("*",)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_maps_api_key = os.getenv("GOOGLE_MAPS_API_KEY", "")
    # The Places v1 key covers text search and details; older deployments only set the maps key.
    google_places_api_key = os.getenv("GOOGLE_PLACES_API", "") or google_maps_api_key
    openai_api_key = os.getenv("OPENAI_API_KEY", "")
    openai_model = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_base_url = os.getenv("OPENAI_BASE_URL") or None
    gemini_api_key = os.getenv("GEMINI_API_KEY", "")
    gemini_model = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    port = int(os.getenv("PORT", "8000"))
    search_radius_meters = int(os.getenv("SEARCH_RADIUS_METERS", "5000"))
    geocode_region_raw = os.getenv("GEOCODE_REGION", "in")
    geocode_region = geocode_region_raw.strip().lower() or None
    enrich_max_workers = max(1, int(os.getenv("ENRICH_MAX_WORKERS", "8")))
    request_timeout = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))
    llm_timeout = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
    frontend_origin_raw = os.getenv("FRONTEND_ORIGIN", "*")
    frontend_origins = tuple(origin.strip() for origin in frontend_origin_raw.split(",") if origin.strip()) or ("*",)

    if not google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not configured; geocoding and nearby search will fail.")
    if not google_places_api_key:
        logger.warning("GOOGLE_PLACES_API is not configured; text search and place details will fail.")
    if not openai_api_key:
        logger.warning("OPENAI_API_KEY is not configured; research requests will fail.")
    if not gemini_api_key:
        logger.warning("GEMINI_API_KEY is not configured; report generation will fail.")

    return Settings(
        google_maps_api_key=google_maps_api_key,
        google_places_api_key=google_places_api_key,
        openai_api_key=openai_api_key,
        openai_model=openai_model,
        openai_base_url=openai_base_url,
        gemini_api_key=gemini_api_key,
        gemini_model=gemini_model,
        port=port,
        search_radius_meters=search_radius_meters,
        geocode_region=geocode_region,
        enrich_max_workers=enrich_max_workers,
        request_timeout=request_timeout,
        llm_timeout=llm_timeout,
        frontend_origins=frontend_origins,
    )
