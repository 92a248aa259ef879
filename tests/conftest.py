import sys
from pathlib import Path

import pytest

# Ensure the `placerelay` package is importable when running pytest from the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from placerelay.core.config import Settings  # noqa: E402


@pytest.fixture
def settings():
    return Settings(
        google_maps_api_key="maps-key",
        google_places_api_key="places-key",
        openai_api_key="openai-key",
        gemini_api_key="gemini-key",
        enrich_max_workers=4,
    )
