"""HTTP entrypoint for place listings, contact enrichment and LLM narration."""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, request
from flask_cors import CORS

from placerelay.core import aggregator, narrator
from placerelay.core.config import Settings, get_settings
from placerelay.core.narrator import EmptyInput
from placerelay.core.places import LocationNotFound
from placerelay.etl.transform import candidate_to_dict, enriched_to_dict

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10

# ---------- App ----------
app = Flask(__name__)


def cors_options(settings: Settings) -> Dict[str, Any]:
    return {
        "origins": list(settings.frontend_origins),
        "methods": ["GET", "PUT", "POST", "DELETE", "OPTIONS"],
        "allow_headers": "*",
        "supports_credentials": True,
    }


CORS(app, **cors_options(get_settings()))

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    return jsonify({"status": "ok"}), 200


@app.post("/scrap")
def scrap_nearby() -> Any:
    """
    Geocode ``location`` and list nearby places of ``type``.
    Required JSON fields: type, location. Optional: limit (int, default 10).
    """
    payload: Any = request.get_json(silent=True) or {}
    try:
        category, location, limit = _parse_listing_request(payload)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        candidates = aggregator.search_nearby(category, location, limit)
    except LocationNotFound as exc:
        logger.info("Location not found: %s", location)
        return jsonify({"error": "Location not found", "details": exc.details}), 404
    except Exception as exc:  # noqa: BLE001
        logger.exception("Nearby search failed for type=%s location=%s: %s", category, location, exc)
        return jsonify({"error": "Failed to fetch nearby places"}), 500

    places = [candidate_to_dict(candidate) for candidate in candidates]
    return jsonify({"count": len(places), "places": places}), 200


@app.post("/scrap/contacts")
def scrap_with_contacts() -> Any:
    """Text search for ``"<type> in <location>"`` with per-place contact details."""
    payload: Any = request.get_json(silent=True) or {}
    try:
        category, location, limit = _parse_listing_request(payload)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        enriched = aggregator.search_with_contacts(category, location, limit)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Text search failed for type=%s location=%s: %s", category, location, exc)
        return jsonify({"error": "Failed to fetch places"}), 500

    results = [enriched_to_dict(place) for place in enriched]
    return jsonify({"count": len(results), "results": results}), 200


@app.post("/research")
def research_places() -> Any:
    payload: Any = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Request body must be a JSON object with a results list"}), 400

    results = payload.get("results")
    if results is not None and not isinstance(results, list):
        return jsonify({"error": "results must be a list"}), 400

    try:
        response = narrator.research(results or [])
    except EmptyInput as exc:
        # 401 is what existing clients expect for an empty list.
        return jsonify({"error": str(exc)}), 401
    except Exception as exc:  # noqa: BLE001
        logger.exception("Research failed: %s", exc)
        return jsonify({"error": "Failed to research places"}), 500

    return jsonify({"response": response}), 200


@app.post("/report")
def generate_report() -> Any:
    payload = request.get_json(silent=True)
    if not payload:
        return jsonify({"error": "Request body is required"}), 400

    try:
        markdown = narrator.generate_report(payload)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Report generation failed: %s", exc)
        return jsonify({"error": "Failed to generate report", "details": str(exc)}), 500

    return jsonify({"results": markdown}), 200


# ---------- Internals ----------


def _parse_listing_request(payload: Any) -> Tuple[str, str, int]:
    if not isinstance(payload, dict):
        raise ValueError("Missing required fields: type, location")

    category = str(payload.get("type") or "").strip()
    location = str(payload.get("location") or "").strip()
    if not category or not location:
        raise ValueError("Missing required fields: type, location")

    limit_raw = payload.get("limit")
    if limit_raw is None:
        return category, location, DEFAULT_LIMIT
    if isinstance(limit_raw, bool):
        raise ValueError("limit must be numeric")
    try:
        limit = int(limit_raw)
    except (TypeError, ValueError) as exc:
        raise ValueError("limit must be numeric") from exc
    if limit <= 0:
        raise ValueError("limit must be positive")
    return category, location, limit


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
