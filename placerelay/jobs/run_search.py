"""CLI job to list places from the terminal and print them as JSON."""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from placerelay.core import aggregator
from placerelay.core.places import LocationNotFound
from placerelay.etl.transform import candidate_to_dict, enriched_to_dict

logger = logging.getLogger(__name__)


def run_search(*, category: str, location: str, limit: int, with_contacts: bool) -> Dict[str, Any]:
    if not category.strip() or not location.strip():
        raise ValueError("Both --type and --location must be non-empty")

    if with_contacts:
        enriched = aggregator.search_with_contacts(category, location, limit)
        results: List[Dict[str, Any]] = [enriched_to_dict(place) for place in enriched]
        return {"count": len(results), "results": results}

    candidates = aggregator.search_nearby(category, location, limit)
    places = [candidate_to_dict(candidate) for candidate in candidates]
    return {"count": len(places), "places": places}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search Google places near a location")
    parser.add_argument("--type", dest="category", required=True, help="Place type, e.g. restaurant")
    parser.add_argument("--location", dest="location", required=True, help="Free-text location, e.g. 'Pune, India'")
    parser.add_argument("--limit", dest="limit", type=int, default=10, help="Maximum number of places to print")
    parser.add_argument(
        "--contacts",
        dest="with_contacts",
        action="store_true",
        help="Use text search and enrich each place with phone, website and starting price",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.limit <= 0:
        parser.error("--limit must be positive")

    try:
        output = run_search(
            category=args.category,
            location=args.location,
            limit=args.limit,
            with_contacts=args.with_contacts,
        )
    except LocationNotFound as exc:
        logger.error("%s", exc)
        raise SystemExit(2) from exc

    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
