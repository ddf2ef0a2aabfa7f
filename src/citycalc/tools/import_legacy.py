# citycalc/tools/import_legacy.py
"""
One-time import of a v1 ``cities.json`` file into the city store.

Every city in the file is upserted under one project slug (``clearway`` by
default). Records are copied as-is; legacy fields are upgraded the next time
the project's cities are loaded.

Usage::

    citycalc-import-legacy data/cities.json
    citycalc-import-legacy data/cities.json --project clearway --api http://localhost:8000
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from citycalc.contracts.city import City
from citycalc.contracts.store import CityStore
from citycalc.core.client import CitiesApiClient
from citycalc.core.config import settings
from citycalc.core.logging import configure_logging
from citycalc.core.registry import get_project
from citycalc.core.store import SqlCityStore

logger = logging.getLogger(__name__)


def load_legacy_cities(path: Path) -> list[City] | None:
    """Parse the file; ``None`` when it does not exist."""
    if not path.exists():
        return None
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of cities")

    cities: list[City] = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("id"):
            logger.warning("Skipping record without id: %r", item)
            continue
        cities.append(City.from_flat(item))
    return cities


async def import_cities(store: CityStore, slug: str, cities: list[City]) -> int:
    for city in cities:
        await store.upsert(slug, city)
        logger.info("Migrated: %s (%s)", city.name, city.id)
    return len(cities)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="citycalc-import-legacy")
    parser.add_argument("file", help="Path to the legacy cities.json")
    parser.add_argument(
        "--project",
        default=settings.legacy_project_slug,
        help=f"Target project slug (default: {settings.legacy_project_slug})",
    )
    parser.add_argument(
        "--api",
        default=None,
        help="Import through the REST API at this base URL instead of the database",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(settings.log_level, json=settings.log_json)
    args = _build_parser().parse_args(argv)

    if get_project(args.project) is None:
        logger.error("Unknown project: %s", args.project)
        return 1

    try:
        cities = load_legacy_cities(Path(args.file))
        if cities is None:
            logger.info("No %s found, nothing to migrate", args.file)
            return 0
        if not cities:
            logger.info("%s is empty, nothing to migrate", args.file)
            return 0

        store: CityStore = (
            CitiesApiClient(base_url=args.api) if args.api else SqlCityStore()
        )
        count = asyncio.run(import_cities(store, args.project, cities))
    except Exception:
        logger.exception("Migration failed")
        return 1

    logger.info("Done: %d cities migrated with project_slug = '%s'", count, args.project)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
