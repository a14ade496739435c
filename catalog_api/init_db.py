"""
Catalog API — Database Init Script
====================================

What:  Creates the schema for one or both databases and loads the bundled
       sample data.
How:   Tables come from the ORM models (create_all, existing tables are left
       alone). Seeding is skipped for a database that already holds data.

Usage:
    catalog-api-init-db all
    catalog-api-init-db catalog --no-seed
    python -m catalog_api.init_db lore
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from catalog_api.config import settings
from catalog_api.database import CatalogBase, Database, LoreBase, create_schema
from catalog_api.exceptions import DatabaseError
from catalog_api.seed_data import seed

logger = logging.getLogger(__name__)

BASES = {"lore": LoreBase, "catalog": CatalogBase}


def ensure_sqlite_directory(url: str) -> None:
    """Creates the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or not parsed.database or parsed.database == ":memory:":
        return
    Path(parsed.database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


async def init_database(variant: str, url: str, load_seed: bool = True) -> None:
    ensure_sqlite_directory(url)
    database = Database(url, echo=settings.sql_echo)
    try:
        await create_schema(database, BASES[variant])
        logger.info("Schema ready for %s database", variant)
        if load_seed:
            if await seed(database, variant):
                logger.info("Loaded sample data into %s database", variant)
    except (SQLAlchemyError, OSError) as exc:
        raise DatabaseError(message=f"Failed to initialize {variant} database", details=str(exc)) from exc
    finally:
        await database.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-api-init-db",
        description="Create the lore and/or catalog database schema and load sample data.",
    )
    parser.add_argument(
        "target",
        choices=["lore", "catalog", "all"],
        help="Which database to initialize",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Create the schema only; do not load the sample data",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    variants = ["lore", "catalog"] if args.target == "all" else [args.target]
    for variant in variants:
        url = settings.database_url_for(variant)
        try:
            asyncio.run(init_database(variant, url, load_seed=not args.no_seed))
        except DatabaseError as exc:
            logger.error("Failed to initialize %s database: %s", variant, exc.details)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
