"""
Create the creations table and optionally seed it with sample rows.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import get_settings
from backend.db import PostgresDbClient
from shared.types import CreationType

logger = logging.getLogger(__name__)

SAMPLE_CREATIONS = [
    ("A lighthouse on a cliff at dusk, oil painting", "https://picsum.photos/seed/lighthouse/800", CreationType.IMAGE, True),
    ("Write an article about urban beekeeping", "Urban beekeeping has grown...", CreationType.ARTICLE, False),
    ("Blog titles about remote work", "1. The Home Office Playbook...", CreationType.BLOG_TITLE, False),
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Set up the creations database")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy URL (defaults to DATABASE_URL)",
    )
    parser.add_argument(
        "--seed-user",
        type=str,
        default=None,
        help="Insert sample creations owned by this user id",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    database_url = args.database_url or get_settings().database_url
    if not database_url:
        logger.error("No database URL given and DATABASE_URL is not set")
        return 1

    db = PostgresDbClient(database_url)
    logger.info("Creations table ready")

    if args.seed_user:
        for prompt, content, creation_type, publish in SAMPLE_CREATIONS:
            creation = db.create_creation(
                args.seed_user, prompt, content, creation_type, publish=publish
            )
            logger.info("Seeded %s creation %s", creation.type.value, creation.id)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
