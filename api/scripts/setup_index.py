"""
Create the word index with its nested definitions mapping.

This script creates the index on every configured cluster so that
definitions are stored as nested documents and can be filtered by type
without matching the meaning of a sibling definition.

Run this once before ingesting documents.

Usage:
    cd api && python -m scripts.setup_index
    cd api && python -m scripts.setup_index --force
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import settings
from src.engine.client import ClusterSet, EngineError, build_cluster_set
from src.engine.mappings import WORD_INDEX_MAPPING

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def setup_index(clusters: ClusterSet, force: bool = False) -> bool:
    """
    Create the word index on every cluster.

    Args:
        clusters: Clusters to create the index on
        force: If True, delete the existing index first

    Returns:
        True if the index exists with the expected mapping afterwards
    """
    for client in clusters.clients:
        logger.info(f"Setting up index '{client.index}' on {client.base_url}")

        if force:
            try:
                await client.delete_index()
                logger.info(f"Deleted existing index '{client.index}'")
            except EngineError as e:
                if e.status_code != 404:
                    logger.error(f"Failed to delete index '{client.index}': {e.details}")
                    return False

        try:
            await client.create_index(WORD_INDEX_MAPPING)
            logger.info(f"Created index '{client.index}' with nested definitions")
        except EngineError as e:
            if "already_exists" in str(e.details) or "already exists" in str(e.details):
                logger.info(f"Index '{client.index}' already exists")
            else:
                logger.error(f"Failed to create index '{client.index}': {e.details}")
                return False

    logger.info("Index setup complete")
    return True


async def _run(force: bool) -> bool:
    clusters = build_cluster_set(settings)
    try:
        return await setup_index(clusters, force=force)
    finally:
        await clusters.close()


def main():
    """Main entry point for index setup."""
    import argparse

    parser = argparse.ArgumentParser(description="Create the word index")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Force recreate the index (delete existing first)",
    )
    args = parser.parse_args()

    if not asyncio.run(_run(args.force)):
        sys.exit(1)


if __name__ == "__main__":
    main()
