"""
Batch ingestion of word documents.

This module loads a JSON file holding an array of word documents,
validates each entry and indexes the valid ones through the
configured cluster(s).

Usage:
    cd api && python -m src.ingestion.ingest data/words.json
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from src.core.schemas import WordDocument
from src.engine.client import ClusterSet, EngineError, close_cluster_set, get_cluster_set

logger = logging.getLogger(__name__)


def load_documents(path: Path) -> Tuple[List[WordDocument], int]:
    """
    Read and validate word documents from a JSON file.

    Args:
        path: File containing a JSON array of ``{word, definitions}`` objects

    Returns:
        Tuple of (valid documents, number of skipped entries)
    """
    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON array of word documents")

    documents = []
    skipped = 0
    for position, record in enumerate(records):
        try:
            documents.append(WordDocument.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(f"Skipping entry {position}: {e.error_count()} validation error(s)")
    return documents, skipped


async def ingest(documents: List[WordDocument], clusters: ClusterSet) -> Dict[str, int]:
    """
    Index documents one by one.

    A failed write is logged and counted; it does not stop the batch.

    Returns:
        Counts of indexed and failed documents
    """
    indexed = 0
    failed = 0
    for document in documents:
        try:
            await clusters.index_document(document.model_dump())
            indexed += 1
        except EngineError as e:
            failed += 1
            logger.error(f"Failed to index '{document.word}': {e.details}")
            continue

        if indexed % 500 == 0:
            logger.info(f"Indexed {indexed} documents...")

    return {"indexed": indexed, "failed": failed}


async def _run(path: Path) -> Dict[str, Any]:
    documents, skipped = load_documents(path)
    logger.info(f"Loaded {len(documents)} documents from {path} ({skipped} skipped)")
    try:
        counts = await ingest(documents, get_cluster_set())
    finally:
        await close_cluster_set()
    return {**counts, "skipped": skipped}


def main():
    """Main entry point for batch ingestion."""
    parser = argparse.ArgumentParser(description="Index word documents from a JSON file")
    parser.add_argument("path", type=Path, help="JSON array of word documents")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    summary = asyncio.run(_run(args.path))
    logger.info(
        f"Ingestion complete: {summary['indexed']} indexed, "
        f"{summary['failed']} failed, {summary['skipped']} skipped"
    )


if __name__ == "__main__":
    main()
