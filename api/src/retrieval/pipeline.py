"""
Search pipeline orchestration.

This module coordinates the search workflow:
Raw parameters → Normalization → Query shaping → Engine search → Projection

It provides the main entry point for executing word searches.
"""

import logging
from typing import Any, List, Optional

from src.core.schemas import WordResult
from src.engine.client import ClusterSet, get_cluster_set
from src.retrieval.projection import project_results
from src.retrieval.query_builder import WordQueryBuilder, get_query_builder
from src.retrieval.query_processor import parse_search_params

logger = logging.getLogger(__name__)


class SearchPipeline:
    """Runs one word search against the primary cluster. No retries."""

    def __init__(
        self,
        clusters: Optional[ClusterSet] = None,
        builder: Optional[WordQueryBuilder] = None,
    ):
        self.clusters = clusters or get_cluster_set()
        self.builder = builder or get_query_builder()

    async def search(self, query: Any = None, definition_type: Any = None) -> List[WordResult]:
        """
        Execute a word search.

        Args:
            query: Raw word/meaning text
            definition_type: Raw definition type filter

        Returns:
            Projected results in engine ranking order

        Raises:
            EngineError: If the engine is unreachable or rejects the search
        """
        params = parse_search_params(query, definition_type)
        body = self.builder.build(params).to_search_body()

        response = await self.clusters.search(body)
        results = project_results(response, type_filtered=params.definition_type is not None)

        logger.info(
            f"Search text={params.text!r} type={params.definition_type!r} "
            f"returned {len(results)} result(s)"
        )
        return results
