"""
Retrieval module for word search.

This module handles the query-time retrieval workflow:
- Normalization of the raw text and type parameters
- Boolean query construction over the nested word model
- Projection of engine hits into simplified results

The retrieval pipeline provides a unified interface for:
- Word/meaning search (scored)
- Definition type filtering (inner-hits slices)
- Listing every document when no parameter is given
"""

from src.retrieval.pipeline import SearchPipeline
from src.retrieval.projection import project_results
from src.retrieval.query_builder import WordQueryBuilder, get_query_builder
from src.retrieval.query_processor import normalize_param, parse_search_params

__all__ = [
    "SearchPipeline",
    "WordQueryBuilder",
    "get_query_builder",
    "normalize_param",
    "parse_search_params",
    "project_results",
]
