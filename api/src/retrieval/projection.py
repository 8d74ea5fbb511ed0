"""
Result projection.

This module reshapes the engine's raw hit list into the simplified
``{word, definitions}`` view returned to clients. When the search was
filtered by definition type, only the definitions that matched the
filter are returned.
"""

from typing import Any, Dict, List

from src.core.schemas import WordResult
from src.retrieval.query_builder import MATCHED_DEFINITIONS


def _matched_definitions(hit: Dict[str, Any]) -> List[dict]:
    inner = (hit.get("inner_hits") or {}).get(MATCHED_DEFINITIONS) or {}
    return [
        nested_hit.get("_source", {})
        for nested_hit in (inner.get("hits") or {}).get("hits") or []
    ]


def project_hit(hit: Dict[str, Any], type_filtered: bool) -> WordResult:
    """
    Project a single engine hit.

    Args:
        hit: Raw hit from the engine's ``hits.hits`` list
        type_filtered: Whether the search carried a definition type filter

    Returns:
        WordResult with the stored word and the applicable definitions
    """
    source = hit.get("_source") or {}
    if type_filtered:
        definitions = _matched_definitions(hit)
    else:
        definitions = list(source.get("definitions") or [])
    return WordResult(word=source.get("word"), definitions=definitions)


def project_results(response: Dict[str, Any], type_filtered: bool) -> List[WordResult]:
    """Project every hit of a raw ``_search`` response, preserving engine order."""
    hits = (response.get("hits") or {}).get("hits") or []
    return [project_hit(hit, type_filtered) for hit in hits]
