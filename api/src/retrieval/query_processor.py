"""
Query parameter normalization.

This module turns the raw ``q`` and ``t`` request parameters into
SearchParams. Values are trimmed and one matching pair of surrounding
quotes is removed; anything empty afterwards counts as absent.
"""

from typing import Any

from src.core.schemas import SearchParams

QUOTE_CHARS = ("'", '"')


def normalize_param(value: Any) -> str:
    """
    Normalize a raw query parameter.

    Non-string values normalize to the empty string. Only a single layer of
    quotes is stripped, and only when both ends carry the same quote.

    Args:
        value: Raw parameter value

    Returns:
        The normalized string, possibly empty
    """
    if not isinstance(value, str):
        return ""

    value = value.strip()
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[0] == value[-1]:
        value = value[1:-1]
    return value


def parse_search_params(query: Any = None, definition_type: Any = None) -> SearchParams:
    """
    Build SearchParams from raw request parameters.

    Args:
        query: Raw word/meaning text (``q``)
        definition_type: Raw definition type filter (``t``)

    Returns:
        SearchParams with absent parameters set to None
    """
    text = normalize_param(query)
    type_ = normalize_param(definition_type)
    return SearchParams(text=text or None, definition_type=type_ or None)
