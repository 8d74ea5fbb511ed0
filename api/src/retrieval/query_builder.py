"""
Boolean query construction from normalized search parameters.

This module converts SearchParams into a BoolQuery over the word
index. Each rule below is applied independently; together they
produce the ``must``, ``filter`` and ``should`` groups of the query.
"""

import logging
from typing import List, Optional

from src.core.config import settings
from src.core.schemas import SearchParams
from src.engine.dsl import (
    BoolQuery,
    Clause,
    InnerHits,
    Match,
    MatchAll,
    Nested,
    Prefix,
    Term,
)
from src.engine.mappings import (
    DEFINITION_MEANING_FIELD,
    DEFINITION_TYPE_FIELD,
    DEFINITIONS_PATH,
    WORD_FIELD,
)

logger = logging.getLogger(__name__)

# Label of the inner-hits slice holding the definitions that matched the type filter
MATCHED_DEFINITIONS = "matched_definitions"


class WordQueryBuilder:
    """
    Builds a BoolQuery from SearchParams.

    Rules:
    - no parameters: match every document
    - text: scored term/prefix match on the headword, and a nested match
      on definition meanings; at least one of the three must match
    - type: hard nested filter on the definition type, returning the
      matching definitions as an inner-hits slice
    """

    def __init__(self, inner_hits_size: Optional[int] = None):
        self.inner_hits_size = (
            inner_hits_size if inner_hits_size is not None else settings.INNER_HITS_SIZE
        )

    def build(self, params: SearchParams) -> BoolQuery:
        """
        Build a BoolQuery from SearchParams.

        Args:
            params: Normalized search parameters

        Returns:
            BoolQuery ready to be rendered for the engine
        """
        query = BoolQuery()

        if params.is_empty():
            query.must.append(MatchAll())

        if params.text:
            query.should.extend(self._build_text_clauses(params.text))
            query.minimum_should_match = 1

        if params.definition_type:
            query.filter.append(self._build_type_filter(params.definition_type))

        logger.debug(f"Built query for {params!r}: {query.to_dict()}")
        return query

    def exact_word(self, word: str) -> Term:
        """Clause matching documents whose headword equals ``word``."""
        return Term(field=WORD_FIELD, value=word)

    def _build_text_clauses(self, text: str) -> List[Clause]:
        """
        Build the scored clauses for the word/meaning text.

        Args:
            text: Normalized search text

        Returns:
            Term and prefix clauses on the headword, then a nested meaning match
        """
        return [
            Term(field=WORD_FIELD, value=text),
            Prefix(field=WORD_FIELD, value=text),
            Nested(
                path=DEFINITIONS_PATH,
                query=Match(field=DEFINITION_MEANING_FIELD, value=text),
            ),
        ]

    def _build_type_filter(self, definition_type: str) -> Nested:
        return Nested(
            path=DEFINITIONS_PATH,
            query=Term(field=DEFINITION_TYPE_FIELD, value=definition_type),
            inner_hits=InnerHits(name=MATCHED_DEFINITIONS, size=self.inner_hits_size),
        )


# Module-level singleton
_query_builder: Optional[WordQueryBuilder] = None


def get_query_builder() -> WordQueryBuilder:
    """Get or create the singleton WordQueryBuilder instance."""
    global _query_builder
    if _query_builder is None:
        _query_builder = WordQueryBuilder()
    return _query_builder
