"""
Boolean query model and its rendering to the engine's query DSL.

Query construction works with the typed clauses defined here. Only
``to_dict`` knows the engine's JSON field names, so the wire shape can
change without touching the query shaping rules.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class Clause:
    """Base class for a single query clause."""

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass
class MatchAll(Clause):
    def to_dict(self) -> Dict[str, Any]:
        return {"match_all": {}}


@dataclass
class Term(Clause):
    """Exact value match on a keyword field."""

    field: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"term": {self.field: self.value}}


@dataclass
class Prefix(Clause):
    field: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"prefix": {self.field: self.value}}


@dataclass
class Match(Clause):
    """Analyzed full-text match."""

    field: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"match": {self.field: self.value}}


@dataclass
class InnerHits:
    """
    Request for the nested elements that satisfied a nested query.

    Attributes:
        name: Label under which the engine returns the slice
        size: Maximum number of elements returned per parent document
    """

    name: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "size": self.size, "_source": True}


@dataclass
class Nested(Clause):
    """Query evaluated against each element of a nested array independently."""

    path: str
    query: Clause
    inner_hits: Optional[InnerHits] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"path": self.path, "query": self.query.to_dict()}
        if self.inner_hits is not None:
            body["inner_hits"] = self.inner_hits.to_dict()
        return {"nested": body}


@dataclass
class BoolQuery(Clause):
    """
    Boolean composition of clause groups.

    ``must`` and ``filter`` are conjunctive; at least
    ``minimum_should_match`` of the ``should`` clauses must match.
    """

    must: List[Clause] = field(default_factory=list)
    filter: List[Clause] = field(default_factory=list)
    should: List[Clause] = field(default_factory=list)
    minimum_should_match: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bool": {
                "must": [clause.to_dict() for clause in self.must],
                "filter": [clause.to_dict() for clause in self.filter],
                "should": [clause.to_dict() for clause in self.should],
                "minimum_should_match": self.minimum_should_match,
            }
        }

    def to_search_body(self) -> Dict[str, Any]:
        """Render a complete ``_search`` request body."""
        return {"query": self.to_dict()}
