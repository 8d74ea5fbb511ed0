"""
Pydantic schemas for request/response validation and data models.

This module defines the data structures used throughout the application
for type safety and API documentation. Schemas include:
- Word document representation (headword plus nested definitions)
- Normalized search parameters
- Search result and error response models
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class Definition(BaseModel):
    """A single sense of a word, stored as an independent nested element."""

    type: str = Field(..., description="Category of the sense, e.g. 'noun' or 'verb'")
    meaning: str = Field(..., description="Free-text meaning")


class WordDocument(BaseModel):
    """Document stored in the search engine index."""

    word: str = Field(..., description="Headword; not guaranteed unique")
    definitions: List[Definition] = Field(default_factory=list)


class SearchParams(BaseModel):
    """
    Normalized search parameters.

    A parameter is None when it was absent or empty after normalization.
    """

    text: Optional[str] = None
    definition_type: Optional[str] = None

    def is_empty(self) -> bool:
        """Check if neither parameter is present."""
        return self.text is None and self.definition_type is None


class WordResult(BaseModel):
    """Simplified search hit returned to clients."""

    word: Optional[str] = None
    definitions: List[dict] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    error: str
    details: Optional[Any] = None
