"""
API route definitions.

This module defines the HTTP endpoints for the word search service:
- GET /health - Cluster health of the backing engine(s)
- POST /documents - Create a word document
- PUT /documents/{doc_id} - Replace a word document
- GET /documents/{doc_id} - Fetch a word document by engine id
- DELETE /documents?q= - Delete every document with the exact headword
- GET /search?q=&t= - Search words and meanings, optionally by definition type
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.core.schemas import ErrorResponse, WordDocument, WordResult
from src.engine.client import ClusterSet, DocumentNotFoundError, EngineError, get_cluster_set
from src.retrieval.pipeline import SearchPipeline
from src.retrieval.query_builder import get_query_builder
from src.retrieval.query_processor import normalize_param

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {500: {"model": ErrorResponse}}


def _engine_failure(message: str, error: EngineError) -> JSONResponse:
    logger.error(f"{message}: {error} ({error.status_code})")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=message, details=error.details).model_dump(),
    )


@router.get("/health", responses=ERROR_RESPONSES)
async def health(clusters: ClusterSet = Depends(get_cluster_set)):
    """Report engine cluster health, keyed per cluster when replicated."""
    try:
        return await clusters.health()
    except EngineError as e:
        return _engine_failure("Error fetching cluster health", e)


@router.post("/documents", responses=ERROR_RESPONSES)
async def create_document(
    document: WordDocument,
    clusters: ClusterSet = Depends(get_cluster_set),
):
    try:
        response = await clusters.index_document(document.model_dump())
    except EngineError as e:
        return _engine_failure("Error creating document", e)
    return JSONResponse(status_code=response.status_code, content=response.body)


@router.put("/documents/{doc_id}", responses=ERROR_RESPONSES)
async def update_document(
    doc_id: str,
    document: WordDocument,
    clusters: ClusterSet = Depends(get_cluster_set),
):
    try:
        response = await clusters.replace_document(doc_id, document.model_dump())
    except EngineError as e:
        return _engine_failure("Error updating document", e)
    return JSONResponse(status_code=response.status_code, content=response.body)


@router.get("/search", response_model=List[WordResult], responses=ERROR_RESPONSES)
async def search(
    q: Optional[str] = Query(None, description="Word or meaning text"),
    t: Optional[str] = Query(None, description="Definition type, e.g. 'noun'"),
    clusters: ClusterSet = Depends(get_cluster_set),
):
    """
    Search the word index.

    Without any parameter every document is returned, up to the engine's
    default page size. With ``t`` only the definitions of that type are
    returned for each word.
    """
    try:
        return await SearchPipeline(clusters).search(q, t)
    except EngineError as e:
        return _engine_failure("Error searching documents", e)


@router.get(
    "/documents/{doc_id}",
    responses={404: {"model": ErrorResponse}, **ERROR_RESPONSES},
)
async def get_document(doc_id: str, clusters: ClusterSet = Depends(get_cluster_set)):
    try:
        return await clusters.get_document(doc_id)
    except DocumentNotFoundError:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(error="Document not found").model_dump(exclude_none=True),
        )
    except EngineError as e:
        return _engine_failure("Error fetching document", e)


@router.delete(
    "/documents",
    responses={400: {"model": ErrorResponse}, **ERROR_RESPONSES},
)
async def delete_documents(
    q: Optional[str] = Query(None, description="Exact headword to delete"),
    clusters: ClusterSet = Depends(get_cluster_set),
):
    """Delete every document whose headword equals ``q`` exactly."""
    word = normalize_param(q)
    if not word:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Missing query parameter 'q'").model_dump(exclude_none=True),
        )

    body = {"query": get_query_builder().exact_word(word).to_dict()}
    try:
        response = await clusters.delete_by_query(body)
    except EngineError as e:
        return _engine_failure("Error deleting documents", e)
    return response.body
