"""
Search engine client.

This module provides the interface to the search engine cluster(s)
holding the word index. It handles connection management, error
translation and replication of writes across two clusters.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from src.core.config import Config, settings

logger = logging.getLogger(__name__)


class EngineError(Exception):
    """
    Raised when the engine is unreachable, times out or answers non-2xx.

    Attributes:
        status_code: HTTP status returned by the engine, None on transport failure
        details: Engine error body when available, otherwise the failure message
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details if details is not None else message


class DocumentNotFoundError(EngineError):
    """Raised when a document id does not exist in the index."""


@dataclass
class EngineResponse:
    """Decoded 2xx engine response."""

    status_code: int
    body: Any


def _error_details(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "error" in body:
        return body["error"]
    return body


class EngineClient:
    """
    Async client for a single engine cluster.

    Wraps one pooled ``httpx.AsyncClient``; keep-alive reuse is turned off
    by allowing zero idle connections in the pool.
    """

    def __init__(
        self,
        base_url: str,
        index: str,
        timeout: float = 10.0,
        keep_alive: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.index = index
        limits = httpx.Limits(max_keepalive_connections=20 if keep_alive else 0)
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            limits=limits,
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> EngineResponse:
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {self.base_url}{path} failed: {e}")
            raise EngineError(str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(
                f"{method} {self.base_url}{path} returned {response.status_code}"
            )
            raise EngineError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                details=_error_details(response),
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(f"{method} {self.base_url}{path} returned a non-JSON body")
            raise EngineError(
                "Invalid engine response",
                status_code=response.status_code,
                details=response.text,
            ) from e
        return EngineResponse(status_code=response.status_code, body=body)

    async def health(self) -> Dict[str, Any]:
        return (await self._request("GET", "/_cluster/health")).body

    async def index_document(self, document: Dict[str, Any]) -> EngineResponse:
        return await self._request("POST", f"/{self.index}/_doc", json=document)

    async def replace_document(self, doc_id: str, document: Dict[str, Any]) -> EngineResponse:
        return await self._request("PUT", f"/{self.index}/_doc/{doc_id}", json=document)

    async def get_document(self, doc_id: str) -> Dict[str, Any]:
        try:
            response = await self._request("GET", f"/{self.index}/_doc/{doc_id}")
        except EngineError as e:
            if e.status_code == 404:
                raise DocumentNotFoundError("Document not found", 404, e.details) from e
            raise
        return response.body

    async def search(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return (await self._request("POST", f"/{self.index}/_search", json=body)).body

    async def delete_by_query(self, body: Dict[str, Any]) -> EngineResponse:
        return await self._request("POST", f"/{self.index}/_delete_by_query", json=body)

    async def create_index(self, mapping: Dict[str, Any]) -> EngineResponse:
        return await self._request("PUT", f"/{self.index}", json=mapping)

    async def delete_index(self) -> EngineResponse:
        return await self._request("DELETE", f"/{self.index}")

    async def close(self) -> None:
        await self._http.aclose()


class ClusterSet:
    """
    One or two engine clusters addressed as a unit.

    Writes and health checks go to every cluster in parallel and fail as a
    whole if any cluster fails; nothing is rolled back on the clusters that
    succeeded. Reads are served by the primary cluster only.
    """

    def __init__(self, primary: EngineClient, secondary: Optional[EngineClient] = None):
        self.primary = primary
        self.secondary = secondary

    @property
    def clients(self) -> List[EngineClient]:
        return [c for c in (self.primary, self.secondary) if c is not None]

    @property
    def replicated(self) -> bool:
        return self.secondary is not None

    async def _fan_out(self, operation: str, *args: Any) -> List[Any]:
        # Every call runs to completion before the first failure is raised
        results = await asyncio.gather(
            *(getattr(client, operation)(*args) for client in self.clients),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def health(self) -> Dict[str, Any]:
        results = await self._fan_out("health")
        if not self.replicated:
            return results[0]
        return {f"cluster{i}": result for i, result in enumerate(results, start=1)}

    async def index_document(self, document: Dict[str, Any]) -> EngineResponse:
        return (await self._fan_out("index_document", document))[0]

    async def replace_document(self, doc_id: str, document: Dict[str, Any]) -> EngineResponse:
        return (await self._fan_out("replace_document", doc_id, document))[0]

    async def delete_by_query(self, body: Dict[str, Any]) -> EngineResponse:
        return (await self._fan_out("delete_by_query", body))[0]

    async def create_index(self, mapping: Dict[str, Any]) -> EngineResponse:
        return (await self._fan_out("create_index", mapping))[0]

    async def delete_index(self) -> EngineResponse:
        return (await self._fan_out("delete_index"))[0]

    async def search(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.primary.search(body)

    async def get_document(self, doc_id: str) -> Dict[str, Any]:
        return await self.primary.get_document(doc_id)

    async def close(self) -> None:
        await asyncio.gather(*(client.close() for client in self.clients))


def build_cluster_set(
    config: Config = settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ClusterSet:
    """Create a ClusterSet for every cluster URL in the configuration."""
    clients = [
        EngineClient(
            url,
            config.INDEX_NAME,
            timeout=config.ES_TIMEOUT,
            keep_alive=config.ES_KEEP_ALIVE,
            transport=transport,
        )
        for url in config.cluster_urls
    ]
    return ClusterSet(*clients)


# Module-level singleton
_cluster_set: Optional[ClusterSet] = None


def get_cluster_set() -> ClusterSet:
    """Get or create the singleton ClusterSet instance."""
    global _cluster_set
    if _cluster_set is None:
        _cluster_set = build_cluster_set()
        logger.info(
            f"Connected to {len(_cluster_set.clients)} cluster(s), index '{settings.INDEX_NAME}'"
        )
    return _cluster_set


async def close_cluster_set() -> None:
    """Close the singleton ClusterSet, if one was created."""
    global _cluster_set
    if _cluster_set is not None:
        await _cluster_set.close()
        _cluster_set = None
