"""
Pytest configuration and an in-memory search engine emulator.

The emulator answers the subset of the engine's HTTP API used by the
service and evaluates term/prefix/match/nested/bool queries, including
inner-hits slices, so tests run the real client code end to end.
"""

import itertools
import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.core.config import Config
from src.engine.client import ClusterSet, EngineClient, build_cluster_set, get_cluster_set

INDEX = "wordsearch"


def _lookup(doc: Dict[str, Any], field: str, prefix: Optional[str]) -> Any:
    if prefix and field.startswith(prefix + "."):
        field = field[len(prefix) + 1:]
    return doc.get(field)


def _tokens(value: Any) -> List[str]:
    return str(value or "").lower().split()


def evaluate(query: Dict[str, Any], doc: Dict[str, Any], prefix: Optional[str] = None) -> Tuple[bool, Dict[str, List[dict]]]:
    """Return whether ``doc`` matches ``query`` and any inner-hits slices produced."""
    (kind, body), = query.items()
    inner: Dict[str, List[dict]] = {}

    if kind == "match_all":
        return True, inner
    if kind == "term":
        (field, value), = body.items()
        return _lookup(doc, field, prefix) == value, inner
    if kind == "prefix":
        (field, value), = body.items()
        stored = _lookup(doc, field, prefix)
        return isinstance(stored, str) and stored.startswith(value), inner
    if kind == "match":
        (field, value), = body.items()
        wanted = set(_tokens(value))
        return bool(wanted & set(_tokens(_lookup(doc, field, prefix)))), inner
    if kind == "nested":
        path = body["path"]
        matches = [el for el in doc.get(path) or [] if evaluate(body["query"], el, path)[0]]
        if "inner_hits" in body and matches:
            inner[body["inner_hits"]["name"]] = matches[: body["inner_hits"].get("size", 3)]
        return bool(matches), inner
    if kind == "bool":
        ok = True
        for clause in body.get("must", []) + body.get("filter", []):
            matched, clause_inner = evaluate(clause, doc, prefix)
            ok = ok and matched
            inner.update(clause_inner)
        should_hits = 0
        for clause in body.get("should", []):
            matched, clause_inner = evaluate(clause, doc, prefix)
            should_hits += matched
            if matched:
                inner.update(clause_inner)
        ok = ok and should_hits >= body.get("minimum_should_match", 0)
        return ok, inner if ok else {}
    raise ValueError(f"Unsupported query clause: {kind}")


class FakeEngine:
    """Single-cluster engine emulator keyed by document id."""

    def __init__(self, name: str = "test-cluster", page_size: int = 10):
        self.name = name
        self.page_size = page_size
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.index_exists = False
        self.mapping: Optional[Dict[str, Any]] = None
        self.requests: List[httpx.Request] = []
        self.fail_status: Optional[int] = None
        self.unreachable = False
        self._ids = (f"doc-{n}" for n in itertools.count(1))

    def add(self, source: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or next(self._ids)
        self.docs[doc_id] = source
        return doc_id

    def search(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        hits = []
        for doc_id, source in self.docs.items():
            matched, inner = evaluate(query, source)
            if not matched:
                continue
            hit = {"_index": INDEX, "_id": doc_id, "_score": 1.0, "_source": source}
            if inner:
                hit["inner_hits"] = {
                    name: {
                        "hits": {
                            "total": {"value": len(elements), "relation": "eq"},
                            "hits": [{"_source": el} for el in elements],
                        }
                    }
                    for name, elements in inner.items()
                }
            hits.append(hit)
        return hits[: self.page_size]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)
        if self.fail_status is not None:
            return httpx.Response(
                self.fail_status,
                json={"error": {"type": "cluster_block_exception", "reason": "blocked"}, "status": self.fail_status},
            )

        method = request.method
        parts = [p for p in request.url.path.split("/") if p]
        body = json.loads(request.content) if request.content else None

        if parts == ["_cluster", "health"]:
            return httpx.Response(200, json={"cluster_name": self.name, "status": "green"})
        if parts == [INDEX] and method == "PUT":
            if self.index_exists:
                return httpx.Response(
                    400,
                    json={"error": {"type": "resource_already_exists_exception", "reason": "index already exists"}},
                )
            self.index_exists = True
            self.mapping = body
            return httpx.Response(200, json={"acknowledged": True, "index": INDEX})
        if parts == [INDEX] and method == "DELETE":
            if not self.index_exists:
                return httpx.Response(404, json={"error": {"type": "index_not_found_exception"}})
            self.index_exists = False
            self.docs.clear()
            return httpx.Response(200, json={"acknowledged": True})
        if parts == [INDEX, "_doc"] and method == "POST":
            doc_id = self.add(body)
            return httpx.Response(201, json={"_index": INDEX, "_id": doc_id, "result": "created"})
        if len(parts) == 3 and parts[:2] == [INDEX, "_doc"]:
            doc_id = parts[2]
            if method == "PUT":
                existed = doc_id in self.docs
                self.add(body, doc_id)
                return httpx.Response(
                    200 if existed else 201,
                    json={"_index": INDEX, "_id": doc_id, "result": "updated" if existed else "created"},
                )
            if method == "GET":
                if doc_id not in self.docs:
                    return httpx.Response(404, json={"_index": INDEX, "_id": doc_id, "found": False})
                return httpx.Response(
                    200,
                    json={"_index": INDEX, "_id": doc_id, "found": True, "_source": self.docs[doc_id]},
                )
        if parts == [INDEX, "_search"]:
            hits = self.search(body["query"])
            return httpx.Response(
                200,
                json={"took": 1, "hits": {"total": {"value": len(hits), "relation": "eq"}, "hits": hits}},
            )
        if parts == [INDEX, "_delete_by_query"]:
            doomed = [doc_id for doc_id, source in self.docs.items() if evaluate(body["query"], source)[0]]
            for doc_id in doomed:
                del self.docs[doc_id]
            return httpx.Response(
                200,
                json={"took": 1, "deleted": len(doomed), "total": len(doomed), "failures": []},
            )
        return httpx.Response(400, json={"error": f"unsupported {method} {request.url.path}"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_client(engine: FakeEngine, url: str = "http://es-test:9200") -> EngineClient:
    return EngineClient(url, INDEX, timeout=5.0, transport=engine.transport)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def clusters(engine) -> ClusterSet:
    config = Config(ES_CLUSTER="http://es-test:9200", ES_CLUSTER_SECONDARY=None, INDEX_NAME=INDEX)
    return build_cluster_set(config, transport=engine.transport)


@pytest.fixture
def replica() -> FakeEngine:
    return FakeEngine(name="replica-cluster")


@pytest.fixture
def replicated_clusters(engine, replica) -> ClusterSet:
    return ClusterSet(make_client(engine), make_client(replica, "http://es-replica:9200"))


def _client_for(cluster_set: ClusterSet) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_cluster_set] = lambda: cluster_set
    return TestClient(app)


@pytest.fixture
def client(clusters) -> TestClient:
    return _client_for(clusters)


@pytest.fixture
def replicated_client(replicated_clusters) -> TestClient:
    return _client_for(replicated_clusters)
