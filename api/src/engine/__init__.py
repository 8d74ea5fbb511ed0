"""
Search engine module.

This module provides an abstraction layer over the external search
engine storing word documents.

Key operations:
- Boolean query model rendered to the engine's query DSL
- Index mapping with nested definitions
- Document writes, reads and searches over one or two clusters
"""

from src.engine.client import (
    ClusterSet,
    DocumentNotFoundError,
    EngineClient,
    EngineError,
    EngineResponse,
    build_cluster_set,
    close_cluster_set,
    get_cluster_set,
)

__all__ = [
    "ClusterSet",
    "DocumentNotFoundError",
    "EngineClient",
    "EngineError",
    "EngineResponse",
    "build_cluster_set",
    "close_cluster_set",
    "get_cluster_set",
]
