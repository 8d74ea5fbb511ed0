"""
Application configuration management.

This module centralizes all configuration settings for the application,
loading values from environment variables with sensible defaults.

Configuration categories:
- Search engine connection settings (cluster URLs, index, timeouts)
- Query shaping parameters
- HTTP server and logging settings
"""

from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv
import os

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Config:
    """
    Central configuration for the word search API.

    All configuration values are loaded from environment variables.
    This class serves as the single source of truth for application settings.

    Attributes:
        ES_CLUSTER: Base URL of the primary search engine cluster.
        ES_CLUSTER_SECONDARY: Optional second cluster; writes are replicated to it.
        INDEX_NAME: Index holding the word documents.
        ES_TIMEOUT: Outbound request timeout in seconds.
        ES_KEEP_ALIVE: Whether pooled connections are reused between requests.
        INNER_HITS_SIZE: Maximum matched definitions returned per word.
        API_HOST: Bind address for the uvicorn server.
        API_PORT: Bind port for the uvicorn server.
        CORS_ORIGINS: Allowed origins for browser clients.
        LOG_LEVEL: Root logging level.
    """

    # Search engine
    ES_CLUSTER: str = os.getenv("ES_CLUSTER", "http://es-cluster:9200")
    ES_CLUSTER_SECONDARY: Optional[str] = os.getenv("ES_CLUSTER_SECONDARY") or None
    INDEX_NAME: str = os.getenv("INDEX_NAME", "wordsearch")
    ES_TIMEOUT: float = float(os.getenv("ES_TIMEOUT", "10.0"))
    ES_KEEP_ALIVE: bool = _env_flag("ES_KEEP_ALIVE", "true")

    # Query shaping
    INNER_HITS_SIZE: int = int(os.getenv("INNER_HITS_SIZE", "100"))

    # Server
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "5000"))
    CORS_ORIGINS: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def cluster_urls(self) -> List[str]:
        """Configured cluster base URLs, primary first."""
        urls = [self.ES_CLUSTER]
        if self.ES_CLUSTER_SECONDARY:
            urls.append(self.ES_CLUSTER_SECONDARY)
        return urls


settings = Config()
