"""
Application entry point.

This module serves as the main entry point for running the
word search API server using uvicorn.
"""

from uvicorn import run

from src.core.config import settings

if __name__ == "__main__":
    run("src.api.app:create_app", factory=True, host=settings.API_HOST, port=settings.API_PORT)
