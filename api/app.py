"""
ASGI entrypoint for the FastAPI application.

This module exposes the app at ``api/app.py`` so it can be served
directly, avoiding import path issues with the nested src structure.
"""

import sys
from pathlib import Path

# Add the api directory to the path so imports work correctly
sys.path.insert(0, str(Path(__file__).parent))

from src.api.app import create_app

app = create_app()
