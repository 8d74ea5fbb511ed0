"""
API module for HTTP interface.

This module contains the FastAPI application and route definitions
for the word search service.

Endpoints:
- Health check (service and engine clusters)
- Document create, replace, fetch and delete-by-word
- Word and definition search
"""
