"""
Ingestion module for word data preparation.

This module handles the offline data loading workflow:
1. Reading word documents from a JSON file
2. Validating them against the WordDocument schema
3. Indexing them into the search engine cluster(s)

The index itself must exist first (see scripts/setup_index.py) so that
definitions are mapped as nested documents.
"""
