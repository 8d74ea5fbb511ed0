"""
Core module for shared configuration and schemas.

This module provides foundational components used across the application:
- Configuration management
- Pydantic schemas for data validation
"""
