# src/social_api/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

Modules are imported directly (``social_api.schemas.post`` and so on) so that
the error schema stays importable from the core layer without pulling in the rest.
"""
