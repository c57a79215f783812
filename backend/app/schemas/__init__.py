"""Pydantic Schemas — request bodies for API endpoints.

Invariants:
    - Schemas accept any JSON object; field-level rules live in core/
"""
