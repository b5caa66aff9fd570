"""Pydantic Schemas: request/response contracts for API endpoints.

Invariants:
    - Schemas are API contracts; models/ holds persistence
"""
