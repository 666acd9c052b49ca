"""Pydantic Schemas — request body validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (JSON object bodies)
    - Unknown fields are kept (extra="allow") and travel to the store's open map

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
