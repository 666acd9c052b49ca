"""Infrastructure Layer — database access, store client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All store failures mapped to StoreError before leaving this layer

Design Decisions:
    - Store client over raw sessions in services (ADR: ExMA single responsibility)
"""
