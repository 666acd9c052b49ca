"""Services Layer — operation flows over the record store.

Invariants:
    - Services call the store strictly in sequence within one request
    - Pure decisions (order arithmetic, payload shaping) live in core/

Design Decisions:
    - Plain async functions over classes: no per-request state besides the store
"""
