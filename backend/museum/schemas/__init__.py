"""Pydantic Schemas — catalog records and API response shapes.

Invariants:
    - Schemas validate at the system boundary (catalog payloads, HTTP responses)
"""
