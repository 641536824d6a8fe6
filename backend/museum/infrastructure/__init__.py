"""Infrastructure Layer — external service clients, reactive primitives, and cross-cutting concerns.

Invariants:
    - All external calls mapped to the core error hierarchy (core/errors.py)
    - Reactive primitives are asyncio-only: single event loop, no threads
"""
