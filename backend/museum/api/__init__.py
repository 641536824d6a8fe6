"""API Layer — FastAPI routes and error handlers (the rendering surface).

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes only subscribe to view-state holders; they never call the cache directly
"""
