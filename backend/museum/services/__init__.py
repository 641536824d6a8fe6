"""Service Layer — repository coordination and view-state holders.

Invariants:
    - Services receive collaborators by constructor; they never build them
    - Services depend on core Protocols, not on concrete infrastructure classes
"""
