"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Token signing and verification are pure functions of the secret and the clock

Design Decisions:
    - Functional core separated from imperative shell
"""
