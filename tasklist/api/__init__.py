"""API Layer: FastAPI routes, dependencies, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Protected routes receive the caller identity as an explicit parameter

Design Decisions:
    - Thin routes delegate to services
"""
