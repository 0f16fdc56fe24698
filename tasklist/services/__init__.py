"""Service Layer: orchestrates stores around the pure core.

Invariants:
    - Services receive stores and codecs by constructor injection
    - Services raise TaskListError subclasses, never HTTP exceptions
"""
