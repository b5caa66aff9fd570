"""Core Layer: domain types, error hierarchy and boundary protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions in core/ are pure and deterministic
"""
