"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Entitlement math, rule checks and token parsing are pure and deterministic
"""
