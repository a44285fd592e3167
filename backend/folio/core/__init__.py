"""Core Layer — pure listing and identifier logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, store/, infrastructure/, or db/
    - All functions are pure and deterministic, except TUID generation (clock + entropy)
"""
