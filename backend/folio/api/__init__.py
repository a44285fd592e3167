"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Handlers parse HTTP input, call services, return JSON; no listing logic here
"""
