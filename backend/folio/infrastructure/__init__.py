"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - External failures are translated into FolioError subclasses at this boundary
"""
