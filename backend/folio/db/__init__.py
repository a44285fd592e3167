"""Database Layer — declarative base and session factory."""
