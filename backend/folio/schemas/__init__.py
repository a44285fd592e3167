"""Schemas — pydantic models for entity bodies, requests, and responses."""
