"""Persistence layer: ORM models and query helpers."""
