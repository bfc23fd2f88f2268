"""Domain layer: schema, errors, and the record type.

This layer depends only on stdlib and pydantic.
It must never import from services or config.
"""
