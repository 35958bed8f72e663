"""Domain layer — intents, argument normalization, and search filters.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
