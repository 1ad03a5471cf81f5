"""Domain layer: URL templates, post models, front matter, errors.

This layer depends only on stdlib, pydantic and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
