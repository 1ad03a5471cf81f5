"""Service layer: routing, path enumeration, and CLI-facing services.

Services may import from domain, infrastructure and config.
They must never import from commands or output.
"""
