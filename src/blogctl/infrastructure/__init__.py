"""Infrastructure layer: filesystem, post parser, post index, generic handler.

This layer depends on the domain layer and stdlib only.
It must never import from services, commands, config, or output.
"""
