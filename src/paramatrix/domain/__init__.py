"""Domain layer: dimensions, iterators, slots, naming, declarations.

This layer depends only on stdlib and pydantic.
It must never import from services, config, plugins, commands, or output.
"""
