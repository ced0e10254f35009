"""Service layer: binding, selection, discovery, and expansion.

Services may import from the domain layer.
They must never import from commands or output.
"""
