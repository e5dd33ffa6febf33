"""
Language-specific accessor generators.

Only Go is supported.
"""

from .go import GoAccessorGenerator, create_go_generator

__all__ = ["GoAccessorGenerator", "create_go_generator"]
