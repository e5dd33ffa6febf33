"""
Go accessor generator module.

Generates getter/setter methods for tagged struct fields.
"""

from .generator import GoAccessorGenerator, create_go_generator
from .imports import ImportCollector, collect_imports, default_import_name, render_import
from .synthesizer import AccessorParams, AccessorSynthesizer
from .types import TypeResolutionError, TypeResolver, resolve_name, type_string, zero_value

__all__ = [
    "GoAccessorGenerator",
    "create_go_generator",
    # Type resolution
    "TypeResolver",
    "TypeResolutionError",
    "resolve_name",
    "type_string",
    "zero_value",
    # Synthesis
    "AccessorParams",
    "AccessorSynthesizer",
    # Imports
    "ImportCollector",
    "collect_imports",
    "default_import_name",
    "render_import",
]
