"""
Accessor code generation.

Generates Go getter/setter methods from a loaded package's declarations.
"""

from typing import Optional

from .core.config import AccessorConfig, load_config
from .core.generator import GenerationResult, GeneratorError, generate_code
from .core.model import Package
from .languages.go import GoAccessorGenerator, create_go_generator


def generate_accessors(
    package: Package, config: Optional[AccessorConfig] = None, **options
) -> GenerationResult:
    """
    Generate accessors for one struct of a loaded package.

    Args:
        package: Declaration model from the source loader
        config: Generator configuration
        **options: Individual overrides (type_name, receiver, output, lock)

    Returns:
        GenerationResult; a missing target type yields a failed result
    """
    generator = create_go_generator(config, **options)
    return generate_code(generator, package)


__all__ = [
    "AccessorConfig",
    "GenerationResult",
    "GeneratorError",
    "GoAccessorGenerator",
    "create_go_generator",
    "generate_accessors",
    "load_config",
]
