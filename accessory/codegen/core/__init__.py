"""
Core accessor generation components.

Provides the declaration model and the language-agnostic pieces used by
language generators.
"""

from .config import AccessorConfig, ConfigError, ConfigManager, load_config
from .generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    TargetNotFoundError,
    generate_code,
)
from .model import (
    ERROR_TYPE,
    Field,
    Import,
    LockDescriptor,
    LockKind,
    Package,
    Struct,
    Tag,
)
from .naming import output_path, to_snake_case
from .tags import parse_field_tag, parse_tag
from .templates import TemplateEngine, TemplateError, create_template_engine
from .writer import WriterError, write_output

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "TargetNotFoundError",
    "GenerationResult",
    "generate_code",
    # Declaration model
    "ERROR_TYPE",
    "Package",
    "Import",
    "Struct",
    "Field",
    "Tag",
    "LockKind",
    "LockDescriptor",
    # Tags and naming
    "parse_tag",
    "parse_field_tag",
    "output_path",
    "to_snake_case",
    # Configuration system
    "AccessorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Output
    "WriterError",
    "write_output",
]
