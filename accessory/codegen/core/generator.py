"""
Base generator interface for accessor generation.

Defines the contract a language generator implements, the result container
handed to the file writer, and the error types raised along the way.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import AccessorConfig
from .model import Package
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class TargetNotFoundError(GeneratorError):
    """Raised when the package has no struct with the requested name."""

    def __init__(self, type_name: str):
        super().__init__(f"target type not found: {type_name}")
        self.type_name = type_name


class CodeGenerator(ABC):
    """Abstract base class for accessor generators."""

    def __init__(self, config: Optional[AccessorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or AccessorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, package: Package) -> "GenerationResult":
        """
        Generate accessors for the configured type.

        Args:
            package: Loaded declaration model

        Returns:
            GenerationResult with package name, imports and accessor fragments

        Raises:
            TargetNotFoundError: If the configured type is not in the package
        """
        pass

    @abstractmethod
    def render_file(self, result: "GenerationResult") -> str:
        """Assemble a complete source file from a generation result."""
        pass

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines and ends the
        file with exactly one newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        package_name: str,
        imports: List[str] = None,
        accessors: List[str] = None,
        output_path: Optional[str] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            package_name: Package clause of the generated file
            imports: Import specs, already ordered
            accessors: Accessor source fragments in emission order
            output_path: Where the file writer should put the result
            warnings: Non-fatal issues noticed during generation
            metadata: Additional metadata about generation
        """
        self.package_name = package_name
        self.imports = imports or []
        self.accessors = accessors or []
        self.output_path = output_path
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls, message: str, exception: Exception = None, package_name: str = ""
    ) -> "GenerationResult":
        """Create a failed generation result with no output."""
        result = cls(package_name=package_name)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, package: Package) -> GenerationResult:
    """
    Generate accessors, reporting a missing target type as a failed result.

    Template and other programming errors are not caught: they abort the run.

    Args:
        generator: Code generator instance
        package: Loaded declaration model

    Returns:
        GenerationResult with imports, accessors and metadata
    """
    try:
        return generator.generate(package)
    except TargetNotFoundError as e:
        return GenerationResult.error(str(e), exception=e, package_name=package.name)
