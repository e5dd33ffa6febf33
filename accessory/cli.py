from __future__ import annotations

import argparse
import sys
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

from . import __version__
from .codegen.core.config import AccessorConfig, ConfigError, get_config_manager
from .codegen.core.generator import GenerationResult, generate_code
from .codegen.core.templates import TemplateError
from .codegen.core.writer import WriterError, write_output
from .codegen.languages.go import GoAccessorGenerator
from .loader import LoaderError, load_package
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="accessory",
        description="Generate Go getter/setter methods for tagged struct fields",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  accessory --type Tester decls.json
  accessory --type Tester --lock lock --receiver tester decls.json
  accessory --type Tester --output my_accessor.go --dry-run decls.json
        """.strip(),
    )

    parser.add_argument(
        "document",
        help="JSON declaration document produced by the source loader",
    )
    parser.add_argument("--type", "-t", dest="type_name", help="type name; must be set")
    parser.add_argument(
        "--receiver",
        "-r",
        help="receiver name (default: first letter of type name)",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="output file name (default: <type_name>_accessor.go)",
    )
    parser.add_argument("--lock", "-l", help="lock field name")
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="print the generated file instead of writing it",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"accessory version: {__version__}",
    )
    return parser


class CLIHandler:
    """Handle command-line interface (CLI) operations for accessor generation."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler with default components."""
        self.console = console or Console()
        logger.debug("CLIHandler initialized")

    def run(self, args: Any) -> int:
        """Run accessor generation based on parsed arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        try:
            config = self._build_config(args)
            package = load_package(args.document)
        except (ConfigError, LoaderError, FileNotFoundError) as e:
            self.console.print(f"❌ [red]{e}[/red]")
            logger.error("Aborting: %s", e)
            return 1

        generator = GoAccessorGenerator(config)
        try:
            result = generate_code(generator, package)
        except TemplateError as e:
            self.console.print(f"❌ [red]Template error: {e}[/red]")
            logger.error("Template error: %s", e)
            return 1

        if not result.success:
            self.console.print(f"❌ [red]{result.error_message}[/red]")
            return 1

        for warning in result.warnings:
            self.console.print(f"⚠️  [yellow]{warning}[/yellow]")

        content = generator.render_file(result)

        if getattr(args, "dry_run", False):
            self._show_preview(result, content)
            return 0

        try:
            write_output(result.output_path, content)
        except WriterError as e:
            self.console.print(f"❌ [red]{e}[/red]")
            logger.error("Write failed: %s", e)
            return 1

        self.console.print(
            f"✅ [green]Generated {len(result.accessors)} accessor(s) in {result.output_path}[/green]"
        )
        return 0

    def _build_config(self, args: Any) -> AccessorConfig:
        """Merge the config file (if any) with explicit command-line flags."""
        manager = get_config_manager()
        config = manager.get_config(
            custom_config={
                "type_name": getattr(args, "type_name", None),
                "receiver": getattr(args, "receiver", None),
                "output": getattr(args, "output", None),
                "lock": getattr(args, "lock", None),
            },
            config_file=getattr(args, "config", None),
        )

        errors = manager.validate_config(config)
        if errors:
            raise ConfigError("; ".join(errors))

        return config

    def _show_preview(self, result: GenerationResult, content: str) -> None:
        """Print the generated file with syntax highlighting."""
        self.console.print(f"📄 {result.output_path}")
        self.console.print(Syntax(content, "go", line_numbers=False))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    return CLIHandler().run(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
