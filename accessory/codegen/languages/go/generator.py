"""
Go accessor generator.

Walks the target struct's tagged fields, resolves their types, renders the
getters and setters and collects the imports those accessors need.
"""

from pathlib import Path
from typing import List, Optional

from ....logging_config import get_logger
from ...core.config import AccessorConfig
from ...core.generator import CodeGenerator, GenerationResult, TargetNotFoundError
from ...core.model import Field, LockDescriptor, Package, Struct
from ...core.naming import (
    default_getter_name,
    default_receiver_name,
    default_setter_name,
    output_path,
)
from .imports import ImportCollector
from .synthesizer import TEMPLATE_DIR, AccessorParams, AccessorSynthesizer
from .types import TypeResolver

logger = get_logger(__name__)

FILE_TEMPLATE = "file.go.j2"
GENERATED_HEADER = "Code generated by accessory; DO NOT EDIT."


class GoAccessorGenerator(CodeGenerator):
    """Generates Go getter/setter methods for one struct type."""

    def __init__(self, config: Optional[AccessorConfig] = None):
        """Initialize Go generator with configuration."""
        super().__init__(config)
        self.synthesizer = AccessorSynthesizer(self.template_engine)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        return TEMPLATE_DIR if TEMPLATE_DIR.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def generate(self, package: Package) -> GenerationResult:
        """Generate accessors for the configured type in ``package``."""
        type_name = self.config.type_name
        structs = package.find_structs(type_name)
        if not structs:
            logger.warning("Type %s not found in package %s", type_name, package.name)
            raise TargetNotFoundError(type_name)

        # Per-run state; the generator itself stays reusable.
        resolver = TypeResolver(package)
        collector = ImportCollector(package.imports)
        warnings: List[str] = []
        accessors: List[str] = []

        for st in structs:
            lock = self._lock_descriptor(st, warnings)
            for field in st.fields:
                tag = field.tag
                # Untagged, or tagged but opted out of both accessors
                if tag is None or not (tag.wants_getter or tag.wants_setter):
                    continue

                params = self._build_params(st, field, resolver, lock)

                if tag.wants_getter:
                    accessors.append(self.synthesizer.getter(params))
                if tag.wants_setter:
                    accessors.append(self.synthesizer.setter(params))

                collector.record(resolver.referenced_packages(field.type))

        for ref in collector.unresolved:
            warnings.append(
                f"Package {ref.path} is referenced by {type_name} but not imported"
            )

        for warning in warnings:
            logger.warning(warning)

        imports = collector.collect()
        path = output_path(type_name, self.config.output, package.dir)
        logger.debug(
            "Generated %d accessor(s) and %d import(s) for %s",
            len(accessors),
            len(imports),
            type_name,
        )

        return GenerationResult(
            package_name=package.name,
            imports=imports,
            accessors=accessors,
            output_path=path,
            warnings=warnings,
            metadata={
                "language": self.language_name,
                "file_extension": self.file_extension,
                "type_name": type_name,
                "accessor_count": len(accessors),
                "locked": bool(self.config.lock),
            },
        )

    def render_file(self, result: GenerationResult) -> str:
        """Assemble package clause, import block and accessors into one file."""
        context = {
            "header": GENERATED_HEADER,
            "package_name": result.package_name,
            "imports": result.imports,
            "accessors": result.accessors,
        }
        return self.format_code(self.render_template(FILE_TEMPLATE, context))

    def _lock_descriptor(self, st: Struct, warnings: List[str]) -> Optional[LockDescriptor]:
        lock = st.lock_descriptor(self.config.lock)
        if lock is not None and st.get_field(lock.name) is None:
            warnings.append(f"Lock field {lock.name} not found in {st.name}")
        return lock

    def _build_params(
        self,
        st: Struct,
        field: Field,
        resolver: TypeResolver,
        lock: Optional[LockDescriptor],
    ) -> AccessorParams:
        type_name = resolver.resolve_name(field.type)
        getter, setter = self._method_names(field)

        return AccessorParams(
            receiver=self._receiver_name(st.name),
            struct=st.name,
            field=field.name,
            getter_method=getter,
            setter_method=setter,
            type=type_name,
            zero_value=resolver.zero_value(field.type, type_name),
            no_default=field.tag.no_default,
            lock=lock,
        )

    def _receiver_name(self, struct_name: str) -> str:
        # If a receiver name is specified in the config, use it.
        if self.config.receiver:
            return self.config.receiver
        return default_receiver_name(struct_name)

    def _method_names(self, field: Field):
        tag = field.tag
        getter = tag.getter or default_getter_name(field.name)
        setter = tag.setter or default_setter_name(field.name)
        return getter, setter


def create_go_generator(config: Optional[AccessorConfig] = None, **overrides) -> GoAccessorGenerator:
    """
    Create a Go accessor generator.

    Args:
        config: Base configuration
        **overrides: Individual settings (type_name, receiver, output, lock)
    """
    config = config or AccessorConfig()
    if overrides:
        config = AccessorConfig(
            type_name=overrides.get("type_name", config.type_name),
            receiver=overrides.get("receiver", config.receiver),
            output=overrides.get("output", config.output),
            lock=overrides.get("lock", config.lock),
        )
    return GoAccessorGenerator(config)
