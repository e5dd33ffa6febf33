"""Loading of declaration documents.

A declaration document is the JSON form of a loaded Go package: its imports,
its structs with their raw field tags, and each field's type as a tree of
``kind`` objects. It is produced by a Go-side source loader; this module turns
it into the immutable declaration model the generator works on.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from .codegen.core.model import (
    ERROR_TYPE,
    ArrayType,
    ChanDir,
    ChanType,
    Field,
    GoType,
    Import,
    InterfaceType,
    MapType,
    Method,
    NamedType,
    Package,
    PackageRef,
    Param,
    PointerType,
    SignatureType,
    SliceType,
    Struct,
    StructField,
    StructType,
    basic,
)
from .codegen.core.tags import parse_field_tag
from .codegen.languages.go.imports import default_import_name
from .logging_config import get_logger

logger = get_logger(__name__)

_CHAN_DIRS = {
    "both": ChanDir.SEND_RECV,
    "sendrecv": ChanDir.SEND_RECV,
    "send": ChanDir.SEND,
    "recv": ChanDir.RECV,
}


class LoaderError(Exception):
    """Raised when a declaration document cannot be read or is malformed."""

    pass


def load_package(file_path: str | Path) -> Package:
    """Load a declaration document from a local file.

    Args:
        file_path: Path to the JSON document.

    Returns:
        The package described by the document.

    Raises:
        FileNotFoundError: If file doesn't exist.
        LoaderError: If the file cannot be read or does not describe exactly one package.
    """
    file_path = Path(file_path)
    logger.debug("Loading declaration document: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        raise LoaderError(f"Error reading file {file_path}: {e}") from e

    package = load_package_document(data, base_dir=file_path.resolve().parent)
    logger.info(
        "Loaded package %s with %d struct(s) from %s",
        package.name,
        len(package.structs),
        file_path,
    )
    return package


def load_package_document(data: Any, base_dir: str | Path | None = None) -> Package:
    """Build a Package from an already-decoded declaration document.

    The document is either a package object or ``{"packages": [...]}`` holding
    exactly one package.
    """
    if isinstance(data, dict) and "packages" in data:
        packages = data["packages"]
        if not isinstance(packages, list) or len(packages) != 1:
            count = len(packages) if isinstance(packages, list) else 0
            raise LoaderError(f"error: {count} packages found")
        data = packages[0]

    obj = _require_object(data, "package")
    name = _require_str(obj, "name", "package")

    directory = obj.get("dir") or (str(base_dir) if base_dir is not None else ".")

    return Package(
        name=name,
        path=obj.get("path") or name,
        dir=os.path.abspath(directory),
        imports=_parse_imports(obj.get("imports", [])),
        structs=tuple(_parse_struct(s) for s in obj.get("structs", [])),
    )


def _parse_imports(items: Any) -> tuple[Import, ...]:
    """Parse imports, collapsing duplicates gathered from several files."""
    if not isinstance(items, list):
        raise LoaderError("'imports' must be a list")

    seen: dict[Import, None] = {}
    for item in items:
        obj = _require_object(item, "import")
        path = _require_str(obj, "path", "import")
        alias = obj.get("name")
        # An explicit name is an alias unless the document says otherwise.
        is_named = bool(obj.get("named", alias is not None))
        if is_named and not alias:
            raise LoaderError(f"Named import of {path} has no 'name'")
        imp = Import(name=alias or default_import_name(path), path=path, is_named=is_named)
        seen.setdefault(imp, None)

    return tuple(seen)


def _parse_struct(item: Any) -> Struct:
    obj = _require_object(item, "struct")
    name = _require_str(obj, "name", "struct")
    fields = []
    for raw_field in obj.get("fields", []):
        field_obj = _require_object(raw_field, f"field of {name}")
        fields.append(
            Field(
                name=_require_str(field_obj, "name", f"field of {name}"),
                type=parse_type(field_obj.get("type")),
                tag=parse_field_tag(field_obj.get("tag")),
            )
        )
    return Struct(name=name, fields=tuple(fields))


def parse_type(data: Any) -> GoType:
    """Parse one type object of a declaration document."""
    obj = _require_object(data, "type")
    kind = obj.get("kind")

    if kind == "basic":
        try:
            return basic(_require_str(obj, "name", "basic type"))
        except ValueError as e:
            raise LoaderError(str(e)) from e

    if kind == "pointer":
        return PointerType(parse_type(obj.get("elem")))

    if kind == "slice":
        return SliceType(parse_type(obj.get("elem")))

    if kind == "array":
        length = obj.get("len")
        if not isinstance(length, int):
            raise LoaderError("array type requires an integer 'len'")
        return ArrayType(length, parse_type(obj.get("elem")))

    if kind == "map":
        return MapType(parse_type(obj.get("key")), parse_type(obj.get("value")))

    if kind == "chan":
        direction = obj.get("dir", "both")
        if direction not in _CHAN_DIRS:
            raise LoaderError(f"Unknown channel direction: {direction}")
        return ChanType(parse_type(obj.get("elem")), _CHAN_DIRS[direction])

    if kind == "signature":
        return _parse_signature(obj)

    if kind == "interface":
        methods = []
        for item in obj.get("methods", []):
            method = _require_object(item, "interface method")
            methods.append(
                Method(
                    name=_require_str(method, "name", "interface method"),
                    signature=_parse_signature(
                        _require_object(method.get("signature"), "method signature")
                    ),
                )
            )
        embeddeds = tuple(parse_type(e) for e in obj.get("embeddeds", []))
        return InterfaceType(methods=tuple(methods), embeddeds=embeddeds)

    if kind == "struct":
        fields = []
        for item in obj.get("fields", []):
            f = _require_object(item, "struct field")
            fields.append(
                StructField(
                    name=f.get("name", ""),
                    type=parse_type(f.get("type")),
                    embedded=bool(f.get("embedded", False)),
                    tag=f.get("tag", ""),
                )
            )
        return StructType(fields=tuple(fields))

    if kind == "named":
        return _parse_named(obj)

    raise LoaderError(f"Unknown type kind: {kind!r}")


def _parse_named(obj: dict) -> GoType:
    name = _require_str(obj, "name", "named type")
    pkg = obj.get("package")

    # The universe error type is a single shared instance.
    if name == "error" and pkg is None:
        return ERROR_TYPE

    package_ref = None
    if pkg is not None:
        pkg_obj = _require_object(pkg, "package reference")
        path = _require_str(pkg_obj, "path", "package reference")
        package_ref = PackageRef(path=path, name=pkg_obj.get("name") or default_import_name(path))

    underlying = obj.get("underlying")
    return NamedType(
        name=name,
        package=package_ref,
        type_args=tuple(parse_type(a) for a in obj.get("type_args", [])),
        underlying=parse_type(underlying) if underlying is not None else None,
    )


def _parse_signature(obj: dict) -> SignatureType:
    def params(key: str) -> tuple[Param, ...]:
        result = []
        for item in obj.get(key, []):
            p = _require_object(item, "parameter")
            result.append(Param(type=parse_type(p.get("type")), name=p.get("name", "")))
        return tuple(result)

    return SignatureType(
        params=params("params"),
        results=params("results"),
        variadic=bool(obj.get("variadic", False)),
    )


def _require_object(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise LoaderError(f"Expected an object for {what}, got {type(data).__name__}")
    return data


def _require_str(obj: dict, key: str, what: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str) or not value:
        raise LoaderError(f"Missing or invalid '{key}' in {what}")
    return value
