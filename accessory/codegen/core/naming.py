"""
Naming utilities for accessor generation.

Case conversions for method names and receivers, and derivation of the
default output file path from the target type name.
"""

import os
import re
from typing import Optional

OUTPUT_SUFFIX = "_accessor.go"
SETTER_PREFIX = "Set"

# "HTTPServer" -> "HTTP_Server": split before a capitalized word.
_FIRST_CAP_RE = re.compile(r"(.)([A-Z][a-z]+)")
# "testStruct" -> "test_Struct": split a lowercase/digit run from an uppercase letter.
_ALL_CAP_RE = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a CamelCase type name to snake_case, keeping acronyms together."""
    name = _FIRST_CAP_RE.sub(r"\1_\2", name)
    name = _ALL_CAP_RE.sub(r"\1_\2", name)
    return name.lower()


def export_name(name: str) -> str:
    """Upper-case the first letter of ``name`` and leave the rest alone."""
    if not name:
        return name
    return name[0].upper() + name[1:]


def default_getter_name(field_name: str) -> str:
    return export_name(field_name)


def default_setter_name(field_name: str) -> str:
    return SETTER_PREFIX + export_name(field_name)


def default_receiver_name(struct_name: str) -> str:
    """First letter of the struct name, lower-cased."""
    return struct_name[:1].lower()


def output_path(type_name: str, explicit_output: Optional[str], dir: str) -> str:
    """
    Return the path of the generated file.

    An explicit output is joined with ``dir`` verbatim; otherwise the name is
    ``<snake_case(type_name)>_accessor.go``.
    """
    if explicit_output:
        return os.path.join(dir, explicit_output)

    return os.path.join(dir, f"{to_snake_case(type_name)}{OUTPUT_SUFFIX}")
