"""
Go type resolution for accessor generation.

Prints a field's type the way it must be spelled inside the target package,
works out the zero value a nil-safe getter returns, and reports which foreign
packages a type mentions so the matching imports can be kept.
"""

import json
from typing import Callable, List, Optional

from ...core.model import (
    ArrayType,
    BasicKind,
    BasicType,
    ChanDir,
    ChanType,
    GoType,
    Import,
    InterfaceType,
    MapType,
    NamedType,
    Package,
    PackageRef,
    PointerType,
    SignatureType,
    SliceType,
    StructType,
    is_error_type,
)

NIL = "nil"

Qualifier = Callable[[PackageRef], str]


class TypeResolutionError(Exception):
    """Raised for a type variant the resolver does not know how to print."""

    pass


def find_import(imports, path: str) -> Optional[Import]:
    """Return the first usable import of ``path``; blank imports never qualify names."""
    for imp in imports:
        if imp.path == path and not imp.is_blank:
            return imp
    return None


class TypeResolver:
    """
    Resolves type names and zero values relative to one package.

    The resolver is read-only over the package and can be shared between
    generation runs.
    """

    def __init__(self, package: Package):
        self.package = package

    def qualifier(self, pkg: PackageRef) -> str:
        """Return the prefix used to name something declared in ``pkg``."""
        # type is defined in the same package
        if pkg.path == self.package.path:
            return ""

        imp = find_import(self.package.imports, pkg.path)

        # Not imported directly, e.g. reached through another package's type
        if imp is None:
            return pkg.name

        if imp.is_dot:
            return ""

        if imp.is_named:
            return imp.name
        return pkg.name

    def resolve_name(self, t: GoType) -> str:
        """Print ``t`` as it would appear in the target package's source."""
        return type_string(t, self.qualifier)

    def zero_value(self, t: GoType, type_name: str) -> str:
        """Return the literal a getter returns when it has nothing to read."""
        return zero_value(t, type_name)

    def referenced_packages(self, t: GoType) -> List[PackageRef]:
        """Return the foreign packages named anywhere in ``t``, in print order."""
        refs: List[PackageRef] = []

        def record(pkg: PackageRef) -> str:
            if pkg.path != self.package.path and pkg not in refs:
                refs.append(pkg)
            return pkg.name

        type_string(t, record)
        return refs


def type_string(t: GoType, qualifier: Qualifier) -> str:
    """Format ``t`` following go/types' TypeString conventions."""
    parts: List[str] = []
    _write_type(parts, t, qualifier)
    return "".join(parts)


def _write_type(buf: List[str], t: GoType, qualifier: Qualifier):
    if isinstance(t, BasicType):
        buf.append(t.name)

    elif isinstance(t, PointerType):
        buf.append("*")
        _write_type(buf, t.elem, qualifier)

    elif isinstance(t, SliceType):
        buf.append("[]")
        _write_type(buf, t.elem, qualifier)

    elif isinstance(t, ArrayType):
        buf.append(f"[{t.length}]")
        _write_type(buf, t.elem, qualifier)

    elif isinstance(t, MapType):
        buf.append("map[")
        _write_type(buf, t.key, qualifier)
        buf.append("]")
        _write_type(buf, t.value, qualifier)

    elif isinstance(t, ChanType):
        parens = False
        if t.dir == ChanDir.SEND_RECV:
            buf.append("chan ")
            # chan (<-chan T) needs parentheses
            parens = isinstance(t.elem, ChanType) and t.elem.dir == ChanDir.RECV
        elif t.dir == ChanDir.SEND:
            buf.append("chan<- ")
        else:
            buf.append("<-chan ")
        if parens:
            buf.append("(")
        _write_type(buf, t.elem, qualifier)
        if parens:
            buf.append(")")

    elif isinstance(t, SignatureType):
        buf.append("func")
        _write_signature(buf, t, qualifier)

    elif isinstance(t, InterfaceType):
        buf.append("interface{")
        first = True
        for method in t.methods:
            if not first:
                buf.append("; ")
            first = False
            buf.append(method.name)
            _write_signature(buf, method.signature, qualifier)
        for embedded in t.embeddeds:
            if not first:
                buf.append("; ")
            first = False
            _write_type(buf, embedded, qualifier)
        buf.append("}")

    elif isinstance(t, StructType):
        buf.append("struct{")
        for i, f in enumerate(t.fields):
            if i > 0:
                buf.append("; ")
            if not f.embedded:
                buf.append(f.name)
                buf.append(" ")
            _write_type(buf, f.type, qualifier)
            if f.tag:
                buf.append(" ")
                buf.append(json.dumps(f.tag, ensure_ascii=False))
        buf.append("}")

    elif isinstance(t, NamedType):
        if t.package is not None:
            prefix = qualifier(t.package)
            if prefix:
                buf.append(prefix)
                buf.append(".")
        buf.append(t.name)
        if t.type_args:
            buf.append("[")
            for i, arg in enumerate(t.type_args):
                if i > 0:
                    buf.append(", ")
                _write_type(buf, arg, qualifier)
            buf.append("]")

    else:
        raise TypeResolutionError(f"Unsupported type variant: {type(t).__name__}")


def _write_tuple(buf: List[str], params, variadic: bool, qualifier: Qualifier):
    buf.append("(")
    for i, param in enumerate(params):
        if i > 0:
            buf.append(", ")
        if param.name:
            buf.append(param.name)
            buf.append(" ")
        if variadic and i == len(params) - 1:
            buf.append("...")
            elem = param.type.elem if isinstance(param.type, SliceType) else param.type
            _write_type(buf, elem, qualifier)
        else:
            _write_type(buf, param.type, qualifier)
    buf.append(")")


def _write_signature(buf: List[str], sig: SignatureType, qualifier: Qualifier):
    _write_tuple(buf, sig.params, sig.variadic, qualifier)

    if not sig.results:
        return

    buf.append(" ")
    if len(sig.results) == 1 and not sig.results[0].name:
        # single unnamed result
        _write_type(buf, sig.results[0].type, qualifier)
        return

    _write_tuple(buf, sig.results, False, qualifier)


def zero_value(t: Optional[GoType], type_name: str) -> str:
    """
    Map a type to its zero value literal.

    Named types delegate to their underlying type, except the predeclared
    error interface which is always nil.
    """
    if isinstance(t, (PointerType, ArrayType, SliceType, ChanType, InterfaceType, MapType, SignatureType)):
        return NIL

    if isinstance(t, StructType):
        return type_name + "{}"

    if isinstance(t, BasicType):
        if t.kind == BasicKind.NUMERIC:
            return "0"
        if t.kind == BasicKind.BOOLEAN:
            return "false"
        if t.kind == BasicKind.STRING:
            return '""'
        return NIL

    if isinstance(t, NamedType):
        if is_error_type(t):
            return NIL
        return zero_value(t.underlying, type_name)

    return NIL


def resolve_name(t: GoType, current_package: Package) -> str:
    """Convenience wrapper around TypeResolver.resolve_name."""
    return TypeResolver(current_package).resolve_name(t)


__all__ = [
    "NIL",
    "TypeResolutionError",
    "TypeResolver",
    "find_import",
    "resolve_name",
    "type_string",
    "zero_value",
]
