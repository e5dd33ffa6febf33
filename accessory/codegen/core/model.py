"""
Declaration model for accessor generation.

Passive representation of a Go package as handed over by the source loader:
the package itself, its imports, its structs and their fields, plus a small
tagged-variant model of Go types. Everything here is immutable once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class BasicKind(Enum):
    """Categories of Go basic types that matter for zero values."""

    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    STRING = "string"
    UNSAFE_POINTER = "unsafe_pointer"
    INVALID = "invalid"


class ChanDir(Enum):
    """Channel direction."""

    SEND_RECV = "sendrecv"
    SEND = "send"
    RECV = "recv"


class LockKind(Enum):
    """Synchronization primitive guarding generated accessors."""

    NONE = "none"
    MUTEX = "mutex"
    RWMUTEX = "rwmutex"


class GoType:
    """Base class for every type variant in the declaration model."""

    __slots__ = ()


@dataclass(frozen=True)
class PackageRef:
    """Identity of the package that declares a named type."""

    path: str
    name: str


@dataclass(frozen=True)
class BasicType(GoType):
    """Predeclared basic type such as int, string or bool."""

    name: str
    kind: BasicKind


@dataclass(frozen=True)
class PointerType(GoType):
    elem: GoType


@dataclass(frozen=True)
class SliceType(GoType):
    elem: GoType


@dataclass(frozen=True)
class ArrayType(GoType):
    length: int
    elem: GoType


@dataclass(frozen=True)
class MapType(GoType):
    key: GoType
    value: GoType


@dataclass(frozen=True)
class ChanType(GoType):
    elem: GoType
    dir: ChanDir = ChanDir.SEND_RECV


@dataclass(frozen=True)
class Param:
    """A function parameter or result; name may be empty."""

    type: GoType
    name: str = ""


@dataclass(frozen=True)
class SignatureType(GoType):
    """Function signature. When variadic, the last param holds a SliceType."""

    params: Tuple[Param, ...] = ()
    results: Tuple[Param, ...] = ()
    variadic: bool = False


@dataclass(frozen=True)
class Method:
    name: str
    signature: SignatureType


@dataclass(frozen=True)
class InterfaceType(GoType):
    methods: Tuple[Method, ...] = ()
    embeddeds: Tuple[GoType, ...] = ()


@dataclass(frozen=True)
class StructField:
    """Field of an anonymous struct type appearing inside a field's type."""

    name: str
    type: GoType
    embedded: bool = False
    tag: str = ""


@dataclass(frozen=True)
class StructType(GoType):
    fields: Tuple[StructField, ...] = ()


@dataclass(frozen=True, eq=False)
class NamedType(GoType):
    """
    Declared type, possibly living in another package.

    Compared by identity so that self-referential declarations stay hashable
    and the predeclared error type can be recognized without a name check.
    """

    name: str
    package: Optional[PackageRef] = None
    type_args: Tuple[GoType, ...] = ()
    underlying: Optional[GoType] = field(default=None, repr=False)


# The predeclared error interface. Checked by identity, never by name, so a
# user type that happens to be called "error" is not mistaken for it.
ERROR_TYPE = NamedType(
    name="error",
    package=None,
    underlying=InterfaceType(
        methods=(
            Method(
                name="Error",
                signature=SignatureType(results=(Param(BasicType("string", BasicKind.STRING)),)),
            ),
        )
    ),
)


def is_error_type(t: GoType) -> bool:
    """Return True if ``t`` is the predeclared error type."""
    return t is ERROR_TYPE


_NUMERIC_NAMES = (
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
    "float32", "float64", "complex64", "complex128",
    "byte", "rune",
    "untyped int", "untyped rune", "untyped float", "untyped complex",
)

BASIC_TYPES: Dict[str, BasicType] = {
    name: BasicType(name, BasicKind.NUMERIC) for name in _NUMERIC_NAMES
}
BASIC_TYPES.update(
    {
        "bool": BasicType("bool", BasicKind.BOOLEAN),
        "untyped bool": BasicType("untyped bool", BasicKind.BOOLEAN),
        "string": BasicType("string", BasicKind.STRING),
        "untyped string": BasicType("untyped string", BasicKind.STRING),
        "unsafe.Pointer": BasicType("unsafe.Pointer", BasicKind.UNSAFE_POINTER),
        "untyped nil": BasicType("untyped nil", BasicKind.INVALID),
    }
)


def basic(name: str) -> BasicType:
    """Look up a predeclared basic type by name."""
    try:
        return BASIC_TYPES[name]
    except KeyError:
        raise ValueError(f"Unknown basic type: {name}") from None


@dataclass(frozen=True)
class Import:
    """
    One import declaration found in the package's files.

    ``name`` is the alias when one was written (including ``_`` and ``.``),
    otherwise the name derived from the path. Identity is the whole triple.
    """

    name: str
    path: str
    is_named: bool = False

    @property
    def is_dot(self) -> bool:
        return self.is_named and self.name == "."

    @property
    def is_blank(self) -> bool:
        return self.is_named and self.name == "_"


@dataclass(frozen=True)
class Tag:
    """
    Parsed ``accessor`` struct tag.

    ``getter``/``setter`` are None when the key is absent and "" when the key
    is present without an explicit method name.
    """

    getter: Optional[str] = None
    setter: Optional[str] = None
    no_default: bool = False

    @property
    def wants_getter(self) -> bool:
        return self.getter is not None

    @property
    def wants_setter(self) -> bool:
        return self.setter is not None


@dataclass(frozen=True)
class Field:
    """A field declared in a struct."""

    name: str
    type: GoType
    tag: Optional[Tag] = None


@dataclass(frozen=True)
class LockDescriptor:
    """Lock field used to guard accessors, and the methods to call on it."""

    name: str
    kind: LockKind = LockKind.MUTEX

    @property
    def read_lock(self) -> str:
        return "RLock" if self.kind == LockKind.RWMUTEX else "Lock"

    @property
    def read_unlock(self) -> str:
        return "RUnlock" if self.kind == LockKind.RWMUTEX else "Unlock"

    @property
    def write_lock(self) -> str:
        return "Lock"

    @property
    def write_unlock(self) -> str:
        return "Unlock"


@dataclass(frozen=True)
class Struct:
    """A struct type declared in the package, fields in declaration order."""

    name: str
    fields: Tuple[Field, ...] = ()

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def lock_descriptor(self, lock_name: Optional[str]) -> Optional[LockDescriptor]:
        """
        Build the lock descriptor for ``lock_name``.

        The kind is read-write when the lock field is a ``sync.RWMutex`` (or a
        pointer to one); any other type, or a field that cannot be found, is
        treated as an exclusive lock.
        """
        if not lock_name:
            return None

        lock_field = self.get_field(lock_name)
        if lock_field is None:
            return LockDescriptor(lock_name, LockKind.MUTEX)

        t = lock_field.type
        if isinstance(t, PointerType):
            t = t.elem
        if (
            isinstance(t, NamedType)
            and t.package is not None
            and t.package.path == "sync"
            and t.name == "RWMutex"
        ):
            return LockDescriptor(lock_name, LockKind.RWMUTEX)

        return LockDescriptor(lock_name, LockKind.MUTEX)


@dataclass(frozen=True)
class Package:
    """A loaded Go package: everything one generation run looks at."""

    name: str
    path: str
    dir: str
    imports: Tuple[Import, ...] = ()
    structs: Tuple[Struct, ...] = ()

    @property
    def ref(self) -> PackageRef:
        return PackageRef(path=self.path, name=self.name)

    def find_structs(self, name: str) -> Tuple[Struct, ...]:
        """Return every struct declared under ``name``."""
        return tuple(st for st in self.structs if st.name == name)
