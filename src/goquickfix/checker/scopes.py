"""Lexical scopes and declared objects for the scope checker."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from goquickfix.syntax.nodes import ImportSpec
from goquickfix.syntax.token import NO_POS


class ObjKind(Enum):
    BUILTIN = "builtin"
    CONST = "const"
    FUNC = "func"
    LABEL = "label"
    NIL = "nil"
    PKG = "package"
    TYPE = "type"
    VAR = "var"


@dataclass(eq=False)
class Object:
    """A declared name.

    Attributes:
        name: The declared identifier.
        kind: What the name denotes.
        pos: Position of the declaring identifier (NO_POS for predeclared).
        used: Whether the name has been read.
        spec: For packages, the import that declared the name.
    """

    name: str
    kind: ObjKind
    pos: int = NO_POS
    used: bool = False
    spec: ImportSpec | None = None


class Scope:
    """A block of declarations with a link to its enclosing scope."""

    def __init__(self, parent: Scope | None = None, kind: str = "block") -> None:
        self.parent = parent
        self.kind = kind
        self.objects: dict[str, Object] = {}

    def lookup_local(self, name: str) -> Object | None:
        return self.objects.get(name)

    def lookup(self, name: str) -> Object | None:
        scope: Scope | None = self
        while scope is not None:
            obj = scope.objects.get(name)
            if obj is not None:
                return obj
            scope = scope.parent
        return None

    def insert(self, obj: Object) -> Object | None:
        """Declare obj in this scope.

        Returns:
            The object already declared under the same name, in which case
            obj is not inserted; None on success.
        """
        existing = self.objects.get(obj.name)
        if existing is not None:
            return existing
        self.objects[obj.name] = obj
        return None

    def __repr__(self) -> str:
        return f"Scope({self.kind}, {sorted(self.objects)})"


_PREDECLARED_TYPES = (
    "any",
    "bool",
    "byte",
    "comparable",
    "complex64",
    "complex128",
    "error",
    "float32",
    "float64",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "rune",
    "string",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
)

_PREDECLARED_CONSTS = ("true", "false", "iota")

_BUILTIN_FUNCS = (
    "append",
    "cap",
    "clear",
    "close",
    "complex",
    "copy",
    "delete",
    "imag",
    "len",
    "make",
    "max",
    "min",
    "new",
    "panic",
    "print",
    "println",
    "real",
    "recover",
)


def new_universe() -> Scope:
    """Build the scope holding Go's predeclared identifiers."""
    universe = Scope(kind="universe")
    for name in _PREDECLARED_TYPES:
        universe.insert(Object(name, ObjKind.TYPE))
    for name in _PREDECLARED_CONSTS:
        universe.insert(Object(name, ObjKind.CONST))
    for name in _BUILTIN_FUNCS:
        universe.insert(Object(name, ObjKind.BUILTIN))
    universe.insert(Object("nil", ObjKind.NIL))
    return universe
