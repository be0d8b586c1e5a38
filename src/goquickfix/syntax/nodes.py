"""Syntax tree for Go source files.

Nodes are plain dataclasses that own their children directly; there are
no parent links. Every node records the half-open position range
[pos, end) it was parsed from. Nodes created by rewrites carry NO_POS and
are therefore invisible to positional searches.

Nodes compare by identity so that they can be located and removed inside
statement lists even when two nodes look the same.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from enum import Enum

from goquickfix.syntax.token import NO_POS, Token


@dataclass(eq=False)
class Node:
    """Base class of all syntax nodes."""

    pos: int = field(default=NO_POS, kw_only=True)
    end: int = field(default=NO_POS, kw_only=True)

    @property
    def has_pos(self) -> bool:
        return self.pos != NO_POS

    def contains(self, pos: int) -> bool:
        return self.has_pos and self.pos <= pos < self.end


class Expr(Node):
    """Marker base for expressions and type expressions."""


class Stmt(Node):
    """Marker base for statements."""


class Decl(Node):
    """Marker base for top-level declarations."""


class Spec(Node):
    """Marker base for import, value and type specs."""


class ChanDir(Enum):
    BOTH = "both"
    SEND = "send"
    RECV = "recv"


# -----------------------------------------------------------------------------
# Comments
# -----------------------------------------------------------------------------


@dataclass(eq=False)
class Comment(Node):
    """A `//` or `/* */` comment, text including the markers."""

    text: str


# -----------------------------------------------------------------------------
# Expressions and types
# -----------------------------------------------------------------------------


@dataclass(eq=False)
class Ident(Expr):
    name: str

    @property
    def is_blank(self) -> bool:
        return self.name == "_"


@dataclass(eq=False)
class BasicLit(Expr):
    """A literal; value is the source text, quotes included for strings."""

    kind: Token
    value: str


@dataclass(eq=False)
class EllipsisExpr(Expr):
    """`...T` in a variadic parameter list, or `[...]T` array length."""

    elt: Expr | None = None


@dataclass(eq=False)
class FuncLit(Expr):
    type: FuncType
    body: BlockStmt


@dataclass(eq=False)
class CompositeLit(Expr):
    type: Expr | None
    elts: list[Expr] = field(default_factory=list)


@dataclass(eq=False)
class ParenExpr(Expr):
    x: Expr


@dataclass(eq=False)
class SelectorExpr(Expr):
    x: Expr
    sel: Ident


@dataclass(eq=False)
class IndexExpr(Expr):
    x: Expr
    index: Expr


@dataclass(eq=False)
class SliceExpr(Expr):
    x: Expr
    low: Expr | None = None
    high: Expr | None = None
    max: Expr | None = None
    slice3: bool = False


@dataclass(eq=False)
class TypeAssertExpr(Expr):
    """`x.(T)`; type is None for the `x.(type)` of a type switch."""

    x: Expr
    type: Expr | None = None


@dataclass(eq=False)
class CallExpr(Expr):
    fun: Expr
    args: list[Expr] = field(default_factory=list)
    has_ellipsis: bool = False


@dataclass(eq=False)
class StarExpr(Expr):
    x: Expr


@dataclass(eq=False)
class UnaryExpr(Expr):
    op: Token
    x: Expr


@dataclass(eq=False)
class BinaryExpr(Expr):
    x: Expr
    op: Token
    y: Expr


@dataclass(eq=False)
class KeyValueExpr(Expr):
    key: Expr
    value: Expr


@dataclass(eq=False)
class ArrayType(Expr):
    """`[len]elt`; len is None for slices."""

    len: Expr | None
    elt: Expr


@dataclass(eq=False)
class Field(Node):
    names: list[Ident]
    type: Expr
    tag: BasicLit | None = None


@dataclass(eq=False)
class FieldList(Node):
    fields: list[Field] = field(default_factory=list)

    def num_fields(self) -> int:
        return sum(max(len(f.names), 1) for f in self.fields)


@dataclass(eq=False)
class StructType(Expr):
    fields: FieldList


@dataclass(eq=False)
class FuncType(Expr):
    params: FieldList
    results: FieldList | None = None


@dataclass(eq=False)
class InterfaceType(Expr):
    """Methods are Fields with a FuncType; embedded interfaces have no names."""

    methods: FieldList


@dataclass(eq=False)
class MapType(Expr):
    key: Expr
    value: Expr


@dataclass(eq=False)
class ChanType(Expr):
    dir: ChanDir
    value: Expr


# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------


@dataclass(eq=False)
class DeclStmt(Stmt):
    decl: GenDecl


@dataclass(eq=False)
class EmptyStmt(Stmt):
    pass


@dataclass(eq=False)
class LabeledStmt(Stmt):
    label: Ident
    stmt: Stmt


@dataclass(eq=False)
class ExprStmt(Stmt):
    x: Expr


@dataclass(eq=False)
class SendStmt(Stmt):
    chan: Expr
    value: Expr


@dataclass(eq=False)
class IncDecStmt(Stmt):
    x: Expr
    tok: Token


@dataclass(eq=False)
class AssignStmt(Stmt):
    """Assignment or short variable declaration.

    tok is Token.DEFINE for `:=`, Token.ASSIGN for `=`, or an `op=` token.
    tok_pos is the position of the operator.
    """

    lhs: list[Expr]
    tok: Token
    rhs: list[Expr]
    tok_pos: int = NO_POS


@dataclass(eq=False)
class GoStmt(Stmt):
    call: CallExpr


@dataclass(eq=False)
class DeferStmt(Stmt):
    call: CallExpr


@dataclass(eq=False)
class ReturnStmt(Stmt):
    results: list[Expr] = field(default_factory=list)


@dataclass(eq=False)
class BranchStmt(Stmt):
    """break, continue, goto or fallthrough."""

    tok: Token
    label: Ident | None = None


@dataclass(eq=False)
class BlockStmt(Stmt):
    stmts: list[Stmt] = field(default_factory=list)


@dataclass(eq=False)
class IfStmt(Stmt):
    init: Stmt | None
    cond: Expr
    body: BlockStmt
    else_: Stmt | None = None


@dataclass(eq=False)
class CaseClause(Stmt):
    """`case exprs:` or `default:` (exprs is None) of a switch."""

    exprs: list[Expr] | None
    body: list[Stmt] = field(default_factory=list)
    colon: int = NO_POS


@dataclass(eq=False)
class SwitchStmt(Stmt):
    init: Stmt | None
    tag: Expr | None
    body: BlockStmt


@dataclass(eq=False)
class TypeSwitchStmt(Stmt):
    """assign is `x.(type)` as an ExprStmt or `v := x.(type)` as an AssignStmt."""

    init: Stmt | None
    assign: Stmt
    body: BlockStmt


@dataclass(eq=False)
class CommClause(Stmt):
    """`case comm:` or `default:` (comm is None) of a select."""

    comm: Stmt | None
    body: list[Stmt] = field(default_factory=list)
    colon: int = NO_POS


@dataclass(eq=False)
class SelectStmt(Stmt):
    body: BlockStmt


@dataclass(eq=False)
class ForStmt(Stmt):
    init: Stmt | None
    cond: Expr | None
    post: Stmt | None
    body: BlockStmt | None


@dataclass(eq=False)
class RangeStmt(Stmt):
    """`for key, value tok range x`; tok is None when there are no variables."""

    key: Expr | None
    value: Expr | None
    tok: Token | None
    x: Expr
    body: BlockStmt | None
    tok_pos: int = NO_POS


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------


@dataclass(eq=False)
class ImportSpec(Spec):
    """An import; path.value keeps its quotes verbatim."""

    name: Ident | None
    path: BasicLit


@dataclass(eq=False)
class ValueSpec(Spec):
    names: list[Ident]
    type: Expr | None = None
    values: list[Expr] = field(default_factory=list)


@dataclass(eq=False)
class TypeSpec(Spec):
    name: Ident
    type: Expr
    is_alias: bool = False


@dataclass(eq=False)
class GenDecl(Decl):
    """import, const, type or var declaration; grouped when parenthesized."""

    tok: Token
    specs: list[Spec] = field(default_factory=list)
    grouped: bool = False


@dataclass(eq=False)
class FuncDecl(Decl):
    recv: FieldList | None
    name: Ident
    type: FuncType
    body: BlockStmt | None = None


@dataclass(eq=False)
class File(Node):
    """One parsed source file, the translation unit of the tree model.

    imports holds the same ImportSpec objects as the import declarations
    in decls; it is an index and is skipped when walking the tree.
    """

    name: str
    package: Ident
    decls: list[Decl] = field(default_factory=list)
    imports: list[ImportSpec] = field(default_factory=list, metadata={"walk": False})
    comments: list[Comment] = field(default_factory=list, metadata={"walk": False})


# -----------------------------------------------------------------------------
# Traversal
# -----------------------------------------------------------------------------


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct children of node in field order."""
    for f in fields(node):
        if not f.metadata.get("walk", True):
            continue
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Yield node and all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


def stmt_lists(node: Node) -> Iterator[tuple[Node, list[Stmt]]]:
    """Yield (owner, statements) for every statement list under node.

    The owner is the BlockStmt, CaseClause or CommClause holding the list.
    """
    for current in walk(node):
        if isinstance(current, BlockStmt):
            yield current, current.stmts
        elif isinstance(current, (CaseClause, CommClause)):
            yield current, current.body
