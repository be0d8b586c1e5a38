"""Lexical tokens and source positions for the Go tree model.

Positions are plain integers handed out by a FileSet. Every file added to
the same FileSet owns a disjoint range, so positions from different files
of one compilation scope can be compared directly.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum

# Position of synthesized nodes that have no place in any source file.
NO_POS = 0


class Token(Enum):
    """Go tokens. Operator and keyword values are their source text."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"
    COMMENT = "COMMENT"

    IDENT = "IDENT"
    INT = "INT"
    FLOAT = "FLOAT"
    IMAG = "IMAG"
    CHAR = "CHAR"
    STRING = "STRING"

    ADD = "+"
    SUB = "-"
    MUL = "*"
    QUO = "/"
    REM = "%"
    AND = "&"
    OR = "|"
    XOR = "^"
    SHL = "<<"
    SHR = ">>"
    AND_NOT = "&^"

    ADD_ASSIGN = "+="
    SUB_ASSIGN = "-="
    MUL_ASSIGN = "*="
    QUO_ASSIGN = "/="
    REM_ASSIGN = "%="
    AND_ASSIGN = "&="
    OR_ASSIGN = "|="
    XOR_ASSIGN = "^="
    SHL_ASSIGN = "<<="
    SHR_ASSIGN = ">>="
    AND_NOT_ASSIGN = "&^="

    LAND = "&&"
    LOR = "||"
    ARROW = "<-"
    INC = "++"
    DEC = "--"

    EQL = "=="
    LSS = "<"
    GTR = ">"
    ASSIGN = "="
    NOT = "!"

    NEQ = "!="
    LEQ = "<="
    GEQ = ">="
    DEFINE = ":="
    ELLIPSIS = "..."

    LPAREN = "("
    LBRACK = "["
    LBRACE = "{"
    COMMA = ","
    PERIOD = "."

    RPAREN = ")"
    RBRACK = "]"
    RBRACE = "}"
    SEMICOLON = ";"
    COLON = ":"

    BREAK = "break"
    CASE = "case"
    CHAN = "chan"
    CONST = "const"
    CONTINUE = "continue"
    DEFAULT = "default"
    DEFER = "defer"
    ELSE = "else"
    FALLTHROUGH = "fallthrough"
    FOR = "for"
    FUNC = "func"
    GO = "go"
    GOTO = "goto"
    IF = "if"
    IMPORT = "import"
    INTERFACE = "interface"
    MAP = "map"
    PACKAGE = "package"
    RANGE = "range"
    RETURN = "return"
    SELECT = "select"
    STRUCT = "struct"
    SWITCH = "switch"
    TYPE = "type"
    VAR = "var"

    @property
    def precedence(self) -> int:
        """Binary operator precedence, 0 for non-operators."""
        return _PRECEDENCE.get(self, 0)

    def is_keyword(self) -> bool:
        return self in KEYWORDS.values()

    def is_literal(self) -> bool:
        return self in _LITERALS

    def is_assign_op(self) -> bool:
        """True for `op=` tokens such as `+=`."""
        return self in ASSIGN_OPS

    def __str__(self) -> str:
        return self.value


_PRECEDENCE = {
    Token.LOR: 1,
    Token.LAND: 2,
    Token.EQL: 3,
    Token.NEQ: 3,
    Token.LSS: 3,
    Token.LEQ: 3,
    Token.GTR: 3,
    Token.GEQ: 3,
    Token.ADD: 4,
    Token.SUB: 4,
    Token.OR: 4,
    Token.XOR: 4,
    Token.MUL: 5,
    Token.QUO: 5,
    Token.REM: 5,
    Token.SHL: 5,
    Token.SHR: 5,
    Token.AND: 5,
    Token.AND_NOT: 5,
}

_LITERALS = {
    Token.IDENT,
    Token.INT,
    Token.FLOAT,
    Token.IMAG,
    Token.CHAR,
    Token.STRING,
}

KEYWORDS: dict[str, Token] = {
    tok.value: tok
    for tok in Token
    if tok.value.isalpha() and tok.value.islower()
}

ASSIGN_OPS: dict[Token, Token] = {
    Token.ADD_ASSIGN: Token.ADD,
    Token.SUB_ASSIGN: Token.SUB,
    Token.MUL_ASSIGN: Token.MUL,
    Token.QUO_ASSIGN: Token.QUO,
    Token.REM_ASSIGN: Token.REM,
    Token.AND_ASSIGN: Token.AND,
    Token.OR_ASSIGN: Token.OR,
    Token.XOR_ASSIGN: Token.XOR,
    Token.SHL_ASSIGN: Token.SHL,
    Token.SHR_ASSIGN: Token.SHR,
    Token.AND_NOT_ASSIGN: Token.AND_NOT,
}

# Operators ordered longest first so that scanning can take the first match.
OPERATORS: list[tuple[str, Token]] = sorted(
    (
        (tok.value, tok)
        for tok in Token
        if not tok.value.isalpha() and tok.value not in ("ILLEGAL", "EOF")
    ),
    key=lambda item: len(item[0]),
    reverse=True,
)


@dataclass(frozen=True)
class Position:
    """A human-readable source position.

    Attributes:
        filename: Name of the file, empty when unknown.
        line: 1-based line number, 0 when the position is invalid.
        column: 1-based column (in characters).
    """

    filename: str = ""
    line: int = 0
    column: int = 0

    @property
    def is_valid(self) -> bool:
        return self.line > 0

    def __str__(self) -> str:
        if not self.is_valid:
            return self.filename or "-"
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


@dataclass
class SourceFile:
    """Bookkeeping for one file registered with a FileSet.

    Attributes:
        name: File name as given to the FileSet.
        base: Position of the first character of the file.
        size: Length of the file's source text.
        line_starts: Offsets at which each line begins.
    """

    name: str
    base: int
    size: int
    line_starts: list[int] = field(default_factory=lambda: [0])

    @property
    def end(self) -> int:
        return self.base + self.size

    def contains(self, pos: int) -> bool:
        # The end position itself belongs to the file (EOF).
        return self.base <= pos <= self.end

    def position(self, pos: int) -> Position:
        offset = pos - self.base
        index = bisect.bisect_right(self.line_starts, offset) - 1
        return Position(self.name, index + 1, offset - self.line_starts[index] + 1)

    def line(self, pos: int) -> int:
        return self.position(pos).line


class FileSet:
    """Allocates globally comparable position ranges for source files."""

    def __init__(self) -> None:
        self._files: list[SourceFile] = []
        self._next_base = 1

    def add_file(self, name: str, source: str) -> SourceFile:
        """Register a file and return its bookkeeping record.

        Args:
            name: File name used in rendered positions.
            source: Full source text of the file.

        Returns:
            The new SourceFile; its base is the file's first position.
        """
        info = SourceFile(name=name, base=self._next_base, size=len(source))
        for offset, char in enumerate(source):
            if char == "\n":
                info.line_starts.append(offset + 1)
        self._files.append(info)
        # One extra slot so that a file's EOF position is not the next file's base.
        self._next_base = info.end + 1
        return info

    def file(self, pos: int) -> SourceFile | None:
        """Return the file containing pos, or None."""
        if pos == NO_POS:
            return None
        for info in self._files:
            if info.contains(pos):
                return info
        return None

    def position(self, pos: int) -> Position:
        """Convert an integer position into a Position."""
        info = self.file(pos)
        if info is None:
            return Position()
        return info.position(pos)

    @property
    def files(self) -> list[SourceFile]:
        return list(self._files)
