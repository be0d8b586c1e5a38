"""Tokenizer for Go source.

Produces the full token stream of a file up front, applying Go's
automatic semicolon insertion: a newline (or EOF) after an identifier,
a literal, one of the keywords break/continue/fallthrough/return, or one
of the tokens ++ -- ) ] } becomes a semicolon.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from goquickfix.errors import ParseError
from goquickfix.syntax.nodes import Comment
from goquickfix.syntax.token import KEYWORDS, OPERATORS, SourceFile, Token

_NUMBER_PATTERN = re.compile(
    r"""
    (?:
        0[xX][0-9a-fA-F_]*(?:\.[0-9a-fA-F_]*)?(?:[pP][+-]?[0-9_]+)?
      | 0[bB][01_]+
      | 0[oO][0-7_]+
      | (?:[0-9][0-9_]*(?:\.[0-9_]*)?|\.[0-9][0-9_]*)(?:[eE][+-]?[0-9_]+)?
    )
    i?
    """,
    re.VERBOSE,
)

_SEMICOLON_AFTER = {
    Token.IDENT,
    Token.INT,
    Token.FLOAT,
    Token.IMAG,
    Token.CHAR,
    Token.STRING,
    Token.BREAK,
    Token.CONTINUE,
    Token.FALLTHROUGH,
    Token.RETURN,
    Token.INC,
    Token.DEC,
    Token.RPAREN,
    Token.RBRACK,
    Token.RBRACE,
}


class Lexeme(NamedTuple):
    """A scanned token.

    Attributes:
        tok: The token kind.
        lit: Source text for identifiers, literals and keywords; "\\n" for
            an automatically inserted semicolon.
        pos: Position of the first character.
    """

    tok: Token
    lit: str
    pos: int


class Scanner:
    """Scans one source file into lexemes and comments."""

    def __init__(self, source: str, file: SourceFile) -> None:
        self.source = source
        self.file = file
        self.offset = 0
        self.lexemes: list[Lexeme] = []
        self.comments: list[Comment] = []

    def scan(self) -> list[Lexeme]:
        """Tokenize the whole file.

        Returns:
            The token stream, always terminated by an EOF lexeme.

        Raises:
            ParseError: On characters or literals that are not valid Go.
        """
        src = self.source
        length = len(src)

        while self.offset < length:
            char = src[self.offset]

            if char == "\n":
                self._newline(self.offset)
                self.offset += 1
            elif char in " \t\r":
                self.offset += 1
            elif src.startswith("//", self.offset):
                self._line_comment()
            elif src.startswith("/*", self.offset):
                self._general_comment()
            elif char.isalpha() or char == "_":
                self._identifier()
            elif char.isdigit() or (
                char == "." and self.offset + 1 < length and src[self.offset + 1].isdigit()
            ):
                self._number()
            elif char == '"':
                self._string()
            elif char == "`":
                self._raw_string()
            elif char == "'":
                self._rune()
            else:
                self._operator()

        self._newline(self.offset)
        self.lexemes.append(Lexeme(Token.EOF, "", self._pos(self.offset)))
        return self.lexemes

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _pos(self, offset: int) -> int:
        return self.file.base + offset

    def _error(self, offset: int, message: str) -> ParseError:
        position = self.file.position(self._pos(offset))
        return ParseError(self.file.name, position.line, position.column, message)

    def _emit(self, tok: Token, lit: str, offset: int) -> None:
        self.lexemes.append(Lexeme(tok, lit, self._pos(offset)))

    def _newline(self, offset: int) -> None:
        if self.lexemes and self.lexemes[-1].tok in _SEMICOLON_AFTER:
            self._emit(Token.SEMICOLON, "\n", offset)

    def _line_comment(self) -> None:
        start = self.offset
        end = self.source.find("\n", start)
        if end < 0:
            end = len(self.source)
        self.comments.append(
            Comment(self.source[start:end], pos=self._pos(start), end=self._pos(end))
        )
        self.offset = end

    def _general_comment(self) -> None:
        start = self.offset
        end = self.source.find("*/", start + 2)
        if end < 0:
            raise self._error(start, "comment not terminated")
        end += 2
        text = self.source[start:end]
        self.comments.append(Comment(text, pos=self._pos(start), end=self._pos(end)))
        self.offset = end
        if "\n" in text:
            self._newline(start)

    def _identifier(self) -> None:
        start = self.offset
        src = self.source
        while self.offset < len(src) and (src[self.offset].isalnum() or src[self.offset] == "_"):
            self.offset += 1
        word = src[start : self.offset]
        self._emit(KEYWORDS.get(word, Token.IDENT), word, start)

    def _number(self) -> None:
        start = self.offset
        match = _NUMBER_PATTERN.match(self.source, start)
        if match is None or match.end() == start:
            raise self._error(start, "invalid number literal")
        text = match.group(0)
        self.offset = match.end()
        if text.endswith("i"):
            kind = Token.IMAG
        elif text[:2] in ("0x", "0X"):
            kind = Token.FLOAT if ("." in text or "p" in text.lower()) else Token.INT
        elif text[:2] in ("0b", "0B", "0o", "0O"):
            kind = Token.INT
        elif "." in text or "e" in text.lower():
            kind = Token.FLOAT
        else:
            kind = Token.INT
        self._emit(kind, text, start)

    def _quoted(self, quote: str, kind: Token, name: str) -> None:
        start = self.offset
        src = self.source
        self.offset += 1
        while True:
            if self.offset >= len(src) or src[self.offset] == "\n":
                raise self._error(start, f"{name} literal not terminated")
            char = src[self.offset]
            if char == "\\":
                self.offset += 2
                continue
            self.offset += 1
            if char == quote:
                break
        self._emit(kind, src[start : self.offset], start)

    def _string(self) -> None:
        self._quoted('"', Token.STRING, "string")

    def _rune(self) -> None:
        self._quoted("'", Token.CHAR, "rune")

    def _raw_string(self) -> None:
        start = self.offset
        end = self.source.find("`", start + 1)
        if end < 0:
            raise self._error(start, "raw string literal not terminated")
        self.offset = end + 1
        self._emit(Token.STRING, self.source[start : self.offset], start)

    def _operator(self) -> None:
        start = self.offset
        for text, tok in OPERATORS:
            if self.source.startswith(text, start):
                self.offset += len(text)
                self._emit(tok, text, start)
                return
        raise self._error(start, f"invalid character {self.source[start]!r}")


def scan(source: str, file: SourceFile) -> tuple[list[Lexeme], list[Comment]]:
    """Tokenize source registered as file.

    Returns:
        The lexemes (EOF-terminated) and the comments of the file.
    """
    scanner = Scanner(source, file)
    lexemes = scanner.scan()
    return lexemes, scanner.comments
