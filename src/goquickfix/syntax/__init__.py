"""Go syntax trees: tokens, positions, nodes, parsing and printing.

The parser and printer cover the subset of Go the quick-fix core needs to
read and rewrite real packages; generics are rejected with a ParseError.
"""

from __future__ import annotations

from goquickfix.syntax import nodes
from goquickfix.syntax.nodes import iter_children, stmt_lists, walk
from goquickfix.syntax.parser import parse_file
from goquickfix.syntax.printer import print_file, print_node
from goquickfix.syntax.token import NO_POS, FileSet, Position, SourceFile, Token

__all__ = [
    # Tokens and positions
    "NO_POS",
    "FileSet",
    "Position",
    "SourceFile",
    "Token",
    # Tree
    "nodes",
    "iter_children",
    "stmt_lists",
    "walk",
    # Parsing and printing
    "parse_file",
    "print_file",
    "print_node",
]
