"""Tests for diagnostic classification and position lookup."""

from __future__ import annotations

import pytest
from conftest import ParseSources

from goquickfix.checker import Diagnostic
from goquickfix.classifier import EXTRACTORS, Shape, classify
from goquickfix.locator import find_unit, path_enclosing
from goquickfix.syntax import nodes as n

# -----------------------------------------------------------------------------
# Classifier Tests
# -----------------------------------------------------------------------------


class TestClassify:
    """Tests for recognizing fixable diagnostic shapes."""

    def test_declared_not_used(self) -> None:
        """Test extracting the variable name."""
        classified = classify(Diagnostic("count declared but not used", 7))
        assert classified is not None
        assert classified.shape is Shape.DECLARED_NOT_USED
        assert classified.params == {"name": "count"}
        assert classified.pos == 7

    def test_imported_not_used_keeps_quotes(self) -> None:
        """Test that the import path is extracted with its quotes."""
        classified = classify(Diagnostic('"net/http" imported but not used', 3))
        assert classified is not None
        assert classified.shape is Shape.IMPORTED_NOT_USED
        assert classified.params == {"path": '"net/http"'}

    def test_no_new_variables(self) -> None:
        """Test the exact no-new-variables message."""
        classified = classify(Diagnostic("no new variables on left side of :=", 5))
        assert classified is not None
        assert classified.shape is Shape.NO_NEW_VARIABLES
        assert classified.params == {}

    @pytest.mark.parametrize(
        "message",
        [
            "undefined: x",
            '"strings" imported as str and not used',
            "no new variable on left side of :=",
            "x declared but not used in this function",
            "declared but not used",
        ],
    )
    def test_unrecognized_messages(self, message: str) -> None:
        """Test that other messages have no shape."""
        assert classify(Diagnostic(message, 1)) is None

    def test_every_shape_has_an_extractor(self) -> None:
        """Test that the shape enumeration and extractors agree."""
        assert set(EXTRACTORS) == set(Shape)


# -----------------------------------------------------------------------------
# Locator Tests
# -----------------------------------------------------------------------------


class TestLocator:
    """Tests for find_unit and path_enclosing."""

    def test_find_unit_picks_owning_file(self, parse_sources: ParseSources) -> None:
        """Test that each file owns its own position range."""
        _, files = parse_sources({"a.go": "package p\n", "b.go": "package p\n"})
        a, b = files
        assert find_unit(files, a.pos) is a
        assert find_unit(files, a.end - 1) is a
        assert find_unit(files, b.pos) is b

    def test_find_unit_outside_every_file(self, parse_sources: ParseSources) -> None:
        """Test that unknown positions belong to no file."""
        _, files = parse_sources("package p\n")
        assert find_unit(files, 0) is None
        assert find_unit(files, files[0].end + 100) is None

    def test_path_enclosing_innermost_first(self, parse_sources: ParseSources) -> None:
        """Test the chain from a local identifier up to the file."""
        _, (f,) = parse_sources("package main\n\nfunc main() {\n\tx := 1\n}\n")
        decl = f.decls[0]
        assert isinstance(decl, n.FuncDecl) and decl.body is not None
        stmt = decl.body.stmts[0]
        assert isinstance(stmt, n.AssignStmt)
        ident = stmt.lhs[0]

        chain = path_enclosing(f, ident.pos)
        assert chain[0] is ident
        assert [type(node) for node in chain] == [
            n.Ident,
            n.AssignStmt,
            n.BlockStmt,
            n.FuncDecl,
            n.File,
        ]

    def test_path_enclosing_between_nodes(self, parse_sources: ParseSources) -> None:
        """Test that a position inside no declaration yields just the file."""
        _, (f,) = parse_sources("package main\n\n\nfunc main() {}\n")
        assert path_enclosing(f, f.pos + len("package main\n")) == [f]
