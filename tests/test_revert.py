"""Tests for reverting quick fixes."""

from __future__ import annotations

from conftest import ParseSources

from goquickfix import revert_quick_fix
from goquickfix.fixers import discard_assignment
from goquickfix.revert import is_discard_read
from goquickfix.syntax import Token, nodes as n, print_file


class TestIsDiscardRead:
    """Tests for recognizing `_ = ident` statements."""

    def test_synthesized_statement(self) -> None:
        """Test that the statement quick fixes insert is recognized."""
        assert is_discard_read(discard_assignment("x"))

    def test_other_shapes(self) -> None:
        """Test statements that only look similar."""
        blank = n.Ident("_")
        assert not is_discard_read(n.AssignStmt([blank], Token.DEFINE, [n.Ident("x")]))
        assert not is_discard_read(n.AssignStmt([n.Ident("y")], Token.ASSIGN, [n.Ident("x")]))
        assert not is_discard_read(n.AssignStmt([blank], Token.ASSIGN, [n.BasicLit(Token.INT, "1")]))
        assert not is_discard_read(
            n.AssignStmt([blank, n.Ident("_")], Token.ASSIGN, [n.Ident("a"), n.Ident("b")])
        )
        assert not is_discard_read(n.ExprStmt(n.Ident("x")))


class TestRevertQuickFix:
    """Tests for the single revert pass."""

    def test_removes_discard_reads_everywhere(self, parse_sources: ParseSources) -> None:
        """Test removal from function bodies and clause bodies."""
        source = (
            "package main\n\nfunc main() {\n"
            "\tx := 1\n\t_ = x\n"
            "\tswitch {\n\tcase true:\n\t\ty := 2\n\t\t_ = y\n\t}\n"
            "}\n"
        )
        fset, files = parse_sources(source)
        assert revert_quick_fix(files) == 2
        output = print_file(files[0], fset)
        assert "_ =" not in output
        assert output == (
            "package main\n\nfunc main() {\n"
            "\tx := 1\n"
            "\tswitch {\n\tcase true:\n\t\ty := 2\n\t}\n"
            "}\n"
        )

    def test_first_statement_of_block(self, parse_sources: ParseSources) -> None:
        """Test that removing a leading statement leaves no gap after the brace."""
        source = (
            "package main\n\nfunc main() {\n"
            "\tx := 1\n"
            "\tif true {\n\t\t_ = x\n\t\tprintln(1)\n\t}\n"
            "}\n"
        )
        fset, files = parse_sources(source)
        assert revert_quick_fix(files) == 1
        assert print_file(files[0], fset) == (
            "package main\n\nfunc main() {\n"
            "\tx := 1\n"
            "\tif true {\n\t\tprintln(1)\n\t}\n"
            "}\n"
        )

    def test_first_statement_of_clause(self, parse_sources: ParseSources) -> None:
        """Test that removing a leading clause statement leaves no gap after the colon."""
        source = (
            "package main\n\nfunc main() {\n"
            "\tswitch s := 1; {\n\tcase true:\n\t\t_ = s\n\t\tprintln(1)\n\tdefault:\n\t}\n"
            "}\n"
        )
        fset, files = parse_sources(source)
        assert revert_quick_fix(files) == 1
        assert print_file(files[0], fset) == (
            "package main\n\nfunc main() {\n"
            "\tswitch s := 1; {\n\tcase true:\n\t\tprintln(1)\n\tdefault:\n\t}\n"
            "}\n"
        )

    def test_only_statement_of_block(self, parse_sources: ParseSources) -> None:
        """Test that a block emptied by the revert keeps its braces on adjacent lines."""
        source = "package main\n\nfunc f(x int) {\n\t_ = x\n}\n"
        fset, files = parse_sources(source)
        assert revert_quick_fix(files) == 1
        assert print_file(files[0], fset) == "package main\n\nfunc f(x int) {\n}\n"

    def test_keeps_other_blank_assignments(self, parse_sources: ParseSources) -> None:
        """Test that `_ = f()` and `_, _ = a, b` are left alone."""
        source = "package main\n\nfunc main() {\n\t_ = f()\n\t_, _ = a, b\n}\n"
        fset, files = parse_sources(source)
        assert revert_quick_fix(files) == 0
        assert print_file(files[0], fset) == source

    def test_restores_imports_except_side_effects(self, parse_sources: ParseSources) -> None:
        """Test that known side-effect imports stay blank."""
        source = 'package main\n\nimport (\n\t_ "image/png"\n\t_ "os"\n)\n'
        fset, files = parse_sources(source)
        assert revert_quick_fix(files) == 1
        assert print_file(files[0], fset) == 'package main\n\nimport (\n\t_ "image/png"\n\t"os"\n)\n'

    def test_custom_side_effect_imports(self, parse_sources: ParseSources) -> None:
        """Test overriding the side-effect import list."""
        source = 'package main\n\nimport (\n\t_ "image/png"\n\t_ "os"\n)\n'
        fset, files = parse_sources(source)
        assert revert_quick_fix(files, side_effect_imports=["os"]) == 1
        assert print_file(files[0], fset) == 'package main\n\nimport (\n\t"image/png"\n\t_ "os"\n)\n'

    def test_named_imports_untouched(self, parse_sources: ParseSources) -> None:
        """Test that imports with real names are not changed."""
        source = 'package main\n\nimport str "strings"\n'
        fset, files = parse_sources(source)
        assert revert_quick_fix(files) == 0
        assert print_file(files[0], fset) == source

    def test_multiple_files(self, parse_sources: ParseSources) -> None:
        """Test reverting every file of a package."""
        fset, files = parse_sources(
            {
                "a.go": 'package main\n\nimport _ "os"\n',
                "b.go": "package main\n\nfunc f() {\n\tv := 1\n\t_ = v\n}\n",
            }
        )
        assert revert_quick_fix(files) == 2
        assert print_file(files[0], fset) == 'package main\n\nimport "os"\n'
        assert print_file(files[1], fset) == "package main\n\nfunc f() {\n\tv := 1\n}\n"
