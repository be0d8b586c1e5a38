"""Tests for the fix-point driver."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pytest
from conftest import ParseSources

from goquickfix import QuickFixError, quick_fix, revert_quick_fix
from goquickfix.checker import (
    BaseChecker,
    CheckResult,
    DefaultImporter,
    Diagnostic,
    Importer,
    ScopeChecker,
)
from goquickfix.config import QuickfixConfig
from goquickfix.errors import ConfigError, UnresolvedPositionError
from goquickfix.fixers import get_global_registry
from goquickfix.quickfix import quick_fix_pass
from goquickfix.syntax import nodes as n, print_file

MIXED = """\
package main

import (
	"fmt"
	"os"
)

func main() {
	x := 1
	x := 2
	fmt.Println("hi")
}
"""

MIXED_FIXED = """\
package main

import (
	"fmt"
	_ "os"
)

func main() {
	x := 1
	x = 2
	fmt.Println("hi")
	_ = x
}
"""


class CountingChecker(ScopeChecker):
    """ScopeChecker that counts how often it runs."""

    def __init__(self) -> None:
        self.calls = 0

    def check(self, files: Sequence[n.File], importer: Importer) -> CheckResult:
        self.calls += 1
        return super().check(files, importer)


class ScriptedChecker(BaseChecker):
    """Checker that reports the same diagnostics on every pass."""

    name = "scripted"

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        self.calls = 0

    def check(self, files: Sequence[n.File], importer: Importer) -> CheckResult:
        self.calls += 1
        return self._result(list(self.diagnostics))


def _diagnostics(files: list[n.File]) -> list[str]:
    result = ScopeChecker().check(files, DefaultImporter())
    return [d.message for d in result.diagnostics]


# -----------------------------------------------------------------------------
# Fix Tests
# -----------------------------------------------------------------------------


class TestQuickFix:
    """Tests for rewriting packages until they type-check."""

    def test_clean_package_needs_one_pass(self, parse_sources: ParseSources) -> None:
        """Test that a package without diagnostics is left unchanged."""
        source = 'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println("hi")\n}\n'
        fset, files = parse_sources(source)
        checker = CountingChecker()
        quick_fix(files, checker=checker, fset=fset)
        assert checker.calls == 1
        assert print_file(files[0], fset) == source

    def test_unused_binding(self, parse_sources: ParseSources) -> None:
        """Test that an unused local gets a discard read at the end of its block."""
        fset, files = parse_sources("package main\n\nfunc main() {\n\tx := 1\n}\n")
        quick_fix(files, fset=fset)
        body = files[0].decls[0].body  # type: ignore[attr-defined]
        last = body.stmts[-1]
        assert isinstance(last, n.AssignStmt)
        assert isinstance(last.rhs[0], n.Ident) and last.rhs[0].name == "x"
        assert print_file(files[0], fset) == "package main\n\nfunc main() {\n\tx := 1\n\t_ = x\n}\n"
        assert _diagnostics(files) == []

    def test_unused_import(self, parse_sources: ParseSources) -> None:
        """Test that an unreferenced import is rebound to _."""
        fset, files = parse_sources('package main\n\nimport "os"\n\nfunc main() {}\n')
        quick_fix(files, fset=fset)
        name = files[0].imports[0].name
        assert name is not None and name.is_blank
        assert _diagnostics(files) == []

    def test_redundant_define(self, parse_sources: ParseSources) -> None:
        """Test that a := declaring nothing new becomes =."""
        source = (
            "package main\n\nfunc f() (int, int) { return 1, 2 }\n\n"
            "func main() {\n\ta, b := f()\n\ta, b := f()\n\tprintln(a, b)\n}\n"
        )
        fset, files = parse_sources(source)
        quick_fix(files, fset=fset)
        assert "\ta, b = f()\n" in print_file(files[0], fset)
        assert _diagnostics(files) == []

    def test_all_shapes_in_one_pass(self, parse_sources: ParseSources) -> None:
        """Test that every diagnostic of a pass is fixed before re-checking."""
        fset, files = parse_sources(MIXED)
        checker = CountingChecker()
        quick_fix(files, checker=checker, fset=fset)
        assert checker.calls == 2
        assert print_file(files[0], fset) == MIXED_FIXED

    def test_idempotent(self, parse_sources: ParseSources) -> None:
        """Test that fixing already fixed output changes nothing."""
        fset, files = parse_sources(MIXED)
        quick_fix(files, fset=fset)
        first = print_file(files[0], fset)

        checker = CountingChecker()
        quick_fix(files, checker=checker, fset=fset)
        assert checker.calls == 1
        assert print_file(files[0], fset) == first

    def test_multiple_files(self, parse_sources: ParseSources) -> None:
        """Test fixes in two files of one package in a single call."""
        fset, (a, b) = parse_sources(
            {
                "a.go": 'package main\n\nimport "strings"\n\nfunc main() {\n\thelper()\n}\n',
                "b.go": "package main\n\nfunc helper() {\n\ty := 2\n}\n",
            }
        )
        quick_fix([a, b], fset=fset)
        assert print_file(a, fset) == 'package main\n\nimport _ "strings"\n\nfunc main() {\n\thelper()\n}\n'
        assert print_file(b, fset) == "package main\n\nfunc helper() {\n\ty := 2\n\t_ = y\n}\n"

    def test_nested_blocks(self, parse_sources: ParseSources) -> None:
        """Test that the discard read goes to the innermost block."""
        source = (
            "package main\n\nfunc main() {\n"
            "\tfor i := 0; i < 3; i++ {\n\t\tif i > 1 {\n\t\t\tv := i\n\t\t}\n\t}\n}\n"
        )
        fset, files = parse_sources(source)
        quick_fix(files, fset=fset)
        assert "\t\t\tv := i\n\t\t\t_ = v\n\t\t}\n" in print_file(files[0], fset)


# -----------------------------------------------------------------------------
# Failure Tests
# -----------------------------------------------------------------------------


class TestQuickFixFailures:
    """Tests for diagnostics that cannot be fixed."""

    def test_unrecognized_diagnostic(self, parse_sources: ParseSources) -> None:
        """Test that unknown diagnostics are reported after the budget is spent."""
        fset, files = parse_sources("package main\n\nfunc main() {\n\tprintln(y)\n}\n")
        with pytest.raises(QuickFixError) as exc_info:
            quick_fix(files, max_tries=3, fset=fset)
        err = exc_info.value
        assert err.tries == 3
        assert [str(e) for e in err.errors] == ["undefined: y"]
        assert str(err) == "1 error(s):\n- undefined: y"

    def test_budget_exhaustion_counts_passes(self, parse_sources: ParseSources) -> None:
        """Test that exactly max_tries passes run before giving up."""
        _, files = parse_sources("package main\n")
        checker = ScriptedChecker([Diagnostic("boom", files[0].pos), Diagnostic("bang", files[0].pos)])
        with pytest.raises(QuickFixError) as exc_info:
            quick_fix(files, max_tries=4, checker=checker)
        assert checker.calls == 4
        assert "2 error(s):" in str(exc_info.value)
        assert "- boom" in str(exc_info.value)
        assert "- bang" in str(exc_info.value)

    def test_regenerating_fixable_diagnostic_warns(
        self, parse_sources: ParseSources, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a diagnostic that is fixed on every pass but keeps coming back."""
        source = "package main\n\nfunc main() {\n\tx := 1\n}\n"
        _, files = parse_sources(source)
        pos = files[0].pos + source.index("x :=")
        checker = ScriptedChecker([Diagnostic("x declared but not used", pos)])

        with caplog.at_level(logging.WARNING, logger="goquickfix.quickfix"):
            quick_fix(files, max_tries=3, checker=checker)

        assert checker.calls == 3
        assert "used all 3 passes" in caplog.text
        body = files[0].decls[0].body  # type: ignore[attr-defined]
        assert len(body.stmts) == 4

    def test_failed_fix_reports_original_diagnostic(self, parse_sources: ParseSources) -> None:
        """Test that a fixer failure keeps the diagnostic in the error list."""
        source = "package main\n\nvar q = 1\n"
        _, files = parse_sources(source)
        diagnostic = Diagnostic("q declared but not used", files[0].pos + source.index("q ="))
        with pytest.raises(QuickFixError) as exc_info:
            quick_fix(files, max_tries=1, checker=ScriptedChecker([diagnostic]))
        assert exc_info.value.errors == [diagnostic]

    def test_unresolved_position(self, parse_sources: ParseSources) -> None:
        """Test a diagnostic pointing outside every file of the package."""
        fset, files = parse_sources("package main\n")
        checker = ScriptedChecker([Diagnostic("x declared but not used", 9999)])
        with pytest.raises(QuickFixError) as exc_info:
            quick_fix(files, max_tries=1, checker=checker, fset=fset)
        (error,) = exc_info.value.errors
        assert isinstance(error, UnresolvedPositionError)
        assert str(error) == "cannot find file for error 'x declared but not used': - (9999)"

    def test_max_tries_must_be_positive(self, parse_sources: ParseSources) -> None:
        """Test that a zero budget is rejected."""
        _, files = parse_sources("package main\n")
        with pytest.raises(ConfigError, match="at least 1"):
            quick_fix(files, max_tries=0)

    def test_budget_from_config(self, parse_sources: ParseSources) -> None:
        """Test that max_tries defaults to the configured value."""
        _, files = parse_sources("package main\n")
        checker = ScriptedChecker([Diagnostic("boom", files[0].pos)])
        with pytest.raises(QuickFixError):
            quick_fix(files, checker=checker, config=QuickfixConfig(max_tries=2))
        assert checker.calls == 2


# -----------------------------------------------------------------------------
# Single Pass Tests
# -----------------------------------------------------------------------------


class TestQuickFixPass:
    """Tests for one classify-then-apply pass."""

    def test_pass_without_diagnostics(self, parse_sources: ParseSources) -> None:
        """Test that a clean pass reports no error."""
        _, files = parse_sources("package main\n")
        result = quick_fix_pass(files, ScopeChecker(), DefaultImporter(), get_global_registry())
        assert result.found_error is False
        assert result.unhandled == []

    def test_fixed_pass_still_found_error(self, parse_sources: ParseSources) -> None:
        """Test that a pass fixing everything still asks for another pass."""
        _, files = parse_sources("package main\n\nfunc main() {\n\tx := 1\n}\n")
        result = quick_fix_pass(files, ScopeChecker(), DefaultImporter(), get_global_registry())
        assert result.found_error is True
        assert result.unhandled.any() is None

    def test_positions_read_before_edits(self, parse_sources: ParseSources) -> None:
        """Test two diagnostics in one block are both located and fixed."""
        fset, files = parse_sources("package main\n\nfunc main() {\n\ta := 1\n\tb := 2\n}\n")
        quick_fix_pass(files, ScopeChecker(), DefaultImporter(), get_global_registry())
        assert print_file(files[0], fset).endswith("\tb := 2\n\t_ = a\n\t_ = b\n}\n")


# -----------------------------------------------------------------------------
# Revert Round Trip Tests
# -----------------------------------------------------------------------------


class TestRevertRoundTrip:
    """Tests for reverting quick fix output."""

    def test_revert_restores_bindings(self, parse_sources: ParseSources) -> None:
        """Test that reverting removes discard reads and restores imports."""
        source = (
            'package main\n\nimport (\n\t_ "embed"\n\t"os"\n)\n\n'
            "func main() {\n\tx := 1\n}\n"
        )
        fset, files = parse_sources(source)
        quick_fix(files, fset=fset)
        assert "_ = x" in print_file(files[0], fset)

        reverted = revert_quick_fix(files)
        assert reverted == 2
        assert print_file(files[0], fset) == source
