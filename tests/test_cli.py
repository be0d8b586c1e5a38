"""Tests for the goquickfix command line."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from goquickfix.cli import app

runner = CliRunner()

UNUSED = "package main\n\nimport \"os\"\n\nfunc main() {\n\tx := 1\n}\n"
UNUSED_FIXED = "package main\n\nimport _ \"os\"\n\nfunc main() {\n\tx := 1\n\t_ = x\n}\n"
CLEAN = "package main\n\nfunc main() {\n\tprintln(\"hi\")\n}\n"
SWITCH = (
    "package main\n\nfunc main() {\n\tx := 1\n"
    "\tswitch x {\n\tcase 1:\n\t\tprintln(x)\n\tdefault:\n\t\tprintln(0)\n\t}\n}\n"
)


def _write(path: Path, source: str) -> Path:
    path.write_text(source, encoding="utf-8")
    return path


def test_version() -> None:
    """Test --version flag shows version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "goquickfix version" in result.stdout


def test_help() -> None:
    """Test --help flag shows help."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--write" in result.stdout
    assert "--revert" in result.stdout


def test_missing_path_is_usage_error() -> None:
    """Test that PATH is required."""
    result = runner.invoke(app, [])
    assert result.exit_code == 2


# -----------------------------------------------------------------------------
# Fix Tests
# -----------------------------------------------------------------------------


class TestFix:
    """Tests for fixing files from the command line."""

    def test_prints_fixed_source(self, tmp_path: Path) -> None:
        """Test that fixed output goes to stdout and the file is untouched."""
        path = _write(tmp_path / "main.go", UNUSED)
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert result.stdout == UNUSED_FIXED
        assert path.read_text(encoding="utf-8") == UNUSED

    def test_write_in_place(self, tmp_path: Path) -> None:
        """Test -w rewrites the file."""
        path = _write(tmp_path / "main.go", UNUSED)
        result = runner.invoke(app, ["-w", str(path)])
        assert result.exit_code == 0
        assert result.stdout == ""
        assert path.read_text(encoding="utf-8") == UNUSED_FIXED

    def test_unchanged_files_are_skipped(self, tmp_path: Path) -> None:
        """Test that files without changes produce no output."""
        path = _write(tmp_path / "main.go", CLEAN)
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_clean_switch_is_unchanged(self, tmp_path: Path) -> None:
        """Test that a file with a switch and nothing to fix produces no output."""
        path = _write(tmp_path / "main.go", SWITCH)
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_fix_inside_clause_changes_nothing_else(self, tmp_path: Path) -> None:
        """Test that only the discard read is added to a switch clause."""
        source = SWITCH.replace("\t\tprintln(0)\n", "\t\ty := 0\n")
        path = _write(tmp_path / "main.go", source)
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert result.stdout == source.replace("\t\ty := 0\n", "\t\ty := 0\n\t\t_ = y\n")

    def test_directory(self, tmp_path: Path) -> None:
        """Test fixing every Go file of a directory."""
        a = _write(tmp_path / "a.go", "package main\n\nfunc main() {\n\thelper()\n}\n")
        b = _write(tmp_path / "b.go", "package main\n\nfunc helper() {\n\ty := 2\n}\n")
        _write(tmp_path / "_skipped.go", "this is not go\n")
        _write(tmp_path / ".hidden.go", "neither is this\n")
        _write(tmp_path / "notes.txt", "ignored\n")

        result = runner.invoke(app, ["-w", str(tmp_path)])
        assert result.exit_code == 0
        assert a.read_text(encoding="utf-8") == "package main\n\nfunc main() {\n\thelper()\n}\n"
        assert b.read_text(encoding="utf-8") == (
            "package main\n\nfunc helper() {\n\ty := 2\n\t_ = y\n}\n"
        )

    def test_files_of_different_packages(self, tmp_path: Path) -> None:
        """Test that files are fixed per package clause."""
        a = _write(tmp_path / "a.go", "package a\n\nfunc f() {\n\tv := 1\n}\n")
        b = _write(tmp_path / "b.go", "package b\n\nfunc f() {\n\tv := 1\n}\n")
        result = runner.invoke(app, ["-w", str(a), str(b)])
        assert result.exit_code == 0
        assert "_ = v" in a.read_text(encoding="utf-8")
        assert "_ = v" in b.read_text(encoding="utf-8")

    def test_revert(self, tmp_path: Path) -> None:
        """Test --revert removes quick fixes."""
        path = _write(tmp_path / "main.go", UNUSED_FIXED)
        result = runner.invoke(app, ["--revert", "-w", str(path)])
        assert result.exit_code == 0
        assert path.read_text(encoding="utf-8") == UNUSED


# -----------------------------------------------------------------------------
# Error Tests
# -----------------------------------------------------------------------------


class TestErrors:
    """Tests for failures reported by the command line."""

    def test_unresolved_diagnostics(self, tmp_path: Path) -> None:
        """Test that unfixable errors are listed with positions and nothing is written."""
        source = "package main\n\nfunc main() {\n\tprintln(y)\n\tz := 1\n}\n"
        path = _write(tmp_path / "main.go", source)
        result = runner.invoke(app, ["-w", "--max-tries", "2", str(path)])
        assert result.exit_code == 1
        assert "1 error(s):" in result.output
        assert f"- {path}:4:10: undefined: y" in result.output
        assert path.read_text(encoding="utf-8") == source

    def test_parse_error(self, tmp_path: Path) -> None:
        """Test that unparsable files are reported."""
        path = _write(tmp_path / "main.go", "package main\n\nfunc main() {\n")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert f"{path}:" in result.output

    def test_missing_path(self, tmp_path: Path) -> None:
        """Test that nonexistent paths are reported."""
        result = runner.invoke(app, [str(tmp_path / "missing.go")])
        assert result.exit_code == 1
        assert "path does not exist" in result.output

    def test_directory_with_other_paths(self, tmp_path: Path) -> None:
        """Test that a directory cannot be combined with other paths."""
        path = _write(tmp_path / "main.go", CLEAN)
        result = runner.invoke(app, [str(tmp_path), str(path)])
        assert result.exit_code == 1
        assert "exact one directory" in result.output

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Test a directory without Go files."""
        result = runner.invoke(app, [str(tmp_path)])
        assert result.exit_code == 1
        assert "no Go files" in result.output

    def test_max_tries_must_be_positive(self, tmp_path: Path) -> None:
        """Test that --max-tries rejects zero as a usage error."""
        path = _write(tmp_path / "main.go", CLEAN)
        result = runner.invoke(app, ["--max-tries", "0", str(path)])
        assert result.exit_code == 2

    def test_invalid_config_file(self, tmp_path: Path) -> None:
        """Test that invalid configuration is reported."""
        _write(tmp_path / ".goquickfixrc", "max_tries = 0\n")
        path = _write(tmp_path / "main.go", CLEAN)
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
