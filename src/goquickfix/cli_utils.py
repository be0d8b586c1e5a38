"""CLI utility functions for goquickfix.

Provides helper functions for:
- Error formatting: Consistent user-friendly error messages with exit codes
- Config wiring: Passing CLI options to load_config
- Source loading: Collecting, reading, parsing and grouping Go files
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

import typer

from goquickfix.config import QuickfixConfig, load_config
from goquickfix.errors import ConfigError, ParseError, QuickFixError
from goquickfix.syntax import FileSet, parse_file
from goquickfix.syntax.nodes import File

# Exit code conventions
EXIT_USER_ERROR = 1  # Unresolved errors, bad input, unreadable or unparsable files


@dataclass
class LoadedFile:
    """A Go source file read from disk and parsed.

    Attributes:
        path: Where the file was read from.
        source: Original text, used to skip unchanged output.
        file: Parsed syntax tree.
    """

    path: Path
    source: str
    file: File

    @property
    def package(self) -> str:
        return self.file.package.name


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_USER_ERROR=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def render_quick_fix_error(err: QuickFixError, fset: FileSet) -> str:
    """Render unresolved errors with the source positions of diagnostics.

    Returns:
        "N error(s):" followed by one "- file:line:col: message" line per
        diagnostic; other errors are rendered as they are.
    """
    lines = []
    for item in err.errors:
        pos = getattr(item, "pos", None)
        message = getattr(item, "message", None)
        if isinstance(pos, int) and message is not None:
            lines.append(f"{fset.position(pos)}: {message}")
        else:
            lines.append(str(item))
    return f"{len(lines)} error(s):\n" + "\n".join(f"- {line}" for line in lines)


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    max_tries: int | None = None,
    start_dir: Path | None = None,
) -> QuickfixConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Args:
        max_tries: Override for the pass budget.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved QuickfixConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {}

    if max_tries is not None:
        cli_overrides["max_tries"] = max_tries

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ConfigError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Source Loading
# -----------------------------------------------------------------------------


def collect_go_files(paths: Sequence[Path]) -> list[Path]:
    """Expand the command line paths into the Go files to process.

    A single directory stands for the .go files directly inside it, except
    those whose names start with "_" or "."; otherwise every path must be
    a file.

    Raises:
        typer.Exit: If a path does not exist or a directory is combined
            with other paths.
    """
    for path in paths:
        if not path.exists():
            error(f"path does not exist: {path}")

    directories = [path for path in paths if path.is_dir()]
    if not directories:
        return list(paths)
    if len(paths) > 1:
        error("you can only specify exact one directory")

    directory = directories[0]
    return sorted(
        entry
        for entry in directory.iterdir()
        if entry.is_file() and entry.suffix == ".go" and entry.name[0] not in "_."
    )


def load_sources(fset: FileSet, paths: Sequence[Path]) -> list[LoadedFile]:
    """Read and parse files, all into one FileSet.

    Raises:
        typer.Exit: If a file cannot be read or parsed.
    """
    loaded = []
    for path in paths:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            error(f"cannot read {path}: {e}")
        try:
            f = parse_file(fset, str(path), source)
        except ParseError as e:
            error(str(e))
        loaded.append(LoadedFile(path, source, f))
    return loaded


def group_by_package(loaded: Sequence[LoadedFile]) -> dict[str, list[LoadedFile]]:
    """Group files by their package clause, keeping first-seen order."""
    groups: dict[str, list[LoadedFile]] = {}
    for item in loaded:
        groups.setdefault(item.package, []).append(item)
    return groups
