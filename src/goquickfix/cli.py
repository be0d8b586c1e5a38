"""goquickfix CLI - Main entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from goquickfix import __version__
from goquickfix.cli_utils import (
    EXIT_USER_ERROR,
    LoadedFile,
    collect_go_files,
    error,
    group_by_package,
    load_sources,
    render_quick_fix_error,
    wire_config,
)
from goquickfix.errors import QuickFixError
from goquickfix.quickfix import quick_fix
from goquickfix.revert import revert_quick_fix
from goquickfix.syntax import FileSet, print_file

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="goquickfix",
    help="Rewrite Go sources that are well typed but fail to build over unused names.",
    add_completion=False,
)

err_console = Console(stderr=True)


# -----------------------------------------------------------------------------
# Setup Helpers
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"goquickfix version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
    )


def _write_changes(loaded: list[LoadedFile], fset: FileSet, write: bool) -> None:
    """Print or write back every file whose text changed."""
    for item in loaded:
        output = print_file(item.file, fset)
        if output == item.source:
            logger.debug("%s: unchanged", item.path)
            continue
        if write:
            item.path.write_text(output, encoding="utf-8")
            logger.info("%s: rewritten", item.path)
        else:
            typer.echo(output, nl=False)


# -----------------------------------------------------------------------------
# Main Command
# -----------------------------------------------------------------------------


@app.command()
def main(
    paths: list[Path] = typer.Argument(
        ...,
        help="Go files of one or more packages, or a single package directory.",
    ),
    write: bool = typer.Option(
        False,
        "--write",
        "-w",
        help="Write results to the source files instead of stdout.",
    ),
    revert: bool = typer.Option(
        False,
        "--revert",
        help="Remove quick fixes instead of applying them.",
    ),
    max_tries: int | None = typer.Option(
        None,
        "--max-tries",
        min=1,
        help="Maximum number of fix passes per package.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every pass and fix.",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Fix unused variables, unused imports and redundant := in Go sources.

    Files are grouped by their package clause and each package is fixed on
    its own. Nothing is written unless every package was fixed.
    """
    setup_logging(verbose)

    go_files = collect_go_files(paths)
    if not go_files:
        error(f"no Go files found in {paths[0]}")

    start_dir = go_files[0].parent
    config = wire_config(max_tries=max_tries, start_dir=start_dir)

    fset = FileSet()
    loaded = load_sources(fset, go_files)

    failures: list[tuple[str, QuickFixError]] = []
    for package, group in group_by_package(loaded).items():
        files = [item.file for item in group]
        if revert:
            revert_quick_fix(files, side_effect_imports=config.side_effect_imports)
            continue
        try:
            quick_fix(files, config=config, fset=fset)
        except QuickFixError as e:
            logger.debug("package %s: gave up after %d pass(es)", package, e.tries)
            failures.append((package, e))

    if failures:
        if len(failures) == 1:
            error(render_quick_fix_error(failures[0][1], fset), exit_code=EXIT_USER_ERROR)
        report = "\n".join(
            f"package {package}: {render_quick_fix_error(e, fset)}" for package, e in failures
        )
        error(report, exit_code=EXIT_USER_ERROR)

    _write_changes(loaded, fset, write)


if __name__ == "__main__":
    app()
