"""Pytest configuration and fixtures for goquickfix tests."""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

from goquickfix.syntax import FileSet, parse_file  # noqa: E402
from goquickfix.syntax.nodes import File  # noqa: E402

ParseSources = Callable[..., "tuple[FileSet, list[File]]"]


@pytest.fixture
def parse_sources() -> ParseSources:
    """Parse Go sources into one FileSet.

    Accepts either a single source string (named main.go) or a mapping of
    file names to sources.
    """

    def _parse(sources: str | dict[str, str]) -> tuple[FileSet, list[File]]:
        if isinstance(sources, str):
            sources = {"main.go": sources}
        fset = FileSet()
        files = [parse_file(fset, name, source) for name, source in sources.items()]
        return fset, files

    return _parse
