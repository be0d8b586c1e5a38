"""Base classes and models for diagnostic oracles.

An oracle type-checks a compilation scope (every file of one package) and
reports all diagnostics it finds instead of stopping at the first one. The
quick-fix driver only ever talks to the BaseChecker interface, so any
checker producing Go type-checker messages can be plugged in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal, Protocol

from goquickfix.syntax.nodes import File

CheckStatus = Literal["pass", "fail"]


@dataclass(frozen=True)
class Diagnostic:
    """A problem reported by a checker.

    Attributes:
        message: Rendered message, e.g. "x declared but not used".
        pos: FileSet position the message refers to.
    """

    message: str
    pos: int

    def __str__(self) -> str:
        return self.message


@dataclass
class CheckResult:
    """Outcome of one checker run over a compilation scope.

    Attributes:
        name: Name of the checker that produced the result.
        status: "pass" when no diagnostics were found, "fail" otherwise.
        diagnostics: Every diagnostic found, ordered by position.
    """

    name: str
    status: CheckStatus
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "pass"


class Importer(Protocol):
    """Resolves import paths to the package names they bind."""

    def import_name(self, path: str) -> str:
        """Return the package name declared by the package at path.

        Args:
            path: Unquoted import path, e.g. "net/http".
        """
        ...


class BaseChecker(ABC):
    """Abstract base class for diagnostic oracles.

    Attributes:
        name: Short identifier used in logs and results.
    """

    name: str = ""

    @abstractmethod
    def check(self, files: Sequence[File], importer: Importer) -> CheckResult:
        """Type-check a compilation scope.

        Must not stop at the first error: every diagnostic the checker can
        find is reported.

        Args:
            files: All files of one package, parsed with one FileSet.
            importer: Resolves import paths to package names.

        Returns:
            CheckResult with the diagnostics found.
        """

    def _result(self, diagnostics: list[Diagnostic]) -> CheckResult:
        ordered = sorted(diagnostics, key=lambda d: d.pos)
        return CheckResult(
            name=self.name,
            status="fail" if ordered else "pass",
            diagnostics=ordered,
        )
