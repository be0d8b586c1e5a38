"""Error types shared across goquickfix.

ErrorList aggregates the per-diagnostic failures of a fix pass into one
multi-line report; the remaining classes are the exceptions raised at the
package's boundaries.
"""

from __future__ import annotations

from collections.abc import Iterable


class ErrorList(list):
    """An ordered collection of errors reported as one.

    Items are usually Diagnostics or exceptions; anything with a useful
    str() works.

    Example:
        >>> errs = ErrorList(["x declared but not used"])
        >>> print(errs)
        1 error(s):
        - x declared but not used
    """

    def any(self) -> ErrorList | None:
        """Return self when there is at least one error, None otherwise."""
        if not self:
            return None
        return self

    def __str__(self) -> str:
        lines = [f"{len(self)} error(s):"]
        lines.extend(f"- {err}" for err in self)
        return "\n".join(lines)


class QuickFixError(Exception):
    """Raised when diagnostics remain unresolved after every allowed pass.

    Attributes:
        errors: The unhandled errors of the final pass.
        tries: Number of passes that were run.
    """

    def __init__(self, errors: Iterable[object], tries: int = 0) -> None:
        self.errors = ErrorList(errors)
        self.tries = tries
        super().__init__(str(self.errors))


class UnresolvedPositionError(Exception):
    """A diagnostic points at a position no file of the scope owns."""

    def __init__(self, diagnostic: object, position: object, pos: int) -> None:
        self.diagnostic = diagnostic
        self.pos = pos
        super().__init__(f"cannot find file for error {str(diagnostic)!r}: {position} ({pos})")


class ParseError(Exception):
    """Source text could not be parsed.

    Attributes:
        filename: File being parsed.
        line: 1-based line of the offending token.
        column: 1-based column of the offending token.
        message: What was wrong.
    """

    def __init__(self, filename: str, line: int, column: int, message: str) -> None:
        self.filename = filename
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{filename}:{line}:{column}: {message}")


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""
