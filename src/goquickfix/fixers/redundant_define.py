"""Fixer for `:=` statements that declare no new variables."""

from __future__ import annotations

from goquickfix.classifier import Shape
from goquickfix.fixers.base import BaseFixer, FixableDiagnostic, FixResult
from goquickfix.syntax import nodes as n
from goquickfix.syntax.token import Token


class RedundantDefineFixer(BaseFixer):
    """Rewrites `a, b := x, y` into `a, b = x, y` when nothing new is declared.

    Applies to the innermost assignment or range clause using `:=` around
    the diagnostic position.
    """

    fix_id = Shape.NO_NEW_VARIABLES.value

    def fix(self, issue: FixableDiagnostic) -> FixResult:
        for node in issue.chain:
            if isinstance(node, (n.AssignStmt, n.RangeStmt)) and node.tok is Token.DEFINE:
                node.tok = Token.ASSIGN
                return self._applied(issue, f"replaced := with = in {type(node).__name__}")

        return FixResult(success=False, message="no := statement encloses the diagnostic")
