"""Fixer for imports whose package is never referenced."""

from __future__ import annotations

from goquickfix.classifier import Shape
from goquickfix.fixers.base import BaseFixer, FixableDiagnostic, FixResult
from goquickfix.syntax import nodes as n


class UnusedImportFixer(BaseFixer):
    """Turns an unused import into a side-effect import (`import _ "path"`).

    Fix parameters expected in the classified diagnostic:
        - path: The import path exactly as written, quotes included.
    """

    fix_id = Shape.IMPORTED_NOT_USED.value

    def fix(self, issue: FixableDiagnostic) -> FixResult:
        """Bind the matching import to the blank identifier.

        Only imports that are not already blank qualify, so two diagnostics
        for the same path in one pass never edit one import twice.

        Args:
            issue: The fixable diagnostic, positioned inside the file.

        Returns:
            FixResult indicating success or failure.
        """
        path = issue.params["path"]
        owner = next((node for node in issue.chain if isinstance(node, n.File)), None)
        if owner is None:
            return FixResult(success=False, message=f"no file encloses the import of {path}")

        for spec in owner.imports:
            if spec.path.value != path:
                continue
            if spec.name is not None and spec.name.is_blank:
                continue
            spec.name = n.Ident("_")
            return self._applied(issue, f"import {path} rebound to _")

        return FixResult(success=False, message=f"no unblanked import of {path} in {owner.name}")
