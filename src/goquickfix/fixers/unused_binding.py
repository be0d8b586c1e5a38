"""Fixer for local variables that are declared but never used."""

from __future__ import annotations

from goquickfix.classifier import Shape
from goquickfix.fixers.base import BaseFixer, FixableDiagnostic, FixResult, discard_assignment
from goquickfix.syntax import nodes as n


def _statement_list(node: n.Node) -> list[n.Stmt] | None:
    """Return the statement list a discard read can be appended to, if any."""
    if isinstance(node, n.BlockStmt):
        return node.stmts
    if isinstance(node, (n.CaseClause, n.CommClause)):
        return node.body
    if isinstance(node, (n.ForStmt, n.RangeStmt)):
        if node.body is None:
            node.body = n.BlockStmt()
        return node.body.stmts
    if isinstance(node, n.IfStmt):
        # Declared in the if header: visible in the then block.
        return node.body.stmts
    return None


class UnusedBindingFixer(BaseFixer):
    """Marks an unused variable as read by appending `_ = name`.

    The statement goes to the end of the innermost statement container
    around the declaration. A variable declared in a switch header is
    visible in every clause, so the read goes to the first clause.

    Fix parameters expected in the classified diagnostic:
        - name: The unused identifier.
    """

    fix_id = Shape.DECLARED_NOT_USED.value

    def fix(self, issue: FixableDiagnostic) -> FixResult:
        """Append a discard read of the unused name.

        Args:
            issue: The fixable diagnostic, positioned at the declaration.

        Returns:
            FixResult indicating success or failure.
        """
        name = issue.params["name"]
        for node in issue.chain:
            if isinstance(node, (n.FuncLit, n.FuncDecl)):
                break
            if isinstance(node, (n.SwitchStmt, n.TypeSwitchStmt, n.SelectStmt)):
                if not node.body.stmts:
                    break
                stmts = _statement_list(node.body.stmts[0])
            else:
                stmts = _statement_list(node)
            if stmts is None:
                continue
            stmts.append(discard_assignment(name))
            return self._applied(issue, f"added `_ = {name}` to {type(node).__name__}")

        return FixResult(
            success=False,
            message=f"no statement block encloses the declaration of {name}",
        )
