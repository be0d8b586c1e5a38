"""Undo the edits made by quick_fix.

Fixes leave no record behind, so reverting works from their shape alone:

* every `_ = ident` statement is removed, wherever it appears;
* every blank import is turned back into a plain import, except imports of
  packages that are normally imported for their side effects only.

Hand-written code of the same shapes is reverted too.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from goquickfix.config import DEFAULT_SIDE_EFFECT_IMPORTS
from goquickfix.syntax import nodes as n
from goquickfix.syntax.nodes import stmt_lists
from goquickfix.syntax.token import Token

logger = logging.getLogger(__name__)


def is_discard_read(stmt: n.Stmt) -> bool:
    """Whether stmt has the shape `_ = ident` that quick fixes insert."""
    return (
        isinstance(stmt, n.AssignStmt)
        and stmt.tok is Token.ASSIGN
        and len(stmt.lhs) == 1
        and len(stmt.rhs) == 1
        and isinstance(stmt.lhs[0], n.Ident)
        and stmt.lhs[0].is_blank
        and isinstance(stmt.rhs[0], n.Ident)
    )


def _comment_between(comments: Sequence[n.Comment], start: int, end: int) -> bool:
    return any(start <= c.pos < end for c in comments)


def _without_discard_reads(
    owner: n.Node, stmts: list[n.Stmt], comments: Sequence[n.Comment]
) -> list[n.Stmt]:
    kept: list[n.Stmt] = []
    for stmt in stmts:
        if not is_discard_read(stmt):
            kept.append(stmt)
            continue
        if not stmt.has_pos:
            continue
        # The closest kept line above takes over the removed lines unless a
        # comment sits between them, so the printer sees no gap there.
        if kept:
            previous = kept[-1]
            if previous.has_pos and not _comment_between(comments, previous.end, stmt.end):
                previous.end = max(previous.end, stmt.end)
        elif isinstance(owner, n.BlockStmt):
            if owner.has_pos and not _comment_between(comments, owner.pos, stmt.end):
                owner.pos = stmt.pos
        elif isinstance(owner, (n.CaseClause, n.CommClause)):
            if owner.colon and not _comment_between(comments, owner.colon, stmt.end):
                owner.colon = stmt.pos
    return kept


def revert_quick_fix(
    files: Sequence[n.File],
    *,
    side_effect_imports: Iterable[str] | None = None,
) -> int:
    """Revert quick fixes in place, in a single pass.

    Args:
        files: Files to revert.
        side_effect_imports: Unquoted import paths whose blank imports are
            kept. Defaults to DEFAULT_SIDE_EFFECT_IMPORTS.

    Returns:
        Number of statements removed plus imports restored.
    """
    keep = set(DEFAULT_SIDE_EFFECT_IMPORTS if side_effect_imports is None else side_effect_imports)
    reverted = 0

    for f in files:
        for owner, stmts in list(stmt_lists(f)):
            kept = _without_discard_reads(owner, stmts, f.comments)
            if len(kept) != len(stmts):
                reverted += len(stmts) - len(kept)
                stmts[:] = kept

        for spec in f.imports:
            if spec.name is None or not spec.name.is_blank:
                continue
            if spec.path.value[1:-1] in keep:
                logger.debug("%s: keeping side-effect import %s", f.name, spec.path.value)
                continue
            spec.name = None
            reverted += 1

    logger.info("reverted %d quick fix(es) in %d file(s)", reverted, len(files))
    return reverted
