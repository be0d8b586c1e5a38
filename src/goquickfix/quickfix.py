"""Fix-point driver rewriting Go packages until they pass type checking.

Each pass type-checks the package once, classifies every diagnostic,
locates it in the tree and only then applies the fixes. Applying a fix can
move or create nodes, so no diagnostic of a pass is located after the
first edit of that pass. Passes repeat until the checker reports nothing or
the pass budget is spent.

For example:
    v declared but not used              -> append `_ = v`
    "p" imported but not used            -> rewrite to `import _ "p"`
    no new variables on left side of :=  -> rewrite `:=` to `=`
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from goquickfix.checker.base import BaseChecker, Importer
from goquickfix.checker.importer import DefaultImporter
from goquickfix.checker.typecheck import ScopeChecker
from goquickfix.classifier import classify
from goquickfix.config import QuickfixConfig
from goquickfix.errors import ConfigError, ErrorList, QuickFixError, UnresolvedPositionError
from goquickfix.fixers.base import BaseFixer, FixableDiagnostic, FixResult
from goquickfix.fixers.registry import FixerRegistry, get_global_registry
from goquickfix.locator import find_unit, path_enclosing
from goquickfix.syntax.nodes import File
from goquickfix.syntax.token import FileSet

logger = logging.getLogger(__name__)


@dataclass
class PassResult:
    """Outcome of one classify-then-apply pass.

    Attributes:
        found_error: Whether the checker reported any diagnostic. Another
            pass is needed whenever this is set, even if every diagnostic
            was fixed.
        unhandled: Diagnostics that were not recognized or whose fix
            failed, and errors for diagnostics that could not be located.
    """

    found_error: bool
    unhandled: ErrorList = field(default_factory=ErrorList)


@dataclass
class PendingFix:
    """A located fix waiting for the classification phase to finish."""

    issue: FixableDiagnostic
    fixer: BaseFixer

    def apply(self) -> FixResult:
        return self.fixer.fix(self.issue)


def quick_fix_pass(
    files: Sequence[File],
    checker: BaseChecker,
    importer: Importer,
    registry: FixerRegistry,
    fset: FileSet | None = None,
) -> PassResult:
    """Run one pass: check, classify and locate everything, then fix.

    Args:
        files: Files of one package, parsed with one FileSet.
        checker: Diagnostic oracle.
        importer: Import path resolver handed to the checker.
        registry: Fixers to dispatch classified diagnostics to.
        fset: FileSet of the files, used to render positions in errors.

    Returns:
        PassResult of the pass.
    """
    result = checker.check(files, importer)
    if not result.diagnostics:
        return PassResult(found_error=False)

    unhandled = ErrorList()
    pending: list[PendingFix] = []

    for diagnostic in result.diagnostics:
        classified = classify(diagnostic)
        if classified is None:
            unhandled.append(diagnostic)
            continue

        unit = find_unit(files, diagnostic.pos)
        if unit is None:
            position = fset.position(diagnostic.pos) if fset is not None else "-"
            unhandled.append(UnresolvedPositionError(diagnostic, position, diagnostic.pos))
            continue

        fixer = registry.get_fixer(classified.shape.value)
        if fixer is None:
            unhandled.append(diagnostic)
            continue

        issue = FixableDiagnostic(classified, unit, path_enclosing(unit, diagnostic.pos))
        pending.append(PendingFix(issue, fixer))

    for fix in pending:
        outcome = fix.apply()
        if outcome.success:
            logger.debug("%s: %s", fix.issue.file.name, outcome.message)
        else:
            logger.debug("cannot fix %r: %s", str(fix.issue.diagnostic), outcome.message)
            unhandled.append(fix.issue.diagnostic)

    return PassResult(found_error=True, unhandled=unhandled)


def quick_fix(
    files: Sequence[File],
    *,
    max_tries: int | None = None,
    checker: BaseChecker | None = None,
    importer: Importer | None = None,
    registry: FixerRegistry | None = None,
    config: QuickfixConfig | None = None,
    fset: FileSet | None = None,
) -> None:
    """Rewrite the files of one package in place so that they type-check.

    Args:
        files: Files of one package, parsed with one FileSet.
        max_tries: Maximum number of passes. Defaults to config.max_tries.
        checker: Diagnostic oracle. Defaults to ScopeChecker.
        importer: Import path resolver. Defaults to a DefaultImporter using
            config.import_names.
        registry: Fixers to use. Defaults to the built-in registry.
        config: Configuration supplying the defaults above.
        fset: FileSet of the files, used to render positions in errors.

    Raises:
        ConfigError: If max_tries is not positive.
        QuickFixError: If diagnostics remain that the last pass could not
            fix once the pass budget is spent.
    """
    config = config or QuickfixConfig()
    tries = config.max_tries if max_tries is None else max_tries
    if tries < 1:
        raise ConfigError("max_tries must be at least 1")

    checker = checker or ScopeChecker()
    importer = importer or DefaultImporter(config.import_names)
    registry = registry or get_global_registry()

    unhandled = ErrorList()
    for attempt in range(1, tries + 1):
        result = quick_fix_pass(files, checker, importer, registry, fset)
        logger.debug(
            "pass %d/%d: found_error=%s unhandled=%d",
            attempt,
            tries,
            result.found_error,
            len(result.unhandled),
        )
        if not result.found_error:
            logger.info("quick fix finished after %d pass(es)", attempt)
            return
        unhandled = result.unhandled

    if unhandled.any() is not None:
        logger.info("quick fix gave up after %d pass(es): %d unresolved", tries, len(unhandled))
        raise QuickFixError(unhandled, tries)

    logger.warning(
        "quick fix used all %d passes; the last pass fixed every diagnostic it saw", tries
    )
