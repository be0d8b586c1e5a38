"""Base classes for quick-fix appliers.

Provides the core abstractions for fixers that resolve one classified
diagnostic by mutating the syntax tree in place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from goquickfix.checker.base import Diagnostic
from goquickfix.classifier import ClassifiedDiagnostic, Shape
from goquickfix.syntax import nodes as n
from goquickfix.syntax.token import Token


@dataclass
class FixableDiagnostic:
    """A classified diagnostic together with the place it points at.

    Attributes:
        classified: The classified diagnostic.
        file: The file owning the diagnostic's position.
        chain: Nodes enclosing the position, innermost first, ending with
            file. Computed before any fix of the same pass is applied.
    """

    classified: ClassifiedDiagnostic
    file: n.File
    chain: list[n.Node] = field(default_factory=list)

    @property
    def shape(self) -> Shape:
        return self.classified.shape

    @property
    def diagnostic(self) -> Diagnostic:
        return self.classified.diagnostic

    @property
    def params(self) -> dict[str, str]:
        return self.classified.params


@dataclass
class FixResult:
    """Result of a fixer execution.

    Attributes:
        success: Whether the fix was applied.
        message: Human-readable description of what happened.
        files_modified: Names of the files whose trees were changed.
    """

    success: bool
    message: str
    files_modified: list[str] = field(default_factory=list)


class BaseFixer(ABC):
    """Abstract base class for all fixers.

    Each fixer handles exactly one diagnostic shape and applies its edit
    directly to the tree it finds through the issue's enclosing-node chain.
    """

    # The Shape value this fixer handles (must be set by subclasses)
    fix_id: str = ""

    @abstractmethod
    def fix(self, issue: FixableDiagnostic) -> FixResult:
        """Apply a fix for the given issue.

        Must be implemented by subclasses. A fixer that cannot find the
        node it needs returns a failed FixResult instead of raising.

        Args:
            issue: The fixable diagnostic to resolve.

        Returns:
            FixResult describing the outcome.
        """

    def can_fix(self, issue: FixableDiagnostic) -> bool:
        """Check if this fixer can handle the given issue.

        Default implementation checks if the issue's shape matches this
        fixer's fix_id.

        Args:
            issue: The issue to check.

        Returns:
            True if this fixer can handle the issue.
        """
        return issue.shape.value == self.fix_id

    def _applied(self, issue: FixableDiagnostic, message: str) -> FixResult:
        return FixResult(success=True, message=message, files_modified=[issue.file.name])


def discard_assignment(name: str) -> n.AssignStmt:
    """Build the synthesized statement `_ = name`."""
    return n.AssignStmt([n.Ident("_")], Token.ASSIGN, [n.Ident(name)])
