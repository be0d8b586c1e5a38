"""Recognition of fixable diagnostic shapes.

Diagnostics only carry rendered text, so recognizing them means matching
messages. The message patterns live here and nowhere else: the rest of the
package works with the closed Shape enumeration and the parameters
extracted for it, so an oracle emitting structured codes could replace the
patterns without touching the fixers.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from goquickfix.checker.base import Diagnostic


class Shape(str, Enum):
    """Diagnostic shapes with a known fix."""

    DECLARED_NOT_USED = "declared_not_used"
    IMPORTED_NOT_USED = "imported_not_used"
    NO_NEW_VARIABLES = "no_new_variables"


@dataclass(frozen=True)
class ClassifiedDiagnostic:
    """A diagnostic recognized as one of the fixable shapes.

    Attributes:
        diagnostic: The original diagnostic, reported again if the fix fails.
        shape: The recognized shape.
        params: Extracted parameters: "name" for DECLARED_NOT_USED, "path"
            (quotes included) for IMPORTED_NOT_USED, nothing otherwise.
    """

    diagnostic: Diagnostic
    shape: Shape
    params: dict[str, str] = field(default_factory=dict)

    @property
    def pos(self) -> int:
        return self.diagnostic.pos


Extractor = Callable[[str], "dict[str, str] | None"]

_DECLARED_NOT_USED = re.compile(r"^([a-zA-Z0-9_]+) declared but not used$")
_IMPORTED_NOT_USED = re.compile(r'^(".+") imported but not used$')
_NO_NEW_VARIABLES = "no new variables on left side of :="


def _declared_not_used(message: str) -> dict[str, str] | None:
    match = _DECLARED_NOT_USED.match(message)
    if match is None:
        return None
    return {"name": match.group(1)}


def _imported_not_used(message: str) -> dict[str, str] | None:
    match = _IMPORTED_NOT_USED.match(message)
    if match is None:
        return None
    return {"path": match.group(1)}


def _no_new_variables(message: str) -> dict[str, str] | None:
    if message != _NO_NEW_VARIABLES:
        return None
    return {}


EXTRACTORS: dict[Shape, Extractor] = {
    Shape.DECLARED_NOT_USED: _declared_not_used,
    Shape.IMPORTED_NOT_USED: _imported_not_used,
    Shape.NO_NEW_VARIABLES: _no_new_variables,
}


def classify(diagnostic: Diagnostic) -> ClassifiedDiagnostic | None:
    """Match a diagnostic against the known shapes.

    Args:
        diagnostic: Diagnostic reported by the oracle.

    Returns:
        The classified diagnostic, or None when the message has no known
        fix.

    Example:
        >>> classify(Diagnostic("x declared but not used", 10)).params
        {'name': 'x'}
    """
    for shape, extract in EXTRACTORS.items():
        params = extract(diagnostic.message)
        if params is not None:
            return ClassifiedDiagnostic(diagnostic, shape, params)
    return None
