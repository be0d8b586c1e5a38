"""Fixer framework for resolving fixable diagnostics.

Provides one fixer per recognized diagnostic shape plus the registry the
quick-fix driver dispatches through.
"""

from __future__ import annotations

from goquickfix.fixers.base import BaseFixer, FixableDiagnostic, FixResult, discard_assignment
from goquickfix.fixers.redundant_define import RedundantDefineFixer
from goquickfix.fixers.registry import FixerRegistry, get_global_registry
from goquickfix.fixers.unused_binding import UnusedBindingFixer
from goquickfix.fixers.unused_import import UnusedImportFixer

__all__ = [
    # Base types
    "BaseFixer",
    "FixableDiagnostic",
    "FixResult",
    "discard_assignment",
    # Registry
    "FixerRegistry",
    "get_global_registry",
    # Fixers
    "RedundantDefineFixer",
    "UnusedBindingFixer",
    "UnusedImportFixer",
]
