"""Diagnostic oracles that type-check a compilation scope.

Provides the pluggable checker interface and the default ScopeChecker.
"""

from __future__ import annotations

from goquickfix.checker.base import BaseChecker, CheckResult, Diagnostic, Importer
from goquickfix.checker.importer import DefaultImporter, assumed_package_name
from goquickfix.checker.typecheck import ScopeChecker

__all__ = [
    # Base types
    "BaseChecker",
    "CheckResult",
    "Diagnostic",
    "Importer",
    # Implementations
    "DefaultImporter",
    "ScopeChecker",
    "assumed_package_name",
]
