"""Fixer registry for mapping diagnostic shapes to fixer classes.

The registry provides a central lookup mechanism for finding the fixer of
a classified diagnostic. Fixers register themselves by their fix_id, the
value of the Shape they handle.
"""

from __future__ import annotations

from goquickfix.fixers.base import BaseFixer, FixableDiagnostic, FixResult


class FixerRegistry:
    """Registry that maps fix_ids to fixer classes.

    Example:
        >>> registry = FixerRegistry()
        >>> registry.register(UnusedImportFixer)
        >>> fixer = registry.get_fixer("imported_not_used")
        >>> if fixer:
        ...     result = fixer.fix(issue)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._fixers: dict[str, type[BaseFixer]] = {}

    def register(self, fixer_class: type[BaseFixer]) -> None:
        """Register a fixer class by its fix_id.

        Args:
            fixer_class: A BaseFixer subclass to register.

        Raises:
            ValueError: If the fixer has no fix_id or if a fixer with
                the same fix_id is already registered.
        """
        fix_id = fixer_class.fix_id
        if not fix_id:
            raise ValueError(f"Fixer class {fixer_class.__name__} has no fix_id defined")
        if fix_id in self._fixers:
            raise ValueError(
                f"Fixer for fix_id '{fix_id}' already registered: "
                f"{self._fixers[fix_id].__name__}"
            )
        self._fixers[fix_id] = fixer_class

    def get_fixer(self, fix_id: str) -> BaseFixer | None:
        """Get an instantiated fixer for the given fix_id.

        Args:
            fix_id: The fix identifier to look up.

        Returns:
            An instantiated fixer if one is registered for the fix_id,
            None otherwise.
        """
        fixer_class = self._fixers.get(fix_id)
        if fixer_class is None:
            return None
        return fixer_class()

    def has_fixer(self, fix_id: str) -> bool:
        return fix_id in self._fixers

    def list_fix_ids(self) -> list[str]:
        """List all registered fix_ids, sorted."""
        return sorted(self._fixers.keys())

    def apply_fix(self, issue: FixableDiagnostic) -> FixResult:
        """Apply a fix for the given issue using the appropriate fixer.

        Args:
            issue: The fixable diagnostic to resolve.

        Returns:
            FixResult from the fixer, or a failure result if no fixer
            is registered for the issue's shape.
        """
        fixer = self.get_fixer(issue.shape.value)
        if fixer is None:
            return FixResult(
                success=False,
                message=f"No fixer registered for fix_id: {issue.shape.value}",
            )
        return fixer.fix(issue)


# Global registry instance - populated on first use
_global_registry: FixerRegistry | None = None


def get_global_registry() -> FixerRegistry:
    """Get the global fixer registry.

    Returns a singleton registry instance that is populated with all
    built-in fixers.

    Returns:
        The global FixerRegistry instance.
    """
    global _global_registry
    if _global_registry is None:
        _global_registry = _create_default_registry()
    return _global_registry


def _create_default_registry() -> FixerRegistry:
    # Import here to avoid circular imports
    from goquickfix.fixers.redundant_define import RedundantDefineFixer
    from goquickfix.fixers.unused_binding import UnusedBindingFixer
    from goquickfix.fixers.unused_import import UnusedImportFixer

    registry = FixerRegistry()
    registry.register(UnusedBindingFixer)
    registry.register(UnusedImportFixer)
    registry.register(RedundantDefineFixer)
    return registry
