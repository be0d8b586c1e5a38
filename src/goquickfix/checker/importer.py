"""Import path to package name resolution.

Without a module cache to read package clauses from, the name a package
binds is assumed from its import path, the way goimports does it:

    github.com/pkg/errors         -> errors
    github.com/go-chi/chi/v5      -> chi
    github.com/mattn/go-sqlite3   -> sqlite3
    gopkg.in/yaml.v3              -> yaml

Paths whose package name differs from the assumed one (e.g. a repository
whose package clause reads `package foo` under `.../foo-go`) can be listed
in the `import_names` configuration.
"""

from __future__ import annotations

import posixpath


def _is_identifier_char(char: str) -> bool:
    return char == "_" or char.isalpha() or char.isdigit()


def assumed_package_name(path: str) -> str:
    """Guess the package name bound by importing path.

    Args:
        path: Unquoted import path.

    Returns:
        The assumed package name (possibly empty for odd paths).
    """
    base = posixpath.basename(path)
    if base.startswith("v") and base[1:].isdigit():
        parent = posixpath.dirname(path)
        if parent:
            base = posixpath.basename(parent)
    base = base.removeprefix("go-")
    for index, char in enumerate(base):
        if not _is_identifier_char(char):
            return base[:index]
    return base


class DefaultImporter:
    """Importer that assumes package names from import paths.

    Example:
        >>> importer = DefaultImporter({"example.com/lib-go": "lib"})
        >>> importer.import_name("example.com/lib-go")
        'lib'
        >>> importer.import_name("gopkg.in/yaml.v3")
        'yaml'
    """

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        """Initialize importer.

        Args:
            overrides: Explicit path -> package name mapping, consulted
                before the path heuristic.
        """
        self.overrides = dict(overrides or {})

    def import_name(self, path: str) -> str:
        if path in self.overrides:
            return self.overrides[path]
        return assumed_package_name(path)
