"""goquickfix: rewrite Go packages that are well typed but fail to build.

Fixes the errors the Go compiler refuses to build over even though the
program is otherwise correct:

    v declared but not used              -> append `_ = v`
    "p" imported but not used            -> rewrite to `import _ "p"`
    no new variables on left side of :=  -> rewrite `:=` to `=`

Example:
    >>> from goquickfix import quick_fix
    >>> from goquickfix.syntax import FileSet, parse_file, print_file
    >>> fset = FileSet()
    >>> f = parse_file(fset, "main.go", source)
    >>> quick_fix([f], fset=fset)
    >>> print(print_file(f, fset))
"""

from __future__ import annotations

from goquickfix.errors import ErrorList, QuickFixError
from goquickfix.quickfix import quick_fix
from goquickfix.revert import revert_quick_fix

__version__ = "0.1.0"

__all__ = [
    "ErrorList",
    "QuickFixError",
    "__version__",
    "quick_fix",
    "revert_quick_fix",
]
