"""Best-effort scope checker for Go packages.

ScopeChecker resolves every identifier of a package through the universe,
package, file and local block scopes and reports the binding problems the
Go type checker reports, with the same message text:

    x declared but not used
    "fmt" imported but not used
    "fmt" imported as f and not used
    no new variables on left side of :=
    undefined: x
    cannot use _ as value
    x redeclared in this block
    label L declared but not used
    use of package fmt without selector

It does not compute types. Field and method names after a selector are
never resolved, nor are bare identifier keys of composite literals (which
may name struct fields); a file with a dot import does not report
undefined names.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from goquickfix.checker.base import BaseChecker, CheckResult, Diagnostic, Importer
from goquickfix.checker.scopes import Object, ObjKind, Scope, new_universe
from goquickfix.syntax import nodes as n
from goquickfix.syntax.nodes import iter_children
from goquickfix.syntax.printer import print_node
from goquickfix.syntax.token import Token

logger = logging.getLogger(__name__)


def _unquote(literal: str) -> str:
    return literal[1:-1]


class ScopeChecker(BaseChecker):
    """Default diagnostic oracle: scope resolution without type inference."""

    name = "scope-checker"

    def check(self, files: Sequence[n.File], importer: Importer) -> CheckResult:
        run = _PackageCheck(importer)
        run.check(files)
        logger.debug(
            "%s: %d diagnostic(s) in %d file(s)", self.name, len(run.diagnostics), len(files)
        )
        return self._result(run.diagnostics)


class _PackageCheck:
    """State of one check over the files of a package."""

    def __init__(self, importer: Importer) -> None:
        self.importer = importer
        self.package = Scope(new_universe(), "package")
        self.diagnostics: list[Diagnostic] = []
        # Function-local variables and imports, reported when never used.
        self.locals: list[Object] = []
        self.imports: list[Object] = []
        self.labels: dict[str, Object] = {}
        # Set while checking a file with a dot import.
        self.lenient = False

    def report(self, pos: int, message: str) -> None:
        self.diagnostics.append(Diagnostic(message, pos))

    def check(self, files: Sequence[n.File]) -> None:
        for f in files:
            self.collect(f)
        for f in files:
            self.check_file(f)

        for obj in self.locals:
            if not obj.used:
                self.report(obj.pos, f"{obj.name} declared but not used")
        for obj in self.imports:
            if obj.used or obj.spec is None:
                continue
            path = obj.spec.path.value
            if obj.spec.name is None:
                self.report(obj.spec.pos, f"{path} imported but not used")
            else:
                self.report(obj.spec.pos, f"{path} imported as {obj.name} and not used")

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def collect(self, f: n.File) -> None:
        """Declare the package-level names of f."""
        for decl in f.decls:
            if isinstance(decl, n.FuncDecl):
                if decl.recv is None and decl.name.name != "init":
                    self.declare(decl.name, ObjKind.FUNC, self.package)
            elif isinstance(decl, n.GenDecl):
                for spec in decl.specs:
                    if isinstance(spec, n.ValueSpec):
                        kind = ObjKind.CONST if decl.tok is Token.CONST else ObjKind.VAR
                        for ident in spec.names:
                            self.declare(ident, kind, self.package)
                    elif isinstance(spec, n.TypeSpec):
                        self.declare(spec.name, ObjKind.TYPE, self.package)

    def declare(self, ident: n.Ident, kind: ObjKind, scope: Scope) -> Object | None:
        if ident.is_blank:
            return None
        obj = Object(ident.name, kind, ident.pos)
        if scope.insert(obj) is not None:
            self.report(ident.pos, f"{ident.name} redeclared in this block")
            return None
        return obj

    def declare_local(self, ident: n.Ident, scope: Scope) -> None:
        obj = self.declare(ident, ObjKind.VAR, scope)
        if obj is not None:
            self.locals.append(obj)

    def check_file(self, f: n.File) -> None:
        file_scope = Scope(self.package, "file")
        self.lenient = False
        for spec in f.imports:
            if spec.name is not None:
                if spec.name.name == ".":
                    self.lenient = True
                    continue
                if spec.name.is_blank:
                    continue
                name = spec.name.name
            else:
                name = self.importer.import_name(_unquote(spec.path.value))
                if not name:
                    continue
            obj = Object(name, ObjKind.PKG, spec.pos, spec=spec)
            if file_scope.insert(obj) is not None:
                self.report(spec.pos, f"{name} redeclared in this block")
            self.imports.append(obj)

        for decl in f.decls:
            if isinstance(decl, n.FuncDecl):
                scope = Scope(file_scope, "function")
                self.signature(decl.type, scope, decl.recv)
                if decl.body is not None:
                    self.function_body(decl.body, scope)
            elif isinstance(decl, n.GenDecl):
                for spec in decl.specs:
                    if isinstance(spec, n.ValueSpec):
                        self.expr(spec.type, file_scope)
                        for value in spec.values:
                            self.expr(value, file_scope)
                    elif isinstance(spec, n.TypeSpec):
                        self.expr(spec.type, file_scope)

    def signature(self, ft: n.FuncType, scope: Scope, recv: n.FieldList | None = None) -> None:
        """Resolve parameter types, then declare receiver, parameters and results."""
        lists = [fl for fl in (recv, ft.params, ft.results) if fl is not None]
        for fl in lists:
            for f in fl.fields:
                self.expr(f.type, scope)
        for fl in lists:
            for f in fl.fields:
                for ident in f.names:
                    if ident.is_blank:
                        continue
                    if scope.insert(Object(ident.name, ObjKind.VAR, ident.pos)) is not None:
                        self.report(ident.pos, f"duplicate argument {ident.name}")

    def function_body(self, body: n.BlockStmt, scope: Scope) -> None:
        # Parameters and the top-level statements of the body share one block.
        saved = self.labels
        self.labels = {}
        self.collect_labels(body)
        self.stmt_list(body.stmts, scope)
        for obj in self.labels.values():
            if not obj.used:
                self.report(obj.pos, f"label {obj.name} declared but not used")
        self.labels = saved

    def collect_labels(self, body: n.BlockStmt) -> None:
        stack = list(iter_children(body))
        while stack:
            node = stack.pop()
            if isinstance(node, n.FuncLit):
                continue
            if isinstance(node, n.LabeledStmt) and not node.label.is_blank:
                name = node.label.name
                if name in self.labels:
                    self.report(node.label.pos, f"label {name} already defined")
                else:
                    self.labels[name] = Object(name, ObjKind.LABEL, node.label.pos)
            stack.extend(iter_children(node))

    def local_decl(self, decl: n.GenDecl, scope: Scope) -> None:
        for spec in decl.specs:
            if isinstance(spec, n.ValueSpec):
                self.expr(spec.type, scope)
                for value in spec.values:
                    self.expr(value, scope)
                for ident in spec.names:
                    if decl.tok is Token.VAR:
                        self.declare_local(ident, scope)
                    else:
                        self.declare(ident, ObjKind.CONST, scope)
            elif isinstance(spec, n.TypeSpec):
                self.declare(spec.name, ObjKind.TYPE, scope)
                self.expr(spec.type, scope)

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def stmt_list(self, stmts: Sequence[n.Stmt], scope: Scope) -> None:
        for s in stmts:
            self.stmt(s, scope)

    def stmt(self, s: n.Stmt, scope: Scope) -> None:
        if isinstance(s, n.ExprStmt):
            self.expr(s.x, scope)
        elif isinstance(s, n.SendStmt):
            self.expr(s.chan, scope)
            self.expr(s.value, scope)
        elif isinstance(s, n.IncDecStmt):
            self.expr(s.x, scope)
        elif isinstance(s, n.AssignStmt):
            self.assign(s, scope)
        elif isinstance(s, (n.GoStmt, n.DeferStmt)):
            self.expr(s.call, scope)
        elif isinstance(s, n.ReturnStmt):
            for x in s.results:
                self.expr(x, scope)
        elif isinstance(s, n.BranchStmt):
            if s.label is not None:
                self.use_label(s.label)
        elif isinstance(s, n.BlockStmt):
            self.stmt_list(s.stmts, Scope(scope))
        elif isinstance(s, n.LabeledStmt):
            self.stmt(s.stmt, scope)
        elif isinstance(s, n.DeclStmt):
            self.local_decl(s.decl, scope)
        elif isinstance(s, n.IfStmt):
            inner = Scope(scope, "if")
            if s.init is not None:
                self.stmt(s.init, inner)
            self.expr(s.cond, inner)
            self.stmt_list(s.body.stmts, Scope(inner))
            if s.else_ is not None:
                self.stmt(s.else_, inner)
        elif isinstance(s, n.SwitchStmt):
            inner = Scope(scope, "switch")
            if s.init is not None:
                self.stmt(s.init, inner)
            self.expr(s.tag, inner)
            for clause in s.body.stmts:
                assert isinstance(clause, n.CaseClause)
                for x in clause.exprs or []:
                    self.expr(x, inner)
                self.stmt_list(clause.body, Scope(inner, "case"))
        elif isinstance(s, n.TypeSwitchStmt):
            self.type_switch(s, scope)
        elif isinstance(s, n.SelectStmt):
            for clause in s.body.stmts:
                assert isinstance(clause, n.CommClause)
                clause_scope = Scope(scope, "case")
                if clause.comm is not None:
                    self.stmt(clause.comm, clause_scope)
                self.stmt_list(clause.body, clause_scope)
        elif isinstance(s, n.ForStmt):
            inner = Scope(scope, "for")
            if s.init is not None:
                self.stmt(s.init, inner)
            self.expr(s.cond, inner)
            if s.post is not None:
                self.stmt(s.post, inner)
            if s.body is not None:
                self.stmt_list(s.body.stmts, Scope(inner))
        elif isinstance(s, n.RangeStmt):
            self.range_stmt(s, scope)
        elif not isinstance(s, n.EmptyStmt):
            raise TypeError(f"unexpected statement {type(s).__name__}")

    def assign(self, s: n.AssignStmt, scope: Scope) -> None:
        if s.tok is Token.DEFINE:
            for x in s.rhs:
                self.expr(x, scope)
            self.define(s.lhs, scope, s.tok_pos)
        elif s.tok is Token.ASSIGN:
            for x in s.rhs:
                self.expr(x, scope)
            for x in s.lhs:
                self.assign_target(x, scope)
        else:
            # x op= y reads x.
            for x in s.lhs:
                self.expr(x, scope)
            for x in s.rhs:
                self.expr(x, scope)

    def define(self, lhs: Sequence[n.Expr], scope: Scope, tok_pos: int) -> None:
        """Declare the new names on the left of `:=`; existing ones are assigned."""
        new = False
        for x in lhs:
            if not isinstance(x, n.Ident):
                self.report(x.pos, f"non-name {print_node(x)} on left side of :=")
                continue
            if x.is_blank or scope.lookup_local(x.name) is not None:
                continue
            self.declare_local(x, scope)
            new = True
        if not new:
            self.report(tok_pos, "no new variables on left side of :=")

    def assign_target(self, x: n.Expr, scope: Scope) -> None:
        # Assigning to a variable is not a use of it.
        if isinstance(x, n.ParenExpr):
            self.assign_target(x.x, scope)
        elif isinstance(x, n.Ident):
            if not x.is_blank and scope.lookup(x.name) is None and not self.lenient:
                self.report(x.pos, f"undefined: {x.name}")
        else:
            self.expr(x, scope)

    def range_stmt(self, s: n.RangeStmt, scope: Scope) -> None:
        self.expr(s.x, scope)
        inner = Scope(scope, "range")
        targets = [x for x in (s.key, s.value) if x is not None]
        if s.tok is Token.DEFINE:
            self.define(targets, inner, s.tok_pos)
        elif s.tok is Token.ASSIGN:
            for x in targets:
                self.assign_target(x, scope)
        if s.body is not None:
            self.stmt_list(s.body.stmts, Scope(inner))

    def type_switch(self, s: n.TypeSwitchStmt, scope: Scope) -> None:
        inner = Scope(scope, "switch")
        if s.init is not None:
            self.stmt(s.init, inner)

        # `v := x.(type)` declares v once per clause; it counts as used when
        # any clause reads it.
        symbol = None
        if isinstance(s.assign, n.AssignStmt):
            for x in s.assign.rhs:
                self.expr(x, inner)
            lhs = s.assign.lhs[0]
            if isinstance(lhs, n.Ident) and not lhs.is_blank:
                symbol = Object(lhs.name, ObjKind.VAR, lhs.pos)
                self.locals.append(symbol)
            else:
                self.report(s.assign.tok_pos, "no new variable on left side of :=")
        else:
            self.stmt(s.assign, inner)

        for clause in s.body.stmts:
            assert isinstance(clause, n.CaseClause)
            for x in clause.exprs or []:
                self.expr(x, inner)
            clause_scope = Scope(inner, "case")
            if symbol is not None:
                clause_scope.insert(symbol)
            self.stmt_list(clause.body, clause_scope)

    def use_label(self, ident: n.Ident) -> None:
        obj = self.labels.get(ident.name)
        if obj is None:
            self.report(ident.pos, f"label {ident.name} not defined")
        else:
            obj.used = True

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def expr(self, x: n.Expr | None, scope: Scope) -> None:
        if x is None or isinstance(x, n.BasicLit):
            return

        if isinstance(x, n.Ident):
            self.use(x, scope)
        elif isinstance(x, n.SelectorExpr):
            if isinstance(x.x, n.Ident) and not x.x.is_blank:
                self.resolve(x.x, scope)
            else:
                self.expr(x.x, scope)
        elif isinstance(x, n.CompositeLit):
            self.expr(x.type, scope)
            for elt in x.elts:
                if isinstance(elt, n.KeyValueExpr) and isinstance(elt.key, n.Ident):
                    # A field name or a map key variable.
                    obj = scope.lookup(elt.key.name)
                    if obj is not None:
                        obj.used = True
                    self.expr(elt.value, scope)
                else:
                    self.expr(elt, scope)
        elif isinstance(x, n.FuncLit):
            inner = Scope(scope, "function")
            self.signature(x.type, inner)
            self.function_body(x.body, inner)
        elif isinstance(x, n.FuncType):
            for fl in (x.params, x.results):
                if fl is not None:
                    for f in fl.fields:
                        self.expr(f.type, scope)
        elif isinstance(x, n.StructType):
            for f in x.fields.fields:
                self.expr(f.type, scope)
        elif isinstance(x, n.InterfaceType):
            for f in x.methods.fields:
                self.expr(f.type, scope)
        else:
            for child in iter_children(x):
                self.expr(child, scope)  # type: ignore[arg-type]

    def use(self, ident: n.Ident, scope: Scope) -> None:
        if ident.is_blank:
            self.report(ident.pos, "cannot use _ as value")
            return
        obj = self.resolve(ident, scope)
        if obj is not None and obj.kind is ObjKind.PKG:
            self.report(ident.pos, f"use of package {ident.name} without selector")

    def resolve(self, ident: n.Ident, scope: Scope) -> Object | None:
        obj = scope.lookup(ident.name)
        if obj is None:
            if not self.lenient:
                self.report(ident.pos, f"undefined: {ident.name}")
            return None
        obj.used = True
        return obj
