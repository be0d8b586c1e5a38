"""Pretty-printer turning a syntax tree back into Go source.

Output follows gofmt conventions: tab indentation, gofmt's spacing of
binary expressions, at most one preserved blank line between statements
and declarations, and space-aligned columns in grouped declarations,
struct fields and keyed composite literals.

Comments are emitted before the first statement, declaration or spec
that follows them; a comment on the same source line as the preceding
node stays on that line. Comments between the lines of struct and
interface bodies, grouped declarations, and multi-line argument and
element lists stay in place; comments anywhere else inside an expression
move after the enclosing statement.

Nodes synthesized by rewrites carry no position and are printed on their
own line without any blank-line or comment bookkeeping.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from goquickfix.syntax import nodes as n
from goquickfix.syntax.token import NO_POS, FileSet, Token

_UNARY_PREC = 6
_HIGHEST_PREC = 7


# -----------------------------------------------------------------------------
# gofmt binary expression spacing
# -----------------------------------------------------------------------------


def _walk_binary(e: n.BinaryExpr) -> tuple[bool, bool, int]:
    has4 = has5 = False
    max_problem = 0
    prec = e.op.precedence
    if prec == 4:
        has4 = True
    elif prec == 5:
        has5 = True

    left = e.x
    if isinstance(left, n.BinaryExpr) and left.op.precedence >= prec:
        h4, h5, mp = _walk_binary(left)
        has4, has5, max_problem = has4 or h4, has5 or h5, max(max_problem, mp)

    right = e.y
    if isinstance(right, n.BinaryExpr):
        if right.op.precedence > prec:
            h4, h5, mp = _walk_binary(right)
            has4, has5, max_problem = has4 or h4, has5 or h5, max(max_problem, mp)
    elif isinstance(right, n.StarExpr):
        if e.op is Token.QUO:
            max_problem = 5
    elif isinstance(right, n.UnaryExpr):
        pair = e.op.value + right.op.value
        if pair in ("/*", "&&", "&^"):
            max_problem = 5
        elif pair in ("++", "--"):
            max_problem = max(max_problem, 4)

    return has4, has5, max_problem


def _cutoff(e: n.BinaryExpr, depth: int) -> int:
    has4, has5, max_problem = _walk_binary(e)
    if max_problem > 0:
        return max_problem + 1
    if has4 and has5:
        return 5 if depth == 1 else 4
    return 6 if depth == 1 else 4


def _diff_prec(x: n.Expr, prec: int) -> int:
    if not isinstance(x, n.BinaryExpr) or x.op.precedence != prec:
        return 1
    return 0


def _reduce_depth(depth: int) -> int:
    return max(depth - 1, 1)


def _span(node: n.Node) -> tuple[int, int]:
    return node.pos, node.end


def _align(rows: Sequence[Sequence[str]]) -> list[str]:
    """Pad cells so that columns line up, tabwriter style.

    A cell only widens its column when it is followed by another cell in
    the same row.
    """
    widths: dict[int, int] = {}
    for row in rows:
        for index, cell in enumerate(row[:-1]):
            widths[index] = max(widths.get(index, 0), len(cell))
    lines = []
    for row in rows:
        parts = [cell.ljust(widths[index]) for index, cell in enumerate(row[:-1])]
        parts.extend(row[-1:])
        lines.append(" ".join(parts).rstrip())
    return lines


class Printer:
    """Renders one file; create a fresh instance per file."""

    def __init__(self, file: n.File, fset: FileSet | None = None) -> None:
        self.file = file
        self.fset = fset
        self.indent = 0
        self.out: list[str] = []
        self.comments = sorted(file.comments, key=lambda c: c.pos)
        self.next_comment = 0
        self.last_line = 0

    # -------------------------------------------------------------------------
    # Output and position bookkeeping
    # -------------------------------------------------------------------------

    def line_of(self, pos: int) -> int:
        if self.fset is None or pos == NO_POS:
            return 0
        return self.fset.position(pos).line

    def emit(self, text: str) -> None:
        self.out.append("\t" * self.indent + text if text else "")

    def blank_line(self) -> None:
        if self.out and self.out[-1] != "":
            self.out.append("")

    def advance(self, pos: int, force_blank: bool = False) -> None:
        """Flush comments that precede pos and reproduce a blank line.

        Args:
            pos: Position of the node about to be printed.
            force_blank: Always separate the node with a blank line.
        """
        if pos == NO_POS:
            return

        pending = []
        while self.next_comment < len(self.comments) and self.comments[self.next_comment].pos < pos:
            pending.append(self.comments[self.next_comment])
            self.next_comment += 1

        first = pending[0].pos if pending else pos
        first_line = self.line_of(first)
        if force_blank or (self.last_line and first_line - self.last_line > 1):
            self.blank_line()

        for comment in pending:
            line = self.line_of(comment.pos)
            if self.out and self.out[-1] and self.last_line and line == self.last_line:
                self.out[-1] += " " + comment.text
            else:
                if self.last_line and line - self.last_line > 1:
                    self.blank_line()
                self.emit(comment.text)
            self.last_line = self.line_of(comment.end) or self.last_line

        if pending and self.last_line and self.line_of(pos) - self.last_line > 1:
            self.blank_line()

    def finish(self, end: int) -> None:
        line = self.line_of(end)
        if line:
            self.last_line = line

    def capture(self, render: Callable[[], None]) -> list[str]:
        saved = self.out
        self.out = []
        try:
            render()
            return self.out
        finally:
            self.out = saved

    # -------------------------------------------------------------------------
    # File and declarations
    # -------------------------------------------------------------------------

    def print_file(self) -> str:
        f = self.file
        self.advance(f.package.pos)
        self.emit(f"package {f.package.name}")
        self.finish(f.package.end)

        prev_tok: Token | None = None
        for decl in f.decls:
            tok = decl.tok if isinstance(decl, n.GenDecl) else Token.FUNC
            if decl.has_pos:
                self.advance(decl.pos, force_blank=prev_tok is None or tok is not prev_tok)
            else:
                self.blank_line()
            self.decl(decl)
            self.finish(decl.end)
            prev_tok = tok

        for comment in self.comments[self.next_comment :]:
            line = self.line_of(comment.pos)
            if self.out and self.out[-1] and line and line == self.last_line:
                self.out[-1] += " " + comment.text
            else:
                if not self.last_line or line - self.last_line > 1:
                    self.blank_line()
                self.emit(comment.text)
            self.last_line = self.line_of(comment.end)
        self.next_comment = len(self.comments)

        return "\n".join(self.out) + "\n"

    def decl(self, decl: n.Decl) -> None:
        if isinstance(decl, n.FuncDecl):
            self.func_decl(decl)
        elif isinstance(decl, n.GenDecl):
            self.gen_decl(decl)
        else:
            raise TypeError(f"unexpected declaration {type(decl).__name__}")

    def func_decl(self, decl: n.FuncDecl) -> None:
        head = "func "
        if decl.recv is not None:
            head += f"({self.params(decl.recv)}) "
        head += decl.name.name + self.signature(decl.type)
        if decl.body is None:
            self.emit(head)
            return
        self.block(decl.body, head + " ")

    def gen_decl(self, decl: n.GenDecl) -> None:
        keyword = decl.tok.value
        keep_type = any(isinstance(s, n.ValueSpec) and s.type is not None for s in decl.specs)
        if not decl.grouped:
            cells = self.spec_row(decl.specs[0], keep_type)
            self.emit(f"{keyword} " + " ".join(cell for cell in cells if cell))
            return

        self.emit(f"{keyword} (")
        self.finish(decl.pos)
        self.indent += 1
        lines = self.layout(
            decl.specs,
            lambda spec: self.spec_row(spec, keep_type),
            self.last_line,
            decl.end - 1,
        )
        for line in lines:
            self.emit(line)
        self.indent -= 1
        self.emit(")")

    def spec_row(self, spec: n.Spec, keep_type: bool) -> list[str]:
        if isinstance(spec, n.ImportSpec):
            if spec.name is not None:
                return [f"{spec.name.name} {spec.path.value}"]
            return [spec.path.value]
        if isinstance(spec, n.ValueSpec):
            row = [", ".join(ident.name for ident in spec.names)]
            if keep_type:
                row.append(self.expr(spec.type) if spec.type is not None else "")
            if spec.values:
                row.append("= " + self.expr_list(spec.values))
            while len(row) > 1 and not row[-1]:
                row.pop()
            return row
        if isinstance(spec, n.TypeSpec):
            assign = "= " if spec.is_alias else ""
            return [f"{spec.name.name} {assign}{self.expr(spec.type)}"]
        raise TypeError(f"unexpected spec {type(spec).__name__}")

    def layout(
        self,
        items: Sequence[Any],
        render: Callable[[Any], list[str]],
        start_line: int,
        end_pos: int,
        span: Callable[[Any], tuple[int, int]] = _span,
    ) -> list[str]:
        """Lay out items one per line, interleaved with their comments.

        Comments are taken from the queue before each item is rendered so
        that nested layouts only ever see their own comments. Runs of
        single-line rows not interrupted by a blank line or a comment line
        are aligned into columns.

        Args:
            items: Specs, fields or element groups, in source order.
            render: Renders one item into its column cells.
            start_line: Source line of the opening delimiter.
            end_pos: Position of the closing delimiter.
            span: Returns the (pos, end) range of an item.

        Returns:
            Output lines without indentation; "" stands for a blank line.
        """
        entries: list[tuple[bool, list[str]]] = []
        prev_line = start_line
        for item in items:
            pos, end = span(item)
            prev_line = self.take_comments(entries, pos, prev_line)
            if entries and prev_line and self.line_of(pos) - prev_line > 1:
                entries.append((False, [""]))
            entries.append((True, render(item)))
            prev_line = self.line_of(end) or prev_line
        self.take_comments(entries, end_pos, prev_line)

        lines: list[str] = []
        run: list[list[str]] = []
        for aligned, cells in entries:
            if aligned and not any("\n" in cell for cell in cells):
                run.append(cells)
                continue
            lines.extend(_align(run))
            run = []
            lines.append(" ".join(cell for cell in cells if cell) if aligned else cells[0])
        lines.extend(_align(run))
        return lines

    def take_comments(self, entries: list[tuple[bool, list[str]]], pos: int, prev_line: int) -> int:
        """Move queued comments before pos into entries; returns the new last line."""
        if pos <= NO_POS:
            return prev_line
        while self.next_comment < len(self.comments) and self.comments[self.next_comment].pos < pos:
            comment = self.comments[self.next_comment]
            self.next_comment += 1
            line = self.line_of(comment.pos)
            if entries and line and line == prev_line and entries[-1][1][-1]:
                entries[-1][1][-1] += " " + comment.text
            else:
                if entries and prev_line and line - prev_line > 1:
                    entries.append((False, [""]))
                entries.append((False, [comment.text]))
            prev_line = self.line_of(comment.end) or prev_line
        return prev_line

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def block(self, block: n.BlockStmt, head: str = "") -> None:
        """Print head followed by the braced block."""
        if not block.stmts and self.single_line(block):
            self.emit(head + "{}")
            self.finish(block.end)
            return
        self.emit(head + "{")
        self.finish(block.pos)
        self.indent += 1
        self.stmt_list(block.stmts)
        if block.has_pos:
            self.advance(block.end - 1)
        self.indent -= 1
        self.emit("}")
        self.finish(block.end)

    def single_line(self, block: n.BlockStmt) -> bool:
        """True for an empty block written on one line (or synthesized)."""
        if not block.has_pos:
            return True
        if self.next_comment < len(self.comments) and self.comments[self.next_comment].pos < block.end:
            return False
        return self.line_of(block.pos) == self.line_of(block.end - 1)

    def stmt_list(self, stmts: Sequence[n.Stmt]) -> None:
        for stmt in stmts:
            if isinstance(stmt, n.EmptyStmt):
                continue
            self.advance(stmt.pos)
            self.stmt(stmt)
            self.finish(stmt.end)

    def stmt(self, s: n.Stmt) -> None:
        if isinstance(s, n.BlockStmt):
            self.block(s)
        elif isinstance(s, n.LabeledStmt):
            self.indent -= 1
            self.emit(f"{s.label.name}:")
            self.indent += 1
            self.finish(s.label.end)
            if not isinstance(s.stmt, n.EmptyStmt):
                self.advance(s.stmt.pos)
                self.stmt(s.stmt)
        elif isinstance(s, n.DeclStmt):
            self.gen_decl(s.decl)
        elif isinstance(s, n.IfStmt):
            self.if_stmt(s, "")
        elif isinstance(s, n.SwitchStmt):
            head = "switch "
            if s.init is not None:
                head += self.simple_stmt(s.init) + "; "
            if s.tag is not None:
                head += self.expr(s.tag) + " "
            self.clauses(s.body, head)
        elif isinstance(s, n.TypeSwitchStmt):
            head = "switch "
            if s.init is not None:
                head += self.simple_stmt(s.init) + "; "
            self.clauses(s.body, head + self.simple_stmt(s.assign) + " ")
        elif isinstance(s, n.SelectStmt):
            self.clauses(s.body, "select ")
        elif isinstance(s, n.ForStmt):
            self.for_stmt(s)
        elif isinstance(s, n.RangeStmt):
            head = "for "
            if s.key is not None:
                head += self.expr(s.key)
                if s.value is not None:
                    head += ", " + self.expr(s.value)
                head += f" {s.tok.value if s.tok else ':='} "
            head += "range " + self.expr(s.x) + " "
            self.block(s.body or n.BlockStmt(), head)
        elif isinstance(s, (n.CaseClause, n.CommClause)):
            raise TypeError(f"{type(s).__name__} outside of switch or select")
        else:
            self.emit(self.simple_stmt(s))

    def simple_stmt(self, s: n.Stmt) -> str:
        if isinstance(s, n.ExprStmt):
            return self.expr(s.x)
        if isinstance(s, n.AssignStmt):
            depth = 2 if len(s.lhs) > 1 and len(s.rhs) > 1 else 1
            lhs = self.expr_list(s.lhs, depth)
            rhs = self.expr_list(s.rhs, depth)
            return f"{lhs} {s.tok.value} {rhs}"
        if isinstance(s, n.IncDecStmt):
            return self.expr(s.x, _HIGHEST_PREC) + s.tok.value
        if isinstance(s, n.SendStmt):
            return f"{self.expr(s.chan)} <- {self.expr(s.value)}"
        if isinstance(s, n.GoStmt):
            return "go " + self.expr(s.call)
        if isinstance(s, n.DeferStmt):
            return "defer " + self.expr(s.call)
        if isinstance(s, n.ReturnStmt):
            if not s.results:
                return "return"
            return "return " + self.expr_list(s.results)
        if isinstance(s, n.BranchStmt):
            if s.label is not None:
                return f"{s.tok.value} {s.label.name}"
            return s.tok.value
        if isinstance(s, n.EmptyStmt):
            return ""
        raise TypeError(f"unexpected statement {type(s).__name__}")

    def if_stmt(self, s: n.IfStmt, prefix: str) -> None:
        head = prefix + "if "
        if s.init is not None:
            head += self.simple_stmt(s.init) + "; "
        head += self.expr(s.cond) + " "
        self.block(s.body, head)
        if s.else_ is None:
            return
        closing = self.out.pop()
        if closing.endswith("{}"):
            self.out.append(closing[:-1])
            closing = "}"
        if isinstance(s.else_, n.IfStmt):
            self.if_stmt(s.else_, closing.strip() + " else ")
        elif isinstance(s.else_, n.BlockStmt):
            self.block(s.else_, closing.strip() + " else ")
        else:
            raise TypeError(f"unexpected else branch {type(s.else_).__name__}")

    def for_stmt(self, s: n.ForStmt) -> None:
        head = "for "
        if s.init is not None or s.post is not None:
            init = self.simple_stmt(s.init) if s.init is not None else ""
            cond = self.expr(s.cond) if s.cond is not None else ""
            post = self.simple_stmt(s.post) if s.post is not None else ""
            head += f"{init}; {cond}; {post}".rstrip() + " "
        elif s.cond is not None:
            head += self.expr(s.cond) + " "
        self.block(s.body or n.BlockStmt(), head)

    def clauses(self, body: n.BlockStmt, head: str) -> None:
        self.emit(head + "{")
        self.finish(body.pos)
        for clause in body.stmts:
            self.advance(clause.pos)
            if isinstance(clause, n.CaseClause):
                if clause.exprs is None:
                    self.emit("default:")
                else:
                    self.emit("case " + self.expr_list(clause.exprs) + ":")
            elif isinstance(clause, n.CommClause):
                if clause.comm is None:
                    self.emit("default:")
                else:
                    self.emit("case " + self.simple_stmt(clause.comm) + ":")
            else:
                raise TypeError(f"unexpected clause {type(clause).__name__}")
            self.finish(clause.colon or clause.pos)
            self.indent += 1
            self.stmt_list(clause.body)
            self.indent -= 1
        if body.has_pos:
            self.advance(body.end - 1)
        self.emit("}")
        self.finish(body.end)

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def expr_list(self, exprs: Sequence[n.Expr], depth: int = 1) -> str:
        return ", ".join(self.expr(x, 0, depth) for x in exprs)

    def expr(self, x: n.Expr | None, prec1: int = 0, depth: int = 1) -> str:
        if x is None:
            return ""

        if isinstance(x, n.Ident):
            return x.name
        if isinstance(x, n.BasicLit):
            return x.value

        if isinstance(x, n.BinaryExpr):
            return self.binary(x, prec1, _cutoff(x, depth), depth)

        if isinstance(x, n.UnaryExpr):
            if _UNARY_PREC < prec1:
                return "(" + self.expr(x, 0, _reduce_depth(depth)) + ")"
            operand = self.expr(x.x, _UNARY_PREC, depth)
            if isinstance(x.x, n.UnaryExpr) and x.x.op is x.op and x.op in (Token.ADD, Token.SUB):
                return f"{x.op.value} {operand}"
            return x.op.value + operand

        if isinstance(x, n.StarExpr):
            if _UNARY_PREC < prec1:
                return "(" + self.expr(x, 0, _reduce_depth(depth)) + ")"
            return "*" + self.expr(x.x, _UNARY_PREC, depth)

        if isinstance(x, n.ParenExpr):
            if isinstance(x.x, n.ParenExpr):
                return self.expr(x.x, 0, depth)
            return "(" + self.expr(x.x, 0, _reduce_depth(depth)) + ")"

        if isinstance(x, n.SelectorExpr):
            return self.expr(x.x, _HIGHEST_PREC, depth) + "." + x.sel.name

        if isinstance(x, n.TypeAssertExpr):
            typ = "type" if x.type is None else self.expr(x.type)
            return f"{self.expr(x.x, _HIGHEST_PREC, depth)}.({typ})"

        if isinstance(x, n.IndexExpr):
            return f"{self.expr(x.x, _HIGHEST_PREC, 1)}[{self.expr(x.index, 0, depth + 1)}]"

        if isinstance(x, n.SliceExpr):
            return self.expr(x.x, _HIGHEST_PREC, 1) + "[" + self.slice_indices(x, depth) + "]"

        if isinstance(x, n.CallExpr):
            call_depth = depth + 1 if len(x.args) > 1 else depth
            fun = self.expr(x.fun, _HIGHEST_PREC, call_depth)
            if isinstance(x.fun, n.FuncType):
                fun = "(" + fun + ")"
            args = self.bracketed(
                x.args, call_depth, x.fun.end, x.end - 1, "(", ")", ellipsis=x.has_ellipsis
            )
            return fun + args

        if isinstance(x, n.CompositeLit):
            typ = self.expr(x.type, _HIGHEST_PREC, depth) if x.type is not None else ""
            open_pos = x.type.end if x.type is not None else x.pos
            return typ + self.bracketed(x.elts, 1, open_pos, x.end - 1, "{", "}", align_keys=True)

        if isinstance(x, n.KeyValueExpr):
            return f"{self.expr(x.key, 0, depth)}: {self.expr(x.value, 0, depth)}"

        if isinstance(x, n.FuncLit):
            head = "func" + self.signature(x.type) + " "
            lines = self.capture(lambda: self.block(x.body, head))
            return "\n".join(lines).lstrip("\t")

        if isinstance(x, n.EllipsisExpr):
            return "..." + self.expr(x.elt)

        return self.type_expr(x)

    def binary(self, x: n.BinaryExpr, prec1: int, cutoff: int, depth: int) -> str:
        prec = x.op.precedence
        if prec < prec1:
            return "(" + self.expr(x, 0, _reduce_depth(depth)) + ")"
        sep = " " if prec < cutoff else ""
        left = self.expr_with_cutoff(x.x, prec, depth + _diff_prec(x.x, prec), cutoff)
        right = self.expr_with_cutoff(x.y, prec + 1, depth + 1, cutoff)
        return f"{left}{sep}{x.op.value}{sep}{right}"

    def expr_with_cutoff(self, x: n.Expr, prec1: int, depth: int, cutoff: int) -> str:
        # Nested binary operands share the cutoff computed for the whole expression.
        if isinstance(x, n.BinaryExpr):
            return self.binary(x, prec1, cutoff, depth)
        return self.expr(x, prec1, depth)

    def slice_indices(self, x: n.SliceExpr, depth: int) -> str:
        indices = [x.low, x.high]
        if x.slice3:
            indices.append(x.max)
        blanks = False
        if depth <= 1:
            present = [i for i in indices if i is not None]
            blanks = len(present) > 1 and any(isinstance(i, n.BinaryExpr) for i in present)
        text = ""
        for index, item in enumerate(indices):
            if index > 0:
                if indices[index - 1] is not None and blanks:
                    text += " "
                text += ":"
                if item is not None and blanks:
                    text += " "
            if item is not None:
                text += self.expr(item, 0, depth + 1)
        return text

    def bracketed(
        self,
        exprs: Sequence[n.Expr],
        depth: int,
        open_pos: int,
        close_pos: int,
        opening: str,
        closing: str,
        align_keys: bool = False,
        ellipsis: bool = False,
    ) -> str:
        """Render a bracketed expression list, keeping its source line breaks.

        ellipsis marks the last element as a spread argument (`xs...`).
        """
        if not exprs:
            return opening + closing
        spread = "..." if ellipsis else ""

        open_line = self.line_of(open_pos)
        close_line = self.line_of(close_pos)
        lines = [self.line_of(x.pos) for x in exprs]
        last_line = self.line_of(exprs[-1].end)
        if not open_line or (all(line == open_line for line in lines) and close_line == last_line):
            return opening + self.expr_list(exprs, depth) + spread + closing

        # Group elements by source line.
        groups: list[list[n.Expr]] = []
        group_lines: list[int] = []
        for x, line in zip(exprs, lines):
            if groups and line == group_lines[-1]:
                groups[-1].append(x)
            else:
                groups.append([x])
                group_lines.append(line)

        trailing = close_line > last_line
        last_index = len(groups) - 1

        def render(item: tuple[int, list[n.Expr]]) -> list[str]:
            index, group = item
            suffix = "," if (index < last_index or trailing) else ""
            if index == last_index:
                suffix = spread + suffix
            if align_keys and len(group) == 1 and isinstance(group[0], n.KeyValueExpr):
                kv = group[0]
                return [self.expr(kv.key, 0, depth) + ":", self.expr(kv.value, 0, depth) + suffix]
            return [", ".join(self.expr(x, 0, depth) for x in group) + suffix]

        items = list(enumerate(groups))
        first = ""
        start_line = open_line
        self.indent += 1
        if group_lines[0] == open_line:
            first = " ".join(render(items.pop(0)))
            start_line = self.line_of(groups[0][-1].end)
        body = self.layout(
            items,
            render,
            start_line,
            close_pos,
            span=lambda item: (item[1][0].pos, item[1][-1].end),
        )
        self.indent -= 1

        inner = "\n" + "\t" * (self.indent + 1)
        result = opening + first + "".join(inner + line if line else "\n" for line in body)
        if trailing:
            result += "\n" + "\t" * self.indent
        return result + closing

    # -------------------------------------------------------------------------
    # Types and signatures
    # -------------------------------------------------------------------------

    def type_expr(self, x: n.Expr) -> str:
        if isinstance(x, n.ArrayType):
            length = self.expr(x.len) if x.len is not None else ""
            return f"[{length}]{self.expr(x.elt)}"
        if isinstance(x, n.MapType):
            return f"map[{self.expr(x.key)}]{self.expr(x.value)}"
        if isinstance(x, n.ChanType):
            if x.dir is n.ChanDir.SEND:
                return f"chan<- {self.expr(x.value)}"
            if x.dir is n.ChanDir.RECV:
                return f"<-chan {self.expr(x.value)}"
            return f"chan {self.expr(x.value)}"
        if isinstance(x, n.FuncType):
            return "func" + self.signature(x)
        if isinstance(x, n.StructType):
            return self.field_block("struct", x.fields, self.struct_row)
        if isinstance(x, n.InterfaceType):
            return self.field_block("interface", x.methods, self.interface_row)
        raise TypeError(f"unexpected expression {type(x).__name__}")

    def field_block(
        self,
        keyword: str,
        fields: n.FieldList,
        make_row: Callable[[n.Field], list[str]],
    ) -> str:
        if not fields.fields:
            return keyword + "{}"
        self.indent += 1
        lines = self.layout(fields.fields, make_row, self.line_of(fields.pos), fields.end - 1)
        self.indent -= 1
        inner = "\t" * (self.indent + 1)
        body = "".join(f"\n{inner}{line}" if line else "\n" for line in lines)
        outer = "\t" * self.indent
        return f"{keyword} {{{body}\n{outer}}}"

    def struct_row(self, f: n.Field) -> list[str]:
        row = []
        if f.names:
            row.append(", ".join(ident.name for ident in f.names))
        row.append(self.expr(f.type))
        if f.tag is not None:
            row.append(f.tag.value)
        return row

    def interface_row(self, f: n.Field) -> list[str]:
        if f.names and isinstance(f.type, n.FuncType):
            return [f.names[0].name + self.signature(f.type)]
        return [self.expr(f.type)]

    def signature(self, ft: n.FuncType) -> str:
        text = f"({self.params(ft.params)})"
        results = ft.results
        if results is None or not results.fields:
            return text
        if len(results.fields) == 1 and not results.fields[0].names:
            return text + " " + self.expr(results.fields[0].type)
        return text + f" ({self.params(results)})"

    def params(self, fields: n.FieldList) -> str:
        parts = []
        for f in fields.fields:
            typ = self.expr(f.type)
            if f.names:
                parts.append(", ".join(ident.name for ident in f.names) + " " + typ)
            else:
                parts.append(typ)
        return ", ".join(parts)


def print_file(file: n.File, fset: FileSet | None = None) -> str:
    """Render file as Go source.

    Args:
        file: The file to print.
        fset: FileSet the file was parsed with. Without it, source line
            breaks and blank lines cannot be reproduced.

    Returns:
        Source text terminated by a newline.
    """
    return Printer(file, fset).print_file()


def print_node(node: n.Node) -> str:
    """Render a single statement, declaration or expression (no comments)."""
    file = n.File("", n.Ident("_"))
    printer = Printer(file)
    if isinstance(node, n.Expr):
        return printer.expr(node)
    if isinstance(node, n.Decl):
        printer.decl(node)
    elif isinstance(node, n.Stmt):
        printer.stmt(node)
    else:
        raise TypeError(f"cannot print {type(node).__name__}")
    return "\n".join(printer.out)
