"""Recursive descent parser for a practical subset of Go.

Covers everything goquickfix needs to rewrite ordinary, non-generic Go
packages: declarations, statements, expressions and type literals.
Type parameters are rejected with a ParseError.

Example:
    >>> fset = FileSet()
    >>> f = parse_file(fset, "main.go", 'package main\\n\\nimport "fmt"\\n')
    >>> f.imports[0].path.value
    '"fmt"'
"""

from __future__ import annotations

from collections.abc import Callable

from goquickfix.errors import ParseError
from goquickfix.syntax import nodes as n
from goquickfix.syntax.scanner import Lexeme, scan
from goquickfix.syntax.token import ASSIGN_OPS, FileSet, SourceFile, Token

_TYPE_START = {
    Token.IDENT,
    Token.LBRACK,
    Token.STRUCT,
    Token.MUL,
    Token.FUNC,
    Token.INTERFACE,
    Token.MAP,
    Token.CHAN,
    Token.ARROW,
    Token.LPAREN,
}

_SIMPLE_STMT_START = {
    Token.IDENT,
    Token.INT,
    Token.FLOAT,
    Token.IMAG,
    Token.CHAR,
    Token.STRING,
    Token.FUNC,
    Token.LPAREN,
    Token.LBRACK,
    Token.STRUCT,
    Token.MAP,
    Token.CHAN,
    Token.INTERFACE,
    Token.ADD,
    Token.SUB,
    Token.MUL,
    Token.AND,
    Token.XOR,
    Token.ARROW,
    Token.NOT,
}

_UNARY_OPS = {Token.ADD, Token.SUB, Token.NOT, Token.XOR, Token.AND}


class Parser:
    """Parses the lexemes of a single file into an n.File."""

    def __init__(self, file: SourceFile, lexemes: list[Lexeme], comments: list[n.Comment]) -> None:
        self.file = file
        self.lexemes = lexemes
        self.comments = comments
        self.index = 0
        self.prev_end = file.base
        # < 0 while parsing the header of if/for/switch, where `T {` opens a block
        self.expr_lev = 0

    # -------------------------------------------------------------------------
    # Token handling
    # -------------------------------------------------------------------------

    @property
    def tok(self) -> Token:
        return self.lexemes[self.index].tok

    @property
    def lit(self) -> str:
        return self.lexemes[self.index].lit

    @property
    def pos(self) -> int:
        return self.lexemes[self.index].pos

    def next(self) -> None:
        current = self.lexemes[self.index]
        if current.tok is not Token.EOF:
            self.prev_end = current.pos + len(current.lit)
            self.index += 1

    def peek(self, offset: int = 1) -> Token:
        index = min(self.index + offset, len(self.lexemes) - 1)
        return self.lexemes[index].tok

    def error(self, message: str, pos: int | None = None) -> ParseError:
        position = self.file.position(self.pos if pos is None else pos)
        return ParseError(self.file.name, position.line, position.column, message)

    def describe(self) -> str:
        if self.tok is Token.SEMICOLON and self.lit == "\n":
            return "newline"
        if self.tok is Token.EOF:
            return "EOF"
        if self.tok.is_literal():
            return f"{self.tok.value} {self.lit}"
        return f"'{self.tok.value}'"

    def error_expected(self, what: str) -> ParseError:
        return self.error(f"expected {what}, found {self.describe()}")

    def expect(self, tok: Token) -> int:
        pos = self.pos
        if self.tok is not tok:
            raise self.error_expected(f"'{tok.value}'")
        self.next()
        return pos

    def got(self, tok: Token) -> bool:
        if self.tok is tok:
            self.next()
            return True
        return False

    def expect_semi(self) -> None:
        if self.tok in (Token.RPAREN, Token.RBRACE):
            return
        if self.tok is Token.SEMICOLON:
            self.next()
            return
        raise self.error_expected("';'")

    # -------------------------------------------------------------------------
    # File and declarations
    # -------------------------------------------------------------------------

    def parse_file(self) -> n.File:
        self.expect(Token.PACKAGE)
        package = self.parse_ident()
        if package.is_blank:
            raise self.error("invalid package name _", package.pos)
        self.expect_semi()

        decls: list[n.Decl] = []
        imports: list[n.ImportSpec] = []
        while self.tok is Token.IMPORT:
            decl = self.parse_gen_decl(Token.IMPORT, self.parse_import_spec)
            imports.extend(spec for spec in decl.specs if isinstance(spec, n.ImportSpec))
            decls.append(decl)

        while self.tok is not Token.EOF:
            decls.append(self.parse_decl())

        return n.File(
            self.file.name,
            package,
            decls,
            imports,
            self.comments,
            pos=self.file.base,
            end=self.file.end + 1,
        )

    def parse_decl(self) -> n.Decl:
        if self.tok is Token.IMPORT:
            raise self.error("imports must appear before other declarations")
        if self.tok is Token.CONST:
            return self.parse_gen_decl(Token.CONST, self.parse_value_spec)
        if self.tok is Token.VAR:
            return self.parse_gen_decl(Token.VAR, self.parse_value_spec)
        if self.tok is Token.TYPE:
            return self.parse_gen_decl(Token.TYPE, self.parse_type_spec)
        if self.tok is Token.FUNC:
            return self.parse_func_decl()
        raise self.error("non-declaration statement outside function body")

    def parse_gen_decl(self, keyword: Token, parse_spec: Callable[[Token], n.Spec]) -> n.GenDecl:
        pos = self.expect(keyword)
        specs: list[n.Spec] = []
        grouped = False
        if self.tok is Token.LPAREN:
            grouped = True
            self.next()
            while self.tok not in (Token.RPAREN, Token.EOF):
                specs.append(parse_spec(keyword))
                self.expect_semi()
            self.expect(Token.RPAREN)
        else:
            specs.append(parse_spec(keyword))
        decl = n.GenDecl(keyword, specs, grouped, pos=pos, end=self.prev_end)
        self.expect_semi()
        return decl

    def parse_import_spec(self, keyword: Token) -> n.ImportSpec:
        pos = self.pos
        name = None
        if self.tok is Token.IDENT:
            name = self.parse_ident()
        elif self.tok is Token.PERIOD:
            name = n.Ident(".", pos=self.pos, end=self.pos + 1)
            self.next()
        if self.tok is not Token.STRING:
            raise self.error_expected("import path")
        path = n.BasicLit(Token.STRING, self.lit, pos=self.pos, end=self.pos + len(self.lit))
        self.next()
        return n.ImportSpec(name, path, pos=pos, end=path.end)

    def parse_value_spec(self, keyword: Token) -> n.ValueSpec:
        pos = self.pos
        names = self.parse_ident_list()
        typ = None
        values: list[n.Expr] = []
        if self.tok not in (Token.ASSIGN, Token.SEMICOLON, Token.RPAREN):
            typ = self.parse_type()
        if self.got(Token.ASSIGN):
            values = self.parse_expr_list()
        elif keyword is Token.VAR and typ is None:
            raise self.error_expected("type")
        return n.ValueSpec(names, typ, values, pos=pos, end=self.prev_end)

    def parse_type_spec(self, keyword: Token) -> n.TypeSpec:
        name = self.parse_ident()
        if self.tok is Token.LBRACK and self.peek() is Token.IDENT and self.peek(2) in _TYPE_START:
            raise self.error("type parameters are not supported")
        is_alias = self.got(Token.ASSIGN)
        typ = self.parse_type()
        return n.TypeSpec(name, typ, is_alias, pos=name.pos, end=self.prev_end)

    def parse_func_decl(self) -> n.FuncDecl:
        pos = self.expect(Token.FUNC)
        recv = None
        if self.tok is Token.LPAREN:
            recv = self.parse_parameters()
        name = self.parse_ident()
        if self.tok is Token.LBRACK:
            raise self.error("type parameters are not supported")
        params, results = self.parse_signature()
        func_type = n.FuncType(params, results, pos=pos, end=self.prev_end)
        body = None
        if self.tok is Token.LBRACE:
            body = self.parse_body()
        decl = n.FuncDecl(recv, name, func_type, body, pos=pos, end=self.prev_end)
        self.expect_semi()
        return decl

    # -------------------------------------------------------------------------
    # Identifiers, parameters and types
    # -------------------------------------------------------------------------

    def parse_ident(self) -> n.Ident:
        if self.tok is not Token.IDENT:
            raise self.error_expected("identifier")
        ident = n.Ident(self.lit, pos=self.pos, end=self.pos + len(self.lit))
        self.next()
        return ident

    def parse_ident_list(self) -> list[n.Ident]:
        idents = [self.parse_ident()]
        while self.got(Token.COMMA):
            idents.append(self.parse_ident())
        return idents

    def parse_signature(self) -> tuple[n.FieldList, n.FieldList | None]:
        params = self.parse_parameters()
        results = None
        if self.tok is Token.LPAREN:
            results = self.parse_parameters()
        elif self.tok in _TYPE_START:
            typ = self.parse_type()
            results = n.FieldList([n.Field([], typ, pos=typ.pos, end=typ.end)], pos=typ.pos, end=typ.end)
        return params, results

    def parse_param_type(self) -> n.Expr:
        if self.tok is Token.ELLIPSIS:
            pos = self.pos
            self.next()
            elt = self.parse_type()
            return n.EllipsisExpr(elt, pos=pos, end=elt.end)
        return self.parse_type()

    def parse_parameters(self) -> n.FieldList:
        lparen = self.expect(Token.LPAREN)
        entries: list[tuple[n.Expr, n.Expr | None]] = []
        while self.tok not in (Token.RPAREN, Token.EOF):
            first = self.parse_param_type()
            if self.tok not in (Token.COMMA, Token.RPAREN):
                if not isinstance(first, n.Ident):
                    raise self.error_expected("')'")
                entries.append((first, self.parse_param_type()))
            else:
                entries.append((first, None))
            if not self.got(Token.COMMA):
                break
        self.expect(Token.RPAREN)

        params: list[n.Field] = []
        if any(typ is not None for _, typ in entries):
            names: list[n.Ident] = []
            for expr, typ in entries:
                if not isinstance(expr, n.Ident):
                    raise self.error("mixed named and unnamed parameters", expr.pos)
                names.append(expr)
                if typ is not None:
                    params.append(n.Field(names, typ, pos=names[0].pos, end=typ.end))
                    names = []
            if names:
                raise self.error("mixed named and unnamed parameters", names[0].pos)
        else:
            params = [n.Field([], expr, pos=expr.pos, end=expr.end) for expr, _ in entries]
        return n.FieldList(params, pos=lparen, end=self.prev_end)

    def parse_type(self) -> n.Expr:
        pos = self.pos
        tok = self.tok

        if tok is Token.IDENT:
            ident = self.parse_ident()
            if self.tok is Token.PERIOD:
                self.next()
                sel = self.parse_ident()
                return n.SelectorExpr(ident, sel, pos=pos, end=sel.end)
            return ident

        if tok is Token.LBRACK:
            self.next()
            length: n.Expr | None = None
            if self.tok is Token.ELLIPSIS:
                length = n.EllipsisExpr(None, pos=self.pos, end=self.pos + 3)
                self.next()
            elif self.tok is not Token.RBRACK:
                self.expr_lev += 1
                length = self.parse_expr()
                self.expr_lev -= 1
            self.expect(Token.RBRACK)
            elt = self.parse_type()
            return n.ArrayType(length, elt, pos=pos, end=elt.end)

        if tok is Token.STRUCT:
            return self.parse_struct_type()

        if tok is Token.MUL:
            self.next()
            x = self.parse_type()
            return n.StarExpr(x, pos=pos, end=x.end)

        if tok is Token.FUNC:
            self.next()
            params, results = self.parse_signature()
            return n.FuncType(params, results, pos=pos, end=self.prev_end)

        if tok is Token.INTERFACE:
            return self.parse_interface_type()

        if tok is Token.MAP:
            self.next()
            self.expect(Token.LBRACK)
            key = self.parse_type()
            self.expect(Token.RBRACK)
            value = self.parse_type()
            return n.MapType(key, value, pos=pos, end=value.end)

        if tok is Token.CHAN:
            self.next()
            direction = n.ChanDir.BOTH
            if self.tok is Token.ARROW:
                self.next()
                direction = n.ChanDir.SEND
            value = self.parse_type()
            return n.ChanType(direction, value, pos=pos, end=value.end)

        if tok is Token.ARROW:
            self.next()
            self.expect(Token.CHAN)
            value = self.parse_type()
            return n.ChanType(n.ChanDir.RECV, value, pos=pos, end=value.end)

        if tok is Token.LPAREN:
            self.next()
            x = self.parse_type()
            self.expect(Token.RPAREN)
            return n.ParenExpr(x, pos=pos, end=self.prev_end)

        raise self.error_expected("type")

    def parse_struct_type(self) -> n.StructType:
        pos = self.expect(Token.STRUCT)
        lbrace = self.expect(Token.LBRACE)
        fields: list[n.Field] = []
        while self.tok not in (Token.RBRACE, Token.EOF):
            start = self.pos
            if self.tok is Token.MUL:
                names: list[n.Ident] = []
                typ = self.parse_type()
            else:
                first = self.parse_ident()
                if self.tok is Token.PERIOD:
                    self.next()
                    sel = self.parse_ident()
                    names, typ = [], n.SelectorExpr(first, sel, pos=first.pos, end=sel.end)
                elif self.tok in (Token.SEMICOLON, Token.RBRACE, Token.STRING):
                    names, typ = [], first
                else:
                    names = [first]
                    while self.got(Token.COMMA):
                        names.append(self.parse_ident())
                    typ = self.parse_type()
            tag = None
            if self.tok is Token.STRING:
                tag = n.BasicLit(Token.STRING, self.lit, pos=self.pos, end=self.pos + len(self.lit))
                self.next()
            fields.append(n.Field(names, typ, tag, pos=start, end=self.prev_end))
            self.expect_semi()
        self.expect(Token.RBRACE)
        field_list = n.FieldList(fields, pos=lbrace, end=self.prev_end)
        return n.StructType(field_list, pos=pos, end=self.prev_end)

    def parse_interface_type(self) -> n.InterfaceType:
        pos = self.expect(Token.INTERFACE)
        lbrace = self.expect(Token.LBRACE)
        methods: list[n.Field] = []
        while self.tok not in (Token.RBRACE, Token.EOF):
            start = self.pos
            name = self.parse_ident()
            if self.tok is Token.LPAREN:
                params, results = self.parse_signature()
                func_type = n.FuncType(params, results, pos=params.pos, end=self.prev_end)
                methods.append(n.Field([name], func_type, pos=start, end=self.prev_end))
            elif self.tok is Token.PERIOD:
                self.next()
                sel = self.parse_ident()
                embedded = n.SelectorExpr(name, sel, pos=name.pos, end=sel.end)
                methods.append(n.Field([], embedded, pos=start, end=sel.end))
            else:
                methods.append(n.Field([], name, pos=start, end=name.end))
            self.expect_semi()
        self.expect(Token.RBRACE)
        field_list = n.FieldList(methods, pos=lbrace, end=self.prev_end)
        return n.InterfaceType(field_list, pos=pos, end=self.prev_end)

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def parse_body(self) -> n.BlockStmt:
        saved = self.expr_lev
        self.expr_lev = 0
        body = self.parse_block()
        self.expr_lev = saved
        return body

    def parse_block(self) -> n.BlockStmt:
        lbrace = self.expect(Token.LBRACE)
        stmts = self.parse_stmt_list()
        self.expect(Token.RBRACE)
        return n.BlockStmt(stmts, pos=lbrace, end=self.prev_end)

    def parse_stmt_list(self) -> list[n.Stmt]:
        stmts: list[n.Stmt] = []
        while self.tok not in (Token.CASE, Token.DEFAULT, Token.RBRACE, Token.EOF):
            stmt = self.parse_stmt()
            if stmt is not None:
                stmts.append(stmt)
        return stmts

    def parse_stmt(self) -> n.Stmt | None:
        tok = self.tok
        pos = self.pos

        if tok in (Token.CONST, Token.TYPE, Token.VAR):
            parse_spec = self.parse_type_spec if tok is Token.TYPE else self.parse_value_spec
            decl = self.parse_gen_decl(tok, parse_spec)
            return n.DeclStmt(decl, pos=decl.pos, end=decl.end)

        if tok in _SIMPLE_STMT_START:
            stmt = self.parse_simple_stmt(label_ok=True)
            if not isinstance(stmt, n.LabeledStmt):
                self.expect_semi()
            return stmt

        if tok in (Token.GO, Token.DEFER):
            self.next()
            call = self.parse_expr()
            if not isinstance(call, n.CallExpr):
                raise self.error(f"expression in {tok.value} must be function call", call.pos)
            end = self.prev_end
            self.expect_semi()
            if tok is Token.GO:
                return n.GoStmt(call, pos=pos, end=end)
            return n.DeferStmt(call, pos=pos, end=end)

        if tok is Token.RETURN:
            self.next()
            results: list[n.Expr] = []
            if self.tok not in (Token.SEMICOLON, Token.RBRACE):
                results = self.parse_expr_list()
            end = self.prev_end
            self.expect_semi()
            return n.ReturnStmt(results, pos=pos, end=end)

        if tok in (Token.BREAK, Token.CONTINUE, Token.GOTO, Token.FALLTHROUGH):
            self.next()
            label = None
            if tok is not Token.FALLTHROUGH and self.tok is Token.IDENT:
                label = self.parse_ident()
            end = self.prev_end
            self.expect_semi()
            return n.BranchStmt(tok, label, pos=pos, end=end)

        if tok is Token.LBRACE:
            block = self.parse_block()
            self.expect_semi()
            return block

        if tok is Token.IF:
            return self.parse_if_stmt()
        if tok is Token.SWITCH:
            return self.parse_switch_stmt()
        if tok is Token.SELECT:
            return self.parse_select_stmt()
        if tok is Token.FOR:
            return self.parse_for_stmt()

        if tok is Token.SEMICOLON:
            self.next()
            return None

        raise self.error_expected("statement")

    def parse_simple_stmt(self, label_ok: bool = False, range_ok: bool = False) -> n.Stmt:
        """Parse a simple statement.

        With range_ok, `k, v := range x` yields an n.RangeStmt without a body.
        """
        lhs = self.parse_expr_list()
        tok = self.tok

        if tok in (Token.DEFINE, Token.ASSIGN) or tok in ASSIGN_OPS:
            tok_pos = self.pos
            self.next()
            if range_ok and self.tok is Token.RANGE and tok in (Token.DEFINE, Token.ASSIGN):
                self.next()
                x = self.parse_expr()
                if len(lhs) > 2:
                    raise self.error("range clause permits at most two iteration variables", lhs[2].pos)
                value = lhs[1] if len(lhs) == 2 else None
                return n.RangeStmt(lhs[0], value, tok, x, None, tok_pos, pos=lhs[0].pos, end=x.end)
            rhs = self.parse_expr_list()
            return n.AssignStmt(lhs, tok, rhs, tok_pos, pos=lhs[0].pos, end=rhs[-1].end)

        if len(lhs) > 1:
            raise self.error_expected("1 expression")
        x = lhs[0]

        if tok is Token.COLON and label_ok and isinstance(x, n.Ident):
            self.next()
            if self.tok is Token.RBRACE:
                stmt: n.Stmt = n.EmptyStmt(pos=self.pos, end=self.pos)
            else:
                parsed = self.parse_stmt()
                stmt = parsed if parsed is not None else n.EmptyStmt(pos=self.prev_end, end=self.prev_end)
            return n.LabeledStmt(x, stmt, pos=x.pos, end=stmt.end if stmt.end else self.prev_end)

        if tok is Token.ARROW:
            self.next()
            value = self.parse_expr()
            return n.SendStmt(x, value, pos=x.pos, end=value.end)

        if tok in (Token.INC, Token.DEC):
            self.next()
            return n.IncDecStmt(x, tok, pos=x.pos, end=self.prev_end)

        return n.ExprStmt(x, pos=x.pos, end=x.end)

    def parse_if_stmt(self) -> n.IfStmt:
        pos = self.expect(Token.IF)
        saved = self.expr_lev
        self.expr_lev = -1
        init = None
        cond: n.Expr | None = None
        if self.tok is Token.LBRACE:
            raise self.error("missing condition in if statement")
        stmt = None
        if self.tok is not Token.SEMICOLON:
            stmt = self.parse_simple_stmt()
        if self.tok is Token.SEMICOLON:
            self.next()
            init = stmt
            if self.tok is Token.LBRACE:
                raise self.error("missing condition in if statement")
            cond = self.parse_expr()
        elif isinstance(stmt, n.ExprStmt):
            cond = stmt.x
        else:
            raise self.error("cannot use assignment as value", pos)
        self.expr_lev = saved

        body = self.parse_block()
        else_: n.Stmt | None = None
        if self.got(Token.ELSE):
            if self.tok is Token.IF:
                else_ = self.parse_if_stmt()
                return n.IfStmt(init, cond, body, else_, pos=pos, end=else_.end)
            if self.tok is Token.LBRACE:
                else_ = self.parse_block()
                self.expect_semi()
                return n.IfStmt(init, cond, body, else_, pos=pos, end=else_.end)
            raise self.error_expected("if statement or block")
        stmt_end = self.prev_end
        self.expect_semi()
        return n.IfStmt(init, cond, body, None, pos=pos, end=stmt_end)

    def parse_switch_stmt(self) -> n.Stmt:
        pos = self.expect(Token.SWITCH)
        saved = self.expr_lev
        self.expr_lev = -1
        init = None
        tag_stmt = None
        if self.tok is not Token.LBRACE:
            if self.tok is not Token.SEMICOLON:
                tag_stmt = self.parse_simple_stmt()
            if self.tok is Token.SEMICOLON:
                self.next()
                init = tag_stmt
                tag_stmt = None
                if self.tok is not Token.LBRACE:
                    tag_stmt = self.parse_simple_stmt()
        self.expr_lev = saved

        is_type_switch = _is_type_switch_guard(tag_stmt)
        lbrace = self.expect(Token.LBRACE)
        clauses: list[n.Stmt] = []
        while self.tok in (Token.CASE, Token.DEFAULT):
            clauses.append(self.parse_case_clause(is_type_switch))
        self.expect(Token.RBRACE)
        body = n.BlockStmt(clauses, pos=lbrace, end=self.prev_end)
        stmt_end = self.prev_end
        self.expect_semi()

        if is_type_switch:
            assert tag_stmt is not None
            return n.TypeSwitchStmt(init, tag_stmt, body, pos=pos, end=stmt_end)
        tag = None
        if tag_stmt is not None:
            if not isinstance(tag_stmt, n.ExprStmt):
                raise self.error("switch expression must be an expression", tag_stmt.pos)
            tag = tag_stmt.x
        return n.SwitchStmt(init, tag, body, pos=pos, end=stmt_end)

    def parse_case_clause(self, type_switch: bool) -> n.CaseClause:
        pos = self.pos
        exprs: list[n.Expr] | None = None
        if self.got(Token.CASE):
            if type_switch:
                exprs = [self.parse_type()]
                while self.got(Token.COMMA):
                    exprs.append(self.parse_type())
            else:
                exprs = self.parse_expr_list()
        else:
            self.expect(Token.DEFAULT)
        colon = self.expect(Token.COLON)
        body = self.parse_stmt_list()
        return n.CaseClause(exprs, body, colon, pos=pos, end=self.prev_end)

    def parse_select_stmt(self) -> n.SelectStmt:
        pos = self.expect(Token.SELECT)
        lbrace = self.expect(Token.LBRACE)
        clauses: list[n.Stmt] = []
        while self.tok in (Token.CASE, Token.DEFAULT):
            clauses.append(self.parse_comm_clause())
        self.expect(Token.RBRACE)
        body = n.BlockStmt(clauses, pos=lbrace, end=self.prev_end)
        self.expect_semi()
        return n.SelectStmt(body, pos=pos, end=body.end)

    def parse_comm_clause(self) -> n.CommClause:
        pos = self.pos
        comm: n.Stmt | None = None
        if self.got(Token.CASE):
            lhs = self.parse_expr_list()
            if self.tok is Token.ARROW:
                if len(lhs) > 1:
                    raise self.error_expected("1 expression")
                self.next()
                value = self.parse_expr()
                comm = n.SendStmt(lhs[0], value, pos=lhs[0].pos, end=value.end)
            elif self.tok in (Token.ASSIGN, Token.DEFINE):
                tok = self.tok
                tok_pos = self.pos
                self.next()
                rhs = self.parse_expr()
                comm = n.AssignStmt(lhs, tok, [rhs], tok_pos, pos=lhs[0].pos, end=rhs.end)
            else:
                if len(lhs) > 1:
                    raise self.error_expected("1 expression")
                comm = n.ExprStmt(lhs[0], pos=lhs[0].pos, end=lhs[0].end)
        else:
            self.expect(Token.DEFAULT)
        colon = self.expect(Token.COLON)
        body = self.parse_stmt_list()
        return n.CommClause(comm, body, colon, pos=pos, end=self.prev_end)

    def parse_for_stmt(self) -> n.Stmt:
        pos = self.expect(Token.FOR)
        saved = self.expr_lev
        self.expr_lev = -1
        init = cond_stmt = post = None
        range_stmt: n.RangeStmt | None = None

        if self.tok is not Token.LBRACE:
            if self.tok is Token.RANGE:
                self.next()
                x = self.parse_expr()
                range_stmt = n.RangeStmt(None, None, None, x, None, pos=pos, end=x.end)
            elif self.tok is not Token.SEMICOLON:
                cond_stmt = self.parse_simple_stmt(range_ok=True)
                if isinstance(cond_stmt, n.RangeStmt):
                    range_stmt = cond_stmt
            if range_stmt is None and self.tok is Token.SEMICOLON:
                self.next()
                init = cond_stmt
                cond_stmt = None
                if self.tok is not Token.SEMICOLON:
                    cond_stmt = self.parse_simple_stmt()
                if self.tok is not Token.SEMICOLON:
                    raise self.error_expected("';'")
                self.next()
                if self.tok is not Token.LBRACE:
                    post = self.parse_simple_stmt()
        self.expr_lev = saved

        body = self.parse_block()
        self.expect_semi()

        if range_stmt is not None:
            range_stmt.body = body
            range_stmt.pos = pos
            range_stmt.end = body.end
            return range_stmt

        cond = None
        if cond_stmt is not None:
            if not isinstance(cond_stmt, n.ExprStmt):
                raise self.error("expected for loop condition", cond_stmt.pos)
            cond = cond_stmt.x
        return n.ForStmt(init, cond, post, body, pos=pos, end=body.end)

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def parse_expr_list(self) -> list[n.Expr]:
        exprs = [self.parse_expr()]
        while self.got(Token.COMMA):
            exprs.append(self.parse_expr())
        return exprs

    def parse_expr(self) -> n.Expr:
        return self.parse_binary_expr(1)

    def parse_binary_expr(self, min_prec: int) -> n.Expr:
        x = self.parse_unary_expr()
        while True:
            op = self.tok
            prec = op.precedence
            if prec < min_prec:
                return x
            self.next()
            y = self.parse_binary_expr(prec + 1)
            x = n.BinaryExpr(x, op, y, pos=x.pos, end=y.end)

    def parse_unary_expr(self) -> n.Expr:
        pos = self.pos
        tok = self.tok

        if tok in _UNARY_OPS:
            self.next()
            x = self.parse_unary_expr()
            return n.UnaryExpr(tok, x, pos=pos, end=x.end)

        if tok is Token.ARROW:
            if self.peek() is Token.CHAN:
                return self.parse_primary_expr(self.parse_type())
            self.next()
            x = self.parse_unary_expr()
            return n.UnaryExpr(Token.ARROW, x, pos=pos, end=x.end)

        if tok is Token.MUL:
            self.next()
            x = self.parse_unary_expr()
            return n.StarExpr(x, pos=pos, end=x.end)

        return self.parse_primary_expr(self.parse_operand())

    def parse_operand(self) -> n.Expr:
        pos = self.pos
        tok = self.tok

        if tok is Token.IDENT:
            return self.parse_ident()

        if tok in (Token.INT, Token.FLOAT, Token.IMAG, Token.CHAR, Token.STRING):
            lit = n.BasicLit(tok, self.lit, pos=pos, end=pos + len(self.lit))
            self.next()
            return lit

        if tok is Token.LPAREN:
            self.next()
            self.expr_lev += 1
            x = self.parse_expr()
            self.expr_lev -= 1
            self.expect(Token.RPAREN)
            return n.ParenExpr(x, pos=pos, end=self.prev_end)

        if tok is Token.FUNC:
            self.next()
            params, results = self.parse_signature()
            func_type = n.FuncType(params, results, pos=pos, end=self.prev_end)
            if self.tok is Token.LBRACE:
                body = self.parse_body()
                return n.FuncLit(func_type, body, pos=pos, end=body.end)
            return func_type

        if tok in (Token.LBRACK, Token.STRUCT, Token.MAP, Token.CHAN, Token.INTERFACE):
            return self.parse_type()

        raise self.error_expected("operand")

    def parse_primary_expr(self, x: n.Expr) -> n.Expr:
        while True:
            tok = self.tok

            if tok is Token.PERIOD:
                self.next()
                if self.tok is Token.IDENT:
                    sel = self.parse_ident()
                    x = n.SelectorExpr(x, sel, pos=x.pos, end=sel.end)
                elif self.tok is Token.LPAREN:
                    self.next()
                    typ = None
                    if not self.got(Token.TYPE):
                        typ = self.parse_type()
                    self.expect(Token.RPAREN)
                    x = n.TypeAssertExpr(x, typ, pos=x.pos, end=self.prev_end)
                else:
                    raise self.error_expected("selector or type assertion")

            elif tok is Token.LBRACK:
                x = self.parse_index_or_slice(x)

            elif tok is Token.LPAREN:
                x = self.parse_call(x)

            elif tok is Token.LBRACE and _is_literal_type(x) and (
                self.expr_lev >= 0 or not _is_type_name(x)
            ):
                x = self.parse_composite_lit(x)

            else:
                return x

    def parse_index_or_slice(self, x: n.Expr) -> n.Expr:
        self.expect(Token.LBRACK)
        self.expr_lev += 1
        index: list[n.Expr | None] = [None, None, None]
        if self.tok is not Token.COLON:
            index[0] = self.parse_expr()
        colons = 0
        while self.tok is Token.COLON and colons < 2:
            colons += 1
            self.next()
            if self.tok not in (Token.COLON, Token.RBRACK):
                index[colons] = self.parse_expr()
        self.expr_lev -= 1
        self.expect(Token.RBRACK)

        if colons > 0:
            return n.SliceExpr(
                x, index[0], index[1], index[2], colons == 2, pos=x.pos, end=self.prev_end
            )
        if index[0] is None:
            raise self.error_expected("operand")
        return n.IndexExpr(x, index[0], pos=x.pos, end=self.prev_end)

    def parse_call(self, fun: n.Expr) -> n.CallExpr:
        self.expect(Token.LPAREN)
        self.expr_lev += 1
        args: list[n.Expr] = []
        has_ellipsis = False
        while self.tok not in (Token.RPAREN, Token.EOF):
            args.append(self.parse_expr())
            if self.tok is Token.ELLIPSIS:
                has_ellipsis = True
                self.next()
            if not self.got(Token.COMMA):
                break
        self.expr_lev -= 1
        self.expect(Token.RPAREN)
        return n.CallExpr(fun, args, has_ellipsis, pos=fun.pos, end=self.prev_end)

    def parse_composite_lit(self, typ: n.Expr | None) -> n.CompositeLit:
        lbrace = self.expect(Token.LBRACE)
        self.expr_lev += 1
        elts: list[n.Expr] = []
        while self.tok not in (Token.RBRACE, Token.EOF):
            elts.append(self.parse_element())
            if not self.got(Token.COMMA):
                break
        self.expr_lev -= 1
        self.expect(Token.RBRACE)
        pos = typ.pos if typ is not None else lbrace
        return n.CompositeLit(typ, elts, pos=pos, end=self.prev_end)

    def parse_element(self) -> n.Expr:
        x = self.parse_element_value()
        if self.got(Token.COLON):
            value = self.parse_element_value()
            return n.KeyValueExpr(x, value, pos=x.pos, end=value.end)
        return x

    def parse_element_value(self) -> n.Expr:
        if self.tok is Token.LBRACE:
            return self.parse_composite_lit(None)
        return self.parse_expr()


def _is_type_name(x: n.Expr) -> bool:
    if isinstance(x, n.Ident):
        return True
    return isinstance(x, n.SelectorExpr) and isinstance(x.x, n.Ident)


def _is_literal_type(x: n.Expr) -> bool:
    if _is_type_name(x):
        return True
    return isinstance(x, (n.ArrayType, n.StructType, n.MapType))


def _is_type_switch_guard(stmt: n.Stmt | None) -> bool:
    if isinstance(stmt, n.ExprStmt):
        return isinstance(stmt.x, n.TypeAssertExpr) and stmt.x.type is None
    if isinstance(stmt, n.AssignStmt) and stmt.tok is Token.DEFINE:
        return (
            len(stmt.lhs) == 1
            and len(stmt.rhs) == 1
            and isinstance(stmt.rhs[0], n.TypeAssertExpr)
            and stmt.rhs[0].type is None
        )
    return False


def parse_file(fset: FileSet, filename: str, source: str) -> n.File:
    """Parse one Go source file.

    Args:
        fset: FileSet that assigns the file's positions.
        filename: Name recorded on the file and in error messages.
        source: Full source text.

    Returns:
        The parsed file.

    Raises:
        ParseError: If the source is not valid (supported) Go.
    """
    info = fset.add_file(filename, source)
    lexemes, comments = scan(source, info)
    return Parser(info, lexemes, comments).parse_file()
