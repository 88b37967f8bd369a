"""Parser for the Dash language.

Parsing happens in two stages:

1. **Parsing**: the source text is matched against a Lark grammar with
   explicit precedence levels, producing a generic, rule-labelled parse
   tree (:func:`parse`). Any mismatch is reported as a
   :class:`~dashlang.errors.DashSyntaxError`.

2. **Building**: the parse tree is turned into the typed AST of
   :mod:`dashlang.ast` by :class:`ASTBuilder` (:func:`build`). The builder
   is purely structural, one method per grammar rule. Names, arity and
   operand types are not checked here.

Whitespace (newlines included) is insignificant and statements need no
separator, so ``while x < 5 { print(x) let x = x + 1 }`` is one valid line.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source text.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Program, PrintStmt, LetStmt, IfStmt, WhileStmt, BreakStmt, ContinueStmt,
    FnStmt, CallStmt, ReturnStmt, Stmt, Expr, IntLit, StrLit, Var, Call,
    BinaryOp, Op,
)
from .errors import DashError, DashSyntaxError
from .types import ErrorVal, I64_MAX


DASH_GRAMMAR = r"""
    start: statement*

    // Statements
    ?statement: print_stmt
              | let_stmt
              | if_stmt
              | while_stmt
              | break_stmt
              | continue_stmt
              | fn_stmt
              | call_stmt
              | return_stmt

    print_stmt: "print" "(" expression ")"
    let_stmt: "let" NAME "=" expression
    if_stmt: "if" expression block ["else" block]
    while_stmt: "while" expression block
    break_stmt: "break"
    continue_stmt: "continue"
    fn_stmt: "fn" NAME "(" [param_list] ")" block
    param_list: NAME ("," NAME)*
    call_stmt: call_expr
    return_stmt: "return" expression

    block: "{" statement* "}"

    // Expressions, loosest to tightest. A comparison takes at most one
    // operator; sums and products fold left.
    ?expression: comparison
    ?comparison: sum (COMP_OP sum)?
    ?sum: product (ADD_OP product)*
    ?product: primary (MUL_OP primary)*
    ?primary: int_lit
            | str_lit
            | call_expr
            | var
            | "(" expression ")"

    int_lit: INT
    str_lit: STRING
    var: NAME
    call_expr: NAME "(" [arg_list] ")"
    arg_list: expression ("," expression)*

    // Tokens
    COMP_OP: ">=" | "<=" | "==" | "!=" | ">" | "<"
    ADD_OP: "+" | "-"
    MUL_OP: "*" | "/"
    INT: /[0-9]+/
    STRING: /"[^"]*"/
    NAME: /(?!(?:print|let|if|else|while|break|continue|fn|return)\b)[A-Za-z_][A-Za-z0-9_]*/
    %import common.WS
    %ignore WS
"""


DASH_PARSER = Lark(
    DASH_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=True,
)


_ADD_OPS = (Op.ADD, Op.SUB)
_MUL_OPS = (Op.MUL, Op.DIV)


def _describe(error: UnexpectedInput) -> str:
    if isinstance(error, UnexpectedCharacters):
        return f"unexpected character {error.char!r}"
    if isinstance(error, UnexpectedToken):
        if error.token.type == '$END':
            return "unexpected end of input"
        return f"unexpected token {error.token.value!r}"
    return "unexpected end of input"


def parse(source: str) -> Tree:
    """Match source text against the grammar and return the raw parse tree."""
    try:
        return DASH_PARSER.parse(source)
    except UnexpectedInput as e:
        # lark reports '?' or -1 when no position is known
        line = e.line if isinstance(getattr(e, 'line', None), int) and e.line > 0 else 0
        column = e.column if isinstance(getattr(e, 'column', None), int) and e.column > 0 else 0
        message = f"{_describe(e)} at line {line}, column {column}"
        if line > 0:
            message += '\n\n' + e.get_context(source).rstrip('\n')
        raise DashSyntaxError(message, line, column) from e


class ASTBuilder(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return Program(body=list(items))

    # Statements
    def print_stmt(self, items):
        return PrintStmt(items[0])

    def let_stmt(self, items):
        name, expr = items
        return LetStmt(str(name), expr)

    def if_stmt(self, items):
        condition, then_branch, else_branch = items
        return IfStmt(condition, then_branch, else_branch)

    def while_stmt(self, items):
        condition, body = items
        return WhileStmt(condition, body)

    def break_stmt(self, items):
        return BreakStmt()

    def continue_stmt(self, items):
        return ContinueStmt()

    def fn_stmt(self, items):
        name, params, body = items
        return FnStmt(str(name), params if params is not None else [], body)

    def param_list(self, items):
        return [str(item) for item in items]

    def call_stmt(self, items):
        call = items[0]
        if not isinstance(call, Call):
            raise NotImplementedError(f"call statement built from {type(call).__name__}")
        return CallStmt(call.name, call.args)

    def return_stmt(self, items):
        return ReturnStmt(items[0])

    def block(self, items) -> List[Stmt]:
        return list(items)

    # Expressions
    def comparison(self, items):
        left, op, right = items
        return BinaryOp(left, self.operator(op, None), right)

    def sum(self, items):
        return self.fold(items, _ADD_OPS)

    def product(self, items):
        return self.fold(items, _MUL_OPS)

    def fold(self, items, allowed) -> Expr:
        # items pattern: expr (op expr)*, folded to the left
        left = items[0]
        i = 1
        while i < len(items):
            op = self.operator(items[i], allowed)
            right = items[i + 1]
            left = BinaryOp(left, op, right)
            i += 2
        return left

    @staticmethod
    def operator(token, allowed) -> Op:
        op = Op(str(token))
        if allowed is not None and op not in allowed:
            raise NotImplementedError(f"operator {op.value!r} in the wrong precedence level")
        if allowed is None and not op.is_comparison:
            raise NotImplementedError(f"operator {op.value!r} is not a comparison")
        return op

    def int_lit(self, items):
        value = int(items[0])
        if value > I64_MAX:
            raise DashError(ErrorVal('OverflowError', f'integer literal {items[0]} out of range'))
        return IntLit(value)

    def str_lit(self, items):
        # content between the quotes is taken verbatim
        return StrLit(str(items[0])[1:-1])

    def var(self, items):
        return Var(str(items[0]))

    def call_expr(self, items):
        name, args = items
        return Call(str(name), args if args is not None else [])

    def arg_list(self, items):
        return list(items)

    def __default__(self, data, children, meta):
        raise NotImplementedError(f"unexpected parse tree rule {data!r}")


def build(tree: Tree) -> Program:
    """Convert a parse tree produced by :func:`parse` into a Program."""
    try:
        return ASTBuilder().transform(tree)
    except VisitError as e:
        # Lark wraps callback failures; surface the original error
        raise e.orig_exc from None


def parse_program(source: str) -> Program:
    """Parse Dash source code into an AST Program.

    Syntax errors are raised as DashSyntaxError.
    """
    return build(parse(source))
