"""Tree-walking interpreter for the Dash language.

Statements are executed against a mutable :class:`~dashlang.context.Context`
and return a control signal (see :mod:`dashlang.control`) that the dynamic
parent consumes: loops react to ``Break``/``Continue``, call sites to
``Return``. Expressions evaluate to strings.

Every runtime failure is a :class:`~dashlang.errors.DashError`. The
:func:`run` entry point treats it as fatal and ends the process; syntax
errors are the only condition reported without terminating.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Tuple

from .ast import (
    Program, PrintStmt, LetStmt, IfStmt, WhileStmt, BreakStmt, ContinueStmt,
    FnStmt, CallStmt, ReturnStmt, Stmt, Expr, IntLit, StrLit, Var, Call,
    BinaryOp, Op,
)
from .context import Context
from .control import BREAK, CONTINUE, ReturnSignal, LoopControl
from .errors import DashError, DashSyntaxError
from .parser import parse_program
from .types import (
    ErrorVal, to_integer, check_i64, from_integer, from_bool, truncating_div,
    is_truthy, loop_continues,
)


class Interpreter:
    """Core interpreter that executes a Dash AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self, program: Program, ctx: Optional[Context] = None) -> Context:
        """Execute a program and return the context it ran in.

        The signal of each top-level statement is ignored, so a stray
        ``return``, ``break`` or ``continue`` only cuts short the block it
        was raised in.
        """
        if ctx is None:
            ctx = Context()
        self.debug(f"run: {len(program.body)} statements")
        try:
            for stmt in program.body:
                self.execute(stmt, ctx)
            self.debug("run: finished")
            return ctx
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: List[Stmt], ctx: Context) -> LoopControl:
        # stop at the first statement that raises a signal
        for stmt in statements:
            signal = self.execute(stmt, ctx)
            if signal is not None:
                return signal
        return None

    def execute(self, node: Stmt, ctx: Context) -> LoopControl:
        if isinstance(node, PrintStmt):
            print(self.evaluate(node.expr, ctx))
            return None
        if isinstance(node, LetStmt):
            value = self.evaluate(node.expr, ctx)
            ctx.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name} = {value!r}")
            return None
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, ctx)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {cond!r} -> {truthy}")
            if truthy:
                return self.execute_block(node.then_branch, ctx)
            if node.else_branch is not None:
                return self.execute_block(node.else_branch, ctx)
            return None
        if isinstance(node, WhileStmt):
            return self.execute_while(node, ctx)
        if isinstance(node, BreakStmt):
            return BREAK
        if isinstance(node, ContinueStmt):
            return CONTINUE
        if isinstance(node, FnStmt):
            ctx.define_function(node.name, node.params, node.body)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return None
        if isinstance(node, CallStmt):
            local, body = self.enter_call(node.name, node.args, ctx)
            # every body statement runs and every signal, return included, is dropped
            for stmt in body:
                signal = self.execute(stmt, local)
                if signal is not None and self.debug_level >= 3:
                    self.debug(f"call statement {node.name}: discarded {signal!r}")
            return None
        if isinstance(node, ReturnStmt):
            return ReturnSignal(self.evaluate(node.expr, ctx))
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def execute_while(self, node: WhileStmt, ctx: Context) -> LoopControl:
        while True:
            cond = self.evaluate(node.condition, ctx)
            if self.debug_level >= 3:
                self.debug(f"while condition {cond!r}")
            if not loop_continues(cond):
                return None
            for stmt in node.body:
                signal = self.execute(stmt, ctx)
                if signal is None:
                    continue
                if signal is BREAK:
                    return None
                if signal is CONTINUE:
                    break
                return signal

    def evaluate(self, node: Expr, ctx: Context) -> str:
        if isinstance(node, IntLit):
            return from_integer(node.value)
        if isinstance(node, StrLit):
            return node.value
        if isinstance(node, Var):
            return ctx.get(node.name)
        if isinstance(node, BinaryOp):
            left = self.to_operand(self.evaluate(node.left, ctx))
            right = self.to_operand(self.evaluate(node.right, ctx))
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Call):
            return self.call_function(node, ctx)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def enter_call(self, name: str, args: List[Expr], ctx: Context) -> Tuple[Context, List[Stmt]]:
        """Call-site protocol shared by call expressions and call statements.

        Lookup and arity are checked before any argument is evaluated;
        arguments are then evaluated left to right in the caller's context.
        """
        func = ctx.lookup_function(name)
        func.check_arity(len(args))
        values = [self.evaluate(arg, ctx) for arg in args]
        if self.debug_level >= 2:
            self.debug(f"call {name}({', '.join(repr(v) for v in values)})")
        return ctx.call(name, values), func.body

    def call_function(self, node: Call, ctx: Context) -> str:
        local, body = self.enter_call(node.name, node.args, ctx)
        for stmt in body:
            signal = self.execute(stmt, local)
            if signal is None:
                continue
            if isinstance(signal, ReturnSignal):
                return signal.value
            raise DashError(ErrorVal(
                'ControlFlowError',
                f"unexpected {signal!r} escaping function {node.name}",
            ))
        return ''

    @staticmethod
    def to_operand(value: str) -> int:
        try:
            return to_integer(value)
        except ValueError as e:
            raise DashError(ErrorVal('ValueError', str(e)))

    def apply_binary_op(self, op: Op, a: int, b: int) -> str:
        try:
            if op is Op.ADD:
                return from_integer(check_i64(a + b))
            if op is Op.SUB:
                return from_integer(check_i64(a - b))
            if op is Op.MUL:
                return from_integer(check_i64(a * b))
            if op is Op.DIV:
                return from_integer(check_i64(truncating_div(a, b)))
        except ZeroDivisionError as e:
            raise DashError(ErrorVal('ZeroDivisionError', str(e)))
        except OverflowError as e:
            raise DashError(ErrorVal('OverflowError', str(e)))
        if op is Op.GREATER:
            return from_bool(a > b)
        if op is Op.LESS:
            return from_bool(a < b)
        if op is Op.GREATER_EQ:
            return from_bool(a >= b)
        if op is Op.LESS_EQ:
            return from_bool(a <= b)
        if op is Op.EQUAL:
            return from_bool(a == b)
        if op is Op.NOT_EQUAL:
            return from_bool(a != b)
        raise NotImplementedError(f"unknown operator {op}")


def run_program(source: str, debug_level: int = 0) -> Context:
    """Convenience function to parse and run a Dash program from source.

    Unlike :func:`run`, errors are raised to the caller.
    """
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(program)


def run(source: str, debug_level: int = 0) -> None:
    """Parse and execute source text.

    A syntax error is reported and the function returns normally. A runtime
    error is fatal: it is reported on stderr and the process exits.
    """
    try:
        program = parse_program(source)
    except DashSyntaxError as e:
        print(f"Parse error: {e}")
        return
    except DashError as e:
        fatal(e)
    execute_fatal(program, debug_level)


def execute_fatal(program: Program, debug_level: int = 0) -> None:
    """Run a built program, terminating the process on any runtime error."""
    try:
        Interpreter(debug_level=debug_level).run(program)
    except DashError as e:
        fatal(e)


def fatal(error: DashError) -> None:
    print(f"Runtime error: {error}", file=sys.stderr)
    sys.exit(1)
