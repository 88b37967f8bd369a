"""Abstract Syntax Tree (AST) definitions for the Dash language.

The AST mirrors the grammar in :mod:`dashlang.parser` one to one. Expressions
are immutable trees without back references; statements hold their nested
blocks as plain lists. No semantic checks happen at this level: unknown
names, arity and operand types are all left to the interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Op(Enum):
    """Binary operators, valued by their source spelling."""
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    GREATER = '>'
    LESS = '<'
    GREATER_EQ = '>='
    LESS_EQ = '<='
    EQUAL = '=='
    NOT_EQUAL = '!='

    @property
    def is_comparison(self) -> bool:
        return self not in (Op.ADD, Op.SUB, Op.MUL, Op.DIV)


@dataclass(frozen=True)
class Expr:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class IntLit(Expr):
    value: int


@dataclass(frozen=True)
class StrLit(Expr):
    value: str


@dataclass(frozen=True)
class Var(Expr):
    name: str


@dataclass(frozen=True)
class Call(Expr):
    name: str
    args: List[Expr]


@dataclass(frozen=True)
class BinaryOp(Expr):
    left: Expr
    op: Op
    right: Expr


@dataclass
class Stmt:
    """Base class for all statement nodes."""
    pass


@dataclass
class PrintStmt(Stmt):
    expr: Expr


@dataclass
class LetStmt(Stmt):
    name: str
    expr: Expr


@dataclass
class IfStmt(Stmt):
    condition: Expr
    then_branch: List[Stmt]
    else_branch: Optional[List[Stmt]] = None


@dataclass
class WhileStmt(Stmt):
    condition: Expr
    body: List[Stmt]


@dataclass
class BreakStmt(Stmt):
    pass


@dataclass
class ContinueStmt(Stmt):
    pass


@dataclass
class FnStmt(Stmt):
    name: str
    params: List[str]
    body: List[Stmt]


@dataclass
class CallStmt(Stmt):
    # function invoked for effect; its value and return signal are dropped
    name: str
    args: List[Expr]


@dataclass
class ReturnStmt(Stmt):
    expr: Expr


@dataclass
class Program:
    body: List[Stmt] = field(default_factory=list)
