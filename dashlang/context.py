from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from dashlang.ast import Stmt
from dashlang.errors import DashError
from dashlang.types import ErrorVal


@dataclass
class FunctionDef:
    """A user-defined function: its parameter names and body."""
    name: str
    params: List[str]
    body: List[Stmt]

    def check_arity(self, count: int):
        if count != len(self.params):
            raise DashError(ErrorVal(
                'ArityError',
                f"function '{self.name}' expected {len(self.params)} args, got {count}",
            ))

    def bind(self, args: List[str]) -> 'Context':
        """Create the fresh context a call of this function runs in.

        The new context holds only the bound parameters. Its function table
        starts empty, so the body cannot call any user function, itself
        included, and cannot see the caller's variables.
        """
        self.check_arity(len(args))
        local = Context()
        for param, value in zip(self.params, args):
            local.variables[param] = value
        return local

    def __repr__(self) -> str:
        return f"<function {self.name}({', '.join(self.params)})>"


@dataclass
class Context:
    """Mutable environment mapping names to string values and to functions."""
    variables: Dict[str, str] = field(default_factory=dict)
    functions: Dict[str, FunctionDef] = field(default_factory=dict)

    def get(self, name: str) -> str:
        if name in self.variables:
            return self.variables[name]
        raise DashError(ErrorVal('NameError', f'undefined variable {name}'))

    def set(self, name: str, value: str):
        self.variables[name] = value

    def define_function(self, name: str, params: List[str], body: List[Stmt]):
        # re-definition silently replaces the previous one
        self.functions[name] = FunctionDef(name, list(params), body)

    def lookup_function(self, name: str) -> FunctionDef:
        if name in self.functions:
            return self.functions[name]
        raise DashError(ErrorVal('NameError', f'undefined function {name}'))

    def call(self, name: str, args: List[str]) -> 'Context':
        """Look up ``name`` and bind already evaluated arguments for a call."""
        return self.lookup_function(name).bind(args)
