# Dash language package
# This package provides a parser and tree-walking interpreter for Dash.
from .interpreter import run, run_program, Interpreter
from .parser import parse, build, parse_program
from .context import Context
from .errors import DashError, DashSyntaxError

__all__ = [
    'run',
    'run_program',
    'Interpreter',
    'parse',
    'build',
    'parse_program',
    'Context',
    'DashError',
    'DashSyntaxError',
]
