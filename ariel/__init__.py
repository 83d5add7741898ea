# Ariel language package
# This package provides a parser and tree-walking interpreter for Ariel.
from .environment import Environment
from .errors import ArielSyntaxError
from .interpreter import run_program, Interpreter
from .parser import parse_program
from .repl import ReplSession

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'Environment',
    'ArielSyntaxError',
    'ReplSession',
]
