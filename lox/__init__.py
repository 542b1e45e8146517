# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import LoxRuntimeError, ErrorReporter
from .interpreter import Interpreter, LoxFunction
from .runner import Lox, run_source

__all__ = [
    'Lox',
    'run_source',
    'Interpreter',
    'LoxFunction',
    'LoxRuntimeError',
    'ErrorReporter',
]
