# BCC language package
# This package provides the lexer, parser and tree-walking interpreter for BCC.
__version__ = '0.1.0'

from .errors import BccError, LexError, ParseError, EvalError, BuiltinError
from .interpreter import run_program, run_source, Interpreter
from .parser import parse_program

__all__ = [
    'run_program',
    'run_source',
    'parse_program',
    'Interpreter',
    'BccError',
    'LexError',
    'ParseError',
    'EvalError',
    'BuiltinError',
]
