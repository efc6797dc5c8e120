from enum import Enum
from typing import Optional

from bcc.tokens import Span


class ErrorKind(Enum):
    LEX = 'Lexical Error'
    PARSE = 'Parse Error'
    RUNTIME = 'Runtime Error'


class BccError(Exception):
    """Base exception for every error the BCC pipeline reports.

    Carries the phase (`kind`), a specific tag (`name`, e.g. 'UnpackMismatch'),
    the human readable `message`, the source `span` it refers to and an
    optional `help` hint for the diagnostics renderer.
    """
    kind = ErrorKind.RUNTIME

    def __init__(self, name: str, message: str, span: Span, help: Optional[str] = None):
        super().__init__(message)
        self.name = name
        self.message = message
        self.span = span
        self.help = help

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}: {self.message!r} at {self.span.start}..{self.span.end})"


class LexError(BccError):
    kind = ErrorKind.LEX


class ParseError(BccError):
    kind = ErrorKind.PARSE


class EvalError(BccError):
    kind = ErrorKind.RUNTIME


class BuiltinError(Exception):
    """Raised by built-in function bodies; the interpreter wraps it in an EvalError."""
    def __init__(self, message: str, help: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.help = help
