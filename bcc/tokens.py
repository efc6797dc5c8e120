"""Token and source span definitions for the BCC language.

Every token produced by the lexer, and every AST node built by the parser,
carries a `Span` locating it in the original source string. Offsets are
character offsets and the end offset is exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Half-open range `[start, end)` of character offsets into the source."""
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"invalid span: start {self.start} > end {self.end}")

    @staticmethod
    def single(pos: int) -> 'Span':
        return Span(pos, pos + 1)

    def to(self, other: 'Span') -> 'Span':
        """Return the span running from the start of self to the end of other."""
        return Span(self.start, max(self.start, other.end))

    def text(self, source: str) -> str:
        return source[self.start:self.end]


# Token types. Punctuation and operators use their own text as the type,
# keywords use the keyword text, literal kinds use upper-case names.
IDENT = 'IDENT'
STRING = 'STRING'
INT = 'INT'
DOUBLE = 'DOUBLE'
EOF = 'EOF'

SINGLE_CHAR_TOKENS = {
    '(', ')', '{', '}', '[', ']', ',', '.', '-', '+', ';', '/', '*',
}

# Characters that may be followed by '=' to form a two-character operator.
EQUAL_SUFFIXED = {'!', '=', '<', '>'}

KEYWORDS = {
    'and', 'or', 'not', 'if', 'else', 'while', 'for', 'print',
    'true', 'false', 'nil', 'in',
}


@dataclass(frozen=True)
class Token:
    type: str
    value: str
    span: Span

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, {self.span.start}..{self.span.end})"

    def describe(self) -> str:
        """Human readable form used in parse error messages."""
        if self.type == EOF:
            return 'end of input'
        if self.type == STRING:
            return f"'\"{self.value}\"'"
        return f"'{self.value}'"
