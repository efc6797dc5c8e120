"""Lexical scanner for the BCC language.

`tokenize` turns a source string into a list of tokens, always terminated by
an EOF token. Scanning is fail-fast: the first malformed character, string
or number raises a `LexError` and no further tokens are produced.
"""

from __future__ import annotations

from typing import List

from .errors import LexError
from .tokens import (
    Span, Token, IDENT, STRING, INT, DOUBLE, EOF,
    SINGLE_CHAR_TOKENS, EQUAL_SUFFIXED, KEYWORDS,
)
from .types import INT_MAX


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_ident_start(c: str) -> bool:
    return c.isalpha() or c == '_'


def is_ident_part(c: str) -> bool:
    return c.isalnum() or c == '_'


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Whitespace and `//` line comments are skipped. The minus sign is always
    its own token; negative literals are built by the parser's unary rule.
    """
    tokens: List[Token] = []
    length = len(source)
    i = 0

    def peek(offset: int = 0) -> str:
        pos = i + offset
        return source[pos] if pos < length else '\0'

    def add(token_type: str, start: int, value: str = None):
        text = source[start:i] if value is None else value
        tokens.append(Token(token_type, text, Span(start, i)))

    while i < length:
        start = i
        c = source[i]
        i += 1

        if c.isspace():
            continue
        if c == '/' and peek() == '/':
            while i < length and source[i] != '\n':
                i += 1
            continue
        if c in EQUAL_SUFFIXED:
            if peek() == '=':
                i += 1
            add(source[start:i], start)
            continue
        if c in SINGLE_CHAR_TOKENS:
            add(c, start)
            continue

        # String literal: the token value is the raw text between the quotes,
        # escape sequences are decoded by the parser.
        if c == '"':
            while i < length and source[i] != '"':
                if source[i] == '\\' and i + 1 < length:
                    i += 1
                i += 1
            if i >= length:
                raise LexError('UnterminatedString', 'Unterminated string', Span(start, length),
                               help='String literals must be closed with a matching \'"\'.')
            i += 1  # closing quote
            add(STRING, start, source[start + 1:i - 1])
            continue

        if is_digit(c):
            while is_digit(peek()):
                i += 1
            is_double = False
            # A '.' only belongs to the number when a digit follows it.
            if peek() == '.' and is_digit(peek(1)):
                is_double = True
                i += 1
                while is_digit(peek()):
                    i += 1
            text = source[start:i]
            if is_double:
                try:
                    float(text)
                except ValueError:
                    raise LexError('InvalidNumber', f'Invalid double: {text}', Span(start, i))
                add(DOUBLE, start)
            else:
                if int(text) > INT_MAX:
                    raise LexError('InvalidNumber', f'Invalid integer: {text}', Span(start, i),
                                   help=f'Integers must fit in 64 bits (at most {INT_MAX}).')
                add(INT, start)
            continue

        if is_ident_start(c):
            while i < length and is_ident_part(source[i]):
                i += 1
            text = source[start:i]
            add(text if text in KEYWORDS else IDENT, start)
            continue

        raise LexError('UnexpectedCharacter', f"Unexpected character: '{c}'", Span.single(start))

    tokens.append(Token(EOF, '', Span.single(length)))
    return tokens
