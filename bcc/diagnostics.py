"""Render BCC errors as human-readable reports.

A report looks like:

    Runtime Error: Undefined variable 'y'
     --> script.bcc:2:7
      |
    2 | print y + 1
      |       ^
      = help: Assign a value before using it: y = ...
"""

import sys
from typing import Optional, TextIO, Tuple

from .errors import BccError


def line_col(source: str, offset: int) -> Tuple[int, int]:
    """Return the 1-based line and column of a character offset into source."""
    offset = max(0, min(offset, len(source)))
    line = source.count('\n', 0, offset) + 1
    line_start = source.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


def format_error(error: BccError, source: str, filename: Optional[str] = None) -> str:
    name = filename or '<repl>'
    start = max(0, min(error.span.start, len(source)))
    line, col = line_col(source, start)
    line_start = start - (col - 1)
    line_end = source.find('\n', line_start)
    if line_end == -1:
        line_end = len(source)
    text = source[line_start:line_end].rstrip('\r')

    # the underline is clipped to the first line of the span
    end = min(max(error.span.end, start), line_start + len(text))
    width = max(1, end - start)

    number = str(line)
    pad = ' ' * len(number)
    lines = [
        f"{error.kind.value}: {error.message}",
        f"{pad}--> {name}:{line}:{col}",
        f"{pad} |",
        f"{number} | {text}",
        f"{pad} | {' ' * (col - 1)}{'^' * width}",
    ]
    if error.help:
        lines.append(f"{pad} = help: {error.help}")
    return '\n'.join(lines)


def report(error: BccError, source: str, filename: Optional[str] = None, stream: Optional[TextIO] = None):
    print(format_error(error, source, filename), file=stream or sys.stderr)
