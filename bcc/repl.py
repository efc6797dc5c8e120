"""Interactive read-eval-print loop.

Each line is parsed and run against one long-lived interpreter, so
variables persist between lines. A line holding a single expression that
is not an assignment echoes its value.
"""

from typing import Callable, Optional, TextIO

from . import __version__
from .ast import Assign, ExprStmt, MultiAssign
from .diagnostics import report
from .errors import BccError
from .interpreter import Interpreter
from .parser import parse_program
from .types import to_string

BANNER = f"BCC Interpreter v{__version__}"
PROMPT = '> '
EXIT_COMMANDS = ('exit', 'quit')


def run_line(source: str, interpreter: Interpreter, stream: Optional[TextIO] = None) -> bool:
    try:
        program = parse_program(source)
        body = program.body
        if len(body) == 1 and isinstance(body[0], ExprStmt) \
                and not isinstance(body[0].expr, (Assign, MultiAssign)):
            value = interpreter.evaluate(body[0].expr)
            print(to_string(value), file=interpreter.out)
        else:
            interpreter.run(program)
    except BccError as e:
        report(e, source, None, stream)
        return False
    return True


def start(interpreter: Optional[Interpreter] = None, read: Callable[[str], str] = input,
          stream: Optional[TextIO] = None):
    if interpreter is None:
        interpreter = Interpreter()
    out = interpreter.out
    print(BANNER, file=out)
    print("Type 'exit' or press Ctrl+D to quit", file=out)
    while True:
        try:
            line = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            break
        line = line.strip()
        if not line:
            continue
        if line in EXIT_COMMANDS:
            print('Goodbye!', file=out)
            break
        run_line(line, interpreter, stream)
