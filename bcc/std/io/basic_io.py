import os
import sys
from typing import Optional, TextIO

from bcc.errors import BuiltinError
from bcc.types import NIL, NilVal


class BasicIO:
    """File and console access backing the io built-ins.

    Streams default to the process's current stdin/stdout, looked up at call
    time so that redirected or captured streams are honoured.
    """
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    def read_line(self, prompt: str) -> str:
        stdout = sys.stdout if self.stdout is None else self.stdout
        stdin = sys.stdin if self.stdin is None else self.stdin
        if prompt:
            stdout.write(prompt)
            stdout.flush()
        line = stdin.readline()
        # readline returns '' only at end of input
        return line.rstrip('\r\n')

    def read_file(self, path: str) -> str:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            raise BuiltinError(f"file not found: {path}") from None
        except PermissionError:
            raise BuiltinError(f"permission denied: {path}") from None
        except (OSError, UnicodeDecodeError) as e:
            raise BuiltinError(f"error reading file {path}: {e}") from None

    def write_file(self, path: str, data: str, append: bool) -> NilVal:
        try:
            with open(path, 'a' if append else 'w', encoding='utf-8') as f:
                f.write(data)
            return NIL
        except PermissionError:
            raise BuiltinError(f"permission denied: {path}") from None
        except OSError as e:
            raise BuiltinError(f"error writing file {path}: {e}") from None

    def file_exists(self, path: str) -> bool:
        return os.path.exists(path)
