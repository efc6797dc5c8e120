from typing import Any, List, Optional

from bcc.builtin_function import BuiltinFunction, Param
from bcc.errors import BuiltinError
from bcc.types import to_string, type_name
from .basic_io import BasicIO


def io_builtins(basic_io: Optional[BasicIO] = None) -> List[BuiltinFunction]:
    basic_io = basic_io or BasicIO()

    def require_string(func: str, param: str, value: Any):
        if not isinstance(value, str):
            raise BuiltinError(f"{func}() expects a string for '{param}', got {type_name(value)}")

    def std_input(args: List[Any]) -> Any:
        prompt, = args
        return basic_io.read_line(to_string(prompt))

    def std_read_file(args: List[Any]) -> Any:
        path, = args
        require_string('read_file', 'path', path)
        return basic_io.read_file(path)

    def std_write_file(args: List[Any]) -> Any:
        path, data, append = args
        require_string('write_file', 'path', path)
        if not isinstance(append, bool):
            raise BuiltinError(f"write_file() expects a bool for 'append', got {type_name(append)}")
        return basic_io.write_file(path, to_string(data), append)

    def std_file_exists(args: List[Any]) -> Any:
        path, = args
        require_string('file_exists', 'path', path)
        return basic_io.file_exists(path)

    return [
        BuiltinFunction('input', (Param.optional('prompt', ''),), std_input,
                        'Read one line from standard input; "" at end of input.'),
        BuiltinFunction('read_file', (Param('path'),), std_read_file),
        BuiltinFunction('write_file', (Param('path'), Param('data'), Param.optional('append', False)),
                        std_write_file),
        BuiltinFunction('file_exists', (Param('path'),), std_file_exists),
    ]
