from typing import Any, List

from bcc.builtin_function import BuiltinFunction, Param
from bcc.errors import BuiltinError
from bcc.types import TupleVal, is_int, to_string, type_name

MAX_REPEAT_LENGTH = 2 ** 31


def require_string(func: str, param: str, value: Any):
    if not isinstance(value, str):
        raise BuiltinError(f"{func}() expects a string for '{param}', got {type_name(value)}")


def std_upper(args: List[Any]) -> Any:
    s, = args
    require_string('upper', 's', s)
    return s.upper()


def std_lower(args: List[Any]) -> Any:
    s, = args
    require_string('lower', 's', s)
    return s.lower()


def std_trim(args: List[Any]) -> Any:
    s, = args
    require_string('trim', 's', s)
    return s.strip()


def std_split(args: List[Any]) -> Any:
    s, sep = args
    require_string('split', 's', s)
    require_string('split', 'sep', sep)
    if sep == '':
        raise BuiltinError('split() separator must not be empty')
    return TupleVal(tuple(s.split(sep)))


def std_join(args: List[Any]) -> Any:
    parts, sep = args
    if not isinstance(parts, TupleVal):
        raise BuiltinError(f"join() expects a tuple for 'parts', got {type_name(parts)}",
                           help='Build the parts with a tuple literal: join(("a", "b"), sep=",")')
    require_string('join', 'sep', sep)
    return sep.join(to_string(part) for part in parts.items)


def std_repeat(args: List[Any]) -> Any:
    s, times = args
    require_string('repeat', 's', s)
    if not is_int(times):
        raise BuiltinError(f"repeat() expects an int for 'times', got {type_name(times)}")
    if times < 0:
        raise BuiltinError('repeat() count must not be negative')
    if len(s) * times > MAX_REPEAT_LENGTH:
        raise BuiltinError('repeat() result is too large')
    return s * times


def string_builtins() -> List[BuiltinFunction]:
    return [
        BuiltinFunction('upper', (Param('s'),), std_upper),
        BuiltinFunction('lower', (Param('s'),), std_lower),
        BuiltinFunction('trim', (Param('s'),), std_trim, 'Strip leading and trailing whitespace.'),
        BuiltinFunction('split', (Param('s'), Param.optional('sep', ' ')), std_split,
                        'Split a string into a tuple of strings.'),
        BuiltinFunction('join', (Param('parts'), Param.optional('sep', '')), std_join,
                        'Concatenate the display forms of a tuple\'s elements.'),
        BuiltinFunction('repeat', (Param('s'), Param('times')), std_repeat),
    ]
