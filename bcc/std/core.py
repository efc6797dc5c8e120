import math
import re
from typing import Any, List

from bcc.builtin_function import BuiltinFunction, Param
from bcc.errors import BuiltinError
from bcc.types import TupleVal, fits_int, is_int, to_string, type_name

# Same digits as number literals, with an optional sign; ASCII only.
INT_TEXT = re.compile(r"[+-]?[0-9]+")
DOUBLE_TEXT = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")


def std_len(args: List[Any]) -> Any:
    value, = args
    if isinstance(value, str):
        return len(value)
    if isinstance(value, TupleVal):
        return len(value.items)
    raise BuiltinError(f"len() is not supported for type {type_name(value)}",
                       help='len() accepts a string or a tuple.')


def std_type(args: List[Any]) -> Any:
    value, = args
    return type_name(value)


def std_str(args: List[Any]) -> Any:
    value, = args
    return to_string(value)


def std_int(args: List[Any]) -> Any:
    value, = args
    if isinstance(value, bool):
        return 1 if value else 0
    if is_int(value):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise BuiltinError(f"cannot convert {to_string(value)} to int")
        result = math.trunc(value)
    elif isinstance(value, str):
        text = value.strip()
        if not INT_TEXT.fullmatch(text):
            raise BuiltinError(f"cannot parse int from '{value}'")
        result = int(text)
    else:
        raise BuiltinError(f"cannot convert {type_name(value)} to int")
    if not fits_int(result):
        raise BuiltinError(f"value {to_string(value)} is out of range for int")
    return result


def std_double(args: List[Any]) -> Any:
    value, = args
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not DOUBLE_TEXT.fullmatch(text):
            raise BuiltinError(f"cannot parse double from '{value}'")
        return float(text)
    raise BuiltinError(f"cannot convert {type_name(value)} to double")


def core_builtins() -> List[BuiltinFunction]:
    return [
        BuiltinFunction('len', (Param('value'),), std_len, 'Length of a string or tuple.'),
        BuiltinFunction('type', (Param('value'),), std_type, 'Type name of a value.'),
        BuiltinFunction('str', (Param('value'),), std_str, 'Display form of a value.'),
        BuiltinFunction('int', (Param('value'),), std_int, 'Convert to int, truncating doubles.'),
        BuiltinFunction('double', (Param('value'),), std_double, 'Convert to double.'),
    ]
