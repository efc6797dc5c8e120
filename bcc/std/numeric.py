"""Numeric built-ins: abs, min, max, pow, sqrt, round and divmod.

Int operands produce ints wherever the result is integral by construction;
any double operand turns the result into a double. Int results are checked
against the 64-bit range like the arithmetic operators.
"""

import math
from typing import Any, List

from bcc.builtin_function import BuiltinFunction, Param
from bcc.errors import BuiltinError
from bcc.types import TupleVal, fits_int, is_int, is_number, type_name

DIVMOD_MODES = ('down', 'zero')


def require_number(func: str, param: str, value: Any):
    if not is_number(value):
        raise BuiltinError(f"{func}() expects a number for '{param}', got {type_name(value)}")


def checked_int(func: str, value: int) -> int:
    if not fits_int(value):
        raise BuiltinError(f"integer overflow in {func}()")
    return value


def std_abs(args: List[Any]) -> Any:
    x, = args
    require_number('abs', 'x', x)
    if is_int(x):
        return checked_int('abs', abs(x))
    return abs(x)


def std_min(args: List[Any]) -> Any:
    a, b = args
    require_number('min', 'a', a)
    require_number('min', 'b', b)
    return b if b < a else a


def std_max(args: List[Any]) -> Any:
    a, b = args
    require_number('max', 'a', a)
    require_number('max', 'b', b)
    return b if b > a else a


def std_pow(args: List[Any]) -> Any:
    base, exp = args
    require_number('pow', 'base', base)
    require_number('pow', 'exp', exp)
    if is_int(base) and is_int(exp) and exp >= 0:
        if abs(base) > 1 and exp > 63:
            raise BuiltinError('integer overflow in pow()')
        return checked_int('pow', base ** exp)
    try:
        return math.pow(base, exp)
    except ValueError:
        raise BuiltinError(f"pow() is undefined for base {base} and exponent {exp}") from None
    except OverflowError:
        raise BuiltinError('pow() result is too large') from None


def std_sqrt(args: List[Any]) -> Any:
    x, = args
    require_number('sqrt', 'x', x)
    if x < 0:
        raise BuiltinError('sqrt() of a negative number', help='sqrt() is only defined for x >= 0.')
    return math.sqrt(x)


def round_half_away_from_zero(x: float, digits: int) -> float:
    try:
        factor = 10.0 ** abs(digits)
    except OverflowError:
        return x if digits > 0 else math.copysign(0.0, x)
    if digits >= 0:
        shifted = abs(x) * factor
        if not math.isfinite(shifted):
            return x
        return math.copysign(math.floor(shifted + 0.5) / factor, x)
    return math.copysign(math.floor(abs(x) / factor + 0.5) * factor, x)


def round_int_half_away_from_zero(x: int, digits: int) -> int:
    if digits >= 0:
        return x
    # every i64 is below 10**19
    if digits < -19:
        return 0
    factor = 10 ** -digits
    q, r = divmod(abs(x), factor)
    if 2 * r >= factor:
        q += 1
    return q * factor if x >= 0 else -(q * factor)


def std_round(args: List[Any]) -> Any:
    x, digits = args
    require_number('round', 'x', x)
    if not is_int(digits):
        raise BuiltinError(f"round() expects an int for 'digits', got {type_name(digits)}")
    if is_int(x):
        return checked_int('round', round_int_half_away_from_zero(x, digits))
    if math.isnan(x) or math.isinf(x):
        return x
    return round_half_away_from_zero(x, digits)


def std_divmod(args: List[Any]) -> Any:
    a, b, mode = args
    require_number('divmod', 'a', a)
    require_number('divmod', 'b', b)
    if mode not in DIVMOD_MODES:
        shown = mode if isinstance(mode, str) else type_name(mode)
        raise BuiltinError(f"unknown divmod mode '{shown}'",
                           help='mode must be "down" (floor) or "zero" (truncate).')
    if b == 0:
        raise BuiltinError('division by zero in divmod()')
    if is_int(a) and is_int(b):
        if mode == 'down':
            q = a // b
        else:
            q = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                q = -q
        q = checked_int('divmod', q)
        return TupleVal((q, a - q * b))
    a, b = float(a), float(b)
    q = a / b
    if math.isfinite(q):
        q = float(math.floor(q) if mode == 'down' else math.trunc(q))
    return TupleVal((q, a - q * b))


def numeric_builtins() -> List[BuiltinFunction]:
    return [
        BuiltinFunction('abs', (Param('x'),), std_abs),
        BuiltinFunction('min', (Param('a'), Param('b')), std_min),
        BuiltinFunction('max', (Param('a'), Param('b')), std_max),
        BuiltinFunction('pow', (Param('base'), Param('exp')), std_pow),
        BuiltinFunction('sqrt', (Param('x'),), std_sqrt),
        BuiltinFunction('round', (Param('x'), Param.optional('digits', 0)), std_round,
                        'Round half away from zero to the given number of decimal digits.'),
        BuiltinFunction('divmod', (Param('a'), Param('b'), Param.optional('mode', 'down')), std_divmod,
                        'Quotient and remainder; mode "down" floors, "zero" truncates.'),
    ]
