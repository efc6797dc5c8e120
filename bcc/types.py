"""Runtime value model for BCC.

BCC values are represented with plain Python objects where that is
unambiguous and with small marker classes otherwise:

    nil     -> NilVal (the shared instance NIL)
    bool    -> bool
    int     -> int (restricted to the signed 64-bit range)
    double  -> float
    string  -> str
    tuple   -> TupleVal

All of them are immutable, so copying a value is the same as sharing it and
the language keeps value semantics without explicit cloning. This module
also implements the operations every value supports: type names,
truthiness, equality and display.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Tuple
import math


class NilVal:
    """Marker object for the BCC `nil` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def fits_int(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


@dataclass(frozen=True)
class TupleVal:
    """An ordered, fixed-size aggregate used for multi-value results.

    Equality between tuples goes through `values_equal`, never through the
    dataclass `__eq__`, because BCC equality is not Python equality
    (`true` is not `1`).
    """
    items: Tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __repr__(self) -> str:
        return f"Tuple{self.items!r}"


def is_int(value: Any) -> bool:
    # bool is a subclass of int; BCC keeps them apart
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return is_int(value) or isinstance(value, float)


def type_name(value: Any) -> str:
    """Return the BCC type name of a runtime value."""
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, int):
        return 'int'
    if isinstance(value, float):
        return 'double'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, TupleVal):
        return 'tuple'
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    if isinstance(value, NilVal):
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return len(value) > 0
    if isinstance(value, TupleVal):
        return len(value.items) > 0
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality with int/double cross comparison.

    Values of different variants are never equal, except that an int and a
    double are equal when their numeric values coincide.
    """
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, bool) and isinstance(b, bool):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, NilVal) and isinstance(b, NilVal):
        return True
    if isinstance(a, TupleVal) and isinstance(b, TupleVal):
        if len(a.items) != len(b.items):
            return False
        return all(values_equal(x, y) for x, y in zip(a.items, b.items))
    return False


def format_double(x: float) -> str:
    """Format a double with at least one decimal place and no exponent."""
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'inf' if x > 0 else '-inf'
    if x.is_integer():
        return f"{x:.1f}"
    text = repr(x)
    if 'e' in text or 'E' in text:
        # repr gives the shortest round-trip digits; Decimal lays them out positionally
        text = format(Decimal(text), 'f')
    return text


def to_string(value: Any) -> str:
    """Convert a BCC value to the text `print` writes for it."""
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_double(value)
    if isinstance(value, str):
        return value
    if isinstance(value, TupleVal):
        inner = ', '.join(to_string(item) for item in value.items)
        # a single-element tuple keeps its trailing comma to read differently from a grouping
        if len(value.items) == 1:
            inner += ','
        return '(' + inner + ')'
    return str(value)
