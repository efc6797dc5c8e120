from typing import List

from bcc.builtin_function import BuiltinFunction
from .core import core_builtins
from .io import io_builtins
from .numeric import numeric_builtins
from .strings import string_builtins


def standard_builtins() -> List[BuiltinFunction]:
    """Return the built-ins every interpreter starts with."""
    return core_builtins() + numeric_builtins() + string_builtins() + io_builtins()
