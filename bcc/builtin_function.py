from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from bcc.types import to_string


@dataclass(frozen=True)
class Param:
    name: str
    required: bool = True
    default: Any = None

    @staticmethod
    def optional(name: str, default: Any) -> 'Param':
        return Param(name, False, default)


@dataclass
class BuiltinFunction:
    """A host function callable from BCC code.

    `fn` receives the fully resolved argument list, one value per declared
    parameter in declaration order, and returns a BCC value or raises
    `BuiltinError`.
    """
    name: str
    params: Tuple[Param, ...]
    fn: Callable[[List[Any]], Any]
    doc: Optional[str] = None

    def param_index(self, name: str) -> Optional[int]:
        for i, param in enumerate(self.params):
            if param.name == name:
                return i
        return None

    def signature(self) -> str:
        parts = []
        for param in self.params:
            if param.required:
                parts.append(param.name)
            else:
                default = param.default
                shown = f'"{default}"' if isinstance(default, str) else to_string(default)
                parts.append(f"{param.name}={shown}")
        return f"{self.name}({', '.join(parts)})"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
