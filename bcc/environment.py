from typing import Any, Dict, Iterator, Optional


class Environment:
    """Represents a scope mapping identifiers to values.

    Scopes form a chain through `parent`; the outermost scope has none.
    Lookups and assignments walk the chain outward from the scope they are
    called on.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def get(self, name: str) -> Any:
        """Return the value bound to name, raising KeyError if no scope defines it."""
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise KeyError(name)

    def is_defined(self, name: str) -> bool:
        return self.find(name) is not None

    def find(self, name: str) -> Optional['Environment']:
        """Return the nearest scope that defines name, or None."""
        env = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def define(self, name: str, value: Any):
        self.values[name] = value

    def assign(self, name: str, value: Any):
        # Update the nearest existing binding, otherwise declare it here.
        owner = self.find(name)
        if owner is None:
            owner = self
        owner.values[name] = value

    def depth(self) -> int:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return depth

    def chain(self) -> Iterator['Environment']:
        env = self
        while env is not None:
            yield env
            env = env.parent
