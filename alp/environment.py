from typing import Dict, Optional, Tuple

from .types import Object


class Environment:
    """A scope frame mapping identifiers to values, chained to its enclosing frame.

    Lookups walk outward through `outer`; `set` always binds in this frame,
    so an inner scope shadows an outer name instead of overwriting it.
    Frames are shared by reference between a scope and the closures
    created in it.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.store: Dict[str, Object] = {}
        self.outer = outer

    def get(self, name: str) -> Tuple[Optional[Object], bool]:
        if name in self.store:
            return self.store[name], True
        if self.outer is not None:
            return self.outer.get(name)
        return None, False

    def set(self, name: str, value: Object) -> Object:
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.get(name)[1]

    def __repr__(self) -> str:
        return f"<Environment {sorted(self.store)} outer={self.outer is not None}>"


def new_environment() -> Environment:
    return Environment()


def new_enclosed_environment(outer: Environment) -> Environment:
    return Environment(outer=outer)
