from dataclasses import dataclass
from typing import Callable, List

from .types import Object, ObjectType


@dataclass(eq=False)
class Builtin(Object):
    name: str
    fn: Callable[[List[Object]], Object]

    def type(self) -> ObjectType:
        return ObjectType.BUILTIN

    def inspect(self) -> str:
        return 'builtin function'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
