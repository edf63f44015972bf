"""Runtime value model for the Alp interpreter.

Every value produced during evaluation is an `Object` carrying a kind tag
(`type()`) and a user-facing rendering (`inspect()`). Booleans and null
are process-wide singletons (`TRUE`, `FALSE`, `NULL`); the evaluator may
compare them by identity, but the dataclass equality defined here also
makes them equal by value.

`ReturnValue` and `Error` are control-flow carriers rather than user
data: a `ReturnValue` unwinds to the nearest function boundary and an
`Error` aborts the statement sequence it appears in.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Union

if TYPE_CHECKING:
    from .ast import BlockStatement, Identifier
    from .environment import Environment


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    value &= (1 << 64) - 1
    if value > INT64_MAX:
        value -= 1 << 64
    return value


class ObjectType(str, enum.Enum):
    INTEGER = 'INTEGER'
    BOOLEAN = 'BOOLEAN'
    NULL = 'NULL'
    STRING = 'STRING'
    ARRAY = 'ARRAY'
    HASH = 'HASH'
    FUNCTION = 'FUNCTION'
    BUILTIN = 'BUILTIN'
    RETURN_VALUE = 'RETURN_VALUE'
    ERROR = 'ERROR'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HashKey:
    """Lookup key of a hashable object: its kind plus a primitive value."""
    type: ObjectType
    value: Union[int, str]


class Object:
    """Base class for all runtime values."""

    def type(self) -> ObjectType:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


@dataclass
class Integer(Object):
    value: int

    def type(self) -> ObjectType:
        return ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.INTEGER, self.value)


@dataclass
class Boolean(Object):
    value: bool

    def type(self) -> ObjectType:
        return ObjectType.BOOLEAN

    def inspect(self) -> str:
        return 'true' if self.value else 'false'

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.BOOLEAN, 1 if self.value else 0)


@dataclass
class Null(Object):
    def type(self) -> ObjectType:
        return ObjectType.NULL

    def inspect(self) -> str:
        return 'null'


@dataclass
class String(Object):
    value: str

    def type(self) -> ObjectType:
        return ObjectType.STRING

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(ObjectType.STRING, self.value)


@dataclass
class Array(Object):
    elements: List[Object] = field(default_factory=list)

    def type(self) -> ObjectType:
        return ObjectType.ARRAY

    def inspect(self) -> str:
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'


@dataclass
class HashPair:
    key: Object
    value: Object


@dataclass
class Hash(Object):
    """Maps a HashKey to the original key object and its value.

    Keeping the key object next to the value lets `inspect()` render the
    key as it was written while lookups go through the primitive key.
    """
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)

    def type(self) -> ObjectType:
        return ObjectType.HASH

    def inspect(self) -> str:
        entries = ', '.join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return '{' + entries + '}'


@dataclass(eq=False)
class Function(Object):
    """A closure: parameters and body plus the environment it was defined in.

    `env` is shared with the defining scope, not copied, so the function
    sees later bindings made there and keeps that scope alive after the
    defining call returns.
    """
    parameters: List['Identifier']
    body: 'BlockStatement'
    env: 'Environment' = field(repr=False)

    def type(self) -> ObjectType:
        return ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


@dataclass
class ReturnValue(Object):
    value: Object

    def type(self) -> ObjectType:
        return ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class Error(Object):
    message: str

    def type(self) -> ObjectType:
        return ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_hashable(obj: Any) -> bool:
    return isinstance(obj, (Integer, Boolean, String))


def is_error(obj: Optional[Object]) -> bool:
    return obj is not None and obj.type() == ObjectType.ERROR


def type_name(obj: Optional[Object]) -> str:
    """Return the kind tag of a runtime value for use in messages."""
    if obj is None:
        return 'NONE'
    return str(obj.type())
