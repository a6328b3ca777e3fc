"""Runtime values of the Monkey language."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from monkeylang.environment import Environment
from monkeylang.nodes import BlockStatement, Identifier

_UINT64_MASK = (1 << 64) - 1
_FNV64_OFFSET = 14695981039346656037
_FNV64_PRIME = 1099511628211


class ObjectType(str, Enum):
    """The type names that runtime values report."""

    RETURN_VALUE = "RETURN_VALUE"
    FUNCTION = "FUNCTION"
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    BUILTIN = "BUILTIN"
    STRING = "STRING"
    ARRAY = "ARRAY"
    ERROR = "ERROR"
    HASH = "HASH"
    NULL = "NULL"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HashKey:
    """The key under which a hashable value is stored in a hash."""

    type: ObjectType
    value: int


class MonkeyObject(ABC):
    """Base of every runtime value."""

    type: ClassVar[ObjectType]

    @abstractmethod
    def inspect(self) -> str:
        """Return the value as the interpreter prints it."""


@dataclass
class Integer(MonkeyObject):
    type: ClassVar[ObjectType] = ObjectType.INTEGER
    value: int

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.type, self.value & _UINT64_MASK)


@dataclass
class Boolean(MonkeyObject):
    type: ClassVar[ObjectType] = ObjectType.BOOLEAN
    value: bool

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.type, 1 if self.value else 0)


@dataclass
class Null(MonkeyObject):
    type: ClassVar[ObjectType] = ObjectType.NULL

    def inspect(self) -> str:
        return "null"


@dataclass
class ReturnValue(MonkeyObject):
    """Wraps a value being returned out of a block."""

    type: ClassVar[ObjectType] = ObjectType.RETURN_VALUE
    value: MonkeyObject

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class Error(MonkeyObject):
    """A runtime error value that stops evaluation."""

    type: ClassVar[ObjectType] = ObjectType.ERROR
    message: str

    def inspect(self) -> str:
        return "ERROR: " + self.message


@dataclass(eq=False)
class Function(MonkeyObject):
    """A user-defined function closed over the scope it was made in."""

    type: ClassVar[ObjectType] = ObjectType.FUNCTION
    parameters: list[Identifier]
    body: BlockStatement
    env: Environment = field(repr=False)

    def inspect(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


@dataclass
class String(MonkeyObject):
    type: ClassVar[ObjectType] = ObjectType.STRING
    value: str

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        digest = _FNV64_OFFSET
        for byte in self.value.encode("utf-8"):
            digest ^= byte
            digest = (digest * _FNV64_PRIME) & _UINT64_MASK
        return HashKey(self.type, digest)


@dataclass(eq=False)
class Builtin(MonkeyObject):
    """A function provided by the interpreter itself."""

    type: ClassVar[ObjectType] = ObjectType.BUILTIN
    fn: Callable[..., MonkeyObject]

    def inspect(self) -> str:
        return "builtin function"


@dataclass
class Array(MonkeyObject):
    type: ClassVar[ObjectType] = ObjectType.ARRAY
    elements: list[MonkeyObject] = field(default_factory=list)

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"


@dataclass
class HashPair:
    """A key as written and the value stored for it."""

    key: MonkeyObject
    value: MonkeyObject


@dataclass
class Hash(MonkeyObject):
    type: ClassVar[ObjectType] = ObjectType.HASH
    pairs: dict[HashKey, HashPair] = field(default_factory=dict)

    def inspect(self) -> str:
        items = ", ".join(
            f"{pair.key.inspect()}: {pair.value.inspect()}"
            for pair in self.pairs.values()
        )
        return "{" + items + "}"