"""Data model for JSON values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union


# ---------------------------------------------------------------------------
# Null — singleton
# ---------------------------------------------------------------------------

class VNull:
    """The JSON ``null`` literal."""

    _instance: VNull | None = None

    def __new__(cls) -> VNull:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False


Null = VNull()


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VBool:
    value: bool


@dataclass(frozen=True, slots=True)
class VNumber:
    value: int | float


@dataclass(frozen=True, slots=True)
class VString:
    value: str  # raw content, never escaped


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VArray:
    items: tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)


@dataclass(frozen=True, slots=True)
class VObject:
    """Ordered key/value record.

    Pairs are kept in insertion order, duplicates included, so that
    enumeration order is exactly the order the parser met the keys in.
    """

    entries: tuple[tuple[str, Value], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        return [k for k, _ in self.entries]

    def items(self) -> tuple[tuple[str, Value], ...]:
        return self.entries

    def get(self, key: str, default: Value | None = None) -> Value | None:
        """Return the value of the last pair named *key*."""
        for k, v in reversed(self.entries):
            if k == key:
                return v
        return default


Scalar = Union[VNull, VBool, VNumber, VString]
Value = Union[VNull, VBool, VNumber, VString, VArray, VObject]
