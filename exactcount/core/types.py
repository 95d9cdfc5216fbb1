"""Data types shared by the counting engines.

All types are frozen dataclasses (immutable) and validate themselves on
construction:
- a `VoteSequence` holds only +1 / -1 symbols,
- a `Partition` holds positive parts in non-increasing order.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum, unique
from typing import Iterable, Mapping

from .errors import InvalidDomainError


def require_natural(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise InvalidDomainError(f"{name} must be non-negative: {value}")


def require_vote(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value not in (1, -1):
        raise InvalidDomainError(f"{name} must be +1 or -1: {value!r}")


@unique
class Vote(IntEnum):
    """A single ballot: +1 for candidate A, -1 for candidate B."""
    PLUS = 1
    MINUS = -1


@dataclass(frozen=True)
class VoteSequence:
    """An ordered vote sequence; p = plus_count, q = minus_count."""

    symbols: tuple[int, ...]

    def __post_init__(self) -> None:
        for i, s in enumerate(self.symbols):
            require_vote(f"symbols[{i}]", s)

    @classmethod
    def of(cls, symbols: Iterable[int]) -> "VoteSequence":
        return cls(tuple(symbols))

    @property
    def length(self) -> int:
        return len(self.symbols)

    @property
    def plus_count(self) -> int:
        return sum(1 for s in self.symbols if s == Vote.PLUS)

    @property
    def minus_count(self) -> int:
        return self.length - self.plus_count

    def tail(self) -> "VoteSequence":
        if not self.symbols:
            raise InvalidDomainError("the empty sequence has no tail")
        return VoteSequence(self.symbols[1:])

    def suffix_sums(self) -> tuple[int, ...]:
        """Sums of the non-empty suffixes, shortest first."""
        out: list[int] = []
        total = 0
        for s in reversed(self.symbols):
            total += s
            out.append(total)
        return tuple(out)

    def stays_positive(self) -> bool:
        return all(total > 0 for total in self.suffix_sums())


@dataclass(frozen=True)
class Partition:
    """A multiset of positive integers, stored in non-increasing order."""

    parts: tuple[int, ...]

    def __post_init__(self) -> None:
        for i, part in enumerate(self.parts):
            if not isinstance(part, int) or isinstance(part, bool):
                raise TypeError(f"parts[{i}] must be an int")
            if part < 1:
                raise InvalidDomainError(f"parts[{i}] must be positive: {part}")
        if any(a < b for a, b in zip(self.parts, self.parts[1:])):
            raise InvalidDomainError("parts must be in non-increasing order")

    @classmethod
    def of(cls, parts: Iterable[int]) -> "Partition":
        return cls(tuple(sorted(parts, reverse=True)))

    @classmethod
    def from_multiplicities(cls, multiplicities: Mapping[int, int]) -> "Partition":
        parts: list[int] = []
        for part, count in multiplicities.items():
            require_natural(f"multiplicity of {part}", count)
            parts.extend([part] * count)
        return cls.of(parts)

    @property
    def total(self) -> int:
        return sum(self.parts)

    @property
    def is_odd(self) -> bool:
        return all(part % 2 == 1 for part in self.parts)

    @property
    def is_distinct(self) -> bool:
        return len(set(self.parts)) == len(self.parts)

    def multiplicities(self) -> dict[int, int]:
        return dict(Counter(self.parts))
