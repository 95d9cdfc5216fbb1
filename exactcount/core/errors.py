"""Exception types for the counting engines.

Every check runs synchronously at the offending call; nothing is retried or
swallowed. Non-int arguments raise the builtin `TypeError` instead.
"""

from __future__ import annotations


class InvalidDomainError(ValueError):
    """Raised when an argument violates an operation's documented precondition."""


class CountOverflowError(Exception):
    """Raised when an argument exceeds its YAML-configured domain bound."""

    def __init__(self, name: str, value: int, bound: int) -> None:
        self.name = name
        self.value = value
        self.bound = bound
        super().__init__(f"{name}={value} exceeds configured bound {bound}")


class SeriesIdentityError(Exception):
    """Raised when a generating-function identity check fails."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"series identity violations: {', '.join(violations)}")
