"""
Counted-sequence kernel (v1 semantics).

A counted sequence space S(p, q) holds every sequence of p `+1` symbols and q `-1`
symbols. Splitting off the first symbol partitions S(p+1, q+1) into

    +1 :: S(p, q+1)   and   -1 :: S(p+1, q)

which gives Pascal's rule for |S(p, q)| and the first-symbol recursion for the
probability that a uniform member keeps every suffix sum positive.

Both recursions are evaluated bottom-up with one rolling row, so the only limit
on p + q is the caller's time budget (no Python recursion depth involved).
"""

from __future__ import annotations

from fractions import Fraction
from math import comb


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_counts(p: int, q: int) -> None:
    _require_int("p", p)
    _require_int("q", q)
    if p < 0 or q < 0:
        raise ValueError(f"counts must be non-negative: ({p}, {q})")


def pascal_split_count(*, p: int, q: int) -> int:
    """
    |S(p, q)| via the first-symbol split.

    row[b] holds |S(a, b)| for the current a. Base cases: |S(a, 0)| = 1 (all +1)
    and |S(0, b)| = 1 (all -1).
    """
    _require_counts(p, q)

    row = [1] * (q + 1)  # a = 0
    for _a in range(1, p + 1):
        # row[b-1] is already |S(a, b-1)|; row[b] is still |S(a-1, b)|.
        for b in range(1, q + 1):
            row[b] = row[b] + row[b - 1]
    return row[q]


def ballot_number(*, p: int, q: int) -> int:
    """
    Number of members of S(p, q) whose every non-empty suffix sum is positive.

    (p - q) / (p + q) * C(p + q, p) for q < p, which is always an integer.
    0 when q >= p and p + q > 0; 1 for the empty space (the empty sequence).
    """
    _require_counts(p, q)
    if p == 0 and q == 0:
        return 1
    if q >= p:
        return 0
    numerator = (p - q) * comb(p + q, p)
    count, rem = divmod(numerator, p + q)
    if rem != 0:
        raise AssertionError("internal error: ballot number is not integral")
    return count


def stays_positive_recursive(*, p: int, q: int) -> Fraction:
    """
    Probability that a uniform member of S(p, q) stays positive, for 0 <= q <= p, p >= 1.

    P(a, 0) = 1
    P(a, a) = 0
    P(a, b) = a/(a+b) * P(a-1, b) + b/(a+b) * P(a, b-1)     for 0 < b < a

    A leading +1 leaves S(a-1, b) and a leading -1 leaves S(a, b-1); in both
    cases the whole-sequence suffix has sum a - b > 0, so only the tail matters.
    """
    _require_counts(p, q)
    if p == 0:
        raise ValueError("p must be positive")
    if q > p:
        raise ValueError(f"q must not exceed p: ({p}, {q})")

    prev: list[Fraction] = []
    for a in range(1, p + 1):
        cur: list[Fraction] = []
        for b in range(0, min(a, q) + 1):
            if b == 0:
                value = Fraction(1)
            elif b == a:
                value = Fraction(0)
            else:
                value = Fraction(a, a + b) * prev[b] + Fraction(b, a + b) * cur[b - 1]
            cur.append(value)
        prev = cur
    return prev[q]
