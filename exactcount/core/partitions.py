"""
Odd and distinct partitions, counted directly and through generating functions.

Euler's theorem: for every n, the partitions of n into odd parts and the
partitions of n into distinct parts are equinumerous. The generating-function
argument behind it rests on the identity

    prod_{i<m} (1 - X^(2i+1))^-1  *  prod_{i<m} (1 - X^(m+i+1))  =  prod_{i<m} (1 + X^(i+1))

(both sides reduce to prod_{odd k <= m} (1 - X^k)^-1 * prod_{even j in (m, 2m]} (1 - X^j)).
The correction product has order m + 1, so for m = n + 1 it cannot touch the
degree-n coefficient, and the two truncated coefficients coincide.

Counts are `int`; series coefficients are `Fraction` (exact, integral in practice).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Iterable, Iterator

from ..kernels.python.series_v1 import (
    TruncatedSeries,
    binomial_factor,
    truncated_product,
    two_point_indicator,
)
from .config import CountingLimits, load_limits, require_within
from .errors import InvalidDomainError, SeriesIdentityError
from .types import Partition, require_natural

logger = logging.getLogger(__name__)

# (part, multiplicity) -> allowed?
MultiplicityRule = Callable[[int, int], bool]


def any_multiplicity(part: int, multiplicity: int) -> bool:
    return True


def at_most_once(part: int, multiplicity: int) -> bool:
    return multiplicity <= 1


# ---------------------------------------------------------------------------
# Direct counts
# ---------------------------------------------------------------------------

def _count_by_parts(n: int, parts: Iterable[int], *, at_most_once_each: bool) -> int:
    # ways[s] = partitions of s using the parts processed so far.
    ways = [1] + [0] * n
    for k in parts:
        if at_most_once_each:
            for s in range(n, k - 1, -1):
                ways[s] += ways[s - k]
        else:
            for s in range(k, n + 1):
                ways[s] += ways[s - k]
    return ways[n]


def count_odd_partitions(n: int, *, limits: CountingLimits | None = None) -> int:
    """Number of partitions of n into odd parts (repetition allowed)."""
    require_natural("n", n)
    limits = limits or load_limits()
    require_within("n", n, limits.partitions_max_n)
    return _count_by_parts(n, range(1, n + 1, 2), at_most_once_each=False)


def count_distinct_partitions(n: int, *, limits: CountingLimits | None = None) -> int:
    """Number of partitions of n into pairwise-distinct parts."""
    require_natural("n", n)
    limits = limits or load_limits()
    require_within("n", n, limits.partitions_max_n)
    return _count_by_parts(n, range(1, n + 1), at_most_once_each=True)


# ---------------------------------------------------------------------------
# Enumeration (finite support functions S -> N with weighted sum n)
# ---------------------------------------------------------------------------

def _validate_part_set(parts: Iterable[int]) -> tuple[int, ...]:
    out = []
    for part in parts:
        if not isinstance(part, int) or isinstance(part, bool):
            raise TypeError("parts must be ints")
        if part < 1:
            raise InvalidDomainError(f"parts must be positive: {part}")
        out.append(part)
    if len(set(out)) != len(out):
        raise InvalidDomainError("part set must not repeat a part")
    return tuple(sorted(out, reverse=True))


def _support_functions(
    remaining: int, parts: tuple[int, ...], rule: MultiplicityRule
) -> Iterator[dict[int, int]]:
    if not parts:
        if remaining == 0:
            yield {}
        return
    part, rest = parts[0], parts[1:]
    for multiplicity in range(0, remaining // part + 1):
        if not rule(part, multiplicity):
            continue
        for tail in _support_functions(remaining - multiplicity * part, rest, rule):
            if multiplicity:
                tail = {part: multiplicity, **tail}
            yield tail


def enumerate_restricted_partitions(
    n: int,
    parts: Iterable[int],
    multiplicity_ok: MultiplicityRule = any_multiplicity,
    *,
    limits: CountingLimits | None = None,
) -> Iterator[Partition]:
    """
    Yield the partitions of n whose parts lie in `parts` and whose multiplicities
    satisfy `multiplicity_ok(part, multiplicity)`.

    The rule is consulted for every part of the set, multiplicity 0 included, so a
    rule rejecting 0 forces that part to appear.
    """
    require_natural("n", n)
    part_set = _validate_part_set(parts)
    limits = limits or load_limits()
    require_within("n", n, limits.partitions_enumerate_max_n)
    return (Partition.from_multiplicities(f) for f in _support_functions(n, part_set, multiplicity_ok))


def enumerate_partitions(n: int, *, limits: CountingLimits | None = None) -> Iterator[Partition]:
    return enumerate_restricted_partitions(n, range(1, n + 1), limits=limits)


def enumerate_odd_partitions(n: int, *, limits: CountingLimits | None = None) -> Iterator[Partition]:
    return enumerate_restricted_partitions(n, range(1, n + 1, 2), limits=limits)


def enumerate_distinct_partitions(n: int, *, limits: CountingLimits | None = None) -> Iterator[Partition]:
    return enumerate_restricted_partitions(n, range(1, n + 1), at_most_once, limits=limits)


def count_restricted_partitions(
    n: int,
    parts: Iterable[int],
    multiplicity_ok: MultiplicityRule = any_multiplicity,
    *,
    limits: CountingLimits | None = None,
) -> int:
    """Number of partitions yielded by `enumerate_restricted_partitions`."""
    return sum(1 for _ in enumerate_restricted_partitions(n, parts, multiplicity_ok, limits=limits))


# ---------------------------------------------------------------------------
# Generating functions
# ---------------------------------------------------------------------------

def odd_series_threshold(n: int) -> int:
    """Smallest m with 2m > n; from there on the odd coefficient equals the count."""
    require_natural("n", n)
    return n // 2 + 1


def distinct_series_threshold(n: int) -> int:
    """Smallest m with m + 1 > n; from there on the distinct coefficient equals the count."""
    require_natural("n", n)
    return n


def restricted_series_coefficient(
    n: int,
    parts: Iterable[int],
    multiplicity_ok: MultiplicityRule = any_multiplicity,
    *,
    limits: CountingLimits | None = None,
) -> Fraction:
    """
    Degree-n coefficient of prod_{i in parts} sum_{c : multiplicity_ok(i, c)} X^(c*i).

    Equals `count_restricted_partitions(n, parts, multiplicity_ok)`.
    """
    require_natural("n", n)
    part_set = _validate_part_set(parts)
    limits = limits or load_limits()
    require_within("n", n, limits.partitions_series_max_n)
    factors = (
        TruncatedSeries.indicator(
            (c * i for c in range(0, n // i + 1) if multiplicity_ok(i, c)),
            precision=n,
        )
        for i in part_set
    )
    return truncated_product(factors, precision=n).coefficient(n)


def partial_odd_series(m: int, *, precision: int) -> TruncatedSeries:
    """prod_{i<m} (1 - X^(2i+1))^-1, each factor inverted as a formal series."""
    require_natural("m", m)
    factors: list[TruncatedSeries] = []
    for i in range(m):
        k = 2 * i + 1
        if k > precision:
            # Every later factor is 1 up to precision as well.
            break
        factors.append(binomial_factor(k, sign=-1, precision=precision).inverse())
    return truncated_product(factors, precision=precision)


def partial_distinct_series(m: int, *, precision: int) -> TruncatedSeries:
    """prod_{i<m} (1 + X^(i+1))."""
    require_natural("m", m)
    factors = [two_point_indicator(i + 1, precision=precision) for i in range(min(m, precision))]
    return truncated_product(factors, precision=precision)


def correction_factor(m: int, *, precision: int) -> TruncatedSeries:
    """prod_{i<m} (1 - X^(m+i+1)); its order (minus 1) is m + 1."""
    require_natural("m", m)
    factors = [
        binomial_factor(m + i + 1, sign=-1, precision=precision)
        for i in range(m)
        if m + i + 1 <= precision
    ]
    return truncated_product(factors, precision=precision)


def truncated_odd_series_coefficient(n: int, m: int, *, limits: CountingLimits | None = None) -> Fraction:
    """Degree-n coefficient of prod_{i<m} (1 - X^(2i+1))^-1; the odd count once 2m > n."""
    require_natural("n", n)
    require_natural("m", m)
    limits = limits or load_limits()
    require_within("n", n, limits.partitions_series_max_n)
    if m < odd_series_threshold(n):
        logger.debug("odd series: m=%d is below the stabilization threshold for n=%d", m, n)
    return partial_odd_series(m, precision=n).coefficient(n)


def truncated_distinct_series_coefficient(
    n: int, m: int, *, limits: CountingLimits | None = None
) -> Fraction:
    """Degree-n coefficient of prod_{i<m} (1 + X^(i+1)); the distinct count once m + 1 > n."""
    require_natural("n", n)
    require_natural("m", m)
    limits = limits or load_limits()
    require_within("n", n, limits.partitions_series_max_n)
    if m < distinct_series_threshold(n):
        logger.debug("distinct series: m=%d is below the stabilization threshold for n=%d", m, n)
    return partial_distinct_series(m, precision=n).coefficient(n)


@dataclass(frozen=True)
class SeriesEquivalence:
    """Outcome of checking the odd/distinct generating-function identity at degree n."""

    n: int
    m: int
    odd_coefficient: Fraction
    distinct_coefficient: Fraction
    identity_holds: bool
    correction_order: int | None
    violations: tuple[str, ...] = field(default=())

    @property
    def holds(self) -> bool:
        return not self.violations


def series_equivalence(n: int, *, limits: CountingLimits | None = None) -> SeriesEquivalence:
    """
    Check, for m = n + 1:
    - identity: partial_odd(m) * correction(m) == partial_distinct(m), up to degree 2m
      (every factor of all three products is visible there);
    - correction_order: correction(m) - 1 has order > n;
    - coefficients: the two degree-n coefficients agree.
    """
    require_natural("n", n)
    limits = limits or load_limits()
    require_within("n", n, limits.partitions_series_max_n)
    m = n + 1
    wide = 2 * m

    odd = partial_odd_series(m, precision=wide)
    distinct = partial_distinct_series(m, precision=wide)
    correction = correction_factor(m, precision=wide)
    identity_holds = odd * correction == distinct
    correction_order = (correction - TruncatedSeries.one(precision=wide)).order()

    odd_coefficient = odd.coefficient(n)
    distinct_coefficient = distinct.coefficient(n)

    violations: list[str] = []
    if not identity_holds:
        violations.append("identity")
    if correction_order is not None and correction_order <= n:
        violations.append("correction_order")
    if odd_coefficient != distinct_coefficient:
        violations.append("coefficients")

    return SeriesEquivalence(
        n=n,
        m=m,
        odd_coefficient=odd_coefficient,
        distinct_coefficient=distinct_coefficient,
        identity_holds=identity_holds,
        correction_order=correction_order,
        violations=tuple(violations),
    )


def check_series_equivalence(n: int, *, limits: CountingLimits | None = None) -> SeriesEquivalence:
    """Like `series_equivalence`, but raises `SeriesIdentityError` if any check fails."""
    result = series_equivalence(n, limits=limits)
    if not result.holds:
        raise SeriesIdentityError(list(result.violations))
    return result


# ---------------------------------------------------------------------------
# Glaisher's bijection
# ---------------------------------------------------------------------------

def odd_to_distinct(partition: Partition) -> Partition:
    """Split each odd part k of multiplicity c into the parts k * 2^j for the bits j of c."""
    if not partition.is_odd:
        raise InvalidDomainError(f"not an odd partition: {partition.parts}")
    parts: list[int] = []
    for k, count in partition.multiplicities().items():
        j = 0
        while count:
            if count & 1:
                parts.append(k << j)
            count >>= 1
            j += 1
    return Partition.of(parts)


def distinct_to_odd(partition: Partition) -> Partition:
    """Write each part as 2^j * k with k odd and replace it by 2^j copies of k."""
    if not partition.is_distinct:
        raise InvalidDomainError(f"not a distinct partition: {partition.parts}")
    parts: list[int] = []
    for d in partition.parts:
        j = (d & -d).bit_length() - 1
        parts.extend([d >> j] * (1 << j))
    return Partition.of(parts)
