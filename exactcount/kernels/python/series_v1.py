"""
Truncated formal power series kernel (v1 semantics).

A `TruncatedSeries` stores the exact coefficients of degrees 0..precision of a
formal power series over the rationals. Products and inverses are truncated at
`precision`, which is sound because the degree-d coefficient of a product only
depends on the factors' coefficients of degree <= d.

Series are never evaluated at a point; the only read path is `coefficient(d)`.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Sequence


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_precision(precision: int) -> None:
    _require_int("precision", precision)
    if precision < 0:
        raise ValueError(f"precision must be non-negative: {precision}")


@dataclass(frozen=True)
class TruncatedSeries:
    coeffs: tuple[Fraction, ...]

    def __post_init__(self) -> None:
        if not self.coeffs:
            raise ValueError("a truncated series needs at least the degree-0 coefficient")

    @property
    def precision(self) -> int:
        return len(self.coeffs) - 1

    @classmethod
    def from_coeffs(cls, coeffs: Sequence[int | Fraction], *, precision: int) -> "TruncatedSeries":
        """Build from a (possibly shorter or longer) coefficient list; missing degrees are 0."""
        _require_precision(precision)
        out = [Fraction(0)] * (precision + 1)
        for d, c in enumerate(coeffs[: precision + 1]):
            out[d] = Fraction(c)
        return cls(tuple(out))

    @classmethod
    def zero(cls, *, precision: int) -> "TruncatedSeries":
        return cls.from_coeffs([], precision=precision)

    @classmethod
    def one(cls, *, precision: int) -> "TruncatedSeries":
        return cls.from_coeffs([1], precision=precision)

    @classmethod
    def monomial(cls, degree: int, *, coeff: int | Fraction = 1, precision: int) -> "TruncatedSeries":
        """coeff * X^degree (the zero series when degree > precision)."""
        _require_int("degree", degree)
        if degree < 0:
            raise ValueError(f"degree must be non-negative: {degree}")
        _require_precision(precision)
        out = [Fraction(0)] * (precision + 1)
        if degree <= precision:
            out[degree] = Fraction(coeff)
        return cls(tuple(out))

    @classmethod
    def indicator(cls, degrees: Iterable[int], *, precision: int) -> "TruncatedSeries":
        """Series with coefficient 1 at each listed degree, 0 elsewhere."""
        _require_precision(precision)
        out = [Fraction(0)] * (precision + 1)
        for d in degrees:
            _require_int("degree", d)
            if d < 0:
                raise ValueError(f"degree must be non-negative: {d}")
            if d <= precision:
                out[d] = Fraction(1)
        return cls(tuple(out))

    def coefficient(self, degree: int) -> Fraction:
        _require_int("degree", degree)
        if degree < 0:
            raise ValueError(f"degree must be non-negative: {degree}")
        if degree > self.precision:
            raise ValueError(f"degree {degree} is beyond precision {self.precision}")
        return self.coeffs[degree]

    def order(self) -> int | None:
        """Lowest degree with a nonzero coefficient, or None if zero up to precision."""
        for d, c in enumerate(self.coeffs):
            if c != 0:
                return d
        return None

    def truncate(self, precision: int) -> "TruncatedSeries":
        _require_precision(precision)
        if precision > self.precision:
            raise ValueError(f"cannot extend precision {self.precision} to {precision}")
        return TruncatedSeries(self.coeffs[: precision + 1])

    def _check_compatible(self, other: "TruncatedSeries") -> None:
        if not isinstance(other, TruncatedSeries):
            raise TypeError("expected a TruncatedSeries")
        if other.precision != self.precision:
            raise ValueError(f"precision mismatch: {self.precision} != {other.precision}")

    def __add__(self, other: "TruncatedSeries") -> "TruncatedSeries":
        self._check_compatible(other)
        return TruncatedSeries(tuple(a + b for a, b in zip(self.coeffs, other.coeffs)))

    def __sub__(self, other: "TruncatedSeries") -> "TruncatedSeries":
        self._check_compatible(other)
        return TruncatedSeries(tuple(a - b for a, b in zip(self.coeffs, other.coeffs)))

    def nonzero_terms(self) -> list[tuple[int, Fraction]]:
        """(degree, coefficient) pairs with nonzero coefficient, by increasing degree."""
        return [(d, c) for d, c in enumerate(self.coeffs) if c != 0]

    def __mul__(self, other: "TruncatedSeries") -> "TruncatedSeries":
        self._check_compatible(other)
        n = self.precision
        out = [Fraction(0)] * (n + 1)
        rhs = other.nonzero_terms()
        for i, a in self.nonzero_terms():
            for j, b in rhs:
                if i + j > n:
                    break
                out[i + j] += a * b
        return TruncatedSeries(tuple(out))

    def inverse(self) -> "TruncatedSeries":
        """
        Multiplicative inverse up to precision.

        Requires a nonzero constant term. With g = f^-1:
            g_0 = 1 / f_0
            g_d = -(sum_{k=1..d} f_k * g_{d-k}) / f_0
        """
        f0 = self.coeffs[0]
        if f0 == 0:
            raise ValueError("series with zero constant term has no inverse")
        n = self.precision
        terms = [(k, c) for k, c in self.nonzero_terms() if k > 0]
        g = [Fraction(0)] * (n + 1)
        g[0] = 1 / f0
        for d in range(1, n + 1):
            acc = Fraction(0)
            for k, fk in terms:
                if k > d:
                    break
                acc += fk * g[d - k]
            g[d] = -acc / f0
        return TruncatedSeries(tuple(g))


def multiples_indicator(k: int, *, precision: int) -> TruncatedSeries:
    """1 + X^k + X^2k + ... , i.e. the formal expansion of (1 - X^k)^-1."""
    _require_int("k", k)
    if k <= 0:
        raise ValueError(f"k must be positive: {k}")
    _require_precision(precision)
    return TruncatedSeries.indicator(range(0, precision + 1, k), precision=precision)


def two_point_indicator(k: int, *, precision: int) -> TruncatedSeries:
    """1 + X^k, the indicator series of {0, k}."""
    _require_int("k", k)
    if k <= 0:
        raise ValueError(f"k must be positive: {k}")
    return TruncatedSeries.indicator((0, k), precision=precision)


def binomial_factor(k: int, *, sign: int, precision: int) -> TruncatedSeries:
    """1 + sign * X^k for sign in {+1, -1}."""
    _require_int("k", k)
    if k <= 0:
        raise ValueError(f"k must be positive: {k}")
    if sign not in (1, -1):
        raise ValueError(f"sign must be +1 or -1: {sign}")
    one = TruncatedSeries.one(precision=precision)
    return one + TruncatedSeries.monomial(k, coeff=sign, precision=precision)


def is_negligible_factor(factor: TruncatedSeries) -> bool:
    """
    True when factor == 1 up to its precision.

    Such a factor is 1 + (terms of order > precision) and cannot change any
    coefficient of a product truncated at that precision.
    """
    one = TruncatedSeries.one(precision=factor.precision)
    return (factor - one).order() is None


def truncated_product(factors: Iterable[TruncatedSeries], *, precision: int) -> TruncatedSeries:
    """Product of `factors` truncated at `precision`, skipping factors that are 1 up to precision."""
    _require_precision(precision)
    acc = TruncatedSeries.one(precision=precision)
    for factor in factors:
        if factor.precision != precision:
            factor = factor.truncate(precision)
        if is_negligible_factor(factor):
            continue
        acc = acc * factor
    return acc
