"""
Ballot problem: counted vote sequences and the stays-positive probability.

Candidate A receives p votes (+1) and candidate B receives q votes (-1). Over the
uniform distribution on all C(p+q, p) arrangements, the probability that every
non-empty suffix sum is positive is (p - q) / (p + q) whenever q < p.

Operations here validate arguments and configured bounds, then call the integer
kernels in `exactcount.kernels.python.binomial_v1`. Results are `int` or
`Fraction`, never float.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from math import comb
from typing import Iterable, Iterator

from ..kernels.python import binomial_v1
from .config import CountingLimits, load_limits, require_within
from .errors import InvalidDomainError
from .types import Vote, VoteSequence, require_natural, require_vote

logger = logging.getLogger(__name__)


def _validate_counts(p: int, q: int) -> None:
    require_natural("p", p)
    require_natural("q", q)


def _require_nonempty(p: int, q: int) -> None:
    if p + q == 0:
        raise InvalidDomainError("p + q must be positive (no probability on the empty space)")


def stays_positive(symbols: Iterable[int]) -> bool:
    """True iff every non-empty suffix of `symbols` has a strictly positive sum."""
    seq = symbols if isinstance(symbols, VoteSequence) else VoteSequence.of(symbols)
    return seq.stays_positive()


def count_sequences(p: int, q: int, *, limits: CountingLimits | None = None) -> int:
    """|CountedSequenceSpace(p, q)| = C(p + q, p)."""
    _validate_counts(p, q)
    limits = limits or load_limits()
    require_within("p + q", p + q, limits.ballot_max_votes)
    return comb(p + q, p)


def count_sequences_by_split(p: int, q: int, *, limits: CountingLimits | None = None) -> int:
    """C(p + q, p) built from the first-symbol split (Pascal's rule)."""
    _validate_counts(p, q)
    limits = limits or load_limits()
    require_within("p + q", p + q, limits.ballot_recursion_max_votes)
    return binomial_v1.pascal_split_count(p=p, q=q)


def probability_first_symbol(p: int, q: int, symbol: int) -> Fraction:
    """Probability that a uniform member of CountedSequenceSpace(p, q) starts with `symbol`."""
    _validate_counts(p, q)
    _require_nonempty(p, q)
    require_vote("symbol", symbol)
    if symbol == Vote.PLUS:
        return Fraction(p, p + q)
    return Fraction(q, p + q)


def probability_stays_positive(p: int, q: int, *, limits: CountingLimits | None = None) -> Fraction:
    """
    Exact ballot probability (p - q) / (p + q).

    Defined only for 0 <= q < p. The diagonal q == p (where the answer is 0) and
    q > p are rejected; use `stays_positive_measure` for the total version.
    """
    _validate_counts(p, q)
    if q >= p:
        raise InvalidDomainError(f"requires q < p, got p={p}, q={q}")
    limits = limits or load_limits()
    require_within("p + q", p + q, limits.ballot_max_votes)
    return Fraction(p - q, p + q)


def probability_stays_positive_recursive(
    p: int, q: int, *, limits: CountingLimits | None = None
) -> Fraction:
    """Same probability as `probability_stays_positive`, by conditioning on the first symbol."""
    _validate_counts(p, q)
    if q >= p:
        raise InvalidDomainError(f"requires q < p, got p={p}, q={q}")
    limits = limits or load_limits()
    require_within("p + q", p + q, limits.ballot_recursion_max_votes)
    logger.debug("first-symbol recursion table for p=%d q=%d (%d cells)", p, q, p * (q + 1))
    return binomial_v1.stays_positive_recursive(p=p, q=q)


def count_staying_positive(p: int, q: int, *, limits: CountingLimits | None = None) -> int:
    """Number of sequences in CountedSequenceSpace(p, q) that stay positive (ballot number)."""
    _validate_counts(p, q)
    limits = limits or load_limits()
    require_within("p + q", p + q, limits.ballot_max_votes)
    return binomial_v1.ballot_number(p=p, q=q)


def stays_positive_measure(p: int, q: int, *, limits: CountingLimits | None = None) -> Fraction:
    """
    Fraction of CountedSequenceSpace(p, q) that stays positive, for q <= p and p + q > 0.

    Agrees with `probability_stays_positive` for q < p and is exactly 0 on the
    diagonal, where every sequence sums to 0.
    """
    _validate_counts(p, q)
    _require_nonempty(p, q)
    if q > p:
        raise InvalidDomainError(f"requires q <= p, got p={p}, q={q}")
    limits = limits or load_limits()
    require_within("p + q", p + q, limits.ballot_max_votes)
    return Fraction(binomial_v1.ballot_number(p=p, q=q), comb(p + q, p))


def _split(p: int, q: int) -> Iterator[tuple[int, ...]]:
    if p == 0 and q == 0:
        yield ()
        return
    if p > 0:
        for rest in _split(p - 1, q):
            yield (Vote.PLUS.value,) + rest
    if q > 0:
        for rest in _split(p, q - 1):
            yield (Vote.MINUS.value,) + rest


def enumerate_counted_sequences(
    p: int, q: int, *, limits: CountingLimits | None = None
) -> Iterator[VoteSequence]:
    """
    Yield every member of CountedSequenceSpace(p, q), +1-first branch before -1-first.

    Exponential in p + q; meant for checking the counting formulas on small cases.
    """
    _validate_counts(p, q)
    limits = limits or load_limits()
    require_within("p + q", p + q, limits.ballot_enumerate_max_votes)
    return (VoteSequence(symbols) for symbols in _split(p, q))
