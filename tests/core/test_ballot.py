"""Tests for the ballot-problem engine."""

from __future__ import annotations

from fractions import Fraction

import pytest

from exactcount.core.ballot import (
    count_sequences,
    count_sequences_by_split,
    count_staying_positive,
    enumerate_counted_sequences,
    probability_first_symbol,
    probability_stays_positive,
    probability_stays_positive_recursive,
    stays_positive,
    stays_positive_measure,
)
from exactcount.core.config import CountingLimits
from exactcount.core.errors import CountOverflowError, InvalidDomainError
from exactcount.core.types import Vote, VoteSequence


def _tight_limits(max_votes: int) -> CountingLimits:
    return CountingLimits(
        ballot_max_votes=max_votes,
        ballot_recursion_max_votes=max_votes,
        ballot_enumerate_max_votes=max_votes,
        partitions_max_n=10,
        partitions_series_max_n=10,
        partitions_enumerate_max_n=10,
    )


# ---------------------------------------------------------------------------
# Predicate
# ---------------------------------------------------------------------------

def test_stays_positive_empty_sequence() -> None:
    assert stays_positive([])


def test_stays_positive_checks_every_suffix() -> None:
    assert stays_positive([-1, 1, 1])
    assert not stays_positive([1, 1, -1])  # last suffix is -1
    assert not stays_positive([1, -1, 1, -1, 1])  # suffix (-1, 1) sums to 0


def test_stays_positive_is_suffix_closed() -> None:
    seq = VoteSequence.of([-1, 1, -1, 1, 1, 1])
    assert seq.stays_positive()
    while seq.length:
        seq = seq.tail()
        assert seq.stays_positive()


def test_stays_positive_rejects_non_votes() -> None:
    with pytest.raises(InvalidDomainError):
        stays_positive([1, 0, 1])


@pytest.mark.parametrize("symbols", [[1.7, -1.2], [1.0], [1, True], ["1"]])
def test_vote_sequence_rejects_non_int_symbols(symbols: list[object]) -> None:
    with pytest.raises(TypeError, match="must be an int"):
        VoteSequence.of(symbols)
    with pytest.raises(TypeError):
        stays_positive(symbols)


def test_vote_sequence_counts() -> None:
    seq = VoteSequence.of([Vote.PLUS, Vote.MINUS, Vote.PLUS])
    assert (seq.length, seq.plus_count, seq.minus_count) == (3, 2, 1)
    assert seq.suffix_sums() == (1, 0, 1)


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("p,q,expected", [(0, 0, 1), (3, 0, 1), (0, 4, 1), (2, 2, 6), (5, 3, 56)])
def test_count_sequences_known_values(p: int, q: int, expected: int) -> None:
    assert count_sequences(p, q) == expected
    assert count_sequences_by_split(p, q) == expected


def test_count_sequences_pascal_rule() -> None:
    for p in range(6):
        for q in range(6):
            assert count_sequences(p + 1, q + 1) == count_sequences(p, q + 1) + count_sequences(p + 1, q)


def test_count_sequences_rejects_negative() -> None:
    with pytest.raises(InvalidDomainError, match="non-negative"):
        count_sequences(-1, 2)
    with pytest.raises(TypeError):
        count_sequences(1.0, 2)  # type: ignore[arg-type]


def test_count_sequences_respects_configured_bound() -> None:
    with pytest.raises(CountOverflowError) as exc:
        count_sequences(3, 3, limits=_tight_limits(5))
    assert exc.value.bound == 5
    assert count_sequences(3, 2, limits=_tight_limits(5)) == 10


def test_enumeration_matches_count_and_split_order() -> None:
    assert [s.symbols for s in enumerate_counted_sequences(1, 1)] == [(1, -1), (-1, 1)]
    for p in range(5):
        for q in range(5):
            seqs = list(enumerate_counted_sequences(p, q))
            assert len(seqs) == count_sequences(p, q)
            assert len(set(seqs)) == len(seqs)
            assert all(s.plus_count == p and s.minus_count == q for s in seqs)


def test_enumeration_bound_is_checked_eagerly() -> None:
    with pytest.raises(CountOverflowError):
        enumerate_counted_sequences(4, 4, limits=_tight_limits(6))


# ---------------------------------------------------------------------------
# Probabilities
# ---------------------------------------------------------------------------

def test_probability_first_symbol() -> None:
    assert probability_first_symbol(3, 1, Vote.PLUS) == Fraction(3, 4)
    assert probability_first_symbol(3, 1, -1) == Fraction(1, 4)
    assert probability_first_symbol(2, 0, 1) == 1
    assert probability_first_symbol(0, 2, -1) == 1


def test_probability_first_symbol_rejects_empty_space_and_bad_symbol() -> None:
    with pytest.raises(InvalidDomainError, match="p \\+ q must be positive"):
        probability_first_symbol(0, 0, 1)
    with pytest.raises(InvalidDomainError, match="symbol"):
        probability_first_symbol(1, 1, 0)


@pytest.mark.parametrize("symbol", [1.0, -1.0, True])
def test_probability_first_symbol_rejects_non_int_symbol(symbol: object) -> None:
    with pytest.raises(TypeError, match="symbol must be an int"):
        probability_first_symbol(1, 1, symbol)


@pytest.mark.parametrize(
    "p,q,expected",
    [(1, 0, Fraction(1)), (2, 1, Fraction(1, 3)), (3, 1, Fraction(1, 2)), (5, 3, Fraction(1, 4))],
)
def test_probability_stays_positive_known_values(p: int, q: int, expected: Fraction) -> None:
    assert probability_stays_positive(p, q) == expected
    assert probability_stays_positive_recursive(p, q) == expected


@pytest.mark.parametrize("p,q", [(0, 0), (2, 2), (1, 3)])
def test_probability_stays_positive_rejects_q_at_least_p(p: int, q: int) -> None:
    with pytest.raises(InvalidDomainError, match="q < p"):
        probability_stays_positive(p, q)
    with pytest.raises(InvalidDomainError, match="q < p"):
        probability_stays_positive_recursive(p, q)


def test_probability_matches_exhaustive_enumeration() -> None:
    for p in range(1, 7):
        for q in range(0, p):
            seqs = list(enumerate_counted_sequences(p, q))
            good = sum(1 for s in seqs if s.stays_positive())
            assert good == count_staying_positive(p, q)
            assert Fraction(good, len(seqs)) == probability_stays_positive(p, q)


def test_measure_is_zero_on_the_diagonal() -> None:
    assert stays_positive_measure(2, 2) == 0
    assert stays_positive_measure(5, 5) == 0
    for seq in enumerate_counted_sequences(2, 2):
        assert not seq.stays_positive()


def test_measure_agrees_with_probability_below_the_diagonal() -> None:
    for p in range(1, 8):
        for q in range(0, p):
            assert stays_positive_measure(p, q) == probability_stays_positive(p, q)


def test_measure_rejects_q_above_p_and_empty_space() -> None:
    with pytest.raises(InvalidDomainError, match="q <= p"):
        stays_positive_measure(1, 2)
    with pytest.raises(InvalidDomainError):
        stays_positive_measure(0, 0)


def test_recursion_bound_is_separate_from_closed_form_bound() -> None:
    limits = CountingLimits(
        ballot_max_votes=1000,
        ballot_recursion_max_votes=10,
        ballot_enumerate_max_votes=10,
        partitions_max_n=10,
        partitions_series_max_n=10,
        partitions_enumerate_max_n=10,
    )
    assert probability_stays_positive(30, 10, limits=limits) == Fraction(1, 2)
    with pytest.raises(CountOverflowError):
        probability_stays_positive_recursive(30, 10, limits=limits)
