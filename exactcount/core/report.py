"""
Top-level composition of the ballot and partition engines.

The two engines share no state; this module only runs each over a list of cases
and collects the results into frozen records with a JSON-friendly rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Sequence

from . import ballot, partitions
from .config import CountingLimits, load_limits

logger = logging.getLogger(__name__)


def fraction_to_json(value: Fraction | None) -> str | None:
    if value is None:
        return None
    return f"{value.numerator}/{value.denominator}"


@dataclass(frozen=True)
class BallotCase:
    p: int
    q: int
    sequences: int
    staying_positive: int
    probability: Fraction | None
    measure: Fraction | None

    def to_json(self) -> dict[str, object]:
        return {
            "p": self.p,
            "q": self.q,
            "sequences": self.sequences,
            "staying_positive": self.staying_positive,
            "probability": fraction_to_json(self.probability),
            "measure": fraction_to_json(self.measure),
        }


@dataclass(frozen=True)
class PartitionCase:
    n: int
    odd: int
    distinct: int
    odd_coefficient: Fraction
    distinct_coefficient: Fraction
    equivalence_holds: bool

    @property
    def euler_holds(self) -> bool:
        return self.odd == self.distinct

    def to_json(self) -> dict[str, object]:
        return {
            "n": self.n,
            "odd": self.odd,
            "distinct": self.distinct,
            "odd_coefficient": fraction_to_json(self.odd_coefficient),
            "distinct_coefficient": fraction_to_json(self.distinct_coefficient),
            "equivalence_holds": self.equivalence_holds,
            "euler_holds": self.euler_holds,
        }


@dataclass(frozen=True)
class CountingReport:
    ballot_cases: tuple[BallotCase, ...]
    partition_cases: tuple[PartitionCase, ...]

    @property
    def ok(self) -> bool:
        return all(c.euler_holds and c.equivalence_holds for c in self.partition_cases)

    def to_json(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "ballot": [c.to_json() for c in self.ballot_cases],
            "partitions": [c.to_json() for c in self.partition_cases],
        }


def ballot_case(p: int, q: int, *, limits: CountingLimits) -> BallotCase:
    probability = ballot.probability_stays_positive(p, q, limits=limits) if q < p else None
    measure = ballot.stays_positive_measure(p, q, limits=limits) if q <= p and p + q > 0 else None
    return BallotCase(
        p=p,
        q=q,
        sequences=ballot.count_sequences(p, q, limits=limits),
        staying_positive=ballot.count_staying_positive(p, q, limits=limits),
        probability=probability,
        measure=measure,
    )


def partition_case(n: int, *, limits: CountingLimits) -> PartitionCase:
    equivalence = partitions.series_equivalence(n, limits=limits)
    if not equivalence.holds:
        logger.warning("series equivalence failed for n=%d: %s", n, ", ".join(equivalence.violations))
    return PartitionCase(
        n=n,
        odd=partitions.count_odd_partitions(n, limits=limits),
        distinct=partitions.count_distinct_partitions(n, limits=limits),
        odd_coefficient=equivalence.odd_coefficient,
        distinct_coefficient=equivalence.distinct_coefficient,
        equivalence_holds=equivalence.holds,
    )


def build_report(
    ballot_cases: Iterable[Sequence[int]] | None = None,
    partition_ns: Iterable[int] | None = None,
    *,
    limits: CountingLimits | None = None,
) -> CountingReport:
    """Run both engines; cases default to the `report` section of the limits file."""
    limits = limits or load_limits()
    if ballot_cases is None:
        ballot_cases = limits.report_ballot_cases
    if partition_ns is None:
        partition_ns = limits.report_partition_ns

    ballots = tuple(ballot_case(p, q, limits=limits) for p, q in ballot_cases)
    parts = tuple(partition_case(n, limits=limits) for n in partition_ns)
    logger.debug("report built: %d ballot cases, %d partition cases", len(ballots), len(parts))
    return CountingReport(ballot_cases=ballots, partition_cases=parts)
