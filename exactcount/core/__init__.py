"""
Core counting engines
"""

from .ballot import (
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
from .partitions import (
    SeriesEquivalence,
    check_series_equivalence,
    count_distinct_partitions,
    count_odd_partitions,
    count_restricted_partitions,
    distinct_to_odd,
    enumerate_distinct_partitions,
    enumerate_odd_partitions,
    enumerate_partitions,
    enumerate_restricted_partitions,
    odd_to_distinct,
    restricted_series_coefficient,
    series_equivalence,
    truncated_distinct_series_coefficient,
    truncated_odd_series_coefficient,
)
from .config import CountingLimits, load_limits
from .errors import CountOverflowError, InvalidDomainError, SeriesIdentityError
from .report import CountingReport, build_report
from .types import Partition, Vote, VoteSequence

__all__ = [
    "count_sequences",
    "count_sequences_by_split",
    "count_staying_positive",
    "enumerate_counted_sequences",
    "probability_first_symbol",
    "probability_stays_positive",
    "probability_stays_positive_recursive",
    "stays_positive",
    "stays_positive_measure",
    "SeriesEquivalence",
    "check_series_equivalence",
    "count_distinct_partitions",
    "count_odd_partitions",
    "count_restricted_partitions",
    "distinct_to_odd",
    "enumerate_distinct_partitions",
    "enumerate_odd_partitions",
    "enumerate_partitions",
    "enumerate_restricted_partitions",
    "odd_to_distinct",
    "restricted_series_coefficient",
    "series_equivalence",
    "truncated_distinct_series_coefficient",
    "truncated_odd_series_coefficient",
    "CountingLimits",
    "load_limits",
    "CountOverflowError",
    "InvalidDomainError",
    "SeriesIdentityError",
    "CountingReport",
    "build_report",
    "Partition",
    "Vote",
    "VoteSequence",
]
