"""
Domain-bound configuration.

Bounds live in `exactcount/kernels/specs/domains_v1.yaml`. Set `EXACTCOUNT_LIMITS`
to the path of another file with the same shape to override them.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import CountOverflowError

logger = logging.getLogger(__name__)

LIMITS_ENV_VAR = "EXACTCOUNT_LIMITS"


@dataclass(frozen=True)
class CountingLimits:
    ballot_max_votes: int
    ballot_recursion_max_votes: int
    ballot_enumerate_max_votes: int
    partitions_max_n: int
    partitions_series_max_n: int
    partitions_enumerate_max_n: int
    report_ballot_cases: tuple[tuple[int, int], ...] = ()
    report_partition_ns: tuple[int, ...] = ()


def default_limits_path() -> Path:
    # exactcount/core/config.py -> exactcount/ -> kernels/specs/domains_v1.yaml
    return Path(__file__).resolve().parents[1] / "kernels" / "specs" / "domains_v1.yaml"


def _section(obj: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = obj.get(key)
    if not isinstance(value, Mapping):
        raise TypeError(f"limits: '{key}' must be a mapping")
    return value


def _bound(section: Mapping[str, Any], prefix: str, key: str) -> int:
    value = section.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"limits: '{prefix}.{key}' must be an int")
    if value < 0:
        raise ValueError(f"limits: '{prefix}.{key}' must be non-negative")
    return value


def _ballot_cases(report: Mapping[str, Any]) -> tuple[tuple[int, int], ...]:
    out: list[tuple[int, int]] = []
    for i, case in enumerate(report.get("ballot_cases") or ()):
        if not isinstance(case, (list, tuple)) or len(case) != 2:
            raise TypeError(f"limits: 'report.ballot_cases[{i}]' must be a [p, q] pair")
        p, q = case
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (p, q)):
            raise TypeError(f"limits: 'report.ballot_cases[{i}]' must hold ints")
        out.append((p, q))
    return tuple(out)


def _partition_ns(report: Mapping[str, Any]) -> tuple[int, ...]:
    out: list[int] = []
    for i, n in enumerate(report.get("partition_ns") or ()):
        if not isinstance(n, int) or isinstance(n, bool):
            raise TypeError(f"limits: 'report.partition_ns[{i}]' must be an int")
        out.append(n)
    return tuple(out)


def parse_limits(obj: Any) -> CountingLimits:
    if not isinstance(obj, Mapping):
        raise TypeError("limits YAML must be a mapping")
    ballot = _section(obj, "ballot")
    partitions = _section(obj, "partitions")
    report = obj.get("report") or {}
    if not isinstance(report, Mapping):
        raise TypeError("limits: 'report' must be a mapping")
    return CountingLimits(
        ballot_max_votes=_bound(ballot, "ballot", "max_votes"),
        ballot_recursion_max_votes=_bound(ballot, "ballot", "recursion_max_votes"),
        ballot_enumerate_max_votes=_bound(ballot, "ballot", "enumerate_max_votes"),
        partitions_max_n=_bound(partitions, "partitions", "max_n"),
        partitions_series_max_n=_bound(partitions, "partitions", "series_max_n"),
        partitions_enumerate_max_n=_bound(partitions, "partitions", "enumerate_max_n"),
        report_ballot_cases=_ballot_cases(report),
        report_partition_ns=_partition_ns(report),
    )


@lru_cache(maxsize=8)
def _load_limits_cached(path: str) -> CountingLimits:
    logger.debug("loading counting limits from %s", path)
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return parse_limits(obj)


def load_limits(path: str | Path | None = None) -> CountingLimits:
    if path is None:
        path = os.environ.get(LIMITS_ENV_VAR) or default_limits_path()
    return _load_limits_cached(str(Path(path).resolve()))


def require_within(name: str, value: int, bound: int) -> None:
    if value > bound:
        raise CountOverflowError(name, value, bound)
