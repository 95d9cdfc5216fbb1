"""Tests for the YAML domain-bound loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from exactcount.core.config import (
    LIMITS_ENV_VAR,
    default_limits_path,
    load_limits,
    parse_limits,
    require_within,
)
from exactcount.core.errors import CountOverflowError

_MINIMAL = """
ballot:
  max_votes: 10
  recursion_max_votes: 8
  enumerate_max_votes: 6
partitions:
  max_n: 20
  series_max_n: 12
  enumerate_max_n: 9
"""


def test_default_limits_load() -> None:
    assert default_limits_path().is_file()
    limits = load_limits()
    assert limits.ballot_enumerate_max_votes <= limits.ballot_recursion_max_votes <= limits.ballot_max_votes
    assert limits.partitions_enumerate_max_n <= limits.partitions_series_max_n <= limits.partitions_max_n
    assert (2, 1) in limits.report_ballot_cases
    assert 6 in limits.report_partition_ns


def test_explicit_path(tmp_path: Path) -> None:
    path = tmp_path / "limits.yaml"
    path.write_text(_MINIMAL, encoding="utf-8")
    limits = load_limits(path)
    assert limits.ballot_max_votes == 10
    assert limits.partitions_series_max_n == 12
    assert limits.report_ballot_cases == ()
    assert limits.report_partition_ns == ()


def test_env_var_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "env_limits.yaml"
    path.write_text(_MINIMAL.replace("max_n: 20", "max_n: 33"), encoding="utf-8")
    monkeypatch.setenv(LIMITS_ENV_VAR, str(path))
    assert load_limits().partitions_max_n == 33


def test_parse_limits_rejects_malformed() -> None:
    with pytest.raises(TypeError, match="mapping"):
        parse_limits([1, 2])
    with pytest.raises(TypeError, match="'partitions' must be a mapping"):
        parse_limits({"ballot": {}})
    with pytest.raises(TypeError, match="ballot.max_votes"):
        parse_limits({"ballot": {"max_votes": "ten"}, "partitions": {}})
    with pytest.raises(ValueError, match="non-negative"):
        parse_limits(
            {
                "ballot": {"max_votes": -1, "recursion_max_votes": 1, "enumerate_max_votes": 1},
                "partitions": {"max_n": 1, "series_max_n": 1, "enumerate_max_n": 1},
            }
        )


def test_parse_limits_report_cases() -> None:
    obj = {
        "ballot": {"max_votes": 5, "recursion_max_votes": 5, "enumerate_max_votes": 5},
        "partitions": {"max_n": 5, "series_max_n": 5, "enumerate_max_n": 5},
        "report": {"ballot_cases": [[3, 1]], "partition_ns": [4]},
    }
    limits = parse_limits(obj)
    assert limits.report_ballot_cases == ((3, 1),)
    assert limits.report_partition_ns == (4,)
    obj["report"] = {"ballot_cases": [[3]]}
    with pytest.raises(TypeError, match="pair"):
        parse_limits(obj)


def test_require_within() -> None:
    require_within("n", 5, 5)
    with pytest.raises(CountOverflowError, match="n=6 exceeds configured bound 5"):
        require_within("n", 6, 5)
