#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from exactcount.core.config import load_limits
from exactcount.core.errors import CountOverflowError, InvalidDomainError
from exactcount.core.report import CountingReport, build_report, fraction_to_json

logger = logging.getLogger("counting_report")


def _print_text(report: CountingReport) -> None:
    for c in report.ballot_cases:
        prob = fraction_to_json(c.probability) or "n/a"
        measure = fraction_to_json(c.measure) or "n/a"
        print(
            f"[ballot] p={c.p} q={c.q} sequences={c.sequences} "
            f"staying_positive={c.staying_positive} probability={prob} measure={measure}"
        )
    for c in report.partition_cases:
        print(
            f"[partitions] n={c.n} odd={c.odd} distinct={c.distinct} "
            f"series=({fraction_to_json(c.odd_coefficient)}, {fraction_to_json(c.distinct_coefficient)}) "
            f"equivalence={'ok' if c.equivalence_holds else 'FAIL'}"
        )
    print(f"[report] {'OK' if report.ok else 'FAIL'}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Exact ballot and partition counts.")
    ap.add_argument("--ballot", nargs=2, type=int, action="append", metavar=("P", "Q"), help="ballot case (repeatable)")
    ap.add_argument("--partitions", type=int, action="append", metavar="N", help="partition size (repeatable)")
    ap.add_argument("--limits", type=Path, default=None, help="domain-bounds YAML (default: packaged domains_v1.yaml)")
    ap.add_argument("--json", action="store_true", help="emit JSON instead of text")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        limits = load_limits(args.limits)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        logger.error("cannot load limits from %s: %s", args.limits, e)
        return 2
    try:
        report = build_report(args.ballot, args.partitions, limits=limits)
    except (InvalidDomainError, CountOverflowError) as e:
        logger.error("%s", e)
        return 2

    if args.json:
        print(json.dumps(report.to_json(), indent=2, sort_keys=True))
    else:
        _print_text(report)
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
