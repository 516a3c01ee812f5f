"""Command-line entry point: recommend a topology for a requirements file.

Usage:
  python cmd/advisor/cli.py requirements.yaml
  cat requirements.json | python cmd/advisor/cli.py --candidates
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT))

from internal.advisor.advisor import explain
from internal.models.types import InvalidRequirementError, ReplicationRequirements

EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Recommend a database replication topology (leader-follower, multi-leader "
            "or leaderless) for a set of workload and reliability requirements."
        ),
    )
    parser.add_argument(
        "requirements",
        nargs="?",
        default="-",
        help="Path to a YAML or JSON requirements document ('-' reads stdin)",
    )
    parser.add_argument(
        "--candidates",
        action="store_true",
        help="Include the ranked candidate evaluations in the output",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print only the explanation text",
    )
    return parser


def _read_document(source: str) -> dict:
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Requirements file not found: {path}")
        text = path.read_text(encoding="utf-8")
    # JSON is a subset of YAML, so one loader covers both
    return yaml.safe_load(text) or {}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        body = _read_document(args.requirements)
        req = ReplicationRequirements.from_dict(body)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, InvalidRequirementError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    report = explain(req)

    if args.explain:
        print(report.recommendation.explanation)
        return 0

    output = report.to_dict() if args.candidates else {
        "recommendation": report.recommendation.to_dict(),
    }
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
