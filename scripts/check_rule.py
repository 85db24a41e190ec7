#!/usr/bin/env python3
"""Check one rule text and print its canonical form or diagnostics."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from pricerulepy.diagnostics import format_diagnostic
from pricerulepy.model import Definition, default_definition, definition_from_dict, definition_to_dict
from pricerulepy.pipeline import check_rule_text


def _load_definition(path: Path | None) -> Definition:
    if path is None:
        return default_definition()
    return definition_from_dict(json.loads(path.read_text(encoding="utf-8")))


def main() -> int:
    parser = argparse.ArgumentParser(description="Check a price rule text")
    parser.add_argument("text", help='Rule text, e.g. "IF booking_hours >= 4 THEN booking_hours*10"')
    parser.add_argument(
        "--definition",
        type=Path,
        default=None,
        help="JSON definition whose variables the rule may use (default: built-in variables)",
    )
    parser.add_argument(
        "--dump-definition",
        action="store_true",
        help="Print the updated definition as JSON when the rule is valid",
    )
    args = parser.parse_args()

    result = check_rule_text(args.text, _load_definition(args.definition))
    for diagnostic in result.diagnostics:
        print(format_diagnostic(diagnostic))
    if result.canonical_text is not None:
        print(result.canonical_text)
    if args.dump_definition and result.definition is not None:
        print(json.dumps(definition_to_dict(result.definition), indent=2))
    return 1 if result.has_errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
