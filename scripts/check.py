#!/usr/bin/env python3
"""Local CLI entrypoint to summarise a compliance result for a CBOM.

Usage:
  python scripts/check.py --result result.json --cbom cbom.json [--summary]

The result document is validated before anything is computed from it.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from cbom_compliance.assets import detections
from cbom_compliance.config import load_settings
from cbom_compliance.errors import ConfigError, StructuralError
from cbom_compliance.report import aggregate
from cbom_compliance.summary import render_summary
from cbom_compliance.validation import parse_result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--result", type=Path, required=True)
    parser.add_argument("--cbom", type=Path, required=True)
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--summary", action="store_true", help="Print Markdown instead of JSON")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(level=settings.logging_level)

    try:
        document = json.loads(args.result.read_text(encoding="utf-8"))
        cbom = json.loads(args.cbom.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        result = parse_result(document)
    except StructuralError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    report = aggregate(result, detections(cbom))
    if args.summary:
        print(render_summary(report), end="")
    else:
        print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
