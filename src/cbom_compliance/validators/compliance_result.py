"""CLI entrypoint for validating a compliance-check result document."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from collections.abc import Iterable

from jsonschema import Draft202012Validator

from ..validation import validate

_DEFAULT_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "compliance-check-result.schema.json"


def _load_json(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_document(document: object, schema_path: Path = _DEFAULT_SCHEMA) -> None:
    """Check ``document`` against the JSON Schema, then the staged validator.

    The schema catches shape problems in one pass; the staged validator adds
    the checks a schema cannot express (unique ids, level references).

    Raises:
        ValueError: With every schema error, or the staged validator's
            violations, in the message.
    """
    schema = _load_json(schema_path)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ValueError("\n" + _format_errors(errors))

    report = validate(document)
    if not report.valid:
        raise ValueError("\n" + "\n".join(f"- {violation}" for violation in report.violations))


def validate_document_file(input_path: Path, schema_path: Path = _DEFAULT_SCHEMA) -> None:
    validate_document(_load_json(input_path), schema_path)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to the compliance result JSON to validate",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=_DEFAULT_SCHEMA,
        help="Path to the JSON schema used for validation",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every validation stage")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.CRITICAL)
    try:
        validate_document_file(args.input, args.schema)
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"ERROR: Failed to read JSON: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"ERROR: Compliance result failed validation:{exc}", file=sys.stderr)
        return 1

    print(f"Compliance result {args.input} is valid against {args.schema}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
