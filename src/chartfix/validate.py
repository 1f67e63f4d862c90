"""Schema validation for fix reports."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import jsonschema

from .exceptions import ValidationError

SCHEMA_PATH = Path(__file__).parent / "schemas" / "report.schema.json"


def load_report_schema() -> dict[str, Any]:
    try:
        with open(SCHEMA_PATH) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid schema JSON: {e}") from e


def validate_report(data: dict[str, Any]) -> None:
    """Raise ValidationError if ``data`` does not match the report schema."""
    try:
        jsonschema.validate(instance=data, schema=load_report_schema())
    except jsonschema.ValidationError as e:
        raise ValidationError(f"Schema validation failed: {e.message}") from e


def validate_report_json(report_path: str | Path) -> bool:
    """
    Validate report.json against the schema.

    Args:
        report_path: Path to report.json file

    Returns:
        True if valid

    Raises:
        ValidationError: If validation fails
    """
    report_path = Path(report_path)
    if not report_path.exists():
        raise ValidationError(f"File not found: {report_path}")

    try:
        with open(report_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid report JSON: {e}") from e

    validate_report(data)
    return True


def main() -> None:
    """CLI entrypoint for validation."""
    if len(sys.argv) != 2:
        print("Usage: python -m chartfix.validate <report.json>", file=sys.stderr)
        sys.exit(1)

    try:
        validate_report_json(sys.argv[1])
        print("Valid")
        sys.exit(0)
    except ValidationError as e:
        print(f"Invalid: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
