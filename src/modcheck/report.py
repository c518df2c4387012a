"""Human-readable and JSON rendering of validation results."""

from __future__ import annotations

import json
from typing import Any

from modcheck.types import ValidationResult

__all__ = ["REPORT_FORMATS", "format_report", "report_lines", "result_to_dict"]

REPORT_FORMATS = ("human", "json")


def report_lines(result: ValidationResult) -> list[str]:
    """One ``"<ErrorKind>: <field> — <detail>"`` line per error, or ``["OK"]``."""
    if result.valid:
        return ["OK"]
    return [f"{e.kind}: {e.field} — {e.detail}" for e in result.errors]


def result_to_dict(result: ValidationResult) -> dict[str, Any]:
    return {
        "valid": result.valid,
        "errors": [
            {"kind": e.kind, "code": e.code, "field": e.field, "detail": e.detail, "details": dict(e.details)}
            for e in result.errors
        ],
    }


def format_report(result: ValidationResult, fmt: str = "human") -> str:
    """Render a result in the requested format."""
    if fmt == "json":
        return json.dumps(result_to_dict(result), indent=2, default=str)
    if fmt != "human":
        raise ValueError(f"Unknown report format: {fmt}")
    return "\n".join(report_lines(result))
