"""Command-line entry point for checking module definitions."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from modcheck.config import Config
from modcheck.errors import ModcheckError
from modcheck.loader import load_module
from modcheck.report import REPORT_FORMATS, report_lines, result_to_dict
from modcheck.schema.registry import ResourceSchemaRegistry
from modcheck.types import ValidationResult
from modcheck.validator import ModuleValidator

__all__ = ["EXIT_OK", "EXIT_INVALID", "EXIT_ERROR", "build_parser", "main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modcheck",
        description="Check declarative infrastructure module definitions for internal consistency",
    )
    parser.add_argument("paths", nargs="+", help="Module definition files (YAML or JSON)")
    parser.add_argument("--config", help="Path to a modcheck YAML config file")
    parser.add_argument(
        "--schema",
        action="append",
        default=[],
        metavar="FILE",
        help="Extra resource schema YAML file (may be repeated)",
    )
    parser.add_argument("--format", choices=REPORT_FORMATS, default=None, help="Output format (default: human)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _configure_logging(config: Config, verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, str(config.get("logging.level", "WARNING")).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _print_human(path: str, result: ValidationResult, show_path: bool) -> None:
    prefix = f"{path}: " if show_path else ""
    stream = sys.stdout if result.valid else sys.stderr
    for line in report_lines(result):
        print(f"{prefix}{line}", file=stream)


def main(argv: list[str] | None = None) -> int:
    """Run the checker and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(args.config) if args.config else Config()
    except ModcheckError as e:
        print(str(e), file=sys.stderr)
        return EXIT_ERROR

    _configure_logging(config, args.verbose)
    fmt = args.format or config.get("report.format", "human")

    registry = ResourceSchemaRegistry()
    try:
        for schema_file in list(config.get("schemas.files", [])) + args.schema:
            count = registry.load_file(schema_file)
            logger.info("Loaded %d resource schema(s) from %s", count, schema_file)
    except ModcheckError as e:
        print(str(e), file=sys.stderr)
        return EXIT_ERROR

    validator = ModuleValidator(config=config, registry=registry)
    exit_code = EXIT_OK
    json_results: dict[str, object] = {}
    show_path = len(args.paths) > 1

    for path in args.paths:
        try:
            module = load_module(path)
            result = validator.validate(module)
        except ModcheckError as e:
            print(f"{path}: {e}" if show_path else str(e), file=sys.stderr)
            exit_code = EXIT_ERROR
            continue

        if not result.valid and exit_code == EXIT_OK:
            exit_code = EXIT_INVALID

        if fmt == "json":
            json_results[path] = result_to_dict(result)
        else:
            _print_human(path, result, show_path)

    if fmt == "json":
        stream = sys.stdout if exit_code == EXIT_OK else sys.stderr
        print(json.dumps(json_results, indent=2, default=str), file=stream)
    return exit_code


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
