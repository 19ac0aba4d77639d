"""CLI entry-point for schema_audit.

Usage:
    python -m schema_audit <file> [<file> ...]
    python -m schema_audit <file> --json
    python -m schema_audit <file> --config .validaterc
    python -m schema_audit <file> --errors-only
    python -m schema_audit <file> --oas3 | --swagger2
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import jsonschema

from schema_audit import __version__
from schema_audit.api import validate_file
from schema_audit.contracts.load import validate_instance
from schema_audit.core.config import ConfigurationError
from schema_audit.core.loader import DocumentLoadError
from schema_audit.model.finding import Finding, ValidationResult
from schema_audit.utils.exit_codes import ExitCode
from schema_audit.utils.json_norm import stable_json_dumps

_logger = logging.getLogger("schema_audit")

RESULT_SCHEMA = "validation_result.schema.json"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="schema-audit",
        description="Semantic schema checks for Swagger 2 and OpenAPI 3 documents.",
    )
    p.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="API description documents (YAML or JSON).",
    )
    p.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a .validaterc file (default: nearest .validaterc above each file).",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of the human-readable report.",
    )
    p.add_argument(
        "-e",
        "--errors-only",
        action="store_true",
        help="Only report errors; warnings are suppressed.",
    )
    family = p.add_mutually_exclusive_group()
    family.add_argument(
        "--oas3",
        dest="is_oas3",
        action="store_const",
        const=True,
        default=None,
        help="Treat every document as OpenAPI 3 (default: detect from 'openapi').",
    )
    family.add_argument(
        "--swagger2",
        dest="is_oas3",
        action="store_const",
        const=False,
        help="Treat every document as Swagger 2.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


# ── human-readable report ───────────────────────────────────────────


def _print_findings(title: str, findings: list[Finding]) -> None:
    print(f"\n{title}\n")
    for f in findings:
        print(f"  Message :   {f.message}")
        print(f"  Path    :   {f.dotted_path}")
        if f.line is not None:
            print(f"  Line    :   {f.line}")
        print("")


def _print_human(path: Path, result: ValidationResult) -> None:
    warnings = result.warnings
    if not result.errors and not warnings:
        print(f"{path.as_posix()}: passed validation")
        return

    print(path.as_posix())
    if result.errors:
        _print_findings("errors", result.errors)
    if warnings:
        _print_findings("warnings", warnings)
    print(f"  {len(result.errors)} error(s), {len(warnings)} warning(s)")


# ── main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Entry-point; returns an ``ExitCode``."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None and not args.config.is_file():
        print(f"error: configuration file not found: {args.config}", file=sys.stderr)
        return ExitCode.ERROR

    report: dict[str, dict] = {}
    any_errors = False
    for path in args.files:
        _logger.debug("validating %s", path)
        try:
            _, result = validate_file(path, config_path=args.config, is_oas3=args.is_oas3)
        except (DocumentLoadError, ConfigurationError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return ExitCode.ERROR
        except jsonschema.ValidationError as exc:
            print(f"error: invalid configuration: {exc.message}", file=sys.stderr)
            return ExitCode.ERROR

        if args.errors_only:
            result = ValidationResult(errors=result.errors, warnings=[])
        any_errors = any_errors or result.has_errors

        if args.json:
            report[path.as_posix()] = result.to_dict()
        else:
            _print_human(path, result)

    if args.json:
        validate_instance(report, RESULT_SCHEMA)
        sys.stdout.write(stable_json_dumps(report))

    return ExitCode.VIOLATION if any_errors else ExitCode.SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
