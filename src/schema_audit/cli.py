# schema_audit/cli.py

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .domain import audit, generate_invariants
from .domain.audit import render_invariants, render_json, render_text, save_report
from .errors import InvariantsParseError, SchemaParseError
from .schemas import AuditResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2
EXIT_PARSE_ERROR = 3

# --fail-on threshold -> severities that fail the run
_FAILING_SEVERITIES = {
    "info": frozenset({"info", "warning"}),
    "warning": frozenset({"warning"}),
}


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the schema-audit command line interface.

    Args:
        argv: Arguments to parse; defaults to the process arguments.

    Returns:
        int: Exit code. 0 when clean, 1 when findings reach the `--fail-on`
            severity, 3 when the schema or invariants cannot be parsed.
            Usage errors exit with 2 from argparse.
    """
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.generate_invariants:
            return _write_invariants(args)
        result = audit(
            args.schema,
            args.invariants,
            no_timestamp=args.no_timestamp,
        )
    except (SchemaParseError, InvariantsParseError) as error:
        logger.error("%s", error)
        return EXIT_PARSE_ERROR

    content = (
        render_json(result, pretty=args.pretty)
        if args.format == "json"
        else render_text(result)
    )
    _emit(content, args.out)

    return EXIT_FINDINGS if _has_failing_findings(result, args.fail_on) else EXIT_OK


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="schema-audit",
        description=(
            "Statically audit a SQL DDL or Prisma schema for normalisation "
            "(1NF-BCNF) and schema-quality issues."
        ),
    )
    parser.add_argument(
        "--schema",
        required=True,
        type=Path,
        help="Schema file to audit (.sql, .ddl or .prisma)",
    )
    parser.add_argument(
        "--invariants",
        type=Path,
        help="Invariants JSON declaring functional dependencies",
    )
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--fail-on",
        choices=sorted(_FAILING_SEVERITIES),
        default="warning",
        help="Lowest finding severity that yields exit code 1 (default: warning)",
    )
    parser.add_argument(
        "--no-timestamp",
        action="store_true",
        help="Omit the run timestamp for byte-reproducible reports",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output",
    )
    parser.add_argument(
        "--generate-invariants",
        action="store_true",
        help="Write an invariants file seeded from the schema's keys and exit",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity on stderr (default: WARNING)",
    )
    return parser.parse_args(argv)


def _write_invariants(args: argparse.Namespace) -> int:
    invariants = generate_invariants(args.schema)
    _emit(render_invariants(invariants).rstrip("\n"), args.out)
    return EXIT_OK


def _emit(content: str, destination: Path | None) -> None:
    if destination is not None:
        save_report(content, destination)
    else:
        sys.stdout.write(content + "\n")


def _has_failing_findings(result: AuditResult, fail_on: str) -> bool:
    failing = _FAILING_SEVERITIES[fail_on]
    return any(finding.severity in failing for finding in result.findings)
