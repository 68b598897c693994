"""Export stored submissions to an allocation audit workbook.

Usage:
    python -m offering_excel submissions.json -o allocation_audit.xlsx

The input file holds a JSON array of stored submissions (the records returned
by SubmissionStore.list_submissions(), dumped with model_dump(mode="json")).
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from offering_domain.log_config import configure_logging
from offering_domain.schemas import AuditWorkbookCFG, InvestmentSubmission

from .audit_workbook_renderer import AuditWorkbookRenderer

log = logging.getLogger("offering_excel.cli")

_submissions_adapter = TypeAdapter(List[InvestmentSubmission])


def load_submissions(path: Path) -> List[InvestmentSubmission]:
    """Read and validate a JSON array of stored submissions."""
    with path.open("r", encoding="utf-8") as fh:
        return _submissions_adapter.validate_python(json.load(fh))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m offering_excel",
        description="Render an allocation audit workbook from stored submissions",
    )
    parser.add_argument("submissions", help="Path to a JSON array of stored submissions")
    parser.add_argument(
        "-o", "--output",
        default="allocation_audit.xlsx",
        help="Workbook path to write (default: allocation_audit.xlsx)",
    )
    parser.add_argument("--title", default=None, help="Title shown on every sheet")
    parser.add_argument("--no-tier-schedule", action="store_true", help="Omit the tier schedule sheet")
    parser.add_argument("--no-summary", action="store_true", help="Omit the summary sheet")
    parser.add_argument("--log-level", default=None, help="Override OFFERING_LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    source = Path(args.submissions)
    if not source.exists():
        log.error("submissions file not found: %s", source)
        return 1

    try:
        submissions = load_submissions(source)
    except (json.JSONDecodeError, ValidationError) as exc:
        log.error("invalid submissions file %s: %s", source, exc)
        return 1

    cfg_kwargs = {
        "submissions": submissions,
        "include_tier_schedule": not args.no_tier_schedule,
        "include_summary": not args.no_summary,
    }
    if args.title:
        cfg_kwargs["title"] = args.title

    try:
        config = AuditWorkbookCFG(**cfg_kwargs)
    except ValidationError as exc:
        log.error("invalid workbook configuration: %s", exc)
        return 1

    try:
        AuditWorkbookRenderer(config).render(args.output)
    except OSError as exc:
        log.error("cannot write workbook %s: %s", args.output, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
