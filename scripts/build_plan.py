#!/usr/bin/env python
"""Build an execution plan from a deep audit JSON file.

The file holds the same shape as the ``deepAudit`` field of
``POST /v1/execution-plan``; a wrapping ``{"deepAudit": ...}`` object is
accepted too.

Usage:
    python scripts/build_plan.py audit.json
    python scripts/build_plan.py audit.json --format workflow --output workflow.md
    python scripts/build_plan.py audit.json --format agent --no-artifacts
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

sys.path.insert(0, ".")

from api.config import get_settings  # noqa: E402
from api.logging import get_logger, setup_logging  # noqa: E402
from api.schemas.execution_plan import DeepAuditIn  # noqa: E402
from mapper.plan import map_audit_to_execution  # noqa: E402

logger = get_logger(__name__)


def load_audit(path: Path) -> DeepAuditIn:
    """Read and validate an audit file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict) and "deepAudit" in data:
        data = data["deepAudit"]
    return DeepAuditIn.model_validate(data)


def render(audit: DeepAuditIn, fmt: str, include_artifacts: bool) -> str:
    """Build the plan and render it in the requested format."""
    plan = map_audit_to_execution(audit.to_domain())

    if fmt == "workflow":
        return plan.workflow_doc
    if fmt == "agent":
        return plan.execution_block

    return json.dumps(
        {
            "plan": plan.to_dict(include_artifacts=include_artifacts),
            "summary": plan.summary(),
        },
        indent=2,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build an execution plan from a deep audit")
    parser.add_argument("audit", type=Path, help="Path to the deep audit JSON file")
    parser.add_argument(
        "--format",
        choices=["full", "workflow", "agent"],
        default="full",
        help="Output format (default: full JSON)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write output to this path instead of stdout",
    )
    parser.add_argument(
        "--no-artifacts",
        action="store_true",
        help="Omit artifact lists from full JSON output",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level)

    try:
        audit = load_audit(args.audit)
    except FileNotFoundError:
        print(f"Audit file not found: {args.audit}", file=sys.stderr)
        return 1
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        print(f"Invalid audit file {args.audit}: {e}", file=sys.stderr)
        return 1

    issue_count = audit.issue_count()
    max_issues = get_settings().max_issues_per_plan
    if issue_count == 0:
        print("Audit contains no issues; nothing to plan", file=sys.stderr)
        return 1
    if issue_count > max_issues:
        print(
            f"Audit contains {issue_count} issues; at most {max_issues} are allowed per plan",
            file=sys.stderr,
        )
        return 1

    output = render(audit, args.format, include_artifacts=not args.no_artifacts)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        logger.info("plan_written", path=str(args.output), format=args.format)
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
