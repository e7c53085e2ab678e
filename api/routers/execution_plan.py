"""Execution plan endpoints."""

import re
import time
from urllib.parse import quote

import structlog
from fastapi import APIRouter, Depends, Response

from api.config import Settings, get_settings
from api.exceptions import AuditTooLargeError, EmptyAuditError, ValidationError
from api.schemas.execution_plan import ExecutionPlanRequest, ExecutionPlanResponse, PlanSummary
from api.schemas.responses import ERROR_RESPONSES
from mapper.phases import POSTURE_DESCRIPTIONS
from mapper.plan import map_audit_to_execution

router = APIRouter(prefix="/execution-plan", tags=["Execution Plan"])
logger = structlog.get_logger(__name__)

MARKDOWN_MEDIA_TYPE = "text/markdown"

# format -> (plan attribute holding the document, download filename)
DOCUMENTS = {
    "workflow": ("workflow_doc", "workflow-{domain}.md"),
    "agent": ("execution_block", "execution-block-{domain}.md"),
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", filename)
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


@router.get("")
async def describe_execution_plan() -> dict:
    """Describe the execution plan endpoint."""
    return {
        "name": "Execution Plan Generator",
        "description": "Converts deep audit results into phased, dependency-ordered execution plans",
        "usage": {
            "method": "POST",
            "body": {
                "deepAudit": "Deep audit result (url, domain, scores, seo and aeo pillars)",
                "format": "full | workflow | agent (optional, defaults to full)",
                "includeArtifacts": "boolean (optional) - include artifact lists in full output",
            },
        },
        "outputs": {
            "full": "ExecutionPlan JSON with phases, issues, artifacts and score snapshots",
            "workflow": "Human-readable markdown workflow document",
            "agent": "Agent-ready markdown execution block",
        },
        "postures": {p.value: text for p, text in POSTURE_DESCRIPTIONS.items()},
    }


@router.post("", response_model=None, responses=ERROR_RESPONSES)
async def create_execution_plan(
    body: ExecutionPlanRequest,
    settings: Settings = Depends(get_settings),
) -> ExecutionPlanResponse | Response:
    """
    Build an execution plan from a deep audit.

    Returns the full plan as JSON, or a markdown attachment for the
    ``workflow`` and ``agent`` formats.
    """
    audit_in = body.deep_audit
    if not audit_in.has_pillars():
        raise ValidationError("Audit has no pillar analyses", field="deepAudit.seo")

    issue_count = audit_in.issue_count()

    if issue_count == 0:
        raise EmptyAuditError()
    if issue_count > settings.max_issues_per_plan:
        raise AuditTooLargeError(issue_count, settings.max_issues_per_plan)

    logger.info("execution_plan_requested", domain=audit_in.domain, issues=issue_count)

    start = time.perf_counter()
    plan = map_audit_to_execution(audit_in.to_domain())
    duration_ms = round((time.perf_counter() - start) * 1000, 2)

    logger.info(
        "execution_plan_completed",
        domain=audit_in.domain,
        phases=len(plan.phases),
        duration_ms=duration_ms,
    )

    if body.format in DOCUMENTS:
        attr, filename = DOCUMENTS[body.format]
        disposition = content_disposition(filename.format(domain=audit_in.domain))
        return Response(
            content=getattr(plan, attr),
            media_type=MARKDOWN_MEDIA_TYPE,
            headers={"Content-Disposition": disposition},
        )

    include_artifacts = (
        settings.plan_include_artifacts
        if body.include_artifacts is None
        else body.include_artifacts
    )
    return ExecutionPlanResponse(
        duration_ms=duration_ms,
        plan=plan.to_dict(include_artifacts=include_artifacts),
        summary=PlanSummary(**plan.summary()),
    )
