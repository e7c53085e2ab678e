"""Execution plan assembler.

Turns an audit's unordered issues into an ExecutionPlan:

    classify -> resolve dependencies -> synthesize artifacts
    -> phase blocks -> score projection -> critical path / quick wins
    -> rendered workflow and agent documents

Per-issue classification and artifact synthesis are independent of each
other; dependency resolution needs the full id set first.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from mapper.artifacts import dedupe_artifacts, synthesize
from mapper.blocks import build_phase_blocks
from mapper.classifier import classify
from mapper.dependencies import resolve_dependencies
from mapper.issues import AuditInput, Issue
from mapper.models import ExecutionPlan, MappedIssue
from mapper.projection import ScoreProjector, ScoreSnapshot, ScoreSource
from mapper.reports import render_agent_block, render_issue_block, render_workflow_doc
from mapper.selection import (
    CRITICAL_PATH_LIMIT,
    QUICK_WIN_LIMIT,
    QUICK_WIN_MIN_IMPACT,
    select_critical_path,
    select_quick_wins,
)

logger = structlog.get_logger(__name__)


@dataclass
class MapperConfig:
    """Tunables for plan assembly."""

    critical_path_limit: int = CRITICAL_PATH_LIMIT
    quick_win_limit: int = QUICK_WIN_LIMIT
    quick_win_min_impact: float = QUICK_WIN_MIN_IMPACT


class ExecutionMapper:
    """Builds execution plans from audit snapshots."""

    def __init__(self, config: MapperConfig | None = None):
        self.config = config or MapperConfig()
        self.projector = ScoreProjector()

    def build(self, audit: AuditInput, now: datetime | None = None) -> ExecutionPlan:
        """
        Build an execution plan for an audit.

        Args:
            audit: Audit snapshot with pillar scores and issues
            now: Timestamp for the simulated score snapshot (defaults to utcnow)

        Returns:
            ExecutionPlan
        """
        timestamp = (now or datetime.now(UTC)).isoformat()
        issues = audit.all_issues()

        mapped = self.map_issues(issues)
        blocks = build_phase_blocks(mapped)

        before = ScoreSnapshot(
            overall=audit.overall_score,
            seo=audit.seo_score,
            aeo=audit.aeo_score,
            pillars=audit.pillar_scores(),
            source=ScoreSource.AUDIT,
            timestamp=audit.audited_at,
        )
        scores = self.projector.project(before, [mi.score_impact for mi in mapped], timestamp)

        plan = ExecutionPlan(
            audit_url=audit.url,
            audit_domain=audit.domain,
            audit_date=audit.audited_at,
            scores=scores,
            artifacts=dedupe_artifacts([mi.artifacts for mi in mapped]),
            phases=blocks,
            critical_path=select_critical_path(mapped, self.config.critical_path_limit),
            quick_wins=select_quick_wins(
                mapped,
                limit=self.config.quick_win_limit,
                min_impact=self.config.quick_win_min_impact,
            ),
        )
        plan.workflow_doc = render_workflow_doc(plan)
        plan.execution_block = render_agent_block(plan)

        logger.debug(
            "execution_plan_built",
            domain=audit.domain,
            issues=len(mapped),
            phases=len(blocks),
            artifacts=len(plan.artifacts),
            critical_path=len(plan.critical_path),
            quick_wins=len(plan.quick_wins),
        )
        return plan

    def map_issues(self, issues: list[Issue]) -> list[MappedIssue]:
        """Classify every issue, then resolve dependencies against the full id set."""
        classified = [(issue, classify(issue.id, issue.title)) for issue in issues]
        all_ids = [issue.id for issue in issues]

        mapped: list[MappedIssue] = []
        for issue, result in classified:
            deps = resolve_dependencies(issue.id, all_ids)
            mi = MappedIssue(
                issue=issue,
                phase=result.phase,
                classification=result.classification,
                score_impact=result.score_impact,
                depends_on=deps.depends_on,
                blocks=deps.blocks,
                artifacts=synthesize(issue, result.phase),
            )
            mi.execution_block = render_issue_block(mi)
            mapped.append(mi)
        return mapped


def map_audit_to_execution(
    audit: AuditInput,
    config: MapperConfig | None = None,
    now: datetime | None = None,
) -> ExecutionPlan:
    """
    Convenience function to build an execution plan.

    Args:
        audit: Audit snapshot
        config: Optional mapper tunables
        now: Optional timestamp for the simulated snapshot

    Returns:
        ExecutionPlan
    """
    return ExecutionMapper(config).build(audit, now=now)
