"""Execution mapper: turns SEO/AEO audit issues into ordered remediation plans."""

from mapper.classifier import classify
from mapper.issues import AuditInput, Issue, IssueFix, PillarAudit
from mapper.models import ExecutionPlan, MappedIssue
from mapper.phases import ExecutionPhase, FixClassification
from mapper.plan import ExecutionMapper, MapperConfig, map_audit_to_execution
from mapper.projection import ScoreProjector, project_scores
from mapper.reports import render_agent_block, render_issue_block, render_workflow_doc

__all__ = [
    # Audit input
    "AuditInput",
    "Issue",
    "IssueFix",
    "PillarAudit",
    # Classification
    "ExecutionPhase",
    "FixClassification",
    "classify",
    # Plan
    "ExecutionMapper",
    "ExecutionPlan",
    "MappedIssue",
    "MapperConfig",
    "map_audit_to_execution",
    # Scores
    "ScoreProjector",
    "project_scores",
    # Reports
    "render_agent_block",
    "render_issue_block",
    "render_workflow_doc",
]
