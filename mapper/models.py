"""Execution plan data structures.

Everything here is built fresh per plan. Rendered documents are filled in
by the assembler before the plan is returned.
"""

from dataclasses import dataclass, field

from mapper.artifacts import Artifact
from mapper.impact import ScoreImpact
from mapper.issues import EffortBucket, Issue
from mapper.phases import ExecutionPhase, FixClassification, PhaseDefinition
from mapper.projection import ExecutionScores


@dataclass
class MappedIssue:
    """An issue placed into the execution plan."""

    issue: Issue
    phase: ExecutionPhase
    classification: FixClassification
    score_impact: ScoreImpact
    depends_on: list[str] = field(default_factory=list)
    blocks: list[str] = field(default_factory=list)
    artifacts: list[Artifact] = field(default_factory=list)
    execution_block: str = ""  # Standalone agent block for this issue

    @property
    def id(self) -> str:
        return self.issue.id

    @property
    def effort(self) -> EffortBucket:
        return self.issue.fix.effort

    @property
    def average_impact(self) -> float:
        return self.score_impact.average

    def to_dict(self, include_artifacts: bool = True) -> dict:
        data = {
            "issue": self.issue.to_dict(),
            "phase": self.phase.value,
            "classification": self.classification.value,
            "depends_on": self.depends_on,
            "blocks": self.blocks,
            "score_impact": self.score_impact.to_dict(),
            "execution_block": self.execution_block,
        }
        if include_artifacts:
            data["artifacts"] = [a.to_dict() for a in self.artifacts]
        return data


@dataclass
class PhaseBlock:
    """A phase together with the issues assigned to it."""

    phase: PhaseDefinition
    issues: list[MappedIssue]
    total_effort: str
    aggregate_impact: ScoreImpact
    can_start: bool

    def to_dict(self, include_artifacts: bool = True) -> dict:
        return {
            "phase": self.phase.to_dict(),
            "issues": [i.to_dict(include_artifacts) for i in self.issues],
            "total_effort": self.total_effort,
            "aggregate_impact": self.aggregate_impact.to_dict(),
            "can_start": self.can_start,
        }


@dataclass
class ExecutionPlan:
    """Ordered, dependency-respecting remediation plan for one audit."""

    audit_url: str
    audit_domain: str
    audit_date: str
    scores: ExecutionScores
    artifacts: list[Artifact]
    phases: list[PhaseBlock]
    critical_path: list[MappedIssue]
    quick_wins: list[MappedIssue]
    workflow_doc: str = ""
    execution_block: str = ""

    @property
    def mapped_issues(self) -> list[MappedIssue]:
        """All mapped issues in phase order."""
        return [mi for block in self.phases for mi in block.issues]

    @property
    def projected_scores(self) -> dict:
        """Flat min/max projected overall, SEO and AEO scores."""
        projected = self.scores.projected
        return {
            f"{name}_{bound}": getattr(projected[name], bound)
            for name in ("overall", "seo", "aeo")
            for bound in ("min", "max")
        }

    def summary(self) -> dict:
        projected = self.scores.projected["overall"]
        return {
            "total_issues": len(self.mapped_issues),
            "total_artifacts": len(self.artifacts),
            "phase_count": len(self.phases),
            "quick_win_count": len(self.quick_wins),
            "critical_path_count": len(self.critical_path),
            "current_score": self.scores.before.overall,
            "projected_score_min": projected.min,
            "projected_score_max": projected.max,
        }

    def to_dict(self, include_artifacts: bool = True) -> dict:
        data = {
            "audit_url": self.audit_url,
            "audit_domain": self.audit_domain,
            "audit_date": self.audit_date,
            "scores": self.scores.to_dict(),
            "projected_scores": self.projected_scores,
            "phases": [b.to_dict(include_artifacts) for b in self.phases],
            "critical_path": [mi.id for mi in self.critical_path],
            "quick_wins": [mi.id for mi in self.quick_wins],
            "workflow_doc": self.workflow_doc,
            "execution_block": self.execution_block,
        }
        if include_artifacts:
            data["artifacts"] = [a.to_dict() for a in self.artifacts]
        return data
