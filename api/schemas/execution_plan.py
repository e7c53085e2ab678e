"""Execution plan request schemas.

The request body carries a deep audit as produced upstream, with camelCase keys
and uppercase severities. Snake_case keys are accepted as well.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mapper.issues import (
    AEO_PILLARS,
    SEO_PILLARS,
    AuditInput,
    EffortBucket,
    FixKind,
    Issue,
    IssueFix,
    Pillar,
    PillarAudit,
    Severity,
)


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AuditFixIn(CamelModel):
    """Fix attached to an audit issue."""

    type: FixKind
    title: str
    description: str = ""
    content: str = ""
    filename: str | None = None
    language: str | None = None
    estimated_effort: EffortBucket

    def to_domain(self) -> IssueFix:
        return IssueFix(
            kind=self.type,
            title=self.title,
            description=self.description,
            content=self.content,
            effort=self.estimated_effort,
            filename=self.filename,
            language=self.language,
        )


class AuditIssueIn(CamelModel):
    """A single audit issue."""

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    severity: Severity
    impact: str = ""
    current_state: str = ""
    fix: AuditFixIn

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v: str) -> Severity:
        """Upstream sends CRITICAL/HIGH/MEDIUM/LOW."""
        return Severity.parse(v)

    def to_domain(self) -> Issue:
        return Issue(
            id=self.id,
            title=self.title,
            description=self.description,
            severity=self.severity,
            impact=self.impact,
            current_state=self.current_state,
            fix=self.fix.to_domain(),
        )


class PillarAnalysisIn(CamelModel):
    """Score and issues for one pillar."""

    score: float = Field(..., ge=0, le=100)
    issues: list[AuditIssueIn] = Field(default_factory=list)


class SEOPillarsIn(CamelModel):
    technical: PillarAnalysisIn | None = None
    on_page: PillarAnalysisIn | None = None
    content: PillarAnalysisIn | None = None
    authority: PillarAnalysisIn | None = None
    ux: PillarAnalysisIn | None = None


class AEOPillarsIn(CamelModel):
    entity_definition: PillarAnalysisIn | None = None
    schema_markup: PillarAnalysisIn | None = None
    faq_targeting: PillarAnalysisIn | None = None
    voice_search: PillarAnalysisIn | None = None
    ai_search: PillarAnalysisIn | None = None


class DeepAuditIn(CamelModel):
    """Deep audit result: composite scores plus ten pillars."""

    url: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1)
    audited_at: str
    overall_score: float = Field(..., ge=0, le=100)
    seo_score: float = Field(..., ge=0, le=100)
    aeo_score: float = Field(..., ge=0, le=100)
    seo: SEOPillarsIn
    aeo: AEOPillarsIn

    def has_pillars(self) -> bool:
        return bool(self._pillars())

    def issue_count(self) -> int:
        return sum(len(p.issues) for p in self._pillars().values())

    def _pillars(self) -> dict[Pillar, PillarAnalysisIn]:
        present: dict[Pillar, PillarAnalysisIn] = {}
        for group, pillars in ((self.seo, SEO_PILLARS), (self.aeo, AEO_PILLARS)):
            for pillar in pillars:
                analysis = getattr(group, pillar.value)
                if analysis is not None:
                    present[pillar] = analysis
        return present

    def to_domain(self) -> AuditInput:
        """Convert to the mapper's audit input."""
        return AuditInput(
            url=self.url,
            domain=self.domain,
            audited_at=self.audited_at,
            overall_score=self.overall_score,
            seo_score=self.seo_score,
            aeo_score=self.aeo_score,
            pillars={
                pillar: PillarAudit(
                    pillar=pillar,
                    score=analysis.score,
                    issues=[i.to_domain() for i in analysis.issues],
                )
                for pillar, analysis in self._pillars().items()
            },
        )


PlanFormat = Literal["full", "workflow", "agent"]


class ExecutionPlanRequest(CamelModel):
    """POST /v1/execution-plan body."""

    deep_audit: DeepAuditIn
    format: PlanFormat = "full"
    include_artifacts: bool | None = None  # None means the configured default


class PlanSummary(BaseModel):
    """Headline numbers for a plan."""

    total_issues: int
    total_artifacts: int
    phase_count: int
    quick_win_count: int
    critical_path_count: int
    current_score: float
    projected_score_min: float
    projected_score_max: float


class ExecutionPlanResponse(BaseModel):
    """Full JSON response for format=full."""

    success: bool = True
    duration_ms: float
    plan: dict
    summary: PlanSummary
