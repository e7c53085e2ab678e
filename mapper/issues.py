"""Audit issues and the audit input consumed by the execution mapper.

Issues are produced upstream by the audit analyzers and arrive grouped into
ten pillars (five SEO, five AEO). The mapper treats them as immutable.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum


class Severity(StrEnum):
    """Issue severity, ordered from most to least urgent."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Accept upstream casing (``CRITICAL``) as well as lowercase."""
        return cls(str(value).strip().lower())


class FixKind(StrEnum):
    """What kind of deliverable an issue's fix is."""

    FILE = "file"  # File content to create
    CODE = "code"  # Code to implement
    CONFIG = "config"  # Configuration change
    COPY = "copy"  # Content/copy to write
    INSTRUCTION = "instruction"  # Step-by-step instructions


class EffortBucket(StrEnum):
    """Coarse effort estimate attached to a fix."""

    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"


class Composite(StrEnum):
    """Composite score a pillar rolls up into."""

    SEO = "seo"
    AEO = "aeo"


class Pillar(StrEnum):
    """The ten audit pillars."""

    TECHNICAL = "technical"
    ON_PAGE = "on_page"
    CONTENT = "content"
    AUTHORITY = "authority"
    UX = "ux"
    ENTITY_DEFINITION = "entity_definition"
    SCHEMA_MARKUP = "schema_markup"
    FAQ_TARGETING = "faq_targeting"
    VOICE_SEARCH = "voice_search"
    AI_SEARCH = "ai_search"

    @property
    def display_name(self) -> str:
        return PILLAR_DISPLAY_NAMES[self]

    @property
    def composite(self) -> Composite:
        return Composite.SEO if self in SEO_PILLARS else Composite.AEO


PILLAR_DISPLAY_NAMES: dict[Pillar, str] = {
    Pillar.TECHNICAL: "Technical SEO",
    Pillar.ON_PAGE: "On-Page SEO",
    Pillar.CONTENT: "Content",
    Pillar.AUTHORITY: "Authority",
    Pillar.UX: "UX",
    Pillar.ENTITY_DEFINITION: "Entity Definition",
    Pillar.SCHEMA_MARKUP: "Schema Markup",
    Pillar.FAQ_TARGETING: "FAQ Targeting",
    Pillar.VOICE_SEARCH: "Voice Search",
    Pillar.AI_SEARCH: "AI Search",
}

SEO_PILLARS: tuple[Pillar, ...] = (
    Pillar.TECHNICAL,
    Pillar.ON_PAGE,
    Pillar.CONTENT,
    Pillar.AUTHORITY,
    Pillar.UX,
)

AEO_PILLARS: tuple[Pillar, ...] = (
    Pillar.ENTITY_DEFINITION,
    Pillar.SCHEMA_MARKUP,
    Pillar.FAQ_TARGETING,
    Pillar.VOICE_SEARCH,
    Pillar.AI_SEARCH,
)

# Family prefixes some analyzers put in front of the issue id ("aeo-faq-001")
FAMILY_PREFIXES = ("aeo", "seo")

_PREFIX_RE = re.compile(r"^(?:%s)-" % "|".join(FAMILY_PREFIXES))


@dataclass
class IssueKey:
    """Parsed issue identifier.

    ``aeo-faq-001`` parses to prefix ``aeo``, family ``faq`` and suffix ``001``.
    Parsing happens once per issue; rules match on family and suffix instead of
    re-reading the raw string.
    """

    raw: str
    prefix: str | None
    family: str
    suffix: str | None

    @property
    def normalized(self) -> str:
        """Identifier with the family prefix stripped."""
        if self.suffix is None:
            return self.family
        return f"{self.family}-{self.suffix}"

    def candidates(self) -> list[tuple[str, str | None]]:
        """(family, suffix) pairs a rule may match: normalized first, then raw."""
        pairs = [(self.family, self.suffix)]
        if self.prefix is not None:
            pairs.append((self.prefix, self.normalized))
        return pairs


def normalize_issue_id(issue_id: str) -> str:
    """Strip a known family prefix so prefixed and bare ids compare equal."""
    return _PREFIX_RE.sub("", issue_id.strip().lower(), count=1)


def parse_issue_id(issue_id: str) -> IssueKey:
    """Parse a raw issue id into an IssueKey. Never fails."""
    lowered = issue_id.strip().lower()
    prefix = None
    match = _PREFIX_RE.match(lowered)
    if match:
        prefix = match.group(0)[:-1]
    body = normalize_issue_id(issue_id)
    family, sep, suffix = body.partition("-")
    return IssueKey(
        raw=issue_id,
        prefix=prefix,
        family=family,
        suffix=suffix if sep else None,
    )


@dataclass
class IssueFix:
    """Remediation payload attached to an issue."""

    kind: FixKind
    title: str
    description: str
    content: str
    effort: EffortBucket
    filename: str | None = None
    language: str | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "effort": self.effort.value,
            "filename": self.filename,
            "language": self.language,
        }


@dataclass
class Issue:
    """A single audit finding with its fix."""

    id: str
    title: str
    description: str
    severity: Severity
    impact: str  # Why this matters
    current_state: str  # What the audit found
    fix: IssueFix

    @property
    def key(self) -> IssueKey:
        return parse_issue_id(self.id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
            "impact": self.impact,
            "current_state": self.current_state,
            "fix": self.fix.to_dict(),
        }


@dataclass
class PillarAudit:
    """One pillar of an audit: its current score and its issues."""

    pillar: Pillar
    score: float
    issues: list[Issue] = field(default_factory=list)


@dataclass
class AuditInput:
    """Snapshot of an audit as handed to the mapper.

    Composite scores are computed upstream from the same pillar scores and are
    trusted as the "before" snapshot without being re-derived.
    """

    url: str
    domain: str
    audited_at: str
    overall_score: float
    seo_score: float
    aeo_score: float
    pillars: dict[Pillar, PillarAudit] = field(default_factory=dict)

    def all_issues(self) -> list[Issue]:
        """Issues across all pillars, SEO pillars first, in pillar order."""
        issues: list[Issue] = []
        for pillar in (*SEO_PILLARS, *AEO_PILLARS):
            audit = self.pillars.get(pillar)
            if audit is not None:
                issues.extend(audit.issues)
        return issues

    def pillar_scores(self) -> dict[Pillar, float]:
        """Current score per pillar present in the audit."""
        return {pillar: audit.score for pillar, audit in self.pillars.items()}
