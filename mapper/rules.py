"""Static rule tables for the execution mapper.

Two tables live here:

- ``PHASE_MAPPINGS``: ordered classifier rules. The first rule whose matcher
  accepts an issue wins, and the table ends with an unconditional catch-all
  so every issue is classified.
- ``DEPENDENCY_RULES``: pairwise ordering rules ("issues matching *blocked*
  cannot start before issues matching *blocker*").

Rules match on the parsed issue family and suffix, never on raw strings.
"""

from dataclasses import dataclass

from mapper.impact import ScoreImpact, impact
from mapper.issues import IssueKey, Pillar
from mapper.phases import ExecutionPhase, FixClassification


class RuleTableError(Exception):
    """A static rule table is inconsistent (cycle, missing catch-all, bad phase)."""


@dataclass
class IssueMatcher:
    """Matches issues by family tag and optional suffix.

    ``family=None`` matches every issue; ``suffix=None`` matches every issue
    in the family.
    """

    family: str | None = None
    suffix: str | None = None

    @property
    def is_catch_all(self) -> bool:
        return self.family is None

    def matches(self, key: IssueKey) -> bool:
        if self.family is None:
            return True
        return any(
            family == self.family and (self.suffix is None or suffix == self.suffix)
            for family, suffix in key.candidates()
        )

    def overlaps(self, other: "IssueMatcher") -> bool:
        """True if some issue id could match both matchers."""
        if self.family is None or other.family is None:
            return True
        if self.family != other.family:
            return False
        return self.suffix is None or other.suffix is None or self.suffix == other.suffix

    def __str__(self) -> str:
        if self.family is None:
            return "*"
        return f"{self.family}-{self.suffix or '*'}"


def issue(family: str, suffix: str | None = None) -> IssueMatcher:
    """Matcher for one issue (``issue("tech", "003")``) or a whole family."""
    return IssueMatcher(family=family, suffix=suffix)


ANY_ISSUE = IssueMatcher()


@dataclass
class PhaseMapping:
    """Classifier rule: matcher -> phase, classification and impact range."""

    matcher: IssueMatcher
    phase: ExecutionPhase
    classification: FixClassification
    score_impact: ScoreImpact


@dataclass
class DependencyRule:
    """Issues matching ``blocked`` wait for issues matching ``blocker``."""

    blocker: IssueMatcher
    blocked: IssueMatcher
    reason: str


_P = ExecutionPhase
_F = FixClassification

PHASE_MAPPINGS: list[PhaseMapping] = [
    # Technical SEO
    PhaseMapping(  # Missing robots.txt
        issue("tech", "001"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.TECHNICAL, 5, 10)], 2, 5),
    ),
    PhaseMapping(  # Missing sitemap
        issue("tech", "002"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.TECHNICAL, 5, 10)], 2, 5),
    ),
    PhaseMapping(  # No HTTPS
        issue("tech", "003"), _P.TECHNICAL_HYGIENE, _F.STRUCTURAL,
        impact([(Pillar.TECHNICAL, 15, 25)], 5, 10),
    ),
    PhaseMapping(  # Broken links
        issue("tech", "004"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.TECHNICAL, 5, 15)], 2, 5),
    ),
    PhaseMapping(  # Redirect loops
        issue("tech", "005"), _P.TECHNICAL_HYGIENE, _F.STRUCTURAL,
        impact([(Pillar.TECHNICAL, 10, 20)], 3, 8),
    ),
    PhaseMapping(  # Poor Core Web Vitals
        issue("tech", "006"), _P.PERFORMANCE_OPTIMIZATION, _F.STRUCTURAL,
        impact([(Pillar.TECHNICAL, 5, 15), (Pillar.UX, 10, 20)], 5, 12),
    ),
    PhaseMapping(  # Duplicate content
        issue("tech", "007"), _P.CONTENT_STRUCTURE, _F.STRUCTURAL,
        impact([(Pillar.TECHNICAL, 5, 10), (Pillar.CONTENT, 5, 10)], 3, 8),
    ),
    # On-page SEO
    PhaseMapping(  # Missing titles
        issue("onpage", "001"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.ON_PAGE, 10, 20)], 3, 8),
    ),
    PhaseMapping(  # Missing meta descriptions
        issue("onpage", "002"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.ON_PAGE, 8, 15)], 2, 6),
    ),
    PhaseMapping(  # Missing H1
        issue("onpage", "003"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.ON_PAGE, 5, 10)], 2, 5),
    ),
    PhaseMapping(  # Images without alt text
        issue("onpage", "004"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.ON_PAGE, 3, 8)], 1, 3),
    ),
    # AEO: entity
    PhaseMapping(  # Missing entity definition
        issue("entity", "001"), _P.ENTITY_FOUNDATION, _F.STRATEGIC,
        impact([(Pillar.ENTITY_DEFINITION, 20, 35)], 5, 12),
    ),
    # AEO: schema
    PhaseMapping(  # Missing Organization schema
        issue("schema", "001"), _P.ENTITY_FOUNDATION, _F.MECHANICAL,
        impact([(Pillar.SCHEMA_MARKUP, 15, 25), (Pillar.ENTITY_DEFINITION, 10, 15)], 5, 12),
    ),
    PhaseMapping(  # Missing WebSite schema
        issue("schema", "002"), _P.ENTITY_FOUNDATION, _F.MECHANICAL,
        impact([(Pillar.SCHEMA_MARKUP, 10, 15)], 3, 6),
    ),
    PhaseMapping(  # Missing FAQPage schema
        issue("schema", "003"), _P.ANSWER_ARCHITECTURE, _F.MECHANICAL,
        impact([(Pillar.SCHEMA_MARKUP, 10, 15), (Pillar.FAQ_TARGETING, 15, 25)], 5, 10),
    ),
    PhaseMapping(  # Missing Service schema
        issue("schema", "004"), _P.ENTITY_FOUNDATION, _F.MECHANICAL,
        impact([(Pillar.SCHEMA_MARKUP, 8, 12)], 2, 5),
    ),
    PhaseMapping(  # Missing BreadcrumbList
        issue("schema", "005"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.SCHEMA_MARKUP, 5, 10)], 1, 4),
    ),
    # AEO: FAQ
    PhaseMapping(  # No FAQ content
        issue("faq", "001"), _P.ANSWER_ARCHITECTURE, _F.STRATEGIC,
        impact(
            [
                (Pillar.FAQ_TARGETING, 25, 40),
                (Pillar.VOICE_SEARCH, 10, 20),
                (Pillar.AI_SEARCH, 10, 15),
            ],
            8,
            18,
        ),
    ),
    PhaseMapping(  # FAQ without schema
        issue("faq", "002"), _P.ANSWER_ARCHITECTURE, _F.MECHANICAL,
        impact([(Pillar.FAQ_TARGETING, 10, 20)], 3, 8),
    ),
    # AEO: voice
    PhaseMapping(  # No speakable schema
        issue("voice", "001"), _P.ANSWER_ARCHITECTURE, _F.MECHANICAL,
        impact([(Pillar.VOICE_SEARCH, 15, 25)], 3, 8),
    ),
    PhaseMapping(  # No conversational content
        issue("voice", "002"), _P.CONTENT_STRUCTURE, _F.STRATEGIC,
        impact([(Pillar.VOICE_SEARCH, 10, 20), (Pillar.AI_SEARCH, 5, 10)], 4, 10),
    ),
    # AEO: AI search
    PhaseMapping(  # Low citation readiness
        issue("ai", "001"), _P.CONTENT_STRUCTURE, _F.STRATEGIC,
        impact([(Pillar.AI_SEARCH, 15, 30)], 4, 10),
    ),
    PhaseMapping(  # No structured claims
        issue("ai", "002"), _P.CONTENT_STRUCTURE, _F.STRUCTURAL,
        impact([(Pillar.AI_SEARCH, 10, 20)], 3, 8),
    ),
    # Family fallbacks
    PhaseMapping(
        issue("tech"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.TECHNICAL, 2, 8)], 1, 3),
    ),
    PhaseMapping(
        issue("onpage"), _P.TECHNICAL_HYGIENE, _F.MECHANICAL,
        impact([(Pillar.ON_PAGE, 2, 8)], 1, 3),
    ),
    PhaseMapping(
        issue("content"), _P.CONTENT_STRUCTURE, _F.STRUCTURAL,
        impact([(Pillar.CONTENT, 2, 8)], 1, 3),
    ),
    PhaseMapping(
        issue("authority"), _P.AUTHORITY_BUILDING, _F.STRATEGIC,
        impact([(Pillar.AUTHORITY, 2, 8)], 1, 3),
    ),
    PhaseMapping(
        issue("ux"), _P.PERFORMANCE_OPTIMIZATION, _F.STRUCTURAL,
        impact([(Pillar.UX, 2, 8)], 1, 3),
    ),
    PhaseMapping(
        issue("entity"), _P.ENTITY_FOUNDATION, _F.STRATEGIC,
        impact([(Pillar.ENTITY_DEFINITION, 5, 15)], 2, 5),
    ),
    PhaseMapping(
        issue("schema"), _P.ENTITY_FOUNDATION, _F.MECHANICAL,
        impact([(Pillar.SCHEMA_MARKUP, 5, 15)], 2, 5),
    ),
    PhaseMapping(
        issue("faq"), _P.ANSWER_ARCHITECTURE, _F.STRATEGIC,
        impact([(Pillar.FAQ_TARGETING, 5, 15)], 2, 5),
    ),
    PhaseMapping(
        issue("voice"), _P.ANSWER_ARCHITECTURE, _F.MECHANICAL,
        impact([(Pillar.VOICE_SEARCH, 5, 15)], 2, 5),
    ),
    PhaseMapping(
        issue("ai"), _P.CONTENT_STRUCTURE, _F.STRATEGIC,
        impact([(Pillar.AI_SEARCH, 5, 15)], 2, 5),
    ),
    # Catch-all, must stay last
    PhaseMapping(ANY_ISSUE, _P.TECHNICAL_HYGIENE, _F.MECHANICAL, impact([], 1, 3)),
]

DEPENDENCY_RULES: list[DependencyRule] = [
    DependencyRule(
        blocker=issue("entity", "001"),
        blocked=issue("schema", "001"),
        reason="Organization schema requires entity definition",
    ),
    DependencyRule(
        blocker=issue("entity", "001"),
        blocked=issue("schema", "004"),
        reason="Service schema requires organization entity",
    ),
    DependencyRule(
        blocker=issue("schema", "001"),
        blocked=issue("schema", "002"),
        reason="WebSite schema should reference Organization",
    ),
    DependencyRule(
        blocker=issue("faq", "001"),
        blocked=issue("schema", "003"),
        reason="FAQPage schema requires FAQ content to exist",
    ),
    DependencyRule(
        blocker=issue("faq", "001"),
        blocked=issue("faq", "002"),
        reason="Cannot add schema to non-existent FAQ",
    ),
    DependencyRule(
        blocker=issue("onpage", "001"),
        blocked=issue("ai", "001"),
        reason="Fix basic page structure before content optimization",
    ),
    DependencyRule(
        blocker=issue("onpage", "003"),
        blocked=issue("voice", "002"),
        reason="Page needs H1 before voice optimization",
    ),
    DependencyRule(
        blocker=issue("tech", "003"),
        blocked=issue("authority"),
        reason="Enable HTTPS before building backlinks",
    ),
]


def validate_phase_mappings(mappings: list[PhaseMapping]) -> None:
    """Raise RuleTableError unless the table ends with exactly one catch-all."""
    if not mappings or not mappings[-1].matcher.is_catch_all:
        raise RuleTableError("Classifier rules must end with a catch-all rule")
    if any(m.matcher.is_catch_all for m in mappings[:-1]):
        raise RuleTableError("Catch-all classifier rule must be the last rule")
