"""Artifact synthesis.

Each issue yields one primary artifact mirroring its fix kind plus one
verification artifact. Artifact ids are semantic ("schema.organization",
"content.meta-descriptions") so that issues producing the same deliverable
collapse into a single entry in the plan's artifact list.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from mapper.issues import FixKind, Issue
from mapper.phases import ExecutionPhase


class ArtifactKind(StrEnum):
    """What type of output an artifact is."""

    FILE = "file"
    SCHEMA = "schema"
    CONTENT = "content"
    CONFIG = "config"
    CODE_CHANGE = "code-change"
    VERIFICATION = "verification"


class ArtifactScope(StrEnum):
    """What level an artifact applies to."""

    GLOBAL = "global"  # Site-wide
    SYSTEM = "system"  # Infrastructure/config
    PAGE = "page"  # Per page


@dataclass
class Artifact:
    """A deliverable produced while resolving one or more issues."""

    id: str
    kind: ArtifactKind
    scope: ArtifactScope
    name: str
    description: str
    produced_by_phase: ExecutionPhase
    template: str | None = None
    files: list[str] = field(default_factory=list)
    notes: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "scope": self.scope.value,
            "name": self.name,
            "description": self.description,
            "produced_by_phase": self.produced_by_phase.value,
            "template": self.template,
            "files": self.files,
            "notes": self.notes,
        }


FIX_KIND_TO_ARTIFACT_KIND: dict[FixKind, ArtifactKind] = {
    FixKind.FILE: ArtifactKind.FILE,
    FixKind.CODE: ArtifactKind.CODE_CHANGE,
    FixKind.CONFIG: ArtifactKind.CONFIG,
    FixKind.COPY: ArtifactKind.CONTENT,
    FixKind.INSTRUCTION: ArtifactKind.CONTENT,
}

# (family, [(title keyword(s), artifact id)], fallback namespace)
# Keywords are checked in order against the lowercased title; every keyword in
# a tuple must be present.
SEMANTIC_ID_RULES: list[tuple[str, list[tuple[tuple[str, ...], str]], str]] = [
    (
        "schema",
        [
            (("organization",), "schema.organization"),
            (("website",), "schema.website"),
            (("faq",), "schema.faqpage"),
            (("service",), "schema.service"),
            (("breadcrumb",), "schema.breadcrumb"),
            (("speakable",), "schema.speakable"),
            (("local",), "schema.localbusiness"),
            (("article",), "schema.article"),
            (("product",), "schema.product"),
        ],
        "schema",
    ),
    (
        "entity",
        [
            (("definition",), "entity.definition"),
            (("identity",), "entity.definition"),
            (("knowledge",), "entity.knowledge-panel"),
        ],
        "entity",
    ),
    (
        "tech",
        [
            (("robots",), "config.robots"),
            (("sitemap",), "config.sitemap"),
            (("https",), "config.https"),
            (("ssl",), "config.https"),
            (("redirect",), "config.redirects"),
            (("canonical",), "config.canonicals"),
            (("hreflang",), "config.hreflang"),
        ],
        "tech",
    ),
    (
        "onpage",
        [
            (("title",), "content.titles"),
            (("meta description",), "content.meta-descriptions"),
            (("h1",), "content.h1-tags"),
            (("alt",), "content.image-alts"),
            (("heading",), "content.heading-structure"),
        ],
        "content.onpage",
    ),
    (
        "faq",
        [
            (("content",), "content.faq"),
            (("no faq",), "content.faq"),
            (("schema",), "schema.faqpage"),
        ],
        "faq",
    ),
    (
        "voice",
        [
            (("speakable",), "schema.speakable"),
            (("conversational",), "content.conversational"),
        ],
        "voice",
    ),
    (
        "ai",
        [
            (("citation",), "content.citation-ready"),
            (("claim",), "content.structured-claims"),
            (("structured",), "content.structured-claims"),
        ],
        "ai",
    ),
    ("content", [], "content"),
    ("authority", [], "authority"),
    ("ux", [], "performance"),
    ("perf", [], "performance"),
]

GLOBAL_FAMILIES = ("schema", "entity")
GLOBAL_TITLE_KEYWORDS = ("organization", "website")
SYSTEM_FAMILIES = ("tech",)
SYSTEM_TITLE_KEYWORDS = ("robots", "sitemap", "https", "redirect")


def semantic_artifact_id(issue: Issue) -> str:
    """
    Derive a stable semantic id for an issue's primary artifact.

    Falls back to ``{normalized_id}.{fix_kind}`` when no rule applies.
    """
    key = issue.key
    normalized = key.normalized
    family, suffix = key.family, key.suffix
    title = issue.title.lower()

    for rule_family, keyword_rules, namespace in SEMANTIC_ID_RULES:
        # Any id mentioning "schema" is treated as a schema artifact
        in_family = family == rule_family or (
            rule_family == "schema" and "schema" in issue.id.lower()
        )
        if not in_family:
            continue
        for keywords, artifact_id in keyword_rules:
            if all(k in title for k in keywords):
                return artifact_id
        if family == rule_family:
            if suffix:
                return f"{namespace}.{suffix}"
            break
        # Matched only through the "schema" substring: the id's own family decides

    return f"{normalized}.{issue.fix.kind.value}"


def infer_scope(issue: Issue) -> ArtifactScope:
    """Site-wide identity concerns are global, crawl/infra concerns are system."""
    family = issue.key.family
    title = issue.title.lower()

    if family in GLOBAL_FAMILIES or any(k in title for k in GLOBAL_TITLE_KEYWORDS):
        return ArtifactScope.GLOBAL
    if family in SYSTEM_FAMILIES or any(k in title for k in SYSTEM_TITLE_KEYWORDS):
        return ArtifactScope.SYSTEM
    return ArtifactScope.PAGE


def _primary_name(issue: Issue) -> str:
    fix = issue.fix
    if fix.kind == FixKind.FILE:
        return fix.filename or f"fix-{issue.id}.{fix.language or 'txt'}"
    if fix.kind == FixKind.CONFIG:
        return fix.filename or "config-change"
    if fix.kind == FixKind.CODE:
        return f"Code change: {fix.title}"
    if fix.kind == FixKind.COPY:
        return f"Content: {fix.title}"
    return f"Instructions: {fix.title}"


def synthesize(issue: Issue, phase: ExecutionPhase) -> list[Artifact]:
    """
    Build the artifacts an issue produces.

    Args:
        issue: The issue being resolved
        phase: Phase the issue was classified into

    Returns:
        [primary artifact, verification artifact]
    """
    fix = issue.fix
    artifact_id = semantic_artifact_id(issue)
    scope = infer_scope(issue)
    is_instruction = fix.kind == FixKind.INSTRUCTION
    carries_files = fix.kind in (FixKind.FILE, FixKind.CONFIG) and fix.filename

    primary = Artifact(
        id=artifact_id,
        kind=FIX_KIND_TO_ARTIFACT_KIND[fix.kind],
        scope=ArtifactScope.SYSTEM if fix.kind == FixKind.CONFIG else scope,
        name=_primary_name(issue),
        description=fix.description,
        produced_by_phase=phase,
        template=None if is_instruction else fix.content,
        files=[fix.filename] if carries_files else [],
        notes=fix.content if is_instruction else None,
    )

    verification = Artifact(
        id=f"{artifact_id}.verify",
        kind=ArtifactKind.VERIFICATION,
        scope=scope,
        name=f"Verify: {issue.title}",
        description=f"Confirm {issue.title} is resolved",
        produced_by_phase=phase,
    )

    return [primary, verification]


def dedupe_artifacts(artifact_lists: list[list[Artifact]]) -> list[Artifact]:
    """Flatten artifact lists keeping the first artifact seen for each id."""
    seen: dict[str, Artifact] = {}
    for artifacts in artifact_lists:
        for artifact in artifacts:
            if artifact.id not in seen:
                seen[artifact.id] = artifact
    return list(seen.values())
