"""Agent-readable instruction block.

Embeds each issue's raw fix content verbatim, grouped by phase and annotated
with the phase's agent posture.
"""

from mapper.artifacts import ArtifactKind
from mapper.models import ExecutionPlan, MappedIssue, PhaseBlock
from mapper.phases import ExecutionPhase, FixClassification, get_phase_definition

EXECUTION_RULES = [
    "Execute phases in order",
    "Complete all items in a phase before moving to next",
    "Verify each fix before marking complete",
    "Do NOT skip mechanical fixes",
    "For strategic fixes, confirm approach with operator first",
    "**PLACEHOLDER RULE:** Any placeholder copy or example text in this block "
    "(e.g., generic meta descriptions, example H1s) MUST be replaced with "
    "client-accurate language before commit. No placeholders may ship.",
]

POSTURE_INSTRUCTIONS = {
    FixClassification.MECHANICAL: "Execute exactly as written. No creativity. Copy-paste.",
    FixClassification.STRUCTURAL: "Understand context, adapt implementation to codebase patterns.",
    FixClassification.STRATEGIC: "Pause for operator input. Present options. Await approval.",
}

PHASE_SCOPE_NOTES = {
    ExecutionPhase.CONTENT_STRUCTURE: "INTERNAL content quality, hierarchy, and completeness.",
    ExecutionPhase.ANSWER_ARCHITECTURE: "EXTERNAL answer capture (search, voice, AI, snippets).",
}

VERIFICATION_CHECKLIST = [
    "Fix implemented",
    "Tested locally",
    "Deployed to production",
    "Re-audit confirms resolution",
]


def _fenced(content: str, language: str | None) -> list[str]:
    return [f"```{language or 'text'}", content, "```"]


def render_issue_block(mi: MappedIssue) -> str:
    """Standalone execution block for a single issue."""
    issue = mi.issue
    fix = issue.fix
    phase = get_phase_definition(mi.phase)
    lines = [
        f"# EXECUTION BLOCK: {issue.title}",
        "",
        "## Context",
        f"Phase: {phase.order}. {phase.name} ({phase.id.value})",
        f"Agent Posture: {phase.posture.value.upper()}: {POSTURE_INSTRUCTIONS[phase.posture]}",
        f"Severity: {issue.severity.value}",
        f"Issue ID: {issue.id}",
        "",
        "## Problem",
        issue.description,
        "",
        f"Current state: {issue.current_state}",
        f"Impact: {issue.impact}",
        "",
        "## Fix Required",
        f"Type: {fix.kind.value}",
        f"Estimated effort: {fix.effort.value}",
        "",
        fix.description,
        "",
        "## Implementation",
        *_fenced(fix.content, fix.language),
        "",
        "## Verification",
        *(f"- [ ] {item}" for item in VERIFICATION_CHECKLIST),
    ]
    return "\n".join(lines) + "\n"


def _phase_section(block: PhaseBlock) -> list[str]:
    phase = block.phase
    posture = phase.posture
    lines = [f"## PHASE {phase.order}: {phase.name.upper()} [{posture.value.upper()}]", ""]

    scope = PHASE_SCOPE_NOTES.get(phase.id)
    if scope:
        lines.append(f"> **Scope:** {scope}")
    lines.extend(
        [
            f"> {phase.description}",
            f"> **Agent Posture:** {posture.description}",
            "",
        ]
    )

    for mi in block.issues:
        issue = mi.issue
        lines.extend(
            [
                f"### {issue.title}",
                "",
                f"**Severity:** {issue.severity.value}",
                f"**Fix Type:** {mi.classification.value}",
                f"**Effort:** {mi.effort.value}",
                "",
                "**Problem:**",
                issue.description,
                "",
                "**Current State:**",
                issue.current_state,
                "",
                "**Fix:**",
                *_fenced(issue.fix.content, issue.fix.language),
                "",
            ]
        )
        if mi.depends_on:
            lines.extend([f"**Depends On:** {', '.join(mi.depends_on)}", ""])
        lines.extend(["---", ""])

    expected: list[str] = []
    for mi in block.issues:
        for artifact in mi.artifacts:
            if artifact.kind != ArtifactKind.VERIFICATION and artifact.id not in expected:
                expected.append(artifact.id)
    if expected:
        lines.extend([f"**Expected Artifacts:** {', '.join(expected)}", ""])

    return lines


def render_agent_block(plan: ExecutionPlan) -> str:
    """Render the plan as one instruction document for a coding agent."""
    before = plan.scores.before
    lines = [
        f"# EXECUTION BLOCK: {plan.audit_domain.upper()}",
        "",
        "## CONTEXT",
        "",
        "This is an agent-ready execution block for implementing SEO/AEO fixes.",
        f"Source audit: {plan.audit_url}",
        f"Current scores: Overall {before.overall:.0f}, SEO {before.seo:.0f}, AEO {before.aeo:.0f}",
        "",
        "## EXECUTION RULES",
        "",
    ]
    lines.extend(f"{i}. {rule}" for i, rule in enumerate(EXECUTION_RULES, start=1))
    lines.extend(
        [
            "",
            "## AGENT POSTURES",
            "",
            "Each phase has a posture that determines agent behavior:",
            "",
        ]
    )
    lines.extend(
        f"- **{posture.value.upper()}**: {text}" for posture, text in POSTURE_INSTRUCTIONS.items()
    )
    lines.extend(["", "---", ""])

    for block in plan.phases:
        lines.extend(_phase_section(block))

    lines.extend(
        [
            "## COMPLETION",
            "",
            "After all phases complete:",
            "1. Re-run deep audit",
            "2. Compare scores",
            "3. Document remaining gaps",
            "4. Plan next iteration",
            "",
            "// END EXECUTION BLOCK",
        ]
    )
    return "\n".join(lines)
