"""Human-readable workflow document."""

from datetime import datetime

from mapper.impact import ScoreImpact
from mapper.models import ExecutionPlan


def format_impact(score_impact: ScoreImpact) -> str:
    """``+3-8 pts``"""
    return f"+{score_impact.overall_min:g}-{score_impact.overall_max:g} pts"


def format_audit_date(value: str) -> str:
    """ISO timestamp to a date; unparseable values pass through."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def render_workflow_doc(plan: ExecutionPlan) -> str:
    """Render the plan as a markdown workflow for operators."""
    before = plan.scores.before
    lines = [
        f"# Execution Workflow: {plan.audit_domain}",
        "",
        f"Audit Date: {format_audit_date(plan.audit_date)}",
        f"Current Score: {before.overall:.0f}/100 (SEO: {before.seo:.0f}, AEO: {before.aeo:.0f})",
    ]

    projected = plan.scores.projected["overall"]
    lines.append(f"Projected Score: {projected.min:.0f}-{projected.max:.0f}/100")
    lines.extend(["", "---", ""])

    lines.extend(["## Critical Path (Top 10 Impact Items)", ""])
    for i, mi in enumerate(plan.critical_path, start=1):
        lines.append(
            f"{i}. **{mi.issue.title}** [{mi.issue.severity.value}] → "
            f"{format_impact(mi.score_impact)}"
        )

    if plan.quick_wins:
        lines.extend(["", "## Quick Wins", ""])
        for mi in plan.quick_wins:
            lines.append(
                f"- **{mi.issue.title}** ({mi.effort.value}) → {format_impact(mi.score_impact)}"
            )

    lines.extend(["", "---", "", "## Execution Phases", ""])

    for block in plan.phases:
        phase = block.phase
        label = phase.posture.value.upper()
        lines.extend(
            [
                f"### Phase {phase.order}: {phase.name} [{label}]",
                "",
                f"*{phase.description}*",
                "",
                f"- **Agent Posture:** {phase.posture.value}: {phase.posture.description}",
                f"- **Duration:** {block.total_effort}",
                f"- **Issues:** {len(block.issues)}",
                f"- **Score Impact:** {format_impact(block.aggregate_impact)}",
                f"- **Can Start:** {'Yes' if block.can_start else 'No (waiting on prerequisites)'}",
                "",
            ]
        )

        if phase.prerequisites:
            prereqs = ", ".join(p.value for p in phase.prerequisites)
            lines.extend([f"Prerequisites: {prereqs}", ""])

        lines.extend(["#### Issues", ""])
        for mi in block.issues:
            lines.append(
                f"- [{mi.classification.value}] **{mi.issue.title}** "
                f"[{mi.issue.severity.value}] - {mi.effort.value}"
            )
        lines.append("")

    lines.extend(["---", "", "*Generated by the execution mapper*"])
    return "\n".join(lines)
