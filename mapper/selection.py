"""Critical path and quick-win selection.

Both are independent ranking passes over the same mapped issues. Neither is
globally optimal; they are greedy heuristics.
"""

from mapper.issues import EffortBucket
from mapper.models import MappedIssue
from mapper.phases import FixClassification

CRITICAL_PATH_LIMIT = 10
QUICK_WIN_LIMIT = 5
QUICK_WIN_MIN_IMPACT = 3.0

# Divisor applied to impact when ranking quick wins
EFFORT_WEIGHTS: dict[EffortBucket, float] = {
    EffortBucket.MINUTES: 1.0,
    EffortBucket.HOURS: 3.0,
    EffortBucket.DAYS: 3.0,
}


def select_critical_path(
    mapped_issues: list[MappedIssue], limit: int = CRITICAL_PATH_LIMIT
) -> list[MappedIssue]:
    """
    Pick up to ``limit`` high-impact issues in a dependency-consistent order.

    Issues are ranked by average overall impact (descending), mechanical fixes
    first on ties. Walking that ranking, an issue is taken only once every id
    it depends on has already been taken.
    """
    ranked = sorted(
        mapped_issues,
        key=lambda mi: (-mi.average_impact, mi.classification.rank),
    )

    selected: list[MappedIssue] = []
    resolved: set[str] = set()

    for mi in ranked:
        if len(selected) >= limit:
            break
        if all(dep in resolved for dep in mi.depends_on):
            selected.append(mi)
            resolved.add(mi.id)

    return selected


def is_quick_win(mi: MappedIssue, min_impact: float = QUICK_WIN_MIN_IMPACT) -> bool:
    """Mechanical or minutes-level, with meaningful impact."""
    cheap = (
        mi.classification == FixClassification.MECHANICAL
        or mi.effort == EffortBucket.MINUTES
    )
    return cheap and mi.average_impact >= min_impact


def select_quick_wins(
    mapped_issues: list[MappedIssue],
    limit: int = QUICK_WIN_LIMIT,
    min_impact: float = QUICK_WIN_MIN_IMPACT,
) -> list[MappedIssue]:
    """Top ``limit`` qualifying issues ranked by impact per unit of effort."""
    candidates = [mi for mi in mapped_issues if is_quick_win(mi, min_impact)]
    candidates.sort(key=lambda mi: -(mi.average_impact / EFFORT_WEIGHTS[mi.effort]))
    return candidates[:limit]
