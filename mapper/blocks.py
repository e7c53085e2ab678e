"""Phase block builder."""

import math

from mapper.impact import aggregate_score_impacts
from mapper.issues import EffortBucket
from mapper.models import MappedIssue, PhaseBlock
from mapper.phases import (
    PHASE_DEFINITIONS,
    ExecutionPhase,
    PhaseDefinition,
    find_phase_table_problems,
    ordered_phases,
)
from mapper.rules import RuleTableError

# Smaller units that round up into one unit of the next bucket
MINUTES_PER_HOUR_UNIT = 4
HOURS_PER_DAY_UNIT = 4

# Minutes credited per minute-level fix (low, high)
MINUTE_FIX_RANGE = (15, 30)

_problems = find_phase_table_problems(PHASE_DEFINITIONS)
if _problems:
    raise RuleTableError("; ".join(_problems))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def estimate_total_effort(issues: list[MappedIssue]) -> str:
    """
    Coarse human-readable duration for a set of issues.

    Day-level fixes dominate; otherwise hour-level fixes; four smaller fixes
    round up into one unit of the next bucket.
    """
    minutes = sum(1 for mi in issues if mi.effort == EffortBucket.MINUTES)
    hours = sum(1 for mi in issues if mi.effort == EffortBucket.HOURS)
    days = sum(1 for mi in issues if mi.effort == EffortBucket.DAYS)

    if days:
        return _plural(days + math.ceil(hours / HOURS_PER_DAY_UNIT), "day")
    if hours:
        return _plural(hours + math.ceil(minutes / MINUTES_PER_HOUR_UNIT), "hour")
    low, high = MINUTE_FIX_RANGE
    return f"{minutes * low}-{minutes * high} minutes"


def build_phase_blocks(
    mapped_issues: list[MappedIssue],
    phases: list[PhaseDefinition] | None = None,
) -> list[PhaseBlock]:
    """
    Group mapped issues into phase blocks in declared phase order.

    Phases without issues are skipped. A phase can start when each of its
    prerequisites is either absent from the plan or was emitted earlier.
    """
    by_phase: dict[ExecutionPhase, list[MappedIssue]] = {}
    for mi in mapped_issues:
        by_phase.setdefault(mi.phase, []).append(mi)

    blocks: list[PhaseBlock] = []
    emitted: set[ExecutionPhase] = set()

    for phase in phases if phases is not None else ordered_phases():
        members = by_phase.get(phase.id)
        if not members:
            continue

        can_start = all(
            prereq not in by_phase or prereq in emitted for prereq in phase.prerequisites
        )

        blocks.append(
            PhaseBlock(
                phase=phase,
                issues=members,
                total_effort=estimate_total_effort(members),
                aggregate_impact=aggregate_score_impacts([mi.score_impact for mi in members]),
                can_start=can_start,
            )
        )
        emitted.add(phase.id)

    return blocks
