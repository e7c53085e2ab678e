"""Tests for phase blocks and effort estimates."""

from mapper.blocks import build_phase_blocks, estimate_total_effort
from mapper.issues import EffortBucket
from mapper.phases import (
    DEFAULT_PHASE,
    PHASE_DEFINITIONS,
    ExecutionPhase,
    FixClassification,
    PhaseDefinition,
    find_phase_table_problems,
    get_phase_definition,
    ordered_phases,
)
from mapper.plan import ExecutionMapper
from tests.fixtures import make_issue


def map_ids(*entries) -> list:
    """Helper to map issues given as ids or (id, effort) pairs."""
    issues = []
    for entry in entries:
        issue_id, effort = entry if isinstance(entry, tuple) else (entry, EffortBucket.HOURS)
        issues.append(make_issue(issue_id, effort=effort))
    return ExecutionMapper().map_issues(issues)


class TestEstimateTotalEffort:
    """Tests for estimate_total_effort()."""

    def test_days_dominate(self):
        mapped = map_ids(
            ("tech-001", EffortBucket.DAYS),
            *[(f"tech-10{i}", EffortBucket.HOURS) for i in range(5)],
        )
        assert estimate_total_effort(mapped) == "3 days"

    def test_single_day(self):
        assert estimate_total_effort(map_ids(("tech-001", EffortBucket.DAYS))) == "1 day"

    def test_hours_with_minutes(self):
        mapped = map_ids(
            ("tech-001", EffortBucket.HOURS),
            ("tech-002", EffortBucket.HOURS),
            ("tech-003", EffortBucket.MINUTES),
            ("tech-004", EffortBucket.MINUTES),
        )
        assert estimate_total_effort(mapped) == "3 hours"

    def test_single_hour(self):
        assert estimate_total_effort(map_ids(("tech-001", EffortBucket.HOURS))) == "1 hour"

    def test_minutes_only(self):
        mapped = map_ids(("tech-001", EffortBucket.MINUTES), ("tech-002", EffortBucket.MINUTES))
        assert estimate_total_effort(mapped) == "30-60 minutes"


class TestBuildPhaseBlocks:
    """Tests for build_phase_blocks()."""

    def test_declared_order_and_empty_phases_skipped(self):
        mapped = map_ids("faq-001", "tech-001", "entity-001", "content-001")
        blocks = build_phase_blocks(mapped)

        assert [b.phase.id for b in blocks] == [
            ExecutionPhase.ENTITY_FOUNDATION,
            ExecutionPhase.TECHNICAL_HYGIENE,
            ExecutionPhase.CONTENT_STRUCTURE,
            ExecutionPhase.ANSWER_ARCHITECTURE,
        ]
        assert all(b.can_start for b in blocks)

    def test_issues_keep_input_order(self):
        mapped = map_ids("tech-002", "onpage-001", "tech-001")
        (block,) = build_phase_blocks(mapped)
        assert [mi.id for mi in block.issues] == ["tech-002", "onpage-001", "tech-001"]

    def test_aggregate_impact(self):
        mapped = map_ids("tech-001", "tech-002")
        (block,) = build_phase_blocks(mapped)
        assert block.aggregate_impact.overall_min == 4
        assert block.aggregate_impact.overall_max == 10
        assert block.aggregate_impact.pillars[0].delta_max == 20

    def test_missing_prerequisite_does_not_block(self):
        # Answer architecture requires entity foundation and content structure,
        # neither of which has issues here
        (block,) = build_phase_blocks(map_ids("faq-001"))
        assert block.can_start is True

    def test_prerequisite_emitted_later_blocks(self):
        reversed_phases = list(reversed(ordered_phases()))
        blocks = build_phase_blocks(map_ids("faq-001", "content-001"), phases=reversed_phases)
        by_phase = {b.phase.id: b for b in blocks}
        assert by_phase[ExecutionPhase.ANSWER_ARCHITECTURE].can_start is False
        assert by_phase[ExecutionPhase.CONTENT_STRUCTURE].can_start is True

    def test_to_dict(self):
        (block,) = build_phase_blocks(map_ids("tech-001"))
        data = block.to_dict(include_artifacts=False)
        assert data["phase"]["id"] == "technical-hygiene"
        assert data["can_start"] is True
        assert "artifacts" not in data["issues"][0]


class TestPhaseTable:
    """Tests for the static phase table."""

    def test_shipped_table_is_consistent(self):
        assert find_phase_table_problems(PHASE_DEFINITIONS) == []

    def test_orders_are_unique_and_sequential(self):
        assert [p.order for p in ordered_phases()] == [1, 2, 3, 4, 5, 6]

    def test_unknown_prerequisite_reported(self):
        phases = [
            PhaseDefinition(
                id=ExecutionPhase.CONTENT_STRUCTURE,
                name="Content",
                description="",
                order=1,
                estimated_duration="1 day",
                posture=FixClassification.STRATEGIC,
                prerequisites=(ExecutionPhase.TECHNICAL_HYGIENE,),
            )
        ]
        assert find_phase_table_problems(phases) == [
            "content-structure: unknown prerequisite technical-hygiene"
        ]

    def test_prerequisite_ordered_later_reported(self):
        phases = [
            PhaseDefinition(
                ExecutionPhase.TECHNICAL_HYGIENE, "Tech", "", 2, "1 day",
                FixClassification.MECHANICAL,
            ),
            PhaseDefinition(
                ExecutionPhase.CONTENT_STRUCTURE, "Content", "", 1, "1 day",
                FixClassification.STRATEGIC, (ExecutionPhase.TECHNICAL_HYGIENE,),
            ),
        ]
        problems = find_phase_table_problems(phases)
        assert len(problems) == 1
        assert "not ordered earlier" in problems[0]

    def test_lookup_falls_back_to_default(self):
        assert get_phase_definition("nope").id == DEFAULT_PHASE
        assert get_phase_definition("authority-building").order == 6

    def test_posture_description(self):
        phase = get_phase_definition(ExecutionPhase.TECHNICAL_HYGIENE)
        assert phase.posture == FixClassification.MECHANICAL
        assert "no decisions" in phase.posture.description
