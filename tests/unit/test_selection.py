"""Tests for critical path and quick-win selection."""

from mapper.issues import EffortBucket
from mapper.plan import ExecutionMapper
from mapper.selection import (
    CRITICAL_PATH_LIMIT,
    is_quick_win,
    select_critical_path,
    select_quick_wins,
)
from tests.fixtures import make_issue


def map_issues(*entries) -> list:
    """Helper to map issues given as ids or (id, effort) pairs."""
    issues = []
    for entry in entries:
        issue_id, effort = entry if isinstance(entry, tuple) else (entry, EffortBucket.HOURS)
        issues.append(make_issue(issue_id, effort=effort))
    return ExecutionMapper().map_issues(issues)


class TestCriticalPath:
    """Tests for select_critical_path()."""

    def test_ranked_by_impact_then_classification(self):
        mapped = map_issues("tech-001", "tech-003", "schema-003", "faq-001")
        path = select_critical_path(mapped)
        # schema-003 and tech-003 tie at 7.5; mechanical goes first
        assert [mi.id for mi in path] == ["faq-001", "schema-003", "tech-003", "tech-001"]

    def test_dependents_follow_their_blockers(self):
        mapped = map_issues("schema-003", "faq-001")
        path = select_critical_path(mapped)
        positions = {mi.id: i for i, mi in enumerate(path)}
        for mi in path:
            for dep in mi.depends_on:
                assert positions[dep] < positions[mi.id]

    def test_blocked_issue_ranked_above_blocker_is_skipped(self):
        # schema-001 ties entity-001 at 8.5 and wins the tie as mechanical,
        # but its blocker has not been taken yet
        mapped = map_issues("schema-001", "entity-001")
        assert [mi.id for mi in select_critical_path(mapped)] == ["entity-001"]

    def test_limit(self):
        mapped = map_issues(*[f"tech-{i:03d}" for i in range(100, 115)])
        assert len(select_critical_path(mapped)) == CRITICAL_PATH_LIMIT
        assert len(select_critical_path(mapped, limit=3)) == 3

    def test_empty(self):
        assert select_critical_path([]) == []


class TestQuickWins:
    """Tests for quick-win selection."""

    def test_low_impact_minutes_fix_excluded(self):
        # onpage-004 averages 2 points
        (mi,) = map_issues(("onpage-004", EffortBucket.MINUTES))
        assert mi.average_impact == 2
        assert is_quick_win(mi) is False

    def test_mechanical_hours_fix_qualifies(self):
        (mi,) = map_issues(("tech-001", EffortBucket.HOURS))
        assert is_quick_win(mi) is True

    def test_strategic_hours_fix_excluded(self):
        (mi,) = map_issues(("faq-001", EffortBucket.HOURS))
        assert is_quick_win(mi) is False

    def test_strategic_minutes_fix_qualifies(self):
        (mi,) = map_issues(("entity-001", EffortBucket.MINUTES))
        assert is_quick_win(mi) is True

    def test_ranked_by_impact_per_effort(self):
        mapped = map_issues(
            ("tech-001", EffortBucket.HOURS),
            ("onpage-001", EffortBucket.MINUTES),
            ("entity-001", EffortBucket.MINUTES),
            ("faq-001", EffortBucket.HOURS),
            ("onpage-004", EffortBucket.MINUTES),
        )
        wins = select_quick_wins(mapped)
        assert [mi.id for mi in wins] == ["entity-001", "onpage-001", "tech-001"]

    def test_limit(self):
        mapped = map_issues(*[(f"onpage-00{i}", EffortBucket.MINUTES) for i in range(1, 4)])
        assert len(select_quick_wins(mapped, limit=2)) == 2

    def test_custom_threshold(self):
        (mi,) = map_issues(("onpage-004", EffortBucket.MINUTES))
        assert is_quick_win(mi, min_impact=2.0) is True
