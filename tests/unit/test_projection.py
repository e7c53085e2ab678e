"""Tests for the score projection model."""

import pytest

from mapper.impact import impact
from mapper.issues import Composite, Pillar
from mapper.projection import (
    PILLAR_WEIGHTS,
    ScoreSnapshot,
    ScoreSource,
    apply_diminishing_returns,
    composite_score,
    project_scores,
    round_score,
)


def make_snapshot(
    pillars: dict[Pillar, float],
    overall: float = 36.0,
    seo: float = 40.0,
    aeo: float = 30.0,
) -> ScoreSnapshot:
    """Helper to create a before snapshot."""
    return ScoreSnapshot(overall=overall, seo=seo, aeo=aeo, pillars=pillars)


class TestDiminishingReturns:
    """Tests for apply_diminishing_returns()."""

    def test_efficiency_at_forty(self):
        assert apply_diminishing_returns(40, 15) == pytest.approx(8.4)
        assert apply_diminishing_returns(40, 25) == pytest.approx(14.0)

    def test_efficiency_bounds(self):
        assert apply_diminishing_returns(0, 10) == pytest.approx(8.0)
        assert apply_diminishing_returns(100, 10) == 0.0

    def test_capped_at_headroom(self):
        assert apply_diminishing_returns(95, 50) == pytest.approx(5.0)

    @pytest.mark.parametrize("raw", [0, -5])
    def test_non_positive_raw(self, raw):
        assert apply_diminishing_returns(50, raw) == 0.0

    def test_monotonic_in_raw_delta(self):
        values = [apply_diminishing_returns(60, raw) for raw in range(0, 60, 5)]
        assert values == sorted(values)

    def test_higher_scores_capture_less(self):
        values = [apply_diminishing_returns(current, 10) for current in range(0, 101, 10)]
        assert values == sorted(values, reverse=True)


class TestRounding:
    """Tests for score rounding."""

    def test_half_up(self):
        assert round_score(2.5) == 3.0
        assert round_score(3.5) == 4.0
        assert round_score(8.4) == 8.0


class TestCompositeScore:
    """Tests for composite recombination."""

    def test_weights_sum_to_one(self):
        for composite in Composite:
            total = sum(w for p, w in PILLAR_WEIGHTS.items() if p.composite == composite)
            assert total == pytest.approx(1.0)

    def test_missing_pillars_reweighted(self):
        score = composite_score({Pillar.TECHNICAL: 80, Pillar.UX: 40}, Composite.SEO)
        assert score == 69.0

    def test_no_pillars(self):
        assert composite_score({Pillar.TECHNICAL: 80}, Composite.AEO) is None


class TestProjectScores:
    """Tests for project_scores()."""

    def test_single_pillar_example(self):
        before = make_snapshot({Pillar.TECHNICAL: 40})
        scores = project_scores(before, [impact([(Pillar.TECHNICAL, 15, 25)], 5, 10)])

        assert scores.delta.pillars_min[Pillar.TECHNICAL] == 8
        assert scores.delta.pillars_max[Pillar.TECHNICAL] == 14
        assert scores.delta.seo_min == 8
        assert scores.delta.seo_max == 14
        # AEO has no pillars in the snapshot and keeps its before value
        assert scores.delta.aeo_min == 0
        assert scores.delta.overall_min == 41 - 36
        assert scores.delta.overall_max == 44 - 36

    def test_after_snapshot_is_midpoint(self):
        before = make_snapshot({Pillar.TECHNICAL: 40})
        scores = project_scores(
            before, [impact([(Pillar.TECHNICAL, 15, 25)], 5, 10)], timestamp="2026-01-01T00:00:00"
        )
        assert scores.after.source == ScoreSource.SIMULATED
        assert scores.after.pillars[Pillar.TECHNICAL] == 51
        assert scores.after.timestamp == "2026-01-01T00:00:00"

    def test_impacts_summed_per_pillar(self):
        before = make_snapshot({Pillar.TECHNICAL: 40})
        impacts = [
            impact([(Pillar.TECHNICAL, 10, 10)], 1, 1),
            impact([(Pillar.TECHNICAL, 5, 15)], 1, 1),
        ]
        scores = project_scores(before, impacts)
        assert scores.delta.pillars_min[Pillar.TECHNICAL] == 8
        assert scores.delta.pillars_max[Pillar.TECHNICAL] == 14

    def test_never_exceeds_hundred(self):
        pillars = {p: 98.0 for p in Pillar}
        before = make_snapshot(pillars, overall=98, seo=98, aeo=98)
        impacts = [impact([(p, 500, 900) for p in Pillar], 50, 90)]
        scores = project_scores(before, impacts)

        for rng in scores.projected.values():
            assert rng.max <= 100
        assert all(v <= 100 for v in scores.after.pillars.values())
        assert scores.after.overall <= 100

    def test_never_below_before(self):
        # Trusted composites higher than the pillar average must not drop
        before = make_snapshot({Pillar.TECHNICAL: 20}, overall=90, seo=90, aeo=90)
        scores = project_scores(before, [impact([(Pillar.TECHNICAL, 1, 2)], 1, 1)])

        assert scores.delta.seo_min == 0
        assert scores.delta.overall_min == 0
        assert scores.projected["seo"].min == 90

    def test_no_impacts(self):
        before = make_snapshot({Pillar.TECHNICAL: 40, Pillar.SCHEMA_MARKUP: 60})
        scores = project_scores(before, [])
        assert scores.delta.pillars_max == {Pillar.TECHNICAL: 0, Pillar.SCHEMA_MARKUP: 0}

    def test_impact_on_missing_pillar_ignored(self):
        before = make_snapshot({Pillar.TECHNICAL: 40})
        scores = project_scores(before, [impact([(Pillar.AI_SEARCH, 20, 30)], 5, 10)])
        assert Pillar.AI_SEARCH not in scores.after.pillars
        assert scores.delta.aeo_max == 0

    def test_to_dict(self):
        before = make_snapshot({Pillar.TECHNICAL: 40})
        data = project_scores(before, [impact([(Pillar.TECHNICAL, 15, 25)], 5, 10)]).to_dict()
        assert data["before"]["source"] == "audit"
        assert data["after"]["source"] == "simulated"
        assert data["delta"]["pillars_min"] == {"technical": 8.0}
        assert data["projected"]["overall"] == {"min": 41.0, "max": 44.0}
