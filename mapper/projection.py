"""Score projection model.

Projects audit scores after every issue in a plan has been fixed.

Raw per-issue deltas are additive estimates from independent rules, so summing
them overstates what is achievable near the top of the 0-100 scale. Two stages
keep the projection bounded:

1. Diminishing returns per pillar: the share of the raw gain a pillar captures
   shrinks with its current score, and no pillar may pass 100.
2. Composite recombination: pillars are re-weighted into SEO and AEO
   composites, which are blended into the overall score.
"""

import math
from dataclasses import dataclass, field
from enum import StrEnum

from mapper.impact import ScoreImpact, aggregate_score_impacts
from mapper.issues import Composite, Pillar

# Weight of each pillar inside its composite. Weights sum to 1.0 per composite.
PILLAR_WEIGHTS: dict[Pillar, float] = {
    Pillar.TECHNICAL: 0.25,  # Foundation
    Pillar.ON_PAGE: 0.20,  # Direct ranking signals
    Pillar.CONTENT: 0.25,  # Core value
    Pillar.AUTHORITY: 0.20,  # External signals
    Pillar.UX: 0.10,
    Pillar.ENTITY_DEFINITION: 0.25,  # Foundation for answer engines
    Pillar.SCHEMA_MARKUP: 0.20,
    Pillar.FAQ_TARGETING: 0.25,  # Answer targeting
    Pillar.VOICE_SEARCH: 0.15,
    Pillar.AI_SEARCH: 0.15,  # Citation readiness
}

# Overall = SEO share * SEO composite + AEO share * AEO composite
COMPOSITE_SHARES: dict[Composite, float] = {
    Composite.SEO: 0.6,
    Composite.AEO: 0.4,
}

# Efficiency = MIN_EFFICIENCY + EFFICIENCY_SPAN * headroom
# A pillar at 0 captures 80% of its raw gain, a pillar at 100 captures 20%.
MIN_EFFICIENCY = 0.2
EFFICIENCY_SPAN = 0.6

MAX_SCORE = 100.0


class ScoreSource(StrEnum):
    """Where a snapshot's numbers come from."""

    AUDIT = "audit"
    SIMULATED = "simulated"


@dataclass
class ScoreSnapshot:
    """Overall, composite and pillar scores at a point in time."""

    overall: float
    seo: float
    aeo: float
    pillars: dict[Pillar, float] = field(default_factory=dict)
    source: ScoreSource = ScoreSource.AUDIT
    timestamp: str | None = None

    def to_dict(self) -> dict:
        return {
            "overall": round(self.overall, 1),
            "seo": round(self.seo, 1),
            "aeo": round(self.aeo, 1),
            "pillars": {p.value: round(s, 1) for p, s in self.pillars.items()},
            "source": self.source.value,
            "timestamp": self.timestamp,
        }


@dataclass
class ScoreRange:
    """Projected score range."""

    min: float
    max: float

    def to_dict(self) -> dict:
        return {"min": round(self.min, 1), "max": round(self.max, 1)}


@dataclass
class ScoreDelta:
    """Change between the before snapshot and the projected range."""

    overall_min: float = 0.0
    overall_max: float = 0.0
    seo_min: float = 0.0
    seo_max: float = 0.0
    aeo_min: float = 0.0
    aeo_max: float = 0.0
    pillars_min: dict[Pillar, float] = field(default_factory=dict)
    pillars_max: dict[Pillar, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "overall_min": round(self.overall_min, 1),
            "overall_max": round(self.overall_max, 1),
            "seo_min": round(self.seo_min, 1),
            "seo_max": round(self.seo_max, 1),
            "aeo_min": round(self.aeo_min, 1),
            "aeo_max": round(self.aeo_max, 1),
            "pillars_min": {p.value: round(d, 1) for p, d in self.pillars_min.items()},
            "pillars_max": {p.value: round(d, 1) for p, d in self.pillars_max.items()},
        }


@dataclass
class ExecutionScores:
    """Before snapshot, simulated after snapshot (range midpoint) and delta."""

    before: ScoreSnapshot
    after: ScoreSnapshot
    delta: ScoreDelta

    @property
    def projected(self) -> dict[str, ScoreRange]:
        """Projected overall/seo/aeo ranges, capped at 100."""
        before = self.before
        d = self.delta
        return {
            "overall": ScoreRange(
                min(MAX_SCORE, before.overall + d.overall_min),
                min(MAX_SCORE, before.overall + d.overall_max),
            ),
            "seo": ScoreRange(
                min(MAX_SCORE, before.seo + d.seo_min),
                min(MAX_SCORE, before.seo + d.seo_max),
            ),
            "aeo": ScoreRange(
                min(MAX_SCORE, before.aeo + d.aeo_min),
                min(MAX_SCORE, before.aeo + d.aeo_max),
            ),
        }

    def to_dict(self) -> dict:
        return {
            "before": self.before.to_dict(),
            "after": self.after.to_dict(),
            "delta": self.delta.to_dict(),
            "projected": {k: v.to_dict() for k, v in self.projected.items()},
        }


def round_score(value: float) -> float:
    """Round half up to a whole point."""
    return float(math.floor(value + 0.5))


def _bounded(value: float, floor: float) -> float:
    """Clamp a projected score into [floor, 100]."""
    return min(MAX_SCORE, max(floor, value))


def apply_diminishing_returns(current_score: float, raw_delta: float) -> float:
    """
    Credit only part of a raw pillar gain, less the closer the pillar is to 100.

    Args:
        current_score: Current pillar score (0-100)
        raw_delta: Summed raw delta proposed by the plan's issues

    Returns:
        Adjusted delta, never negative and never past 100
    """
    if raw_delta <= 0:
        return 0.0

    current = min(MAX_SCORE, max(0.0, current_score))
    headroom = (MAX_SCORE - current) / MAX_SCORE
    efficiency = MIN_EFFICIENCY + EFFICIENCY_SPAN * headroom

    return min(raw_delta * efficiency, MAX_SCORE - current)


def composite_score(pillars: dict[Pillar, float], composite: Composite) -> float | None:
    """
    Weighted average of the composite's pillars that are present.

    Missing pillars carry no weight. Returns None when none are present.
    """
    weighted_sum = 0.0
    total_weight = 0.0
    for pillar, weight in PILLAR_WEIGHTS.items():
        if pillar.composite == composite and pillar in pillars:
            weighted_sum += pillars[pillar] * weight
            total_weight += weight

    if total_weight == 0:
        return None
    return round_score(weighted_sum / total_weight)


class ScoreProjector:
    """Projects before/after scores for a set of issue impacts."""

    def project(
        self,
        before: ScoreSnapshot,
        impacts: list[ScoreImpact],
        timestamp: str | None = None,
    ) -> ExecutionScores:
        """
        Project scores after all impacts land.

        Args:
            before: Measured snapshot; composites are trusted as given
            impacts: Score impact of every issue in the plan
            timestamp: Timestamp for the simulated snapshot

        Returns:
            ExecutionScores with before, simulated after and delta
        """
        raw_min, raw_max = self._raw_pillar_deltas(impacts)

        after_min: dict[Pillar, float] = {}
        after_max: dict[Pillar, float] = {}
        for pillar, current in before.pillars.items():
            adjusted_min = round_score(apply_diminishing_returns(current, raw_min.get(pillar, 0.0)))
            adjusted_max = round_score(apply_diminishing_returns(current, raw_max.get(pillar, 0.0)))
            after_min[pillar] = _bounded(current + adjusted_min, current)
            after_max[pillar] = _bounded(current + adjusted_max, current)

        seo_min = self._composite_after(after_min, Composite.SEO, before.seo)
        seo_max = self._composite_after(after_max, Composite.SEO, before.seo)
        aeo_min = self._composite_after(after_min, Composite.AEO, before.aeo)
        aeo_max = self._composite_after(after_max, Composite.AEO, before.aeo)
        overall_min = self._overall_after(seo_min, aeo_min, before.overall)
        overall_max = self._overall_after(seo_max, aeo_max, before.overall)

        delta = ScoreDelta(
            overall_min=overall_min - before.overall,
            overall_max=overall_max - before.overall,
            seo_min=seo_min - before.seo,
            seo_max=seo_max - before.seo,
            aeo_min=aeo_min - before.aeo,
            aeo_max=aeo_max - before.aeo,
            pillars_min={p: after_min[p] - s for p, s in before.pillars.items()},
            pillars_max={p: after_max[p] - s for p, s in before.pillars.items()},
        )

        after = ScoreSnapshot(
            overall=self._midpoint(overall_min, overall_max, before.overall),
            seo=self._midpoint(seo_min, seo_max, before.seo),
            aeo=self._midpoint(aeo_min, aeo_max, before.aeo),
            pillars={
                p: self._midpoint(after_min[p], after_max[p], s)
                for p, s in before.pillars.items()
            },
            source=ScoreSource.SIMULATED,
            timestamp=timestamp,
        )

        return ExecutionScores(before=before, after=after, delta=delta)

    def _raw_pillar_deltas(
        self, impacts: list[ScoreImpact]
    ) -> tuple[dict[Pillar, float], dict[Pillar, float]]:
        """Sum raw min/max deltas per pillar across all impacts."""
        total = aggregate_score_impacts(impacts)
        raw_min = {p.pillar: p.delta_min for p in total.pillars}
        raw_max = {p.pillar: p.delta_max for p in total.pillars}
        return raw_min, raw_max

    def _composite_after(
        self, pillars: dict[Pillar, float], composite: Composite, before: float
    ) -> float:
        score = composite_score(pillars, composite)
        if score is None:
            return before
        return _bounded(score, before)

    def _overall_after(self, seo: float, aeo: float, before: float) -> float:
        blended = seo * COMPOSITE_SHARES[Composite.SEO] + aeo * COMPOSITE_SHARES[Composite.AEO]
        return _bounded(round_score(blended), before)

    def _midpoint(self, low: float, high: float, floor: float) -> float:
        return _bounded(round_score((low + high) / 2), floor)


def project_scores(
    before: ScoreSnapshot,
    impacts: list[ScoreImpact],
    timestamp: str | None = None,
) -> ExecutionScores:
    """Convenience function to project scores with the default model."""
    return ScoreProjector().project(before, impacts, timestamp)
