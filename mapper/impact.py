"""Score impact ranges.

Impacts are authored as ranges rather than single numbers because the real
yield of a remediation is uncertain.
"""

from dataclasses import dataclass, field

from mapper.issues import Pillar


@dataclass
class PillarImpact:
    """Raw score delta range for one pillar (0-100 pillar scale)."""

    pillar: Pillar
    delta_min: float
    delta_max: float

    def to_dict(self) -> dict:
        return {
            "pillar": self.pillar.value,
            "display_name": self.pillar.display_name,
            "delta_min": round(self.delta_min, 2),
            "delta_max": round(self.delta_max, 2),
        }


@dataclass
class ScoreImpact:
    """Per-pillar deltas plus an overall delta range."""

    pillars: list[PillarImpact] = field(default_factory=list)
    overall_min: float = 0.0
    overall_max: float = 0.0

    @property
    def average(self) -> float:
        """Midpoint of the overall range, used for ranking."""
        return (self.overall_min + self.overall_max) / 2

    def to_dict(self) -> dict:
        return {
            "pillars": [p.to_dict() for p in self.pillars],
            "overall_min": round(self.overall_min, 2),
            "overall_max": round(self.overall_max, 2),
        }


def impact(
    pillars: list[tuple[Pillar, float, float]],
    overall_min: float,
    overall_max: float,
) -> ScoreImpact:
    """Shorthand for authoring rule tables."""
    return ScoreImpact(
        pillars=[PillarImpact(pillar=p, delta_min=lo, delta_max=hi) for p, lo, hi in pillars],
        overall_min=overall_min,
        overall_max=overall_max,
    )


def aggregate_score_impacts(impacts: list[ScoreImpact]) -> ScoreImpact:
    """Sum impacts per pillar and overall.

    Pillars keep the order in which they are first seen.
    """
    totals: dict[Pillar, list[float]] = {}
    for item in impacts:
        for p in item.pillars:
            running = totals.setdefault(p.pillar, [0.0, 0.0])
            running[0] += p.delta_min
            running[1] += p.delta_max

    return ScoreImpact(
        pillars=[
            PillarImpact(pillar=pillar, delta_min=lo, delta_max=hi)
            for pillar, (lo, hi) in totals.items()
        ],
        overall_min=sum(i.overall_min for i in impacts),
        overall_max=sum(i.overall_max for i in impacts),
    )
