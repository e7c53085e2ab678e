"""Execution phases and agent postures.

Phases are static configuration. They are listed in execution order and each
declares the phases that must be finished before it can start.
"""

from dataclasses import dataclass
from enum import StrEnum


class FixClassification(StrEnum):
    """How a fix gets executed.

    The same vocabulary doubles as a phase's agent posture.
    """

    MECHANICAL = "mechanical"  # Apply verbatim, no decisions needed
    STRUCTURAL = "structural"  # Adapt to the codebase, requires understanding
    STRATEGIC = "strategic"  # Content/positioning decisions, needs operator input

    @property
    def rank(self) -> int:
        """Tie-break order: mechanical < structural < strategic."""
        return CLASSIFICATION_ORDER[self]

    @property
    def description(self) -> str:
        return POSTURE_DESCRIPTIONS[self]


AgentPosture = FixClassification

CLASSIFICATION_ORDER: dict[FixClassification, int] = {
    FixClassification.MECHANICAL: 0,
    FixClassification.STRUCTURAL: 1,
    FixClassification.STRATEGIC: 2,
}

POSTURE_DESCRIPTIONS: dict[FixClassification, str] = {
    FixClassification.MECHANICAL: "Copy-paste code/config, no decisions needed",
    FixClassification.STRUCTURAL: "Architecture changes, requires understanding",
    FixClassification.STRATEGIC: "Content/positioning decisions, requires operator input",
}


class ExecutionPhase(StrEnum):
    """Ordered stages of remediation work."""

    ENTITY_FOUNDATION = "entity-foundation"
    TECHNICAL_HYGIENE = "technical-hygiene"
    CONTENT_STRUCTURE = "content-structure"
    ANSWER_ARCHITECTURE = "answer-architecture"
    PERFORMANCE_OPTIMIZATION = "performance-optimization"
    AUTHORITY_BUILDING = "authority-building"


@dataclass(frozen=True)
class PhaseDefinition:
    """Static metadata for a phase."""

    id: ExecutionPhase
    name: str
    description: str
    order: int
    estimated_duration: str
    posture: AgentPosture
    prerequisites: tuple[ExecutionPhase, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id.value,
            "name": self.name,
            "description": self.description,
            "order": self.order,
            "estimated_duration": self.estimated_duration,
            "prerequisites": [p.value for p in self.prerequisites],
            "posture": self.posture.value,
        }


PHASE_DEFINITIONS: list[PhaseDefinition] = [
    PhaseDefinition(
        id=ExecutionPhase.ENTITY_FOUNDATION,
        name="Entity Foundation",
        description="Establish organization identity and structured data foundation",
        order=1,
        estimated_duration="1-2 days",
        posture=AgentPosture.STRUCTURAL,
    ),
    PhaseDefinition(
        id=ExecutionPhase.TECHNICAL_HYGIENE,
        name="Technical Hygiene",
        description="Fix fundamental technical SEO issues (meta, headings, images)",
        order=2,
        estimated_duration="2-3 days",
        posture=AgentPosture.MECHANICAL,
    ),
    PhaseDefinition(
        id=ExecutionPhase.CONTENT_STRUCTURE,
        name="Content Structure",
        description="Optimize content organization, internal linking, fill gaps",
        order=3,
        estimated_duration="1-2 weeks",
        posture=AgentPosture.STRATEGIC,
        prerequisites=(ExecutionPhase.TECHNICAL_HYGIENE,),
    ),
    PhaseDefinition(
        id=ExecutionPhase.ANSWER_ARCHITECTURE,
        name="Answer Architecture",
        description="Build FAQ content, voice search optimization, featured snippet targeting",
        order=4,
        estimated_duration="1-2 weeks",
        posture=AgentPosture.STRATEGIC,
        prerequisites=(ExecutionPhase.ENTITY_FOUNDATION, ExecutionPhase.CONTENT_STRUCTURE),
    ),
    PhaseDefinition(
        id=ExecutionPhase.PERFORMANCE_OPTIMIZATION,
        name="Performance Optimization",
        description="Core Web Vitals, page speed, rendering optimization",
        order=5,
        estimated_duration="3-5 days",
        posture=AgentPosture.STRUCTURAL,
        prerequisites=(ExecutionPhase.TECHNICAL_HYGIENE,),
    ),
    PhaseDefinition(
        id=ExecutionPhase.AUTHORITY_BUILDING,
        name="Authority Building",
        description="Backlink strategy, citation building, entity establishment",
        order=6,
        estimated_duration="Ongoing",
        posture=AgentPosture.STRATEGIC,
        prerequisites=(ExecutionPhase.ENTITY_FOUNDATION, ExecutionPhase.CONTENT_STRUCTURE),
    ),
]

# Catch-all phase for issues no specific rule claims
DEFAULT_PHASE = ExecutionPhase.TECHNICAL_HYGIENE

_PHASES_BY_ID: dict[ExecutionPhase, PhaseDefinition] = {p.id: p for p in PHASE_DEFINITIONS}


def get_phase_definition(phase_id: ExecutionPhase | str) -> PhaseDefinition:
    """Look up a phase definition, falling back to the default phase."""
    try:
        return _PHASES_BY_ID[ExecutionPhase(phase_id)]
    except ValueError:
        return _PHASES_BY_ID[DEFAULT_PHASE]


def ordered_phases() -> list[PhaseDefinition]:
    """Phase definitions sorted by execution order."""
    return sorted(PHASE_DEFINITIONS, key=lambda p: p.order)


def find_phase_table_problems(phases: list[PhaseDefinition]) -> list[str]:
    """Return problems with a phase table; an empty list means it is consistent.

    Every prerequisite must name a phase that exists and is ordered earlier,
    otherwise ``can_start`` could never become true.
    """
    problems: list[str] = []
    orders = {p.id: p.order for p in phases}

    if len(orders) != len(phases):
        problems.append("duplicate phase ids")

    for phase in phases:
        for prereq in phase.prerequisites:
            if prereq not in orders:
                problems.append(f"{phase.id.value}: unknown prerequisite {prereq}")
            elif orders[prereq] >= phase.order:
                problems.append(
                    f"{phase.id.value}: prerequisite {prereq.value} is not ordered earlier"
                )

    return problems
