"""Issue classifier.

Maps an issue to its execution phase, fix classification and score impact
range by walking the ordered classifier rules. Classification is total:
unknown ids fall through to the catch-all rule.
"""

import copy
from dataclasses import dataclass

import structlog

from mapper.impact import ScoreImpact
from mapper.issues import IssueKey, parse_issue_id
from mapper.phases import ExecutionPhase, FixClassification
from mapper.rules import PHASE_MAPPINGS, PhaseMapping, validate_phase_mappings

logger = structlog.get_logger(__name__)

validate_phase_mappings(PHASE_MAPPINGS)


@dataclass
class Classification:
    """Result of classifying one issue."""

    phase: ExecutionPhase
    classification: FixClassification
    score_impact: ScoreImpact
    rule: str  # Matcher that claimed the issue, e.g. "faq-001" or "tech-*"


def find_mapping(
    key: IssueKey, mappings: list[PhaseMapping] | None = None
) -> PhaseMapping:
    """First rule whose matcher accepts the key."""
    table = PHASE_MAPPINGS if mappings is None else mappings
    for mapping in table:
        if mapping.matcher.matches(key):
            return mapping
    # Unreachable with a validated table
    return table[-1]


def classify(
    issue_id: str,
    title: str = "",
    mappings: list[PhaseMapping] | None = None,
) -> Classification:
    """
    Classify an issue by its identifier.

    Args:
        issue_id: Raw issue id, with or without an ``aeo-``/``seo-`` prefix
        title: Issue title, only used for diagnostics
        mappings: Alternative rule table (defaults to PHASE_MAPPINGS)

    Returns:
        Classification for the first matching rule
    """
    key = parse_issue_id(issue_id)
    mapping = find_mapping(key, mappings)

    if mapping.matcher.is_catch_all:
        logger.debug("issue_unclassified", issue_id=issue_id, title=title)

    return Classification(
        phase=mapping.phase,
        classification=mapping.classification,
        score_impact=copy.deepcopy(mapping.score_impact),
        rule=str(mapping.matcher),
    )
