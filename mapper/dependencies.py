"""Dependency resolution between issues of one plan.

Edges are only materialized between ids that are both present in the plan;
a rule whose blocker is absent is a no-op. The rule table is checked for
cycles once, when this module is imported.
"""

from dataclasses import dataclass, field

from mapper.issues import parse_issue_id
from mapper.rules import DEPENDENCY_RULES, DependencyRule, RuleTableError


@dataclass
class Dependencies:
    """Edges for one issue."""

    depends_on: list[str] = field(default_factory=list)
    blocks: list[str] = field(default_factory=list)


def find_rule_cycle(rules: list[DependencyRule]) -> list[DependencyRule] | None:
    """
    Look for a chain of rules that could order an issue after itself.

    Rule A leads to rule B when A's blocked matcher overlaps B's blocker
    matcher. A cycle in that graph means some issue set could deadlock.

    Returns:
        The rules forming the first cycle found, or None
    """
    edges: dict[int, list[int]] = {
        i: [j for j, other in enumerate(rules) if rule.blocked.overlaps(other.blocker)]
        for i, rule in enumerate(rules)
    }

    WHITE, GREY, BLACK = 0, 1, 2
    color = dict.fromkeys(edges, WHITE)
    stack: list[int] = []

    def visit(node: int) -> list[int] | None:
        color[node] = GREY
        stack.append(node)
        for nxt in edges[node]:
            if color[nxt] == GREY:
                return stack[stack.index(nxt) :]
            if color[nxt] == WHITE:
                found = visit(nxt)
                if found:
                    return found
        stack.pop()
        color[node] = BLACK
        return None

    for node in edges:
        if color[node] == WHITE:
            cycle = visit(node)
            if cycle:
                return [rules[i] for i in cycle]
    return None


def validate_dependency_rules(rules: list[DependencyRule]) -> None:
    """Raise RuleTableError if the rule table contains a cycle."""
    cycle = find_rule_cycle(rules)
    if cycle:
        chain = " -> ".join(f"{r.blocker}>{r.blocked}" for r in cycle)
        raise RuleTableError(f"Dependency rules form a cycle: {chain}")


validate_dependency_rules(DEPENDENCY_RULES)


def resolve_dependencies(
    issue_id: str,
    all_issue_ids: list[str],
    rules: list[DependencyRule] | None = None,
) -> Dependencies:
    """
    Compute depends-on / blocks edges for one issue.

    Args:
        issue_id: The issue being resolved
        all_issue_ids: Every issue id in the current plan
        rules: Alternative rule table (defaults to DEPENDENCY_RULES)

    Returns:
        Dependencies ordered by rule, then by plan order, without duplicates
    """
    table = DEPENDENCY_RULES if rules is None else rules
    key = parse_issue_id(issue_id)
    others = [(other, parse_issue_id(other)) for other in all_issue_ids if other != issue_id]

    depends_on: list[str] = []
    blocks: list[str] = []

    for rule in table:
        if rule.blocked.matches(key):
            for other, other_key in others:
                if rule.blocker.matches(other_key) and other not in depends_on:
                    depends_on.append(other)

        if rule.blocker.matches(key):
            for other, other_key in others:
                if rule.blocked.matches(other_key) and other not in blocks:
                    blocks.append(other)

    return Dependencies(depends_on=depends_on, blocks=blocks)
