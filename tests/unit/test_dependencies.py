"""Tests for dependency resolution."""

import pytest

from mapper.dependencies import (
    find_rule_cycle,
    resolve_dependencies,
    validate_dependency_rules,
)
from mapper.rules import DEPENDENCY_RULES, DependencyRule, RuleTableError, issue


class TestResolveDependencies:
    """Tests for resolve_dependencies()."""

    def test_blocker_present(self):
        deps = resolve_dependencies("schema-003", ["faq-001", "schema-003"])
        assert deps.depends_on == ["faq-001"]
        assert deps.blocks == []

    def test_blocker_absent(self):
        deps = resolve_dependencies("schema-003", ["schema-003", "tech-001"])
        assert deps.depends_on == []

    def test_blocker_side(self):
        deps = resolve_dependencies("faq-001", ["faq-001", "faq-002", "schema-003"])
        assert deps.blocks == ["schema-003", "faq-002"]
        assert deps.depends_on == []

    def test_prefixed_ids_match(self):
        ids = ["aeo-faq-001", "aeo-schema-003"]
        deps = resolve_dependencies("aeo-schema-003", ids)
        assert deps.depends_on == ["aeo-faq-001"]

    def test_mixed_prefix_forms(self):
        deps = resolve_dependencies("schema-003", ["aeo-faq-001", "schema-003"])
        assert deps.depends_on == ["aeo-faq-001"]

    def test_family_rule_blocks_every_authority_issue(self):
        ids = ["tech-003", "authority-001", "authority-002"]
        assert resolve_dependencies("tech-003", ids).blocks == ["authority-001", "authority-002"]
        assert resolve_dependencies("authority-002", ids).depends_on == ["tech-003"]

    def test_all_matching_blockers_recorded(self):
        ids = ["entity-001", "schema-001", "schema-002", "schema-004"]
        assert resolve_dependencies("schema-002", ids).depends_on == ["schema-001"]
        assert resolve_dependencies("entity-001", ids).blocks == ["schema-001", "schema-004"]

    def test_no_self_dependency(self):
        rules = [DependencyRule(issue("tech"), issue("tech"), "self")]
        deps = resolve_dependencies("tech-001", ["tech-001"], rules=rules)
        assert deps.depends_on == []
        assert deps.blocks == []

    def test_no_duplicates(self):
        rules = [
            DependencyRule(issue("faq", "001"), issue("schema", "003"), "a"),
            DependencyRule(issue("faq"), issue("schema"), "b"),
        ]
        deps = resolve_dependencies("schema-003", ["faq-001", "schema-003"], rules=rules)
        assert deps.depends_on == ["faq-001"]

    def test_edges_are_symmetric(self):
        ids = ["entity-001", "schema-001", "schema-002", "schema-004", "faq-001", "faq-002",
               "schema-003", "onpage-001", "ai-001", "tech-003", "authority-001"]
        resolved = {i: resolve_dependencies(i, ids) for i in ids}
        for issue_id, deps in resolved.items():
            for blocker in deps.depends_on:
                assert issue_id in resolved[blocker].blocks


class TestRuleCycles:
    """Tests for dependency rule table validation."""

    def test_shipped_table_is_acyclic(self):
        assert find_rule_cycle(DEPENDENCY_RULES) is None
        validate_dependency_rules(DEPENDENCY_RULES)

    def test_direct_cycle(self):
        rules = [
            DependencyRule(issue("faq", "001"), issue("schema", "003"), "a"),
            DependencyRule(issue("schema", "003"), issue("faq", "001"), "b"),
        ]
        assert find_rule_cycle(rules) is not None
        with pytest.raises(RuleTableError):
            validate_dependency_rules(rules)

    def test_cycle_through_family_rule(self):
        rules = [
            DependencyRule(issue("tech", "003"), issue("authority"), "a"),
            DependencyRule(issue("authority", "001"), issue("tech", "003"), "b"),
        ]
        with pytest.raises(RuleTableError, match="cycle"):
            validate_dependency_rules(rules)

    def test_chain_is_not_a_cycle(self):
        rules = [
            DependencyRule(issue("entity", "001"), issue("schema", "001"), "a"),
            DependencyRule(issue("schema", "001"), issue("schema", "002"), "b"),
        ]
        assert find_rule_cycle(rules) is None
