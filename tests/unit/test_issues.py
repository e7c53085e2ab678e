"""Tests for issue identifiers and the audit input."""

import pytest

from mapper.issues import (
    AEO_PILLARS,
    SEO_PILLARS,
    Composite,
    Pillar,
    Severity,
    normalize_issue_id,
    parse_issue_id,
)
from tests.fixtures import make_audit, make_issue


class TestIssueIds:
    """Tests for issue id parsing."""

    def test_bare_id(self):
        key = parse_issue_id("faq-001")
        assert key.prefix is None
        assert key.family == "faq"
        assert key.suffix == "001"
        assert key.normalized == "faq-001"

    def test_prefixed_id(self):
        key = parse_issue_id("aeo-faq-001")
        assert key.prefix == "aeo"
        assert key.family == "faq"
        assert key.suffix == "001"
        assert key.normalized == "faq-001"

    def test_prefixed_candidates_include_raw_form(self):
        key = parse_issue_id("seo-tech-003")
        assert key.candidates() == [("tech", "003"), ("seo", "tech-003")]

    def test_id_without_suffix(self):
        key = parse_issue_id("authority")
        assert key.family == "authority"
        assert key.suffix is None
        assert key.normalized == "authority"

    def test_casing_and_whitespace_ignored(self):
        assert normalize_issue_id("  AEO-Schema-001 ") == "schema-001"

    def test_only_one_prefix_stripped(self):
        assert normalize_issue_id("aeo-seo-tech-001") == "seo-tech-001"

    def test_unknown_shape_never_fails(self):
        key = parse_issue_id("")
        assert key.family == ""


class TestSeverity:
    """Tests for severity parsing."""

    @pytest.mark.parametrize("raw", ["CRITICAL", "critical", " Critical "])
    def test_parse_any_casing(self, raw):
        assert Severity.parse(raw) == Severity.CRITICAL

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError):
            Severity.parse("urgent")


class TestPillars:
    """Tests for pillar metadata."""

    def test_ten_pillars_split_evenly(self):
        assert len(SEO_PILLARS) == 5
        assert len(AEO_PILLARS) == 5
        assert set(SEO_PILLARS) | set(AEO_PILLARS) == set(Pillar)

    def test_composite(self):
        assert Pillar.UX.composite == Composite.SEO
        assert Pillar.AI_SEARCH.composite == Composite.AEO

    def test_display_name(self):
        assert Pillar.ON_PAGE.display_name == "On-Page SEO"


class TestAuditInput:
    """Tests for the audit input container."""

    def test_all_issues_seo_pillars_first(self):
        audit = make_audit([make_issue("faq-001"), make_issue("tech-001")])
        assert [i.id for i in audit.all_issues()] == ["tech-001", "faq-001"]

    def test_missing_pillars_are_skipped(self):
        audit = make_audit([make_issue("faq-001")], all_pillars=False)
        assert list(audit.pillar_scores()) == [Pillar.FAQ_TARGETING]
        assert len(audit.all_issues()) == 1

    def test_issue_to_dict_uses_enum_values(self):
        data = make_issue("tech-001").to_dict()
        assert data["severity"] == "high"
        assert data["fix"]["kind"] == "code"
        assert data["fix"]["effort"] == "hours"
