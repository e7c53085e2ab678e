"""Test fixtures for the execution mapper."""

from tests.fixtures.audits import (
    make_audit,
    make_audit_payload,
    make_issue,
    make_issue_payload,
)

__all__ = [
    "make_audit",
    "make_audit_payload",
    "make_issue",
    "make_issue_payload",
]
