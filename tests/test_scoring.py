"""Tests for the score calculator and summary."""

import pytest

from pagelens.audit.config import ScoringPolicy
from pagelens.audit.models import AuditIssue, Severity
from pagelens.audit.scoring import build_summary, calculate_score


def _issues(*severities):
    return [
        AuditIssue(id=f"i-{n}", severity=s, category="Technical", issue="x", issue_ka="x",
                   location="<head>", fix="y", fix_ka="y")
        for n, s in enumerate(severities)
    ]


class TestCalculateScore:
    def test_perfect(self):
        assert calculate_score([], []) == 100

    def test_deductions_and_bonus(self):
        issues = _issues(Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW)
        # 100 - 28 + 2.5 = 74.5 rounds half up
        assert calculate_score(issues, ["p"] * 5) == 75

    def test_bonus_is_capped(self):
        issues = _issues(Severity.CRITICAL, Severity.CRITICAL)
        assert calculate_score(issues, ["p"] * 60) == 80

    def test_clamped_at_zero(self):
        assert calculate_score(_issues(*[Severity.CRITICAL] * 10), []) == 0

    def test_clamped_at_hundred(self):
        assert calculate_score([], ["p"] * 20) == 100

    def test_custom_policy(self):
        policy = ScoringPolicy(
            deductions={Severity.CRITICAL: 50, Severity.HIGH: 0, Severity.MEDIUM: 0, Severity.LOW: 0},
            bonus_per_pass=1,
            bonus_cap=5,
        )
        assert calculate_score(_issues(Severity.CRITICAL, Severity.LOW), ["p"] * 3, policy) == 53

    @pytest.mark.parametrize("n_issues,n_passed", [(0, 0), (3, 40), (25, 0), (7, 7)])
    def test_always_in_range(self, n_issues, n_passed):
        score = calculate_score(_issues(*[Severity.HIGH] * n_issues), ["p"] * n_passed)
        assert isinstance(score, int)
        assert 0 <= score <= 100


class TestSummary:
    def test_counts(self):
        issues = _issues(Severity.CRITICAL, Severity.HIGH, Severity.HIGH, Severity.LOW)
        summary = build_summary(issues, ["a", "b", "c"])
        assert summary.critical_issues == 1
        assert summary.high_issues == 2
        assert summary.medium_issues == 0
        assert summary.low_issues == 1
        assert summary.passed_checks == 3
        assert summary.total_checks == 7

    def test_severity_order(self):
        assert [s.rank for s in Severity] == [0, 1, 2, 3]
