"""Aggregate score and per-severity summary."""

import math
from typing import List, Optional

from .config import ScoringPolicy
from .models import AuditIssue, AuditSummary, Severity


def calculate_score(
    issues: List[AuditIssue],
    passed: List[str],
    policy: Optional[ScoringPolicy] = None,
) -> int:
    """
    100 minus the severity deductions plus a capped bonus for passed checks,
    rounded half up and clamped to 0-100.
    """
    policy = policy or ScoringPolicy()
    score = 100.0
    for issue in issues:
        score -= policy.deductions.get(issue.severity, 0)
    score += min(policy.bonus_cap, len(passed) * policy.bonus_per_pass)
    # half-up rounding: 82.5 scores 83
    return max(0, min(100, math.floor(score + 0.5)))


def build_summary(issues: List[AuditIssue], passed: List[str]) -> AuditSummary:
    counts = {severity: 0 for severity in Severity}
    for issue in issues:
        counts[issue.severity] += 1
    return AuditSummary(
        critical_issues=counts[Severity.CRITICAL],
        high_issues=counts[Severity.HIGH],
        medium_issues=counts[Severity.MEDIUM],
        low_issues=counts[Severity.LOW],
        total_checks=len(issues) + len(passed),
        passed_checks=len(passed),
    )
