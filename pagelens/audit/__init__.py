"""
pagelens.audit: single-document SEO audit engine.

Usage:
    from pagelens.audit import PageAnalyzer, audit_html

    # Pasted HTML, no network
    result = audit_html(html, source_url="https://example.com/")

    # Live URL with auxiliary probes (robots.txt, sitemap, TLS, headers, links)
    analyzer = PageAnalyzer()
    result = await analyzer.analyze_url("https://example.com/")

    result.score, result.summary, result.issues_by_severity()
"""

from .analyzer import PageAnalyzer, audit_html, audit_url, merge_auxiliary, run_checkers
from .config import AuditOptions, ProbeTimeouts, ScoringPolicy
from .document import Document
from .issues import synthesize_issues
from .passed import synthesize_passed
from .patterns import PATTERNS_VERSION
from .scoring import build_summary, calculate_score
from .models import (
    Severity,
    FetchMethod,
    RenderMethod,
    AuditIssue,
    AuditResult,
    AuditSummary,
    AuxiliaryFacts,
    CategoryResults,
    TechnicalFacts,
    InternationalFacts,
    ContentFacts,
    LinkFacts,
    ImageFacts,
    SchemaFacts,
    SocialFacts,
    AccessibilityFacts,
    DOMFacts,
    PerformanceFacts,
    SecurityFacts,
    PlatformFacts,
    TrustSignalsFacts,
    MobileFacts,
    ExternalResourcesFacts,
)

__all__ = [
    # Main entry points
    "PageAnalyzer",
    "audit_html",
    "audit_url",
    "run_checkers",
    "merge_auxiliary",
    "synthesize_issues",
    "synthesize_passed",
    "calculate_score",
    "build_summary",
    "Document",
    "PATTERNS_VERSION",
    # Configuration
    "AuditOptions",
    "ProbeTimeouts",
    "ScoringPolicy",
    # Enums
    "Severity",
    "FetchMethod",
    "RenderMethod",
    # Results
    "AuditIssue",
    "AuditResult",
    "AuditSummary",
    "AuxiliaryFacts",
    "CategoryResults",
    # Category facts
    "TechnicalFacts",
    "InternationalFacts",
    "ContentFacts",
    "LinkFacts",
    "ImageFacts",
    "SchemaFacts",
    "SocialFacts",
    "AccessibilityFacts",
    "DOMFacts",
    "PerformanceFacts",
    "SecurityFacts",
    "PlatformFacts",
    "TrustSignalsFacts",
    "MobileFacts",
    "ExternalResourcesFacts",
]
