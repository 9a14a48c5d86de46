"""
pagelens: on-page SEO audit for a single HTML document.

    from pagelens import audit_html

    result = audit_html(html, source_url="https://example.com/")
    print(result.score, [i.id for i in result.issues])
"""

from .audit import AuditOptions, AuditResult, PageAnalyzer, ScoringPolicy, audit_html, audit_url
from .exceptions import (
    ChallengePageError,
    FetchError,
    InvalidInputError,
    PageLensError,
    RateLimitExceededError,
    TooManyRedirectsError,
    UnreachableError,
)

__version__ = "0.1.0"

__all__ = [
    "PageAnalyzer",
    "audit_html",
    "audit_url",
    "AuditOptions",
    "AuditResult",
    "ScoringPolicy",
    "PageLensError",
    "FetchError",
    "TooManyRedirectsError",
    "UnreachableError",
    "ChallengePageError",
    "InvalidInputError",
    "RateLimitExceededError",
]
