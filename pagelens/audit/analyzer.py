"""
PageAnalyzer: main orchestrator for single-document audits.

Runs the category checkers over one parsed document, optionally folds in
facts gathered by the network probes, then synthesizes issues, pass notes,
the score and the summary into one AuditResult.

``audit_html`` is synchronous and touches no network. ``audit_url`` fetches
the page and runs the auxiliary probes first.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

import httpx

from . import patterns
from .checks import (
    check_content,
    check_images,
    check_international,
    check_links,
    check_schema,
    check_social,
    check_technical,
)
from .config import AuditOptions, ScoringPolicy
from .document import Document
from .issues import synthesize_issues
from .markup_checks import (
    check_accessibility,
    check_dom,
    check_external_resources,
    check_mobile,
    check_performance,
    check_platform,
    check_security,
    check_trust_signals,
)
from .models import (
    AuditResult,
    AuxiliaryFacts,
    BrokenLinkItem,
    CategoryResults,
    FetchMethod,
    ImageSizeAnalysis,
    LargeImage,
    LegacyImage,
    RedirectLinkItem,
)
from .network import fetch_html, gather_auxiliary
from .passed import synthesize_passed
from .scoring import build_summary, calculate_score

logger = logging.getLogger(__name__)

LARGE_IMAGE_BYTES = 200 * 1024


def run_checkers(doc: Document) -> CategoryResults:
    """Run all fifteen checkers in order; later ones may read earlier results."""
    technical = check_technical(doc)
    schema = check_schema(doc)
    return CategoryResults(
        technical=technical,
        international=check_international(doc, technical.canonical.href, technical.language),
        content=check_content(doc, technical.title.value),
        links=check_links(doc),
        images=check_images(doc),
        structured_data=schema,
        social=check_social(doc),
        accessibility=check_accessibility(doc),
        dom=check_dom(doc),
        performance=check_performance(doc),
        security=check_security(doc),
        platform=check_platform(doc),
        trust_signals=check_trust_signals(doc, schema),
        mobile=check_mobile(doc),
        external_resources=check_external_resources(doc),
    )


# ─── Auxiliary merge ──────────────────────────────────────────────────


def _format_size(size_bytes: int) -> str:
    if size_bytes >= 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / 1024:.1f} KB"


def _image_size_analysis(aux: AuxiliaryFacts) -> ImageSizeAnalysis:
    sized = [i for i in aux.image_sizes or [] if i.ok]
    large = [
        LargeImage(src=i.src, size=_format_size(i.size_bytes), size_bytes=i.size_bytes, type=i.content_type)
        for i in sized
        if i.size_bytes is not None and i.size_bytes > LARGE_IMAGE_BYTES
    ]
    legacy = [
        LegacyImage(src=i.src, type=i.content_type)
        for i in sized
        if i.content_type in patterns.LEGACY_IMAGE_TYPES
    ]
    return ImageSizeAnalysis(
        checked=len(sized),
        large_count=len(large),
        old_format_count=len(legacy),
        large_list=large,
        old_format_list=legacy,
    )


def merge_auxiliary(results: CategoryResults, aux: AuxiliaryFacts) -> CategoryResults:
    """
    Fold network probe facts into the category records.

    Facts the probes did not produce (None) leave the offline defaults alone.
    """
    technical = results.technical
    tech_update: Dict[str, object] = {}
    if aux.robots_txt is not None:
        tech_update["robots_txt"] = aux.robots_txt
    if aux.sitemap is not None:
        tech_update["sitemap"] = aux.sitemap
    if aux.llms_txt is not None:
        robots_content = (aux.robots_txt.content if aux.robots_txt else None) or ""
        tech_update["llms_txt"] = aux.llms_txt.model_copy(
            update={"mentioned": "llms.txt" in robots_content.lower()}
        )
    if aux.x_robots_tag:
        directives = {d.strip() for d in aux.x_robots_tag.lower().split(",")}
        robots = technical.robots
        tech_update["robots"] = robots.model_copy(update={
            "x_robots_tag": aux.x_robots_tag,
            "has_noindex": robots.has_noindex or bool(directives & {"noindex", "none"}),
            "has_nofollow": robots.has_nofollow or bool(directives & {"nofollow", "none"}),
        })

    links = results.links
    link_update: Dict[str, object] = {}
    anchor_text = {item.href: item.text for item in links.internal_urls + links.external_urls}
    if aux.redirects is not None:
        redirects = [
            RedirectLinkItem(href=r.url, text=anchor_text.get(r.url, ""), status=r.status, location=r.location)
            for r in aux.redirects
            if r.is_redirect and r.location
        ]
        link_update.update(redirect_links=len(redirects), redirect_list=redirects)
    if aux.external_links is not None:
        broken = [
            BrokenLinkItem(href=s.url, text=anchor_text.get(s.url, ""), status=s.status, error=s.error)
            for s in aux.external_links
            if not s.ok
        ]
        link_update.update(broken_external_links=len(broken), broken_external_list=broken)

    images = results.images
    if aux.image_sizes is not None:
        images = images.model_copy(update={"image_size_analysis": _image_size_analysis(aux)})

    security = results.security
    sec_update: Dict[str, object] = {}
    if aux.ssl is not None:
        sec_update["ssl"] = aux.ssl
    if aux.security_headers is not None:
        present = {name for name, value in aux.security_headers.headers.items() if value is not None}
        sec_update.update(
            security_headers=aux.security_headers,
            has_hsts="strict-transport-security" in present,
            has_x_frame_options="x-frame-options" in present,
            has_x_content_type_options="x-content-type-options" in present,
            has_csp=security.has_csp or "content-security-policy" in present,
            has_referrer_policy=security.has_referrer_policy or "referrer-policy" in present,
        )

    return results.model_copy(update={
        "technical": technical.model_copy(update=tech_update),
        "links": links.model_copy(update=link_update),
        "images": images,
        "security": security.model_copy(update=sec_update),
    })


# ─── Entry points ─────────────────────────────────────────────────────


def audit_html(
    html: str,
    source_url: Optional[str] = None,
    *,
    fetch_method: FetchMethod = FetchMethod.HTML,
    auxiliary: Optional[AuxiliaryFacts] = None,
    timestamp: Optional[str] = None,
    policy: Optional[ScoringPolicy] = None,
) -> AuditResult:
    """
    Audit one HTML document.

    Args:
        html: Document source. Malformed or empty markup is accepted.
        source_url: Absolute URL the document was served from, if known.
        fetch_method: Recorded on the result.
        auxiliary: Network facts to merge before synthesis.
        timestamp: ISO-8601 time to stamp on the result (default: now, UTC).
        policy: Score deductions and bonus.

    Returns:
        AuditResult with category facts, issues, passed notes and score.
    """
    results = run_checkers(Document(html, source_url))
    if auxiliary is not None:
        results = merge_auxiliary(results, auxiliary)
    return _build_result(results, source_url, fetch_method, timestamp, policy)


def _build_result(
    results: CategoryResults,
    source_url: Optional[str],
    fetch_method: FetchMethod,
    timestamp: Optional[str],
    policy: Optional[ScoringPolicy],
) -> AuditResult:
    issues = synthesize_issues(results, source_url)
    passed = synthesize_passed(results)
    score = calculate_score(issues, passed, policy)
    logger.debug(f"Audited {source_url or '(pasted html)'}: score={score}, issues={len(issues)}")

    return AuditResult(
        url=source_url,
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        fetch_method=fetch_method,
        score=score,
        summary=build_summary(issues, passed),
        issues=issues,
        passed=passed,
        **{name: getattr(results, name) for name in CategoryResults.model_fields},
    )


async def audit_url(
    url: str,
    options: Optional[AuditOptions] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    policy: Optional[ScoringPolicy] = None,
) -> AuditResult:
    """
    Fetch ``url``, run the auxiliary probes and audit the result.

    Raises:
        FetchError: Raised by the fetcher; probe failures never propagate.
    """
    options = options or AuditOptions()
    fetched = await fetch_html(
        url,
        timeout=options.timeouts.fetch,
        max_redirects=options.max_redirects,
        user_agent=options.user_agent,
        transport=transport,
    )
    results = run_checkers(Document(fetched.html, fetched.final_url))
    aux = await gather_auxiliary(
        fetched.final_url,
        [item.href for item in results.links.internal_urls],
        [item.href for item in results.links.external_urls],
        results.images.image_urls,
        options,
        transport=transport,
    )
    aux = aux.model_copy(update={"x_robots_tag": fetched.x_robots_tag})
    results = merge_auxiliary(results, aux)
    return _build_result(results, fetched.final_url, FetchMethod.URL, None, policy)


class PageAnalyzer:
    """
    Audit analyzer bound to one set of options and one score policy.

    Usage, pasted HTML:
        analyzer = PageAnalyzer()
        result = analyzer.analyze_html(html, source_url="https://example.com/")

    Usage, live URL:
        result = await analyzer.analyze_url("https://example.com/")
    """

    def __init__(
        self,
        options: Optional[AuditOptions] = None,
        policy: Optional[ScoringPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.options = options or AuditOptions()
        self.policy = policy
        self.transport = transport

    def analyze_html(self, html: str, source_url: Optional[str] = None) -> AuditResult:
        return audit_html(html, source_url, policy=self.policy)

    async def analyze_url(self, url: str) -> AuditResult:
        return await audit_url(url, self.options, self.transport, self.policy)
