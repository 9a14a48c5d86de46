"""End-to-end tests for the audit orchestrator."""

import asyncio
import math

import httpx
import pytest

from pagelens.audit import PageAnalyzer, audit_html, audit_url, merge_auxiliary, run_checkers
from pagelens.audit.config import AuditOptions, ProbeTimeouts
from pagelens.audit.document import Document
from pagelens.audit.models import (
    AuxiliaryFacts,
    FetchMethod,
    ImageSizeInfo,
    LinkStatus,
    LlmsTxtInfo,
    RedirectCheck,
    RobotsTxtInfo,
    SecurityHeadersInfo,
    SitemapInfo,
    SSLCertificateInfo,
)

FIXED_TIME = "2026-01-01T00:00:00+00:00"

NO_TITLE_HTML = """\
<html><head><meta name="viewport" content="width=device-width, initial-scale=1"></head>
<body><h1>First</h1><h1>Second</h1></body></html>
"""

PRODUCT_HTML = """\
<html lang="en"><head><title>Blue widget for sale at a fair price</title>
<script type="application/ld+json">{"@type": "Product", "name": "Widget"}</script>
</head><body><h1>Widget</h1></body></html>
"""

MIXED_HTML = """\
<html><head><title>Mixed</title></head><body>
<img src="http://cdn.example.com/a.png" alt="a" width="10" height="10">
<script src="http://example.com/app.js"></script>
</body></html>
"""

PAGE_HTML = """\
<html lang="en"><head>
  <title>Example page about widgets and other things</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="https://example.com/">
</head><body>
  <h1>Widgets</h1>
  <p>Read <a href="/about">about us</a> or visit <a href="https://other.org/x">our partner</a>.</p>
  <img src="/hero.jpg" alt="Hero" width="800" height="400">
</body></html>
"""


class TestAuditHtml:
    def test_missing_title_and_two_h1(self):
        result = audit_html(NO_TITLE_HTML, timestamp=FIXED_TIME)
        ids = result.issue_ids()
        assert "no-title" in ids
        assert "multiple-h1" in ids
        assert "Viewport configured for mobile" in result.passed

    def test_product_schema_without_context(self):
        result = audit_html(PRODUCT_HTML, timestamp=FIXED_TIME)
        by_id = {i.id: i for i in result.issues}
        assert "schema-no-context" in by_id
        assert by_id["schema-1"].issue == "Product schema incomplete"

    def test_mixed_content_only_on_https(self):
        secure = audit_html(MIXED_HTML, "https://example.com/", timestamp=FIXED_TIME)
        assert "mixed-content" in secure.issue_ids()
        assert "http://cdn.example.com/a.png" in secure.security.mixed_content_urls
        assert "no-https" not in secure.issue_ids()

        plain = audit_html(MIXED_HTML, "http://example.com/", timestamp=FIXED_TIME)
        assert plain.security.mixed_content_count == 0
        assert "no-https" in plain.issue_ids()

        pasted = audit_html(MIXED_HTML, timestamp=FIXED_TIME)
        assert pasted.security.mixed_content_count == 0
        assert "no-https" not in pasted.issue_ids()

    def test_single_insecure_image(self):
        html = '<html><body><img src="http://b.com/x.jpg" alt="x"></body></html>'
        secure = audit_html(html, "https://a.com", timestamp=FIXED_TIME)
        assert secure.security.mixed_content_count == 1
        assert secure.security.mixed_content_urls == ["http://b.com/x.jpg"]
        assert audit_html(html, "http://a.com", timestamp=FIXED_TIME).security.mixed_content_count == 0

    def test_idempotent(self):
        first = audit_html(PAGE_HTML, "https://example.com/", timestamp=FIXED_TIME)
        second = audit_html(PAGE_HTML, "https://example.com/", timestamp=FIXED_TIME)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_summary_is_consistent(self):
        result = audit_html(PAGE_HTML, "https://example.com/", timestamp=FIXED_TIME)
        s = result.summary
        assert s.critical_issues + s.high_issues + s.medium_issues + s.low_issues == len(result.issues)
        assert s.passed_checks == len(result.passed)
        assert s.total_checks == len(result.issues) + len(result.passed)
        assert result.fetch_method is FetchMethod.HTML

    def test_score_matches_deductions(self):
        result = audit_html(NO_TITLE_HTML, timestamp=FIXED_TIME)
        weights = {"critical": 15, "high": 8, "medium": 4, "low": 1}
        raw = 100 - sum(weights[i.severity.value] for i in result.issues) + min(10, 0.5 * len(result.passed))
        assert result.score == max(0, min(100, math.floor(raw + 0.5)))

    def test_offline_audit_leaves_probe_facts_unchecked(self):
        result = audit_html(PAGE_HTML, "https://example.com/", timestamp=FIXED_TIME)
        assert not result.technical.robots_txt.checked
        assert not result.technical.sitemap.checked
        assert result.security.ssl is None
        assert result.links.redirect_links is None

    @pytest.mark.parametrize("html", ["", "<<<>>>", "\x00\x01", "<html>", "<p>" * 2000, "plain words " * 500])
    def test_score_in_range_for_any_input(self, html):
        result = audit_html(html, timestamp=FIXED_TIME)
        assert isinstance(result.score, int)
        assert 0 <= result.score <= 100

    @pytest.mark.parametrize("html,source_url", [
        ('<html><head><link rel="preconnect" href="http://[::1"></head></html>', "https://example.com/"),
        ('<html><head><link rel="dns-prefetch" href="//[bad"></head></html>', None),
        ('<html><body><a href="http://[bad">x</a><a href="https://[::1/">y</a></body></html>', None),
        ('<html><body><a href="http://[bad">x</a></body></html>', "https://example.com/"),
        ('<html><head><link rel="canonical" href="http://[bad"></head></html>', "https://example.com/"),
        ('<html><body><a href="https://[twitter.com/x">t</a></body></html>', None),
        ('<html><head><link href="https://fonts.googleapis.com/css?family=A" rel="stylesheet"></head></html>', None),
        ('<script type="application/ld+json">' + "[" * 200000 + "]" * 200000 + "</script>", None),
        (PAGE_HTML, "http://[bad"),
        (PAGE_HTML, "/about"),
    ])
    def test_never_raises_on_malformed_urls_and_json(self, html, source_url):
        result = audit_html(html, source_url, timestamp=FIXED_TIME)
        assert isinstance(result.score, int)
        assert 0 <= result.score <= 100

    def test_malformed_source_url_has_no_url_structure(self):
        result = audit_html(PAGE_HTML, "http://[bad", timestamp=FIXED_TIME)
        assert result.technical.url_structure is None
        assert result.url == "http://[bad"

    def test_offline_audit_takes_no_options(self):
        with pytest.raises(TypeError):
            audit_html(PAGE_HTML, None, AuditOptions())
        options = AuditOptions(max_links_to_probe=0, max_images_to_size=0)
        bound = PageAnalyzer(options=options).analyze_html(PAGE_HTML, "https://example.com/")
        plain = audit_html(PAGE_HTML, "https://example.com/")
        assert bound.issues == plain.issues
        assert bound.score == plain.score

    def test_serialized_keys_are_camel_case(self):
        data = audit_html(PAGE_HTML, "https://example.com/", timestamp=FIXED_TIME).to_dict()
        assert data["fetchMethod"] == "html"
        assert data["timestamp"] == FIXED_TIME
        assert "schema" in data and "structuredData" not in data
        assert "trustSignals" in data and "externalResources" in data
        assert "metaDesc" in data["technical"]
        assert "issueKa" in data["issues"][0]
        assert "criticalIssues" in data["summary"]

    def test_categories_view(self):
        result = audit_html(PAGE_HTML, "https://example.com/", timestamp=FIXED_TIME)
        assert result.categories.technical == result.technical
        assert result.categories.structured_data == result.structured_data

    def test_issues_by_severity(self):
        result = audit_html("", timestamp=FIXED_TIME)
        ranks = [i.severity.rank for i in result.issues_by_severity()]
        assert ranks == sorted(ranks)

    def test_page_analyzer(self):
        result = PageAnalyzer().analyze_html(NO_TITLE_HTML)
        assert result.url is None
        assert result.timestamp


class TestMergeAuxiliary:
    def _results(self):
        return run_checkers(Document(PAGE_HTML, "https://example.com/"))

    def test_none_facts_change_nothing(self):
        results = self._results()
        assert merge_auxiliary(results, AuxiliaryFacts()) == results

    def test_technical_facts(self):
        aux = AuxiliaryFacts(
            robots_txt=RobotsTxtInfo(checked=True, found=True, content="User-agent: *\n# see /llms.txt"),
            sitemap=SitemapInfo(checked=True, found=True, url="https://example.com/sitemap.xml", url_count=3),
            llms_txt=LlmsTxtInfo(checked=True),
            x_robots_tag="noarchive, none",
        )
        merged = merge_auxiliary(self._results(), aux)
        t = merged.technical
        assert t.sitemap.url_count == 3
        assert t.llms_txt.mentioned
        assert t.robots.has_noindex and t.robots.has_nofollow
        assert t.robots.x_robots_tag == "noarchive, none"

    def test_link_facts_carry_anchor_text(self):
        aux = AuxiliaryFacts(
            redirects=[RedirectCheck(url="https://example.com/about", is_redirect=True, status=301,
                                     location="https://example.com/about/")],
            external_links=[LinkStatus(url="https://other.org/x", status=404)],
        )
        links = merge_auxiliary(self._results(), aux).links
        assert links.redirect_links == 1
        assert links.redirect_list[0].text == "about us"
        assert links.broken_external_links == 1
        assert links.broken_external_list[0].text == "our partner"
        assert links.broken_external_list[0].status == 404

    def test_image_size_analysis(self):
        aux = AuxiliaryFacts(image_sizes=[
            ImageSizeInfo(src="https://example.com/big.png", size_bytes=3 * 1024 * 1024,
                          content_type="image/png", ok=True),
            ImageSizeInfo(src="https://example.com/small.webp", size_bytes=1024,
                          content_type="image/webp", ok=True),
            ImageSizeInfo(src="https://example.com/gone.jpg", ok=False),
        ])
        analysis = merge_auxiliary(self._results(), aux).images.image_size_analysis
        assert analysis.checked == 2
        assert analysis.large_count == 1
        assert analysis.large_list[0].size == "3.0 MB"
        assert [i.src for i in analysis.old_format_list] == ["https://example.com/big.png"]

    def test_security_facts(self):
        headers = {
            "strict-transport-security": "max-age=63072000",
            "content-security-policy": None,
            "x-frame-options": "DENY",
            "x-content-type-options": None,
            "referrer-policy": "no-referrer",
            "permissions-policy": None,
        }
        aux = AuxiliaryFacts(
            ssl=SSLCertificateInfo(valid=False, error="certificate has expired"),
            security_headers=SecurityHeadersInfo(headers=headers, score=50,
                                                 issues=["Missing content-security-policy"]),
        )
        merged = merge_auxiliary(self._results(), aux)
        s = merged.security
        assert s.has_hsts and s.has_x_frame_options and s.has_referrer_policy
        assert not s.has_x_content_type_options and not s.has_csp

        result = audit_html(PAGE_HTML, "https://example.com/", auxiliary=aux, timestamp=FIXED_TIME)
        ids = result.issue_ids()
        assert "ssl-invalid" in ids
        assert "missing-security-headers" in ids


def _site_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/":
        return httpx.Response(200, html=PAGE_HTML, headers={"strict-transport-security": "max-age=1"})
    if path == "/robots.txt":
        return httpx.Response(200, text="User-agent: *\nDisallow:\nSitemap: https://example.com/sitemap.xml\n")
    if path == "/sitemap.xml":
        return httpx.Response(200, text='<?xml version="1.0"?><urlset><url><loc>https://example.com/</loc></url></urlset>')
    if path == "/llms.txt":
        return httpx.Response(200, text="# Example\n\n> Widgets and other things.\n")
    if path == "/about":
        return httpx.Response(301, headers={"location": "https://example.com/about/"})
    if path == "/hero.jpg":
        return httpx.Response(200, headers={"content-length": "512000", "content-type": "image/jpeg"})
    return httpx.Response(404, text="not found")


class TestAuditUrl:
    @pytest.mark.asyncio
    async def test_live_audit(self):
        transport = httpx.MockTransport(_site_handler)
        result = await audit_url("https://example.com/", transport=transport)

        assert result.fetch_method is FetchMethod.URL
        assert result.url == "https://example.com/"
        t = result.technical
        assert t.robots_txt.found and t.robots_txt.has_sitemap and not t.robots_txt.blocks_all
        assert t.sitemap.found and t.sitemap.page_in_sitemap
        assert t.llms_txt.found
        assert result.security.has_hsts
        assert result.security.ssl is None
        assert result.links.redirect_links == 1
        assert result.links.broken_external_links == 1
        assert result.images.image_size_analysis.large_count == 1

        ids = result.issue_ids()
        assert "redirect-links" in ids
        assert "broken-external-links" in ids
        assert "large-images" in ids
        assert "legacy-image-formats" in ids
        assert "no-sitemap" not in ids

    @pytest.mark.asyncio
    async def test_probe_deadline_keeps_finished_facts(self):
        options = AuditOptions(timeouts=ProbeTimeouts(auxiliary_phase=0.05))

        async def slow_handler(request):
            if request.url.path == "/":
                return httpx.Response(200, html=PAGE_HTML)
            if request.url.path == "/robots.txt":
                return httpx.Response(404)
            await asyncio.sleep(5)
            return httpx.Response(404)

        analyzer = PageAnalyzer(options=options, transport=httpx.MockTransport(slow_handler))
        result = await analyzer.analyze_url("https://example.com/")
        assert result.technical.robots_txt.checked
        assert not result.technical.robots_txt.found
        assert not result.technical.sitemap.checked
        assert result.security.security_headers is not None
        assert result.links.redirect_links is None
