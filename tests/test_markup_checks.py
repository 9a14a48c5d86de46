"""Tests for the accessibility, DOM, performance, security, platform, trust, mobile and resource checkers."""

import pytest

from pagelens.audit.checks import check_schema
from pagelens.audit.document import Document
from pagelens.audit.markup_checks import (
    check_accessibility,
    check_dom,
    check_external_resources,
    check_mobile,
    check_performance,
    check_platform,
    check_security,
    check_trust_signals,
    detect_render_method,
)
from pagelens.audit.models import RenderMethod


# ---------------------------------------------------------------------------
# Accessibility
# ---------------------------------------------------------------------------
A11Y_HTML = """\
<html lang="ka"><body>
  <a href="#main" class="skip-link">Skip</a>
  <header><nav aria-label="Primary"><a href="/">Home</a></nav></header>
  <main id="main">
    <h1>Title</h1>
    <h3>Jumped</h3>
    <h2>Back</h2>
    <h5>Jumped again</h5>
    <button></button>
    <button aria-label="Close"></button>
    <button><img src="x.png" alt="Search"></button>
    <label for="email">Email</label><input id="email" type="email">
    <input type="text" name="q">
    <input type="hidden" name="token">
    <label>Name <input type="text"></label>
    <a href="/x"></a>
    <a href="/y"><img src="y.png"></a>
    <iframe src="/map"></iframe>
    <div tabindex="2">Focusable</div>
    <div role="banana">?</div>
    <table><tr><td>1</td></tr></table>
    <video src="/v.mp4" autoplay></video>
  </main>
</body></html>
"""


class TestAccessibility:
    def test_labels_and_names(self):
        a = check_accessibility(Document(A11Y_HTML))
        assert a.buttons_without_label == 1
        assert a.inputs_without_label == 1
        assert a.links_without_text == 2
        assert a.iframes_without_title == 1
        assert a.clickable_images_without_alt == 1

    def test_skipped_headings_in_document_order(self):
        a = check_accessibility(Document(A11Y_HTML))
        assert a.skipped_headings == ["H1 → H3", "H2 → H5"]

    def test_landmarks_and_skip_link(self):
        a = check_accessibility(Document(A11Y_HTML))
        assert a.has_skip_link
        assert a.has_main_landmark
        assert a.has_nav_landmark
        assert a.has_lang_attribute
        assert a.aria.missing_landmarks == []
        assert a.aria.aria_labels == 2

    def test_misc(self):
        a = check_accessibility(Document(A11Y_HTML))
        assert a.positive_tabindex == 1
        assert a.tables_without_headers == 1
        assert a.autoplay_media == 1
        assert a.invalid_aria_roles == ["banana"]

    def test_missing_landmarks(self):
        a = check_accessibility(Document("<html><body><p>x</p></body></html>"))
        assert a.aria.missing_landmarks == ["main", "navigation", "banner/header"]
        assert not a.has_skip_link


# ---------------------------------------------------------------------------
# DOM
# ---------------------------------------------------------------------------
class TestDom:
    def test_counts_and_depth(self):
        html = '<html><body><div id="a"><p id="a">x<span></span></p></div><!-- c --><center>old</center></body></html>'
        dom = check_dom(Document(html))
        # html > body > div > p > span
        assert dom.max_depth == 4
        assert dom.element_counts["p"] == 1
        assert dom.total_elements == sum(dom.element_counts.values())
        assert dom.duplicate_ids == ["a"]
        assert dom.deprecated_elements == ["center"]
        assert dom.comment_nodes == 1
        assert dom.empty_elements == 1

    def test_deep_nesting_does_not_recurse(self):
        html = "<html><body>" + "<div>" * 150 + "x" + "</div>" * 150 + "</body></html>"
        dom = check_dom(Document(html))
        assert dom.max_depth > 100


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------
PERF_HTML = """\
<html><head>
  <script src="/a.js"></script>
  <script src="/b.js" async></script>
  <script src="/c.js" defer></script>
  <script src="/d.js" type="module"></script>
  <link rel="stylesheet" href="/main.css">
  <link rel="stylesheet" href="/print.css" media="print">
  <link rel="preload" href="/font.woff2">
  <link rel="preload" href="/hero.jpg" as="image">
  <link rel="preconnect" href="https://fonts.gstatic.com">
  <link rel="dns-prefetch" href="//cdn.example.net">
  <style>
    @font-face { font-family: A; src: url(/a.woff2); }
    @font-face { font-family: B; src: url(/b.woff2); font-display: swap; }
  </style>
</head><body><script>inline()</script></body></html>
"""


class TestPerformance:
    def test_render_blocking(self):
        p = check_performance(Document(PERF_HTML))
        assert p.total_scripts == 5
        assert p.render_blocking_scripts == 1
        assert p.render_blocking_styles == 1
        assert p.module_scripts == 1
        assert p.inline_scripts == 1

    def test_hints_and_fonts(self):
        p = check_performance(Document(PERF_HTML))
        assert p.preloads == 2
        assert p.preloads_without_as == 1
        assert p.preconnects == 1
        assert p.dns_prefetches == 1
        assert p.font_faces == 2
        assert p.fonts_without_display == 1
        assert p.critical_css_inlined

    def test_weight(self):
        p = check_performance(Document("<p>x</p>"))
        assert p.html_size == len("<p>x</p>")
        assert p.estimated_weight == "0.01 KB"


# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------
SECURITY_HTML = """\
<html><head>
  <link rel="stylesheet" href="http://cdn.example.com/a.css">
  <link rel="alternate" href="http://example.com/feed">
  <meta http-equiv="Content-Security-Policy" content="default-src 'self'">
</head><body>
  <img src="http://example.com/a.jpg">
  <script src="//cdn.example.com/b.js"></script>
  <object data="http://example.com/movie.swf"></object>
  <a href="http://example.com/page">plain link</a>
  <a href="https://other.org" target="_blank">new tab</a>
  <form action="http://example.com/login"><input type="password"></form>
  <form></form>
</body></html>
"""


class TestSecurity:
    def test_mixed_content_under_https(self):
        s = check_security(Document(SECURITY_HTML, "https://example.com/"))
        assert s.is_https
        assert s.mixed_content_count == 3
        assert s.mixed_content_urls == [
            "http://cdn.example.com/a.css",
            "http://example.com/a.jpg",
            "http://example.com/movie.swf",
        ]
        assert s.insecure_form_actions == 1

    @pytest.mark.parametrize("source", [None, "http://example.com/"])
    def test_no_mixed_content_without_https(self, source):
        s = check_security(Document(SECURITY_HTML, source))
        assert not s.is_https
        assert s.mixed_content_count == 0
        assert s.insecure_form_actions == 0

    def test_other_signals(self):
        s = check_security(Document(SECURITY_HTML, "https://example.com/"))
        assert s.protocol_relative_count == 1
        assert s.unsafe_external_links == 1
        assert s.has_csp
        assert s.form_without_action == 1
        assert s.password_field_without_autocomplete == 1
        assert s.ssl is None
        assert s.security_headers is None


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------
LONG_TEXT = "<p>" + "Plenty of server rendered words here. " * 20 + "</p>"


class TestPlatform:
    def test_hydration_marker_wins(self):
        html = '<html><body><div id="__next"></div><script id="__NEXT_DATA__">{}</script></body></html>'
        method, marker = detect_render_method(Document(html), [])
        assert method == RenderMethod.SSR
        assert marker == "__next_data__"

    def test_empty_mount_point_is_csr(self):
        html = '<html><body><div id="root"></div><script src="/bundle.js"></script></body></html>'
        facts = check_platform(Document(html))
        assert facts.render_method == RenderMethod.CSR
        assert facts.is_csr

    def test_static_and_ssr(self):
        static = Document(f"<html><body>{LONG_TEXT}</body></html>")
        assert detect_render_method(static, [])[0] == RenderMethod.STATIC
        assert detect_render_method(static, ["React"])[0] == RenderMethod.SSR

    def test_unknown(self):
        assert detect_render_method(Document("<p>short</p>"), [])[0] == RenderMethod.UNKNOWN

    def test_fingerprints(self):
        html = '<html><head><link rel="stylesheet" href="/wp-content/themes/x.css"></head><body></body></html>'
        facts = check_platform(Document(html))
        assert "WordPress" in facts.cms


# ---------------------------------------------------------------------------
# Trust signals
# ---------------------------------------------------------------------------
TRUST_HTML = """\
<html><head><meta property="og:type" content="article"></head><body>
  <a href="/about-us">Who we are</a>
  <a href="/contact">Contact</a>
  <a href="/privacy-policy">Privacy</a>
  <a href="/terms">Terms</a>
  <a href="https://www.facebook.com/clayworks">Facebook</a>
  <a href="https://x.com/clayworks">X</a>
  <a href="https://box.com/files">Files</a>
  <a href="mailto:hello@clayworks.example">Email us</a>
  <footer>© 2024 Clayworks</footer>
  <img src="/badges/visa.svg" alt="Visa">
</body></html>
"""


class TestTrustSignals:
    def test_pages_and_contact(self):
        t = check_trust_signals(Document(TRUST_HTML), check_schema(Document(TRUST_HTML)))
        assert t.has_about_page
        assert t.has_contact_page
        assert t.has_privacy_page
        assert t.has_terms_page
        assert not t.has_cookie_policy
        assert t.has_email
        assert t.has_copyright

    def test_social_platforms_match_hostnames(self):
        t = check_trust_signals(Document(TRUST_HTML), check_schema(Document(TRUST_HTML)))
        assert t.social_platforms == ["Facebook", "Twitter/X"]
        assert t.social_links_count == 2

    def test_malformed_social_href_is_not_a_platform(self):
        html = '<html><body><a href="https://[facebook.com/page">f</a><a href="https://x.com/a">x</a></body></html>'
        t = check_trust_signals(Document(html), check_schema(Document(html)))
        assert t.social_platforms == ["Twitter/X"]

    def test_badges_from_image_alt(self):
        t = check_trust_signals(Document(TRUST_HTML), check_schema(Document(TRUST_HTML)))
        assert t.has_payment_badges

    def test_article_without_author(self):
        t = check_trust_signals(Document(TRUST_HTML), check_schema(Document(TRUST_HTML)))
        assert t.is_article_page
        assert not t.has_author
        assert t.author_source is None

    @pytest.mark.parametrize("head,body,source", [
        ('<meta name="author" content="Ana">', "", "meta"),
        ("", '<span class="post-byline">Ana</span>', "markup"),
        ('<script type="application/ld+json">{"@context":"https://schema.org","@type":"Person","name":"Ana"}</script>',
         "", "schema"),
    ])
    def test_author_source(self, head, body, source):
        html = f"<html><head>{head}</head><body>{body}</body></html>"
        t = check_trust_signals(Document(html), check_schema(Document(html)))
        assert t.has_author
        assert t.author_source == source


# ---------------------------------------------------------------------------
# Mobile
# ---------------------------------------------------------------------------
class TestMobile:
    def test_good_viewport(self):
        html = '<html><head><meta name="viewport" content="width=device-width, initial-scale=1"></head></html>'
        m = check_mobile(Document(html))
        assert m.has_width_device_width
        assert m.has_initial_scale
        assert not m.zoom_disabled
        assert m.score == 100
        assert m.issues == []

    def test_deductions(self):
        html = """<html><head>
          <meta name="viewport" content="width=1024, user-scalable=no">
        </head><body>
          <p style="font-size: 10px">tiny</p>
          <div style="width: 900px">wide</div>
          <img src="/a.jpg">
        </body></html>"""
        m = check_mobile(Document(html))
        assert m.zoom_disabled
        assert m.small_text_elements == 1
        assert m.fixed_width_elements == 1
        assert m.horizontal_scroll_risk
        assert m.score == 100 - 20 - 10 - 10 - 15 - 10

    def test_no_viewport(self):
        m = check_mobile(Document("<p>x</p>"))
        assert not m.has_viewport
        assert m.score == 70
        assert m.issues == ["Missing viewport meta tag"]

    def test_max_scale_one_disables_zoom(self):
        html = '<html><head><meta name="viewport" content="width=device-width, maximum-scale=1.0"></head></html>'
        assert check_mobile(Document(html)).zoom_disabled

    def test_max_width_is_not_fixed_width(self):
        html = '<html><body><div style="max-width: 1200px">x</div></body></html>'
        assert check_mobile(Document(html)).fixed_width_elements == 0

    def test_css_features(self):
        html = "<html><head><style>@media (min-width: 600px) { .a { display: grid } } .b{display:flex}</style></head></html>"
        m = check_mobile(Document(html))
        assert m.media_query_count == 1
        assert m.has_grid
        assert m.has_flexbox


# ---------------------------------------------------------------------------
# External resources
# ---------------------------------------------------------------------------
RESOURCES_HTML = """\
<html><head>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Roboto:wght@400&family=Open+Sans">
  <link rel="stylesheet" href="/main.css">
  <script src="https://www.googletagmanager.com/gtag/js?id=G-1" async></script>
  <script src="/app.js" defer></script>
  <link rel="preload" href="/fonts/brand.woff2" as="font">
  <style>@font-face { font-family: X; src: url("https://cdn.fonts.net/x.ttf"); }</style>
</head><body><img src="https://images.example-cdn.com/a.jpg"></body></html>
"""


class TestExternalResources:
    def test_files(self):
        r = check_external_resources(Document(RESOURCES_HTML, "https://example.com/"))
        assert r.css_count == 2
        assert r.js_count == 2
        assert [c.is_third_party for c in r.css_files] == [True, False]
        assert r.js_files[0].is_async
        assert r.js_files[1].is_defer
        assert r.js_files[1].url == "https://example.com/app.js"

    def test_fonts(self):
        r = check_external_resources(Document(RESOURCES_HTML, "https://example.com/"))
        assert r.google_fonts == ["Roboto", "Open Sans"]
        assert {f.format for f in r.font_files} == {"woff2", "truetype"}
        assert r.font_count == 2

    def test_third_parties_and_preconnects(self):
        r = check_external_resources(Document(RESOURCES_HTML, "https://example.com/"))
        assert r.third_party_domains == [
            "fonts.googleapis.com",
            "www.googletagmanager.com",
            "cdn.fonts.net",
            "images.example-cdn.com",
        ]
        assert r.third_party_count == 4
        assert r.suggested_preconnects == [
            "https://www.googletagmanager.com",
            "https://cdn.fonts.net",
            "https://images.example-cdn.com",
        ]

    def test_malformed_hint_and_font_hrefs_are_skipped(self):
        html = """<html><head>
          <link rel="preconnect" href="http://[::1">
          <link rel="dns-prefetch" href="//[bad">
          <link rel="preconnect" href="https://cdn.example.net">
          <link rel="stylesheet" href="http://[fonts.googleapis.com/css?family=Lato">
          <script src="https://cdn.example.net/a.js"></script>
          <script src="https://cdn.other.net/b.js"></script>
        </head><body></body></html>"""
        r = check_external_resources(Document(html, "https://example.com/"))
        assert r.third_party_domains == ["cdn.example.net", "cdn.other.net"]
        assert r.suggested_preconnects == ["https://cdn.other.net"]
        assert r.google_fonts == []

