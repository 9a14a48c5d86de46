"""Tests for the metadata, content, link, image, schema and social checkers."""

import json

import pytest

from pagelens.audit.checks import (
    calculate_readability,
    check_content,
    check_images,
    check_international,
    check_links,
    check_schema,
    check_social,
    check_technical,
    count_syllables,
    detect_language,
    score_ai_phrases,
)
from pagelens.audit.document import Document


def _ld(*payloads, raw=None):
    blocks = [f'<script type="application/ld+json">{json.dumps(p)}</script>' for p in payloads]
    if raw is not None:
        blocks.append(f'<script type="application/ld+json">{raw}</script>')
    return f"<html><head>{''.join(blocks)}</head><body></body></html>"


# ---------------------------------------------------------------------------
# Technical
# ---------------------------------------------------------------------------
TECH_HTML = """\
<html lang="en-GB"><head>
  <meta charset="utf-8">
  <title>Handmade ceramic mugs and bowls for every day</title>
  <meta name="description" content="Short description">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="robots" content="none">
  <link rel="canonical" href="https://other-site.com/mugs">
  <link rel="icon" href="/favicon.ico">
  <link rel="manifest" href="/site.webmanifest">
</head><body></body></html>
"""


class TestTechnical:
    def test_title_and_description(self):
        t = check_technical(Document(TECH_HTML, "https://example.com/Shop_Items/mugs?a=1&b=2"))
        assert t.title.value == "Handmade ceramic mugs and bowls for every day"
        assert t.title.is_optimal
        assert t.meta_desc.length == len("Short description")
        assert not t.meta_desc.is_optimal

    def test_robots_none_means_noindex_and_nofollow(self):
        t = check_technical(Document(TECH_HTML))
        assert t.robots.has_noindex
        assert t.robots.has_nofollow

    def test_cross_domain_canonical(self):
        t = check_technical(Document(TECH_HTML, "https://example.com/mugs"))
        assert t.canonical.count == 1
        assert t.canonical.is_cross_domain
        assert not t.canonical.is_self_referencing

    def test_self_referencing_canonical(self):
        html = '<html><head><link rel="canonical" href="/mugs/"></head></html>'
        t = check_technical(Document(html, "https://example.com/mugs"))
        assert t.canonical.is_self_referencing
        assert not t.canonical.is_cross_domain

    def test_language_charset_viewport_icons(self):
        t = check_technical(Document(TECH_HTML))
        assert t.language == "en-GB"
        assert t.language_valid
        assert t.charset == "utf-8"
        assert t.viewport.is_mobile_optimized
        assert t.favicon
        assert t.manifest_json
        assert not t.apple_touch_icon

    def test_url_structure(self):
        t = check_technical(Document(TECH_HTML, "https://example.com/Shop_Items/mugs?a=1&b=2"))
        assert t.url_structure.has_underscores
        assert t.url_structure.has_uppercase
        assert t.url_structure.query_params == 2
        assert t.url_structure.depth == 2

    def test_no_url_structure_without_source(self):
        assert check_technical(Document(TECH_HTML)).url_structure is None

    def test_malformed_source_url_has_no_url_structure(self):
        assert check_technical(Document(TECH_HTML, "http://[bad")).url_structure is None

    def test_svg_title_is_ignored(self):
        html = "<html><body><svg><title>icon</title></svg></body></html>"
        assert check_technical(Document(html)).title.value == ""

    def test_network_facts_default_to_unchecked(self):
        t = check_technical(Document(TECH_HTML))
        assert not t.robots_txt.checked
        assert not t.sitemap.checked
        assert not t.llms_txt.checked


# ---------------------------------------------------------------------------
# International
# ---------------------------------------------------------------------------
def _hreflang_doc(entries, source="https://example.com/"):
    links = "".join(f'<link rel="alternate" hreflang="{code}" href="{href}">' for code, href in entries)
    return Document(f"<html><head>{links}</head><body></body></html>", source)


class TestInternational:
    def test_no_hreflang(self):
        facts = check_international(Document("<p>hi</p>"), None, "en")
        assert facts.hreflangs == []
        assert facts.issues == []

    def test_lowercase_region_flagged(self):
        doc = _hreflang_doc([("en-us", "https://example.com/")])
        facts = check_international(doc, None, None)
        assert "Hreflang #1: Region should be uppercase (en-us)" in facts.issues

    def test_uppercase_region_accepted(self):
        doc = _hreflang_doc([("en-US", "https://example.com/"), ("x-default", "https://example.com/")])
        facts = check_international(doc, None, None)
        assert facts.issues == []
        assert facts.has_x_default
        assert facts.has_self_reference is True

    def test_x_default_exempt_from_code_checks(self):
        doc = _hreflang_doc([("x-default", "https://example.com/")])
        facts = check_international(doc, None, None)
        assert facts.invalid_lang_codes == []
        assert facts.issues == []

    def test_invalid_code_and_relative_href(self):
        doc = _hreflang_doc([("zz", "/zz/"), ("de", "")])
        facts = check_international(doc, None, None)
        assert facts.invalid_lang_codes == ["zz"]
        assert facts.issues == [
            "Hreflang #1: Relative URL (/zz/)",
            "Hreflang #1: Invalid language code (zz)",
            "Hreflang #2: Missing href",
        ]

    def test_self_reference_unknown_without_source(self):
        doc = _hreflang_doc([("en", "https://example.com/")], source=None)
        assert check_international(doc, None, None).has_self_reference is None

    def test_missing_self_reference(self):
        doc = _hreflang_doc([("ka", "https://example.com/ka/")])
        assert check_international(doc, None, None).has_self_reference is False

    def test_canonical_and_lang_matching(self):
        doc = _hreflang_doc([("ka", "https://example.com/ka/"), ("x-default", "https://example.com/")])
        facts = check_international(doc, "https://example.com/en/", "en")
        assert not facts.canonical_in_hreflang
        assert not facts.lang_matches_hreflang

    def test_duplicates(self):
        doc = _hreflang_doc([("en", "https://example.com/"), ("EN", "https://example.com/en")])
        assert check_international(doc, None, None).duplicate_hreflangs == ["en"]


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------
class TestAiPhrases:
    def test_three_uses_of_leverage(self):
        score, found = score_ai_phrases("We leverage tools. They leverage data. Teams leverage skills.")
        assert score == 15
        assert found == ['"leverage" (3x)']

    def test_score_is_capped(self):
        score, _ = score_ai_phrases("leverage " * 40)
        assert score == 100

    def test_word_boundaries(self):
        score, _ = score_ai_phrases("The leveraged buyout was utilized.")
        assert score == 0

    def test_curly_apostrophe(self):
        score, found = score_ai_phrases("In today’s world we ship mugs.")
        assert score > 0
        assert any("in today's world" in note for note in found)


class TestReadability:
    def test_short_text_is_insufficient(self):
        facts = calculate_readability("Too short to score.")
        assert not facts.sufficient
        assert facts.flesch_score == 0.0

    def test_simple_text_scores_high(self):
        text = "The cat sat on the mat. The dog ran to the park. We had fun in the sun all day."
        facts = calculate_readability(text)
        assert facts.sufficient
        assert facts.flesch_score >= 80

    def test_syllables(self):
        assert count_syllables("cat") == 1
        assert count_syllables("ceramic") == 3
        assert count_syllables("გამარჯობა") == 4


class TestLanguage:
    @pytest.mark.parametrize("text,expected", [
        ("გამარჯობა მსოფლიო", "ka"),
        ("Привет мир и все", "ru"),
        ("The mug is blue and the bowl is red", "en"),
        ("Der Becher ist blau und die Schale ist rot", "de"),
        ("12 34", None),
    ])
    def test_detect_language(self, text, expected):
        assert detect_language(text) == expected


CONTENT_HTML = """\
<html><body>
  <h1>Ceramic Mugs</h1><h2>Glazes</h2><h2>Sizes</h2>
  <p>Every mug is thrown by hand in our studio and fired twice for strength.</p>
  <p>Every mug is thrown by hand in our studio and fired twice for strength.</p>
  <p>Short.</p>
</body></html>
"""


class TestContent:
    def test_headings_and_counts(self):
        facts = check_content(Document(CONTENT_HTML), "Ceramic Mugs")
        assert facts.headings["h1"] == ["Ceramic Mugs"]
        assert facts.headings["h2"] == ["Glazes", "Sizes"]
        assert facts.headings["h6"] == []
        assert facts.paragraph_count == 3
        assert facts.reading_time == 1

    def test_title_h1_duplicate(self):
        assert check_content(Document(CONTENT_HTML), "ceramic mugs ").title_h1_duplicate
        assert not check_content(Document(CONTENT_HTML), "Mugs shop").title_h1_duplicate

    def test_duplicate_paragraphs(self):
        assert check_content(Document(CONTENT_HTML), "").duplicate_paragraphs == 1

    def test_keyword_density_skips_stop_words(self):
        facts = check_content(Document(CONTENT_HTML), "")
        words = [k.word for k in facts.keyword_density]
        assert "every" in words or "thrown" in words
        assert "the" not in words

    def test_empty_document(self):
        facts = check_content(Document(""), "")
        assert facts.word_count == 0
        assert facts.reading_time == 0
        assert facts.keyword_density == []


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------
LINKS_HTML = """\
<html><body>
  <nav><a href="/about">About us</a></nav>
  <a href="https://example.com/x#frag">X page</a>
  <a href="https://other.org/" rel="nofollow sponsored">Other</a>
  <a href="mailto:hi@example.com">Mail</a>
  <a href="javascript:void(0)">Click here</a>
  <a href="#top">read more about pricing</a>
  <a href="https://other.org/y" target="_blank">Ext</a>
  <a href="https://other.org/z" target="_blank" rel="noopener">Here</a>
  <a>no href</a>
</body></html>
"""


class TestLinks:
    def test_classification(self):
        links = check_links(Document(LINKS_HTML, "https://example.com/"))
        assert links.total == 8
        assert links.internal == 3
        assert links.external == 3
        assert links.other == 1
        assert links.broken == 1
        assert links.broken_list[0].href == "javascript:void(0)"

    def test_malformed_hrefs_without_source(self):
        html = '<html><body><a href="http://[bad">a</a><a href="//[bad">b</a><a href="https://other.org/">c</a></body></html>'
        links = check_links(Document(html))
        assert links.total == 3
        assert links.internal == 2
        assert links.external == 1

    def test_generic_anchors_match_whole_text_only(self):
        links = check_links(Document(LINKS_HTML, "https://example.com/"))
        assert links.generic_anchors == 2
        assert [l.text for l in links.generic_anchors_list] == ["click here", "here"]

    def test_rel_and_target(self):
        links = check_links(Document(LINKS_HTML, "https://example.com/"))
        assert links.nofollow == 1
        assert links.sponsored == 1
        assert links.unsafe_external_count == 1
        assert links.has_nav_links
        assert not links.has_footer_links

    def test_url_samples_are_absolute_without_fragment(self):
        links = check_links(Document(LINKS_HTML, "https://example.com/"))
        assert [l.href for l in links.internal_urls] == ["https://example.com/about", "https://example.com/x"]
        assert [l.href for l in links.external_urls] == [
            "https://other.org/", "https://other.org/y", "https://other.org/z",
        ]

    def test_without_source_relative_links_are_internal(self):
        links = check_links(Document(LINKS_HTML))
        assert links.internal == 2
        assert links.external == 4
        assert [l.href for l in links.internal_urls] == []


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------
IMAGES_HTML = """\
<html><body>
  <img src="/a.jpg" loading="lazy">
  <img src="/b.webp" alt="" width="10" height="10">
  <a href="/c"><img src="/c.png" width="1" height="1"></a>
  <img src="data:image/png;base64,AAAA" alt="inline" width="1" height="1" srcset="x 1x">
  <picture><img src="/d.avif" alt="Dish" width="1" height="1"></picture>
</body></html>
"""


class TestImages:
    def test_counts(self):
        img = check_images(Document(IMAGES_HTML, "https://example.com/"))
        assert img.total == 5
        assert img.without_alt == 2
        assert img.with_empty_alt == 1
        assert img.without_dimensions == 1
        assert img.lazy_loaded == 1
        assert img.lazy_above_fold == 1
        assert img.clickable_without_alt == 1
        assert img.modern_formats == 2
        assert img.srcset_count == 1
        assert img.picture_count == 1

    def test_image_urls_skip_data_uris(self):
        img = check_images(Document(IMAGES_HTML, "https://example.com/"))
        assert img.image_urls == [
            "https://example.com/a.jpg",
            "https://example.com/b.webp",
            "https://example.com/c.png",
            "https://example.com/d.avif",
        ]

    def test_image_context(self):
        img = check_images(Document(IMAGES_HTML))
        assert img.without_alt_list[1].context == "<a>"


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------
class TestSchema:
    def test_product_without_context(self):
        facts = check_schema(Document(_ld({"@type": "Product", "name": "Mug"})))
        assert facts.count == 1
        assert facts.missing_context == 1
        item = facts.details[0]
        assert item.index == "1"
        assert item.type == "Product"
        assert not item.valid
        assert item.issues == ["Missing @context", "Missing: image, offers/review/aggregateRating"]

    def test_graph_inherits_context(self):
        payload = {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "Organization", "name": "Clayworks"},
                {"@type": "BreadcrumbList", "itemListElement": [{"@type": "ListItem", "position": 1}]},
            ],
        }
        facts = check_schema(Document(_ld(payload)))
        assert [d.index for d in facts.details] == ["1.1", "1.2"]
        assert facts.valid == 2
        assert facts.missing_context == 0
        assert facts.has_organization
        assert facts.has_breadcrumb

    def test_invalid_json_does_not_affect_other_blocks(self):
        facts = check_schema(Document(_ld({"@context": "https://schema.org", "@type": "Person", "name": "Ana"},
                                          raw="{not json")))
        assert facts.invalid == 1
        assert facts.count == 2
        assert facts.details[1].type == "Invalid JSON"
        assert facts.details[1].issues == ["Invalid JSON syntax"]
        assert facts.author_names == ["Ana"]

    def test_deeply_nested_json_is_invalid(self):
        facts = check_schema(Document(_ld(raw="[" * 200000 + "]" * 200000)))
        assert facts.count == 1
        assert facts.invalid == 1
        assert facts.details[0].type == "Invalid JSON"

    def test_article_author_without_name(self):
        payload = {
            "@context": "https://schema.org",
            "@type": "Article",
            "headline": "Glazing",
            "datePublished": "2024-01-01",
            "author": {"@type": "Person"},
        }
        facts = check_schema(Document(_ld(payload)))
        assert facts.details[0].issues == ["Author missing name"]

    def test_website_search(self):
        payload = {"@context": "https://schema.org", "@type": "WebSite", "potentialAction": {"@type": "SearchAction"}}
        assert check_schema(Document(_ld(payload))).has_web_site_search

    def test_no_schema(self):
        facts = check_schema(Document("<p>plain</p>"))
        assert facts.count == 0
        assert facts.details == []


# ---------------------------------------------------------------------------
# Social
# ---------------------------------------------------------------------------
class TestSocial:
    def test_complete_open_graph(self):
        html = """<html><head>
          <meta property="og:title" content="T"><meta property="og:description" content="D">
          <meta property="og:image" content="https://example.com/i.jpg"><meta property="og:url" content="https://example.com/">
          <meta property="twitter:card" content="summary">
        </head></html>"""
        facts = check_social(Document(html))
        assert facts.is_complete
        assert facts.missing_og == []
        assert facts.twitter.card == "summary"

    def test_missing_tags(self):
        facts = check_social(Document('<html><head><meta property="og:title" content="T"></head></html>'))
        assert not facts.is_complete
        assert facts.missing_og == ["og:description", "og:image", "og:url"]
        assert facts.twitter.card is None
