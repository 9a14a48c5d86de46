"""Pass-note synthesis: one human-readable note per positive fact."""

from typing import List

from .models import CategoryResults

GOOD_READABILITY_FLESCH = 60
MOBILE_FRIENDLY_SCORE = 90


def synthesize_passed(results: CategoryResults) -> List[str]:
    t = results.technical
    intl = results.international
    content = results.content
    links = results.links
    images = results.images
    schema = results.structured_data
    social = results.social
    a11y = results.accessibility
    dom = results.dom
    perf = results.performance
    security = results.security
    trust = results.trust_signals
    mobile = results.mobile

    passed: List[str] = []

    # Technical
    if t.title.is_optimal:
        passed.append(f"Title length is optimal ({t.title.length} chars)")
    if t.meta_desc.is_optimal:
        passed.append(f"Meta description length is optimal ({t.meta_desc.length} chars)")
    if t.canonical.href and t.canonical.count == 1:
        passed.append("Canonical tag set")
    if t.viewport.is_mobile_optimized:
        passed.append("Viewport configured for mobile")
    if t.language:
        passed.append(f"Language declared ({t.language})")
    if t.charset:
        passed.append("Charset declared")
    if t.favicon:
        passed.append("Favicon present")
    if t.apple_touch_icon:
        passed.append("Apple touch icon present")
    if t.robots_txt.found and not t.robots_txt.blocks_all:
        passed.append("robots.txt found")
    if t.sitemap.found:
        passed.append("XML sitemap found")
    if t.llms_txt.found:
        passed.append("llms.txt found")

    # International
    if intl.hreflangs and intl.has_x_default and intl.has_self_reference is not False and not intl.issues:
        passed.append(f"Hreflang configured ({len(intl.hreflangs)} alternates)")

    # Content
    if len(content.headings.get("h1", [])) == 1:
        passed.append("Single H1 heading")
    if content.word_count >= 300:
        passed.append(f"Sufficient content ({content.word_count} words)")
    if content.readability.sufficient and content.readability.flesch_score >= GOOD_READABILITY_FLESCH:
        passed.append(f"Readable content (Flesch {content.readability.flesch_score})")

    # Links
    if links.total and not links.broken:
        passed.append("No broken links")

    # Images
    if images.total and not images.without_alt:
        passed.append("All images have alt text")
    if images.total and not images.without_dimensions:
        passed.append("All images have dimensions")

    # Schema / social
    if schema.count and not schema.invalid:
        passed.append(f"Structured data present ({', '.join(schema.types) or 'untyped'})")
    if social.is_complete:
        passed.append("Open Graph tags complete")
    if social.twitter.card:
        passed.append("Twitter Card present")

    # Accessibility / DOM
    if a11y.has_skip_link:
        passed.append("Skip link present")
    if a11y.has_main_landmark:
        passed.append("Main landmark present")
    if a11y.aria.aria_labels:
        passed.append(f"ARIA labels in use ({a11y.aria.aria_labels})")
    if dom.total_elements and not dom.duplicate_ids:
        passed.append("Element IDs are unique")
    if not dom.deprecated_elements:
        passed.append("No deprecated elements")

    # Performance
    if perf.preconnects:
        passed.append(f"Preconnect hints ({perf.preconnects})")
    if perf.preloads:
        passed.append(f"Preload hints ({perf.preloads})")
    if perf.font_faces and not perf.fonts_without_display:
        passed.append("Web fonts use font-display")

    # Security
    if security.is_https:
        passed.append("Served over HTTPS")
        if not security.mixed_content_count:
            passed.append("No mixed content")
    if security.ssl is not None and security.ssl.valid:
        passed.append("Valid SSL certificate")

    # Trust
    if trust.has_about_page:
        passed.append("About page linked")
    if trust.has_contact_page:
        passed.append("Contact page linked")
    if trust.has_privacy_page:
        passed.append("Privacy policy linked")
    if trust.has_author:
        passed.append("Author attribution present")
    if trust.social_platforms:
        passed.append(f"Social profiles linked ({', '.join(trust.social_platforms)})")

    # Mobile
    if mobile.has_viewport and mobile.score >= MOBILE_FRIENDLY_SCORE:
        passed.append(f"Mobile friendly (score {mobile.score})")

    return passed
