"""
Issue synthesis.

Turns the per-category fact records into an ordered list of AuditIssue
entries. Rules run category by category in checker order; within one field
the predicates are mutually exclusive (missing > too short > too long).
Georgian texts fall back to the English text where no translation exists.
"""

from typing import List, Optional

from .models import AuditIssue, CategoryResults, Severity

CRITICAL, HIGH, MEDIUM, LOW = Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW

THIN_CONTENT_WORDS = 300
HARD_TO_READ_FLESCH = 30
AI_SCORE_THRESHOLD = 50
MAX_DOM_DEPTH = 32
MAX_DOM_ELEMENTS = 1500
MAX_RENDER_BLOCKING_SCRIPTS = 3
MAX_RENDER_BLOCKING_STYLES = 5
MAX_HTML_BYTES = 500_000
MAX_URL_LENGTH = 100
MAX_THIRD_PARTY_DOMAINS = 10
SSL_EXPIRY_WARNING_DAYS = 30


def _issue(
    id: str,
    severity: Severity,
    category: str,
    issue: str,
    location: str,
    fix: str,
    issue_ka: Optional[str] = None,
    fix_ka: Optional[str] = None,
    current: Optional[str] = None,
    details: Optional[str] = None,
) -> AuditIssue:
    return AuditIssue(
        id=id,
        severity=severity,
        category=category,
        issue=issue,
        issue_ka=issue_ka or issue,
        location=location,
        fix=fix,
        fix_ka=fix_ka or fix,
        current=current,
        details=details,
    )


def synthesize_issues(results: CategoryResults, url: Optional[str] = None) -> List[AuditIssue]:
    """
    Evaluate every issue rule against the category facts.

    Args:
        results: Facts from all category checkers (network facts merged in, if any).
        url: The audited page URL, when known. Needed for the HTTPS rule.

    Returns:
        Issues in checker execution order with unique ids.
    """
    issues: List[AuditIssue] = []
    issues.extend(_technical_issues(results))
    issues.extend(_international_issues(results))
    issues.extend(_content_issues(results))
    issues.extend(_link_issues(results))
    issues.extend(_image_issues(results))
    issues.extend(_schema_issues(results))
    issues.extend(_social_issues(results))
    issues.extend(_accessibility_issues(results))
    issues.extend(_dom_issues(results))
    issues.extend(_performance_issues(results))
    issues.extend(_security_issues(results, url))
    issues.extend(_platform_issues(results))
    issues.extend(_trust_issues(results))
    issues.extend(_mobile_issues(results))
    issues.extend(_external_resource_issues(results))
    return issues


# ─── Technical ────────────────────────────────────────────────────────


def _technical_issues(r: CategoryResults) -> List[AuditIssue]:
    t = r.technical
    out: List[AuditIssue] = []

    if not t.title.value:
        out.append(_issue("no-title", CRITICAL, "Technical", "Missing title tag", "<head>",
                          "Add a <title> tag", "სათაური არ არის", "დაამატეთ <title> ტეგი"))
    elif t.title.length < 30:
        out.append(_issue("title-short", HIGH, "Technical", f"Title too short ({t.title.length} chars)",
                          "<title>", "Expand the title to 30-60 characters",
                          f"სათაური მოკლეა ({t.title.length})", "გააგრძელეთ 30-60 სიმბოლომდე",
                          current=t.title.value))
    elif t.title.length > 60:
        out.append(_issue("title-long", MEDIUM, "Technical",
                          f"Title may be truncated ({t.title.length} chars)", "<title>",
                          "Keep the title under 60 characters", "სათაური შეიძლება შემოკლდეს",
                          "შეამოკლეთ 60 სიმბოლომდე", current=t.title.value))

    if not t.meta_desc.value:
        out.append(_issue("no-meta-desc", HIGH, "Technical", "Missing meta description", "<head>",
                          "Add a meta description", "მეტა აღწერა არ არის", "დაამატეთ მეტა აღწერა"))
    elif t.meta_desc.length < 120:
        out.append(_issue("meta-desc-short", MEDIUM, "Technical",
                          f"Meta description short ({t.meta_desc.length} chars)",
                          '<meta name="description">', "Expand to 120-160 characters",
                          "მეტა აღწერა მოკლეა", "გააგრძელეთ 120-160 სიმბოლომდე",
                          current=t.meta_desc.value))
    elif t.meta_desc.length > 160:
        out.append(_issue("meta-desc-long", LOW, "Technical", "Meta description may be truncated",
                          '<meta name="description">', "Keep under 160 characters",
                          "მეტა აღწერა შეიძლება შემოკლდეს", "შეამოკლეთ 160 სიმბოლომდე"))

    if t.canonical.count == 0:
        out.append(_issue("no-canonical", MEDIUM, "Technical", "Missing canonical tag", "<head>",
                          "Add a canonical link", "კანონიკური არ არის", "დაამატეთ canonical"))
    elif t.canonical.count > 1:
        out.append(_issue("multiple-canonicals", CRITICAL, "Technical",
                          f"Multiple canonicals ({t.canonical.count})", "<head>",
                          "Keep only one canonical link", "რამდენიმე canonical", "დატოვეთ ერთი"))
    elif t.canonical.is_cross_domain:
        out.append(_issue("cross-domain-canonical", HIGH, "Technical", "Cross-domain canonical",
                          '<link rel="canonical">', "Verify the cross-domain canonical is intentional",
                          "სხვა დომენზე canonical", "დარწმუნდით რომ განზრახ არის",
                          current=t.canonical.href))

    if not t.viewport.content:
        out.append(_issue("no-viewport", CRITICAL, "Mobile", "Missing viewport meta tag", "<head>",
                          "Add a viewport meta tag", "Viewport არ არის", "დაამატეთ viewport"))
    elif not t.viewport.is_mobile_optimized:
        out.append(_issue("viewport-not-mobile", HIGH, "Mobile", "Viewport not mobile-optimized",
                          '<meta name="viewport">', "Use width=device-width",
                          "Viewport არ არის მობილურზე ოპტიმიზებული", "გამოიყენეთ width=device-width",
                          current=t.viewport.content))

    if not t.language:
        out.append(_issue("no-lang", HIGH, "Accessibility", "Missing lang attribute", "<html>",
                          'Add lang="en" (or the page language) to <html>',
                          "lang ატრიბუტი არ არის", "დაამატეთ lang"))
    elif not t.language_valid:
        out.append(_issue("invalid-lang", MEDIUM, "Technical", f"Invalid lang value ({t.language})",
                          "<html lang>", "Use an ISO 639-1 language code", current=t.language))

    if not t.charset:
        out.append(_issue("no-charset", MEDIUM, "Technical", "Missing charset declaration", "<head>",
                          'Add <meta charset="utf-8">', "Charset არ არის", "დაამატეთ charset"))

    if t.robots.has_noindex:
        out.append(_issue("noindex", CRITICAL, "Technical", "Page blocked from indexing (noindex)",
                          '<meta name="robots">', "Remove noindex", "გვერდი დაბლოკილია",
                          "წაშალეთ noindex", current=t.robots.meta or t.robots.x_robots_tag))
    if t.robots.has_nofollow:
        out.append(_issue("nofollow", MEDIUM, "Technical", "Links not followed (nofollow)",
                          '<meta name="robots">', "Remove nofollow unless intentional",
                          current=t.robots.meta or t.robots.googlebot))

    robots_txt = t.robots_txt
    if robots_txt.checked:
        if not robots_txt.found:
            out.append(_issue("robots-txt-missing", LOW, "Technical", "No robots.txt found",
                              "/robots.txt", "Add a robots.txt file"))
        elif robots_txt.blocks_all:
            out.append(_issue("robots-txt-blocks-all", CRITICAL, "Technical",
                              "robots.txt blocks all crawlers", "/robots.txt",
                              'Remove "Disallow: /" for User-agent: *'))
        elif not robots_txt.has_sitemap:
            out.append(_issue("robots-txt-no-sitemap", LOW, "Technical",
                              "robots.txt does not reference a sitemap", "/robots.txt",
                              "Add a Sitemap: line to robots.txt"))

    if t.sitemap.checked and not t.sitemap.found:
        out.append(_issue("no-sitemap", LOW, "Technical", "No XML sitemap found", "/sitemap.xml",
                          "Publish an XML sitemap"))

    if t.llms_txt.checked and not t.llms_txt.found and not t.llms_txt.mentioned:
        out.append(_issue("no-llms-txt", LOW, "AI", "No llms.txt found", "/llms.txt",
                          "Add llms.txt for AI crawlers", "llms.txt არ არის", "დაამატეთ llms.txt"))

    if not t.favicon:
        out.append(_issue("no-favicon", LOW, "Technical", "No favicon", "<head>", "Add a favicon",
                          "Favicon არ არის", "დაამატეთ favicon"))

    url = t.url_structure
    if url is not None:
        if url.length > MAX_URL_LENGTH:
            out.append(_issue("url-too-long", LOW, "Technical", f"URL is long ({url.length} chars)",
                              "URL", f"Keep URLs under {MAX_URL_LENGTH} characters"))
        if url.has_underscores:
            out.append(_issue("url-underscores", LOW, "Technical", "URL path contains underscores",
                              "URL", "Use hyphens instead of underscores"))
        if url.has_uppercase:
            out.append(_issue("url-uppercase", LOW, "Technical", "URL path contains uppercase letters",
                              "URL", "Use lowercase URLs"))
    return out


# ─── International ────────────────────────────────────────────────────


def _international_issues(r: CategoryResults) -> List[AuditIssue]:
    intl = r.international
    out: List[AuditIssue] = []
    if not intl.hreflangs:
        return out

    if not intl.has_x_default:
        out.append(_issue("no-x-default", MEDIUM, "International", "Missing x-default hreflang",
                          "<head>", "Add an x-default alternate", "x-default არ არის",
                          "დაამატეთ x-default"))
    if intl.has_self_reference is False:
        out.append(_issue("no-self-hreflang", HIGH, "International", "Missing self-referencing hreflang",
                          "<head>", "Add an hreflang entry pointing at this page",
                          "თვით-მიმთითებელი hreflang არ არის", "დაამატეთ თვით-მიმთითებელი"))
    if not intl.canonical_in_hreflang:
        out.append(_issue("canonical-not-in-hreflang", HIGH, "International",
                          "Canonical URL not among hreflang alternates", "<head>",
                          "Include the canonical URL in the hreflang set",
                          "Canonical არ არის hreflang-ში", "ჩართეთ canonical hreflang-ში"))
    if not intl.lang_matches_hreflang:
        out.append(_issue("lang-mismatch", MEDIUM, "International", "HTML lang not in hreflang set",
                          "<html lang>", "Match the lang attribute with an hreflang code",
                          "HTML lang არ ემთხვევა", "შეასწორეთ lang"))
    if intl.duplicate_hreflangs:
        out.append(_issue("duplicate-hreflang", MEDIUM, "International",
                          f"Duplicate hreflang codes: {', '.join(intl.duplicate_hreflangs)}",
                          '<link rel="alternate">', "Keep one alternate per language code"))
    for i, text in enumerate(intl.issues, start=1):
        out.append(_issue(f"hreflang-{i}", HIGH, "International", text, '<link rel="alternate">',
                          "Fix the hreflang entry", fix_ka="გაასწორეთ hreflang"))
    return out


# ─── Content ──────────────────────────────────────────────────────────


def _content_issues(r: CategoryResults) -> List[AuditIssue]:
    c = r.content
    out: List[AuditIssue] = []
    h1_count = len(c.headings.get("h1", []))

    if h1_count == 0:
        out.append(_issue("no-h1", HIGH, "Content", "No H1 heading", "<h1>", "Add one H1",
                          "H1 არ არის", "დაამატეთ H1"))
    elif h1_count > 1:
        out.append(_issue("multiple-h1", LOW, "Content", f"Multiple H1 headings ({h1_count})", "<h1>",
                          "Use a single H1", "რამდენიმე H1", "გამოიყენეთ ერთი H1"))
    if c.title_h1_duplicate:
        out.append(_issue("title-h1-duplicate", LOW, "Content", "Title and H1 are identical",
                          "<title>/<h1>", "Make the H1 different from the title",
                          "Title და H1 იდენტურია", "გააკეთეთ H1 განსხვავებული"))
    if c.word_count < THIN_CONTENT_WORDS:
        out.append(_issue("thin-content", HIGH, "Content", f"Thin content ({c.word_count} words)", "<body>",
                          f"Add more content (at least {THIN_CONTENT_WORDS} words)",
                          f"მცირე კონტენტი ({c.word_count})", "დაამატეთ მეტი კონტენტი"))
    if c.readability.sufficient and c.readability.flesch_score < HARD_TO_READ_FLESCH:
        score = c.readability.flesch_score
        out.append(_issue("hard-to-read", MEDIUM, "Content", f"Hard to read (Flesch: {score})", "<body>",
                          "Use shorter sentences and simpler words",
                          f"რთული წასაკითხი (Flesch: {score})", "გაამარტივეთ წინადადებები"))
    if c.ai_score > AI_SCORE_THRESHOLD:
        out.append(_issue("ai-content", MEDIUM, "Content", f"AI content indicators (score: {c.ai_score})",
                          "<body>", "Rewrite in a natural voice", f"AI კონტენტის ნიშნები ({c.ai_score})",
                          "გადაწერეთ ბუნებრივად", details=", ".join(c.ai_phrases[:5])))
    if c.duplicate_paragraphs:
        out.append(_issue("duplicate-paragraphs", LOW, "Content",
                          f"{c.duplicate_paragraphs} duplicated paragraph(s)", "<p>",
                          "Remove repeated paragraphs"))
    if c.title_content_lang_mismatch:
        out.append(_issue("title-content-lang-mismatch", LOW, "Content",
                          f"Title language ({c.title_language}) differs from content ({c.detected_language})",
                          "<title>", "Write the title in the page language"))
    return out


# ─── Links ────────────────────────────────────────────────────────────


def _link_issues(r: CategoryResults) -> List[AuditIssue]:
    links = r.links
    out: List[AuditIssue] = []
    if links.broken:
        out.append(_issue("broken-links", HIGH, "Links", f"{links.broken} broken link(s)", "<a>",
                          "Fix or remove empty and javascript: links",
                          f"{links.broken} გატეხილი ბმული", "გაასწორეთ ან წაშალეთ",
                          details=", ".join(f"{l.text or '(no text)'} → {l.href}" for l in links.broken_list)))
    if links.generic_anchors:
        out.append(_issue("generic-anchors", MEDIUM, "Links", f"{links.generic_anchors} generic anchor text(s)",
                          "<a>", "Use descriptive link text", f"{links.generic_anchors} ზოგადი ანკორი",
                          "გამოიყენეთ აღწერითი ტექსტი",
                          details=", ".join(f'"{l.text}"' for l in links.generic_anchors_list)))
    if links.unsafe_external_count:
        out.append(_issue("unsafe-external", MEDIUM, "Security",
                          f"{links.unsafe_external_count} link(s) missing noopener", '<a target="_blank">',
                          'Add rel="noopener"', f"{links.unsafe_external_count} ბმულს აკლია noopener",
                          'დაამატეთ rel="noopener"'))
    if links.internal == 0:
        out.append(_issue("no-internal-links", LOW, "Links", "No internal links", "<a>",
                          "Link to related pages on the same site"))
    if links.redirect_links:
        out.append(_issue("redirect-links", MEDIUM, "Links", f"{links.redirect_links} link(s) redirect",
                          "<a>", "Point links at their final destination",
                          details=", ".join(f"{l.href} → {l.location}" for l in links.redirect_list)))
    if links.broken_external_links:
        out.append(_issue("broken-external-links", HIGH, "Links",
                          f"{links.broken_external_links} external link(s) broken", "<a>",
                          "Fix or remove broken external links",
                          details=", ".join(f"{l.href} ({l.status or l.error})" for l in links.broken_external_list)))
    return out


# ─── Images ───────────────────────────────────────────────────────────


def _image_issues(r: CategoryResults) -> List[AuditIssue]:
    img = r.images
    out: List[AuditIssue] = []
    if img.without_alt:
        out.append(_issue("img-no-alt", HIGH if img.without_alt > 5 else MEDIUM, "Accessibility",
                          f"{img.without_alt} image(s) missing alt", "<img>", "Add alt text",
                          f"{img.without_alt} სურათს არ აქვს alt", "დაამატეთ alt",
                          details=", ".join(i.src for i in img.without_alt_list if i.src)))
    if img.with_empty_alt:
        out.append(_issue("img-empty-alt", LOW, "Accessibility", f"{img.with_empty_alt} image(s) with empty alt",
                          '<img alt="">', "Keep empty alt only on decorative images"))
    if img.without_dimensions:
        out.append(_issue("img-no-dimensions", MEDIUM, "Performance",
                          f"{img.without_dimensions} image(s) without dimensions", "<img>",
                          "Add width and height attributes", f"{img.without_dimensions} სურათს არ აქვს ზომები",
                          "დაამატეთ width/height"))
    if img.lazy_above_fold:
        out.append(_issue("lazy-above-fold", MEDIUM, "Performance", "Above-the-fold images are lazy-loaded",
                          '<img loading="lazy">', "Remove loading=lazy from the first images",
                          "ზედა სურათებს აქვთ lazy", "წაშალეთ lazy ზედა სურათებიდან"))
    if img.clickable_without_alt:
        out.append(_issue("clickable-img-no-alt", HIGH, "Accessibility",
                          f"{img.clickable_without_alt} linked image(s) without alt", "<a><img>",
                          "Describe the link target in the image alt"))
    if img.total and not img.modern_formats and not img.picture_count:
        out.append(_issue("no-modern-image-formats", LOW, "Performance", "No WebP/AVIF images", "<img>",
                          "Serve images in WebP or AVIF"))
    analysis = img.image_size_analysis
    if analysis is not None:
        if analysis.large_count:
            out.append(_issue("large-images", MEDIUM, "Performance", f"{analysis.large_count} large image(s)",
                              "<img>", "Compress images under 200 KB",
                              details=", ".join(f"{i.src} ({i.size})" for i in analysis.large_list)))
        if analysis.old_format_count:
            out.append(_issue("legacy-image-formats", LOW, "Performance",
                              f"{analysis.old_format_count} image(s) in legacy formats", "<img>",
                              "Convert to WebP or AVIF",
                              details=", ".join(i.src for i in analysis.old_format_list)))
    return out


# ─── Schema ───────────────────────────────────────────────────────────


def _schema_issues(r: CategoryResults) -> List[AuditIssue]:
    s = r.structured_data
    out: List[AuditIssue] = []
    if s.count == 0:
        out.append(_issue("no-schema", MEDIUM, "Schema", "No structured data",
                          '<script type="application/ld+json">', "Add Schema.org JSON-LD",
                          "Schema არ არის", "დაამატეთ Schema.org"))
    if s.invalid:
        out.append(_issue("invalid-schema", CRITICAL, "Schema", f"{s.invalid} invalid schema JSON block(s)",
                          '<script type="application/ld+json">', "Fix the JSON syntax",
                          f"{s.invalid} არასწორი JSON", "გაასწორეთ JSON"))
    if s.missing_context:
        out.append(_issue("schema-no-context", HIGH, "Schema", f"{s.missing_context} schema item(s) missing @context",
                          '<script type="application/ld+json">', 'Add "@context": "https://schema.org"',
                          f"{s.missing_context} აკლია @context", "დაამატეთ @context"))
    for item in s.details:
        if item.type == "Invalid JSON":
            continue
        problems = [p for p in item.issues if p != "Missing @context"]
        if problems:
            out.append(_issue(f"schema-{item.index}", HIGH, "Schema", f"{item.type} schema incomplete",
                              f"Schema #{item.index}", "Add the required fields",
                              fix_ka="დაამატეთ საჭირო ველები", details=", ".join(problems)))
    return out


# ─── Social ───────────────────────────────────────────────────────────


def _social_issues(r: CategoryResults) -> List[AuditIssue]:
    social = r.social
    out: List[AuditIssue] = []
    if not social.is_complete:
        missing = ", ".join(social.missing_og)
        out.append(_issue("incomplete-og", MEDIUM, "Social", f"Missing Open Graph tags: {missing}",
                          '<meta property="og:*">', "Add the missing Open Graph tags",
                          f"აკლია OG: {missing}", "დაამატეთ OG ტეგები"))
    if not social.twitter.card:
        out.append(_issue("no-twitter-card", LOW, "Social", "Missing Twitter Card", '<meta name="twitter:card">',
                          "Add a twitter:card meta tag", "Twitter Card არ არის", "დაამატეთ Twitter Card"))
    return out


# ─── Accessibility ────────────────────────────────────────────────────


def _accessibility_issues(r: CategoryResults) -> List[AuditIssue]:
    a = r.accessibility
    out: List[AuditIssue] = []
    if a.skipped_headings:
        skipped = ", ".join(a.skipped_headings)
        out.append(_issue("skipped-headings", MEDIUM, "Accessibility", f"Skipped heading levels: {skipped}",
                          "<h1>-<h6>", "Use sequential heading levels", f"გამოტოვებული: {skipped}",
                          "გამოიყენეთ თანმიმდევრული"))
    if a.buttons_without_label:
        out.append(_issue("btn-no-label", MEDIUM, "Accessibility",
                          f"{a.buttons_without_label} button(s) without label", "<button>", "Add text or aria-label",
                          f"{a.buttons_without_label} ღილაკს არ აქვს ლეიბლი", "დაამატეთ aria-label"))
    if a.inputs_without_label:
        out.append(_issue("input-no-label", MEDIUM, "Accessibility",
                          f"{a.inputs_without_label} form field(s) without label", "<input>", "Add a <label>",
                          f"{a.inputs_without_label} ველს არ აქვს ლეიბლი", "დაამატეთ <label>"))
    if a.links_without_text:
        out.append(_issue("link-no-text", MEDIUM, "Accessibility", f"{a.links_without_text} link(s) without text",
                          "<a>", "Add link text or aria-label", f"{a.links_without_text} ბმულს არ აქვს ტექსტი",
                          "დაამატეთ ტექსტი"))
    if a.iframes_without_title:
        out.append(_issue("iframe-no-title", LOW, "Accessibility",
                          f"{a.iframes_without_title} iframe(s) without title", "<iframe>", "Add a title attribute"))
    if a.aria.missing_landmarks:
        missing = ", ".join(a.aria.missing_landmarks)
        out.append(_issue("missing-landmarks", MEDIUM, "Accessibility", f"Missing landmarks: {missing}",
                          "<main>, <nav>, <header>", "Add semantic landmark elements", f"აკლია: {missing}",
                          "დაამატეთ სემანტიკური ელემენტები"))
    if a.positive_tabindex:
        out.append(_issue("positive-tabindex", LOW, "Accessibility",
                          f"{a.positive_tabindex} element(s) with positive tabindex", "[tabindex]",
                          "Use tabindex 0 or -1"))
    if a.tables_without_headers:
        out.append(_issue("tables-without-headers", LOW, "Accessibility",
                          f"{a.tables_without_headers} table(s) without header cells", "<table>", "Add <th> cells"))
    if a.autoplay_media:
        out.append(_issue("autoplay-media", MEDIUM, "Accessibility", f"{a.autoplay_media} autoplaying media element(s)",
                          "<video autoplay>", "Remove autoplay or start muted with controls"))
    if a.invalid_aria_roles:
        out.append(_issue("invalid-aria-roles", MEDIUM, "Accessibility",
                          f"Invalid ARIA roles: {', '.join(a.invalid_aria_roles)}", "[role]", "Use valid WAI-ARIA roles"))
    return out


# ─── DOM ──────────────────────────────────────────────────────────────


def _dom_issues(r: CategoryResults) -> List[AuditIssue]:
    dom = r.dom
    out: List[AuditIssue] = []
    if dom.max_depth > MAX_DOM_DEPTH:
        out.append(_issue("deep-dom", MEDIUM, "Performance", f"DOM too deep ({dom.max_depth} levels)", "DOM",
                          "Flatten the markup structure", f"DOM ძალიან ღრმაა ({dom.max_depth})",
                          "გააბრტყელეთ სტრუქტურა"))
    if dom.total_elements > MAX_DOM_ELEMENTS:
        out.append(_issue("large-dom", MEDIUM, "Performance", f"Large DOM ({dom.total_elements} elements)", "DOM",
                          "Reduce the number of elements", f"დიდი DOM ({dom.total_elements})",
                          "შეამცირეთ ელემენტები"))
    if dom.duplicate_ids:
        ids = ", ".join(dom.duplicate_ids[:5])
        out.append(_issue("duplicate-ids", HIGH, "Accessibility", f"Duplicate IDs: {ids}", "[id]",
                          "Use unique id values", f"დუბლირებული ID: {ids}", "გამოიყენეთ უნიკალური ID"))
    if dom.deprecated_elements:
        tags = ", ".join(dom.deprecated_elements)
        out.append(_issue("deprecated-elements", LOW, "Technical", f"Deprecated elements: {tags}", "HTML",
                          "Replace with modern elements and CSS", f"მოძველებული: {tags}",
                          "შეცვალეთ თანამედროვე ტეგებით"))
    return out


# ─── Performance ──────────────────────────────────────────────────────


def _performance_issues(r: CategoryResults) -> List[AuditIssue]:
    p = r.performance
    out: List[AuditIssue] = []
    if p.render_blocking_scripts > MAX_RENDER_BLOCKING_SCRIPTS:
        out.append(_issue("render-blocking-scripts", MEDIUM, "Performance",
                          f"{p.render_blocking_scripts} render-blocking scripts", "<head> <script>",
                          "Add async or defer", f"{p.render_blocking_scripts} მბლოკავი სკრიპტი",
                          "დაამატეთ async/defer"))
    if p.render_blocking_styles > MAX_RENDER_BLOCKING_STYLES:
        out.append(_issue("render-blocking-styles", LOW, "Performance",
                          f"{p.render_blocking_styles} render-blocking stylesheets", '<link rel="stylesheet">',
                          "Combine stylesheets and inline critical CSS"))
    if p.preloads_without_as:
        out.append(_issue("preload-no-as", MEDIUM, "Performance", f'{p.preloads_without_as} preload(s) missing "as"',
                          '<link rel="preload">', "Add the as attribute",
                          f'{p.preloads_without_as} preload-ს აკლია "as"', "დაამატეთ as"))
    if p.fonts_without_display:
        out.append(_issue("font-display", LOW, "Performance",
                          f"{p.fonts_without_display} @font-face rule(s) without font-display", "<style>",
                          "Add font-display: swap"))
    if p.html_size > MAX_HTML_BYTES:
        out.append(_issue("large-html", MEDIUM, "Performance", f"Large HTML document ({p.estimated_weight})",
                          "HTML", "Reduce inline data and markup size"))
    return out


# ─── Security ─────────────────────────────────────────────────────────


def _security_issues(r: CategoryResults, url: Optional[str]) -> List[AuditIssue]:
    s = r.security
    out: List[AuditIssue] = []
    if url and not s.is_https:
        out.append(_issue("no-https", HIGH, "Security", "Page not served over HTTPS", "URL", "Serve the page over HTTPS",
                          current=url))
    if s.mixed_content_count:
        out.append(_issue("mixed-content", CRITICAL, "Security", f"{s.mixed_content_count} HTTP resource(s) on HTTPS page",
                          "<img>, <script>, <link>", "Load every resource over HTTPS",
                          f"{s.mixed_content_count} HTTP HTTPS-ზე", "შეცვალეთ HTTPS-ით",
                          details=", ".join(s.mixed_content_urls)))
    if s.protocol_relative_count:
        out.append(_issue("protocol-relative", LOW, "Security",
                          f"{s.protocol_relative_count} protocol-relative URL(s)", "[src], [href]",
                          "Use explicit https:// URLs"))
    if s.insecure_form_actions:
        out.append(_issue("insecure-form-action", HIGH, "Security",
                          f"{s.insecure_form_actions} form(s) submit over HTTP", "<form action>",
                          "Submit forms to HTTPS endpoints"))
    if s.password_field_without_autocomplete:
        out.append(_issue("password-no-autocomplete", LOW, "Security",
                          f"{s.password_field_without_autocomplete} password field(s) without autocomplete",
                          '<input type="password">', 'Set autocomplete="current-password" or "new-password"'))
    if s.ssl is not None:
        if not s.ssl.valid:
            out.append(_issue("ssl-invalid", CRITICAL, "Security", "Invalid SSL certificate", "TLS",
                              "Install a valid certificate", details=s.ssl.error))
        elif s.ssl.days_until_expiry is not None and s.ssl.days_until_expiry < SSL_EXPIRY_WARNING_DAYS:
            out.append(_issue("ssl-expiring", HIGH, "Security",
                              f"SSL certificate expires in {s.ssl.days_until_expiry} days", "TLS",
                              "Renew the certificate", current=s.ssl.valid_to))
    if s.security_headers is not None and s.security_headers.issues:
        out.append(_issue("missing-security-headers", MEDIUM, "Security",
                          f"Missing security headers ({s.security_headers.score}/100)", "HTTP headers",
                          "Add the missing security headers", details=", ".join(s.security_headers.issues)))
    return out


# ─── Platform / trust / mobile / resources ────────────────────────────


def _platform_issues(r: CategoryResults) -> List[AuditIssue]:
    if not r.platform.is_csr:
        return []
    return [_issue("csr", HIGH, "Platform", "Client-side rendered content", "<body>",
                   "Render content on the server (SSR or static generation)", "CSR რენდერინგი",
                   "გამოიყენეთ SSR")]


def _trust_issues(r: CategoryResults) -> List[AuditIssue]:
    trust = r.trust_signals
    out: List[AuditIssue] = []
    if trust.is_article_page and not trust.has_author:
        out.append(_issue("article-no-author", MEDIUM, "Trust", "Article without author attribution", "<article>",
                          "Add a byline and schema.org author"))
    if not (trust.has_contact_page or trust.has_email or trust.has_phone or trust.has_address):
        out.append(_issue("no-contact-info", LOW, "Trust", "No contact information", "<footer>",
                          "Link a contact page or show an email, phone or address"))
    return out


def _mobile_issues(r: CategoryResults) -> List[AuditIssue]:
    m = r.mobile
    out: List[AuditIssue] = []
    if m.zoom_disabled:
        out.append(_issue("viewport-zoom-disabled", MEDIUM, "Mobile", "Viewport disables zooming",
                          '<meta name="viewport">', "Remove user-scalable=no and maximum-scale=1",
                          current=m.viewport_content))
    if m.horizontal_scroll_risk:
        out.append(_issue("horizontal-scroll-risk", MEDIUM, "Mobile",
                          f"{m.fixed_width_elements} fixed-width element(s) wider than 480px", "[style]",
                          "Use relative widths or max-width: 100%"))
    if m.small_text_elements:
        out.append(_issue("small-text", LOW, "Mobile", f"{m.small_text_elements} element(s) with text under 12px",
                          "[style]", "Use at least 12px (preferably 16px) body text"))
    if m.total_images and not m.responsive_images_count:
        out.append(_issue("no-responsive-images", LOW, "Mobile", "No responsive images", "<img>",
                          "Add srcset or <picture> sources"))
    return out


def _external_resource_issues(r: CategoryResults) -> List[AuditIssue]:
    ext = r.external_resources
    if ext.third_party_count <= MAX_THIRD_PARTY_DOMAINS:
        return []
    return [_issue("too-many-third-parties", MEDIUM, "Performance",
                   f"{ext.third_party_count} third-party domains", "<script>, <link>",
                   "Remove unused third parties and preconnect to the rest",
                   details=", ".join(ext.third_party_domains))]
