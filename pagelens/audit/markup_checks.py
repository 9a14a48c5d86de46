"""
Category checkers for page markup quality: accessibility, DOM shape,
performance hints, security posture, platform fingerprints, trust signals,
mobile friendliness and external resources.
"""

import re
from collections import Counter
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from lxml import etree
from lxml.html import HtmlElement

from . import patterns
from .checks import opens_unprotected_tab
from .document import Document, url_hostname
from .models import (
    AccessibilityFacts,
    AriaFacts,
    DOMFacts,
    ExternalResourcesFacts,
    FontResource,
    LandmarkCounts,
    MobileFacts,
    PerformanceFacts,
    PlatformFacts,
    RenderMethod,
    SchemaFacts,
    ScriptResource,
    SecurityFacts,
    StylesheetResource,
    TrustSignalsFacts,
)

MIXED_CONTENT_SAMPLE = 10
SUGGESTED_PRECONNECTS = 5

_FONT_FACE_RE = re.compile(r"@font-face\s*\{[^}]{0,4000}\}", re.IGNORECASE)
_CSS_URL_RE = re.compile(r"""url\(\s*['"]?([^'")\s]+)['"]?\s*\)""", re.IGNORECASE)
_PHONE_RE = re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_EMAIL_RE = re.compile(r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}", re.IGNORECASE)
_SMALL_FONT_RE = re.compile(r"font-size\s*:\s*(\d+(?:\.\d+)?)px", re.IGNORECASE)
_RELATIVE_FONT_RE = re.compile(r"font-size\s*:\s*[\d.]+\s*(?:r?em|%|vw|vh)\b", re.IGNORECASE)
_FIXED_WIDTH_RE = re.compile(r"(?<![-\w])(?:min-)?width\s*:\s*(\d+)px", re.IGNORECASE)
_MAX_SCALE_RE = re.compile(r"maximum-scale\s*=\s*([\d.]+)")

_UNLABELLED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "image", "reset"})

# Subresource-bearing elements checked for mixed content.
_SRC_TAGS = ("img", "script", "iframe", "video", "audio", "source", "embed", "track")


def _style_text(doc: Document) -> str:
    """All CSS on the page: <style> blocks plus style attributes."""
    blocks = [s.text_content() or "" for s in doc.root.iter("style")]
    inline = [el.get("style") or "" for el in doc.xpath("//*[@style]")]
    return "\n".join(blocks + inline)


def match_signatures(html_lower: str, table: Tuple[patterns.Signature, ...]) -> List[str]:
    """Names whose signature substrings occur in the lower-cased HTML, in table order."""
    return [sig.name for sig in table if any(p in html_lower for p in sig.patterns)]


# ─── Accessibility ────────────────────────────────────────────────────


def _has_accessible_name(el: HtmlElement) -> bool:
    if Document.text_of(el):
        return True
    for name in ("aria-label", "aria-labelledby", "title"):
        if (el.get(name) or "").strip():
            return True
    return any((img.get("alt") or "").strip() for img in el.iter("img"))


def _input_is_labelled(el: HtmlElement, label_targets: frozenset) -> bool:
    el_id = (el.get("id") or "").strip()
    if el_id and el_id in label_targets:
        return True
    if any(anc.tag == "label" for anc in el.iterancestors()):
        return True
    return any((el.get(name) or "").strip() for name in ("aria-label", "aria-labelledby", "title", "placeholder"))


def _aria(doc: Document) -> AriaFacts:
    def count(expr: str) -> int:
        return len(doc.xpath(expr))

    landmarks = LandmarkCounts(
        main=count('//main | //*[@role="main"]'),
        nav=count('//nav | //*[@role="navigation"]'),
        header=count('//header | //*[@role="banner"]'),
        footer=count('//footer | //*[@role="contentinfo"]'),
        aside=count('//aside | //*[@role="complementary"]'),
        search=count('//search | //*[@role="search"]'),
        form=count('//form | //*[@role="form"]'),
        region=count('//*[@role="region"]'),
    )
    missing = []
    if not landmarks.main:
        missing.append("main")
    if not landmarks.nav:
        missing.append("navigation")
    if not landmarks.header:
        missing.append("banner/header")

    roles = [(el.get("role") or "").strip() for el in doc.xpath("//*[@role]")]
    return AriaFacts(
        landmarks=landmarks,
        aria_labels=count("//*[@aria-label]"),
        aria_describedby=count("//*[@aria-describedby]"),
        aria_labelledby=count("//*[@aria-labelledby]"),
        aria_hidden=count('//*[@aria-hidden="true"]'),
        aria_live=count("//*[@aria-live]"),
        aria_expanded=count("//*[@aria-expanded]"),
        roles=list(dict.fromkeys(r for r in roles if r)),
        missing_landmarks=missing,
    )


def _skipped_headings(doc: Document) -> List[str]:
    """Level jumps between consecutive headings in document order, e.g. 'H2 → H4'."""
    levels = [
        int(el.tag[1])
        for el in doc.elements()
        if isinstance(el.tag, str) and re.fullmatch(r"h[1-6]", el.tag)
    ]
    skips: List[str] = []
    for prev, level in zip(levels, levels[1:]):
        if level - prev > 1:
            jump = f"H{prev} → H{level}"
            if jump not in skips:
                skips.append(jump)
    return skips


def _has_skip_link(doc: Document) -> bool:
    for a in doc.root.iter("a"):
        if (a.get("href") or "").strip().lower() in patterns.SKIP_LINK_TARGETS:
            return True
        classes = (a.get("class") or "").lower()
        if any(marker in classes for marker in patterns.SKIP_LINK_CLASSES):
            return True
    return False


def check_accessibility(doc: Document) -> AccessibilityFacts:
    """Labels, heading hierarchy, landmarks, skip links and ARIA usage."""
    aria = _aria(doc)
    label_targets = frozenset(
        (label.get("for") or "").strip() for label in doc.root.iter("label") if label.get("for")
    )

    inputs = [
        el for el in doc.find_all("input", "select", "textarea")
        if el.tag != "input" or (el.get("type") or "text").strip().lower() not in _UNLABELLED_INPUT_TYPES
    ]

    positive_tabindex = 0
    for el in doc.xpath("//*[@tabindex]"):
        try:
            if int(el.get("tabindex").strip()) > 0:
                positive_tabindex += 1
        except ValueError:
            continue

    clickable_without_alt = sum(
        1 for img in doc.root.iter("img")
        if img.getparent() is not None and img.getparent().tag in ("a", "button")
        and not (img.get("alt") or "").strip()
    )

    invalid_roles: List[str] = []
    for role in aria.roles:
        for token in role.lower().split():
            if token not in patterns.ARIA_ROLES and token not in invalid_roles:
                invalid_roles.append(token)

    return AccessibilityFacts(
        buttons_without_label=sum(1 for b in doc.root.iter("button") if not _has_accessible_name(b)),
        inputs_without_label=sum(1 for el in inputs if not _input_is_labelled(el, label_targets)),
        links_without_text=sum(1 for a in doc.xpath("//a[@href]") if not _has_accessible_name(a)),
        iframes_without_title=sum(1 for f in doc.root.iter("iframe") if not (f.get("title") or "").strip()),
        skipped_headings=_skipped_headings(doc),
        has_skip_link=_has_skip_link(doc),
        has_lang_attribute=bool((doc.root.get("lang") or "").strip()),
        clickable_images_without_alt=clickable_without_alt,
        positive_tabindex=positive_tabindex,
        has_main_landmark=aria.landmarks.main > 0,
        has_nav_landmark=aria.landmarks.nav > 0,
        has_focus_visible="focus-visible" in doc.html_lower,
        tables_without_headers=sum(1 for t in doc.root.iter("table") if not t.xpath(".//th")),
        autoplay_media=len(doc.xpath("//video[@autoplay] | //audio[@autoplay]")),
        invalid_aria_roles=invalid_roles,
        aria=aria,
    )


# ─── DOM ──────────────────────────────────────────────────────────────


def check_dom(doc: Document) -> DOMFacts:
    """Element counts, nesting depth, node types, duplicate ids and deprecated tags."""
    element_counts: Dict[str, int] = {}
    total_depth = 0
    max_depth = 0
    stack = [(doc.root, 0)]
    while stack:
        el, depth = stack.pop()
        element_counts[el.tag] = element_counts.get(el.tag, 0) + 1
        total_depth += depth
        max_depth = max(max_depth, depth)
        stack.extend((child, depth + 1) for child in reversed(el) if isinstance(child.tag, str))
    total = sum(element_counts.values())

    body = doc.body
    text_nodes = 0
    if body is not None:
        for el in body.iter():
            if isinstance(el.tag, str) and el.text and el.text.strip():
                text_nodes += 1
            if el is not body and el.tail and el.tail.strip():
                text_nodes += 1

    empty = 0
    for el in doc.find_all("p", "div", "span", "li"):
        if not el.text_content().strip() and not el.xpath(".//img | .//video | .//iframe | .//svg"):
            empty += 1

    ids = [(el.get("id") or "").strip() for el in doc.xpath("//*[@id]")]
    id_counts = Counter(i for i in ids if i)

    return DOMFacts(
        total_elements=total,
        max_depth=max_depth,
        average_depth=round(total_depth / total, 1) if total else 0.0,
        total_nodes=len(body) if body is not None else 0,
        text_nodes=text_nodes,
        comment_nodes=sum(1 for _ in doc.root.iter(etree.Comment)),
        inline_styles=len(doc.xpath("//*[@style]")),
        inline_scripts=len(doc.xpath("//script[not(@src)]")),
        empty_elements=empty,
        deprecated_elements=[tag for tag in patterns.DEPRECATED_ELEMENTS if tag in element_counts],
        duplicate_ids=[i for i, n in id_counts.items() if n > 1],
        element_counts=element_counts,
    )


# ─── Performance ──────────────────────────────────────────────────────


def _format_weight(size: int) -> str:
    if size > 1_000_000:
        return f"{size / 1_000_000:.2f} MB"
    return f"{size / 1000:.2f} KB"


def _script_type(el: HtmlElement) -> str:
    return (el.get("type") or "").strip().lower()


def check_performance(doc: Document) -> PerformanceFacts:
    """Script/style loading, resource hints, web fonts and HTML weight."""
    scripts = doc.find_all("script")
    stylesheets = doc.links_with_rel("stylesheet")
    head_scripts = doc.head.xpath(".//script[@src]") if doc.head is not None else []
    render_blocking = [
        s for s in head_scripts
        if s.get("async") is None and s.get("defer") is None and _script_type(s) != "module"
    ]
    preloads = doc.links_with_rel("preload")
    font_faces = _FONT_FACE_RE.findall(doc.raw_html)
    html_size = len(doc.raw_html.encode("utf-8"))

    return PerformanceFacts(
        total_scripts=len(scripts),
        total_stylesheets=len(stylesheets),
        render_blocking_scripts=len(render_blocking),
        render_blocking_styles=sum(
            1 for s in stylesheets if (s.get("media") or "").strip().lower() != "print"
        ),
        async_scripts=sum(1 for s in scripts if s.get("async") is not None),
        defer_scripts=sum(1 for s in scripts if s.get("defer") is not None),
        module_scripts=sum(1 for s in scripts if _script_type(s) == "module"),
        inline_scripts=sum(1 for s in scripts if s.get("src") is None),
        inline_styles=len(doc.find_all("style")),
        preloads=len(preloads),
        preloads_without_as=sum(1 for p in preloads if not (p.get("as") or "").strip()),
        preconnects=len(doc.links_with_rel("preconnect")),
        prefetches=len(doc.links_with_rel("prefetch")),
        dns_prefetches=len(doc.links_with_rel("dns-prefetch")),
        font_faces=len(font_faces),
        fonts_without_display=sum(1 for ff in font_faces if "font-display" not in ff.lower()),
        web_fonts=sum(
            1 for link in doc.root.iter("link")
            if any(h in (link.get("href") or "") for h in ("fonts.googleapis.com", "fonts.gstatic.com"))
        ),
        critical_css_inlined=bool(doc.find_all("style")),
        has_service_worker="serviceworker" in doc.html_lower or "service-worker" in doc.html_lower,
        html_size=html_size,
        estimated_weight=_format_weight(html_size),
    )


# ─── Security ─────────────────────────────────────────────────────────


def _resource_urls(doc: Document) -> List[str]:
    """src/href values of elements that load a subresource, in document order."""
    urls: List[str] = []
    for el in doc.elements():
        tag = el.tag
        if tag in _SRC_TAGS and el.get("src"):
            urls.append(el.get("src").strip())
        elif tag == "object" and el.get("data"):
            urls.append(el.get("data").strip())
        elif tag == "link" and el.get("href"):
            if set(doc.rel_tokens(el)) & patterns.RESOURCE_LINK_RELS:
                urls.append(el.get("href").strip())
    return urls


def check_security(doc: Document) -> SecurityFacts:
    """Mixed content, insecure forms and security meta tags; header/SSL facts come from the network."""
    is_https = bool(doc.source_url and doc.source_url.lower().startswith("https://"))

    mixed: List[str] = []
    insecure_forms = 0
    if is_https:
        mixed = [u for u in _resource_urls(doc) if u.lower().startswith("http://")]
        insecure_forms = sum(
            1 for f in doc.root.iter("form")
            if (f.get("action") or "").strip().lower().startswith("http://")
        )

    protocol_relative = sum(
        1 for el in doc.xpath("//*[@src or @href]")
        if (el.get("src") or el.get("href") or "").strip().startswith("//")
    )

    return SecurityFacts(
        is_https=is_https,
        mixed_content_count=len(mixed),
        mixed_content_urls=mixed[:MIXED_CONTENT_SAMPLE],
        protocol_relative_count=protocol_relative,
        unsafe_external_links=sum(1 for a in doc.xpath("//a[@href]") if opens_unprotected_tab(a)),
        has_csp=doc.meta_http_equiv("content-security-policy") is not None,
        has_referrer_policy=doc.meta_content(name="referrer") is not None,
        form_without_action=len(doc.xpath("//form[not(@action)]")),
        password_field_without_autocomplete=sum(
            1 for el in doc.root.iter("input")
            if (el.get("type") or "").strip().lower() == "password" and el.get("autocomplete") is None
        ),
        insecure_form_actions=insecure_forms,
    )


# ─── Platform ─────────────────────────────────────────────────────────

SUBSTANTIAL_TEXT_CHARS = 500
NEAR_EMPTY_MOUNT_CHARS = 50


def detect_render_method(doc: Document, frameworks: List[str]) -> Tuple[RenderMethod, Optional[str]]:
    """
    Guess how the markup was produced.

    Framework hydration markers win; otherwise an empty client mount point
    with little body text means client-side rendering, and substantial text
    means server-rendered (a framework was seen) or static markup.
    """
    for _framework, marker, method in patterns.HYDRATION_MARKERS:
        if marker in doc.html_lower:
            return RenderMethod(method), marker

    body_text = doc.visible_text()
    empty_mount = any(
        len(doc.text_of(el)) < NEAR_EMPTY_MOUNT_CHARS
        for el in doc.xpath("//*[@id]")
        if el.get("id").strip() in patterns.CLIENT_MOUNT_IDS
    )
    if empty_mount and len(body_text) < SUBSTANTIAL_TEXT_CHARS:
        return RenderMethod.CSR, None
    if len(body_text) >= SUBSTANTIAL_TEXT_CHARS:
        return (RenderMethod.SSR if frameworks else RenderMethod.STATIC), None
    return RenderMethod.UNKNOWN, None


def check_platform(doc: Document) -> PlatformFacts:
    """CMS, framework, analytics and ad-network fingerprints plus render method."""
    html_lower = doc.html_lower
    frameworks = match_signatures(html_lower, patterns.FRAMEWORK_SIGNATURES)
    render_method, marker = detect_render_method(doc, frameworks)
    root_attrs = {k.lower() for k in doc.root.attrib}
    return PlatformFacts(
        cms=match_signatures(html_lower, patterns.CMS_SIGNATURES),
        frameworks=frameworks,
        analytics=match_signatures(html_lower, patterns.ANALYTICS_SIGNATURES),
        advertising=match_signatures(html_lower, patterns.ADVERTISING_SIGNATURES),
        render_method=render_method,
        hydration_marker=marker,
        is_csr=render_method == RenderMethod.CSR,
        is_pwa=bool(doc.links_with_rel("manifest")) or "serviceworker" in html_lower,
        has_amp=bool(root_attrs & {"amp", "⚡"}) or bool(doc.links_with_rel("amphtml")),
    )


# ─── Trust signals ────────────────────────────────────────────────────


def _social_platform(href: str) -> Optional[str]:
    href_lower = href.lower()
    host = (url_hostname(href_lower) or "") if "//" in href_lower else ""
    for sig in patterns.SOCIAL_PLATFORMS:
        for p in sig.patterns:
            if "." in p:
                if host and (host == p or host.endswith("." + p)):
                    return sig.name
            elif p in href_lower:
                return sig.name
    return None


def _has_author_markup(doc: Document) -> bool:
    if doc.xpath('//*[@rel="author"] | //*[@itemprop="author"]'):
        return True
    for el in doc.xpath("//*[@class]"):
        tokens = el.get("class").lower().split()
        if any(m in t for t in tokens for m in patterns.AUTHOR_CLASS_MARKERS):
            return True
    return False


def check_trust_signals(doc: Document, schema: SchemaFacts) -> TrustSignalsFacts:
    """E-E-A-T proxies: policy pages, authorship, dates, contact details, social and badges."""
    anchors = doc.xpath("//a[@href]")
    hrefs = [(a.get("href") or "").strip().lower() for a in anchors]
    texts = [doc.text_of(a).lower() for a in anchors]

    def linked(markers: Tuple[str, ...], include_text: bool = True) -> bool:
        haystacks = hrefs + texts if include_text else hrefs
        return any(m in h for h in haystacks for m in markers)

    if schema.author_names or schema.has_person:
        author_source = "schema"
    elif doc.meta_content(name="author"):
        author_source = "meta"
    elif _has_author_markup(doc):
        author_source = "markup"
    else:
        author_source = None

    body_text = doc.visible_text().lower()
    image_text = " ".join(
        f"{img.get('alt') or ''} {img.get('src') or ''}" for img in doc.root.iter("img")
    ).lower()
    badge_text = f"{body_text} {image_text}"

    platforms: List[str] = []
    social_links = 0
    for href in hrefs:
        name = _social_platform(href)
        if name:
            social_links += 1
            if name not in platforms:
                platforms.append(name)

    schema_types = set(schema.types)
    og_type = (doc.meta_content(prop="og:type") or "").lower()
    published_meta = doc.meta_content(prop="article:published_time")

    return TrustSignalsFacts(
        has_about_page=linked(patterns.ABOUT_MARKERS),
        has_contact_page=linked(patterns.CONTACT_MARKERS),
        has_privacy_page=linked(patterns.PRIVACY_MARKERS),
        has_terms_page=linked(patterns.TERMS_MARKERS, include_text=False),
        has_cookie_policy=linked(patterns.COOKIE_MARKERS, include_text=False),
        has_author=author_source is not None,
        author_source=author_source,
        has_publish_date=bool(
            doc.xpath('//time[@datetime] | //*[@itemprop="datePublished"]') or published_meta
        ),
        has_modified_date=bool(
            doc.xpath('//*[@itemprop="dateModified"]') or doc.meta_content(prop="article:modified_time")
        ),
        has_copyright="©" in body_text or "copyright" in body_text,
        has_address=bool(doc.xpath('//address | //*[@itemprop="address"]')),
        has_phone=bool(_PHONE_RE.search(body_text)) or any(h.startswith("tel:") for h in hrefs),
        has_email=bool(_EMAIL_RE.search(body_text)) or any(h.startswith("mailto:") for h in hrefs),
        social_links_count=social_links,
        social_platforms=platforms,
        has_ssl_badge=any(m in badge_text for m in patterns.SSL_BADGE_MARKERS),
        has_payment_badges=any(m in badge_text for m in patterns.PAYMENT_MARKERS),
        has_reviews=any(m in badge_text for m in patterns.REVIEW_MARKERS),
        has_certifications=any(m in badge_text for m in patterns.CERTIFICATION_MARKERS),
        is_article_page=bool(
            schema_types & patterns.ARTICLE_SCHEMA_TYPES or og_type == "article" or published_meta
        ),
    )


# ─── Mobile ───────────────────────────────────────────────────────────


def _zoom_disabled(compact_viewport: str) -> bool:
    if "user-scalable=no" in compact_viewport or "user-scalable=0" in compact_viewport:
        return True
    match = _MAX_SCALE_RE.search(compact_viewport)
    if match:
        try:
            return float(match.group(1)) <= 1
        except ValueError:
            return False
    return False


def check_mobile(doc: Document) -> MobileFacts:
    """Viewport configuration, text size, layout risk, app metadata and responsive images."""
    viewport = doc.meta_content(name="viewport")
    compact = (viewport or "").replace(" ", "").lower()
    css = _style_text(doc)
    compact_css = re.sub(r"\s+", "", css.lower())

    small_text = 0
    fixed_width = 0
    for el in doc.xpath("//*[@style]"):
        style = el.get("style")
        if any(float(size) < 12 for size in _SMALL_FONT_RE.findall(style)):
            small_text += 1
        if any(int(w) > 480 for w in _FIXED_WIDTH_RE.findall(style)):
            fixed_width += 1

    images = doc.find_all("img")
    responsive = sum(
        1 for img in images
        if img.get("srcset") is not None
        or (img.getparent() is not None and img.getparent().tag == "picture")
    )
    media_queries = css.lower().count("@media")

    facts = dict(
        has_viewport=viewport is not None,
        viewport_content=viewport,
        has_width_device_width="width=device-width" in compact,
        has_initial_scale="initial-scale" in compact,
        zoom_disabled=_zoom_disabled(compact),
        small_text_elements=small_text,
        uses_relative_font_sizes=bool(_RELATIVE_FONT_RE.search(css)),
        has_media_queries=media_queries > 0,
        media_query_count=media_queries,
        has_flexbox="display:flex" in compact_css or "display:inline-flex" in compact_css,
        has_grid="display:grid" in compact_css or "display:inline-grid" in compact_css,
        horizontal_scroll_risk=fixed_width > 0,
        fixed_width_elements=fixed_width,
        has_theme_color=bool(doc.meta_content(name="theme-color")),
        has_apple_mobile_web_app_capable=bool(doc.meta_content(name="apple-mobile-web-app-capable")),
        has_apple_touch_icon=bool(doc.links_with_rel("apple-touch-icon")),
        has_manifest=bool(doc.links_with_rel("manifest")),
        responsive_images_count=responsive,
        total_images=len(images),
    )

    score = 100
    issues: List[str] = []
    if not facts["has_viewport"]:
        score -= 30
        issues.append("Missing viewport meta tag")
    elif not facts["has_width_device_width"]:
        score -= 20
        issues.append("Viewport does not use width=device-width")
    if facts["zoom_disabled"]:
        score -= 10
        issues.append("Zoom is disabled")
    if small_text:
        score -= 10
        issues.append(f"{small_text} element(s) with font size under 12px")
    if fixed_width:
        score -= 15
        issues.append(f"{fixed_width} element(s) wider than 480px")
    if images and not responsive:
        score -= 10
        issues.append("No responsive images")

    return MobileFacts(score=max(0, score), issues=issues, **facts)


# ─── External resources ───────────────────────────────────────────────


def _font_format(url: str) -> Optional[str]:
    path = url.lower().split("?")[0].split("#")[0]
    for ext, fmt in patterns.FONT_EXTENSIONS.items():
        if path.endswith(ext):
            return fmt
    return None


def _google_font_families(href: str) -> List[str]:
    try:
        query = parse_qs(urlparse(href).query)
    except ValueError:
        return []
    families: List[str] = []
    for value in query.get("family", []):
        for family in value.split("|"):
            name = family.split(":")[0].strip()
            if name:
                families.append(name)
    return families


def check_external_resources(doc: Document) -> ExternalResourcesFacts:
    """Stylesheets, scripts, fonts and the third-party origins they pull in."""
    css_files: List[StylesheetResource] = []
    for link in doc.links_with_rel("stylesheet"):
        href = (link.get("href") or "").strip()
        if href:
            url = doc.resolve(href) or href
            css_files.append(StylesheetResource(url=url, is_third_party=doc.is_third_party(url)))

    js_files: List[ScriptResource] = []
    for script in doc.xpath("//script[@src]"):
        src = script.get("src").strip()
        if src:
            url = doc.resolve(src) or src
            js_files.append(ScriptResource(
                url=url,
                is_third_party=doc.is_third_party(url),
                is_async=script.get("async") is not None,
                is_defer=script.get("defer") is not None,
                is_module=_script_type(script) == "module",
            ))

    font_urls: Dict[str, Optional[str]] = {}
    for link in doc.root.iter("link"):
        href = (link.get("href") or "").strip()
        if href and ((link.get("as") or "").lower() == "font" or _font_format(href)):
            font_urls.setdefault(doc.resolve(href) or href, _font_format(href))
    for block in _FONT_FACE_RE.findall(doc.raw_html):
        for src in _CSS_URL_RE.findall(block):
            if not src.lower().startswith("data:"):
                font_urls.setdefault(doc.resolve(src) or src, _font_format(src))

    google_fonts: List[str] = []
    for link in doc.root.iter("link"):
        href = link.get("href") or ""
        if "fonts.googleapis.com" in href:
            for family in _google_font_families(href):
                if family not in google_fonts:
                    google_fonts.append(family)

    resource_urls = [r.url for r in css_files] + [r.url for r in js_files] + list(font_urls)
    for el in doc.xpath("//img[@src] | //iframe[@src]"):
        resource_urls.append(doc.resolve(el.get("src").strip()) or el.get("src"))
    third_party: List[str] = []
    for url in resource_urls:
        if doc.is_third_party(url):
            host = url_hostname(url if not url.startswith("//") else "https:" + url)
            if host and host not in third_party:
                third_party.append(host)

    hinted = set()
    for rel in ("preconnect", "dns-prefetch"):
        for link in doc.links_with_rel(rel):
            href = (link.get("href") or "").strip()
            host = url_hostname(href if "//" in href else "//" + href)
            if host:
                hinted.add(host)

    return ExternalResourcesFacts(
        css_files=css_files,
        css_count=len(css_files),
        js_files=js_files,
        js_count=len(js_files),
        font_files=[FontResource(url=u, format=f) for u, f in font_urls.items()],
        font_count=len(font_urls),
        google_fonts=google_fonts,
        third_party_domains=third_party,
        third_party_count=len(third_party),
        suggested_preconnects=[
            f"https://{host}" for host in third_party if host not in hinted
        ][:SUGGESTED_PRECONNECTS],
    )
