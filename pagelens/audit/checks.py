"""
Category checkers for metadata, content, links, images, structured data and
social tags.

Each ``check_*`` function takes a parsed ``Document`` (plus, for a few
checkers, facts produced earlier in the run) and returns one immutable fact
record. No checker mutates the document or shares state with another.
"""

import json
import math
import re
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlparse

from lxml.html import HtmlElement

from . import patterns
from .document import Document, normalize_space, url_hostname
from .models import (
    CanonicalInfo,
    ContentFacts,
    HreflangTag,
    ImageFacts,
    ImageRef,
    InternationalFacts,
    KeywordDensity,
    LinkFacts,
    LinkItem,
    LlmsTxtInfo,
    OpenGraphMeta,
    ReadabilityFacts,
    RobotsMetaInfo,
    SchemaFacts,
    SchemaItem,
    SocialFacts,
    TechnicalFacts,
    TextMeta,
    TwitterMeta,
    URLStructure,
    ViewportInfo,
)

TITLE_RANGE = (30, 60)
META_DESC_RANGE = (120, 160)
ABOVE_FOLD_IMAGES = 3
SAMPLE_LIMIT = 10
URL_SAMPLE_LIMIT = 20


# ─── Technical ────────────────────────────────────────────────────────


def _primary_subtag(lang: str) -> str:
    return lang.strip().lower().replace("_", "-").split("-")[0]


def _url_structure(url: str) -> Optional[URLStructure]:
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    path = parsed.path or "/"
    return URLStructure(
        length=len(url),
        has_underscores="_" in path,
        has_uppercase=path != path.lower(),
        query_params=len(parse_qsl(parsed.query, keep_blank_values=True)),
        depth=len([seg for seg in path.split("/") if seg]),
    )


def _canonical(doc: Document) -> CanonicalInfo:
    tags = doc.links_with_rel("canonical")
    if not tags:
        return CanonicalInfo()
    href = doc.attr(tags[0], "href") or None
    is_cross_domain = False
    is_self = False
    if href and doc.source_url:
        canon_host = doc.hostname_of(href)
        is_cross_domain = bool(canon_host and doc.source_host and canon_host != doc.source_host)
        resolved = doc.resolve(href)
        if resolved:
            page, canon = urlparse(doc.source_url), urlparse(resolved)
            is_self = (
                page.netloc.lower() == canon.netloc.lower()
                and page.path.rstrip("/") == canon.path.rstrip("/")
            )
    return CanonicalInfo(
        href=href,
        count=len(tags),
        is_cross_domain=is_cross_domain,
        is_self_referencing=is_self,
    )


def _robots_meta(doc: Document) -> RobotsMetaInfo:
    robots = doc.meta_content(name="robots")
    googlebot = doc.meta_content(name="googlebot")
    robots = robots.lower() if robots else None
    googlebot = googlebot.lower() if googlebot else None
    combined = f"{robots or ''},{googlebot or ''}"
    directives = {d.strip() for d in combined.split(",")}
    return RobotsMetaInfo(
        meta=robots,
        googlebot=googlebot,
        has_noindex="noindex" in combined or "none" in directives,
        has_nofollow="nofollow" in combined or "none" in directives,
    )


def check_technical(doc: Document) -> TechnicalFacts:
    """Title, meta description, canonical, robots, language, charset, viewport and icons."""
    title_el = doc.first("//title[not(ancestor::svg)]")
    title = doc.text_of(title_el) if title_el is not None else ""
    meta_desc = doc.meta_content(name="description") or ""

    language = doc.attr(doc.root, "lang") or None
    charset = None
    charset_el = doc.first("//meta[@charset]")
    if charset_el is not None:
        charset = doc.attr(charset_el, "charset") or None
    if charset is None:
        charset = doc.meta_http_equiv("content-type") or None

    viewport = doc.meta_content(name="viewport")
    compact_viewport = (viewport or "").replace(" ", "").lower()

    icons = [el for el in doc.root.iter("link") if any("icon" in t for t in doc.rel_tokens(el))]

    return TechnicalFacts(
        title=TextMeta(
            value=title,
            length=len(title),
            is_optimal=TITLE_RANGE[0] <= len(title) <= TITLE_RANGE[1],
        ),
        meta_desc=TextMeta(
            value=meta_desc,
            length=len(meta_desc),
            is_optimal=META_DESC_RANGE[0] <= len(meta_desc) <= META_DESC_RANGE[1],
        ),
        canonical=_canonical(doc),
        robots=_robots_meta(doc),
        llms_txt=LlmsTxtInfo(
            mentioned="llms.txt" in doc.html_lower or "llms-txt" in doc.html_lower,
        ),
        language=language,
        language_valid=bool(language) and _primary_subtag(language) in patterns.VALID_LANG_CODES,
        charset=charset,
        viewport=ViewportInfo(
            content=viewport,
            is_mobile_optimized="width=device-width" in compact_viewport,
        ),
        favicon=bool(icons),
        apple_touch_icon=bool(
            doc.links_with_rel("apple-touch-icon") or doc.links_with_rel("apple-touch-icon-precomposed")
        ),
        manifest_json=bool(doc.links_with_rel("manifest")),
        theme_color=doc.meta_content(name="theme-color") or None,
        url_structure=_url_structure(doc.source_url) if doc.source_url else None,
    )


# ─── International ────────────────────────────────────────────────────


def _norm_url(url: Optional[str]) -> str:
    return (url or "").strip().lower().rstrip("/")


def check_international(
    doc: Document, canonical_href: Optional[str], html_lang: Optional[str]
) -> InternationalFacts:
    """Collect hreflang alternates and validate codes, self-reference and x-default."""
    tags = [
        HreflangTag(hreflang=(el.get("hreflang") or "").strip(), href=(el.get("href") or "").strip())
        for el in doc.links_with_rel("alternate")
        if el.get("hreflang") is not None
    ]
    if not tags:
        return InternationalFacts()

    has_x_default = any(t.hreflang.lower() == "x-default" for t in tags)

    has_self: Optional[bool] = None
    if doc.source_url:
        source = _norm_url(doc.source_url)
        has_self = any(_norm_url(t.href) == source for t in tags)

    canonical_in_hreflang = True
    if canonical_href:
        canonical = _norm_url(canonical_href)
        canonical_in_hreflang = any(_norm_url(t.href) == canonical for t in tags)

    lang_matches = True
    if html_lang:
        code = _primary_subtag(html_lang)
        lang_matches = any(_primary_subtag(t.hreflang) == code for t in tags)

    seen = Counter(t.hreflang.lower() for t in tags)
    duplicates = [code for code, n in seen.items() if n > 1]

    invalid_codes: List[str] = []
    issues: List[str] = []
    for i, tag in enumerate(tags, start=1):
        value = tag.hreflang
        if not tag.href:
            issues.append(f"Hreflang #{i}: Missing href")
        elif not tag.href.lower().startswith(("http://", "https://")):
            issues.append(f"Hreflang #{i}: Relative URL ({tag.href})")
        if value.lower() == "x-default":
            continue
        if _primary_subtag(value) not in patterns.VALID_LANG_CODES:
            invalid_codes.append(value)
            issues.append(f"Hreflang #{i}: Invalid language code ({value})")
        parts = value.split("-")
        if len(parts) == 2 and parts[1] != parts[1].upper():
            issues.append(f"Hreflang #{i}: Region should be uppercase ({value})")

    return InternationalFacts(
        hreflangs=tags,
        has_x_default=has_x_default,
        has_self_reference=has_self,
        canonical_in_hreflang=canonical_in_hreflang,
        lang_matches_hreflang=lang_matches,
        duplicate_hreflangs=duplicates,
        invalid_lang_codes=invalid_codes,
        issues=issues,
    )


# ─── Content ──────────────────────────────────────────────────────────

_GEORGIAN_RE = re.compile(r"[Ⴀ-ჿ]")
_CYRILLIC_RE = re.compile(r"[Ѐ-ӿ]")
_LATIN_RE = re.compile(r"[a-zA-ZÀ-ɏ]")
_WORD_RE = re.compile(r"[^\W\d_]+", re.UNICODE)


def _compile_phrase(phrase: str) -> "re.Pattern[str]":
    return re.compile(r"(?<!\w)" + re.escape(phrase) + r"(?!\w)")


_AI_PHRASE_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = tuple(
    (phrase, _compile_phrase(phrase))
    for phrase in dict.fromkeys(patterns.AI_HARD_PHRASES + patterns.AI_SOFT_PHRASES)
)


def score_ai_phrases(text: str) -> Tuple[int, List[str]]:
    """
    Score cliché density: each phrase or regex match adds a fixed weight.

    Returns:
        (score capped at AI_SCORE_CAP, list of '"phrase" (Nx)' notes).
    """
    lowered = text.lower().replace("’", "'")
    score = 0
    found: List[str] = []
    for phrase, pattern in _AI_PHRASE_PATTERNS:
        hits = len(pattern.findall(lowered))
        if hits:
            score += hits * patterns.AI_PHRASE_WEIGHT
            found.append(f'"{phrase}" ({hits}x)')
    for pattern in patterns.AI_REGEX_PATTERNS:
        hits = len(pattern.findall(lowered))
        if hits:
            score += hits * patterns.AI_PHRASE_WEIGHT
            found.append(f'/{pattern.pattern}/ ({hits}x)')
    return min(score, patterns.AI_SCORE_CAP), found


def count_syllables(word: str) -> int:
    word = word.lower()
    georgian_vowels = re.findall(r"[აეიოუ]", word)
    if georgian_vowels:
        return max(1, len(georgian_vowels))
    english = re.sub(r"[^a-z]", "", word)
    if len(english) <= 3:
        return 1
    english = re.sub(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$", "", english)
    english = re.sub(r"^y", "", english)
    groups = re.findall(r"[aeiouy]{1,2}", english)
    return max(1, len(groups)) if groups else 1


def _flesch_grade(score: float) -> str:
    if score >= 90:
        return "Very easy (5th grade)"
    if score >= 80:
        return "Easy (6th grade)"
    if score >= 70:
        return "Fairly easy (7th grade)"
    if score >= 60:
        return "Standard (8th-9th grade)"
    if score >= 50:
        return "Fairly difficult (10th-12th grade)"
    if score >= 30:
        return "Difficult (college)"
    return "Very difficult (university)"


def calculate_readability(text: str) -> ReadabilityFacts:
    """Flesch reading ease over the visible text; needs at least 10 words."""
    clean = normalize_space(text)
    sentences = [s for s in re.split(r"[.!?։।]+", clean) if len(s.strip()) > 10]
    total_sentences = max(len(sentences), 1)
    words = [w for w in clean.split(" ") if sum(ch.isalpha() for ch in w) >= 2]
    total_words = len(words)
    if total_words < 10:
        return ReadabilityFacts()

    syllables = [count_syllables(w) for w in words]
    total_syllables = sum(syllables)
    complex_words = sum(1 for s in syllables if s >= 3)

    avg_sentence = total_words / total_sentences
    avg_syllables = total_syllables / total_words
    score = 206.835 - 1.015 * avg_sentence - 84.6 * avg_syllables
    score = max(0.0, min(100.0, score))

    return ReadabilityFacts(
        flesch_score=round(score, 1),
        flesch_grade=_flesch_grade(score),
        avg_sentence_length=round(avg_sentence, 1),
        avg_syllables_per_word=round(avg_syllables, 2),
        complex_word_percentage=round(complex_words / total_words * 100, 1),
        sufficient=True,
    )


def detect_language(text: str) -> Optional[str]:
    """Rough script/function-word guess: 'ka', 'ru', 'en', 'de', 'es', 'fr' or None."""
    georgian = len(_GEORGIAN_RE.findall(text))
    cyrillic = len(_CYRILLIC_RE.findall(text))
    latin = len(_LATIN_RE.findall(text))
    letters = georgian + cyrillic + latin
    if letters < 3:
        return None
    if georgian / letters > 0.3:
        return "ka"
    if cyrillic / letters > 0.3:
        return "ru"
    words = [w.lower() for w in _WORD_RE.findall(text)]
    best, best_hits = None, 0
    for lang, hints in patterns.LANGUAGE_HINT_WORDS.items():
        hits = sum(1 for w in words if w in hints)
        if hits > best_hits:
            best, best_hits = lang, hits
    return best


def _keyword_density(words: List[str], word_count: int) -> List[KeywordDensity]:
    freq: Counter = Counter()
    for raw in words:
        word = re.sub(r"[^\w]", "", raw.lower())
        if len(word) > 3 and not word.isdigit() and word not in patterns.STOP_WORDS:
            freq[word] += 1
    return [
        KeywordDensity(word=word, count=count, percentage=round(count / word_count * 100, 2))
        for word, count in freq.most_common(10)
    ]


def check_content(doc: Document, title: str) -> ContentFacts:
    """Headings, word statistics, duplicates, readability, AI phrasing and keyword density."""
    headings: Dict[str, List[str]] = {}
    for level in range(1, 7):
        headings[f"h{level}"] = [doc.text_of(h) for h in doc.root.iter(f"h{level}")]

    body_text = doc.visible_text()
    words = body_text.split()
    word_count = len(words)
    sentences = [s for s in re.split(r"[.!?]+", body_text) if s.strip()]
    paragraphs = doc.find_all("p")

    first_h1 = headings["h1"][0] if headings["h1"] else ""
    title_h1_duplicate = bool(title) and title.strip().lower() == first_h1.strip().lower()

    long_paragraphs = [t for t in (doc.text_of(p) for p in paragraphs) if len(t) > 50]
    duplicate_paragraphs = sum(n - 1 for n in Counter(long_paragraphs).values() if n > 1)

    ai_score, ai_phrases = score_ai_phrases(body_text)

    detected = detect_language(body_text)
    title_lang = detect_language(title) if title else None

    return ContentFacts(
        headings=headings,
        word_count=word_count,
        character_count=len(body_text),
        sentence_count=len(sentences),
        paragraph_count=len(paragraphs),
        reading_time=math.ceil(word_count / 200),
        title_h1_duplicate=title_h1_duplicate,
        duplicate_paragraphs=duplicate_paragraphs,
        ai_score=ai_score,
        ai_phrases=ai_phrases,
        readability=calculate_readability(body_text),
        keyword_density=_keyword_density(words, word_count) if word_count else [],
        detected_language=detected,
        title_language=title_lang,
        title_content_lang_mismatch=bool(detected and title_lang and detected != title_lang),
    )


# ─── Links ────────────────────────────────────────────────────────────


def _classify_href(doc: Document, href: str) -> str:
    """Return 'internal', 'external' or 'other' (non-web schemes)."""
    try:
        scheme = urlparse(href).scheme.lower()
    except ValueError:
        return "internal"
    if scheme in ("http", "https") or href.startswith("//"):
        host = doc.hostname_of(href) if doc.source_url else url_hostname(href if scheme else "https:" + href)
        if not host:
            return "internal"
        if doc.source_host and host == doc.source_host:
            return "internal"
        return "external"
    if scheme:
        return "other"
    return "internal"


def opens_unprotected_tab(a: HtmlElement) -> bool:
    """target=_blank without rel=noopener."""
    target = (a.get("target") or "").strip().lower()
    return target == "_blank" and "noopener" not in Document.rel_tokens(a)


def check_links(doc: Document) -> LinkFacts:
    """Classify anchors and flag void hrefs, generic anchor text and unsafe targets."""
    anchors = doc.xpath("//a[@href]")
    counts = Counter()
    broken_list: List[LinkItem] = []
    generic_list: List[LinkItem] = []
    internal_urls: Dict[str, str] = {}
    external_urls: Dict[str, str] = {}

    for a in anchors:
        href = (a.get("href") or "").strip()
        text = doc.text_of(a)
        rel = doc.rel_tokens(a)

        if href.lower() in patterns.EMPTY_HREFS:
            counts["broken"] += 1
            broken_list.append(LinkItem(href=href or "(empty)", text=text[:50]))
        else:
            kind = _classify_href(doc, href)
            counts[kind] += 1
            if not href.startswith("#"):
                resolved = doc.resolve(href)
                if resolved and resolved.lower().startswith(("http://", "https://")):
                    target = internal_urls if kind == "internal" else external_urls
                    if kind != "other":
                        target.setdefault(resolved.split("#")[0], text[:80])

        if text.lower() in patterns.GENERIC_ANCHORS:
            counts["generic"] += 1
            generic_list.append(LinkItem(href=href[:100], text=text.lower()))

        for token in ("nofollow", "sponsored", "ugc"):
            if token in rel:
                counts[token] += 1
        if opens_unprotected_tab(a):
            counts["unsafe"] += 1

    return LinkFacts(
        total=len(anchors),
        internal=counts["internal"],
        external=counts["external"],
        other=counts["other"],
        broken=counts["broken"],
        broken_list=broken_list[:SAMPLE_LIMIT],
        generic_anchors=counts["generic"],
        generic_anchors_list=generic_list[:SAMPLE_LIMIT],
        nofollow=counts["nofollow"],
        sponsored=counts["sponsored"],
        ugc=counts["ugc"],
        unsafe_external_count=counts["unsafe"],
        has_footer_links=bool(doc.xpath("//footer//a")),
        has_nav_links=bool(doc.xpath("//nav//a")),
        internal_urls=[LinkItem(href=h, text=t) for h, t in list(internal_urls.items())[:URL_SAMPLE_LIMIT]],
        external_urls=[LinkItem(href=h, text=t) for h, t in list(external_urls.items())[:URL_SAMPLE_LIMIT]],
    )


# ─── Images ───────────────────────────────────────────────────────────


def _image_context(img: HtmlElement) -> str:
    parent = img.getparent()
    if parent is None or not isinstance(parent.tag, str):
        return ""
    classes = (parent.get("class") or "").split()
    return f"<{parent.tag}{'.' + classes[0] if classes else ''}>"


def check_images(doc: Document) -> ImageFacts:
    """Alt text, dimensions, lazy-loading placement, formats and clickable images."""
    images = doc.find_all("img")
    counts = Counter()
    without_alt: List[ImageRef] = []
    empty_alt: List[ImageRef] = []
    without_dims: List[ImageRef] = []
    urls: Dict[str, None] = {}

    for index, img in enumerate(images):
        src = (img.get("src") or img.get("data-src") or "").strip()
        alt = img.get("alt")
        loading = (img.get("loading") or "").strip().lower()

        if alt is None:
            counts["without_alt"] += 1
            without_alt.append(ImageRef(src=src[:150], context=_image_context(img)))
        elif not alt.strip():
            counts["empty_alt"] += 1
            empty_alt.append(ImageRef(src=src[:150], context=_image_context(img)))

        if img.get("width") is None or img.get("height") is None:
            counts["without_dims"] += 1
            without_dims.append(ImageRef(src=src[:150], alt=alt))

        if loading == "lazy":
            counts["lazy"] += 1
            if index < ABOVE_FOLD_IMAGES:
                counts["lazy_above_fold"] += 1

        parent = img.getparent()
        parent_tag = parent.tag.lower() if parent is not None and isinstance(parent.tag, str) else ""
        if parent_tag in ("a", "button") and not (alt or "").strip():
            counts["clickable_without_alt"] += 1

        if img.get("srcset") is not None:
            counts["srcset"] += 1
        if any(ext in src.lower() for ext in patterns.MODERN_IMAGE_EXTENSIONS):
            counts["modern"] += 1

        if src and not src.lower().startswith("data:"):
            resolved = doc.resolve(src)
            if resolved and resolved.lower().startswith(("http://", "https://")):
                urls.setdefault(resolved, None)

    return ImageFacts(
        total=len(images),
        without_alt=counts["without_alt"],
        with_empty_alt=counts["empty_alt"],
        without_dimensions=counts["without_dims"],
        lazy_loaded=counts["lazy"],
        lazy_above_fold=counts["lazy_above_fold"],
        clickable_without_alt=counts["clickable_without_alt"],
        decorative_count=counts["empty_alt"],
        modern_formats=counts["modern"],
        srcset_count=counts["srcset"],
        picture_count=len(doc.find_all("picture")),
        without_alt_list=without_alt[:SAMPLE_LIMIT],
        empty_alt_list=empty_alt[:SAMPLE_LIMIT],
        without_dimensions_list=without_dims[:SAMPLE_LIMIT],
        image_urls=list(urls)[:URL_SAMPLE_LIMIT],
    )


# ─── Structured data ──────────────────────────────────────────────────


def _schema_items(data: Any, context: Optional[Any] = None) -> List[Tuple[Dict[str, Any], Optional[Any]]]:
    """Flatten a JSON-LD payload (object, array or @graph) into (item, inherited @context) pairs."""
    if isinstance(data, list):
        items: List[Tuple[Dict[str, Any], Optional[Any]]] = []
        for entry in data:
            items.extend(_schema_items(entry, context))
        return items
    if not isinstance(data, dict):
        return []
    graph = data.get("@graph")
    if isinstance(graph, list):
        return _schema_items(graph, data.get("@context") or context)
    return [(data, context)]


def _type_names(item: Dict[str, Any]) -> List[str]:
    raw = item.get("@type")
    if isinstance(raw, list):
        return [str(t) for t in raw if t]
    return [str(raw)] if raw else []


def _author_names(author: Any) -> Tuple[List[str], bool]:
    """Return (names, any_author_without_name)."""
    names: List[str] = []
    nameless = False
    for entry in author if isinstance(author, list) else [author]:
        if isinstance(entry, str) and entry.strip():
            names.append(entry.strip())
        elif isinstance(entry, dict):
            name = entry.get("name")
            if isinstance(name, str) and name.strip():
                names.append(name.strip())
            else:
                nameless = True
    return names, nameless


def _validate_schema_item(item: Dict[str, Any], types: List[str], context: Optional[Any]):
    issues: List[str] = []
    recommendations: List[str] = []
    authors: List[str] = []
    if not (item.get("@context") or context):
        issues.append("Missing @context")

    for type_name in types:
        requirement = patterns.SCHEMA_REQUIREMENTS.get(type_name)
        if requirement is None:
            continue
        missing = [f for f in requirement.required if not item.get(f)]
        if requirement.needs_one_of and not any(item.get(f) for f in requirement.needs_one_of):
            missing.append("/".join(requirement.needs_one_of))
        if missing:
            note = "Missing: " + ", ".join(missing)
            if note not in issues:
                issues.append(note)
        for field in requirement.recommended:
            if not item.get(field) and field not in requirement.needs_one_of and field not in recommendations:
                recommendations.append(field)
        if type_name in patterns.ARTICLE_SCHEMA_TYPES and item.get("author"):
            names, nameless = _author_names(item["author"])
            authors.extend(names)
            if nameless and "Author missing name" not in issues:
                issues.append("Author missing name")

    return issues, recommendations, authors


def check_schema(doc: Document) -> SchemaFacts:
    """Parse every JSON-LD block and validate each item against its type requirements."""
    blocks = [
        s for s in doc.root.iter("script")
        if (s.get("type") or "").strip().lower() == "application/ld+json"
    ]
    details: List[SchemaItem] = []
    types: List[str] = []
    author_names: List[str] = []
    invalid = 0
    missing_context = 0
    has_search = False

    for block_index, script in enumerate(blocks, start=1):
        try:
            data = json.loads(script.text_content() or "")
        except (ValueError, RecursionError):
            invalid += 1
            details.append(SchemaItem(
                index=str(block_index), type="Invalid JSON", valid=False, issues=["Invalid JSON syntax"],
            ))
            continue

        items = _schema_items(data)
        for item_index, (item, context) in enumerate(items, start=1):
            item_types = _type_names(item)
            types.extend(item_types)
            issues, recommendations, authors = _validate_schema_item(item, item_types, context)
            if "Missing @context" in issues:
                missing_context += 1
            if "Person" in item_types and isinstance(item.get("name"), str):
                authors.append(item["name"].strip())
            author_names.extend(a for a in authors if a not in author_names)
            if "WebSite" in item_types and item.get("potentialAction"):
                has_search = True
            details.append(SchemaItem(
                index=str(block_index) if len(items) == 1 else f"{block_index}.{item_index}",
                type=", ".join(item_types) or "Unknown",
                valid=not issues,
                issues=issues,
                recommendations=recommendations,
            ))

    unique_types = list(dict.fromkeys(types))
    type_set = set(unique_types)
    return SchemaFacts(
        count=len(details),
        types=unique_types,
        valid=sum(1 for d in details if d.valid),
        invalid=invalid,
        details=details,
        missing_context=missing_context,
        has_web_site_search=has_search,
        has_breadcrumb="BreadcrumbList" in type_set,
        has_organization=bool(type_set & {"Organization", "LocalBusiness", "Corporation"}),
        has_faq="FAQPage" in type_set,
        has_how_to="HowTo" in type_set,
        has_person="Person" in type_set,
        author_names=author_names,
    )


# ─── Social ───────────────────────────────────────────────────────────

_REQUIRED_OG = ("title", "description", "image", "url")


def check_social(doc: Document) -> SocialFacts:
    """Open Graph and Twitter Card tags."""

    def og(field: str) -> Optional[str]:
        return doc.meta_content(prop=f"og:{field}") or None

    def twitter(field: str) -> Optional[str]:
        key = f"twitter:{field}"
        return doc.meta_content(name=key) or doc.meta_content(prop=key) or None

    og_meta = OpenGraphMeta(
        title=og("title"),
        description=og("description"),
        image=og("image"),
        url=og("url"),
        type=og("type"),
        site_name=og("site_name"),
        locale=og("locale"),
    )
    twitter_meta = TwitterMeta(
        card=twitter("card"),
        site=twitter("site"),
        creator=twitter("creator"),
        title=twitter("title"),
        description=twitter("description"),
        image=twitter("image"),
    )
    missing = [f"og:{f}" for f in _REQUIRED_OG if not getattr(og_meta, f)]
    return SocialFacts(
        og=og_meta,
        twitter=twitter_meta,
        is_complete=not missing,
        has_article_tags=bool(
            doc.meta_content(prop="article:published_time") or doc.meta_content(prop="article:author")
        ),
        missing_og=missing,
    )
