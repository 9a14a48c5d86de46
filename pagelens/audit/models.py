"""
Audit data models.

Every category checker returns one immutable fact record defined here; the
synthesizers turn those records into AuditIssue entries and pass notes, and
the orchestrator folds everything into an AuditResult. Field names are
snake_case in Python and camelCase when serialized with ``by_alias=True``.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """0 for the most severe level."""
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]


class FetchMethod(str, Enum):
    URL = "url"
    HTML = "html"


class RenderMethod(str, Enum):
    SSR = "ssr"
    CSR = "csr"
    STATIC = "static"
    UNKNOWN = "unknown"


class AuditIssue(_Record):
    id: str
    severity: Severity
    category: str
    issue: str
    issue_ka: str
    location: str
    fix: str
    fix_ka: str
    current: Optional[str] = None
    details: Optional[str] = None


# ─── Technical ────────────────────────────────────────────────────────


class TextMeta(_Record):
    value: str = ""
    length: int = 0
    is_optimal: bool = False


class CanonicalInfo(_Record):
    href: Optional[str] = None
    count: int = 0
    is_cross_domain: bool = False
    is_self_referencing: bool = False


class RobotsMetaInfo(_Record):
    meta: Optional[str] = None
    googlebot: Optional[str] = None
    has_noindex: bool = False
    has_nofollow: bool = False
    x_robots_tag: Optional[str] = None


class RobotsTxtInfo(_Record):
    checked: bool = False
    found: bool = False
    content: Optional[str] = None
    blocks_all: bool = False
    has_sitemap: bool = False


class SitemapInfo(_Record):
    checked: bool = False
    found: bool = False
    url: Optional[str] = None
    url_count: Optional[int] = None
    page_in_sitemap: Optional[bool] = None


class LlmsTxtInfo(_Record):
    checked: bool = False
    found: bool = False
    mentioned: bool = False
    content: Optional[str] = None


class ViewportInfo(_Record):
    content: Optional[str] = None
    is_mobile_optimized: bool = False


class URLStructure(_Record):
    length: int = 0
    has_underscores: bool = False
    has_uppercase: bool = False
    query_params: int = 0
    depth: int = 0


class TechnicalFacts(_Record):
    title: TextMeta = Field(default_factory=TextMeta)
    meta_desc: TextMeta = Field(default_factory=TextMeta)
    canonical: CanonicalInfo = Field(default_factory=CanonicalInfo)
    robots: RobotsMetaInfo = Field(default_factory=RobotsMetaInfo)
    robots_txt: RobotsTxtInfo = Field(default_factory=RobotsTxtInfo)
    sitemap: SitemapInfo = Field(default_factory=SitemapInfo)
    llms_txt: LlmsTxtInfo = Field(default_factory=LlmsTxtInfo)
    language: Optional[str] = None
    language_valid: bool = False
    charset: Optional[str] = None
    viewport: ViewportInfo = Field(default_factory=ViewportInfo)
    favicon: bool = False
    apple_touch_icon: bool = False
    manifest_json: bool = False
    theme_color: Optional[str] = None
    url_structure: Optional[URLStructure] = None


# ─── International ────────────────────────────────────────────────────


class HreflangTag(_Record):
    hreflang: str = ""
    href: str = ""


class InternationalFacts(_Record):
    hreflangs: List[HreflangTag] = Field(default_factory=list)
    has_x_default: bool = False
    # None when the page URL is unknown.
    has_self_reference: Optional[bool] = None
    canonical_in_hreflang: bool = True
    lang_matches_hreflang: bool = True
    duplicate_hreflangs: List[str] = Field(default_factory=list)
    invalid_lang_codes: List[str] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)


# ─── Content ──────────────────────────────────────────────────────────


class ReadabilityFacts(_Record):
    flesch_score: float = 0.0
    flesch_grade: str = "Not enough content"
    avg_sentence_length: float = 0.0
    avg_syllables_per_word: float = 0.0
    complex_word_percentage: float = 0.0
    sufficient: bool = False


class KeywordDensity(_Record):
    word: str
    count: int
    percentage: float


def _empty_headings() -> Dict[str, List[str]]:
    return {f"h{level}": [] for level in range(1, 7)}


class ContentFacts(_Record):
    headings: Dict[str, List[str]] = Field(default_factory=_empty_headings)
    word_count: int = 0
    character_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    reading_time: int = 0
    title_h1_duplicate: bool = False
    duplicate_paragraphs: int = 0
    ai_score: int = 0
    ai_phrases: List[str] = Field(default_factory=list)
    readability: ReadabilityFacts = Field(default_factory=ReadabilityFacts)
    keyword_density: List[KeywordDensity] = Field(default_factory=list)
    detected_language: Optional[str] = None
    title_language: Optional[str] = None
    title_content_lang_mismatch: bool = False


# ─── Links ────────────────────────────────────────────────────────────


class LinkItem(_Record):
    href: str
    text: str = ""


class RedirectLinkItem(_Record):
    href: str
    text: str = ""
    status: int
    location: str


class BrokenLinkItem(_Record):
    href: str
    text: str = ""
    status: Optional[int] = None
    error: Optional[str] = None


class LinkFacts(_Record):
    total: int = 0
    internal: int = 0
    external: int = 0
    other: int = 0
    broken: int = 0
    broken_list: List[LinkItem] = Field(default_factory=list)
    generic_anchors: int = 0
    generic_anchors_list: List[LinkItem] = Field(default_factory=list)
    nofollow: int = 0
    sponsored: int = 0
    ugc: int = 0
    unsafe_external_count: int = 0
    has_footer_links: bool = False
    has_nav_links: bool = False
    internal_urls: List[LinkItem] = Field(default_factory=list)
    external_urls: List[LinkItem] = Field(default_factory=list)
    redirect_links: Optional[int] = None
    redirect_list: List[RedirectLinkItem] = Field(default_factory=list)
    broken_external_links: Optional[int] = None
    broken_external_list: List[BrokenLinkItem] = Field(default_factory=list)


# ─── Images ───────────────────────────────────────────────────────────


class ImageRef(_Record):
    src: str
    alt: Optional[str] = None
    context: Optional[str] = None


class LargeImage(_Record):
    src: str
    size: str
    size_bytes: int
    type: Optional[str] = None


class LegacyImage(_Record):
    src: str
    type: Optional[str] = None


class ImageSizeAnalysis(_Record):
    checked: int = 0
    large_count: int = 0
    old_format_count: int = 0
    large_list: List[LargeImage] = Field(default_factory=list)
    old_format_list: List[LegacyImage] = Field(default_factory=list)


class ImageFacts(_Record):
    total: int = 0
    without_alt: int = 0
    with_empty_alt: int = 0
    without_dimensions: int = 0
    lazy_loaded: int = 0
    lazy_above_fold: int = 0
    clickable_without_alt: int = 0
    decorative_count: int = 0
    modern_formats: int = 0
    srcset_count: int = 0
    picture_count: int = 0
    without_alt_list: List[ImageRef] = Field(default_factory=list)
    empty_alt_list: List[ImageRef] = Field(default_factory=list)
    without_dimensions_list: List[ImageRef] = Field(default_factory=list)
    image_urls: List[str] = Field(default_factory=list)
    image_size_analysis: Optional[ImageSizeAnalysis] = None


# ─── Schema ───────────────────────────────────────────────────────────


class SchemaItem(_Record):
    index: str
    type: str
    valid: bool
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class SchemaFacts(_Record):
    count: int = 0
    types: List[str] = Field(default_factory=list)
    valid: int = 0
    invalid: int = 0
    details: List[SchemaItem] = Field(default_factory=list)
    missing_context: int = 0
    has_web_site_search: bool = False
    has_breadcrumb: bool = False
    has_organization: bool = False
    has_faq: bool = False
    has_how_to: bool = False
    has_person: bool = False
    author_names: List[str] = Field(default_factory=list)


# ─── Social ───────────────────────────────────────────────────────────


class OpenGraphMeta(_Record):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    site_name: Optional[str] = None
    locale: Optional[str] = None


class TwitterMeta(_Record):
    card: Optional[str] = None
    site: Optional[str] = None
    creator: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class SocialFacts(_Record):
    og: OpenGraphMeta = Field(default_factory=OpenGraphMeta)
    twitter: TwitterMeta = Field(default_factory=TwitterMeta)
    is_complete: bool = False
    has_article_tags: bool = False
    missing_og: List[str] = Field(default_factory=list)


# ─── Accessibility ────────────────────────────────────────────────────


class LandmarkCounts(_Record):
    main: int = 0
    nav: int = 0
    header: int = 0
    footer: int = 0
    aside: int = 0
    search: int = 0
    form: int = 0
    region: int = 0


class AriaFacts(_Record):
    landmarks: LandmarkCounts = Field(default_factory=LandmarkCounts)
    aria_labels: int = 0
    aria_describedby: int = 0
    aria_labelledby: int = 0
    aria_hidden: int = 0
    aria_live: int = 0
    aria_expanded: int = 0
    roles: List[str] = Field(default_factory=list)
    missing_landmarks: List[str] = Field(default_factory=list)


class AccessibilityFacts(_Record):
    buttons_without_label: int = 0
    inputs_without_label: int = 0
    links_without_text: int = 0
    iframes_without_title: int = 0
    skipped_headings: List[str] = Field(default_factory=list)
    has_skip_link: bool = False
    has_lang_attribute: bool = False
    clickable_images_without_alt: int = 0
    positive_tabindex: int = 0
    has_main_landmark: bool = False
    has_nav_landmark: bool = False
    has_focus_visible: bool = False
    tables_without_headers: int = 0
    autoplay_media: int = 0
    invalid_aria_roles: List[str] = Field(default_factory=list)
    aria: AriaFacts = Field(default_factory=AriaFacts)


# ─── DOM / Performance ────────────────────────────────────────────────


class DOMFacts(_Record):
    total_elements: int = 0
    max_depth: int = 0
    average_depth: float = 0.0
    total_nodes: int = 0
    text_nodes: int = 0
    comment_nodes: int = 0
    inline_styles: int = 0
    inline_scripts: int = 0
    empty_elements: int = 0
    deprecated_elements: List[str] = Field(default_factory=list)
    duplicate_ids: List[str] = Field(default_factory=list)
    element_counts: Dict[str, int] = Field(default_factory=dict)


class PerformanceFacts(_Record):
    total_scripts: int = 0
    total_stylesheets: int = 0
    render_blocking_scripts: int = 0
    render_blocking_styles: int = 0
    async_scripts: int = 0
    defer_scripts: int = 0
    module_scripts: int = 0
    inline_scripts: int = 0
    inline_styles: int = 0
    preloads: int = 0
    preloads_without_as: int = 0
    preconnects: int = 0
    prefetches: int = 0
    dns_prefetches: int = 0
    font_faces: int = 0
    fonts_without_display: int = 0
    web_fonts: int = 0
    critical_css_inlined: bool = False
    has_service_worker: bool = False
    html_size: int = 0
    estimated_weight: str = "0.00 KB"


# ─── Security ─────────────────────────────────────────────────────────


class SSLCertificateInfo(_Record):
    valid: bool = False
    issuer: Optional[str] = None
    subject: Optional[str] = None
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None
    days_until_expiry: Optional[int] = None
    error: Optional[str] = None


class SecurityHeadersInfo(_Record):
    headers: Dict[str, Optional[str]] = Field(default_factory=dict)
    score: int = 0
    issues: List[str] = Field(default_factory=list)


class SecurityFacts(_Record):
    is_https: bool = False
    mixed_content_count: int = 0
    mixed_content_urls: List[str] = Field(default_factory=list)
    protocol_relative_count: int = 0
    unsafe_external_links: int = 0
    has_csp: bool = False
    has_referrer_policy: bool = False
    has_x_frame_options: bool = False
    has_x_content_type_options: bool = False
    has_hsts: bool = False
    form_without_action: int = 0
    password_field_without_autocomplete: int = 0
    insecure_form_actions: int = 0
    ssl: Optional[SSLCertificateInfo] = None
    security_headers: Optional[SecurityHeadersInfo] = None


# ─── Platform / Trust ─────────────────────────────────────────────────


class PlatformFacts(_Record):
    cms: List[str] = Field(default_factory=list)
    frameworks: List[str] = Field(default_factory=list)
    analytics: List[str] = Field(default_factory=list)
    advertising: List[str] = Field(default_factory=list)
    render_method: RenderMethod = RenderMethod.UNKNOWN
    hydration_marker: Optional[str] = None
    is_csr: bool = False
    is_pwa: bool = False
    has_amp: bool = False


class TrustSignalsFacts(_Record):
    has_about_page: bool = False
    has_contact_page: bool = False
    has_privacy_page: bool = False
    has_terms_page: bool = False
    has_cookie_policy: bool = False
    has_author: bool = False
    author_source: Optional[str] = None
    has_publish_date: bool = False
    has_modified_date: bool = False
    has_copyright: bool = False
    has_address: bool = False
    has_phone: bool = False
    has_email: bool = False
    social_links_count: int = 0
    social_platforms: List[str] = Field(default_factory=list)
    has_ssl_badge: bool = False
    has_payment_badges: bool = False
    has_reviews: bool = False
    has_certifications: bool = False
    is_article_page: bool = False


# ─── Mobile / External resources ──────────────────────────────────────


class MobileFacts(_Record):
    has_viewport: bool = False
    viewport_content: Optional[str] = None
    has_width_device_width: bool = False
    has_initial_scale: bool = False
    zoom_disabled: bool = False
    small_text_elements: int = 0
    uses_relative_font_sizes: bool = False
    has_media_queries: bool = False
    media_query_count: int = 0
    has_flexbox: bool = False
    has_grid: bool = False
    horizontal_scroll_risk: bool = False
    fixed_width_elements: int = 0
    has_theme_color: bool = False
    has_apple_mobile_web_app_capable: bool = False
    has_apple_touch_icon: bool = False
    has_manifest: bool = False
    responsive_images_count: int = 0
    total_images: int = 0
    score: int = 100
    issues: List[str] = Field(default_factory=list)


class StylesheetResource(_Record):
    url: str
    is_third_party: bool = False


class ScriptResource(_Record):
    url: str
    is_third_party: bool = False
    is_async: bool = False
    is_defer: bool = False
    is_module: bool = False


class FontResource(_Record):
    url: str
    format: Optional[str] = None


class ExternalResourcesFacts(_Record):
    css_files: List[StylesheetResource] = Field(default_factory=list)
    css_count: int = 0
    js_files: List[ScriptResource] = Field(default_factory=list)
    js_count: int = 0
    font_files: List[FontResource] = Field(default_factory=list)
    font_count: int = 0
    google_fonts: List[str] = Field(default_factory=list)
    third_party_domains: List[str] = Field(default_factory=list)
    third_party_count: int = 0
    suggested_preconnects: List[str] = Field(default_factory=list)


# ─── Aggregates ───────────────────────────────────────────────────────


class CategoryResults(_Record):
    """One typed fact record per audit dimension, in checker execution order."""

    technical: TechnicalFacts = Field(default_factory=TechnicalFacts)
    international: InternationalFacts = Field(default_factory=InternationalFacts)
    content: ContentFacts = Field(default_factory=ContentFacts)
    links: LinkFacts = Field(default_factory=LinkFacts)
    images: ImageFacts = Field(default_factory=ImageFacts)
    structured_data: SchemaFacts = Field(default_factory=SchemaFacts, alias="schema")
    social: SocialFacts = Field(default_factory=SocialFacts)
    accessibility: AccessibilityFacts = Field(default_factory=AccessibilityFacts)
    dom: DOMFacts = Field(default_factory=DOMFacts)
    performance: PerformanceFacts = Field(default_factory=PerformanceFacts)
    security: SecurityFacts = Field(default_factory=SecurityFacts)
    platform: PlatformFacts = Field(default_factory=PlatformFacts)
    trust_signals: TrustSignalsFacts = Field(default_factory=TrustSignalsFacts)
    mobile: MobileFacts = Field(default_factory=MobileFacts)
    external_resources: ExternalResourcesFacts = Field(default_factory=ExternalResourcesFacts)


class AuditSummary(_Record):
    critical_issues: int = 0
    high_issues: int = 0
    medium_issues: int = 0
    low_issues: int = 0
    total_checks: int = 0
    passed_checks: int = 0


class AuditResult(CategoryResults):
    """Complete single-document audit report."""

    url: Optional[str] = None
    timestamp: str
    fetch_method: FetchMethod = FetchMethod.HTML
    score: int = Field(ge=0, le=100)
    summary: AuditSummary = Field(default_factory=AuditSummary)
    issues: List[AuditIssue] = Field(default_factory=list)
    passed: List[str] = Field(default_factory=list)

    @property
    def categories(self) -> CategoryResults:
        return CategoryResults(**{
            name: getattr(self, name) for name in CategoryResults.model_fields
        })

    def issues_by_severity(self) -> List[AuditIssue]:
        """Issues sorted most-severe first, stable within one severity."""
        return sorted(self.issues, key=lambda i: i.severity.rank)

    def issue_ids(self) -> List[str]:
        return [i.id for i in self.issues]

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ─── Network-augmented facts ──────────────────────────────────────────


class FetchResult(_Record):
    html: str
    status: int
    final_url: str
    x_robots_tag: Optional[str] = None


class RedirectCheck(_Record):
    url: str
    is_redirect: bool = False
    status: int = 0
    location: Optional[str] = None


class LinkStatus(_Record):
    url: str
    status: Optional[int] = None
    ok: bool = False
    error: Optional[str] = None


class ImageSizeInfo(_Record):
    src: str
    size_bytes: Optional[int] = None
    content_type: Optional[str] = None
    ok: bool = False


class AuxiliaryFacts(_Record):
    """Results of the optional network probes, merged into category facts."""

    robots_txt: Optional[RobotsTxtInfo] = None
    sitemap: Optional[SitemapInfo] = None
    llms_txt: Optional[LlmsTxtInfo] = None
    x_robots_tag: Optional[str] = None
    ssl: Optional[SSLCertificateInfo] = None
    security_headers: Optional[SecurityHeadersInfo] = None
    redirects: Optional[List[RedirectCheck]] = None
    external_links: Optional[List[LinkStatus]] = None
    image_sizes: Optional[List[ImageSizeInfo]] = None
