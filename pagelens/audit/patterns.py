"""
Static signature tables used by the category checkers.

Everything in this module is read-only constant data: substring signatures
for platform fingerprinting, phrase lists for content heuristics and the
Schema.org requirement table. Checkers import these tables and never mutate
them.
"""

import re
from typing import Dict, FrozenSet, NamedTuple, Tuple

PATTERNS_VERSION = "2024.2"


class Signature(NamedTuple):
    name: str
    patterns: Tuple[str, ...]


class SchemaRequirement(NamedTuple):
    required: Tuple[str, ...] = ()
    recommended: Tuple[str, ...] = ()
    needs_one_of: Tuple[str, ...] = ()


# ─── Links ────────────────────────────────────────────────────────────

# "#" is not listed: in-page anchors are valid links.
EMPTY_HREFS: FrozenSet[str] = frozenset({
    "",
    "javascript:void(0)",
    "javascript:void(0);",
    "javascript:;",
    "javascript:",
    "about:blank",
})

# Matched against the whole anchor text only (trimmed, lower-cased).
GENERIC_ANCHORS: FrozenSet[str] = frozenset({
    # English
    "click here", "read more", "here", "learn more", "more", "link", "this",
    "click", "go", "see more", "view more", "continue", "details", "info",
    "more info", "find out more", "discover more", "see all", "view all",
    "download", "start", "submit", "next", "previous", "back", "go back",
    # Georgian
    "წაიკითხეთ მეტი", "მეტი", "აქ", "ვრცლად", "დეტალები", "გაგრძელება",
    "იხილეთ", "ნახეთ", "გადასვლა", "სრულად", "დაწვრილებით",
    # Russian
    "подробнее", "читать далее", "здесь", "ещё", "больше",
})

# ─── AI / generic content ─────────────────────────────────────────────

AI_HARD_PHRASES: Tuple[str, ...] = (
    "in conclusion", "to conclude", "to summarize", "in summary",
    "overall, it is important to note", "as an ai language model",
    "this article explores", "this blog post will", "first and foremost",
    "last but not least", "it is important to note", "it is worth noting",
    "it is crucial to", "delve into", "delve deeper", "embark on",
    "embark upon", "navigate the complexities", "holistic approach",
    "comprehensive guide", "ultimate guide", "complete guide",
    "plays a vital role", "plays a crucial role", "plays an important role",
    "needless to say", "it goes without saying", "at the end of the day",
    "in this day and age",
)

AI_SOFT_PHRASES: Tuple[str, ...] = (
    "leverage", "utilize", "facilitate", "implement", "seamless experience",
    "seamlessly", "effortlessly", "cutting-edge", "cutting edge",
    "data-driven", "best practices", "unlock the potential",
    "unlock your potential", "unleash", "unleash the power", "enhance your",
    "next level", "tailored solutions", "rapidly evolving",
    "ever-changing landscape", "streamline", "game-changer", "game changer",
    "robust", "scalable", "empower", "synergy", "paradigm", "ecosystem",
    "landscape", "harness", "revolutionize", "transform", "elevate",
    "optimize", "maximize", "amplify", "supercharge", "turbocharge",
    "skyrocket", "tap into", "dive into", "dive deeper",
    "in today's digital landscape", "in today's world", "when it comes to",
    "in the realm of", "in the world of", "rest assured", "without a doubt",
    "at the core of", "at the heart of", "as a matter of fact",
    "crucial aspect", "key aspect", "important aspect", "moreover",
    "furthermore", "additionally", "consequently",
)

AI_REGEX_PATTERNS: Tuple["re.Pattern[str]", ...] = (
    re.compile(r"take your [^.!?]{1,40} to the next level", re.IGNORECASE),
    re.compile(r"in today['’]s (?:fast[-\s]?paced|digital) world", re.IGNORECASE),
    re.compile(r"whether you are a (?:business|company|brand)", re.IGNORECASE),
    re.compile(r"unlock the (?:full )?potential of", re.IGNORECASE),
    re.compile(r"revolutionize (?:the way|how) you", re.IGNORECASE),
)

AI_PHRASE_WEIGHT = 5
AI_SCORE_CAP = 100

# ─── Platform fingerprints ────────────────────────────────────────────

CMS_SIGNATURES: Tuple[Signature, ...] = (
    Signature("WordPress", ("wp-content", "wp-includes", "wp-json", "/wp-admin")),
    Signature("Shopify", ("cdn.shopify.com", "shopify-section", "myshopify.com")),
    Signature("Wix", ("wixsite.com", "wix-code", "wixstatic", "parastorage.com")),
    Signature("Squarespace", ("squarespace.com", "static.squarespace.com", "sqsp.net")),
    Signature("Webflow", ("webflow", "assets.website-files.com")),
    Signature("Drupal", ("drupal-settings-json", "/sites/default/", "drupal.settings")),
    Signature("Joomla", ("joomla!", "/components/com_", "/media/system/js")),
    Signature("Magento", ("mage/", "mage-init", "requirejs/require")),
    Signature("PrestaShop", ("prestashop", "/modules/ps_")),
    Signature("BigCommerce", ("bigcommerce", "cdn11.bigcommerce")),
    Signature("Ghost", ("ghost/content", "ghost-theme", "ghost/api")),
    Signature("HubSpot", ("hs-scripts.com", "hubspotusercontent", "hscollectedforms")),
    Signature("Contentful", ("contentful", "ctfassets.net")),
    Signature("Sanity", ("sanity.io", "cdn.sanity.io")),
    Signature("Tilda", ("tildacdn.com",)),
    Signature("Blogger", ("blogger.com", "blogspot.com")),
    Signature("Medium", ("cdn-images-1.medium.com", "medium.com/_/")),
    Signature("Weebly", ("weebly.com", "editmysite.com")),
    Signature("WooCommerce", ("woocommerce", "wc-ajax")),
    Signature("OpenCart", ("opencart", "route=common")),
    Signature("TYPO3", ("typo3", "typo3conf")),
    Signature("Craft CMS", ("craftcms", "craft/app", "craft/config")),
    Signature("Strapi", ("strapi",)),
    Signature("Prismic", ("prismic.io",)),
    Signature("DatoCMS", ("datocms",)),
    Signature("Storyblok", ("storyblok.com",)),
)

FRAMEWORK_SIGNATURES: Tuple[Signature, ...] = (
    Signature("Next.js", ("__next_data__", "_next/static", "next-route-announcer")),
    Signature("Nuxt.js", ("__nuxt__", "__nuxt_data__", "_nuxt/", "nuxt-link")),
    Signature("Gatsby", ("___gatsby", "gatsby-image", "gatsby-resp-image")),
    Signature("React", ("data-reactroot", "data-reactid", "__react_devtools")),
    Signature("Vue.js", ("data-v-", "__vue__", "data-server-rendered")),
    Signature("Angular", ("ng-version", "_ngcontent", "ng-reflect", "ng-server-context")),
    Signature("Svelte", ("__svelte", "svelte-")),
    Signature("SvelteKit", ("sveltekit", "__sveltekit")),
    Signature("Astro", ("astro-island", "data-astro")),
    Signature("Remix", ("__remix",)),
    Signature("Ember", ("data-ember",)),
    Signature("Laravel", ("laravel_session",)),
    Signature("Ruby on Rails", ("data-turbolinks", "rails-ujs")),
    Signature("Django", ("csrfmiddlewaretoken",)),
    Signature("Bootstrap", ("cdn.jsdelivr.net/npm/bootstrap",)),
    Signature("Tailwind CSS", ("tailwindcss",)),
    Signature("Alpine.js", ("x-data", "x-init", "x-on:")),
    Signature("HTMX", ("hx-get", "hx-post")),
    Signature("Stimulus", ("data-controller",)),
    Signature("Turbo", ("data-turbo", "turbo-frame")),
    Signature("Lit", ("lit-html", "lit-element")),
    Signature("Preact", ("preact", "__preact")),
    Signature("Solid.js", ("solid-js", "_$hy")),
    Signature("Qwik", ("q:container", "qwikloader")),
)

ANALYTICS_SIGNATURES: Tuple[Signature, ...] = (
    Signature("Google Analytics", ("google-analytics.com", "gtag(", "analytics.js", "/ga.js")),
    Signature("Google Tag Manager", ("googletagmanager.com/gtm.js",)),
    Signature("Facebook Pixel", ("connect.facebook.net", "fbevents.js", "fbq(")),
    Signature("Hotjar", ("static.hotjar.com", "hj(")),
    Signature("Mixpanel", ("mixpanel.com",)),
    Signature("Segment", ("cdn.segment.com", "segment.io")),
    Signature("Amplitude", ("amplitude.com",)),
    Signature("Heap", ("heapanalytics",)),
    Signature("Plausible", ("plausible.io",)),
    Signature("Matomo", ("matomo", "piwik")),
    Signature("Clarity", ("clarity.ms",)),
    Signature("Yandex Metrica", ("mc.yandex.ru", "ym(")),
    Signature("FullStory", ("fullstory",)),
    Signature("PostHog", ("posthog",)),
)

ADVERTISING_SIGNATURES: Tuple[Signature, ...] = (
    Signature("Google Ads", ("googleads", "googlesyndication", "googleadservices", "adsbygoogle")),
    Signature("Facebook Ads", ("facebook.com/tr",)),
    Signature("LinkedIn Ads", ("linkedin.com/px", "snap.licdn.com")),
    Signature("Twitter Ads", ("static.ads-twitter.com", "twq(")),
    Signature("TikTok Ads", ("analytics.tiktok.com", "ttq(")),
    Signature("Amazon Ads", ("amazon-adsystem",)),
    Signature("AdRoll", ("d.adroll.com",)),
    Signature("Criteo", ("criteo",)),
    Signature("Taboola", ("taboola",)),
    Signature("Outbrain", ("outbrain",)),
)

# Domain entries (containing a dot) are matched against the link hostname;
# bare words are matched as substrings of the href.
SOCIAL_PLATFORMS: Tuple[Signature, ...] = (
    Signature("Facebook", ("facebook.com", "fb.com")),
    Signature("Twitter/X", ("twitter.com", "x.com")),
    Signature("LinkedIn", ("linkedin.com",)),
    Signature("Instagram", ("instagram.com",)),
    Signature("YouTube", ("youtube.com", "youtu.be")),
    Signature("TikTok", ("tiktok.com",)),
    Signature("Pinterest", ("pinterest.com",)),
    Signature("Telegram", ("t.me",)),
    Signature("WhatsApp", ("wa.me", "whatsapp.com")),
    Signature("Discord", ("discord.gg", "discord.com")),
    Signature("Reddit", ("reddit.com",)),
    Signature("GitHub", ("github.com",)),
    Signature("Dribbble", ("dribbble.com",)),
    Signature("Behance", ("behance.net",)),
    Signature("Twitch", ("twitch.tv",)),
    Signature("Threads", ("threads.net",)),
    Signature("Mastodon", ("mastodon",)),
    Signature("Bluesky", ("bsky.app",)),
    Signature("Medium", ("medium.com",)),
    Signature("Substack", ("substack.com",)),
)

# ─── Render-method markers ────────────────────────────────────────────

# (framework, marker substring, render method). Checked before the generic
# client-mount heuristic.
HYDRATION_MARKERS: Tuple[Tuple[str, str, str], ...] = (
    ("Next.js", "__next_data__", "ssr"),
    ("Next.js", "self.__next_f", "ssr"),
    ("Nuxt.js", "window.__nuxt__", "ssr"),
    ("Nuxt.js", "__nuxt_data__", "ssr"),
    ("Gatsby", "___gatsby", "static"),
    ("Astro", "astro-island", "static"),
    ("Remix", "__remixcontext", "ssr"),
    ("SvelteKit", "__sveltekit", "ssr"),
    ("Vue.js", 'data-server-rendered="true"', "ssr"),
    ("Angular", "ng-server-context", "ssr"),
)

CLIENT_MOUNT_IDS: Tuple[str, ...] = ("root", "app", "__next", "__nuxt", "svelte")

# ─── HTML quality ─────────────────────────────────────────────────────

DEPRECATED_ELEMENTS: Tuple[str, ...] = (
    "acronym", "applet", "basefont", "bgsound", "big", "blink", "center",
    "font", "frame", "frameset", "marquee", "menuitem", "nobr", "noembed",
    "noframes", "plaintext", "strike", "tt", "xmp",
)

ARIA_ROLES: FrozenSet[str] = frozenset({
    "alert", "alertdialog", "application", "article", "banner", "button", "cell",
    "checkbox", "columnheader", "combobox", "complementary", "contentinfo",
    "definition", "dialog", "directory", "document", "feed", "figure", "form",
    "grid", "gridcell", "group", "heading", "img", "link", "list", "listbox",
    "listitem", "log", "main", "marquee", "math", "menu", "menubar", "menuitem",
    "menuitemcheckbox", "menuitemradio", "navigation", "none", "note", "option",
    "presentation", "progressbar", "radio", "radiogroup", "region", "row",
    "rowgroup", "rowheader", "scrollbar", "search", "searchbox", "separator",
    "slider", "spinbutton", "status", "switch", "tab", "table", "tablist",
    "tabpanel", "term", "textbox", "timer", "toolbar", "tooltip", "tree",
    "treegrid", "treeitem",
})

SKIP_LINK_TARGETS: FrozenSet[str] = frozenset({
    "#main", "#content", "#main-content", "#maincontent", "#skip",
    "#skip-to-content", "#primary",
})

SKIP_LINK_CLASSES: Tuple[str, ...] = ("skip-link", "skip-to", "skiplink", "skip-nav")

# ─── Schema.org ───────────────────────────────────────────────────────

_ARTICLE = SchemaRequirement(
    required=("headline", "datePublished", "author"),
    recommended=("image", "dateModified", "publisher", "description"),
)

SCHEMA_REQUIREMENTS: Dict[str, SchemaRequirement] = {
    "Product": SchemaRequirement(
        required=("name", "image"),
        recommended=("description", "offers", "review", "aggregateRating", "brand", "sku", "gtin"),
        needs_one_of=("offers", "review", "aggregateRating"),
    ),
    "Article": _ARTICLE,
    "BlogPosting": _ARTICLE,
    "NewsArticle": SchemaRequirement(
        required=("headline", "datePublished", "author", "dateModified"),
        recommended=("image", "publisher", "description"),
    ),
    "Organization": SchemaRequirement(
        required=("name",),
        recommended=("url", "logo", "contactPoint", "sameAs", "address"),
    ),
    "LocalBusiness": SchemaRequirement(
        required=("name", "address"),
        recommended=("telephone", "url", "openingHours", "image", "priceRange", "geo"),
    ),
    "FAQPage": SchemaRequirement(required=("mainEntity",)),
    "BreadcrumbList": SchemaRequirement(required=("itemListElement",)),
    "WebSite": SchemaRequirement(recommended=("name", "url", "potentialAction")),
    "Person": SchemaRequirement(
        required=("name",),
        recommended=("url", "image", "jobTitle", "sameAs"),
    ),
    "Event": SchemaRequirement(
        required=("name", "startDate", "location"),
        recommended=("endDate", "description", "image", "offers", "performer", "organizer"),
    ),
    "Recipe": SchemaRequirement(
        required=("name", "image"),
        recommended=("author", "datePublished", "description", "recipeIngredient",
                     "recipeInstructions", "nutrition"),
    ),
    "Review": SchemaRequirement(
        required=("itemReviewed", "author"),
        recommended=("reviewRating", "datePublished", "reviewBody"),
    ),
    "VideoObject": SchemaRequirement(
        required=("name", "description", "thumbnailUrl", "uploadDate"),
        recommended=("duration", "contentUrl", "embedUrl", "interactionStatistic"),
    ),
    "HowTo": SchemaRequirement(
        required=("name", "step"),
        recommended=("description", "image", "totalTime", "supply", "tool"),
    ),
    "Course": SchemaRequirement(
        required=("name", "provider"),
        recommended=("description", "offers", "hasCourseInstance"),
    ),
    "JobPosting": SchemaRequirement(
        required=("title", "description", "datePosted", "hiringOrganization", "jobLocation"),
        recommended=("employmentType", "baseSalary", "validThrough"),
    ),
    "SoftwareApplication": SchemaRequirement(
        required=("name",),
        recommended=("offers", "operatingSystem", "applicationCategory", "aggregateRating"),
    ),
}

ARTICLE_SCHEMA_TYPES: FrozenSet[str] = frozenset({"Article", "BlogPosting", "NewsArticle"})

# ─── Language ─────────────────────────────────────────────────────────

VALID_LANG_CODES: FrozenSet[str] = frozenset("""
aa ab ae af ak am an ar as av ay az ba be bg bh bi bm bn bo br bs ca ce ch co
cr cs cu cv cy da de dv dz ee el en eo es et eu fa ff fi fj fo fr fy ga gd gl
gn gu gv ha he hi ho hr ht hu hy hz ia id ie ig ii ik io is it iu ja jv ka kg
ki kj kk kl km kn ko kr ks ku kv kw ky la lb lg li ln lo lt lu lv mg mh mi mk
ml mn mr ms mt my na nb nd ne ng nl nn no nr nv ny oc oj om or os pa pi pl ps
pt qu rm rn ro ru rw sa sc sd se sg si sk sl sm sn so sq sr ss st su sv sw ta
te tg th ti tk tl tn to tr ts tt tw ty ug uk ur uz ve vi vo wa wo xh yi yo za
zh zu
""".split())

STOP_WORDS: FrozenSet[str] = frozenset({
    # English
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "up", "about", "into", "through", "during", "before",
    "after", "above", "below", "between", "under", "again", "further", "then",
    "once", "here", "there", "when", "where", "why", "how", "all", "each",
    "few", "more", "most", "other", "some", "such", "no", "nor", "not", "only",
    "own", "same", "so", "than", "too", "very", "s", "t", "can", "will", "just",
    "don", "should", "now", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "having", "do", "does", "did", "doing", "would", "could",
    "might", "must", "shall", "it", "its", "this", "that", "these", "those",
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your",
    "yours", "yourself", "yourselves", "he", "him", "his", "himself", "she",
    "her", "hers", "herself", "they", "them", "their", "theirs", "themselves",
    "what", "which", "who", "whom", "if", "as",
    # Georgian
    "და", "რომ", "არის", "იყო", "ეს", "ის", "თუ", "რა", "როგორ", "ან", "მაგრამ",
    # Russian
    "и", "в", "во", "на", "с", "по", "что", "это", "как", "или", "но",
    # German
    "und", "oder", "aber", "mit", "ohne", "der", "die", "das", "ein", "eine",
    # Spanish
    "el", "la", "los", "las", "que", "del", "por", "para", "con", "una",
})

# Function words used to tell Latin-script languages apart.
LANGUAGE_HINT_WORDS: Dict[str, FrozenSet[str]] = {
    "en": frozenset({"the", "and", "is", "are", "with", "for", "this", "that", "you"}),
    "de": frozenset({"und", "der", "die", "das", "ist", "nicht", "mit", "sie", "ein"}),
    "es": frozenset({"el", "los", "las", "que", "por", "para", "con", "una", "es"}),
    "fr": frozenset({"le", "les", "des", "est", "une", "pour", "avec", "dans", "et"}),
}

# ─── Trust signals ────────────────────────────────────────────────────

ABOUT_MARKERS: Tuple[str, ...] = ("about", "შესახებ", "о нас", "о-нас", "uber-uns", "quienes-somos")
CONTACT_MARKERS: Tuple[str, ...] = ("contact", "კონტაქტ", "контакт", "kontakt", "contacto")
PRIVACY_MARKERS: Tuple[str, ...] = ("privacy", "კონფიდენციალ", "конфиденциальн", "datenschutz", "privacidad")
TERMS_MARKERS: Tuple[str, ...] = ("/terms", "/tos", "/terms-of-service", "/terms-and-conditions", "/პირობები")
COOKIE_MARKERS: Tuple[str, ...] = ("/cookie", "/cookies", "/cookie-policy", "/ქუქი")

SSL_BADGE_MARKERS: Tuple[str, ...] = ("ssl secured", "ssl certificate", "secure checkout",
                                      "encrypted", "norton secured", "comodo", "sectigo")
PAYMENT_MARKERS: Tuple[str, ...] = ("visa", "mastercard", "paypal", "stripe", "amex",
                                    "apple pay", "google pay")
REVIEW_MARKERS: Tuple[str, ...] = ("trustpilot", "reviews", "testimonials", "rating", "stars",
                                   "გამოხმაურება")
CERTIFICATION_MARKERS: Tuple[str, ...] = ("certified", "accredited", "verified", "iso 9001",
                                          "iso 27001", "gdpr", "hipaa", "pci dss")

AUTHOR_CLASS_MARKERS: Tuple[str, ...] = ("author", "byline", "writer")

# ─── Resources ────────────────────────────────────────────────────────

MODERN_IMAGE_EXTENSIONS: Tuple[str, ...] = (".webp", ".avif", ".jxl")
LEGACY_IMAGE_TYPES: FrozenSet[str] = frozenset({
    "image/jpeg", "image/jpg", "image/png", "image/gif", "image/bmp", "image/tiff",
})
FONT_EXTENSIONS: Dict[str, str] = {
    ".woff2": "woff2", ".woff": "woff", ".ttf": "truetype", ".otf": "opentype", ".eot": "embedded-opentype",
}

# rel values on <link> that load a subresource (candidates for mixed content).
RESOURCE_LINK_RELS: FrozenSet[str] = frozenset({
    "stylesheet", "icon", "shortcut", "apple-touch-icon", "preload",
    "modulepreload", "prefetch", "manifest", "mask-icon",
})

SECURITY_HEADERS: Tuple[str, ...] = (
    "strict-transport-security",
    "content-security-policy",
    "x-frame-options",
    "x-content-type-options",
    "referrer-policy",
    "permissions-policy",
)
