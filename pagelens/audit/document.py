"""
Parsed-document wrapper around lxml.

``Document`` gives the checkers one place to ask for elements, attributes,
visible text and URL resolution, so none of them deal with lxml's parser
quirks (fragments, encoding declarations, empty input) directly.
"""

import logging
import re
from typing import Iterator, List, Optional
from urllib.parse import urljoin, urlparse

from lxml import etree
from lxml import html as lxml_html
from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

_EMPTY_DOCUMENT = "<html><head></head><body></body></html>"

# Subtrees that never contribute readable text.
_NON_CONTENT_TAGS = frozenset({
    "script", "style", "noscript", "template", "svg", "code", "pre", "iframe",
})

_WS_RE = re.compile(r"\s+")
_JSON_LIKE_RE = re.compile(r"\{[^}]*\}")
_FUNCTION_SIG_RE = re.compile(r"function\s*\([^)]*\)")


def normalize_space(text: Optional[str]) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def url_hostname(url: str) -> Optional[str]:
    """Hostname of ``url``, or None when it has none or cannot be parsed."""
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def _parse_html(raw_html: str) -> HtmlElement:
    """Parse HTML into a full document tree, falling back to an empty skeleton."""
    cleaned = (raw_html or "").replace("\x00", "")
    if cleaned.strip():
        try:
            return lxml_html.document_fromstring(cleaned)
        except ValueError:
            # str input carrying an <?xml encoding=...?> declaration
            try:
                return lxml_html.document_fromstring(cleaned.encode("utf-8"))
            except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
                logger.debug(f"Byte re-parse failed: {e}")
        except (etree.ParserError, etree.XMLSyntaxError) as e:
            logger.debug(f"HTML parse failed: {e}")
    return lxml_html.document_fromstring(_EMPTY_DOCUMENT)


class Document:
    """
    Query helper over one parsed HTML document.

    Args:
        raw_html: The document source, any quality.
        source_url: Absolute URL the document came from, or None.
    """

    def __init__(self, raw_html: str, source_url: Optional[str] = None):
        self.raw_html = raw_html or ""
        self.html_lower = self.raw_html.lower()
        self.source_url = source_url or None
        self.root = _parse_html(self.raw_html)
        self.source_host = url_hostname(self.source_url) if self.source_url else None
        self._visible_text: Optional[str] = None

    # ── Structure ────────────────────────────────────────────────────

    @property
    def head(self) -> Optional[HtmlElement]:
        return self.root.find("head")

    @property
    def body(self) -> Optional[HtmlElement]:
        return self.root.find("body")

    def xpath(self, expr: str) -> list:
        return self.root.xpath(expr)

    def first(self, expr: str) -> Optional[HtmlElement]:
        found = self.root.xpath(expr)
        return found[0] if found else None

    def elements(self) -> Iterator[HtmlElement]:
        """All element nodes in document order (comments and PIs skipped)."""
        return self.root.iter(etree.Element)

    def find_all(self, *tags: str) -> List[HtmlElement]:
        return list(self.root.iter(*tags))

    # ── Attribute helpers ────────────────────────────────────────────

    @staticmethod
    def attr(el: HtmlElement, name: str) -> Optional[str]:
        value = el.get(name)
        return value.strip() if value is not None else None

    @staticmethod
    def rel_tokens(el: HtmlElement) -> List[str]:
        return (el.get("rel") or "").lower().split()

    def links_with_rel(self, rel: str) -> List[HtmlElement]:
        """``<link>`` elements whose rel token list contains ``rel``."""
        rel = rel.lower()
        return [el for el in self.root.iter("link") if rel in self.rel_tokens(el)]

    def meta_content(self, name: Optional[str] = None, prop: Optional[str] = None) -> Optional[str]:
        """Content of the first ``<meta name=...>`` or ``<meta property=...>``, case-insensitive."""
        for el in self.root.iter("meta"):
            if name is not None and (el.get("name") or "").strip().lower() == name:
                return self.attr(el, "content")
            if prop is not None and (el.get("property") or "").strip().lower() == prop:
                return self.attr(el, "content")
        return None

    def meta_http_equiv(self, header: str) -> Optional[str]:
        for el in self.root.iter("meta"):
            if (el.get("http-equiv") or "").strip().lower() == header:
                return self.attr(el, "content") or ""
        return None

    # ── Text ─────────────────────────────────────────────────────────

    @staticmethod
    def text_of(el: HtmlElement) -> str:
        return normalize_space(el.text_content())

    @staticmethod
    def _is_hidden(el: HtmlElement) -> bool:
        return el.get("hidden") is not None or (el.get("aria-hidden") or "").lower() == "true"

    def _collect_text(self, el: HtmlElement, parts: List[str]) -> None:
        if el.text:
            parts.append(el.text)
        for child in el:
            if isinstance(child.tag, str):
                tag = child.tag.lower()
                if tag not in _NON_CONTENT_TAGS and not self._is_hidden(child):
                    self._collect_text(child, parts)
            if child.tail:
                parts.append(child.tail)

    def visible_text(self) -> str:
        """Readable body text with scripts, styles, code and hidden subtrees removed."""
        if self._visible_text is None:
            body = self.body
            if body is None:
                self._visible_text = ""
            else:
                parts: List[str] = []
                self._collect_text(body, parts)
                text = normalize_space(" ".join(parts))
                text = _JSON_LIKE_RE.sub("", text)
                text = _FUNCTION_SIG_RE.sub("", text)
                self._visible_text = normalize_space(text)
        return self._visible_text

    # ── URLs ─────────────────────────────────────────────────────────

    def resolve(self, href: str) -> Optional[str]:
        """Absolute form of ``href`` against the source URL, or None if it cannot be resolved."""
        try:
            if self.source_url:
                return urljoin(self.source_url, href)
            return href if urlparse(href).scheme else None
        except ValueError:
            return None

    def hostname_of(self, href: str) -> Optional[str]:
        resolved = self.resolve(href)
        return url_hostname(resolved) if resolved else None

    def is_third_party(self, url: str) -> bool:
        """True if ``url`` is absolute and lives outside the source host and its subdomains."""
        if url.startswith("//"):
            url = "https:" + url
        if not url.lower().startswith(("http://", "https://")):
            return False
        host = url_hostname(url)
        if not host:
            return False
        if not self.source_host:
            return True
        own = _strip_www(self.source_host)
        host = _strip_www(host)
        return not (host == own or host.endswith("." + own))


def _strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host
