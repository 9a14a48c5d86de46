"""
Network collaborators.

The page fetcher plus the optional auxiliary probes (robots.txt, sitemap,
llms.txt, TLS certificate, security headers, link and image checks). Each
probe opens its own ``httpx.AsyncClient``, applies its own timeout and
returns a default value on failure; only ``fetch_html`` raises, and only the
``FetchError`` family.

Every function accepts an optional ``transport`` so tests can substitute
``httpx.MockTransport``.
"""

import asyncio
import logging
import re
import socket
import ssl
import time
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlparse

import httpx

from ..challenge_detector import detect_challenge
from ..exceptions import ChallengePageError, TooManyRedirectsError, UnreachableError
from . import patterns
from .config import DEFAULT_USER_AGENT, AuditOptions
from .models import (
    AuxiliaryFacts,
    FetchResult,
    ImageSizeInfo,
    LinkStatus,
    LlmsTxtInfo,
    RedirectCheck,
    RobotsTxtInfo,
    SecurityHeadersInfo,
    SitemapInfo,
    SSLCertificateInfo,
)

logger = logging.getLogger(__name__)

_ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
_LLMS_PATHS = ("/llms.txt", "/llms-full.txt", "/.well-known/llms.txt")
_SITEMAP_PATHS = ("/sitemap.xml", "/sitemap_index.xml")
_LOC_RE = re.compile(r"<loc>\s*(.*?)\s*</loc>", re.IGNORECASE | re.DOTALL)

# Failures every probe absorbs.
_PROBE_ERRORS = (httpx.HTTPError, httpx.InvalidURL, OSError, asyncio.TimeoutError)


def _client(
    timeout: float,
    user_agent: str = DEFAULT_USER_AGENT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    follow_redirects: bool = False,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": user_agent, "Accept": _ACCEPT_HTML, "Accept-Language": "en-US,en;q=0.9"},
        follow_redirects=follow_redirects,
        transport=transport,
    )


def site_root(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


# ─── Page fetch ───────────────────────────────────────────────────────


async def fetch_html(
    url: str,
    timeout: float = 15.0,
    max_redirects: int = 5,
    user_agent: str = DEFAULT_USER_AGENT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FetchResult:
    """
    GET a page, following redirects manually up to ``max_redirects``.

    Raises:
        TooManyRedirectsError: The redirect chain is longer than allowed.
        UnreachableError: Connection, DNS, TLS or timeout failure.
        ChallengePageError: The server answered with an anti-bot page.
    """
    current = url
    redirects = 0
    async with _client(timeout, user_agent, transport) as client:
        while True:
            try:
                response = await client.get(current)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise UnreachableError(f"Could not fetch {current}: {e}", current) from e

            location = response.headers.get("location")
            if response.is_redirect and location:
                redirects += 1
                if redirects > max_redirects:
                    raise TooManyRedirectsError(f"More than {max_redirects} redirects", url)
                current = urljoin(current, location)
                continue
            break

    html = response.text
    reason = detect_challenge(response.status_code, html)
    if reason:
        raise ChallengePageError(reason, current)
    if response.status_code >= 400:
        logger.warning(f"Fetched {current} with HTTP {response.status_code}")

    return FetchResult(
        html=html,
        status=response.status_code,
        final_url=current,
        x_robots_tag=response.headers.get("x-robots-tag"),
    )


# ─── robots.txt / sitemap / llms.txt ──────────────────────────────────


async def fetch_robots_txt(
    base: str,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[str]:
    """robots.txt body, or None when absent or served as an HTML page."""
    try:
        async with _client(timeout, transport=transport, follow_redirects=True) as client:
            response = await client.get(urljoin(base, "/robots.txt"))
    except _PROBE_ERRORS as e:
        logger.debug(f"robots.txt probe failed for {base}: {e}")
        return None
    if response.status_code == 200 and "<html" not in response.text.lower():
        return response.text
    return None


def summarize_robots_txt(content: Optional[str]) -> RobotsTxtInfo:
    """Parse a robots.txt body into the checked/found/blocks-all/sitemap facts."""
    if content is None:
        return RobotsTxtInfo(checked=True)
    blocks_all = False
    has_sitemap = False
    agents: List[str] = []
    in_rules = False
    for raw in content.splitlines():
        line = raw.split("#", 1)[0].strip()
        if ":" not in line:
            continue
        field, value = (part.strip() for part in line.split(":", 1))
        field = field.lower()
        if field == "sitemap":
            has_sitemap = True
        elif field == "user-agent":
            if in_rules:
                agents, in_rules = [], False
            agents.append(value)
        elif field in ("disallow", "allow"):
            in_rules = True
            if field == "disallow" and value == "/" and "*" in agents:
                blocks_all = True
    return RobotsTxtInfo(
        checked=True,
        found=True,
        content=content[:2000],
        blocks_all=blocks_all,
        has_sitemap=has_sitemap,
    )


def _same_page(a: str, b: str) -> bool:
    return a.strip().lower().rstrip("/") == b.strip().lower().rstrip("/")


async def check_sitemap(
    base: str,
    page_url: Optional[str] = None,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SitemapInfo:
    """Look for an XML sitemap at the usual locations and count its entries."""
    async with _client(timeout, transport=transport, follow_redirects=True) as client:
        for path in _SITEMAP_PATHS:
            url = urljoin(base, path)
            try:
                response = await client.get(url)
            except _PROBE_ERRORS as e:
                logger.debug(f"Sitemap probe failed for {url}: {e}")
                continue
            body = response.text
            if response.status_code != 200:
                continue
            lowered = body[:2000].lower()
            if "<?xml" not in lowered and "<urlset" not in lowered and "<sitemapindex" not in lowered:
                continue
            locs = _LOC_RE.findall(body)
            in_sitemap = any(_same_page(loc, page_url) for loc in locs) if page_url else None
            return SitemapInfo(
                checked=True, found=True, url=url, url_count=len(locs), page_in_sitemap=in_sitemap,
            )
    return SitemapInfo(checked=True)


def _looks_like_llms_txt(body: str) -> bool:
    content = body.strip()
    lowered = content.lower()
    if len(content) <= 10 or lowered.startswith(("<!doctype", "<html")):
        return False
    return "<head>" not in lowered and "<body>" not in lowered and "</div>" not in lowered


async def check_llms_txt(
    base: str,
    timeout: float = 8.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LlmsTxtInfo:
    """Try the common llms.txt locations; plain-text 200 responses count."""
    async with _client(timeout, transport=transport, follow_redirects=True) as client:
        for path in _LLMS_PATHS:
            url = urljoin(base, path)
            try:
                response = await client.get(url)
            except _PROBE_ERRORS as e:
                logger.debug(f"llms.txt probe failed for {url}: {e}")
                continue
            if response.status_code == 200 and _looks_like_llms_txt(response.text):
                return LlmsTxtInfo(checked=True, found=True, content=response.text.strip()[:500])
    return LlmsTxtInfo(checked=True)


# ─── TLS certificate / security headers ───────────────────────────────


def _name_field(name: tuple, *keys: str) -> Optional[str]:
    fields = {k: v for rdn in name for (k, v) in rdn}
    for key in keys:
        if key in fields:
            return fields[key]
    return None


def certificate_info(cert: Dict, now: Optional[float] = None) -> SSLCertificateInfo:
    """Summarize a ``getpeercert()`` dict."""
    now = time.time() if now is None else now
    expires = ssl.cert_time_to_seconds(cert["notAfter"])
    days = int((expires - now) // 86400)
    return SSLCertificateInfo(
        valid=days >= 0,
        issuer=_name_field(cert.get("issuer", ()), "organizationName", "commonName"),
        subject=_name_field(cert.get("subject", ()), "commonName"),
        valid_from=cert.get("notBefore"),
        valid_to=cert.get("notAfter"),
        days_until_expiry=days,
    )


def _peer_certificate(host: str, port: int, timeout: float) -> Dict:
    context = ssl.create_default_context()
    with socket.create_connection((host, port), timeout=timeout) as sock:
        with context.wrap_socket(sock, server_hostname=host) as tls:
            return tls.getpeercert()


async def check_ssl_certificate(url: str, timeout: float = 10.0) -> Optional[SSLCertificateInfo]:
    """
    Verify the TLS certificate of an https URL.

    Returns an invalid record when verification fails, and None when the
    host cannot be reached at all (nothing is known about the certificate).
    """
    parsed = urlparse(url)
    if parsed.scheme != "https" or not parsed.hostname:
        return None
    try:
        cert = await asyncio.wait_for(
            asyncio.to_thread(_peer_certificate, parsed.hostname, parsed.port or 443, timeout),
            timeout,
        )
    except ssl.SSLError as e:
        return SSLCertificateInfo(valid=False, error=str(e))
    except (OSError, asyncio.TimeoutError) as e:
        logger.debug(f"TLS probe failed for {parsed.hostname}: {e}")
        return None
    return certificate_info(cert)


async def check_security_headers(
    url: str,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[SecurityHeadersInfo]:
    """Report which of the standard security headers the page response carries."""
    try:
        async with _client(timeout, transport=transport, follow_redirects=True) as client:
            response = await client.get(url)
    except _PROBE_ERRORS as e:
        logger.debug(f"Header probe failed for {url}: {e}")
        return None
    headers = {name: response.headers.get(name) for name in patterns.SECURITY_HEADERS}
    missing = [name for name, value in headers.items() if value is None]
    return SecurityHeadersInfo(
        headers=headers,
        score=round((len(headers) - len(missing)) / len(headers) * 100),
        issues=[f"Missing {name}" for name in missing],
    )


# ─── Link checks ──────────────────────────────────────────────────────


async def check_redirect(
    url: str,
    timeout: float = 3.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RedirectCheck:
    try:
        async with _client(timeout, transport=transport) as client:
            response = await client.head(url)
    except _PROBE_ERRORS as e:
        logger.debug(f"Redirect probe failed for {url}: {e}")
        return RedirectCheck(url=url)
    return RedirectCheck(
        url=url,
        is_redirect=response.is_redirect,
        status=response.status_code,
        location=response.headers.get("location"),
    )


async def check_links_for_redirects(
    urls: List[str],
    limit: int = 10,
    timeout: float = 3.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[RedirectCheck]:
    """Probe the first ``limit`` URLs and return only those that redirect."""
    results = await asyncio.gather(*(check_redirect(u, timeout, transport) for u in urls[:limit]))
    return [r for r in results if r.is_redirect and r.location]


async def check_external_link(
    url: str,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LinkStatus:
    """HEAD the URL (GET when HEAD is refused); 4xx/5xx and network errors count as broken."""
    try:
        async with _client(timeout, transport=transport, follow_redirects=True) as client:
            response = await client.head(url)
            if response.status_code in (405, 501):
                response = await client.get(url)
    except _PROBE_ERRORS as e:
        logger.debug(f"Link probe failed for {url}: {e}")
        return LinkStatus(url=url, error=type(e).__name__)
    return LinkStatus(url=url, status=response.status_code, ok=response.status_code < 400)


async def check_external_links(
    urls: List[str],
    limit: int = 10,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[LinkStatus]:
    return list(await asyncio.gather(*(check_external_link(u, timeout, transport) for u in urls[:limit])))


# ─── Image sizes ──────────────────────────────────────────────────────


async def check_image_size(
    url: str,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ImageSizeInfo:
    try:
        async with _client(timeout, transport=transport, follow_redirects=True) as client:
            response = await client.head(url)
    except _PROBE_ERRORS as e:
        logger.debug(f"Image probe failed for {url}: {e}")
        return ImageSizeInfo(src=url)
    length = response.headers.get("content-length")
    content_type = response.headers.get("content-type")
    return ImageSizeInfo(
        src=url,
        size_bytes=int(length) if length and length.isdigit() else None,
        content_type=content_type.split(";")[0].strip().lower() if content_type else None,
        ok=response.status_code < 400,
    )


async def check_image_sizes(
    urls: List[str],
    limit: int = 10,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[ImageSizeInfo]:
    return list(await asyncio.gather(*(check_image_size(u, timeout, transport) for u in urls[:limit])))


# ─── Auxiliary phase ──────────────────────────────────────────────────


async def gather_auxiliary(
    page_url: str,
    internal_urls: List[str],
    external_urls: List[str],
    image_urls: List[str],
    options: Optional[AuditOptions] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AuxiliaryFacts:
    """
    Run every auxiliary probe concurrently under one overall deadline.

    Probes still running at the deadline are cancelled and their facts stay
    absent; the rest are returned.
    """
    options = options or AuditOptions()
    t = options.timeouts
    base = site_root(page_url)

    probes = {
        "robots_txt": fetch_robots_txt(base, t.robots, transport),
        "sitemap": check_sitemap(base, page_url, t.sitemap, transport),
        "llms_txt": check_llms_txt(base, t.llms, transport),
        "security_headers": check_security_headers(page_url, t.headers, transport),
        "redirects": check_links_for_redirects(internal_urls, options.max_links_to_probe, t.redirect, transport),
        "external_links": check_external_links(external_urls, options.max_links_to_probe, t.external_link, transport),
        "image_sizes": check_image_sizes(image_urls, options.max_images_to_size, t.image, transport),
    }
    # The TLS probe opens its own socket, so it cannot run over a custom transport.
    if transport is None:
        probes["ssl"] = check_ssl_certificate(page_url, t.ssl)

    tasks = {asyncio.ensure_future(coro): name for name, coro in probes.items()}
    done, pending = await asyncio.wait(tasks, timeout=t.auxiliary_phase)
    for task in pending:
        logger.warning(f"Auxiliary probe '{tasks[task]}' missed the {t.auxiliary_phase}s deadline")
        task.cancel()
    if pending:
        await asyncio.wait(pending)

    facts: Dict[str, object] = {}
    for task in done:
        name = tasks[task]
        if task.exception() is not None:
            logger.warning(f"Auxiliary probe '{name}' failed", exc_info=task.exception())
            continue
        facts[name] = task.result()

    if "robots_txt" in facts:
        facts["robots_txt"] = summarize_robots_txt(facts["robots_txt"])
    return AuxiliaryFacts(**facts)
