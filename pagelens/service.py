"""
Request layer: turns an ``{url | html}`` payload into an audit response.

Transport-agnostic; ``infrastructure/docker/server.py`` wraps it in HTTP.
Status codes:
    200  audit result (camelCase JSON)
    400  invalid payload or URL
    403  target answered with an anti-bot challenge page
    429  client exceeded the rate limit
    500  unexpected failure
    502  target could not be fetched
"""

import ipaddress
import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urljoin, urlparse

import httpx
from pydantic import BaseModel, ValidationError, model_validator

from .audit import AuditOptions, audit_html, audit_url
from .audit.document import Document, url_hostname
from .exceptions import ChallengePageError, FetchError, InvalidInputError, RateLimitExceededError
from .ratelimit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

_LOCAL_HOSTNAMES = frozenset({"localhost", "localhost.localdomain", "ip6-localhost"})


def validate_url(url: str) -> str:
    """
    Accept only absolute http(s) URLs that do not point at the local machine.

    Raises:
        InvalidInputError: With a message suitable for the client.
    """
    try:
        parsed = urlparse((url or "").strip())
        host = (parsed.hostname or "").lower()
    except ValueError:
        raise InvalidInputError("Invalid URL format")
    if parsed.scheme not in ("http", "https"):
        raise InvalidInputError("URL must use http or https")
    if not host:
        raise InvalidInputError("Invalid URL format")
    if host in _LOCAL_HOSTNAMES or host.endswith(".localhost"):
        raise InvalidInputError("Local URLs are not allowed")
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return url.strip()
    if address.is_loopback or address.is_unspecified:
        raise InvalidInputError("Local URLs are not allowed")
    return url.strip()


def _absolute_web_url(candidate: str, base: Optional[str] = None) -> Optional[str]:
    """``candidate`` made absolute against ``base``, or None unless it is an http(s) URL with a host."""
    try:
        resolved = urljoin(base, candidate) if base else candidate
        scheme = urlparse(resolved).scheme.lower()
    except ValueError:
        return None
    if scheme not in ("http", "https") or not url_hostname(resolved):
        return None
    return resolved


def detect_source_url(html: str, url: Optional[str] = None) -> Optional[str]:
    """
    Source URL of pasted HTML: canonical href, then og:url, then the given url.

    Relative candidates are resolved against ``url`` when one is given;
    candidates that do not end up as absolute http(s) URLs are skipped.
    """
    doc = Document(html)
    base = _absolute_web_url(url.strip()) if url else None
    candidates = [Document.attr(el, "href") for el in doc.links_with_rel("canonical")]
    og = doc.first('//meta[@property="og:url"]')
    if og is not None:
        candidates.append(Document.attr(og, "content"))
    for candidate in candidates:
        resolved = _absolute_web_url(candidate, base) if candidate else None
        if resolved:
            return resolved
        if candidate:
            logger.debug(f"Ignoring unusable source URL candidate {candidate!r}")
    return base


class AuditRequest(BaseModel):
    url: Optional[str] = None
    html: Optional[str] = None

    @model_validator(mode="after")
    def _url_or_html(self) -> "AuditRequest":
        if not (self.url or "").strip() and not (self.html or "").strip():
            raise ValueError("URL or HTML is required")
        return self


def _error(status: int, message: str, **extra: Any) -> Tuple[int, Dict[str, Any]]:
    return status, {"error": message, **extra}


class AuditService:
    """
    Rate-limited audit endpoint logic.

    Args:
        options: Audit options for URL audits (default: from environment).
        limiter: Rate limiter shared by all requests.
        transport: httpx transport override for every outbound request.
    """

    def __init__(
        self,
        options: Optional[AuditOptions] = None,
        limiter: Optional[FixedWindowRateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.options = options or AuditOptions.from_env()
        self.limiter = limiter or FixedWindowRateLimiter()
        self.transport = transport

    async def handle(self, payload: Any, client_id: str = "unknown") -> Tuple[int, Dict[str, Any]]:
        try:
            self.limiter.check(client_id)
        except RateLimitExceededError as e:
            return _error(429, "Rate limit exceeded, try again in a minute", retryAfter=round(e.retry_after))

        try:
            request = AuditRequest.model_validate(payload if isinstance(payload, dict) else {})
        except ValidationError:
            return _error(400, "URL or HTML is required")

        try:
            result = await self._run(request)
        except InvalidInputError as e:
            return _error(400, str(e))
        except ChallengePageError as e:
            logger.warning(f"Challenge page for {e.url}: {e.reason}")
            return _error(403, "The site is protected; paste the page HTML instead", blocked=True)
        except FetchError as e:
            logger.warning(f"Fetch failed for {e.url}: {e}")
            return _error(502, f"Could not load URL: {e}")
        except Exception as e:
            logger.error(f"Audit failed: {e}", exc_info=True)
            return _error(500, "Audit failed")

        return 200, result.to_dict()

    async def _run(self, request: AuditRequest):
        if request.html and request.html.strip():
            source_url = detect_source_url(request.html, request.url)
            logger.info(f"Auditing pasted HTML ({len(request.html)} chars, source={source_url})")
            return audit_html(request.html, source_url)

        url = validate_url(request.url)
        logger.info(f"Auditing {url}")
        return await audit_url(url, self.options, self.transport)
