"""
Challenge-page detection for fetched documents.

A protected site may answer the audit fetch with an anti-bot interstitial
instead of the page. Auditing that would report on the challenge, so the
fetcher refuses such responses and the caller is asked to paste the HTML.

Vendor signatures are matched in two strengths:

* ``DEFINITIVE`` markers are structural (challenge scripts, vendor CDNs,
  incident ids) and match on any response.
* ``PHRASE`` markers are plain wording that also shows up in ordinary pages,
  so they count only on small responses that are either short or errors.
"""

import re
from typing import List, NamedTuple, Optional, Pattern


class ChallengeSignature(NamedTuple):
    vendor: str
    label: str
    pattern: Pattern[str]


def _sig(vendor: str, label: str, regex: str) -> ChallengeSignature:
    return ChallengeSignature(vendor, label, re.compile(regex, re.IGNORECASE | re.DOTALL))


DEFINITIVE: List[ChallengeSignature] = [
    _sig("Akamai", "block reference", r"Reference\s*#\s*\d+\.[0-9a-f]+\.\d+\.[0-9a-f]+"),
    _sig("Akamai", "interruption page", r"Pardon\s+Our\s+Interruption"),
    _sig("Cloudflare", "challenge form", r"challenge-form.*?__cf_chl_f_tk="),
    _sig("Cloudflare", "firewall error", r'<span\s+class="cf-error-code">\d{4}</span>'),
    _sig("Cloudflare", "JS challenge", r"/cdn-cgi/challenge-platform/\S+orchestrate"),
    _sig("PerimeterX", "block", r"window\._pxAppId\s*="),
    _sig("PerimeterX", "captcha", r"captcha\.px-cdn\.net"),
    _sig("DataDome", "captcha", r"captcha-delivery\.com"),
    _sig("Imperva", "block", r"_Incapsula_Resource|Incapsula\s+incident\s+ID"),
    _sig("Sucuri", "firewall", r"Sucuri\s+WebSite\s+Firewall"),
    _sig("Kasada", "challenge", r"KPSDK\.scriptStart\s*=\s*KPSDK\.now\(\)"),
]

PHRASE: List[ChallengeSignature] = [
    _sig("Generic", "Access Denied", r"Access\s+Denied"),
    _sig("Cloudflare", "browser check", r"Checking\s+your\s+browser"),
    _sig("Cloudflare", "interstitial", r"<title>\s*Just\s+a\s+moment"),
    _sig("PerimeterX", "block page", r"Access\s+to\s+This\s+Page\s+Has\s+Been\s+Blocked"),
    _sig("Generic", "blocked by security", r"blocked\s+by\s+security"),
    _sig("Imperva", "request unsuccessful", r"Request\s+unsuccessful"),
    _sig("Generic", "captcha wall", r'class=["\'](?:g-recaptcha|h-captcha)["\']'),
]

SCAN_CHARS = 15000
PHRASE_MAX_CHARS = 10000
SHORT_PAGE_CHARS = 5000
# Any page this small that mentions Cloudflare is its stub.
CLOUDFLARE_STUB_CHARS = 1000


def _first_match(signatures: List[ChallengeSignature], text: str) -> Optional[ChallengeSignature]:
    for signature in signatures:
        if signature.pattern.search(text):
            return signature
    return None


def detect_challenge(status_code: Optional[int], html: Optional[str]) -> Optional[str]:
    """
    Decide whether a response is a challenge or block page.

    Args:
        status_code: HTTP status of the final response, if known.
        html: Response body.

    Returns:
        A short human-readable reason, or None for a normal page.
    """
    body = html or ""
    size = len(body)

    if status_code == 429:
        return "HTTP 429 Too Many Requests"

    head = body[:SCAN_CHARS]
    hit = _first_match(DEFINITIVE, head)
    if hit:
        return f"{hit.vendor} {hit.label}"

    if size < CLOUDFLARE_STUB_CHARS and "cloudflare" in body.lower():
        return f"Cloudflare stub page ({size} bytes)"

    suspicious = status_code is None or status_code >= 400 or size < SHORT_PAGE_CHARS
    if size < PHRASE_MAX_CHARS and suspicious:
        hit = _first_match(PHRASE, head)
        if hit:
            return f"{hit.vendor} {hit.label} (HTTP {status_code}, {size} bytes)"

    return None
