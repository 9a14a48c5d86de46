"""Exceptions raised outside the audit engine: fetching, input validation, rate limiting."""

from typing import Optional


class PageLensError(Exception):
    """Base class for pagelens errors."""


class FetchError(PageLensError):
    """The target page could not be retrieved."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TooManyRedirectsError(FetchError):
    pass


class UnreachableError(FetchError):
    pass


class ChallengePageError(FetchError):
    """The response is an anti-bot challenge or block page, not the real document."""

    def __init__(self, reason: str, url: Optional[str] = None):
        super().__init__(f"Blocked by anti-bot protection: {reason}", url)
        self.reason = reason


class InvalidInputError(PageLensError):
    pass


class RateLimitExceededError(PageLensError):
    def __init__(self, identity: str, retry_after: float):
        super().__init__(f"Rate limit exceeded for {identity}")
        self.identity = identity
        self.retry_after = retry_after
