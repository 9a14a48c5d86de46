"""
Audit configuration: probe fan-out limits, per-probe timeouts and the score policy.

Environment variables (all optional, read by ``AuditOptions.from_env``):
    PAGELENS_MAX_LINKS_TO_PROBE   - links checked for redirects/breakage (default: 10)
    PAGELENS_MAX_IMAGES_TO_SIZE   - images sized with HEAD requests (default: 10)
    PAGELENS_MAX_REDIRECTS        - redirects followed when fetching (default: 5)
    PAGELENS_USER_AGENT           - User-Agent sent by every probe
    PAGELENS_FETCH_TIMEOUT        - page fetch timeout in seconds (default: 15)
    PAGELENS_AUXILIARY_TIMEOUT    - deadline for all auxiliary probes (default: 20)
"""

import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Severity

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; PageLensBot/1.0)"


class ProbeTimeouts(BaseModel):
    """Per-probe timeouts in seconds."""

    model_config = ConfigDict(frozen=True)

    fetch: float = 15.0
    robots: float = 5.0
    sitemap: float = 5.0
    llms: float = 8.0
    ssl: float = 10.0
    headers: float = 10.0
    redirect: float = 3.0
    external_link: float = 5.0
    image: float = 5.0
    auxiliary_phase: float = 20.0


class AuditOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_links_to_probe: int = Field(default=10, ge=0)
    max_images_to_size: int = Field(default=10, ge=0)
    max_redirects: int = Field(default=5, ge=0)
    user_agent: str = DEFAULT_USER_AGENT
    timeouts: ProbeTimeouts = Field(default_factory=ProbeTimeouts)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AuditOptions":
        env = os.environ if environ is None else environ
        timeouts = ProbeTimeouts(
            fetch=float(env.get("PAGELENS_FETCH_TIMEOUT", "15")),
            auxiliary_phase=float(env.get("PAGELENS_AUXILIARY_TIMEOUT", "20")),
        )
        return cls(
            max_links_to_probe=int(env.get("PAGELENS_MAX_LINKS_TO_PROBE", "10")),
            max_images_to_size=int(env.get("PAGELENS_MAX_IMAGES_TO_SIZE", "10")),
            max_redirects=int(env.get("PAGELENS_MAX_REDIRECTS", "5")),
            user_agent=env.get("PAGELENS_USER_AGENT", DEFAULT_USER_AGENT),
            timeouts=timeouts,
        )


def _default_deductions() -> Dict[Severity, int]:
    return {Severity.CRITICAL: 15, Severity.HIGH: 8, Severity.MEDIUM: 4, Severity.LOW: 1}


class ScoringPolicy(BaseModel):
    """Score deductions per issue severity and the bonus earned per passed check."""

    model_config = ConfigDict(frozen=True)

    deductions: Dict[Severity, int] = Field(default_factory=_default_deductions)
    bonus_per_pass: float = 0.5
    bonus_cap: float = 10.0
