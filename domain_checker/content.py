"""
Content module: decides what a successful (2xx, non-redirect) page really is.

Checks run in a fixed order and the first match wins:
- blank or script-only page
- Cloudflare error template / WAF challenge
- parked domain or default server page
"""

import re
from .results import DomainStatus
from .settings import PatternSettings, DEFAULT_PATTERNS

_HEAD_RE = re.compile(r"<head[^>]*>.*?</head>", re.IGNORECASE | re.DOTALL)
_NOSCRIPT_RE = re.compile(r"<noscript[^>]*>.*?</noscript>", re.IGNORECASE | re.DOTALL)
_SCRIPT_RE = re.compile(r"<script[^>]*>(.*?)</script>", re.IGNORECASE | re.DOTALL)
_WS_RE = re.compile(r"\s+")


def blank_page_status(body: str) -> DomainStatus | None:
    """
    EMPTY_PAGE or JS_ONLY when nothing visible is left once <head>,
    <noscript> and whitespace are stripped; None otherwise.
    """
    stripped = _NOSCRIPT_RE.sub("", _HEAD_RE.sub("", body))
    stripped = _WS_RE.sub("", stripped)
    if stripped:
        return None

    script_content = "".join(_SCRIPT_RE.findall(body)).strip()
    if script_content:
        return DomainStatus.JS_ONLY
    return DomainStatus.EMPTY_PAGE


def _contains_any(body: str, phrases) -> bool:
    return any(p in body for p in phrases)


def waf_status(body: str, patterns: PatternSettings = DEFAULT_PATTERNS) -> DomainStatus | None:
    # Cloudflare serves its 52x edge errors with a 200-looking template
    if _contains_any(body, patterns.cloudflare_wrapper):
        if _contains_any(body, patterns.error_page):
            return DomainStatus.SERVER_ERROR
        return DomainStatus.PROTECTED

    if _contains_any(body, patterns.cloudflare_identifier) or _contains_any(body, patterns.waf):
        return DomainStatus.PROTECTED
    return None


def placeholder_status(body: str, patterns: PatternSettings = DEFAULT_PATTERNS) -> DomainStatus | None:
    if _contains_any(body, patterns.placeholder):
        return DomainStatus.PLACEHOLDER
    return None


def classify_content(body: str, patterns: PatternSettings | None = None) -> DomainStatus:
    patterns = patterns or DEFAULT_PATTERNS

    return (
        blank_page_status(body)
        or waf_status(body, patterns)
        or placeholder_status(body, patterns)
        or DomainStatus.VALID
    )
