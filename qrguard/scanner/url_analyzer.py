"""URL security analyzer.

Runs every heuristic below over a parsed URL and records one SecurityCheck per
heuristic that applies (the HTTPS check always applies):

  1. HTTPS scheme                    SAFE / DANGER
  2. Shortener domain in hostname    WARNING
  3. Suspicious TLD suffix           WARNING
  4. Typosquat of a popular domain   DANGER
  5. Dotted-quad IPv4 hostname       DANGER
  6. More than 2 subdomains          WARNING

Checks are independent; none short-circuits another. A URL that cannot be
parsed yields a single DANGER check and nothing else.

IMPORT RULES:
  - ``import re2`` ONLY; ``import re`` is PROHIBITED in qrguard/scanner/.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

import re2  # google-re2, NOT stdlib re

from qrguard.constants import MAX_SUBDOMAINS, SUSPICIOUS_TLDS, URL_SHORTENERS
from qrguard.models.security import SecurityAnalysisResult, SecurityCheck, SecurityStatus
from qrguard.scanner.typosquat import detect_typosquatting

logger = logging.getLogger(__name__)

IPV4_PATTERN = re2.compile(r"^(\d{1,3}\.){3}\d{1,3}$")

INVALID_URL_CHECK = SecurityCheck(
    name="Invalid URL format",
    status=SecurityStatus.DANGER,
    message="URL format invalid; the link could not be processed",
)


def _split_url(url: str) -> Optional[tuple[str, str]]:
    """Return ``(scheme, hostname)`` or None when ``url`` is not a usable URL."""
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not hostname:
        return None
    if any(ch.isspace() for ch in hostname):
        return None
    return parts.scheme.lower(), hostname


def _is_ipv4(hostname: str) -> bool:
    # non-ASCII cannot be a dotted quad; also keeps re2 away from lone surrogates
    return hostname.isascii() and IPV4_PATTERN.search(hostname) is not None


def analyze_url(url: str) -> SecurityAnalysisResult:
    """Grade ``url`` with the URL heuristics.

    Never raises. Unparseable input returns a single DANGER check.

    When only the HTTPS check was recorded and it is SAFE, two informational
    SAFE checks are added so a clean URL carries a minimal explanation.
    """
    split = _split_url(url)
    if split is None:
        logger.debug("URL could not be parsed: %r", url[:80])
        return SecurityAnalysisResult.from_checks([INVALID_URL_CHECK])

    scheme, hostname = split
    checks: list[SecurityCheck] = []

    # ── 1. HTTPS ──────────────────────────────────────────────────────────────
    if scheme == "https":
        checks.append(SecurityCheck(
            name="Uses HTTPS",
            status=SecurityStatus.SAFE,
            message="The connection to this URL is encrypted",
        ))
    else:
        checks.append(SecurityCheck(
            name="No HTTPS",
            status=SecurityStatus.DANGER,
            message="URL is not encrypted; data sent to it can be intercepted",
        ))

    # ── 2. Shortener ──────────────────────────────────────────────────────────
    if any(shortener in hostname for shortener in URL_SHORTENERS):
        checks.append(SecurityCheck(
            name="URL shortener detected",
            status=SecurityStatus.WARNING,
            message="Link is shortened; the real destination is hidden",
        ))

    # ── 3. Suspicious TLD ─────────────────────────────────────────────────────
    tld = next((t for t in SUSPICIOUS_TLDS if hostname.endswith(t)), None)
    if tld is not None:
        checks.append(SecurityCheck(
            name="Suspicious TLD",
            status=SecurityStatus.WARNING,
            message=f"Domain uses the {tld} extension, common on scam sites",
        ))

    # ── 4. Typosquatting ──────────────────────────────────────────────────────
    lookalike = detect_typosquatting(hostname)
    if lookalike is not None:
        checks.append(SecurityCheck(
            name="Possible typosquatting",
            status=SecurityStatus.DANGER,
            message=f"Domain looks like the popular site {lookalike}",
        ))

    # ── 5. Raw IP address ─────────────────────────────────────────────────────
    if _is_ipv4(hostname):
        checks.append(SecurityCheck(
            name="Uses IP address",
            status=SecurityStatus.DANGER,
            message="URL points to a raw IP address instead of a domain name",
        ))

    # ── 6. Subdomain depth ────────────────────────────────────────────────────
    subdomains = len(hostname.split(".")) - 2
    if subdomains > MAX_SUBDOMAINS:
        checks.append(SecurityCheck(
            name="Too many subdomains",
            status=SecurityStatus.WARNING,
            message=f"Hostname has {subdomains} subdomains",
        ))

    if len(checks) == 1 and checks[0].status is SecurityStatus.SAFE:
        checks.append(SecurityCheck(
            name="No URL shortener",
            status=SecurityStatus.SAFE,
            message="Link is not shortened",
        ))
        checks.append(SecurityCheck(
            name="Trusted domain",
            status=SecurityStatus.SAFE,
            message="Not detected as typosquatting",
        ))

    return SecurityAnalysisResult.from_checks(checks)
