"""Typosquatting detection by edit distance against well-known domains."""

from __future__ import annotations

from typing import Optional, Sequence

from qrguard.constants import POPULAR_DOMAINS, TYPOSQUAT_MAX_DISTANCE


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance; insert, delete and substitute each cost 1.

    Case-sensitive. Keeps two DP rows, so memory is O(min(len(a), len(b))).
    """
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def detect_typosquatting(
    hostname: str,
    reference_domains: Sequence[str] = POPULAR_DOMAINS,
    max_distance: int = TYPOSQUAT_MAX_DISTANCE,
) -> Optional[str]:
    """Return the first reference domain ``hostname`` is a near-miss of.

    Distance 0 is the legitimate domain itself and is never flagged. Reference
    domains are tried in order; the first with ``0 < d <= max_distance`` wins.

    A domain whose length differs from ``hostname`` by more than
    ``max_distance`` is out of range and skipped before the DP runs, so a
    long hostname costs one length comparison per reference domain.
    """
    for domain in reference_domains:
        if abs(len(hostname) - len(domain)) > max_distance:
            continue
        distance = levenshtein_distance(hostname, domain)
        if 0 < distance <= max_distance:
            return domain
    return None
