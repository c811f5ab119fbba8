"""ReportSubmission record for the external report store.

The store itself (persistence, listing, filtering) lives outside QRGuard.
This module only builds and validates the record a user submits about a
scanned code, so every caller hands the store the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Optional

from qrguard.models.security import SecurityCheck, SecurityStatus

if TYPE_CHECKING:
    from qrguard.scanner.engine import ScanOutcome

# ─── Type Aliases ─────────────────────────────────────────────────────────────

ReportCategory = Literal[
    "fake_qris",
    "tampered_sticker",
    "fake_merchant",
    "phishing_link",
    "other",
]

REPORT_CATEGORIES: frozenset[str] = frozenset({
    "fake_qris",
    "tampered_sticker",
    "fake_merchant",
    "phishing_link",
    "other",
})


class ReportValidationError(ValueError):
    """Raised when a report is missing required data or has an unknown category."""


# ─── ReportSubmission ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReportSubmission:
    """A user report about one scanned QR code.

    Required: qr_type, qr_data, category, details.
    Optional: location, security_status, security_checks (a report may be
    filed without having run the analyzers).
    """

    qr_type: str
    """PayloadType display label, e.g. 'QRIS'."""
    qr_data: str
    """The trimmed raw string that was scanned."""
    category: ReportCategory
    details: str
    """Free-text description from the reporter."""
    location: Optional[str] = None
    security_status: Optional[SecurityStatus] = None
    security_checks: tuple[SecurityCheck, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "qr_type": self.qr_type,
            "qr_data": self.qr_data,
            "category": self.category,
            "details": self.details,
            "location": self.location,
            "security_status": self.security_status.value if self.security_status else None,
            "security_checks": [c.to_dict() for c in self.security_checks] or None,
        }


def build_report(
    outcome: "ScanOutcome",
    category: str,
    details: str,
    location: Optional[str] = None,
) -> ReportSubmission:
    """Build a validated ReportSubmission from a scan outcome.

    Raises:
        ReportValidationError: If the scanned string is empty, ``category`` is
            not in REPORT_CATEGORIES, or ``details`` is blank.
    """
    if not outcome.payload.raw:
        raise ReportValidationError("Cannot report an empty QR payload")
    if category not in REPORT_CATEGORIES:
        raise ReportValidationError(
            f"Unknown report category: {category!r}. "
            f"Supported values: {sorted(REPORT_CATEGORIES)}"
        )
    if not details or not details.strip():
        raise ReportValidationError("Report details must not be empty")

    return ReportSubmission(
        qr_type=outcome.payload.type.value,
        qr_data=outcome.payload.raw,
        category=category,  # type: ignore[arg-type]
        details=details.strip(),
        location=(location or "").strip() or None,
        security_status=outcome.analysis.overall,
        security_checks=outcome.analysis.checks,
    )
