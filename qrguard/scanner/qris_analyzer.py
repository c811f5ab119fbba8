"""QRIS security analyzer.

Heuristics over the fields parsed from a QRIS payload, in order:

  1. Merchant PAN and ID present       SAFE / DANGER
  2. Merchant name keywords            SAFE / WARNING   (only if name present)
  3. NMID shape                        SAFE / WARNING   (only if NMID/ID present)
  4. Amount above 1,000,000            WARNING          (only if amount parses)
  5. Currency is IDR (360)             SAFE / WARNING   (only if currency present)

Only check 1 always runs, so a sparse payload may produce a single check.
Empty strings count as absent.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import re2  # google-re2, NOT stdlib re

from qrguard.constants import (
    IDR_CURRENCY_CODE,
    LARGE_AMOUNT_THRESHOLD,
    NMID_MIN_LENGTH,
    NMID_PREFIX,
    SUSPICIOUS_MERCHANT_KEYWORDS,
)
from qrguard.models.payload import QrisData
from qrguard.models.security import SecurityAnalysisResult, SecurityCheck, SecurityStatus

logger = logging.getLogger(__name__)

# Plain decimal string: ASCII digits with an optional fraction part.
AMOUNT_PATTERN = re2.compile(r"[0-9]+(\.[0-9]+)?")


def _parse_amount(value: str) -> Optional[float]:
    if not value.isascii() or AMOUNT_PATTERN.fullmatch(value) is None:
        return None
    amount = float(value)
    return amount if math.isfinite(amount) else None


def format_idr(amount: float) -> str:
    """Format ``amount`` with Indonesian grouping, e.g. ``2.000.000`` or ``1.500,25``.

    At most three fraction digits, trailing zeros dropped.
    """
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return text.translate(str.maketrans({",": ".", ".": ","}))


def analyze_qris(data: QrisData) -> SecurityAnalysisResult:
    """Grade a parsed QRIS payload. Never raises."""
    checks: list[SecurityCheck] = []

    # ── 1. EMVCo merchant account ────────────────────────────────────────────
    if data.merchant_pan and data.merchant_id:
        checks.append(SecurityCheck(
            name="Valid QRIS format",
            status=SecurityStatus.SAFE,
            message="QRIS follows the valid EMVCo format",
        ))
    else:
        checks.append(SecurityCheck(
            name="Invalid QRIS format",
            status=SecurityStatus.DANGER,
            message="QRIS has an invalid format: merchant account data is missing",
        ))

    # ── 2. Merchant name ─────────────────────────────────────────────────────
    if data.merchant_name:
        name = data.merchant_name.lower()
        if any(keyword in name for keyword in SUSPICIOUS_MERCHANT_KEYWORDS):
            checks.append(SecurityCheck(
                name="Suspicious merchant name",
                status=SecurityStatus.WARNING,
                message="Merchant name contains words often used by scammers",
            ))
        else:
            checks.append(SecurityCheck(
                name="Merchant name verified",
                status=SecurityStatus.SAFE,
                message="Merchant name contains no suspicious words",
            ))

    # ── 3. NMID ──────────────────────────────────────────────────────────────
    nmid = data.nmid or data.merchant_id
    if nmid:
        if nmid.startswith(NMID_PREFIX) and len(nmid) >= NMID_MIN_LENGTH:
            checks.append(SecurityCheck(
                name="NMID verified",
                status=SecurityStatus.SAFE,
                message="National Merchant ID has a valid format",
            ))
        else:
            checks.append(SecurityCheck(
                name="Invalid NMID",
                status=SecurityStatus.WARNING,
                message="National Merchant ID does not match the standard format",
            ))

    # ── 4. Amount ────────────────────────────────────────────────────────────
    if data.transaction_amount:
        amount = _parse_amount(data.transaction_amount)
        if amount is None:
            logger.debug("Unparseable QRIS amount: %r", data.transaction_amount)
        elif amount > LARGE_AMOUNT_THRESHOLD:
            checks.append(SecurityCheck(
                name="Large transaction amount",
                status=SecurityStatus.WARNING,
                message=f"Amount Rp {format_idr(amount)} is large; make sure the merchant is correct",
            ))

    # ── 5. Currency ──────────────────────────────────────────────────────────
    if data.transaction_currency:
        if data.transaction_currency == IDR_CURRENCY_CODE:
            checks.append(SecurityCheck(
                name="IDR currency",
                status=SecurityStatus.SAFE,
                message="Payment uses Indonesian Rupiah",
            ))
        else:
            checks.append(SecurityCheck(
                name="Non-IDR currency",
                status=SecurityStatus.WARNING,
                message=f"Payment uses currency code {data.transaction_currency} instead of Rupiah",
            ))

    return SecurityAnalysisResult.from_checks(checks)
