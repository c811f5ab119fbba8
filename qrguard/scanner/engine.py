"""Scan pipeline: raw QR string -> (DecodedPayload, SecurityAnalysisResult).

``scan_payload()`` is the entry point for the outer surfaces (CLI, UI
adapters). It classifies the raw string and dispatches the parsed payload:

  URL   -> analyze_url() on the normalised URL
  QRIS  -> analyze_qris() on the parsed fields
  other -> a single SAFE "QR code detected" check naming the type

INVARIANTS:
  - Synchronous, no I/O, no shared mutable state. Safe to call concurrently.
  - ALWAYS returns a ScanOutcome. Analyzer and classifier never raise, so no
    failure path exists here to wrap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from qrguard.config import Config
from qrguard.models.payload import DecodedPayload, QrisData, UrlData
from qrguard.models.security import SecurityAnalysisResult, SecurityCheck, SecurityStatus
from qrguard.scanner.classifier import classify
from qrguard.scanner.qris_analyzer import analyze_qris
from qrguard.scanner.url_analyzer import analyze_url
from qrguard.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    """Classification and verdict for one scanned string."""

    payload: DecodedPayload
    analysis: SecurityAnalysisResult

    def to_dict(self) -> dict[str, Any]:
        return {"payload": self.payload.to_dict(), "analysis": self.analysis.to_dict()}


def analyze_payload(payload: DecodedPayload) -> SecurityAnalysisResult:
    """Dispatch ``payload`` to the analyzer for its type."""
    data = payload.data
    if isinstance(data, UrlData) and data.url:
        return analyze_url(data.url)
    if isinstance(data, QrisData):
        return analyze_qris(data)
    return SecurityAnalysisResult.from_checks([
        SecurityCheck(
            name="QR code detected",
            status=SecurityStatus.SAFE,
            message=f"Type: {payload.type.value}",
        )
    ])


def scan_payload(raw: str, config: Optional[Config] = None) -> ScanOutcome:
    """Classify and grade one decoded QR string.

    Args:
        raw:    String produced by the external QR decoder.
        config: Scanner settings (trace flag). Defaults if None.

    Returns:
        ScanOutcome with the decoded payload and its verdict.
    """
    config = config or Config.defaults()
    payload = classify(raw, trace=config.scanner.trace)
    analysis = analyze_payload(payload)

    if config.scanner.trace:
        logger.debug(
            "Scan complete",
            payload_type=payload.type.value,
            overall=analysis.overall.value,
            checks=len(analysis.checks),
        )
    return ScanOutcome(payload=payload, analysis=analysis)
