"""Payload classifier: raw QR string -> DecodedPayload.

Signatures are tested in SIGNATURES order; the first match wins and its parser
builds the type-specific record. PLAIN_TEXT is the fallback, so
classification is total.

URL detection is prefix-only (``http://``, ``https://`` or ``www.``, case-
insensitive). QRIS merchant fields may legally contain ``http`` substrings, so
a substring test here would misclassify payment payloads. Because the URL
signature runs first, ``www.`` strings that also contain ``ID.CO.QRIS`` are
URLs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from qrguard.models.payload import DecodedPayload, PayloadData, PayloadType
from qrguard.scanner import parsers
from qrguard.utils.logger import get_logger

logger = get_logger(__name__)

URL_PREFIXES: tuple[str, ...] = ("http://", "https://", "www.")

QRIS_PREFIX = "00020"
QRIS_MARKER = "ID.CO.QRIS"


# ---------------------------------------------------------------------------
# PayloadSignature
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PayloadSignature:
    """One row of the classification table.

    Fields:
        payload_type: Type assigned on match.
        matches:      Predicate over the trimmed raw string.
        parser:       Builds the PayloadType's record from the trimmed string.
        slug:         Short name used in trace logs.
    """

    payload_type: PayloadType
    matches: Callable[[str], bool]
    parser: Callable[[str], Any]
    slug: str


def _is_url(data: str) -> bool:
    return data[:8].lower().startswith(URL_PREFIXES)


def _is_qris(data: str) -> bool:
    return data.startswith(QRIS_PREFIX) or QRIS_MARKER in data


def _starts_with(*prefixes: str) -> Callable[[str], bool]:
    return lambda data: data.startswith(prefixes)


# Priority order. Do NOT reorder: URL must precede QRIS (see module docstring).
SIGNATURES: tuple[PayloadSignature, ...] = (
    PayloadSignature(PayloadType.URL, _is_url, parsers.parse_url, "url"),
    PayloadSignature(PayloadType.QRIS, _is_qris, parsers.parse_qris, "qris"),
    PayloadSignature(PayloadType.VCARD, _starts_with("BEGIN:VCARD"), parsers.parse_vcard, "vcard"),
    PayloadSignature(PayloadType.WIFI, _starts_with("WIFI:"), parsers.parse_wifi, "wifi"),
    PayloadSignature(PayloadType.EMAIL, _starts_with("mailto:"), parsers.parse_email, "email"),
    PayloadSignature(PayloadType.SMS, _starts_with("sms:", "smsto:"), parsers.parse_sms, "sms"),
    PayloadSignature(PayloadType.GEO, _starts_with("geo:"), parsers.parse_geo, "geo"),
    PayloadSignature(PayloadType.CALENDAR, _starts_with("BEGIN:VEVENT"), parsers.parse_calendar, "calendar"),
)


# ---------------------------------------------------------------------------
# classify()
# ---------------------------------------------------------------------------


def classify(raw: str, trace: bool = False) -> DecodedPayload:
    """Identify the payload type of ``raw`` and parse its fields.

    Leading/trailing whitespace is trimmed first; ``DecodedPayload.raw`` holds
    the trimmed string. Deterministic and side-effect free apart from logging.

    Args:
        raw:   Decoded QR string.
        trace: Log each signature decision at DEBUG level.

    Returns:
        DecodedPayload. Never raises for any ``str`` input.
    """
    data = raw.strip()

    for signature in SIGNATURES:
        matched = signature.matches(data)
        if trace:
            logger.debug("Signature tested", signature=signature.slug, matched=matched)
        if matched:
            return _decoded(signature.payload_type, data, signature.parser(data), trace)

    return _decoded(PayloadType.PLAIN_TEXT, data, parsers.parse_text(data), trace)


def _decoded(
    payload_type: PayloadType,
    data: str,
    record: PayloadData,
    trace: bool,
) -> DecodedPayload:
    payload = DecodedPayload(type=payload_type, raw=data, data=record)
    if trace:
        logger.debug(
            "Payload classified",
            payload_type=payload_type.value,
            fields=sorted(payload.fields),
            length=len(data),
        )
    return payload
