"""Type-specific payload parsers.

Each parser takes the trimmed raw string the classifier already matched and
returns the record for that PayloadType. Parsers never raise: a missing
prefix or delimiter leaves the corresponding field as ``None``.
"""

from __future__ import annotations

from typing import Optional

from qrguard.models.payload import (
    CalendarData,
    EmailData,
    GeoData,
    QrisData,
    SmsData,
    TextData,
    UrlData,
    VCardData,
    WifiData,
)
from qrguard.scanner.tlv import scan_tlv

# ─── QRIS tag map ─────────────────────────────────────────────────────────────

QRIS_MERCHANT_ACCOUNT_TAG = "26"
QRIS_MERCHANT_PAN_SUBTAG = "00"
QRIS_MERCHANT_ID_SUBTAG = "01"

#: Top-level tag -> QrisData field name.
QRIS_TAG_FIELDS: dict[str, str] = {
    "51": "merchant_category_code",
    "52": "transaction_currency",
    "54": "transaction_amount",
    "59": "merchant_name",
    "60": "merchant_city",
}


def _strip_prefix(data: str, *prefixes: str) -> Optional[str]:
    for prefix in prefixes:
        if data.startswith(prefix):
            return data[len(prefix):]
    return None


def _match_lines(data: str, prefixes: dict[str, str]) -> dict[str, str]:
    """Map lines starting with a known prefix to ``field -> rest of line``.

    Lines are split on LF only and a trailing CR is dropped. Later
    lines overwrite earlier ones for the same field.
    """
    result: dict[str, str] = {}
    for line in data.split("\n"):
        line = line.removesuffix("\r")
        for prefix, field_name in prefixes.items():
            if line.startswith(prefix):
                result[field_name] = line[len(prefix):]
    return result


def parse_url(data: str) -> UrlData:
    if data[:4].lower() == "www.":
        return UrlData(url="http://" + data)
    return UrlData(url=data)


def parse_qris(data: str) -> QrisData:
    """Parse a QRIS payload with the TLV scanner.

    Tag ``26`` is a nested template: sub-tag ``00`` is the merchant PAN and
    ``01`` the merchant ID.
    """
    values: dict[str, Optional[str]] = {}
    for tag, value in scan_tlv(data).items():
        if tag == QRIS_MERCHANT_ACCOUNT_TAG:
            merchant = scan_tlv(value)
            values["merchant_pan"] = merchant.get(QRIS_MERCHANT_PAN_SUBTAG)
            values["merchant_id"] = merchant.get(QRIS_MERCHANT_ID_SUBTAG)
        elif tag in QRIS_TAG_FIELDS:
            values[QRIS_TAG_FIELDS[tag]] = value

    values["nmid"] = values.get("merchant_id") or ""
    return QrisData(**values)


def parse_vcard(data: str) -> VCardData:
    return VCardData(**_match_lines(data, {"FN:": "name", "TEL:": "phone", "EMAIL:": "email"}))


def parse_wifi(data: str) -> WifiData:
    """Parse ``WIFI:S:<ssid>;T:<type>;P:<password>;;``.

    Segments without a ``:`` are ignored. The value is everything after the
    first ``:`` in its segment.
    """
    body = _strip_prefix(data, "WIFI:")
    if body is None:
        return WifiData()

    keys = {"S": "ssid", "T": "encryption", "P": "password"}
    values: dict[str, str] = {}
    for segment in body.split(";"):
        key, sep, value = segment.partition(":")
        if sep and key in keys:
            values[keys[key]] = value
    return WifiData(**values)


def parse_email(data: str) -> EmailData:
    return EmailData(email=_strip_prefix(data, "mailto:"))


def parse_sms(data: str) -> SmsData:
    """Parse ``sms:<phone>[:<body>]`` or ``smsto:<phone>[:<body>]``."""
    rest = _strip_prefix(data, "smsto:", "sms:")
    if rest is None:
        return SmsData()
    phone, _, body = rest.partition(":")
    return SmsData(phone=phone, body=body)


def parse_geo(data: str) -> GeoData:
    rest = _strip_prefix(data, "geo:")
    if rest is None:
        return GeoData()
    coords = rest.split(",")
    return GeoData(
        latitude=coords[0],
        longitude=coords[1] if len(coords) > 1 else None,
    )


def parse_calendar(data: str) -> CalendarData:
    return CalendarData(
        **_match_lines(data, {"SUMMARY:": "title", "DTSTART:": "start", "DTEND:": "end"})
    )


def parse_text(data: str) -> TextData:
    return TextData(text=data)
