"""Decoded QR payload models.

Each ``PayloadType`` has its own frozen record carrying only the fields that
type can produce. Every field is optional: parsers leave a field as ``None``
when the corresponding prefix or delimiter is missing from the raw string.

``DecodedPayload.fields`` flattens the record back into an ordered
``name -> value`` mapping of the present fields for rendering and reporting.
"""

from __future__ import annotations

from dataclasses import dataclass, fields as dataclass_fields
from enum import Enum
from typing import Optional, Union


class PayloadType(str, Enum):
    """Semantic type of a decoded QR string. Values are display labels."""

    URL = "URL"
    QRIS = "QRIS"
    VCARD = "vCard"
    WIFI = "WiFi"
    EMAIL = "Email"
    SMS = "SMS"
    GEO = "Geo Location"
    CALENDAR = "Calendar Event"
    PLAIN_TEXT = "Plain Text"


@dataclass(frozen=True)
class UrlData:
    # "www." inputs are normalised to "http://www." here; raw keeps the original.
    url: Optional[str] = None


@dataclass(frozen=True)
class QrisData:
    """Fields extracted from a QRIS (EMVCo merchant-presented) TLV payload.

    ``transaction_amount`` stays a decimal string; the analyzer parses it.
    ``nmid`` is derived from ``merchant_id`` and is ``""`` when no ID exists.
    """

    merchant_pan: Optional[str] = None
    merchant_id: Optional[str] = None
    merchant_category_code: Optional[str] = None
    transaction_currency: Optional[str] = None
    transaction_amount: Optional[str] = None
    merchant_name: Optional[str] = None
    merchant_city: Optional[str] = None
    nmid: Optional[str] = None


@dataclass(frozen=True)
class VCardData:
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class WifiData:
    ssid: Optional[str] = None
    encryption: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class EmailData:
    email: Optional[str] = None


@dataclass(frozen=True)
class SmsData:
    phone: Optional[str] = None
    body: Optional[str] = None


@dataclass(frozen=True)
class GeoData:
    latitude: Optional[str] = None
    longitude: Optional[str] = None


@dataclass(frozen=True)
class CalendarData:
    title: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None


@dataclass(frozen=True)
class TextData:
    text: Optional[str] = None


PayloadData = Union[
    UrlData,
    QrisData,
    VCardData,
    WifiData,
    EmailData,
    SmsData,
    GeoData,
    CalendarData,
    TextData,
]

#: Record type each PayloadType carries. DecodedPayload enforces the pairing.
DATA_TYPES: dict[PayloadType, type] = {
    PayloadType.URL: UrlData,
    PayloadType.QRIS: QrisData,
    PayloadType.VCARD: VCardData,
    PayloadType.WIFI: WifiData,
    PayloadType.EMAIL: EmailData,
    PayloadType.SMS: SmsData,
    PayloadType.GEO: GeoData,
    PayloadType.CALENDAR: CalendarData,
    PayloadType.PLAIN_TEXT: TextData,
}


@dataclass(frozen=True)
class DecodedPayload:
    """Result of classifying one raw QR string.

    Fields:
        type: The matched PayloadType.
        raw:  The trimmed input, never re-encoded or normalised.
        data: The type-specific record (see DATA_TYPES).

    Raises:
        TypeError: On construction, if ``data`` is not the record for ``type``.
    """

    type: PayloadType
    raw: str
    data: PayloadData

    def __post_init__(self) -> None:
        expected = DATA_TYPES[self.type]
        if not isinstance(self.data, expected):
            raise TypeError(
                f"{self.type.name} payload requires {expected.__name__}, "
                f"got {type(self.data).__name__}"
            )

    @property
    def fields(self) -> dict[str, str]:
        """Present fields in declaration order; ``None`` values are omitted."""
        result: dict[str, str] = {}
        for f in dataclass_fields(self.data):
            value = getattr(self.data, f.name)
            if value is not None:
                result[f.name] = value
        return result

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type.value, "raw": self.raw, "fields": self.fields}
