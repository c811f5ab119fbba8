"""Unit tests for qrguard/scanner/classifier.py.

Verifies:
  - Each signature maps to its PayloadType
  - Priority order: URL before QRIS before the prefix types
  - Trimming, raw preservation, PLAIN_TEXT fallback
  - Totality and determinism over random input
  - Long input kept whole; trace logging
"""

from __future__ import annotations

import random
import string

import pytest
from structlog.testing import capture_logs

from qrguard.models.payload import PayloadType, QrisData, TextData, UrlData
from qrguard.scanner.classifier import SIGNATURES, classify
from qrguard.scanner.tlv import encode_tlv
from qrguard.utils.logger import configure_logging

QRIS_PAYLOAD = encode_tlv([
    ("00", "01"),
    ("26", encode_tlv([("00", "ID.CO.QRIS.WWW"), ("01", "ID1020000000001")])),
    ("59", "Toko http://promo"),
])


class TestSignatureTable:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("https://example.com", PayloadType.URL),
            ("http://example.com", PayloadType.URL),
            ("HTTPS://EXAMPLE.COM", PayloadType.URL),
            ("www.example.com", PayloadType.URL),
            ("Www.example.com", PayloadType.URL),
            (QRIS_PAYLOAD, PayloadType.QRIS),
            ("xx ID.CO.QRIS yy", PayloadType.QRIS),
            ("BEGIN:VCARD\nFN:Ani\nEND:VCARD", PayloadType.VCARD),
            ("WIFI:S:Net;T:WPA;P:pw;;", PayloadType.WIFI),
            ("mailto:a@example.com", PayloadType.EMAIL),
            ("sms:+62812", PayloadType.SMS),
            ("smsto:+62812:hi", PayloadType.SMS),
            ("geo:1,2", PayloadType.GEO),
            ("BEGIN:VEVENT\nSUMMARY:x", PayloadType.CALENDAR),
            ("just some words", PayloadType.PLAIN_TEXT),
            ("", PayloadType.PLAIN_TEXT),
        ],
    )
    def test_type(self, raw: str, expected: PayloadType) -> None:
        assert classify(raw).type is expected

    @pytest.mark.parametrize(
        "raw",
        ["wifi:S:Net;;", "MAILTO:a@example.com", "SMS:123", "GEO:1,2", "begin:vcard"],
    )
    def test_non_url_prefixes_are_case_sensitive(self, raw: str) -> None:
        assert classify(raw).type is PayloadType.PLAIN_TEXT

    def test_url_is_first_signature(self) -> None:
        assert SIGNATURES[0].payload_type is PayloadType.URL
        assert SIGNATURES[1].payload_type is PayloadType.QRIS


class TestPriority:
    def test_www_with_qris_marker_is_url(self) -> None:
        assert classify("www.example.com/ID.CO.QRIS").type is PayloadType.URL

    def test_www_with_qris_prefix_inside_is_url(self) -> None:
        assert classify("www.example.com/00020101").type is PayloadType.URL

    def test_http_substring_inside_qris_stays_qris(self) -> None:
        payload = classify(QRIS_PAYLOAD)
        assert payload.type is PayloadType.QRIS
        assert isinstance(payload.data, QrisData)
        assert payload.data.merchant_name == "Toko http://promo"

    def test_url_not_at_start_is_text(self) -> None:
        assert classify("visit https://example.com").type is PayloadType.PLAIN_TEXT


class TestRawAndFields:
    def test_whitespace_trimmed(self) -> None:
        payload = classify("  \n https://example.com \t")
        assert payload.raw == "https://example.com"

    def test_www_normalised_only_in_fields(self) -> None:
        payload = classify("www.example.com")
        assert payload.raw == "www.example.com"
        assert payload.data == UrlData(url="http://www.example.com")
        assert payload.fields == {"url": "http://www.example.com"}

    def test_plain_text_field(self) -> None:
        payload = classify(" hello ")
        assert payload.data == TextData(text="hello")


class TestTotality:
    @pytest.mark.parametrize("seed", range(30))
    def test_random_input_classified_deterministically(self, seed: int) -> None:
        rng = random.Random(seed)
        prefix = rng.choice(["", "http://", "www.", "00020", "WIFI:", "sms:", "geo:", "mailto:"])
        body = "".join(rng.choice(string.printable) for _ in range(rng.randint(0, 80)))
        raw = prefix + body

        first = classify(raw)
        second = classify(raw)

        assert first.type in PayloadType
        assert first == second
        assert first.raw == raw.strip()


class TestLongInput:
    def test_long_url_raw_preserved(self) -> None:
        raw = "https://example.com/" + "A" * 4276
        payload = classify(raw)
        assert payload.type is PayloadType.URL
        assert payload.raw == raw
        assert payload.data == UrlData(url=raw)

    def test_fields_past_4096_chars_parsed(self) -> None:
        filler = [("62", "x" * 95) for _ in range(45)]
        raw = encode_tlv([
            ("00", "01"),
            *filler,
            ("26", encode_tlv([("00", "ID.CO.QRIS.WWW"), ("01", "ID1020000000001")])),
        ])
        assert len(raw) > 4296

        payload = classify(raw)

        assert payload.raw == raw
        assert isinstance(payload.data, QrisData)
        assert payload.data.merchant_id == "ID1020000000001"


class TestTrace:
    def test_trace_logs_signature_decisions(self) -> None:
        configure_logging("DEBUG", json_output=False)
        with capture_logs() as logs:
            classify("geo:1,2", trace=True)
        tested = [e["signature"] for e in logs if e["event"] == "Signature tested"]
        assert tested == ["url", "qris", "vcard", "wifi", "email", "sms", "geo"]
        assert any(e["event"] == "Payload classified" for e in logs)

    def test_no_trace_by_default(self) -> None:
        configure_logging("DEBUG", json_output=False)
        with capture_logs() as logs:
            classify("geo:1,2")
        assert logs == []
