"""Unit tests for qrguard/scanner/engine.py.

Verifies dispatch to the URL / QRIS analyzers, the pass-through verdict for
other payload types, and that concurrent scans agree with sequential ones.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from qrguard import scan_payload
from qrguard.config import Config, ScannerConfig
from qrguard.models.payload import PayloadType
from qrguard.models.security import SecurityStatus
from qrguard.scanner.engine import ScanOutcome
from qrguard.scanner.tlv import encode_tlv

QRIS_PAYLOAD = encode_tlv([
    ("00", "01"),
    ("01", "11"),
    ("26", encode_tlv([("00", "ID.CO.QRIS.WWW"), ("01", "ID1020000000001")])),
    ("51", "5812"),
    ("52", "360"),
    ("54", "150000"),
    ("58", "ID"),
    ("59", "Warung Makan Sederhana"),
    ("60", "JAKARTA"),
])

SAMPLES = [
    "https://tokopedia.com",
    "http://bit.ly/xyz",
    "www.example.com",
    QRIS_PAYLOAD,
    "WIFI:S:Net;T:WPA;P:pw;;",
    "hello world",
    "geo:-6.2,106.8",
]


class TestDispatch:
    def test_url(self) -> None:
        outcome = scan_payload("https://tokopedia.com")
        assert outcome.payload.type is PayloadType.URL
        assert outcome.analysis.overall is SecurityStatus.SAFE
        assert len(outcome.analysis.checks) == 3

    def test_www_url_analyzed_as_http(self) -> None:
        outcome = scan_payload("www.example.com")
        assert outcome.analysis.overall is SecurityStatus.DANGER
        assert outcome.analysis.checks[0].name == "No HTTPS"

    def test_qris(self) -> None:
        outcome = scan_payload(QRIS_PAYLOAD)
        assert outcome.payload.type is PayloadType.QRIS
        assert [c.name for c in outcome.analysis.checks] == [
            "Valid QRIS format",
            "Merchant name verified",
            "NMID verified",
            "IDR currency",
        ]
        assert outcome.analysis.overall is SecurityStatus.SAFE

    def test_truncated_qris_still_graded(self) -> None:
        outcome = scan_payload("000201" + "2630")
        assert outcome.payload.type is PayloadType.QRIS
        assert outcome.analysis.overall is SecurityStatus.DANGER

    @pytest.mark.parametrize(
        "raw, label",
        [
            ("WIFI:S:Net;;", "WiFi"),
            ("BEGIN:VCARD\nFN:Ani", "vCard"),
            ("mailto:a@example.com", "Email"),
            ("hello", "Plain Text"),
        ],
    )
    def test_other_types_pass_through(self, raw: str, label: str) -> None:
        outcome = scan_payload(raw)
        assert len(outcome.analysis.checks) == 1
        check = outcome.analysis.checks[0]
        assert check.name == "QR code detected"
        assert check.status is SecurityStatus.SAFE
        assert check.message == f"Type: {label}"


class TestConfig:
    def test_trace_does_not_change_outcome(self) -> None:
        traced = Config(scanner=ScannerConfig(trace=True))
        for raw in SAMPLES:
            assert scan_payload(raw, traced) == scan_payload(raw)

    def test_long_qris_keeps_full_raw_and_verdict(self) -> None:
        filler = [("62", "x" * 95) for _ in range(45)]
        raw = encode_tlv([
            ("00", "01"),
            *filler,
            ("26", encode_tlv([("00", "ID.CO.QRIS.WWW"), ("01", "ID1020000000001")])),
            ("59", "Toko Resmi"),
        ])

        outcome = scan_payload(raw, Config.defaults())

        assert outcome.payload.raw == raw
        assert outcome.analysis.overall is SecurityStatus.SAFE
        assert outcome.analysis.checks[0].name == "Valid QRIS format"


class TestOutcome:
    def test_to_dict_is_json_serialisable(self) -> None:
        document = json.loads(json.dumps(scan_payload("http://bit.ly/xyz").to_dict()))
        assert document["payload"]["type"] == "URL"
        assert document["analysis"]["overall"] == "danger"
        assert {c["status"] for c in document["analysis"]["checks"]} == {"danger", "warning"}

    def test_concurrent_scans_match_sequential(self) -> None:
        expected = [scan_payload(raw) for raw in SAMPLES]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(scan_payload, SAMPLES * 20))
        assert results == expected * 20
        assert all(isinstance(r, ScanOutcome) for r in results)
