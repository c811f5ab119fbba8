"""Command-line entry point for QRGuard.

Usage:
    qrguard "https://bit.ly/xyz"                 # scan one payload, print JSON
    echo "$PAYLOAD" | qrguard                    # payload from stdin
    qrguard "$PAYLOAD" --report fake_qris --details "sticker over the real code"

Exit codes:
    0  success
    1  --fail-on-danger was given and the verdict is DANGER (or a config error)
    2  the report record failed validation
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from qrguard.config import load_config
from qrguard.models.report import REPORT_CATEGORIES, ReportValidationError, build_report
from qrguard.models.security import SecurityStatus
from qrguard.scanner.engine import scan_payload
from qrguard.utils.logger import configure_logging, get_logger

EXIT_OK = 0
EXIT_DANGER = 1
EXIT_INVALID_REPORT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qrguard",
        description="Classify a decoded QR payload and grade how safe it is to act on.",
    )
    parser.add_argument(
        "payload",
        nargs="?",
        help="Decoded QR string. Read from stdin when omitted.",
    )
    parser.add_argument("--config", help="Path to a config.yaml file.")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output.")
    parser.add_argument(
        "--fail-on-danger",
        action="store_true",
        help="Exit with status 1 when the overall verdict is danger.",
    )
    parser.add_argument(
        "--report",
        metavar="CATEGORY",
        choices=sorted(REPORT_CATEGORIES),
        help="Print a report record in this category instead of the scan result.",
    )
    parser.add_argument("--details", default="", help="Report description (with --report).")
    parser.add_argument("--location", help="Where the code was found (with --report).")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one scan and print the result as JSON on stdout.

    Raises:
        SystemExit: Propagated from load_config() on config errors.
    """
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.logging.level, json_output=config.logging.json)
    logger = get_logger(__name__)

    raw = args.payload if args.payload is not None else sys.stdin.read()
    outcome = scan_payload(raw, config)
    logger.info(
        "Payload scanned",
        payload_type=outcome.payload.type.value,
        overall=outcome.analysis.overall.value,
    )

    if args.report:
        try:
            document = build_report(outcome, args.report, args.details, args.location).to_dict()
        except ReportValidationError as exc:
            logger.error("Report rejected", error=str(exc))
            print(f"REPORT ERROR: {exc}", file=sys.stderr)
            return EXIT_INVALID_REPORT
    else:
        document = outcome.to_dict()

    print(json.dumps(document, indent=2 if args.pretty else None, ensure_ascii=False))

    if args.fail_on_danger and outcome.analysis.overall is SecurityStatus.DANGER:
        return EXIT_DANGER
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
