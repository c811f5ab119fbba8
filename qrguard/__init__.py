"""QRGuard: payload classification and security heuristics for scanned QR codes.

    from qrguard import scan_payload

    outcome = scan_payload("https://bit.ly/xyz")
    outcome.analysis.overall   # SecurityStatus.DANGER
"""

from qrguard.scanner.engine import ScanOutcome, scan_payload

__all__ = ["ScanOutcome", "scan_payload"]
