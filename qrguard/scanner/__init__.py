"""QRGuard scanner package.

Pipeline, leaf-first: TLV scanner (tlv.py) -> type parsers (parsers.py) ->
classifier (classifier.py) -> URL / QRIS analyzers -> scan_payload (engine.py).
"""
