"""Tag-length-value scanner for EMVCo-style QR payloads.

Record layout: 2-char tag, 2-digit decimal length ``L``, then ``L`` chars of
value. Records are concatenated with no separator; nested templates (e.g.
QRIS tag ``26``) are themselves TLV strings and are scanned the same way.

Best-effort prefix policy: truncated or malformed input stops the scan and
returns the records read so far. ``scan_tlv()`` never raises and never reads
past the end of the string.
"""

from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)

#: Width of the tag and of the length field, in characters.
TAG_WIDTH: int = 2
LENGTH_WIDTH: int = 2
HEADER_WIDTH: int = TAG_WIDTH + LENGTH_WIDTH

#: Largest value a 2-digit length field can describe.
MAX_VALUE_LENGTH: int = 99


def scan_tlv(data: str, offset: int = 0) -> dict[str, str]:
    """Scan ``data`` from ``offset`` into an ordered ``tag -> value`` mapping.

    A repeated tag keeps its position from the first occurrence but takes the
    value of the last one.

    Stops (returning what was accumulated) when:
      - fewer than 4 characters remain,
      - the length field is not two ASCII digits,
      - the declared value would run past the end of ``data``.

    Args:
        data:   TLV-encoded string.
        offset: Index to start scanning from.

    Returns:
        Mapping of tag to value, in first-seen order.
    """
    records: dict[str, str] = {}
    index = max(offset, 0)
    end = len(data)

    while index < end:
        if end - index < HEADER_WIDTH:
            logger.debug("TLV scan stopped: %d trailing chars at %d", end - index, index)
            break

        tag = data[index:index + TAG_WIDTH]
        length_field = data[index + TAG_WIDTH:index + HEADER_WIDTH]
        # isdigit() alone accepts non-ASCII digits such as "²"
        if not (length_field.isascii() and length_field.isdigit()):
            logger.debug("TLV scan stopped: bad length %r for tag %r", length_field, tag)
            break

        length = int(length_field)
        value_end = index + HEADER_WIDTH + length
        if value_end > end:
            logger.debug("TLV scan stopped: tag %r overruns input by %d", tag, value_end - end)
            break

        records[tag] = data[index + HEADER_WIDTH:value_end]
        index = value_end

    return records


def encode_tlv(records: Iterable[tuple[str, str]]) -> str:
    """Encode ``(tag, value)`` pairs as a TLV string.

    Raises:
        ValueError: If a tag is not exactly 2 characters or a value is longer
                    than MAX_VALUE_LENGTH.
    """
    parts: list[str] = []
    for tag, value in records:
        if len(tag) != TAG_WIDTH:
            raise ValueError(f"TLV tag must be {TAG_WIDTH} characters: {tag!r}")
        if len(value) > MAX_VALUE_LENGTH:
            raise ValueError(
                f"TLV value for tag {tag!r} exceeds {MAX_VALUE_LENGTH} characters"
            )
        parts.append(f"{tag}{len(value):02d}{value}")
    return "".join(parts)
