"""Byte level mapping between printable ASCII and combining diacritical marks.

Every encodable byte (printable ASCII or a newline) maps to a single code point
in the Combining Diacritical Marks block (U+0300 to U+036F). The UTF-8 form of
such a code point is always two bytes, which is what gives the encoded text its
``2 * n + 1`` byte length once the anchor character is prepended.

The helpers are pure and total over their documented domain. Validity
filtering is the caller's job.
"""

from __future__ import annotations

from typing import Dict, Tuple

# Every encoded string starts with this character so that the combining marks
# have something to attach to when rendered.
ANCHOR: str = "E"
ANCHOR_BYTE: int = 69

# First code point of the Combining Diacritical Marks block.
COMBINING_BASE: int = 0x300

NEWLINE_BYTE: int = 10
PRINTABLE_FIRST: int = 32
PRINTABLE_LAST: int = 126


def is_encodable(byte: int) -> bool:
    """Return ``True`` when ``byte`` is printable ASCII or a newline."""

    return PRINTABLE_FIRST <= byte <= PRINTABLE_LAST or byte == NEWLINE_BYTE


def encode_byte(byte: int) -> int:
    """Return the 7-bit value that ``byte`` is stored as.

    Printable bytes land on 0 to 94 and the newline on 111.
    """

    return (byte - 11) % 133 - 21


def encode_byte_pair(byte: int) -> Tuple[int, int]:
    """Return the two UTF-8 bytes of the combining mark that encodes ``byte``."""

    value = encode_byte(byte)
    return (value >> 6) & 1 | 0b1100_1100, (value & 63) | 0b1000_0000


def decode_byte_pair(odd: int, even: int) -> int:
    """Inverse of :func:`encode_byte_pair`.

    ``odd`` and ``even`` refer to the position of the bytes in the encoded
    buffer, where the anchor occupies offset zero.
    """

    return ((odd << 6 & 64 | even & 63) + 22) % 133 + 10


def _build_encode_table() -> Dict[int, str]:
    table: Dict[int, str] = {}
    for byte in range(128):
        if is_encodable(byte):
            table[byte] = bytes(encode_byte_pair(byte)).decode("utf-8")
    return table


# Encodable byte -> combining mark, derived from the pair arithmetic above.
ENCODE_TABLE: Dict[int, str] = _build_encode_table()
