"""Encode printable ASCII into a single grapheme cluster and back.

The encoded form is the anchor character ``E`` followed by one combining mark
per input character. Because every mark attaches to the anchor, the whole
payload renders as one (very tall) character.
"""

from __future__ import annotations

import logging

from .byte_mapping import ANCHOR, ENCODE_TABLE, decode_byte_pair
from .errors import (
    EmptyInputError,
    EncodeError,
    EncodePosition,
    InvalidUtf8Error,
    NotAsciiError,
    UnencodableAsciiError,
    UnwrapError,
    nonprintable_ascii_repr,
)

logger = logging.getLogger(__name__)

# The python wrapper is read back by a python interpreter, so both halves must
# stay byte-for-byte identical to what earlier releases emitted.
PYTHON_WRAPPER_HEADER = "b='"
PYTHON_WRAPPER_FOOTER = (
    "'.encode();exec(''.join(chr(((h<<6&64|c&63)+22)%133+10)"
    "for h,c in zip(b[1::2],b[2::2])))"
)


def _encode_error(char: str, position: EncodePosition) -> EncodeError:
    byte = ord(char)
    name = nonprintable_ascii_repr(byte)
    if name is not None:
        return UnencodableAsciiError(byte, position, name)
    return NotAsciiError(char, position)


def zalgo_encode(text: str) -> str:
    """Encode ``text`` into a single grapheme cluster.

    Only printable ASCII and newlines can be encoded. The first character
    outside of that set aborts encoding with an :class:`EncodeError` that
    records where it was found.
    """

    line = 1
    column = 1
    encoded = [ANCHOR]
    # Every character before a failure is ASCII, so the character index doubles
    # as the byte offset into the UTF-8 input.
    for index, char in enumerate(text):
        mark = ENCODE_TABLE.get(ord(char))
        if mark is None:
            raise _encode_error(char, EncodePosition(line, column, index))
        encoded.append(mark)
        if char == "\n":
            line += 1
            column = 1
        else:
            column += 1
    return "".join(encoded)


def zalgo_decode(encoded: str) -> str:
    """Decode a string produced by :func:`zalgo_encode`.

    There is no way to tell whether ``encoded`` really came from the encoder.
    Foreign input either raises :class:`DecodeError` or decodes into text that
    means nothing. A trailing unpaired byte is ignored.
    """

    if not encoded:
        raise EmptyInputError()

    data = encoded.encode("utf-8", "surrogatepass")
    decoded = bytes(decode_byte_pair(odd, even) for odd, even in zip(data[1::2], data[2::2]))
    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Error(decoded, exc) from exc


def zalgo_wrap_python(source: str) -> str:
    """Encode python ``source`` and wrap it in a snippet that decodes and runs it.

    The result is itself a valid python program.
    """

    encoded = zalgo_encode(source)
    logger.debug("Wrapped %d characters of python source", len(source))
    return f"{PYTHON_WRAPPER_HEADER}{encoded}{PYTHON_WRAPPER_FOOTER}"


def zalgo_unwrap_python(wrapped: str) -> str:
    """Recover the python source from the output of :func:`zalgo_wrap_python`.

    A single trailing line ending, as left behind by most editors, is ignored.
    """

    body = wrapped
    if body.endswith("\r\n"):
        body = body[:-2]
    elif body.endswith("\n"):
        body = body[:-1]

    if len(body) < len(PYTHON_WRAPPER_HEADER) + len(PYTHON_WRAPPER_FOOTER):
        raise UnwrapError("input is too short to contain a wrapped python payload")
    if not body.startswith(PYTHON_WRAPPER_HEADER):
        raise UnwrapError(f"wrapped python must start with {PYTHON_WRAPPER_HEADER!r}")
    if not body.endswith(PYTHON_WRAPPER_FOOTER):
        raise UnwrapError("wrapped python does not end with the expected decoder snippet")

    payload = body[len(PYTHON_WRAPPER_HEADER) : len(body) - len(PYTHON_WRAPPER_FOOTER)]
    return zalgo_decode(payload)
