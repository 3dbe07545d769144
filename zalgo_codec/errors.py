"""Exceptions raised by the zalgo codec.

Encoding failures pinpoint the first character that could not be encoded with
its line, column and byte offset so that callers can point users at the exact
spot in their input. Decoding failures are coarser since encoded text carries
no positional structure beyond its byte pairs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

_LOW_CONTROL_NAMES = [
    "Null",
    "Start Of Heading",
    "Start Of Text",
    "End Of Text",
    "End Of Transmission",
    "Enquiry",
    "Acknowledge",
    "Bell",
    "Backspace",
    "Horizontal Tab",
]

_HIGH_CONTROL_NAMES = [
    "Vertical Tab",
    "Form Feed",
    "Carriage Return",
    "Shift Out",
    "Shift In",
    "Data Link Escape",
    "Data Control 1",
    "Data Control 2",
    "Data Control 3",
    "Data Control 4",
    "Negative Acknowledge",
    "Synchronous Idle",
    "End Of Transmission Block",
    "Cancel",
    "End Of Medium",
    "Substitute",
    "Escape",
    "File Separator",
    "Group Separator",
    "Record Separator",
    "Unit Separator",
]

# Names for the ASCII bytes that can never be encoded. Byte 10 (newline) is
# absent because it is always accepted.
NONPRINTABLE_ASCII_NAMES: Dict[int, str] = {
    **{byte: name for byte, name in enumerate(_LOW_CONTROL_NAMES)},
    **{byte: name for byte, name in enumerate(_HIGH_CONTROL_NAMES, start=11)},
    127: "Delete",
}


def nonprintable_ascii_repr(byte: int) -> str | None:
    """Return the human-readable name of a non-printable ASCII ``byte``."""

    return NONPRINTABLE_ASCII_NAMES.get(byte)


class ZalgoError(ValueError):
    """Base class for every error raised by the codec."""


@dataclass(frozen=True)
class EncodePosition:
    """Where in the input the encoder stopped.

    ``line`` and ``column`` are 1-indexed, ``index`` is the 0-indexed byte
    offset into the UTF-8 form of the input.
    """

    line: int
    column: int
    index: int


class EncodeError(ZalgoError):
    """Raised when the input contains a character that can not be encoded."""

    def __init__(self, char: str, position: EncodePosition) -> None:
        self.char = char
        self.position = position
        super().__init__(self._describe())

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    @property
    def index(self) -> int:
        return self.position.index

    @property
    def representation(self) -> str | None:
        return None

    def is_not_ascii(self) -> bool:
        return False

    def is_unencodable_ascii(self) -> bool:
        return False

    def _describe(self) -> str:
        return f"line {self.line} at column {self.column}: can not encode {self.char!r}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.char!r}, line={self.line}, "
            f"column={self.column}, index={self.index})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EncodeError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.char == other.char
            and self.position == other.position
        )

    def __hash__(self) -> int:
        return hash((type(self), self.char, self.position))


class UnencodableAsciiError(EncodeError):
    """An ASCII control character other than the newline was found."""

    def __init__(self, byte: int, position: EncodePosition, name: str) -> None:
        self.byte = byte
        self.name = name
        super().__init__(chr(byte), position)

    @property
    def representation(self) -> str | None:
        return self.name

    def is_unencodable_ascii(self) -> bool:
        return True

    def _describe(self) -> str:
        return (
            f"line {self.line} at column {self.column}: can not encode ascii "
            f"'{self.name}' character with byte value {self.byte}"
        )


class NotAsciiError(EncodeError):
    """A character outside of ASCII was found."""

    def is_not_ascii(self) -> bool:
        return True

    def _describe(self) -> str:
        return (
            f"line {self.line} at column {self.column}: can not encode non-ascii "
            f"character '{self.char}' (U+{ord(self.char):X})"
        )


class DecodeError(ZalgoError):
    """Raised when a string can not be decoded."""


class EmptyInputError(DecodeError):
    """Raised when asked to decode the empty string."""

    def __init__(self) -> None:
        super().__init__("can not decode an empty string")


class InvalidUtf8Error(DecodeError):
    """Decoding produced bytes that do not form valid UTF-8 text.

    The offending bytes are kept on :attr:`bytes` for inspection.
    """

    def __init__(self, data: bytes, reason: UnicodeDecodeError) -> None:
        self.bytes = data
        self.reason = reason
        super().__init__(f"decoded bytes are not valid utf-8: {reason.reason} at index {reason.start}")


class InvalidEncodingError(DecodeError):
    """Raised when a string is not exactly what the encoder would produce."""


class UnwrapError(DecodeError):
    """Raised when a file does not contain a python wrapper produced by the codec."""
