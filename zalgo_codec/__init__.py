"""Convert printable ASCII text into a single unicode grapheme cluster and back."""

from .byte_mapping import ANCHOR, decode_byte_pair, encode_byte_pair
from .codec import zalgo_decode, zalgo_encode, zalgo_unwrap_python, zalgo_wrap_python
from .embed import EmbedError, zalgo_compile, zalgo_eval, zalgo_exec
from .errors import (
    DecodeError,
    EmptyInputError,
    EncodeError,
    EncodePosition,
    InvalidEncodingError,
    InvalidUtf8Error,
    NotAsciiError,
    UnencodableAsciiError,
    UnwrapError,
    ZalgoError,
)
from .zalgo_string import DecodedBytes, DecodedChars, ZalgoString

__all__ = [
    "ANCHOR",
    "decode_byte_pair",
    "encode_byte_pair",
    "zalgo_decode",
    "zalgo_encode",
    "zalgo_unwrap_python",
    "zalgo_wrap_python",
    "EmbedError",
    "zalgo_compile",
    "zalgo_eval",
    "zalgo_exec",
    "DecodeError",
    "EmptyInputError",
    "EncodeError",
    "EncodePosition",
    "InvalidEncodingError",
    "InvalidUtf8Error",
    "NotAsciiError",
    "UnencodableAsciiError",
    "UnwrapError",
    "ZalgoError",
    "DecodedBytes",
    "DecodedChars",
    "ZalgoString",
]
