"""A string type that is known to hold zalgo encoded text.

:class:`ZalgoString` can only be built by encoding text or by combining other
instances, so its contents always decode to valid ASCII. That guarantee lets
the decoding helpers skip the UTF-8 validation :func:`zalgo_decode` has to do.
"""

from __future__ import annotations

import functools
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar

from .byte_mapping import ANCHOR, ANCHOR_BYTE, decode_byte_pair
from .codec import zalgo_decode, zalgo_encode
from .errors import InvalidEncodingError, ZalgoError

_NO_DEFAULT: Any = object()

_T = TypeVar("_T")
_I = TypeVar("_I", bound="_DecodedIterator[Any]")

# Bytes decoded from a ZalgoString are always ASCII, which latin-1 maps one to
# one without any validation.
_UNCHECKED_CODEC = "latin-1"


@functools.total_ordering
class ZalgoString:
    """Encoded text together with helpers to inspect, extend and decode it.

    The encoded form is exposed as ``str``, ``bytes`` and through iteration;
    the decoded form through :meth:`decode`, :meth:`decoded_bytes` and
    :meth:`decoded_chars`. Comparisons with ``str`` and ``bytes`` look at the
    *encoded* text::

        >>> zs = ZalgoString("Zalgo")
        >>> zs.decode()
        'Zalgo'
        >>> len(zs), zs.decoded_len()
        (11, 5)
    """

    __slots__ = ("_buffer", "_generation")

    def __init__(self, text: str) -> None:
        self._buffer = bytearray(zalgo_encode(text).encode("utf-8"))
        self._generation = 0

    @classmethod
    def _from_trusted_buffer(cls, buffer: bytearray) -> "ZalgoString":
        instance = cls.__new__(cls)
        instance._buffer = buffer
        instance._generation = 0
        return instance

    @classmethod
    def from_encoded(cls, encoded: str) -> "ZalgoString":
        """Adopt text that was previously produced by the encoder.

        The text is only accepted when encoding its decoded form reproduces it
        exactly; anything else raises :class:`InvalidEncodingError`.
        """

        try:
            candidate = cls(zalgo_decode(encoded))
        except ZalgoError as exc:
            raise InvalidEncodingError(f"not a zalgo encoded string: {exc}") from exc
        if candidate != encoded:
            raise InvalidEncodingError(
                "not a zalgo encoded string: re-encoding the decoded text gives a different result"
            )
        return candidate

    # region: encoded views

    def as_str(self) -> str:
        return self._buffer.decode("utf-8")

    def as_bytes(self) -> bytes:
        return bytes(self._buffer)

    def as_combining_chars(self) -> str:
        """Return the encoded text without the leading anchor character."""

        return self._buffer[1:].decode("utf-8")

    def chars(self) -> Iterator[str]:
        return iter(self.as_str())

    def char_indices(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(byte_offset, char)`` for every encoded character."""

        yield 0, ANCHOR
        # Every combining mark is two bytes wide.
        for position, mark in enumerate(self.as_combining_chars()):
            yield 1 + 2 * position, mark

    def encoded_bytes(self) -> Iterator[int]:
        return iter(self.as_bytes())

    def get(self, index: slice) -> str | None:
        """Return the encoded text between two byte offsets.

        ``None`` is returned when the range is out of bounds or splits a
        combining mark in half.
        """

        if not isinstance(index, slice):
            raise TypeError(f"ZalgoString indices must be slices, not {type(index).__name__}")
        if index.step not in (None, 1):
            raise ValueError("ZalgoString slices do not support a step")

        length = len(self._buffer)
        start = 0 if index.start is None else index.start
        stop = length if index.stop is None else index.stop
        if start < 0:
            start += length
        if stop < 0:
            stop += length
        if not 0 <= start <= stop <= length:
            return None
        if not (self._is_char_boundary(start) and self._is_char_boundary(stop)):
            return None
        return self._buffer[start:stop].decode("utf-8")

    def _is_char_boundary(self, offset: int) -> bool:
        # The anchor sits at 0 and every combining mark starts on an odd offset.
        return offset == 0 or offset % 2 == 1

    def __getitem__(self, index: slice) -> str:
        result = self.get(index)
        if result is None:
            raise IndexError(
                f"byte range {index.start}:{index.stop} is out of bounds or not on a character boundary"
            )
        return result

    def __str__(self) -> str:
        return self.as_str()

    def __bytes__(self) -> bytes:
        return self.as_bytes()

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_encoded({self.as_str()!r})"

    # endregion

    # region: metadata

    def __len__(self) -> int:
        """Length of the encoded text in UTF-8 bytes, never zero."""

        return len(self._buffer)

    def decoded_len(self) -> int:
        return (len(self._buffer) - 1) // 2

    def decoded_is_empty(self) -> bool:
        return self.decoded_len() == 0

    # endregion

    # region: decoding

    def decoded_bytes(self) -> "DecodedBytes":
        return DecodedBytes(self)

    def decoded_chars(self) -> "DecodedChars":
        return DecodedChars(self)

    def decode_bytes(self) -> bytes:
        """Return a decoded copy of the payload, leaving ``self`` untouched."""

        buffer = self._buffer
        return bytes(decode_byte_pair(odd, even) for odd, even in zip(buffer[1::2], buffer[2::2]))

    def decode(self) -> str:
        """Return the decoded text, leaving ``self`` untouched."""

        return self.decode_bytes().decode(_UNCHECKED_CODEC)

    def into_decoded_bytes(self) -> bytearray:
        """Decode the payload in place and hand the buffer to the caller.

        The instance is left holding the empty payload, so it stays valid.
        """

        buffer = self._buffer
        write = 0
        for read in range(1, len(buffer), 2):
            buffer[write] = decode_byte_pair(buffer[read], buffer[read + 1])
            write += 1
        del buffer[write:]

        self._buffer = bytearray((ANCHOR_BYTE,))
        self._generation += 1
        return buffer

    def into_decoded_string(self) -> str:
        """Like :meth:`into_decoded_bytes` but returns ``str``."""

        return self.into_decoded_bytes().decode(_UNCHECKED_CODEC)

    # endregion

    # region: mutation

    def append(self, other: "ZalgoString") -> None:
        """Append the payload of ``other``; its anchor is not copied."""

        if not isinstance(other, ZalgoString):
            raise TypeError(f"can only append a ZalgoString, not {type(other).__name__}")
        self._buffer += other._buffer[1:]
        self._generation += 1

    def encode_and_append(self, text: str) -> None:
        """Encode ``text`` and append it.

        When ``text`` can not be encoded the :class:`EncodeError` propagates
        and ``self`` is left as it was.
        """

        encoded = zalgo_encode(text).encode("utf-8")
        self._buffer += encoded[1:]
        self._generation += 1

    def truncate(self, new_len: int) -> None:
        """Shorten the encoded text to ``new_len`` bytes.

        ``new_len`` must be odd so that only whole characters are removed.
        Lengths at or above the current one leave the text unchanged.
        """

        if new_len >= len(self._buffer):
            return
        if new_len < 1 or new_len % 2 != 1:
            raise ValueError(f"the new length must be odd and positive, got {new_len}")
        del self._buffer[new_len:]
        self._generation += 1

    def clear(self) -> None:
        self.truncate(1)

    def copy(self) -> "ZalgoString":
        return self._from_trusted_buffer(bytearray(self._buffer))

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> "ZalgoString":
        return self.copy()

    def __add__(self, other: object) -> "ZalgoString":
        if not isinstance(other, ZalgoString):
            return NotImplemented
        result = self.copy()
        result.append(other)
        return result

    def __iadd__(self, other: object) -> "ZalgoString":
        if not isinstance(other, ZalgoString):
            return NotImplemented
        self.append(other)
        return self

    # endregion

    # region: comparison

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ZalgoString):
            return self._buffer == other._buffer
        if isinstance(other, str):
            return self.as_str() == other
        if isinstance(other, (bytes, bytearray)):
            return self._buffer == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ZalgoString):
            return NotImplemented
        return self._buffer < other._buffer

    # Mutable, so not hashable.
    __hash__ = None  # type: ignore[assignment]

    # endregion

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self).from_encoded, (self.as_str(),)


class _DecodedIterator(Generic[_T]):
    """Lazy iterator over the decoded payload of a :class:`ZalgoString`.

    Items can be pulled from both ends with ``next()`` and :meth:`next_back`;
    ``len()`` is always the exact number of items left. Once exhausted the
    iterator stays exhausted. Mutating the owner while the iterator still has
    items left makes the next pull raise ``RuntimeError``.
    """

    __slots__ = ("_owner", "_generation", "_front", "_back")

    def __init__(self, owner: ZalgoString) -> None:
        self._owner = owner
        self._generation = owner._generation
        self._front = 0
        self._back = owner.decoded_len()

    def _convert(self, byte: int) -> _T:
        raise NotImplementedError

    def _decode_at(self, position: int) -> _T:
        if self._owner._generation != self._generation:
            raise RuntimeError("ZalgoString changed during iteration")
        buffer = self._owner._buffer
        offset = 2 * position + 1
        return self._convert(decode_byte_pair(buffer[offset], buffer[offset + 1]))

    def __iter__(self: _I) -> _I:
        return self

    def __len__(self) -> int:
        return self._back - self._front

    def __next__(self) -> _T:
        if self._front >= self._back:
            raise StopIteration
        item = self._decode_at(self._front)
        self._front += 1
        return item

    def next_back(self, default: Optional[_T] = _NO_DEFAULT) -> Optional[_T]:
        """Pull the next item from the back.

        Raises ``StopIteration`` when exhausted unless ``default`` is given.
        """

        if self._front >= self._back:
            if default is _NO_DEFAULT:
                raise StopIteration
            return default
        return self._decode_at_back()

    def nth(self, n: int, default: Optional[_T] = None) -> Optional[_T]:
        """Skip ``n`` items and return the one after them."""

        if n < 0:
            raise ValueError("n must be non-negative")
        self._front = min(self._front + n, self._back)
        return next(self, default)

    def last(self) -> Optional[_T]:
        """Consume the iterator and return its final item, or ``None``."""

        item = self.next_back(None)
        self._front = self._back
        return item

    def __reversed__(self) -> Iterator[_T]:
        while len(self):
            yield self._decode_at_back()

    def _decode_at_back(self) -> _T:
        item = self._decode_at(self._back - 1)
        self._back -= 1
        return item

    def copy(self: _I) -> _I:
        clone = type(self).__new__(type(self))
        clone._owner = self._owner
        clone._generation = self._generation
        clone._front = self._front
        clone._back = self._back
        return clone

    __copy__ = copy


class DecodedBytes(_DecodedIterator[int]):
    """Decoded payload as byte values."""

    __slots__ = ()

    def _convert(self, byte: int) -> int:
        return byte


class DecodedChars(_DecodedIterator[str]):
    """Decoded payload as one-character strings."""

    __slots__ = ()

    def _convert(self, byte: int) -> str:
        return chr(byte)
