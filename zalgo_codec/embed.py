"""Run python source that has been shipped in encoded form.

These helpers are the runtime counterpart of :func:`zalgo_wrap_python`: instead
of embedding a decoder snippet in the payload, the caller hands the encoded
grapheme cluster to :func:`zalgo_exec` or :func:`zalgo_eval`.
"""

from __future__ import annotations

import logging
from types import CodeType
from typing import Any

from .codec import zalgo_decode
from .errors import DecodeError, ZalgoError
from .zalgo_string import ZalgoString

logger = logging.getLogger(__name__)


class EmbedError(ZalgoError):
    """Raised when encoded source can not be decoded or compiled."""


def zalgo_compile(
    encoded: str | ZalgoString, mode: str = "exec", filename: str = "<zalgo>"
) -> CodeType:
    """Decode ``encoded`` and compile the result in ``mode``.

    A :class:`ZalgoString` is already known to be valid and skips the
    validating decoder.
    """

    if isinstance(encoded, ZalgoString):
        source = encoded.decode()
    elif isinstance(encoded, str):
        try:
            source = zalgo_decode(encoded)
        except DecodeError as exc:
            raise EmbedError(str(exc)) from exc
    else:
        raise TypeError(f"expected str or ZalgoString, not {type(encoded).__name__}")

    try:
        code = compile(source, filename, mode)
    except SyntaxError as exc:
        raise EmbedError(f"decoded text is not valid python: {exc}") from exc
    logger.debug("Compiled %d characters of decoded source in %s mode", len(source), mode)
    return code


def zalgo_exec(
    encoded: str | ZalgoString, namespace: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Execute encoded statements in ``namespace`` and return the namespace."""

    if namespace is None:
        namespace = {}
    exec(zalgo_compile(encoded, "exec"), namespace)
    return namespace


def zalgo_eval(encoded: str | ZalgoString, namespace: dict[str, Any] | None = None) -> Any:
    """Evaluate an encoded expression in ``namespace``."""

    return eval(zalgo_compile(encoded, "eval"), {} if namespace is None else namespace)
