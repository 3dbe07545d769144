"""Read and write files for the codec front-ends.

Text is read and written with newline translation disabled so that encoding a
file and decoding it again reproduces it byte for byte. Adjustments made to
make a file encodable are reported through logging.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .codec import zalgo_decode, zalgo_encode, zalgo_unwrap_python, zalgo_wrap_python
from .config import CodecConfig

logger = logging.getLogger(__name__)


class OutputExistsError(RuntimeError):
    """Raised instead of overwriting an existing output file."""


def read_source(
    path: str | Path,
    *,
    strip_carriage_returns: bool = True,
    tab_width: int = 0,
) -> str:
    """Read ``path`` as UTF-8, optionally expanding tabs and dropping ``\\r``."""

    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()

    if tab_width > 0 and "\t" in text:
        logger.warning("found tabs in %s, replacing each with %d spaces", path, tab_width)
        text = text.replace("\t", " " * tab_width)

    if strip_carriage_returns and "\r" in text:
        logger.warning(
            "%s contains the carriage return character (\\r), ignoring it; "
            "the decoded result may differ from the original file",
            path,
        )
        text = text.replace("\r", "")
    return text


def ensure_writable(path: str | Path, *, force: bool) -> None:
    """Refuse to continue if ``path`` exists and ``force`` is not set."""

    if Path(path).exists() and not force:
        raise OutputExistsError(
            f'the file "{path}" already exists, to overwrite its contents you can '
            "supply the -f or --force arguments"
        )


def write_output(path: str | Path, content: str, *, force: bool = False) -> None:
    ensure_writable(path, force=force)
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    logger.debug("Wrote %d characters to %s", len(content), path)


def read_for_encoding(path: str | Path, config: CodecConfig) -> str:
    """Read plain text that is about to be encoded, applying ``config``."""

    return read_source(
        path,
        strip_carriage_returns=config.strip_carriage_returns,
        tab_width=config.tab_width,
    )


def read_encoded(path: str | Path, config: CodecConfig) -> str:
    """Read encoded text. Tabs are never expanded here."""

    return read_source(path, strip_carriage_returns=config.strip_carriage_returns)


def encode_file(in_path: str | Path, out_path: str | Path, config: CodecConfig | None = None) -> None:
    """Encode the contents of ``in_path`` and store them in ``out_path``."""

    config = config or CodecConfig()
    encoded = zalgo_encode(read_for_encoding(in_path, config))
    write_output(out_path, encoded, force=config.force)


def decode_file(in_path: str | Path, out_path: str | Path, config: CodecConfig | None = None) -> None:
    """Decode the contents of ``in_path`` and store them in ``out_path``."""

    config = config or CodecConfig()
    write_output(out_path, zalgo_decode(read_encoded(in_path, config)), force=config.force)


def wrap_python_file(
    in_path: str | Path, out_path: str | Path, config: CodecConfig | None = None
) -> None:
    """Turn the python file at ``in_path`` into a self-decoding script."""

    config = config or CodecConfig()
    wrapped = zalgo_wrap_python(read_for_encoding(in_path, config))
    write_output(out_path, wrapped, force=config.force)


def unwrap_python_file(
    in_path: str | Path, out_path: str | Path, config: CodecConfig | None = None
) -> None:
    """Recover the python source from a script written by :func:`wrap_python_file`."""

    config = config or CodecConfig()
    write_output(out_path, zalgo_unwrap_python(read_encoded(in_path, config)), force=config.force)
