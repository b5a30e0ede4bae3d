"""Gzip wrapping of reduced GPX text."""

import gzip
import io
import logging
import zlib
from typing import Optional

from .config import COMPRESSION_LEVEL
from .errors import CompressionError, DecompressionError, InputTooLargeError

logger = logging.getLogger(__name__)


def remove_excess_whitespace(text: str) -> str:
    """
    Trim every line, drop blank ones and rejoin with ``\\n``.

    Not a full XML minifier: whitespace inside a line is left alone.
    """
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def compress_gpx(text: str) -> bytes:
    """
    Whitespace-clean ``text`` and gzip it at level 6.

    Raises:
        CompressionError: if the encoder fails to write or finish
    """
    cleaned = remove_excess_whitespace(text)
    buf = io.BytesIO()
    try:
        with gzip.GzipFile(fileobj=buf, mode="wb", compresslevel=COMPRESSION_LEVEL) as gz:
            gz.write(cleaned.encode("utf-8"))
    except (OSError, zlib.error, MemoryError) as e:
        raise CompressionError(f"Compression error: {e}") from e
    data = buf.getvalue()
    logger.debug("Compressed %d chars -> %d bytes", len(cleaned), len(data))
    return data


_READ_CHUNK = 64 * 1024


def decompress_gpx(data: bytes, max_bytes: Optional[int] = None) -> str:
    """
    Inverse of compress_gpx, up to its whitespace cleanup.

    Args:
        data: gzip bytes
        max_bytes: stop inflating and fail once the output grows past this

    Raises:
        DecompressionError: bad or truncated gzip framing, or invalid UTF-8
        InputTooLargeError: inflated output exceeds ``max_bytes``
    """
    if not data:
        raise DecompressionError("Decompression error: empty input")
    chunks = []
    total = 0
    try:
        with gzip.GzipFile(fileobj=io.BytesIO(data), mode="rb") as gz:
            while True:
                chunk = gz.read(_READ_CHUNK)
                if not chunk:
                    break
                total += len(chunk)
                if max_bytes is not None and total > max_bytes:
                    raise InputTooLargeError(total, max_bytes)
                chunks.append(chunk)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionError(f"Decompression error: {e}") from e
    try:
        return b"".join(chunks).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecompressionError(f"Decompression error: {e}") from e
