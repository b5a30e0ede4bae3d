"""Pre-flight validation gate run before compression."""

import logging

from .config import MAX_INPUT_BYTES, ROOT_TAG_MARKER, XML_DECLARATION
from .document import parse_document
from .errors import GpxParseError

logger = logging.getLogger(__name__)


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def validate_gpx(text: str) -> bool:
    """
    Check whether ``text`` is an acceptable GPX document.

    Cheap checks run first (size ceiling, XML declaration, ``<gpx`` marker)
    so obviously bad input never reaches the full parser.

    Args:
        text: GPX XML content

    Returns:
        bool: True only if every check passes and the document parses
    """
    size = byte_length(text)
    if size > MAX_INPUT_BYTES:
        logger.info("Rejected GPX: %d bytes exceeds %d", size, MAX_INPUT_BYTES)
        return False
    if not text.strip().startswith(XML_DECLARATION):
        logger.info("Rejected GPX: missing XML declaration")
        return False
    if ROOT_TAG_MARKER not in text:
        logger.info("Rejected GPX: missing %s root tag", ROOT_TAG_MARKER)
        return False
    try:
        parse_document(text)
    except GpxParseError as e:
        logger.info("Rejected GPX: %s", e.detail)
        return False
    return True
