"""Filename rules, decoding and content checks for uploaded GPX files."""

import math
import re
import xml.etree.ElementTree as ET
from typing import Optional

from .codec import decompress_gpx
from .config import MAX_INPUT_BYTES
from .document import ROOT_TAG, local_name
from .errors import InputTooLargeError, InvalidFormatError

MIN_CONTENT_CHARS = 50

# basename characters, then exactly .gpx or .gpx.gz
_FILENAME_RE = re.compile(r"^[a-zA-Z0-9._\-\s]+\.gpx(\.gz)?$", re.IGNORECASE)
_FORBIDDEN_RE = re.compile(r'[<>:"|?*\x00-\x1f]')
_XML_DECLARATION_RE = re.compile(r"""^\s*<\?xml\s+version\s*=\s*["']1\.[0-9]["']""", re.IGNORECASE)
_GPX_VERSIONS = ("1.0", "1.1")
# attribute-position event handlers only, so "lon=" never matches
_SUSPICIOUS_RES = [
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"\son\w+\s*=", re.IGNORECASE),
    re.compile(r"<iframe", re.IGNORECASE),
    re.compile(r"<object", re.IGNORECASE),
    re.compile(r"<embed", re.IGNORECASE),
]


def is_valid_gpx_filename(filename: Optional[str]) -> bool:
    if not filename or not isinstance(filename, str):
        return False
    if "/" in filename or "\\" in filename or ".." in filename:
        return False
    if _FORBIDDEN_RE.search(filename):
        return False
    return bool(_FILENAME_RE.match(filename.strip()))


def is_gzipped_filename(filename: str) -> bool:
    return filename.strip().lower().endswith(".gpx.gz")


def _coords(el: ET.Element) -> tuple[float, float]:
    try:
        return float(el.get("lat", "nan")), float(el.get("lon", "nan"))
    except ValueError:
        return math.nan, math.nan


def _in_range(lat: float, lon: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lon <= 180


def _check_points(root: ET.Element) -> None:
    elements = list(root.iter())
    for el in elements:
        if local_name(el.tag) in ("trkpt", "rtept"):
            lat, lon = _coords(el)
            if math.isnan(lat) or math.isnan(lon):
                raise InvalidFormatError("Invalid coordinate data in track/route points")
            if not _in_range(lat, lon):
                raise InvalidFormatError(
                    "Coordinates out of valid range (lat: -90 to 90, lon: -180 to 180)"
                )
    for el in elements:
        if local_name(el.tag) == "wpt":
            lat, lon = _coords(el)
            if math.isnan(lat) or math.isnan(lon):
                raise InvalidFormatError("Invalid coordinate data in waypoints")
            if not _in_range(lat, lon):
                raise InvalidFormatError("Waypoint coordinates out of valid range")


def validate_upload_content(text: str) -> str:
    """
    Check uploaded GPX text before it enters the pipeline.

    Stricter than validate_gpx: the root needs a 1.0/1.1 ``version`` and a
    ``creator``, at least one waypoint, route or track, coordinates inside
    lat/lon range, and no script-like content.

    Returns:
        str: the trimmed content

    Raises:
        InvalidFormatError: first failed check, with its message
        InputTooLargeError: more than MAX_INPUT_BYTES of text
    """
    content = text.strip()
    if not content:
        raise InvalidFormatError("File content is empty or invalid")
    if len(content) < MIN_CONTENT_CHARS:
        raise InvalidFormatError("File content is too short to be a valid GPX file")
    if not _XML_DECLARATION_RE.match(content):
        raise InvalidFormatError("Missing or invalid XML declaration")
    if f"</{ROOT_TAG}>" not in content:
        raise InvalidFormatError("Missing closing GPX tag")

    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise InvalidFormatError(f"XML parsing error: {e}") from e
    if local_name(root.tag) != ROOT_TAG:
        raise InvalidFormatError("Root element must be <gpx>")
    if root.get("version") not in _GPX_VERSIONS:
        raise InvalidFormatError("Missing or invalid GPX version (must be 1.0 or 1.1)")
    if not (root.get("creator") or "").strip():
        raise InvalidFormatError("Missing creator attribute in GPX root element")

    if not any(local_name(el.tag) in ("wpt", "rte", "trk") for el in root.iter()):
        raise InvalidFormatError("GPX file must contain at least one waypoint, route, or track")
    _check_points(root)

    if any(pattern.search(content) for pattern in _SUSPICIOUS_RES):
        raise InvalidFormatError("File contains potentially malicious content")

    size = len(content.encode("utf-8"))
    if size > MAX_INPUT_BYTES:
        raise InputTooLargeError(size, MAX_INPUT_BYTES)
    return content


def read_upload_text(
    filename: Optional[str],
    content: bytes,
    *,
    max_bytes: int,
    max_text_bytes: int = MAX_INPUT_BYTES,
) -> str:
    """
    Turn an uploaded ``.gpx`` or ``.gpx.gz`` file into checked GPX text.

    Args:
        filename: client-supplied file name
        content: raw upload body
        max_bytes: ceiling on the upload body size
        max_text_bytes: ceiling on inflated ``.gpx.gz`` content

    Returns:
        str: trimmed GPX XML that passed validate_upload_content

    Raises:
        InvalidFormatError: bad file name, non UTF-8 or failed content check
        InputTooLargeError: body larger than ``max_bytes`` or inflating past
            ``max_text_bytes``
        DecompressionError: ``.gpx.gz`` body is not valid gzip
    """
    if not is_valid_gpx_filename(filename):
        raise InvalidFormatError("GPX file name not valid")
    if len(content) > max_bytes:
        raise InputTooLargeError(len(content), max_bytes)
    if is_gzipped_filename(filename):
        text = decompress_gpx(content, max_bytes=max_text_bytes)
    else:
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidFormatError(f"GPX file is not valid UTF-8: {e}") from e
    return validate_upload_content(text)
