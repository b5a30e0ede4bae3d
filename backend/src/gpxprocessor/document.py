"""Adapter around gpxpy, the external GPX parse/serialize codec."""

import logging
import math
import xml.etree.ElementTree as ET
from typing import Optional

import gpxpy
import gpxpy.gpx

from .errors import GpxParseError, GpxSerializationError

logger = logging.getLogger(__name__)

ROOT_TAG = "gpx"
_FEED_CHUNK = 64 * 1024


def local_name(tag: str) -> str:
    """Element tag without its ``{namespace}`` prefix, lower-cased."""
    return tag.rsplit("}", 1)[-1].lower()


def root_tag(text: str) -> Optional[str]:
    """Return the first element's tag, parsing only as far as needed."""
    parser = ET.XMLPullParser(events=("start",))
    try:
        for i in range(0, len(text), _FEED_CHUNK):
            parser.feed(text[i:i + _FEED_CHUNK])
            for _event, el in parser.read_events():
                return el.tag
    except ET.ParseError as e:
        raise GpxParseError(f"Error parsing GPX: {e}") from e
    return None


def _check_finite(gpx: gpxpy.gpx.GPX) -> None:
    for point in iter_points(gpx):
        for name, value in (("lat", point.latitude), ("lon", point.longitude), ("ele", point.elevation)):
            if value is not None and not math.isfinite(value):
                raise GpxParseError(f"Error parsing GPX: non-finite {name} value {value!r}")


def parse_document(text: str) -> gpxpy.gpx.GPX:
    """
    Parse GPX XML text, raising GpxParseError with the parser's message.

    gpxpy accepts any root element and ``nan``/``inf`` numbers; both are
    rejected here.
    """
    # leading whitespace before the XML declaration is rejected by the parser
    text = text.strip()
    try:
        gpx = gpxpy.parse(text)
    except (gpxpy.gpx.GPXException, ValueError) as e:
        raise GpxParseError(f"Error parsing GPX: {e}") from e

    tag = root_tag(text)
    if tag is None or local_name(tag) != ROOT_TAG:
        raise GpxParseError(f"Error parsing GPX: root element must be <{ROOT_TAG}>, found <{tag}>")
    _check_finite(gpx)
    return gpx


def serialize_document(gpx: gpxpy.gpx.GPX) -> str:
    try:
        return gpx.to_xml()
    except (gpxpy.gpx.GPXException, ValueError, TypeError) as e:
        raise GpxSerializationError(f"Serialization error: {e}") from e


def iter_points(gpx: gpxpy.gpx.GPX):
    for track in gpx.tracks:
        for segment in track.segments:
            yield from segment.points


def count_points(gpx: gpxpy.gpx.GPX) -> int:
    return sum(len(segment.points) for track in gpx.tracks for segment in track.segments)


def count_segments(gpx: gpxpy.gpx.GPX) -> int:
    return sum(len(track.segments) for track in gpx.tracks)
