"""
GPX size reduction.

Parses a GPX document, keeps only track geometry, rounds coordinates and
elevation to two decimal places and writes the result as a compact XML
fragment::

    <trk><trkseg><trkpt lat="45.12" lon="-122.68"><ele>10.2</ele></trkpt></trkseg></trk>

The fragment has no root element; ``parse_reduced`` wraps it in ``<gpx>``
before reading it back.
"""

import logging
import math
import xml.etree.ElementTree as ET
from typing import Optional

import gpxpy.gpx

from .config import COORD_DECIMALS, MAX_INPUT_BYTES, MAX_POINTS, get_settings
from .document import count_points, parse_document
from .errors import GpxParseError, GpxSerializationError, InputTooLargeError, TooManyPointsError
from .schema import ReducedDocument, ReducedPoint, ReducedSegment, ReducedTrack
from .validator import byte_length

logger = logging.getLogger(__name__)

ROOT_WRAPPER = "gpx"


def round_half_away(value: float, decimals: int = COORD_DECIMALS) -> float:
    """Round ``value`` to ``decimals`` places, halves away from zero."""
    factor = 10 ** decimals
    scaled = abs(value * factor)
    whole = math.floor(scaled)
    if scaled - whole >= 0.5:
        whole += 1
    # + 0.0 turns -0.0 into 0.0
    return math.copysign(whole, value) / factor + 0.0


def reduce_document(gpx: gpxpy.gpx.GPX, *, keep_missing_elevation: bool = False) -> ReducedDocument:
    """Map a parsed GPX document to its geometry-only reduced form."""
    tracks = []
    for track in gpx.tracks:
        segments = []
        for segment in track.segments:
            points = []
            for point in segment.points:
                if point.elevation is not None:
                    ele: Optional[float] = round_half_away(point.elevation)
                else:
                    ele = None if keep_missing_elevation else 0.0
                points.append(ReducedPoint(
                    lat=round_half_away(point.latitude),
                    lon=round_half_away(point.longitude),
                    ele=ele,
                ))
            segments.append(ReducedSegment(trkpt=points))
        tracks.append(ReducedTrack(trkseg=segments))
    return ReducedDocument(trk=tracks)


def serialize_reduced(doc: ReducedDocument) -> str:
    """Write a reduced document as a root-less XML fragment."""
    parts = []
    try:
        for track in doc.trk:
            trk_el = ET.Element("trk")
            for seg in track.trkseg:
                seg_el = ET.SubElement(trk_el, "trkseg")
                for pt in seg.trkpt:
                    pt_el = ET.SubElement(seg_el, "trkpt", lat=repr(pt.lat), lon=repr(pt.lon))
                    if pt.ele is not None:
                        ET.SubElement(pt_el, "ele").text = repr(pt.ele)
            parts.append(ET.tostring(trk_el, encoding="unicode"))
    except (TypeError, ValueError) as e:
        raise GpxSerializationError(f"Serialization error: {e}") from e
    return "".join(parts)


def _to_float(raw: str, name: str) -> float:
    try:
        value = float(raw)
    except ValueError as e:
        raise GpxParseError(f"Error parsing reduced GPX: invalid {name} {raw!r}") from e
    if not math.isfinite(value):
        raise GpxParseError(f"Error parsing reduced GPX: invalid {name} {raw!r}")
    return value


def _float_attr(el: ET.Element, name: str) -> float:
    raw = el.get(name)
    if raw is None:
        raise GpxParseError(f"Error parsing reduced GPX: <{el.tag}> missing '{name}'")
    return _to_float(raw, name)


def parse_reduced(text: str) -> ReducedDocument:
    """Read a reduced fragment back, wrapping it in a root element first."""
    try:
        root = ET.fromstring(f"<{ROOT_WRAPPER}>{text}</{ROOT_WRAPPER}>")
    except ET.ParseError as e:
        raise GpxParseError(f"Error parsing reduced GPX: {e}") from e

    tracks = []
    for trk_el in root.findall("trk"):
        segments = []
        for seg_el in trk_el.findall("trkseg"):
            points = []
            for pt_el in seg_el.findall("trkpt"):
                ele_el = pt_el.find("ele")
                ele = None
                if ele_el is not None and ele_el.text:
                    ele = _to_float(ele_el.text, "ele")
                points.append(ReducedPoint(
                    lat=_float_attr(pt_el, "lat"),
                    lon=_float_attr(pt_el, "lon"),
                    ele=ele,
                ))
            segments.append(ReducedSegment(trkpt=points))
        tracks.append(ReducedTrack(trkseg=segments))
    return ReducedDocument(trk=tracks)


def reduce_gpx(text: str) -> str:
    """
    Reduce a GPX document to its rounded geometry.

    Args:
        text: GPX XML content

    Returns:
        str: reduced fragment (see module docstring)

    Raises:
        InputTooLargeError: input exceeds MAX_INPUT_BYTES
        GpxParseError: input is not parseable GPX
        TooManyPointsError: more than MAX_POINTS track points
    """
    size = byte_length(text)
    if size > MAX_INPUT_BYTES:
        raise InputTooLargeError(size, MAX_INPUT_BYTES)

    try:
        gpx = parse_document(text)
    except GpxParseError as e:
        raise GpxParseError(f"Error reducing gpx file: {e.detail}") from e

    point_count = count_points(gpx)
    if point_count > MAX_POINTS:
        raise TooManyPointsError(point_count, MAX_POINTS)

    reduced = reduce_document(gpx, keep_missing_elevation=get_settings().keep_missing_elevation)
    out = serialize_reduced(reduced)
    logger.debug("Reduced %d points: %d -> %d bytes", point_count, size, byte_length(out))
    return out
