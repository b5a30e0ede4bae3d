"""Descriptive statistics over a GPX document and its pipeline artifacts."""

import logging
import time
from contextlib import contextmanager
from typing import Optional

import gpxpy.gpx

from .config import STAGE_COMPRESSION, STAGE_PARSING, STAGE_REDUCTION
from .codec import compress_gpx, decompress_gpx
from .document import count_points, count_segments, iter_points, parse_document, serialize_document
from .errors import GpxProcessingError
from .reducer import parse_reduced, reduce_gpx
from .schema import Analysis, BoundingBox, DecompressionCheck
from .validator import byte_length, validate_gpx

logger = logging.getLogger(__name__)


@contextmanager
def _timed(timings: dict, stage: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        timings[stage] = (time.perf_counter() - start) * 1000.0


def ratio(new: int, old: int) -> float:
    """``1 - new/old``, or 0.0 when ``old`` is zero."""
    if old <= 0:
        return 0.0
    return 1.0 - (new / old)


def elevation_range(gpx: gpxpy.gpx.GPX) -> Optional[tuple[float, float]]:
    elevations = [p.elevation for p in iter_points(gpx) if p.elevation is not None]
    if not elevations:
        return None
    return min(elevations), max(elevations)


def bounding_box(gpx: gpxpy.gpx.GPX) -> Optional[BoundingBox]:
    lats = []
    lons = []
    for p in iter_points(gpx):
        lats.append(p.latitude)
        lons.append(p.longitude)
    if not lats:
        return None
    return BoundingBox(min_lat=min(lats), max_lat=max(lats), min_lon=min(lons), max_lon=max(lons))


def verify_round_trip(compressed: bytes) -> DecompressionCheck:
    """
    Decompress, re-read and re-serialize compressed output as full GPX.

    Failures are captured in the result instead of raised.
    """
    try:
        text = decompress_gpx(compressed)
        restored = serialize_document(parse_reduced(text).to_gpx())
    except GpxProcessingError as e:
        logger.warning("Round-trip check failed: %s", e.detail)
        return DecompressionCheck(decompressed_valid=False, decompressed_error=e.detail)

    valid = validate_gpx(restored)
    return DecompressionCheck(
        decompressed_size=byte_length(restored),
        decompressed_valid=valid,
        decompressed_error=None if valid else "Restored GPX failed validation",
    )


def analyze_gpx(text: str) -> Analysis:
    """
    Run the reduce/compress pipeline and describe what it did.

    Original-document statistics (counts, elevation range, bounding box)
    come from the unreduced input. Parsing, reduction and compression
    failures abort the call; the round-trip check never does.

    Args:
        text: GPX XML content

    Returns:
        Analysis
    """
    timings: dict[str, float] = {}

    with _timed(timings, STAGE_PARSING):
        original = parse_document(text)

    original_size = byte_length(text)
    point_count = count_points(original)

    with _timed(timings, STAGE_REDUCTION):
        reduced_text = reduce_gpx(text)
    reduced_point_count = parse_reduced(reduced_text).point_count()

    with _timed(timings, STAGE_COMPRESSION):
        compressed = compress_gpx(reduced_text)

    analysis = Analysis(
        original_size_bytes=original_size,
        reduced_size_bytes=byte_length(reduced_text),
        compressed_size_bytes=len(compressed),
        compression_ratio=ratio(len(compressed), original_size),
        point_count=point_count,
        reduced_point_count=reduced_point_count,
        point_reduction_ratio=ratio(reduced_point_count, point_count),
        tracks_count=len(original.tracks),
        segments_count=count_segments(original),
        elevation_range=elevation_range(original),
        bounding_box=bounding_box(original),
        timing_ms=timings,
        **verify_round_trip(compressed).model_dump(),
    )
    logger.debug(
        "Analyzed %d points: %d -> %d bytes (ratio %.3f)",
        point_count, original_size, len(compressed), analysis.compression_ratio,
    )
    return analysis
