"""Entry points exposed to the host boundary."""

import logging

from .analyzer import analyze_gpx
from .codec import compress_gpx
from .errors import GpxProcessingError, InvalidFormatError
from .reducer import reduce_gpx
from .schema import ProcessResult
from .validator import validate_gpx

logger = logging.getLogger(__name__)


def reduce_compress_gpx(text: str) -> bytes:
    """
    Validate, reduce and gzip a GPX document.

    An analysis pass runs first for its log output only; its result and
    any failure it raises are discarded.

    Raises:
        InvalidFormatError: input fails validate_gpx
    """
    if not validate_gpx(text):
        raise InvalidFormatError()

    try:
        analysis = analyze_gpx(text)
        logger.info(
            "GPX analysis: %d points, %d -> %d bytes",
            analysis.point_count, analysis.original_size_bytes, analysis.compressed_size_bytes,
        )
    except GpxProcessingError as e:
        logger.info("GPX analysis skipped: %s", e.detail)

    return compress_gpx(reduce_gpx(text))


def process_gpx_with_analytics(text: str) -> ProcessResult:
    """
    Analyze, then compress. Analysis success does not imply compression success.

    The analysis runs twice: once here for the returned result, and once
    more, discarded, inside reduce_compress_gpx.
    """
    analysis = analyze_gpx(text)
    data = reduce_compress_gpx(text)
    return ProcessResult(analysis=analysis, data=data)
