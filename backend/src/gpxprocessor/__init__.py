"""GPX reduction, compression and analysis."""

from .analyzer import analyze_gpx
from .codec import compress_gpx, decompress_gpx
from .pipeline import process_gpx_with_analytics, reduce_compress_gpx
from .reducer import reduce_gpx
from .schema import Analysis, ProcessResult
from .validator import validate_gpx

__all__ = [
    "analyze_gpx",
    "compress_gpx",
    "decompress_gpx",
    "process_gpx_with_analytics",
    "reduce_compress_gpx",
    "reduce_gpx",
    "validate_gpx",
    "Analysis",
    "ProcessResult",
]
