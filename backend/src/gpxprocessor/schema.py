"""Pydantic schema models for reduced documents and analysis results."""

from typing import Optional

import gpxpy.gpx
from pydantic import BaseModel, ConfigDict, Field


class ReducedPoint(BaseModel):
    """Precision-truncated track point."""

    lat: float
    lon: float
    ele: Optional[float] = 0.0


class ReducedSegment(BaseModel):
    """Ordered run of reduced points."""

    trkpt: list[ReducedPoint] = Field(default_factory=list)


class ReducedTrack(BaseModel):
    """Track holding only its segments; names and timestamps are dropped."""

    trkseg: list[ReducedSegment] = Field(default_factory=list)


class ReducedDocument(BaseModel):
    """Geometry-only counterpart of a parsed GPX document."""

    trk: list[ReducedTrack] = Field(default_factory=list)

    def point_count(self) -> int:
        return sum(len(seg.trkpt) for track in self.trk for seg in track.trkseg)

    def to_gpx(self) -> gpxpy.gpx.GPX:
        """Rebuild a full GPX document from the reduced geometry."""
        gpx = gpxpy.gpx.GPX()
        for track in self.trk:
            gpx_track = gpxpy.gpx.GPXTrack()
            gpx.tracks.append(gpx_track)
            for seg in track.trkseg:
                gpx_segment = gpxpy.gpx.GPXTrackSegment()
                gpx_track.segments.append(gpx_segment)
                for pt in seg.trkpt:
                    gpx_segment.points.append(
                        gpxpy.gpx.GPXTrackPoint(pt.lat, pt.lon, elevation=pt.ele)
                    )
        return gpx


class BoundingBox(BaseModel):
    """Minimal lat/lon rectangle enclosing every point."""

    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


class DecompressionCheck(BaseModel):
    """Outcome of decompressing and re-validating pipeline output."""

    model_config = ConfigDict(frozen=True)

    decompressed_size: int = 0
    decompressed_valid: bool = False
    decompressed_error: Optional[str] = None


class Analysis(BaseModel):
    """Metrics describing one run of the reduce/compress pipeline."""

    model_config = ConfigDict(frozen=True)

    original_size_bytes: int
    reduced_size_bytes: int
    compressed_size_bytes: int
    compression_ratio: float
    point_count: int
    reduced_point_count: int
    point_reduction_ratio: float
    tracks_count: int
    segments_count: int
    elevation_range: Optional[tuple[float, float]] = None
    bounding_box: Optional[BoundingBox] = None
    timing_ms: dict[str, float] = Field(default_factory=dict)
    # round-trip integrity check
    decompressed_size: int = 0
    decompressed_valid: bool = False
    decompressed_error: Optional[str] = None


class ProcessResult(BaseModel):
    """Analysis together with the compressed deliverable."""

    model_config = ConfigDict(frozen=True)

    analysis: Analysis
    data: bytes
