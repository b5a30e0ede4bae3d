"""Tests for GPX analysis."""

import pytest
from pydantic import ValidationError

from gpxprocessor import analyzer
from gpxprocessor.analyzer import analyze_gpx, ratio, verify_round_trip
from gpxprocessor.codec import compress_gpx
from gpxprocessor.errors import DecompressionError, GpxParseError, TooManyPointsError
from gpxprocessor.schema import DecompressionCheck

from gpx_samples import (
    EMPTY_GPX,
    EXAMPLE_GPX,
    INF_ELE_GPX,
    KML_ROOT_GPX,
    MALFORMED_GPX,
    MULTI_TRACK_GPX,
    NAN_LAT_GPX,
    NO_ELEVATION_GPX,
    build_gpx,
)


def test_ratio():
    assert ratio(25, 100) == 0.75
    assert ratio(100, 100) == 0.0
    assert ratio(5, 0) == 0.0


class TestAnalyzeGpx:
    """Metrics computed by analyze_gpx."""

    def test_example_document(self):
        a = analyze_gpx(EXAMPLE_GPX)
        assert a.point_count == 3
        assert a.reduced_point_count == 3
        assert a.point_reduction_ratio == 0.0
        assert a.tracks_count == 1
        assert a.segments_count == 1
        assert a.elevation_range == (10.2, 12.7)
        assert a.bounding_box.min_lat == 45.1234
        assert a.bounding_box.max_lat == 45.1238
        assert a.bounding_box.min_lon == -122.6795
        assert a.bounding_box.max_lon == -122.6789

    def test_sizes_and_ratio(self):
        a = analyze_gpx(EXAMPLE_GPX)
        assert a.original_size_bytes == len(EXAMPLE_GPX.encode("utf-8"))
        assert 0 < a.reduced_size_bytes < a.original_size_bytes
        assert 0 < a.compressed_size_bytes < a.original_size_bytes
        assert 0.0 <= a.compression_ratio <= 1.0
        expected = 1 - a.compressed_size_bytes / a.original_size_bytes
        assert a.compression_ratio == pytest.approx(expected)

    def test_timings_recorded(self):
        a = analyze_gpx(EXAMPLE_GPX)
        assert set(a.timing_ms) == {"parsing", "reduction", "compression"}
        assert all(v >= 0.0 for v in a.timing_ms.values())

    def test_round_trip_check_passes(self):
        a = analyze_gpx(EXAMPLE_GPX)
        assert a.decompressed_valid is True
        assert a.decompressed_error is None
        assert a.decompressed_size > 0

    def test_multi_track_counts(self):
        a = analyze_gpx(MULTI_TRACK_GPX)
        assert a.tracks_count == 2
        assert a.segments_count == 3
        assert a.point_count == 4
        assert a.elevation_range == (-3.25, 7.5)
        assert a.bounding_box.min_lat == -33.8688
        assert a.bounding_box.max_lon == 151.2093

    def test_no_elevation(self):
        a = analyze_gpx(NO_ELEVATION_GPX)
        assert a.elevation_range is None
        assert a.bounding_box is not None

    def test_empty_document(self):
        a = analyze_gpx(EMPTY_GPX)
        assert a.point_count == 0
        assert a.reduced_point_count == 0
        assert a.point_reduction_ratio == 0.0
        assert a.elevation_range is None
        assert a.bounding_box is None
        assert a.decompressed_valid is True

    def test_parse_error_aborts(self):
        with pytest.raises(GpxParseError):
            analyze_gpx(MALFORMED_GPX)

    @pytest.mark.parametrize("text", [NAN_LAT_GPX, INF_ELE_GPX, KML_ROOT_GPX])
    def test_rejected_documents_abort_with_parse_error(self, text):
        with pytest.raises(GpxParseError):
            analyze_gpx(text)

    def test_too_many_points_aborts(self):
        with pytest.raises(TooManyPointsError):
            analyze_gpx(build_gpx(100_001))

    def test_round_trip_failure_is_captured(self, monkeypatch):
        def boom(data):
            raise DecompressionError("Decompression error: boom")

        monkeypatch.setattr(analyzer, "decompress_gpx", boom)
        a = analyze_gpx(EXAMPLE_GPX)
        assert a.decompressed_valid is False
        assert a.decompressed_error == "Decompression error: boom"
        assert a.decompressed_size == 0
        assert a.point_count == 3

    def test_analysis_is_immutable(self):
        a = analyze_gpx(EXAMPLE_GPX)
        with pytest.raises(ValidationError):
            a.point_count = 10


class TestVerifyRoundTrip:
    """Direct checks of the round-trip helper."""

    def test_returns_decompression_check(self):
        result = verify_round_trip(compress_gpx('<trk><trkseg><trkpt lat="1.5" lon="2.5"/></trkseg></trk>'))
        assert isinstance(result, DecompressionCheck)
        assert result.decompressed_valid is True

    def test_garbage_bytes(self):
        result = verify_round_trip(b"not gzip")
        assert result.decompressed_valid is False
        assert "Decompression error" in result.decompressed_error

    def test_unreadable_reduced_text(self):
        result = verify_round_trip(compress_gpx("<trk><trkseg>"))
        assert result.decompressed_valid is False
        assert "Error parsing reduced GPX" in result.decompressed_error

    def test_restored_document_is_full_gpx(self, monkeypatch):
        restored = {}
        real = analyzer.validate_gpx

        def spy(text):
            restored["text"] = text
            return real(text)

        monkeypatch.setattr(analyzer, "validate_gpx", spy)
        result = verify_round_trip(compress_gpx('<trk><trkseg><trkpt lat="1.5" lon="2.5"><ele>3.0</ele></trkpt></trkseg></trk>'))
        assert result.decompressed_valid is True
        assert restored["text"].startswith("<?xml")
        assert "<gpx" in restored["text"]
        assert result.decompressed_size == len(restored["text"].encode("utf-8"))
