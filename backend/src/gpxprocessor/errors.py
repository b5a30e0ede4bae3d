"""Central error types raised by the processing pipeline."""

from __future__ import annotations


class GpxProcessingError(RuntimeError):
    """Base error for every pipeline failure.

    ``code`` is a stable machine-readable kind; ``detail`` is the
    human-readable message surfaced to callers.
    """

    code = "processing_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.detail}


class InputTooLargeError(GpxProcessingError):
    """Raised when the input exceeds the byte ceiling."""

    code = "input_too_large"

    def __init__(self, size: int, limit: int):
        super().__init__(f"GPX file too large ({size} bytes > {limit} max)")
        self.size = size
        self.limit = limit

    def to_dict(self) -> dict:
        return {**super().to_dict(), "size": self.size, "limit": self.limit}


class GpxParseError(GpxProcessingError):
    """Raised when the XML or GPX structure cannot be parsed."""

    code = "parse_error"


class TooManyPointsError(GpxProcessingError):
    """Raised when a document holds more track points than allowed."""

    code = "too_many_points"

    def __init__(self, count: int, limit: int):
        super().__init__(f"GPX file contains too many points ({count} > {limit} max)")
        self.count = count
        self.limit = limit

    def to_dict(self) -> dict:
        return {**super().to_dict(), "count": self.count, "limit": self.limit}


class GpxSerializationError(GpxProcessingError):
    """Raised when a document cannot be written back to text."""

    code = "serialization_error"


class CompressionError(GpxProcessingError):
    """Raised when the gzip encoder fails to write or finish."""

    code = "compression_error"


class DecompressionError(GpxProcessingError):
    """Raised on bad gzip framing or non UTF-8 payloads."""

    code = "decompression_error"


class InvalidFormatError(GpxProcessingError):
    """Raised when input fails the validation gate."""

    code = "invalid_format"

    def __init__(self, detail: str = "Invalid GPX format"):
        super().__init__(detail)


__all__ = [
    "GpxProcessingError",
    "InputTooLargeError",
    "GpxParseError",
    "TooManyPointsError",
    "GpxSerializationError",
    "CompressionError",
    "DecompressionError",
    "InvalidFormatError",
]
