"""FastAPI application exposing the GPX pipeline."""

import base64
import logging
from typing import Any, Dict

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse, Response
from starlette.middleware.cors import CORSMiddleware

from .config import (
    COMPRESSION_LEVEL,
    COORD_DECIMALS,
    MAX_INPUT_BYTES,
    MAX_POINTS,
    get_settings,
)
from .analyzer import analyze_gpx
from .codec import decompress_gpx
from .errors import (
    CompressionError,
    DecompressionError,
    GpxParseError,
    GpxProcessingError,
    GpxSerializationError,
    InputTooLargeError,
    InvalidFormatError,
    TooManyPointsError,
)
from .logging_setup import configure_logging
from .pipeline import process_gpx_with_analytics, reduce_compress_gpx
from .uploads import read_upload_text
from .validator import validate_gpx

configure_logging()
_logger = logging.getLogger("gpxprocessor.api")

_STATUS_BY_ERROR = {
    InputTooLargeError: 413,
    TooManyPointsError: 413,
    GpxParseError: 400,
    InvalidFormatError: 400,
    DecompressionError: 400,
    GpxSerializationError: 500,
    CompressionError: 500,
}

# Create FastAPI app
app = FastAPI(
    title="GPX Processor API",
    description="Reduce, compress and analyze GPX track logs",
    version="0.1.0"
)

# CORS: opt-in via env
_settings = get_settings()
_origins = _settings.cors_origin_list()
if _origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if _settings.cors_origins.strip() == "*" else _origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _http_error(exc: GpxProcessingError) -> HTTPException:
    status = next(
        (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
        500,
    )
    return HTTPException(status_code=status, detail=exc.to_dict())


async def _read_gpx(file: UploadFile) -> str:
    content = await file.read()
    try:
        return read_upload_text(file.filename, content, max_bytes=get_settings().max_upload_bytes)
    except GpxProcessingError as e:
        raise _http_error(e)


@app.get("/health")
async def health_check() -> Dict[str, bool]:
    """Health check endpoint."""
    return {"ok": True}


@app.get("/config")
async def get_config() -> Dict[str, Any]:
    """Get processing limits and settings."""
    settings = get_settings()
    return {
        "max_input_bytes": MAX_INPUT_BYTES,
        "max_points": MAX_POINTS,
        "coord_decimals": COORD_DECIMALS,
        "compression_level": COMPRESSION_LEVEL,
        "max_upload_bytes": settings.max_upload_bytes,
        "keep_missing_elevation": settings.keep_missing_elevation,
    }


@app.post("/validate")
async def validate(file: UploadFile = File(..., description="GPX or GPX.GZ file")) -> Dict[str, Any]:
    """
    Run the upload checks and the validation gate on an uploaded file.

    Format failures are reported as ``valid: false`` with their message;
    size and gzip failures are still HTTP errors.
    """
    content = await file.read()
    try:
        text = read_upload_text(file.filename, content, max_bytes=get_settings().max_upload_bytes)
    except InvalidFormatError as e:
        return {"valid": False, "error": e.detail}
    except GpxProcessingError as e:
        raise _http_error(e)
    return {"valid": validate_gpx(text), "error": None}


@app.post("/reduce")
async def reduce_compress(file: UploadFile = File(..., description="GPX or GPX.GZ file")) -> Response:
    """
    Reduce and gzip an uploaded GPX file.

    Returns:
        gzip bytes of the reduced document
    """
    text = await _read_gpx(file)
    try:
        data = reduce_compress_gpx(text)
    except GpxProcessingError as e:
        raise _http_error(e)
    return Response(content=data, media_type="application/gzip")


@app.post("/decompress")
async def decompress(request: Request) -> Response:
    """Decompress a body previously produced by /reduce."""
    body = await request.body()
    try:
        text = decompress_gpx(body)
    except GpxProcessingError as e:
        raise _http_error(e)
    return Response(content=text, media_type="text/plain; charset=utf-8")


@app.post("/analyze")
async def analyze(file: UploadFile = File(..., description="GPX or GPX.GZ file")) -> Dict[str, Any]:
    """Analyze an uploaded GPX file without returning the compressed data."""
    text = await _read_gpx(file)
    try:
        analysis = analyze_gpx(text)
    except GpxProcessingError as e:
        raise _http_error(e)
    return analysis.model_dump(mode="json")


@app.post("/process")
async def process(file: UploadFile = File(..., description="GPX or GPX.GZ file")) -> Dict[str, Any]:
    """
    Analyze and compress an uploaded GPX file.

    Returns:
        Dictionary with the analysis and base64-encoded gzip data
    """
    text = await _read_gpx(file)
    try:
        result = process_gpx_with_analytics(text)
    except GpxProcessingError as e:
        raise _http_error(e)
    return {
        "analysis": result.analysis.model_dump(mode="json"),
        "data": base64.b64encode(result.data).decode("ascii"),
    }


@app.exception_handler(HTTPException)
async def _http_exception_handler(request: Request, exc: HTTPException):
    """Preserve HTTPException status codes and return a unified JSON shape."""
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("message") or detail.get("detail") or str(detail)
        # keep the rest as details, including the error "code"
        details = {k: v for k, v in detail.items() if k not in ("message", "detail")}
    else:
        message = str(detail)
        details = None

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.status_code,
                "type": "http_error",
                "message": message,
                "details": details,
            }
        },
    )


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    _logger.exception("Unhandled server error")
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": 500,
                "type": "internal_error",
                "message": str(exc),
                "details": None,
            }
        },
    )
