"""Configuration module for the GPX processor."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

# --- minimal .env loader (stdlib only) ---
def _load_dotenv():
    p = Path(".env")
    if not p.exists():
        return
    for line in p.read_text(encoding="utf-8").splitlines():
        s = line.strip()
        if not s or s.startswith("#") or "=" not in s:
            continue
        k, v = s.split("=", 1)
        k = k.strip()
        v = v.strip()
        # keep existing OS env if already set
        if k and (k not in os.environ):
            os.environ[k] = v

_load_dotenv()


# Processing ceilings (fixed, not tunable per call)
MAX_INPUT_BYTES = 50_000_000  # 50MB
MAX_POINTS = 100_000
COORD_DECIMALS = 2  # ~1.1km grid
COMPRESSION_LEVEL = 6  # 0-9, moderate

# Cheap pre-flight markers checked before a full parse
XML_DECLARATION = "<?xml"
ROOT_TAG_MARKER = "<gpx"

# Stage names recorded in Analysis.timing_ms
STAGE_PARSING = "parsing"
STAGE_REDUCTION = "reduction"
STAGE_COMPRESSION = "compression"

_TRUTHY = ("on", "true", "1", "yes", "enabled")


class Settings(BaseModel):
    """Process-wide settings read once from the environment."""

    keep_missing_elevation: bool = Field(
        default=False,
        description="Omit <ele> for points without elevation instead of writing 0.0"
    )
    log_level: str = Field(default="INFO", description="Level for the gpxprocessor logger")
    cors_origins: str = Field(default="", description="Comma separated origins, or '*'")
    max_upload_bytes: int = Field(default=MAX_INPUT_BYTES, gt=0)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        keep_val = os.getenv("GPXP_KEEP_MISSING_ELEVATION", "0").lower()
        return cls(
            keep_missing_elevation=keep_val in _TRUTHY,
            log_level=os.getenv("GPXP_LOG_LEVEL", "INFO").upper(),
            cors_origins=os.getenv("GPXP_CORS_ORIGINS", ""),
            max_upload_bytes=int(os.getenv("GPXP_MAX_UPLOAD_BYTES", str(MAX_INPUT_BYTES))),
        )

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
