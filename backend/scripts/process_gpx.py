#!/usr/bin/env python3
"""Reduce, compress or analyze a GPX file from the command line."""

import argparse
import json
import sys
from pathlib import Path

from gpxprocessor.analyzer import analyze_gpx
from gpxprocessor.codec import decompress_gpx
from gpxprocessor.config import get_settings
from gpxprocessor.errors import GpxProcessingError
from gpxprocessor.logging_setup import configure_logging
from gpxprocessor.pipeline import reduce_compress_gpx
from gpxprocessor.uploads import read_upload_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reduce and gzip GPX track logs")
    parser.add_argument("--in", dest="input", required=True, help="Input .gpx or .gpx.gz file")
    parser.add_argument("--out", help="Output file path (compressed data, or text with --decompress)")
    parser.add_argument("--analyze", action="store_true", help="Print analysis JSON to stdout")
    parser.add_argument("--decompress", action="store_true",
                        help="Treat input as compressed output and write the reduced text")
    parser.add_argument("--log-level", default=None, help="Logging level (default: GPXP_LOG_LEVEL or INFO)")
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.out or args.analyze or args.decompress):
        parser.error("nothing to do: pass --out, --analyze or --decompress")
    configure_logging(args.log_level)

    input_path = Path(args.input)
    try:
        raw = input_path.read_bytes()
    except OSError as e:
        print(f"Error reading {input_path}: {e}", file=sys.stderr)
        return 1

    try:
        if args.decompress:
            text = decompress_gpx(raw)
            if args.out:
                Path(args.out).write_text(text, encoding="utf-8")
            else:
                sys.stdout.write(text + "\n")
            return 0

        text = read_upload_text(input_path.name, raw, max_bytes=get_settings().max_upload_bytes)
        if args.analyze:
            print(json.dumps(analyze_gpx(text).model_dump(mode="json"), indent=2))
        if args.out:
            data = reduce_compress_gpx(text)
            output_path = Path(args.out)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(data)
            print(f"Compressed data saved to: {output_path} ({len(data)} bytes)", file=sys.stderr)
    except GpxProcessingError as e:
        print(f"Error [{e.code}]: {e.detail}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
