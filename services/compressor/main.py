"""
Command-line entry point for the time-series compressor.

Reads a JSON payload from a file or stdin, compresses it and writes the
result to a file or stdout. With ``--batch`` the input is a JSON array of
payload arrays, each compressed independently; failed items come out as
``null``.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import structlog

from shared.framework.config import ServiceConfig
from shared.utils.errors import ConfigurationError, DataProcessingError, InputFormatError
from shared.utils.logging import setup_logging

from .compressor import TimeSeriesCompressor
from .config import CompressorConfig
from .handler import CompressionHandler
from .loader import load_config

SERVICE_NAME = "timeseries_compressor"

logger = structlog.get_logger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compress timestamped JSON records into windowed aggregates.")
    parser.add_argument("--config", type=Path, default=None, help="Path to the YAML config file.")
    parser.add_argument("--input", type=Path, default=None, help="Input JSON file. Defaults to stdin.")
    parser.add_argument("--output", type=Path, default=None, help="Output JSON file. Defaults to stdout.")
    parser.add_argument("--batch", action="store_true", help="Treat the input as an array of payload arrays.")
    parser.add_argument("--correlation-id", type=str, default=None, help="Id bound to log lines and errors for this run.")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (debug, info, warning, error).")
    parser.add_argument("--log-format", choices=["json", "console"], default=None, help="Log output format.")
    return parser.parse_args(argv)


def _resolve_compressor_config(explicit: Optional[Path], service_config: ServiceConfig) -> CompressorConfig:
    if explicit is not None:
        return load_config(explicit)

    default_path = Path(service_config.config_path)
    if default_path.is_file():
        return load_config(default_path)

    logger.info("No config file found, using defaults", path=str(default_path))
    return CompressorConfig.default()


def _read_input(path: Optional[Path]) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    return path.read_bytes()


def _write_output(path: Optional[Path], data: bytes) -> None:
    if path is None:
        sys.stdout.buffer.write(data + b"\n")
        sys.stdout.buffer.flush()
        return
    path.write_bytes(data)


def _split_batch(data: bytes) -> List[bytes]:
    try:
        document = json.loads(data)
    except ValueError as exc:
        raise InputFormatError("expected JSON array of payloads", payload_size=len(data)) from exc
    if not isinstance(document, list):
        raise InputFormatError("expected JSON array of payloads", payload_size=len(data))
    return [json.dumps(item, separators=(",", ":")).encode("utf-8") for item in document]


def _join_batch(results: Sequence[Optional[bytes]]) -> bytes:
    return b"[" + b",".join(result if result is not None else b"null" for result in results) + b"]"


def run(args: argparse.Namespace, service_config: ServiceConfig) -> int:
    try:
        compressor_config = _resolve_compressor_config(args.config, service_config)
    except ConfigurationError as e:
        logger.error("Failed to load config", error=e.message, **e.details)
        return 1

    handler = CompressionHandler(TimeSeriesCompressor(compressor_config), service_name=SERVICE_NAME)
    handler.metrics.update_service_info(version="1.0.0", environment=service_config.environment)

    try:
        raw = _read_input(args.input)
    except OSError as e:
        logger.error("Failed to read input", path=str(args.input), error=str(e))
        return 1

    try:
        if args.batch:
            results = handler.handle_batch(_split_batch(raw), correlation_id=args.correlation_id)
            output = _join_batch(results)
        else:
            output = handler.handle(raw, correlation_id=args.correlation_id)
    except DataProcessingError as e:
        logger.error("Compression failed", **e.to_dict())
        return 1

    try:
        _write_output(args.output, output)
    except OSError as e:
        logger.error("Failed to write output", path=str(args.output), error=str(e))
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    service_config = ServiceConfig.from_env(SERVICE_NAME)

    setup_logging(
        SERVICE_NAME,
        log_level=args.log_level or service_config.observability.log_level,
        format_type=args.log_format or service_config.observability.log_format,
    )
    return run(args, service_config)


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
