"""
YAML configuration loading for the compressor.

The file layout is::

    timestamp: ts
    values: [cpu]
    groupby: [host, service]
    unique: [customer_id]
    method: avg
    window: 5m
    workers: 8

Unknown top-level sections (for example a transport block) are ignored.
"""

from __future__ import annotations

import math
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Union

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shared.utils.errors import ConfigurationError

from .config import CompressorConfig, resolve_config

logger = structlog.get_logger(__name__)

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h|d)")

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}


def _to_timedelta(seconds: float, original: Any) -> timedelta:
    if not math.isfinite(seconds):
        raise ValueError(f"Invalid duration: {original!r}")
    try:
        return timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ValueError(f"Duration out of range: {original!r}") from exc


def parse_duration(value: Union[str, int, float, timedelta, None]) -> timedelta:
    """Parse a duration such as ``"30s"``, ``"5m"``, ``"1h30m"`` or ``"250ms"``.

    Bare numbers (and numeric strings) are read as seconds; ``None`` and
    ``""`` mean "unset" and become a zero duration.

    Raises:
        ValueError: If the string is not a recognised duration.
    """
    if value is None:
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return _to_timedelta(float(value), value)

    text = str(value).strip()
    if not text:
        return timedelta(0)

    try:
        numeric = float(text)
    except ValueError:
        pass
    else:
        return _to_timedelta(numeric, value)

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    seconds = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position == 0 or position != len(text):
        raise ValueError(f"Invalid duration: {value!r}")
    return _to_timedelta(sign * seconds, value)


class CompressorFileConfig(BaseModel):
    """Schema of the compressor section of the YAML file."""

    model_config = ConfigDict(extra="ignore")

    timestamp: str = ""
    values: List[str] = Field(default_factory=list)
    groupby: List[str] = Field(default_factory=list)
    unique: List[str] = Field(default_factory=list)
    method: str = ""
    window: timedelta = Field(default_factory=timedelta)
    workers: int = 0

    @field_validator("timestamp", "method", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("values", "groupby", "unique", mode="before")
    @classmethod
    def _coerce_field_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("window", mode="before")
    @classmethod
    def _coerce_window(cls, value: Any) -> timedelta:
        return parse_duration(value)

    @field_validator("workers", mode="before")
    @classmethod
    def _coerce_workers(cls, value: Any) -> Any:
        return 0 if value is None else value

    def to_compressor_config(self) -> CompressorConfig:
        return resolve_config(
            CompressorConfig(
                timestamp_field=self.timestamp,
                value_fields=self.values,
                group_by_fields=self.groupby,
                unique_fields=self.unique,
                aggregation_method=self.method,
                time_window=self.window,
                workers=self.workers,
            )
        )


def config_from_mapping(data: Dict[str, Any]) -> CompressorConfig:
    """Validate an already-parsed mapping and resolve it."""
    try:
        file_config = CompressorFileConfig.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid compressor configuration: {exc.error_count()} error(s)",
            config_key=key or None,
            config_value=first.get("input"),
            details={"errors": [error["msg"] for error in exc.errors()]},
        ) from exc
    return file_config.to_compressor_config()


def load_config(path: Union[str, Path]) -> CompressorConfig:
    """Read a YAML file and return the resolved compressor configuration.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read config file {config_path}: {exc}",
            config_key="path",
            config_value=str(config_path),
        ) from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Malformed YAML in {config_path}",
            config_key="path",
            config_value=str(config_path),
            details={"reason": str(exc)},
        ) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping",
            config_key="path",
            config_value=str(config_path),
        )

    config = config_from_mapping(data)
    logger.info("Loaded compressor config", path=str(config_path), **config.to_dict())
    return config
