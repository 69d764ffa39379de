"""
Compressor configuration and default resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Optional, Tuple

DEFAULT_TIMESTAMP_FIELD = "timestamp"
DEFAULT_VALUE_FIELDS: Tuple[str, ...] = ("value",)
DEFAULT_AGGREGATION_METHOD = "sum"
DEFAULT_TIME_WINDOW = timedelta(minutes=1)
DEFAULT_WORKERS = 4

# Output field used when several value fields collapse into one aggregate
FALLBACK_VALUE_FIELD = "value"


@dataclass(frozen=True)
class CompressorConfig:
    """Settings consumed by the grouping engine and batch runner.

    Every field may be left at its zero value; `resolve_config` fills
    those in with the documented defaults. Lists are stored as tuples so
    a resolved config can be shared read-only across worker threads.
    """

    timestamp_field: str = ""
    value_fields: Tuple[str, ...] = field(default_factory=tuple)
    group_by_fields: Tuple[str, ...] = field(default_factory=tuple)
    unique_fields: Tuple[str, ...] = field(default_factory=tuple)
    aggregation_method: str = ""
    time_window: timedelta = field(default_factory=timedelta)
    workers: int = 0

    def __post_init__(self) -> None:
        # Accept lists from callers, keep tuples internally
        for name in ("value_fields", "group_by_fields", "unique_fields"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value or ()))

    @classmethod
    def default(cls) -> "CompressorConfig":
        """Fully-populated configuration with every default applied."""
        return cls(
            timestamp_field=DEFAULT_TIMESTAMP_FIELD,
            value_fields=DEFAULT_VALUE_FIELDS,
            aggregation_method=DEFAULT_AGGREGATION_METHOD,
            time_window=DEFAULT_TIME_WINDOW,
            workers=DEFAULT_WORKERS,
        )

    @property
    def window_seconds(self) -> int:
        """Window length in whole seconds, 60 when it truncates to zero."""
        seconds = int(self.time_window.total_seconds())
        if seconds == 0:
            return 60
        return seconds

    @property
    def output_value_field(self) -> str:
        if len(self.value_fields) == 1:
            return self.value_fields[0]
        return FALLBACK_VALUE_FIELD

    def to_dict(self) -> dict:
        return {
            "timestamp_field": self.timestamp_field,
            "value_fields": list(self.value_fields),
            "group_by_fields": list(self.group_by_fields),
            "unique_fields": list(self.unique_fields),
            "aggregation_method": self.aggregation_method,
            "time_window_seconds": self.time_window.total_seconds(),
            "workers": self.workers,
        }


def resolve_config(config: Optional[CompressorConfig] = None) -> CompressorConfig:
    """Return a copy of `config` with zero-valued fields replaced by defaults.

    Never raises; resolving an already-resolved config returns an equal one.
    """
    if config is None:
        return CompressorConfig.default()

    changes = {}
    if not config.timestamp_field:
        changes["timestamp_field"] = DEFAULT_TIMESTAMP_FIELD
    if not config.value_fields:
        changes["value_fields"] = DEFAULT_VALUE_FIELDS
    if not config.aggregation_method:
        changes["aggregation_method"] = DEFAULT_AGGREGATION_METHOD
    if not config.time_window:
        changes["time_window"] = DEFAULT_TIME_WINDOW
    if config.workers <= 0:
        changes["workers"] = DEFAULT_WORKERS

    if not changes:
        return config
    return replace(config, **changes)
