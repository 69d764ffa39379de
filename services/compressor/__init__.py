"""
Time-series compressor service package.

Reduces streams of flat, timestamped JSON records into windowed
aggregates before they are handed to a storage or messaging sink.

Modules:
- config: compressor settings and default resolution
- fields: dotted-path lookup and loose JSON coercion
- aggregator: numeric reductions (sum, avg, min, max, ...)
- engine: single-payload grouping engine
- batch: bounded-concurrency batch runner
- ratio: size reduction helper
- loader: YAML configuration loading
- handler: per-message seam with logging and metrics
- main: command-line entry point
"""

from .aggregator import aggregate
from .config import CompressorConfig, resolve_config
from .compressor import TimeSeriesCompressor
from .engine import GroupingEngine
from .batch import BatchRunner
from .ratio import compression_ratio

__all__ = [
    "aggregate",
    "CompressorConfig",
    "resolve_config",
    "TimeSeriesCompressor",
    "GroupingEngine",
    "BatchRunner",
    "compression_ratio",
]
