"""
Time-series compressor facade.

Bundles the grouping engine, the batch runner and the ratio helper
behind one object built from a (possibly partial) configuration.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .batch import BatchRunner
from .config import CompressorConfig, resolve_config
from .engine import GroupingEngine, Payload
from .ratio import ByteCount, compression_ratio


class TimeSeriesCompressor:
    """Reduces timestamped JSON records into windowed aggregates."""

    def __init__(self, config: Optional[CompressorConfig] = None) -> None:
        self.config = resolve_config(config)
        self.engine = GroupingEngine(self.config)
        self.batch_runner = BatchRunner(self.engine)

    def compress_json(self, data: Payload) -> bytes:
        return self.engine.compress_json(data)

    def compress_batch(self, payloads: Sequence[Payload]) -> List[Optional[bytes]]:
        return self.batch_runner.run(payloads)

    async def compress_batch_async(self, payloads: Sequence[Payload]) -> List[Optional[bytes]]:
        return await self.batch_runner.run_async(payloads)

    @staticmethod
    def get_compression_ratio(raw: ByteCount, compressed: ByteCount) -> float:
        return compression_ratio(raw, compressed)
