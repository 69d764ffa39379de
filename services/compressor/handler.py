"""
Per-message compression handler.

This is the seam a transport (NATS, Kafka, a file reader) calls once per
inbound payload. It compresses, logs the size reduction and records
Prometheus metrics; delivery and subscriptions stay with the caller.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence

import structlog

from shared.framework.metrics import MetricsCollector
from shared.utils.errors import DataProcessingError, create_error_context
from shared.utils.logging import add_correlation_id

from .compressor import TimeSeriesCompressor
from .engine import Payload
from .ratio import payload_size

logger = structlog.get_logger(__name__)


class CompressionHandler:
    """Compresses single payloads and batches with logging and metrics."""

    def __init__(
        self,
        compressor: TimeSeriesCompressor,
        metrics: Optional[MetricsCollector] = None,
        service_name: str = "timeseries_compressor",
    ) -> None:
        self.compressor = compressor
        self.service_name = service_name
        self.metrics = metrics or MetricsCollector(service_name)

        self.metrics_messages = self.metrics.create_counter(
            "messages_total",
            "Number of payloads handled by status",
            labels=["status"],
        )
        self.metrics_bytes = self.metrics.create_counter(
            "bytes_total",
            "Payload bytes by direction",
            labels=["direction"],
        )
        self.metrics_duration = self.metrics.create_histogram(
            "compression_duration_seconds",
            "Time spent compressing one payload",
        )

    def _logger(self, correlation_id: Optional[str]):
        if correlation_id:
            return add_correlation_id(logger, correlation_id)
        return logger

    def handle(self, data: Payload, correlation_id: Optional[str] = None) -> bytes:
        """Compress one payload.

        `correlation_id` is the transport's message id, if it has one; it is
        bound to every log line and attached to raised errors.

        Raises:
            InputFormatError: If the payload is not a JSON array.
            SerializationError: If the aggregated output cannot be encoded.
        """
        log = self._logger(correlation_id)
        raw_bytes = payload_size(data)
        started = time.perf_counter()
        try:
            compressed = self.compressor.compress_json(data)
        except DataProcessingError as e:
            self.metrics_messages.labels(status="failed").inc()
            self.metrics.record_error(e.error_code, "compressor")
            if e.context is None:
                e.context = create_error_context(
                    self.service_name,
                    "compress",
                    correlation_id=correlation_id,
                    metadata={"raw_bytes": raw_bytes},
                )
            log.warning("Failed to compress message", **e.to_dict())
            raise
        except Exception as e:
            self.metrics_messages.labels(status="failed").inc()
            self.metrics.record_error(type(e).__name__, "compressor")
            log.error("Unexpected compression error", error=str(e), exc_info=True)
            raise
        finally:
            self.metrics_duration.observe(time.perf_counter() - started)

        self._record_success(data, compressed, log)
        return compressed

    def handle_batch(
        self, payloads: Sequence[Payload], correlation_id: Optional[str] = None
    ) -> List[Optional[bytes]]:
        """Compress a batch; failed items come back as None."""
        results = self.compressor.compress_batch(payloads)
        self._record_batch(payloads, results, self._logger(correlation_id))
        return results

    async def handle_batch_async(
        self, payloads: Sequence[Payload], correlation_id: Optional[str] = None
    ) -> List[Optional[bytes]]:
        results = await self.compressor.compress_batch_async(payloads)
        self._record_batch(payloads, results, self._logger(correlation_id))
        return results

    def _record_batch(self, payloads: Sequence[Payload], results: List[Optional[bytes]], log) -> None:
        failed = 0
        for payload, result in zip(payloads, results):
            if result is None:
                failed += 1
                self.metrics_messages.labels(status="failed").inc()
            else:
                self._record_success(payload, result, log)
        if failed:
            log.warning("Batch items failed", failed=failed, items=len(payloads))

    def _record_success(self, raw: Payload, compressed: bytes, log) -> None:
        raw_bytes = payload_size(raw)
        ratio = self.compressor.get_compression_ratio(raw_bytes, compressed)

        self.metrics_messages.labels(status="success").inc()
        self.metrics_bytes.labels(direction="in").inc(raw_bytes)
        self.metrics_bytes.labels(direction="out").inc(len(compressed))

        log.info(
            "Compressed message",
            raw_bytes=raw_bytes,
            compressed_bytes=len(compressed),
            reduction_pct=round(ratio * 100, 2),
        )
