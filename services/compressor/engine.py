"""
Windowed grouping engine.

Turns one JSON-array payload of flat, timestamped records into a smaller
JSON array holding one aggregated record per (window, group-by values,
unique values) combination.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Sequence, Union

import structlog

from shared.utils.errors import InputFormatError, SerializationError

from .aggregator import aggregate
from .config import CompressorConfig, resolve_config
from .fields import MISSING, as_float, as_int, as_text, compact_number, lookup
from .models import Group, GroupKey, TagTuple, truncating_midpoint

logger = structlog.get_logger(__name__)

Payload = Union[bytes, bytearray, memoryview, str]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class GroupingEngine:
    """Single-pass grouping and aggregation over one payload.

    The engine holds nothing but the resolved config, so one instance can
    serve concurrent calls from several threads; every call builds its own
    group map.
    """

    def __init__(self, config: CompressorConfig | None = None) -> None:
        self.config = resolve_config(config)

    def compress_json(self, data: Payload) -> bytes:
        """Compress a JSON-array payload and return the reduced JSON array.

        Raises:
            InputFormatError: If the payload does not decode to a JSON array.
            SerializationError: If the aggregated output cannot be encoded.
        """
        records = self.decode(data)
        output = self.compress_records(records)
        return self.encode(output)

    def decode(self, data: Payload) -> List[Any]:
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        try:
            document = json.loads(data, parse_constant=_reject_constant)
        except ValueError as exc:
            raise InputFormatError(
                "expected JSON array",
                payload_size=len(data),
                details={"reason": str(exc)},
            ) from exc

        if not isinstance(document, list):
            raise InputFormatError(
                "expected JSON array",
                payload_size=len(data),
                details={"found": type(document).__name__},
            )
        return document

    def encode(self, output: List[Dict[str, Any]]) -> bytes:
        try:
            return json.dumps(
                output,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"failed to encode aggregated output: {exc}",
                group_count=len(output),
            ) from exc

    def compress_records(self, records: Iterable[Any]) -> List[Dict[str, Any]]:
        """Group decoded records and return one output object per group.

        Non-object elements and records whose timestamp is missing or zero
        are skipped. Output order follows group creation order, which
        callers must not rely on.
        """
        config = self.config
        window_seconds = config.window_seconds
        groups: Dict[GroupKey, Group] = {}
        seen = skipped = 0

        for record in records:
            seen += 1
            if not isinstance(record, dict):
                skipped += 1
                continue

            timestamp = as_int(lookup(record, config.timestamp_field))
            if timestamp == 0:
                skipped += 1
                continue

            window = (timestamp // window_seconds) * window_seconds
            group_by = self._present_tags(record, config.group_by_fields)
            unique = self._present_tags(record, config.unique_fields)
            key = GroupKey(window, group_by, unique)

            group = groups.get(key)
            if group is None:
                tags = dict(group_by)
                tags.update(unique)
                group = Group(
                    window=window,
                    first_time=timestamp,
                    last_time=timestamp,
                    tags=tags,
                )
                groups[key] = group

            group.observe(timestamp)
            for name in config.value_fields:
                value = lookup(record, name)
                if value is not MISSING:
                    group.values.append(as_float(value))

        logger.debug(
            "Grouped payload",
            records=seen,
            skipped=skipped,
            groups=len(groups),
            method=config.aggregation_method,
        )
        return [self._emit(group) for group in groups.values()]

    def _present_tags(self, record: Dict[str, Any], fields: Sequence[str]) -> TagTuple:
        pairs = []
        for name in fields:
            value = lookup(record, name)
            if value is not MISSING:
                pairs.append((name, as_text(value)))
        return tuple(pairs)

    def _emit(self, group: Group) -> Dict[str, Any]:
        config = self.config
        method = config.aggregation_method

        if method == "first":
            timestamp = group.first_time
        elif method == "last":
            timestamp = group.last_time
        else:
            timestamp = truncating_midpoint(group.first_time, group.last_time)

        output: Dict[str, Any] = {
            config.timestamp_field: timestamp,
            config.output_value_field: compact_number(aggregate(group.values, method)),
        }
        # Tags go in last and win over a clashing timestamp/value name
        output.update(group.tags)
        return output
