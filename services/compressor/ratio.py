"""Size reduction between raw and compressed payloads."""

from typing import Sized, Union

ByteCount = Union[int, Sized]


def payload_size(value: ByteCount) -> int:
    """Size in bytes of a payload or an already-known byte count."""
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return len(value.encode("utf-8"))
    if isinstance(value, memoryview):
        return value.nbytes
    return len(value)


def compression_ratio(raw: ByteCount, compressed: ByteCount) -> float:
    """Return ``1 - compressed/raw``, or 0.0 when `raw` is empty.

    Accepts byte counts or the payloads themselves; text is measured in
    UTF-8 bytes. The result is not clamped and goes negative when the
    output is larger than the input.
    """
    raw_len = payload_size(raw)
    if raw_len == 0:
        return 0.0
    return 1.0 - payload_size(compressed) / raw_len
