"""
Data models used by the grouping engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Tuple

# (field name, text value) pairs, only for fields present on the record
TagTuple = Tuple[Tuple[str, str], ...]


class GroupKey(NamedTuple):
    """Composite identity of a group.

    Field names travel with their values so that a record missing one
    group-by field never collides with a record missing a different one.
    """

    window: int
    group_by: TagTuple
    unique: TagTuple


@dataclass(slots=True)
class Group:
    """Accumulator for every record sharing one `GroupKey`."""

    window: int
    first_time: int
    last_time: int
    tags: Dict[str, str] = field(default_factory=dict)
    values: List[float] = field(default_factory=list)
    count: int = 0

    def observe(self, timestamp: int) -> None:
        if timestamp < self.first_time:
            self.first_time = timestamp
        if timestamp > self.last_time:
            self.last_time = timestamp
        self.count += 1


def truncating_midpoint(first: int, last: int) -> int:
    """Integer average of two timestamps, rounding toward zero."""
    total = first + last
    half = abs(total) // 2
    return half if total >= 0 else -half
