"""Numeric reduction of a group's collected values."""

from typing import Callable, Dict, Sequence


def _sum(values: Sequence[float]) -> float:
    total = 0.0
    for value in values:
        total += value
    return total


def _mean(values: Sequence[float]) -> float:
    return _sum(values) / len(values)


def _count(values: Sequence[float]) -> float:
    return float(len(values))


def _first(values: Sequence[float]) -> float:
    return values[0]


def _last(values: Sequence[float]) -> float:
    return values[-1]


AGGREGATIONS: Dict[str, Callable[[Sequence[float]], float]] = {
    "sum": _sum,
    "avg": _mean,
    "mean": _mean,
    "min": min,
    "max": max,
    "count": _count,
    "first": _first,
    "last": _last,
}

SUPPORTED_METHODS = tuple(AGGREGATIONS)


def aggregate(values: Sequence[float], method: str) -> float:
    """Reduce `values` with `method`.

    Empty input always yields 0.0, whatever the method. Unknown method
    names fall back to a sum.
    """
    if not values:
        return 0.0
    reducer = AGGREGATIONS.get(method, _sum)
    return float(reducer(values))
