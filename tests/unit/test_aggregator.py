"""Unit tests for the aggregation methods."""

import pytest

from services.compressor.aggregator import SUPPORTED_METHODS, aggregate


VALUES = [5.0, 2.0, 8.0, 1.0]


@pytest.mark.parametrize(
    "method, expected",
    [
        ("sum", 16.0),
        ("avg", 4.0),
        ("mean", 4.0),
        ("min", 1.0),
        ("max", 8.0),
        ("count", 4.0),
        ("first", 5.0),
        ("last", 1.0),
    ],
)
def test_methods(method, expected):
    assert aggregate(VALUES, method) == expected


@pytest.mark.parametrize("method", ["median", "", "SUM", "p99"])
def test_unknown_method_behaves_like_sum(method):
    assert aggregate(VALUES, method) == aggregate(VALUES, "sum")


@pytest.mark.parametrize("method", list(SUPPORTED_METHODS) + ["unknown"])
def test_empty_input_is_zero(method):
    assert aggregate([], method) == 0.0


@pytest.mark.parametrize("method", ["sum", "avg", "mean", "min", "max", "first", "last"])
def test_single_value_returns_it(method):
    assert aggregate([7.5], method) == 7.5


def test_single_value_count():
    assert aggregate([7.5], "count") == 1.0


def test_result_is_float():
    assert isinstance(aggregate([1, 2], "max"), float)
