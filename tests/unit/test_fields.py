"""Unit tests for field lookup and coercion."""

import math

import pytest

from services.compressor.fields import (
    MISSING,
    as_float,
    as_int,
    as_text,
    compact_number,
    format_float,
    lookup,
    split_path,
)


RECORD = {
    "host": "a",
    "empty": None,
    "meta": {"region": "eu", "tags": ["x", "y"]},
    "dotted.key": 1,
}


class TestLookup:

    def test_top_level(self):
        assert lookup(RECORD, "host") == "a"

    def test_null_is_present(self):
        assert lookup(RECORD, "empty") is None

    def test_missing(self):
        assert lookup(RECORD, "nope") is MISSING
        assert lookup(RECORD, "host.inner") is MISSING

    def test_nested_object(self):
        assert lookup(RECORD, "meta.region") == "eu"

    def test_array_index(self):
        assert lookup(RECORD, "meta.tags.1") == "y"
        assert lookup(RECORD, "meta.tags.5") is MISSING
        assert lookup(RECORD, "meta.tags.first") is MISSING

    def test_escaped_dot(self):
        assert split_path("dotted\\.key") == ["dotted.key"]
        assert lookup(RECORD, "dotted\\.key") == 1


class TestCoercion:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1000, 1000),
            (1000.9, 1000),
            (-5.5, -5),
            ("1000", 1000),
            ("-42", -42),
            ("12.7", 0),
            (" 1000", 0),
            ("1000 ", 0),
            ("1e3", 0),
            ("+5", 0),
            ("1_000", 0),
            ("-", 0),
            ("\u0661\u0662", 0),
            ("abc", 0),
            (True, 1),
            (False, 0),
            (None, 0),
            ({"a": 1}, 0),
            ([1], 0),
            (MISSING, 0),
        ],
    )
    def test_as_int(self, value, expected):
        assert as_int(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            (2, 2.0),
            (2.5, 2.5),
            ("3.25", 3.25),
            ("1e3", 1000.0),
            ("+5", 5.0),
            (" 3.25", 0.0),
            ("3.25\n", 0.0),
            ("1_000", 0.0),
            ("\u0663", 0.0),
            (10 ** 400, math.inf),
            ("n/a", 0.0),
            (True, 1.0),
            (None, 0.0),
            ({"a": 1}, 0.0),
        ],
    )
    def test_as_float(self, value, expected):
        assert as_float(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("web-1", "web-1"),
            (42, "42"),
            (1.0, "1"),
            (1.5, "1.5"),
            (1e20, "100000000000000000000"),
            (0.0001, "0.0001"),
            (True, "true"),
            (False, "false"),
            (None, ""),
            ({"b": [1, 2]}, '{"b":[1,2]}'),
        ],
    )
    def test_as_text(self, value, expected):
        assert as_text(value) == expected

    def test_format_float_small_values_are_positional(self):
        assert format_float(1e-7) == "0.0000001"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (30.0, 30),
            (-2.0, -2),
            (2.5, 2.5),
            (1e21, 1e21),
        ],
    )
    def test_compact_number(self, value, expected):
        result = compact_number(value)

        assert result == expected
        assert type(result) is type(expected)
