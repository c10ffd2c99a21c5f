"""
Unit Tests for Cache Key Generation

Tests determinism, case-insensitivity of callable identity and sensitivity
to argument values and order.
"""

import hashlib
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

import pytest
from pydantic import BaseModel

from callcache.caching.key_generator import (
    generate_arguments_key,
    generate_key,
    serialize_arguments,
)
from callcache.core.exceptions import ArgumentSerializationError

IDENTITY = "reports.ReportService::monthly_total"


class Color(Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Point:
    x: int
    y: int


class Query(BaseModel):
    table: str
    limit: int = 10


@pytest.mark.unit
class TestKeyShape:
    """Test the two-part key layout."""

    def test_identity_part_is_md5_of_lowercased_identity(self):
        key = generate_key(IDENTITY, [])
        assert key == hashlib.md5(IDENTITY.lower().encode()).hexdigest()

    def test_no_arguments_yields_identity_part_only(self):
        assert len(generate_key(IDENTITY)) == 32
        assert generate_arguments_key([]) == ""

    def test_arguments_add_fixed_length_digest(self):
        key = generate_key(IDENTITY, [2026, 9])
        assert len(key) == 64
        assert key.startswith(generate_key(IDENTITY))

    def test_key_is_deterministic(self):
        assert generate_key(IDENTITY, [1, "a", {"b": [1, 2]}]) == generate_key(
            IDENTITY, [1, "a", {"b": [1, 2]}]
        )


@pytest.mark.unit
class TestIdentityCaseInsensitivity:
    """Method names differing only in case collide."""

    @pytest.mark.parametrize(
        "identity",
        [
            "reports.ReportService::MonthlyTotal",
            "reports.reportservice::monthlytotal",
            "REPORTS.REPORTSERVICE::MONTHLYTOTAL",
        ],
    )
    def test_case_variants_share_a_key(self, identity):
        assert generate_key(identity, [1, 2]) == generate_key(
            "reports.ReportService::monthlyTotal", [1, 2]
        )

    def test_different_identity_differs(self):
        assert generate_key("a.B::foo", [1]) != generate_key("a.B::bar", [1])


@pytest.mark.unit
class TestArgumentSensitivity:
    """Different argument values or order give different keys."""

    @pytest.mark.parametrize(
        "a, b",
        [
            ([1, 2], [2, 1]),
            ([1, 2], [1, 3]),
            ([1], [1, 1]),
            ([1], ["1"]),
            ([1], [1.5]),
            ([True], [1]),
            ([None], [0]),
            (["a"], [b"a"]),
            ([{"a": 1}], [{"a": 2}]),
            ([[1, 2]], [[2, 1]]),
            ([Color.RED], [Color.BLUE]),
            ([None], [float("nan")]),
            ([None], [float("inf")]),
            ([float("inf")], [float("-inf")]),
            ([{1: "a"}], [{"1": "a"}]),
            ([[1, 2]], [{1, 2}]),
            ([[1, 2]], [(1, 2)]),
            ([Decimal("1.5")], ["1.5"]),
            ([Decimal("1.5")], [1.5]),
            ([date(2026, 10, 17)], ["2026-10-17"]),
            ([Color.RED], ["red"]),
            ([Point(1, 2)], [{"x": 1, "y": 2}]),
            ([Query(table="t")], [{"table": "t", "limit": 10}]),
            ([["set", [1]]], [{1}]),
            ([2**64], [2**64 + 1]),
            ([2**64], [str(2**64)]),
        ],
    )
    def test_differing_arguments_differ(self, a, b):
        assert generate_key(IDENTITY, a) != generate_key(IDENTITY, b)

    def test_kwargs_change_key(self):
        assert generate_key(IDENTITY, [1], {"region": "eu"}) != generate_key(IDENTITY, [1])

    def test_kwargs_do_not_collide_with_positional_structure(self):
        positional = generate_key(IDENTITY, [[1], {"region": "eu"}])
        keyword = generate_key(IDENTITY, [1], {"region": "eu"})
        assert positional != keyword


@pytest.mark.unit
class TestCanonicalEncoding:
    """Encoding depends on values only, never on container order or identity."""

    def test_dict_key_order_ignored(self):
        assert serialize_arguments([{"a": 1, "b": 2}]) == serialize_arguments([{"b": 2, "a": 1}])

    def test_kwargs_order_ignored(self):
        assert generate_key(IDENTITY, [], {"a": 1, "b": 2}) == generate_key(IDENTITY, [], {"b": 2, "a": 1})

    def test_set_iteration_order_ignored(self):
        first = {"delta", "alpha", "charlie", "bravo"}
        second = set(sorted(first, reverse=True))
        assert serialize_arguments([first]) == serialize_arguments([second])

    def test_frozenset_and_set_encode_alike(self):
        assert serialize_arguments([{3, 1, 2}]) == serialize_arguments([frozenset({1, 2, 3})])

    def test_equal_objects_share_a_key(self):
        """Distinct but equal instances produce the same key."""
        assert generate_key(IDENTITY, [Point(1, 2)]) == generate_key(IDENTITY, [Point(1, 2)])
        assert generate_key(IDENTITY, [Query(table="t")]) == generate_key(IDENTITY, [Query(table="t")])

    def test_supported_value_types(self):
        payload = serialize_arguments(
            [Decimal("1.10"), date(2026, 10, 17), b"\x00\xff", (1, 2), Color.RED]
        )
        assert b"1.10" in payload
        assert b"2026-10-17" in payload
        assert b"00ff" in payload
        assert b"red" in payload

    def test_unserializable_argument_rejected(self):
        class Opaque:
            pass

        with pytest.raises(ArgumentSerializationError) as exc_info:
            generate_key(IDENTITY, [Opaque()])

        assert "Opaque" in str(exc_info.value)
        assert exc_info.value.details["argument_types"] == ["Opaque"]
        assert "suggestion" in exc_info.value.details

    def test_mixed_key_mapping_order_ignored(self):
        assert serialize_arguments([{1: "a", "b": 2}]) == serialize_arguments([{"b": 2, 1: "a"}])

    def test_non_finite_floats_are_stable(self):
        assert generate_key(IDENTITY, [float("nan")]) == generate_key(IDENTITY, [float("nan")])
        assert generate_key(IDENTITY, [float("-inf")]) == generate_key(IDENTITY, [float("-inf")])

    @pytest.mark.parametrize("value", [2**64, -(2**63) - 1, 10**40])
    def test_wide_integers_supported(self, value):
        key = generate_key(IDENTITY, [value])

        assert len(key) == 64
        assert key == generate_key(IDENTITY, [value])
