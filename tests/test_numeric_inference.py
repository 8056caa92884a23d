"""
Tests for column-level decimal type inference.
"""

from decimal import Decimal

import pytest

from decimal_schema.canonical.field import DecimalType
from decimal_schema.inference.numeric_inference import (
    infer_decimal_type,
    profile_decimal_column,
)
from decimal_schema.pipeline.converter import FixedDecimalConverter
from decimal_schema.utils.exceptions import PrecisionOverflow


def test_infers_from_text():
    assert infer_decimal_type(["1.23", "12000"]) == DecimalType(7, 2)


def test_infers_from_decimals():
    assert infer_decimal_type([Decimal("0.00012"), Decimal("0.5")]) == DecimalType(5, 5)


def test_integers():
    assert infer_decimal_type([1, 22, 333]) == DecimalType(3, 0)


def test_empty_column():
    assert infer_decimal_type([]) is None
    assert infer_decimal_type([None, "", "NULL"]) is None


def test_wide_integer_part_seen_first_still_fits():
    # the accumulator alone settles on (3, 2) here
    decimal_type = infer_decimal_type(["1.23", "0.5", "100"])
    assert decimal_type == DecimalType(5, 2)


@pytest.mark.parametrize(
    "values",
    [
        ["1.23", "45.6"],
        ["100", "1.5"],
        ["0.001", "999", "12.5"],
        ["12000", "0.25", "-3.125"],
    ],
)
def test_every_observed_value_converts(values):
    decimal_type = infer_decimal_type(values)
    converter = FixedDecimalConverter()
    for v in values:
        converter.convert(v, decimal_type)


def test_negative_scale_folded_to_zero():
    # 123E+1 alone infers (3, -1)
    assert infer_decimal_type([Decimal("123E+1")]) == DecimalType(4, 0)


def test_profile_counts():
    profile = profile_decimal_column(["1.5", None, "", "abc", "NaN", "Infinity", "2.25"])
    assert profile["decimal_type"] == DecimalType(3, 2)
    assert profile["total"] == 7
    assert profile["nulls"] == 2
    assert profile["nan"] == 1
    assert profile["invalid"] == 2


def test_precision_beyond_decimal128():
    with pytest.raises(PrecisionOverflow):
        infer_decimal_type(["1" * 30, "0." + "1" * 10])
