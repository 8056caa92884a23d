"""
Tests for the running (precision, scale) accumulator.
"""

from decimal import Decimal

import pytest

from decimal_schema.canonical.decimal_metadata import INT32_MIN, DecimalMetadata
from decimal_schema.canonical.field import DecimalType
from decimal_schema.utils.exceptions import DecimalTypeMismatch


class SubDecimal(Decimal):
    pass


def test_fresh_metadata_is_empty():
    metadata = DecimalMetadata()
    assert metadata.precision == INT32_MIN
    assert metadata.scale == INT32_MIN
    assert metadata.is_empty()
    assert metadata.to_decimal_type() is None


def test_first_update_wins():
    metadata = DecimalMetadata()
    metadata.update(3, 2)
    assert (metadata.precision, metadata.scale) == (3, 2)


def test_first_integer_update_adds_no_scale():
    metadata = DecimalMetadata()
    metadata.update(3, 0)
    assert (metadata.precision, metadata.scale) == (3, 0)


def test_integer_after_fraction_reserves_fraction_digits():
    metadata = DecimalMetadata()
    metadata.update(3, 2)
    metadata.update(4, 0)
    assert (metadata.precision, metadata.scale) == (6, 2)


def test_fold_is_order_sensitive():
    metadata = DecimalMetadata()
    metadata.update(4, 0)
    metadata.update(3, 2)
    assert (metadata.precision, metadata.scale) == (4, 2)


@pytest.mark.parametrize("precision, scale", [(5, 2), (3, 3), (7, 1)])
def test_repeated_update_with_nonzero_scale_is_idempotent(precision, scale):
    once = DecimalMetadata()
    once.update(precision, scale)

    twice = DecimalMetadata()
    twice.update(precision, scale)
    twice.update(precision, scale)

    assert (once.precision, once.scale) == (twice.precision, twice.scale)


def test_repeated_integer_update_does_not_grow():
    metadata = DecimalMetadata()
    metadata.update(3, 0)
    metadata.update(3, 0)
    assert (metadata.precision, metadata.scale) == (3, 0)


def test_next_state_is_pure():
    assert DecimalMetadata.next_state(3, 2, 4, 0) == (6, 2)
    assert DecimalMetadata.next_state(3, 2, 2, 0) == (3, 2)
    assert DecimalMetadata.next_state(3, 2, 5, 4) == (5, 4)


def test_update_from_value():
    metadata = DecimalMetadata()
    metadata.update_from_value(Decimal("1.23"))
    metadata.update_from_value(Decimal("12000"))
    assert (metadata.precision, metadata.scale) == (7, 2)
    assert metadata.to_decimal_type() == DecimalType(7, 2)


@pytest.mark.parametrize("text", ["NaN", "-NaN", "sNaN"])
def test_nan_is_ignored(text):
    metadata = DecimalMetadata()
    metadata.update_from_value(Decimal(text))
    assert metadata.is_empty()


def test_nan_leaves_existing_state():
    metadata = DecimalMetadata()
    metadata.update_from_value(Decimal("1.5"))
    metadata.update_from_value(Decimal("NaN"))
    assert (metadata.precision, metadata.scale) == (2, 1)


def test_non_decimal_rejected():
    with pytest.raises(DecimalTypeMismatch):
        DecimalMetadata().update_from_value(1.5)


def test_update_from_values_skips_none():
    metadata = DecimalMetadata()
    metadata.update_from_values([Decimal("1.23"), None, Decimal("12000")])
    assert (metadata.precision, metadata.scale) == (7, 2)


def test_injected_decimal_type():
    metadata = DecimalMetadata(decimal_type=SubDecimal)

    with pytest.raises(DecimalTypeMismatch):
        metadata.update_from_value(Decimal("1"))

    metadata.update_from_value(SubDecimal("1.5"))
    assert (metadata.precision, metadata.scale) == (2, 1)
