from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Optional

from decimal_schema.canonical.decimal_metadata import DecimalMetadata
from decimal_schema.canonical.field import DECIMAL128_MAX_PRECISION, DecimalType
from decimal_schema.inference.precision_inference import infer_decimal_precision_and_scale
from decimal_schema.utils.exceptions import PrecisionOverflow

NULL_MARKERS = ("", "NULL", "null", "Null")


def _coerce(value) -> Optional[Decimal]:
    """
    Turn a raw cell into a Decimal. Returns None for null-like cells,
    raises InvalidOperation for text that is not a number.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    text = str(value).strip()
    if text in NULL_MARKERS:
        return None
    return Decimal(text)


def _finalize(metadata: DecimalMetadata, max_integer_digits: int) -> Optional[DecimalType]:
    if metadata.is_empty():
        return None

    precision, scale = metadata.precision, metadata.scale

    # Arrow columns do not carry negative scales
    if scale < 0:
        precision -= scale
        scale = 0

    # the running merge can under-count integer digits when a wide integer
    # part arrives before a wide fraction
    precision = max(precision, max_integer_digits + scale, 1)

    if precision > DECIMAL128_MAX_PRECISION:
        raise PrecisionOverflow(precision, DECIMAL128_MAX_PRECISION)

    return DecimalType(precision=precision, scale=scale)


def profile_decimal_column(values: Iterable) -> Dict:
    """
    Infer the decimal type of a column and count what was skipped.

    Args:
        values (iterable): Decimal instances, numeric strings, ints or None

    Returns:
        dict with keys decimal_type, total, nulls, nan, invalid
    """
    metadata = DecimalMetadata()
    max_integer_digits = 0
    stats = {"total": 0, "nulls": 0, "nan": 0, "invalid": 0}

    for v in values:
        stats["total"] += 1
        try:
            d = _coerce(v)
        except (InvalidOperation, ValueError):
            stats["invalid"] += 1
            continue

        if d is None:
            stats["nulls"] += 1
            continue
        if d.is_nan():
            stats["nan"] += 1
            continue
        if d.is_infinite():
            stats["invalid"] += 1
            continue

        precision, scale = infer_decimal_precision_and_scale(d)
        metadata.update(precision, scale)
        max_integer_digits = max(max_integer_digits, precision - scale)

    return {"decimal_type": _finalize(metadata, max_integer_digits), **stats}


def infer_decimal_type(values: Iterable) -> Optional[DecimalType]:
    """
    Infer the smallest decimal128 type holding every value.

    Returns:
        DecimalType | None when no number was observed
    """
    return profile_decimal_column(values)["decimal_type"]
