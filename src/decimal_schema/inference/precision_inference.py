from decimal import Decimal
from typing import Tuple

from decimal_schema.utils.exceptions import DecimalParseError, DecimalTypeMismatch


def infer_precision_and_scale(digit_count: int, exponent: int) -> Tuple[int, int]:
    """
    Infer (precision, scale) from the digit count and exponent of a
    digit-tuple decimal.

    Examples:
        digits=(1, 2), exponent=-5    -> 0.00012 -> (5, 5)
        digits=(1, 2, 3), exponent=-2 -> 1.23    -> (3, 2)
        digits=(1, 2), exponent=3     -> 12000   -> (5, 0)

    When the digit count exceeds a positive exponent the scale comes out
    negative, e.g. (3, 1) -> (3, -1).
    """
    if digit_count < 1:
        raise ValueError(f"digit_count must be >= 1, got {digit_count}")

    abs_exponent = abs(exponent)

    if digit_count <= abs_exponent:
        # leading zeros after the point when negative, trailing integer zeros otherwise
        if exponent < 0:
            additional_zeros = abs_exponent - digit_count
            scale = abs_exponent
        else:
            additional_zeros = exponent
            scale = 0
    else:
        additional_zeros = 0
        scale = -exponent

    return digit_count + additional_zeros, scale


def infer_decimal_precision_and_scale(
    value: Decimal,
    decimal_type: type = Decimal,
) -> Tuple[int, int]:
    """
    Infer (precision, scale) of a finite decimal value from its as_tuple() form.
    """
    if not isinstance(value, decimal_type):
        raise DecimalTypeMismatch(
            f"Expected {decimal_type.__name__}, got {type(value).__name__}"
        )

    if not value.is_finite():
        raise DecimalParseError(f"Cannot infer precision of non-finite decimal {value}")

    _, digits, exponent = value.as_tuple()
    return infer_precision_and_scale(len(digits), exponent)
