from decimal import Decimal

from decimal_schema.canonical.field import DecimalType
from decimal_schema.pipeline.decimal128 import Decimal128, Decimal128Value
from decimal_schema.utils.exceptions import DecimalTypeMismatch, PrecisionOverflow


class FixedDecimalConverter:
    """
    Converts observed decimal values into the fixed representation of a
    declared decimal column.

    Responsibilities:
    - Parse the value's text into a 128-bit mantissa
    - Reject values with more significant digits than the column holds
    - Rescale the mantissa to the column scale

    DOES NOT:
    - Round or truncate
    - Infer the column type (see numeric_inference)
    """

    def __init__(self, decimal_type: type = Decimal):
        self.decimal_type = decimal_type

    def convert(self, text: str, target: DecimalType) -> Decimal128Value:
        mantissa, inferred_precision, inferred_scale = Decimal128.from_string(text)

        if inferred_precision > target.precision:
            raise PrecisionOverflow(inferred_precision, target.precision)

        if inferred_scale != target.scale:
            mantissa = Decimal128.rescale(mantissa, inferred_scale, target.scale)

        return Decimal128Value(
            mantissa=mantissa,
            precision=target.precision,
            scale=target.scale,
        )

    def convert_value(self, value, target: DecimalType) -> Decimal128Value:
        if not isinstance(value, self.decimal_type):
            raise DecimalTypeMismatch(
                f"Object is not a {self.decimal_type.__name__}: {type(value).__name__}"
            )
        return self.convert(str(value), target)
