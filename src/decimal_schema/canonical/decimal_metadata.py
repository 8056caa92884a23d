from decimal import Decimal
from typing import Iterable, Optional, Tuple

from decimal_schema.canonical.field import DecimalType
from decimal_schema.inference.precision_inference import infer_decimal_precision_and_scale
from decimal_schema.utils.exceptions import DecimalTypeMismatch

# "no value observed yet"; loses every max() against a real observation
INT32_MIN = -(2 ** 31)


class DecimalMetadata:
    """
    Running (precision, scale) accumulator for one column inference pass.

    Folds per-value observations into the smallest pair that can hold
    every value seen so far. Not safe for concurrent mutation.
    """

    def __init__(
        self,
        precision: int = INT32_MIN,
        scale: int = INT32_MIN,
        decimal_type: type = Decimal,
    ):
        self.precision = precision
        self.scale = scale
        self.decimal_type = decimal_type

    def __repr__(self):
        return f"DecimalMetadata(precision={self.precision}, scale={self.scale})"

    @staticmethod
    def next_state(
        prior_precision: int,
        prior_scale: int,
        suggested_precision: int,
        suggested_scale: int,
    ) -> Tuple[int, int]:
        """
        Compute the accumulator state after one observation.

        The scale-0 branch compares against the prior precision but adds the
        already merged scale, so an integer that widens the column still
        leaves room for fractional digits demanded earlier. This makes the
        fold order-sensitive.
        """
        precision = max(prior_precision, suggested_precision)
        scale = max(prior_scale, suggested_scale)

        if suggested_scale == 0 and suggested_precision > prior_precision:
            precision += scale

        return precision, scale

    def update(self, suggested_precision: int, suggested_scale: int) -> None:
        self.precision, self.scale = self.next_state(
            self.precision, self.scale, suggested_precision, suggested_scale
        )

    def update_from_value(self, value) -> None:
        """
        Fold a single decimal value. NaN is ignored.
        """
        if not isinstance(value, self.decimal_type):
            raise DecimalTypeMismatch(
                f"Object is not a {self.decimal_type.__name__}: {type(value).__name__}"
            )

        if value.is_nan():
            return

        precision, scale = infer_decimal_precision_and_scale(value, self.decimal_type)
        self.update(precision, scale)

    def update_from_values(self, values: Iterable) -> None:
        for value in values:
            if value is None:
                continue
            self.update_from_value(value)

    def is_empty(self) -> bool:
        return self.precision == INT32_MIN and self.scale == INT32_MIN

    def to_decimal_type(self) -> Optional[DecimalType]:
        if self.is_empty():
            return None
        return DecimalType(precision=self.precision, scale=self.scale)
