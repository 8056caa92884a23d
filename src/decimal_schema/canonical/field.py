from dataclasses import dataclass
from typing import Optional

import pyarrow as pa

from decimal_schema.utils.exceptions import InvalidDecimalType

DECIMAL128_MAX_PRECISION = 38


@dataclass(frozen=True)
class DecimalType:
    """
    Declared capacity of a fixed decimal column.
    Maps one-to-one onto Arrow decimal128(precision, scale).
    """
    precision: int              # total digits
    scale: int                  # digits after decimal

    def __post_init__(self):
        if not 1 <= self.precision <= DECIMAL128_MAX_PRECISION:
            raise InvalidDecimalType(
                f"Decimal precision must be between 1 and {DECIMAL128_MAX_PRECISION}, "
                f"got {self.precision}"
            )

    @property
    def max_integer_digits(self) -> int:
        return self.precision - self.scale

    def to_arrow(self) -> pa.DataType:
        return pa.decimal128(self.precision, self.scale)

    @classmethod
    def from_arrow(cls, arrow_type: pa.DataType) -> Optional["DecimalType"]:
        if not pa.types.is_decimal128(arrow_type):
            return None
        return cls(precision=arrow_type.precision, scale=arrow_type.scale)

    def to_dict(self) -> dict:
        return {"precision": self.precision, "scale": self.scale}
