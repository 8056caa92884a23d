import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

import pyarrow as pa

from decimal_schema.canonical.field import DECIMAL128_MAX_PRECISION, DecimalType
from decimal_schema.utils.exceptions import DecimalParseError, RescaleOverflow

DECIMAL128_MAX = 2 ** 127 - 1
DECIMAL128_MIN = -(2 ** 127)

# sign, whole digits, fractional digits, exponent
DECIMAL_TEXT_PATTERN = re.compile(
    r"^(?P<sign>[+-])?"
    r"(?:(?P<whole>[0-9]+)(?:\.(?P<frac_a>[0-9]*))?|\.(?P<frac_b>[0-9]+))"
    r"(?:[eE](?P<exponent>[+-]?[0-9]+))?$"
)

# longest exponent text accepted, ignoring sign and leading zeros
MAX_EXPONENT_DIGITS = 9


def _fits(mantissa: int) -> bool:
    return DECIMAL128_MIN <= mantissa <= DECIMAL128_MAX


class Decimal128:
    """
    128-bit decimal primitives: string parsing and rescaling of an
    integer mantissa whose scale lives in the column type.
    """

    @staticmethod
    def from_string(text: str) -> Tuple[int, int, int]:
        """
        Parse decimal text into (mantissa, precision, scale).

        Leading zeros of the whole part are not significant; every
        fractional digit is. A negative scale (from a positive exponent)
        is folded into the mantissa so the returned scale is never negative.
        Precision and the scale magnitude are both limited to 38.
        """
        match = DECIMAL_TEXT_PATTERN.fullmatch(str(text).strip())
        if match is None:
            raise DecimalParseError(f"The string '{text}' is not a valid decimal128 number")

        whole = match.group("whole") or ""
        fractional = match.group("frac_a") or match.group("frac_b") or ""
        exponent_text = match.group("exponent") or "0"
        if len(exponent_text.lstrip("+-").lstrip("0")) > MAX_EXPONENT_DIGITS:
            raise DecimalParseError(f"The string '{text}' has an out of range exponent")
        exponent = int(exponent_text)

        stripped_whole = whole.lstrip("0")
        precision = len(fractional) + len(stripped_whole)
        scale = len(fractional) - exponent

        if abs(scale) > DECIMAL128_MAX_PRECISION:
            raise DecimalParseError(
                f"The string '{text}' has scale {scale}, "
                f"outside [-{DECIMAL128_MAX_PRECISION}, {DECIMAL128_MAX_PRECISION}]"
            )
        if precision - min(scale, 0) > DECIMAL128_MAX_PRECISION:
            raise DecimalParseError(
                f"The string '{text}' has precision {precision - min(scale, 0)}, "
                f"more than the maximum {DECIMAL128_MAX_PRECISION}"
            )

        mantissa = int((stripped_whole + fractional) or "0")
        if match.group("sign") == "-":
            mantissa = -mantissa

        if scale < 0:
            mantissa *= 10 ** -scale
            precision -= scale
            scale = 0

        return mantissa, precision, scale

    @staticmethod
    def rescale(mantissa: int, from_scale: int, to_scale: int) -> int:
        """
        Move a mantissa from one scale to another, keeping its value.
        """
        delta = to_scale - from_scale
        if delta == 0:
            return mantissa

        if abs(delta) > DECIMAL128_MAX_PRECISION:
            raise RescaleOverflow(
                f"Rescaling decimal value from scale {from_scale} to {to_scale} "
                f"moves more than {DECIMAL128_MAX_PRECISION} digits",
                from_scale,
                to_scale,
            )

        multiplier = 10 ** abs(delta)

        if delta > 0:
            result = mantissa * multiplier
            if not _fits(result):
                raise RescaleOverflow(
                    f"Rescaling decimal value from scale {from_scale} to {to_scale} "
                    "would cause overflow",
                    from_scale,
                    to_scale,
                )
            return result

        quotient, remainder = divmod(abs(mantissa), multiplier)
        if remainder != 0:
            raise RescaleOverflow(
                f"Rescaling decimal value from scale {from_scale} to {to_scale} "
                "would cause data loss",
                from_scale,
                to_scale,
            )
        return -quotient if mantissa < 0 else quotient


@dataclass(frozen=True)
class Decimal128Value:
    """
    A mantissa stored at the scale of its DecimalType.
    """
    mantissa: int
    precision: int
    scale: int

    def to_decimal(self) -> Decimal:
        sign, digits, _ = Decimal(self.mantissa).as_tuple()
        return Decimal((sign, digits, -self.scale))

    def to_arrow(self, decimal_type: DecimalType = None) -> pa.Scalar:
        decimal_type = decimal_type or DecimalType(self.precision, self.scale)
        return pa.scalar(self.to_decimal(), type=decimal_type.to_arrow())
