class AcceleratorError(Exception):
    """
    Base exception for all decimal schema errors
    """
    pass


class DecimalTypeMismatch(AcceleratorError, TypeError):
    """
    Raised when a value is not a decimal.Decimal instance
    """
    pass


class InvalidDecimalType(AcceleratorError, ValueError):
    """
    Raised when a (precision, scale) pair cannot describe a decimal128 column
    """
    pass


class DecimalParseError(AcceleratorError, ValueError):
    """
    Raised when decimal text cannot be parsed into a 128-bit mantissa
    """
    pass


class PrecisionOverflow(AcceleratorError, ValueError):
    """
    Raised when a value needs more significant digits than the target type holds
    """

    def __init__(self, inferred_precision: int, target_precision: int):
        self.inferred_precision = inferred_precision
        self.target_precision = target_precision
        super().__init__(
            f"Decimal type with precision {inferred_precision} does not fit "
            f"into precision inferred from first array element: {target_precision}"
        )


class RescaleOverflow(AcceleratorError, ValueError):
    """
    Raised when moving a mantissa to another scale overflows 128 bits
    or would drop non-zero digits
    """

    def __init__(self, message: str, from_scale: int, to_scale: int):
        self.from_scale = from_scale
        self.to_scale = to_scale
        super().__init__(message)


class ConfigError(AcceleratorError):
    """
    Raised when an executor configuration is malformed
    """
    pass
