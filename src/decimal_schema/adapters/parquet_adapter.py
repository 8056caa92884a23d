from decimal import Decimal
from typing import Dict, Iterable, List, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from decimal_schema.canonical.field import DecimalType
from decimal_schema.inference.numeric_inference import NULL_MARKERS, infer_decimal_type
from decimal_schema.pipeline.converter import FixedDecimalConverter
from decimal_schema.utils.exceptions import InvalidDecimalType, PrecisionOverflow


def _is_null(value) -> bool:
    if value is None:
        return True
    if isinstance(value, Decimal):
        return value.is_nan()
    return str(value).strip() in NULL_MARKERS or str(value).strip().lower() == "nan"


def to_arrow_array(
    values: Iterable,
    decimal_type: Optional[DecimalType] = None,
    converter: Optional[FixedDecimalConverter] = None,
) -> pa.Array:
    """
    Build a decimal128 Arrow array.

    The type is inferred from the values when not declared. Every value
    goes through FixedDecimalConverter, so values that do not fit the
    declared type raise instead of being rounded. None and NaN become nulls.
    """
    values = list(values)
    converter = converter or FixedDecimalConverter()

    if decimal_type is None:
        decimal_type = infer_decimal_type(values)
        if decimal_type is None:
            raise InvalidDecimalType("Cannot infer a decimal type from an all-null column")

    converted: List[Optional[Decimal]] = []
    for v in values:
        if _is_null(v):
            converted.append(None)
            continue
        if isinstance(v, Decimal):
            fixed = converter.convert_value(v, decimal_type)
        else:
            fixed = converter.convert(str(v).strip(), decimal_type)
        # widening the scale can push the mantissa past the declared precision
        digits = len(str(abs(fixed.mantissa)))
        if digits > decimal_type.precision:
            raise PrecisionOverflow(digits, decimal_type.precision)
        converted.append(fixed.to_decimal())

    return pa.array(converted, type=decimal_type.to_arrow())


def build_table(
    columns: Dict[str, Iterable],
    types: Optional[Dict[str, DecimalType]] = None,
) -> pa.Table:
    types = types or {}
    arrays = {
        name: to_arrow_array(values, types.get(name))
        for name, values in columns.items()
    }
    return pa.table(arrays)


def write_parquet(table: pa.Table, path: str) -> None:
    pq.write_table(table, path)


class ParquetDecimalAdapter:
    """
    Reads declared decimal column types back from a Parquet file.

    DOES NOT:
    - Read row data
    - Report non-decimal columns
    """

    def __init__(self, file_path: str):
        self.file_path = file_path

    def read_decimal_types(self) -> Dict[str, DecimalType]:
        schema = pq.ParquetFile(self.file_path).schema_arrow

        types: Dict[str, DecimalType] = {}
        for field in schema:
            field_type = field.type
            # Dictionary-encoded column
            if pa.types.is_dictionary(field_type):
                field_type = field_type.value_type
            decimal_type = DecimalType.from_arrow(field_type)
            if decimal_type is not None:
                types[field.name] = decimal_type
        return types
