import argparse
import json
import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from decimal_schema.adapters.csv_adapter import CSVDecimalAdapter
from decimal_schema.adapters.parquet_adapter import build_table, write_parquet
from decimal_schema.canonical.decimal_metadata import DecimalMetadata
from decimal_schema.canonical.field import DecimalType
from decimal_schema.execution.config_executor import ConfigExecutor
from decimal_schema.inference.numeric_inference import profile_decimal_column
from decimal_schema.inference.precision_inference import infer_decimal_precision_and_scale
from decimal_schema.pipeline.converter import FixedDecimalConverter
from decimal_schema.utils.exceptions import AcceleratorError


class C:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"


def cprint(text: str, color: str = C.RESET, bold: bool = False, stream=None):
    prefix = (C.BOLD if bold else "") + color
    print(f"{prefix}{text}{C.RESET}", file=stream or sys.stdout)


def _parse_decimal(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"not a decimal: {text!r}") from e


def _cmd_infer(args: argparse.Namespace) -> Dict[str, Any]:
    metadata = DecimalMetadata()
    values = []
    for value in args.values:
        entry: Dict[str, Any] = {"value": str(value)}
        if not value.is_nan():
            entry["precision"], entry["scale"] = infer_decimal_precision_and_scale(value)
        metadata.update_from_value(value)
        values.append(entry)

    return {
        "values": values,
        "precision": None if metadata.is_empty() else metadata.precision,
        "scale": None if metadata.is_empty() else metadata.scale,
    }


def _cmd_convert(args: argparse.Namespace) -> Dict[str, Any]:
    target = DecimalType(precision=args.precision, scale=args.scale)
    fixed = FixedDecimalConverter().convert(args.value, target)
    return {
        "mantissa": str(fixed.mantissa),
        "precision": fixed.precision,
        "scale": fixed.scale,
        "value": str(fixed.to_decimal()),
    }


def _cmd_csv(args: argparse.Namespace) -> Dict[str, Any]:
    columns = CSVDecimalAdapter(
        args.file, columns=args.column, delimiter=args.delimiter
    ).read_columns()

    summary = {}
    for name, values in columns.items():
        profile = profile_decimal_column(values)
        decimal_type = profile.pop("decimal_type")
        summary[name] = {
            **(decimal_type.to_dict() if decimal_type else {"precision": None, "scale": None}),
            **profile,
        }

    if args.parquet:
        write_parquet(build_table(columns), args.parquet)

    return {"file": args.file, "columns": summary, "parquet_path": args.parquet}


def _cmd_run(args: argparse.Namespace) -> Dict[str, Any]:
    return ConfigExecutor(args.config).execute()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decimal-schema",
        description="Decimal precision/scale inference and decimal128 conversion",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_infer = sub.add_parser("infer", help="Infer the common decimal type of values")
    p_infer.add_argument("values", nargs="+", type=_parse_decimal)
    p_infer.set_defaults(handler=_cmd_infer)

    p_convert = sub.add_parser("convert", help="Convert a value into a decimal128 type")
    p_convert.add_argument("value")
    p_convert.add_argument("--precision", type=int, required=True)
    p_convert.add_argument("--scale", type=int, required=True)
    p_convert.set_defaults(handler=_cmd_convert)

    p_csv = sub.add_parser("csv", help="Infer decimal types of CSV columns")
    p_csv.add_argument("file")
    p_csv.add_argument("--column", action="append", help="Column to process (repeatable)")
    p_csv.add_argument("--delimiter")
    p_csv.add_argument("--parquet", help="Write the converted columns to this Parquet file")
    p_csv.set_defaults(handler=_cmd_csv)

    p_run = sub.add_parser("run", help="Run from a YAML config file")
    p_run.add_argument("config")
    p_run.set_defaults(handler=_cmd_run)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        result = args.handler(args)
    except (AcceleratorError, FileNotFoundError) as e:
        cprint("[FAILED] " + str(e), C.RED, bold=True, stream=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
