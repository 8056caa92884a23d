import os
from typing import Dict, Optional

import yaml

from decimal_schema.adapters.csv_adapter import CSVDecimalAdapter
from decimal_schema.adapters.parquet_adapter import build_table, write_parquet
from decimal_schema.canonical.field import DecimalType
from decimal_schema.inference.numeric_inference import profile_decimal_column
from decimal_schema.observability.logger import (
    RequestTimer,
    generate_request_id,
    log_event,
)
from decimal_schema.utils.exceptions import AcceleratorError, ConfigError


class ConfigExecutor:
    """
    Runs decimal column inference and conversion from a YAML configuration.

    source.file_path   CSV file to read (required)
    source.columns     columns to process (default: all)
    source.delimiter   delimiter override
    settings.types     declared {column: {precision, scale}} targets
    output.parquet_path  where to write the converted table
    """

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    # ------------------------------------------
    # Load YAML
    # ------------------------------------------
    def _load_config(self) -> Dict:
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise ConfigError(f"Config root must be a mapping: {self.config_path}")
        if not (config.get("source") or {}).get("file_path"):
            raise ConfigError("source.file_path is required")
        return config

    # ------------------------------------------
    # Declared types
    # ------------------------------------------
    def _declared_types(self) -> Dict[str, DecimalType]:
        raw = (self.config.get("settings") or {}).get("types") or {}
        if not isinstance(raw, dict):
            raise ConfigError("settings.types must map column names to {precision, scale}")

        types = {}
        for column, spec in raw.items():
            try:
                types[column] = DecimalType(
                    precision=int(spec["precision"]),
                    scale=int(spec.get("scale", 0)),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigError(f"Invalid type for column '{column}': {spec}") from e
        return types

    # ------------------------------------------
    # Execute
    # ------------------------------------------
    def execute(self) -> Dict:
        request_id = generate_request_id()
        timer = RequestTimer()

        source = self.config["source"]
        output = self.config.get("output") or {}
        parquet_path: Optional[str] = output.get("parquet_path")

        log_event("DECIMAL_RUN_STARTED", {
            "request_id": request_id,
            "config_path": self.config_path,
            "file_path": source["file_path"],
        })

        try:
            declared = self._declared_types()
            columns = CSVDecimalAdapter(
                source["file_path"],
                columns=source.get("columns"),
                delimiter=source.get("delimiter"),
            ).read_columns()

            types: Dict[str, DecimalType] = {}
            summary_columns = {}
            for name, values in columns.items():
                profile = profile_decimal_column(values)
                inferred = profile["decimal_type"]
                decimal_type = declared.get(name) or inferred
                if decimal_type is None:
                    raise ConfigError(f"Column '{name}' has no numeric values to infer from")

                types[name] = decimal_type
                summary_columns[name] = {
                    **decimal_type.to_dict(),
                    "declared": name in declared,
                    "nulls": profile["nulls"],
                    "invalid": profile["invalid"],
                }
                log_event("DECIMAL_TYPE_INFERRED", {
                    "request_id": request_id,
                    "column": name,
                    **summary_columns[name],
                })

            if parquet_path:
                table = build_table(columns, types)
                parent = os.path.dirname(parquet_path)
                if parent:
                    os.makedirs(parent, exist_ok=True)
                write_parquet(table, parquet_path)

        except AcceleratorError as e:
            log_event("DECIMAL_RUN_FAILED", {
                "request_id": request_id,
                "error_type": type(e).__name__,
                "message": str(e),
            })
            raise

        rows = max((len(v) for v in columns.values()), default=0)
        log_event("DECIMAL_RUN_COMPLETED", {
            "request_id": request_id,
            "rows": rows,
            "duration_seconds": timer.duration(),
        })

        return {
            "request_id": request_id,
            "columns": summary_columns,
            "rows": rows,
            "parquet_path": parquet_path,
        }
