import csv
from typing import Dict, List, Optional

from decimal_schema.inference.numeric_inference import NULL_MARKERS
from decimal_schema.utils.exceptions import ConfigError

# ------------------------------------------------------------------
# Delimiter detection
# ------------------------------------------------------------------
def detect_delimiter_from_lines(lines: List[str]) -> str:
    """
    Delimiter detection with safe fallback.
    Decimal text never contains ',' as a separator here; '.' is the point.
    """
    sample = "\n".join(lines[:20])
    try:
        dialect = csv.Sniffer().sniff(
            sample,
            delimiters=[",", ";", "\t", "|"]
        )
        return dialect.delimiter
    except csv.Error:
        for candidate in (";", ",", "\t", "|"):
            if candidate in sample:
                return candidate
        return ","

# ------------------------------------------------------------------
# CSV Adapter
# ------------------------------------------------------------------
class CSVDecimalAdapter:
    """
    Extracts raw decimal text columns from a delimited file.

    Responsibilities:
    - Remove comments and empty lines
    - Detect delimiter
    - Read header
    - Return requested columns as raw text (None for null markers)

    DOES NOT:
    - Parse or validate numbers (see numeric_inference / converter)
    """

    def __init__(
        self,
        file_path: str,
        columns: Optional[List[str]] = None,
        delimiter: Optional[str] = None,
    ):
        self.file_path = file_path
        self.columns = columns
        self.delimiter = "\t" if delimiter == "\\t" else delimiter

    def _read_clean_lines(self) -> List[str]:
        """
        Removes:
        - empty lines
        - comment lines starting with '#' or '--'
        """
        valid_lines: List[str] = []
        with open(self.file_path, encoding="utf-8-sig", errors="replace") as f:
            for line in f:
                stripped = line.strip()
                if not stripped or stripped.startswith("#") or stripped.startswith("--"):
                    continue
                valid_lines.append(line.rstrip("\r\n"))
        return valid_lines

    def read_columns(self) -> Dict[str, List[Optional[str]]]:
        clean_lines = self._read_clean_lines()
        if not clean_lines:
            raise ValueError("CSV contains no valid (non-comment) lines")

        delimiter = self.delimiter or detect_delimiter_from_lines(clean_lines)
        reader = csv.reader(clean_lines, delimiter=delimiter)

        header = [h.strip() for h in next(reader)]
        if not any(header):
            raise ValueError("CSV has no headers after removing comments")

        wanted = self.columns or [h for h in header if h]
        missing = [c for c in wanted if c not in header]
        if missing:
            raise ConfigError(f"Columns not found in {self.file_path}: {missing}")

        positions = {name: header.index(name) for name in wanted}
        result: Dict[str, List[Optional[str]]] = {name: [] for name in wanted}

        for row in reader:
            for name, idx in positions.items():
                cell = row[idx].strip() if idx < len(row) else ""
                result[name].append(None if cell in NULL_MARKERS else cell)

        return result
