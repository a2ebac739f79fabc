"""
Input/Output Manager (CSV)
Reads and writes raw survey rows in the spreadsheet CSV layout:

    Angle,dB,Ultrasonic,RT60,Classification,Layer

Per-layer sheets often omit the Layer column; `load_rows` can stamp a layer
name onto every row it reads.
"""
import csv
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from acousticzones.model.readings import RAW_FIELDS, is_blank_row

logger = logging.getLogger(__name__)

CSV_HEADER = ["Angle", "dB", "Ultrasonic", "RT60", "Classification", "Layer"]


class IOManager:

    @staticmethod
    def load_rows(filepath: str, layer: Optional[str] = None) -> List[Dict[str, str]]:
        """
        Read raw rows from a survey CSV. The first line is the header and is skipped.
        Rows with no angle and no dB value are dropped.
        """
        logger.info(f"Importing survey rows from: {filepath}")
        rows: List[Dict[str, str]] = []

        try:
            with open(filepath, mode='r', encoding='utf-8-sig', newline='') as f:
                line = f.readline()
                delimiter = ';' if ';' in line else ','
                reader = csv.reader(f, delimiter=delimiter)
                for values in reader:
                    if not values:
                        continue
                    values = [v.strip() for v in values]
                    row = dict(zip(RAW_FIELDS, values + [""] * (len(RAW_FIELDS) - len(values))))
                    if layer is not None and not row["layer"]:
                        row["layer"] = layer
                    if is_blank_row(row):
                        continue
                    rows.append(row)
        except (OSError, csv.Error) as e:
            logger.error(f"CSV Import failed: {e}")
            raise IOError(f"Failed to read CSV: {e}") from e

        logger.info(f"Imported {len(rows)} row(s).")
        return rows

    @staticmethod
    def save_rows(rows: Iterable[Mapping[str, Any]], filepath: str) -> int:
        """Write non-blank rows to CSV. Returns the number of data rows written."""
        logger.info(f"Exporting survey rows to: {filepath}")
        count = 0
        try:
            with open(filepath, mode='w', encoding='utf-8', newline='') as f:
                writer = csv.writer(f)
                writer.writerow(CSV_HEADER)
                for row in rows:
                    if is_blank_row(row):
                        continue
                    writer.writerow(["" if row.get(name) is None else row.get(name) for name in RAW_FIELDS])
                    count += 1
        except OSError as e:
            logger.error(f"CSV Export failed: {e}")
            raise IOError(f"Failed to write CSV: {e}") from e

        logger.info(f"Exported {count} row(s).")
        return count
