"""
DataMind Data - Tabular Ingestor.

Parses raw CSV text into typed rows.

This is a deliberately simple splitter: fields are separated on every
comma, so quoted fields that contain commas (or newlines) are NOT supported.
Files relying on that will produce rows with the wrong field count, which
are dropped.
"""

import logging
import re

from datamind.modules.data.schemas import EMPTY_DATASET, CellValue, Dataset, Row

logger = logging.getLogger(__name__)

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _clean(field: str) -> str:
    """Trim whitespace, then strip one leading and one trailing double quote."""
    value = field.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def coerce_value(raw: str) -> CellValue:
    """
    Infer the type of a single cleaned field.

    - "" -> None
    - ASCII decimal numeric literal, padding inside quotes ignored
      -> int (integer literal) or float
    - anything else -> the original text
    """
    if raw == "":
        return None
    literal = raw.strip()
    if _INT_LITERAL.fullmatch(literal):
        return int(literal)
    if _FLOAT_LITERAL.fullmatch(literal):
        return float(literal)
    return raw


def parse_header(line: str) -> list[str]:
    return [_clean(h) for h in line.split(",")]


def parse_csv(raw_text: str) -> Dataset:
    """
    Parse delimited text into a Dataset.

    Pure and deterministic. Returns an empty Dataset when the input has no
    header plus at least one data line, or when no row survives the
    validity rules:

    - a line whose field count differs from the header count is dropped
    - a row whose every value is null is dropped

    Duplicate header names are kept as-is; the last field wins for that key.
    """
    lines = raw_text.strip().split("\n")
    if len(lines) < 2:
        return EMPTY_DATASET

    headers = parse_header(lines[0])
    columns = tuple(dict.fromkeys(headers))
    if len(columns) != len(headers):
        duplicates = sorted({h for h in headers if headers.count(h) > 1})
        logger.warning(f"[ingest] Duplicate column names, last value wins: {duplicates}")

    rows: list[Row] = []
    dropped_shape = 0
    dropped_empty = 0

    for line in lines[1:]:
        fields = line.split(",")
        if len(fields) != len(headers):
            dropped_shape += 1
            continue

        row: Row = {}
        has_value = False
        for header, field in zip(headers, fields):
            value = coerce_value(_clean(field))
            if value is not None:
                has_value = True
            row[header] = value

        if has_value:
            rows.append(row)
        else:
            dropped_empty += 1

    if dropped_shape or dropped_empty:
        logger.info(
            f"[ingest] Dropped {dropped_shape} malformed and {dropped_empty} empty lines"
        )

    if not rows:
        return EMPTY_DATASET

    logger.info(f"[ingest] Parsed {len(rows)} rows x {len(columns)} columns")
    return Dataset(columns=columns, rows=tuple(rows))
