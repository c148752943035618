"""DataMind Data Module - CSV ingestion and prompt sampling."""

from datamind.modules.data.parser import coerce_value, parse_csv
from datamind.modules.data.sample import generate_sample_csv
from datamind.modules.data.sampler import DEFAULT_SAMPLE_ROWS, sample_rows
from datamind.modules.data.schemas import EMPTY_DATASET, CellValue, Dataset, Row

__all__ = [
    "CellValue",
    "DEFAULT_SAMPLE_ROWS",
    "Dataset",
    "EMPTY_DATASET",
    "Row",
    "coerce_value",
    "generate_sample_csv",
    "parse_csv",
    "sample_rows",
]
