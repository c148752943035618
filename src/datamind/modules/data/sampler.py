"""
DataMind Data - Sampler.

Deterministically extracts a bounded prefix of a Dataset and re-serializes it
as compact CSV for inclusion in an analysis prompt. The full dataset is never
sent to the engine.
"""

from datamind.modules.data.schemas import CellValue, Dataset

DEFAULT_SAMPLE_ROWS = 20


def format_value(value: CellValue) -> str:
    """Render a cell the way it is written in the prompt sample."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def sample_rows(dataset: Dataset, limit: int = DEFAULT_SAMPLE_ROWS) -> str:
    """
    Serialize the header plus the first ``limit`` rows, in original order.

    Returns an empty string for an empty dataset.
    """
    if dataset.is_empty:
        return ""

    headers = dataset.columns
    lines = [",".join(headers)]
    for row in dataset.head(limit):
        lines.append(",".join(format_value(row.get(h)) for h in headers))

    return "\n".join(lines)
