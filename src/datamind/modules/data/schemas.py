"""DataMind Data - Row and Dataset types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

CellValue = Union[int, float, str, None]
Row = dict[str, CellValue]


@dataclass(frozen=True)
class Dataset:
    """Ordered, immutable collection of typed rows from one uploaded file.

    ``columns`` holds the distinct header names in header order; every row
    carries exactly these keys in this order.
    """

    columns: tuple[str, ...]
    rows: tuple[Row, ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def head(self, limit: int) -> tuple[Row, ...]:
        return self.rows[: max(limit, 0)]

    def to_records(self) -> list[dict[str, Any]]:
        """Plain dict copies, safe to hand to serializers and renderers."""
        return [dict(row) for row in self.rows]


EMPTY_DATASET = Dataset(columns=(), rows=())
