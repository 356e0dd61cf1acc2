"""Per-column summary statistics over a parsed Table."""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Dict, List, Optional

from .csv_parser import Record, Table, is_numeric

TWO_PLACES = Decimal("0.01")

# Enough digits for the integer part of any finite float plus two decimals.
ROUNDING_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def round2(value: float) -> float:
    """
    Round to 2 decimals, halves away from zero.

    Works on the exact binary value of the float, so 1.005 (really
    1.00499...) becomes 1.0 while 0.125 becomes 0.13. Infinities and NaN
    are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(TWO_PLACES, context=ROUNDING_CONTEXT))


@dataclass(frozen=True)
class ColumnStats:
    """
    Summary for one column.

    `mean`, `median` and `stdev` are already rounded to 2 decimals; `min`
    and `max` keep full precision.
    """

    count: int
    min: float
    max: float
    mean: float
    median: float
    stdev: float

    def display(self) -> Dict[str, str]:
        return {
            "count": str(self.count),
            "min": _format_plain(self.min),
            "max": _format_plain(self.max),
            "mean": f"{self.mean:.2f}",
            "median": f"{self.median:.2f}",
            "stdev": f"{self.stdev:.2f}",
        }


def _format_plain(value: float) -> str:
    # 7.0 -> "7", 7.25 -> "7.25"
    if float(value).is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def numeric_values(table: Table, column_name: str) -> List[float]:
    return [value for value in table.column_values(column_name) if is_numeric(value)]


def column_stats(table: Table, column_name: str) -> Optional[ColumnStats]:
    """
    Compute count/min/max/mean/median/stdev for the numeric cells of a column.

    Text cells are ignored. Returns None when the column does not exist or
    has no numeric cells at all.
    """
    values = numeric_values(table, column_name)
    if not values:
        return None

    n = len(values)
    ordered = sorted(values)
    mean = sum(values) / n
    # Population variance (divide by n).
    variance = sum((value - mean) * (value - mean) for value in values) / n

    return ColumnStats(
        count=n,
        min=ordered[0],
        max=ordered[-1],
        mean=round2(mean),
        # Upper-middle element for even n, no averaging.
        median=round2(ordered[n // 2]),
        stdev=round2(math.sqrt(variance)),
    )


def filter_by_range(
    table: Table, column_name: str, minimum: float, maximum: float
) -> List[Record]:
    """Rows whose `column_name` cell is a number inside [minimum, maximum]."""
    return [
        row
        for row in table.rows
        if is_numeric(row.get(column_name)) and minimum <= row[column_name] <= maximum
    ]
