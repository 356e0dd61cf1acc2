"""
CSV parsing for the water quality visualizer.

The parser turns raw CSV text into an immutable `Table`:
- the first line holds the column names,
- every later line becomes one record keyed by those names,
- fields that look like numbers are stored as floats, everything else stays text.

Rows with the wrong number of fields are skipped with a warning instead of
failing the whole file, which matches how messy sensor exports usually look.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

logger = logging.getLogger(__name__)

Cell = Union[float, str]
Record = Dict[str, Cell]

# Optional sign, integer or decimal part, optional exponent.
# "Infinity", "NaN", hex literals and blank fields are deliberately not numbers.
NUMERIC_LITERAL = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class CSVParseError(ValueError):
    """Base class for every error that aborts a parse."""


class EmptyInputError(CSVParseError):
    def __init__(self) -> None:
        super().__init__("CSV file is empty")


class NoHeadersError(CSVParseError):
    def __init__(self) -> None:
        super().__init__("No headers found in CSV")


class NoDataError(CSVParseError):
    def __init__(self) -> None:
        super().__init__("No valid data rows found in CSV")


class CSVReadError(CSVParseError):
    """The file could not be read from disk (missing, unreadable, not UTF-8)."""


@dataclass(frozen=True)
class Table:
    """
    Parsed CSV contents.

    `headers` keeps the order of the first line and `rows` keeps the order of
    the file. A new Table is built on every parse, so holding on to one is
    always safe.
    """

    headers: Tuple[str, ...]
    rows: Tuple[Record, ...]

    def column_names(self) -> List[str]:
        return list(self.headers)

    def numeric_column_names(self) -> List[str]:
        """Columns where at least one row holds a number."""
        return [
            header
            for header in self.headers
            if any(is_numeric(row.get(header)) for row in self.rows)
        ]

    def column_values(self, column_name: str) -> List[Cell]:
        if column_name not in self.headers:
            return []
        return [row[column_name] for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


def is_numeric(value: object) -> bool:
    # bool is a subclass of int, but no parsed cell is ever a bool.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_cell(field: str) -> Cell:
    """Return the float value of `field` if it is a numeric literal, else the text."""
    if NUMERIC_LITERAL.match(field):
        return float(field)
    return field


def split_line(line: str) -> List[str]:
    """
    Split one physical line into trimmed fields.

    Double quotes wrap fields that contain commas, and `""` inside a quoted
    field stands for a literal quote. A quoted field cannot span several
    lines. An empty line still yields a single empty field.
    """
    fields: List[str] = []
    current = ""
    inside_quotes = False

    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if inside_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current += '"'
                i += 1
            else:
                inside_quotes = not inside_quotes
        elif char == "," and not inside_quotes:
            fields.append(current.strip())
            current = ""
        else:
            current += char
        i += 1

    fields.append(current.strip())
    return fields


def format_line(values: Iterable[object]) -> str:
    """
    Inverse of `split_line` for writing a row back out.

    Fields with commas, quotes or edge whitespace get quoted; numbers are
    written with `repr` so they parse back to the same float.
    """
    out = []
    for value in values:
        text = repr(value) if isinstance(value, float) else str(value)
        if "," in text or '"' in text or text != text.strip():
            text = '"' + text.replace('"', '""') + '"'
        out.append(text)
    return ",".join(out)


def parse(text: str) -> Table:
    """
    Parse CSV text into a Table.

    Raises EmptyInputError, NoHeadersError or NoDataError; a failed parse
    never returns a partial table.
    """
    stripped = text.strip()
    if not stripped:
        raise EmptyInputError()

    lines = stripped.split("\n")

    headers = split_line(lines[0])
    if not headers:
        raise NoHeadersError()

    rows: List[Record] = []
    skipped = 0
    for line_number, raw_line in enumerate(lines[1:], start=1):
        line = raw_line.strip()
        if line == "":
            continue

        values = split_line(line)
        if len(values) != len(headers):
            logger.warning(
                "Row %d has %d values but expected %d",
                line_number,
                len(values),
                len(headers),
            )
            skipped += 1
            continue

        rows.append({header: coerce_cell(value) for header, value in zip(headers, values)})

    if not rows:
        raise NoDataError()

    logger.debug("Parsed %d rows x %d columns (%d skipped)", len(rows), len(headers), skipped)
    return Table(headers=tuple(headers), rows=tuple(rows))


def load_file(path: Union[str, Path]) -> Table:
    """
    Read a CSV file from disk and parse it.

    Excel likes to put a BOM in front of the first header, so `utf-8-sig`
    is used to drop it.
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise CSVReadError(f"Error reading file: {exc}") from exc
    return parse(text)
