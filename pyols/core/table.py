"""
Tabular input for PyOLS.

Table is the "I have rows of text" abstraction: a header plus data rows
of string cells, exactly as they came out of a CSV file or a grid widget.
It doesn't know what a regression is. Numbers are parsed later, by the
consumer that knows which columns it needs.

Usage:
    from pyols.core.table import Table

    table = Table.from_file("scores.csv")
    table = Table.from_text("Hours,Score\\n1,50\\n2,65\\n")
    table = Table.from_rows([["Hours", "Score"], ["1", "50"]])
    table = Table.from_dataframe(df)

    table.header               # ('Hours', 'Score')
    table.column_index('Score')  # 1
    table.cell(0, 1)           # '50'
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, TYPE_CHECKING

from pyols.core.exceptions import ColumnNotFoundError, ValidationError

if TYPE_CHECKING:
    import pandas as pd


def parse_csv(text: str) -> list[list[str]]:
    """
    Split CSV text into rows of raw string cells.

    Handles the quoting rules spreadsheets actually emit: fields wrapped in
    double quotes may contain commas and newlines, and a doubled quote
    inside a quoted field is a literal quote. Carriage returns outside
    quotes are dropped so CRLF files parse like LF files. An unterminated
    quote simply runs to the end of the text.

    Rows consisting of a single empty field (blank lines) are discarded.
    """
    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and text[i + 1] == '"':
                    field.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                field.append(ch)
        elif ch == ',':
            row.append(''.join(field))
            field = []
        elif ch == '"':
            in_quotes = True
        elif ch == '\n':
            row.append(''.join(field))
            rows.append(row)
            row = []
            field = []
        elif ch != '\r':
            field.append(ch)
        i += 1

    if field or row:
        row.append(''.join(field))
        rows.append(row)

    return [r for r in rows if not (len(r) == 1 and r[0] == '')]


def parse_number(cell: str | None) -> float | None:
    """
    Parse a cell as a finite float.

    Returns None for missing, empty, non-numeric, NaN or infinite cells.
    """
    if cell is None:
        return None
    text = cell.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class Table:
    """
    Header plus data rows of string cells. Immutable.

    Construct via factory classmethods, not directly.

    Every data row is read against the header's column count: a row that
    is too short has absent (None) cells at the end, extra cells in a
    row that is too long are never looked at.
    """
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        duplicates = []
        for name in self.header:
            if name in seen:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise ValidationError(
                f"header: duplicate column names {sorted(set(duplicates))}"
            )

    # === Factory Methods ===

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> Table:
        """Construct from rows of cells; the first row is the header."""
        materialized = [tuple('' if c is None else str(c) for c in r) for r in rows]
        if not materialized:
            raise ValidationError("rows: table needs at least a header row")
        header = tuple(name.strip() for name in materialized[0])
        return cls(header=header, rows=tuple(materialized[1:]))

    @classmethod
    def from_text(cls, text: str) -> Table:
        """Construct from CSV text."""
        return cls.from_rows(parse_csv(text))

    @classmethod
    def from_file(cls, path: str | Path, *, encoding: str = 'utf-8') -> Table:
        """Construct from a CSV file on disk."""
        path = Path(path)
        return cls.from_text(path.read_text(encoding=encoding))

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame') -> Table:
        """
        Construct from a pandas DataFrame.

        Values are rendered back to text; missing values become empty
        cells so they are treated as absent downstream.
        """
        import pandas as pd

        header = [str(c) for c in df.columns]
        body = [
            ['' if pd.isna(v) else str(v) for v in record]
            for record in df.itertuples(index=False, name=None)
        ]
        return cls.from_rows([header, *body])

    # === Access ===

    @property
    def n_rows(self) -> int:
        """Number of data rows (header excluded)."""
        return len(self.rows)

    @property
    def n_columns(self) -> int:
        return len(self.header)

    def __contains__(self, name: object) -> bool:
        return name in self.header

    def column_index(self, name: str) -> int:
        """
        Position of a column in the header.

        Raises:
            ColumnNotFoundError: If the header has no such column
        """
        try:
            return self.header.index(name)
        except ValueError:
            raise ColumnNotFoundError(
                f"Column {name!r} not found. Available: {list(self.header)}",
                column=name,
                available=self.header,
            ) from None

    def cell(self, row: int, col: int) -> str | None:
        """Cell at (data row, column), or None if absent from that row."""
        if col >= self.n_columns:
            return None
        values = self.rows[row]
        if col >= len(values):
            return None
        return values[col]

    def column(self, name: str) -> list[str | None]:
        """All cells of one column, one per data row."""
        idx = self.column_index(name)
        return [self.cell(r, idx) for r in range(self.n_rows)]
