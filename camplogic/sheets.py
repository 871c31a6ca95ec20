"""Header-based access to registration worksheets."""

import logging
import os
import zipfile
from pathlib import Path
from typing import BinaryIO, Iterator

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from camplogic.config import ColumnPattern, ColumnSpec
from camplogic.exceptions import ExcelParsingError
from camplogic.utils import is_blank, stringify_cell

logger = logging.getLogger(__name__)

HEADER_ROW = 1
FIRST_DATA_ROW = 2

WorkbookSource = str | Path | BinaryIO | Workbook


class ColumnResolver:
    """
    Maps header names to column indexes for one worksheet.

    The header row is scanned once when the resolver is built; every later
    lookup is a dictionary hit. Build one resolver per sheet and hand it to
    every reader of that sheet.

    Attributes:
        sheet (Worksheet): The worksheet being read.
        header_names (list[str]): Non-blank headers in column order.
    """

    def __init__(self, sheet: Worksheet):
        self.sheet = sheet
        self.header_names: list[str] = []
        self._columns: dict[str, int] = {}

        for col in range(1, sheet.max_column + 1):
            header = stringify_cell(sheet.cell(row=HEADER_ROW, column=col).value)
            if header is None:
                continue
            self.header_names.append(header)
            self._columns[header] = col

    def __repr__(self):
        return f"ColumnResolver({self.sheet.title})"

    @property
    def title(self) -> str:
        return self.sheet.title

    def data_rows(self) -> Iterator[int]:
        """Yields the 1-based row numbers below the header row."""
        return iter(range(FIRST_DATA_ROW, self.sheet.max_row + 1))

    def index_of(self, header: str) -> int | None:
        """Returns the column whose header equals `header` exactly."""
        if is_blank(header):
            return None
        return self._columns.get(header)

    def index_of_pattern(self, substring: str) -> int | None:
        """Returns the left-most column whose header contains `substring`."""
        if is_blank(substring):
            return None
        for header in self.header_names:
            if substring in header:
                return self._columns[header]
        return None

    def resolve(self, column: ColumnSpec | None, fallback_to_pattern: bool = False) -> int | None:
        """
        Resolves a column descriptor to a column index.

        Args:
            column: Literal header name or pattern descriptor.
            fallback_to_pattern: Try a substring match when a literal name has no exact match.

        Returns:
            int | None: 1-based column index, or None if nothing matches.
        """
        if column is None:
            return None
        if isinstance(column, ColumnPattern):
            return self.index_of_pattern(column.pattern)
        index = self.index_of(column)
        if index is None and fallback_to_pattern:
            index = self.index_of_pattern(column)
        return index

    def value_at(self, row: int, col: int | None) -> str | None:
        if col is None:
            return None
        return stringify_cell(self.sheet.cell(row=row, column=col).value)

    def cell_value(self, row: int, header: str) -> str | None:
        return self.value_at(row, self.index_of(header))

    def cell_value_by_pattern(self, row: int, substring: str) -> str | None:
        return self.value_at(row, self.index_of_pattern(substring))

    def value(
        self, row: int, column: ColumnSpec | None, fallback_to_pattern: bool = False
    ) -> str | None:
        """Reads the cell under a column descriptor; None when unresolved or blank."""
        return self.value_at(row, self.resolve(column, fallback_to_pattern))


def open_workbook(source: WorkbookSource) -> Workbook:
    """
    Opens a registration workbook.

    Args:
        source: Path to an .xlsx file, a binary stream, or an already loaded Workbook.

    Returns:
        Workbook: Workbook with cached cell values (formulas are not evaluated).

    Raises:
        ExcelParsingError: The file is empty, unreadable, or has no worksheets.
    """
    if isinstance(source, Workbook):
        workbook = source
    else:
        if _is_empty(source):
            raise ExcelParsingError("Excel file stream is empty or null")
        try:
            workbook = openpyxl.load_workbook(source, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
            raise ExcelParsingError(
                "Failed to import Excel file. Please verify the file format "
                "matches the expected schema."
            ) from exc

    if not workbook.sheetnames:
        raise ExcelParsingError("Excel file contains no worksheets")

    logger.debug(f"Excel workbook loaded with {len(workbook.sheetnames)} worksheets")
    return workbook


def _is_empty(source) -> bool:
    if source is None:
        return True
    if isinstance(source, (str, Path)):
        path = Path(source)
        return path.is_file() and path.stat().st_size == 0
    # binary stream: measure it, then rewind so openpyxl reads from the start
    source.seek(0, os.SEEK_END)
    empty = source.tell() == 0
    source.seek(0)
    return empty


def describe_workbook(workbook: Workbook) -> dict:
    """
    Summarizes a workbook's structure, for writing a schema for a new export.

    Returns:
        dict: Worksheet count plus, per sheet, its dimensions, header cells and first data row.
    """
    worksheets = []
    for sheet in workbook.worksheets:
        columns = range(1, sheet.max_column + 1)
        # reading a cell creates it, so stay inside the used range
        has_data = sheet.max_row >= FIRST_DATA_ROW
        worksheets.append(
            {
                "name": sheet.title,
                "dimensions": sheet.dimensions,
                "row_count": sheet.max_row,
                "column_count": sheet.max_column,
                "headers": [
                    {"column": c, "value": stringify_cell(sheet.cell(HEADER_ROW, c).value)}
                    for c in columns
                ],
                "sample_row": [
                    {
                        "column": c,
                        "value": stringify_cell(sheet.cell(FIRST_DATA_ROW, c).value)
                        if has_data
                        else None,
                    }
                    for c in columns
                ],
            }
        )
    return {"worksheet_count": len(worksheets), "worksheets": worksheets}
