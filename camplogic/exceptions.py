"""Errors raised while importing a registration workbook."""


class ExcelParsingError(RuntimeError):
    """Raised when a registration workbook cannot be parsed.

    Carries the sheet, row (1-based, as shown in Excel) and column where the
    failure happened, when known.
    """

    def __init__(
        self,
        message: str,
        sheet_name: str | None = None,
        row_number: int | None = None,
        column_name: str | None = None,
    ):
        super().__init__(message)
        self.sheet_name = sheet_name
        self.row_number = row_number
        self.column_name = column_name


class MissingSheetError(ExcelParsingError):
    """Raised when a required sheet is absent from the workbook."""

    def __init__(self, sheet_name: str, available_sheets: list[str]):
        available = ", ".join(available_sheets) if available_sheets else "none"
        super().__init__(
            f"Required sheet '{sheet_name}' not found in Excel file. "
            f"Available sheets: {available}",
            sheet_name=sheet_name,
        )
        self.available_sheets = list(available_sheets)


class SchemaValidationError(ValueError):
    """Raised when an event schema or time slot file is empty or invalid."""

    def __init__(self, message: str, schema_name: str | None = None):
        super().__init__(message)
        self.schema_name = schema_name
