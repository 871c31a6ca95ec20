from importlib import resources
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from camplogic import utils
from camplogic.exceptions import SchemaValidationError
from camplogic.timeslots import TimeSlot
from camplogic.workshop import WorkshopDuration

DEFAULT_SCHEMA = "winter_adventure.yaml"


class ColumnPattern(BaseModel):
    """Matches the first header containing `pattern`, for headers with unstable prefixes."""

    pattern: str | None = Field(
        None, description="Literal substring searched for in the header row."
    )


# a column is either a literal header name or a pattern descriptor
ColumnSpec = Union[str, ColumnPattern]


def column_name(column: ColumnSpec | None) -> str:
    """
    Returns the effective column name for a column descriptor.

    Args:
        column: Literal header name, pattern descriptor, or None.

    Returns:
        str: The header name or pattern text; empty if there is none.
    """
    if column is None:
        return ""
    if isinstance(column, ColumnPattern):
        return column.pattern or ""
    return column


class _SchemaModel(BaseModel):
    # accept both the camelCase keys of exported schemas and python names
    model_config = ConfigDict(populate_by_name=True)


class SheetConfig(_SchemaModel):
    """Column mapping shared by the roster and period sheets."""

    sheet_name: str = Field(..., alias="sheetName", description="Worksheet name.")
    columns: dict[str, ColumnSpec] = Field(
        default_factory=dict,
        description="Mapping of logical column keys to header names or patterns.",
    )

    def get_column(self, key: str) -> ColumnSpec | None:
        """Returns the column descriptor for `key` (case-sensitive), if configured."""
        return self.columns.get(key)

    def get_column_name(self, key: str) -> str:
        return column_name(self.get_column(key))


class ClassSelectionSheetConfig(SheetConfig):
    """Configuration for the roster sheet listing every attendee."""

    sheet_name: str = Field(
        utils.SHEET_CLASS_SELECTION, alias="sheetName", description="Roster sheet name."
    )
    columns: dict[str, ColumnSpec] = Field(
        default_factory=lambda: {
            "selectionId": ColumnPattern(pattern=utils.HEADER_SELECTION_ID),
            "firstName": utils.HEADER_FIRST_NAME,
            "lastName": utils.HEADER_LAST_NAME,
            "email": utils.HEADER_EMAIL,
            "age": utils.HEADER_AGE,
        },
        description="Mapping of logical column keys to header names or patterns.",
    )


class WorkshopColumnConfig(_SchemaModel):
    """A workshop column group bound to the days it runs."""

    column_name: ColumnSpec = Field(
        ..., alias="columnName", description="Header holding 'Workshop (Leader)' cells."
    )
    start_day: int = Field(..., alias="startDay", ge=1, description="First day (1-based).")
    end_day: int = Field(..., alias="endDay", ge=1, description="Last day, inclusive.")

    @model_validator(mode="after")
    def _check_days(self) -> "WorkshopColumnConfig":
        if self.start_day > self.end_day:
            raise ValueError(
                f"start_day ({self.start_day}) must not be after end_day ({self.end_day})"
            )
        return self

    @property
    def duration(self) -> WorkshopDuration:
        return WorkshopDuration(self.start_day, self.end_day)


class PeriodSheetConfig(SheetConfig):
    """Configuration for one period sheet and its workshop column groups."""

    display_name: str = Field(
        "", alias="displayName", description="Name shown for the period in reports."
    )
    workshop_columns: list[WorkshopColumnConfig] = Field(
        default_factory=list,
        alias="workshopColumns",
        description="Workshop column groups and the durations they represent.",
    )


class WorkshopFormatConfig(_SchemaModel):
    pattern: str = Field("", description="Expected workshop cell layout.")
    description: str = Field("", description="Human readable description of the layout.")


class EventSchema(_SchemaModel):
    """Describes how a registration workbook for one event is laid out."""

    event_name: str = Field("", alias="eventName", description="Name of the event.")
    total_days: int = Field(0, alias="totalDays", ge=0, description="Length of the event.")
    class_selection_sheet: ClassSelectionSheetConfig = Field(
        default_factory=ClassSelectionSheetConfig, alias="classSelectionSheet"
    )
    period_sheets: list[PeriodSheetConfig] = Field(
        default_factory=list, alias="periodSheets"
    )
    workshop_format: WorkshopFormatConfig = Field(
        default_factory=WorkshopFormatConfig, alias="workshopFormat"
    )


class TimeslotsConfig(BaseModel):
    """Time slots edited by the operator, independent of the workbook."""

    timeslots: list[TimeSlot] = Field(default_factory=list)


def _read_yaml(path: Path, label: str):
    if not path.exists():
        raise FileNotFoundError(f"{label} file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        raise SchemaValidationError(f"{label} file is empty: {path}", schema_name=str(path))
    return data


def load_schema(path: str | Path | None = None) -> EventSchema:
    """
    Loads and validates an event schema.

    Args:
        path: YAML schema file. The bundled Winter Adventure schema is used if omitted.

    Returns:
        EventSchema: The validated schema.
    """
    if path is None:
        text = resources.files("camplogic").joinpath("schemas", DEFAULT_SCHEMA).read_text(
            encoding="utf-8"
        )
        data = yaml.safe_load(text)
        schema_name = DEFAULT_SCHEMA
    else:
        schema_path = Path(path).expanduser().resolve()
        data = _read_yaml(schema_path, "Schema")
        schema_name = str(schema_path)

    try:
        return EventSchema.model_validate(data)
    except ValidationError as exc:
        raise SchemaValidationError(
            f"Invalid event schema: {exc}", schema_name=schema_name
        ) from exc


def load_timeslots(path: str | Path) -> list[TimeSlot]:
    """
    Loads time slots from a YAML file with a top-level `timeslots` list.

    Args:
        path: YAML file path.

    Returns:
        list[TimeSlot]: Slots in file order.
    """
    slots_path = Path(path).expanduser().resolve()
    data = _read_yaml(slots_path, "Time slot")
    try:
        return TimeslotsConfig.model_validate(data).timeslots
    except ValidationError as exc:
        raise SchemaValidationError(
            f"Invalid time slot file: {exc}", schema_name=str(slots_path)
        ) from exc
