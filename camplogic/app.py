from pathlib import Path

from camplogic.config import EventSchema, load_schema
from camplogic.event import Event
from camplogic.sheets import WorkbookSource
from camplogic.timeslots import (
    TimeSlot,
    ValidationResult,
    populate_timeslots_from_periods,
    sort_timeslots,
    validate_timeslots,
)


def load_event(
    workbook: WorkbookSource, schema: EventSchema | str | Path | None = None
) -> Event:
    """Import a registration workbook.

    Args:
        workbook: Path or stream of the .xlsx export, or a loaded openpyxl Workbook.
        schema: Event schema, or a path to a schema YAML file. Defaults to the bundled schema.

    Returns:
        Event: The imported event.
    """
    if not isinstance(schema, EventSchema):
        schema = load_schema(schema)
    return Event(workbook, schema)


def check_schedule(
    timeslots: list[TimeSlot], event: Event | None = None
) -> tuple[list[TimeSlot], ValidationResult]:
    """Validate time slots, adding a period slot for every imported period first.

    Args:
        timeslots: Configured time slots.
        event: Imported event whose periods need slots, if any.

    Returns:
        tuple[list[TimeSlot], ValidationResult]: The sorted slots and their verdict.
    """
    if event is not None:
        timeslots = populate_timeslots_from_periods(event.periods, timeslots)
    else:
        timeslots = list(timeslots)
        sort_timeslots(timeslots)
    return timeslots, validate_timeslots(timeslots)


def print_summary(event: Event):

    header = f"{event.name} ({len(event.attendees)} attendees, {len(event.workshops)} workshops)"
    print(f"\n  {header}")
    print(f"  {'-' * len(header)}")

    for period in event.periods:
        print(f"\n  {period.display_name}\n")
        workshops = event.get_workshops_for_period(period.sheet_name)
        if not workshops:
            print("    No workshops.")
        for w in workshops:
            print(
                f"    {w.name} ({w.leader or '?'}) | {w.duration.description} | "
                f"{len(w.primary_selections)} enrolled, {len(w.backup_selections)} backup"
            )

    if event.missing_period_sheets:
        print(f"\n  Missing period sheets: {', '.join(event.missing_period_sheets)}")


def print_schedule(timeslots: list[TimeSlot], result: ValidationResult):

    print("\n  Schedule")
    print("  --------\n")
    if not timeslots:
        print("    No time slots configured.")
    for i, slot in enumerate(timeslots, start=1):
        kind = "period" if slot.is_period else "activity"
        time_range = slot.time_range or "not configured"
        print(f"    {i}. {slot.label} ({kind}): {time_range}")

    print()
    if result.has_overlapping_timeslots:
        print("    Some time slots overlap.")
    if result.has_unconfigured_timeslots:
        print("    Some period time slots are missing a start or end time.")
    if result.is_valid:
        print("    All checks passed.")
