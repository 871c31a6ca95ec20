"""Time slot configuration and schedule consistency checks."""

import uuid
from dataclasses import dataclass
from datetime import time
from typing import Iterable

from pydantic import BaseModel, Field


class TimeSlot(BaseModel):
    """
    A block of the daily schedule: a workshop period or another activity (meals, free time).

    Period slots come from the period sheets of the workbook and must have
    both times set before schedules can be printed. Other slots are added by
    the operator and may stay open-ended.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    label: str = Field("", description="Name shown on schedules, e.g. 'Lunch'.")
    start_time: time | None = Field(None, description="Start of the slot.")
    end_time: time | None = Field(None, description="End of the slot; None if open-ended.")
    is_period: bool = Field(False, description="Whether the slot is a workshop period.")

    @property
    def time_range(self) -> str:
        """The slot's times in 12-hour format, with '?' for an unknown end time."""
        if self.start_time is None:
            return ""
        end = _format_time(self.end_time) if self.end_time is not None else "?"
        return f"{_format_time(self.start_time)} - {end}"


def _format_time(value: time) -> str:
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


@dataclass(frozen=True)
class ValidationResult:
    has_overlapping_timeslots: bool = False
    has_unconfigured_timeslots: bool = False

    @property
    def is_valid(self) -> bool:
        return not (self.has_overlapping_timeslots or self.has_unconfigured_timeslots)


def _start_key(slot: TimeSlot):
    # slots without a start time sort last
    return (slot.start_time is None, slot.start_time or time.min)


def has_unconfigured_timeslots(slots: Iterable[TimeSlot]) -> bool:
    """True if any period slot is missing its start or end time."""
    return any(
        s.is_period and (s.start_time is None or s.end_time is None) for s in slots
    )


def has_overlapping_timeslots(slots: Iterable[TimeSlot]) -> bool:
    """
    Checks the slots for time conflicts.

    Two slots that start at the same time always conflict, even without end
    times. Otherwise only slots with both times are compared, as closed-open
    intervals: a slot ending at 10:30 does not conflict with one starting at
    10:30. Sorted by start time, any overlap shows up between neighbours, so
    only adjacent pairs are compared.

    Args:
        slots: Slots to check, in any order.

    Returns:
        bool: True if any two slots conflict.
    """
    started = sorted((s for s in slots if s.start_time is not None), key=_start_key)
    for current, following in zip(started, started[1:]):
        if current.start_time == following.start_time:
            return True

    bounded = [s for s in started if s.end_time is not None]
    for current, following in zip(bounded, bounded[1:]):
        if current.end_time > following.start_time:
            return True

    return False


def validate_timeslots(slots: Iterable[TimeSlot]) -> ValidationResult:
    """
    Validates the schedule's time slots.

    Args:
        slots: Configured time slots.

    Returns:
        ValidationResult: Overlap and completeness flags; valid only if neither is set.
    """
    slots = list(slots)
    return ValidationResult(
        has_overlapping_timeslots=has_overlapping_timeslots(slots),
        has_unconfigured_timeslots=has_unconfigured_timeslots(slots),
    )


def sort_timeslots(slots: list[TimeSlot]) -> None:
    """Sorts slots in place by start time; slots without a start keep their order at the end."""
    slots.sort(key=_start_key)


def populate_timeslots_from_periods(periods, existing: Iterable[TimeSlot] = ()) -> list[TimeSlot]:
    """
    Builds the slot list for a freshly imported set of periods.

    Each period gets a period slot labelled with its display name. A period
    slot already present with that label is reused as-is, so configured times
    and ids survive a re-import. Non-period slots are carried over.

    Args:
        periods: Imported periods, in schedule order.
        existing: Slots configured before the import.

    Returns:
        list[TimeSlot]: Period and non-period slots sorted by start time.
    """
    existing = list(existing)
    existing_periods = {s.label: s for s in existing if s.is_period}

    result = []
    for period in periods:
        slot = existing_periods.get(period.display_name)
        if slot is None:
            slot = TimeSlot(label=period.display_name, is_period=True)
        result.append(slot)

    result.extend(s for s in existing if not s.is_period)
    sort_timeslots(result)
    return result
