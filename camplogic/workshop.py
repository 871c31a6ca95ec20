from dataclasses import dataclass, field

from camplogic import utils


@dataclass(frozen=True)
class WorkshopDuration:
    """Which days of the event a workshop runs, 1-based and inclusive."""

    start_day: int
    end_day: int

    def __post_init__(self):
        if self.start_day > self.end_day:
            raise ValueError(
                f"Workshop cannot end (day {self.end_day}) before it starts (day {self.start_day})"
            )

    @property
    def number_of_days(self) -> int:
        return self.end_day - self.start_day + 1

    @property
    def description(self) -> str:
        if self.number_of_days == 1:
            return f"Day {self.start_day}"
        return f"Days {self.start_day}-{self.end_day}"


class Period:
    """
    A scheduling period, backed by one sheet of the registration workbook.

    Attributes:
        sheet_name (str): Worksheet name, e.g. "MorningFirstPeriod".
        display_name (str): Name shown to people, e.g. "Morning First Period".
    """

    def __init__(self, sheet_name: str, display_name: str | None = None):
        self.sheet_name = sheet_name
        self.display_name = display_name or utils.split_camel_case(sheet_name)

    def __repr__(self):
        return f"{self.display_name}"

    def __eq__(self, other):
        return isinstance(other, Period) and other.sheet_name == self.sheet_name

    def __hash__(self):
        return hash(self.sheet_name)


@dataclass
class WorkshopSelection:
    """One attendee's enrollment (or backup choice) in one workshop offering."""

    class_selection_id: str
    workshop_name: str
    first_name: str
    last_name: str
    full_name: str
    choice_number: int
    duration: WorkshopDuration
    registration_id: int = 0

    @property
    def is_primary(self) -> bool:
        return self.choice_number == utils.PRIMARY_CHOICE


@dataclass
class Workshop:
    """
    One leader teaching one named activity in one period for one duration.

    Workshops are aggregated by `key`; every selection read for the same key
    is appended to the same instance.
    """

    name: str
    leader: str
    period: Period
    duration: WorkshopDuration
    location: str = ""
    is_mini: bool = False
    max_participants: int = 0
    min_age: int = 0
    selections: list[WorkshopSelection] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return workshop_key(self.period, self.name, self.leader, self.duration)

    def add_selection(self, selection: WorkshopSelection):
        """Appends a selection, keeping the order in which rows were read."""
        self.selections.append(selection)

    @property
    def primary_selections(self) -> list[WorkshopSelection]:
        return [s for s in self.selections if s.is_primary]

    @property
    def backup_selections(self) -> list[WorkshopSelection]:
        """Backup choices, ordered by increasing choice number (stable within a number)."""
        backups = [s for s in self.selections if s.choice_number > utils.PRIMARY_CHOICE]
        return sorted(backups, key=lambda s: s.choice_number)


def workshop_key(
    period: Period, name: str, leader: str, duration: WorkshopDuration
) -> str:
    """
    Builds the identity of a workshop offering.

    Returns:
        str: "{sheet}|{name}|{leader}|{start}-{end}"
    """
    return (
        f"{period.sheet_name}|{name}|{leader}|{duration.start_day}-{duration.end_day}"
    )
