import logging

from camplogic.attendee import Attendee
from camplogic.config import PeriodSheetConfig
from camplogic.parsing import parse_workshop_cell
from camplogic.sheets import ColumnResolver
from camplogic.utils import (
    coerce_choice_number,
    coerce_int,
    fallback_attendee_id,
    is_blank,
)
from camplogic.workshop import Period, Workshop, WorkshopSelection, workshop_key

logger = logging.getLogger(__name__)


def find_attendee(
    resolver: ColumnResolver,
    row: int,
    period_config: PeriodSheetConfig,
    attendees: dict[str, Attendee],
) -> Attendee:
    """
    Finds the roster attendee a period sheet row refers to.

    The row's selection id is looked up in the roster. A blank id is
    replaced by the same fallback id the roster loader uses. When the roster
    has no match, the names on the period sheet itself are used.

    Returns:
        Attendee: The roster entry, or one built from the period sheet row.
    """
    selection_id = resolver.value(
        row, period_config.get_column("selectionId"), fallback_to_pattern=True
    )
    first_name = resolver.value(row, period_config.get_column("firstName")) or ""
    last_name = resolver.value(row, period_config.get_column("lastName")) or ""

    if is_blank(selection_id):
        selection_id = fallback_attendee_id(first_name, last_name)

    attendee = attendees.get(selection_id)
    if attendee is None:
        attendee = Attendee(
            registration_id=selection_id, first_name=first_name, last_name=last_name
        )
    return attendee


def collect_workshops(
    resolver: ColumnResolver,
    period: Period,
    period_config: PeriodSheetConfig,
    attendees: dict[str, Attendee],
    workshops: dict[str, Workshop] | None = None,
) -> list[Workshop]:
    """
    Collects the workshop selections on one period sheet.

    Each row may name a workshop in any of the period's workshop column
    groups. Cells are aggregated by workshop key (period, name, leader,
    duration): the first cell for a key creates the Workshop, later cells
    add selections to it. Blank and malformed cells are skipped.

    Args:
        resolver: Column resolver over the period sheet.
        period: The period this sheet represents.
        period_config: Period column mapping from the event schema.
        attendees: Roster attendees keyed by registration id.
        workshops: Workshops collected so far in this import, keyed by
            workshop key. New workshops are added to it.

    Returns:
        list[Workshop]: Workshops with selections on this sheet, in the order first seen.
    """
    if workshops is None:
        workshops = {}
    found = {}

    for row in resolver.data_rows():
        choice_number = coerce_choice_number(
            resolver.value(row, period_config.get_column("choiceNumber"))
        )
        registration_id = coerce_int(
            resolver.value(row, period_config.get_column("registrationId"))
        )
        attendee = None

        for workshop_column in period_config.workshop_columns:
            cell_text = resolver.value(row, workshop_column.column_name)
            if is_blank(cell_text):
                continue

            cell = parse_workshop_cell(cell_text)
            if is_blank(cell.name):
                logger.debug(
                    f"Skipping empty workshop name at row {row}, column {workshop_column.column_name}"
                )
                continue

            if attendee is None:
                attendee = find_attendee(resolver, row, period_config, attendees)

            duration = workshop_column.duration
            key = workshop_key(period, cell.name, cell.leader, duration)
            if key not in workshops:
                workshops[key] = Workshop(
                    name=cell.name, leader=cell.leader, period=period, duration=duration
                )
            workshop = workshops[key]
            found.setdefault(key, workshop)

            workshop.add_selection(
                WorkshopSelection(
                    class_selection_id=attendee.registration_id,
                    workshop_name=cell.name,
                    first_name=attendee.first_name,
                    last_name=attendee.last_name,
                    full_name=attendee.full_name,
                    choice_number=choice_number,
                    duration=duration,
                    registration_id=registration_id,
                )
            )

    return list(found.values())
