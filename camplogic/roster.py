import logging

from camplogic.attendee import Attendee
from camplogic.config import ClassSelectionSheetConfig
from camplogic.sheets import ColumnResolver
from camplogic.utils import fallback_attendee_id, is_blank

logger = logging.getLogger(__name__)


def load_attendees(
    resolver: ColumnResolver, sheet_config: ClassSelectionSheetConfig
) -> dict[str, Attendee]:
    """
    Reads every attendee from the roster sheet.

    Rows without a first or last name are skipped. Rows without a selection
    id get the fallback id (first name + last name, no spaces) so period
    sheets can still find them. A later row with the same id replaces an
    earlier one.

    Args:
        resolver: Column resolver over the roster sheet.
        sheet_config: Roster column mapping from the event schema.

    Returns:
        dict[str, Attendee]: Attendees keyed by registration id, in row order.
    """
    attendees = {}
    selection_column = sheet_config.get_column("selectionId")

    for row in resolver.data_rows():
        first_name = resolver.value(row, sheet_config.get_column("firstName"))
        last_name = resolver.value(row, sheet_config.get_column("lastName"))

        if is_blank(first_name) and is_blank(last_name):
            continue

        selection_id = resolver.value(row, selection_column, fallback_to_pattern=True)
        if is_blank(selection_id):
            selection_id = fallback_attendee_id(first_name, last_name)
            logger.debug(
                f"Generated fallback ID for attendee: {first_name} {last_name} -> {selection_id}"
            )

        # TODO: report duplicate ids instead of letting the last row win
        attendees[selection_id] = Attendee(
            registration_id=selection_id,
            first_name=first_name or "",
            last_name=last_name or "",
            email=resolver.value(row, sheet_config.get_column("email")) or "",
            age=resolver.value(row, sheet_config.get_column("age")) or "",
        )

    return attendees
