"""Parsing of free-text workshop cells such as "Pottery (Jane Doe)"."""

from typing import NamedTuple


class WorkshopCell(NamedTuple):
    name: str
    leader: str


EMPTY_CELL = WorkshopCell("", "")


def parse_workshop_cell(cell_text: str | None) -> WorkshopCell:
    """
    Splits a "Workshop Name (Leader Name)" cell into its name and leader.

    Only the first parenthesized group is used. Malformed text (no '(', or
    the first ')' not after the first '(') yields empty strings for both
    parts instead of an error, so a bad cell never aborts an import.

    Args:
        cell_text: Raw cell text.

    Returns:
        WorkshopCell: Trimmed (name, leader) pair.
    """
    if not cell_text:
        return EMPTY_CELL

    opening = cell_text.find("(")
    if opening < 0:
        return EMPTY_CELL
    closing = cell_text.find(")")
    if closing < opening:
        return EMPTY_CELL

    return WorkshopCell(
        name=cell_text[:opening].strip(),
        leader=cell_text[opening + 1 : closing].strip(),
    )
