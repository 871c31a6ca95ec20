import openpyxl
import pytest

from camplogic.config import load_schema

ROSTER_HEADERS = ["ClassSelection_Id", "Name_First", "Name_Last", "Email", "Age"]

PERIOD_HEADERS = [
    "ClassSelection_Id",
    "AttendeeName_First",
    "AttendeeName_Last",
    "AttendeeName",
    "2024WinterAdventureClassRegist_Id",
    "_4dayClasses",
    "ChoiceNumber",
    "_2dayClassesFirst2Days",
    "_2dayClassesSecond2Days",
]


def period_row(
    selection_id=None,
    first=None,
    last=None,
    four_day=None,
    choice="1",
    first_half=None,
    second_half=None,
    registration_id=None,
):
    """Build a period sheet row in PERIOD_HEADERS order."""
    full_name = " ".join(n for n in (first, last) if n) or None
    return [
        selection_id,
        first,
        last,
        full_name,
        registration_id,
        four_day,
        choice,
        first_half,
        second_half,
    ]


def add_sheet(workbook, title, headers, rows):
    sheet = workbook.create_sheet(title)
    sheet.append(headers)
    for row in rows:
        sheet.append(row)
    return sheet


@pytest.fixture
def make_workbook():
    """Return a builder for in-memory registration workbooks.

    The builder takes the roster rows (None leaves the roster sheet out) and
    a mapping of period sheet name to period rows.
    """

    def _make(roster=(), periods=None):
        workbook = openpyxl.Workbook()
        workbook.remove(workbook.active)
        if roster is not None:
            add_sheet(workbook, "ClassSelection", ROSTER_HEADERS, roster)
        for name, rows in (periods or {}).items():
            add_sheet(workbook, name, PERIOD_HEADERS, rows)
        return workbook

    return _make


@pytest.fixture
def schema():
    return load_schema()


@pytest.fixture
def row_helper():
    return period_row
