import logging

import pytest

from camplogic.app import check_schedule, load_event
from camplogic.event import Event
from camplogic.exceptions import MissingSheetError
from camplogic.timeslots import TimeSlot
from camplogic.workshop import WorkshopDuration


@pytest.fixture
def winter_workbook(make_workbook, row_helper):
    return make_workbook(
        roster=[
            ["SEL001", "Alice", "Johnson", "alice@example.com", 12],
            [None, "Bob", "Smith", None, 11],
        ],
        periods={
            "MorningFirstPeriod": [
                row_helper("SEL001", "Alice", "Johnson", four_day="Pottery (John Smith)"),
                row_helper(None, "Bob", "Smith", first_half="Archery (Robin Hood)"),
            ],
            "AfternoonPeriod": [
                row_helper("SEL001", "Alice", "Johnson", four_day="Pottery (John Smith)", choice="2"),
            ],
        },
    )


class TestEvent:

    def test_end_to_end(self, winter_workbook, schema):
        event = Event(winter_workbook, schema)

        assert event.name == "Winter Adventure"
        assert list(event.attendees) == ["SEL001", "BobSmith"]
        assert [p.sheet_name for p in event.periods] == [
            "MorningFirstPeriod",
            "AfternoonPeriod",
        ]
        assert event.missing_period_sheets == ["MorningSecondPeriod"]

        pottery = event.workshops[0]
        assert pottery.name == "Pottery"
        assert pottery.leader == "John Smith"
        assert pottery.duration == WorkshopDuration(1, 4)
        assert pottery.selections[0].full_name == "Alice Johnson"
        assert pottery.selections[0].choice_number == 1

    def test_same_workshop_in_two_periods(self, winter_workbook, schema):
        event = Event(winter_workbook, schema)
        pottery = [w for w in event.workshops if w.name == "Pottery"]
        assert len(pottery) == 2
        assert {w.period.sheet_name for w in pottery} == {
            "MorningFirstPeriod",
            "AfternoonPeriod",
        }

    def test_workshops_for_period(self, winter_workbook, schema):
        event = Event(winter_workbook, schema)
        morning = event.get_workshops_for_period("MorningFirstPeriod")
        assert [w.name for w in morning] == ["Pottery", "Archery"]
        assert morning[1].selections[0].class_selection_id == "BobSmith"
        assert event.get_workshops_for_period("MorningSecondPeriod") == []

    def test_period_display_names(self, winter_workbook, schema):
        event = Event(winter_workbook, schema)
        assert [p.display_name for p in event.periods] == [
            "Morning First Period",
            "Afternoon Period",
        ]

    def test_default_schema(self, winter_workbook):
        assert Event(winter_workbook).name == "Winter Adventure"

    def test_missing_roster_sheet(self, make_workbook, schema):
        workbook = make_workbook(roster=None, periods={"MorningFirstPeriod": []})
        with pytest.raises(MissingSheetError) as excinfo:
            Event(workbook, schema)

        error = excinfo.value
        assert error.sheet_name == "ClassSelection"
        assert error.available_sheets == ["MorningFirstPeriod"]
        assert "Available sheets: MorningFirstPeriod" in str(error)

    def test_missing_period_sheet_warns(self, make_workbook, schema, caplog):
        with caplog.at_level(logging.WARNING, logger="camplogic"):
            event = Event(make_workbook(roster=[["SEL001", "Alice", "Johnson", None, None]]), schema)

        assert event.workshops == []
        assert event.periods == []
        assert len(event.missing_period_sheets) == 3
        assert "Could not find period sheet: AfternoonPeriod" in caplog.text

    def test_empty_roster_warns(self, make_workbook, schema, caplog):
        with caplog.at_level(logging.WARNING, logger="camplogic"):
            event = Event(make_workbook(), schema)

        assert event.attendees == {}
        assert "No attendees found" in caplog.text

    def test_roster_without_headers(self, schema):
        import openpyxl

        workbook = openpyxl.Workbook()
        workbook.active.title = "ClassSelection"
        assert Event(workbook, schema).attendees == {}

    def test_reload_builds_fresh_state(self, winter_workbook, schema):
        first = Event(winter_workbook, schema)
        second = Event(winter_workbook, schema)
        assert first.workshops[0] is not second.workshops[0]
        assert len(second.workshops[0].selections) == 1

    def test_describe_workbook(self, winter_workbook, schema):
        description = Event(winter_workbook, schema).describe_workbook()
        assert description["worksheet_count"] == 3
        assert [s["name"] for s in description["worksheets"]] == [
            "ClassSelection",
            "MorningFirstPeriod",
            "AfternoonPeriod",
        ]


class TestLoadEvent:

    def test_from_file(self, winter_workbook, tmp_path):
        path = tmp_path / "registrations.xlsx"
        winter_workbook.save(path)

        event = load_event(path)
        assert len(event.workshops) == 3
        assert event.attendees["SEL001"].age == "12"

    def test_schema_path(self, winter_workbook, tmp_path):
        schema_path = tmp_path / "schema.yaml"
        schema_path.write_text(
            "eventName: Evening Camp\n"
            "periodSheets:\n"
            "  - sheetName: AfternoonPeriod\n"
            "    columns:\n"
            "      choiceNumber: ChoiceNumber\n"
            "    workshopColumns:\n"
            "      - columnName: _4dayClasses\n"
            "        startDay: 1\n"
            "        endDay: 4\n",
            encoding="utf-8",
        )
        event = load_event(winter_workbook, schema_path)
        assert event.name == "Evening Camp"
        assert [w.period.sheet_name for w in event.workshops] == ["AfternoonPeriod"]
        assert event.workshops[0].selections[0].choice_number == 2


class TestCheckSchedule:

    def test_imported_periods_get_slots(self, winter_workbook, schema):
        event = Event(winter_workbook, schema)
        slots, result = check_schedule([], event)

        assert [s.label for s in slots] == ["Morning First Period", "Afternoon Period"]
        assert result.has_unconfigured_timeslots
        assert not result.is_valid

    def test_configured_periods_are_kept(self, winter_workbook, schema):
        event = Event(winter_workbook, schema)
        configured = [
            TimeSlot(label="Afternoon Period", start_time="13:00", end_time="15:00", is_period=True),
            TimeSlot(label="Morning First Period", start_time="09:00", end_time="10:30", is_period=True),
            TimeSlot(label="Lunch", start_time="12:00", end_time="13:00"),
        ]
        slots, result = check_schedule(configured, event)

        assert [s.label for s in slots] == ["Morning First Period", "Lunch", "Afternoon Period"]
        assert result.is_valid

    def test_without_event(self):
        slots, result = check_schedule(
            [
                TimeSlot(label="B", start_time="10:00", end_time="11:00"),
                TimeSlot(label="A", start_time="09:00", end_time="10:30"),
            ]
        )
        assert [s.label for s in slots] == ["A", "B"]
        assert result.has_overlapping_timeslots
