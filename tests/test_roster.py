from camplogic.attendee import Attendee
from camplogic.roster import load_attendees
from camplogic.sheets import ColumnResolver


def roster_attendees(workbook, schema):
    resolver = ColumnResolver(workbook["ClassSelection"])
    return load_attendees(resolver, schema.class_selection_sheet)


class TestLoadAttendees:

    def test_reads_every_column(self, make_workbook, schema):
        workbook = make_workbook(
            roster=[["SEL001", "Alice", "Johnson", "alice@example.com", 12]]
        )
        attendees = roster_attendees(workbook, schema)
        assert attendees == {
            "SEL001": Attendee(
                registration_id="SEL001",
                first_name="Alice",
                last_name="Johnson",
                email="alice@example.com",
                age="12",
            )
        }

    def test_blank_id_gets_fallback_id(self, make_workbook, schema):
        workbook = make_workbook(roster=[[None, "Bob", "Smith", None, None]])
        attendees = roster_attendees(workbook, schema)
        assert list(attendees) == ["BobSmith"]
        assert attendees["BobSmith"].email == ""

    def test_fallback_id_drops_spaces(self, make_workbook, schema):
        workbook = make_workbook(roster=[["  ", "Mary Ann", "Van Dyke", None, None]])
        assert list(roster_attendees(workbook, schema)) == ["MaryAnnVanDyke"]

    def test_numeric_id_matches_text_id(self, make_workbook, schema):
        workbook = make_workbook(roster=[[1234.0, "Alice", "Johnson", None, None]])
        assert list(roster_attendees(workbook, schema)) == ["1234"]

    def test_nameless_rows_are_skipped(self, make_workbook, schema):
        workbook = make_workbook(
            roster=[
                ["SEL001", None, None, "nobody@example.com", None],
                ["SEL002", "Cher", None, None, None],
                ["SEL003", None, "Madonna", None, None],
            ]
        )
        attendees = roster_attendees(workbook, schema)
        assert list(attendees) == ["SEL002", "SEL003"]
        assert attendees["SEL002"].full_name == "Cher "

    def test_duplicate_id_last_row_wins(self, make_workbook, schema):
        workbook = make_workbook(
            roster=[
                ["SEL001", "Alice", "Johnson", None, None],
                ["SEL001", "Alicia", "Johnson", None, None],
            ]
        )
        attendees = roster_attendees(workbook, schema)
        assert len(attendees) == 1
        assert attendees["SEL001"].first_name == "Alicia"

    def test_row_order_is_kept(self, make_workbook, schema):
        workbook = make_workbook(
            roster=[
                ["SEL003", "Cara", "Lee", None, None],
                ["SEL001", "Alice", "Johnson", None, None],
                ["SEL002", "Bob", "Smith", None, None],
            ]
        )
        assert list(roster_attendees(workbook, schema)) == ["SEL003", "SEL001", "SEL002"]

    def test_header_only_roster(self, make_workbook, schema):
        assert roster_attendees(make_workbook(), schema) == {}

    def test_year_prefixed_id_header(self, schema):
        import openpyxl

        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = "ClassSelection"
        sheet.append(["2025ClassSelection_Id", "Name_First", "Name_Last"])
        sheet.append(["SEL009", "Dana", "Ruiz"])

        assert list(roster_attendees(workbook, schema)) == ["SEL009"]
