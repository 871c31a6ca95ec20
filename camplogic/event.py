import logging
from pathlib import Path

from camplogic.attendee import Attendee
from camplogic.collector import collect_workshops
from camplogic.config import EventSchema, load_schema
from camplogic.exceptions import MissingSheetError
from camplogic.roster import load_attendees
from camplogic.sheets import ColumnResolver, WorkbookSource, describe_workbook, open_workbook
from camplogic.workshop import Period, Workshop

logger = logging.getLogger(__name__)


class Event:
    """
    One import of a registration workbook.

    Reads the roster sheet into attendees, then every period sheet named by
    the schema into workshops. Everything is rebuilt from scratch on each
    import; nothing is shared between Event instances.

    Attributes:
        name (str): Event name from the schema.
        schema (EventSchema): Layout of the workbook.
        attendees (dict[str, Attendee]): Roster attendees keyed by registration id.
        periods (list[Period]): Periods whose sheets were found, in schema order.
        missing_period_sheets (list[str]): Period sheets named by the schema but absent.
        workshops (list[Workshop]): Workshop offerings in the order first seen.
    """

    def __init__(self, workbook: WorkbookSource, schema: EventSchema | None = None):
        logger.info(f"Starting Excel import from {_source_label(workbook)}")
        self.workbook = open_workbook(workbook)
        self.schema = schema if schema is not None else load_schema()
        self.name = self.schema.event_name
        logger.info(f"Loaded schema for event: {self.name}")

        self.attendees = self.load_attendees()
        logger.info(f"Loaded {len(self.attendees)} attendees from roster sheet")
        if not self.attendees:
            logger.warning(
                "No attendees found in roster sheet - workshop parsing may be incomplete"
            )

        self.periods: list[Period] = []
        self.missing_period_sheets: list[str] = []
        self._workshops: dict[str, Workshop] = {}
        self.load_workshops()
        logger.info(f"Total workshops parsed: {len(self._workshops)}")

    def __repr__(self):
        return f"{self.name}"

    @property
    def workshops(self) -> list[Workshop]:
        return list(self._workshops.values())

    @property
    def sheet_names(self) -> list[str]:
        return list(self.workbook.sheetnames)

    def load_attendees(self) -> dict[str, Attendee]:
        """
        Loads attendees from the roster sheet.

        Raises:
            MissingSheetError: The roster sheet is not in the workbook.
        """
        sheet_config = self.schema.class_selection_sheet
        if sheet_config.sheet_name not in self.workbook.sheetnames:
            logger.warning(
                f"Roster sheet '{sheet_config.sheet_name}' not found. "
                f"Available sheets: {', '.join(self.sheet_names)}"
            )
            raise MissingSheetError(sheet_config.sheet_name, self.sheet_names)

        resolver = ColumnResolver(self.workbook[sheet_config.sheet_name])
        if not resolver.header_names:
            logger.warning(f"Roster sheet '{sheet_config.sheet_name}' is empty")
            return {}

        return load_attendees(resolver, sheet_config)

    def load_workshops(self):
        """
        Collects workshops from each period sheet in the schema.

        A period sheet missing from the workbook is skipped with a warning
        and contributes no workshops.
        """
        for period_config in self.schema.period_sheets:
            if period_config.sheet_name not in self.workbook.sheetnames:
                logger.warning(f"Could not find period sheet: {period_config.sheet_name}")
                self.missing_period_sheets.append(period_config.sheet_name)
                continue

            logger.debug(f"Processing period sheet: {period_config.sheet_name}")
            period = Period(period_config.sheet_name, period_config.display_name)
            self.periods.append(period)

            found = collect_workshops(
                ColumnResolver(self.workbook[period_config.sheet_name]),
                period,
                period_config,
                self.attendees,
                self._workshops,
            )
            logger.debug(f"Found {len(found)} workshops in {period_config.sheet_name}")

    def get_workshops_for_period(self, sheet_name: str) -> list[Workshop]:
        return [w for w in self._workshops.values() if w.period.sheet_name == sheet_name]

    def describe_workbook(self) -> dict:
        return describe_workbook(self.workbook)


def _source_label(source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, "name", None) or source.__class__.__name__)
