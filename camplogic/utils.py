import re

# fixed names used by the registration export
SHEET_CLASS_SELECTION = "ClassSelection"

HEADER_SELECTION_ID = "ClassSelection_Id"
HEADER_FIRST_NAME = "Name_First"
HEADER_LAST_NAME = "Name_Last"
HEADER_EMAIL = "Email"
HEADER_AGE = "Age"
HEADER_CHOICE_NUMBER = "ChoiceNumber"

PRIMARY_CHOICE = 1

_CAPITAL_LETTER = re.compile(r"(?<!^)([A-Z])")


def is_blank(value) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def stringify_cell(value) -> str | None:
    """
    Converts a raw spreadsheet value into the string form used by the importer.

    Whole floats lose their decimal part so that ids typed as numbers
    (e.g. 1234.0) match the same ids typed as text.

    Args:
        value: Raw cell value from the workbook.

    Returns:
        str | None: The cell text, or None if the cell is blank.
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = value if isinstance(value, str) else str(value)
    return None if is_blank(text) else text


def coerce_int(value, default: int = 0) -> int:
    """
    Parses an integer out of a cell value, falling back to `default`.

    This is the one place where unparsable numbers are tolerated; callers
    should not wrap their own int() calls in try/except.

    Args:
        value: String or numeric value to parse.
        default: Value returned when parsing fails.

    Returns:
        int: The parsed integer or `default`.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if is_blank(value):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def coerce_choice_number(value) -> int:
    """Choice numbers default to the primary choice when missing or malformed."""
    return coerce_int(value, default=PRIMARY_CHOICE)


def fallback_attendee_id(first_name: str | None, last_name: str | None) -> str:
    """
    Builds the registration id used when the export has none.

    Both the roster and the period sheets go through this function, so
    "Bob" + "Smith" always resolves to "BobSmith".

    Args:
        first_name: Attendee first name.
        last_name: Attendee last name.

    Returns:
        str: First and last name joined with no separator and no spaces.
    """
    return f"{first_name or ''}{last_name or ''}".replace(" ", "")


def split_camel_case(name: str) -> str:
    """
    Inserts a space before every capital letter except a leading one.

    "MorningFirstPeriod" becomes "Morning First Period" and consecutive
    capitals are split individually ("AMSession" -> "A M Session").
    """
    return _CAPITAL_LETTER.sub(r" \1", name).strip()


def proper_case(text: str) -> str:
    """
    Capitalizes each word and lowercases the rest, collapsing repeated spaces.

    Args:
        text: Free text, usually a person's name.

    Returns:
        str: Proper-cased text with single spaces between words.
    """
    words = [w for w in text.split(" ") if w.strip()]
    return " ".join(w[0].upper() + w[1:].lower() for w in words)
