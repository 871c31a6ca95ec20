from dataclasses import dataclass

from camplogic.utils import proper_case


@dataclass(frozen=True)
class Attendee:
    """
    A registered camper, read from one row of the roster sheet.

    Attributes:
        registration_id (str): ClassSelection id, or the synthesized fallback id.
        first_name (str): First name as entered.
        last_name (str): Last name as entered.
        email (str): Contact email, possibly empty.
        age (str): Age as entered, possibly empty.
    """

    registration_id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    age: str = ""

    @property
    def full_name(self) -> str:
        # not trimmed: a missing last name leaves a trailing space
        return f"{self.first_name} {self.last_name}"


class PersonName:
    """
    Splits a free-text name into proper-cased first and last names.

    The first word is the first name; everything after it is the last name.
    """

    def __init__(self, full_name: str):
        words = [w for w in full_name.split(" ") if w.strip()] or [""]
        self.full_name = proper_case(full_name)
        self.first_name = proper_case(words[0])
        self.last_name = proper_case(" ".join(words[1:]))

    def __repr__(self):
        return f"{self.full_name}"
