"""Import camp registration workbooks into workshops, attendees and time slots."""

__version__ = "0.1.0"
