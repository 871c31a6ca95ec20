import logging
from datetime import time
from pathlib import Path

import click
import questionary
import yaml

from camplogic.app import check_schedule, load_event, print_schedule, print_summary
from camplogic.config import load_schema, load_timeslots
from camplogic.exceptions import ExcelParsingError, SchemaValidationError
from camplogic.sheets import describe_workbook, open_workbook
from camplogic.timeslots import TimeSlot, validate_timeslots


def load_schema_option(ctx, param, value: Path):
    try:
        return load_schema(value)
    except (SchemaValidationError, FileNotFoundError) as e:
        raise click.BadParameter(f"Invalid schema: {e}")


def load_timeslots_option(ctx, param, value: Path):
    if value is None:
        return None
    try:
        return load_timeslots(value)
    except (SchemaValidationError, FileNotFoundError) as e:
        raise click.BadParameter(f"Invalid time slots: {e}")


def parse_time(text: str) -> time | None:
    """Parse an 'HH:MM' answer; a blank answer clears the time."""
    text = (text or "").strip()
    return time.fromisoformat(text) if text else None


def is_time_answer(text: str) -> bool:
    try:
        parse_time(text)
    except ValueError:
        return False
    return True


@click.command(context_settings={"max_content_width": 120})
@click.option(
    "--workbook",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    help="Path to the registration workbook (.xlsx).",
)
@click.option(
    "--schema",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    callback=load_schema_option,
    help="Path to an event schema file. Defaults to the bundled schema.",
)
@click.option(
    "--timeslots",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    callback=load_timeslots_option,
    help="Path to a time slot configuration file.",
)
@click.option(
    "--dump",
    is_flag=True,
    help="Print the workbook structure instead of importing it.",
)
@click.option(
    "--interactive/--no-interactive",
    default=False,
    help="Edit time slots interactively, re-validating after every change.",
)
@click.option("--verbose", is_flag=True, help="Show debug logging.")
def cli(workbook, schema, timeslots, dump, interactive, verbose):

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="  %(levelname)s %(name)s: %(message)s",
    )

    if workbook is None and timeslots is None:
        raise click.BadParameter("Must supply --workbook, --timeslots, or both.")
    if dump and workbook is None:
        raise click.BadParameter("--dump requires --workbook.")

    try:
        if dump:
            structure = describe_workbook(open_workbook(workbook))
            click.echo(yaml.safe_dump(structure, sort_keys=False))
            return

        event = None
        if workbook is not None:
            event = load_event(workbook, schema)
            print_summary(event)
    except ExcelParsingError as e:
        raise click.ClickException(str(e))

    if timeslots is None and not interactive:
        return

    slots, result = check_schedule(timeslots or [], event)
    print_schedule(slots, result)

    if interactive:
        result = edit_timeslots(slots)

    if not result.is_valid:
        raise click.ClickException("Schedule is not valid. See output above for details.")


def edit_timeslots(slots: list[TimeSlot]):
    """Let the operator edit slots until they quit, validating after each change.

    Args:
        slots: Time slots to edit in place.

    Returns:
        ValidationResult: The verdict for the final state of the slots.
    """

    choices = [
        "Edit a time slot",
        "Add a time slot",
        "Run schedule validation checks",
        "Quit",
    ]
    result = validate_timeslots(slots)

    while True:

        print("\n---")

        choice = questionary.select(
            "\nAction:",
            choices=choices,
            qmark="",
            instruction=" ",
        ).ask()

        if choice == "Edit a time slot":
            if not slots:
                print("\n  No time slots to edit.")
                continue

            labels = [f"{i}. {s.label}" for i, s in enumerate(slots, start=1)]
            picked = questionary.select(
                "\nTime slot:", choices=labels, qmark="", instruction=" "
            ).ask()
            if picked is None:
                continue
            update_times(slots[labels.index(picked)])

        if choice == "Add a time slot":
            label = questionary.text("\nLabel:", qmark="").ask()
            if label is None:
                continue
            slot = TimeSlot(label=label)
            update_times(slot)
            slots.append(slot)

        if choice in ("Edit a time slot", "Add a time slot", "Run schedule validation checks"):
            slots, result = check_schedule(slots)
            print_schedule(slots, result)

        if choice == "Quit" or choice is None:
            print("\nProgram terminated.\n")
            return result


def update_times(slot: TimeSlot) -> bool:
    """Prompt for a slot's start and end times; a cancelled prompt leaves the slot unchanged."""

    start = questionary.text(
        "\nStart time (HH:MM, blank to clear):",
        default=slot.start_time.strftime("%H:%M") if slot.start_time else "",
        qmark="",
        validate=is_time_answer,
    ).ask()
    end = questionary.text(
        "\nEnd time (HH:MM, blank to clear):",
        default=slot.end_time.strftime("%H:%M") if slot.end_time else "",
        qmark="",
        validate=is_time_answer,
    ).ask()
    if start is None or end is None:
        return False
    slot.start_time = parse_time(start)
    slot.end_time = parse_time(end)
    return True


if __name__ == "__main__":
    cli()
