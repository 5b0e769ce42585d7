# cli/main.py

"""
Start Menu for the Student Records CLI.

Creates the session `Roster` and dispatches to the student management and CSV import/export actions.
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import import_export_menu, students_menu
from core.logging_config import setup_logging
from models.roster import Roster


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Student Records menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The Roster lives only for this session; export to CSV to keep the records.
    """
    setup_logging()

    roster = Roster()

    title = formatters.format_banner_text("STUDENT RECORDS")
    options = students_menu.get_options() + [
        ("Import from CSV", import_export_menu.import_from_csv),
        ("Export to CSV", import_export_menu.export_to_csv),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program(roster)

        elif callable(menu_response):
            menu_response(roster)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def exit_program(roster: Roster) -> None:
    """
    Warns about unexported records, displays an exit banner, and terminates the CLI program.

    Args:
        roster (Roster): The session `Roster`.

    Raises:
        SystemExit: Raised to terminate execution unless the user chooses to stay.
    """
    if len(roster) > 0 and not helpers.confirm_action(
        "Records are only kept for this session. Exit without exporting?"
    ):
        return

    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
