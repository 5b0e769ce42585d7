# cli/menus/import_export_menu.py

"""
CSV import and export actions for the Student Records CLI.

Import reads a file through `core.csv_codec`, asking the user how to resolve each duplicate ID, then offers to
append the batch to the Roster or replace the Roster with it. Export writes the whole Roster in its current order.
"""

from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.path_utils import resolve_csv_path, resolve_export_path
from core.csv_codec import export_students, import_students
from core.duplicate_resolution import DuplicateSource, Resolution
from models.roster import Roster
from models.student import Student


def prompt_duplicate_resolution(student: Student, source: DuplicateSource) -> Resolution:
    """
    Interactive resolution strategy: asks the user what to do with a Student whose ID is taken.

    Args:
        student (Student): The colliding Student, still holding the duplicate ID.
        source (DuplicateSource): Whether the ID clashed with the import batch or the existing records.

    Returns:
        A manual, automatic, or skip `Resolution`. A blank manual ID is passed through so the resolver returns to
        this prompt.
    """
    print(
        f"\nDuplicate student ID '{student.id}' found in {source.value}."
        f"\nStudent: {student.full_name}"
    )

    title = formatters.format_banner_text("Duplicate ID")
    options = [
        ("Enter Manual ID", lambda: Resolution.manual(prompt_manual_id())),
        ("Generate Auto ID", Resolution.auto),
    ]

    menu_response = helpers.display_menu(title, options, "Skip Student")

    if menu_response is MenuSignal.EXIT:
        return Resolution.skip()

    return menu_response()


def prompt_manual_id() -> str:
    return helpers.prompt_user_input("Enter a new unique ID (blank to choose again):")


# === import ===


def import_from_csv(roster: Roster) -> None:
    """
    Prompts for a CSV file, imports it, and merges the result into the Roster.

    Args:
        roster (Roster): The active `Roster`.

    Notes:
        - Duplicate IDs are resolved interactively against both the file and the current Roster.
        - Replacing discards every current record; the user is warned before this happens.
    """
    path = resolve_csv_path(
        helpers.prompt_user_input_or_none(
            "Enter the CSV file to import (leave blank for the default):"
        )
    )

    print(f"\nImporting students from {path} ...")

    codec_response = import_students(path, roster.ids, prompt_duplicate_resolution)

    if not codec_response.success:
        helpers.display_response_failure(codec_response)
        return

    imported = codec_response.data["records"]
    diagnostics = codec_response.data["diagnostics"]

    print(f"... {codec_response.detail}")

    for diagnostic in diagnostics:
        print(f"    {diagnostic}")

    if not imported:
        print("\nNo valid students found in file or all students were skipped.")
        return

    replace = prompt_merge_mode(len(imported))

    if replace is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    roster_response = roster.merge_import(imported, replace=cast(bool, replace))

    if not roster_response.success:
        helpers.display_response_failure(roster_response)

    else:
        print(f"\n{roster_response.detail}")


def prompt_merge_mode(count: int) -> bool | MenuSignal:
    title = formatters.format_banner_text(f"Import {count} students?")
    options = [
        ("Replace existing", lambda: True),
        ("Append to existing", lambda: False),
    ]

    menu_response = helpers.display_menu(title, options, "Cancel import")

    if menu_response is MenuSignal.EXIT:
        return MenuSignal.CANCEL

    replace = menu_response()

    if replace:
        helpers.caution_banner()

        if not helpers.confirm_action("All current students will be discarded. Continue?"):
            return MenuSignal.CANCEL

    return replace


# === export ===


def export_to_csv(roster: Roster) -> None:
    """
    Prompts for a destination and writes every Roster record to CSV.

    Args:
        roster (Roster): The active `Roster`.
    """
    if len(roster) == 0:
        print("\nNo students to export.")
        return

    user_input = helpers.prompt_user_input_or_none(
        "Enter the CSV file to export to (leave blank for the default):"
    )

    try:
        path = resolve_export_path(user_input)

    except OSError as e:
        print(f"\n[ERROR] Could not prepare the export directory: {e}")
        return

    codec_response = export_students(roster, path)

    if not codec_response.success:
        helpers.display_response_failure(codec_response)

    else:
        print(f"\n{codec_response.detail}")
