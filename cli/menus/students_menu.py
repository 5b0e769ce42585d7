# cli/menus/students_menu.py

"""
Manage Students menu for the Student Records CLI.

This module defines the full interface for managing `Student` records, including:
- Adding new students (with an optional generated ID)
- Editing student fields
- Removing students
- Searching students by ID, name, surname, or country prefix
- Viewing the student table

All operations are routed through the `Roster` API so uniqueness and required-field checks are applied consistently.
Edits are staged on a new record and validated as a whole, so a rejected edit leaves the stored record untouched.
"""

from typing import Callable, cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.utils import generate_student_id
from models.roster import Roster
from models.student import Student


def get_options() -> list[tuple[str, Callable[[Roster], None]]]:
    return [
        ("Add Student", add_student),
        ("Edit Student", find_and_edit_student),
        ("Remove Student", find_and_remove_student),
        ("Search Students", search_students),
        ("View All Students", view_all_students),
    ]


# === add student ===


def add_student(roster: Roster) -> None:
    """
    Loops a prompt to create a new `Student` object and add it to the Roster.

    Args:
        roster (Roster): The active `Roster`.
    """
    while True:
        new_student = prompt_new_student(roster)

        if new_student is not None and preview_and_confirm_student(new_student):
            roster_response = roster.add_student(new_student)

            if not roster_response.success:
                helpers.display_response_failure(roster_response)
                print(f"\n{new_student.full_name} was not added.")

            else:
                print(f"\n{roster_response.detail}")

        if not helpers.confirm_action(
            "Would you like to continue adding new students?"
        ):
            break

    helpers.returning_to("Student Records menu")


def prompt_new_student(roster: Roster) -> Student | None:
    """
    Collects form input for a new `Student`.

    Args:
        roster (Roster): The active `Roster`.

    Returns:
        A new validated `Student` object, or None if the user cancels or the form is invalid.
    """
    id = prompt_id_input_or_cancel(roster)

    if id is MenuSignal.CANCEL:
        return None
    id = cast(str, id)

    form = prompt_student_form(Student.blank())

    if form is MenuSignal.CANCEL:
        return None
    form = cast(dict, form)

    try:
        return Student.from_form(id=id, **form)

    except ValueError as e:
        print(f"\n[ERROR] Could not create student: {e}")
        return None


def preview_and_confirm_student(student: Student) -> bool:
    print("\nYou are about to create the following student:")
    print(model_formatters.format_student_multiline(student))

    if helpers.confirm_action("Would you like to create this student?"):
        return True

    else:
        print(f"\nDiscarding student: {student.full_name}")
        return False


# === data input helpers ===


def prompt_id_input_or_cancel(
    roster: Roster, excluding_position: int | None = None
) -> str | MenuSignal:
    """
    Solicits a student ID, generating one on blank input and checking uniqueness.

    Args:
        roster (Roster): The active `Roster`.
        excluding_position (int | None): The position of the record being edited, if any.

    Returns:
        A unique ID string, or `MenuSignal.CANCEL` if the user enters "0".

    Notes:
        - If the ID is already taken, the user is prompted again.
    """
    while True:
        id_input = helpers.prompt_user_input(
            "Enter student ID (leave blank to generate one, 0 to cancel):"
        )

        if id_input == "0":
            return MenuSignal.CANCEL

        if not id_input:
            id_input = generate_student_id()
            print(f"Generated new ID: {id_input}")

        try:
            roster.require_unique_id(id_input, excluding_position)
            return id_input

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


def prompt_student_form(current: Student) -> dict | MenuSignal:
    """
    Prompts for every non-ID field of a `Student`, keeping the current value on blank input.

    Args:
        current (Student): The record whose values are offered as defaults.

    Returns:
        A dictionary of raw form values accepted by `Student.from_form()`, or `MenuSignal.CANCEL` if the user
        leaves a required name blank on a record that has none.
    """

    def prompt_text(label: str, value: str) -> str:
        response = helpers.prompt_user_input_or_default(
            f"Enter {label} [{value or 'blank'}]:"
        )
        return value if response is MenuSignal.DEFAULT else cast(str, response)

    first_name = prompt_text("first name", current.first_name)

    if not first_name:
        return MenuSignal.CANCEL

    last_name = prompt_text("last name", current.last_name)

    if not last_name:
        return MenuSignal.CANCEL

    return {
        "first_name": first_name,
        "last_name": last_name,
        "country": prompt_text("country", current.country),
        "date_of_birth": prompt_text(
            "date of birth (YYYY-MM-DD)",
            formatters.format_iso_date(current.date_of_birth),
        ),
        "study_abroad": prompt_study_abroad(current.study_abroad),
        "gpa": prompt_text("GPA (0.0 - 4.0)", str(current.gpa)),
        "major": prompt_text("major", current.major),
        "enrollment_date": prompt_text(
            "enrollment date (YYYY-MM-DD)",
            formatters.format_iso_date(current.enrollment_date),
        ),
        "email": prompt_text("email address", current.email),
        "phone_number": prompt_text("phone number", current.phone_number),
    }


def prompt_study_abroad(current: bool) -> bool:
    default = "y" if current else "n"

    while True:
        response = helpers.prompt_user_input_or_default(
            f"Is this a study abroad student? (y/n) [{default}]:"
        )

        if response is MenuSignal.DEFAULT:
            return current

        choice = cast(str, response).lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


# === edit student ===


def find_and_edit_student(roster: Roster) -> None:
    position = helpers.find_student_position(roster)

    if position is MenuSignal.CANCEL:
        return
    position = cast(int, position)

    edit_student(roster, position)


def edit_student(roster: Roster, position: int) -> None:
    """
    Interface for editing the `Student` stored at a Roster position.

    Args:
        roster (Roster): The active `Roster`.
        position (int): The position of the record being edited.

    Notes:
        - The replacement record is validated in full before `Roster.replace_student()` is called.
        - A validation failure or a declined confirmation leaves the stored record unchanged.
    """
    roster_response = roster.get_student(position)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        return

    student = roster_response.data["record"]

    print("\nYou are editing the following student:")
    print(model_formatters.format_student_multiline(student))

    id = prompt_id_input_or_cancel(roster, excluding_position=position)

    if id is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    id = cast(str, id)

    form = prompt_student_form(student)

    if form is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    form = cast(dict, form)

    try:
        updated = Student.from_form(id=id, **form)

    except ValueError as e:
        print(f"\n[ERROR] {e}")
        helpers.returning_without_changes()
        return

    print("\nThe student will be saved as:")
    print(model_formatters.format_student_multiline(updated))

    if not helpers.confirm_action("Do you want to make this change?"):
        helpers.returning_without_changes()
        return

    roster_response = roster.replace_student(position, updated)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        helpers.returning_without_changes()

    else:
        print(f"\n{roster_response.detail}")


# === remove student ===


def find_and_remove_student(roster: Roster) -> None:
    position = helpers.find_student_position(roster)

    if position is MenuSignal.CANCEL:
        return
    position = cast(int, position)

    confirm_and_remove(roster, position)


def confirm_and_remove(roster: Roster, position: int) -> None:
    roster_response = roster.get_student(position)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        return

    student = roster_response.data["record"]

    print(model_formatters.format_student_multiline(student))

    helpers.caution_banner()
    print("This student will be permanently removed from the current session.")

    if not helpers.confirm_action("Are you sure you want to delete this student?"):
        helpers.returning_without_changes()
        return

    roster_response = roster.remove_student(position)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)

    else:
        print(f"\n{roster_response.detail}")


# === view and search ===


def search_students(roster: Roster) -> None:
    field = helpers.prompt_search_field()

    if field is MenuSignal.CANCEL:
        return

    prefix = helpers.prompt_user_input(
        f"Enter the start of the {field.value} (blank for all):"
    )
    matches = list(roster.find_by_prefix(field, prefix))

    helpers.display_student_table(matches, "Search Results")
    print(f"Found {len(matches)} students matching criteria.")

    index = helpers.prompt_selection_from_list(matches, "Matching Students")

    if index is not None:
        print(f"\n{model_formatters.format_student_multiline(matches[index])}")


def view_all_students(roster: Roster) -> None:
    helpers.display_student_table(roster, "All Students")
