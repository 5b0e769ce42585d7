# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the Student Records application.

This module provides utilities for:
- Displaying interactive menus and the student table
- Prompting for and validating user input
- Handling user selections and confirmation flows
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior and reduce duplication.
"""

from enum import Enum
from typing import Any, Callable, Iterable

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.response import Response
from models.roster import Roster, SearchField
from models.student import Student


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    DEFAULT = "DEFAULT"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            index = int(choice) - 1

            if index < 0:
                raise IndexError

            return options[index][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_student_table(students: Iterable[Student], title: str = "Students") -> None:
    """
    Prints the student table for the given records.

    Args:
        students (Iterable[Student]): The records to display, usually the whole Roster or a search result.
        title (str, optional): The banner heading. Defaults to "Students".

    Notes:
        - The table is rebuilt from the records on every call; nothing is cached between calls.
    """
    print(f"\n{formatters.format_banner_text(title)}")
    print(model_formatters.format_student_table(students))


# Prompt Helpers
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Empty string responses are overloaded for control signals:
#     - `prompt_user_input_or_default()` returns `MenuSignal.DEFAULT`.
#     - `prompt_user_input_or_none()` returns `None`.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_default(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.DEFAULT if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


# === finder, search, and select methods ===


def prompt_search_field() -> SearchField | MenuSignal:
    title = formatters.format_banner_text("Search by")
    options = [(field.value, lambda field=field: field) for field in SearchField]

    menu_response = display_menu(title, options, "Cancel")

    if menu_response is MenuSignal.EXIT:
        return MenuSignal.CANCEL

    return menu_response()


def prompt_selection_from_list(
    students: list[Student], list_description: str
) -> int | None:
    """
    Prompts the user to select a Student from a list and returns its position in that list.

    Args:
        students (list[Student]): The records to choose from, in display order.
        list_description (str): A short description used in prompts and headings (e.g. "students").

    Returns:
        int: The zero-based index of the selected Student within `students`.
        None: If the list is empty or the user cancels with "0".

    Notes:
        - A single result is selected automatically.
        - The menu is repeated until a valid selection is made or canceled.
    """
    if not students:
        print(f"\nThere are no {list_description.lower()}.")
        return None

    if len(students) == 1:
        return 0

    print(f"\nThere are {len(students)} {list_description.lower()}.")

    while True:
        print(f"\n{formatters.format_banner_text(list_description)}")

        for i, student in enumerate(students, 1):
            print(f"{i:>2}. {model_formatters.format_student_oneline(student)}")

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return None

        try:
            index = int(choice) - 1

            if not 0 <= index < len(students):
                raise IndexError

            return index

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def find_student_position(roster: Roster) -> int | MenuSignal:
    """
    Prompts the user to search for a Student and returns its position in the Roster.

    Args:
        roster (Roster): The active `Roster`.

    Returns:
        - The Roster position of the selected Student.
        - `MenuSignal.CANCEL` if no match is found or the user cancels.
    """
    field = prompt_search_field()

    if field is MenuSignal.CANCEL:
        return MenuSignal.CANCEL

    prefix = prompt_user_input(f"Enter the start of the {field.value} (blank for all):")
    matches = list(roster.find_by_prefix(field, prefix))

    index = prompt_selection_from_list(matches, "Matching Students")

    if index is None:
        return MenuSignal.CANCEL

    position = roster.position_of(matches[index])

    return MenuSignal.CANCEL if position is None else position


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> None:
    caution_banner = formatters.format_banner_text("CAUTION!")
    print(f"\n{caution_banner}")


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Args:
        response (Response): The response object to inspect.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
