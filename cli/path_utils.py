# cli/path_utils.py

import os

DATA_DIR_ENV = "STUDENT_RECORDS_DIR"
DEFAULT_FILENAME = "students.csv"


def get_default_dir() -> str:
    """
    Resolves the default directory for CSV files.

    Returns:
        The expanded value of `STUDENT_RECORDS_DIR` if set, otherwise `~/Documents/StudentRecords`.
    """
    env_dir = os.getenv(DATA_DIR_ENV)

    if env_dir:
        return os.path.expanduser(env_dir.strip())

    documents = os.path.join(os.path.expanduser("~"), "Documents")
    return os.path.join(documents, "StudentRecords")


def resolve_csv_path(user_input: str | None) -> str:
    """
    Resolves a CSV file path based on user input or the default location.

    Args:
        user_input (str | None): An optional user-specified file path. If None or blank, the default path is used.

    Returns:
        An absolute path. Relative input is resolved against the default directory, and `~` is expanded.
    """
    if user_input is None or not user_input.strip():
        return os.path.join(get_default_dir(), DEFAULT_FILENAME)

    path = os.path.expanduser(user_input.strip())

    if not os.path.isabs(path):
        path = os.path.join(get_default_dir(), path)

    return os.path.abspath(path)


def resolve_export_path(user_input: str | None) -> str:
    """
    Produces and prepares a destination path for a CSV export.

    Args:
        user_input (str | None): An optional user-specified file path. If None, the default path is used.

    Returns:
        A resolved path ending in `.csv`, whose parent directory exists.

    Notes:
        - Appends the `.csv` extension if the input lacks one.
        - Creates the parent directory (including intermediate directories) if it does not exist.
    """
    path = resolve_csv_path(user_input)

    if not path.lower().endswith(".csv"):
        path += ".csv"

    os.makedirs(os.path.dirname(path), exist_ok=True)

    return path
