# core/formatters.py

# all pure utilities & date helpers
# must never import from models!

import datetime
import re

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_count(count: int, singular: str, plural: str | None = None) -> str:
    noun = singular if count == 1 else (plural or f"{singular}s")

    return f"{count} {noun}"


# === date formatters ===


def format_iso_date(value: datetime.date) -> str:
    return value.isoformat()


def parse_iso_date(text: str) -> datetime.date:
    """
    Parses a strict `YYYY-MM-DD` date string.

    Args:
        text (str): The input string, surrounding whitespace is ignored.

    Returns:
        The parsed `datetime.date`.

    Raises:
        ValueError: If the text is not exactly four digits, two digits, and two digits separated by hyphens,
        or if the result is not a real calendar date.
    """
    text = text.strip()

    if not ISO_DATE_PATTERN.fullmatch(text):
        raise ValueError(f"'{text}' is not a date in YYYY-MM-DD format.")

    return datetime.date.fromisoformat(text)


# === number and flag formatters ===


def format_gpa(gpa: float) -> str:
    return repr(float(gpa))


def format_bool(value: bool) -> str:
    return "true" if value else "false"
