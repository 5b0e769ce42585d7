# core/csv_codec.py

"""
CSV import and export for Student records.

The file format is one header line followed by one comma-separated line per Student:

    ID,Name,Surname,Country,DateOfBirth,IsStudyAbroad,GPA,Major,EnrollmentDate,Email,PhoneNumber
    S001,John,Smith,USA,2000-05-15,false,3.8,Computer Science,2019-09-01,john.smith@example.com,555-1234

Dates are `YYYY-MM-DD` and booleans are the literal text `true` or `false`. Fields are split on every comma; there
is no quoting or escaping, so a value containing a comma cannot round-trip.

Import is forgiving: only the ID, first name, and last name are required. Every other field falls back to a default
when it is missing or malformed, and each fallback is recorded as a diagnostic rather than rejecting the line. IDs
that collide with earlier lines or with pre-existing records are handed to a `DuplicateResolver`.
"""

from __future__ import annotations

import datetime
import logging
import math
import os
from collections.abc import Iterable, Set

import core.formatters as formatters
from core.duplicate_resolution import (
    DuplicateResolver,
    ResolutionState,
    ResolutionStrategy,
)
from core.response import ErrorCode, Response
from models.student import GPA_MAX, GPA_MIN, Student

log = logging.getLogger(__name__)

CSV_COLUMNS = (
    "ID",
    "Name",
    "Surname",
    "Country",
    "DateOfBirth",
    "IsStudyAbroad",
    "GPA",
    "Major",
    "EnrollmentDate",
    "Email",
    "PhoneNumber",
)
CSV_HEADER = ",".join(CSV_COLUMNS)
CSV_ENCODING = "utf-8"

# column positions
ID, NAME, SURNAME, COUNTRY, DATE_OF_BIRTH, STUDY_ABROAD, GPA, MAJOR, ENROLLMENT_DATE, EMAIL, PHONE = range(
    len(CSV_COLUMNS)
)


class ImportResult:
    """
    The outcome of parsing one CSV document.

    Attributes:
        students (list[Student]): Accepted Students, in file order, with unique IDs.
        skipped (int): Lines dropped for a missing required field or an unresolved duplicate ID.
        diagnostics (list[str]): One message per skipped line or field fallback, prefixed with the line number.
    """

    def __init__(self):
        self.students: list[Student] = []
        self.skipped: int = 0
        self.diagnostics: list[str] = []

    def note(self, line_number: int, message: str) -> None:
        diagnostic = f"Line {line_number}: {message}"
        self.diagnostics.append(diagnostic)
        log.warning(diagnostic)

    def skip(self, line_number: int, message: str) -> None:
        self.skipped += 1
        self.note(line_number, message)

    def to_dict(self) -> dict:
        return {
            "records": self.students,
            "skipped": self.skipped,
            "diagnostics": self.diagnostics,
        }


# === export ===


def format_student_line(student: Student) -> str:
    return ",".join(
        [
            student.id,
            student.first_name,
            student.last_name,
            student.country,
            formatters.format_iso_date(student.date_of_birth),
            formatters.format_bool(student.study_abroad),
            formatters.format_gpa(student.gpa),
            student.major,
            formatters.format_iso_date(student.enrollment_date),
            student.email,
            student.phone_number,
        ]
    )


def format_students_csv(students: Iterable[Student]) -> str:
    lines = [CSV_HEADER]
    lines.extend(format_student_line(student) for student in students)

    return "\n".join(lines) + "\n"


def export_students(students: Iterable[Student], path: str) -> Response:
    """
    Writes Students to a CSV file, overwriting anything already at `path`.

    Args:
        students (Iterable[Student]): The records to export, in the order they should appear.
        path (str): The destination file path.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if every record was written.
                - False if there is nothing to export or the file could not be written.
            - detail (str | None):
                - On failure, a human-readable description of the error.
                - On success, a confirmation message naming the destination.
            - error (ErrorCode | str | None):
                - `ErrorCode.EMPTY_INPUT` if `students` is empty.
                - `ErrorCode.WRITE_ERROR` if an OSError is raised while opening or writing.
            - status_code (int | None):
                - 200 on success
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "path" (str): The destination file path.
                    - "count" (int): The number of records written.
                - On failure:
                    - None

    Notes:
        - An empty export creates no file at all.
        - A failure partway through writing is not rolled back; the destination may be left truncated.
    """
    students = list(students)

    if not students:
        return Response.fail(
            detail="There are no students to export.",
            error=ErrorCode.EMPTY_INPUT,
        )

    try:
        with open(path, "w", encoding=CSV_ENCODING, newline="") as f:
            f.write(format_students_csv(students))

    except OSError as e:
        log.error("Failed to export students to %s: %s", path, e)

        return Response.fail(
            detail=f"Failed to write students to {path}: {e}",
            error=ErrorCode.WRITE_ERROR,
        )

    else:
        log.info("Exported %d students to %s", len(students), path)

        return Response.succeed(
            detail=f"Students exported successfully to {path}",
            data={
                "path": path,
                "count": len(students),
            },
        )


# === import ===


def _field(fields: list[str], position: int) -> str:
    return fields[position].strip() if position < len(fields) else ""


def _parse_date(
    fields: list[str], position: int, label: str, line_number: int, result: ImportResult
) -> datetime.date:
    raw = _field(fields, position)

    if not raw:
        return datetime.date.today()

    try:
        return formatters.parse_iso_date(raw)

    except ValueError:
        result.note(line_number, f"Invalid {label} '{raw}', using current date.")
        return datetime.date.today()


def _parse_study_abroad(
    fields: list[str], line_number: int, result: ImportResult
) -> bool:
    raw = _field(fields, STUDY_ABROAD)

    if not raw:
        return False

    match raw.lower():
        case "true":
            return True
        case "false":
            return False
        case _:
            result.note(line_number, f"Invalid study abroad value '{raw}', using false.")
            return False


def _parse_gpa(fields: list[str], line_number: int, result: ImportResult) -> float:
    raw = _field(fields, GPA)

    if not raw:
        return GPA_MIN

    try:
        gpa = float(raw)

    except ValueError:
        gpa = math.nan

    if not math.isfinite(gpa):
        result.note(line_number, f"Invalid GPA format '{raw}', using 0.0.")
        return GPA_MIN

    if not Student.is_gpa_in_range(gpa):
        clamped = Student.clamp_gpa(gpa)
        result.note(
            line_number,
            f"GPA {raw} out of range [{GPA_MIN}-{GPA_MAX}], clamping to {clamped}.",
        )
        return clamped

    return gpa


def parse_student_line(
    line: str, line_number: int, result: ImportResult
) -> Student | None:
    """
    Parses one CSV data line into a `Student`, applying the per-field fallback policy.

    Args:
        line (str): The raw line, without its line terminator.
        line_number (int): The 1-based physical line number, used in diagnostics.
        result (ImportResult): Collects diagnostics and the skipped count.

    Returns:
        The parsed `Student`, or None if a required field is missing (the line is counted as skipped).

    Notes:
        - Rows shorter than the header are padded with empty fields.
        - Extra fields beyond the eleventh are ignored.
    """
    fields = line.split(",")

    id = _field(fields, ID)
    first_name = _field(fields, NAME)
    last_name = _field(fields, SURNAME)

    if not (id and first_name and last_name):
        result.skip(
            line_number,
            f"Skipping incomplete record (missing ID, name, or surname): {line}",
        )
        return None

    return Student(
        id=id,
        first_name=first_name,
        last_name=last_name,
        country=_field(fields, COUNTRY),
        date_of_birth=_parse_date(
            fields, DATE_OF_BIRTH, "date of birth", line_number, result
        ),
        study_abroad=_parse_study_abroad(fields, line_number, result),
        gpa=_parse_gpa(fields, line_number, result),
        major=_field(fields, MAJOR),
        enrollment_date=_parse_date(
            fields, ENROLLMENT_DATE, "enrollment date", line_number, result
        ),
        email=_field(fields, EMAIL),
        phone_number=_field(fields, PHONE),
    )


def parse_students_csv(
    text: str,
    existing_ids: Set[str] | None = None,
    resolver: ResolutionStrategy | None = None,
) -> ImportResult:
    """
    Parses CSV text into new Students, resolving duplicate IDs along the way.

    Args:
        text (str): The full document. The first line is treated as a header and always skipped.
        existing_ids (Set[str] | None): IDs already held by the Roster that imported records must not reuse.
        resolver (ResolutionStrategy | None): Decides what happens to a colliding record. Defaults to skipping it.

    Returns:
        An `ImportResult` with the accepted Students, the skipped count, and all diagnostics.

    Notes:
        - This function never raises for bad data; each line either yields a Student or is counted as skipped.
        - Whitespace-only lines are ignored and not counted.
        - Lines end only at a line feed, and a trailing carriage return is dropped.
    """
    result = ImportResult()
    duplicate_resolver = DuplicateResolver(existing_ids, resolver)

    for line_number, line in enumerate(text.split("\n"), 1):
        line = line.removesuffix("\r")

        if line_number == 1 or not line.strip():
            continue

        student = parse_student_line(line, line_number, result)

        if student is None:
            continue

        original_id = student.id
        state = duplicate_resolver.resolve(student)

        if state is ResolutionState.REJECTED:
            result.skip(line_number, f"Skipping duplicate student ID '{original_id}'.")
            continue

        if student.id != original_id:
            result.note(
                line_number,
                f"Duplicate student ID '{original_id}' renamed to '{student.id}'.",
            )

        result.students.append(student)

    return result


def import_students(
    path: str,
    existing_ids: Set[str] | None = None,
    resolver: ResolutionStrategy | None = None,
) -> Response:
    """
    Reads a CSV file and parses it into new Students.

    Args:
        path (str): The source file path.
        existing_ids (Set[str] | None): IDs already held by the Roster that imported records must not reuse.
        resolver (ResolutionStrategy | None): Decides what happens to a colliding record. Defaults to skipping it.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the file was read, even if every line was skipped.
                - False if the file could not be opened, read, or decoded.
            - detail (str | None):
                - On failure, a human-readable description of the error.
                - On success, a summary of imported and skipped counts.
            - error (ErrorCode | str | None):
                - `ErrorCode.READ_ERROR` if an OSError or UnicodeDecodeError is raised.
            - status_code (int | None):
                - 200 on success
                - 400 on failure
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "records" (list[Student]): The imported Students, in file order.
                    - "skipped" (int): The number of lines dropped.
                    - "diagnostics" (list[str]): Per-line messages for skips and field fallbacks.
                - On failure:
                    - None

    Notes:
        - The Roster is not touched; callers decide whether to append or replace with `Roster.merge_import()`.
    """
    try:
        with open(path, "r", encoding=CSV_ENCODING, newline="") as f:
            text = f.read()

    except (OSError, UnicodeDecodeError) as e:
        log.error("Failed to read students from %s: %s", path, e)

        return Response.fail(
            detail=f"Failed to read students from {os.path.basename(path)}: {e}",
            error=ErrorCode.READ_ERROR,
        )

    result = parse_students_csv(text, existing_ids, resolver)
    log.info(
        "Imported %d students from %s (%d skipped)",
        len(result.students),
        path,
        result.skipped,
    )

    return Response.succeed(
        detail=f"Imported {formatters.format_count(len(result.students), 'student')}, "
        f"skipped {formatters.format_count(result.skipped, 'line')}.",
        data=result.to_dict(),
    )
