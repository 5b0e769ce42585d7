# cli/model_formatters.py

# anything that renders Student records or derives read-only views from them
from textwrap import dedent
from typing import Iterable

import core.formatters as formatters
from models.student import Student

TABLE_COLUMNS = ("ID", "Name", "Surname", "Country")
TABLE_WIDTHS = (16, 16, 20, 16)

# === student formatters ===


def format_student_oneline(student: Student) -> str:
    return f"{student.id:<16} | {student.full_name:<30} | {student.country}"


def format_student_multiline(student: Student) -> str:
    return dedent(
        f"""\
        Student ID: {student.id}
        ... Name: {student.full_name}
        ... Country: {student.country}
        ... Date of Birth: {formatters.format_iso_date(student.date_of_birth)} (age {student.age()})
        ... Study Abroad: {student.study_abroad_status}
        ... GPA: {student.gpa}
        ... Major: {student.major}
        ... Enrollment Date: {formatters.format_iso_date(student.enrollment_date)} ({student.years_enrolled()} years enrolled)
        ... Contact: {student.email}, {student.phone_number}"""
    )


# === student table ===


def student_table_rows(students: Iterable[Student]) -> list[tuple[str, str, str, str]]:
    return [
        (student.id, student.first_name, student.last_name, student.country)
        for student in students
    ]


def format_student_table(students: Iterable[Student]) -> str:
    rows = student_table_rows(students)

    if not rows:
        return "[NO STUDENTS]"

    def format_row(row: tuple[str, ...]) -> str:
        return " | ".join(
            f"{value:<{width}}" for value, width in zip(row, TABLE_WIDTHS)
        ).rstrip()

    divider = "-+-".join("-" * width for width in TABLE_WIDTHS)
    lines = [format_row(TABLE_COLUMNS), divider]
    lines.extend(format_row(row) for row in rows)
    lines.append(f"\n{formatters.format_count(len(rows), 'student')}")

    return "\n".join(lines)
