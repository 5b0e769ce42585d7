# tests/test_csv_codec.py

import datetime
import os
import tempfile

from core.csv_codec import (
    CSV_HEADER,
    export_students,
    format_student_line,
    format_students_csv,
    import_students,
    parse_students_csv,
)
from core.duplicate_resolution import Resolution, auto_rename_duplicates, skip_duplicates
from core.response import ErrorCode

TODAY = datetime.date.today()


def csv_text(*lines):
    return "\n".join([CSV_HEADER, *lines]) + "\n"


# === export ===


def test_format_student_line(sample_student):
    assert format_student_line(sample_student) == (
        "S001,John,Smith,USA,2000-05-15,false,3.8,Computer Science,2019-09-01,"
        "john.smith@example.com,555-1234"
    )


def test_format_students_csv_matches_sample(sample_student, second_student, sample_csv):
    assert format_students_csv([sample_student, second_student]) == sample_csv


def test_whole_number_gpa_keeps_decimal(sample_student):
    sample_student.gpa = 4

    assert ",4.0," in format_student_line(sample_student)


def test_export_students_writes_file(sample_roster):
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "students.csv")

        response = export_students(sample_roster, path)

        assert response.success
        assert response.data["count"] == 3

        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()

    assert lines[0] == CSV_HEADER
    assert len(lines) == 4
    assert lines[3].startswith("X100,Ann,Lee,UK,1995-01-01,false,3.9,Math,")


def test_export_empty_list_fails_and_creates_no_file():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "empty.csv")

        response = export_students([], path)

        assert not response.success
        assert response.error is ErrorCode.EMPTY_INPUT
        assert not os.path.exists(path)


def test_export_to_unwritable_destination_fails(sample_roster):
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "missing_dir", "students.csv")

        response = export_students(sample_roster, path)

        assert not response.success
        assert response.error is ErrorCode.WRITE_ERROR


# === import ===


def test_round_trip_preserves_records(sample_roster):
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "students.csv")
        export_students(sample_roster, path)

        response = import_students(path)

    assert response.success
    assert response.data["skipped"] == 0
    assert response.data["diagnostics"] == []

    imported = response.data["records"]

    assert imported == list(sample_roster)
    assert [s.to_dict() for s in imported] == [s.to_dict() for s in sample_roster]


def test_end_to_end_single_line():
    text = (
        "ID,Name,Surname,...\n"
        "S1,Ann,Lee,UK,1995-01-01,false,3.9,Math,2015-09-01,a@x.com,123"
    )

    result = parse_students_csv(text)

    assert len(result.students) == 1
    assert result.students[0].id == "S1"
    assert result.students[0].gpa == 3.9
    assert result.students[0].phone_number == "123"
    assert result.skipped == 0


def test_header_is_always_skipped():
    result = parse_students_csv("S1,Ann,Lee\nS2,Bob,Ray\n")

    assert [s.id for s in result.students] == ["S2"]


def test_gpa_out_of_range_is_clamped():
    result = parse_students_csv(
        csv_text(
            "S1,Ann,Lee,UK,1995-01-01,false,5.0,Math,2015-09-01,a@x.com,123",
            "S2,Bob,Ray,UK,1995-01-01,false,-1.0,Math,2015-09-01,b@x.com,456",
        )
    )

    assert [s.gpa for s in result.students] == [4.0, 0.0]
    assert result.skipped == 0
    assert len(result.diagnostics) == 2
    assert "out of range" in result.diagnostics[0]


def test_unparsable_gpa_falls_back_to_zero():
    result = parse_students_csv(csv_text("S1,Ann,Lee,UK,1995-01-01,false,high,Math"))

    assert result.students[0].gpa == 0.0
    assert result.diagnostics == ["Line 2: Invalid GPA format 'high', using 0.0."]


def test_malformed_date_falls_back_to_today_with_diagnostic():
    result = parse_students_csv(csv_text("S1,Ann,Lee,UK,2020/01/01,false,3.0"))

    assert len(result.students) == 1
    assert result.students[0].date_of_birth == TODAY
    assert result.skipped == 0
    assert len(result.diagnostics) == 1
    assert "date of birth" in result.diagnostics[0]


def test_short_row_uses_defaults():
    result = parse_students_csv(csv_text("S1,Ann,Lee"))

    student = result.students[0]

    assert student.country == ""
    assert student.date_of_birth == TODAY
    assert not student.study_abroad
    assert student.gpa == 0.0
    assert student.major == ""
    assert student.enrollment_date == TODAY
    assert student.email == ""
    assert student.phone_number == ""
    assert result.diagnostics == []


def test_study_abroad_parsing():
    result = parse_students_csv(
        csv_text(
            "S1,Ann,Lee,UK,1995-01-01,TRUE",
            "S2,Bob,Ray,UK,1995-01-01,yes",
        )
    )

    assert result.students[0].study_abroad
    assert not result.students[1].study_abroad
    assert len(result.diagnostics) == 1


def test_missing_required_fields_are_skipped():
    result = parse_students_csv(
        csv_text(
            ",Ann,Lee",
            "S2,,Ray",
            "S3,Cid",
            "S4,Dee,Fox",
        )
    )

    assert [s.id for s in result.students] == ["S4"]
    assert result.skipped == 3
    assert result.diagnostics[0].startswith("Line 2: Skipping incomplete record")


def test_blank_lines_are_ignored():
    result = parse_students_csv(csv_text("S1,Ann,Lee", "", "   ", "S2,Bob,Ray"))

    assert len(result.students) == 2
    assert result.skipped == 0


def test_fields_are_trimmed():
    result = parse_students_csv(csv_text(" S1 , Ann , Lee , UK , 1995-01-01 , true , 3.5 "))

    student = result.students[0]

    assert student.id == "S1"
    assert student.country == "UK"
    assert student.date_of_birth == datetime.date(1995, 1, 1)
    assert student.study_abroad
    assert student.gpa == 3.5



def test_line_endings_split_only_on_line_feed():
    text = (
        CSV_HEADER
        + "\r\nS1,Ann,Lee,UK,,,,Art\u2028History\r\n"
        + "S2,Bob,Ray,,,,,Law\x1cStudies\x85\r\n"
    )

    result = parse_students_csv(text)

    assert [s.id for s in result.students] == ["S1", "S2"]
    assert result.students[0].major == "Art\u2028History"
    assert result.students[1].major == "Law\x1cStudies"
    assert result.skipped == 0


def test_dates_before_year_1000_survive_round_trip(sample_student):
    sample_student.date_of_birth = datetime.date(999, 1, 1)
    sample_student.enrollment_date = datetime.date(5, 6, 7)

    line = format_student_line(sample_student)
    result = parse_students_csv(format_students_csv([sample_student]))

    assert "0999-01-01" in line
    assert result.diagnostics == []
    assert result.students[0].date_of_birth == datetime.date(999, 1, 1)
    assert result.students[0].enrollment_date == datetime.date(5, 6, 7)

# --- duplicate handling ---


def test_duplicate_in_batch_is_skipped_with_skip_strategy():
    result = parse_students_csv(
        csv_text("S001,Ann,Lee", "S001,Bob,Ray"), resolver=skip_duplicates
    )

    assert len(result.students) == 1
    assert result.students[0].first_name == "Ann"
    assert result.skipped == 1


def test_duplicate_of_existing_id_is_skipped_by_default():
    result = parse_students_csv(csv_text("S001,Ann,Lee", "S002,Bob,Ray"), {"S001"})

    assert [s.id for s in result.students] == ["S002"]
    assert result.skipped == 1


def test_duplicate_renamed_by_auto_strategy():
    result = parse_students_csv(
        csv_text("S001,Ann,Lee", "S001,Bob,Ray"), resolver=auto_rename_duplicates
    )

    assert len(result.students) == 2
    assert result.students[1].first_name == "Bob"
    assert result.students[1].id.startswith("S")
    assert result.students[1].id != "S001"
    assert result.skipped == 0
    assert "renamed" in result.diagnostics[0]


def test_manual_rename_is_checked_against_later_lines():
    result = parse_students_csv(
        csv_text("S001,Ann,Lee", "S001,Bob,Ray", "S005,Cid,Fox"),
        resolver=lambda student, source: Resolution.manual("S005"),
    )

    # the second line takes S005, so the third line now collides and is capped out
    assert [s.first_name for s in result.students[:2]] == ["Ann", "Bob"]
    assert result.students[1].id == "S005"
    assert len(result.students) == 2
    assert result.skipped == 1


def test_import_missing_file_fails():
    with tempfile.TemporaryDirectory() as temp_dir:
        response = import_students(os.path.join(temp_dir, "nope.csv"))

    assert not response.success
    assert response.error is ErrorCode.READ_ERROR


def test_import_file_with_existing_ids(sample_csv):
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "students.csv")

        with open(path, "w", encoding="utf-8") as f:
            f.write(sample_csv)

        response = import_students(path, {"S002"})

    assert response.success
    assert [s.id for s in response.data["records"]] == ["S001"]
    assert response.data["skipped"] == 1
