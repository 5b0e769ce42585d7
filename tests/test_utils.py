# tests/test_utils.py

import datetime
import logging

import pytest

import core.formatters as formatters
from core.logging_config import resolve_log_level, setup_logging
from core.response import ErrorCode, Response
from core.utils import IdGenerator, generate_student_id

# === id generation ===


def test_generated_ids_are_distinct_when_clock_stalls():
    generator = IdGenerator(clock=lambda: 1_700_000_000_000_000_000)

    ids = [generator.next_id() for _ in range(5)]

    assert ids[0] == "S1700000000000"
    assert ids[-1] == "S1700000000004"
    assert len(set(ids)) == 5


def test_generated_ids_never_go_backwards():
    readings = iter([5_000_000, 3_000_000, 9_000_000])
    generator = IdGenerator(prefix="T", clock=lambda: next(readings))

    assert [generator.next_id() for _ in range(3)] == ["T5", "T6", "T9"]


def test_module_generator_is_unique_across_rapid_calls():
    ids = {generate_student_id() for _ in range(1000)}

    assert len(ids) == 1000
    assert all(id.startswith("S") for id in ids)


# === formatters ===


def test_parse_iso_date():
    assert formatters.parse_iso_date(" 2019-09-01 ") == datetime.date(2019, 9, 1)


@pytest.mark.parametrize("text", ["2020/01/01", "20200101", "2020-1-1", "2020-02-30", ""])
def test_parse_iso_date_rejects_malformed(text):
    with pytest.raises(ValueError):
        formatters.parse_iso_date(text)


def test_scalar_formatters():
    assert formatters.format_iso_date(datetime.date(2000, 5, 15)) == "2000-05-15"
    assert formatters.format_iso_date(datetime.date(999, 1, 1)) == "0999-01-01"
    assert formatters.format_gpa(3.8) == "3.8"
    assert formatters.format_gpa(4) == "4.0"
    assert formatters.format_bool(True) == "true"
    assert formatters.format_bool(False) == "false"
    assert formatters.format_count(1, "student") == "1 student"
    assert formatters.format_count(3, "student") == "3 students"


def test_format_banner_text():
    banner = formatters.format_banner_text("HI", width=6)

    assert banner == "======\n  HI  \n======"


# === response ===


def test_response_succeed_and_fail():
    ok = Response.succeed(detail="done", data={"count": 1})
    bad = Response.fail(detail="nope", error=ErrorCode.EMPTY_INPUT)

    assert ok.success and ok.status_code == 200 and ok.data == {"count": 1}
    assert not bad.success and bad.status_code == 400 and bad.data == {}
    assert str(ok) == "Success: done"
    assert str(bad) == "Error: EMPTY_INPUT"


# === logging ===


def test_resolve_log_level(monkeypatch):
    monkeypatch.delenv("STUDENT_RECORDS_LOG_LEVEL", raising=False)
    assert resolve_log_level() == logging.WARNING

    monkeypatch.setenv("STUDENT_RECORDS_LOG_LEVEL", "debug")
    assert resolve_log_level() == logging.DEBUG

    assert resolve_log_level("info") == logging.INFO
    assert resolve_log_level("nonsense") == logging.WARNING


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        setup_logging("ERROR")
        setup_logging("ERROR")

        assert len(root.handlers) == 1
        assert root.level == logging.ERROR

    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
