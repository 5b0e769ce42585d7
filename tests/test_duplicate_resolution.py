# tests/test_duplicate_resolution.py

import itertools

from core.duplicate_resolution import (
    DuplicateResolver,
    DuplicateSource,
    Resolution,
    ResolutionChoice,
    ResolutionState,
    auto_rename_duplicates,
    skip_duplicates,
)
from models.student import Student


def counter_ids(prefix="AUTO"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def scripted(*resolutions):
    """Returns a strategy that replays resolutions in order and records each call."""
    answers = iter(resolutions)
    calls = []

    def strategy(student, source):
        calls.append((student.id, source))
        return next(answers)

    strategy.calls = calls
    return strategy


def test_unique_id_is_accepted_and_joins_batch():
    resolver = DuplicateResolver({"S001"})
    student = Student("S002", "A", "B")

    assert resolver.resolve(student) is ResolutionState.ACCEPTED
    assert resolver.batch_ids == {"S002"}
    assert student.id == "S002"


def test_default_strategy_skips():
    resolver = DuplicateResolver({"S001"})

    assert resolver.resolve(Student("S001", "A", "B")) is ResolutionState.REJECTED
    assert resolver.batch_ids == frozenset()


def test_later_batch_entries_collide_with_earlier_ones():
    resolver = DuplicateResolver(strategy=skip_duplicates)

    assert resolver.resolve(Student("S001", "A", "B")) is ResolutionState.ACCEPTED
    assert resolver.find_collision("S001") is DuplicateSource.IMPORT_BATCH
    assert resolver.resolve(Student("S001", "C", "D")) is ResolutionState.REJECTED


def test_batch_collision_is_reported_before_existing():
    resolver = DuplicateResolver({"S001"})
    resolver.resolve(Student("S002", "A", "B"))

    assert resolver.find_collision("S001") is DuplicateSource.EXISTING_RECORDS
    assert resolver.find_collision("S002") is DuplicateSource.IMPORT_BATCH
    assert resolver.find_collision("S003") is None


def test_manual_id_is_rechecked_until_unique():
    strategy = scripted(Resolution.manual("S002"), Resolution.manual(" S010 "))
    resolver = DuplicateResolver({"S001", "S002"}, strategy)
    student = Student("S001", "A", "B")

    assert resolver.resolve(student) is ResolutionState.ACCEPTED
    assert student.id == "S010"
    assert strategy.calls == [
        ("S001", DuplicateSource.EXISTING_RECORDS),
        ("S002", DuplicateSource.EXISTING_RECORDS),
    ]


def test_blank_manual_id_returns_to_choice():
    strategy = scripted(Resolution.manual("   "), Resolution.skip())
    resolver = DuplicateResolver({"S001"}, strategy)

    assert resolver.resolve(Student("S001", "A", "B")) is ResolutionState.REJECTED
    assert len(strategy.calls) == 2


def test_auto_id_uses_generator():
    resolver = DuplicateResolver(
        {"S001"}, auto_rename_duplicates, id_generator=counter_ids()
    )
    student = Student("S001", "A", "B")

    assert resolver.resolve(student) is ResolutionState.ACCEPTED
    assert student.id == "AUTO1"
    assert "AUTO1" in resolver.batch_ids


def test_auto_id_collision_is_rechecked():
    resolver = DuplicateResolver(
        {"S001", "AUTO1"}, auto_rename_duplicates, id_generator=counter_ids()
    )
    student = Student("S001", "A", "B")

    assert resolver.resolve(student) is ResolutionState.ACCEPTED
    assert student.id == "AUTO2"


def test_strategy_that_never_resolves_is_capped():
    resolver = DuplicateResolver(
        {"S001"}, lambda s, src: Resolution.manual("S001"), max_attempts=5
    )

    assert resolver.resolve(Student("S001", "A", "B")) is ResolutionState.REJECTED


def test_resolution_constructors():
    assert Resolution.manual("X").choice is ResolutionChoice.MANUAL_ID
    assert Resolution.manual("X").new_id == "X"
    assert Resolution.auto().choice is ResolutionChoice.AUTO_ID
    assert Resolution.skip().new_id is None
