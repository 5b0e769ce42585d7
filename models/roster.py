# models/roster.py

"""
The Roster model is the in-memory record store for the running session and the "source of truth" for all student records.

Students are held in a list so that the Roster preserves insertion order and can be addressed by position, the way the
student table presents them. IDs are unique across the Roster at all times.

Provides functions for adding, replacing, removing, finding, and searching Students, for merging a batch of imported
Students (append or replace), and for verifying ID uniqueness before a mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from core.response import ErrorCode, Response
from models.student import Student

log = logging.getLogger(__name__)


class SearchField(str, Enum):
    ID = "ID"
    FIRST_NAME = "Name"
    LAST_NAME = "Surname"
    COUNTRY = "Country"

    def value_of(self, student: Student) -> str:
        match self:
            case SearchField.ID:
                return student.id
            case SearchField.FIRST_NAME:
                return student.first_name
            case SearchField.LAST_NAME:
                return student.last_name
            case SearchField.COUNTRY:
                return student.country


class PrefixQuery:
    """
    A lazy, restartable view over the Students whose selected field starts with a prefix.

    Nothing is computed until iteration begins, and every new iteration reads the Roster's current sequence, so the
    same query object reflects later additions and removals.
    """

    def __init__(self, roster: Roster, field: SearchField, prefix: str):
        self._roster = roster
        self._field = field
        self._prefix = prefix.strip().lower()

    def __iter__(self) -> Iterator[Student]:
        for student in self._roster:
            if self._field.value_of(student).lower().startswith(self._prefix):
                yield student


class Roster:

    def __init__(self, students: Iterable[Student] | None = None):
        self._students: list[Student] = []

        for student in students or []:
            response = self.add_student(student)

            if not response.success:
                raise ValueError(response.detail)

    # === properties ===

    @property
    def students(self) -> tuple[Student, ...]:
        return tuple(self._students)

    @property
    def ids(self) -> set[str]:
        return {student.id for student in self._students}

    # === data accessors ===

    def get_student(self, position: int) -> Response:
        """
        Fetches the `Student` stored at a given position.

        Args:
            position (int): The zero-based position in the Roster.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the position addresses a stored `Student`.
                    - False otherwise.
                - detail (str | None):
                    - On failure, a human-readable explanation of the problem.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INDEX_OUT_OF_RANGE` if the position is invalid.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Student): The stored `Student` object.
                    - On failure:
                        - None

        Notes:
            - This method is read-only and does not raise.
        """
        if not self._is_valid_position(position):
            return self._index_out_of_range(position)

        return Response.succeed(
            data={
                "record": self._students[position],
            },
        )

    def find_by_id(self, id: str) -> Response:
        """
        Finds a `Student` by ID.

        Args:
            id (str): The student ID, compared exactly after trimming whitespace.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Student` was found.
                    - False if no match is found.
                - detail (str | None):
                    - On failure, a human-readable explanation of the problem.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None):
                    - 200 on success
                    - 404 if no match is found
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Student): The matched `Student` object.
                        - "position" (int): The position of the matched `Student` in the Roster.
                    - On failure:
                        - None

        Notes:
            - This method is read-only and does not raise.
        """
        id = id.strip()

        for position, student in enumerate(self._students):
            if student.id == id:
                return Response.succeed(
                    data={
                        "record": student,
                        "position": position,
                    },
                )

        return Response.fail(
            detail=f"No student found with ID '{id}'.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    def find_by_prefix(self, field: SearchField, prefix: str) -> PrefixQuery:
        """
        Builds a lazy query over Students whose `field` starts with `prefix`, ignoring case.

        Args:
            field (SearchField): The attribute to compare: ID, first name, last name, or country.
            prefix (str): The search prefix. Surrounding whitespace is ignored, and an empty prefix matches every Student.

        Returns:
            A `PrefixQuery` that can be iterated any number of times; results are in Roster order.
        """
        return PrefixQuery(self, field, prefix)

    def position_of(self, student: Student) -> int | None:
        for position, stored in enumerate(self._students):
            if stored is student:
                return position

        return None

    # === data manipulators ===

    def add_student(self, student: Student) -> Response:
        """
        Appends a `Student` to the end of the Roster.

        Args:
            student (Student): The `Student` object to be added.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Student` was added.
                    - False if a required field is blank or the ID is already taken.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if the ID, first name, or last name is blank.
                    - `ErrorCode.DUPLICATE_IDENTIFIER` if the ID is not unique.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added `Student` object.
                        - "position" (int): The position the `Student` was stored at.
                    - On failure:
                        - None

        Notes:
            - The ID and names are stored trimmed, so IDs differing only by surrounding whitespace collide.
            - This method mutates Roster state only if successful.
        """
        try:
            id, first_name, last_name = Student.validate_required_fields(
                student.id, student.first_name, student.last_name
            )

        except ValueError as e:
            return Response.fail(
                detail=f"Student was rejected: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            self.require_unique_id(id)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.DUPLICATE_IDENTIFIER,
            )

        student.id, student.first_name, student.last_name = id, first_name, last_name
        self._students.append(student)
        log.debug("Added student %s at position %d", student.id, len(self) - 1)

        return Response.succeed(
            detail=f"Student {student.full_name} successfully added.",
            data={
                "record": student,
                "position": len(self._students) - 1,
            },
        )

    def replace_student(self, position: int, student: Student) -> Response:
        """
        Overwrites the `Student` stored at a given position.

        Args:
            position (int): The zero-based position of the record to overwrite.
            student (Student): The replacement `Student` object.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was replaced.
                    - False if the position is invalid, a required field is blank, or the new ID collides with a different record.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INDEX_OUT_OF_RANGE` if the position is invalid.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if the ID, first name, or last name is blank.
                    - `ErrorCode.DUPLICATE_IDENTIFIER` if another record already holds the new ID.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The newly stored `Student` object.
                        - "previous" (Student): The `Student` object that was overwritten.
                    - On failure:
                        - None

        Notes:
            - Keeping the same ID as the record being replaced is allowed.
            - This method mutates Roster state only if successful.
        """
        if not self._is_valid_position(position):
            return self._index_out_of_range(position)

        try:
            id, first_name, last_name = Student.validate_required_fields(
                student.id, student.first_name, student.last_name
            )

        except ValueError as e:
            return Response.fail(
                detail=f"Student was rejected: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            self.require_unique_id(id, excluding_position=position)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.DUPLICATE_IDENTIFIER,
            )

        student.id, student.first_name, student.last_name = id, first_name, last_name
        previous = self._students[position]
        self._students[position] = student
        log.debug("Replaced student %s with %s at position %d", previous.id, student.id, position)

        return Response.succeed(
            detail=f"Student {student.full_name} successfully updated.",
            data={
                "record": student,
                "previous": previous,
            },
        )

    def remove_student(self, position: int) -> Response:
        """
        Deletes the `Student` stored at a given position.

        Args:
            position (int): The zero-based position of the record to remove.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was removed.
                    - False if the position is invalid.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INDEX_OUT_OF_RANGE` if the position is invalid.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The removed `Student` object.
                    - On failure:
                        - None

        Notes:
            - Later records shift down by one position.
        """
        if not self._is_valid_position(position):
            return self._index_out_of_range(position)

        student = self._students.pop(position)
        log.debug("Removed student %s from position %d", student.id, position)

        return Response.succeed(
            detail=f"Student {student.full_name} successfully removed.",
            data={
                "record": student,
            },
        )

    def merge_import(self, students: list[Student], replace: bool = False) -> Response:
        """
        Adds a batch of imported Students, either after the current records or in place of them.

        Args:
            students (list[Student]): The imported batch, in file order.
            replace (bool): If True, every current record is dropped before the batch is stored.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the whole batch was stored.
                    - False if the batch is empty or fails validation, in which case nothing changes.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a confirmation message with the number of records stored.
                - error (ErrorCode | str | None):
                    - `ErrorCode.EMPTY_INPUT` if the batch is empty.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if any Student is missing a required field.
                    - `ErrorCode.DUPLICATE_IDENTIFIER` if the batch repeats an ID, or collides with the current records when appending.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "added" (int): The number of Students stored.
                        - "dropped" (int): The number of previous Students discarded (0 when appending).
                    - On failure:
                        - None

        Notes:
            - The batch is validated as a whole before the Roster is touched.
        """
        if not students:
            return Response.fail(
                detail="There are no imported students to add.",
                error=ErrorCode.EMPTY_INPUT,
            )

        seen = set() if replace else self.ids
        trimmed = []

        for student in students:
            try:
                id, first_name, last_name = Student.validate_required_fields(
                    student.id, student.first_name, student.last_name
                )

            except ValueError as e:
                return Response.fail(
                    detail=f"Imported student {student} was rejected: {e}",
                    error=ErrorCode.MISSING_REQUIRED_FIELD,
                )

            if id in seen:
                return Response.fail(
                    detail=f"Imported student ID '{id}' is not unique.",
                    error=ErrorCode.DUPLICATE_IDENTIFIER,
                )

            seen.add(id)
            trimmed.append((student, id, first_name, last_name))

        for student, id, first_name, last_name in trimmed:
            student.id, student.first_name, student.last_name = id, first_name, last_name

        dropped = len(self._students) if replace else 0

        if replace:
            self._students.clear()

        self._students.extend(students)
        log.info("Merged %d imported students (%d dropped)", len(students), dropped)

        return Response.succeed(
            detail=f"Imported {len(students)} students successfully.",
            data={
                "added": len(students),
                "dropped": dropped,
            },
        )

    # === data validators ===

    def is_duplicate(self, id: str, excluding_position: int | None = None) -> bool:
        """
        Checks whether another stored Student already holds the given ID.

        Args:
            id (str): The ID to check, compared after trimming whitespace.
            excluding_position (int | None): A position to ignore, typically the record being edited.

        Returns:
            True if the ID is held by any record other than the excluded one.
        """
        id = id.strip()

        return any(
            student.id == id
            for position, student in enumerate(self._students)
            if position != excluding_position
        )

    def require_unique_id(self, id: str, excluding_position: int | None = None) -> None:
        """
        Validates that no other stored Student holds the given ID.

        Args:
            id (str): The ID to validate for uniqueness.
            excluding_position (int | None): A position to ignore, typically the record being edited.

        Raises:
            ValueError: If a different record already holds the ID.
        """
        if self.is_duplicate(id, excluding_position):
            raise ValueError(f"A student with the ID '{id}' already exists.")

    # === helper methods ===

    def _is_valid_position(self, position: int) -> bool:
        return isinstance(position, int) and 0 <= position < len(self._students)

    def _index_out_of_range(self, position: int) -> Response:
        log.error(
            "Position %r is out of range for a roster of %d students",
            position,
            len(self._students),
        )

        return Response.fail(
            detail=f"No student at position {position}.",
            error=ErrorCode.INDEX_OUT_OF_RANGE,
        )

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._students)

    def __iter__(self) -> Iterator[Student]:
        return iter(list(self._students))

    def __contains__(self, student: object) -> bool:
        return student in self._students
