# core/duplicate_resolution.py

"""
Duplicate-ID resolution for CSV imports.

Each parsed Student passes through a small state machine before it joins the import batch:

    CHECKING --(unique)--> ACCEPTED
    CHECKING --(collision)--> AWAITING_RESOLUTION
    AWAITING_RESOLUTION --(manual ID | auto ID)--> CHECKING
    AWAITING_RESOLUTION --(skip)--> REJECTED

The decision at AWAITING_RESOLUTION is delegated to a resolution strategy: any callable that takes the colliding
Student and the `DuplicateSource` and returns a `Resolution`. Interactive front-ends supply a prompt; batch callers use
`skip_duplicates` or `auto_rename_duplicates`.
"""

from __future__ import annotations

import logging
from collections.abc import Set
from enum import Enum
from typing import Callable

from core.utils import generate_student_id
from models.student import Student

log = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100


class ResolutionState(Enum):
    CHECKING = "CHECKING"
    AWAITING_RESOLUTION = "AWAITING_RESOLUTION"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class ResolutionChoice(Enum):
    MANUAL_ID = "MANUAL_ID"
    AUTO_ID = "AUTO_ID"
    SKIP = "SKIP"


class DuplicateSource(str, Enum):
    IMPORT_BATCH = "import batch"
    EXISTING_RECORDS = "existing records"


class Resolution:
    """
    The answer a resolution strategy gives for one colliding Student.

    Attributes:
        choice (ResolutionChoice): Manual ID, automatic ID, or skip.
        new_id (str | None): The replacement ID for a manual choice, otherwise None.
    """

    def __init__(self, choice: ResolutionChoice, new_id: str | None = None):
        self._choice = choice
        self._new_id = new_id

    @property
    def choice(self) -> ResolutionChoice:
        return self._choice

    @property
    def new_id(self) -> str | None:
        return self._new_id

    @classmethod
    def manual(cls, new_id: str) -> Resolution:
        return cls(ResolutionChoice.MANUAL_ID, new_id)

    @classmethod
    def auto(cls) -> Resolution:
        return cls(ResolutionChoice.AUTO_ID)

    @classmethod
    def skip(cls) -> Resolution:
        return cls(ResolutionChoice.SKIP)

    def __repr__(self) -> str:
        return f"Resolution({self._choice.value}, {self._new_id})"


ResolutionStrategy = Callable[[Student, DuplicateSource], Resolution]


# === built-in strategies ===


def skip_duplicates(_: Student, __: DuplicateSource) -> Resolution:
    return Resolution.skip()


def auto_rename_duplicates(_: Student, __: DuplicateSource) -> Resolution:
    return Resolution.auto()


# === resolver ===


class DuplicateResolver:
    """
    Runs the duplicate-ID state machine for every Student of one import batch.

    The resolver owns the set of IDs accepted so far in the batch, so later lines collide against earlier ones as
    well as against the IDs that existed before the import.

    Notes:
        - `max_attempts` bounds how many times a single Student may re-enter CHECKING after a resolution. A strategy
          that keeps proposing taken IDs ends in REJECTED instead of looping forever.
    """

    def __init__(
        self,
        existing_ids: Set[str] | None = None,
        strategy: ResolutionStrategy | None = None,
        id_generator: Callable[[], str] = generate_student_id,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self._existing_ids: frozenset[str] = frozenset(existing_ids or ())
        self._batch_ids: set[str] = set()
        self._strategy: ResolutionStrategy = strategy or skip_duplicates
        self._id_generator = id_generator
        self._max_attempts = max_attempts

    # === properties ===

    @property
    def batch_ids(self) -> frozenset[str]:
        return frozenset(self._batch_ids)

    @property
    def existing_ids(self) -> frozenset[str]:
        return self._existing_ids

    # === data validators ===

    def find_collision(self, id: str) -> DuplicateSource | None:
        if id in self._batch_ids:
            return DuplicateSource.IMPORT_BATCH

        if id in self._existing_ids:
            return DuplicateSource.EXISTING_RECORDS

        return None

    # === state machine ===

    def resolve(self, student: Student) -> ResolutionState:
        """
        Drives one Student to a terminal state.

        Args:
            student (Student): The freshly parsed Student. Its ID is rewritten in place with each candidate a manual
                or automatic resolution proposes, so the strategy always sees the ID that collided.

        Returns:
            `ResolutionState.ACCEPTED` if the Student now holds a unique ID (which has been added to the batch set),
            or `ResolutionState.REJECTED` if it was skipped.
        """
        state = ResolutionState.CHECKING
        candidate_id = student.id
        source: DuplicateSource | None = None
        attempts = 0

        while True:
            match state:
                case ResolutionState.CHECKING:
                    student.id = candidate_id
                    source = self.find_collision(candidate_id)

                    if source is None:
                        self._batch_ids.add(candidate_id)
                        state = ResolutionState.ACCEPTED

                    elif attempts >= self._max_attempts:
                        log.warning(
                            "Gave up resolving duplicate ID '%s' after %d attempts",
                            candidate_id,
                            attempts,
                        )
                        state = ResolutionState.REJECTED

                    else:
                        state = ResolutionState.AWAITING_RESOLUTION

                case ResolutionState.AWAITING_RESOLUTION:
                    resolution = self._strategy(student, source)
                    attempts += 1

                    match resolution.choice:
                        case ResolutionChoice.MANUAL_ID:
                            new_id = (resolution.new_id or "").strip()

                            # blank manual input returns to the choice
                            if new_id:
                                candidate_id = new_id
                                state = ResolutionState.CHECKING

                            elif attempts >= self._max_attempts:
                                state = ResolutionState.REJECTED

                        case ResolutionChoice.AUTO_ID:
                            candidate_id = self._id_generator()
                            state = ResolutionState.CHECKING

                        case ResolutionChoice.SKIP:
                            state = ResolutionState.REJECTED

                case ResolutionState.ACCEPTED | ResolutionState.REJECTED:
                    return state
