# models/student.py

"""
Represents a single student record held by the Roster.

Stores identifying information (a unique ID, first and last name), personal details (country,
date of birth, study-abroad flag, contact email and phone), and academic details (GPA, major,
enrollment date).

Includes functionality for:
- Clamping GPA into the 0.0 - 4.0 range on every assignment
- Validating required fields and form input before a record reaches the Roster
- Deriving age and years enrolled from the stored dates
- Serializing to a JSON-compatible dictionary for field-by-field comparison

Two students are equal when their IDs are equal; no other field takes part in identity.
"""

from __future__ import annotations

import datetime
import math

from core.formatters import parse_iso_date

GPA_MIN = 0.0
GPA_MAX = 4.0


class Student:

    def __init__(
        self,
        id: str,
        first_name: str,
        last_name: str,
        country: str = "",
        date_of_birth: datetime.date | None = None,
        study_abroad: bool = False,
        gpa: float = 0.0,
        major: str = "",
        enrollment_date: datetime.date | None = None,
        email: str = "",
        phone_number: str = "",
    ):
        today = datetime.date.today()

        self._id: str = id
        self._first_name: str = first_name
        self._last_name: str = last_name
        self._country: str = country
        self._date_of_birth: datetime.date = date_of_birth or today
        self._study_abroad: bool = study_abroad
        # _gpa uses property setter
        self.gpa = gpa
        self._major: str = major
        self._enrollment_date: datetime.date = enrollment_date or today
        self._email: str = email
        self._phone_number: str = phone_number

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @id.setter
    def id(self, id: str) -> None:
        self._id = id

    @property
    def first_name(self) -> str:
        return self._first_name

    @first_name.setter
    def first_name(self, first_name: str) -> None:
        self._first_name = first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @last_name.setter
    def last_name(self, last_name: str) -> None:
        self._last_name = last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def country(self) -> str:
        return self._country

    @country.setter
    def country(self, country: str) -> None:
        self._country = country

    @property
    def date_of_birth(self) -> datetime.date:
        return self._date_of_birth

    @date_of_birth.setter
    def date_of_birth(self, date_of_birth: datetime.date) -> None:
        self._date_of_birth = date_of_birth

    @property
    def study_abroad(self) -> bool:
        return self._study_abroad

    @study_abroad.setter
    def study_abroad(self, study_abroad: bool) -> None:
        self._study_abroad = study_abroad

    @property
    def gpa(self) -> float:
        return self._gpa

    @gpa.setter
    def gpa(self, gpa: float) -> None:
        self._gpa = Student.clamp_gpa(gpa)

    @property
    def major(self) -> str:
        return self._major

    @major.setter
    def major(self, major: str) -> None:
        self._major = major

    @property
    def enrollment_date(self) -> datetime.date:
        return self._enrollment_date

    @enrollment_date.setter
    def enrollment_date(self, enrollment_date: datetime.date) -> None:
        self._enrollment_date = enrollment_date

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, email: str) -> None:
        self._email = email

    @property
    def phone_number(self) -> str:
        return self._phone_number

    @phone_number.setter
    def phone_number(self, phone_number: str) -> None:
        self._phone_number = phone_number

    @property
    def study_abroad_status(self) -> str:
        return "Yes" if self._study_abroad else "No"

    # === derived values ===

    def age(self, today: datetime.date | None = None) -> int:
        return Student._whole_years_between(self._date_of_birth, today)

    def years_enrolled(self, today: datetime.date | None = None) -> int:
        return Student._whole_years_between(self._enrollment_date, today)

    @staticmethod
    def _whole_years_between(
        start: datetime.date, today: datetime.date | None = None
    ) -> int:
        today = today or datetime.date.today()
        years = today.year - start.year

        if (today.month, today.day) < (start.month, start.day):
            years -= 1

        return max(years, 0)

    # === public classmethods ===

    @classmethod
    def blank(cls) -> Student:
        return cls(id="", first_name="", last_name="")

    @classmethod
    def from_form(
        cls,
        id: str,
        first_name: str,
        last_name: str,
        country: str = "",
        date_of_birth: str = "",
        study_abroad: bool = False,
        gpa: str = "",
        major: str = "",
        enrollment_date: str = "",
        email: str = "",
        phone_number: str = "",
    ) -> Student:
        """
        Builds a new `Student` from raw form text, validating every field first.

        Args:
            id (str): The student ID.
            first_name (str): The first name.
            last_name (str): The last name.
            country (str): Optional country.
            date_of_birth (str): `YYYY-MM-DD`, blank for today.
            study_abroad (bool): The study-abroad flag.
            gpa (str): Decimal GPA, blank for 0.0. Out-of-range values are clamped.
            major (str): Optional major.
            enrollment_date (str): `YYYY-MM-DD`, blank for today.
            email (str): Optional email address.
            phone_number (str): Optional phone number.

        Returns:
            A new `Student` with all text fields trimmed.

        Raises:
            ValueError: If a required field is blank, a date is malformed, or the GPA is not a number.

        Notes:
            - Nothing is constructed until all fields pass, so a failed edit never leaves a half-updated record behind.
        """
        id, first_name, last_name = Student.validate_required_fields(
            id, first_name, last_name
        )

        return cls(
            id=id,
            first_name=first_name,
            last_name=last_name,
            country=country.strip(),
            date_of_birth=Student.validate_date_input(date_of_birth, "Date of birth"),
            study_abroad=study_abroad,
            gpa=Student.validate_gpa_input(gpa),
            major=major.strip(),
            enrollment_date=Student.validate_date_input(
                enrollment_date, "Enrollment date"
            ),
            email=email.strip(),
            phone_number=phone_number.strip(),
        )

    # === serialization ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "first_name": self._first_name,
            "last_name": self._last_name,
            "country": self._country,
            "date_of_birth": self._date_of_birth.isoformat(),
            "study_abroad": self._study_abroad,
            "gpa": self._gpa,
            "major": self._major,
            "enrollment_date": self._enrollment_date.isoformat(),
            "email": self._email,
            "phone_number": self._phone_number,
        }

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented

        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._first_name}, {self._last_name}, {self._country}, {self._gpa})"

    def __str__(self) -> str:
        return f"{self._last_name}, {self._first_name} ({self._id})"

    # === data validators ===

    @staticmethod
    def clamp_gpa(gpa: float) -> float:
        return max(GPA_MIN, min(GPA_MAX, float(gpa)))

    @staticmethod
    def is_gpa_in_range(gpa: float) -> bool:
        return GPA_MIN <= gpa <= GPA_MAX

    @staticmethod
    def validate_required_fields(
        id: str, first_name: str, last_name: str
    ) -> tuple[str, str, str]:
        """
        Validates and trims the three required Student fields.

        Args:
            id (str): The student ID.
            first_name (str): The first name.
            last_name (str): The last name.

        Returns:
            The trimmed `(id, first_name, last_name)` tuple.

        Raises:
            ValueError: Naming every required field that is empty after trimming whitespace.
        """
        values = {
            "ID": (id or "").strip(),
            "first name": (first_name or "").strip(),
            "last name": (last_name or "").strip(),
        }
        missing = [label for label, value in values.items() if not value]

        if missing:
            raise ValueError(f"Missing required field(s): {', '.join(missing)}.")

        return values["ID"], values["first name"], values["last name"]

    @staticmethod
    def validate_date_input(date_str: str, label: str = "Date") -> datetime.date:
        """
        Validates a form date string.

        Args:
            date_str (str): The raw input, blank means today.
            label (str): The field name used in the error message.

        Returns:
            The parsed date, or today's date if the input is blank.

        Raises:
            ValueError: If the input is not a valid `YYYY-MM-DD` date.
        """
        date_str = (date_str or "").strip()

        if not date_str:
            return datetime.date.today()

        try:
            return parse_iso_date(date_str)

        except ValueError:
            raise ValueError(
                f"Invalid input. {label} must be a valid date in YYYY-MM-DD format."
            )

    @staticmethod
    def validate_gpa_input(gpa_str: str) -> float:
        """
        Validates a form GPA string.

        Args:
            gpa_str (str): The raw input, blank means 0.0.

        Returns:
            The GPA as a float, clamped into the 0.0 - 4.0 range.

        Raises:
            ValueError: If the input is not a finite decimal number.
        """
        gpa_str = (gpa_str or "").strip()

        if not gpa_str:
            return GPA_MIN

        try:
            gpa = float(gpa_str)

        except ValueError:
            raise ValueError("Invalid input. GPA must be a decimal number.")

        if not math.isfinite(gpa):
            raise ValueError("Invalid input. GPA must be a decimal number.")

        return Student.clamp_gpa(gpa)
