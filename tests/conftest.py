# tests/conftest.py

import datetime

import pytest

from models.roster import Roster
from models.student import Student

SAMPLE_CSV = (
    "ID,Name,Surname,Country,DateOfBirth,IsStudyAbroad,GPA,Major,EnrollmentDate,Email,PhoneNumber\n"
    "S001,John,Smith,USA,2000-05-15,false,3.8,Computer Science,2019-09-01,john.smith@example.com,555-1234\n"
    "S002,Maria,Garcia,Spain,2001-02-03,true,3.5,Biology,2020-09-01,maria.garcia@example.com,555-9876\n"
)


@pytest.fixture
def sample_student():
    return Student(
        id="S001",
        first_name="John",
        last_name="Smith",
        country="USA",
        date_of_birth=datetime.date(2000, 5, 15),
        study_abroad=False,
        gpa=3.8,
        major="Computer Science",
        enrollment_date=datetime.date(2019, 9, 1),
        email="john.smith@example.com",
        phone_number="555-1234",
    )


@pytest.fixture
def second_student():
    return Student(
        id="S002",
        first_name="Maria",
        last_name="Garcia",
        country="Spain",
        date_of_birth=datetime.date(2001, 2, 3),
        study_abroad=True,
        gpa=3.5,
        major="Biology",
        enrollment_date=datetime.date(2020, 9, 1),
        email="maria.garcia@example.com",
        phone_number="555-9876",
    )


@pytest.fixture
def third_student():
    return Student(
        id="X100",
        first_name="Ann",
        last_name="Lee",
        country="UK",
        date_of_birth=datetime.date(1995, 1, 1),
        gpa=3.9,
        major="Math",
        enrollment_date=datetime.date(2015, 9, 1),
        email="a@x.com",
        phone_number="123",
    )


@pytest.fixture
def sample_roster(sample_student, second_student, third_student):
    return Roster([sample_student, second_student, third_student])


@pytest.fixture
def empty_roster():
    return Roster()


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV
