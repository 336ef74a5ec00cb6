"""Data model for a student (Pydantic v2)."""

import re
from enum import Enum

from pydantic import BaseModel, field_validator

# "S" followed by exactly three digits, e.g. S001
STUDENT_ID_PATTERN = re.compile(r"S[0-9]{3}")


class StudentType(str, Enum):
    UNDERGRADUATE = "Undergraduate"
    POSTGRADUATE = "Postgraduate"

    @classmethod
    def choices(cls) -> list[str]:
        return [t.value for t in cls]


def is_valid_student_id(student_id: str) -> bool:
    """True if the id follows the Sxxx format."""
    return bool(STUDENT_ID_PATTERN.fullmatch(student_id))


class Student(BaseModel):
    """A single student and the course codes they are enrolled in."""

    student_id: str
    name: str
    student_type: StudentType
    courses: list[str] = []     # course codes, in enrolment order

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Student name must not be empty.")
        return v

    @property
    def type_label(self) -> str:
        return self.student_type.value

    def is_enrolled(self, course_code: str) -> bool:
        return course_code in self.courses

    def add_course(self, course_code: str) -> None:
        if course_code not in self.courses:
            self.courses.append(course_code)

    def remove_course(self, course_code: str) -> None:
        self.courses = [c for c in self.courses if c != course_code]
