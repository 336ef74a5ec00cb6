"""Data model for a course (Pydantic v2)."""

from pydantic import BaseModel, field_validator


class Course(BaseModel):
    """A course and the ids of its enrolled students."""

    code: str                   # "CSE101"
    name: str                   # "Introduction to Programming"
    students: list[str] = []    # student ids, in enrolment order

    @field_validator("code", "name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Course code and name must not be empty.")
        return v

    @property
    def size(self) -> int:
        return len(self.students)

    def has_student(self, student_id: str) -> bool:
        return student_id in self.students

    def add_student(self, student_id: str) -> None:
        if student_id not in self.students:
            self.students.append(student_id)

    def remove_student(self, student_id: str) -> None:
        self.students = [s for s in self.students if s != student_id]
