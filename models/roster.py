"""Roster: all students and courses held in memory (Pydantic v2).

Every enrol/unenrol/remove keeps both sides in step: a student id is in
``course.students`` exactly when the course code is in ``student.courses``.
"""

import logging
from typing import Optional, Union

from pydantic import BaseModel

from models.course import Course
from models.errors import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    DuplicateCourseError,
    DuplicateStudentError,
    EnrolmentTargetNotFoundError,
    InvalidStudentIdError,
    InvalidStudentTypeError,
    NotEnrolledError,
    RosterError,
    StudentNotFoundError,
)
from models.student import Student, StudentType, is_valid_student_id

logger = logging.getLogger(__name__)


class Roster(BaseModel):
    """In-memory store of students and courses."""

    students: list[Student] = []
    courses: list[Course] = []

    # ─── Lookups ───

    def find_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.student_id == student_id), None)

    def find_course(self, code: str) -> Optional[Course]:
        return next((c for c in self.courses if c.code == code), None)

    def get_student(self, student_id: str) -> Student:
        student = self.find_student(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    def get_course(self, code: str) -> Course:
        course = self.find_course(code)
        if course is None:
            raise CourseNotFoundError(code)
        return course

    # ─── Students ───

    def add_student(
        self, name: str, student_id: str, student_type: Union[str, StudentType]
    ) -> Student:
        """Adds a new student without any enrolments."""
        student_id = student_id.strip()
        if not is_valid_student_id(student_id):
            raise InvalidStudentIdError(student_id)
        if self.find_student(student_id) is not None:
            raise DuplicateStudentError(student_id)
        try:
            st = StudentType(student_type)
        except ValueError:
            raise InvalidStudentTypeError(str(student_type)) from None
        if not name.strip():
            raise RosterError("Student name must not be empty.")

        student = Student(student_id=student_id, name=name, student_type=st)
        self.students.append(student)
        logger.info(f"Student added: {student.student_id} {student.name} ({st.value})")
        return student

    def remove_student(self, student_id: str) -> Student:
        """Removes a student and drops them from every course."""
        student = self.get_student(student_id)
        for course in self.courses:
            course.remove_student(student_id)
        self.students.remove(student)
        logger.info(f"Student removed: {student_id}")
        return student

    def list_students(self) -> list[Student]:
        return list(self.students)

    def search_students(self, keyword: str, case_sensitive: bool = True) -> list[Student]:
        """Students whose name, id or one of whose course codes contains ``keyword``."""
        if case_sensitive:
            def hit(text: str) -> bool:
                return keyword in text
        else:
            needle = keyword.lower()

            def hit(text: str) -> bool:
                return needle in text.lower()

        return [
            s for s in self.students
            if hit(s.name) or hit(s.student_id) or any(hit(c) for c in s.courses)
        ]

    # ─── Courses ───

    def add_course(self, name: str, code: str) -> Course:
        """Adds a new course without any students."""
        code = code.strip()
        if not code or not name.strip():
            raise RosterError("Course name and code must not be empty.")
        if self.find_course(code) is not None:
            raise DuplicateCourseError(code)
        course = Course(code=code, name=name)
        self.courses.append(course)
        logger.info(f"Course added: {course.code} {course.name}")
        return course

    def remove_course(self, code: str) -> Course:
        """Removes a course and drops it from every student's list."""
        course = self.get_course(code)
        for student in self.students:
            student.remove_course(code)
        self.courses.remove(course)
        logger.info(f"Course removed: {code}")
        return course

    def list_courses(self) -> list[Course]:
        return list(self.courses)

    # ─── Enrolment ───

    def enrol(self, student_id: str, code: str) -> None:
        student = self.get_student(student_id)
        course = self.get_course(code)
        if student.is_enrolled(code):
            raise AlreadyEnrolledError(student_id, code)
        student.add_course(code)
        course.add_student(student_id)
        logger.info(f"Enrolled {student_id} in {code}")

    def unenrol(self, student_id: str, code: str) -> None:
        student = self.find_student(student_id)
        course = self.find_course(code)
        if student is None or course is None:
            raise EnrolmentTargetNotFoundError(student_id, code)
        if not student.is_enrolled(code) and not course.has_student(student_id):
            raise NotEnrolledError(student_id, code)
        student.remove_course(code)
        course.remove_student(student_id)
        logger.info(f"Removed {student_id} from {code}")

    def courses_of(self, student_id: str) -> list[Course]:
        """Courses of a student in enrolment order (unknown codes are skipped)."""
        student = self.get_student(student_id)
        return [c for c in (self.find_course(code) for code in student.courses) if c]

    def students_in(self, code: str) -> list[Student]:
        """Students of a course in enrolment order (unknown ids are skipped)."""
        course = self.get_course(code)
        return [s for s in (self.find_student(sid) for sid in course.students) if s]

    # ─── Reconciliation ───

    def reconcile(self) -> list[str]:
        """Restores the two-sided enrolment links after a raw load.

        A link recorded on one side between two existing entities is added to
        the other side; links naming a missing entity are dropped. Returns a
        description of every change made.
        """
        changes: list[str] = []
        student_ids = {s.student_id for s in self.students}
        course_codes = {c.code for c in self.courses}

        for student in self.students:
            for code in list(student.courses):
                if code not in course_codes:
                    student.remove_course(code)
                    changes.append(
                        f"Dropped unknown course {code} from student {student.student_id}"
                    )
                    continue
                course = self.get_course(code)
                if not course.has_student(student.student_id):
                    course.add_student(student.student_id)
                    changes.append(
                        f"Added student {student.student_id} to course {code}"
                    )

        for course in self.courses:
            for sid in list(course.students):
                if sid not in student_ids:
                    course.remove_student(sid)
                    changes.append(f"Dropped unknown student {sid} from course {course.code}")
                    continue
                student = self.get_student(sid)
                if not student.is_enrolled(course.code):
                    student.add_course(course.code)
                    changes.append(f"Added course {course.code} to student {sid}")

        for change in changes:
            logger.warning(change)
        return changes

    # ─── Overview ───

    def summary(self) -> str:
        """Short overview of the roster."""
        num_pg = sum(1 for s in self.students if s.student_type == StudentType.POSTGRADUATE)
        enrolments = sum(len(s.courses) for s in self.students)
        lines = [
            f"Students: {len(self.students)} "
            f"({len(self.students) - num_pg} Undergraduate, {num_pg} Postgraduate)",
            f"Courses: {len(self.courses)}",
            f"Enrolments: {enrolments}",
        ]
        return "\n".join(lines)
