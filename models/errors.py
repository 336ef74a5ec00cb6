"""Domain errors raised by the roster.

The messages are shown to the user as-is by the shell and the CLI.
"""


class RosterError(Exception):
    """Base class for all roster errors."""


class InvalidStudentIdError(RosterError):
    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(
            f"Invalid student ID '{student_id}'. "
            "Please follow the format Sxxx (e.g., S001)."
        )


class InvalidStudentTypeError(RosterError):
    def __init__(self, student_type: str):
        self.student_type = student_type
        super().__init__(
            "Unknown student type. Please use 'Undergraduate' or 'Postgraduate'."
        )


class DuplicateStudentError(RosterError):
    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student with ID {student_id} already exists.")


class DuplicateCourseError(RosterError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Course with code {code} already exists.")


class StudentNotFoundError(RosterError):
    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student with ID {student_id} not found.")


class CourseNotFoundError(RosterError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Course with code {code} not found.")


class EnrolmentTargetNotFoundError(RosterError):
    """Raised by unenrol when the student or the course does not exist."""

    def __init__(self, student_id: str, code: str):
        self.student_id = student_id
        self.code = code
        super().__init__("Either student or course not found.")


class AlreadyEnrolledError(RosterError):
    def __init__(self, student_id: str, code: str):
        self.student_id = student_id
        self.code = code
        super().__init__(
            f"Student {student_id} is already enrolled in course {code}."
        )


class NotEnrolledError(RosterError):
    def __init__(self, student_id: str, code: str):
        self.student_id = student_id
        self.code = code
        super().__init__(f"Student {student_id} is not enrolled in course {code}.")
