from models.student import Student, StudentType, is_valid_student_id
from models.course import Course
from models.roster import Roster
from models.errors import RosterError

__all__ = [
    "Student",
    "StudentType",
    "is_valid_student_id",
    "Course",
    "Roster",
    "RosterError",
]
