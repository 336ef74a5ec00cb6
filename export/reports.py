"""Course and student reports: shown on the terminal and saved as CSV.

Course report  (<reports>/CourseReports/<code>.csv):
    StudentID,Name,Type
    S001,Alice Johnson,Undergraduate
    ...

Student report (<reports>/StudentReports/<id>.csv):
    StudentID,Name,Type
    S001,Alice Johnson,Undergraduate

    CourseCode,CourseName
    CSE101,Introduction to Programming
    ...
"""

import csv
import logging
import re
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from config.schema import StorageConfig
from models.roster import Roster

logger = logging.getLogger(__name__)

COURSE_REPORT_HEADER = ["StudentID", "Name", "Type"]
STUDENT_REPORT_HEADER = ["StudentID", "Name", "Type"]
STUDENT_COURSES_HEADER = ["CourseCode", "CourseName"]


def _safe_filename(key: str) -> str:
    """Replaces characters that cannot appear in a file name."""
    safe = re.sub(r'[\\/:*?"<>|]', "_", key)
    if safe != key:
        logger.warning(
            f"'{key}' is not a valid file name, report saved as '{safe}' "
            f"(may overwrite the report of '{safe}')"
        )
    return safe


def course_report_rows(roster: Roster, code: str) -> list[list[str]]:
    """One row per enrolled student, in enrolment order.

    Raises CourseNotFoundError for an unknown code.
    """
    return [[s.student_id, s.name, s.type_label] for s in roster.students_in(code)]


def student_report_rows(roster: Roster, student_id: str) -> tuple[list[str], list[list[str]]]:
    """(student row, course rows) for a student report.

    Raises StudentNotFoundError for an unknown id.
    """
    student = roster.get_student(student_id)
    courses = [[c.code, c.name] for c in roster.courses_of(student_id)]
    return [student.student_id, student.name, student.type_label], courses


class ReportWriter:
    """Builds, prints and saves the two report types."""

    def __init__(self, storage: Optional[StorageConfig] = None,
                 console: Optional[Console] = None):
        self.storage = storage or StorageConfig()
        self.console = console or Console()

    # ─── Course report ────────────────────────────────────────────────────────

    def course_report(self, roster: Roster, code: str) -> Path:
        """Prints the course report and saves it; returns the CSV path."""
        rows = course_report_rows(roster, code)
        course = roster.get_course(code)

        table = Table(title=escape(f"Course Report for {course.code}: {course.name}"),
                      box=box.ROUNDED)
        for col in COURSE_REPORT_HEADER:
            table.add_column(col)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self.console.print(table)

        path = self.storage.course_reports_dir / f"{_safe_filename(course.code)}.csv"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(COURSE_REPORT_HEADER)
            writer.writerows(rows)

        logger.info(f"Course report for {course.code} written to {path}")
        self.console.print(f"Course report saved to: {path}", markup=False)
        return path

    # ─── Student report ───────────────────────────────────────────────────────

    def student_report(self, roster: Roster, student_id: str) -> Path:
        """Prints the student report and saves it; returns the CSV path."""
        student_row, course_rows = student_report_rows(roster, student_id)

        info = Table(title=escape(f"Student Report for {student_row[0]}"),
                     box=box.ROUNDED)
        for col in STUDENT_REPORT_HEADER:
            info.add_column(col)
        info.add_row(*(escape(cell) for cell in student_row))
        self.console.print(info)

        courses = Table(box=box.ROUNDED)
        for col in STUDENT_COURSES_HEADER:
            courses.add_column(col)
        for row in course_rows:
            courses.add_row(*(escape(cell) for cell in row))
        self.console.print(courses)

        path = self.storage.student_reports_dir / f"{_safe_filename(student_row[0])}.csv"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(STUDENT_REPORT_HEADER)
            writer.writerow(student_row)
            writer.writerow([])
            writer.writerow(STUDENT_COURSES_HEADER)
            writer.writerows(course_rows)

        logger.info(f"Student report for {student_row[0]} written to {path}")
        self.console.print(f"Student report saved to: {path}", markup=False)
        return path
