"""CSV persistence for the roster.

students.csv:  StudentID,Name,Type,EnrolledCourses   (course codes joined by ';')
courses.csv:   CourseCode,CourseName,EnrolledStudents (student ids joined by ';')

Loading reads both files as written, skips rows that fail validation and
then reconciles the enrolment lists so both sides agree again.
"""

import csv
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from config.schema import StorageConfig
from models.course import Course
from models.roster import Roster
from models.student import Student, StudentType, is_valid_student_id

logger = logging.getLogger(__name__)

STUDENT_HEADER = ["StudentID", "Name", "Type", "EnrolledCourses"]
COURSE_HEADER = ["CourseCode", "CourseName", "EnrolledStudents"]
LIST_SEPARATOR = ";"


class CsvImportError(Exception):
    """A CSV file could not be read at all (wrong header, encoding or quoting)."""


class LoadReport(BaseModel):
    """What happened while loading the CSV files."""

    students_loaded: int = 0
    courses_loaded: int = 0
    skipped: list[str] = []     # rows that were ignored, with the reason
    repaired: list[str] = []    # enrolment links fixed by Roster.reconcile()

    @property
    def is_clean(self) -> bool:
        return not self.skipped and not self.repaired


def _split_list(raw: str) -> list[str]:
    """'CSE101;CSE102' -> ['CSE101', 'CSE102'] (empty parts and repeats dropped)."""
    result: list[str] = []
    for token in raw.split(LIST_SEPARATOR):
        token = token.strip()
        if token and token not in result:
            result.append(token)
    return result


def _join_list(items: list[str]) -> str:
    return LIST_SEPARATOR.join(items)


class CsvStore:
    """Reads and writes students.csv and courses.csv."""

    def __init__(self, storage: Optional[StorageConfig] = None):
        self.storage = storage or StorageConfig()

    @property
    def students_file(self) -> Path:
        return self.storage.students_file

    @property
    def courses_file(self) -> Path:
        return self.storage.courses_file

    # ─── Export ───────────────────────────────────────────────────────────────

    def export_students(self, roster: Roster) -> Path:
        path = self.students_file
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(STUDENT_HEADER)
            for s in roster.students:
                writer.writerow([s.student_id, s.name, s.type_label, _join_list(s.courses)])
        logger.info(f"Exported {len(roster.students)} students to {path}")
        return path

    def export_courses(self, roster: Roster) -> Path:
        path = self.courses_file
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(COURSE_HEADER)
            for c in roster.courses:
                writer.writerow([c.code, c.name, _join_list(c.students)])
        logger.info(f"Exported {len(roster.courses)} courses to {path}")
        return path

    def export_all(self, roster: Roster) -> tuple[Path, Path]:
        """Writes both files and returns their paths (students, courses)."""
        return self.export_students(roster), self.export_courses(roster)

    # ─── Import ───────────────────────────────────────────────────────────────

    def _read_rows(self, path: Path, header: list[str]) -> list[list[str]]:
        """All non-blank data rows of ``path``; [] if the file does not exist."""
        if not path.exists():
            logger.debug(f"No data file at {path} (first run)")
            return []
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
        except UnicodeDecodeError as e:
            raise CsvImportError(
                f"{path} is not UTF-8 encoded ({e.reason} at byte {e.start}). "
                f"Save it as UTF-8 CSV and try again."
            ) from e
        except csv.Error as e:
            raise CsvImportError(f"Malformed CSV in {path}: {e}") from e
        if not rows:
            return []
        found = [cell.strip() for cell in rows[0]]
        if found[: len(header)] != header:
            raise CsvImportError(
                f"Unexpected header in {path}: {','.join(found)} "
                f"(expected {','.join(header)})"
            )
        return rows[1:]

    def load_students(self, roster: Roster, report: LoadReport) -> None:
        for lineno, row in enumerate(self._read_rows(self.students_file, STUDENT_HEADER), 2):
            row = row + [""] * (len(STUDENT_HEADER) - len(row))
            student_id, name, type_raw, courses_raw = (cell.strip() for cell in row[:4])

            reason = None
            if not is_valid_student_id(student_id):
                reason = f"invalid student ID '{student_id}'"
            elif roster.find_student(student_id) is not None:
                reason = f"duplicate student ID {student_id}"
            elif type_raw not in StudentType.choices():
                reason = f"unknown student type '{type_raw}'"
            elif not name:
                reason = "empty name"
            if reason:
                msg = f"{self.students_file}:{lineno}: skipped, {reason}"
                logger.warning(msg)
                report.skipped.append(msg)
                continue

            roster.students.append(Student(
                student_id=student_id,
                name=name,
                student_type=StudentType(type_raw),
                courses=_split_list(courses_raw),
            ))
            report.students_loaded += 1

    def load_courses(self, roster: Roster, report: LoadReport) -> None:
        for lineno, row in enumerate(self._read_rows(self.courses_file, COURSE_HEADER), 2):
            row = row + [""] * (len(COURSE_HEADER) - len(row))
            code, name, students_raw = (cell.strip() for cell in row[:3])

            reason = None
            if not code or not name:
                reason = "empty course code or name"
            elif roster.find_course(code) is not None:
                reason = f"duplicate course code {code}"
            if reason:
                msg = f"{self.courses_file}:{lineno}: skipped, {reason}"
                logger.warning(msg)
                report.skipped.append(msg)
                continue

            roster.courses.append(Course(
                code=code, name=name, students=_split_list(students_raw),
            ))
            report.courses_loaded += 1

    def load(self, roster: Optional[Roster] = None) -> tuple[Roster, LoadReport]:
        """Loads students, then courses, then reconciles the enrolment links."""
        roster = roster if roster is not None else Roster()
        report = LoadReport()
        self.load_students(roster, report)
        self.load_courses(roster, report)
        report.repaired = roster.reconcile()
        logger.info(
            f"Loaded {report.students_loaded} students and "
            f"{report.courses_loaded} courses"
        )
        return roster, report
