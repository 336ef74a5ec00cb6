"""Sample-data generator for the roster.

Always adds the fixed sample set (5 students, 4 courses, 8 enrolments).
Optionally adds further random students with random enrolments; the
random part is reproducible through the seed.
"""

import logging
import random

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from config.defaults import DUMMY_COURSES, DUMMY_ENROLMENTS, DUMMY_STUDENTS
from models.errors import RosterError
from models.roster import Roster
from models.student import StudentType, is_valid_student_id

logger = logging.getLogger(__name__)

# ─── Name lists ───────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Aisha", "Ben", "Chloe", "Daniel", "Emma", "Farid", "Grace", "Hiro",
    "Isla", "Jonas", "Kira", "Liam", "Maya", "Noah", "Olivia", "Priya",
    "Quinn", "Rosa", "Sam", "Tariq", "Uma", "Victor", "Wen", "Yusuf", "Zoe",
]

_LAST_NAMES = [
    "Anderson", "Brown", "Chen", "Dubois", "Evans", "Fischer", "Garcia",
    "Hughes", "Ivanova", "Jensen", "Kim", "Lopez", "Miller", "Nakamura",
    "Okafor", "Patel", "Rossi", "Silva", "Taylor", "Walker", "Young",
]

MAX_STUDENT_NUMBER = 999


class DummyDataGenerator:
    """Fills a roster with sample students, courses and enrolments."""

    def __init__(self, seed: int = 42):
        self.seed = seed
        self.rng = random.Random(seed)
        self.skipped: list[str] = []

    def _try(self, action, *args) -> bool:
        try:
            action(*args)
            return True
        except RosterError as e:
            logger.info(f"Sample data: {e}")
            self.skipped.append(str(e))
            return False

    def populate(self, roster: Roster, extra_students: int = 0) -> Roster:
        """Adds the sample set (existing entries are skipped) plus random extras."""
        for name, student_id, student_type in DUMMY_STUDENTS:
            self._try(roster.add_student, name, student_id, student_type)
        for name, code in DUMMY_COURSES:
            self._try(roster.add_course, name, code)
        for student_id, code in DUMMY_ENROLMENTS:
            self._try(roster.enrol, student_id, code)

        if extra_students > 0:
            self._add_random_students(roster, extra_students)
        return roster

    def _next_student_number(self, roster: Roster) -> int:
        used = [
            int(s.student_id[1:]) for s in roster.students
            if is_valid_student_id(s.student_id)
        ]
        return max(used, default=0) + 1

    def _add_random_students(self, roster: Roster, count: int) -> None:
        number = self._next_student_number(roster)
        codes = [c.code for c in roster.courses]
        for _ in range(count):
            if number > MAX_STUDENT_NUMBER:
                logger.warning("Student ID range exhausted, no further sample students added")
                break
            name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
            student_type = self.rng.choice(list(StudentType))
            student = roster.add_student(name, f"S{number:03d}", student_type)
            number += 1
            if codes:
                k = self.rng.randint(1, min(3, len(codes)))
                for code in self.rng.sample(codes, k):
                    roster.enrol(student.student_id, code)

    def print_summary(self, roster: Roster) -> None:
        """Prints the populated roster as a table."""
        console = Console()
        table = Table(title="Sample data", box=box.ROUNDED)
        table.add_column("ID", style="bold")
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Courses")
        for s in roster.students:
            table.add_row(
                escape(s.student_id), escape(s.name), s.type_label,
                escape(", ".join(s.courses)),
            )
        console.print(table)
        if self.skipped:
            console.print(f"[dim]{len(self.skipped)} sample entries already existed.[/dim]")
