"""Interactive numbered menu over the roster.

Sections:
  Student Management   1-4
  Course Management    5-7
  Enrollment           8-9
  Reporting           10-11
  Data Export         12
  Populate Dummy Data 13
  Exit                 0
"""

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from config.schema import AppConfig
from data.csv_store import CsvStore
from data.dummy_data import DummyDataGenerator
from export.reports import ReportWriter
from models.errors import RosterError
from models.roster import Roster
from models.student import Student
from shell.prompts import OperationCancelled, Prompter

logger = logging.getLogger(__name__)

EXIT_CHOICE = 0

_SECTIONS: list[tuple[str, list[tuple[int, str]]]] = [
    ("Student Management", [
        (1, "Add Student"),
        (2, "Remove Student"),
        (3, "List Students"),
        (4, "Search Student"),
    ]),
    ("Course Management", [
        (5, "Add Course"),
        (6, "Remove Course"),
        (7, "List Courses"),
    ]),
    ("Enrollment", [
        (8, "Enroll Student in Course"),
        (9, "Remove Student from Course"),
    ]),
    ("Reporting", [
        (10, "Generate Course Report"),
        (11, "Generate Student Report"),
    ]),
    ("Data Export", [
        (12, "Export Data to CSV (Students & Courses)"),
    ]),
    ("Populate Dummy Data", [
        (13, "Populate Dummy Data"),
    ]),
    ("Exit", [
        (0, "Exit"),
    ]),
]


def print_students(console: Console, students: list[Student], title: str) -> None:
    table = Table(title=escape(title), box=box.ROUNDED)
    table.add_column("Name")
    table.add_column("ID", style="bold")
    table.add_column("Type")
    for s in students:
        table.add_row(escape(s.name), escape(s.student_id), s.type_label)
    console.print(table)


def print_courses(console: Console, roster: Roster) -> None:
    table = Table(title="List of Courses", box=box.ROUNDED)
    table.add_column("Course Name")
    table.add_column("Course Code", style="bold")
    table.add_column("Students", justify="right")
    for c in roster.courses:
        table.add_row(escape(c.name), escape(c.code), str(c.size))
    console.print(table)


class RosterShell:
    """The menu loop. Domain errors are printed and the loop continues."""

    def __init__(
        self,
        roster: Roster,
        config: AppConfig,
        console: Optional[Console] = None,
    ):
        self.roster = roster
        self.config = config
        self.console = console or Console()
        self.prompt = Prompter(self.console, config.behaviour.cancel_keyword)
        self.store = CsvStore(config.storage)
        self.reports = ReportWriter(config.storage, self.console)

        self._actions: dict[int, Callable[[], None]] = {
            1: self.add_student,
            2: self.remove_student,
            3: self.list_students,
            4: self.search_student,
            5: self.add_course,
            6: self.remove_course,
            7: self.list_courses,
            8: self.enrol,
            9: self.unenrol,
            10: self.course_report,
            11: self.student_report,
            12: self.export_csv,
            13: self.populate,
        }

    # ─── Loop ───

    def print_menu(self) -> None:
        for title, items in _SECTIONS:
            self.console.print("\n" + "=" * 30)
            self.console.print(f"[bold]{title.center(30)}[/bold]")
            self.console.print("=" * 30)
            for number, label in items:
                self.console.print(f"{number}. {label}")

    def handle(self, choice: int) -> bool:
        """Runs one menu choice. Returns False once the user chose to exit."""
        if choice == EXIT_CHOICE:
            self.exit()
            return False

        action = self._actions.get(choice)
        if action is None:
            self.console.print("Invalid choice. Please try again.")
            return True

        try:
            action()
        except OperationCancelled as e:
            self.console.print(str(e), style="yellow", markup=False)
        except RosterError as e:
            self.console.print(str(e), style="red", markup=False)
        except OSError as e:
            logger.error(f"File operation failed: {e}")
            self.console.print(f"File error: {e}", style="red", markup=False)
        return True

    def run(self) -> None:
        """Menu loop. End of input or Ctrl-C anywhere counts as Exit."""
        running = True
        while running:
            self.print_menu()
            try:
                running = self.handle(self.prompt.menu_choice())
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                self.exit()
                running = False

    def exit(self) -> None:
        self.console.print("Exiting the system. Goodbye!")
        if not self.config.behaviour.autosave_on_exit:
            return
        try:
            self.export_csv()
        except OSError as e:
            logger.error(f"Autosave failed: {e}")
            self.console.print(f"File error: {e}", style="red", markup=False)

    # ─── Student management ───

    def add_student(self) -> None:
        name = self.prompt.text("Enter student name")
        student_id = self.prompt.student_id()
        student_type = self.prompt.student_type()
        student = self.roster.add_student(name, student_id, student_type)
        self.console.print(
            f"Student added: {student.name} ({student.type_label})", markup=False
        )

    def remove_student(self) -> None:
        student_id = self.prompt.text("Enter student ID to remove")
        self.roster.remove_student(student_id)
        self.console.print(f"Student removed: {student_id}", markup=False)

    def list_students(self) -> None:
        print_students(self.console, self.roster.list_students(), "List of Students")

    def search_student(self) -> None:
        keyword = self.prompt.text("Enter keyword to search (name, ID, or course code)")
        hits = self.roster.search_students(
            keyword, case_sensitive=self.config.behaviour.case_sensitive_search
        )
        if not hits:
            self.console.print("No matching student found.")
            return
        print_students(self.console, hits, f'Search Results for "{keyword}"')

    # ─── Course management ───

    def add_course(self) -> None:
        name = self.prompt.text("Enter course name")
        code = self.prompt.text("Enter course code")
        course = self.roster.add_course(name, code)
        self.console.print(f"Course added: {course.name} ({course.code})", markup=False)

    def remove_course(self) -> None:
        code = self.prompt.text("Enter course code to remove")
        self.roster.remove_course(code)
        self.console.print(f"Course removed: {code}", markup=False)

    def list_courses(self) -> None:
        print_courses(self.console, self.roster)

    # ─── Enrolment ───

    def enrol(self) -> None:
        student_id = self.prompt.text("Enter student ID to enroll")
        code = self.prompt.text("Enter course code to enroll in")
        self.roster.enrol(student_id, code)
        self.console.print(f"Enrolled student {student_id} in course {code}", markup=False)

    def unenrol(self) -> None:
        student_id = self.prompt.text("Enter student ID to remove from course")
        code = self.prompt.text("Enter course code")
        self.roster.unenrol(student_id, code)
        self.console.print(f"Removed student {student_id} from course {code}", markup=False)

    # ─── Reporting ───

    def course_report(self) -> None:
        code = self.prompt.text("Enter course code for report")
        self.reports.course_report(self.roster, code)

    def student_report(self) -> None:
        student_id = self.prompt.text("Enter student ID for report")
        self.reports.student_report(self.roster, student_id)

    # ─── Data ───

    def export_csv(self) -> None:
        students_path, courses_path = self.store.export_all(self.roster)
        self.console.print(f"Students exported to {students_path}", markup=False)
        self.console.print(f"Courses exported to {courses_path}", markup=False)

    def populate(self) -> None:
        DummyDataGenerator().populate(self.roster)
        self.console.print("\nDummy data populated successfully.")
