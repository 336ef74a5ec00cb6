"""Consistency check for the two-sided enrolment lists."""

from pydantic import BaseModel
from rich.markup import escape

from models.roster import Roster


class ConsistencyReport(BaseModel):
    """Result of the consistency check."""

    is_consistent: bool
    errors: list[str]      # broken links: one-sided or dangling
    warnings: list[str]    # allowed but worth a look

    def print_rich(self) -> None:
        """Prints the report through Rich."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_consistent:
            status = "[bold green]✓ CONSISTENT[/bold green]"
        else:
            status = "[bold red]✗ INCONSISTENT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Errors:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {escape(e)}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnings:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {escape(w)}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]No problems found.[/dim]")

        console.print(Panel("\n".join(lines), title="Consistency check", border_style="cyan"))


def check_consistency(roster: Roster) -> ConsistencyReport:
    """Checks that every enrolment is recorded on both sides.

    Errors:
    1. A student lists a course code that does not exist
    2. A course lists a student id that does not exist
    3. A link is recorded on one side only
    4. Duplicate ids or codes

    Warnings:
    - Courses without students
    - Students without courses
    """
    errors: list[str] = []
    warnings: list[str] = []

    students = {s.student_id: s for s in roster.students}
    courses = {c.code: c for c in roster.courses}

    # ── 4. Duplicates ──────────────────────────────────────────────────────
    if len(students) != len(roster.students):
        errors.append("Duplicate student IDs in the roster.")
    if len(courses) != len(roster.courses):
        errors.append("Duplicate course codes in the roster.")

    # ── 1 + 3. Student side ────────────────────────────────────────────────
    for student in roster.students:
        for code in student.courses:
            course = courses.get(code)
            if course is None:
                errors.append(
                    f"Student {student.student_id} lists unknown course {code}."
                )
            elif student.student_id not in course.students:
                errors.append(
                    f"Student {student.student_id} lists {code}, "
                    f"but {code} does not list {student.student_id}."
                )
        if not student.courses:
            warnings.append(f"Student {student.student_id} ({student.name}) has no courses.")

    # ── 2 + 3. Course side ─────────────────────────────────────────────────
    for course in roster.courses:
        for sid in course.students:
            student = students.get(sid)
            if student is None:
                errors.append(f"Course {course.code} lists unknown student {sid}.")
            elif course.code not in student.courses:
                errors.append(
                    f"Course {course.code} lists {sid}, "
                    f"but {sid} does not list {course.code}."
                )
        if not course.students:
            warnings.append(f"Course {course.code} ({course.name}) has no students.")

    return ConsistencyReport(
        is_consistent=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
