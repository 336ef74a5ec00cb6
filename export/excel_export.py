"""Excel export of the whole roster (openpyxl)."""

from pathlib import Path
from typing import Optional

from models.roster import Roster

# ─── Colours (RRGGBB, without #) ──────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":        "4472C4",
    "undergraduate": "B3D4FF",
    "postgraduate":  "FFF2B3",
    "empty":         "FF9999",
}


class RosterExcelExporter:
    """Writes a workbook with the sheets Students, Courses and Enrolments."""

    COL_WIDTHS = {
        "Students":   [12, 30, 16, 40],
        "Courses":    [14, 36, 10, 40],
        "Enrolments": [12, 30, 14, 36],
    }

    def __init__(self, roster: Roster):
        self.roster = roster

    # ─── Public API ───────────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)

        self._sheet_students(wb)
        self._sheet_courses(wb)
        self._sheet_enrolments(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Style helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _new_sheet(self, wb, title: str, headers: list[str]):
        """Creates a sheet with a styled, frozen header row."""
        from openpyxl.styles import Alignment, Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title=title)
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border
        for col, width in enumerate(self.COL_WIDTHS[title], 1):
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.freeze_panes = "A2"
        return ws

    def _write_row(self, ws, row: int, values: list, fill_color: Optional[str] = None) -> None:
        border = self._thin_border()
        fill = self._fill(fill_color) if fill_color else None
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.border = border
            if fill is not None:
                cell.fill = fill

    # ─── Sheets ───────────────────────────────────────────────────────────────

    def _sheet_students(self, wb) -> None:
        ws = self._new_sheet(wb, "Students", ["StudentID", "Name", "Type", "EnrolledCourses"])
        for row, s in enumerate(self.roster.students, 2):
            self._write_row(
                ws, row,
                [s.student_id, s.name, s.type_label, "; ".join(s.courses)],
                COLORS[s.type_label.lower()],
            )

    def _sheet_courses(self, wb) -> None:
        ws = self._new_sheet(wb, "Courses",
                             ["CourseCode", "CourseName", "Students", "EnrolledStudents"])
        for row, c in enumerate(self.roster.courses, 2):
            self._write_row(
                ws, row,
                [c.code, c.name, c.size, "; ".join(c.students)],
                COLORS["empty"] if c.size == 0 else None,
            )

    def _sheet_enrolments(self, wb) -> None:
        ws = self._new_sheet(wb, "Enrolments",
                             ["StudentID", "Name", "CourseCode", "CourseName"])
        row = 2
        for s in self.roster.students:
            for c in self.roster.courses_of(s.student_id):
                self._write_row(ws, row, [s.student_id, s.name, c.code, c.name])
                row += 1
