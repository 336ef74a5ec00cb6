from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ─── STORAGE (where CSV files and reports live) ───

class StorageConfig(BaseModel):
    """File locations, all relative to ``base_dir``."""
    # Root directory for all data folders
    base_dir: Path = Field(Path("."),
        description="Root directory for data and reports")
    # Folder holding students.csv
    students_dir: str = Field("Students",
        description="Folder for students.csv")
    # Folder holding courses.csv
    courses_dir: str = Field("Courses",
        description="Folder for courses.csv")
    # Folder holding CourseReports/ and StudentReports/
    reports_dir: str = Field("Reports",
        description="Folder for generated reports")
    # Excel workbook written by 'export --excel'
    excel_file: str = Field("Reports/roster.xlsx",
        description="Excel workbook path")

    @field_validator("students_dir", "courses_dir", "reports_dir", "excel_file")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Path entries must not be empty")
        return v.strip()

    @property
    def students_file(self) -> Path:
        return self.base_dir / self.students_dir / "students.csv"

    @property
    def courses_file(self) -> Path:
        return self.base_dir / self.courses_dir / "courses.csv"

    @property
    def course_reports_dir(self) -> Path:
        return self.base_dir / self.reports_dir / "CourseReports"

    @property
    def student_reports_dir(self) -> Path:
        return self.base_dir / self.reports_dir / "StudentReports"

    @property
    def excel_path(self) -> Path:
        return self.base_dir / self.excel_file


# ─── BEHAVIOUR ───

class BehaviourConfig(BaseModel):
    """Interactive shell behaviour."""
    # Load students.csv / courses.csv when the program starts
    load_on_start: bool = Field(True,
        description="Load saved CSV data on start")
    # Export both CSV files when the menu is left with 0
    autosave_on_exit: bool = Field(True,
        description="Export CSV data on exit")
    # Typing this word at any prompt cancels the running operation
    cancel_keyword: str = Field("esc",
        description="Word that cancels the current operation (case-insensitive)")
    # Student search compares case-sensitively
    case_sensitive_search: bool = Field(True,
        description="Case-sensitive student search")

    @field_validator("cancel_keyword")
    @classmethod
    def _keyword_lower(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("cancel_keyword must not be empty")
        return v


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Logging output."""
    level: LogLevel = Field(LogLevel.WARNING,
        description="Console log level")
    # Optional log file (in addition to the console)
    file: Optional[Path] = Field(None,
        description="Optional log file")


# ─── OVERALL CONFIG ───

class AppConfig(BaseModel):
    """Complete application configuration."""
    storage: StorageConfig = Field(default_factory=StorageConfig)
    behaviour: BehaviourConfig = Field(default_factory=BehaviourConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
