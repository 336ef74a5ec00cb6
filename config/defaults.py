from config.schema import AppConfig, BehaviourConfig, LoggingConfig, StorageConfig


def default_app_config() -> AppConfig:
    """Default configuration: data folders in the working directory.

    Layout:
      Students/students.csv
      Courses/courses.csv
      Reports/CourseReports/<code>.csv
      Reports/StudentReports/<id>.csv
    """
    return AppConfig(
        storage=StorageConfig(),
        behaviour=BehaviourConfig(),
        logging=LoggingConfig(),
    )


# ─── Sample data ──────────────────────────────────────────────────────────────
# (name, id, type)
DUMMY_STUDENTS: list[tuple[str, str, str]] = [
    ("Alice Johnson", "S001", "Undergraduate"),
    ("Bob Smith", "S002", "Postgraduate"),
    ("Charlie Brown", "S003", "Undergraduate"),
    ("David Williams", "S004", "Undergraduate"),
    ("Eve Davis", "S005", "Postgraduate"),
]

# (name, code)
DUMMY_COURSES: list[tuple[str, str]] = [
    ("Introduction to Programming", "CSE101"),
    ("Data Structures", "CSE102"),
    ("Algorithms", "CSE103"),
    ("Operating Systems", "CSE104"),
]

# (student id, course code)
DUMMY_ENROLMENTS: list[tuple[str, str]] = [
    ("S001", "CSE101"),
    ("S001", "CSE102"),
    ("S002", "CSE101"),
    ("S003", "CSE103"),
    ("S004", "CSE104"),
    ("S005", "CSE101"),
    ("S005", "CSE102"),
    ("S005", "CSE104"),
]
