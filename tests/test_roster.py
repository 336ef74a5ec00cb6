"""Tests for the data models and the roster operations."""

import pytest

from config.defaults import DUMMY_COURSES, DUMMY_ENROLMENTS, DUMMY_STUDENTS
from data.dummy_data import DummyDataGenerator
from models.course import Course
from models.errors import (
    AlreadyEnrolledError,
    CourseNotFoundError,
    DuplicateCourseError,
    DuplicateStudentError,
    EnrolmentTargetNotFoundError,
    InvalidStudentIdError,
    InvalidStudentTypeError,
    NotEnrolledError,
    RosterError,
    StudentNotFoundError,
)
from models.roster import Roster
from models.student import Student, StudentType, is_valid_student_id


# ─── Test data helpers ────────────────────────────────────────────────────────

def _make_roster() -> Roster:
    """Two students, two courses, S001 enrolled in CSE101."""
    roster = Roster()
    roster.add_student("Alice Johnson", "S001", "Undergraduate")
    roster.add_student("Bob Smith", "S002", "Postgraduate")
    roster.add_course("Introduction to Programming", "CSE101")
    roster.add_course("Data Structures", "CSE102")
    roster.enrol("S001", "CSE101")
    return roster


def _assert_two_sided(roster: Roster) -> None:
    for s in roster.students:
        for code in s.courses:
            assert s.student_id in roster.get_course(code).students
    for c in roster.courses:
        for sid in c.students:
            assert c.code in roster.get_student(sid).courses


# ─── MODELS ───────────────────────────────────────────────────────────────────

class TestModels:
    @pytest.mark.parametrize("sid", ["S001", "S999", "S000"])
    def test_valid_student_ids(self, sid):
        """S followed by exactly three digits is accepted."""
        assert is_valid_student_id(sid)

    @pytest.mark.parametrize("sid", [
        "S01", "S0001", "s001", "X001", "S00a", "", " S001", "S001\n", "S\u0661\u0662\u0663",
    ])
    def test_invalid_student_ids(self, sid):
        """Anything else is rejected, including whitespace and non-ASCII digits."""
        assert not is_valid_student_id(sid)

    def test_student_type_choices(self):
        """Both categories in menu order."""
        assert StudentType.choices() == ["Undergraduate", "Postgraduate"]

    def test_student_name_is_stripped(self):
        """Names are stored without surrounding whitespace."""
        s = Student(student_id="S001", name="  Alice  ", student_type="Undergraduate")
        assert s.name == "Alice"
        assert s.type_label == "Undergraduate"
        assert s.courses == []

    def test_student_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Student(student_id="S001", name="   ", student_type="Undergraduate")

    def test_student_add_course_is_idempotent(self):
        """Adding a course twice keeps a single entry."""
        s = Student(student_id="S001", name="Alice", student_type="Postgraduate")
        s.add_course("CSE101")
        s.add_course("CSE101")
        assert s.courses == ["CSE101"]
        s.remove_course("CSE101")
        assert s.courses == []

    def test_course_lists_are_independent(self):
        """Default lists are not shared between instances."""
        a = Course(code="A", name="A")
        b = Course(code="B", name="B")
        a.add_student("S001")
        assert b.students == []
        assert a.size == 1


# ─── STUDENTS ─────────────────────────────────────────────────────────────────

class TestStudents:
    def test_add_student(self):
        """New student can be looked up by ID."""
        roster = Roster()
        s = roster.add_student("Alice Johnson", "S001", "Undergraduate")
        assert s.student_type == StudentType.UNDERGRADUATE
        assert roster.find_student("S001") is s

    def test_add_student_accepts_enum(self):
        roster = Roster()
        s = roster.add_student("Eve", "S005", StudentType.POSTGRADUATE)
        assert s.type_label == "Postgraduate"

    def test_duplicate_id_rejected(self):
        """A second student with the same ID is not added."""
        roster = _make_roster()
        with pytest.raises(DuplicateStudentError, match="S001 already exists"):
            roster.add_student("Someone Else", "S001", "Postgraduate")
        assert len(roster.students) == 2

    def test_invalid_id_rejected(self):
        with pytest.raises(InvalidStudentIdError):
            Roster().add_student("Alice", "A1", "Undergraduate")

    def test_invalid_type_rejected(self):
        """Student types are matched exactly."""
        with pytest.raises(InvalidStudentTypeError):
            Roster().add_student("Alice", "S001", "undergraduate")

    def test_empty_name_rejected(self):
        with pytest.raises(RosterError):
            Roster().add_student("  ", "S001", "Undergraduate")

    def test_remove_student_cascades(self):
        """Removing a student also clears the course lists."""
        roster = _make_roster()
        roster.remove_student("S001")
        assert roster.find_student("S001") is None
        assert roster.get_course("CSE101").students == []

    def test_remove_unknown_student(self):
        """Unknown ID raises with the not-found message."""
        with pytest.raises(StudentNotFoundError, match="S404 not found"):
            _make_roster().remove_student("S404")

    def test_list_keeps_insertion_order(self):
        roster = _make_roster()
        assert [s.student_id for s in roster.list_students()] == ["S001", "S002"]


# ─── SEARCH ───────────────────────────────────────────────────────────────────

class TestSearch:
    def test_search_by_name(self):
        """Substring of the name matches."""
        hits = _make_roster().search_students("Bob")
        assert [s.student_id for s in hits] == ["S002"]

    def test_search_by_id(self):
        hits = _make_roster().search_students("S00")
        assert len(hits) == 2

    def test_search_by_course_code(self):
        """Students enrolled in the course match."""
        hits = _make_roster().search_students("CSE101")
        assert [s.student_id for s in hits] == ["S001"]

    def test_student_listed_once(self):
        """A student matching on name and course appears only once."""
        roster = _make_roster()
        roster.enrol("S001", "CSE102")
        hits = roster.search_students("S")
        assert [s.student_id for s in hits] == ["S001", "S002"]

    def test_search_case_sensitive_by_default(self):
        """Lower-case keyword only matches when case is ignored."""
        roster = _make_roster()
        assert roster.search_students("alice") == []
        assert len(roster.search_students("alice", case_sensitive=False)) == 1

    def test_search_no_match(self):
        assert _make_roster().search_students("Zed") == []


# ─── COURSES ──────────────────────────────────────────────────────────────────

class TestCourses:
    def test_add_course(self):
        roster = Roster()
        c = roster.add_course("Algorithms", "CSE103")
        assert roster.find_course("CSE103") is c
        assert c.students == []

    def test_duplicate_code_rejected(self):
        with pytest.raises(DuplicateCourseError, match="CSE101 already exists"):
            _make_roster().add_course("Other", "CSE101")

    def test_empty_code_rejected(self):
        with pytest.raises(RosterError):
            Roster().add_course("Algorithms", "  ")

    def test_remove_course_cascades(self):
        """Removing a course also clears the student lists."""
        roster = _make_roster()
        roster.remove_course("CSE101")
        assert roster.find_course("CSE101") is None
        assert roster.get_student("S001").courses == []

    def test_remove_unknown_course(self):
        with pytest.raises(CourseNotFoundError, match="CSE999 not found"):
            _make_roster().remove_course("CSE999")


# ─── ENROLMENT ────────────────────────────────────────────────────────────────

class TestEnrolment:
    def test_enrol_updates_both_sides(self):
        """Enrolment is visible from student and course."""
        roster = _make_roster()
        roster.enrol("S002", "CSE101")
        assert roster.get_course("CSE101").students == ["S001", "S002"]
        assert roster.get_student("S002").courses == ["CSE101"]
        _assert_two_sided(roster)

    def test_enrolment_order_preserved(self):
        roster = _make_roster()
        roster.enrol("S001", "CSE102")
        assert roster.get_student("S001").courses == ["CSE101", "CSE102"]

    def test_enrol_twice_rejected(self):
        """Enrolling an existing pair fails."""
        with pytest.raises(AlreadyEnrolledError, match="already enrolled in course CSE101"):
            _make_roster().enrol("S001", "CSE101")

    def test_enrol_unknown_student_checked_first(self):
        """With both missing, the student error wins."""
        with pytest.raises(StudentNotFoundError):
            _make_roster().enrol("S404", "CSE999")

    def test_enrol_unknown_course(self):
        with pytest.raises(CourseNotFoundError):
            _make_roster().enrol("S001", "CSE999")

    def test_unenrol(self):
        roster = _make_roster()
        roster.unenrol("S001", "CSE101")
        assert roster.get_student("S001").courses == []
        assert roster.get_course("CSE101").students == []

    def test_unenrol_missing_target(self):
        """Unknown course gives the combined not-found message."""
        with pytest.raises(EnrolmentTargetNotFoundError, match="Either student or course"):
            _make_roster().unenrol("S001", "CSE999")

    def test_unenrol_not_enrolled(self):
        """Existing but unlinked pair cannot be unenrolled."""
        with pytest.raises(NotEnrolledError):
            _make_roster().unenrol("S002", "CSE101")

    def test_courses_of_and_students_in(self):
        roster = _make_roster()
        assert [c.code for c in roster.courses_of("S001")] == ["CSE101"]
        assert [s.student_id for s in roster.students_in("CSE101")] == ["S001"]


# ─── RECONCILE ────────────────────────────────────────────────────────────────

class TestReconcile:
    def test_one_sided_link_is_completed(self):
        """Links recorded on one side are restored on the other."""
        roster = Roster(
            students=[Student(student_id="S001", name="A", student_type="Undergraduate",
                              courses=["CSE101"])],
            courses=[Course(code="CSE101", name="Intro"),
                     Course(code="CSE102", name="DS", students=["S001"])],
        )
        changes = roster.reconcile()
        assert len(changes) == 2
        assert roster.get_course("CSE101").students == ["S001"]
        assert roster.get_student("S001").courses == ["CSE101", "CSE102"]
        _assert_two_sided(roster)

    def test_dangling_links_are_dropped(self):
        """Links to unknown entities are removed."""
        roster = Roster(
            students=[Student(student_id="S001", name="A", student_type="Undergraduate",
                              courses=["GONE"])],
            courses=[Course(code="CSE101", name="Intro", students=["S404"])],
        )
        roster.reconcile()
        assert roster.get_student("S001").courses == []
        assert roster.get_course("CSE101").students == []

    def test_consistent_roster_unchanged(self):
        assert _make_roster().reconcile() == []


# ─── SAMPLE DATA ──────────────────────────────────────────────────────────────

class TestDummyData:
    def test_populate_sample_set(self):
        """Sample data: 5 students, 4 courses, 8 enrolments."""
        roster = DummyDataGenerator().populate(Roster())
        assert len(roster.students) == len(DUMMY_STUDENTS) == 5
        assert len(roster.courses) == len(DUMMY_COURSES) == 4
        assert sum(len(s.courses) for s in roster.students) == len(DUMMY_ENROLMENTS) == 8
        assert roster.get_student("S005").courses == ["CSE101", "CSE102", "CSE104"]
        assert roster.get_course("CSE101").students == ["S001", "S002", "S005"]
        _assert_two_sided(roster)

    def test_populate_twice_skips_existing(self):
        """Second run skips every entry instead of failing."""
        roster = Roster()
        DummyDataGenerator().populate(roster)
        gen = DummyDataGenerator()
        gen.populate(roster)
        assert len(roster.students) == 5
        assert len(gen.skipped) == 5 + 4 + 8

    def test_extra_students_are_reproducible(self):
        """Same seed gives the same extra students."""
        a = DummyDataGenerator(seed=7).populate(Roster(), extra_students=10)
        b = DummyDataGenerator(seed=7).populate(Roster(), extra_students=10)
        assert len(a.students) == 15
        assert [s.model_dump() for s in a.students] == [s.model_dump() for s in b.students]
        assert a.students[5].student_id == "S006"
        _assert_two_sided(a)

    def test_summary(self):
        roster = DummyDataGenerator().populate(Roster())
        text = roster.summary()
        assert "Students: 5 (3 Undergraduate, 2 Postgraduate)" in text
        assert "Courses: 4" in text
        assert "Enrolments: 8" in text
