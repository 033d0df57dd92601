import itertools

import pytest

from enrollment.engines import EligibilityEngine
from enrollment.models import EnrollmentStatus, SectionStatus, SelectionFilter, StudentType


@pytest.fixture
def engine():
    return EligibilityEngine()


def test_regular_student_sees_own_year_level_with_full_section(engine, make_student, make_req, make_section):
    student = make_student(StudentType.REGULAR, year_level=2)
    reqs = [make_req(1, year_level=2, semester=1), make_req(2, year_level=3, semester=1)]
    sections = [make_section(10, 1, enrolled=5, capacity=5)]

    result = engine.evaluate(student, reqs, [], sections, SelectionFilter())

    assert [c.course_id for c in result] == [1]
    assert [s.section_id for s in result[0].sections] == [10]
    assert result[0].sections[0].is_full
    assert result[0].is_full


def test_section_with_free_seat_is_not_full(engine, make_student, make_req, make_section):
    student = make_student(StudentType.REGULAR, year_level=2)
    reqs = [make_req(1, year_level=2), make_req(2, year_level=3)]
    sections = [make_section(10, 1, enrolled=4, capacity=5)]

    result = engine.evaluate(student, reqs, [], sections)

    assert not result[0].sections[0].is_full
    assert result[0].open_sections == [sections[0]]


def test_completed_course_is_not_offered(engine, make_student, make_req, make_section, make_record):
    student = make_student(StudentType.REGULAR, year_level=2)
    reqs = [make_req(1, year_level=2), make_req(2, year_level=3)]
    sections = [make_section(10, 1)]
    history = [make_record(1, 1, EnrollmentStatus.COMPLETED)]

    assert engine.evaluate(student, reqs, history, sections) == []


def test_enrolled_course_is_not_offered_but_dropped_is(engine, make_student, make_req, make_section, make_record):
    student = make_student(StudentType.REGULAR, year_level=1)
    reqs = [make_req(1), make_req(2)]
    sections = [make_section(10, 1), make_section(20, 2)]
    history = [make_record(1, 1, EnrollmentStatus.ENROLLED), make_record(2, 2, EnrollmentStatus.DROPPED)]

    result = engine.evaluate(student, reqs, history, sections)

    assert [c.course_id for c in result] == [2]


def test_regular_student_ignores_year_level_selection(engine, make_student, make_req, make_section):
    student = make_student(StudentType.REGULAR, year_level=2)
    reqs = [make_req(1, year_level=1), make_req(2, year_level=2)]
    sections = [make_section(10, 1), make_section(20, 2)]

    result = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(year_level=1))

    assert [c.course_id for c in result] == [2]


def test_irregular_current_includes_prior_years(engine, make_student, make_req, make_section):
    student = make_student(StudentType.IRREGULAR, year_level=2)
    reqs = [make_req(1, year_level=1), make_req(2, year_level=2), make_req(3, year_level=3)]
    sections = [make_section(10, 1), make_section(20, 2), make_section(30, 3)]

    result = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(year_level="current"))

    assert [c.course_id for c in result] == [1, 2]
    assert all(c.requirement.year_level <= 2 for c in result)


def test_irregular_specific_year_is_exact(engine, make_student, make_req, make_section):
    student = make_student(StudentType.IRREGULAR, year_level=3)
    reqs = [make_req(1, year_level=1), make_req(2, year_level=2), make_req(3, year_level=3)]
    sections = [make_section(10, 1), make_section(20, 2), make_section(30, 3)]

    result = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(year_level="2"))

    assert [c.course_id for c in result] == [2]


def test_semester_filter_and_all_is_superset(engine, make_student, make_req, make_section):
    student = make_student(StudentType.IRREGULAR, year_level=2)
    reqs = [make_req(1, semester=1), make_req(2, semester=2), make_req(3, semester=3), make_req(4, year_level=2, semester=1)]
    sections = [make_section(i * 10, i) for i in range(1, 5)]

    everything = {c.course_id for c in engine.evaluate(student, reqs, [], sections, SelectionFilter.create())}
    for semester in (1, 2, 3):
        subset = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(semester=semester))
        assert all(c.requirement.semester == semester for c in subset)
        assert {c.course_id for c in subset} <= everything

    summer = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(semester="Summer"))
    assert [c.course_id for c in summer] == [3]


def test_inactive_sections_are_not_matched_and_course_without_active_section_is_hidden(
        engine, make_student, make_req, make_section):
    student = make_student(StudentType.REGULAR, year_level=1)
    reqs = [make_req(1), make_req(2)]
    sections = [
        make_section(10, 1, status=SectionStatus.INACTIVE),
        make_section(11, 1),
        make_section(20, 2, status=SectionStatus.INACTIVE),
    ]

    result = engine.evaluate(student, reqs, [], sections)

    assert [c.course_id for c in result] == [1]
    assert [s.section_id for s in result[0].sections] == [11]
    assert [r.course_id for r in engine.unoffered_courses(student, reqs, [], sections)] == [2]


def test_search_matches_code_or_name_case_insensitively(engine, make_student, make_req, make_section):
    student = make_student(StudentType.REGULAR, year_level=1)
    reqs = [
        make_req(1, code="CS 101", name="Computer Programming I"),
        make_req(2, code="IT 201", name="Database Management"),
    ]
    sections = [make_section(10, 1), make_section(20, 2)]

    by_code = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(search_text="cs 1"))
    by_name = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(search_text="DATABASE"))
    blank = engine.evaluate(student, reqs, [], sections, SelectionFilter.create(search_text="   "))

    assert [c.course_id for c in by_code] == [1]
    assert [c.course_id for c in by_name] == [2]
    assert [c.course_id for c in blank] == [1, 2]


def test_duplicate_requirement_rows_yield_one_course_in_curriculum_order(
        engine, make_student, make_req, make_section):
    student = make_student(StudentType.IRREGULAR, year_level=2)
    reqs = [make_req(3, semester=1), make_req(1), make_req(3, semester=2), make_req(2)]
    sections = [make_section(10, 1), make_section(20, 2), make_section(30, 3), make_section(31, 3)]

    result = engine.evaluate(student, reqs, [], sections)

    ids = [c.course_id for c in result]
    assert ids == [3, 1, 2]
    assert len(ids) == len(set(ids))
    assert [s.section_id for s in result[0].sections] == [30, 31]


def test_no_duplicates_and_no_blocked_courses_across_inputs(
        engine, make_student, make_req, make_section, make_record):
    reqs = [make_req(i % 4, year_level=1 + i % 3, semester=1 + i % 2) for i in range(12)]
    sections = [make_section(100 + i, i % 4, enrolled=i, capacity=5) for i in range(8)]
    statuses = [EnrollmentStatus.COMPLETED, EnrollmentStatus.ENROLLED, EnrollmentStatus.DROPPED]

    for student_type, status in itertools.product(StudentType, statuses):
        student = make_student(student_type, year_level=3)
        history = [make_record(1, 0, status), make_record(2, 2, EnrollmentStatus.COMPLETED)]
        result = engine.evaluate(student, reqs, history, sections)
        ids = [c.course_id for c in result]
        assert len(ids) == len(set(ids))
        assert 2 not in ids
        if status != EnrollmentStatus.DROPPED:
            assert 0 not in ids


@pytest.mark.parametrize("assignment", [
    {"program_id": None},
    {"curriculum_id": None},
])
def test_unassigned_student_gets_nothing(engine, make_student, make_req, make_section, assignment):
    student = make_student(**assignment)
    assert engine.evaluate(student, [make_req(1, year_level=2)], [], [make_section(10, 1)]) == []
    assert engine.unoffered_courses(student, [make_req(1, year_level=2)], [], []) == []


def test_empty_inputs_give_empty_result(engine, make_student, make_req, make_section):
    student = make_student()
    assert engine.evaluate(student, [], [], [make_section(10, 1)]) == []
    assert engine.evaluate(student, [make_req(1, year_level=2)], [], []) == []


def test_year_level_options(make_student):
    options = EligibilityEngine.year_level_options(make_student(StudentType.IRREGULAR, year_level=3))
    assert options == [("current", "Up to Year 3"), (1, "Year 1"), (2, "Year 2"), (3, "Year 3")]


def test_selection_filter_create_canonicalizes_loose_values():
    assert SelectionFilter.create() == SelectionFilter("current", "all", "")
    assert SelectionFilter.create("Current", "ALL", None) == SelectionFilter("current", "all", "")
    assert SelectionFilter.create("2", "2nd Semester", " db ") == SelectionFilter(2, 2, "db")
    assert SelectionFilter.create("abc", "whenever").year_level == "current"
    assert SelectionFilter.create(0, "whenever").semester == "all"


def test_selection_filter_constructor_canonicalizes(engine, make_student, make_req, make_section):
    assert SelectionFilter(year_level="2", semester="1st Semester") == SelectionFilter(2, 1, "")
    assert SelectionFilter(year_level="Current", semester="ALL", search_text=None) == SelectionFilter()
    assert SelectionFilter(year_level=0).year_level == "current"

    student = make_student(StudentType.IRREGULAR, year_level=2)
    reqs = [make_req(1, year_level=1), make_req(2, year_level=2)]
    sections = [make_section(10, 1), make_section(20, 2)]

    result = engine.evaluate(student, reqs, [], sections, SelectionFilter(year_level="2"))

    assert [c.course_id for c in result] == [2]
