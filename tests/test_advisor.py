import pytest

from enrollment import EnrollmentAdvisor
from enrollment.data import DataLoader
from enrollment.exceptions import (
    ApiError,
    AuthorizationError,
    BulkEnrollmentError,
    NotFoundError,
    SectionUnavailableError,
    StudentNotAssignedError,
)
from enrollment.models import EnrollmentStatus, SelectionFilter


class FakeClient:
    """Serves canned backend payloads and records commands."""

    def __init__(self, student, curriculum, details, sections, enrollments):
        self.student = student
        self.curriculum = curriculum
        self.details = details
        self.sections = sections
        self.enrollments = enrollments
        self.reads = 0
        self.created = []
        self.deleted = []
        self.fail_sections = set()
        self.enrollments_error = None

    def get_student(self, student_id):
        self.reads += 1
        return self.student

    def get_curriculum(self, curriculum_id):
        return self.curriculum

    def get_requirements(self, curriculum_id):
        return self.details

    def get_sections(self, program_id=None):
        return self.sections

    def get_enrollments(self, student_id):
        if self.enrollments_error is not None:
            raise self.enrollments_error
        return self.enrollments

    def create_enrollment(self, student_id, section_id):
        if section_id in self.fail_sections:
            raise ApiError("Internal Server Error", status_code=500)
        self.created.append((student_id, section_id))
        return {"enrolledCourseID": 1000 + section_id, "status": "Enrolled"}

    def delete_enrollment(self, enrollment_id, student_id=None):
        self.deleted.append((enrollment_id, student_id))


class SilentDisplay:
    def __getattr__(self, name):
        return lambda *args, **kwargs: None


@pytest.fixture
def client(raw_student, raw_curriculum, raw_details, raw_sections, raw_enrollments):
    return FakeClient(raw_student, raw_curriculum, raw_details, raw_sections, raw_enrollments)


@pytest.fixture
def advisor(client):
    return EnrollmentAdvisor(client=client, display=SilentDisplay())


def test_loader_builds_and_caches_snapshot(client):
    loader = DataLoader(client)

    snap = loader.load(42)
    again = loader.load(42)

    assert snap is again
    assert client.reads == 1
    assert snap.curriculum.name == "BSCS 2024"
    assert [r.course_id for r in snap.requirements] == [1, 2, 3]
    assert [s.section_id for s in snap.sections] == [100, 200, 300]
    # flat ledger row resolved through the course code
    assert [(r.course_id, r.status) for r in snap.history] == [
        (1, EnrollmentStatus.COMPLETED), (3, EnrollmentStatus.ENROLLED),
    ]

    loader.invalidate(42)
    loader.load(42)
    assert client.reads == 2


def test_loader_rejects_unassigned_student(client):
    client.student = dict(client.student, curriculum=None)

    with pytest.raises(StudentNotAssignedError):
        DataLoader(client).load(42)


def test_loader_degrades_to_empty_history(client):
    client.enrollments_error = AuthorizationError(status_code=403)

    snap = DataLoader(client).load(42)

    assert snap.history == []


def test_loader_refetches_after_history_failure(client):
    client.enrollments_error = ApiError("Service Unavailable", status_code=503)
    loader = DataLoader(client)

    assert loader.load(42).history == []

    client.enrollments_error = None
    history = loader.load(42).history

    assert [r.enrollment_id for r in history] == [900, 901]
    assert client.reads == 2
    assert loader.load(42) is loader.load(42)


def test_available_courses_for_irregular_student(advisor):
    # Completed CS 101, enrolled in CS 202: only CS 201 remains, and its one section is full
    courses = advisor.available_courses(42, SelectionFilter.create())

    assert [c.requirement.course_code for c in courses] == ["CS 201"]
    assert courses[0].is_full


def test_enroll_rejects_full_section_before_calling_backend(advisor, client):
    with pytest.raises(SectionUnavailableError):
        advisor.enroll(42, 200)
    assert client.created == []


def test_enroll_rejects_already_completed_course(advisor, client):
    with pytest.raises(SectionUnavailableError):
        advisor.enroll(42, 100)


def test_enroll_unknown_section(advisor):
    with pytest.raises(NotFoundError):
        advisor.enroll(42, 12345)


def test_enroll_success_invalidates_cache(advisor, client, raw_sections):
    client.sections = raw_sections + [
        {"sectionID": 201, "courseId": 2, "sectionName": "CS201-C", "capacity": 20, "enrolledCount": 3},
    ]

    record = advisor.enroll(42, 201)

    assert record.enrollment_id == 1201
    assert record.course_id == 2
    assert record.status == EnrollmentStatus.ENROLLED
    assert client.created == [(42, 201)]
    reads = client.reads
    advisor.available_courses(42)
    assert client.reads == reads + 1


def test_bulk_enroll_reports_partial_failure_without_rollback(advisor, client, raw_sections):
    client.sections = raw_sections + [
        {"sectionID": 201, "courseId": 2, "sectionName": "CS201-C", "capacity": 20, "enrolledCount": 3},
        {"sectionID": 500, "courseId": 5, "sectionName": "X-1", "capacity": 20, "enrolledCount": 0},
    ]
    client.fail_sections = {500}

    with pytest.raises(BulkEnrollmentError) as exc_info:
        advisor.bulk_enroll(42, {2: 201, 5: 500, 9: 999})

    error = exc_info.value
    assert [r.section_id for r in error.succeeded] == [201]
    assert sorted(section_id for _, section_id, _ in error.failed) == [500, 999]
    assert client.created == [(42, 201)]


def test_bulk_enroll_one_section_per_course(advisor, client, raw_sections):
    client.sections = raw_sections + [
        {"sectionID": 201, "courseId": 2, "sectionName": "CS201-C", "capacity": 20, "enrolledCount": 3},
        {"sectionID": 202, "courseId": 2, "sectionName": "CS201-D", "capacity": 20, "enrolledCount": 0},
    ]

    with pytest.raises(BulkEnrollmentError) as exc_info:
        advisor.bulk_enroll(42, {2: 201, 99: 202})

    assert client.created == [(42, 201)]
    assert [(course_id, section_id) for course_id, section_id, _ in exc_info.value.failed] == [(99, 202)]
    assert isinstance(exc_info.value.failed[0][2], SectionUnavailableError)


def test_bulk_enroll_all_succeed(advisor, client, raw_sections):
    client.sections = raw_sections + [
        {"sectionID": 201, "courseId": 2, "sectionName": "CS201-C", "capacity": 20, "enrolledCount": 3},
    ]

    records = advisor.bulk_enroll(42, {2: 201})

    assert [r.enrollment_id for r in records] == [1201]
    assert advisor.bulk_enroll(42, {}) == []


def test_drop_only_own_active_enrollment(advisor, client):
    with pytest.raises(NotFoundError):
        advisor.drop(42, 900)  # completed, not active

    advisor.drop(42, 901)
    assert client.deleted == [(901, 42)]


def test_views_return_results(advisor):
    assert advisor.run_grades_view(42).gpa == 3.6
    assert advisor.run_enrollments_view(42).total_credits == 4
    assert advisor.run_curriculum_view(42)["progress"]["completed"] == [1]
    assert advisor.run_schedule_view(42) == []
    assert [c.course_id for c in advisor.run_enrollment_view(42)] == [2]
