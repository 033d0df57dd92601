import json
from datetime import time

import pytest

from enrollment.models import (
    CourseSection,
    CurriculumRequirement,
    EnrollmentRecord,
    EnrollmentStatus,
    MeetingTime,
    SectionStatus,
    StudentProfile,
    StudentType,
)


def _student(student_type=StudentType.REGULAR, year_level=2, program_id=1, curriculum_id=10, student_id=42):
    return StudentProfile(
        student_id=student_id,
        first_name="Ana",
        last_name="Reyes",
        student_type=student_type,
        year_level=year_level,
        program_id=program_id,
        curriculum_id=curriculum_id,
        program_name="BS Computer Science",
    )


def _req(course_id, year_level=1, semester=1, credits=3, code=None, name=None):
    return CurriculumRequirement(
        course_id=course_id,
        course_code=code or f"CS {100 + course_id}",
        course_name=name or f"Course {course_id}",
        year_level=year_level,
        semester=semester,
        credits=credits,
    )


def _section(section_id, course_id, enrolled=0, capacity=30, status=SectionStatus.ACTIVE, meetings=()):
    return CourseSection(
        section_id=section_id,
        course_id=course_id,
        section_name=f"S-{section_id}",
        capacity=capacity,
        enrolled_count=enrolled,
        status=status,
        meetings=tuple(meetings),
        instructor="Emily Thompson",
    )


def _record(enrollment_id, course_id, status=EnrollmentStatus.ENROLLED, section_id=None, overall=None, credits=None):
    return EnrollmentRecord(
        enrollment_id=enrollment_id,
        course_id=course_id,
        status=status,
        section_id=section_id,
        overall_grade=overall,
        credits=credits,
    )


@pytest.fixture
def make_student():
    return _student


@pytest.fixture
def make_req():
    return _req


@pytest.fixture
def make_section():
    return _section


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def meeting():
    def _meeting(day, start, end, room="Room 204", status="Active"):
        return MeetingTime(day=day, start_time=time(*start), end_time=time(*end), room=room, status=status)
    return _meeting


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body
        self.content = b"" if body is None else json.dumps(body).encode()

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Stands in for requests.Session: records calls, replays responses by (method, path suffix)."""

    def __init__(self, routes=None):
        self.headers = {}
        self.routes = routes or {}
        self.calls = []

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append((method, url, kwargs))
        for (route_method, suffix), outcome in self.routes.items():
            if route_method == method and url.endswith(suffix):
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        return FakeResponse(404, {"message": "no route"})


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


# Raw payloads shaped like the STASIS backend answers

@pytest.fixture
def raw_student():
    return {
        "id": 42,
        "firstName": "Ana",
        "lastName": "Reyes",
        "year_level": 2,
        "studentType": "Irregular",
        "program": {"programID": 1, "programName": "BS Computer Science"},
        "curriculum": {"curriculumID": 10, "academicYear": "2024-2025"},
    }


@pytest.fixture
def raw_curriculum():
    return {"curriculumID": 10, "curriculumName": "BSCS 2024", "curriculumCode": "BSCS-24",
            "academicYear": "2024-2025", "status": "Active"}


@pytest.fixture
def raw_details():
    return [
        {"curriculumDetailID": 1, "YearLevel": 1, "Semester": "1st Semester",
         "course": {"id": 1, "courseCode": "CS 101", "courseDescription": "Programming I", "credits": 3}},
        {"curriculumDetailID": 2, "yearLevel": 2, "semester": 1,
         "course": {"courseID": 2, "courseCode": "CS 201", "courseDescription": "Data Structures", "credits": 3}},
        {"curriculumDetailID": 3, "suggestedYearLevel": 2, "suggestedSemester": "2nd Semester",
         "course": {"id": 3, "courseCode": "CS 202", "courseDescription": "Databases", "credits": 4}},
        {"curriculumDetailID": 4, "yearLevel": 2, "semester": 1, "course": None},
    ]


@pytest.fixture
def raw_sections():
    return [
        {"sectionID": 100, "course": {"id": 1}, "sectionName": "CS101-A", "capacity": 25,
         "enrolledCount": 18, "status": "Active",
         "faculty": {"firstName": "Emily", "lastName": "Thompson"},
         "schedules": [{"day": "Monday", "startTime": "08:00:00", "endTime": "10:00:00", "room": "Room 204",
                        "status": "Active"}]},
        {"sectionID": 200, "courseId": 2, "sectionName": "CS201-B", "capacity": 20,
         "enrolledCount": 20, "status": "ACTIVE",
         "schedules": [{"day": "Tuesday", "startTime": "10:00", "endTime": "12:00", "room": "Lab 301"}]},
        {"sectionID": 300, "sectionName": "CS202-A", "capacity": 30, "enrolledCount": 2, "status": "Active",
         "schedules": [{"day": "Wednesday", "startTime": "14:00", "endTime": "16:00", "room": "Room 105",
                        "course": {"id": 3}}]},
        {"sectionID": 400, "sectionName": "orphan", "capacity": 30, "status": "Active"},
    ]


@pytest.fixture
def raw_enrollments():
    return [
        {"enrolledCourseID": 900, "status": "Completed", "section": {"sectionID": 100, "course": {"id": 1}},
         "overallGrade": 90.0, "grade": "A-", "remark": "Passed"},
        {"enrolledCourseID": 901, "status": "Enrolled", "courseCode": "CS 202", "credits": 4,
         "semester": "2nd Semester", "academicYear": "2024-2025"},
    ]
