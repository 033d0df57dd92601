"""
Record normalization.

This module converts raw API responses into the canonical dataclasses the
engines work with.
"""

import logging
from datetime import time

from ..config import DEFAULT_SECTION_CAPACITY
from ..models import (
    CourseSection,
    CurriculumMeta,
    CurriculumRequirement,
    EnrollmentRecord,
    EnrollmentStatus,
    MeetingTime,
    SectionStatus,
    StudentProfile,
    StudentType,
    parse_semester,
)


logger = logging.getLogger(__name__)


def _first(raw: dict, *keys, default=None):
    """Value of the first key present with a non-None value."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return default


def _as_int(value, default=None):
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return default


def _as_float(value, default=None):
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_time(value):
    """Read "HH:MM" or "HH:MM:SS" into datetime.time, None if unreadable."""
    if not value:
        return None
    if isinstance(value, time):
        return value
    try:
        parts = [int(p) for p in str(value).split(":")]
        return time(*parts[:3])
    except (TypeError, ValueError):
        return None


class RecordNormalizer:
    """
    Turns raw backend JSON into canonical records.

    WHY THIS EXISTS:
    The backend answers with several shapes for the same thing. A course id
    may arrive as course.id, course.courseID, courseId or course_id, and
    newer section payloads only link the course through their schedules.
    Curriculum rows spell year level and semester three different ways.
    All of that is resolved here, once, so the engines see one shape.

    DATA-SHAPE GAPS:
    A record that cannot be linked to a course (a section without a course,
    a curriculum row without a course) is skipped with a warning. It is
    never fatal: the rest of the list is still returned.
    """

    # -------------------------------------------------------------------------
    # Course links
    # -------------------------------------------------------------------------

    @staticmethod
    def course_id_of(raw: dict):
        """Find the course id a raw record refers to, or None."""
        course = raw.get("course")
        if isinstance(course, dict):
            course_id = _as_int(_first(course, "id", "courseID", "courseId"))
            if course_id is not None:
                return course_id

        course_id = _as_int(_first(raw, "courseId", "course_id", "courseID"))
        if course_id is not None:
            return course_id

        # Newer section shape: the course hangs off a schedule entry
        for schedule in RecordNormalizer._schedules_of(raw):
            if isinstance(schedule, dict) and isinstance(schedule.get("course"), dict):
                course_id = _as_int(_first(schedule["course"], "id", "courseID", "courseId"))
                if course_id is not None:
                    return course_id
        return None

    # -------------------------------------------------------------------------
    # Student Directory
    # -------------------------------------------------------------------------

    def student(self, raw: dict, student_id=None) -> StudentProfile:
        """
        Normalize a student record.

        student_type defaults to Regular when the directory does not say.
        """
        program = raw.get("program") if isinstance(raw.get("program"), dict) else {}
        curriculum = raw.get("curriculum") if isinstance(raw.get("curriculum"), dict) else {}

        type_text = str(_first(raw, "studentType", "student_type", "type", default="")).strip().lower()
        student_type = StudentType.IRREGULAR if type_text == "irregular" else StudentType.REGULAR

        year_level = _as_int(_first(raw, "year_level", "yearLevel", "YearLevel"))
        if year_level is None or year_level < 1:
            logger.warning("Student %s has no valid year level; assuming 1", _first(raw, "id", default=student_id))
            year_level = 1

        return StudentProfile(
            student_id=_as_int(_first(raw, "id", "studentID", "studentId"), student_id),
            first_name=raw.get("firstName") or "",
            last_name=raw.get("lastName") or "",
            student_type=student_type,
            year_level=year_level,
            program_id=_as_int(_first(program, "programID", "id", "programId",
                                      default=_first(raw, "programId", "program_id"))),
            curriculum_id=_as_int(_first(curriculum, "curriculumID", "id", "curriculumId",
                                         default=_first(raw, "curriculumId", "curriculum_id"))),
            program_name=program.get("programName") or "",
        )

    # -------------------------------------------------------------------------
    # Curriculum Catalog
    # -------------------------------------------------------------------------

    def curriculum(self, raw: dict) -> CurriculumMeta:
        program = raw.get("program") if isinstance(raw.get("program"), dict) else {}
        return CurriculumMeta(
            curriculum_id=_as_int(_first(raw, "curriculumID", "id", "curriculumId")),
            name=raw.get("curriculumName") or raw.get("name") or "",
            code=raw.get("curriculumCode") or "",
            academic_year=str(raw.get("academicYear") or ""),
            status=raw.get("status") or "",
            program_name=program.get("programName") or "",
        )

    def requirements(self, raw_list: list) -> list:
        """Normalize curriculum detail rows, keeping declaration order."""
        result = []
        for raw in raw_list or []:
            requirement = self._requirement(raw)
            if requirement is not None:
                result.append(requirement)
        return result

    def _requirement(self, raw: dict):
        course = raw.get("course")
        if not isinstance(course, dict):
            logger.warning("Curriculum detail %s has no course; skipped", raw.get("curriculumDetailID"))
            return None

        course_id = self.course_id_of(raw)
        year_level = _as_int(_first(raw, "yearLevel", "YearLevel", "suggestedYearLevel", "year_level"))
        semester = parse_semester(_first(raw, "semester", "Semester", "suggestedSemester"))
        if course_id is None or year_level is None or semester is None:
            logger.warning(
                "Curriculum detail %s is incomplete (course=%s, year=%s, semester=%s); skipped",
                raw.get("curriculumDetailID"), course_id, year_level, semester,
            )
            return None

        return CurriculumRequirement(
            course_id=course_id,
            course_code=course.get("courseCode") or "",
            course_name=course.get("courseDescription") or course.get("courseName") or "",
            year_level=year_level,
            semester=semester,
            credits=max(_as_float(course.get("credits"), 0.0), 0.0),
            curriculum_detail_id=_as_int(raw.get("curriculumDetailID")),
        )

    # -------------------------------------------------------------------------
    # Section Catalog
    # -------------------------------------------------------------------------

    def sections(self, raw_list: list) -> list:
        result = []
        for raw in raw_list or []:
            section = self._section(raw)
            if section is not None:
                result.append(section)
        return result

    def _section(self, raw: dict):
        section_id = _as_int(_first(raw, "sectionID", "sectionId", "id"))
        course_id = self.course_id_of(raw)
        if section_id is None or course_id is None:
            logger.warning("Section %s is not linked to a course; skipped", section_id)
            return None

        capacity = _as_int(_first(raw, "capacity", "maxCapacity", "slots"))
        if capacity is None or capacity < 1:
            capacity = DEFAULT_SECTION_CAPACITY
        enrolled = _as_int(_first(raw, "enrolledCount", "currentEnrollment", "enrolled"), 0)
        enrolled = min(max(enrolled, 0), capacity)

        schedules = [s for s in self._schedules_of(raw) if isinstance(s, dict)]

        # The catalog only lists published sections, so a missing status means Active.
        # An Active first schedule also makes the section active.
        status_text = str(raw.get("status") or SectionStatus.ACTIVE.value).strip().lower()
        schedule_text = str(schedules[0].get("status") or "").strip().lower() if schedules else ""
        if "active" in (status_text, schedule_text):
            status = SectionStatus.ACTIVE
        else:
            status = SectionStatus.INACTIVE

        meetings = tuple(
            MeetingTime(
                day=s.get("day") or "TBA",
                start_time=_parse_time(s.get("startTime")),
                end_time=_parse_time(s.get("endTime")),
                room=s.get("room") or "TBA",
                status=s.get("status") or "Active",
            )
            for s in schedules
        )

        return CourseSection(
            section_id=section_id,
            course_id=course_id,
            section_name=raw.get("sectionName") or "",
            capacity=capacity,
            enrolled_count=enrolled,
            status=status,
            meetings=meetings,
            instructor=self._instructor(raw),
        )

    @staticmethod
    def _schedules_of(raw: dict) -> list:
        """Meeting entries, from a "schedules" list or a single "schedule" object."""
        if raw.get("schedules"):
            return list(raw["schedules"])
        if isinstance(raw.get("schedule"), dict):
            return [raw["schedule"]]
        return []

    @staticmethod
    def _instructor(raw: dict) -> str:
        faculty = raw.get("faculty")
        if isinstance(faculty, dict):
            return f"{faculty.get('firstName') or ''} {faculty.get('lastName') or ''}".strip()
        if isinstance(faculty, str):
            return faculty
        return raw.get("instructor") or ""

    # -------------------------------------------------------------------------
    # Enrollment Ledger
    # -------------------------------------------------------------------------

    def enrollments(self, raw_list: list, course_index: dict = None) -> list:
        """
        Normalize ledger records.

        Args:
            raw_list: Raw ledger records (nested or flat DTO shape)
            course_index: course_code -> course_id, used for flat records
                          that only carry a course code
        """
        result = []
        for raw in raw_list or []:
            record = self._enrollment(raw, course_index or {})
            if record is not None:
                result.append(record)
        return result

    def _enrollment(self, raw: dict, course_index: dict):
        enrollment_id = _as_int(_first(raw, "enrolledCourseID", "enrollmentId", "id"))

        status_text = str(raw.get("status") or "").strip().lower()
        status = next((s for s in EnrollmentStatus if s.value.lower() == status_text), None)
        if status is None:
            logger.warning("Enrollment %s has unknown status %r; skipped", enrollment_id, raw.get("status"))
            return None

        section = raw.get("section") if isinstance(raw.get("section"), dict) else {}
        course_id = self.course_id_of(section) if section else None
        if course_id is None:
            course_id = self.course_id_of(raw)
        course_code = raw.get("courseCode") or ""
        if course_id is None and course_code:
            course_id = course_index.get(course_code)
        if enrollment_id is None or course_id is None:
            logger.warning("Enrollment %s is not linked to a course; skipped", enrollment_id)
            return None

        grade = raw.get("grade")
        if isinstance(grade, dict):
            grade = grade.get("letterGrade") or grade.get("remark")
        term = " ".join(str(p) for p in (raw.get("semester"), raw.get("academicYear")) if p)

        return EnrollmentRecord(
            enrollment_id=enrollment_id,
            course_id=course_id,
            status=status,
            grade=grade or None,
            section_id=_as_int(_first(section, "sectionID", "sectionId", "id",
                                      default=_first(raw, "sectionId", "courseSectionId"))),
            midterm_grade=_as_float(raw.get("midtermGrade")),
            final_grade=_as_float(raw.get("finalGrade")),
            overall_grade=_as_float(raw.get("overallGrade")),
            remark=raw.get("remark") or "",
            term=term,
            course_code=course_code,
            credits=_as_float(raw.get("credits")),
        )
