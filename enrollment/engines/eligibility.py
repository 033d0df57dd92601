"""
Enrollment Eligibility Engine.

This module decides which curriculum courses a student may still enroll in
and which open sections satisfy each of them.
"""

import logging

from ..models import (
    ALL_SEMESTERS,
    CURRENT_YEAR_LEVEL,
    EligibleCourse,
    EnrollmentStatus,
    SelectionFilter,
    StudentProfile,
    StudentType,
)


logger = logging.getLogger(__name__)

# Records in these states block the course from being offered again
BLOCKING_STATUSES = (EnrollmentStatus.COMPLETED, EnrollmentStatus.ENROLLED)


class EligibilityEngine:
    """
    Matches a student's curriculum against the open section catalog.

    ELIGIBILITY RULES:
    ------------------
    A curriculum requirement is eligible when ALL of these hold:

    1. The student has no Completed and no Enrolled record for the course.
       Dropped records do not count, so a dropped course is offered again.
    2. Its year level fits the student:
         Regular   -> year_level == student.year_level
         Irregular -> year_level <= student.year_level   (filter "current")
                      year_level == filter.year_level    (specific year)
    3. Its semester matches the filter ("all" matches every semester).
    4. At least one Active section of the course exists.
    5. The search text (if any) appears in the course code or name.

    SECTION FULLNESS:
    -----------------
    Full sections are still returned. CourseSection.is_full marks them so
    the UI can show "Full" and disable the enroll button.

    PURITY:
    -------
    The engine keeps no state between calls and performs no I/O, so one
    instance can be shared freely. It never raises: missing data yields an
    empty result.
    """

    def evaluate(self, student: StudentProfile, requirements: list, history: list,
                 sections: list, selection: SelectionFilter = None) -> list:
        """
        Compute the enrollable courses for a student.

        Args:
            student: The student's profile
            requirements: CurriculumRequirement rows of the student's curriculum,
                          in curriculum declaration order
            history: The student's EnrollmentRecord objects
            sections: CourseSection catalog
            selection: SelectionFilter from the page (defaults to everything)

        Returns:
            List of EligibleCourse in curriculum order, one per course
        """
        if selection is None:
            selection = SelectionFilter()

        if not student.is_assigned:
            logger.debug("Student %s has no program/curriculum; nothing is eligible", student.student_id)
            return []
        if not requirements or not sections:
            return []

        sections_by_course = self._active_sections_by_course(sections)

        eligible = []
        for requirement in self._candidates(student, requirements, history, selection):
            offered = sections_by_course.get(requirement.course_id)
            if not offered:
                # No section offered this term, so the course cannot be enrolled in
                continue
            eligible.append(EligibleCourse(requirement=requirement, sections=tuple(offered)))

        logger.debug(
            "Eligibility for student %s: %d of %d requirements enrollable",
            student.student_id, len(eligible), len(requirements),
        )
        return eligible

    def unoffered_courses(self, student: StudentProfile, requirements: list, history: list,
                          sections: list, selection: SelectionFilter = None) -> list:
        """
        Requirements the student could take but that have no active section.

        These never appear in evaluate(). This lets a page show a separate
        "no sections offered" list without mixing it into the enrollable one.

        Returns:
            List of CurriculumRequirement in curriculum order
        """
        if selection is None:
            selection = SelectionFilter()
        if not student.is_assigned or not requirements:
            return []

        sections_by_course = self._active_sections_by_course(sections or [])
        return [
            req for req in self._candidates(student, requirements, history, selection)
            if req.course_id not in sections_by_course
        ]

    @staticmethod
    def year_level_options(student: StudentProfile) -> list:
        """
        Year-level choices for the irregular student's selector.

        Returns:
            [("current", "Up to Year N"), (1, "Year 1"), ..., (N, "Year N")]
        """
        options = [(CURRENT_YEAR_LEVEL, f"Up to Year {student.year_level}")]
        for level in range(1, student.year_level + 1):
            options.append((level, f"Year {level}"))
        return options

    def _candidates(self, student: StudentProfile, requirements: list, history: list,
                    selection: SelectionFilter):
        """Yield requirements passing rules 1, 2, 3 and 5, first row per course."""
        excluded = self.excluded_course_ids(history or [])
        seen = set()

        for req in requirements:
            if req.course_id in seen:
                continue
            if req.course_id in excluded:
                continue
            if not self._year_level_matches(student, req.year_level, selection.year_level):
                continue
            if selection.semester != ALL_SEMESTERS and req.semester != selection.semester:
                continue
            if not self._matches_search(req, selection.search_text):
                continue
            seen.add(req.course_id)
            yield req

    @staticmethod
    def excluded_course_ids(history: list) -> set:
        """Course ids the student has completed or is currently enrolled in."""
        return {r.course_id for r in history if r.status in BLOCKING_STATUSES}

    @staticmethod
    def _year_level_matches(student: StudentProfile, year_level: int, selected) -> bool:
        if student.student_type == StudentType.REGULAR:
            return year_level == student.year_level
        if selected == CURRENT_YEAR_LEVEL:
            return year_level <= student.year_level
        return year_level == selected

    @staticmethod
    def _active_sections_by_course(sections: list) -> dict:
        """Group active sections by course id, keeping catalog order."""
        grouped = {}
        for section in sections:
            if section.is_active:
                grouped.setdefault(section.course_id, []).append(section)
        return grouped

    @staticmethod
    def _matches_search(requirement, search_text: str) -> bool:
        needle = (search_text or "").strip().lower()
        if not needle:
            return True
        return (
            needle in (requirement.course_code or "").lower()
            or needle in (requirement.course_name or "").lower()
        )
