"""
Enrollment Advisor - Main Orchestrator.

This module contains the EnrollmentAdvisor class that connects the data
layer, the engines and the presentation layer.

NOTE: Don't run this file directly. Run from the project root:
    python -m enrollment
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from .config import ALL_DAYS
from .data import DataLoader, StasisClient
from .engines import CreditCalculator, CurriculumEngine, EligibilityEngine, ScheduleEngine
from .exceptions import (
    BulkEnrollmentError,
    EnrollmentError,
    NotFoundError,
    SectionUnavailableError,
)
from .models import EnrollmentRecord, EnrollmentStatus, SelectionFilter
from .ui import TerminalDisplay


logger = logging.getLogger(__name__)


class EnrollmentAdvisor:
    """
    Main interface for the student enrollment system.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    1. Loads the student's snapshot through the DataLoader (cached)
    2. Calls the engines to get pure results (dataclasses)
    3. Issues enroll/drop commands and invalidates the cache afterwards
    4. Passes results to the display for the run_* methods

    The query methods (available_courses, grade_report, ...) never print,
    so a web or API front end can call them directly.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        advisor = EnrollmentAdvisor()

        courses = advisor.available_courses(42, SelectionFilter.create(semester=1))
        record = advisor.enroll(42, section_id=7)
        advisor.drop(42, record.enrollment_id)
    """

    def __init__(self, client: StasisClient = None, loader: DataLoader = None, display=None):
        self.client = client or StasisClient()
        self.loader = loader or DataLoader(self.client)
        self.eligibility_engine = EligibilityEngine()
        self.credit_calculator = CreditCalculator()
        self.schedule_engine = ScheduleEngine()
        self.curriculum_engine = CurriculumEngine()
        self.display = display or TerminalDisplay()

    # =========================================================================
    # QUERIES
    # =========================================================================

    def available_courses(self, student_id: int, selection: SelectionFilter = None) -> list:
        """Courses the student can enroll in, with matching sections."""
        snap = self.loader.load(student_id)
        return self.eligibility_engine.evaluate(
            snap.student, snap.requirements, snap.history, snap.sections, selection
        )

    def unoffered_courses(self, student_id: int, selection: SelectionFilter = None) -> list:
        """Courses the student could take but that have no active section."""
        snap = self.loader.load(student_id)
        return self.eligibility_engine.unoffered_courses(
            snap.student, snap.requirements, snap.history, snap.sections, selection
        )

    def my_enrollments(self, student_id: int) -> list:
        snap = self.loader.load(student_id)
        return [r for r in snap.history if r.is_active]

    def credit_summary(self, student_id: int):
        """Credits the student currently carries."""
        snap = self.loader.load(student_id)
        return self.credit_calculator.summarize(self.my_enrollments(student_id), snap.requirements)

    def grade_report(self, student_id: int):
        snap = self.loader.load(student_id)
        return self.credit_calculator.grade_report(snap.history, snap.requirements)

    def schedule(self, student_id: int, day: str = ALL_DAYS, search_text: str = "") -> list:
        snap = self.loader.load(student_id)
        entries = self.schedule_engine.build(snap.history, snap.sections, snap.requirements)
        return self.schedule_engine.filter(entries, day, search_text)

    def curriculum(self, student_id: int) -> dict:
        """
        Curriculum laid out by term, with progress.

        Returns:
            {"terms": [CurriculumTerm], "total_credits": float, "progress": {...}}
        """
        snap = self.loader.load(student_id)
        return {
            "terms": self.curriculum_engine.group_by_term(snap.requirements),
            "total_credits": self.curriculum_engine.total_credits(snap.requirements),
            "progress": self.curriculum_engine.progress(snap.requirements, snap.history),
        }

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def enroll(self, student_id: int, section_id: int) -> EnrollmentRecord:
        """
        Enroll the student in one section.

        The section is checked against the cached catalog first, so a full
        or inactive section never reaches the backend.

        Raises:
            NotFoundError: section not in the catalog
            SectionUnavailableError: section full/inactive, or course already
                                     completed or in progress
            ApiError: the backend refused the request
        """
        snap = self.loader.load(student_id)
        section = self._checked_section(snap, section_id)

        raw = self.client.create_enrollment(student_id, section.section_id)
        self.loader.invalidate(student_id)
        logger.info("Student %s enrolled in section %s", student_id, section_id)
        return self._record_from_response(raw, section)

    def bulk_enroll(self, student_id: int, selections: dict) -> list:
        """
        Enroll in several courses at once.

        Args:
            selections: course_id -> section_id

        Every request is independent. Nothing is rolled back or retried: if
        some fail, BulkEnrollmentError carries what succeeded and what
        failed.

        Returns:
            List of created EnrollmentRecords (when all succeeded)
        """
        if not selections:
            return []

        snap = self.loader.load(student_id)
        succeeded, failed, to_send = [], [], []
        chosen_courses = set()
        for course_id, section_id in selections.items():
            try:
                section = self._checked_section(snap, section_id)
                if section.course_id != course_id:
                    raise SectionUnavailableError(section, f"section does not belong to course {course_id}")
                if section.course_id in chosen_courses:
                    raise SectionUnavailableError(section, "another section of this course is already selected")
            except EnrollmentError as e:
                failed.append((course_id, section_id, e))
                continue
            chosen_courses.add(section.course_id)
            to_send.append((course_id, section))

        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [
                (course_id, section, pool.submit(self.client.create_enrollment, student_id, section.section_id))
                for course_id, section in to_send
            ]
            for course_id, section, future in futures:
                try:
                    succeeded.append(self._record_from_response(future.result(), section))
                except EnrollmentError as e:
                    failed.append((course_id, section.section_id, e))

        self.loader.invalidate(student_id)
        logger.info("Bulk enrollment for student %s: %d ok, %d failed", student_id, len(succeeded), len(failed))
        if failed:
            raise BulkEnrollmentError(succeeded, failed)
        return succeeded

    def drop(self, student_id: int, enrollment_id: int):
        """
        Drop one of the student's current enrollments.

        Raises:
            NotFoundError: the student holds no active enrollment with this id
            ApiError: the backend refused the request
        """
        active_ids = {r.enrollment_id for r in self.my_enrollments(student_id)}
        if enrollment_id not in active_ids:
            raise NotFoundError(f"You are not enrolled under enrollment {enrollment_id}.", status_code=404)

        self.client.delete_enrollment(enrollment_id, student_id)
        self.loader.invalidate(student_id)
        logger.info("Student %s dropped enrollment %s", student_id, enrollment_id)

    def _checked_section(self, snap, section_id: int):
        section = next((s for s in snap.sections if s.section_id == section_id), None)
        if section is None:
            raise NotFoundError(f"Section {section_id} is not offered.", status_code=404)
        if not section.is_active:
            raise SectionUnavailableError(section, "section is not active")
        if section.is_full:
            raise SectionUnavailableError(section, "section is full")
        if section.course_id in self.eligibility_engine.excluded_course_ids(snap.history):
            raise SectionUnavailableError(section, "course already completed or in progress")
        return section

    @staticmethod
    def _record_from_response(raw, section) -> EnrollmentRecord:
        """Build the new record from the create response, filling gaps from the section."""
        raw = raw or {}
        enrollment_id = raw.get("enrolledCourseID") or raw.get("id")
        return EnrollmentRecord(
            enrollment_id=int(enrollment_id) if enrollment_id is not None else 0,
            course_id=section.course_id,
            status=EnrollmentStatus.ENROLLED,
            section_id=section.section_id,
        )

    # =========================================================================
    # VIEWS (terminal)
    # =========================================================================

    def run_enrollment_view(self, student_id: int, selection: SelectionFilter = None):
        """Show student info and the available courses."""
        snap = self.loader.load(student_id)
        self.display.print_student_info(snap.student, snap.curriculum)
        courses = self.available_courses(student_id, selection)
        unoffered = self.unoffered_courses(student_id, selection)
        self.display.print_available_courses(courses, unoffered)
        return courses

    def run_enrollments_view(self, student_id: int):
        snap = self.loader.load(student_id)
        summary = self.credit_summary(student_id)
        self.display.print_enrollments(self.my_enrollments(student_id), snap.requirements, summary.total_credits)
        return summary

    def run_grades_view(self, student_id: int):
        snap = self.loader.load(student_id)
        report = self.grade_report(student_id)
        self.display.print_grade_report(report, snap.history, snap.requirements)
        return report

    def run_schedule_view(self, student_id: int, day: str = ALL_DAYS, search_text: str = ""):
        entries = self.schedule(student_id, day, search_text)
        self.display.print_schedule(entries, self.schedule_engine.stats(entries))
        return entries

    def run_curriculum_view(self, student_id: int):
        result = self.curriculum(student_id)
        self.display.print_curriculum(result["terms"], result["total_credits"], result["progress"])
        return result
