"""
Credit and GPA aggregation.

This module totals credits for a set of enrollment records and computes
the GPA and load status shown on the grades page.
"""

import logging
import math

from ..config import FULL_LOAD_UNITS, GPA_SCALE, GRADE_SCALE
from ..models import CreditSummary, EnrollmentStatus, GradeReport, StudentType


logger = logging.getLogger(__name__)


class CreditCalculator:
    """
    Aggregates credits and grades over enrollment records.

    CREDIT LOOKUP:
    --------------
    A record's credits come from the curriculum requirement for the same
    course. Records whose course has no requirement add 0 to the total.
    That skip may under-count, so summarize() reports those course ids.

    ORDER INDEPENDENCE:
    -------------------
    Sums use math.fsum, which is exactly rounded. The total is therefore
    identical for any ordering of the same records.
    """

    @staticmethod
    def credit_index(requirements: list) -> dict:
        """course_id -> credits, first requirement row wins."""
        index = {}
        for req in requirements:
            index.setdefault(req.course_id, max(req.credits, 0))
        return index

    def total_credits(self, records: list, requirements: list) -> float:
        """Sum of requirement credits for each record's course."""
        return self.summarize(records, requirements).total_credits

    def summarize(self, records: list, requirements: list) -> CreditSummary:
        """
        Total credits and show which records were counted.

        Returns:
            CreditSummary with the total, counted course ids and the
            course ids that matched no requirement
        """
        index = self.credit_index(requirements)
        amounts = []
        counted = []
        unmatched = []

        for record in records:
            credits = index.get(record.course_id)
            if credits is None:
                logger.debug("Course %s has no curriculum requirement; adds 0 credits", record.course_id)
                unmatched.append(record.course_id)
                continue
            amounts.append(credits)
            counted.append(record.course_id)

        return CreditSummary(
            total_credits=math.fsum(amounts),
            counted_course_ids=counted,
            unmatched_course_ids=unmatched,
        )

    def grade_report(self, records: list, requirements: list) -> GradeReport:
        """
        Compute the figures on the grades page.

        GPA = sum(overall_grade * credits) / sum(credits) / 100 * 4
        over completed records that carry a numeric overall grade.

        Returns:
            GradeReport
        """
        index = self.credit_index(requirements)

        def credits_for(record):
            if record.course_id in index:
                return index[record.course_id]
            # Flat ledger responses carry credits of their own
            return max(record.credits or 0, 0)

        completed = [r for r in records if r.status == EnrollmentStatus.COMPLETED]
        ongoing = [r for r in records if r.status == EnrollmentStatus.ENROLLED]
        not_dropped = completed + ongoing

        graded = [r for r in completed if r.overall_grade is not None]
        graded_credits = math.fsum(credits_for(r) for r in graded)
        grade_points = math.fsum(r.overall_grade * credits_for(r) for r in graded)

        if graded_credits > 0:
            gpa = round(grade_points / graded_credits / GRADE_SCALE * GPA_SCALE, 2)
        else:
            gpa = 0.0

        units_enrolled = math.fsum(credits_for(r) for r in not_dropped)
        load_status = StudentType.REGULAR if units_enrolled >= FULL_LOAD_UNITS else StudentType.IRREGULAR

        return GradeReport(
            gpa=gpa,
            units_earned=math.fsum(credits_for(r) for r in completed),
            units_enrolled=units_enrolled,
            completed_count=len(completed),
            ongoing_count=len(ongoing),
            load_status=load_status.value,
        )
