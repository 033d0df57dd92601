"""
Curriculum layout and progress.

Groups a curriculum's requirements into terms and reports how far the
student has progressed through it.
"""

import math

from ..config import SEMESTER_LABELS
from ..models import CurriculumTerm, EnrollmentStatus


class CurriculumEngine:
    """
    Read-only views over a curriculum.

    Terms are kept in the order the curriculum first mentions them, which
    is the order the registrar declared the courses in.
    """

    @staticmethod
    def term_label(year_level: int, semester: int) -> str:
        """E.g. "Year 2 - 1st Semester"."""
        return f"Year {year_level} - {SEMESTER_LABELS.get(semester, f'Semester {semester}')}"

    def group_by_term(self, requirements: list) -> list:
        """
        Group requirements by (year level, semester).

        Returns:
            List of CurriculumTerm in first-seen order
        """
        terms = {}
        for req in requirements:
            key = (req.year_level, req.semester)
            if key not in terms:
                terms[key] = CurriculumTerm(
                    year_level=req.year_level,
                    semester=req.semester,
                    label=self.term_label(req.year_level, req.semester),
                )
            terms[key].requirements.append(req)

        for term in terms.values():
            term.total_credits = self.total_credits(term.requirements)
        return list(terms.values())

    @staticmethod
    def total_credits(requirements: list) -> float:
        return math.fsum(max(req.credits, 0) for req in requirements)

    @staticmethod
    def progress(requirements: list, history: list) -> dict:
        """
        Split the curriculum by what the student has done.

        Returns:
            {
                "completed": [course_id, ...],
                "in_progress": [course_id, ...],
                "remaining": [course_id, ...],
                "completion_percentage": float,
            }
        """
        completed_ids = {r.course_id for r in history if r.status == EnrollmentStatus.COMPLETED}
        active_ids = {r.course_id for r in history if r.status == EnrollmentStatus.ENROLLED}

        completed, in_progress, remaining = [], [], []
        seen = set()
        for req in requirements:
            if req.course_id in seen:
                continue
            seen.add(req.course_id)
            if req.course_id in completed_ids:
                completed.append(req.course_id)
            elif req.course_id in active_ids:
                in_progress.append(req.course_id)
            else:
                remaining.append(req.course_id)

        total = len(seen)
        return {
            "completed": completed,
            "in_progress": in_progress,
            "remaining": remaining,
            "completion_percentage": (len(completed) / total * 100) if total > 0 else 0,
        }
