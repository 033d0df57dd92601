"""
Data loading and caching.

This module fetches everything the engines need for one student and caches
it so that switching filters on a page does not hit the backend again.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from ..exceptions import ApiError, StudentNotAssignedError
from ..models import StudentSnapshot
from .client import StasisClient
from .normalizer import RecordNormalizer


logger = logging.getLogger(__name__)


class DataLoader:
    """
    Loads and caches one StudentSnapshot per student.

    WHY CACHING: Every filter change on the enrollment page re-runs the
    engine. The inputs only change when the student enrolls or drops, so the
    snapshot is kept until invalidate() is called.

    WHY PARALLEL: Once the student record is known, the curriculum header,
    the curriculum rows, the section catalog and the enrollment history are
    independent. They are fetched concurrently and the snapshot is built
    only after all four have resolved.

    FAILURE POLICY:
    - Student without program/curriculum -> StudentNotAssignedError
    - Enrollment history unavailable     -> empty history (logged), and the
                                            snapshot is NOT cached so the
                                            next load() fetches again
    - Any other fetch failure            -> the ApiError propagates

    Usage:
        loader = DataLoader(StasisClient())
        snapshot = loader.load(42)
    """

    def __init__(self, client: StasisClient, normalizer: RecordNormalizer = None,
                 sections_by_program: bool = False):
        self.client = client
        self.normalizer = normalizer or RecordNormalizer()
        # True limits the section catalog to the student's program
        self.sections_by_program = sections_by_program
        self._snapshots = {}  # Keyed by student id

    def load(self, student_id: int) -> StudentSnapshot:
        """Return the cached snapshot, fetching it on first use. Snapshots with a failed history are not cached."""
        if student_id in self._snapshots:
            return self._snapshots[student_id]

        snapshot, complete = self._fetch(student_id)
        if complete:
            self._snapshots[student_id] = snapshot
        return snapshot

    def invalidate(self, student_id: int = None):
        """Forget one student's snapshot, or every snapshot."""
        if student_id is None:
            self._snapshots.clear()
        else:
            self._snapshots.pop(student_id, None)

    def _fetch(self, student_id: int):
        """Returns (snapshot, complete); complete is False when the history fetch failed."""
        logger.info("Loading enrollment data for student %s", student_id)
        student = self.normalizer.student(self.client.get_student(student_id), student_id)
        if not student.is_assigned:
            raise StudentNotAssignedError(student_id)

        program_id = student.program_id if self.sections_by_program else None
        with ThreadPoolExecutor(max_workers=4) as pool:
            curriculum_future = pool.submit(self.client.get_curriculum, student.curriculum_id)
            requirements_future = pool.submit(self.client.get_requirements, student.curriculum_id)
            sections_future = pool.submit(self.client.get_sections, program_id)
            history_future = pool.submit(self._history_or_none, student_id)

            curriculum = self.normalizer.curriculum(curriculum_future.result())
            requirements = self.normalizer.requirements(requirements_future.result())
            sections = self.normalizer.sections(sections_future.result())
            raw_history = history_future.result()

        course_index = {}
        for req in requirements:
            course_index.setdefault(req.course_code, req.course_id)
        history = self.normalizer.enrollments(raw_history or [], course_index)

        logger.info(
            "Student %s: %d requirements, %d sections, %d enrollment records",
            student_id, len(requirements), len(sections), len(history),
        )
        snapshot = StudentSnapshot(
            student=student,
            curriculum=curriculum,
            requirements=requirements,
            sections=sections,
            history=history,
        )
        return snapshot, raw_history is not None

    def _history_or_none(self, student_id: int):
        try:
            return self.client.get_enrollments(student_id)
        except ApiError as e:
            logger.warning("Could not load enrollments for student %s: %s", student_id, e)
            return None
