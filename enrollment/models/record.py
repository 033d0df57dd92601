"""
Enrollment ledger data models.

Contains the EnrollmentRecord dataclass and EnrollmentStatus enum that
represent a student's academic history.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EnrollmentStatus(Enum):
    """
    Possible states of an enrollment record.

    ENROLLED: Student currently holds a seat in the section
    COMPLETED: Term is over and the course is finished
    DROPPED: Student left the course; it may be taken again
    """
    ENROLLED = "Enrolled"
    COMPLETED = "Completed"
    DROPPED = "Dropped"


@dataclass(frozen=True)
class EnrollmentRecord:
    """
    One course on the student's record.

    A record always references exactly one course. While the student is
    enrolled it also references the section they hold a seat in.

    Attributes:
        enrollment_id: Ledger identifier (used to drop the course)
        course_id: Course this record is for
        status: EnrollmentStatus enum value
        grade: Letter grade, None until graded
        section_id: Section the student sat in, if known
        midterm_grade / final_grade / overall_grade: Numeric grades (0-100)
        remark: Faculty remark ("Passed", "In Progress", ...)
        term: Human-readable term label ("Fall 2024")
        course_code: Carried by flat ledger responses; informational only
        credits: Carried by flat ledger responses; used only when the
                 curriculum has no row for this course
    """
    enrollment_id: int
    course_id: int
    status: EnrollmentStatus
    grade: Optional[str] = None
    section_id: Optional[int] = None
    midterm_grade: Optional[float] = None
    final_grade: Optional[float] = None
    overall_grade: Optional[float] = None
    remark: str = ""
    term: str = ""
    course_code: str = ""
    credits: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ENROLLED
