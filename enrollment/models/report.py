"""
Report data models.

Dataclasses returned by the credit, schedule and loading layers.
"""

from dataclasses import dataclass, field
from datetime import time
from typing import Optional

from .curriculum import CurriculumMeta
from .student import StudentProfile


@dataclass
class CreditSummary:
    """
    Credit total for a set of enrollment records.

    Records whose course is missing from the curriculum add nothing to the
    total. They are listed in unmatched_course_ids so the shortfall is
    visible instead of silent.
    """
    total_credits: float
    counted_course_ids: list = field(default_factory=list)
    unmatched_course_ids: list = field(default_factory=list)


@dataclass
class GradeReport:
    """
    Academic standing as shown on the grades page.

    gpa is on a 4.0 scale and only counts completed courses with a
    numeric overall grade.
    """
    gpa: float
    units_earned: float          # Credits of completed courses
    units_enrolled: float        # Credits of every course not dropped
    completed_count: int
    ongoing_count: int
    load_status: str             # "Regular" or "Irregular"


@dataclass
class ScheduleEntry:
    """One weekly meeting of a course the student is enrolled in."""
    enrollment_id: int
    course_code: str
    course_name: str
    section_name: str
    instructor: str
    day: str
    start_time: Optional[time]
    end_time: Optional[time]
    room: str
    status: str


@dataclass
class StudentSnapshot:
    """
    Everything the engines need for one student, fetched together.

    The four collections are loaded in parallel and the engines only run
    once every one of them has resolved.
    """
    student: StudentProfile
    curriculum: Optional[CurriculumMeta]
    requirements: list = field(default_factory=list)   # CurriculumRequirement
    sections: list = field(default_factory=list)       # CourseSection
    history: list = field(default_factory=list)        # EnrollmentRecord
