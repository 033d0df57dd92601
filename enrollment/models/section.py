"""
Course section data models.

A section is one scheduled offering of a course: instructor, meeting
times, room and a seat limit.
"""

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Optional


class SectionStatus(Enum):
    """
    Whether a section is open for enrollment at all.

    ACTIVE: Offered this term (may still be full)
    INACTIVE: Closed, cancelled, or not yet published
    """
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@dataclass(frozen=True)
class MeetingTime:
    """A single weekly meeting of a section."""
    day: str                           # "Monday", ... or "TBA"
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    room: str = "TBA"
    status: str = "Active"             # Schedule status: Active, Completed, Cancelled


@dataclass(frozen=True)
class CourseSection:
    """
    One offering of a course.

    A full section is still a valid match for its course. The engines never
    hide it; callers read `is_full` and disable the enroll action instead.
    """
    section_id: int
    course_id: int
    section_name: str
    capacity: int
    enrolled_count: int
    status: SectionStatus
    meetings: tuple = field(default_factory=tuple)   # MeetingTime objects
    instructor: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == SectionStatus.ACTIVE

    @property
    def is_full(self) -> bool:
        return self.enrolled_count >= self.capacity

    @property
    def seats_remaining(self) -> int:
        return max(self.capacity - self.enrolled_count, 0)
