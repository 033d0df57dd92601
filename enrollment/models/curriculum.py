"""
Curriculum data models.

A curriculum is the ordered list of courses a program requires, keyed by
year level and semester. Each row of that list is a CurriculumRequirement.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CurriculumMeta:
    """Header information for one curriculum version."""
    curriculum_id: int
    name: str
    code: str = ""
    academic_year: str = ""
    status: str = ""
    program_name: str = ""


@dataclass(frozen=True)
class CurriculumRequirement:
    """
    One (curriculum, course) row.

    Example:
        course_id: 12
        course_code: "CS 201"
        course_name: "Data Structures"
        year_level: 2
        semester: 1
        credits: 3
    """
    course_id: int
    course_code: str
    course_name: str
    year_level: int
    semester: int                 # 1, 2 or 3 (summer)
    credits: float                # Never negative
    curriculum_detail_id: Optional[int] = None


@dataclass
class CurriculumTerm:
    """
    All requirements scheduled for one (year level, semester) pair.

    Used to lay the curriculum out term by term, e.g. "Year 2 - 1st Semester".
    """
    year_level: int
    semester: int
    label: str
    requirements: list = field(default_factory=list)   # CurriculumRequirement objects
    total_credits: float = 0.0
