"""
Student data models.

Contains the StudentProfile dataclass and StudentType enum as supplied by
the Student Directory.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StudentType(Enum):
    """
    How a student moves through the curriculum.

    REGULAR: Follows the curriculum's year-level/semester sequence exactly
    IRREGULAR: May take courses from any year level up to their own
    """
    REGULAR = "Regular"
    IRREGULAR = "Irregular"


@dataclass(frozen=True)
class StudentProfile:
    """
    A student as seen by the enrollment engines.

    Owned by the Student Directory; this package only reads it.

    Attributes:
        student_id: Directory identifier
        first_name / last_name: Display names
        student_type: StudentType enum value
        year_level: Current year level (1 = first year)
        program_id: Assigned program, None if unassigned
        curriculum_id: Assigned curriculum, None if unassigned
        program_name: Program display name, if the directory sent one
    """
    student_id: int
    first_name: str
    last_name: str
    student_type: StudentType
    year_level: int
    program_id: Optional[int] = None
    curriculum_id: Optional[int] = None
    program_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_assigned(self) -> bool:
        """True only when the student has both a program and a curriculum."""
        return self.program_id is not None and self.curriculum_id is not None
