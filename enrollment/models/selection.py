"""
Eligibility data models.

Contains the SelectionFilter the student controls on the enrollment page
and the EligibleCourse results the eligibility engine returns.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Union

from .curriculum import CurriculumRequirement


CURRENT_YEAR_LEVEL = "current"
ALL_SEMESTERS = "all"

_WORD_SEMESTERS = {"first": 1, "second": 2, "third": 3, "summer": 3}


def parse_semester(value) -> Optional[int]:
    """
    Read a semester number from the many spellings the backend uses.

    1, "1", "1st Semester", "First Semester" -> 1
    2, "2nd", "Second Semester"              -> 2
    3, "Summer", "summer term"               -> 3

    Returns None for anything else.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = int(value)
        return number if number in (1, 2, 3) else None

    text = str(value).strip().lower()
    if not text:
        return None
    for word, number in _WORD_SEMESTERS.items():
        if word in text:
            return number
    match = re.search(r"(\d+)", text)
    if match:
        number = int(match.group(1))
        return number if number in (1, 2, 3) else None
    return None


@dataclass(frozen=True)
class SelectionFilter:
    """
    What the student has selected on the enrollment page.

    year_level: "current" (every year up to the student's own) or a
                specific year level. Only irregular students choose this.
    semester:   "all" or 1, 2, 3
    search_text: Free text matched against course code and name
    """
    year_level: Union[str, int] = CURRENT_YEAR_LEVEL
    semester: Union[str, int] = ALL_SEMESTERS
    search_text: str = ""

    def __post_init__(self):
        # Frozen dataclass, so canonical values are written with object.__setattr__
        object.__setattr__(self, "year_level", self._canonical_year_level(self.year_level))
        object.__setattr__(self, "semester", self._canonical_semester(self.semester))
        object.__setattr__(self, "search_text", (self.search_text or "").strip())

    @classmethod
    def create(cls, year_level=None, semester=None, search_text=None) -> "SelectionFilter":
        """
        Build a filter from loose UI values.

        Accepts what a form or prompt hands back: "2", "Current", "all",
        "1st Semester", None. Unreadable values fall back to the defaults.
        The constructor applies the same rules; create() also accepts None.
        """
        return cls(
            year_level=CURRENT_YEAR_LEVEL if year_level is None else year_level,
            semester=ALL_SEMESTERS if semester is None else semester,
            search_text=search_text or "",
        )

    @staticmethod
    def _canonical_year_level(value):
        if value is None or isinstance(value, bool):
            return CURRENT_YEAR_LEVEL
        if str(value).strip().lower() in ("", CURRENT_YEAR_LEVEL):
            return CURRENT_YEAR_LEVEL
        try:
            level = int(str(value).strip())
        except ValueError:
            return CURRENT_YEAR_LEVEL
        return level if level >= 1 else CURRENT_YEAR_LEVEL

    @staticmethod
    def _canonical_semester(value):
        if value is None or str(value).strip().lower() in ("", ALL_SEMESTERS):
            return ALL_SEMESTERS
        return parse_semester(value) or ALL_SEMESTERS


@dataclass(frozen=True)
class EligibleCourse:
    """
    A curriculum requirement the student may enroll in, with its sections.

    Exists only as engine output; never persisted.
    """
    requirement: CurriculumRequirement
    sections: tuple = field(default_factory=tuple)   # CourseSection objects

    @property
    def course_id(self) -> int:
        return self.requirement.course_id

    @property
    def open_sections(self) -> list:
        """Sections that still have seats."""
        return [s for s in self.sections if not s.is_full]

    @property
    def is_full(self) -> bool:
        """True when every offered section is full."""
        return bool(self.sections) and all(s.is_full for s in self.sections)
