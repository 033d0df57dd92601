"""
Data models for the enrollment package.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between the data layer, the engines and the UI.
"""

from .student import StudentProfile, StudentType
from .curriculum import CurriculumMeta, CurriculumRequirement, CurriculumTerm
from .section import CourseSection, MeetingTime, SectionStatus
from .record import EnrollmentRecord, EnrollmentStatus
from .selection import (
    ALL_SEMESTERS,
    CURRENT_YEAR_LEVEL,
    EligibleCourse,
    SelectionFilter,
    parse_semester,
)
from .report import CreditSummary, GradeReport, ScheduleEntry, StudentSnapshot

__all__ = [
    # Student
    "StudentProfile",
    "StudentType",
    # Curriculum
    "CurriculumMeta",
    "CurriculumRequirement",
    "CurriculumTerm",
    # Sections
    "CourseSection",
    "MeetingTime",
    "SectionStatus",
    # Ledger
    "EnrollmentRecord",
    "EnrollmentStatus",
    # Eligibility
    "ALL_SEMESTERS",
    "CURRENT_YEAR_LEVEL",
    "EligibleCourse",
    "SelectionFilter",
    "parse_semester",
    # Reports
    "CreditSummary",
    "GradeReport",
    "ScheduleEntry",
    "StudentSnapshot",
]
