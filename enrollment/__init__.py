"""
Student Enrollment Package
==========================

Student-side enrollment logic for the STASIS school records system.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                            DATA LAYER                                    │
│  ┌──────────────┐   ┌──────────────────┐   ┌────────────────────────┐   │
│  │ StasisClient │──►│ RecordNormalizer │──►│ DataLoader (cached,    │   │
│  │ (HTTP)       │   │ (one shape)      │   │ parallel fetch)        │   │
│  └──────────────┘   └──────────────────┘   └────────────────────────┘   │
└─────────────────────────────────────────────────────────────────────────┘
                                   │ StudentSnapshot
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                         ALGORITHM LAYER                                  │
│        (Pure logic - returns data structures, NO I/O, NO printing)       │
│                                                                         │
│  EligibilityEngine   CreditCalculator   ScheduleEngine  CurriculumEngine │
└─────────────────────────────────────────────────────────────────────────┘
                                   │ dataclasses
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│     EnrollmentAdvisor (orchestrator, enroll/drop commands)               │
│                         │                                               │
│                         ▼                                               │
│     TerminalDisplay (the only place that prints)                         │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

enrollment/
├── __init__.py          # This file - main exports
├── config.py            # Configuration constants
├── exceptions.py        # Error hierarchy
├── advisor.py           # EnrollmentAdvisor orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Data classes and enums
├── data/                # HTTP client, normalizer, loader
├── engines/             # Eligibility, credits, schedule, curriculum
└── ui/                  # Terminal display

USAGE
-----

    from enrollment import EnrollmentAdvisor, SelectionFilter

    advisor = EnrollmentAdvisor()
    courses = advisor.available_courses(42, SelectionFilter.create(semester=1))
    for course in courses:
        for section in course.sections:
            print(course.requirement.course_code, section.section_name, section.is_full)

The engines can also be used on their own, without any backend:

    from enrollment import EligibilityEngine
    EligibilityEngine().evaluate(student, requirements, history, sections, selection)

Running from command line:

    python -m enrollment

"""

__version__ = "1.0.0"

from .advisor import EnrollmentAdvisor
from .cli import main

from .models import (
    StudentProfile,
    StudentType,
    CurriculumMeta,
    CurriculumRequirement,
    CurriculumTerm,
    CourseSection,
    MeetingTime,
    SectionStatus,
    EnrollmentRecord,
    EnrollmentStatus,
    EligibleCourse,
    SelectionFilter,
    CreditSummary,
    GradeReport,
    ScheduleEntry,
    StudentSnapshot,
)

from .engines import (
    EligibilityEngine,
    CreditCalculator,
    ScheduleEngine,
    CurriculumEngine,
    format_time,
)

from .data import DataLoader, RecordNormalizer, StasisClient

from .ui import TerminalDisplay

from .exceptions import (
    EnrollmentError,
    StudentNotAssignedError,
    ApiError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    SectionUnavailableError,
    BulkEnrollmentError,
)

__all__ = [
    "__version__",
    # Main entry points
    "EnrollmentAdvisor",
    "main",
    # Models
    "StudentProfile",
    "StudentType",
    "CurriculumMeta",
    "CurriculumRequirement",
    "CurriculumTerm",
    "CourseSection",
    "MeetingTime",
    "SectionStatus",
    "EnrollmentRecord",
    "EnrollmentStatus",
    "EligibleCourse",
    "SelectionFilter",
    "CreditSummary",
    "GradeReport",
    "ScheduleEntry",
    "StudentSnapshot",
    # Engines
    "EligibilityEngine",
    "CreditCalculator",
    "ScheduleEngine",
    "CurriculumEngine",
    "format_time",
    # Data
    "DataLoader",
    "RecordNormalizer",
    "StasisClient",
    # UI
    "TerminalDisplay",
    # Errors
    "EnrollmentError",
    "StudentNotAssignedError",
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "SectionUnavailableError",
    "BulkEnrollmentError",
]
