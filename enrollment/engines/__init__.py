"""
Eligibility and aggregation engines.

This package contains the engines that perform the core business logic
of the enrollment system. None of them perform I/O.
"""

from .eligibility import EligibilityEngine
from .credits import CreditCalculator
from .schedule import ScheduleEngine, format_time
from .curriculum import CurriculumEngine

__all__ = [
    "EligibilityEngine",
    "CreditCalculator",
    "ScheduleEngine",
    "CurriculumEngine",
    "format_time",
]
