"""
Weekly schedule builder.

Turns the courses a student is enrolled in into the rows of the
schedule page.
"""

import logging
from datetime import time

from ..config import ALL_DAYS, WEEKDAYS
from ..models import ScheduleEntry


logger = logging.getLogger(__name__)


def format_time(value) -> str:
    """
    Format a 24-hour time for display.

    "08:00" -> "8:00 AM", "00:30" -> "12:30 AM", "13:05" -> "1:05 PM".
    Accepts datetime.time or "HH:MM[:SS]" strings. Returns "" for None and
    the input unchanged if it cannot be read.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, time):
        hour, minute = value.hour, value.minute
    else:
        try:
            parts = str(value).split(":")
            hour, minute = int(parts[0]), int(parts[1])
        except (ValueError, IndexError):
            return str(value)
        if not (0 <= hour < 24 and 0 <= minute < 60):
            return str(value)

    hour12 = hour % 12 or 12
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour12}:{minute:02d} {suffix}"


class ScheduleEngine:
    """
    Builds and filters the student's weekly schedule.

    Only records with status Enrolled appear. A record whose section is not
    in the catalog is skipped; a section without meeting times produces a
    single "TBA" row.
    """

    def build(self, records: list, sections: list, requirements: list) -> list:
        """
        One ScheduleEntry per meeting of every active enrollment.

        Returns:
            Entries ordered by weekday, then start time
        """
        sections_by_id = {s.section_id: s for s in sections}
        courses = {}
        for req in requirements:
            courses.setdefault(req.course_id, req)

        entries = []
        for record in records:
            if not record.is_active:
                continue
            section = sections_by_id.get(record.section_id)
            if section is None:
                logger.debug("Enrollment %s has no known section; not scheduled", record.enrollment_id)
                continue

            requirement = courses.get(record.course_id)
            course_code = requirement.course_code if requirement else record.course_code
            course_name = requirement.course_name if requirement else ""

            meetings = section.meetings or ()
            if not meetings:
                entries.append(ScheduleEntry(
                    enrollment_id=record.enrollment_id,
                    course_code=course_code,
                    course_name=course_name,
                    section_name=section.section_name,
                    instructor=section.instructor,
                    day="TBA",
                    start_time=None,
                    end_time=None,
                    room="TBA",
                    status=section.status.value,
                ))
                continue

            for meeting in meetings:
                entries.append(ScheduleEntry(
                    enrollment_id=record.enrollment_id,
                    course_code=course_code,
                    course_name=course_name,
                    section_name=section.section_name,
                    instructor=section.instructor,
                    day=meeting.day,
                    start_time=meeting.start_time,
                    end_time=meeting.end_time,
                    room=meeting.room,
                    status=meeting.status,
                ))

        entries.sort(key=self._sort_key)
        return entries

    @staticmethod
    def filter(entries: list, day: str = ALL_DAYS, search_text: str = "") -> list:
        """Narrow entries to one day and/or a case-insensitive search."""
        needle = (search_text or "").strip().lower()
        result = []
        for entry in entries:
            if day and day != ALL_DAYS and entry.day.lower() != day.lower():
                continue
            if needle:
                haystack = " ".join([
                    entry.course_code, entry.course_name, entry.section_name,
                    entry.instructor, entry.room,
                ]).lower()
                if needle not in haystack:
                    continue
            result.append(entry)
        return result

    @staticmethod
    def stats(entries: list) -> dict:
        """Count entries by meeting status."""
        counts = {"total": len(entries), "active": 0, "completed": 0, "cancelled": 0}
        for entry in entries:
            key = entry.status.lower()
            if key in counts:
                counts[key] += 1
        return counts

    @staticmethod
    def _sort_key(entry: ScheduleEntry):
        day = entry.day.capitalize()
        day_index = WEEKDAYS.index(day) if day in WEEKDAYS else len(WEEKDAYS)
        start = entry.start_time if entry.start_time is not None else time.max
        return (day_index, start)
