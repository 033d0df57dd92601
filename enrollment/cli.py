"""
Command-Line Interface for the Enrollment System.

This module provides the interactive CLI. It handles user input and hands
everything else to the EnrollmentAdvisor.

MENU:
-----
1. Available courses (with semester / year level / search filters)
2. My enrollments
3. Grades
4. Schedule
5. Curriculum
6. Enroll in a section
7. Drop a course

NOTE: Don't run this file directly. Run from the project root:
    python -m enrollment
"""

import logging

from .config import ALL_DAYS, LOG_LEVEL
from .advisor import EnrollmentAdvisor
from .engines import EligibilityEngine
from .exceptions import BulkEnrollmentError, EnrollmentError
from .models import SelectionFilter, StudentType
from .ui import TerminalDisplay


def _ask(prompt: str, default: str = "") -> str:
    try:
        return input(prompt).strip() or default
    except EOFError:
        return default


def _ask_selection(advisor: EnrollmentAdvisor, student_id: int) -> SelectionFilter:
    """Prompt for the filters shown on the enrollment page."""
    student = advisor.loader.load(student_id).student

    year_level = None
    if student.student_type == StudentType.IRREGULAR:
        print(f"\n{TerminalDisplay.BOLD}Year level:{TerminalDisplay.RESET}")
        for value, label in EligibilityEngine.year_level_options(student):
            print(f"    {value}. {label}")
        year_level = _ask("  Choose (Enter = current): ", "current")

    semester = _ask("  Semester (1, 2, 3=Summer, Enter = all): ", "all")
    search = _ask("  Search (Enter = none): ")
    return SelectionFilter.create(year_level=year_level, semester=semester, search_text=search)


def _enroll(advisor: EnrollmentAdvisor, student_id: int):
    """Enroll in one or more sections (comma separated ids)."""
    answer = _ask("  Section id(s) to enroll in, comma separated: ")
    section_ids = []
    for part in answer.split(","):
        try:
            section_ids.append(int(part.strip()))
        except ValueError:
            continue
    if not section_ids:
        return

    if len(section_ids) == 1:
        record = advisor.enroll(student_id, section_ids[0])
        TerminalDisplay.print_success(f"Successfully enrolled (enrollment #{record.enrollment_id}).")
        return

    snap = advisor.loader.load(student_id)
    course_of = {s.section_id: s.course_id for s in snap.sections}
    selections = {}
    for sid in section_ids:
        if sid not in course_of:
            TerminalDisplay.print_error(f"Section {sid} is not offered.")
            continue
        selections[course_of[sid]] = sid
    if not selections:
        return
    confirm = _ask(f"  Enroll in {len(selections)} course(s)? [y/N]: ", "n")
    if confirm.lower() != "y":
        return
    try:
        records = advisor.bulk_enroll(student_id, selections)
    except BulkEnrollmentError as e:
        for course_id, section_id, error in e.failed:
            TerminalDisplay.print_error(f"Section {section_id}: {error}")
        if e.succeeded:
            TerminalDisplay.print_success(f"Enrolled in {len(e.succeeded)} course(s).")
        return
    TerminalDisplay.print_success(f"Successfully enrolled in {len(records)} course(s)!")


def _drop(advisor: EnrollmentAdvisor, student_id: int):
    advisor.run_enrollments_view(student_id)
    try:
        enrollment_id = int(_ask("  Enrollment id to drop: "))
    except ValueError:
        return
    if _ask("  Are you sure you want to drop this course? [y/N]: ", "n").lower() != "y":
        return
    advisor.drop(student_id, enrollment_id)
    TerminalDisplay.print_success("Course dropped successfully!")


def main():
    """
    Command-line interface for the enrollment system.

    Errors from the backend are shown with their status-aware message and
    the menu continues; nothing is retried automatically.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    advisor = EnrollmentAdvisor()

    print(f"\n{TerminalDisplay.BOLD}{TerminalDisplay.CYAN}")
    print("╔══════════════════════════════════════════════════════════════════╗")
    print("║         STASIS STUDENT ENROLLMENT                                ║")
    print("╚══════════════════════════════════════════════════════════════════╝")
    print(f"{TerminalDisplay.RESET}")

    try:
        student_id = int(_ask(f"{TerminalDisplay.BOLD}Student ID: {TerminalDisplay.RESET}"))
    except ValueError:
        TerminalDisplay.print_error("A numeric student ID is required.")
        return

    actions = {
        "1": lambda: advisor.run_enrollment_view(student_id, _ask_selection(advisor, student_id)),
        "2": lambda: advisor.run_enrollments_view(student_id),
        "3": lambda: advisor.run_grades_view(student_id),
        "4": lambda: advisor.run_schedule_view(student_id, _ask("  Day (Enter = all days): ", ALL_DAYS)),
        "5": lambda: advisor.run_curriculum_view(student_id),
        "6": lambda: _enroll(advisor, student_id),
        "7": lambda: _drop(advisor, student_id),
    }

    while True:
        print(f"\n{TerminalDisplay.BOLD}Menu:{TerminalDisplay.RESET}")
        print("  1. Available courses   2. My enrollments   3. Grades")
        print("  4. Schedule            5. Curriculum       6. Enroll")
        print("  7. Drop                q. Quit")
        choice = _ask(f"{TerminalDisplay.BOLD}Select: {TerminalDisplay.RESET}", "q").lower()
        if choice == "q":
            break
        action = actions.get(choice)
        if action is None:
            continue
        try:
            action()
        except EnrollmentError as e:
            TerminalDisplay.print_error(str(e))


if __name__ == "__main__":
    main()
