"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the enrollment package
(apart from the prompts in cli.py).

To create a different UI (web, PDF, etc.), create a new class with
the same method signatures but different output handling.
"""

from ..engines import format_time
from ..models import (
    CourseSection,
    EligibleCourse,
    EnrollmentRecord,
    EnrollmentStatus,
    GradeReport,
    StudentProfile,
)


class TerminalDisplay:
    """
    Pretty terminal output for enrollment results.

    ═══════════════════════════════════════════════════════════════════════════
    HOW TO REPLACE THIS UI
    ═══════════════════════════════════════════════════════════════════════════

    1. FOR WEB UI:
       Create a WebDisplay class with the same method signatures.
       Instead of print(), return HTML or render templates.

    2. FOR API RESPONSE:
       Create an APIFormatter class that converts dataclasses to JSON.

    ═══════════════════════════════════════════════════════════════════════════
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    CYAN = "\033[96m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"
    BG_RED = "\033[41m"

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def print_error(cls, message: str):
        print(f"\n  {cls.RED}✗ {message}{cls.RESET}")

    @classmethod
    def print_success(cls, message: str):
        print(f"\n  {cls.GREEN}✓ {message}{cls.RESET}")

    @classmethod
    def seat_badge(cls, section: CourseSection) -> str:
        """Colored seat count, or a FULL badge."""
        if section.is_full:
            return f"{cls.BG_RED}{cls.WHITE} FULL {cls.RESET}"
        if section.seats_remaining <= 3:
            return f"{cls.YELLOW}{section.enrolled_count}/{section.capacity}{cls.RESET}"
        return f"{cls.GREEN}{section.enrolled_count}/{section.capacity}{cls.RESET}"

    @classmethod
    def print_student_info(cls, student: StudentProfile, curriculum=None):
        """Print student identification information."""
        cls.print_header("STUDENT INFORMATION")
        print(f"  {cls.BOLD}Name:{cls.RESET} {student.full_name or 'Unknown'}")
        print(f"  {cls.BOLD}Student Type:{cls.RESET} {student.student_type.value}")
        print(f"  {cls.BOLD}Year Level:{cls.RESET} {student.year_level}")
        if student.program_name:
            print(f"  {cls.BOLD}Program:{cls.RESET} {student.program_name}")
        if curriculum is not None:
            print(f"  {cls.BOLD}Curriculum:{cls.RESET} {curriculum.name} {cls.DIM}({curriculum.academic_year}){cls.RESET}")

    @classmethod
    def print_available_courses(cls, courses: list, unoffered: list = None):
        """
        Print the enrollable courses, each with its sections.

        Full sections are shown with a FULL badge rather than hidden.
        """
        cls.print_header("AVAILABLE COURSES")
        if not courses:
            print(f"\n  {cls.DIM}No courses are available for the current selection.{cls.RESET}")
        else:
            print(f"\n  {cls.BOLD}{'CODE':<12} {'COURSE':<36} {'TERM':<14} {'CREDITS'}{cls.RESET}")
            print(f"  {cls.DIM}{'-' * 66}{cls.RESET}")
            for course in courses:
                cls._print_eligible_course(course)

        if unoffered:
            cls.print_subheader("No sections offered")
            for req in unoffered:
                print(f"  {cls.DIM}{req.course_code:<12} {req.course_name}{cls.RESET}")

    @classmethod
    def _print_eligible_course(cls, course: EligibleCourse):
        req = course.requirement
        code_color = cls.RED if course.is_full else cls.GREEN
        name = req.course_name[:34] + ".." if len(req.course_name) > 36 else req.course_name
        term = f"Y{req.year_level} - Sem {req.semester}"
        print(f"  {code_color}{req.course_code:<12}{cls.RESET} {name:<36} {term:<14} {req.credits:g}")

        for section in course.sections:
            meetings = ", ".join(
                f"{m.day} {format_time(m.start_time)}-{format_time(m.end_time)} {m.room}"
                for m in section.meetings
            ) or "TBA"
            print(
                f"      {cls.DIM}#{section.section_id:<5}{cls.RESET} {section.section_name:<12} "
                f"{cls.seat_badge(section):<10} {cls.DIM}{meetings}{cls.RESET}"
            )
            if section.instructor:
                print(f"             {cls.DIM}{section.instructor}{cls.RESET}")

    @classmethod
    def print_enrollments(cls, records: list, requirements: list, total_credits: float):
        """Print the student's current enrollments."""
        cls.print_header("MY ENROLLMENTS")
        active = [r for r in records if r.status == EnrollmentStatus.ENROLLED]
        if not active:
            print(f"\n  {cls.DIM}You are not enrolled in any course.{cls.RESET}")
            return

        names = {}
        for req in requirements:
            names.setdefault(req.course_id, req)

        print(f"\n  {cls.BOLD}{'ID':<8} {'CODE':<12} {'COURSE':<40}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 66}{cls.RESET}")
        for record in active:
            cls._print_enrollment(record, names.get(record.course_id))
        print(f"\n  {cls.BOLD}Total Credits:{cls.RESET} {total_credits:g}")

    @classmethod
    def _print_enrollment(cls, record: EnrollmentRecord, requirement):
        code = requirement.course_code if requirement else record.course_code
        name = requirement.course_name if requirement else ""
        print(f"  {record.enrollment_id:<8} {cls.CYAN}{code:<12}{cls.RESET} {name:<40}")

    @classmethod
    def print_grade_report(cls, report: GradeReport, records: list, requirements: list):
        """Print GPA, units and the grade table."""
        cls.print_header("GRADES")
        print(f"\n  {cls.BOLD}GPA:{cls.RESET} {report.gpa:.2f}")
        print(f"  {cls.BOLD}Units Earned:{cls.RESET} {report.units_earned:g}")
        print(f"  {cls.BOLD}Units Enrolled:{cls.RESET} {report.units_enrolled:g}")
        print(f"  {cls.BOLD}Load Status:{cls.RESET} {report.load_status}")
        print(f"  {cls.GREEN}Completed:{cls.RESET} {report.completed_count}   "
              f"{cls.YELLOW}Ongoing:{cls.RESET} {report.ongoing_count}")

        names = {}
        for req in requirements:
            names.setdefault(req.course_id, req)

        graded = [r for r in records if r.status != EnrollmentStatus.DROPPED]
        if not graded:
            return
        print(f"\n  {cls.BOLD}{'CODE':<12} {'MIDTERM':>8} {'FINAL':>8} {'OVERALL':>8}  {'GRADE':<6} {'REMARKS'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 66}{cls.RESET}")
        for record in graded:
            req = names.get(record.course_id)
            code = req.course_code if req else record.course_code
            print(
                f"  {code:<12} {cls._num(record.midterm_grade):>8} {cls._num(record.final_grade):>8} "
                f"{cls._num(record.overall_grade):>8}  {record.grade or 'INC':<6} {record.remark}"
            )

    @staticmethod
    def _num(value) -> str:
        return "-" if value is None else f"{value:.1f}"

    @classmethod
    def print_schedule(cls, entries: list, stats: dict):
        """Print the weekly schedule table."""
        cls.print_header("MY SCHEDULE")
        print(f"\n  {cls.BOLD}Meetings:{cls.RESET} {stats['total']}  "
              f"{cls.GREEN}Active:{cls.RESET} {stats['active']}  "
              f"{cls.DIM}Completed:{cls.RESET} {stats['completed']}  "
              f"{cls.RED}Cancelled:{cls.RESET} {stats['cancelled']}")
        if not entries:
            print(f"\n  {cls.DIM}No classes scheduled.{cls.RESET}")
            return

        print(f"\n  {cls.BOLD}{'DAY':<10} {'TIME':<20} {'CODE':<12} {'SECTION':<10} {'ROOM'}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 66}{cls.RESET}")
        for entry in entries:
            when = f"{format_time(entry.start_time)} - {format_time(entry.end_time)}" if entry.start_time else "TBA"
            print(f"  {entry.day:<10} {when:<20} {cls.CYAN}{entry.course_code:<12}{cls.RESET} "
                  f"{entry.section_name:<10} {entry.room}")

    @classmethod
    def print_curriculum(cls, terms: list, total_credits: float, progress: dict):
        """Print the curriculum term by term with completion marks."""
        cls.print_header("MY CURRICULUM")
        print(f"\n  {cls.BOLD}Total Units:{cls.RESET} {total_credits:g}")
        print(f"  {cls.BOLD}Completion:{cls.RESET} {progress['completion_percentage']:.0f}%")

        completed = set(progress["completed"])
        in_progress = set(progress["in_progress"])
        for term in terms:
            cls.print_subheader(f"{term.label} ({term.total_credits:g} units)")
            for req in term.requirements:
                if req.course_id in completed:
                    mark = f"{cls.GREEN}✓{cls.RESET}"
                elif req.course_id in in_progress:
                    mark = f"{cls.YELLOW}⏳{cls.RESET}"
                else:
                    mark = f"{cls.DIM}·{cls.RESET}"
                print(f"    {mark} {req.course_code:<12} {req.course_name:<40} {req.credits:g}")
