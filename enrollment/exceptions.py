"""
Exceptions raised by the enrollment package.

Three kinds of failure exist:

1. Missing assignment: the student has no program or curriculum. Reported
   to the caller, never retried.
2. API failures: transport or HTTP errors from the backend. The subclass
   tells the caller which message to show (signed out, forbidden, ...).
3. Command failures: a section that cannot take the student, or a bulk
   enrollment where some requests failed.

Data-shape gaps (a section without a course, a curriculum row without a
course) are NOT errors. The normalizer skips those records.
"""


class EnrollmentError(Exception):
    """Base class for every error this package raises."""


class StudentNotAssignedError(EnrollmentError):
    """The student is not assigned to a program and curriculum."""

    def __init__(self, student_id):
        self.student_id = student_id
        super().__init__(
            f"Student {student_id} is not assigned to a program and curriculum. "
            "Please contact the registrar."
        )


class ApiError(EnrollmentError):
    """
    A request to the STASIS backend failed.

    status_code is None when no response was received at all
    (connection refused, DNS failure, timeout).
    """

    default_message = "Request to the enrollment service failed."

    def __init__(self, message: str = None, status_code: int = None, url: str = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message or self.default_message)


class AuthenticationError(ApiError):
    default_message = "You are not signed in or your session has expired. Please log in again."


class AuthorizationError(ApiError):
    default_message = "You are not allowed to perform this action."


class NotFoundError(ApiError):
    default_message = "The requested record was not found."


class SectionUnavailableError(EnrollmentError):
    """The chosen section is inactive or has no seats left."""

    def __init__(self, section, reason: str):
        self.section = section
        self.reason = reason
        super().__init__(f"Cannot enroll in section {section.section_name}: {reason}")


class BulkEnrollmentError(EnrollmentError):
    """
    Some requests of a bulk enrollment failed.

    Requests are independent; the ones that succeeded are NOT rolled back.
    `succeeded` holds the created EnrollmentRecords and `failed` holds
    (course_id, section_id, exception) tuples.
    """

    def __init__(self, succeeded: list, failed: list):
        self.succeeded = succeeded
        self.failed = failed
        super().__init__(
            f"Failed to enroll in {len(failed)} of {len(succeeded) + len(failed)} course(s). "
            "Please try again."
        )
