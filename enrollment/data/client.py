"""
STASIS REST API client.

This module is the only place that talks HTTP. It returns raw JSON and
leaves shaping to the RecordNormalizer.
"""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    API_BASE_URL,
    API_TOKEN,
    REQUEST_TIMEOUT,
    RETRY_BACKOFF,
    RETRY_STATUS_CODES,
    RETRY_TOTAL,
)
from ..exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
)


logger = logging.getLogger(__name__)

CONNECTION_FAILED = "Unable to connect to server. Please check that the enrollment service is running."
INVALID_RESPONSE = "The enrollment service sent a response that could not be read."

_STATUS_ERRORS = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
}


def create_retry_session() -> requests.Session:
    """
    Session that retries reads on throttling and server errors.

    Only GET is retried. Enrolling or dropping twice is worse than failing
    once, so writes go out exactly once.
    """
    session = requests.Session()
    retries = Retry(
        total=RETRY_TOTAL,
        backoff_factor=RETRY_BACKOFF,
        status_forcelist=list(RETRY_STATUS_CODES),
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "Content-Type": "application/json",
        "Accept": "application/json",
    })
    return session


class StasisClient:
    """
    Thin wrapper around the STASIS backend endpoints.

    ENDPOINTS:
    ----------
    Student Directory     GET    /students/{id}
    Curriculum Catalog    GET    /curriculums/{id}
                          GET    /curriculum-details/curriculum/{id}
    Section Catalog       GET    /course-sections
                          GET    /course-sections/program/{programId}
    Enrollment Ledger     GET    /enrolled-courses/student/{studentId}
                          POST   /enrolled-courses
                          DELETE /enrolled-courses/{id}

    ERRORS:
    -------
    Every failure becomes an ApiError subclass chosen by HTTP status, so
    callers can tell "signed out" from "forbidden" from "server down".
    Nothing is retried except idempotent reads (see create_retry_session).
    """

    def __init__(self, base_url: str = API_BASE_URL, token: str = API_TOKEN,
                 timeout: float = REQUEST_TIMEOUT, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else create_retry_session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_student(self, student_id: int) -> dict:
        return self._request("GET", f"/students/{student_id}")

    def get_curriculum(self, curriculum_id: int) -> dict:
        return self._request("GET", f"/curriculums/{curriculum_id}")

    def get_requirements(self, curriculum_id: int) -> list:
        return self._request("GET", f"/curriculum-details/curriculum/{curriculum_id}") or []

    def get_sections(self, program_id: int = None) -> list:
        """All sections, or only those of one program."""
        if program_id is None:
            return self._request("GET", "/course-sections") or []
        return self._request("GET", f"/course-sections/program/{program_id}") or []

    def get_enrollments(self, student_id: int) -> list:
        return self._request("GET", f"/enrolled-courses/student/{student_id}") or []

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create_enrollment(self, student_id: int, section_id: int) -> dict:
        payload = {
            "studentId": student_id,
            "courseSectionId": section_id,
            "status": "Enrolled",
        }
        return self._request("POST", "/enrolled-courses", json=payload)

    def delete_enrollment(self, enrollment_id: int, student_id: int = None) -> None:
        """
        Drop an enrollment.

        The backend checks X-Student-ID against the enrollment's owner and
        answers 403 on a mismatch.
        """
        headers = {"X-Student-ID": str(student_id)} if student_id is not None else None
        self._request("DELETE", f"/enrolled-courses/{enrollment_id}", headers=headers)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(CONNECTION_FAILED, status_code=None, url=url) from e

        if response.status_code >= 400:
            error_cls = _STATUS_ERRORS.get(response.status_code, ApiError)
            message = self._error_message(response)
            logger.warning("%s %s -> %s %s", method, url, response.status_code, message or "")
            if error_cls is ApiError:
                raise ApiError(message, status_code=response.status_code, url=url)
            raise error_cls(status_code=response.status_code, url=url)

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            # requests' JSONDecodeError subclasses ValueError
            logger.error("%s %s -> %s with a non-JSON body", method, url, response.status_code)
            raise ApiError(INVALID_RESPONSE, status_code=response.status_code, url=url) from e

    @staticmethod
    def _error_message(response):
        """Message the backend put in its error body, if any."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("message") or body.get("error")
        return None
