from __future__ import annotations

from typing import Any, Dict, Optional


class WorkoutApiError(Exception):
    """Base class for failures a route turns into an HTTP response."""

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None) -> None:
        super().__init__(error if details is None else f"{error}: {details}")
        self.error = error
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(WorkoutApiError):
    """Caller input is malformed or incomplete. Never retried."""

    status_code = 400


class NotFoundError(WorkoutApiError):
    status_code = 404


class DependencyError(WorkoutApiError):
    """
    DynamoDB or S3 rejected a call. `details` carries the underlying
    message; the call is not retried and nothing already written is undone.
    """

    status_code = 500

    @classmethod
    def wrap(cls, error: str, exc: BaseException) -> "DependencyError":
        return cls(error, str(exc) or "Unknown error")
