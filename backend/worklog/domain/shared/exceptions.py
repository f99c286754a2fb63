"""
Domain Exceptions

Defines the error taxonomy shared by the reference cache, the task engine
and the HTTP layer. Every error carries a discriminating ``ErrorType`` so
callers can branch on the kind of failure without string matching.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    SERVER = "server"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, object]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when a task mutation request is structurally invalid.

    Carries the complete field -> message map; nothing collected by the
    validator is dropped on the way to the caller.
    """

    def __init__(
        self,
        errors: dict[str, str],
        message: str = "Validation Error",
    ) -> None:
        self.errors = dict(errors)
        super().__init__(
            message,
            ErrorType.VALIDATION,
            {"error_count": len(self.errors)},
        )

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.NOT_FOUND, details)

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message}


class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            "Task not found", {"task_id": task_id, "entity_type": "task"}
        )
        self.task_id = task_id


class MasterTypeNotFoundError(NotFoundError):
    """Raised when an unknown reference-data type is requested."""

    def __init__(self, master_type: str) -> None:
        super().__init__(
            f"Unknown master type: {master_type}", {"master_type": master_type}
        )
        self.master_type = master_type


class ScenarioNotFoundError(NotFoundError):
    """Raised when switching to a scenario that does not exist."""

    def __init__(self, scenario_id: str) -> None:
        super().__init__(
            f"Unknown scenario: {scenario_id}", {"scenario_id": scenario_id}
        )
        self.scenario_id = scenario_id


class TransportError(DomainError):
    """Raised when no response was received from a remote endpoint."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message, ErrorType.TRANSPORT, {"url": url})
        self.url = url


class ServerError(DomainError):
    """Raised when a remote endpoint answers with a 5xx-class status."""

    def __init__(
        self,
        message: str = "Internal Server Error",
        status_code: int = 500,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message, ErrorType.SERVER, {"status_code": status_code, "url": url}
        )
        self.status_code = status_code
        self.url = url

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message}
