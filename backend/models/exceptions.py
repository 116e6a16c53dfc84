"""
Domain exceptions raised by the service layer.

Services stay HTTP-agnostic: the centralized handlers in main.py translate
each family below into a status code. Every exception carries a correlation
ID so a user-reported error can be matched to its log lines and Sentry event.
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message.
        correlation_id: Request correlation ID, or a fresh one outside a request.
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Raised when a referenced record does not exist."""

    pass


class ValidationException(DomainException):
    """Raised when a required field is missing or a value is not allowed."""

    pass


class ConflictException(DomainException):
    """Raised when an operation conflicts with existing data."""

    pass


class AuthenticationException(DomainException):
    """Raised when authentication fails."""

    pass


class PermissionDeniedException(DomainException):
    """Raised when the caller lacks the required role or account status."""

    pass


class StoreUnavailableException(DomainException):
    """
    Raised when the underlying store call failed.

    The session has already been rolled back when this is raised, so the
    operation left no partial writes and may be retried by the caller.
    """

    def __init__(self, operation: str, correlation_id: str | None = None) -> None:
        super().__init__(
            f"Data store unavailable during {operation}", correlation_id
        )
        self.operation = operation


# Specific exceptions for domain entities


class ReportNotFoundException(NotFoundException):
    """Report not found."""

    def __init__(self, report_id: int) -> None:
        super().__init__(f"Report with ID {report_id} not found")
        self.report_id = report_id


class AnnouncementNotFoundException(NotFoundException):
    """Announcement not found."""

    def __init__(self, announcement_id: int) -> None:
        super().__init__(f"Announcement with ID {announcement_id} not found")
        self.announcement_id = announcement_id


class ContactNotFoundException(NotFoundException):
    """Contact message not found."""

    def __init__(self, contact_id: int) -> None:
        super().__init__(f"Contact with ID {contact_id} not found")
        self.contact_id = contact_id


class UserNotFoundException(NotFoundException):
    """User not found."""

    pass


class UserAlreadyExistsException(ConflictException):
    """A user with this email already exists."""

    pass


class InvalidCredentialsException(AuthenticationException):
    """Invalid email or password."""

    pass


class InsufficientPermissionsException(PermissionDeniedException):
    """User is not an administrator."""

    pass


class UserSuspendedException(PermissionDeniedException):
    """Account is not verified, so it cannot submit reports or vote."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Your account is suspended. You cannot {action}.")
        self.action = action
