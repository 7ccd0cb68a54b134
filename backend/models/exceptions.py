"""
Custom domain exceptions for the application.

These exceptions are raised by the service layer and converted to HTTP
responses by centralized exception handlers in main.py, so services stay
HTTP-agnostic and can be reused from scripts and background tasks.

Every exception carries a correlation ID for log and Sentry lookup.
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message.
        correlation_id: Unique ID for error tracking (auto-generated if not provided).
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    pass


class PermissionDeniedException(DomainException):
    """Raised when user lacks required permissions."""

    pass


class ValidationException(DomainException):
    """Raised when input validation fails."""

    pass


class ConflictException(DomainException):
    """Raised when operation conflicts with existing data."""

    pass


class AlreadyExistsException(ConflictException):
    """Raised when trying to create a resource that already exists."""

    pass


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    pass


class InternalServiceException(DomainException):
    """Raised when an infrastructure failure (database, transaction) aborts an operation."""

    pass


# Specific exceptions for domain entities


class UserNotFoundException(NotFoundException):
    """User not found."""

    def __init__(self, username: str):
        super().__init__(f"User '{username}' not found")
        self.username = username


class UserAlreadyExistsException(AlreadyExistsException):
    """User already exists."""

    def __init__(self, username: str):
        super().__init__(f"User '{username}' already exists")
        self.username = username


class InsufficientPermissionsException(PermissionDeniedException):
    """User doesn't have sufficient permissions."""

    pass


# ============================================================================
# Community Exceptions
# ============================================================================


class CommunityNotFoundException(NotFoundException):
    """Raised when a community does not exist."""

    def __init__(self, message: str = "Community not found"):
        super().__init__(message)


class CommunityAlreadyExistsException(AlreadyExistsException):
    """Raised when a community name is already taken."""

    def __init__(self, name: str):
        super().__init__(f"A community named '{name}' already exists")
        self.name = name


class NotCommunityMemberException(PermissionDeniedException):
    """Raised when a user is not a participant of the community."""

    pass


class BannedFromCommunityException(PermissionDeniedException):
    """Raised when a banned user tries to (re)join a community."""

    def __init__(self, message: str = "You are banned from this community"):
        super().__init__(message)


# ============================================================================
# Report Exceptions
# ============================================================================


class SelfReportException(BusinessRuleException):
    """Raised when a user tries to report themselves."""

    def __init__(self, message: str = "You cannot report yourself"):
        super().__init__(message)


class DuplicateReportException(ConflictException):
    """Raised when the same reporter reports the same member twice in a community."""

    def __init__(
        self, message: str = "You have already reported this user in this community"
    ):
        super().__init__(message)


class ReportNotFoundException(NotFoundException):
    """Raised when report is not found."""

    def __init__(self, message: str = "Report not found"):
        super().__init__(message)


class InvalidReportStatusException(ValidationException):
    """Raised when a review tries to move a report back to pending."""

    def __init__(self, status: str):
        super().__init__(f"Cannot set report status to '{status}'")
        self.status = status


# ============================================================================
# Notification Exceptions
# ============================================================================


class NotificationException(DomainException):
    """Base exception for notification errors."""

    pass


class InvalidNotificationException(NotificationException):
    """Raised when a notification lacks title, message, sender or timestamp."""

    def __init__(self, message: str = "Invalid Notification"):
        super().__init__(message)


class UpdateFailedException(NotificationException):
    """Raised when the recipient fan-out updated no user records."""

    def __init__(self, message: str = "Update failed"):
        super().__init__(message)


class NotificationDeliveryException(NotificationException):
    """
    Raised when send_notification fails.

    The message is prefixed with the failing step: "1: " for persisting the
    notification, "2: " for the recipient fan-out.
    """

    def __init__(self, step: int, cause: str):
        super().__init__(f"{step}: {cause}")
        self.step = step
        self.cause = cause


class NotificationNotFoundException(NotFoundException):
    """Raised when notification is not found."""

    def __init__(self, notification_id: int):
        super().__init__(f"Notification with ID {notification_id} not found")
        self.notification_id = notification_id
