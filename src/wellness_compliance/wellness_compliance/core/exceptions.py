class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTransitionError(DomainError):
    """Raised when an exemption is moved to a state it cannot reach."""


class RangeTooLargeError(DomainError):
    """Raised when a report window exceeds the configured maximum."""


class NotFoundError(DomainError):
    """Raised when a team, member or exemption does not exist."""
