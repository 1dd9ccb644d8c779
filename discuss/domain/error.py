"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised for precondition violations before any state change is made.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PendingCommentError(ValidationError):
    """Raised when an operation targets a comment the store has not confirmed yet."""

    def __init__(self, comment_id: str):
        self.comment_id = comment_id
        super().__init__(f"Comment {comment_id} is still pending confirmation")


class StoreError(DomainError):
    """Base error for record store failures."""

    pass


class StoreUnavailableError(StoreError):
    """The record store rejected or could not complete the operation."""

    def __init__(self, operation: str, reason: str = "store unavailable"):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store {operation} failed: {reason}")


class StoreTimeoutError(StoreError):
    """The record store did not answer within the configured timeout."""

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"Store {operation} timed out after {timeout:g}s")
