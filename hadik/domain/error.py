"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when an actor lacks the role required for an operation."""

    def __init__(self, action: str, actor_id: str):
        self.action = action
        self.actor_id = actor_id
        super().__init__(f"User {actor_id} is not authorized to {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with a uniqueness rule."""

    def __init__(self, resource: str, key: str):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} already exists: {key}")


class PartialFailureError(DomainError):
    """A multi-step operation failed part-way; retrying it is safe.

    The caller should retry the whole operation.
    """

    def __init__(self, operation: str, completed_step: str, cause: Exception):
        self.operation = operation
        self.completed_step = completed_step
        self.cause = cause
        super().__init__(
            f"{operation} stopped after {completed_step}; retry the operation"
        )
