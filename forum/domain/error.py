"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when an operation requires an acting user and none was given."""

    def __init__(self, action: str = "perform this action"):
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TargetNotFoundError(NotFoundError):
    """Raised when a vote or tree request names a missing or deleted target."""


class ParentNotFoundError(NotFoundError):
    """Raised when replying to a comment that does not exist on the post."""

    def __init__(self, identifier: str):
        super().__init__("Parent comment", identifier)


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than the configured maximum."""

    def __init__(self, level: int, max_level: int):
        self.level = level
        self.max_level = max_level
        super().__init__(
            f"Maximum comment nesting depth exceeded: level {level} > {max_level}"
        )


class InvariantViolationError(DomainError):
    """Raised when persisted vote state disagrees with what was just written.

    Indicates a concurrency bug or a conflicting writer; never corrected by
    guessing.
    """

    pass
