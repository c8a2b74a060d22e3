"""Exceptions for integration store operations."""

from herald.domain.errors import ErrorCode, HeraldError


class IntegrationStoreError(HeraldError):
    """Base class for integration store errors."""


class IdentifierConflictError(IntegrationStoreError):
    """Conflict: the identifier is already used by another integration in the environment.

    Attributes:
        environment_id (str): The environment scope of the identifier.
        identifier (str): The identifier that is already taken.
    """

    code = ErrorCode.IDENTIFIER_CONFLICT
    MESSAGE = "Integration with identifier already exists"

    def __init__(self, environment_id: str, identifier: str) -> None:
        super().__init__(self.MESSAGE)
        self.environment_id = environment_id
        self.identifier = identifier


class IntegrationIdConflictError(IntegrationStoreError):
    """Conflict: an integration with the same id is already stored."""

    code = ErrorCode.INTERNAL

    def __init__(self, integration_id: str) -> None:
        super().__init__(f"Integration id '{integration_id}' is already stored.")
        self.integration_id = integration_id


class IntegrationNotFoundError(IntegrationStoreError):
    """Raised when an integration cannot be found (or is not visible to the caller)."""

    code = ErrorCode.INTEGRATION_NOT_FOUND

    def __init__(self, integration_id: str) -> None:
        super().__init__(f"Integration ({integration_id}) not found")
        self.integration_id = integration_id


class UnscopedDeleteError(IntegrationStoreError):
    """Raised when delete_many() is called without an organization scope."""

    def __init__(self) -> None:
        super().__init__("delete_many() requires an organization_id in the filter")


class StoreUnavailableError(IntegrationStoreError):
    """The backing store failed or timed out. The operation may be retried by the caller."""

    code = ErrorCode.STORE_UNAVAILABLE
    retryable = True

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Integration store unavailable during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
