"""Exceptions for environment directory operations."""

from herald.domain.errors import ErrorCode, HeraldError


class EnvironmentDirectoryError(HeraldError):
    """Base class for environment directory errors."""


class InvalidEnvironmentError(EnvironmentDirectoryError):
    """The environment does not exist or is not owned by the caller's organization.

    Attributes:
        environment_id (str): The requested environment.
        organization_id (str): The caller's organization.
    """

    code = ErrorCode.INVALID_ENVIRONMENT

    def __init__(self, environment_id: str, organization_id: str) -> None:
        super().__init__(
            f"Environment ({environment_id}) is not available "
            f"for organization ({organization_id})"
        )
        self.environment_id = environment_id
        self.organization_id = organization_id


class EnvironmentAlreadyExistsError(EnvironmentDirectoryError):
    """Conflict: the organization already has an environment with this name or id."""

    code = ErrorCode.ENVIRONMENT_CONFLICT

    def __init__(self, organization_id: str, name: str) -> None:
        super().__init__(
            f"Environment '{name}' already exists for organization ({organization_id})"
        )
        self.organization_id = organization_id
        self.name = name
