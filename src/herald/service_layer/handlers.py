"""Service layer handlers."""

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from herald.config import ActiveProviderPolicy, Settings
from herald.domain.channels import ChannelType, parse_channel
from herald.domain.credentials import check_shape, validate_credentials
from herald.domain.environment import Environment
from herald.domain.errors import ActiveProviderConflictError
from herald.domain.integration import Integration
from herald.domain.limits import check_length
from herald.domain.providers import ProviderDescriptor
from herald.domain.unsettable import IntegrationPatch, is_set
from herald.interfaces.environment_directory import InvalidEnvironmentError
from herald.interfaces.id_generator import IdGenerator
from herald.interfaces.integration_store import (
    IdentifierConflictError,
    IntegrationFilter,
    IntegrationNotFoundError,
)
from herald.interfaces.provider_catalog import ProviderCatalog
from herald.interfaces.provider_probe import ProviderProbe
from herald.interfaces.unit_of_work import AbstractUnitOfWork
from herald.utils.slugify import slugify

from . import commands, queries
from .commands import CallerContext

# pylint: disable=too-many-arguments,too-many-positional-arguments

logger = logging.getLogger(__name__)

#: Attempts at generating a free identifier before giving up with a conflict.
MAX_IDENTIFIER_ATTEMPTS = 5
#: Length of the unique suffix appended to generated identifiers.
IDENTIFIER_SUFFIX_LENGTH = 6

# ============================================================================
#                               Helpers
# ============================================================================


def _resolve_environment(
    uow: AbstractUnitOfWork, context: CallerContext, environment_id: str | None
) -> Environment:
    """Return the targeted environment if the caller's organization owns it."""
    target = environment_id or context.environment_id
    environment = uow.environments.get(target)
    if environment is None or not environment.is_owned_by(context.organization_id):
        raise InvalidEnvironmentError(target, context.organization_id)
    return environment


def generate_identifier(display_name: str, id_generator: IdGenerator) -> str:
    """Build ``<slug(display name)>-<short unique suffix>``."""
    suffix = id_generator.new_suffix(IDENTIFIER_SUFFIX_LENGTH)
    return f"{slugify(display_name)}-{suffix}"


def _ensure_identifier_free(
    uow: AbstractUnitOfWork, environment_id: str, identifier: str, own_id: str | None
) -> None:
    taken = uow.integrations.find_many(
        IntegrationFilter(environment_id=environment_id, identifier=identifier)
    )
    if any(existing.id != own_id for existing in taken):
        raise IdentifierConflictError(environment_id, identifier)


def _active_competitors(
    uow: AbstractUnitOfWork,
    catalog: ProviderCatalog,
    settings: Settings,
    candidate: Integration,
) -> list[Integration]:
    """Return the integrations that must be deactivated for `candidate` to be active.

    Raises:
        ActiveProviderConflictError: If there are some and the policy is REJECT.
    """
    if settings.multi_provider_enabled:
        return []
    if catalog.is_built_in(candidate.channel, candidate.provider_id):
        return []

    competitors = [
        other
        for other in uow.integrations.find_many(
            IntegrationFilter(
                organization_id=candidate.organization_id,
                environment_id=candidate.environment_id,
                channel=candidate.channel,
                active=True,
            )
        )
        if other.id != candidate.id
        and not catalog.is_built_in(other.channel, other.provider_id)
    ]
    if competitors and settings.active_provider_policy is ActiveProviderPolicy.REJECT:
        raise ActiveProviderConflictError(
            candidate.channel.value,
            candidate.environment_id,
            tuple(other.id for other in competitors),
        )
    return competitors


def _deactivate(uow: AbstractUnitOfWork, integrations: list[Integration]) -> None:
    for integration in integrations:
        uow.integrations.update(integration.deactivate())
        logger.info(
            "Deactivated integration %s (%s) on %s in environment %s",
            integration.id,
            integration.provider_id,
            integration.channel.value,
            integration.environment_id,
        )


def _probe(
    probe: ProviderProbe,
    descriptor: ProviderDescriptor,
    credentials: Any,
    check: bool,
    active: bool,
) -> None:
    if not (check and active):
        return
    logger.debug("Checking provider %s before activation", descriptor.provider_id)
    probe.verify(descriptor, credentials)


# ============================================================================
#                       Integration Management Handlers
# ============================================================================


def create_integration(
    cmd: commands.CreateIntegration,
    uow: AbstractUnitOfWork,
    catalog: ProviderCatalog,
    settings: Settings,
    id_generator: IdGenerator,
    probe: ProviderProbe,
) -> Integration:
    """Create an integration after validating provider, scope and credentials.

    Validation runs in order: provider lookup, environment resolution,
    credential check, name and identifier lengths, optional probe, identifier
    availability, single-active policy. Nothing is written unless every step
    passes.
    """
    descriptor = catalog.lookup(cmd.channel, cmd.provider_id)
    active = bool(cmd.active)

    with uow:
        environment = _resolve_environment(uow, cmd.context, cmd.environment_id)
        credentials = check_shape(cmd.credentials)
        validate_credentials(descriptor, credentials, active)

        name = check_length("name", (cmd.name or "").strip() or descriptor.display_name)
        explicit_identifier = (cmd.identifier or "").strip() or None
        if explicit_identifier is not None:
            check_length("identifier", explicit_identifier)

        _probe(probe, descriptor, credentials, cmd.check, active)
        if explicit_identifier is not None:
            _ensure_identifier_free(uow, environment.id, explicit_identifier, None)

        candidate = Integration(
            id=id_generator.new_id(),
            identifier=explicit_identifier
            or generate_identifier(descriptor.display_name, id_generator),
            organization_id=cmd.context.organization_id,
            environment_id=environment.id,
            channel=descriptor.channel,
            provider_id=descriptor.provider_id,
            name=name,
            credentials=credentials,
            active=active,
        )
        competitors = (
            _active_competitors(uow, catalog, settings, candidate) if active else []
        )

        attempt = 1
        while True:
            try:
                stored = uow.integrations.create(candidate)
                break
            except IdentifierConflictError:
                if (
                    explicit_identifier is not None
                    or attempt >= MAX_IDENTIFIER_ATTEMPTS
                ):
                    raise
                attempt += 1
                candidate = replace(
                    candidate,
                    identifier=generate_identifier(
                        descriptor.display_name, id_generator
                    ),
                )
                logger.debug(
                    "Identifier collision; retrying with %s (attempt %d)",
                    candidate.identifier,
                    attempt,
                )

        _deactivate(uow, competitors)
        uow.commit()

    logger.info(
        "Created integration %s (%s/%s) in environment %s, active=%s",
        stored.id,
        stored.channel.value,
        stored.provider_id,
        stored.environment_id,
        stored.active,
    )
    return stored


def update_integration(
    cmd: commands.UpdateIntegration,
    uow: AbstractUnitOfWork,
    catalog: ProviderCatalog,
    settings: Settings,
    probe: ProviderProbe,
) -> Integration:
    """Apply a tri-state patch to an integration of the caller's organization."""
    with uow:
        current = uow.integrations.get(cmd.integration_id)
        if current is None or current.organization_id != cmd.context.organization_id:
            raise IntegrationNotFoundError(cmd.integration_id)
        descriptor = catalog.lookup(current.channel, current.provider_id)

        patch = IntegrationPatch(current.id)
        name = check_length("name", patch.required("name", cmd.name, current.name))
        identifier = check_length(
            "identifier",
            patch.required("identifier", cmd.identifier, current.identifier),
        )
        active = patch.required("active", cmd.active, current.active)
        credentials = check_shape(
            patch.credentials(cmd.credentials, current.credentials)
        )

        validate_credentials(descriptor, credentials, active)
        if is_set(cmd.identifier) and identifier != current.identifier:
            _ensure_identifier_free(uow, current.environment_id, identifier, current.id)

        becomes_active = active and not current.active
        _probe(probe, descriptor, credentials, cmd.check, active)

        updated = replace(
            current,
            name=name,
            identifier=identifier,
            credentials=credentials,
            active=active,
        )
        competitors = (
            _active_competitors(uow, catalog, settings, updated)
            if becomes_active
            else []
        )
        stored = uow.integrations.update(updated)
        _deactivate(uow, competitors)
        uow.commit()

    logger.info("Updated integration %s, active=%s", stored.id, stored.active)
    return stored


def delete_integrations(
    cmd: commands.DeleteIntegrations, uow: AbstractUnitOfWork
) -> int:
    """Delete the organization's integrations matching the command's filter."""
    channel: ChannelType | None = None
    if cmd.channel is not None:
        channel = parse_channel(cmd.channel)

    with uow:
        if cmd.environment_id is not None:
            _resolve_environment(uow, cmd.context, cmd.environment_id)
        deleted = uow.integrations.delete_many(
            IntegrationFilter(
                organization_id=cmd.context.organization_id,
                environment_id=cmd.environment_id,
                channel=channel,
                provider_id=cmd.provider_id,
            )
        )
        uow.commit()

    logger.info(
        "Deleted %d integration(s) of organization %s",
        deleted,
        cmd.context.organization_id,
    )
    return deleted


# ============================================================================
#                       Environment Management Handlers
# ============================================================================


def create_environment(
    cmd: commands.CreateEnvironment,
    uow: AbstractUnitOfWork,
    catalog: ProviderCatalog,
    id_generator: IdGenerator,
) -> Environment:
    """Register an environment and seed one active integration per built-in provider."""
    with uow:
        environment = uow.environments.add(
            Environment(
                id=id_generator.new_id(),
                organization_id=cmd.organization_id,
                name=check_length("name", cmd.name),
            )
        )
        if cmd.seed_built_in:
            for descriptor in catalog.built_in_providers():
                seeded = uow.integrations.create(
                    Integration(
                        id=id_generator.new_id(),
                        identifier=generate_identifier(
                            descriptor.display_name, id_generator
                        ),
                        organization_id=cmd.organization_id,
                        environment_id=environment.id,
                        channel=descriptor.channel,
                        provider_id=descriptor.provider_id,
                        name=descriptor.display_name,
                        active=True,
                    )
                )
                logger.debug(
                    "Seeded built-in integration %s (%s)",
                    seeded.identifier,
                    seeded.provider_id,
                )
        uow.commit()

    logger.info(
        "Created environment %s (%s) for organization %s",
        environment.id,
        environment.name,
        environment.organization_id,
    )
    return environment


# ============================================================================
#                               Query Handlers
# ============================================================================


def list_integrations(
    query: queries.ListIntegrations, uow: AbstractUnitOfWork
) -> list[Integration]:
    """Return the organization's integrations, built-in ones included."""
    channel: ChannelType | None = None
    if query.channel is not None:
        channel = parse_channel(query.channel)

    with uow:
        if query.environment_id is not None:
            _resolve_environment(uow, query.context, query.environment_id)
        return uow.integrations.find_many(
            IntegrationFilter(
                organization_id=query.context.organization_id,
                environment_id=query.environment_id,
                channel=channel,
                active=query.active,
            )
        )


def list_environments(
    query: queries.ListEnvironments, uow: AbstractUnitOfWork
) -> list[Environment]:
    """Return the organization's environments in creation order."""
    with uow:
        return uow.environments.list(query.organization_id)


def list_providers(
    query: queries.ListProviders, catalog: ProviderCatalog
) -> list[ProviderDescriptor]:
    """Return the catalog's providers, optionally for one channel."""
    return catalog.providers(query.channel)


COMMAND_HANDLERS: dict[type[commands.Command], Callable[..., Any]] = {
    commands.CreateIntegration: create_integration,
    commands.UpdateIntegration: update_integration,
    commands.DeleteIntegrations: delete_integrations,
    commands.CreateEnvironment: create_environment,
}

QUERY_HANDLERS: dict[type[queries.Query], Callable[..., Any]] = {
    queries.ListIntegrations: list_integrations,
    queries.ListEnvironments: list_environments,
    queries.ListProviders: list_providers,
}
