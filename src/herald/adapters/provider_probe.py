"""Provider probe adapters."""

import logging

from herald.domain.integration import Credentials
from herald.domain.providers import ProviderDescriptor
from herald.interfaces.provider_probe import ProviderProbe

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class NullProviderProbe(ProviderProbe):
    """Probe that accepts every provider without contacting it.

    HERALD does not deliver messages itself, so there is no transport to probe
    with; deployments that can reach providers plug in their own ProviderProbe.
    """

    def verify(self, descriptor: ProviderDescriptor, credentials: Credentials) -> None:
        logger.debug(
            "Skipping connectivity check for %s/%s (%d credential fields)",
            descriptor.channel.value,
            descriptor.provider_id,
            len(credentials),
        )
