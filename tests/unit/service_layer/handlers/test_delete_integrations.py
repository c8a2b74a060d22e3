"""Unit tests for the delete_integrations handler."""

import pytest

from herald.domain.channels import ChannelType
from herald.domain.errors import UnknownChannelError
from herald.interfaces.environment_directory import InvalidEnvironmentError
from herald.service_layer.commands import CallerContext, DeleteIntegrations
from tests.fixtures.datagen import (
    DEV_ENV_ID,
    ORG_ID,
    OTHER_ENV_ID,
    OTHER_ORG_ID,
    PROD_ENV_ID,
)

from .base import HandlerTestBase

CALLER = CallerContext(organization_id=ORG_ID, environment_id=DEV_ENV_ID)


class TestDeleteIntegrations(HandlerTestBase):
    """Bulk deletion scoped to the caller's organization."""

    seed_uses = ("make_integration",)

    def _seed_bus(self, request) -> None:
        make = self.fx.make_integration
        self.dev_email, self.dev_sms, self.prod_email, self.foreign = self.seed(
            make(),
            make(
                channel=ChannelType.SMS,
                provider_id="twilio",
                name="Twilio",
                credentials={},
            ),
            make(environment_id=PROD_ENV_ID),
            make(organization_id=OTHER_ORG_ID, environment_id=OTHER_ENV_ID),
        )

    def remaining_ids(self) -> set[str]:
        """Ids of every integration still stored, any organization."""
        return {i.id for i in self.stored()}

    def test_delete_in_environment(self):
        """Only the targeted environment is emptied."""
        deleted = self.bus.handle(
            DeleteIntegrations(context=CALLER, environment_id=DEV_ENV_ID)
        )

        assert deleted == 2
        assert self.remaining_ids() == {self.prod_email.id, self.foreign.id}
        self.assert_committed()

    def test_delete_by_channel_across_environments(self):
        """Without an environment every environment of the organization matches."""
        deleted = self.bus.handle(DeleteIntegrations(context=CALLER, channel="EMAIL"))

        assert deleted == 2
        assert self.remaining_ids() == {self.dev_sms.id, self.foreign.id}

    def test_delete_by_provider(self):
        """The provider filter narrows the deletion."""
        deleted = self.bus.handle(
            DeleteIntegrations(context=CALLER, provider_id="twilio")
        )

        assert deleted == 1
        assert self.dev_sms.id not in self.remaining_ids()

    def test_other_organizations_are_never_touched(self):
        """Deleting everything of one organization spares the others."""
        self.bus.handle(DeleteIntegrations(context=CALLER))

        assert self.remaining_ids() == {self.foreign.id}

    def test_nothing_to_delete_returns_zero(self):
        """Deleting is idempotent."""
        self.bus.handle(DeleteIntegrations(context=CALLER, environment_id=DEV_ENV_ID))

        assert (
            self.bus.handle(
                DeleteIntegrations(context=CALLER, environment_id=DEV_ENV_ID)
            )
            == 0
        )

    def test_foreign_environment_is_rejected(self):
        """Another organization's environment cannot be targeted."""
        with pytest.raises(InvalidEnvironmentError):
            self.bus.handle(
                DeleteIntegrations(context=CALLER, environment_id=OTHER_ENV_ID)
            )

        assert self.foreign.id in self.remaining_ids()

    def test_unknown_channel_is_rejected(self):
        """Channel names are validated before anything is deleted."""
        with pytest.raises(UnknownChannelError):
            self.bus.handle(DeleteIntegrations(context=CALLER, channel="fax"))

        assert len(self.remaining_ids()) == 4
