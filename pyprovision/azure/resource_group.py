# This file is part of pyprovision. See LICENSE file for license information.
"""Azure resource group provisioning."""
import contextlib
import logging
from typing import Callable, Optional, Tuple

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.mgmt.resource import ResourceManagementClient

from pyprovision.azure import util
from pyprovision.config import DEFAULT_LOCATION
from pyprovision.errors import ProvisioningError, ResourceType
from pyprovision.types import Credential, ResourceGroup
from pyprovision.util import unique_name

RESOURCE_GROUP_PREFIX = "sample-rg"
TAG = "pyprovision"

Cleanup = Callable[[], None]


def _noop():
    """Nothing was created, so nothing to delete."""


class ResourceGroupProvisioner:
    """Create the resource group sandboxing a run, and delete it after."""

    def __init__(
        self,
        credential: Credential,
        subscription_id: str,
        location: str = DEFAULT_LOCATION,
        *,
        delete_timeout: Optional[int] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize the provisioner.

        Args:
            credential: Credential shared by the run
            subscription_id: subscription the group is created in
            location: Azure region of the group
            delete_timeout: seconds to wait for the deletion to finish.
                None returns as soon as the deletion was requested.
            log: logger to use, defaults to this module's
        """
        self._log = log or logging.getLogger(__name__)
        self.location = location
        self.delete_timeout = delete_timeout
        self.resource_client = util.get_client(
            ResourceManagementClient, credential, subscription_id
        )

    def create(self) -> Tuple[ResourceGroup, Cleanup]:
        """Create a resource group with a name unique to this run.

        Every other component of the run is contained into this resource
        group, so deleting it deletes all of them.

        Returns:
            A tuple of the created group and the function deleting it

        Raises:
            ProvisioningError: if Azure refuses to create the group

        """
        name = unique_name(RESOURCE_GROUP_PREFIX)
        self._log.debug("Creating Azure resource group %s", name)
        try:
            created = self.resource_client.resource_groups.create_or_update(
                name,
                {"location": self.location, "tags": {"name": TAG}},
            )
        except AzureError as e:
            raise ProvisioningError(
                ResourceType.RESOURCE_GROUP, util.describe_error(e), name
            ) from e

        group = ResourceGroup(
            name=created.name, location=created.location, id=created.id
        )
        return group, self._deleter(group.name)

    def create_or_noop(self) -> Tuple[Optional[ResourceGroup], Cleanup]:
        """Like `create`, but log a failure and hand back a no-op cleanup."""
        try:
            return self.create()
        except ProvisioningError as e:
            self._log.error("could not create resource group. Error: %s", e)
            return None, _noop

    def _deleter(self, name: str) -> Cleanup:
        deleted = False

        def delete():
            nonlocal deleted
            if deleted:
                return
            deleted = True
            self.delete(name)

        return delete

    def delete(self, name: str):
        """Request the deletion of a resource group.

        Deletion is best effort: failures are logged and never raised, as
        this runs while the program is already on its way out.

        Args:
            name: string, name of the group to delete

        """
        self._log.debug("Deleting Azure resource group %s", name)
        try:
            with contextlib.suppress(ResourceNotFoundError):
                poller = self.resource_client.resource_groups.begin_delete(
                    resource_group_name=name
                )
                if self.delete_timeout is None:
                    return
                poller.wait(timeout=self.delete_timeout)
                if not poller.done():
                    self._log.warning(
                        "Resource group %s not deleted after %s seconds",
                        name,
                        self.delete_timeout,
                    )
        except AzureError as e:
            self._log.warning(
                "could not delete resource group %s: %s",
                name,
                util.describe_error(e),
            )
