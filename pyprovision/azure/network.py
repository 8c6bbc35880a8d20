# This file is part of pyprovision. See LICENSE file for license information.
"""Azure network interface provisioning."""
import logging
from typing import Optional

from azure.core.exceptions import AzureError
from azure.mgmt.network import NetworkManagementClient

from pyprovision.azure import util
from pyprovision.config import DEFAULT_LOCATION
from pyprovision.errors import ProvisioningError, ResourceType
from pyprovision.types import Credential, NetworkInterface
from pyprovision.util import unique_name

NETWORK_INTERFACE_PREFIX = "sample-nic"


class NetworkProvisioner:
    """Create the network interface the virtual machine is attached to."""

    def __init__(
        self,
        credential: Credential,
        subscription_id: str,
        location: str = DEFAULT_LOCATION,
        *,
        subnet_id: Optional[str] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize the provisioner.

        Args:
            credential: Credential shared by the run
            subscription_id: subscription the interface is created in
            location: Azure region of the interface
            subnet_id: optional id of an existing subnet to join. Without
                it the IP configuration is left for Azure to fill in.
            log: logger to use, defaults to this module's
        """
        self._log = log or logging.getLogger(__name__)
        self.location = location
        self.subnet_id = subnet_id
        self.network_client = util.get_client(
            NetworkManagementClient, credential, subscription_id
        )

    def _create_nic_parameters(self, name):
        ip_configuration = {"name": "{}-ipconfig".format(name)}
        if self.subnet_id:
            ip_configuration["subnet"] = {"id": self.subnet_id}
        return {
            "location": self.location,
            "ip_configurations": [ip_configuration],
        }

    def create(self, resource_group: str) -> NetworkInterface:
        """Create a network interface and fetch it back by name.

        Args:
            resource_group: string, name of the group to create it in

        Returns:
            The network interface as stored by Azure

        Raises:
            ProvisioningError: if either the creation or the fetch fails

        """
        name = unique_name(NETWORK_INTERFACE_PREFIX)
        interfaces = self.network_client.network_interfaces
        self._log.debug("Creating Azure network interface %s", name)
        try:
            interfaces.begin_create_or_update(
                resource_group, name, self._create_nic_parameters(name)
            ).result()
            nic = interfaces.get(resource_group, name)
        except AzureError as e:
            raise ProvisioningError(
                ResourceType.NETWORK_INTERFACE, util.describe_error(e), name
            ) from e

        self._log.debug("Created network interface with id: %s", nic.id)
        return NetworkInterface(
            name=nic.name, resource_group=resource_group, id=nic.id
        )
