# This file is part of pyprovision. See LICENSE file for license information.
"""Azure virtual machine provisioning."""
import logging
import threading
import time
from typing import Optional

from azure.core.exceptions import AzureError
from azure.mgmt.compute import ComputeManagementClient

from pyprovision.azure import util
from pyprovision.azure.network import NetworkProvisioner
from pyprovision.config import (
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    DEFAULT_IMAGE_ID,
    DEFAULT_LOCATION,
    DEFAULT_VM_SIZE,
)
from pyprovision.errors import ProvisioningError, ResourceType
from pyprovision.types import Credential, VirtualMachine
from pyprovision.util import unique_name

VM_PREFIX = "sample-vm"
POLL_INTERVAL = 5


class ComputeProvisioner:
    """Create a virtual machine along with its network interface."""

    def __init__(
        self,
        credential: Credential,
        subscription_id: str,
        location: str = DEFAULT_LOCATION,
        *,
        vm_size: str = DEFAULT_VM_SIZE,
        image_id: str = DEFAULT_IMAGE_ID,
        admin_username: str = DEFAULT_ADMIN_USERNAME,
        admin_password: str = DEFAULT_ADMIN_PASSWORD,
        provisioning_timeout: Optional[int] = None,
        network: Optional[NetworkProvisioner] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize the provisioner.

        Args:
            credential: Credential shared by the run
            subscription_id: subscription the machine is created in
            location: Azure region of the machine
            vm_size: string, size class of the machine
            image_id: string, marketplace image as
                publisher:offer:sku[:version], or a custom image id
            admin_username: string, user created on the machine
            admin_password: string, password of that user
            provisioning_timeout: int, seconds to wait for the machine,
                defaults to None i.e. use Azure's default
            network: NetworkProvisioner creating the interface, built from
                the same credential when not given
            log: logger to use, defaults to this module's
        """
        self._log = log or logging.getLogger(__name__)
        self.location = location
        self.vm_size = vm_size
        self.image_id = image_id
        self.admin_username = admin_username
        self.admin_password = admin_password
        self.provisioning_timeout = provisioning_timeout
        self.network = network or NetworkProvisioner(
            credential, subscription_id, location, log=self._log
        )
        self.compute_client = util.get_client(
            ComputeManagementClient, credential, subscription_id
        )

    def _create_vm_parameters(self, name, nic_id):
        """Compose the dict used to provision the virtual machine.

        Args:
            name: string, The name of the virtual machine.
            nic_id: string, id of the network interface to attach.

        Returns:
            A dict containing the parameters to provision a virtual machine.

        """
        return {
            "location": self.location,
            "hardware_profile": {"vm_size": self.vm_size},
            "storage_profile": {
                "image_reference": util.get_image_reference_params(
                    self.image_id
                ),
            },
            "os_profile": {
                "computer_name": name,
                "admin_username": self.admin_username,
                "admin_password": self.admin_password,
                "linux_configuration": {
                    "disable_password_authentication": False,
                },
            },
            "network_profile": {
                "network_interfaces": [{"id": nic_id, "primary": True}],
            },
        }

    def _wait(self, poller, name, cancel: Optional[threading.Event]):
        start = time.monotonic()
        while not poller.done():
            if cancel is not None and cancel.is_set():
                raise ProvisioningError(
                    ResourceType.VIRTUAL_MACHINE, "creation cancelled", name
                )
            if self.provisioning_timeout is not None:
                remaining = self.provisioning_timeout - (
                    time.monotonic() - start
                )
                if remaining <= 0:
                    raise ProvisioningError(
                        ResourceType.VIRTUAL_MACHINE,
                        "creation timed out after {} seconds".format(
                            self.provisioning_timeout
                        ),
                        name,
                    )
                poller.wait(min(POLL_INTERVAL, remaining))
            else:
                poller.wait(POLL_INTERVAL)
        return poller.result()

    def create(
        self, resource_group: str, cancel: Optional[threading.Event] = None
    ) -> VirtualMachine:
        """Create a virtual machine and fetch back its instance view.

        The network interface is created first; if that fails the machine
        is never requested.

        Args:
            resource_group: string, name of the group to create it in
            cancel: optional event, abandons the wait once set

        Returns:
            The virtual machine as stored by Azure

        Raises:
            ProvisioningError: if any creation or fetch fails

        """
        nic = self.network.create(resource_group)

        name = unique_name(VM_PREFIX)
        params = self._create_vm_parameters(name, nic.id)
        virtual_machines = self.compute_client.virtual_machines
        self._log.debug("Creating Azure virtual machine: %s", name)
        try:
            poller = virtual_machines.begin_create_or_update(
                resource_group, name, params
            )
            self._wait(poller, name, cancel)
            vm = virtual_machines.get(
                resource_group, name, expand="instanceView"
            )
        except AzureError as e:
            raise ProvisioningError(
                ResourceType.VIRTUAL_MACHINE, util.describe_error(e), name
            ) from e

        return self._to_virtual_machine(vm, nic.id)

    def _to_virtual_machine(self, vm, nic_id) -> VirtualMachine:
        power_state = None
        instance_view = vm.instance_view
        if instance_view is not None:
            for status in instance_view.statuses or []:
                if (status.code or "").startswith("PowerState/"):
                    power_state = status.display_status
        self._log.debug(
            "Virtual machine %s attached to %s",
            vm.name,
            util.get_resource_name_from_id(nic_id),
        )
        return VirtualMachine(
            name=vm.name,
            size=self.vm_size,
            computer_name=vm.os_profile.computer_name
            if vm.os_profile
            else vm.name,
            admin_username=self.admin_username,
            network_interface_id=nic_id,
            id=vm.id,
            provisioning_state=vm.provisioning_state,
            power_state=power_state,
        )
