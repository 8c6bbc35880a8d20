"""Tests related to pyprovision.azure.compute module."""
import re
import threading

import mock
import pytest
from azure.core.exceptions import HttpResponseError

from pyprovision.azure.compute import ComputeProvisioner
from pyprovision.errors import ProvisioningError, ResourceType

SUBSCRIPTION_ID = "11111111-1111-1111-1111-111111111111"


@pytest.fixture(name="provisioner")
def provisioner_fixture(clients, credential):
    return ComputeProvisioner(credential, SUBSCRIPTION_ID, "westus2")


# Disable this one because we're intentionally testing a protected member
# pylint: disable=protected-access
class TestCreateVmParameters:
    def test_fixed_shape(self, provisioner):
        params = provisioner._create_vm_parameters("vm", "/nics/nic")
        assert params == {
            "location": "westus2",
            "hardware_profile": {"vm_size": "Basic_A0"},
            "storage_profile": {
                "image_reference": {
                    "publisher": "Canonical",
                    "offer": "0001-com-ubuntu-server-jammy",
                    "sku": "22_04-lts",
                    "version": "latest",
                }
            },
            "os_profile": {
                "computer_name": "vm",
                "admin_username": "azureuser",
                "admin_password": "azureRocksWithPython1!",
                "linux_configuration": {
                    "disable_password_authentication": False,
                },
            },
            "network_profile": {
                "network_interfaces": [{"id": "/nics/nic", "primary": True}],
            },
        }

    def test_custom_image(self, clients, credential):
        image_id = "/subscriptions/x/resourceGroups/y/images/z"
        provisioner = ComputeProvisioner(
            credential, SUBSCRIPTION_ID, image_id=image_id
        )
        params = provisioner._create_vm_parameters("vm", "/nics/nic")
        assert params["storage_profile"]["image_reference"] == {"id": image_id}


class TestCreate:
    def test_create(self, clients, provisioner):
        vm = provisioner.create("rg")

        assert re.fullmatch(r"sample-vm[0-9a-f]{32}", vm.name)
        assert vm.computer_name == vm.name
        assert vm.size == "Basic_A0"
        assert vm.admin_username == "azureuser"
        assert vm.provisioning_state == "Succeeded"
        assert vm.power_state == "VM running"

        nic_name = clients.network.network_interfaces.get.call_args[0][1]
        assert vm.network_interface_id.endswith("/" + nic_name)

        virtual_machines = clients.compute.virtual_machines
        args = virtual_machines.begin_create_or_update.call_args[0]
        assert args[0] == "rg"
        assert args[1] == vm.name
        assert args[2]["network_profile"]["network_interfaces"] == [
            {"id": vm.network_interface_id, "primary": True}
        ]
        virtual_machines.get.assert_called_once_with(
            "rg", vm.name, expand="instanceView"
        )

    def test_names_are_unique(self, provisioner):
        assert provisioner.create("rg").name != provisioner.create("rg").name

    def test_network_failure_skips_vm(self, clients, provisioner):
        clients.network.network_interfaces.get.side_effect = HttpResponseError(
            message="NotFound"
        )
        with pytest.raises(ProvisioningError) as excinfo:
            provisioner.create("rg")

        assert excinfo.value.resource_type == ResourceType.NETWORK_INTERFACE
        assert not clients.compute.virtual_machines.begin_create_or_update.called

    def test_create_failure(self, clients, provisioner):
        clients.compute.virtual_machines.begin_create_or_update.side_effect = (
            HttpResponseError(message="SkuNotAvailable")
        )
        with pytest.raises(ProvisioningError) as excinfo:
            provisioner.create("rg")

        assert excinfo.value.resource_type == ResourceType.VIRTUAL_MACHINE
        assert "SkuNotAvailable" in str(excinfo.value)
        assert not clients.compute.virtual_machines.get.called

    def test_fetch_failure(self, clients, provisioner):
        clients.compute.virtual_machines.get.side_effect = HttpResponseError(
            message="NotFound"
        )
        with pytest.raises(ProvisioningError, match="NotFound"):
            provisioner.create("rg")

    def test_unset_cancel_is_ignored(self, clients, provisioner):
        vm = provisioner.create("rg", cancel=threading.Event())
        assert vm.name

    def test_cancelled(self, clients, provisioner):
        poller = clients.compute.virtual_machines.begin_create_or_update.return_value
        poller.done.return_value = False
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(ProvisioningError, match="cancelled"):
            provisioner.create("rg", cancel=cancel)
        assert not clients.compute.virtual_machines.get.called

    @mock.patch("pyprovision.azure.compute.time.monotonic")
    def test_timeout(self, m_monotonic, clients, credential):
        m_monotonic.side_effect = [0, 5, 11]
        poller = clients.compute.virtual_machines.begin_create_or_update.return_value
        poller.done.return_value = False
        provisioner = ComputeProvisioner(
            credential, SUBSCRIPTION_ID, provisioning_timeout=10
        )

        with pytest.raises(ProvisioningError, match="timed out after 10"):
            provisioner.create("rg")
        poller.wait.assert_called_once_with(5)
