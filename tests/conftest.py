import logging
from types import SimpleNamespace

import mock
import pytest
from azure.core.credentials import AccessToken
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.network import NetworkManagementClient
from azure.mgmt.resource import ResourceManagementClient

from pyprovision.types import Credential

logging.basicConfig(level=logging.NOTSET)

SUBSCRIPTION_ID = "11111111-1111-1111-1111-111111111111"
TENANT_ID = "22222222-2222-2222-2222-222222222222"


def _resource_id(rg, provider, name):
    return "/subscriptions/{}/resourceGroups/{}/providers/{}/{}".format(
        SUBSCRIPTION_ID, rg, provider, name
    )


def _create_group(name, parameters):
    return SimpleNamespace(
        name=name,
        location=parameters["location"],
        id="/subscriptions/{}/resourceGroups/{}".format(SUBSCRIPTION_ID, name),
    )


def _get_nic(resource_group_name, name):
    return SimpleNamespace(
        name=name,
        id=_resource_id(
            resource_group_name,
            "Microsoft.Network/networkInterfaces",
            name,
        ),
    )


def _get_vm(resource_group_name, name, expand=None):
    return SimpleNamespace(
        name=name,
        id=_resource_id(
            resource_group_name, "Microsoft.Compute/virtualMachines", name
        ),
        provisioning_state="Succeeded",
        os_profile=SimpleNamespace(computer_name=name),
        instance_view=SimpleNamespace(
            statuses=[
                SimpleNamespace(
                    code="ProvisioningState/succeeded",
                    display_status="Provisioning succeeded",
                ),
                SimpleNamespace(
                    code="PowerState/running", display_status="VM running"
                ),
            ]
        ),
    )


@pytest.fixture(name="credential")
def credential_fixture():
    """Credential as handed out by a successful device code sign in."""
    return Credential(
        token_credential=mock.MagicMock(),
        access_token=AccessToken("token", 1700000000),
    )


@pytest.fixture(name="clients")
def clients_fixture(mocker):
    """Replace every Azure management client with a mock.

    The mocks answer like Azure does when every call succeeds.
    """
    resource_client = mock.MagicMock()
    resource_client.resource_groups.create_or_update.side_effect = (
        _create_group
    )
    network_client = mock.MagicMock()
    network_client.network_interfaces.get.side_effect = _get_nic
    compute_client = mock.MagicMock()
    compute_client.virtual_machines.get.side_effect = _get_vm

    clients = {
        ResourceManagementClient: resource_client,
        NetworkManagementClient: network_client,
        ComputeManagementClient: compute_client,
    }
    get_client = mocker.patch(
        "pyprovision.azure.util.get_client",
        side_effect=lambda resource, *_args, **_kwargs: clients[resource],
    )
    return SimpleNamespace(
        get_client=get_client,
        resource=resource_client,
        network=network_client,
        compute=compute_client,
    )


@pytest.fixture(autouse=True)
def restore_azure_logger():
    """Undo the handlers `setup_logging` puts on the azure SDK logger."""
    azure_logger = logging.getLogger("azure")
    handlers = list(azure_logger.handlers)
    level = azure_logger.level
    propagate = azure_logger.propagate
    yield
    azure_logger.handlers = handlers
    azure_logger.setLevel(level)
    azure_logger.propagate = propagate
