"""Test the errors.py module."""
import pytest

from pyprovision.errors import (
    ArgumentError,
    ConfigError,
    ProvisioningError,
    ResourceType,
)


class TestResourceType:
    """Tests related to `ResourceType`."""

    @pytest.mark.parametrize(
        "item",
        list(map(lambda item: pytest.param(item, id=item.name), ResourceType)),
    )
    def test_str_representable(self, item):
        """Test that all instances of `ResourceType` are convertible to str."""
        assert str(item)


class TestProvisioningError:
    """Tests related to `ProvisioningError`."""

    @pytest.mark.parametrize(
        ["exception", "expected_msg"],
        [
            (
                ProvisioningError(
                    ResourceType.VIRTUAL_MACHINE, "QuotaExceeded: no", "vm"
                ),
                "Could not provision virtual machine: name=vm: "
                "QuotaExceeded: no",
            ),
            (
                ProvisioningError(ResourceType.RESOURCE_GROUP, "denied"),
                "Could not provision resource group: denied",
            ),
            (
                ProvisioningError(ResourceType.NETWORK_INTERFACE),
                "Could not provision network interface",
            ),
        ],
    )
    def test_exception_message(self, exception, expected_msg):
        """Test that exceptions have correct error messages."""
        assert expected_msg == str(exception)


class TestArgumentError:
    """Tests related to `ArgumentError`."""

    def test_malformed_value(self):
        e = ArgumentError("Tenant ID", "abc")
        assert "'abc' doesn't look like an Azure Tenant ID" in str(e)

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_value(self, value):
        e = ArgumentError("Subscription ID", value)
        assert str(e) == (
            "No Azure Subscription ID was provided. A uuid is expected."
        )


class TestConfigError:
    """Tests related to `ConfigError`."""

    def test_message(self):
        e = ConfigError("provisioning_timeout", "1800s", "a positive integer")
        assert str(e) == (
            "provisioning_timeout must be a positive integer, got '1800s'"
        )
