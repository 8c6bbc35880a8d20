# This file is part of pyprovision. See LICENSE file for license information.
"""Module containing pyprovision errors."""

import enum
from typing import Optional


class PyprovisionException(Exception):
    """Root pyprovision exception.

    This exception is not meant to be raised by pyprovision. The intention
    is that every custom pyprovision exception will inherit from this one,
    allowing client code to catch any exception by catching this one.
    """


class ArgumentError(PyprovisionException):
    """Raised when user input does not have the expected shape.

    Examples:
    ---------
    >>> e = ArgumentError("Subscription ID", "not-a-uuid")
    >>> e.value
    'not-a-uuid'
    >>> raise e  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyprovision.errors.ArgumentError: \
'not-a-uuid' doesn't look like an Azure Subscription ID. A uuid is expected.
    """

    def __init__(self, name: str, value: Optional[str]):
        """Init method.

        :param name: Human readable name of the argument
        :param value: The raw value that failed validation
        """
        super().__init__()
        self.name = name
        self.value = value

    def __str__(self) -> str:  # noqa: D105
        if not self.value:
            return f"No Azure {self.name} was provided. A uuid is expected."
        return (
            f"'{self.value}' doesn't look like an Azure {self.name}. "
            "A uuid is expected."
        )


class AuthError(PyprovisionException):
    """Raised when the identity provider does not hand out a credential."""


class ConfigError(PyprovisionException):
    """Raised when a configuration value has the wrong type.

    Examples:
    ---------
    >>> str(ConfigError("delete_timeout", "soon", "a positive integer"))
    "delete_timeout must be a positive integer, got 'soon'"
    """

    def __init__(self, key: str, value, expected: str):
        """Init method.

        :param key: Name of the configuration key
        :param value: The value found in the configuration
        :param expected: Human readable description of the expected type
        """
        super().__init__()
        self.key = key
        self.value = value
        self.expected = expected

    def __str__(self) -> str:  # noqa: D105
        return f"{self.key} must be {self.expected}, got {self.value!r}"


class ResourceType(enum.Enum):
    """Represent types of provisioned resources."""

    RESOURCE_GROUP = enum.auto()
    NETWORK_INTERFACE = enum.auto()
    VIRTUAL_MACHINE = enum.auto()

    def __str__(self) -> str:  # noqa: D105
        if self == self.RESOURCE_GROUP:
            return "resource group"
        if self == self.NETWORK_INTERFACE:
            return "network interface"
        if self == self.VIRTUAL_MACHINE:
            return "virtual machine"
        raise NotImplementedError


class ProvisioningError(PyprovisionException):
    """Raised when a remote create or fetch call fails.

    Examples:
    ---------
    >>> e = ProvisioningError(
    ...     ResourceType.NETWORK_INTERFACE, "quota exceeded", "nic-1"
    ... )
    >>> str(e)
    'Could not provision network interface: name=nic-1: quota exceeded'
    """

    def __init__(
        self,
        resource_type: ResourceType,
        reason: str = "",
        resource_name: Optional[str] = None,
    ):
        """Init method.

        :param resource_type: Instance of `ResourceType`
        :param reason: What went wrong, usually the SDK error message
        :param resource_name: Name of the resource being provisioned
        """
        super().__init__()
        self.resource_type = resource_type
        self.reason = reason
        self.resource_name = resource_name

    def __str__(self) -> str:  # noqa: D105
        msg = f"Could not provision {self.resource_type}"
        if self.resource_name:
            msg += f": name={self.resource_name}"
        if self.reason:
            msg += f": {self.reason}"
        return msg
