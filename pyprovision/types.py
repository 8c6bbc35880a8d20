# This file is part of pyprovision. See LICENSE file for license information.
"""Data types handed from one provisioning step to the next."""

from dataclasses import dataclass
from typing import Optional

from azure.core.credentials import AccessToken, TokenCredential


@dataclass(frozen=True)
class Credential:
    """Bearer credential obtained once and shared by every SDK client.

    ``token_credential`` is what the management clients are built with; it
    caches ``access_token`` and refreshes it on its own.
    """

    token_credential: TokenCredential
    access_token: AccessToken

    @property
    def expires_on(self) -> int:
        """Return the expiry of the token as a unix timestamp."""
        return self.access_token.expires_on


@dataclass(frozen=True)
class ResourceGroup:
    """Logical container holding everything created by a run."""

    name: str
    location: str
    id: str


@dataclass(frozen=True)
class NetworkInterface:
    """Network interface attached to the virtual machine."""

    name: str
    resource_group: str
    id: str


@dataclass(frozen=True)
class VirtualMachine:
    """Virtual machine, the terminal entity of a run."""

    name: str
    size: str
    computer_name: str
    admin_username: str
    network_interface_id: str
    id: str
    provisioning_state: Optional[str] = None
    power_state: Optional[str] = None
