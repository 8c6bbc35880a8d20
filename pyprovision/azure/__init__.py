# This file is part of pyprovision. See LICENSE file for license information.
"""Azure's __init__."""
from pyprovision.azure.auth import authenticate
from pyprovision.azure.compute import ComputeProvisioner
from pyprovision.azure.network import NetworkProvisioner
from pyprovision.azure.resource_group import ResourceGroupProvisioner

__all__ = [
    "ComputeProvisioner",
    "NetworkProvisioner",
    "ResourceGroupProvisioner",
    "authenticate",
]
