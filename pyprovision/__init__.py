# This file is part of pyprovision. See LICENSE file for license information.
"""Main pyprovision module __init__."""

import logging

from pyprovision.config import WorkflowConfig
from pyprovision.workflow import ProvisioningWorkflow, run

__all__ = [
    "ProvisioningWorkflow",
    "WorkflowConfig",
    "run",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
