# This file is part of pyprovision. See LICENSE file for license information.
"""Authenticate, build a sandboxed virtual machine, then tear it down."""
import contextlib
import logging
from typing import Callable, Optional

from pyprovision.azure.auth import authenticate
from pyprovision.azure.compute import ComputeProvisioner
from pyprovision.azure.network import NetworkProvisioner
from pyprovision.azure.resource_group import ResourceGroupProvisioner
from pyprovision.config import WorkflowConfig
from pyprovision.errors import PyprovisionException

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class ProvisioningWorkflow:
    """Run every provisioning step in order, releasing what was created.

    Each step hands its result to the next one and the first failure
    stops the run. The resource group, once created, is deleted on every
    way out of `run`, which removes everything created inside it.
    """

    def __init__(
        self,
        config: WorkflowConfig,
        *,
        log: Optional[logging.Logger] = None,
        prompt: Optional[Callable] = None,
    ):
        """Initialize the workflow.

        Args:
            config: WorkflowConfig of the run
            log: logger to report progress to, defaults to this module's
            prompt: callable displaying the device code to the user
        """
        self.config = config
        self._log = log or logging.getLogger(__name__)
        self._prompt = prompt

    def run(self) -> int:
        """Provision the virtual machine.

        Returns:
            The exit code of the run: 0 on success, 1 on any failure

        """
        config = self.config
        self._log.debug("Using Subscription ID: %s", config.subscription_id)
        self._log.debug("Using Tenant ID: %s", config.tenant_id)

        with contextlib.ExitStack() as stack:
            try:
                return self._run(stack)
            except PyprovisionException as e:
                self._log.error("%s", e)
                return EXIT_FAILURE

    def _run(self, stack: contextlib.ExitStack) -> int:
        config = self.config
        credential = authenticate(
            config.tenant_id,
            client_id=config.client_id,
            timeout=config.auth_timeout,
            prompt=self._prompt,
            logger=self._log,
        )

        groups = ResourceGroupProvisioner(
            credential,
            config.subscription_id,
            config.location,
            delete_timeout=config.delete_timeout,
            log=self._log,
        )
        group, cleanup = groups.create_or_noop()
        stack.callback(cleanup)
        if group is None:
            return EXIT_FAILURE
        self._log.info("Created Resource Group: %s", group.name)

        network = NetworkProvisioner(
            credential,
            config.subscription_id,
            config.location,
            subnet_id=config.subnet_id,
            log=self._log,
        )
        compute = ComputeProvisioner(
            credential,
            config.subscription_id,
            config.location,
            vm_size=config.vm_size,
            image_id=config.image_id,
            admin_username=config.admin_username,
            admin_password=config.admin_password,
            provisioning_timeout=config.provisioning_timeout,
            network=network,
            log=self._log,
        )
        vm = compute.create(group.name)
        self._log.info("Created Virtual Machine: %s", vm.name)
        self._log.info("%s", vm.name)
        return EXIT_SUCCESS


def run(
    config: WorkflowConfig,
    *,
    log: Optional[logging.Logger] = None,
    prompt: Optional[Callable] = None,
) -> int:
    """Run a `ProvisioningWorkflow` for config and return its exit code."""
    return ProvisioningWorkflow(config, log=log, prompt=prompt).run()
