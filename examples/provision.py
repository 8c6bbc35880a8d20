#!/usr/bin/env python3
# This file is part of pyprovision. See LICENSE file for license information.
"""Provision a sandboxed virtual machine from Python instead of the CLI."""

import logging
import os
import sys

import pyprovision
from pyprovision.config import parse_config


def demo():
    """Show example of running the workflow with a custom logger.

    The subscription and tenant are read from AZURE_SUBSCRIPTION_ID and
    AZURE_TENANT_ID, everything else from pyprovision.toml if present.
    """
    section = parse_config().get("azure", {})
    config = pyprovision.WorkflowConfig.from_sources(
        section,
        subscription_id=os.environ.get("AZURE_SUBSCRIPTION_ID"),
        tenant_id=os.environ.get("AZURE_TENANT_ID"),
        delete_timeout=600,
    )
    log = logging.getLogger("example")

    def prompt(verification_uri, user_code, expires_on):
        print("Open {} and type {}".format(verification_uri, user_code))

    return pyprovision.run(config, log=log, prompt=prompt)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    logging.getLogger("azure").setLevel(logging.WARNING)

    sys.exit(demo())
