# This file is part of pyprovision. See LICENSE file for license information.
"""Command line entry point."""
import sys
from pathlib import Path

import click

from pyprovision import workflow
from pyprovision.config import WorkflowConfig, parse_config
from pyprovision.errors import ArgumentError, PyprovisionException
from pyprovision.log import setup_logging
from pyprovision.util import ensure_uuid


@click.command()
@click.option(
    "--subscription",
    envvar="AZURE_SUBSCRIPTION_ID",
    help="The subscription that will be targeted when running this sample.",
)
@click.option(
    "--tenant",
    envvar="AZURE_TENANT_ID",
    help="The tenant that hosts the subscription to be used by this sample.",
)
@click.option(
    "--location",
    envvar="AZURE_LOCATION",
    help="Azure region to create the resources in.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a pyprovision.toml configuration file.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Include debug information in the output of this program.",
)
@click.pass_context
def provision(ctx, subscription, tenant, location, config_file, debug):
    """Create a virtual machine in a throwaway resource group."""
    log = setup_logging(debug)

    try:
        section = parse_config(config_file).get("azure", {})
    except ValueError as e:
        log.error("%s", e)
        ctx.exit(workflow.EXIT_FAILURE)

    subscription = subscription or section.get("subscription_id")
    tenant = tenant or section.get("tenant_id")
    bad_args = False
    for name, raw in (("Subscription ID", subscription), ("Tenant ID", tenant)):
        try:
            ensure_uuid(name, raw)
        except ArgumentError as e:
            log.error("%s", e)
            bad_args = True
    if bad_args:
        ctx.exit(workflow.EXIT_FAILURE)

    try:
        config = WorkflowConfig.from_sources(
            section,
            subscription_id=subscription,
            tenant_id=tenant,
            location=location,
            debug=debug,
        )
    except PyprovisionException as e:
        log.error("%s", e)
        ctx.exit(workflow.EXIT_FAILURE)
    ctx.exit(workflow.run(config, log=log))


def main(args=None):
    """Run the command, mapping every usage error to exit code 1."""
    try:
        rc = provision.main(args=args, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return workflow.EXIT_FAILURE
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return workflow.EXIT_FAILURE
    return rc or 0


if __name__ == "__main__":
    sys.exit(main())
