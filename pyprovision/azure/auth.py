# This file is part of pyprovision. See LICENSE file for license information.
"""Device code authentication against Azure Active Directory."""
import datetime
import logging
from typing import Callable, Optional

import click
from azure.core.exceptions import AzureError
from azure.identity import AzureAuthorityHosts, DeviceCodeCredential

from pyprovision.azure.util import describe_error
from pyprovision.config import AZURE_CLI_CLIENT_ID
from pyprovision.errors import AuthError
from pyprovision.types import Credential

MANAGEMENT_SCOPE = "https://management.azure.com/.default"

log = logging.getLogger(__name__)


def _echo_prompt(verification_uri: str, user_code: str, expires_on):
    click.echo(
        "To sign in, use a web browser to open the page {} and enter the "
        "code {} to authenticate.".format(verification_uri, user_code)
    )


def authenticate(
    tenant_id: str,
    *,
    client_id: str = AZURE_CLI_CLIENT_ID,
    authority: str = AzureAuthorityHosts.AZURE_PUBLIC_CLOUD,
    timeout: Optional[int] = None,
    prompt: Optional[Callable] = None,
    logger: Optional[logging.Logger] = None,
) -> Credential:
    """Get an authorization token to allow clients to access Azure assets.

    A device code and verification URL are requested from the identity
    provider and handed to `prompt`. The call then blocks until the user
    completes the sign in on another device, the provider refuses it, or
    `timeout` seconds elapse.

    Args:
        tenant_id: string, tenant hosting the subscription
        client_id: string, application to sign in as, defaults to the
                   public Azure CLI application
        authority: string, identity provider host
        timeout: int, seconds to wait for the user, defaults to the
                 lifetime of the device code
        prompt: callable receiving (verification_uri, user_code,
                expires_on), defaults to echoing the instructions
        logger: logger to use, defaults to this module's

    Returns:
        The Credential used by every later call

    Raises:
        AuthError: if no token could be obtained

    """
    logger = logger or log
    logger.debug("Authority: %s", authority)
    logger.debug("Requesting device code for tenant %s", tenant_id)

    token_credential = DeviceCodeCredential(
        tenant_id=tenant_id,
        client_id=client_id,
        authority=authority,
        timeout=timeout,
        prompt_callback=prompt or _echo_prompt,
    )
    try:
        access_token = token_credential.get_token(MANAGEMENT_SCOPE)
    except AzureError as e:
        raise AuthError(
            "could not authenticate: {}".format(describe_error(e))
        ) from e
    except KeyboardInterrupt:
        raise AuthError("authentication cancelled by user") from None

    credential = Credential(
        token_credential=token_credential, access_token=access_token
    )
    logger.debug(
        "Token expires on %s",
        datetime.datetime.fromtimestamp(
            credential.expires_on, tz=datetime.timezone.utc
        ).isoformat(),
    )
    return credential
