# This file is part of pyprovision. See LICENSE file for license information.
"""Azure Util Functions."""
import logging
import re

from azure.core.exceptions import AzureError, HttpResponseError

from pyprovision.types import Credential

logger = logging.getLogger(__name__)

RE_AZURE_IMAGE_ID = (
    r"(?P<publisher>[^:]+):(?P<offer>[^:]+):(?P<sku>[^:]+)(:(?P<version>.*))?"
)


def get_client(resource, credential: Credential, subscription_id: str):
    """Get azure client for the given resource.

    Every client of a run shares the credential obtained during
    authentication, so the user only signs in once.

    Args:
        resource: Azure management client class, e.g.
                  `ResourceManagementClient`.
        credential: Credential, result of the authentication step.
        subscription_id: string, subscription the client will act on.

    Returns:
        The client for the resource passed as parameter.

    """
    return resource(
        credential.token_credential, subscription_id=subscription_id
    )


def describe_error(error: AzureError) -> str:
    """Render an Azure SDK error as a single human readable line."""
    if isinstance(error, HttpResponseError) and error.error is not None:
        return "{}: {}".format(error.error.code, error.error.message)
    return str(error) or type(error).__name__


def parse_image_id(image_id):
    """Extract publisher, offer, sku and optional version from image_id.

    The image_id is expected to be a string in the following
    format: Canonical:UbuntuServer:19.10-DAILY[:latest]

    Args:
        image_id: string, The image id

    Returns
        Dict with publisher, offer and sku and optional version keys.

    """
    match = re.match(RE_AZURE_IMAGE_ID, image_id)
    if not match:
        return {}

    return {k: v for k, v in match.groupdict().items() if v is not None}


def get_image_reference_params(image_id):
    """Return the image reference parameter for a virtual machine.

    Marketplace images are referenced by publisher, offer and sku, anything
    else is taken to be the id of a custom image.

    Args:
        image_id: string, Represents a image to be used when provisioning
                  a virtual machine

    Returns:
        A dict representing the image reference parameters

    """
    img_dict = parse_image_id(image_id)
    if img_dict:
        return img_dict

    return {"id": image_id}


def get_resource_name_from_id(resource_id):
    """Retrieve the name of a resource.

    Args:
        resource_id: string, the resource id

    Returns:
        A string representing the resource name

    """
    return resource_id.split("/")[-1]
