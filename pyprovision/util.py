# This file is part of pyprovision. See LICENSE file for license information.
"""Helpers shared by the provisioning steps."""

import logging
import uuid
from typing import Optional

from pyprovision.errors import ArgumentError

log = logging.getLogger(__name__)


def ensure_uuid(name: str, raw: Optional[str]) -> str:
    """Return the canonical form of a uuid given by the user.

    Args:
        name: string, human readable name of the value, used in errors
        raw: string, value to validate

    Returns:
        The lowercase, hyphenated representation of the uuid

    Raises:
        ArgumentError: if raw is empty, not a string or not a uuid

    """
    if not raw or not isinstance(raw, str):
        raise ArgumentError(name, raw)
    try:
        return str(uuid.UUID(raw.strip()))
    except ValueError:
        raise ArgumentError(name, raw) from None


def unique_name(prefix: str) -> str:
    """Create a name that will not collide with concurrent runs.

    >>> len(unique_name("sample-rg")) == len("sample-rg") + 32
    True
    """
    return "{}{}".format(prefix, uuid.uuid4().hex)
