# This file is part of pyprovision. See LICENSE file for license information.
"""Deal with configuration file."""
import logging
import os
from dataclasses import dataclass, field, fields
from io import StringIO
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional, Union

import toml

from pyprovision.errors import ConfigError
from pyprovision.util import ensure_uuid

# Order matters here. Local should take precedence over global.
CONFIG_PATHS = [
    Path("~/.config/pyprovision.toml").expanduser(),
    Path("/etc/pyprovision.toml"),
]

# Public client id of the Azure CLI, usable by any tenant for device login.
AZURE_CLI_CLIENT_ID = "04b07795-8ddb-461a-bbee-02f9e1bf7b46"
DEFAULT_LOCATION = "westus2"
DEFAULT_VM_SIZE = "Basic_A0"
DEFAULT_IMAGE_ID = "Canonical:0001-com-ubuntu-server-jammy:22_04-lts:latest"
DEFAULT_ADMIN_USERNAME = "azureuser"
DEFAULT_ADMIN_PASSWORD = "azureRocksWithPython1!"

STRING_KEYS = (
    "location",
    "client_id",
    "vm_size",
    "image_id",
    "admin_username",
    "admin_password",
    "subnet_id",
)
TIMEOUT_KEYS = ("auth_timeout", "provisioning_timeout", "delete_timeout")

ConfigFile = Union[Path, StringIO]
log = logging.getLogger(__name__)


def parse_config(
    config_file: Optional[ConfigFile] = None,
) -> MutableMapping[str, Any]:
    """Find the relevant TOML, load, and return it.

    Unlike a missing file, a file that cannot be parsed is an error. When
    no file exists at all an empty dict is returned, since every value
    can also come from flags or the environment.
    """
    possible_configs = []
    if config_file:
        possible_configs.append(config_file)
    if os.environ.get("PYPROVISION_CONFIG"):
        possible_configs.append(Path(os.environ["PYPROVISION_CONFIG"]))
    possible_configs.extend(CONFIG_PATHS)
    for path in possible_configs:
        try:
            config = toml.load(path)
            log.debug("Loaded configuration from %s", path)
            return config
        except FileNotFoundError:
            continue
        except toml.TomlDecodeError as e:
            raise ValueError(
                "Could not parse configuration file pointed to by "
                "{}".format(path)
            ) from e
    log.debug("No configuration file found, using defaults")
    return {}


@dataclass
class WorkflowConfig:
    """Everything a provisioning run needs to know.

    Built once at startup and handed to the workflow, which never reads the
    environment or configuration files on its own.
    """

    subscription_id: str
    tenant_id: str
    location: str = DEFAULT_LOCATION
    client_id: str = AZURE_CLI_CLIENT_ID
    auth_timeout: Optional[int] = None
    vm_size: str = DEFAULT_VM_SIZE
    image_id: str = DEFAULT_IMAGE_ID
    admin_username: str = DEFAULT_ADMIN_USERNAME
    admin_password: str = field(default=DEFAULT_ADMIN_PASSWORD, repr=False)
    subnet_id: Optional[str] = None
    provisioning_timeout: Optional[int] = None
    delete_timeout: Optional[int] = None
    debug: bool = False

    @classmethod
    def from_sources(
        cls,
        section: Mapping[str, Any],
        *,
        subscription_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
        **overrides,
    ) -> "WorkflowConfig":
        """Merge explicit values over the `[azure]` section of the TOML file.

        Args:
            section: the `[azure]` table of a parsed configuration file
            subscription_id: subscription given on the command line or env
            tenant_id: tenant given on the command line or env
            overrides: any other field; None values are ignored

        Raises:
            ArgumentError: if the subscription or tenant is not a uuid
            ConfigError: if any other value has the wrong type
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in section.items() if k in known}
        values.update({k: v for k, v in overrides.items() if v is not None})
        for key in STRING_KEYS:
            if key in values and not isinstance(values[key], str):
                raise ConfigError(key, values[key], "a string")
        for key in TIMEOUT_KEYS:
            if key in values:
                values[key] = _to_timeout(key, values[key])
        if "debug" in values and not isinstance(values["debug"], bool):
            raise ConfigError("debug", values["debug"], "true or false")
        values["subscription_id"] = ensure_uuid(
            "Subscription ID",
            subscription_id or section.get("subscription_id"),
        )
        values["tenant_id"] = ensure_uuid(
            "Tenant ID", tenant_id or section.get("tenant_id")
        )
        return cls(**values)


def _to_timeout(key: str, value) -> int:
    """Accept a number of seconds, written either as an integer or digits."""
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(key, value, "a positive integer")
    return value
