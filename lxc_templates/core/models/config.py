# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Connection and provisioning settings models."""

import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConnectionConfig(BaseModel):
    """SSH connection settings for the Proxmox host.

    :param host: Proxmox hostname or IP address.
    :param user: SSH user on the Proxmox host.
    :param key_path: Optional private key; ``~`` is expanded.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    user: str = Field(min_length=1)
    key_path: Optional[str] = None

    @field_validator("host", "user", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("key_path", mode="before")
    @classmethod
    def _expand_key_path(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        if not value:
            return None
        return os.path.expanduser(value)

    @property
    def destination(self) -> str:
        """``user@host`` as passed to ssh."""
        return f"{self.user}@{self.host}"


class ProvisionSettings(BaseModel):
    """Immutable settings for one provisioning run."""

    model_config = ConfigDict(frozen=True)

    connection: ConnectionConfig
    force_download: bool = False
    cleanup_old_templates: bool = False

    @field_validator("force_download", "cleanup_old_templates", mode="before")
    @classmethod
    def _empty_is_false(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return False
        return value.strip().lower() if isinstance(value, str) else value
