# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Container template models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from lxc_templates.module_utils.template_constants import REMOTE_CACHE_DIR


class VersionTag(str, Enum):
    """Supported Ubuntu LTS releases."""

    FOCAL = "20.04"
    JAMMY = "22.04"
    NOBLE = "24.04"


class TemplateCandidate(BaseModel):
    """A template offered by the remote template repository."""

    model_config = ConfigDict(frozen=True)

    section: str
    name: str
    version: VersionTag


class CachedTemplate(BaseModel):
    """A template archive present in the remote cache directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    size_bytes: int
    modified: datetime

    @property
    def path(self) -> str:
        return f"{REMOTE_CACHE_DIR}/{self.name}"

    @property
    def human_size(self) -> str:
        """Size formatted the way ``ls -lh`` does."""
        size = float(self.size_bytes)
        for unit in ("B", "K", "M", "G"):
            if size < 1024:
                return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
            size /= 1024
        return f"{size:.1f}T"
