# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Provisioning workflow models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from lxc_templates.core.models.template import CachedTemplate


class ProvisionStage(str, Enum):
    """Stages of the template provisioning workflow."""

    START = "start"
    CONFIG_LOADED = "config_loaded"
    CONNECTION_VALIDATED = "connection_validated"
    CANDIDATE_SELECTED = "candidate_selected"
    CACHED = "cached"
    DOWNLOADING = "downloading"
    DOWNLOAD_VERIFIED = "download_verified"
    CLEANED_UP = "cleaned_up"
    REPORTED = "reported"
    DONE = "done"


class CleanupFailure(BaseModel):
    """A cache entry that could not be removed."""

    name: str
    error: str = ""


class ProvisionResult(BaseModel):
    """Outcome of a provisioning run."""

    template: Optional[str] = None
    remote_path: Optional[str] = None
    downloaded: bool = False
    removed: List[str] = Field(default_factory=list)
    cleanup_failures: List[CleanupFailure] = Field(default_factory=list)
    cache: List[CachedTemplate] = Field(default_factory=list)
    stages: List[ProvisionStage] = Field(default_factory=list)
