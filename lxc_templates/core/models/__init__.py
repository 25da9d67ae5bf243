# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Pydantic models for template tooling."""

from lxc_templates.core.models.command import CommandResult, RemoteCommand
from lxc_templates.core.models.config import ConnectionConfig, ProvisionSettings
from lxc_templates.core.models.provision import (
    CleanupFailure,
    ProvisionResult,
    ProvisionStage,
)
from lxc_templates.core.models.template import (
    CachedTemplate,
    TemplateCandidate,
    VersionTag,
)
from lxc_templates.core.models.validation import (
    CheckResult,
    CheckStatus,
    ValidationReport,
)

__all__ = [
    "CommandResult",
    "RemoteCommand",
    "ConnectionConfig",
    "ProvisionSettings",
    "CleanupFailure",
    "ProvisionResult",
    "ProvisionStage",
    "CachedTemplate",
    "TemplateCandidate",
    "VersionTag",
    "CheckResult",
    "CheckStatus",
    "ValidationReport",
]
