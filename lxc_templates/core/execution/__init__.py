# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Execution layer for local and remote commands."""

from lxc_templates.core.execution.runner import RunnerProtocol, SshRunner
from lxc_templates.core.execution.credential import SshKeyValidator
from lxc_templates.core.execution.connection import ConnectionValidator
from lxc_templates.core.execution.exceptions import (
    TemplateToolError,
    ToolingMissingError,
    ConfigInvalidError,
    CredentialInvalidError,
    ConnectivityError,
    NoCandidateFoundError,
    RemoteCommandError,
)

__all__ = [
    "RunnerProtocol",
    "SshRunner",
    "SshKeyValidator",
    "ConnectionValidator",
    "TemplateToolError",
    "ToolingMissingError",
    "ConfigInvalidError",
    "CredentialInvalidError",
    "ConnectivityError",
    "NoCandidateFoundError",
    "RemoteCommandError",
]
