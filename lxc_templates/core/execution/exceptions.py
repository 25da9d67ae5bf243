# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Validation and provisioning exceptions.
"""

from typing import Any, Iterable, Optional, Sequence


class TemplateToolError(Exception):
    """
    Base exception for fatal validation and provisioning errors.
    """

    category = "Error"

    def __init__(self, message: str, remediation: Optional[Sequence[str]] = None) -> None:
        self.remediation: list[str] = list(remediation or [])
        super().__init__(message)

    def log_to(self, logger: Any) -> None:
        """Log the categorized error line followed by remediation hints."""
        logger.error("[%s] %s", self.category, self)
        for line in self.remediation:
            logger.info(line)


class ToolingMissingError(TemplateToolError):
    """
    Raised when one or more required local commands are absent.
    """

    category = "ToolingMissing"

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Missing required commands: {' '.join(self.missing)}",
            ["Install the OpenSSH client package and re-run the validation"],
        )


class ConfigInvalidError(TemplateToolError):
    """
    Raised when the configuration file is absent or incomplete.
    """

    category = "ConfigInvalid"

    def __init__(
        self,
        message: str,
        missing_keys: Optional[Iterable[str]] = None,
        remediation: Optional[Sequence[str]] = None,
    ) -> None:
        self.missing_keys = list(missing_keys or [])
        super().__init__(message, remediation)


class CredentialInvalidError(TemplateToolError):
    """
    Raised when the configured SSH key is missing, insecure or malformed.
    """

    category = "CredentialInvalid"

    def __init__(
        self,
        key_path: str,
        reason: str,
        remediation: Optional[Sequence[str]] = None,
    ) -> None:
        self.key_path = key_path
        self.reason = reason
        super().__init__(reason, remediation)


class ConnectivityError(TemplateToolError):
    """
    Raised when the remote host cannot be reached or rejects the probe.
    """

    category = "ConnectivityFailure"


class NoCandidateFoundError(TemplateToolError):
    """
    Raised when no supported template exists in the remote repository.
    """

    category = "NoCandidateFound"


class RemoteCommandError(TemplateToolError):
    """
    Raised when a side-effecting remote command fails.
    """

    category = "RemoteCommandFailure"

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f"{message} (exit code {returncode})" if returncode is not None else message
        if stderr:
            detail = f"{detail}: {stderr}"
        super().__init__(detail)
