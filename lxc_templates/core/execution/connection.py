# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Connection validation: key checks followed by a remote no-op probe.
"""

from typing import Optional

from lxc_templates.core.execution.credential import SshKeyValidator
from lxc_templates.core.execution.exceptions import ConnectivityError
from lxc_templates.core.execution.runner import RunnerProtocol
from lxc_templates.core.models.command import RemoteCommand
from lxc_templates.core.models.config import ConnectionConfig
from lxc_templates.core.observability import get_logger

logger = get_logger(__name__)

PROBE_COMMAND = RemoteCommand.of("pveversion")


class ConnectionValidator:
    """Validates that the Proxmox host is usable with the given settings."""

    def __init__(
        self,
        runner: RunnerProtocol,
        key_validator: Optional[SshKeyValidator] = None,
    ) -> None:
        self._runner = runner
        self._key_validator = key_validator or SshKeyValidator(runner)

    def validate(self, connection: ConnectionConfig, check_key: bool = True) -> str:
        """Validate the key (if configured) and probe the host once.

        :param connection: Connection settings.
        :param check_key: Skip key checks when the caller already ran them.
        :returns: The probe output (Proxmox version string).
        :raises CredentialInvalidError: On key problems.
        :raises ConnectivityError: When the probe fails.
        """
        if check_key and connection.key_path:
            self._key_validator.validate(connection.key_path)
        return self.probe(connection)

    def probe(self, connection: ConnectionConfig) -> str:
        """Run ``pveversion`` on the host; a single attempt is definitive."""
        logger.info("Testing Proxmox server connectivity...")
        result = self._runner.run(PROBE_COMMAND)
        if not result.ok:
            logger.debug("Probe failed with exit code %s: %s", result.returncode, result.stderr)
            raise ConnectivityError(
                f"Cannot connect to Proxmox server {connection.destination}",
                [
                    "Check:",
                    f"  - Network connectivity to {connection.host}",
                    "  - SSH key configuration",
                    "  - User permissions on Proxmox",
                ],
            )
        version = result.stdout.strip()
        logger.success("Successfully connected to Proxmox server")
        if version:
            logger.debug("Remote version: %s", version)
        return version
