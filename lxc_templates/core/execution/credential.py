# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Local SSH private key validation.
"""

from __future__ import annotations
import os
import stat
from pathlib import Path

from lxc_templates.core.execution.exceptions import CredentialInvalidError
from lxc_templates.core.execution.runner import RunnerProtocol
from lxc_templates.core.observability import get_logger
from lxc_templates.module_utils.template_constants import ACCEPTED_KEY_MODES

logger = get_logger(__name__)


class SshKeyValidator:
    """Checks that a private key file is present, private and parseable."""

    def __init__(self, runner: RunnerProtocol) -> None:
        self._runner = runner

    def validate(self, key_path: str) -> int:
        """Validate a key file.

        :param key_path: Path to the private key; ``~`` is expanded.
        :returns: The file permission bits.
        :raises CredentialInvalidError: If the file is absent, readable by
            group/others, or rejected by ``ssh-keygen``.
        """
        path = Path(os.path.expanduser(key_path))
        logger.info("Validating SSH key: %s", key_path)

        if not path.is_file():
            raise CredentialInvalidError(str(path), f"SSH key file not found: {path}")

        mode = self.permission_bits(path)
        if mode not in ACCEPTED_KEY_MODES:
            raise CredentialInvalidError(
                str(path),
                f"SSH key has insecure permissions ({mode:o}). Should be 600 or 400",
                [f"Fix with: chmod 600 {path}"],
            )
        logger.success("SSH key permissions are secure (%o)", mode)

        result = self._runner.run_local(["ssh-keygen", "-l", "-f", str(path)])
        if not result.ok:
            raise CredentialInvalidError(
                str(path),
                "SSH key appears to be invalid or corrupted",
                [f"Check the key with: ssh-keygen -l -f {path}"],
            )

        logger.success("SSH key validation passed")
        return mode

    @staticmethod
    def permission_bits(path: Path) -> int:
        """Return the ``rwx`` permission bits of a file (e.g. ``0o600``)."""
        return stat.S_IMODE(os.stat(path).st_mode) & 0o777
