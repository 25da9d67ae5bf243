# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Command runner interface and the OpenSSH-backed implementation.
"""

import subprocess
from typing import Protocol, Sequence

from lxc_templates.core.models.command import CommandResult, RemoteCommand
from lxc_templates.core.models.config import ConnectionConfig
from lxc_templates.core.observability import create_workflow_event, get_logger
from lxc_templates.core.observability.events import LogLevel
from lxc_templates.module_utils.template_constants import SSH_CONNECT_TIMEOUT

logger = get_logger(__name__)

COMMAND_NOT_FOUND = 127


class RunnerProtocol(Protocol):
    """
    Protocol for running local and remote commands.
    """

    def run(self, command: RemoteCommand) -> CommandResult:
        """Run a command on the remote host.

        :param command: Command to run
        :returns: Exit status and captured output
        """
        ...

    def run_local(self, argv: Sequence[str]) -> CommandResult:
        """Run a command on the local machine.

        :param argv: Program and arguments
        :returns: Exit status and captured output
        """
        ...


class SshRunner:
    """Runs remote commands through the ``ssh`` client in batch mode."""

    def __init__(
        self,
        connection: ConnectionConfig,
        connect_timeout: int = SSH_CONNECT_TIMEOUT,
        ssh_binary: str = "ssh",
    ) -> None:
        """Initialize the runner.

        :param connection: Target host, user and optional key
        :param connect_timeout: Seconds allowed to establish the connection
        :param ssh_binary: ssh client executable
        """
        self.connection = connection
        self.connect_timeout = connect_timeout
        self.ssh_binary = ssh_binary

    def ssh_base_command(self) -> list[str]:
        """Build the ssh argument list up to and including the destination.

        Password prompts are disabled so failed authentication exits
        immediately instead of waiting for input.
        """
        cmd = [
            self.ssh_binary,
            "-o",
            f"ConnectTimeout={self.connect_timeout}",
            "-o",
            "BatchMode=yes",
        ]
        if self.connection.key_path:
            cmd.extend(["-i", self.connection.key_path])
        cmd.append(self.connection.destination)
        return cmd

    def run(self, command: RemoteCommand) -> CommandResult:
        argv = self.ssh_base_command() + ["--", command.to_shell()]
        result = _execute(argv)
        logger.event(
            create_workflow_event(
                "command_exec",
                level=LogLevel.INFO if result.ok else LogLevel.WARN,
                command=command.to_shell(),
                returncode=result.returncode,
                status="success" if result.ok else "failed",
                error=result.stderr.strip() or None,
            )
        )
        return result

    def run_local(self, argv: Sequence[str]) -> CommandResult:
        return _execute(list(argv))


def _execute(argv: list[str]) -> CommandResult:
    """Run a process to completion and capture its output.

    :param argv: Program and arguments
    :returns: Command result; a missing executable yields exit code 127
    """
    logger.debug("Executing command: %s", " ".join(argv))
    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        return CommandResult(returncode=COMMAND_NOT_FOUND, stderr=str(exc))
    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
