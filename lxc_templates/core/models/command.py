# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Typed remote command models."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RemoteCommand:
    """A command to run on the remote host.

    Arguments are kept as a list and only joined, with shell quoting,
    when the command is handed to ssh.

    :param program: Executable name on the remote host.
    :param args: Arguments passed verbatim to the program.
    """

    program: str
    args: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, program: str, *args: str) -> "RemoteCommand":
        return cls(program=program, args=tuple(str(a) for a in args))

    def to_shell(self) -> str:
        """Render as a single, safely quoted remote shell string."""
        return shlex.join([self.program, *self.args])

    def __str__(self) -> str:
        return self.to_shell()


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a local or remote command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
