# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Remote template cache operations.
"""

from datetime import datetime, timezone
from typing import Optional

from lxc_templates.core.execution.runner import RunnerProtocol
from lxc_templates.core.models.command import CommandResult, RemoteCommand
from lxc_templates.core.models.template import CachedTemplate
from lxc_templates.core.observability import get_logger
from lxc_templates.module_utils.template_constants import (
    ARCHIVE_EXTENSIONS,
    REMOTE_CACHE_DIR,
    TEMPLATE_STORAGE,
)

logger = get_logger(__name__)


def cache_path(name: str) -> str:
    return f"{REMOTE_CACHE_DIR}/{name}"


def download_command(name: str) -> RemoteCommand:
    return RemoteCommand.of("pveam", "download", TEMPLATE_STORAGE, name)


def parse_cache_listing(text: str) -> list[CachedTemplate]:
    """Parse ``<mtime-epoch> <size-bytes> <name>`` rows.

    Rows that are not archives with a known extension are skipped.
    """
    entries = []
    for row in text.splitlines():
        parts = row.strip().split(maxsplit=2)
        if len(parts) != 3:
            continue
        mtime, size, name = parts
        if not name.endswith(ARCHIVE_EXTENSIONS):
            continue
        try:
            entries.append(
                CachedTemplate(
                    name=name,
                    size_bytes=int(size),
                    modified=datetime.fromtimestamp(float(mtime), tz=timezone.utc),
                )
            )
        except ValueError:
            logger.debug("Skipping unparsable cache row: %s", row)
    return entries


class RemoteTemplateCache:
    """The template cache directory on the Proxmox host."""

    def __init__(self, runner: RunnerProtocol) -> None:
        self._runner = runner

    def exists(self, name: str) -> bool:
        return self._runner.run(RemoteCommand.of("test", "-f", cache_path(name))).ok

    def describe(self, name: str) -> Optional[str]:
        """``ls -lh`` line for a cached template, if available."""
        result = self._runner.run(RemoteCommand.of("ls", "-lh", cache_path(name)))
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def download(self, name: str) -> CommandResult:
        return self._runner.run(download_command(name))

    def list_entries(self) -> list[CachedTemplate]:
        result = self._runner.run(
            RemoteCommand.of(
                "find",
                REMOTE_CACHE_DIR,
                "-maxdepth",
                "1",
                "-type",
                "f",
                "-printf",
                "%T@ %s %f\\n",
            )
        )
        if not result.ok:
            logger.debug("Cache listing exited with %s: %s", result.returncode, result.stderr)
            return []
        return parse_cache_listing(result.stdout)

    def remove(self, name: str) -> CommandResult:
        return self._runner.run(RemoteCommand.of("rm", "-f", cache_path(name)))
