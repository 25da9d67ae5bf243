# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Template discovery and selection.

Parses the ``pveam available`` listing into typed candidates and picks the
newest supported Ubuntu LTS release by a fixed preference table.
"""

import re
from typing import Iterable, Optional, Sequence

from lxc_templates.core.execution.exceptions import NoCandidateFoundError
from lxc_templates.core.execution.runner import RunnerProtocol
from lxc_templates.core.models.command import RemoteCommand
from lxc_templates.core.models.template import TemplateCandidate, VersionTag
from lxc_templates.core.observability import get_logger
from lxc_templates.module_utils.template_constants import (
    TEMPLATE_NAME_PATTERN,
    TEMPLATE_SECTION,
    VERSION_PREFERENCE,
)

logger = get_logger(__name__)

_NAME_RE = re.compile(TEMPLATE_NAME_PATTERN)
_SUPPORTED = {tag.value for tag in VersionTag}

LIST_COMMAND = RemoteCommand.of("pveam", "available", "--section", TEMPLATE_SECTION)
REFRESH_COMMAND = RemoteCommand.of("pveam", "update")


def parse_candidate(row: str) -> Optional[TemplateCandidate]:
    """Parse one ``<section> <name>`` row.

    :returns: The candidate, or ``None`` for rows outside the supported family,
        architecture or versions.
    """
    fields = row.split()
    if len(fields) < 2:
        return None
    section, name = fields[0], fields[1]
    match = _NAME_RE.match(name)
    if not match or match.group("version") not in _SUPPORTED:
        return None
    return TemplateCandidate(section=section, name=name, version=VersionTag(match.group("version")))


def parse_available(text: str) -> list[TemplateCandidate]:
    """Parse a full listing, keeping input order."""
    candidates = []
    for row in text.splitlines():
        candidate = parse_candidate(row)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def select_candidate(
    candidates: Iterable[TemplateCandidate],
    preference: Sequence[str] = VERSION_PREFERENCE,
) -> TemplateCandidate:
    """Pick the first candidate of the most preferred version present.

    Candidates of the same version keep their listing order; versions are
    looked up in ``preference`` and never compared numerically.

    :raises NoCandidateFoundError: When no preferred version is present.
    """
    candidates = list(candidates)
    for tag in preference:
        for candidate in candidates:
            if candidate.version.value == tag:
                return candidate
    raise NoCandidateFoundError(
        "Could not determine latest Ubuntu LTS template",
        ["Available templates:"] + [f"  {c.name}" for c in candidates],
    )


class TemplateSelector:
    """Queries the remote template repository and selects a template."""

    def __init__(self, runner: RunnerProtocol) -> None:
        self._runner = runner

    def list_candidates(self) -> list[TemplateCandidate]:
        result = self._runner.run(LIST_COMMAND)
        if not result.ok:
            logger.debug("Template listing exited with %s: %s", result.returncode, result.stderr)
            return []
        return parse_available(result.stdout)

    def fetch_candidates(self) -> list[TemplateCandidate]:
        """List supported templates, refreshing the index once if none are found.

        :raises NoCandidateFoundError: If the listing is still empty after the refresh.
        """
        logger.info("Fetching latest Ubuntu LTS template information...")
        candidates = self.list_candidates()
        if candidates:
            return candidates

        logger.error("No Ubuntu LTS templates found in repository")
        logger.info("Updating template list...")
        refresh = self._runner.run(REFRESH_COMMAND)
        if not refresh.ok:
            logger.warning("Template list update failed: %s", refresh.stderr.strip() or refresh.returncode)

        candidates = self.list_candidates()
        if not candidates:
            raise NoCandidateFoundError("Still no Ubuntu LTS templates found after update")
        return candidates

    def select_latest(self) -> TemplateCandidate:
        candidate = select_candidate(self.fetch_candidates())
        logger.success("Latest Ubuntu LTS template identified: %s", candidate.name)
        return candidate
