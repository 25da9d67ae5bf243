# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Template provisioning workflow.

Validates the connection, selects the newest supported Ubuntu LTS template,
downloads it into the remote cache when needed, optionally prunes older
templates and reports the cache contents.
"""

from fnmatch import fnmatch
from typing import Optional

from lxc_templates.core.execution.connection import ConnectionValidator
from lxc_templates.core.execution.exceptions import RemoteCommandError
from lxc_templates.core.execution.runner import RunnerProtocol
from lxc_templates.core.models.config import ProvisionSettings
from lxc_templates.core.models.provision import (
    CleanupFailure,
    ProvisionResult,
    ProvisionStage,
)
from lxc_templates.core.models.template import CachedTemplate
from lxc_templates.core.observability import (
    create_workflow_event,
    get_logger,
    set_stage,
)
from lxc_templates.core.services.template_cache import (
    RemoteTemplateCache,
    cache_path,
    download_command,
)
from lxc_templates.core.services.template_selector import TemplateSelector
from lxc_templates.module_utils.template_constants import CLEANUP_GLOB

logger = get_logger(__name__)


class TemplateProvisioner:
    """Runs the provisioning workflow against one Proxmox host."""

    def __init__(
        self,
        settings: ProvisionSettings,
        runner: RunnerProtocol,
        connection_validator: Optional[ConnectionValidator] = None,
        selector: Optional[TemplateSelector] = None,
        cache: Optional[RemoteTemplateCache] = None,
    ) -> None:
        self.settings = settings
        self._connection_validator = connection_validator or ConnectionValidator(runner)
        self._selector = selector or TemplateSelector(runner)
        self._cache = cache or RemoteTemplateCache(runner)

    def run(self) -> ProvisionResult:
        """Execute the workflow.

        :returns: Summary of what was selected, downloaded and removed.
        :raises TemplateToolError: On any fatal validation or remote failure.
        """
        result = ProvisionResult()
        self._enter(result, ProvisionStage.START)
        self._enter(result, ProvisionStage.CONFIG_LOADED)

        logger.info("Validating SSH connection to Proxmox server...")
        self._connection_validator.validate(self.settings.connection)
        logger.success("SSH connection to Proxmox server validated")
        self._enter(result, ProvisionStage.CONNECTION_VALIDATED)

        candidate = self._selector.select_latest()
        result.template = candidate.name
        result.remote_path = cache_path(candidate.name)
        self._enter(result, ProvisionStage.CANDIDATE_SELECTED)

        logger.info("Checking if template already exists...")
        if self._cache.exists(candidate.name):
            needs_download = self._forced_redownload(candidate.name)
        else:
            logger.info("Template not found in cache, will download")
            needs_download = True

        if not needs_download:
            self._enter(result, ProvisionStage.CACHED)
        else:
            self._download(result, candidate.name)
            if self.settings.cleanup_old_templates:
                self.cleanup_old_templates(result)
            else:
                logger.info("Skipping cleanup of old templates (CLEANUP_OLD_TEMPLATES=false)")

        result.cache = self.report_cache()
        self._enter(result, ProvisionStage.REPORTED)
        self.display_completion_message(candidate.name)
        self._enter(result, ProvisionStage.DONE)
        logger.event(
            create_workflow_event(
                "run_complete",
                status="success",
                template=candidate.name,
                message="Provisioning completed",
            )
        )
        return result

    def _forced_redownload(self, name: str) -> bool:
        logger.warning("Template already exists: %s", name)
        details = self._cache.describe(name)
        if details:
            logger.info("Existing template details: %s", details)
        if self.settings.force_download:
            logger.info("Forcing re-download due to FORCE_DOWNLOAD=true")
            return True
        logger.info("Template already exists. Use FORCE_DOWNLOAD=true to re-download")
        return False

    def _download(self, result: ProvisionResult, name: str) -> None:
        self._enter(result, ProvisionStage.DOWNLOADING)
        logger.info("Downloading Ubuntu LTS template: %s", name)
        logger.info("This may take several minutes depending on network speed...")

        download = self._cache.download(name)
        for line in download.stdout.splitlines():
            logger.debug(line)
        if not download.ok:
            raise RemoteCommandError(
                f"Failed to download template: {name}",
                command=download_command(name).to_shell(),
                returncode=download.returncode,
                stderr=download.stderr.strip(),
            )
        result.downloaded = True
        logger.success("Template downloaded successfully: %s", name)

        if not self._cache.exists(name):
            raise RemoteCommandError(
                f"Template verification failed: {cache_path(name)} is missing after download"
            )
        logger.success("Template download verified")
        details = self._cache.describe(name)
        if details:
            logger.info("Template details: %s", details)
        self._enter(result, ProvisionStage.DOWNLOAD_VERIFIED)

    def cleanup_old_templates(self, result: ProvisionResult) -> None:
        """Remove every cached Ubuntu template except the most recently modified.

        Individual removal failures are logged and recorded; they never abort
        the run.
        """
        logger.info("Cleaning up old Ubuntu templates...")
        entries = sorted(
            (e for e in self._cache.list_entries() if fnmatch(e.name, CLEANUP_GLOB)),
            key=lambda e: e.modified,
            reverse=True,
        )
        old = entries[1:]
        if not old:
            logger.info("No old templates found to clean up")
            self._enter(result, ProvisionStage.CLEANED_UP)
            return

        logger.info("Found old templates to clean up:")
        for entry in old:
            logger.info("  %s", entry.name)

        for entry in old:
            logger.info("Removing old template: %s", entry.name)
            removal = self._cache.remove(entry.name)
            if removal.ok:
                result.removed.append(entry.name)
            else:
                logger.warning("Failed to remove %s", entry.name)
                result.cleanup_failures.append(
                    CleanupFailure(name=entry.name, error=removal.stderr.strip())
                )

        logger.success("Old template cleanup completed")
        self._enter(result, ProvisionStage.CLEANED_UP)

    def report_cache(self) -> list[CachedTemplate]:
        entries = self._cache.list_entries()
        if not entries:
            logger.warning("No templates found in cache")
            return entries
        logger.info("Current template cache contents:")
        for entry in entries:
            logger.info(
                "  %s  %s  %s",
                entry.name,
                entry.human_size,
                entry.modified.strftime("%Y-%m-%d %H:%M"),
            )
        return entries

    @staticmethod
    def display_completion_message(name: str) -> None:
        path = cache_path(name)
        logger.success("Ubuntu LTS template download completed successfully!")
        logger.info("Template Details:")
        logger.info("  Template Name: %s", name)
        logger.info("  Location: %s", path)
        logger.info("Usage:")
        logger.info("  Create container: pct create VMID %s", path)
        logger.info("  List templates: pveam list local")
        logger.info("Next Steps:")
        logger.info("  - Use this template to create LXC containers")
        logger.info("  - Template is ready for deployment scripts")

    @staticmethod
    def _enter(result: ProvisionResult, stage: ProvisionStage) -> None:
        result.stages.append(stage)
        set_stage(stage.value)
        logger.event(create_workflow_event("stage_enter", message=f"Entered stage {stage.value}"))
