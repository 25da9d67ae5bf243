# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Preflight validation of the local environment.

Read-only: checks local tooling, the ``.env`` configuration, the optional SSH
key and remote reachability. Every section runs even when an earlier one
failed so the operator sees all problems at once.
"""

import shutil
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

from lxc_templates.core.config import (
    ENV_FILE_HINT,
    find_env_file,
    read_env_file,
    settings_from_values,
)
from lxc_templates.core.execution.connection import ConnectionValidator
from lxc_templates.core.execution.credential import SshKeyValidator
from lxc_templates.core.execution.exceptions import (
    ConfigInvalidError,
    TemplateToolError,
    ToolingMissingError,
)
from lxc_templates.core.execution.runner import RunnerProtocol
from lxc_templates.core.models.config import ProvisionSettings
from lxc_templates.core.models.validation import (
    CheckResult,
    CheckStatus,
    ValidationReport,
)
from lxc_templates.core.observability import (
    LogLevel,
    create_workflow_event,
    get_logger,
)
from lxc_templates.module_utils.template_constants import (
    REQUIRED_COMMANDS,
    REQUIRED_ENV_VARS,
)

logger = get_logger(__name__)

RunnerFactory = Callable[[ProvisionSettings], RunnerProtocol]


class PreflightValidator:
    """Runs all preflight checks and builds a report."""

    def __init__(
        self,
        runner_factory: RunnerFactory,
        search_dirs: Optional[Iterable[Path]] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        :param runner_factory: Builds a runner for the loaded connection settings.
        :param search_dirs: Directories searched for ``.env``.
        :param which: Command lookup, ``shutil.which`` by default.
        :param environ: Process environment used as configuration defaults.
        """
        self._runner_factory = runner_factory
        self._search_dirs = list(search_dirs) if search_dirs is not None else None
        self._which = which
        self._environ = environ
        self._settings: Optional[ProvisionSettings] = None

    def run(self) -> ValidationReport:
        report = ValidationReport()
        for check in (
            self.check_required_commands,
            self.check_environment,
            self.check_connectivity,
        ):
            result = report.add(check())
            logger.event(
                create_workflow_event(
                    "check_result",
                    level=LogLevel.INFO if result.passed else LogLevel.ERROR,
                    status="success" if result.passed else "failed",
                    message=f"{result.name}: {result.message}",
                )
            )

        if report.passed:
            logger.success("All validations passed! Environment is ready.")
            logger.info("You can now run the template download script:")
            logger.info("  lxc-template-download")
        else:
            logger.error("Some validations failed. Please fix the issues above.")
        return report

    def check_required_commands(self) -> CheckResult:
        logger.info("Checking required system commands...")
        missing = []
        for cmd in REQUIRED_COMMANDS:
            if self._which(cmd):
                logger.success("Command available: %s", cmd)
            else:
                logger.error("Command missing: %s", cmd)
                missing.append(cmd)

        if missing:
            return self._failed("required_commands", ToolingMissingError(missing))
        logger.success("All required commands are available")
        return CheckResult(
            name="required_commands",
            status=CheckStatus.SUCCESS,
            message="All required commands are available",
        )

    def check_environment(self) -> CheckResult:
        logger.info("Validating environment configuration...")
        self._settings = None

        env_file = find_env_file(self._search_dirs)
        if env_file is None:
            logger.warning(".env file not found in working directory or parent directory")
            return self._failed(
                "environment",
                ConfigInvalidError(".env file not found", remediation=[ENV_FILE_HINT]),
            )
        logger.success("Found .env file: %s", env_file)

        values = read_env_file(env_file, self._environ)
        for key in REQUIRED_ENV_VARS:
            if (values.get(key) or "").strip():
                logger.success("Environment variable set: %s", key)
            else:
                logger.error("Environment variable missing or empty: %s", key)

        try:
            settings = settings_from_values(values)
        except ConfigInvalidError as exc:
            return self._failed("environment", exc)
        self._settings = settings

        key_path = settings.connection.key_path
        if key_path:
            try:
                SshKeyValidator(self._runner_factory(settings)).validate(key_path)
            except TemplateToolError as exc:
                return self._failed("environment", exc)
        else:
            logger.info("No SSH key path specified (will use default SSH agent/keys)")

        logger.success("Environment validation passed")
        return CheckResult(
            name="environment",
            status=CheckStatus.SUCCESS,
            message="Environment validation passed",
            details=[str(env_file)],
        )

    def check_connectivity(self) -> CheckResult:
        if self._settings is None:
            logger.warning("Cannot test connectivity - no usable configuration")
            return CheckResult(
                name="connectivity",
                status=CheckStatus.ERROR,
                message="Skipped: no usable configuration",
                category=ConfigInvalidError.category,
            )
        runner = self._runner_factory(self._settings)
        try:
            version = ConnectionValidator(runner).probe(self._settings.connection)
        except TemplateToolError as exc:
            return self._failed("connectivity", exc)
        return CheckResult(
            name="connectivity",
            status=CheckStatus.SUCCESS,
            message="Successfully connected to Proxmox server",
            details=[version] if version else [],
        )

    @staticmethod
    def _failed(name: str, exc: TemplateToolError) -> CheckResult:
        exc.log_to(logger)
        return CheckResult(
            name=name,
            status=CheckStatus.ERROR,
            message=str(exc),
            details=list(exc.remediation),
            category=exc.category,
        )
