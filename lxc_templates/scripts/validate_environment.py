# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Local environment validation.

Validates local dependencies and configuration before running the template
download. Exit code 0 when every check passed, 1 otherwise.
"""

import logging
import sys

from lxc_templates.core.execution.runner import SshRunner
from lxc_templates.core.models.config import ProvisionSettings
from lxc_templates.core.observability import LoggerFactory, RunScope, get_logger
from lxc_templates.core.services.preflight import PreflightValidator

logger = get_logger(__name__)


def _runner_for(settings: ProvisionSettings) -> SshRunner:
    return SshRunner(settings.connection)


def main() -> int:
    LoggerFactory.initialize(level=logging.INFO)
    print("🔍 Local Environment Validation")
    print("===============================")
    print()

    with RunScope():
        try:
            report = PreflightValidator(runner_factory=_runner_for).run()
        except KeyboardInterrupt:
            logger.error("Validation interrupted")
            return 130
    return 0 if report.passed else 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
