# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Ubuntu LTS container template download.

Downloads the latest supported Ubuntu LTS container template on the Proxmox
server and manages the template cache. Behaviour is driven entirely by the
``.env`` file; there are no command line options.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from lxc_templates.core.config import load_settings
from lxc_templates.core.execution.exceptions import TemplateToolError
from lxc_templates.core.execution.runner import SshRunner
from lxc_templates.core.observability import (
    LoggerFactory,
    RunScope,
    create_workflow_event,
    get_logger,
)
from lxc_templates.core.observability.events import LogLevel
from lxc_templates.core.services.provisioner import TemplateProvisioner
from lxc_templates.module_utils.template_constants import (
    DOWNLOAD_LOG_FILE_NAME,
    LOG_DIR_NAME,
)

logger = get_logger(__name__)


def main(base_dir: Optional[Path] = None) -> int:
    """Run the provisioning workflow.

    :param base_dir: Directory holding ``.env`` and ``logs/``; defaults to
        the working directory (``.env`` is also looked up in its parent).
    :returns: Process exit code.
    """
    base_dir = base_dir or Path.cwd()
    LoggerFactory.initialize(
        level=logging.INFO,
        log_file=base_dir / LOG_DIR_NAME / DOWNLOAD_LOG_FILE_NAME,
    )
    print("📦 Ubuntu LTS Template Downloader")
    print("=================================")
    print()

    with RunScope():
        try:
            settings = load_settings(search_dirs=[base_dir, base_dir.parent])
            TemplateProvisioner(settings, SshRunner(settings.connection)).run()
        except TemplateToolError as exc:
            exc.log_to(logger)
            logger.event(
                create_workflow_event(
                    "run_fail",
                    level=LogLevel.ERROR,
                    status="failed",
                    error=str(exc),
                    message=exc.category,
                )
            )
            return 1
        except KeyboardInterrupt:
            logger.error("Download interrupted")
            return 130
    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
