# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Configuration loading from a ``.env`` file.

Values are read once into an immutable :class:`ProvisionSettings`; nothing is
exported into the process environment.
"""

import os
from pathlib import Path
from typing import Iterable, Mapping, Optional

from dotenv import dotenv_values
from pydantic import ValidationError

from lxc_templates.core.execution.exceptions import ConfigInvalidError
from lxc_templates.core.models.config import ConnectionConfig, ProvisionSettings
from lxc_templates.core.observability import get_logger
from lxc_templates.module_utils.template_constants import (
    ENV_EXAMPLE_FILE_NAME,
    ENV_FILE_NAME,
    OPTIONAL_ENV_VARS,
    REQUIRED_ENV_VARS,
)

logger = get_logger(__name__)

ENV_FILE_HINT = (
    f"Please copy {ENV_EXAMPLE_FILE_NAME} to {ENV_FILE_NAME} and configure your settings"
)


def default_search_dirs() -> list[Path]:
    """Working directory first, then its parent."""
    cwd = Path.cwd()
    return [cwd, cwd.parent]


def find_env_file(search_dirs: Optional[Iterable[Path]] = None) -> Optional[Path]:
    """Locate the first ``.env`` file in the search directories.

    :param search_dirs: Directories to look in, in order.
    :returns: Path to the file, or ``None`` if none exists.
    """
    for directory in search_dirs if search_dirs is not None else default_search_dirs():
        candidate = Path(directory) / ENV_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def read_env_file(
    env_file: Path,
    environ: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Read known keys from an env file, using the process environment as defaults.

    :param env_file: Path to the ``.env`` file.
    :param environ: Process environment, defaults to ``os.environ``.
    :returns: Mapping of known keys to string values (``None`` entries dropped).
    """
    environ = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for key in REQUIRED_ENV_VARS + OPTIONAL_ENV_VARS:
        if environ.get(key) is not None:
            values[key] = environ[key]
    for key, value in dotenv_values(env_file).items():
        if value is not None:
            values[key] = value
    return values


def missing_required(values: Mapping[str, str]) -> list[str]:
    """Names of required keys that are absent or blank."""
    return [key for key in REQUIRED_ENV_VARS if not (values.get(key) or "").strip()]


def settings_from_values(values: Mapping[str, str]) -> ProvisionSettings:
    """Build settings from raw key/value pairs.

    :raises ConfigInvalidError: If required keys are missing or a value is malformed.
    """
    missing = missing_required(values)
    if missing:
        raise ConfigInvalidError(
            f"Required environment variable not set: {', '.join(missing)}",
            missing_keys=missing,
            remediation=[ENV_FILE_HINT],
        )
    try:
        return ProvisionSettings(
            connection=ConnectionConfig(
                host=values["PROXMOX_HOST"],
                user=values["PROXMOX_USER"],
                key_path=values.get("PROXMOX_SSH_KEY_PATH"),
            ),
            force_download=values.get("FORCE_DOWNLOAD"),
            cleanup_old_templates=values.get("CLEANUP_OLD_TEMPLATES"),
        )
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise ConfigInvalidError(
            f"Invalid configuration value for: {', '.join(fields)}",
            remediation=["Boolean settings accept true/false"],
        ) from exc


def load_settings(
    env_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    search_dirs: Optional[Iterable[Path]] = None,
) -> ProvisionSettings:
    """Load and validate the provisioning settings.

    :param env_file: Explicit env file; searched for when omitted.
    :param environ: Process environment used as defaults.
    :param search_dirs: Directories searched when ``env_file`` is omitted.
    :returns: Immutable settings for this run.
    :raises ConfigInvalidError: If the file is absent or incomplete.
    """
    path = env_file or find_env_file(search_dirs)
    if path is None or not Path(path).is_file():
        raise ConfigInvalidError(
            f"Environment file not found: {path or ENV_FILE_NAME}",
            remediation=[ENV_FILE_HINT],
        )
    settings = settings_from_values(read_env_file(Path(path), environ))
    logger.success("Environment configuration loaded and validated")
    return settings
