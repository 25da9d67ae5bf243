# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Constants module for Proxmox container template handling.
This module contains the fixed values shared by the preflight validator
and the template provisioner: remote paths, naming patterns and the
supported Ubuntu LTS versions.
"""

REMOTE_CACHE_DIR = "/var/lib/vz/template/cache"
TEMPLATE_STORAGE = "local"
TEMPLATE_SECTION = "system"

# Highest preference first.
VERSION_PREFERENCE = ("24.04", "22.04", "20.04")

# e.g. ubuntu-24.04-standard_24.04-2_amd64.tar.zst
TEMPLATE_NAME_PATTERN = r"^ubuntu-(?P<version>\d{2}\.\d{2})-standard_\S*_amd64\.tar\.\S+$"
CLEANUP_GLOB = "ubuntu-*-standard_*_amd64.tar.*"
ARCHIVE_EXTENSIONS = (".tar.zst", ".tar.xz", ".tar.gz")

SSH_CONNECT_TIMEOUT = 10
ACCEPTED_KEY_MODES = (0o600, 0o400)
REQUIRED_COMMANDS = ("ssh", "ssh-keygen")

ENV_FILE_NAME = ".env"
ENV_EXAMPLE_FILE_NAME = ".env.example"
REQUIRED_ENV_VARS = ("PROXMOX_HOST", "PROXMOX_USER")
OPTIONAL_ENV_VARS = ("PROXMOX_SSH_KEY_PATH", "FORCE_DOWNLOAD", "CLEANUP_OLD_TEMPLATES")

LOG_DIR_NAME = "logs"
DOWNLOAD_LOG_FILE_NAME = "template-download.log"
