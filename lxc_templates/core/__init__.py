# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Proxmox LXC template tooling core.

This package provides:
- Connection, template and report models
- SSH command execution and key validation
- Template selection and the provisioning workflow
- Preflight environment validation
"""
