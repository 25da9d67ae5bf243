# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Validate a Proxmox connection and cache Ubuntu LTS container templates."""

__version__ = "1.0.0"
