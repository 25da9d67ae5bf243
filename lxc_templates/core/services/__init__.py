# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Preflight, template selection and provisioning services."""

from lxc_templates.core.services.template_selector import (
    TemplateSelector,
    parse_available,
    select_candidate,
)
from lxc_templates.core.services.template_cache import (
    RemoteTemplateCache,
    parse_cache_listing,
)
from lxc_templates.core.services.provisioner import TemplateProvisioner
from lxc_templates.core.services.preflight import PreflightValidator

__all__ = [
    "TemplateSelector",
    "parse_available",
    "select_candidate",
    "RemoteTemplateCache",
    "parse_cache_listing",
    "TemplateProvisioner",
    "PreflightValidator",
]
