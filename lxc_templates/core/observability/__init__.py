# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
Observability module for the template tooling.

Classes:
- ObservabilityContextManager: Singleton for run context
- StructuredLogger: Logger with context injection
- LoggerFactory: Factory for configuring handlers
- JSONFormatter/ConsoleFormatter: Log formatters

Usage:
    from lxc_templates.core.observability import (
        LoggerFactory,
        get_logger,
    )

    # Initialize once at startup
    LoggerFactory.initialize(level=logging.INFO, log_file="logs/run.log")

    # Get logger
    logger = get_logger(__name__)

"""

from lxc_templates.core.observability.context import (
    ContextData,
    ObservabilityContextManager,
    RunScope,
    get_run_id,
    get_stage,
    set_stage,
)

from lxc_templates.core.observability.events import (
    LogLevel,
    WorkflowEvent,
    create_workflow_event,
)

from lxc_templates.core.observability.logger import (
    SUCCESS,
    LogFormatter,
    JSONFormatter,
    ConsoleFormatter,
    StructuredLogger,
    LoggerFactory,
    get_logger,
)


__all__ = [
    "ContextData",
    "ObservabilityContextManager",
    "RunScope",
    "get_run_id",
    "get_stage",
    "set_stage",
    "LogLevel",
    "WorkflowEvent",
    "create_workflow_event",
    "SUCCESS",
    "LogFormatter",
    "JSONFormatter",
    "ConsoleFormatter",
    "StructuredLogger",
    "LoggerFactory",
    "get_logger",
]
