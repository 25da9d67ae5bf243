# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
Typed event definitions for structured logging.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from lxc_templates.core.observability.context import get_run_id, get_stage


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


WorkflowEventType = Literal[
    "stage_enter",
    "command_exec",
    "check_result",
    "run_complete",
    "run_fail",
]


class WorkflowEvent(BaseModel):
    """Log event for validation and provisioning steps."""

    model_config = ConfigDict(use_enum_values=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    level: LogLevel = LogLevel.INFO
    event: WorkflowEventType
    run_id: Optional[str] = None
    stage: Optional[str] = None
    status: Optional[Literal["success", "failed", "skipped", "warning"]] = None
    command: Optional[str] = None
    returncode: Optional[int] = None
    template: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None


def truncate(text: Optional[str], max_length: int = 200) -> Optional[str]:
    """Truncate text to max length with ellipsis.

    :param text: Text to truncate
    :type text: Optional[str]
    :param max_length: Maximum length
    :type max_length: int
    :returns: Truncated text or None
    :rtype: Optional[str]
    """
    if text is None:
        return None
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def create_workflow_event(
    event: WorkflowEventType,
    level: LogLevel = LogLevel.INFO,
    **kwargs: Any,
) -> WorkflowEvent:
    """Create a workflow event with context auto-populated.

    :param event: Event type
    :param level: Log level
    :param kwargs: Additional event fields
    :returns: WorkflowEvent instance
    :rtype: WorkflowEvent
    """
    if "error" in kwargs:
        kwargs["error"] = truncate(kwargs["error"])
    return WorkflowEvent(
        event=event,
        level=level,
        run_id=kwargs.pop("run_id", get_run_id()),
        stage=kwargs.pop("stage", get_stage()),
        **kwargs,
    )
