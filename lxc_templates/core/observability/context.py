# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""
Run context management using ContextVars.
Carries the run identifier and current workflow stage into every log record.
"""

from __future__ import annotations
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class ContextData:
    """
    Immutable value object containing observability context fields.
    """

    run_id: Optional[str] = None
    stage: Optional[str] = None

    def with_updates(self, **kwargs: Any) -> "ContextData":
        """
        Create new ContextData with updated fields.
        """
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Optional[str]]:
        """
        Convert to dictionary for logging (non-None values only).
        """
        return {
            k: v
            for k, v in {"run_id": self.run_id, "stage": self.stage}.items()
            if v is not None
        }


class ObservabilityContextManager:
    """
    Singleton manager for observability context.
    """

    _instance: Optional["ObservabilityContextManager"] = None
    _var: Optional[ContextVar[ContextData]] = None

    def __new__(cls) -> "ObservabilityContextManager":
        """Ensure singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._var = ContextVar("observability_context", default=ContextData())
        return cls._instance

    @classmethod
    def instance(cls) -> "ObservabilityContextManager":
        """Get singleton instance."""
        return cls()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset singleton (for testing only)."""
        cls._instance = None
        cls._var = None

    @property
    def _ctx_var(self) -> ContextVar[ContextData]:
        assert self._var is not None, "ObservabilityContextManager not initialized"
        return self._var

    def get_context(self) -> ContextData:
        return self._ctx_var.get()

    def set_context(self, data: ContextData) -> Token:
        return self._ctx_var.set(data)

    def reset(self, token: Token) -> None:
        self._ctx_var.reset(token)

    @property
    def run_id(self) -> Optional[str]:
        """Get current run ID."""
        return self.get_context().run_id

    @property
    def stage(self) -> Optional[str]:
        """Get current workflow stage."""
        return self.get_context().stage

    def set_stage(self, value: Optional[str]) -> None:
        """Set the current workflow stage.

        :param value: Stage name
        :type value: Optional[str]
        """
        self.set_context(self.get_context().with_updates(stage=value))

    def get_all(self) -> dict[str, Optional[str]]:
        """Get all context values as dictionary."""
        return self.get_context().to_dict()


class RunScope:
    """
    Context manager binding a run identifier for the duration of a command.
    """

    def __init__(self, run_id: Optional[str] = None) -> None:
        """Initialize scope.

        :param run_id: Run ID to set, generated when omitted
        """
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self._token: Optional[Token] = None
        self._manager = ObservabilityContextManager.instance()

    def __enter__(self) -> "RunScope":
        """Enter scope and set context values."""
        self._token = self._manager.set_context(ContextData(run_id=self.run_id))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit scope and restore previous context."""
        if self._token is not None:
            self._manager.reset(self._token)
            self._token = None


def get_run_id() -> Optional[str]:
    """Get current run ID."""
    return ObservabilityContextManager.instance().run_id


def get_stage() -> Optional[str]:
    """Get current workflow stage."""
    return ObservabilityContextManager.instance().stage


def set_stage(value: Optional[str]) -> None:
    """Set current workflow stage."""
    ObservabilityContextManager.instance().set_stage(value)
