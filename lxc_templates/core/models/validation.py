# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Preflight validation report models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class CheckStatus(Enum):
    """
    Enum for the status of a preflight check.
    """

    SUCCESS = "PASSED"
    ERROR = "FAILED"


class CheckResult(BaseModel):
    """Outcome of a single preflight section."""

    name: str
    status: CheckStatus
    message: str = ""
    details: List[str] = Field(default_factory=list)
    category: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status != CheckStatus.ERROR


class ValidationReport(BaseModel):
    """Aggregated preflight results."""

    checks: List[CheckResult] = Field(default_factory=list)

    def add(self, check: CheckResult) -> CheckResult:
        self.checks.append(check)
        return check

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def failed_checks(self) -> List[CheckResult]:
        return [check for check in self.checks if not check.passed]
