# src/pretraffic_gate/gates/models.py
"""
Data models for gate verdicts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class HookStatus(str, Enum):
    """Status values accepted by PutLifecycleEventHookExecutionStatus."""
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class StepStatus(str, Enum):
    """Status of a single gate step."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class CheckResult:
    """Result of a single step within a gate run."""
    name: str
    status: StepStatus
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
            "duration_ms": self.duration_ms,
        }


@dataclass
class Verdict:
    """Outcome of one gate run, reported once to the deployment controller."""
    status: HookStatus
    message: Optional[str] = None
    checks: list[CheckResult] = field(default_factory=list)
    duration_ms: float = 0.0
    error_type: Optional[str] = None
    report_response: Optional[dict[str, Any]] = None

    @property
    def succeeded(self) -> bool:
        return self.status == HookStatus.SUCCEEDED

    def check(self, name: str) -> Optional[CheckResult]:
        for c in self.checks:
            if c.name == name:
                return c
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "error_type": self.error_type,
            "checks": [c.to_dict() for c in self.checks],
            "duration_ms": self.duration_ms,
        }
