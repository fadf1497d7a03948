# src/pretraffic_gate/gates/__init__.py
"""
Pre-traffic gate module.

Validates a newly deployed function version before CodeDeploy shifts traffic:
1. Invoke gate step - new version accepts a probe book
2. Verify gate step - probe becomes visible in the books table
3. Cleanup gate step - probe book is deleted again
"""

from pretraffic_gate.gates.models import (
    CheckResult,
    HookStatus,
    StepStatus,
    Verdict,
)
from pretraffic_gate.gates.consistency import ConsistencyWaitPolicy, wait_for
from pretraffic_gate.gates.target import LambdaTarget
from pretraffic_gate.gates.reporter import CodeDeployReporter
from pretraffic_gate.gates.runner import PreTrafficGate

__all__ = [
    "CheckResult",
    "CodeDeployReporter",
    "ConsistencyWaitPolicy",
    "HookStatus",
    "LambdaTarget",
    "PreTrafficGate",
    "StepStatus",
    "Verdict",
    "wait_for",
]
