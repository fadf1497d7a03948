# src/pretraffic_gate/__init__.py
# Main package init - exports public API for the pre-traffic gate.

"""
pretraffic-gate: CodeDeploy pre-traffic hook for the books API.

Before CodeDeploy shifts traffic to a new version of the create-book
function, the gate writes a probe book through that version, confirms the
write landed in DynamoDB, deletes it again and reports Succeeded or Failed.
The package also ships the create and list-all book handlers it validates.

CLI Usage:
    ptgate run --deployment-id <id> --hook-execution-id <id>
    ptgate run --no-report ...      # Validate without reporting to CodeDeploy
    ptgate probe                    # Show the probe request payload
    ptgate config                   # Show resolved configuration
"""

from pretraffic_gate.errors import (
    CleanupError,
    ConfigError,
    GateCancelledError,
    GateError,
    InvalidEventError,
    InvocationError,
    ReportingError,
    TimeoutOrVisibilityError,
    VerificationError,
)
from pretraffic_gate.models import (
    PROBE_ISBN,
    Book,
    HookEvent,
    InvocationContext,
    ProbeRecord,
)
from pretraffic_gate.core.config import GateConfig, load_config
from pretraffic_gate.gates import (
    ConsistencyWaitPolicy,
    HookStatus,
    PreTrafficGate,
    Verdict,
)

__version__ = "0.1.0"
__all__ = [
    # Models
    "Book",
    "HookEvent",
    "InvocationContext",
    "PROBE_ISBN",
    "ProbeRecord",
    # Errors
    "CleanupError",
    "ConfigError",
    "GateCancelledError",
    "GateError",
    "InvalidEventError",
    "InvocationError",
    "ReportingError",
    "TimeoutOrVisibilityError",
    "VerificationError",
    # Configuration
    "GateConfig",
    "load_config",
    # Gate
    "ConsistencyWaitPolicy",
    "HookStatus",
    "PreTrafficGate",
    "Verdict",
]
