# src/pretraffic_gate/errors.py
# Exception hierarchy for the pre-traffic gate.

"""
Errors raised while validating a new deployment.

InvocationError, VerificationError, CleanupError and GateCancelledError are
step failures: the gate turns them into a Failed verdict. ReportingError and
InvalidEventError escape to the caller because nothing sensible can be
reported without a working status channel and valid hook identifiers.
"""


class GateError(Exception):
    """Base class for all gate errors."""


class ConfigError(GateError):
    """Configuration could not be loaded or validated."""


class InvalidEventError(GateError):
    """The lifecycle hook event is missing required fields."""


class InvocationError(GateError):
    """The target function could not be reached or returned an error."""


class VerificationError(GateError):
    """The probe record was not visible in the store after the wait window."""


TimeoutOrVisibilityError = VerificationError


class CleanupError(GateError):
    """The probe record could not be deleted after verification."""


class GateCancelledError(GateError):
    """The run was cancelled before it finished."""


class ReportingError(GateError):
    """The verdict could not be delivered to the deployment controller."""
