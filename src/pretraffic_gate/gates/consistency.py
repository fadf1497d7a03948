# src/pretraffic_gate/gates/consistency.py
# Wait policy for write visibility in the books table.

"""
Consistency wait policy.

A write made by the target function may take a moment to become visible to
the gate's own reads. The policy waits a fixed initial delay before the first
read, then backs off exponentially between further reads until the attempt
budget runs out. With max_attempts=1 it degenerates to a single flat delay.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, TypeVar

from pretraffic_gate.core.config import ConsistencySettings
from pretraffic_gate.errors import GateCancelledError, VerificationError

T = TypeVar("T")

Sleeper = Callable[[float], None]


@dataclass(frozen=True)
class ConsistencyWaitPolicy:
    initial_delay: float = 1.5
    backoff_factor: float = 2.0
    max_attempts: int = 3
    max_delay: float = 10.0

    def __post_init__(self) -> None:
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("Delays must not be negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @classmethod
    def from_settings(cls, settings: ConsistencySettings) -> "ConsistencyWaitPolicy":
        return cls(
            initial_delay=settings.initial_delay,
            backoff_factor=settings.backoff_factor,
            max_attempts=settings.max_attempts,
            max_delay=settings.max_delay,
        )

    def delays(self) -> Iterator[float]:
        """Delay to observe before each read attempt."""
        delay = self.initial_delay
        for attempt in range(self.max_attempts):
            if attempt == 0:
                yield delay
                continue
            # A zero initial delay still backs off from a small base
            delay = min(max(delay, 0.1) * self.backoff_factor, self.max_delay)
            yield delay

    @property
    def total_budget(self) -> float:
        return sum(self.delays())


def cancellable_sleep(cancel: Optional[threading.Event]) -> Sleeper:
    """Build a sleeper that returns early and raises when cancel is set."""

    def _sleep(seconds: float) -> None:
        if cancel is None:
            time.sleep(seconds)
            return
        if cancel.wait(seconds):
            raise GateCancelledError("validation cancelled")

    return _sleep


def wait_for(
    read: Callable[[], Optional[T]],
    policy: ConsistencyWaitPolicy,
    sleep: Sleeper = time.sleep,
    cancel: Optional[threading.Event] = None,
) -> tuple[T, int]:
    """
    Poll read() under the policy until it returns a value.

    Returns the value and the number of reads it took. Raises
    VerificationError once every attempt came back empty.
    """
    attempts = 0
    for delay in policy.delays():
        if cancel is not None and cancel.is_set():
            raise GateCancelledError("validation cancelled")
        if delay > 0:
            sleep(delay)
        attempts += 1
        value = read()
        if value is not None:
            return value, attempts
    raise VerificationError("probe record not found post-write")
