# src/pretraffic_gate/gates/runner.py
"""
Gate runner - validates a new function version and reports the verdict.

One run performs, strictly in order:
1. invoke  - call the new version with a probe book
2. verify  - wait for the write to become visible, then read it back
3. cleanup - delete the probe book
and finally reports Succeeded or Failed to CodeDeploy.
"""

import logging
import threading
import time
import traceback
from typing import Any, Callable, Optional

from pretraffic_gate.core.config import GateConfig
from pretraffic_gate.errors import CleanupError, GateCancelledError
from pretraffic_gate.gates.consistency import (
    ConsistencyWaitPolicy,
    Sleeper,
    cancellable_sleep,
    wait_for,
)
from pretraffic_gate.gates.models import CheckResult, HookStatus, StepStatus, Verdict
from pretraffic_gate.gates.reporter import CodeDeployReporter
from pretraffic_gate.gates.target import LambdaTarget
from pretraffic_gate.models import PROBE_ISBN, InvocationContext, ProbeRecord
from pretraffic_gate.store.base import BookStore
from pretraffic_gate.store.registry import get_store

logger = logging.getLogger(__name__)

STEPS = ("invoke", "verify", "cleanup")


class PreTrafficGate:
    """Runs the pre-traffic smoke test against one function version."""

    def __init__(
        self,
        target: LambdaTarget,
        store: BookStore,
        reporter: CodeDeployReporter,
        policy: Optional[ConsistencyWaitPolicy] = None,
        probe_isbn: str = PROBE_ISBN,
        strict_cleanup: bool = True,
        sleep: Optional[Sleeper] = None,
        cancel: Optional[threading.Event] = None,
    ):
        self.target = target
        self.store = store
        self.reporter = reporter
        self.policy = policy or ConsistencyWaitPolicy()
        self.probe_isbn = probe_isbn
        self.strict_cleanup = strict_cleanup
        self.cancel = cancel
        self._sleep = sleep or cancellable_sleep(cancel)

    @classmethod
    def from_config(
        cls,
        config: GateConfig,
        cancel: Optional[threading.Event] = None,
        **overrides: Any,
    ) -> "PreTrafficGate":
        """Wire a gate with real AWS clients for the configured environment."""
        kwargs: dict[str, Any] = {
            "target": LambdaTarget(region=config.region),
            "store": get_store(config),
            "reporter": CodeDeployReporter(region=config.region),
            "policy": ConsistencyWaitPolicy.from_settings(config.consistency),
            "probe_isbn": config.probe_isbn,
            "strict_cleanup": config.strict_cleanup,
            "cancel": cancel,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    def build_probe(self) -> ProbeRecord:
        return ProbeRecord(isbn=self.probe_isbn)

    def _run_step(
        self,
        name: str,
        checks: list[CheckResult],
        action: Callable[[], tuple[str, dict[str, Any]]],
    ) -> None:
        """Run one step, record its result and re-raise its failure."""
        start = time.perf_counter()
        try:
            message, details = action()
        except Exception as e:
            checks.append(CheckResult(
                name=name,
                status=StepStatus.FAILED,
                message=str(e) or type(e).__name__,
                details={"error_type": type(e).__name__},
                duration_ms=(time.perf_counter() - start) * 1000,
            ))
            raise
        checks.append(CheckResult(
            name=name,
            status=StepStatus.PASSED,
            message=message,
            details=details,
            duration_ms=(time.perf_counter() - start) * 1000,
        ))

    def _invoke(self, ctx: InvocationContext, probe: ProbeRecord) -> tuple[str, dict[str, Any]]:
        # Checked before any write reaches the table
        if self.cancel is not None and self.cancel.is_set():
            raise GateCancelledError("validation cancelled")
        logger.info("Invoking function=%s with probe isbn=%s", ctx.new_version_id, probe.isbn)
        response = self.target.invoke(ctx.new_version_id, probe.to_request())
        return "Function accepted probe", {"status_code": response.get("statusCode")}

    def _verify(self, probe: ProbeRecord) -> tuple[str, dict[str, Any]]:
        logger.info(
            "Verifying probe isbn=%s table=%s initial_delay=%.2fs attempts=%d",
            probe.isbn,
            self.store.table_name,
            self.policy.initial_delay,
            self.policy.max_attempts,
        )
        _, attempts = wait_for(
            lambda: self.store.get_book(probe.isbn, consistent=True),
            self.policy,
            sleep=self._sleep,
            cancel=self.cancel,
        )
        return "Probe record visible", {"attempts": attempts}

    def _cleanup(self, probe: ProbeRecord) -> tuple[str, dict[str, Any]]:
        try:
            self.store.delete_book(probe.isbn)
        except Exception as e:
            if self.strict_cleanup:
                raise CleanupError(f"probe record cleanup failed: {e}") from e
            logger.warning(
                "Probe cleanup failed isbn=%s table=%s, continuing: %s",
                probe.isbn,
                self.store.table_name,
                e,
            )
            return f"Cleanup failed (ignored): {e}", {"best_effort": True}
        return "Probe record deleted", {}

    def evaluate(self, ctx: InvocationContext) -> Verdict:
        """
        Run invoke, verify and cleanup without reporting.

        Never raises: every step failure becomes a Failed verdict carrying
        the failure message as its diagnostic.
        """
        start = time.perf_counter()
        probe = self.build_probe()
        checks: list[CheckResult] = []
        status = HookStatus.SUCCEEDED
        message: Optional[str] = None
        error_type: Optional[str] = None

        logger.info(
            "Starting pre-traffic validation deployment=%s function=%s table=%s",
            ctx.deployment_id,
            ctx.new_version_id,
            self.store.table_name,
        )
        try:
            self._run_step("invoke", checks, lambda: self._invoke(ctx, probe))
            self._run_step("verify", checks, lambda: self._verify(probe))
            self._run_step("cleanup", checks, lambda: self._cleanup(probe))
        except Exception as e:
            status = HookStatus.FAILED
            message = str(e) or type(e).__name__
            error_type = type(e).__name__
            logger.error(
                "Validation failed deployment=%s step=%s error=%s\n%s",
                ctx.deployment_id,
                checks[-1].name if checks else "setup",
                message,
                traceback.format_exc(),
            )

        done = {c.name for c in checks}
        for name in STEPS:
            if name not in done:
                checks.append(CheckResult(
                    name=name,
                    status=StepStatus.SKIPPED,
                    message="Skipped after earlier failure",
                ))

        verdict = Verdict(
            status=status,
            message=message,
            checks=checks,
            duration_ms=(time.perf_counter() - start) * 1000,
            error_type=error_type,
        )
        logger.info(
            "Validation finished deployment=%s status=%s duration_ms=%.1f",
            ctx.deployment_id,
            verdict.status.value,
            verdict.duration_ms,
        )
        return verdict

    def run_validation(self, ctx: InvocationContext) -> Verdict:
        """
        Validate the new version and report the verdict to CodeDeploy.

        Raises:
            ReportingError: if the verdict could not be delivered.
        """
        verdict = self.evaluate(ctx)
        verdict.report_response = self.reporter.report(
            ctx.deployment_id, ctx.hook_execution_id, verdict
        )
        return verdict
