# src/pretraffic_gate/handlers/pre_traffic.py
# Lambda handler: CodeDeploy BeforeAllowTraffic hook for the create function.

"""
Pre-traffic hook entrypoint.

CodeDeploy invokes this function once per deployment of the create-book
function, passing DeploymentId and LifecycleEventHookExecutionId. The
function under test is named by FN_NEW_VERSION.

The event is validated first. Once its ids are known, every outcome is
reported: a configuration or wiring failure is reported as Failed just like
a failed validation. The handler returns the status-report response. Only an
unusable event or a failed status call escape, leaving CodeDeploy to time
the hook out.
"""

import json
import logging
import os
from typing import Any, Optional

from pretraffic_gate.core.config import load_config
from pretraffic_gate.core.log import configure_lambda_logging
from pretraffic_gate.gates.models import HookStatus, Verdict
from pretraffic_gate.gates.reporter import CodeDeployReporter
from pretraffic_gate.gates.runner import PreTrafficGate
from pretraffic_gate.models import HookEvent, InvocationContext

logger = logging.getLogger(__name__)


def build_reporter() -> CodeDeployReporter:
    """Reporter used when the gate itself could not be wired."""
    region = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
    return CodeDeployReporter(region=region)


def handler(event: Any, context: Optional[Any] = None) -> dict[str, Any]:
    hook = HookEvent.parse(event)

    try:
        config = load_config()
        configure_lambda_logging(config.log_level)
        logger.info("CodeDeploy event: %s", json.dumps(event, default=str))

        ctx = InvocationContext.from_event(event, new_version_id=config.function_name)
        gate = PreTrafficGate.from_config(config)
    except Exception as e:
        logger.exception("Gate setup failed deployment=%s", hook.deployment_id)
        verdict = Verdict(
            status=HookStatus.FAILED,
            message=f"gate setup failed: {e}",
            error_type=type(e).__name__,
        )
        return build_reporter().report(hook.deployment_id, hook.hook_execution_id, verdict)

    verdict = gate.run_validation(ctx)
    return verdict.report_response or {}
