# src/pretraffic_gate/gates/reporter.py
"""
Reports gate verdicts back to CodeDeploy.

The deployment waits on this call: a Failed status rolls the deployment back,
a Succeeded status lets traffic shifting begin. Failures here are raised as
ReportingError and never downgraded to a verdict.
"""

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from pretraffic_gate.errors import ReportingError
from pretraffic_gate.gates.models import HookStatus, Verdict

logger = logging.getLogger(__name__)


class CodeDeployReporter:
    """Delivers a verdict through PutLifecycleEventHookExecutionStatus."""

    def __init__(self, client: Any = None, region: Optional[str] = None) -> None:
        self._client = client or boto3.client("codedeploy", region_name=region)

    def report(
        self,
        deployment_id: str,
        hook_execution_id: str,
        verdict: Verdict,
    ) -> dict[str, Any]:
        status = HookStatus(verdict.status).value
        logger.info(
            "Reporting hook status deployment=%s hook_execution=%s status=%s",
            deployment_id,
            hook_execution_id,
            status,
        )
        try:
            return self._client.put_lifecycle_event_hook_execution_status(
                deploymentId=deployment_id,
                lifecycleEventHookExecutionId=hook_execution_id,
                status=status,
            )
        except (ClientError, BotoCoreError) as e:
            raise ReportingError(
                f"Could not report status {status} for deployment {deployment_id}: {e}"
            ) from e
