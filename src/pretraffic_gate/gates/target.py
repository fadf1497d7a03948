# src/pretraffic_gate/gates/target.py
"""
Target function invoker.

Calls the new function version synchronously with the probe request and
decides whether the call succeeded. A call counts as failed when the
transport fails, the invoke status is not 2xx, Lambda reports a
FunctionError, or the handler's own response carries a 4xx/5xx statusCode.
"""

import json
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from pretraffic_gate.errors import InvocationError

logger = logging.getLogger(__name__)


class LambdaTarget:
    """Invokes a Lambda function version or alias."""

    def __init__(self, client: Any = None, region: Optional[str] = None) -> None:
        self._client = client or boto3.client("lambda", region_name=region)

    def invoke(self, function_name: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Invoke the function and return its decoded response.

        Raises:
            InvocationError: if the function could not be invoked or failed.
        """
        try:
            response = self._client.invoke(
                FunctionName=function_name,
                InvocationType="RequestResponse",
                Payload=json.dumps(payload),
            )
        except (ClientError, BotoCoreError) as e:
            raise InvocationError(f"Invocation of {function_name} failed: {e}") from e

        status_code = response.get("StatusCode", 0)
        body = _read_payload(response.get("Payload"))
        logger.debug(
            "Invoke function=%s status=%s function_error=%s",
            function_name,
            status_code,
            response.get("FunctionError"),
        )

        if not 200 <= status_code < 300:
            raise InvocationError(
                f"Invocation of {function_name} returned status {status_code}"
            )
        if response.get("FunctionError"):
            message = f"Function {function_name} raised {response['FunctionError']}"
            if isinstance(body, dict) and body.get("errorMessage"):
                message += f": {body['errorMessage']}"
            raise InvocationError(message)
        if isinstance(body, dict):
            handler_status = body.get("statusCode")
            if isinstance(handler_status, int) and handler_status >= 400:
                raise InvocationError(
                    f"Function {function_name} responded with statusCode {handler_status}"
                )
        return body if isinstance(body, dict) else {"payload": body}


def _read_payload(payload: Any) -> Any:
    if payload is None:
        return {}
    raw = payload.read() if hasattr(payload, "read") else payload
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvocationError(f"Function response is not valid UTF-8: {e}") from e
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw
