# src/pretraffic_gate/handlers/responses.py
# API Gateway proxy response helpers.

import json
from typing import Any

JSON_HEADERS = {"Content-Type": "application/json"}


def json_response(status_code: int, payload: Any = None) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": "" if payload is None else json.dumps(payload),
    }


def error_response() -> dict[str, Any]:
    """Opaque 500; details go to the logs only."""
    return {"statusCode": 500, "headers": {}, "body": ""}
