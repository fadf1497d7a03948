# tests/conftest.py
# Pytest configuration and fixtures for pretraffic-gate tests.

"""
Shared pytest fixtures for testing the gate.

Provides:
- In-memory fakes for the DynamoDB, Lambda and CodeDeploy clients
- A shared call log so tests can assert the order of remote calls
- A recording sleeper that never actually sleeps
- A fully wired PreTrafficGate
"""

import io
import json
from typing import Any, Optional

import pytest
from botocore.exceptions import ClientError

from pretraffic_gate.core.config import clear_config_cache
from pretraffic_gate.gates.consistency import ConsistencyWaitPolicy
from pretraffic_gate.gates.reporter import CodeDeployReporter
from pretraffic_gate.gates.runner import PreTrafficGate
from pretraffic_gate.gates.target import LambdaTarget
from pretraffic_gate.handlers.create import create_book
from pretraffic_gate.models import InvocationContext
from pretraffic_gate.store.dynamodb import DynamoDBBookStore
from pretraffic_gate.store.registry import reset_store


def client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": code, "Message": message}},
        operation_name=operation,
    )


class FakeDynamoDBClient:
    """Dict-backed stand-in for the boto3 DynamoDB client."""

    def __init__(self, calls: list, page_size: int = 100) -> None:
        self.calls = calls
        self.items: dict[str, dict[str, Any]] = {}
        self.page_size = page_size
        self.fail_on: dict[str, Exception] = {}
        self.drop_writes = False
        self.hidden_reads = 0
        self.get_params: list[dict[str, Any]] = []

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise self.fail_on[op]

    def put_item(self, TableName: str, Item: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("put", Item["isbn"]["S"]))
        self._maybe_fail("put")
        if not self.drop_writes:
            self.items[Item["isbn"]["S"]] = Item
        return {}

    def get_item(self, TableName: str, Key: dict[str, Any], ConsistentRead: bool = False) -> dict[str, Any]:
        self.calls.append(("get", Key["isbn"]["S"]))
        self.get_params.append({"TableName": TableName, "Key": Key, "ConsistentRead": ConsistentRead})
        self._maybe_fail("get")
        if self.hidden_reads > 0:
            self.hidden_reads -= 1
            return {}
        item = self.items.get(Key["isbn"]["S"])
        return {"Item": item} if item else {}

    def delete_item(self, TableName: str, Key: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("delete", Key["isbn"]["S"]))
        self._maybe_fail("delete")
        self.items.pop(Key["isbn"]["S"], None)
        return {}

    def scan(self, TableName: str, ExclusiveStartKey: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        self.calls.append(("scan", TableName))
        self._maybe_fail("scan")
        keys = sorted(self.items)
        start = 0
        if ExclusiveStartKey:
            start = keys.index(ExclusiveStartKey["isbn"]["S"]) + 1
        page = keys[start:start + self.page_size]
        response: dict[str, Any] = {"Items": [self.items[k] for k in page]}
        if start + self.page_size < len(keys):
            response["LastEvaluatedKey"] = {"isbn": {"S": page[-1]}}
        return response


class FakeLambdaClient:
    """Runs the real create handler against the fake table."""

    def __init__(self, calls: list, store: DynamoDBBookStore) -> None:
        self.calls = calls
        self.store = store
        self.error: Optional[Exception] = None
        self.function_error: Optional[str] = None
        self.status_code = 200
        self.payloads: list[dict[str, Any]] = []

    def invoke(self, FunctionName: str, InvocationType: str = "RequestResponse", Payload: str = "") -> dict[str, Any]:
        self.calls.append(("invoke", FunctionName))
        if self.error is not None:
            raise self.error
        event = json.loads(Payload)
        self.payloads.append(event)
        if self.function_error:
            body = {"errorMessage": "boom", "errorType": "RuntimeError"}
            return {
                "StatusCode": self.status_code,
                "FunctionError": self.function_error,
                "Payload": io.BytesIO(json.dumps(body).encode("utf-8")),
            }
        result = create_book(event, self.store)
        return {
            "StatusCode": self.status_code,
            "Payload": io.BytesIO(json.dumps(result).encode("utf-8")),
        }


class FakeCodeDeployClient:
    def __init__(self, calls: list) -> None:
        self.calls = calls
        self.error: Optional[Exception] = None
        self.reports: list[dict[str, str]] = []

    def put_lifecycle_event_hook_execution_status(self, **kwargs: str) -> dict[str, Any]:
        self.calls.append(("report", kwargs["status"]))
        if self.error is not None:
            raise self.error
        self.reports.append(kwargs)
        return {"lifecycleEventHookExecutionId": kwargs["lifecycleEventHookExecutionId"]}


class RecordingSleeper:
    def __init__(self, calls: list) -> None:
        self.calls = calls
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(("sleep", seconds))
        self.delays.append(seconds)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep the process environment and caches out of every test."""
    for var in (
        "FN_NEW_VERSION", "TABLE", "PROBE_ISBN", "LOG_LEVEL", "STRICT_CLEANUP",
        "AWS_SAM_LOCAL", "WAIT_INITIAL_MS", "WAIT_MAX_MS", "WAIT_BACKOFF_FACTOR",
        "WAIT_MAX_ATTEMPTS",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    reset_store()
    yield
    clear_config_cache()
    reset_store()


@pytest.fixture
def calls() -> list:
    """Ordered log of every fake remote call."""
    return []


@pytest.fixture
def ddb_client(calls) -> FakeDynamoDBClient:
    return FakeDynamoDBClient(calls)


@pytest.fixture
def book_store(ddb_client) -> DynamoDBBookStore:
    return DynamoDBBookStore("books", client=ddb_client)


@pytest.fixture
def lambda_client(calls, book_store) -> FakeLambdaClient:
    return FakeLambdaClient(calls, book_store)


@pytest.fixture
def codedeploy_client(calls) -> FakeCodeDeployClient:
    return FakeCodeDeployClient(calls)


@pytest.fixture
def sleeper(calls) -> RecordingSleeper:
    return RecordingSleeper(calls)


@pytest.fixture
def gate(lambda_client, book_store, codedeploy_client, sleeper) -> PreTrafficGate:
    """Gate wired to the fakes with the default wait policy."""
    return PreTrafficGate(
        target=LambdaTarget(client=lambda_client),
        store=book_store,
        reporter=CodeDeployReporter(client=codedeploy_client),
        policy=ConsistencyWaitPolicy(initial_delay=1.5, backoff_factor=2.0, max_attempts=3),
        sleep=sleeper,
    )


@pytest.fixture
def ctx() -> InvocationContext:
    return InvocationContext(
        new_version_id="books-create:2",
        deployment_id="d-ABC123",
        hook_execution_id="hook-exec-1",
    )


@pytest.fixture
def hook_event() -> dict[str, str]:
    """Event as delivered by CodeDeploy."""
    return {
        "DeploymentId": "d-ABC123",
        "LifecycleEventHookExecutionId": "hook-exec-1",
    }
